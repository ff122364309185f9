"""Load balancer listeners."""

from abc import abstractmethod
from typing import Any, Dict, List, Optional, Set

from botocore.exceptions import ClientError

from ..core.diffable import compact
from ..core.fields import attr
from ..core.registry import register
from ..utils.errors import is_not_found
from ..utils.logging import get_logger
from .actions import ActionResource, NetworkActionResource
from .base import LISTENER_NOT_FOUND, ElbResource, pages
from .load_balancer import ApplicationLoadBalancerResource, NetworkLoadBalancerResource

logger = get_logger(__name__)


class ListenerResource(ElbResource):
    """Fields and lifecycle shared by every listener."""

    certificates: List[str] = attr(default_factory=list, updatable=True)
    default_certificate: Optional[str] = attr(updatable=True)
    port: Optional[int] = attr(required=True, updatable=True, range=(1, 65535))
    protocol: Optional[str] = attr(required=True, updatable=True)
    ssl_policy: Optional[str] = attr(updatable=True)

    # Outputs
    arn: Optional[str] = attr(output=True, id=True)

    def copy_from(self, model: Dict[str, Any]) -> None:
        certificates = model.get('Certificates') or []
        self.default_certificate = certificates[0]['CertificateArn'] if certificates else None
        self.arn = model.get('ListenerArn')
        self.port = model.get('Port')
        self.protocol = model.get('Protocol')
        self.ssl_policy = model.get('SslPolicy')

    def refresh(self) -> bool:
        try:
            response = self.client().describe_listeners(ListenerArns=[self.arn])
        except ClientError as e:
            if is_not_found(e, LISTENER_NOT_FOUND):
                return False
            raise

        listeners = response.get('Listeners') or []
        if not listeners:
            return False

        self.copy_from(listeners[0])
        return True

    def delete(self, ui, state) -> None:
        self.client().delete_listener(ListenerArn=self.arn)

    @abstractmethod
    def default_actions_request(self) -> List[Dict[str, Any]]:
        """Request form of the listener's default actions."""

    def clears_ssl_policy(self) -> bool:
        return False

    def _default_certificate_request(self) -> Optional[List[Dict[str, str]]]:
        if self.default_certificate is None:
            return None
        return [{'CertificateArn': self.default_certificate}]

    def _create_listener(self, client, load_balancer_arn: str) -> None:
        response = client.create_listener(**compact(
            Certificates=self._default_certificate_request(),
            DefaultActions=self.default_actions_request(),
            LoadBalancerArn=load_balancer_arn,
            Port=self.port,
            Protocol=self.protocol,
            SslPolicy=self.ssl_policy,
        ))
        self.arn = response['Listeners'][0]['ListenerArn']
        logger.info(f"Created {self.protocol}:{self.port} listener")

    def _modify_listener(self, client) -> None:
        client.modify_listener(**compact(
            Certificates=self._default_certificate_request(),
            DefaultActions=self.default_actions_request(),
            ListenerArn=self.arn,
            Port=self.port,
            Protocol=self.protocol,
            SslPolicy=None if self.clears_ssl_policy() else self.ssl_policy,
        ))


@register('application-load-balancer-listener')
class ApplicationLoadBalancerListenerResource(ListenerResource):
    """An HTTP or HTTPS listener of an application load balancer.

    Example:
        aws::application-load-balancer-listener example-listener:
          alb: $(aws::application-load-balancer example-alb)
          port: 443
          protocol: HTTPS
          default-certificate: arn:aws:acm:us-east-1:123456789012:certificate/abc
          default-actions:
            - type: forward
              target-group: $(aws::load-balancer-target-group example-tg)
    """

    alb: Optional[ApplicationLoadBalancerResource] = attr(required=True)
    default_actions: List[ActionResource] = attr(default_factory=list, required=True, updatable=True)

    def copy_from(self, model: Dict[str, Any]) -> None:
        super().copy_from(model)

        actions = []
        for item in model.get('DefaultActions') or []:
            action = self.new_subresource(ActionResource)
            action.copy_from(item)
            actions.append(action)
        self.default_actions = actions

        self.alb = self.find_by_id(ApplicationLoadBalancerResource, model.get('LoadBalancerArn'))

        client = self.client()
        self.certificates = [
            certificate['CertificateArn']
            for certificate in pages(client.describe_listener_certificates, 'Certificates', ListenerArn=self.arn)
            if not certificate.get('IsDefault')
        ]

    def create(self, ui, state) -> None:
        client = self.client()
        self._create_listener(client, self.alb.arn)

        if self.certificates:
            client.add_listener_certificates(ListenerArn=self.arn, Certificates=self._certificates(self.certificates))

    def update(self, ui, state, current, changed_fields: Set[str]) -> None:
        client = self.client()
        self._modify_listener(client)

        if 'certificates' in changed_fields:
            desired = set(self.certificates)
            existing = set(current.certificates)

            additions = sorted(desired - existing)
            if additions:
                client.add_listener_certificates(ListenerArn=self.arn, Certificates=self._certificates(additions))

            removals = sorted(existing - desired)
            if removals:
                client.remove_listener_certificates(ListenerArn=self.arn, Certificates=self._certificates(removals))

    def default_actions_request(self) -> List[Dict[str, Any]]:
        return [action.to_action() for action in self.default_actions]

    def clears_ssl_policy(self) -> bool:
        return not self.certificates and self.default_certificate is None and self.protocol == 'HTTP'

    @staticmethod
    def _certificates(arns: List[str]) -> List[Dict[str, str]]:
        return [{'CertificateArn': arn} for arn in arns]


@register('network-load-balancer-listener')
class NetworkLoadBalancerListenerResource(ListenerResource):
    """A TCP, UDP or TLS listener of a network load balancer.

    Example:
        aws::network-load-balancer-listener example-listener:
          nlb: $(aws::network-load-balancer example-nlb)
          port: 80
          protocol: TCP
          default-action:
            type: forward
            target-group: $(aws::load-balancer-target-group example-tg)
    """

    nlb: Optional[NetworkLoadBalancerResource] = attr(required=True)
    default_action: Optional[NetworkActionResource] = attr(required=True, updatable=True)

    def copy_from(self, model: Dict[str, Any]) -> None:
        super().copy_from(model)

        self.default_action = None
        actions = model.get('DefaultActions') or []
        if actions:
            action = self.new_subresource(NetworkActionResource)
            action.copy_from(actions[0])
            self.default_action = action

        self.nlb = self.find_by_id(NetworkLoadBalancerResource, model.get('LoadBalancerArn'))

    def create(self, ui, state) -> None:
        self._create_listener(self.client(), self.nlb.arn)

    def update(self, ui, state, current, changed_fields: Set[str]) -> None:
        self._modify_listener(self.client())

    def default_actions_request(self) -> List[Dict[str, Any]]:
        return [self.default_action.to_action()] if self.default_action else []

    def clears_ssl_policy(self) -> bool:
        return self.default_certificate is None and self.protocol == 'TCP'
