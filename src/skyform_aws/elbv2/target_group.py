"""Load balancer target groups."""

from typing import Any, Dict, Optional, Set

from botocore.exceptions import ClientError

from ..core.diffable import Diffable, compact
from ..core.fields import attr
from ..core.registry import register
from ..utils.errors import ProvisioningError, is_not_found
from ..utils.logging import get_logger
from .base import TARGET_GROUP_NOT_FOUND, ElbResource

logger = get_logger(__name__)


class HealthCheck(Diffable):
    """How the load balancer probes targets of a group.

    Example:
        health-check:
          interval: 90
          path: /healthcheck
          port: traffic-port
          protocol: HTTP
          timeout: 30
          healthy-threshold: 2
          matcher: '200'
          unhealthy-threshold: 2
    """

    interval: Optional[int] = attr(updatable=True)
    path: Optional[str] = attr(updatable=True)
    port: Optional[str] = attr(updatable=True)
    protocol: Optional[str] = attr(updatable=True)
    timeout: Optional[int] = attr(updatable=True)
    healthy_threshold: Optional[int] = attr(updatable=True)
    matcher: Optional[str] = attr(updatable=True)
    unhealthy_threshold: Optional[int] = attr(updatable=True)

    def primary_key(self) -> str:
        return self.path or ''

    def copy_from(self, model: Dict[str, Any]) -> None:
        """Load the health check settings of a target group model."""
        self.interval = model.get('HealthCheckIntervalSeconds')
        self.path = model.get('HealthCheckPath')
        self.port = model.get('HealthCheckPort')
        self.protocol = model.get('HealthCheckProtocol')
        self.timeout = model.get('HealthCheckTimeoutSeconds')
        self.healthy_threshold = model.get('HealthyThresholdCount')
        self.matcher = (model.get('Matcher') or {}).get('HttpCode')
        self.unhealthy_threshold = model.get('UnhealthyThresholdCount')

    def to_health_check_request(self) -> Dict[str, Any]:
        return compact(
            HealthCheckEnabled=True,
            HealthCheckIntervalSeconds=self.interval,
            HealthCheckPath=self.path,
            HealthCheckPort=self.port,
            HealthCheckProtocol=self.protocol,
            HealthCheckTimeoutSeconds=self.timeout,
            HealthyThresholdCount=self.healthy_threshold,
            Matcher={'HttpCode': self.matcher} if self.matcher else None,
            UnhealthyThresholdCount=self.unhealthy_threshold,
        )


@register('load-balancer-target-group')
class TargetGroupResource(ElbResource):
    """A set of targets a listener or rule forwards to.

    Example:
        aws::load-balancer-target-group example-tg:
          name: example-tg
          port: 80
          protocol: HTTP
          target-type: instance
          vpc-id: vpc-0123456789abcdef0
          health-check:
            path: /healthcheck
            protocol: HTTP
    """

    health_check: Optional[HealthCheck] = attr(updatable=True)
    port: Optional[int] = attr()
    protocol: Optional[str] = attr()
    tags: Dict[str, str] = attr(default_factory=dict, updatable=True)
    name: Optional[str] = attr(required=True)
    target_type: Optional[str] = attr('instance', valid_strings=['instance', 'ip', 'lambda'])
    vpc_id: Optional[str] = attr()

    # Outputs
    arn: Optional[str] = attr(output=True, id=True)

    def copy_from(self, model: Dict[str, Any]) -> None:
        self.port = model.get('Port')
        self.protocol = model.get('Protocol')
        self.arn = model.get('TargetGroupArn')
        self.name = model.get('TargetGroupName')
        self.target_type = model.get('TargetType')
        self.vpc_id = model.get('VpcId')

        self.health_check = None
        if model.get('HealthCheckEnabled'):
            health_check = self.new_subresource(HealthCheck)
            health_check.copy_from(model)
            self.health_check = health_check

        self.tags = self.load_tags(self.client(), self.arn)

    def refresh(self) -> bool:
        try:
            response = self.client().describe_target_groups(TargetGroupArns=[self.arn])
        except ClientError as e:
            if is_not_found(e, TARGET_GROUP_NOT_FOUND):
                return False
            raise

        target_groups = response.get('TargetGroups') or []
        if not target_groups:
            return False

        self.copy_from(target_groups[0])
        return True

    def create(self, ui, state) -> None:
        client = self.client()

        if self.target_type != 'lambda' and self.health_check is None:
            raise ProvisioningError('A health check must be provided for instance and ip target types.')

        if self.health_check is not None:
            response = client.create_target_group(**compact(
                Name=self.name,
                Port=self.port,
                Protocol=self.protocol,
                TargetType=self.target_type,
                VpcId=self.vpc_id,
                **self.health_check.to_health_check_request(),
            ))
        else:
            response = client.create_target_group(
                Name=self.name,
                TargetType=self.target_type,
                HealthCheckEnabled=False,
            )

        self.arn = response['TargetGroups'][0]['TargetGroupArn']
        logger.info(f"Created target group {self.name}")
        self.add_tags(client, self.arn, self.tags)

    def update(self, ui, state, current, changed_fields: Set[str]) -> None:
        client = self.client()

        if self.health_check is not None:
            client.modify_target_group(TargetGroupArn=self.arn, **self.health_check.to_health_check_request())
        elif self.target_type == 'lambda':
            client.modify_target_group(TargetGroupArn=self.arn, HealthCheckEnabled=False)

        self.reconcile_tags(client, self.arn, current.tags, self.tags)

    def delete(self, ui, state) -> None:
        self.client().delete_target_group(TargetGroupArn=self.arn)
