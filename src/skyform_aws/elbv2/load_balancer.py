"""Application and network load balancers."""

from typing import Any, Dict, List, Optional, Set

from botocore.exceptions import ClientError

from ..core.diffable import Diffable, compact
from ..core.fields import attr
from ..core.registry import register
from ..utils.errors import ProvisioningError, is_not_found
from ..utils.logging import get_logger
from ..utils.retry import Wait
from .base import LOAD_BALANCER_NOT_FOUND, ElbResource

logger = get_logger(__name__)

ACTIVE = 'active'


class LoadBalancerResource(ElbResource):
    """Fields and lifecycle shared by application and network load balancers."""

    ip_address_type: Optional[str] = attr(valid_strings=['ipv4', 'dualstack'])
    name: Optional[str] = attr(required=True)
    scheme: Optional[str] = attr(valid_strings=['internal', 'internet-facing'])
    tags: Dict[str, str] = attr(default_factory=dict, updatable=True)

    # Outputs
    arn: Optional[str] = attr(output=True, id=True)
    dns_name: Optional[str] = attr(output=True)
    hosted_zone_id: Optional[str] = attr(output=True)

    def copy_from(self, model: Dict[str, Any]) -> None:
        self.dns_name = model.get('DNSName')
        self.ip_address_type = model.get('IpAddressType')
        self.arn = model.get('LoadBalancerArn')
        self.name = model.get('LoadBalancerName')
        self.scheme = model.get('Scheme')
        self.hosted_zone_id = model.get('CanonicalHostedZoneId')
        self.tags = self.load_tags(self.client(), self.arn)

    def refresh(self) -> bool:
        try:
            load_balancer = self._get_load_balancer(self.client())
        except ClientError as e:
            if is_not_found(e, LOAD_BALANCER_NOT_FOUND):
                return False
            raise

        if load_balancer is None:
            return False

        self.copy_from(load_balancer)
        return True

    def create(self, ui, state) -> None:
        self.add_tags(self.client(), self.arn, self.tags)

    def update(self, ui, state, current, changed_fields: Set[str]) -> None:
        self.reconcile_tags(self.client(), self.arn, current.tags, self.tags)

    def delete(self, ui, state) -> None:
        client = self.client()
        client.delete_load_balancer(LoadBalancerArn=self.arn)

        Wait.at_most(120).check_every(10).resource_overrides(self, 'delete').prompt(ui).until(
            lambda: self._find_load_balancer(client) is None
        )

    def _create_load_balancer(self, client, **kwargs: Any) -> Dict[str, Any]:
        response = client.create_load_balancer(**compact(
            IpAddressType=self.ip_address_type,
            Name=self.name,
            Scheme=self.scheme,
            **kwargs
        ))

        load_balancer = response['LoadBalancers'][0]
        self.arn = load_balancer['LoadBalancerArn']
        self.dns_name = load_balancer.get('DNSName')
        self.hosted_zone_id = load_balancer.get('CanonicalHostedZoneId')
        logger.info(f"Created load balancer {self.name}")
        return load_balancer

    def _get_load_balancer(self, client) -> Optional[Dict[str, Any]]:
        if not self.arn:
            raise ProvisioningError('the arn is missing, unable to load the load balancer.')

        response = client.describe_load_balancers(LoadBalancerArns=[self.arn])
        load_balancers = response.get('LoadBalancers') or []
        return load_balancers[0] if load_balancers else None

    def _find_load_balancer(self, client) -> Optional[Dict[str, Any]]:
        """Like _get_load_balancer, but None once the load balancer is gone."""
        try:
            return self._get_load_balancer(client)
        except ClientError as e:
            if is_not_found(e, LOAD_BALANCER_NOT_FOUND):
                return None
            raise


@register('application-load-balancer')
class ApplicationLoadBalancerResource(LoadBalancerResource):
    """An HTTP(S) load balancer.

    Example:
        aws::application-load-balancer example-alb:
          name: example-alb
          ip-address-type: ipv4
          scheme: internet-facing
          security-group-ids: [sg-0123456789abcdef0]
          subnet-ids: [subnet-0123456789abcdef0, subnet-0fedcba9876543210]
          tags:
            Name: example-alb
    """

    security_group_ids: List[str] = attr(default_factory=list, updatable=True)
    subnet_ids: List[str] = attr(default_factory=list, required=True, updatable=True)

    def copy_from(self, model: Dict[str, Any]) -> None:
        self.security_group_ids = list(model.get('SecurityGroups') or [])
        self.subnet_ids = [zone['SubnetId'] for zone in model.get('AvailabilityZones') or [] if zone.get('SubnetId')]
        super().copy_from(model)

    def create(self, ui, state) -> None:
        self._create_load_balancer(
            self.client(),
            SecurityGroups=self.security_group_ids or None,
            Subnets=self.subnet_ids,
            Type='application',
        )
        super().create(ui, state)

    def update(self, ui, state, current, changed_fields: Set[str]) -> None:
        client = self.client()

        if 'security_group_ids' in changed_fields:
            client.set_security_groups(LoadBalancerArn=self.arn, SecurityGroups=self.security_group_ids)

        if 'subnet_ids' in changed_fields:
            client.set_subnets(LoadBalancerArn=self.arn, Subnets=self.subnet_ids)

        super().update(ui, state, current, changed_fields)


class SubnetMappings(Diffable):
    """A subnet of a network load balancer and its optional Elastic IP."""

    subnet_id: Optional[str] = attr(required=True)
    allocation_id: Optional[str] = attr()

    def primary_key(self) -> str:
        return self.subnet_id or ''

    def copy_from(self, model: Dict[str, Any]) -> None:
        """Load from an availability zone entry of a load balancer model."""
        self.subnet_id = model.get('SubnetId')
        self.allocation_id = None
        for address in model.get('LoadBalancerAddresses') or []:
            if address.get('AllocationId'):
                self.allocation_id = address['AllocationId']

    def to_subnet_mapping(self) -> Dict[str, Any]:
        return compact(SubnetId=self.subnet_id, AllocationId=self.allocation_id)


@register('network-load-balancer')
class NetworkLoadBalancerResource(LoadBalancerResource):
    """A TCP/UDP/TLS load balancer.

    Example:
        aws::network-load-balancer example-nlb:
          name: example-nlb
          scheme: internet-facing
          subnet-mappings:
            - subnet-id: subnet-0123456789abcdef0
              allocation-id: eipalloc-0123456789abcdef0
    """

    subnet_mappings: List[SubnetMappings] = attr(default_factory=list)

    def copy_from(self, model: Dict[str, Any]) -> None:
        mappings = []
        for zone in model.get('AvailabilityZones') or []:
            mapping = self.new_subresource(SubnetMappings)
            mapping.copy_from(zone)
            mappings.append(mapping)
        self.subnet_mappings = mappings
        super().copy_from(model)

    def create(self, ui, state) -> None:
        client = self.client()

        self._create_load_balancer(
            client,
            SubnetMappings=[mapping.to_subnet_mapping() for mapping in self.subnet_mappings] or None,
            Type='network',
        )
        state.save()

        active = Wait.at_most(600).check_every(30).resource_overrides(self, 'create').until(
            lambda: self._is_active(client)
        )
        if not active:
            raise ProvisioningError(f"Unable to reach 'Active' state for network load balancer - {self.name}")

        super().create(ui, state)

    def delete(self, ui, state) -> None:
        client = self.client()
        super().delete(ui, state)

        Wait.at_most(180).check_every(10).resource_overrides(self, 'delete').prompt(ui).until(
            lambda: self._find_load_balancer(client) is None
        )

    def _is_active(self, client) -> bool:
        load_balancer = self._get_load_balancer(client)
        code = ((load_balancer or {}).get('State') or {}).get('Code') or ''
        return code.lower() == ACTIVE
