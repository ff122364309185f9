"""API Gateway v2 VPC links."""

from typing import Any, Dict, List, Optional, Set

from ..core.diffable import compact
from ..core.fields import attr
from ..core.registry import register
from ..utils.logging import get_logger
from ..utils.retry import Wait
from .base import ApiGatewayResource

logger = get_logger(__name__)

AVAILABLE = 'AVAILABLE'


@register('api-gateway-vpc-link')
class VpcLinkResource(ApiGatewayResource):
    """A link from HTTP API integrations into private subnets.

    Example:
        aws::api-gateway-vpc-link example-vpc-link:
          name: example-vpc-link
          security-group-ids: [sg-0123456789abcdef0]
          subnet-ids: [subnet-0123456789abcdef0, subnet-0fedcba9876543210]
    """

    name: Optional[str] = attr(required=True, updatable=True)
    security_group_ids: List[str] = attr(default_factory=list)
    subnet_ids: List[str] = attr(default_factory=list, required=True)
    tags: Dict[str, str] = attr(default_factory=dict, updatable=True)

    # Outputs
    id: Optional[str] = attr(output=True, id=True)
    arn: Optional[str] = attr(output=True)
    status: Optional[str] = attr(output=True)

    def copy_from(self, model: Dict[str, Any]) -> None:
        self.id = model.get('VpcLinkId')
        self.name = model.get('Name')
        self.security_group_ids = list(model.get('SecurityGroupIds', []))
        self.subnet_ids = list(model.get('SubnetIds', []))
        self.tags = dict(model.get('Tags', {}))
        self.status = model.get('VpcLinkStatus')
        self.arn = self.arn_format()

    def refresh(self) -> bool:
        vpc_link = self._get_vpc_link(self.client())
        if vpc_link is None:
            return False

        self.copy_from(vpc_link)
        return True

    def create(self, ui, state) -> None:
        client = self.client()

        response = client.create_vpc_link(**compact(
            Name=self.name,
            SecurityGroupIds=self.security_group_ids or None,
            SubnetIds=self.subnet_ids,
            Tags=self.tags or None,
        ))

        self.id = response['VpcLinkId']
        self.arn = self.arn_format()
        state.save()

        self._wait_until_available(client, ui, 'create')

    def update(self, ui, state, current, changed_fields: Set[str]) -> None:
        client = self.client()

        if 'name' in changed_fields:
            client.update_vpc_link(VpcLinkId=self.id, Name=self.name)

        if 'tags' in changed_fields:
            self.replace_tags(client, self.arn, current.tags, self.tags)

        self._wait_until_available(client, ui, 'update')

    def delete(self, ui, state) -> None:
        self.client().delete_vpc_link(VpcLinkId=self.id)
        logger.info(f"Deleted VPC link {self.id}")

    def arn_format(self) -> Optional[str]:
        return self.gateway_arn(f"vpclinks/{self.id}") if self.id else None

    def _wait_until_available(self, client, ui, action: str) -> None:
        def available() -> bool:
            vpc_link = self._get_vpc_link(client)
            self.status = vpc_link.get('VpcLinkStatus') if vpc_link else None
            return self.status == AVAILABLE

        Wait.at_most(600).check_every(120).resource_overrides(self, action).until(available)

    def _get_vpc_link(self, client) -> Optional[Dict[str, Any]]:
        return self.find_item(client.get_vpc_links, 'VpcLinkId', self.id)
