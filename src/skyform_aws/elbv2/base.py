"""Shared behaviour of Elastic Load Balancing v2 resources."""

from typing import Any, Dict, Iterator, Optional

from ..core.finder import paginate
from ..core.resource import AwsResource
from ..utils.logging import get_logger

logger = get_logger(__name__)

SERVICE = 'elbv2'

LOAD_BALANCER_NOT_FOUND = 'LoadBalancerNotFound'
LISTENER_NOT_FOUND = 'ListenerNotFound'
RULE_NOT_FOUND = 'RuleNotFound'
TARGET_GROUP_NOT_FOUND = 'TargetGroupNotFound'
INVALID_TARGET = 'InvalidTarget'


def pages(call, items_key: str, **kwargs: Any) -> Iterator[Dict[str, Any]]:
    """Paginate an ELB describe call, which uses Marker/NextMarker tokens."""
    return paginate(call, items_key, token_key='NextMarker', request_token_key='Marker', **kwargs)


class ElbResource(AwsResource):
    """Base class for resources managed through the elbv2 client."""

    def client(self):
        return self.create_client(SERVICE)

    def load_tags(self, client, arn: Optional[str]) -> Dict[str, str]:
        if not arn:
            return {}
        response = client.describe_tags(ResourceArns=[arn])
        descriptions = response.get('TagDescriptions') or []
        if not descriptions:
            return {}
        return self.tags_from_list(descriptions[0].get('Tags'))

    def add_tags(self, client, arn: str, tags: Optional[Dict[str, str]]) -> None:
        if tags:
            client.add_tags(ResourceArns=[arn], Tags=self.tags_to_list(tags))

    def reconcile_tags(self, client, arn: str, current: Optional[Dict[str, str]], desired: Optional[Dict[str, str]]) -> None:
        """Add changed tags and remove the ones no longer wanted."""
        additions, removals = self.tag_diff(current, desired)
        if additions:
            client.add_tags(ResourceArns=[arn], Tags=self.tags_to_list(additions))
        if removals:
            logger.debug(f"Removing tags {removals} from {arn}")
            client.remove_tags(ResourceArns=[arn], TagKeys=removals)
