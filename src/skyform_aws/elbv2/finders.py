"""Finders for existing load balancers and target groups."""

from typing import Any, ClassVar, Dict, List, Optional

from botocore.exceptions import ClientError

from ..core.finder import AwsFinder
from ..core.registry import register_finder
from ..utils.errors import is_not_found
from .base import LOAD_BALANCER_NOT_FOUND, SERVICE, TARGET_GROUP_NOT_FOUND, pages
from .load_balancer import ApplicationLoadBalancerResource, NetworkLoadBalancerResource
from .target_group import TargetGroupResource


class LoadBalancerFinder(AwsFinder):
    """Query load balancers of one type by ARN or name."""

    service = SERVICE
    load_balancer_type: ClassVar[str]

    arn: Optional[str] = None
    name: Optional[str] = None

    def find_aws(self, client, filters: Dict[str, Any]) -> List[Dict[str, Any]]:
        request = {}
        if 'arn' in filters:
            request['LoadBalancerArns'] = [filters['arn']]
        if 'name' in filters:
            request['Names'] = [filters['name']]

        try:
            return self._of_type(pages(client.describe_load_balancers, 'LoadBalancers', **request))
        except ClientError as e:
            if is_not_found(e, LOAD_BALANCER_NOT_FOUND):
                return []
            raise

    def find_all_aws(self, client) -> List[Dict[str, Any]]:
        return self._of_type(pages(client.describe_load_balancers, 'LoadBalancers'))

    def _of_type(self, load_balancers) -> List[Dict[str, Any]]:
        return [item for item in load_balancers if item.get('Type') == self.load_balancer_type]


@register_finder('application-load-balancer')
class ApplicationLoadBalancerFinder(LoadBalancerFinder):
    """Query application load balancers.

    Example:
        albs = ApplicationLoadBalancerFinder(state=state, name='example-alb').find()
    """

    resource_class = ApplicationLoadBalancerResource
    load_balancer_type = 'application'


@register_finder('network-load-balancer')
class NetworkLoadBalancerFinder(LoadBalancerFinder):
    """Query network load balancers."""

    resource_class = NetworkLoadBalancerResource
    load_balancer_type = 'network'


@register_finder('load-balancer-target-group')
class TargetGroupFinder(AwsFinder):
    """Query target groups by ARN or name."""

    resource_class = TargetGroupResource
    service = SERVICE

    arn: Optional[str] = None
    name: Optional[str] = None

    def find_aws(self, client, filters: Dict[str, Any]) -> List[Dict[str, Any]]:
        request = {}
        if 'arn' in filters:
            request['TargetGroupArns'] = [filters['arn']]
        if 'name' in filters:
            request['Names'] = [filters['name']]

        try:
            return list(pages(client.describe_target_groups, 'TargetGroups', **request))
        except ClientError as e:
            if is_not_found(e, TARGET_GROUP_NOT_FOUND):
                return []
            raise

    def find_all_aws(self, client) -> List[Dict[str, Any]]:
        return list(pages(client.describe_target_groups, 'TargetGroups'))
