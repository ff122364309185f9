"""Elastic Load Balancing v2 resources and finders."""

from .actions import (
    ActionResource,
    AuthenticateCognitoAction,
    AuthenticateOidcAction,
    FixedResponseAction,
    ForwardAction,
    NetworkActionResource,
    RedirectAction,
    TargetGroupStickiness,
    TargetGroupTuple,
)
from .condition import ConditionResource, HttpHeaderConfig, QueryStringPair
from .finders import ApplicationLoadBalancerFinder, NetworkLoadBalancerFinder, TargetGroupFinder
from .listener import (
    ApplicationLoadBalancerListenerResource,
    ListenerResource,
    NetworkLoadBalancerListenerResource,
)
from .listener_rule import ApplicationLoadBalancerListenerRuleResource
from .load_balancer import (
    ApplicationLoadBalancerResource,
    LoadBalancerResource,
    NetworkLoadBalancerResource,
    SubnetMappings,
)
from .target import TargetResource
from .target_group import HealthCheck, TargetGroupResource

__all__ = [
    'ActionResource',
    'ApplicationLoadBalancerFinder',
    'ApplicationLoadBalancerListenerResource',
    'ApplicationLoadBalancerListenerRuleResource',
    'ApplicationLoadBalancerResource',
    'AuthenticateCognitoAction',
    'AuthenticateOidcAction',
    'ConditionResource',
    'FixedResponseAction',
    'ForwardAction',
    'HealthCheck',
    'HttpHeaderConfig',
    'ListenerResource',
    'LoadBalancerResource',
    'NetworkActionResource',
    'NetworkLoadBalancerFinder',
    'NetworkLoadBalancerListenerResource',
    'NetworkLoadBalancerResource',
    'QueryStringPair',
    'RedirectAction',
    'SubnetMappings',
    'TargetGroupFinder',
    'TargetGroupResource',
    'TargetGroupStickiness',
    'TargetGroupTuple',
    'TargetResource',
]
