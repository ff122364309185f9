"""Cognito Identity Provider resources and finders."""

from .finders import UserPoolClientFinder, UserPoolFinder
from .user_pool import UserPoolResource
from .user_pool_client import UserPoolClientResource
from .user_pool_domain import UserPoolDomainResource

__all__ = [
    'UserPoolClientFinder',
    'UserPoolClientResource',
    'UserPoolDomainResource',
    'UserPoolFinder',
    'UserPoolResource',
]
