"""Shared behaviour of Cognito user pool resources."""

from typing import Any, Dict, Iterator

from ..core.finder import paginate
from ..core.resource import AwsResource

SERVICE = 'cognito-idp'
NOT_FOUND = 'ResourceNotFoundException'

# list_user_pools and list_user_pool_clients reject pages larger than 60
PAGE_SIZE = 60


class CognitoResource(AwsResource):
    """Base class for resources managed through the cognito-idp client."""

    def client(self):
        return self.create_client(SERVICE)


def user_pools(client) -> Iterator[Dict[str, Any]]:
    return paginate(client.list_user_pools, 'UserPools', MaxResults=PAGE_SIZE)


def user_pool_clients(client, user_pool_id: str) -> Iterator[Dict[str, Any]]:
    return paginate(client.list_user_pool_clients, 'UserPoolClients', UserPoolId=user_pool_id, MaxResults=PAGE_SIZE)
