"""Finders for existing Cognito user pools and app clients."""

from typing import Any, Dict, List, Optional

from botocore.exceptions import ClientError

from ..core.finder import AwsFinder
from ..core.registry import register_finder
from ..utils.errors import is_not_found
from .base import NOT_FOUND, SERVICE, user_pool_clients, user_pools
from .user_pool import UserPoolResource
from .user_pool_client import UserPoolClientResource


@register_finder('cognito-user-pool')
class UserPoolFinder(AwsFinder):
    """Query user pools by id."""

    resource_class = UserPoolResource
    service = SERVICE

    id: Optional[str] = None

    def find_aws(self, client, filters: Dict[str, Any]) -> List[Dict[str, Any]]:
        try:
            return [client.describe_user_pool(UserPoolId=filters['id'])['UserPool']]
        except ClientError as e:
            if is_not_found(e, NOT_FOUND):
                return []
            raise

    def find_all_aws(self, client) -> List[Dict[str, Any]]:
        return [
            client.describe_user_pool(UserPoolId=pool['Id'])['UserPool']
            for pool in user_pools(client)
        ]


@register_finder('cognito-user-pool-client')
class UserPoolClientFinder(AwsFinder):
    """Query one app client of a user pool.

    Both ``user-pool-id`` and ``client-id`` are needed for a filtered query.
    """

    resource_class = UserPoolClientResource
    service = SERVICE

    client_id: Optional[str] = None
    user_pool_id: Optional[str] = None

    def find_aws(self, client, filters: Dict[str, Any]) -> List[Dict[str, Any]]:
        if 'user-pool-id' not in filters:
            raise ValueError("'user-pool-id' is required.")

        if 'client-id' not in filters:
            raise ValueError("'client-id' is required.")

        try:
            response = client.describe_user_pool_client(
                UserPoolId=filters['user-pool-id'], ClientId=filters['client-id']
            )
        except ClientError as e:
            if is_not_found(e, NOT_FOUND):
                return []
            raise

        return [response['UserPoolClient']]

    def find_all_aws(self, client) -> List[Dict[str, Any]]:
        clients = []
        for pool in user_pools(client):
            for description in user_pool_clients(client, pool['Id']):
                response = client.describe_user_pool_client(
                    UserPoolId=description['UserPoolId'], ClientId=description['ClientId']
                )
                clients.append(response['UserPoolClient'])
        return clients
