"""Shared behaviour of API Gateway v2 resources."""

from typing import Any, Dict, Iterator, Optional

from ..core.finder import paginate
from ..core.resource import AwsResource
from ..utils.logging import get_logger

logger = get_logger(__name__)

SERVICE = 'apigatewayv2'
NOT_FOUND = 'NotFoundException'


class ApiGatewayResource(AwsResource):
    """Base class for resources managed through the apigatewayv2 client."""

    def client(self):
        return self.create_client(SERVICE)

    def gateway_arn(self, path: str) -> str:
        return f"arn:aws:apigateway:{self.region}::/{path}"

    @staticmethod
    def items(call, **kwargs: Any) -> Iterator[Dict[str, Any]]:
        return paginate(call, 'Items', **kwargs)

    @staticmethod
    def replace_tags(client, arn: str, current_tags: Optional[Dict[str, str]], tags: Optional[Dict[str, str]]) -> None:
        """Swap every tag on ``arn`` for ``tags``."""
        if current_tags:
            client.untag_resource(ResourceArn=arn, TagKeys=list(current_tags))
        logger.debug(f"Tagging {arn}")
        client.tag_resource(ResourceArn=arn, Tags=tags or {})

    @classmethod
    def find_item(cls, call, key: str, value: Any, **kwargs: Any) -> Optional[Dict[str, Any]]:
        """First item of a paginated list call whose ``key`` equals ``value``."""
        for item in cls.items(call, **kwargs):
            if item.get(key) == value:
                return item
        return None


def to_parameter_constraints(parameters: Optional[Dict[str, bool]]) -> Optional[Dict[str, Dict[str, bool]]]:
    """``{'route.request.header.x': True}`` -> ``{'route.request.header.x': {'Required': True}}``."""
    if not parameters:
        return None
    return {name: {'Required': required} for name, required in parameters.items()}


def from_parameter_constraints(constraints: Optional[Dict[str, Dict[str, Any]]]) -> Dict[str, bool]:
    return {name: bool(value.get('Required')) for name, value in (constraints or {}).items()}
