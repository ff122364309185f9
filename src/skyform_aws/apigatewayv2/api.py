"""API Gateway v2 APIs."""

from typing import Any, Callable, Dict, List, Optional, Set

from botocore.exceptions import ClientError

from ..core.diffable import Diffable, FieldError, compact
from ..core.fields import attr
from ..core.registry import register
from ..utils.errors import is_not_found
from ..utils.logging import get_logger
from .base import NOT_FOUND, ApiGatewayResource

logger = get_logger(__name__)


class ApiCors(Diffable):
    """CORS settings of an HTTP API.

    Example:
        cors-configuration:
          allow-credentials: false
          allow-origins: [https://example.com]
          max-age: 300
    """

    allow_credentials: Optional[bool] = attr(updatable=True)
    allow_headers: List[str] = attr(default_factory=list, updatable=True)
    allow_methods: List[str] = attr(default_factory=list, updatable=True)
    allow_origins: List[str] = attr(default_factory=list, updatable=True)
    expose_headers: List[str] = attr(default_factory=list, updatable=True)
    max_age: Optional[int] = attr(updatable=True, range=(-1, 86400))

    def copy_from(self, model: Dict[str, Any]) -> None:
        self.allow_credentials = model.get('AllowCredentials')
        self.max_age = model.get('MaxAge')
        self.allow_headers = list(model.get('AllowHeaders', []))
        self.allow_methods = list(model.get('AllowMethods', []))
        self.allow_origins = list(model.get('AllowOrigins', []))
        self.expose_headers = list(model.get('ExposeHeaders', []))

    def validate_config(self, configured_fields: Set[str]) -> List[FieldError]:
        if not (
            configured_fields
            & {'allow_credentials', 'allow_headers', 'allow_methods', 'allow_origins', 'expose_headers', 'max_age'}
        ):
            return [self.error(None, "At least one of 'allow-credentials', 'allow-headers', 'allow-methods', "
                                     "'allow-origins', 'expose-headers' or 'max-age' has to be set.")]
        return []

    def to_cors(self) -> Dict[str, Any]:
        return compact(
            AllowCredentials=self.allow_credentials,
            AllowHeaders=self.allow_headers or None,
            AllowMethods=self.allow_methods or None,
            AllowOrigins=self.allow_origins or None,
            ExposeHeaders=self.expose_headers or None,
            MaxAge=self.max_age,
        )


@register('api-gateway')
class ApiResource(ApiGatewayResource):
    """An HTTP or WebSocket API.

    Example:
        aws::api-gateway example-api:
          name: example-api
          protocol-type: HTTP
          description: example-desc
          cors-configuration:
            allow-origins: ['*']
          tags:
            example-key: example-value
    """

    api_key_selection_expression: Optional[str] = attr(
        valid_strings=['$request.header.x-api-key', '$context.authorizer.usageIdentifierKey'])
    cors_configuration: Optional[ApiCors] = attr(updatable=True)
    description: Optional[str] = attr(updatable=True)
    disable_execute_api_endpoint: Optional[bool] = attr(updatable=True)
    name: Optional[str] = attr(required=True, updatable=True)
    protocol_type: Optional[str] = attr(required=True, valid_strings=['HTTP', 'WEBSOCKET'])
    route_selection_expression: Optional[str] = attr(
        updatable=True, valid_strings=['${request.method} ${request.path}'])
    version: Optional[str] = attr(updatable=True)
    tags: Dict[str, str] = attr(default_factory=dict, updatable=True)

    # Outputs
    id: Optional[str] = attr(output=True, id=True)
    arn: Optional[str] = attr(output=True)
    api_endpoint: Optional[str] = attr(output=True)

    def copy_from(self, model: Dict[str, Any]) -> None:
        self.api_key_selection_expression = model.get('ApiKeySelectionExpression')
        self.description = model.get('Description')
        self.disable_execute_api_endpoint = model.get('DisableExecuteApiEndpoint')
        self.name = model.get('Name')
        self.protocol_type = model.get('ProtocolType')
        self.route_selection_expression = model.get('RouteSelectionExpression')
        self.version = model.get('Version')
        self.id = model.get('ApiId')
        self.api_endpoint = model.get('ApiEndpoint')
        self.arn = self.arn_format()

        self.cors_configuration = None
        if model.get('CorsConfiguration'):
            config = self.new_subresource(ApiCors)
            config.copy_from(model['CorsConfiguration'])
            self.cors_configuration = config

        self.tags = dict(model.get('Tags', {}))

    def refresh(self) -> bool:
        api = self._get_api(self.client())
        if api is None:
            return False

        self.copy_from(api)
        return True

    def create(self, ui, state) -> None:
        client = self.client()

        response = client.create_api(**compact(
            ApiKeySelectionExpression=self.api_key_selection_expression,
            CorsConfiguration=self.cors_configuration.to_cors() if self.cors_configuration else None,
            Description=self.description,
            DisableExecuteApiEndpoint=self.disable_execute_api_endpoint,
            Name=self.name,
            ProtocolType=self.protocol_type,
            RouteSelectionExpression=self.route_selection_expression,
            Tags=self.tags or None,
            Version=self.version,
        ))

        self.id = response['ApiId']
        self.api_endpoint = response.get('ApiEndpoint')
        self.arn = self.arn_format()
        logger.info(f"Created API {self.name} ({self.id})")

    def update(self, ui, state, current, changed_fields: Set[str]) -> None:
        client = self.client()

        client.update_api(**compact(
            ApiId=self.id,
            CorsConfiguration=self.cors_configuration.to_cors() if self.cors_configuration else None,
            Description=self.description,
            DisableExecuteApiEndpoint=self.disable_execute_api_endpoint,
            Name=self.name,
            RouteSelectionExpression=self.route_selection_expression,
            Version=self.version,
        ))

        if 'cors_configuration' in changed_fields and self.cors_configuration is None:
            client.delete_cors_configuration(ApiId=self.id)

        if 'tags' in changed_fields:
            self.replace_tags(client, self.arn, current.tags, self.tags)

    def delete(self, ui, state) -> None:
        self.client().delete_api(ApiId=self.id)
        logger.info(f"Deleted API {self.id}")

    def arn_format(self) -> Optional[str]:
        return self.gateway_arn(f"apis/{self.id}") if self.id else None

    def _get_api(self, client) -> Optional[Dict[str, Any]]:
        return self.find_item(client.get_apis, 'ApiId', self.id)


def locate_api(resource, contains: Callable[[Any, str], bool]) -> None:
    """Set ``resource.api`` to the API whose children include ``resource``.

    API Gateway list responses for stages, routes and the like do not name
    the owning API, so the account's APIs are scanned until ``contains``
    reports a match.

    Args:
        resource: Child resource with an ``api`` field
        contains: Called with (client, api_id), True when the API owns the child
    """
    if resource.api is not None:
        return

    client = resource.client()
    for api in ApiGatewayResource.items(client.get_apis):
        api_id = api['ApiId']
        try:
            if contains(client, api_id):
                resource.api = resource.find_by_id(ApiResource, api_id)
                return
        except ClientError as e:
            if not is_not_found(e, NOT_FOUND):
                raise
            logger.debug(f"API {api_id} disappeared while locating parent")
