"""API Gateway v2 authorizers."""

from typing import Any, Dict, List, Optional, Set

from ..core.diffable import Diffable, compact
from ..core.fields import attr
from ..core.registry import register
from ..utils.logging import get_logger
from .api import ApiResource, locate_api
from .base import ApiGatewayResource

logger = get_logger(__name__)


class ApiJwtConfiguration(Diffable):
    """JWT issuer and audiences accepted by a JWT authorizer."""

    audience: List[str] = attr(default_factory=list, updatable=True)
    issuer: Optional[str] = attr(updatable=True)

    def copy_from(self, model: Dict[str, Any]) -> None:
        self.audience = list(model.get('Audience', []))
        self.issuer = model.get('Issuer')

    def to_jwt_configuration(self) -> Dict[str, Any]:
        return compact(Audience=self.audience or None, Issuer=self.issuer)


@register('api-gateway-authorizer')
class AuthorizerResource(ApiGatewayResource):
    """A Lambda (REQUEST) or JWT authorizer.

    Example:
        aws::api-gateway-authorizer example-authorizer:
          api: $(aws::api-gateway example-api)
          name: example-authorizer
          authorizer-type: JWT
          identity-sources: [$request.header.Authorization]
          jwt-configuration:
            audience: [example-audience]
            issuer: https://cognito-idp.us-east-1.amazonaws.com/us-east-1_example
    """

    api: Optional[ApiResource] = attr(required=True)
    authorizer_credentials_arn: Optional[str] = attr(updatable=True)
    authorizer_payload_format_version: Optional[str] = attr(updatable=True, valid_strings=['1.0', '2.0'])
    authorizer_result_ttl_in_seconds: Optional[int] = attr(updatable=True, range=(0, 3600))
    authorizer_type: Optional[str] = attr(required=True, updatable=True, valid_strings=['REQUEST', 'JWT'])
    authorizer_uri: Optional[str] = attr(updatable=True)
    enable_simple_responses: Optional[bool] = attr(updatable=True)
    identity_sources: List[str] = attr(default_factory=list, required=True, updatable=True)
    jwt_configuration: Optional[ApiJwtConfiguration] = attr(updatable=True)
    name: Optional[str] = attr(required=True, updatable=True)

    # Outputs
    id: Optional[str] = attr(output=True, id=True)

    def copy_from(self, model: Dict[str, Any]) -> None:
        self.authorizer_credentials_arn = model.get('AuthorizerCredentialsArn')
        self.authorizer_payload_format_version = model.get('AuthorizerPayloadFormatVersion')
        self.authorizer_result_ttl_in_seconds = model.get('AuthorizerResultTtlInSeconds')
        self.authorizer_type = model.get('AuthorizerType')
        self.authorizer_uri = model.get('AuthorizerUri')
        self.enable_simple_responses = model.get('EnableSimpleResponses')
        self.identity_sources = list(model.get('IdentitySource', []))
        self.name = model.get('Name')
        self.id = model.get('AuthorizerId')

        self.jwt_configuration = None
        if model.get('JwtConfiguration'):
            config = self.new_subresource(ApiJwtConfiguration)
            config.copy_from(model['JwtConfiguration'])
            self.jwt_configuration = config

        locate_api(self, lambda client, api_id: self._get_authorizer(client, api_id) is not None)

    def refresh(self) -> bool:
        authorizer = self._get_authorizer(self.client(), self.api.id)
        if authorizer is None:
            return False

        self.copy_from(authorizer)
        return True

    def create(self, ui, state) -> None:
        response = self.client().create_authorizer(**self._authorizer_request())
        self.id = response['AuthorizerId']
        logger.info(f"Created authorizer {self.name} ({self.id})")

    def update(self, ui, state, current, changed_fields: Set[str]) -> None:
        self.client().update_authorizer(AuthorizerId=self.id, **self._authorizer_request())

    def delete(self, ui, state) -> None:
        self.client().delete_authorizer(ApiId=self.api.id, AuthorizerId=self.id)

    def _authorizer_request(self) -> Dict[str, Any]:
        return compact(
            ApiId=self.api.id,
            AuthorizerCredentialsArn=self.authorizer_credentials_arn,
            AuthorizerPayloadFormatVersion=self.authorizer_payload_format_version,
            AuthorizerResultTtlInSeconds=self.authorizer_result_ttl_in_seconds,
            AuthorizerType=self.authorizer_type,
            AuthorizerUri=self.authorizer_uri,
            EnableSimpleResponses=self.enable_simple_responses,
            IdentitySource=self.identity_sources or None,
            JwtConfiguration=self.jwt_configuration.to_jwt_configuration() if self.jwt_configuration else None,
            Name=self.name,
        )

    def _get_authorizer(self, client, api_id: str) -> Optional[Dict[str, Any]]:
        return self.find_item(client.get_authorizers, 'AuthorizerId', self.id, ApiId=api_id)
