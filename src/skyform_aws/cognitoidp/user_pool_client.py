"""Cognito user pool app clients."""

from typing import Any, Dict, List, Optional, Set

from botocore.exceptions import ClientError

from ..core.diffable import compact
from ..core.fields import attr
from ..core.registry import register
from ..utils.errors import is_not_found
from .base import NOT_FOUND, CognitoResource
from .user_pool import UserPoolResource


@register('cognito-user-pool-client')
class UserPoolClientResource(CognitoResource):
    """An app client allowed to call the user pool's auth APIs.

    Example:
        aws::cognito-user-pool-client example-client:
          name: example-client
          user-pool: $(aws::cognito-user-pool example-pool)
          allowed-oauth-flows-client: true
          allowed-oauth-flows: [code]
          allowed-oauth-scopes: [openid]
          callback-urls: ['https://example.com/oauth2/idpresponse']
          supported-identity-providers: [COGNITO]
          generate-secret: true
    """

    allowed_oauth_flows_client: Optional[bool] = attr(updatable=True)
    allowed_oauth_flows: List[str] = attr(
        default_factory=list, updatable=True, valid_strings=['code', 'implicit', 'client_credentials'])
    allowed_oauth_scopes: List[str] = attr(default_factory=list, updatable=True)
    callback_urls: List[str] = attr(default_factory=list, updatable=True)
    default_redirect_uri: Optional[str] = attr(updatable=True)
    explicit_auth_flows: List[str] = attr(default_factory=list, updatable=True)
    generate_secret: Optional[bool] = attr()
    logout_urls: List[str] = attr(default_factory=list, updatable=True)
    name: Optional[str] = attr(required=True, updatable=True)
    read_attributes: List[str] = attr(default_factory=list, updatable=True)
    refresh_token_validity: Optional[int] = attr(updatable=True, range=(0, 3650))
    supported_identity_providers: List[str] = attr(default_factory=list, updatable=True)
    user_pool: Optional[UserPoolResource] = attr(required=True)
    write_attributes: List[str] = attr(default_factory=list, updatable=True)

    # Outputs
    id: Optional[str] = attr(output=True, id=True)
    secret: Optional[str] = attr(output=True)

    def copy_from(self, model: Dict[str, Any]) -> None:
        self.id = model.get('ClientId')
        self.allowed_oauth_flows_client = model.get('AllowedOAuthFlowsUserPoolClient')
        self.allowed_oauth_flows = list(model.get('AllowedOAuthFlows', []))
        self.allowed_oauth_scopes = list(model.get('AllowedOAuthScopes', []))
        self.callback_urls = list(model.get('CallbackURLs', []))
        self.default_redirect_uri = model.get('DefaultRedirectURI')
        self.explicit_auth_flows = list(model.get('ExplicitAuthFlows', []))
        self.logout_urls = list(model.get('LogoutURLs', []))
        self.name = model.get('ClientName')
        self.read_attributes = list(model.get('ReadAttributes', []))
        self.refresh_token_validity = model.get('RefreshTokenValidity')
        self.secret = model.get('ClientSecret')
        self.supported_identity_providers = list(model.get('SupportedIdentityProviders', []))
        self.user_pool = self.find_by_id(UserPoolResource, model.get('UserPoolId'))
        self.write_attributes = list(model.get('WriteAttributes', []))

    def refresh(self) -> bool:
        try:
            response = self.client().describe_user_pool_client(UserPoolId=self.user_pool.id, ClientId=self.id)
        except ClientError as e:
            if is_not_found(e, NOT_FOUND):
                return False
            raise

        self.copy_from(response['UserPoolClient'])
        return True

    def create(self, ui, state) -> None:
        response = self.client().create_user_pool_client(
            **self._client_request(),
            **compact(GenerateSecret=self.generate_secret),
        )

        self.id = response['UserPoolClient']['ClientId']
        self.secret = response['UserPoolClient'].get('ClientSecret')

    def update(self, ui, state, current, changed_fields: Set[str]) -> None:
        self.client().update_user_pool_client(ClientId=self.id, **self._client_request())

    def delete(self, ui, state) -> None:
        self.client().delete_user_pool_client(UserPoolId=self.user_pool.id, ClientId=self.id)

    def _client_request(self) -> Dict[str, Any]:
        return compact(
            UserPoolId=self.user_pool.id,
            ClientName=self.name,
            AllowedOAuthFlowsUserPoolClient=self.allowed_oauth_flows_client,
            AllowedOAuthFlows=self.allowed_oauth_flows or None,
            AllowedOAuthScopes=self.allowed_oauth_scopes or None,
            CallbackURLs=self.callback_urls or None,
            DefaultRedirectURI=self.default_redirect_uri,
            ExplicitAuthFlows=self.explicit_auth_flows or None,
            LogoutURLs=self.logout_urls or None,
            ReadAttributes=self.read_attributes or None,
            RefreshTokenValidity=self.refresh_token_validity,
            SupportedIdentityProviders=self.supported_identity_providers or None,
            WriteAttributes=self.write_attributes or None,
        )
