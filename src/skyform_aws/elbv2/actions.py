"""Listener and rule actions.

Actions are nested blocks of listeners and listener rules; they have no
lifecycle of their own; the owning listener or rule sends them with every
create and modify call.
"""

from typing import Any, Dict, List, Optional

from ..cognitoidp.user_pool_client import UserPoolClientResource
from ..cognitoidp.user_pool_domain import UserPoolDomainResource
from ..core.diffable import Diffable, compact
from ..core.fields import attr
from .target_group import TargetGroupResource

ACTION_TYPES = ['forward', 'authenticate-oidc', 'authenticate-cognito', 'redirect', 'fixed-response']
UNAUTHENTICATED_REQUEST_BEHAVIOURS = ['deny', 'allow', 'authenticate']


class AuthenticateCognitoAction(Diffable):
    """Authenticate users through a Cognito user pool before forwarding."""

    extra_params: Dict[str, str] = attr(default_factory=dict, updatable=True)
    on_unauthenticated_request: Optional[str] = attr(
        'authenticate', updatable=True, valid_strings=UNAUTHENTICATED_REQUEST_BEHAVIOURS)
    scope: Optional[str] = attr(updatable=True)
    session_cookie_name: Optional[str] = attr(updatable=True)
    session_timeout: Optional[int] = attr(updatable=True)
    user_pool_arn: Optional[str] = attr(required=True, updatable=True)
    user_pool_client: Optional[UserPoolClientResource] = attr(required=True, updatable=True)
    user_pool_domain: Optional[UserPoolDomainResource] = attr(required=True, updatable=True)

    def primary_key(self) -> str:
        parts = []
        if self.user_pool_arn:
            parts.append(self.user_pool_arn)
        if self.user_pool_client is not None:
            parts.append(self.user_pool_client.id or self.user_pool_client.name or '')
        if self.user_pool_domain is not None:
            parts.append(self.user_pool_domain.domain or '')
        return ' '.join(parts)

    def copy_from(self, model: Dict[str, Any]) -> None:
        self.extra_params = dict(model.get('AuthenticationRequestExtraParams') or {})
        self.on_unauthenticated_request = model.get('OnUnauthenticatedRequest')
        self.scope = model.get('Scope')
        self.session_cookie_name = model.get('SessionCookieName')
        self.session_timeout = model.get('SessionTimeout')
        self.user_pool_arn = model.get('UserPoolArn')
        self.user_pool_client = self.find_by_id(UserPoolClientResource, model.get('UserPoolClientId'))
        self.user_pool_domain = self.find_by_id(UserPoolDomainResource, model.get('UserPoolDomain'))

    def to_cognito(self) -> Dict[str, Any]:
        return compact(
            AuthenticationRequestExtraParams=self.extra_params or None,
            OnUnauthenticatedRequest=self.on_unauthenticated_request,
            Scope=self.scope,
            SessionCookieName=self.session_cookie_name,
            SessionTimeout=self.session_timeout,
            UserPoolArn=self.user_pool_arn,
            UserPoolClientId=self.user_pool_client.id if self.user_pool_client else None,
            UserPoolDomain=self.user_pool_domain.domain if self.user_pool_domain else None,
        )


class AuthenticateOidcAction(Diffable):
    """Authenticate users through an OpenID Connect identity provider."""

    extra_params: Dict[str, str] = attr(default_factory=dict, updatable=True)
    authorization_endpoint: Optional[str] = attr(required=True, updatable=True)
    client_id: Optional[str] = attr(required=True, updatable=True)
    client_secret: Optional[str] = attr(updatable=True)
    issuer: Optional[str] = attr(required=True, updatable=True)
    on_unauthenticated_request: Optional[str] = attr(
        'authenticate', updatable=True, valid_strings=UNAUTHENTICATED_REQUEST_BEHAVIOURS)
    scope: Optional[str] = attr('openid', updatable=True)
    session_cookie_name: Optional[str] = attr('AWSELBAuthSessionCookie', updatable=True)
    session_timeout: Optional[int] = attr(604800, updatable=True)
    token_endpoint: Optional[str] = attr(required=True, updatable=True)
    user_info_endpoint: Optional[str] = attr(required=True, updatable=True)

    def primary_key(self) -> str:
        return f"{self.client_id}/{self.user_info_endpoint}/{self.token_endpoint}"

    def copy_from(self, model: Dict[str, Any]) -> None:
        self.extra_params = dict(model.get('AuthenticationRequestExtraParams') or {})
        self.authorization_endpoint = model.get('AuthorizationEndpoint')
        self.client_id = model.get('ClientId')
        self.issuer = model.get('Issuer')
        self.on_unauthenticated_request = model.get('OnUnauthenticatedRequest')
        self.scope = model.get('Scope')
        self.session_cookie_name = model.get('SessionCookieName')
        self.session_timeout = model.get('SessionTimeout')
        self.token_endpoint = model.get('TokenEndpoint')
        self.user_info_endpoint = model.get('UserInfoEndpoint')

    def to_oidc(self) -> Dict[str, Any]:
        return compact(
            AuthenticationRequestExtraParams=self.extra_params or None,
            AuthorizationEndpoint=self.authorization_endpoint,
            ClientId=self.client_id,
            ClientSecret=self.client_secret,
            Issuer=self.issuer,
            OnUnauthenticatedRequest=self.on_unauthenticated_request,
            Scope=self.scope,
            SessionCookieName=self.session_cookie_name,
            SessionTimeout=self.session_timeout,
            TokenEndpoint=self.token_endpoint,
            UserInfoEndpoint=self.user_info_endpoint,
        )


class FixedResponseAction(Diffable):
    """Answer the request directly with a canned response."""

    content_type: Optional[str] = attr(
        updatable=True,
        valid_strings=['text/plain', 'text/css', 'text/html', 'application/javascript', 'application/json'])
    message_body: Optional[str] = attr(updatable=True)
    status_code: Optional[str] = attr(required=True, updatable=True)

    def copy_from(self, model: Dict[str, Any]) -> None:
        self.content_type = model.get('ContentType')
        self.message_body = model.get('MessageBody')
        self.status_code = model.get('StatusCode')

    def to_fixed_action(self) -> Dict[str, Any]:
        return compact(ContentType=self.content_type, MessageBody=self.message_body, StatusCode=self.status_code)


class RedirectAction(Diffable):
    """Redirect the request to another URL."""

    host: Optional[str] = attr(updatable=True)
    path: Optional[str] = attr(updatable=True)
    port: Optional[str] = attr(updatable=True)
    protocol: Optional[str] = attr(updatable=True)
    query: Optional[str] = attr(updatable=True)
    status_code: Optional[str] = attr(required=True, updatable=True, valid_strings=['HTTP_301', 'HTTP_302'])

    def copy_from(self, model: Dict[str, Any]) -> None:
        self.host = model.get('Host')
        self.path = model.get('Path')
        self.port = model.get('Port')
        self.protocol = model.get('Protocol')
        self.query = model.get('Query')
        self.status_code = model.get('StatusCode')

    def to_redirect(self) -> Dict[str, Any]:
        return compact(
            Host=self.host,
            Path=self.path,
            Port=self.port,
            Protocol=self.protocol,
            Query=self.query,
            StatusCode=self.status_code,
        )


class TargetGroupTuple(Diffable):
    """A target group and its share of a weighted forward."""

    target_group: Optional[TargetGroupResource] = attr(required=True, updatable=True)
    weight: Optional[int] = attr(updatable=True, range=(0, 999))

    def primary_key(self) -> str:
        return self.target_group.arn if self.target_group is not None and self.target_group.arn else ''

    def copy_from(self, model: Dict[str, Any]) -> None:
        self.target_group = self.find_by_id(TargetGroupResource, model.get('TargetGroupArn'))
        self.weight = model.get('Weight')

    def to_target_group_tuple(self) -> Dict[str, Any]:
        return compact(
            TargetGroupArn=self.target_group.arn if self.target_group else None,
            Weight=self.weight,
        )


class TargetGroupStickiness(Diffable):
    """Keeps a client on the same target group of a weighted forward."""

    enabled: Optional[bool] = attr(updatable=True)
    duration: Optional[int] = attr(updatable=True, range=(1, 604800))

    def copy_from(self, model: Dict[str, Any]) -> None:
        self.enabled = model.get('Enabled')
        self.duration = model.get('DurationSeconds')

    def to_stickiness_config(self) -> Dict[str, Any]:
        return compact(Enabled=self.enabled, DurationSeconds=self.duration)


class ForwardAction(Diffable):
    """Forward to one or more weighted target groups."""

    target_group_weights: List[TargetGroupTuple] = attr(default_factory=list, updatable=True)
    target_group_stickiness: Optional[TargetGroupStickiness] = attr(updatable=True)

    def copy_from(self, model: Dict[str, Any]) -> None:
        weights = []
        for item in model.get('TargetGroups') or []:
            weight = self.new_subresource(TargetGroupTuple)
            weight.copy_from(item)
            weights.append(weight)
        self.target_group_weights = weights

        self.target_group_stickiness = None
        if model.get('TargetGroupStickinessConfig'):
            stickiness = self.new_subresource(TargetGroupStickiness)
            stickiness.copy_from(model['TargetGroupStickinessConfig'])
            self.target_group_stickiness = stickiness

    def add_targets(self, *target_group_arns: str) -> None:
        """Append target groups that are not weighted yet."""
        existing = {
            weight.target_group.arn for weight in self.target_group_weights
            if weight.target_group is not None
        }
        for arn in target_group_arns:
            if arn in existing:
                continue
            self.target_group_weights.append(
                self.new_subresource(TargetGroupTuple, target_group=self.find_by_id(TargetGroupResource, arn))
            )
            existing.add(arn)

    def to_forward_action_config(self) -> Dict[str, Any]:
        return compact(
            TargetGroups=[weight.to_target_group_tuple() for weight in self.target_group_weights] or None,
            TargetGroupStickinessConfig=(
                self.target_group_stickiness.to_stickiness_config() if self.target_group_stickiness else None
            ),
        )


class NetworkActionResource(Diffable):
    """Default action of a network load balancer listener."""

    type: Optional[str] = attr(required=True, updatable=True, valid_strings=['forward'])
    target_group: Optional[TargetGroupResource] = attr(updatable=True)

    def copy_from(self, model: Dict[str, Any]) -> None:
        self.type = model.get('Type')
        self.target_group = self.find_by_id(TargetGroupResource, model.get('TargetGroupArn'))

    def to_action(self) -> Dict[str, Any]:
        return compact(
            Type=self.type,
            TargetGroupArn=self.target_group.arn if self.target_group else None,
        )


class ActionResource(NetworkActionResource):
    """An application load balancer listener or rule action.

    The type is derived from the configured block when it is left out.

    Example:
        default-actions:
          - type: forward
            target-group: $(aws::load-balancer-target-group example-tg)
          - redirect-action:
              port: '443'
              protocol: HTTPS
              status-code: HTTP_301
    """

    type: Optional[str] = attr(updatable=True, valid_strings=ACTION_TYPES)
    order: Optional[int] = attr(updatable=True, range=(1, 50000))
    authenticate_cognito_action: Optional[AuthenticateCognitoAction] = attr(updatable=True)
    authenticate_oidc_action: Optional[AuthenticateOidcAction] = attr(updatable=True)
    fixed_response_action: Optional[FixedResponseAction] = attr(updatable=True)
    redirect_action: Optional[RedirectAction] = attr(updatable=True)
    forward_action: Optional[ForwardAction] = attr(updatable=True)

    def primary_key(self) -> str:
        return f"{self.action_type()} {self.order or ''}".strip()

    def action_type(self) -> Optional[str]:
        if self.type:
            return self.type
        if self.authenticate_cognito_action is not None:
            return 'authenticate-cognito'
        if self.authenticate_oidc_action is not None:
            return 'authenticate-oidc'
        if self.fixed_response_action is not None:
            return 'fixed-response'
        if self.redirect_action is not None:
            return 'redirect'
        if self.forward_action is not None or self.target_group is not None:
            return 'forward'
        return None

    def copy_from(self, model: Dict[str, Any]) -> None:
        super().copy_from(model)
        self.order = model.get('Order')

        self.authenticate_cognito_action = self._copy_block(
            AuthenticateCognitoAction, model.get('AuthenticateCognitoConfig'))
        self.authenticate_oidc_action = self._copy_block(AuthenticateOidcAction, model.get('AuthenticateOidcConfig'))
        self.fixed_response_action = self._copy_block(FixedResponseAction, model.get('FixedResponseConfig'))
        self.redirect_action = self._copy_block(RedirectAction, model.get('RedirectConfig'))
        self.forward_action = self._copy_block(ForwardAction, model.get('ForwardConfig'))

    def to_action(self) -> Dict[str, Any]:
        return compact(
            Type=self.action_type(),
            TargetGroupArn=self.target_group.arn if self.target_group else None,
            Order=self.order,
            AuthenticateCognitoConfig=(
                self.authenticate_cognito_action.to_cognito() if self.authenticate_cognito_action else None
            ),
            AuthenticateOidcConfig=self.authenticate_oidc_action.to_oidc() if self.authenticate_oidc_action else None,
            FixedResponseConfig=(
                self.fixed_response_action.to_fixed_action() if self.fixed_response_action else None
            ),
            RedirectConfig=self.redirect_action.to_redirect() if self.redirect_action else None,
            ForwardConfig=self.forward_action.to_forward_action_config() if self.forward_action else None,
        )

    def _copy_block(self, cls, model: Optional[Dict[str, Any]]):
        if not model:
            return None
        block = self.new_subresource(cls)
        block.copy_from(model)
        return block
