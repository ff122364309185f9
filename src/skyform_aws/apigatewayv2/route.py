"""API Gateway v2 routes."""

from typing import Any, Dict, List, Optional, Set

from ..core.diffable import compact
from ..core.fields import attr
from ..core.registry import register
from ..utils.logging import get_logger
from .api import ApiResource, locate_api
from .authorizer import AuthorizerResource
from .base import ApiGatewayResource, from_parameter_constraints, to_parameter_constraints

logger = get_logger(__name__)


@register('api-gateway-route')
class RouteResource(ApiGatewayResource):
    """A route matching requests to an integration target.

    Example:
        aws::api-gateway-route example-route:
          api: $(aws::api-gateway example-api)
          route-key: 'ANY /api/example/route'
          authorization-type: JWT
          authorizer: $(aws::api-gateway-authorizer example-authorizer)
          target: integrations/abc123
    """

    api: Optional[ApiResource] = attr(required=True)
    route_key: Optional[str] = attr(required=True, updatable=True)
    api_key_required: Optional[bool] = attr(updatable=True)
    authorization_scopes: List[str] = attr(default_factory=list, updatable=True)
    authorization_type: Optional[str] = attr(updatable=True, valid_strings=['NONE', 'AWS_IAM', 'CUSTOM', 'JWT'])
    authorizer: Optional[AuthorizerResource] = attr(updatable=True)
    model_selection_expression: Optional[str] = attr(updatable=True)
    operation_name: Optional[str] = attr(updatable=True)
    request_models: Dict[str, str] = attr(default_factory=dict, updatable=True)
    request_parameters: Dict[str, bool] = attr(default_factory=dict, updatable=True)
    route_response_selection_expression: Optional[str] = attr(updatable=True)
    target: Optional[str] = attr(updatable=True)

    # Outputs
    id: Optional[str] = attr(output=True, id=True)

    def copy_from(self, model: Dict[str, Any]) -> None:
        self.route_key = model.get('RouteKey')
        self.api_key_required = model.get('ApiKeyRequired')
        self.authorization_scopes = list(model.get('AuthorizationScopes', []))
        self.authorization_type = model.get('AuthorizationType')
        self.authorizer = self.find_by_id(AuthorizerResource, model.get('AuthorizerId'))
        self.model_selection_expression = model.get('ModelSelectionExpression')
        self.operation_name = model.get('OperationName')
        self.request_models = dict(model.get('RequestModels', {}))
        self.request_parameters = from_parameter_constraints(model.get('RequestParameters'))
        self.route_response_selection_expression = model.get('RouteResponseSelectionExpression')
        self.target = model.get('Target')
        self.id = model.get('RouteId')

        locate_api(self, lambda client, api_id: self._get_route(client, api_id) is not None)

    def refresh(self) -> bool:
        route = self._get_route(self.client(), self.api.id)
        if route is None:
            return False

        self.copy_from(route)
        return True

    def create(self, ui, state) -> None:
        response = self.client().create_route(**self._route_request())
        self.id = response['RouteId']
        logger.info(f"Created route '{self.route_key}' ({self.id})")

    def update(self, ui, state, current, changed_fields: Set[str]) -> None:
        self.client().update_route(RouteId=self.id, **self._route_request())

    def delete(self, ui, state) -> None:
        self.client().delete_route(ApiId=self.api.id, RouteId=self.id)

    def _route_request(self) -> Dict[str, Any]:
        return compact(
            ApiId=self.api.id,
            ApiKeyRequired=self.api_key_required,
            AuthorizationScopes=self.authorization_scopes or None,
            AuthorizationType=self.authorization_type,
            AuthorizerId=self.authorizer.id if self.authorizer else None,
            ModelSelectionExpression=self.model_selection_expression,
            OperationName=self.operation_name,
            RequestModels=self.request_models or None,
            RequestParameters=to_parameter_constraints(self.request_parameters),
            RouteKey=self.route_key,
            RouteResponseSelectionExpression=self.route_response_selection_expression,
            Target=self.target,
        )

    def _get_route(self, client, api_id: str) -> Optional[Dict[str, Any]]:
        return self.find_item(client.get_routes, 'RouteId', self.id, ApiId=api_id)
