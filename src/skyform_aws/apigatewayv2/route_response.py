"""API Gateway v2 route responses (WebSocket APIs)."""

from typing import Any, Dict, Optional, Set

from ..core.diffable import compact
from ..core.fields import attr
from ..core.registry import register
from .api import ApiResource
from .base import ApiGatewayResource, from_parameter_constraints, to_parameter_constraints
from .route import RouteResource


@register('api-gateway-route-response')
class RouteResponseResource(ApiGatewayResource):
    """A response a WebSocket route sends back to the client.

    Example:
        aws::api-gateway-route-response example-route-response:
          api: $(aws::api-gateway example-api)
          route: $(aws::api-gateway-route example-route)
          route-response-key: $default
    """

    api: Optional[ApiResource] = attr(required=True)
    route: Optional[RouteResource] = attr(required=True)
    route_response_key: Optional[str] = attr(required=True, updatable=True)
    model_selection_expression: Optional[str] = attr(updatable=True)
    response_models: Dict[str, str] = attr(default_factory=dict, updatable=True)
    response_parameters: Dict[str, bool] = attr(default_factory=dict, updatable=True)

    # Outputs
    id: Optional[str] = attr(output=True, id=True)

    def copy_from(self, model: Dict[str, Any]) -> None:
        self.model_selection_expression = model.get('ModelSelectionExpression')
        self.response_models = dict(model.get('ResponseModels', {}))
        self.response_parameters = from_parameter_constraints(model.get('ResponseParameters'))
        self.route_response_key = model.get('RouteResponseKey')
        self.id = model.get('RouteResponseId')

    def refresh(self) -> bool:
        client = self.client()
        route_response = self.find_item(
            client.get_route_responses, 'RouteResponseId', self.id,
            ApiId=self.api.id, RouteId=self.route.id,
        )
        if route_response is None:
            return False

        self.copy_from(route_response)
        return True

    def create(self, ui, state) -> None:
        response = self.client().create_route_response(**self._route_response_request())
        self.id = response['RouteResponseId']

    def update(self, ui, state, current, changed_fields: Set[str]) -> None:
        self.client().update_route_response(RouteResponseId=self.id, **self._route_response_request())

    def delete(self, ui, state) -> None:
        self.client().delete_route_response(
            ApiId=self.api.id, RouteId=self.route.id, RouteResponseId=self.id
        )

    def _route_response_request(self) -> Dict[str, Any]:
        return compact(
            ApiId=self.api.id,
            RouteId=self.route.id,
            ModelSelectionExpression=self.model_selection_expression,
            ResponseModels=self.response_models or None,
            ResponseParameters=to_parameter_constraints(self.response_parameters),
            RouteResponseKey=self.route_response_key,
        )
