"""API Gateway v2 models (WebSocket request and response schemas)."""

from typing import Any, Dict, Optional, Set

from ..core.diffable import compact
from ..core.fields import attr
from ..core.registry import register
from .api import ApiResource, locate_api
from .base import ApiGatewayResource


@register('api-gateway-model')
class ModelResource(ApiGatewayResource):
    """A JSON schema describing a request or response payload.

    Example:
        aws::api-gateway-model example-model:
          api: $(aws::api-gateway example-api)
          name: example
          content-type: application/json
          schema: '{"type": "object"}'
    """

    api: Optional[ApiResource] = attr(required=True)
    content_type: Optional[str] = attr(required=True, updatable=True)
    description: Optional[str] = attr(updatable=True)
    name: Optional[str] = attr(required=True, updatable=True)
    schema_definition: Optional[str] = attr(required=True, updatable=True, alias='schema')

    # Outputs
    id: Optional[str] = attr(output=True, id=True)

    def copy_from(self, model: Dict[str, Any]) -> None:
        self.content_type = model.get('ContentType')
        self.description = model.get('Description')
        self.name = model.get('Name')
        self.schema_definition = model.get('Schema')
        self.id = model.get('ModelId')

        locate_api(self, lambda client, api_id: self._get_model(client, api_id) is not None)

    def refresh(self) -> bool:
        model = self._get_model(self.client(), self.api.id)
        if model is None:
            return False

        self.copy_from(model)
        return True

    def create(self, ui, state) -> None:
        response = self.client().create_model(**self._model_request())
        self.id = response['ModelId']

    def update(self, ui, state, current, changed_fields: Set[str]) -> None:
        self.client().update_model(ModelId=self.id, **self._model_request())

    def delete(self, ui, state) -> None:
        self.client().delete_model(ApiId=self.api.id, ModelId=self.id)

    def _model_request(self) -> Dict[str, Any]:
        return compact(
            ApiId=self.api.id,
            ContentType=self.content_type,
            Description=self.description,
            Name=self.name,
            Schema=self.schema_definition,
        )

    def _get_model(self, client, api_id: str) -> Optional[Dict[str, Any]]:
        return self.find_item(client.get_models, 'ModelId', self.id, ApiId=api_id)
