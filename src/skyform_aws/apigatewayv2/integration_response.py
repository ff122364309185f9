"""API Gateway v2 integration responses (WebSocket APIs)."""

from typing import Any, Dict, Optional, Set

from botocore.exceptions import ClientError

from ..core.diffable import compact
from ..core.fields import attr
from ..core.registry import register
from ..utils.errors import is_not_found
from .api import ApiResource
from .base import NOT_FOUND, ApiGatewayResource
from .integration import IntegrationResource


@register('api-gateway-integration-response')
class IntegrationResponseResource(ApiGatewayResource):
    """How a backend response is mapped before it reaches the client.

    Example:
        aws::api-gateway-integration-response example-integration-response:
          api: $(aws::api-gateway example-api)
          integration: $(aws::api-gateway-integration example-integration)
          integration-response-key: /400/
    """

    api: Optional[ApiResource] = attr(required=True)
    content_handling_strategy: Optional[str] = attr(
        updatable=True, valid_strings=['CONVERT_TO_BINARY', 'CONVERT_TO_TEXT'])
    integration: Optional[IntegrationResource] = attr(required=True)
    integration_response_key: Optional[str] = attr(required=True, updatable=True)
    response_parameters: Dict[str, str] = attr(default_factory=dict, updatable=True)
    response_templates: Dict[str, str] = attr(default_factory=dict, updatable=True)
    template_selection_expression: Optional[str] = attr(updatable=True)

    # Outputs
    id: Optional[str] = attr(output=True, id=True)

    def copy_from(self, model: Dict[str, Any]) -> None:
        self.content_handling_strategy = model.get('ContentHandlingStrategy')
        self.integration_response_key = model.get('IntegrationResponseKey')
        self.response_parameters = dict(model.get('ResponseParameters', {}))
        self.response_templates = dict(model.get('ResponseTemplates', {}))
        self.template_selection_expression = model.get('TemplateSelectionExpression')
        self.id = model.get('IntegrationResponseId')

        if self.api is None or self.integration is None:
            self._locate_parents()

    def refresh(self) -> bool:
        response = self._get_integration_response(self.client(), self.api.id, self.integration.id)
        if response is None:
            return False

        self.copy_from(response)
        return True

    def create(self, ui, state) -> None:
        response = self.client().create_integration_response(**self._integration_response_request())
        self.id = response['IntegrationResponseId']

    def update(self, ui, state, current, changed_fields: Set[str]) -> None:
        self.client().update_integration_response(
            IntegrationResponseId=self.id, **self._integration_response_request()
        )

    def delete(self, ui, state) -> None:
        self.client().delete_integration_response(
            ApiId=self.api.id, IntegrationId=self.integration.id, IntegrationResponseId=self.id
        )

    def _integration_response_request(self) -> Dict[str, Any]:
        return compact(
            ApiId=self.api.id,
            IntegrationId=self.integration.id,
            ContentHandlingStrategy=self.content_handling_strategy,
            IntegrationResponseKey=self.integration_response_key,
            ResponseParameters=self.response_parameters or None,
            ResponseTemplates=self.response_templates or None,
            TemplateSelectionExpression=self.template_selection_expression,
        )

    def _get_integration_response(self, client, api_id: str, integration_id: str) -> Optional[Dict[str, Any]]:
        return self.find_item(
            client.get_integration_responses, 'IntegrationResponseId', self.id,
            ApiId=api_id, IntegrationId=integration_id,
        )

    def _locate_parents(self) -> None:
        """Find the API and integration owning this response by scanning the account."""
        client = self.client()
        for api in self.items(client.get_apis):
            api_id = api['ApiId']
            try:
                for integration in self.items(client.get_integrations, ApiId=api_id):
                    integration_id = integration['IntegrationId']
                    if self._get_integration_response(client, api_id, integration_id) is not None:
                        self.api = self.find_by_id(ApiResource, api_id)
                        self.integration = self.find_by_id(IntegrationResource, integration_id)
                        return
            except ClientError as e:
                if not is_not_found(e, NOT_FOUND):
                    raise
