"""API Gateway v2 integrations."""

from typing import Any, Dict, Optional, Set

from ..core.diffable import Diffable, compact
from ..core.fields import attr
from ..core.registry import register
from ..utils.logging import get_logger
from .api import ApiResource, locate_api
from .base import ApiGatewayResource
from .vpc_link import VpcLinkResource

logger = get_logger(__name__)


class ApiTlsConfig(Diffable):
    """TLS settings for private integrations."""

    server_name_to_verify: Optional[str] = attr(updatable=True)

    def copy_from(self, model: Dict[str, Any]) -> None:
        self.server_name_to_verify = model.get('ServerNameToVerify')

    def to_tls_config_input(self) -> Dict[str, Any]:
        return compact(ServerNameToVerify=self.server_name_to_verify)


@register('api-gateway-integration')
class IntegrationResource(ApiGatewayResource):
    """The backend a route forwards requests to.

    Example:
        aws::api-gateway-integration example-integration:
          api: $(aws::api-gateway example-api)
          integration-type: HTTP_PROXY
          integration-method: ANY
          integration-uri: https://example.com/{proxy}
          payload-format-version: '1.0'
          timeout-in-millis: 10000
    """

    api: Optional[ApiResource] = attr(required=True)
    connection: Optional[VpcLinkResource] = attr(updatable=True)
    connection_type: Optional[str] = attr(updatable=True, valid_strings=['INTERNET', 'VPC_LINK'])
    content_handling_strategy: Optional[str] = attr(
        updatable=True, valid_strings=['CONVERT_TO_BINARY', 'CONVERT_TO_TEXT'])
    credentials_arn: Optional[str] = attr(updatable=True)
    description: Optional[str] = attr(updatable=True)
    integration_method: Optional[str] = attr(updatable=True)
    integration_subtype: Optional[str] = attr(updatable=True)
    integration_type: Optional[str] = attr(
        required=True, updatable=True, valid_strings=['AWS', 'AWS_PROXY', 'HTTP', 'HTTP_PROXY', 'MOCK'])
    integration_uri: Optional[str] = attr(updatable=True)
    passthrough_behavior: Optional[str] = attr(
        updatable=True, valid_strings=['WHEN_NO_MATCH', 'NEVER', 'WHEN_NO_TEMPLATES'])
    payload_format_version: Optional[str] = attr(updatable=True, valid_strings=['1.0', '2.0'])
    request_parameters: Dict[str, str] = attr(default_factory=dict, updatable=True)
    request_templates: Dict[str, str] = attr(default_factory=dict, updatable=True)
    template_selection_expression: Optional[str] = attr(updatable=True)
    timeout_in_millis: Optional[int] = attr(updatable=True, range=(50, 30000))
    tls_config: Optional[ApiTlsConfig] = attr(updatable=True)

    # Outputs
    id: Optional[str] = attr(output=True, id=True)

    def copy_from(self, model: Dict[str, Any]) -> None:
        self.connection = self.find_by_id(VpcLinkResource, model.get('ConnectionId'))
        self.connection_type = model.get('ConnectionType')
        self.content_handling_strategy = model.get('ContentHandlingStrategy')
        self.credentials_arn = model.get('CredentialsArn')
        self.description = model.get('Description')
        self.integration_method = model.get('IntegrationMethod')
        self.integration_subtype = model.get('IntegrationSubtype')
        self.integration_type = model.get('IntegrationType')
        self.integration_uri = model.get('IntegrationUri')
        self.passthrough_behavior = model.get('PassthroughBehavior')
        self.payload_format_version = model.get('PayloadFormatVersion')
        self.request_parameters = dict(model.get('RequestParameters', {}))
        self.request_templates = dict(model.get('RequestTemplates', {}))
        self.template_selection_expression = model.get('TemplateSelectionExpression')
        self.timeout_in_millis = model.get('TimeoutInMillis')
        self.id = model.get('IntegrationId')

        self.tls_config = None
        if model.get('TlsConfig'):
            config = self.new_subresource(ApiTlsConfig)
            config.copy_from(model['TlsConfig'])
            self.tls_config = config

        locate_api(self, lambda client, api_id: self._get_integration(client, api_id) is not None)

    def refresh(self) -> bool:
        integration = self._get_integration(self.client(), self.api.id)
        if integration is None:
            return False

        self.copy_from(integration)
        return True

    def create(self, ui, state) -> None:
        response = self.client().create_integration(**self._integration_request())
        self.id = response['IntegrationId']
        logger.info(f"Created {self.integration_type} integration {self.id}")

    def update(self, ui, state, current, changed_fields: Set[str]) -> None:
        self.client().update_integration(IntegrationId=self.id, **self._integration_request())

    def delete(self, ui, state) -> None:
        self.client().delete_integration(ApiId=self.api.id, IntegrationId=self.id)

    def _integration_request(self) -> Dict[str, Any]:
        return compact(
            ApiId=self.api.id,
            ConnectionId=self.connection.id if self.connection else None,
            ConnectionType=self.connection_type,
            ContentHandlingStrategy=self.content_handling_strategy,
            CredentialsArn=self.credentials_arn,
            Description=self.description,
            IntegrationMethod=self.integration_method,
            IntegrationSubtype=self.integration_subtype,
            IntegrationType=self.integration_type,
            IntegrationUri=self.integration_uri,
            PassthroughBehavior=self.passthrough_behavior,
            PayloadFormatVersion=self.payload_format_version,
            RequestParameters=self.request_parameters or None,
            RequestTemplates=self.request_templates or None,
            TemplateSelectionExpression=self.template_selection_expression,
            TimeoutInMillis=self.timeout_in_millis,
            TlsConfig=self.tls_config.to_tls_config_input() if self.tls_config else None,
        )

    def _get_integration(self, client, api_id: str) -> Optional[Dict[str, Any]]:
        return self.find_item(client.get_integrations, 'IntegrationId', self.id, ApiId=api_id)
