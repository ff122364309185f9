"""Finders for existing API Gateway v2 entities."""

from typing import Any, Dict, Iterator, List, Optional

from botocore.exceptions import ClientError

from ..core.finder import AwsFinder, paginate
from ..core.registry import register_finder
from ..utils.errors import is_not_found
from .api import ApiResource
from .api_mapping import ApiMappingResource
from .base import NOT_FOUND, SERVICE
from .integration import IntegrationResource
from .integration_response import IntegrationResponseResource
from .route import RouteResource
from .route_response import RouteResponseResource


class ApiGatewayFinder(AwsFinder):
    """Base finder for apigatewayv2 list calls."""

    service = SERVICE

    @staticmethod
    def items(call, **kwargs: Any) -> Iterator[Dict[str, Any]]:
        return paginate(call, 'Items', **kwargs)

    def get_apis(self, client) -> List[str]:
        return [api['ApiId'] for api in self.items(client.get_apis)]


@register_finder('api-gateway')
class ApiFinder(ApiGatewayFinder):
    """Query APIs.

    Example:
        apis = ApiFinder(state=state, name='example-api').find()
    """

    resource_class = ApiResource

    id: Optional[str] = None
    name: Optional[str] = None

    def find_aws(self, client, filters: Dict[str, Any]) -> List[Dict[str, Any]]:
        return [
            api for api in self.items(client.get_apis)
            if ('id' not in filters or api.get('ApiId') == filters['id'])
            and ('name' not in filters or api.get('Name') == filters['name'])
        ]

    def find_all_aws(self, client) -> List[Dict[str, Any]]:
        return list(self.items(client.get_apis))


@register_finder('api-gateway-api-mapping')
class ApiMappingFinder(ApiGatewayFinder):
    """Query API mappings, across every domain name unless one is given."""

    resource_class = ApiMappingResource

    domain_name: Optional[str] = None
    id: Optional[str] = None

    def find_aws(self, client, filters: Dict[str, Any]) -> List[Dict[str, Any]]:
        if 'domain-name' in filters:
            domain_names = [filters['domain-name']]
        else:
            domain_names = self._get_domain_names(client)

        mappings = []
        for domain_name in domain_names:
            mappings.extend(self.items(client.get_api_mappings, DomainName=domain_name))

        if 'id' in filters:
            mappings = [mapping for mapping in mappings if mapping.get('ApiMappingId') == filters['id']]

        return mappings

    def find_all_aws(self, client) -> List[Dict[str, Any]]:
        mappings = []
        for domain_name in self._get_domain_names(client):
            mappings.extend(self.items(client.get_api_mappings, DomainName=domain_name))
        return mappings

    def _get_domain_names(self, client) -> List[str]:
        return [domain['DomainName'] for domain in self.items(client.get_domain_names)]


@register_finder('api-gateway-integration-response')
class IntegrationResponseFinder(ApiGatewayFinder):
    """Query integration responses.

    APIs or integrations that disappear while being scanned are skipped.
    """

    resource_class = IntegrationResponseResource

    api_id: Optional[str] = None
    integration_id: Optional[str] = None
    id: Optional[str] = None

    def find_aws(self, client, filters: Dict[str, Any]) -> List[Dict[str, Any]]:
        apis = [filters['api-id']] if 'api-id' in filters else self.get_apis(client)

        responses = []
        for api_id in apis:
            try:
                if 'integration-id' in filters:
                    integrations = [filters['integration-id']]
                else:
                    integrations = self._get_integrations(client, api_id)

                for integration_id in integrations:
                    responses.extend(self._get_responses(client, api_id, integration_id))
            except ClientError as e:
                if not is_not_found(e, NOT_FOUND):
                    raise

        if 'id' in filters:
            responses = [item for item in responses if item['model'].get('IntegrationResponseId') == filters['id']]

        return responses

    def find_all_aws(self, client) -> List[Dict[str, Any]]:
        responses = []
        for api_id in self.get_apis(client):
            for integration_id in self._get_integrations(client, api_id):
                responses.extend(self._get_responses(client, api_id, integration_id))
        return responses

    def new_resource(self, model: Dict[str, Any]) -> Any:
        resource = self.resource_class()
        resource.bind(state=self._state, credentials=self._credentials)
        resource.api = resource.find_by_id(ApiResource, model['api_id'])
        resource.integration = resource.find_by_id(IntegrationResource, model['integration_id'])
        resource.copy_from(model['model'])
        return resource

    def _get_integrations(self, client, api_id: str) -> List[str]:
        return [item['IntegrationId'] for item in self.items(client.get_integrations, ApiId=api_id)]

    def _get_responses(self, client, api_id: str, integration_id: str) -> List[Dict[str, Any]]:
        return [
            {'api_id': api_id, 'integration_id': integration_id, 'model': item}
            for item in self.items(client.get_integration_responses, ApiId=api_id, IntegrationId=integration_id)
        ]


@register_finder('api-gateway-route-response')
class RouteResponseFinder(ApiGatewayFinder):
    """Query route responses."""

    resource_class = RouteResponseResource

    api_id: Optional[str] = None
    route_id: Optional[str] = None
    id: Optional[str] = None

    def find_aws(self, client, filters: Dict[str, Any]) -> List[Dict[str, Any]]:
        apis = [filters['api-id']] if 'api-id' in filters else self.get_apis(client)

        responses = []
        for api_id in apis:
            if 'route-id' in filters:
                routes = [filters['route-id']]
            else:
                routes = self._get_routes(client, api_id)

            for route_id in routes:
                responses.extend(self._get_responses(client, api_id, route_id))

        if 'id' in filters:
            responses = [item for item in responses if item['model'].get('RouteResponseId') == filters['id']]

        return responses

    def find_all_aws(self, client) -> List[Dict[str, Any]]:
        responses = []
        for api_id in self.get_apis(client):
            for route_id in self._get_routes(client, api_id):
                responses.extend(self._get_responses(client, api_id, route_id))
        return responses

    def new_resource(self, model: Dict[str, Any]) -> Any:
        resource = self.resource_class()
        resource.bind(state=self._state, credentials=self._credentials)
        resource.api = resource.find_by_id(ApiResource, model['api_id'])
        resource.route = resource.find_by_id(RouteResource, model['route_id'])
        resource.copy_from(model['model'])
        return resource

    def _get_routes(self, client, api_id: str) -> List[str]:
        return [item['RouteId'] for item in self.items(client.get_routes, ApiId=api_id)]

    def _get_responses(self, client, api_id: str, route_id: str) -> List[Dict[str, Any]]:
        return [
            {'api_id': api_id, 'route_id': route_id, 'model': item}
            for item in self.items(client.get_route_responses, ApiId=api_id, RouteId=route_id)
        ]
