"""API Gateway v2 API mappings."""

from typing import Any, Dict, Optional, Set

from ..core.diffable import compact
from ..core.fields import attr
from ..core.registry import register
from .api import ApiResource
from .base import ApiGatewayResource
from .domain_name import DomainNameResource
from .stage import StageResource


@register('api-gateway-api-mapping')
class ApiMappingResource(ApiGatewayResource):
    """Maps an API stage onto a path of a custom domain name.

    Example:
        aws::api-gateway-api-mapping example-mapping:
          api: $(aws::api-gateway example-api)
          domain-name: $(aws::api-gateway-domain-name example-domain)
          stage: $(aws::api-gateway-stage example-stage)
          api-mapping-key: v1
    """

    api: Optional[ApiResource] = attr(required=True, updatable=True)
    api_mapping_key: Optional[str] = attr(updatable=True)
    domain_name: Optional[DomainNameResource] = attr(required=True)
    stage: Optional[StageResource] = attr(required=True, updatable=True)

    # Outputs
    id: Optional[str] = attr(output=True, id=True)

    def copy_from(self, model: Dict[str, Any]) -> None:
        self.api = self.find_by_id(ApiResource, model.get('ApiId'))
        self.api_mapping_key = model.get('ApiMappingKey')
        self.id = model.get('ApiMappingId')

        if self.domain_name is None:
            self.domain_name = self._locate_domain_name()

        self.stage = None
        if model.get('Stage'):
            api_id = model.get('ApiId')
            stage = self.find_by_id(
                StageResource, model['Stage'],
                match=lambda tracked: tracked.api is not None and tracked.api.id == api_id,
            )
            if stage.api is None:
                stage.api = self.api
            self.stage = stage

    def refresh(self) -> bool:
        mapping = self._get_api_mapping(self.client(), self.domain_name.name)
        if mapping is None:
            return False

        self.copy_from(mapping)
        return True

    def create(self, ui, state) -> None:
        response = self.client().create_api_mapping(**self._api_mapping_request())
        self.id = response['ApiMappingId']

    def update(self, ui, state, current, changed_fields: Set[str]) -> None:
        self.client().update_api_mapping(ApiMappingId=self.id, **self._api_mapping_request())

    def delete(self, ui, state) -> None:
        self.client().delete_api_mapping(ApiMappingId=self.id, DomainName=self.domain_name.name)

    def _api_mapping_request(self) -> Dict[str, Any]:
        return compact(
            ApiId=self.api.id,
            ApiMappingKey=self.api_mapping_key,
            DomainName=self.domain_name.name,
            Stage=self.stage.name,
        )

    def _get_api_mapping(self, client, domain_name: str) -> Optional[Dict[str, Any]]:
        return self.find_item(client.get_api_mappings, 'ApiMappingId', self.id, DomainName=domain_name)

    def _locate_domain_name(self) -> Optional[DomainNameResource]:
        client = self.client()
        for domain in self.items(client.get_domain_names):
            if self._get_api_mapping(client, domain['DomainName']) is not None:
                return self.find_by_id(DomainNameResource, domain['DomainName'])
        return None
