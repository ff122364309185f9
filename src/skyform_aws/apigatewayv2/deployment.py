"""API Gateway v2 deployments."""

from typing import Any, Dict, Optional, Set

from ..core.diffable import compact
from ..core.fields import attr
from ..core.registry import register
from ..utils.logging import get_logger
from .api import ApiResource, locate_api
from .base import ApiGatewayResource

logger = get_logger(__name__)


@register('api-gateway-deployment')
class DeploymentResource(ApiGatewayResource):
    """A snapshot of an API's routes that a stage can serve.

    Example:
        aws::api-gateway-deployment example-deployment:
          api: $(aws::api-gateway example-api)
          description: example-desc
    """

    api: Optional[ApiResource] = attr(required=True)
    description: Optional[str] = attr(updatable=True)

    # Outputs
    id: Optional[str] = attr(output=True, id=True)
    status: Optional[str] = attr(output=True)

    def copy_from(self, model: Dict[str, Any]) -> None:
        self.description = model.get('Description')
        self.id = model.get('DeploymentId')
        self.status = model.get('DeploymentStatus')

        locate_api(self, lambda client, api_id: self._get_deployment(client, api_id) is not None)

    def refresh(self) -> bool:
        deployment = self._get_deployment(self.client(), self.api.id)
        if deployment is None:
            return False

        self.copy_from(deployment)
        return True

    def create(self, ui, state) -> None:
        response = self.client().create_deployment(**compact(
            ApiId=self.api.id,
            Description=self.description,
        ))

        self.id = response['DeploymentId']
        self.status = response.get('DeploymentStatus')
        logger.info(f"Created deployment {self.id} on API {self.api.id}")

    def update(self, ui, state, current, changed_fields: Set[str]) -> None:
        self.client().update_deployment(**compact(
            ApiId=self.api.id,
            DeploymentId=self.id,
            Description=self.description,
        ))

    def delete(self, ui, state) -> None:
        self.client().delete_deployment(ApiId=self.api.id, DeploymentId=self.id)

    def _get_deployment(self, client, api_id: str) -> Optional[Dict[str, Any]]:
        return self.find_item(client.get_deployments, 'DeploymentId', self.id, ApiId=api_id)
