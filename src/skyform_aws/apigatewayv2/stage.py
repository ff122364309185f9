"""API Gateway v2 stages."""

from typing import Any, Dict, List, Optional, Set

from ..core.diffable import Diffable, FieldError, compact
from ..core.fields import attr
from ..core.registry import register
from ..utils.logging import get_logger
from .api import ApiResource, locate_api
from .base import ApiGatewayResource
from .deployment import DeploymentResource

logger = get_logger(__name__)


class ApiAccessLogSettings(Diffable):
    """Where and how a stage writes access logs."""

    destination_arn: Optional[str] = attr(updatable=True)
    format: Optional[str] = attr(updatable=True)

    def copy_from(self, model: Dict[str, Any]) -> None:
        self.destination_arn = model.get('DestinationArn')
        self.format = model.get('Format')

    def to_access_log_settings(self) -> Dict[str, Any]:
        return compact(DestinationArn=self.destination_arn, Format=self.format)


class ApiRouteSettings(Diffable):
    """Logging and throttling for a route, or the stage default when ``key`` is unset."""

    key: Optional[str] = attr()
    data_trace_enabled: Optional[bool] = attr(updatable=True)
    detailed_metrics_enabled: Optional[bool] = attr(updatable=True)
    logging_level: Optional[str] = attr(updatable=True, valid_strings=['ERROR', 'INFO', 'OFF'])
    throttling_burst_limit: Optional[int] = attr(updatable=True)
    throttling_rate_limit: Optional[float] = attr(updatable=True)

    def primary_key(self) -> str:
        return self.key or ''

    def copy_from(self, model: Dict[str, Any]) -> None:
        self.data_trace_enabled = model.get('DataTraceEnabled')
        self.detailed_metrics_enabled = model.get('DetailedMetricsEnabled')
        self.logging_level = model.get('LoggingLevel')
        self.throttling_burst_limit = model.get('ThrottlingBurstLimit')
        self.throttling_rate_limit = model.get('ThrottlingRateLimit')

    def validate_config(self, configured_fields: Set[str]) -> List[FieldError]:
        settings = {
            'data_trace_enabled', 'detailed_metrics_enabled', 'logging_level',
            'throttling_burst_limit', 'throttling_rate_limit',
        }
        if not configured_fields & settings:
            return [self.error(None, "At least one of 'data-trace-enabled', 'detailed-metrics-enabled', "
                                     "'logging-level', 'throttling-burst-limit' or 'throttling-rate-limit' "
                                     "has to be set.")]
        return []

    def to_route_settings(self) -> Dict[str, Any]:
        return compact(
            DataTraceEnabled=self.data_trace_enabled,
            DetailedMetricsEnabled=self.detailed_metrics_enabled,
            LoggingLevel=self.logging_level,
            ThrottlingBurstLimit=self.throttling_burst_limit,
            ThrottlingRateLimit=self.throttling_rate_limit,
        )


@register('api-gateway-stage')
class StageResource(ApiGatewayResource):
    """A deployment stage of an API.

    Example:
        aws::api-gateway-stage example-stage:
          name: example-stage
          api: $(aws::api-gateway example-api)
          auto-deploy: true
          route-settings:
            - key: $default
              logging-level: INFO
    """

    name: Optional[str] = attr(required=True, id=True)
    access_log_settings: Optional[ApiAccessLogSettings] = attr(updatable=True)
    api: Optional[ApiResource] = attr(required=True)
    auto_deploy: Optional[bool] = attr(updatable=True)
    client_certificate_id: Optional[str] = attr(updatable=True)
    default_route_settings: Optional[ApiRouteSettings] = attr(updatable=True)
    deployment: Optional[DeploymentResource] = attr(updatable=True)
    description: Optional[str] = attr(updatable=True)
    route_settings: List[ApiRouteSettings] = attr(default_factory=list, updatable=True)
    stage_variables: Dict[str, str] = attr(default_factory=dict, updatable=True)
    tags: Dict[str, str] = attr(default_factory=dict, updatable=True)

    # Outputs
    arn: Optional[str] = attr(output=True)

    def copy_from(self, model: Dict[str, Any]) -> None:
        self.name = model.get('StageName')
        self.auto_deploy = model.get('AutoDeploy')
        self.client_certificate_id = model.get('ClientCertificateId')
        self.deployment = self.find_by_id(DeploymentResource, model.get('DeploymentId'))
        self.description = model.get('Description')

        self.access_log_settings = None
        if model.get('AccessLogSettings'):
            settings = self.new_subresource(ApiAccessLogSettings)
            settings.copy_from(model['AccessLogSettings'])
            self.access_log_settings = settings

        self.default_route_settings = None
        if model.get('DefaultRouteSettings'):
            settings = self.new_subresource(ApiRouteSettings)
            settings.copy_from(model['DefaultRouteSettings'])
            self.default_route_settings = settings

        route_settings = []
        for key, value in (model.get('RouteSettings') or {}).items():
            settings = self.new_subresource(ApiRouteSettings, key=key)
            settings.copy_from(value)
            route_settings.append(settings)
        self.route_settings = route_settings

        self.stage_variables = dict(model.get('StageVariables', {}))
        self.tags = dict(model.get('Tags', {}))

        locate_api(self, lambda client, api_id: self._get_stage(client, api_id) is not None)
        self.arn = self.arn_format()

    def refresh(self) -> bool:
        stage = self._get_stage(self.client(), self.api.id)
        if stage is None:
            return False

        self.copy_from(stage)
        return True

    def create(self, ui, state) -> None:
        self.client().create_stage(**self._stage_request(), Tags=self.tags or {})
        self.arn = self.arn_format()
        logger.info(f"Created stage {self.name} on API {self.api.id}")

    def update(self, ui, state, current, changed_fields: Set[str]) -> None:
        client = self.client()
        client.update_stage(**self._stage_request())

        if 'tags' in changed_fields:
            self.replace_tags(client, self.arn, current.tags, self.tags)

    def delete(self, ui, state) -> None:
        self.client().delete_stage(ApiId=self.api.id, StageName=self.name)

    def arn_format(self) -> Optional[str]:
        if self.api is None or self.api.id is None:
            return None
        return self.gateway_arn(f"apis/{self.api.id}/stages/{self.name}")

    def _stage_request(self) -> Dict[str, Any]:
        return compact(
            ApiId=self.api.id,
            StageName=self.name,
            AccessLogSettings=(
                self.access_log_settings.to_access_log_settings() if self.access_log_settings else None
            ),
            AutoDeploy=self.auto_deploy,
            ClientCertificateId=self.client_certificate_id,
            DefaultRouteSettings=(
                self.default_route_settings.to_route_settings() if self.default_route_settings else None
            ),
            DeploymentId=self.deployment.id if self.deployment else None,
            Description=self.description,
            RouteSettings={
                settings.key: settings.to_route_settings() for settings in self.route_settings
            } or None,
            StageVariables=self.stage_variables or None,
        )

    def _get_stage(self, client, api_id: str) -> Optional[Dict[str, Any]]:
        return self.find_item(client.get_stages, 'StageName', self.name, ApiId=api_id)
