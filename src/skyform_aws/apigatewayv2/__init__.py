"""API Gateway v2 resources and finders."""

from .api import ApiCors, ApiResource
from .api_mapping import ApiMappingResource
from .authorizer import ApiJwtConfiguration, AuthorizerResource
from .deployment import DeploymentResource
from .domain_name import ApiDomainNameConfiguration, ApiMutualTlsAuthentication, DomainNameResource
from .finders import ApiFinder, ApiGatewayFinder, ApiMappingFinder, IntegrationResponseFinder, RouteResponseFinder
from .integration import ApiTlsConfig, IntegrationResource
from .integration_response import IntegrationResponseResource
from .model import ModelResource
from .route import RouteResource
from .route_response import RouteResponseResource
from .stage import ApiAccessLogSettings, ApiRouteSettings, StageResource
from .vpc_link import VpcLinkResource

__all__ = [
    'ApiAccessLogSettings',
    'ApiCors',
    'ApiDomainNameConfiguration',
    'ApiFinder',
    'ApiGatewayFinder',
    'ApiJwtConfiguration',
    'ApiMappingFinder',
    'ApiMappingResource',
    'ApiMutualTlsAuthentication',
    'ApiResource',
    'ApiRouteSettings',
    'ApiTlsConfig',
    'AuthorizerResource',
    'DeploymentResource',
    'DomainNameResource',
    'IntegrationResource',
    'IntegrationResponseFinder',
    'IntegrationResponseResource',
    'ModelResource',
    'RouteResource',
    'RouteResponseFinder',
    'RouteResponseResource',
    'StageResource',
    'VpcLinkResource',
]
