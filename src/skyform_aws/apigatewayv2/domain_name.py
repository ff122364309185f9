"""API Gateway v2 custom domain names."""

from typing import Any, Dict, List, Optional, Set

from ..core.diffable import Diffable, compact
from ..core.fields import attr
from ..core.registry import register
from ..utils.logging import get_logger
from .base import ApiGatewayResource

logger = get_logger(__name__)


class ApiDomainNameConfiguration(Diffable):
    """Certificate and endpoint settings of a custom domain name."""

    certificate_arn: Optional[str] = attr(updatable=True)
    certificate_name: Optional[str] = attr(updatable=True)
    endpoint_type: Optional[str] = attr(updatable=True, valid_strings=['REGIONAL', 'EDGE'])
    security_policy: Optional[str] = attr(updatable=True, valid_strings=['TLS_1_0', 'TLS_1_2'])
    ownership_verification_certificate_arn: Optional[str] = attr(updatable=True)

    # Outputs
    api_gateway_domain_name: Optional[str] = attr(output=True)
    hosted_zone_id: Optional[str] = attr(output=True)
    domain_name_status: Optional[str] = attr(output=True)

    def primary_key(self) -> str:
        return self.certificate_arn or ''

    def copy_from(self, model: Dict[str, Any]) -> None:
        self.certificate_arn = model.get('CertificateArn')
        self.certificate_name = model.get('CertificateName')
        self.endpoint_type = model.get('EndpointType')
        self.security_policy = model.get('SecurityPolicy')
        self.ownership_verification_certificate_arn = model.get('OwnershipVerificationCertificateArn')
        self.api_gateway_domain_name = model.get('ApiGatewayDomainName')
        self.hosted_zone_id = model.get('HostedZoneId')
        self.domain_name_status = model.get('DomainNameStatus')

    def to_domain_name_configuration(self) -> Dict[str, Any]:
        return compact(
            CertificateArn=self.certificate_arn,
            CertificateName=self.certificate_name,
            EndpointType=self.endpoint_type,
            SecurityPolicy=self.security_policy,
            OwnershipVerificationCertificateArn=self.ownership_verification_certificate_arn,
        )


class ApiMutualTlsAuthentication(Diffable):
    """Truststore used to authenticate clients with mutual TLS."""

    truststore_uri: Optional[str] = attr(updatable=True)
    truststore_version: Optional[str] = attr(updatable=True)

    def copy_from(self, model: Dict[str, Any]) -> None:
        self.truststore_uri = model.get('TruststoreUri')
        self.truststore_version = model.get('TruststoreVersion')

    def to_mutual_tls_authentication_input(self) -> Dict[str, Any]:
        return compact(TruststoreUri=self.truststore_uri, TruststoreVersion=self.truststore_version)


@register('api-gateway-domain-name')
class DomainNameResource(ApiGatewayResource):
    """A custom domain name APIs can be mapped onto.

    Example:
        aws::api-gateway-domain-name example-domain:
          name: api.example.com
          domain-name-configurations:
            - certificate-arn: arn:aws:acm:us-east-1:123456789012:certificate/abc
              endpoint-type: REGIONAL
              security-policy: TLS_1_2
    """

    name: Optional[str] = attr(required=True, id=True)
    domain_name_configurations: List[ApiDomainNameConfiguration] = attr(default_factory=list, updatable=True)
    mutual_tls_authentication: Optional[ApiMutualTlsAuthentication] = attr(updatable=True)
    tags: Dict[str, str] = attr(default_factory=dict, updatable=True)

    # Outputs
    arn: Optional[str] = attr(output=True)

    def copy_from(self, model: Dict[str, Any]) -> None:
        self.name = model.get('DomainName')
        self.tags = dict(model.get('Tags', {}))

        configurations = []
        for item in model.get('DomainNameConfigurations') or []:
            configuration = self.new_subresource(ApiDomainNameConfiguration)
            configuration.copy_from(item)
            configurations.append(configuration)
        self.domain_name_configurations = configurations

        self.mutual_tls_authentication = None
        if model.get('MutualTlsAuthentication'):
            authentication = self.new_subresource(ApiMutualTlsAuthentication)
            authentication.copy_from(model['MutualTlsAuthentication'])
            self.mutual_tls_authentication = authentication

        self.arn = self.arn_format()

    def refresh(self) -> bool:
        domain_name = self.find_item(self.client().get_domain_names, 'DomainName', self.name)
        if domain_name is None:
            return False

        self.copy_from(domain_name)
        return True

    def create(self, ui, state) -> None:
        response = self.client().create_domain_name(**self._domain_name_request(), Tags=self.tags or {})
        self.copy_from(response)
        logger.info(f"Created domain name {self.name}")

    def update(self, ui, state, current, changed_fields: Set[str]) -> None:
        client = self.client()
        client.update_domain_name(**self._domain_name_request())

        if 'tags' in changed_fields:
            self.replace_tags(client, self.arn, current.tags, self.tags)

    def delete(self, ui, state) -> None:
        self.client().delete_domain_name(DomainName=self.name)

    def arn_format(self) -> Optional[str]:
        return self.gateway_arn(f"domainnames/{self.name}") if self.name else None

    def _domain_name_request(self) -> Dict[str, Any]:
        return compact(
            DomainName=self.name,
            DomainNameConfigurations=[
                configuration.to_domain_name_configuration()
                for configuration in self.domain_name_configurations
            ] or None,
            MutualTlsAuthentication=(
                self.mutual_tls_authentication.to_mutual_tls_authentication_input()
                if self.mutual_tls_authentication else None
            ),
        )
