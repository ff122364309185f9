"""Cognito hosted UI domains."""

from typing import Any, Dict, Optional, Set

from botocore.exceptions import ClientError

from ..core.fields import attr
from ..core.registry import register
from ..utils.errors import is_not_found
from .base import NOT_FOUND, CognitoResource
from .user_pool import UserPoolResource


@register('cognito-user-pool-domain')
class UserPoolDomainResource(CognitoResource):
    """A prefix or custom domain serving a user pool's hosted UI.

    Example:
        aws::cognito-user-pool-domain example-domain:
          domain: example-domain
          user-pool: $(aws::cognito-user-pool example-pool)
    """

    certificate_arn: Optional[str] = attr(updatable=True)
    domain: Optional[str] = attr(required=True, id=True)
    user_pool: Optional[UserPoolResource] = attr(required=True)

    def copy_from(self, model: Dict[str, Any]) -> None:
        self.certificate_arn = (model.get('CustomDomainConfig') or {}).get('CertificateArn')
        self.domain = model.get('Domain')
        self.user_pool = self.find_by_id(UserPoolResource, model.get('UserPoolId'))

    def refresh(self) -> bool:
        try:
            response = self.client().describe_user_pool_domain(Domain=self.domain)
        except ClientError as e:
            if is_not_found(e, NOT_FOUND):
                return False
            raise

        # Unknown domains come back as an empty description
        description = response.get('DomainDescription') or {}
        if not description.get('Domain'):
            return False

        self.copy_from(description)
        return True

    def create(self, ui, state) -> None:
        request = {'Domain': self.domain, 'UserPoolId': self.user_pool.id}
        if self.certificate_arn is not None:
            request['CustomDomainConfig'] = {'CertificateArn': self.certificate_arn}

        self.client().create_user_pool_domain(**request)

    def update(self, ui, state, current, changed_fields: Set[str]) -> None:
        self.client().update_user_pool_domain(
            Domain=self.domain,
            UserPoolId=self.user_pool.id,
            CustomDomainConfig={'CertificateArn': self.certificate_arn},
        )

    def delete(self, ui, state) -> None:
        self.client().delete_user_pool_domain(Domain=self.domain, UserPoolId=self.user_pool.id)
