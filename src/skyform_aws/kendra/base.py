"""Shared behaviour of Kendra resources."""

from typing import Any, Dict, Optional

from botocore.exceptions import ClientError

from ..core.resource import AwsResource
from ..utils.errors import is_not_found
from ..utils.logging import get_logger

logger = get_logger(__name__)

SERVICE = 'kendra'
NOT_FOUND = 'ResourceNotFoundException'

ACTIVE = 'ACTIVE'


class KendraResource(AwsResource):
    """Base class for resources managed through the kendra client.

    Kendra ARNs are not returned by the API; they are derived from the
    region, the account of the resource's role and the resource ids.
    """

    def client(self):
        return self.create_client(SERVICE)

    def kendra_arn(self, role_arn: Optional[str], path: str) -> Optional[str]:
        if not role_arn:
            return None
        account = role_arn.split(':')[4]
        return f"arn:aws:kendra:{self.region}:{account}:{path}"

    def load_tags(self, client, arn: Optional[str]) -> Dict[str, str]:
        if not arn:
            return {}
        response = client.list_tags_for_resource(ResourceARN=arn)
        return self.tags_from_list(response.get('Tags'))

    def replace_tags(self, client, arn: str, current_tags: Optional[Dict[str, str]], tags: Optional[Dict[str, str]]) -> None:
        """Swap every tag on ``arn`` for ``tags``."""
        if current_tags:
            client.untag_resource(ResourceARN=arn, TagKeys=list(current_tags))
        logger.debug(f"Tagging {arn}")
        client.tag_resource(ResourceARN=arn, Tags=self.tags_to_list(tags))

    @staticmethod
    def describe(call, **kwargs: Any) -> Optional[Dict[str, Any]]:
        """Response of a describe call, or None once the entity is gone."""
        try:
            return call(**kwargs)
        except ClientError as e:
            if is_not_found(e, NOT_FOUND):
                return None
            raise
