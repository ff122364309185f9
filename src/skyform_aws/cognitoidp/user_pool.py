"""Cognito user pools."""

from typing import Any, Dict, Optional, Set

from botocore.exceptions import ClientError

from ..core.diffable import compact
from ..core.fields import attr
from ..core.registry import register
from ..utils.errors import is_not_found
from ..utils.logging import get_logger
from .base import NOT_FOUND, CognitoResource

logger = get_logger(__name__)


@register('cognito-user-pool')
class UserPoolResource(CognitoResource):
    """A Cognito user directory.

    Example:
        aws::cognito-user-pool example-pool:
          name: example-pool
          tags:
            Name: example-pool
    """

    name: Optional[str] = attr(required=True)
    tags: Dict[str, str] = attr(default_factory=dict, updatable=True)

    # Outputs
    arn: Optional[str] = attr(output=True)
    id: Optional[str] = attr(output=True, id=True)

    def copy_from(self, model: Dict[str, Any]) -> None:
        self.arn = model.get('Arn')
        self.id = model.get('Id')
        self.name = model.get('Name')
        self.tags = dict(model.get('UserPoolTags') or {})

    def refresh(self) -> bool:
        try:
            response = self.client().describe_user_pool(UserPoolId=self.id)
        except ClientError as e:
            if is_not_found(e, NOT_FOUND):
                return False
            raise

        self.copy_from(response['UserPool'])
        return True

    def create(self, ui, state) -> None:
        response = self.client().create_user_pool(**compact(
            PoolName=self.name,
            UserPoolTags=self.tags or None,
        ))

        self.arn = response['UserPool']['Arn']
        self.id = response['UserPool']['Id']
        logger.info(f"Created user pool {self.name} ({self.id})")

    def update(self, ui, state, current, changed_fields: Set[str]) -> None:
        if 'tags' not in changed_fields:
            return

        client = self.client()
        additions, removals = self.tag_diff(current.tags, self.tags)
        if additions:
            client.tag_resource(ResourceArn=self.arn, Tags=additions)
        if removals:
            client.untag_resource(ResourceArn=self.arn, TagKeys=removals)

    def delete(self, ui, state) -> None:
        self.client().delete_user_pool(UserPoolId=self.id)
