"""Kendra FAQs."""

from typing import Any, Dict, Optional, Set

from ..core.diffable import compact
from ..core.fields import attr
from ..core.registry import register
from ..utils.logging import get_logger
from ..utils.retry import Wait
from .base import ACTIVE, KendraResource
from .data_source_configuration import KendraS3Path
from .index import KendraIndexResource

logger = get_logger(__name__)


@register('kendra-faq')
class KendraFaqResource(KendraResource):
    """Question and answer pairs loaded into an index from a file in S3.

    Only the tags of an FAQ can change; any other change replaces it.

    Example:
        aws::kendra-faq example-faq:
          name: example-faq
          index: $(aws::kendra-index example-index)
          role-arn: arn:aws:iam::123456789012:role/kendra-faq
          file-format: CSV
          s3-path:
            bucket: example-bucket
            key: faq.csv
    """

    description: Optional[str] = attr()
    index: Optional[KendraIndexResource] = attr(required=True)
    name: Optional[str] = attr(required=True)
    role_arn: Optional[str] = attr(required=True)
    s3_path: Optional[KendraS3Path] = attr(required=True)
    file_format: Optional[str] = attr(valid_strings=['CSV', 'CSV_WITH_HEADER', 'JSON'])
    tags: Dict[str, str] = attr(default_factory=dict, updatable=True)

    # Outputs
    id: Optional[str] = attr(output=True, id=True)
    status: Optional[str] = attr(output=True)

    def copy_from(self, model: Dict[str, Any]) -> None:
        self.id = model.get('Id')
        self.description = model.get('Description')
        self.index = self.find_by_id(KendraIndexResource, model.get('IndexId'))
        self.name = model.get('Name')
        self.role_arn = model.get('RoleArn')
        self.file_format = model.get('FileFormat')
        self.status = model.get('Status')

        self.s3_path = None
        if model.get('S3Path'):
            path = self.new_subresource(KendraS3Path)
            path.copy_from(model['S3Path'])
            self.s3_path = path

        self.tags = self.load_tags(self.client(), self.arn_format())

    def refresh(self) -> bool:
        faq = self._get_faq(self.client())
        if faq is None:
            return False

        self.copy_from(faq)
        return True

    def create(self, ui, state) -> None:
        client = self.client()

        response = client.create_faq(**compact(
            Description=self.description,
            FileFormat=self.file_format,
            IndexId=self.index.id,
            Name=self.name,
            RoleArn=self.role_arn,
            S3Path=self.s3_path.to_s3_path(),
            Tags=self.tags_to_list(self.tags) or None,
        ))

        self.id = response['Id']
        logger.info(f"Created Kendra FAQ {self.name} ({self.id})")

        def active() -> bool:
            faq = self._get_faq(client)
            self.status = faq.get('Status') if faq else None
            return self.status == ACTIVE

        Wait.at_most(300).check_every(60).resource_overrides(self, 'create').until(active)

    def update(self, ui, state, current, changed_fields: Set[str]) -> None:
        if 'tags' in changed_fields:
            self.replace_tags(self.client(), self.arn_format(), current.tags, self.tags)

    def delete(self, ui, state) -> None:
        client = self.client()
        client.delete_faq(Id=self.id, IndexId=self.index.id)

        Wait.at_most(300).check_every(60).resource_overrides(self, 'delete').until(
            lambda: self._get_faq(client) is None
        )

    def arn_format(self) -> Optional[str]:
        if not self.id or self.index is None:
            return None
        return self.kendra_arn(self.role_arn, f"index/{self.index.id}/faq/{self.id}")

    def _get_faq(self, client) -> Optional[Dict[str, Any]]:
        return self.describe(client.describe_faq, Id=self.id, IndexId=self.index.id)
