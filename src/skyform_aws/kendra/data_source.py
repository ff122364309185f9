"""Kendra data sources."""

from typing import Any, Dict, Optional, Set

from botocore.exceptions import ClientError

from ..core.diffable import compact
from ..core.fields import attr
from ..core.registry import register
from ..utils.errors import is_not_found
from ..utils.logging import get_logger
from ..utils.retry import Wait
from .base import ACTIVE, NOT_FOUND, KendraResource
from .data_source_configuration import KendraDataSourceConfiguration
from .index import KendraIndexResource

logger = get_logger(__name__)

SYNCING_STATUSES = {'SYNCING', 'SYNCING_INDEXING'}


@register('kendra-data-source')
class KendraDataSourceResource(KendraResource):
    """A connector that feeds documents into an index.

    Creating and updating wait until the data source is active and no sync
    job is running.

    Example:
        aws::kendra-data-source example-data-source:
          name: example-data-source
          index: $(aws::kendra-index example-index)
          role-arn: arn:aws:iam::123456789012:role/kendra-data-source
          type: S3
          schedule: cron(0 12 * * ? *)
          configuration:
            s3-configuration:
              bucket: example-documents
    """

    name: Optional[str] = attr(required=True, updatable=True)
    description: Optional[str] = attr(updatable=True)
    index: Optional[KendraIndexResource] = attr(required=True)
    role_arn: Optional[str] = attr(required=True, updatable=True)
    schedule: Optional[str] = attr(updatable=True)
    type: Optional[str] = attr(
        required=True, valid_strings=['S3', 'SHAREPOINT', 'DATABASE', 'SALESFORCE', 'ONEDRIVE', 'SERVICENOW'])
    configuration: Optional[KendraDataSourceConfiguration] = attr(required=True, updatable=True)
    tags: Dict[str, str] = attr(default_factory=dict, updatable=True)

    # Outputs
    id: Optional[str] = attr(output=True, id=True)
    status: Optional[str] = attr(output=True)

    def copy_from(self, model: Dict[str, Any]) -> None:
        self.id = model.get('Id')
        self.index = self.find_by_id(KendraIndexResource, model.get('IndexId'))
        self.name = model.get('Name')
        self.role_arn = model.get('RoleArn')
        self.description = model.get('Description')
        self.schedule = model.get('Schedule')
        self.type = model.get('Type')
        self.status = model.get('Status')

        config = self.new_subresource(KendraDataSourceConfiguration)
        config.copy_from(model.get('Configuration') or {})
        self.configuration = config

        self.tags = self.load_tags(self.client(), self.arn_format())

    def refresh(self) -> bool:
        data_source = self._get_data_source(self.client())
        if data_source is None:
            return False

        self.copy_from(data_source)
        return True

    def create(self, ui, state) -> None:
        client = self.client()

        response = client.create_data_source(**compact(
            Configuration=self.configuration.to_data_source_configuration(),
            Description=self.description,
            IndexId=self.index.id,
            Name=self.name,
            RoleArn=self.role_arn,
            Schedule=self.schedule,
            Type=self.type,
            Tags=self.tags_to_list(self.tags) or None,
        ))

        self.id = response['Id']
        logger.info(f"Created Kendra data source {self.name} ({self.id})")
        state.save()

        self._wait_until_idle(client, 'create')

    def update(self, ui, state, current, changed_fields: Set[str]) -> None:
        client = self.client()

        request = compact(
            Id=self.id,
            IndexId=self.index.id,
            Name=self.name,
            Description=self.description,
            RoleArn=self.role_arn,
            Schedule=self.schedule,
            Configuration=self.configuration.to_data_source_configuration(),
        )
        self.execute_service(lambda: client.update_data_source(**request))

        self._wait_until_idle(client, 'update')

        if 'tags' in changed_fields:
            self.replace_tags(client, self.arn_format(), current.tags, self.tags)

    def delete(self, ui, state) -> None:
        client = self.client()
        client.delete_data_source(Id=self.id, IndexId=self.index.id)

        Wait.at_most(600).check_every(60).resource_overrides(self, 'delete').until(
            lambda: self._get_data_source(client) is None
        )

    def arn_format(self) -> Optional[str]:
        if not self.id or self.index is None:
            return None
        return self.kendra_arn(self.role_arn, f"index/{self.index.id}/data-source/{self.id}")

    def _wait_until_idle(self, client, action: str) -> bool:
        def idle() -> bool:
            data_source = self._get_data_source(client)
            self.status = data_source.get('Status') if data_source else None
            return self.status == ACTIVE and not self._is_syncing(client)

        return Wait.at_most(600).check_every(60).resource_overrides(self, action).until(idle)

    def _is_syncing(self, client) -> bool:
        try:
            response = client.list_data_source_sync_jobs(Id=self.id, IndexId=self.index.id)
        except ClientError as e:
            if is_not_found(e, NOT_FOUND):
                return False
            raise

        return any(job.get('Status') in SYNCING_STATUSES for job in response.get('History') or [])

    def _get_data_source(self, client) -> Optional[Dict[str, Any]]:
        return self.describe(client.describe_data_source, Id=self.id, IndexId=self.index.id)
