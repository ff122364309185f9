"""Kendra indexes."""

from typing import Any, Dict, Optional, Set

from ..core.diffable import Diffable, compact
from ..core.fields import attr
from ..core.registry import register
from ..utils.logging import get_logger
from ..utils.retry import Wait
from .base import ACTIVE, KendraResource

logger = get_logger(__name__)


class KendraServerSideEncryptionConfiguration(Diffable):
    kms_key_id: Optional[str] = attr()

    def copy_from(self, model: Dict[str, Any]) -> None:
        self.kms_key_id = model.get('KmsKeyId')

    def to_server_side_encryption_configuration(self) -> Dict[str, Any]:
        return compact(KmsKeyId=self.kms_key_id)


class KendraCapacityUnitsConfiguration(Diffable):
    """Extra query and storage capacity of an enterprise index."""

    query_capacity_units: Optional[int] = attr(required=True, updatable=True)
    storage_capacity_units: Optional[int] = attr(required=True, updatable=True)

    def copy_from(self, model: Dict[str, Any]) -> None:
        self.query_capacity_units = model.get('QueryCapacityUnits')
        self.storage_capacity_units = model.get('StorageCapacityUnits')

    def to_capacity_units_configuration(self) -> Dict[str, Any]:
        return {
            'QueryCapacityUnits': self.query_capacity_units,
            'StorageCapacityUnits': self.storage_capacity_units,
        }


@register('kendra-index')
class KendraIndexResource(KendraResource):
    """A Kendra search index.

    Indexes take a long time to become active. Creation waits up to 30
    minutes, then applies any capacity units and waits again.

    Example:
        aws::kendra-index example-index:
          name: example-index
          edition: DEVELOPER_EDITION
          role-arn: arn:aws:iam::123456789012:role/kendra-index
          description: Example index
          tags:
            Name: example-index
    """

    description: Optional[str] = attr(updatable=True)
    edition: Optional[str] = attr(required=True, valid_strings=['DEVELOPER_EDITION', 'ENTERPRISE_EDITION'])
    name: Optional[str] = attr(required=True, updatable=True)
    role_arn: Optional[str] = attr(required=True, updatable=True)
    server_side_encryption_configuration: Optional[KendraServerSideEncryptionConfiguration] = attr()
    capacity_units_configuration: Optional[KendraCapacityUnitsConfiguration] = attr(updatable=True)
    tags: Dict[str, str] = attr(default_factory=dict, updatable=True)

    # Outputs
    id: Optional[str] = attr(output=True, id=True)
    arn: Optional[str] = attr(output=True)
    status: Optional[str] = attr(output=True)

    def copy_from(self, model: Dict[str, Any]) -> None:
        self.id = model.get('Id')
        self.name = model.get('Name')
        self.description = model.get('Description')
        self.edition = model.get('Edition')
        self.role_arn = model.get('RoleArn')
        self.status = model.get('Status')
        self.arn = self.arn_format()

        self.server_side_encryption_configuration = None
        if model.get('ServerSideEncryptionConfiguration'):
            config = self.new_subresource(KendraServerSideEncryptionConfiguration)
            config.copy_from(model['ServerSideEncryptionConfiguration'])
            self.server_side_encryption_configuration = config

        self.capacity_units_configuration = None
        if model.get('CapacityUnits'):
            config = self.new_subresource(KendraCapacityUnitsConfiguration)
            config.copy_from(model['CapacityUnits'])
            self.capacity_units_configuration = config

        self.tags = self.load_tags(self.client(), self.arn)

    def refresh(self) -> bool:
        index = self._get_index(self.client())
        if index is None:
            return False

        self.copy_from(index)
        return True

    def create(self, ui, state) -> None:
        client = self.client()
        encryption = self.server_side_encryption_configuration

        response = client.create_index(**compact(
            Name=self.name,
            Edition=self.edition,
            RoleArn=self.role_arn,
            Description=self.description,
            ServerSideEncryptionConfiguration=(
                encryption.to_server_side_encryption_configuration() if encryption else None
            ),
            Tags=self.tags_to_list(self.tags) or None,
        ))

        self.id = response['Id']
        self.arn = self.arn_format()
        logger.info(f"Created Kendra index {self.name} ({self.id})")

        self._wait_until_active(client, 'create')
        state.save()

        if self.capacity_units_configuration is not None:
            client.update_index(
                Id=self.id,
                CapacityUnits=self.capacity_units_configuration.to_capacity_units_configuration(),
            )
            self._wait_until_active(client, 'create')

    def update(self, ui, state, current, changed_fields: Set[str]) -> None:
        client = self.client()

        request: Dict[str, Any] = {'Id': self.id}
        if 'name' in changed_fields:
            request['Name'] = self.name
        if 'role_arn' in changed_fields:
            request['RoleArn'] = self.role_arn
        if 'description' in changed_fields:
            request['Description'] = self.description
        if 'capacity_units_configuration' in changed_fields and self.capacity_units_configuration is not None:
            request['CapacityUnits'] = self.capacity_units_configuration.to_capacity_units_configuration()

        if len(request) > 1:
            client.update_index(**request)
            self._wait_until_active(client, 'update')

        if 'tags' in changed_fields:
            self.replace_tags(client, self.arn, current.tags, self.tags)

    def delete(self, ui, state) -> None:
        client = self.client()
        client.delete_index(Id=self.id)

        Wait.at_most(1800).check_every(300).resource_overrides(self, 'delete').until(
            lambda: self._get_index(client) is None
        )

    def arn_format(self) -> Optional[str]:
        return self.kendra_arn(self.role_arn, f"index/{self.id}") if self.id else None

    def _wait_until_active(self, client, action: str) -> bool:
        def active() -> bool:
            index = self._get_index(client)
            self.status = index.get('Status') if index else None
            return self.status == ACTIVE

        return Wait.at_most(1800).check_every(300).resource_overrides(self, action).until(active)

    def _get_index(self, client) -> Optional[Dict[str, Any]]:
        return self.describe(client.describe_index, Id=self.id)
