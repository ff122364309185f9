"""Base class for AWS resources."""

from abc import ABC, abstractmethod
from typing import Any, Callable, ClassVar, Dict, List, Optional, Set, Tuple, TypeVar

from botocore.exceptions import ClientError

from ..utils.errors import ProvisioningError
from ..utils.logging import get_logger
from ..utils.retry import RetryStrategy
from .diffable import Diffable, comparable

logger = get_logger(__name__)

T = TypeVar('T')

SERVICE_RETRIES = 10
SERVICE_RETRY_DELAY = 1.0


class AwsResource(Diffable, ABC):
    """A configuration block managed through one AWS service.

    Subclasses implement the lifecycle against the service client:

    - ``copy_from(model)`` loads fields from an API response
    - ``refresh()`` reloads the resource and returns False when it is gone
    - ``create``/``update``/``delete`` make the SDK calls
    """

    is_resource: ClassVar[bool] = True
    type_name: ClassVar[str] = 'aws::resource'

    @abstractmethod
    def copy_from(self, model: Dict[str, Any]) -> None:
        """Load fields from an API response."""

    @abstractmethod
    def refresh(self) -> bool:
        """Reload from AWS.

        Returns:
            False if the resource no longer exists
        """

    @abstractmethod
    def create(self, ui, state) -> None:
        """Create the resource in AWS."""

    @abstractmethod
    def update(self, ui, state, current: 'AwsResource', changed_fields: Set[str]) -> None:
        """Apply ``changed_fields`` to the existing resource."""

    @abstractmethod
    def delete(self, ui, state) -> None:
        """Delete the resource from AWS."""

    @property
    def region(self) -> str:
        return self.credentials().region

    def create_client(self, service_name: str, region: Optional[str] = None):
        return self.credentials().client(service_name, region)

    def label(self) -> str:
        identifier = self.resource_id() or getattr(self, 'name', None) or ''
        return f"{self.type_name} {identifier}".strip()

    def execute_service(self, func: Callable[[], T]) -> T:
        """Call ``func``, retrying any client error once a second.

        Raises:
            ProvisioningError: If the call still fails after all retries
        """
        strategy = RetryStrategy(
            max_retries=SERVICE_RETRIES,
            base_delay=SERVICE_RETRY_DELAY,
            exponential_base=1.0,
            jitter=False,
            retry_any_client_error=True,
        )
        try:
            return strategy.execute_with_retry(func)
        except ClientError as e:
            raise ProvisioningError('AWS service request failed!', cause=e) from e

    # -- tags -------------------------------------------------------------

    @staticmethod
    def tags_to_list(tags: Optional[Dict[str, str]]) -> List[Dict[str, str]]:
        return [{'Key': key, 'Value': value} for key, value in (tags or {}).items()]

    @staticmethod
    def tags_from_list(items: Optional[List[Dict[str, str]]]) -> Dict[str, str]:
        return {item['Key']: item.get('Value', '') for item in items or []}

    @staticmethod
    def tag_diff(
        current: Optional[Dict[str, str]],
        desired: Optional[Dict[str, str]]
    ) -> Tuple[Dict[str, str], List[str]]:
        """Split a tag change into tags to set and keys to remove.

        Args:
            current: Tags on the resource now
            desired: Tags the resource should have

        Returns:
            Tuple of (tags to add or overwrite, keys to remove)
        """
        current = current or {}
        desired = desired or {}
        additions = {key: value for key, value in desired.items() if current.get(key) != value}
        removals = [key for key in current if key not in desired]
        return additions, removals

    def snapshot(self) -> Dict[str, Any]:
        """Id and outputs of the resource, as stored in the state file."""
        outputs = {
            type(self).field_alias(name): comparable(getattr(self, name))
            for name in sorted(type(self).output_fields())
        }
        return {'type': self.type_name, 'id': self.resource_id(), 'outputs': outputs}
