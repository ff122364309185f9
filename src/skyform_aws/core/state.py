"""In-memory registry of managed resources with a JSON snapshot on save."""

import json
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, Type, TypeVar

from ..utils.errors import StateError
from ..utils.logging import get_logger

logger = get_logger(__name__)

R = TypeVar('R')


class State:
    """Resources known to the provider during one run.

    Resources look each other up here when an API response names another
    resource by id, and long-running creates call :meth:`save` so that a
    half-finished resource is not lost if the run is interrupted.
    """

    def __init__(
        self,
        path: Optional[str] = None,
        credentials: Any = None,
        wait_settings: Any = None
    ):
        """
        Initialize State.

        Args:
            path: Where save() writes the snapshot, or None to keep it in memory
            credentials: Default AwsCredentials for bound resources
            wait_settings: Per-resource-type wait overrides
        """
        self.path = Path(path) if path else None
        self.credentials = credentials
        self.wait_settings = wait_settings
        self._resources: List[Any] = []

    def add(self, resource: Any) -> None:
        if not any(item is resource for item in self._resources):
            self._resources.append(resource)
        resource.bind(state=self)

    def remove(self, resource: Any) -> None:
        self._resources = [item for item in self._resources if item is not resource]

    def resources(self) -> List[Any]:
        return list(self._resources)

    def find(
        self,
        cls: Type[R],
        resource_id: Any,
        match: Optional[Callable[[R], bool]] = None
    ) -> Optional[R]:
        """Find a tracked resource of ``cls`` by its AWS id.

        Args:
            cls: Resource class to look for
            resource_id: Value of the class's id field
            match: Extra check for ids that are only unique within a parent
        """
        for resource in self._resources:
            if not isinstance(resource, cls) or resource.resource_id() != resource_id:
                continue
            if match is None or match(resource):
                return resource
        return None

    def to_dict(self) -> Dict[str, Any]:
        return {
            'saved_at': datetime.now(timezone.utc).isoformat(),
            'resources': [resource.snapshot() for resource in self._resources],
        }

    def save(self) -> None:
        """Write the snapshot to ``path``.

        Raises:
            StateError: If the snapshot cannot be written
        """
        if self.path is None:
            return

        self.path.parent.mkdir(parents=True, exist_ok=True)

        try:
            temp_path = self.path.with_suffix('.tmp')
            with open(temp_path, 'w') as f:
                json.dump(self.to_dict(), f, indent=2, default=str)
            temp_path.replace(self.path)
        except OSError as e:
            raise StateError(f"Failed to save state file: {e}", cause=e) from e

        logger.debug(f"Saved {len(self._resources)} resource(s) to {self.path}")
