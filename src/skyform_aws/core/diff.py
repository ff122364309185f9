"""Single-resource change planning and execution."""

import time
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Set

from ..utils.errors import ErrorContext, error_handler
from ..utils.logging import LogContext, get_logger
from .diffable import is_set
from .resource import AwsResource

logger = get_logger(__name__)


class ChangeType(Enum):
    """Type of change for a resource."""
    CREATE = "create"
    UPDATE = "update"
    REPLACE = "replace"
    DELETE = "delete"
    NO_CHANGE = "no_change"


@dataclass
class ResourceChange:
    """Planned change for one resource."""
    resource: AwsResource
    change_type: ChangeType
    current: Optional[AwsResource] = None
    changed_fields: Set[str] = field(default_factory=set)

    def describe(self) -> str:
        if self.change_type in (ChangeType.UPDATE, ChangeType.REPLACE):
            fields = ', '.join(
                type(self.resource).field_alias(name) for name in sorted(self.changed_fields)
            )
            return f"{self.change_type.value} {self.resource.label()} ({fields})"
        return f"{self.change_type.value} {self.resource.label()}"


def plan_change(desired: AwsResource, current: Optional[AwsResource]) -> ResourceChange:
    """Decide how to move ``current`` to ``desired``.

    Args:
        desired: Resource as configured
        current: Resource as refreshed from AWS, None if it does not exist

    Returns:
        CREATE when there is no current resource, NO_CHANGE when nothing
        differs, UPDATE when every changed field is updatable and REPLACE
        otherwise
    """
    if current is None:
        return ResourceChange(resource=desired, change_type=ChangeType.CREATE)

    changed = desired.changed_fields(current)
    if not changed:
        return ResourceChange(resource=desired, change_type=ChangeType.NO_CHANGE, current=current)

    if changed <= type(desired).updatable_fields():
        change_type = ChangeType.UPDATE
    else:
        change_type = ChangeType.REPLACE

    return ResourceChange(
        resource=desired,
        change_type=change_type,
        current=current,
        changed_fields=changed,
    )


def plan_delete(current: AwsResource) -> ResourceChange:
    return ResourceChange(resource=current, change_type=ChangeType.DELETE, current=current)


def _carry_outputs(source: AwsResource, target: AwsResource) -> None:
    names = set(type(source).output_fields())
    id_field = type(source).id_field_name()
    if id_field:
        names.add(id_field)
    for name in names:
        value = getattr(source, name)
        if value is not None and getattr(target, name) is None:
            setattr(target, name, value)


def _has_outputs(resource: AwsResource) -> bool:
    """True once AWS has handed back any output, such as an id or ARN."""
    return any(is_set(getattr(resource, name)) for name in type(resource).output_fields())


def apply_change(change: ResourceChange, ui, state) -> AwsResource:
    """Execute a planned change and keep ``state`` in step.

    Raises:
        ProviderError: Wrapping whatever the lifecycle call raised
    """
    resource = change.resource
    if change.change_type == ChangeType.NO_CHANGE:
        _carry_outputs(change.current, resource)
        state.add(resource)
        return resource

    context = ErrorContext(
        resource_id=str(resource.resource_id() or getattr(resource, 'name', '') or ''),
        resource_type=resource.type_name,
        operation=change.change_type.value,
    )

    start = time.monotonic()
    with LogContext(logger, resource_type=context.resource_type, resource_id=context.resource_id,
                    operation=context.operation):
        try:
            ui.write('%s\n', change.describe())
            with ui.indented():
                if change.change_type == ChangeType.CREATE:
                    state.add(resource)
                    resource.create(ui, state)

                elif change.change_type == ChangeType.UPDATE:
                    _carry_outputs(change.current, resource)
                    state.remove(change.current)
                    state.add(resource)
                    resource.update(ui, state, change.current, change.changed_fields)

                elif change.change_type == ChangeType.REPLACE:
                    change.current.delete(ui, state)
                    state.remove(change.current)
                    state.add(resource)
                    resource.create(ui, state)

                elif change.change_type == ChangeType.DELETE:
                    resource.delete(ui, state)
                    state.remove(resource)

        except Exception as e:
            if change.change_type in (ChangeType.CREATE, ChangeType.REPLACE) and not _has_outputs(resource):
                state.remove(resource)
            error = error_handler.handle_exception(e, context)
            error_handler.log_error(error)
            if error is e:
                raise
            raise error from e

        logger.info(f"{change.change_type.value} finished in {time.monotonic() - start:.1f}s")

    state.save()
    return resource
