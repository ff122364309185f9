"""Base model shared by resources and their nested configuration blocks."""

from dataclasses import dataclass
from typing import Any, Callable, ClassVar, Dict, List, Optional, Set, Type, TypeVar, Union

from pydantic import BaseModel, ConfigDict, PrivateAttr

from ..utils.errors import StateError
from .fields import kebab, metadata

D = TypeVar('D', bound='Diffable')


@dataclass
class FieldError:
    """A single validation problem on a configured field."""
    path: List[Union[str, int]]
    field: Optional[str]
    message: str

    def to_dict(self) -> Dict[str, Any]:
        loc = list(self.path) + ([self.field] if self.field else [])
        return {'loc': loc, 'msg': self.message}


def is_set(value: Any) -> bool:
    """True for anything but None and empty strings or collections."""
    if value is None:
        return False
    if isinstance(value, (str, list, tuple, set, dict)):
        return len(value) > 0
    return True


def compact(**kwargs: Any) -> Dict[str, Any]:
    """Build request kwargs, dropping parameters that are None.

    boto3 rejects ``None`` for optional parameters, so every request built
    from a resource goes through here.
    """
    return {key: value for key, value in kwargs.items() if value is not None}


def comparable(value: Any) -> Any:
    """Normalize a field value for change detection."""
    if isinstance(value, Diffable):
        if value.is_resource:
            return (type(value).__name__, value.resource_id())
        return {
            name: comparable(getattr(value, name))
            for name in type(value).model_fields
            if not metadata(type(value).model_fields[name]).get('output')
        }
    if isinstance(value, (list, tuple)):
        return [comparable(item) for item in value] or None
    if isinstance(value, dict):
        return {key: comparable(item) for key, item in value.items()} or None
    if value == '':
        return None
    return value


class Diffable(BaseModel):
    """A configuration block whose fields carry provider metadata.

    Sub-resources (CORS settings, health checks, actions, ...) subclass this
    directly. Resources subclass :class:`skyform_aws.core.resource.AwsResource`.
    """

    model_config = ConfigDict(
        alias_generator=kebab,
        populate_by_name=True,
        arbitrary_types_allowed=True,
        extra='forbid',
        protected_namespaces=(),
    )

    is_resource: ClassVar[bool] = False

    _parent: Optional['Diffable'] = PrivateAttr(default=None)
    _state: Any = PrivateAttr(default=None)
    _credentials: Any = PrivateAttr(default=None)

    # -- identity ---------------------------------------------------------

    def primary_key(self) -> str:
        """Key distinguishing this block among siblings in a list."""
        return ''

    @classmethod
    def id_field_name(cls) -> Optional[str]:
        for name, info in cls.model_fields.items():
            if metadata(info).get('id'):
                return name
        return None

    def resource_id(self) -> Any:
        name = type(self).id_field_name()
        return getattr(self, name) if name else None

    @classmethod
    def field_alias(cls, name: str) -> str:
        info = cls.model_fields[name]
        return info.alias or name

    @classmethod
    def updatable_fields(cls) -> Set[str]:
        return {name for name, info in cls.model_fields.items() if metadata(info).get('updatable')}

    @classmethod
    def output_fields(cls) -> Set[str]:
        return {name for name, info in cls.model_fields.items() if metadata(info).get('output')}

    def configured_fields(self) -> Set[str]:
        return set(self.model_fields_set)

    # -- tree -------------------------------------------------------------

    def parent_resource(self) -> Optional['Diffable']:
        return self._parent

    def state(self) -> Any:
        node = self
        while node is not None:
            if node._state is not None:
                return node._state
            node = node._parent
        return None

    def _bound_credentials(self) -> Any:
        node = self
        while node is not None:
            if node._credentials is not None:
                return node._credentials
            if node._state is not None and getattr(node._state, 'credentials', None) is not None:
                return node._state.credentials
            node = node._parent
        return None

    def credentials(self) -> Any:
        credentials = self._bound_credentials()
        if credentials is None:
            raise StateError(f"{type(self).__name__} is not bound to any AWS credentials")
        return credentials

    def bind(self: D, state: Any = None, credentials: Any = None) -> D:
        """Attach state and credentials, and adopt nested blocks."""
        if state is not None:
            self._state = state
        if credentials is not None:
            self._credentials = credentials
        self.link_children()
        return self

    def link_children(self) -> None:
        for name in type(self).model_fields:
            value = getattr(self, name)
            children = value if isinstance(value, list) else [value]
            for child in children:
                if isinstance(child, Diffable) and not child.is_resource:
                    child._parent = self
                    child.link_children()

    def new_subresource(self, cls: Type[D], **kwargs: Any) -> D:
        """Create a nested block owned by this one."""
        child = cls(**kwargs)
        child._parent = self
        return child

    def find_by_id(self, cls: Type[D], value: Any, match: Optional[Callable[[D], bool]] = None) -> Optional[D]:
        """Resolve a resource by its AWS id.

        Returns the resource tracked in state when there is one, otherwise an
        unconfigured stand-in carrying only the id. ``match`` narrows the state
        lookup for ids that repeat across parents.
        """
        if value is None:
            return None

        state = self.state()
        if state is not None:
            found = state.find(cls, value, match)
            if found is not None:
                return found

        id_field = cls.id_field_name()
        if id_field is None:
            raise TypeError(f"{cls.__name__} has no id field")

        placeholder = cls.model_construct(**{id_field: value})
        placeholder._state = state
        placeholder._credentials = self._bound_credentials()
        return placeholder

    # -- validation -------------------------------------------------------

    def validate_config(self, configured_fields: Set[str]) -> List[FieldError]:
        """Cross-field checks that field metadata cannot express."""
        return []

    def error(self, field_name: Optional[str], message: str) -> FieldError:
        """Build a FieldError for ``field_name``, or for the whole block when None."""
        if field_name is None:
            return FieldError([], None, message)
        alias = type(self).field_alias(field_name) if field_name in type(self).model_fields else field_name
        return FieldError([], alias, message)

    def validation_errors(self, path: Optional[List[Union[str, int]]] = None) -> List[FieldError]:
        """Check field metadata on this block and every nested block.

        Args:
            path: Location of this block inside the configuration

        Returns:
            Every problem found, empty when the block is valid
        """
        path = list(path or [])
        errors: List[FieldError] = []
        reported_conflicts: Set[frozenset] = set()
        fields = type(self).model_fields

        for name, info in fields.items():
            meta = metadata(info)
            if meta.get('output'):
                continue

            key = info.alias or name
            value = getattr(self, name)

            if not is_set(value):
                if meta.get('required'):
                    errors.append(FieldError(path, key, f"'{key}' is required."))
                continue

            valid_strings = meta.get('valid_strings')
            if valid_strings:
                values = value if isinstance(value, (list, tuple, set)) else [value]
                invalid = [item for item in values if item not in valid_strings]
                if invalid:
                    errors.append(FieldError(
                        path, key,
                        f"'{key}' must be one of {', '.join(valid_strings)}, not '{invalid[0]}'."
                    ))

            bounds = meta.get('range')
            if bounds and isinstance(value, (int, float)) and not isinstance(value, bool):
                low, high = bounds
                if not low <= value <= high:
                    errors.append(FieldError(path, key, f"'{key}' must be between {low} and {high}."))

            collection_max = meta.get('collection_max')
            if collection_max is not None and len(value) > collection_max:
                errors.append(FieldError(
                    path, key, f"'{key}' cannot have more than {collection_max} items."
                ))

            for other in meta.get('conflicts_with', []):
                pair = frozenset((name, other))
                if pair in reported_conflicts or not is_set(getattr(self, other)):
                    continue
                reported_conflicts.add(pair)
                errors.append(FieldError(
                    path, key, f"'{key}' cannot be set together with '{type(self).field_alias(other)}'."
                ))

            depends_on = meta.get('depends_on')
            if depends_on and not is_set(getattr(self, depends_on)):
                errors.append(FieldError(
                    path, key,
                    f"'{key}' can only be set when '{type(self).field_alias(depends_on)}' is set."
                ))

            if isinstance(value, Diffable) and not value.is_resource:
                errors.extend(value.validation_errors(path + [key]))
            elif isinstance(value, list):
                for index, item in enumerate(value):
                    if isinstance(item, Diffable) and not item.is_resource:
                        errors.extend(item.validation_errors(path + [key, index]))

        for problem in self.validate_config(self.configured_fields()):
            errors.append(FieldError(path + problem.path, problem.field, problem.message))

        return errors

    # -- diffing ----------------------------------------------------------

    def changed_fields(self, current: 'Diffable') -> Set[str]:
        """Configured fields whose value differs from ``current``.

        Fields that were never configured keep whatever AWS reports and are
        not treated as changes.
        """
        outputs = type(self).output_fields()
        changed = set()
        for name in self.configured_fields():
            if name in outputs:
                continue
            if comparable(getattr(self, name)) != comparable(getattr(current, name, None)):
                changed.add(name)
        return changed
