"""Field declarations carrying resource metadata.

Resource and sub-resource fields are ordinary pydantic fields. The extra
metadata (required, updatable, output, ...) lives in ``json_schema_extra``
and is read back by :class:`skyform_aws.core.diffable.Diffable`.
"""

from typing import Any, Callable, Dict, Iterable, Optional, Tuple

from pydantic import Field
from pydantic.fields import FieldInfo


def kebab(name: str) -> str:
    """Configuration alias for a field name (``allow_origins`` -> ``allow-origins``)."""
    return name.replace('_', '-')


def attr(
    default: Any = None,
    *,
    required: bool = False,
    updatable: bool = False,
    output: bool = False,
    id: bool = False,
    valid_strings: Optional[Iterable[str]] = None,
    range: Optional[Tuple[float, float]] = None,
    collection_max: Optional[int] = None,
    conflicts_with: Optional[Iterable[str]] = None,
    depends_on: Optional[str] = None,
    default_factory: Optional[Callable[[], Any]] = None,
    alias: Optional[str] = None,
) -> Any:
    """Declare a resource field.

    Args:
        default: Default value when the field is not configured
        required: The field must be set before the resource is managed
        updatable: Changing the field updates the resource in place
        output: The field is read from AWS and never configured
        id: The field identifies the resource in AWS
        valid_strings: Allowed values for a string (or each string of a list)
        range: Inclusive (min, max) bounds for a number
        collection_max: Largest allowed size of a list or map
        conflicts_with: Fields that cannot be set together with this one
        depends_on: Field that must be set for this one to be set
        default_factory: Factory for mutable defaults
        alias: Configuration key when the kebab-case name does not fit

    Returns:
        A pydantic FieldInfo
    """
    extra: Dict[str, Any] = {
        'required': required,
        'updatable': updatable,
        'output': output,
        'id': id,
    }
    if valid_strings is not None:
        extra['valid_strings'] = list(valid_strings)
    if range is not None:
        extra['range'] = tuple(range)
    if collection_max is not None:
        extra['collection_max'] = collection_max
    if conflicts_with is not None:
        extra['conflicts_with'] = list(conflicts_with)
    if depends_on is not None:
        extra['depends_on'] = depends_on

    kwargs: Dict[str, Any] = {'json_schema_extra': extra}
    if alias is not None:
        kwargs['alias'] = alias
    if default_factory is not None:
        return Field(default_factory=default_factory, **kwargs)
    return Field(default, **kwargs)


def metadata(info: FieldInfo) -> Dict[str, Any]:
    """Metadata declared through :func:`attr`, or an empty dict."""
    extra = info.json_schema_extra
    return extra if isinstance(extra, dict) else {}
