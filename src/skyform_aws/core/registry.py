"""Lookup tables from configuration type names to classes."""

from typing import Callable, Dict, List, Type, TypeVar

T = TypeVar('T')

PREFIX = 'aws::'

_RESOURCES: Dict[str, type] = {}
_FINDERS: Dict[str, type] = {}


def _qualified(type_name: str) -> str:
    return type_name if type_name.startswith(PREFIX) else f"{PREFIX}{type_name}"


def register(type_name: str) -> Callable[[Type[T]], Type[T]]:
    """Class decorator registering a resource under ``aws::<type_name>``."""
    def decorator(cls: Type[T]) -> Type[T]:
        qualified = _qualified(type_name)
        cls.type_name = qualified
        _RESOURCES[qualified] = cls
        return cls
    return decorator


def register_finder(type_name: str) -> Callable[[Type[T]], Type[T]]:
    """Class decorator registering a finder under ``aws::<type_name>``."""
    def decorator(cls: Type[T]) -> Type[T]:
        _FINDERS[_qualified(type_name)] = cls
        return cls
    return decorator


def resource_class(type_name: str) -> type:
    """Return the resource class for a type name.

    Raises:
        KeyError: If no resource is registered under the name
    """
    return _RESOURCES[_qualified(type_name)]


def finder_class(type_name: str) -> type:
    return _FINDERS[_qualified(type_name)]


def resource_types() -> List[str]:
    return sorted(_RESOURCES)
