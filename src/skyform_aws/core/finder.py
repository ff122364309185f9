"""Queries over existing AWS entities."""

from abc import ABC, abstractmethod
from typing import Any, Callable, ClassVar, Dict, Iterator, List, Optional

from pydantic import BaseModel, ConfigDict, PrivateAttr

from ..utils.errors import StateError
from ..utils.logging import get_logger
from .fields import kebab

logger = get_logger(__name__)


def paginate(
    call: Callable[..., Dict[str, Any]],
    items_key: str,
    token_key: str = 'NextToken',
    request_token_key: Optional[str] = None,
    **kwargs: Any
) -> Iterator[Dict[str, Any]]:
    """Yield items from every page of a list call.

    Args:
        call: Bound client method, e.g. ``client.get_apis``
        items_key: Response key holding the page's items
        token_key: Response key holding the continuation token
        request_token_key: Request parameter taking the token, when it differs
        **kwargs: Extra request parameters
    """
    request_token_key = request_token_key or token_key
    token = None
    while True:
        params = dict(kwargs)
        if token:
            params[request_token_key] = token
        response = call(**params)
        yield from response.get(items_key, [])
        token = response.get(token_key)
        if not token:
            break


class AwsFinder(BaseModel, ABC):
    """Lists AWS entities of one resource type, optionally filtered.

    Query fields are declared as pydantic fields. Every field that is set
    becomes a filter keyed by its kebab-case name; map-valued fields expand
    to ``name:key`` filters.
    """

    model_config = ConfigDict(alias_generator=kebab, populate_by_name=True, extra='forbid')

    resource_class: ClassVar[type]
    service: ClassVar[str]

    _state: Any = PrivateAttr(default=None)
    _credentials: Any = PrivateAttr(default=None)

    def __init__(self, state: Any = None, credentials: Any = None, **filters: Any):
        super().__init__(**filters)
        self._state = state
        self._credentials = credentials or getattr(state, 'credentials', None)

    def credentials(self) -> Any:
        if self._credentials is None:
            raise StateError(f"{type(self).__name__} is not bound to any AWS credentials")
        return self._credentials

    def filters(self) -> Dict[str, Any]:
        result: Dict[str, Any] = {}
        for name, info in type(self).model_fields.items():
            value = getattr(self, name)
            if value is None:
                continue
            key = info.alias or name
            if isinstance(value, dict):
                for map_key, map_value in value.items():
                    result[f"{key}:{map_key}"] = map_value
            else:
                result[key] = value
        return result

    def find(self) -> List[Any]:
        """Run the query and map every match into a bound resource."""
        client = self.credentials().client(self.service)
        filters = self.filters()

        if filters:
            logger.debug(f"Finding {self.resource_class.__name__} with filters {filters}")
            models = self.find_aws(client, filters)
        else:
            models = self.find_all_aws(client)

        return [self.new_resource(model) for model in models]

    def new_resource(self, model: Dict[str, Any]) -> Any:
        resource = self.resource_class()
        resource.bind(state=self._state, credentials=self._credentials)
        resource.copy_from(model)
        return resource

    @abstractmethod
    def find_aws(self, client, filters: Dict[str, Any]) -> List[Dict[str, Any]]:
        """Models matching ``filters``."""

    @abstractmethod
    def find_all_aws(self, client) -> List[Dict[str, Any]]:
        """Every model of this type in the region."""
