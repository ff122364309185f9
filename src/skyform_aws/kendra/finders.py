"""Finders for existing Kendra indexes."""

from typing import Any, Dict, List, Optional

from ..core.finder import AwsFinder, paginate
from ..core.registry import register_finder
from .base import SERVICE, KendraResource
from .index import KendraIndexResource


@register_finder('kendra-index')
class KendraIndexFinder(AwsFinder):
    """Query indexes by id or name.

    Example:
        indexes = KendraIndexFinder(state=state, name='example-index').find()
    """

    resource_class = KendraIndexResource
    service = SERVICE

    id: Optional[str] = None
    name: Optional[str] = None

    def find_aws(self, client, filters: Dict[str, Any]) -> List[Dict[str, Any]]:
        if 'id' in filters:
            index = KendraResource.describe(client.describe_index, Id=filters['id'])
            if index is None:
                return []
            if 'name' in filters and index.get('Name') != filters['name']:
                return []
            return [index]

        return [
            client.describe_index(Id=summary['Id'])
            for summary in self._summaries(client)
            if summary.get('Name') == filters['name']
        ]

    def find_all_aws(self, client) -> List[Dict[str, Any]]:
        return [client.describe_index(Id=summary['Id']) for summary in self._summaries(client)]

    @staticmethod
    def _summaries(client):
        return paginate(client.list_indices, 'IndexConfigurationSummaryItems')
