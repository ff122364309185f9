"""Listener rule conditions."""

from typing import Any, Dict, List, Optional

from ..core.diffable import Diffable, compact
from ..core.fields import attr

CONDITION_FIELDS = [
    'host-header', 'path-pattern', 'http-header', 'http-request-method', 'query-string', 'source-ip',
]


class HttpHeaderConfig(Diffable):
    """Match on the value of one HTTP header."""

    name: Optional[str] = attr(required=True, updatable=True)
    values: List[str] = attr(default_factory=list, required=True, updatable=True)

    def copy_from(self, model: Dict[str, Any]) -> None:
        self.name = model.get('HttpHeaderName')
        self.values = list(model.get('Values') or [])

    def to_http_header_config(self) -> Dict[str, Any]:
        return compact(HttpHeaderName=self.name, Values=self.values or None)


class QueryStringPair(Diffable):
    """A query string key/value pattern; a missing key matches any key."""

    key: Optional[str] = attr(updatable=True)
    value: Optional[str] = attr(required=True, updatable=True)

    def primary_key(self) -> str:
        return f"{self.key or ''}={self.value or ''}"

    def copy_from(self, model: Dict[str, Any]) -> None:
        self.key = model.get('Key')
        self.value = model.get('Value')

    def to_pair(self) -> Dict[str, Any]:
        return compact(Key=self.key, Value=self.value)


class ConditionResource(Diffable):
    """A condition a request must meet for a rule to apply.

    A condition is written either with the legacy ``field``/``values`` pair
    or with one of the typed configurations.

    Example:
        conditions:
          - field: path-pattern
            values: ['/api/*']
          - field: http-header
            http-header-config:
              name: X-Env
              values: [prod]
    """

    field: Optional[str] = attr(required=True, updatable=True, valid_strings=CONDITION_FIELDS)
    values: List[str] = attr(default_factory=list, updatable=True)
    host_header_values: List[str] = attr(default_factory=list, updatable=True)
    path_pattern_values: List[str] = attr(default_factory=list, updatable=True)
    http_header_config: Optional[HttpHeaderConfig] = attr(updatable=True)
    http_request_method_values: List[str] = attr(default_factory=list, updatable=True)
    query_string_pairs: List[QueryStringPair] = attr(default_factory=list, updatable=True)
    source_ip_values: List[str] = attr(default_factory=list, updatable=True)

    def primary_key(self) -> str:
        return self.field or ''

    def has_typed_config(self) -> bool:
        return bool(
            self.host_header_values or self.path_pattern_values or self.http_header_config
            or self.http_request_method_values or self.query_string_pairs or self.source_ip_values
        )

    def copy_from(self, model: Dict[str, Any]) -> None:
        self.field = model.get('Field')
        self.host_header_values = list((model.get('HostHeaderConfig') or {}).get('Values') or [])
        self.path_pattern_values = list((model.get('PathPatternConfig') or {}).get('Values') or [])
        self.http_request_method_values = list((model.get('HttpRequestMethodConfig') or {}).get('Values') or [])
        self.source_ip_values = list((model.get('SourceIpConfig') or {}).get('Values') or [])

        self.http_header_config = None
        if model.get('HttpHeaderConfig'):
            config = self.new_subresource(HttpHeaderConfig)
            config.copy_from(model['HttpHeaderConfig'])
            self.http_header_config = config

        pairs = []
        for item in (model.get('QueryStringConfig') or {}).get('Values') or []:
            pair = self.new_subresource(QueryStringPair)
            pair.copy_from(item)
            pairs.append(pair)
        self.query_string_pairs = pairs

        self.values = [] if self.has_typed_config() else list(model.get('Values') or [])

    def reset_configs(self) -> None:
        """Drop the typed configurations, keeping the legacy ``field``/``values`` form."""
        if not self.values:
            self.values = self._typed_values()
        self.host_header_values = []
        self.path_pattern_values = []
        self.http_header_config = None
        self.http_request_method_values = []
        self.query_string_pairs = []
        self.source_ip_values = []

    def reset_legacy(self) -> None:
        """Drop the legacy ``values``, keeping the typed configurations."""
        self.values = []

    def to_condition(self) -> Dict[str, Any]:
        return compact(
            Field=self.field,
            Values=self.values or None,
            HostHeaderConfig={'Values': self.host_header_values} if self.host_header_values else None,
            PathPatternConfig={'Values': self.path_pattern_values} if self.path_pattern_values else None,
            HttpHeaderConfig=self.http_header_config.to_http_header_config() if self.http_header_config else None,
            HttpRequestMethodConfig=(
                {'Values': self.http_request_method_values} if self.http_request_method_values else None
            ),
            QueryStringConfig=(
                {'Values': [pair.to_pair() for pair in self.query_string_pairs]} if self.query_string_pairs else None
            ),
            SourceIpConfig={'Values': self.source_ip_values} if self.source_ip_values else None,
        )

    def _typed_values(self) -> List[str]:
        by_field = {
            'host-header': self.host_header_values,
            'path-pattern': self.path_pattern_values,
            'http-request-method': self.http_request_method_values,
            'source-ip': self.source_ip_values,
        }
        return list(by_field.get(self.field) or [])
