"""YAML configuration parser for provider resources.

A configuration file has a ``provider`` block and a ``resources`` mapping
keyed the same way resources are written in the host tool::

    provider:
      region: us-east-1

    resources:
      aws::api-gateway example:
        name: example-api
        protocol-type: HTTP

      aws::api-gateway-stage example:
        name: prod
        api: $(aws::api-gateway example)

``$(<type> <name>)`` refers to another resource of the same file.
"""

import re
from pathlib import Path
from typing import Any, Dict, List, Optional

import pydantic
import yaml

from ..core.registry import resource_class
from ..core.resource import AwsResource
from ..core.state import State
from ..utils.aws_client import AwsCredentials
from ..utils.errors import ConfigurationError
from ..utils.logging import get_logger, setup_logging
from .models import ProviderConfig

logger = get_logger(__name__)

REFERENCE = re.compile(r"^\$\((?P<key>\S+\s+\S+)\)$")


class ConfigValidationError(ConfigurationError):
    """Exception raised when configuration validation fails."""

    def __init__(self, message: str, errors: Optional[List[Dict]] = None):
        self.errors = errors or []
        super().__init__(message)

    def __str__(self) -> str:
        """Format validation errors for display."""
        if not self.errors:
            return self.message

        error_lines = [self.message, ""]
        for error in self.errors:
            location = " -> ".join(str(loc) for loc in error.get("loc", []))
            msg = error.get("msg", "Unknown error")
            error_lines.append(f"  - {location}: {msg}")

        return "\n".join(error_lines)


def _normalize_key(key: str) -> str:
    return " ".join(str(key).split())


class Config:
    """Loads provider settings and resources from a YAML file."""

    def __init__(self, config_path: str):
        """Initialize configuration manager.

        Args:
            config_path: Path to the YAML configuration file
        """
        self.config_path = Path(config_path)
        self.data: Dict = {}
        self.provider: Optional[ProviderConfig] = None
        self.credentials: Optional[AwsCredentials] = None
        self.state: Optional[State] = None
        self.resources: Dict[str, AwsResource] = {}
        self._entries: Dict[str, Dict[str, Any]] = {}
        self._failed: set = set()

    def load(self, configure_logging: bool = False) -> "Config":
        """Load and validate configuration from YAML file.

        Args:
            configure_logging: Set up logging at the provider's log-level

        Returns:
            Self for method chaining

        Raises:
            ConfigValidationError: If configuration is invalid
            FileNotFoundError: If configuration file doesn't exist
        """
        if not self.config_path.exists():
            raise FileNotFoundError(f"Configuration file not found: {self.config_path}")

        try:
            with open(self.config_path, "r") as f:
                self.data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ConfigValidationError(f"Failed to parse YAML: {e}")

        validation_errors = self.validate()
        if validation_errors:
            raise ConfigValidationError(
                f"Configuration validation failed with {len(validation_errors)} error(s)",
                validation_errors,
            )

        if configure_logging:
            setup_logging(self.provider.log_level, log_dir=None)

        logger.info(f"Loaded {len(self.resources)} resource(s) from {self.config_path}")
        return self

    def validate(self) -> List[Dict]:
        """Build every resource and collect all configuration problems.

        Returns:
            List of validation errors (empty if valid)
        """
        errors: List[Dict] = []
        self.resources = {}
        self._failed = set()

        if "provider" not in self.data:
            errors.append({"loc": ["provider"], "msg": "Required field 'provider' is missing"})
        else:
            try:
                self.provider = ProviderConfig(**(self.data["provider"] or {}))
            except pydantic.ValidationError as e:
                for error in e.errors():
                    errors.append({"loc": ["provider"] + list(error["loc"]), "msg": error["msg"]})

        if self.provider is not None:
            self.credentials = AwsCredentials.from_config(self.provider)
            self.state = State(
                path=self.provider.state_path,
                credentials=self.credentials,
                wait_settings=self.provider.wait,
            )
        else:
            self.state = State()

        raw_resources = self.data.get("resources") or {}
        if not isinstance(raw_resources, dict):
            errors.append({"loc": ["resources"], "msg": "Resources must be a mapping"})
            return errors

        self._entries = {}
        for key, body in raw_resources.items():
            normalized = _normalize_key(key)
            if len(normalized.split(" ")) != 2:
                errors.append({
                    "loc": ["resources", key],
                    "msg": "Resource keys must be written as '<type> <name>'",
                })
                continue
            if body is not None and not isinstance(body, dict):
                errors.append({"loc": ["resources", key], "msg": "Resource body must be a mapping"})
                continue
            self._entries[normalized] = body or {}

        for key in self._entries:
            self._build(key, [], errors)

        for key, resource in self.resources.items():
            for problem in resource.validation_errors():
                errors.append({"loc": ["resources", key] + problem.to_dict()["loc"], "msg": problem.message})

        return errors

    def _build(self, key: str, stack: List[str], errors: List[Dict]) -> Optional[AwsResource]:
        if key in self.resources:
            return self.resources[key]
        if key in self._failed:
            return None
        if key in stack:
            errors.append({
                "loc": ["resources", key],
                "msg": f"Circular reference: {' -> '.join(stack + [key])}",
            })
            self._failed.add(key)
            return None

        type_name, _ = key.split(" ")
        try:
            cls = resource_class(type_name)
        except KeyError:
            errors.append({"loc": ["resources", key], "msg": f"Unknown resource type '{type_name}'"})
            self._failed.add(key)
            return None

        stack.append(key)
        try:
            fields = self._resolve(self._entries[key], key, stack, errors)
            try:
                resource = cls(**fields)
            except pydantic.ValidationError as e:
                for error in e.errors():
                    errors.append({"loc": ["resources", key] + list(error["loc"]), "msg": error["msg"]})
                self._failed.add(key)
                return None
        finally:
            stack.pop()

        self.state.add(resource)
        self.resources[key] = resource
        return resource

    def _resolve(self, value: Any, owner: str, stack: List[str], errors: List[Dict]) -> Any:
        if isinstance(value, str):
            match = REFERENCE.match(value)
            if not match:
                return value
            target = _normalize_key(match.group("key"))
            if target not in self._entries:
                errors.append({"loc": ["resources", owner], "msg": f"Unknown reference '{value}'"})
                return None
            return self._build(target, stack, errors)
        if isinstance(value, list):
            return [self._resolve(item, owner, stack, errors) for item in value]
        if isinstance(value, dict):
            return {k: self._resolve(v, owner, stack, errors) for k, v in value.items()}
        return value

    def resource(self, type_name: str, name: str) -> AwsResource:
        """Return the resource configured as ``<type_name> <name>``.

        Raises:
            KeyError: If there is no such resource
        """
        return self.resources[f"{type_name} {name}"]
