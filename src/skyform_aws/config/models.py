"""Pydantic models for the provider configuration block."""

from typing import Dict, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, RootModel, field_validator, model_validator

from ..core.fields import kebab
from ..core.registry import PREFIX

VALID_REGIONS = [
    "us-east-1",
    "us-east-2",
    "us-west-1",
    "us-west-2",
    "eu-west-1",
    "eu-west-2",
    "eu-west-3",
    "eu-central-1",
    "eu-north-1",
    "ap-northeast-1",
    "ap-northeast-2",
    "ap-northeast-3",
    "ap-southeast-1",
    "ap-southeast-2",
    "ap-south-1",
    "sa-east-1",
    "ca-central-1",
]

WAIT_ACTIONS = ("create", "update", "delete")


class WaitOverride(BaseModel):
    """Replacement polling bounds for one lifecycle action."""

    model_config = ConfigDict(alias_generator=kebab, populate_by_name=True, extra="forbid")

    at_most: Optional[float] = Field(None, gt=0, description="Seconds to wait before giving up")
    check_every: Optional[float] = Field(None, gt=0, description="Seconds between status checks")

    @model_validator(mode="after")
    def validate_bounds(self):
        """Polling interval cannot exceed the overall timeout."""
        if self.at_most and self.check_every and self.check_every > self.at_most:
            raise ValueError("check-every cannot be greater than at-most")
        return self


class WaitSettings(RootModel[Dict[str, Dict[str, WaitOverride]]]):
    """Wait overrides keyed by resource type, then by action."""

    root: Dict[str, Dict[str, WaitOverride]] = Field(default_factory=dict)

    @field_validator("root")
    @classmethod
    def validate_actions(cls, v: Dict[str, Dict[str, WaitOverride]]) -> Dict[str, Dict[str, WaitOverride]]:
        """Normalize type names and check action keys."""
        normalized = {}
        for type_name, actions in v.items():
            for action in actions:
                if action not in WAIT_ACTIONS:
                    raise ValueError(
                        f"Invalid wait action '{action}' for {type_name}. "
                        f"Must be one of: {', '.join(WAIT_ACTIONS)}"
                    )
            key = type_name if type_name.startswith(PREFIX) else f"{PREFIX}{type_name}"
            normalized[key] = actions
        return normalized

    def for_action(
        self, type_name: str, action: str, at_most: float, check_every: float
    ) -> Tuple[float, float]:
        """Return (at_most, check_every) with any configured override applied."""
        override = self.root.get(type_name, {}).get(action)
        if override is None:
            return at_most, check_every
        return override.at_most or at_most, override.check_every or check_every


class ProviderConfig(BaseModel):
    """Provider-level settings."""

    model_config = ConfigDict(alias_generator=kebab, populate_by_name=True, extra="forbid")

    profile: Optional[str] = Field(None, description="AWS profile name")
    region: str = Field(..., min_length=1)
    endpoint_overrides: Dict[str, str] = Field(
        default_factory=dict, description="Service name to endpoint URL"
    )
    max_attempts: int = Field(20, ge=1, le=50)
    retry_mode: str = "standard"
    state_path: Optional[str] = Field(None, description="Where the state snapshot is written")
    log_level: str = "info"
    wait: WaitSettings = Field(default_factory=WaitSettings)

    @field_validator("region")
    @classmethod
    def validate_region(cls, v: str) -> str:
        """Validate AWS region format."""
        if v not in VALID_REGIONS:
            raise ValueError(
                f"Invalid AWS region: {v}. Must be one of: {', '.join(VALID_REGIONS)}"
            )
        return v

    @field_validator("retry_mode")
    @classmethod
    def validate_retry_mode(cls, v: str) -> str:
        if v not in ("legacy", "standard", "adaptive"):
            raise ValueError(f"Invalid retry mode: {v}. Must be legacy, standard or adaptive")
        return v

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        if v.lower() not in ("debug", "info", "warning", "error"):
            raise ValueError(f"Invalid log level: {v}")
        return v.lower()
