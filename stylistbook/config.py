"""
Configuration management using Pydantic models loaded from YAML.
"""

from pathlib import Path
from typing import List

import pendulum
import yaml
from pydantic import BaseModel, Field, field_validator

from .domain.booking_ledger import PARTITIONING_STRATEGIES, PER_STYLIST


class LedgerConfig(BaseModel):
    """Booking ledger settings."""
    partitioning: str = PER_STYLIST

    @field_validator("partitioning")
    @classmethod
    def validate_partitioning(cls, value: str) -> str:
        """Ensure the partitioning strategy is known."""
        value = value.strip().lower()
        if value not in PARTITIONING_STRATEGIES:
            raise ValueError(
                f"partitioning must be one of {', '.join(PARTITIONING_STRATEGIES)}, got '{value}'"
            )
        return value


class StylistConfig(BaseModel):
    """Stylist directory entry."""
    id: str
    name: str  # Used as alias


class AppConfig(BaseModel):
    """Application configuration."""
    timezone: str = "Europe/Berlin"
    ledger: LedgerConfig = Field(default_factory=LedgerConfig)
    stylists: List[StylistConfig] = Field(default_factory=list)

    @field_validator("timezone")
    @classmethod
    def validate_timezone(cls, value: str) -> str:
        """Ensure the timezone is a valid IANA name."""
        try:
            pendulum.timezone(value)
        except Exception as exc:
            raise ValueError(f"Unknown timezone: {value}") from exc
        return value

    @field_validator("stylists")
    @classmethod
    def validate_stylists(cls, value: List[StylistConfig]) -> List[StylistConfig]:
        """Ensure stylist ids and names are unique."""
        seen_ids: set[str] = set()
        seen_names: set[str] = set()
        for stylist in value:
            name_key = stylist.name.lower()
            if stylist.id in seen_ids:
                raise ValueError(f"Duplicate stylist id detected: {stylist.id}")
            if name_key in seen_names:
                raise ValueError(f"Duplicate stylist name detected: {stylist.name}")
            seen_ids.add(stylist.id)
            seen_names.add(name_key)
        return value

    @classmethod
    def load_from_yaml(cls, config_path: Path) -> "AppConfig":
        """
        Load configuration from YAML file.

        Args:
            config_path: Path to the YAML config file

        Returns:
            AppConfig instance

        Raises:
            FileNotFoundError: If config file doesn't exist
            ValueError: If config is invalid
        """
        if not config_path.exists():
            raise FileNotFoundError(
                f"Config file not found: {config_path}\n"
                f"Please create a config.yaml file. See config.example.yaml for reference."
            )

        try:
            with open(config_path, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
        except yaml.YAMLError as exc:
            raise ValueError(f"Invalid YAML in {config_path}: {exc}") from exc

        if not isinstance(data, dict):
            raise ValueError("Config file must contain a mapping at the root level.")

        return cls(**data)


def get_default_config_path() -> Path:
    """Get the default configuration file path."""
    # Look for config.yaml in current directory
    config_path = Path.cwd() / "config.yaml"

    if not config_path.exists():
        # Try in the project root
        config_path = Path(__file__).parent.parent / "config.yaml"

    return config_path
