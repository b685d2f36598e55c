"""Connection configuration and configuration file loading."""

import json
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, ConfigDict, Field

from zonedef.core.domain.models import ConfigurationError
from zonedef.core.ports.inbound.fetcher import IFetcher

DEFAULT_SCHEME = "http"
DEFAULT_ADDRESS = "127.0.0.1:8080"
DEFAULT_PATH = "/client/api"

SUPPORTED_SCHEMES = ("http", "https")


class ZoneDefinitionConfig(BaseModel):
    """
    Parameters of one zone definition fetch.

    Empty ``scheme``, ``address`` and ``path`` fall back to the defaults
    when the config is validated. ``zone_id`` wins over ``zone_name``.
    File keys may use either the field names or the camelCase aliases
    (``zoneID``, ``zoneName``).
    """

    model_config = ConfigDict(
        populate_by_name=True,
        arbitrary_types_allowed=True,
        extra="ignore",
    )

    key: str = ""
    secret: str = ""
    scheme: str = DEFAULT_SCHEME
    address: str = DEFAULT_ADDRESS
    path: str = DEFAULT_PATH
    zone_id: str = Field(default="", alias="zoneID")
    zone_name: str = Field(default="", alias="zoneName")

    timeout: float = Field(default=30.0, gt=0)
    page_size: int = Field(default=500, ge=1)
    verify_ssl: bool = True

    fetchers: list[IFetcher] = Field(default_factory=list, exclude=True)

    @property
    def endpoint(self) -> str:
        """API URL built from scheme, address and path."""
        return f"{self.scheme}://{self.address}{self.path}"

    def validated(self) -> "ZoneDefinitionConfig":
        """
        Check the config and fill in defaults.

        Returns:
            A copy with defaults applied

        Raises:
            ConfigurationError: On empty credentials, an unsupported
                scheme or a missing zone selector
        """
        if not self.key:
            raise ConfigurationError("key cannot be empty")
        if not self.secret:
            raise ConfigurationError("secret cannot be empty")
        if self.scheme and self.scheme not in SUPPORTED_SCHEMES:
            raise ConfigurationError("scheme must be http or https")
        if not self.zone_name and not self.zone_id:
            raise ConfigurationError("zone name or id must be populated")

        return self.model_copy(
            update={
                "scheme": self.scheme or DEFAULT_SCHEME,
                "address": self.address or DEFAULT_ADDRESS,
                "path": self.path or DEFAULT_PATH,
            }
        )


class ConfigLoader:
    """
    Load a ZoneDefinitionConfig from YAML or JSON files.

    Usage:
        loader = ConfigLoader()
        config = loader.load_from_file("zone.yaml", zone_name="Zone1")
    """

    def load_from_file(
        self,
        file_path: str | Path,
        **overrides: Any,
    ) -> ZoneDefinitionConfig:
        """
        Load a config file.

        Supports YAML (.yaml, .yml) and JSON (.json) formats.

        Args:
            file_path: Path to config file
            **overrides: Values replacing the file's; None values are ignored

        Returns:
            The loaded config (not yet validated)

        Raises:
            ValueError: If file format is not supported
            FileNotFoundError: If file does not exist
        """
        path = Path(file_path)

        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {file_path}")

        if path.suffix in (".yaml", ".yml"):
            data = self._load_yaml(path)
        elif path.suffix == ".json":
            data = self._load_json(path)
        else:
            raise ValueError(
                f"Unsupported file format: {path.suffix}. "
                "Supported formats: .yaml, .yml, .json"
            )

        return self.load_from_dict(data, **overrides)

    def load_from_dict(
        self,
        data: dict[str, Any],
        **overrides: Any,
    ) -> ZoneDefinitionConfig:
        """Build a config from a mapping plus overrides."""
        if not isinstance(data, dict):
            raise ValueError("Config file must contain a mapping")
        merged = dict(data)
        for name, value in overrides.items():
            if value is None:
                continue
            # drop camelCase spellings so the override is not shadowed
            field = ZoneDefinitionConfig.model_fields.get(name)
            if field is not None and field.alias:
                merged.pop(field.alias, None)
            merged[name] = value
        return ZoneDefinitionConfig.model_validate(merged)

    def _load_yaml(self, path: Path) -> dict[str, Any]:
        with open(path, "r", encoding="utf-8") as f:
            try:
                return yaml.safe_load(f) or {}
            except yaml.YAMLError as e:
                raise ValueError(f"Invalid YAML in {path}: {e}") from e

    def _load_json(self, path: Path) -> dict[str, Any]:
        with open(path, "r", encoding="utf-8") as f:
            return json.load(f)
