# uiauto_tree/config.py
"""
@file config.py
@brief Centralized wait and query configuration for the engine.
"""

from __future__ import annotations

import json
import os
import threading
from contextlib import contextmanager
from copy import deepcopy
from dataclasses import dataclass, field, replace
from typing import Any, Dict, Generator, Optional, Tuple

import yaml
from jsonschema import Draft202012Validator

from .exceptions import ConfigError
from .timings import TIMEOUT_FIELDS, build_preset_values, list_presets

SCHEMA_PATH = os.path.join(os.path.dirname(os.path.abspath(__file__)), "schemas", "config.schema.json")


@dataclass
class TimeoutSettings:
    """Timeout and polling interval (seconds) for a wait operation."""
    timeout: float
    interval: float

    def with_overrides(
        self,
        timeout: Optional[float] = None,
        interval: Optional[float] = None,
    ) -> TimeoutSettings:
        """Create a new settings instance with overrides applied."""
        return TimeoutSettings(
            timeout=timeout if timeout is not None else self.timeout,
            interval=interval if interval is not None else self.interval,
        )


@dataclass(frozen=True)
class QuerySettings:
    """
    Conventions used when matching and dispatching on tree nodes.

    Attributes:
        test_id_prop: Prop holding the test identifier
        text_types: Host types whose children make up visible text
        handler_prefix: Prefix turning an event name into a handler prop
    """
    test_id_prop: str = "test_id"
    text_types: Tuple[str, ...] = field(default=("Text", "TextInput"))
    handler_prefix: str = "on_"

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> QuerySettings:
        return cls(
            test_id_prop=str(data.get("test_id_prop", "test_id")),
            text_types=tuple(data.get("text_types", ("Text", "TextInput"))),
            handler_prefix=str(data.get("handler_prefix", "on_")),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "test_id_prop": self.test_id_prop,
            "text_types": list(self.text_types),
            "handler_prefix": self.handler_prefix,
        }


class TreeConfig:
    """
    Configuration for queries, dispatch and waits.

    Precedence is deterministic: base defaults -> preset -> overrides.
    Overrides are thread-local and scoped, so tests never mutate the
    process default.
    """

    _default_instance: Optional[TreeConfig] = None
    _local = threading.local()
    _lock = threading.Lock()

    wait_for_element: TimeoutSettings
    query: QuerySettings

    def __init__(self, preset: Optional[str] = None):
        self._apply_values(build_preset_values(preset or "default"))

    def _apply_values(self, values: Dict[str, Any]) -> None:
        for name in TIMEOUT_FIELDS:
            val = values.get(name)
            if isinstance(val, TimeoutSettings):
                setting = deepcopy(val)
            elif isinstance(val, dict):
                setting = TimeoutSettings(
                    timeout=float(val["timeout"]),
                    interval=float(val["interval"]),
                )
            else:
                raise ConfigError(f"Invalid timeout setting for {name}: {val}")
            setattr(self, name, setting)

        query = values.get("query", {})
        self.query = query if isinstance(query, QuerySettings) else QuerySettings.from_dict(query)

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {}
        for name in TIMEOUT_FIELDS:
            setting: TimeoutSettings = getattr(self, name)
            data[name] = {"timeout": setting.timeout, "interval": setting.interval}
        data["query"] = self.query.to_dict()
        return data

    def clone(self) -> TreeConfig:
        """Return a deep clone of this config."""
        clone = TreeConfig()
        clone._apply_values(self.to_dict())
        return clone

    @classmethod
    def build_from(
        cls,
        *,
        preset: str = "default",
        overrides: Optional[Dict[str, Any]] = None,
    ) -> TreeConfig:
        """Build a config snapshot from a preset and overrides."""
        try:
            cfg = cls(preset)
        except ValueError as e:
            raise ConfigError(str(e)) from e
        if overrides:
            _apply_overrides(cfg, overrides)
        return cfg

    @classmethod
    def from_yaml(cls, path: str) -> TreeConfig:
        """
        Load a config file.

        @param path Path to a YAML file with optional preset, wait_for_element and query keys
        @return TreeConfig built from the file
        @throws ConfigError if the file is missing, malformed or fails schema validation
        """
        path = os.path.abspath(path)
        if not os.path.exists(path):
            raise ConfigError(f"Config YAML not found: {path}")
        try:
            with open(path, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigError(f"Invalid YAML: {e}") from e

        if data is None:
            data = {}
        if not isinstance(data, dict):
            raise ConfigError("Config YAML must be a mapping at root.")

        _validate(data)
        overrides = {k: v for k, v in data.items() if k != "preset"}
        return cls.build_from(preset=data.get("preset", "default"), overrides=overrides)

    @classmethod
    def default(cls) -> TreeConfig:
        """Get the process default configuration (singleton)."""
        if cls._default_instance is None:
            with cls._lock:
                if cls._default_instance is None:
                    cls._default_instance = cls()
        return cls._default_instance

    @classmethod
    def current(cls) -> TreeConfig:
        """Get the current effective configuration."""
        override = getattr(cls._local, "override", None)
        if override is not None:
            return override
        return cls.default()

    @classmethod
    @contextmanager
    def override(cls, **kwargs: Any) -> Generator[TreeConfig, None, None]:
        """Context manager for temporary configuration overrides."""
        previous = getattr(cls._local, "override", None)
        new_config = cls.current().clone()
        _apply_overrides(new_config, kwargs)

        cls._local.override = new_config
        try:
            yield new_config
        finally:
            cls._local.override = previous

    @classmethod
    @contextmanager
    def use(cls, config: TreeConfig) -> Generator[TreeConfig, None, None]:
        """Context manager installing a prebuilt config for the current thread."""
        previous = getattr(cls._local, "override", None)
        cls._local.override = config
        try:
            yield config
        finally:
            cls._local.override = previous

    @classmethod
    def reset_to_defaults(cls) -> None:
        """Reset default and clear thread-local config state."""
        with cls._lock:
            cls._default_instance = cls()
        cls._local.override = None


def _apply_overrides(config: TreeConfig, overrides: Dict[str, Any]) -> None:
    for key, value in overrides.items():
        if key in TIMEOUT_FIELDS:
            base_setting: TimeoutSettings = getattr(config, key)
            if isinstance(value, TimeoutSettings):
                setattr(config, key, deepcopy(value))
            elif isinstance(value, dict):
                setattr(config, key, base_setting.with_overrides(
                    timeout=value.get("timeout"),
                    interval=value.get("interval"),
                ))
            else:
                raise ConfigError(f"Invalid override for {key}: {value}")
        elif key == "query":
            if isinstance(value, QuerySettings):
                config.query = value
            elif isinstance(value, dict):
                changes = dict(value)
                if "text_types" in changes:
                    changes["text_types"] = tuple(changes["text_types"])
                try:
                    config.query = replace(config.query, **changes)
                except TypeError as e:
                    raise ConfigError(f"Invalid query override: {e}") from e
            else:
                raise ConfigError(f"Invalid override for query: {value}")
        else:
            raise ConfigError(f"Unknown TreeConfig field: {key}")


_validator: Optional[Draft202012Validator] = None


def _validate(data: Dict[str, Any]) -> None:
    """Validate config data against the bundled JSON schema."""
    global _validator
    if _validator is None:
        with open(SCHEMA_PATH, "r", encoding="utf-8") as f:
            _validator = Draft202012Validator(json.load(f))

    errors = sorted(_validator.iter_errors(data), key=lambda e: str(list(e.path)))
    if errors:
        lines = ["Config schema validation failed:"]
        for e in errors:
            lines.append(f"- {list(e.path)}: {e.message}")
        raise ConfigError("\n".join(lines))


def available_presets() -> Dict[str, Dict[str, Any]]:
    return list_presets()
