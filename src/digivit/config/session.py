"""Session configuration for a single acquisition run."""

from __future__ import annotations

import ipaddress
import math
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Mapping, MutableMapping

import yaml

from ..protocol.transport import (
    DEFAULT_LOCAL_PORT,
    DEFAULT_REPLY_TIMEOUT_S,
    DEFAULT_SENSOR_PORT,
)


class ConfigError(ValueError):
    """Raised for configuration that cannot start a run."""


def _parse_ipv4(name: str, value: Any) -> str:
    text = str(value).strip() if value is not None else ""
    try:
        return str(ipaddress.IPv4Address(text))
    except ValueError as exc:
        raise ConfigError(f"{name} must be a dotted IPv4 address, got {value!r}") from exc


def _parse_positive_float(name: str, value: Any) -> float:
    try:
        number = float(value)
    except (TypeError, ValueError) as exc:
        raise ConfigError(f"{name} must be a number, got {value!r}") from exc
    if not math.isfinite(number) or number <= 0.0:
        raise ConfigError(f"{name} must be a positive number, got {value!r}")
    return number


def _parse_positive_int(name: str, value: Any) -> int:
    if isinstance(value, bool):
        raise ConfigError(f"{name} must be a positive integer, got {value!r}")
    number = _parse_positive_float(name, value)
    if not number.is_integer():
        raise ConfigError(f"{name} must be a whole number, got {value!r}")
    return int(number)


def _parse_port(name: str, value: Any) -> int:
    if isinstance(value, bool):
        raise ConfigError(f"{name} must be a port number, got {value!r}")
    try:
        port = int(value)
    except (TypeError, ValueError) as exc:
        raise ConfigError(f"{name} must be a port number, got {value!r}") from exc
    if not 0 <= port <= 65535:
        raise ConfigError(f"{name} out of range: {port}")
    return port


# Settings a user-supplied mapping may provide.
_MAPPING_FIELDS = frozenset(
    ("sensor_address", "host_address", "sample_interval_s", "sample_count")
)


@dataclass(frozen=True)
class SessionConfig:
    """
    Immutable inputs of one run.

    ``sample_interval_s`` and ``sample_count`` may be given as strings at the
    boundary (see :meth:`from_values`); once constructed they are numbers.
    The ports and reply timeout are fixed by the sensor and only exposed so
    tests can run against the loopback interface.
    """

    sensor_address: str
    host_address: str
    sample_interval_s: float
    sample_count: int
    local_port: int = DEFAULT_LOCAL_PORT
    sensor_port: int = DEFAULT_SENSOR_PORT
    reply_timeout_s: float = DEFAULT_REPLY_TIMEOUT_S

    @classmethod
    def from_values(
        cls,
        sensor_address: Any,
        host_address: Any,
        sample_interval_s: Any,
        sample_count: Any,
        **transport: Any,
    ) -> "SessionConfig":
        """Validate raw (possibly string-encoded) inputs and build a config."""
        extras: Dict[str, Any] = {}
        if transport.get("local_port") is not None:
            extras["local_port"] = _parse_port("local_port", transport["local_port"])
        if transport.get("sensor_port") is not None:
            extras["sensor_port"] = _parse_port("sensor_port", transport["sensor_port"])
        if transport.get("reply_timeout_s") is not None:
            extras["reply_timeout_s"] = _parse_positive_float(
                "reply_timeout_s", transport["reply_timeout_s"]
            )
        return cls(
            sensor_address=_parse_ipv4("sensor_address", sensor_address),
            host_address=_parse_ipv4("host_address", host_address),
            sample_interval_s=_parse_positive_float("sample_interval_s", sample_interval_s),
            sample_count=_parse_positive_int("sample_count", sample_count),
            **extras,
        )

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any] | None) -> "SessionConfig":
        """
        Build from a mapping such as a YAML document.

        Only the four session settings are read; the ports and reply timeout
        are fixed by the sensor and unknown keys are ignored.
        """
        normalized = _normalize_mapping(data or {})
        payload = {key: normalized[key] for key in normalized.keys() & _MAPPING_FIELDS}
        missing = [name for name in sorted(_MAPPING_FIELDS) if payload.get(name) is None]
        if missing:
            raise ConfigError(f"Missing required setting(s): {', '.join(missing)}")
        return cls.from_values(**payload)

    @property
    def sensor_endpoint(self) -> tuple[str, int]:
        return self.sensor_address, self.sensor_port


def _normalize_mapping(data: Mapping[str, Any]) -> MutableMapping[str, Any]:
    """Flatten a top-level ``session`` block into the surrounding mapping."""
    merged: MutableMapping[str, Any] = {}
    for key, value in data.items():
        if key == "session" and isinstance(value, Mapping):
            merged.update(value)
        else:
            merged[key] = value
    return merged


def load_defaults(path: str | Path | None) -> Dict[str, Any]:
    """
    Load session defaults from a YAML file.

    ``None`` yields an empty mapping; a path that does not exist or does not
    parse as YAML raises :class:`ConfigError`.
    """
    if path is None:
        return {}
    cfg_path = Path(path)
    if not cfg_path.is_file():
        raise ConfigError(f"Config file not found: {cfg_path}")
    try:
        with cfg_path.open("r", encoding="utf-8") as fh:
            raw = yaml.safe_load(fh) or {}
    except yaml.YAMLError as exc:
        raise ConfigError(f"Invalid YAML in {cfg_path}: {exc}") from exc
    if not isinstance(raw, Mapping):
        raise ConfigError(f"Expected mapping in {cfg_path}, got {type(raw).__name__}")
    return dict(_normalize_mapping(raw))


__all__ = ["ConfigError", "SessionConfig", "load_defaults"]
