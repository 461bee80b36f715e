"""
Runtime config loader for value-object defaults.

Related: valueobjects.shared_kernel.primitives.instant_granularity,
  valueobjects.shared_kernel.primitives.money
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from datetime import tzinfo
from pathlib import Path
from typing import Any, Mapping

import yaml
from dateutil import tz

log = logging.getLogger(__name__)

_ENV_NAME_KEY = "VALUEOBJECTS_ENV"
_CONFIG_PATH_KEY = "VALUEOBJECTS_CONFIG"
_ALLOWED_ENVS = ("dev", "prod", "test")

_NAIVE_TIMEZONE_ENV_KEYS = ("VALUEOBJECTS_NAIVE_TIMEZONE",)
_MONEY_CURRENCY_ENV_KEYS = ("VALUEOBJECTS_MONEY_CURRENCY",)
_MONEY_SCALE_ENV_KEYS = ("VALUEOBJECTS_MONEY_SCALE",)

_DEFAULT_NAIVE_TIMEZONE = "UTC"
_DEFAULT_MONEY_CURRENCY = "USD"
_DEFAULT_MONEY_SCALE = 20

_CURRENCY_RE = re.compile(r"^[A-Z]{3}$")


@dataclass(frozen=True, slots=True)
class ValueObjectsConfig:
    """
    Immutable runtime defaults for range parsing and money arithmetic.

    Related: valueobjects.adapters.inbound.loose_range_data,
      valueobjects.shared_kernel.primitives.money
    """

    naive_timezone: str = _DEFAULT_NAIVE_TIMEZONE
    money_currency: str = _DEFAULT_MONEY_CURRENCY
    money_scale: int = _DEFAULT_MONEY_SCALE

    def __post_init__(self) -> None:
        """
        Validate config invariants.

        Args:
            None.
        Returns:
            None.
        Assumptions:
            Timezone names are resolvable by `dateutil.tz.gettz`.
        Raises:
            ValueError: If any value violates required bounds.
        Side Effects:
            Normalizes currency code to upper case and timezone name by stripping.
        """
        timezone_name = self.naive_timezone.strip()
        if not timezone_name:
            raise ValueError("naive_timezone must be a non-empty zone name")
        if tz.gettz(timezone_name) is None:
            raise ValueError(f"naive_timezone is not a known zone, got {timezone_name!r}")
        object.__setattr__(self, "naive_timezone", timezone_name)

        currency = self.money_currency.strip().upper()
        if not _CURRENCY_RE.match(currency):
            raise ValueError(
                "money_currency must be a 3-letter ISO-4217 code, "
                f"got {self.money_currency!r}"
            )
        object.__setattr__(self, "money_currency", currency)

        if self.money_scale < 0:
            raise ValueError(f"money_scale must be >= 0, got {self.money_scale}")

    def naive_tzinfo(self) -> tzinfo:
        """Timezone attached to naive date-time text and bare dates."""
        resolved = tz.gettz(self.naive_timezone)
        if resolved is None:
            raise ValueError(f"naive_timezone is not a known zone, got {self.naive_timezone!r}")
        return resolved


def load_value_objects_config(
    *,
    environ: Mapping[str, str],
) -> ValueObjectsConfig:
    """
    Load value-object defaults from YAML and env overrides.

    Args:
        environ: Environment mapping used to resolve env and override values.
    Returns:
        ValueObjectsConfig: Validated runtime settings.
    Assumptions:
        Optional `value_objects` section lives in the YAML file.
    Raises:
        FileNotFoundError: If explicit `VALUEOBJECTS_CONFIG` path does not exist.
        ValueError: If YAML or environment values are invalid.
    Side Effects:
        Reads at most one YAML file from disk.
    """
    config_path, explicit = _resolve_config_path(environ=environ)
    file_payload = _load_optional_payload(path=config_path, explicit=explicit)

    naive_timezone = _resolve_str_setting(
        environ=environ,
        env_keys=_NAIVE_TIMEZONE_ENV_KEYS,
        payload=file_payload,
        payload_key="naive_timezone",
        default=_DEFAULT_NAIVE_TIMEZONE,
    )
    money_currency = _resolve_str_setting(
        environ=environ,
        env_keys=_MONEY_CURRENCY_ENV_KEYS,
        payload=file_payload,
        payload_key="money_currency",
        default=_DEFAULT_MONEY_CURRENCY,
    )
    money_scale = _resolve_int_setting(
        environ=environ,
        env_keys=_MONEY_SCALE_ENV_KEYS,
        payload=file_payload,
        payload_key="money_scale",
        default=_DEFAULT_MONEY_SCALE,
    )

    config = ValueObjectsConfig(
        naive_timezone=naive_timezone,
        money_currency=money_currency,
        money_scale=money_scale,
    )
    log.info(
        "value objects config loaded: path=%s naive_timezone=%s money_currency=%s money_scale=%s",
        config_path,
        config.naive_timezone,
        config.money_currency,
        config.money_scale,
    )
    return config


def _resolve_config_path(*, environ: Mapping[str, str]) -> tuple[Path, bool]:
    """
    Resolve YAML path using explicit override or `VALUEOBJECTS_ENV`.

    Args:
        environ: Environment mapping.
    Returns:
        tuple[Path, bool]: Config path and whether it was set explicitly.
    Assumptions:
        `VALUEOBJECTS_CONFIG` has priority over env-derived path.
    Raises:
        ValueError: If env value is invalid.
    Side Effects:
        None.
    """
    override = environ.get(_CONFIG_PATH_KEY, "").strip()
    if override:
        return Path(override), True

    env_name = _resolve_env_name(environ=environ)
    return Path("configs") / env_name / "value_objects.yaml", False


def _resolve_env_name(*, environ: Mapping[str, str]) -> str:
    """
    Resolve normalized runtime environment name.

    Args:
        environ: Environment mapping.
    Returns:
        str: One of `dev`, `prod`, `test`.
    Assumptions:
        Missing env falls back to `dev`.
    Raises:
        ValueError: If value is outside allowed set.
    Side Effects:
        None.
    """
    raw_env = environ.get(_ENV_NAME_KEY, "dev").strip().lower()
    if raw_env not in _ALLOWED_ENVS:
        raise ValueError(
            f"{_ENV_NAME_KEY} must be one of {_ALLOWED_ENVS}, got {raw_env!r}"
        )
    return raw_env


def _load_optional_payload(*, path: Path, explicit: bool) -> Mapping[str, Any]:
    """
    Load optional `value_objects` mapping from YAML.

    Args:
        path: Config path.
        explicit: Whether the path came from `VALUEOBJECTS_CONFIG`.
    Returns:
        Mapping[str, Any]: `value_objects` mapping, or empty mapping.
    Assumptions:
        Unknown keys are ignored by this loader.
    Raises:
        FileNotFoundError: If an explicit YAML path does not exist.
        ValueError: If YAML structure is invalid.
    Side Effects:
        Reads one UTF-8 file from disk.
    """
    if not path.exists():
        if explicit:
            raise FileNotFoundError(f"value objects config not found: {path}")
        log.warning("value objects config %s not found: defaults applied", path)
        return {}
    raw = yaml.safe_load(path.read_text(encoding="utf-8"))
    if raw is None:
        return {}
    if not isinstance(raw, dict):
        raise ValueError("value objects config must be a mapping at top-level")

    section = raw.get("value_objects")
    if section is None:
        return {}
    if not isinstance(section, dict):
        raise ValueError("value_objects section must be a mapping")
    return section


def _resolve_str_setting(
    *,
    environ: Mapping[str, str],
    env_keys: tuple[str, ...],
    payload: Mapping[str, Any],
    payload_key: str,
    default: str,
) -> str:
    """
    Resolve string setting from env -> payload -> default precedence.

    Args:
        environ: Environment mapping.
        env_keys: Candidate env variable names by priority.
        payload: Parsed YAML subsection.
        payload_key: YAML key name.
        default: Fallback default value.
    Returns:
        str: Resolved non-empty string.
    Assumptions:
        Blank env values are treated as unset.
    Raises:
        ValueError: If YAML value is blank or non-string.
    Side Effects:
        None.
    """
    for env_key in env_keys:
        raw = environ.get(env_key, "").strip()
        if raw:
            return raw

    payload_value = payload.get(payload_key)
    if payload_value is None:
        return default
    if not isinstance(payload_value, str):
        raise ValueError(
            f"expected string for value_objects.{payload_key}, "
            f"got {type(payload_value).__name__}"
        )
    normalized = payload_value.strip()
    if not normalized:
        raise ValueError(f"value_objects.{payload_key} must be non-empty")
    return normalized


def _resolve_int_setting(
    *,
    environ: Mapping[str, str],
    env_keys: tuple[str, ...],
    payload: Mapping[str, Any],
    payload_key: str,
    default: int,
) -> int:
    """
    Resolve non-negative integer setting from env -> payload -> default precedence.

    Args:
        environ: Environment mapping.
        env_keys: Candidate env variable names by priority.
        payload: Parsed YAML subsection.
        payload_key: YAML key name.
        default: Fallback default value.
    Returns:
        int: Resolved integer value.
    Assumptions:
        String env values use base-10 integer format.
    Raises:
        ValueError: If provided value cannot be parsed as non-negative int.
    Side Effects:
        None.
    """
    for env_key in env_keys:
        raw = environ.get(env_key, "").strip()
        if raw:
            return _parse_non_negative_int(raw, key=env_key)

    payload_value = payload.get(payload_key)
    if payload_value is None:
        return default

    if isinstance(payload_value, bool) or not isinstance(payload_value, int):
        raise ValueError(
            f"expected int for value_objects.{payload_key}, "
            f"got {type(payload_value).__name__}"
        )
    if payload_value < 0:
        raise ValueError(
            f"value_objects.{payload_key} must be >= 0, got {payload_value}"
        )
    return payload_value


def _parse_non_negative_int(raw: str, *, key: str) -> int:
    try:
        parsed = int(raw, 10)
    except ValueError as error:
        raise ValueError(f"{key} must be int, got {raw!r}") from error
    if parsed < 0:
        raise ValueError(f"{key} must be >= 0, got {parsed}")
    return parsed


__all__ = [
    "ValueObjectsConfig",
    "load_value_objects_config",
]
