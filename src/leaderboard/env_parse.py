"""Environment variable parsing for leaderboard settings.

- Unset / empty / whitespace -> default value.
- strict=True (default): bad values raise ``ConfigError``.
- strict=False: bad values log a warning and fall back (unparseable ->
  default, out of range -> clamped to the violated bound).
"""

from __future__ import annotations

import logging
import os

logger = logging.getLogger(__name__)


class ConfigError(Exception):
    """Raised when an environment variable has an invalid value (strict mode)."""


def _read(name: str) -> str | None:
    """Stripped value of ``name``, or None when unset or blank."""
    raw = os.environ.get(name)
    if raw is None or raw.strip() == "":
        return None
    return raw.strip()


def _reject(message: str, fallback: object, *, strict: bool) -> None:
    if strict:
        raise ConfigError(message)
    logger.warning("%s, using %r", message, fallback)


TRUTHY: frozenset[str] = frozenset({"1", "true", "yes", "on"})
FALSEY: frozenset[str] = frozenset({"0", "false", "no", "off"})


def parse_bool(name: str, default: bool = False, *, strict: bool = True) -> bool:
    """Parse a boolean environment variable.

    Truthy: ``1 true yes on``; falsey: ``0 false no off`` (case-insensitive).
    Unset or blank gives ``default``.
    """
    v = _read(name)
    if v is None:
        return default
    if v.lower() in TRUTHY:
        return True
    if v.lower() in FALSEY:
        return False
    _reject(f"Invalid boolean value for {name}: {v!r}", default, strict=strict)
    return default


def parse_int(
    name: str,
    default: int | None = None,
    *,
    min_value: int | None = None,
    max_value: int | None = None,
    strict: bool = True,
) -> int | None:
    """Parse an integer environment variable.

    Args:
        name: Environment variable name.
        default: Value when unset or (non-strict) unparseable.
        min_value: Optional lower bound (inclusive).
        max_value: Optional upper bound (inclusive).
        strict: If *True*, non-integer or out-of-range values raise
                :class:`ConfigError`.
    """
    v = _read(name)
    if v is None:
        return default
    try:
        result = int(v)
    except ValueError:
        _reject(f"Invalid integer value for {name}: {v!r}", default, strict=strict)
        return default
    if min_value is not None and result < min_value:
        _reject(f"{name}={result} is below minimum {min_value}", min_value, strict=strict)
        return min_value
    if max_value is not None and result > max_value:
        _reject(f"{name}={result} is above maximum {max_value}", max_value, strict=strict)
        return max_value
    return result


def parse_enum(
    name: str,
    allowed: set[str],
    default: str | None = None,
    *,
    casefold: bool = True,
    strict: bool = True,
) -> str | None:
    """Parse an enum-like environment variable.

    With ``casefold`` the match is case-insensitive and the canonical
    spelling from ``allowed`` is returned (``"debug"`` -> ``"DEBUG"``).
    """
    v = _read(name)
    if v is None:
        return default
    if casefold:
        match = {a.lower(): a for a in allowed}.get(v.lower())
    else:
        match = v if v in allowed else None
    if match is None:
        _reject(
            f"Invalid value for {name}: {v!r} (allowed: {sorted(allowed)})",
            default,
            strict=strict,
        )
        return default
    return match
