#!/usr/bin/env python3
"""Settings record, validation and persistence for TmpMaker."""

import logging
import math
import re
from dataclasses import dataclass

from .constants import (
    DEFAULT_AUTO_CLEANUP,
    DEFAULT_RETENTION_DAYS,
    DEFAULT_SETTINGS,
    DEFAULT_TMP_FOLDER,
)

logger = logging.getLogger(__name__)

_INT_PREFIX_RE = re.compile(r"^\s*([+-]?\d+)")
_TRUE_WORDS = {"true", "yes", "on", "1"}
_FALSE_WORDS = {"false", "no", "off", "0"}


def coerce_folder(value) -> str:
    """Empty folder text falls back to the default folder."""
    if not isinstance(value, str) or not value:
        return DEFAULT_TMP_FOLDER
    return value


def coerce_retention_days(value) -> int:
    """Read a retention value the way the settings field does.

    Only the leading integer counts ("12 days" -> 12). Anything non-numeric
    or negative falls back to the default.
    """
    if isinstance(value, bool):
        return DEFAULT_RETENTION_DAYS
    if isinstance(value, float) and not math.isfinite(value):
        return DEFAULT_RETENTION_DAYS
    if isinstance(value, (int, float)):
        days = int(value)
    else:
        match = _INT_PREFIX_RE.match(str(value))
        if not match:
            return DEFAULT_RETENTION_DAYS
        days = int(match.group(1))
    return days if days >= 0 else DEFAULT_RETENTION_DAYS


def parse_bool(value) -> bool:
    if isinstance(value, bool):
        return value
    word = str(value).strip().lower()
    if word in _TRUE_WORDS:
        return True
    if word in _FALSE_WORDS:
        return False
    raise ValueError(f"Not a boolean: {value!r}")


@dataclass
class TmpMakerSettings:
    tmp_folder: str = DEFAULT_TMP_FOLDER
    retention_days: int = DEFAULT_RETENTION_DAYS
    auto_cleanup: bool = DEFAULT_AUTO_CLEANUP

    def to_dict(self) -> dict:
        return {
            "tmpFolder": self.tmp_folder,
            "retentionDays": self.retention_days,
            "autoCleanup": self.auto_cleanup,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "TmpMakerSettings":
        merged = {**DEFAULT_SETTINGS, **data}
        try:
            auto_cleanup = parse_bool(merged["autoCleanup"])
        except ValueError:
            logger.warning("Ignoring invalid autoCleanup value %r", merged["autoCleanup"])
            auto_cleanup = DEFAULT_AUTO_CLEANUP
        return cls(
            tmp_folder=coerce_folder(merged["tmpFolder"]),
            retention_days=coerce_retention_days(merged["retentionDays"]),
            auto_cleanup=auto_cleanup,
        )


def load_settings(host) -> TmpMakerSettings:
    """Merge stored values over the defaults, returning defaults on any error."""
    try:
        data = host.load_settings_data()
    except (OSError, ValueError) as e:
        logger.warning("Could not read stored settings, using defaults: %s", e)
        return TmpMakerSettings()
    if data is None:
        return TmpMakerSettings()
    if not isinstance(data, dict):
        logger.warning("Stored settings are not an object, using defaults")
        return TmpMakerSettings()
    return TmpMakerSettings.from_dict(data)


def save_settings(host, settings: TmpMakerSettings):
    host.persist_settings(settings.to_dict())
