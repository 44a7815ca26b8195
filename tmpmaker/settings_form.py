#!/usr/bin/env python3
"""Settings tab: three fields mapped onto the settings record."""

import logging
from dataclasses import dataclass

from .settings import coerce_folder, coerce_retention_days, parse_bool

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SettingField:
    key: str
    attr: str
    name: str
    desc: str
    placeholder: str = ""
    kind: str = "text"


FIELDS = (
    SettingField(
        key="tmpFolder",
        attr="tmp_folder",
        name="Temp folder",
        desc="Folder path where temporary notes will be created",
        placeholder="Tmp",
    ),
    SettingField(
        key="retentionDays",
        attr="retention_days",
        name="Retention days",
        desc="Delete temp notes older than this many days (0 to disable)",
        placeholder="14",
    ),
    SettingField(
        key="autoCleanup",
        attr="auto_cleanup",
        name="Auto-cleanup on startup",
        desc="Automatically delete old temp notes when the vault opens",
        kind="toggle",
    ),
)

_VALIDATORS = {
    "tmpFolder": coerce_folder,
    "retentionDays": coerce_retention_days,
    "autoCleanup": parse_bool,
}


class TmpMakerSettingTab:
    """Edits the plugin's settings, saving after every change."""

    def __init__(self, plugin):
        self.plugin = plugin

    def field(self, key: str) -> SettingField:
        for field in FIELDS:
            if field.key == key:
                return field
        raise KeyError(key)

    def display(self) -> list[tuple[SettingField, object]]:
        """Fields paired with their current values, in display order."""
        settings = self.plugin.settings
        return [(field, getattr(settings, field.attr)) for field in FIELDS]

    def on_change(self, key: str, value):
        """Apply one field edit and persist.

        Raises ValueError for a toggle value that is not a boolean and
        KeyError for an unknown field.
        """
        field = self.field(key)
        new_value = _VALIDATORS[key](value)
        setattr(self.plugin.settings, field.attr, new_value)
        logger.info("Setting %s changed to %r", key, new_value)
        self.plugin.save_settings()
        return new_value
