#!/usr/bin/env python3
"""TmpMaker plugin lifecycle.

Wires the note routines into a host: loads settings, registers the
ribbon action and palette commands, and schedules the startup cleanup
for when the vault is ready.
"""

import logging
from dataclasses import dataclass
from typing import Callable, Optional

from .notes import cleanup_old_notes, create_temp_note
from .settings import TmpMakerSettings, load_settings, save_settings
from .settings_form import TmpMakerSettingTab

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Command:
    id: str
    name: str
    callback: Callable[[], object]


@dataclass(frozen=True)
class RibbonAction:
    icon: str
    title: str
    callback: Callable[[], object]


class TmpMakerPlugin:
    def __init__(self, host):
        self.host = host
        self.settings = TmpMakerSettings()
        self.commands: dict[str, Command] = {}
        self.ribbon_actions: list[RibbonAction] = []
        self.setting_tab: Optional[TmpMakerSettingTab] = None

    def onload(self):
        self.load_settings()

        self.add_ribbon_icon("file-plus", "Create temp note", self.create_temp_note)
        self.add_command("create-temp-note", "Create temp note", self.create_temp_note)
        self.add_command("cleanup-old-temp-notes", "Cleanup old temp notes", self.cleanup_old_notes)

        self.setting_tab = TmpMakerSettingTab(self)

        if self.settings.auto_cleanup:
            self.host.on_layout_ready(self.cleanup_old_notes)

        logger.debug("Plugin loaded with settings %s", self.settings)

    def onunload(self):
        self.commands.clear()
        self.ribbon_actions.clear()
        self.setting_tab = None

    def add_command(self, command_id: str, name: str, callback: Callable[[], object]):
        self.commands[command_id] = Command(command_id, name, callback)

    def add_ribbon_icon(self, icon: str, title: str, callback: Callable[[], object]):
        self.ribbon_actions.append(RibbonAction(icon, title, callback))

    def execute_command(self, command_id: str):
        return self.commands[command_id].callback()

    def load_settings(self):
        self.settings = load_settings(self.host)

    def save_settings(self):
        save_settings(self.host, self.settings)

    def on_external_settings_change(self):
        self.load_settings()
        logger.info("Reloaded settings after external change: %s", self.settings)

    def create_temp_note(self) -> str:
        return create_temp_note(self.host, self.settings)

    def cleanup_old_notes(self) -> list[str]:
        return cleanup_old_notes(self.host, self.settings)
