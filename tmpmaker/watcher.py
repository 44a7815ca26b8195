#!/usr/bin/env python3
"""Reload plugin settings when the stored settings file changes on disk.

Sync tools and other processes may rewrite ``data.json`` while a session
is open; the plugin picks the new values up instead of clobbering them on
its next save.
"""

import logging
import time
from pathlib import Path

from watchdog.events import FileSystemEventHandler
from watchdog.observers.polling import PollingObserver as Observer

logger = logging.getLogger(__name__)


class SettingsFileHandler(FileSystemEventHandler):
    """Watchdog handler that reloads settings when one file changes."""

    def __init__(self, plugin, settings_path: Path):
        super().__init__()
        self.plugin = plugin
        self.settings_path = Path(settings_path)

    def _matches(self, path) -> bool:
        if not path:
            return False
        if isinstance(path, bytes):
            path = path.decode()
        return Path(path).name == self.settings_path.name

    def _reload(self):
        try:
            self.plugin.on_external_settings_change()
        except Exception:
            logger.exception("Settings reload failed")

    def on_created(self, event):
        if not event.is_directory and self._matches(event.src_path):
            self._reload()

    def on_modified(self, event):
        if not event.is_directory and self._matches(event.src_path):
            self._reload()

    def on_moved(self, event):
        # Atomic writes land as a rename onto the settings file.
        if not event.is_directory and self._matches(getattr(event, "dest_path", "")):
            self._reload()


def watch_settings(plugin, settings_path: Path, interval: float = 1.0):
    """Watch the settings file until KeyboardInterrupt."""
    settings_path = Path(settings_path)
    settings_path.parent.mkdir(parents=True, exist_ok=True)

    handler = SettingsFileHandler(plugin, settings_path)
    observer = Observer(timeout=interval)
    observer.schedule(handler, str(settings_path.parent), recursive=False)
    observer.start()

    logger.info("Watching %s for settings changes", settings_path)

    try:
        while True:
            time.sleep(interval)
    except KeyboardInterrupt:
        logger.info("Shutting down settings watcher")
    finally:
        observer.stop()
        observer.join()
