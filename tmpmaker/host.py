#!/usr/bin/env python3
"""Host capabilities used by TmpMaker, plus a local directory-backed host.

The note routines only talk to a host object. Anything that offers the
methods of ``VaultHost`` will do: the bundled ``LocalHost`` treats a plain
directory as the vault, tests use an in-memory double.

Paths handed to a host are vault-relative and use ``/`` separators.
"""

import json
import logging
import shlex
import subprocess
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Optional

from .constants import SETTINGS_RELPATH

logger = logging.getLogger(__name__)


def normalize_path(path: str) -> str:
    """Collapse separators and strip leading/trailing slashes.

    ``""`` stands for the vault root.
    """
    parts = [p for p in str(path).replace("\\", "/").split("/") if p and p != "."]
    return "/".join(parts)


def join_path(folder: str, name: str) -> str:
    folder = normalize_path(folder)
    return f"{folder}/{name}" if folder else name


@dataclass(frozen=True)
class VaultEntry:
    """A direct child of a vault folder."""
    path: str
    is_file: bool

    @property
    def name(self) -> str:
        return self.path.rsplit("/", 1)[-1]

    @property
    def basename(self) -> str:
        name = self.name
        if not self.is_file or "." not in name[1:]:
            return name
        return name.rsplit(".", 1)[0]

    @property
    def extension(self) -> str:
        name = self.name
        if not self.is_file or "." not in name[1:]:
            return ""
        return name.rsplit(".", 1)[1]


class VaultHost:
    """Capability contract between the plugin and its host application."""

    def read_dir(self, path: str) -> list[VaultEntry]:
        raise NotImplementedError

    def exists(self, path: str) -> bool:
        raise NotImplementedError

    def is_file(self, path: str) -> bool:
        raise NotImplementedError

    def is_folder(self, path: str) -> bool:
        raise NotImplementedError

    def create_file(self, path: str, content: str):
        raise NotImplementedError

    def delete_file(self, path: str):
        raise NotImplementedError

    def create_folder(self, path: str):
        raise NotImplementedError

    def open_file(self, path: str):
        raise NotImplementedError

    def notice(self, message: str):
        raise NotImplementedError

    def load_settings_data(self) -> Optional[dict]:
        raise NotImplementedError

    def persist_settings(self, data: dict):
        raise NotImplementedError

    def on_layout_ready(self, callback: Callable[[], None]):
        raise NotImplementedError


def atomic_write(path: Path, content: str, encoding: str = "utf-8"):
    """Write content atomically by writing to a temp file then renaming."""
    tmp_path = path.with_suffix(path.suffix + ".tmp")
    tmp_path.write_text(content, encoding=encoding)
    tmp_path.replace(path)


class LocalHost(VaultHost):
    """Host backed by a directory on disk."""

    def __init__(self, vault_root: Path, editor: Optional[str] = None):
        self.vault_root = Path(vault_root)
        self.editor = editor
        self.active_file: Optional[str] = None
        self.notices: list[str] = []
        self._layout_ready = False
        self._layout_callbacks: list[Callable[[], None]] = []

    @property
    def settings_path(self) -> Path:
        return self.vault_root / SETTINGS_RELPATH

    def _resolve(self, path: str) -> Path:
        """Map a vault path onto disk, refusing anything outside the vault."""
        rel = normalize_path(path)
        target = self.vault_root / rel if rel else self.vault_root
        if not target.resolve().is_relative_to(self.vault_root.resolve()):
            raise PermissionError(f"Path is outside the vault: {path}")
        return target

    def read_dir(self, path: str) -> list[VaultEntry]:
        folder = normalize_path(path)
        entries = []
        for child in sorted(self._resolve(folder).iterdir(), key=lambda p: p.name):
            entries.append(VaultEntry(path=join_path(folder, child.name), is_file=child.is_file()))
        return entries

    def _inside(self, path: str):
        try:
            return self._resolve(path)
        except OSError:
            return None

    def exists(self, path: str) -> bool:
        target = self._inside(path)
        return target is not None and target.exists()

    def is_file(self, path: str) -> bool:
        target = self._inside(path)
        return target is not None and target.is_file()

    def is_folder(self, path: str) -> bool:
        target = self._inside(path)
        return target is not None and target.is_dir()

    def create_file(self, path: str, content: str):
        # "x" refuses to clobber a file that appeared in the meantime.
        with self._resolve(path).open("x", encoding="utf-8") as fh:
            fh.write(content)
        logger.debug("Created %s", path)

    def delete_file(self, path: str):
        self._resolve(path).unlink()
        logger.debug("Deleted %s", path)

    def create_folder(self, path: str):
        self._resolve(path).mkdir(parents=True, exist_ok=True)
        logger.debug("Created folder %s", path)

    def open_file(self, path: str):
        self.active_file = normalize_path(path)
        if not self.editor:
            return
        try:
            argv = shlex.split(self.editor)
        except ValueError as e:
            raise OSError(f"Invalid editor command {self.editor!r}: {e}") from e
        if not argv:
            raise OSError("Editor command is empty")
        cmd = argv + [str(self._resolve(path))]
        logger.info("Opening %s with %s", path, cmd[0])
        # Detached: the editor outlives this process.
        subprocess.Popen(cmd, start_new_session=True)

    def notice(self, message: str):
        self.notices.append(message)
        print(message)

    def load_settings_data(self) -> Optional[dict]:
        path = self.settings_path
        if not path.exists():
            return None
        return json.loads(path.read_text(encoding="utf-8"))

    def persist_settings(self, data: dict):
        path = self.settings_path
        path.parent.mkdir(parents=True, exist_ok=True)
        atomic_write(path, json.dumps(data, indent=2, ensure_ascii=False))

    def on_layout_ready(self, callback: Callable[[], None]):
        if self._layout_ready:
            callback()
        else:
            self._layout_callbacks.append(callback)

    def layout_ready(self):
        """Mark the vault as ready and run queued callbacks once."""
        if self._layout_ready:
            return
        self._layout_ready = True
        callbacks, self._layout_callbacks = self._layout_callbacks, []
        for callback in callbacks:
            try:
                callback()
            except Exception:
                logger.exception("Layout-ready callback failed")
