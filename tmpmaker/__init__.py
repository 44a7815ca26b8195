"""TmpMaker: dated scratch notes with automatic retention cleanup."""

from .host import LocalHost, VaultEntry, VaultHost, normalize_path
from .notes import (
    CREATED,
    FAILED,
    OPENED,
    cleanup_old_notes,
    create_temp_note,
    format_date,
    parse_note_date,
)
from .plugin import TmpMakerPlugin
from .settings import TmpMakerSettings, load_settings, save_settings

__version__ = "1.0.0"
