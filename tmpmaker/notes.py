#!/usr/bin/env python3
"""Create-or-open and retention cleanup for dated temp notes."""

import logging
from datetime import date, datetime, timedelta
from typing import Optional

from .constants import NOTE_BASENAME_RE, NOTE_DATE_FORMAT, NOTE_EXTENSION
from .host import join_path, normalize_path
from .settings import TmpMakerSettings

logger = logging.getLogger(__name__)

CREATED = "created"
OPENED = "opened"
FAILED = "failed"

__all__ = [
    "CREATED",
    "FAILED",
    "OPENED",
    "cleanup_old_notes",
    "create_temp_note",
    "cutoff_date",
    "format_date",
    "note_filename",
    "parse_note_date",
]


def format_date(d: date) -> str:
    return d.strftime(NOTE_DATE_FORMAT)


def note_filename(d: date) -> str:
    return f"{format_date(d)}.{NOTE_EXTENSION}"


def note_template(d: date) -> str:
    return f"# {format_date(d)}\n\n"


def parse_note_date(basename: str) -> Optional[date]:
    """Return the calendar date a note basename names, or None.

    Only zero-padded ``YYYY-MM-DD`` naming a real day is accepted;
    ``2024-13-40`` and ``2023-02-29`` are rejected.
    """
    match = NOTE_BASENAME_RE.match(basename)
    if not match:
        return None
    year, month, day = (int(part) for part in match.groups())
    try:
        return date(year, month, day)
    except ValueError:
        return None


def cutoff_date(today: date, retention_days: int) -> date:
    try:
        return today - timedelta(days=retention_days)
    except OverflowError:
        return date.min


def _today(now: Optional[datetime]) -> date:
    return (now or datetime.now()).date()


def ensure_folder_exists(host, folder: str):
    if folder and not host.exists(folder):
        host.create_folder(folder)


def create_temp_note(host, settings: TmpMakerSettings, now: Optional[datetime] = None) -> str:
    """Open today's temp note, creating it (and its folder) first if needed.

    Returns ``CREATED``, ``OPENED`` or ``FAILED``. Host I/O errors are
    logged and reported through a notice, never raised.
    """
    today = _today(now)
    folder = normalize_path(settings.tmp_folder)
    file_name = note_filename(today)
    file_path = join_path(folder, file_name)

    try:
        ensure_folder_exists(host, folder)

        if host.is_file(file_path):
            host.open_file(file_path)
            host.notice(f"Opened existing temp note: {file_name}")
            return OPENED

        host.create_file(file_path, note_template(today))
        host.open_file(file_path)
        host.notice(f"Created temp note: {file_name}")
        return CREATED
    except OSError as e:
        logger.exception("Failed to create temp note %s", file_path)
        host.notice(f"Failed to create temp note: {e}")
        return FAILED


def cleanup_old_notes(host, settings: TmpMakerSettings, now: Optional[datetime] = None) -> list[str]:
    """Delete temp notes dated strictly before today minus the retention window.

    Only direct children named ``YYYY-MM-DD.md`` are considered. A failed
    delete is logged and the scan moves on. Returns deleted basenames in
    the order they were encountered.
    """
    if settings.retention_days <= 0:
        return []

    folder = normalize_path(settings.tmp_folder)
    if not host.is_folder(folder):
        logger.debug("Temp folder %r does not exist, nothing to clean", folder)
        return []

    cutoff = cutoff_date(_today(now), settings.retention_days)
    deleted: list[str] = []

    try:
        entries = host.read_dir(folder)
    except OSError:
        logger.exception("Failed to list temp folder %s", folder)
        return []

    for entry in entries:
        if not entry.is_file or entry.extension != NOTE_EXTENSION:
            continue

        note_date = parse_note_date(entry.basename)
        if note_date is None:
            continue

        if note_date < cutoff:
            try:
                host.delete_file(entry.path)
                deleted.append(entry.basename)
            except OSError:
                logger.exception("Failed to delete %s", entry.path)

    if deleted:
        file_list = "\n".join(f"{i}. {name}" for i, name in enumerate(deleted, 1))
        host.notice(f"Cleaned up {len(deleted)} old temp note(s):\n{file_list}")
        logger.info("Cleaned up %d temp note(s) older than %s", len(deleted), cutoff)

    return deleted
