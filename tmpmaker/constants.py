#!/usr/bin/env python3
"""Shared defaults, paths and patterns for TmpMaker."""

import re

PLUGIN_ID = "tmp-maker"
PLUGIN_NAME = "TmpMaker"

# Settings live where the host keeps per-plugin data inside the vault.
CONFIG_DIRNAME = ".obsidian"
SETTINGS_RELPATH = f"{CONFIG_DIRNAME}/plugins/{PLUGIN_ID}/data.json"

DEFAULT_TMP_FOLDER = "tmp"
DEFAULT_RETENTION_DAYS = 14
DEFAULT_AUTO_CLEANUP = True

DEFAULT_SETTINGS = {
    "tmpFolder": DEFAULT_TMP_FOLDER,
    "retentionDays": DEFAULT_RETENTION_DAYS,
    "autoCleanup": DEFAULT_AUTO_CLEANUP,
}

NOTE_EXTENSION = "md"
NOTE_DATE_FORMAT = "%Y-%m-%d"
NOTE_BASENAME_RE = re.compile(r"^(\d{4})-(\d{2})-(\d{2})$")

VAULT_ENV = "TMPMAKER_VAULT"
EDITOR_ENV = "TMPMAKER_EDITOR"
