import json
import sys
import tempfile
import unittest
from datetime import datetime
from pathlib import Path
from unittest import mock

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from tmpmaker import notes  # noqa: E402
from tmpmaker.host import LocalHost, VaultEntry, normalize_path  # noqa: E402
from tmpmaker.settings import TmpMakerSettings  # noqa: E402

NOW = datetime(2024, 6, 15, 9, 0)


class PathHelperTests(unittest.TestCase):
    def test_normalize_path_collapses_separators(self):
        self.assertEqual("a/b", normalize_path("/a//b/"))
        self.assertEqual("a/b", normalize_path("a\\b"))
        self.assertEqual("", normalize_path("/"))

    def test_vault_entry_splits_basename_and_extension(self):
        entry = VaultEntry(path="tmp/2024-01-01.md", is_file=True)
        self.assertEqual("2024-01-01.md", entry.name)
        self.assertEqual("2024-01-01", entry.basename)
        self.assertEqual("md", entry.extension)

        folder = VaultEntry(path="tmp/archive.md", is_file=False)
        self.assertEqual("", folder.extension)


class LocalHostTests(unittest.TestCase):
    def setUp(self):
        self.temp = tempfile.TemporaryDirectory()
        self.vault = Path(self.temp.name)
        self.host = LocalHost(self.vault)

    def tearDown(self):
        self.temp.cleanup()

    def test_create_temp_note_writes_file_on_disk(self):
        with mock.patch("builtins.print"):
            result = notes.create_temp_note(self.host, TmpMakerSettings(), now=NOW)

        note = self.vault / "tmp" / "2024-06-15.md"
        self.assertEqual(notes.CREATED, result)
        self.assertEqual("# 2024-06-15\n\n", note.read_text(encoding="utf-8"))
        self.assertEqual("tmp/2024-06-15.md", self.host.active_file)

    def test_create_temp_note_keeps_existing_content(self):
        folder = self.vault / "tmp"
        folder.mkdir()
        (folder / "2024-06-15.md").write_text("keep me", encoding="utf-8")

        with mock.patch("builtins.print"):
            result = notes.create_temp_note(self.host, TmpMakerSettings(), now=NOW)

        self.assertEqual(notes.OPENED, result)
        self.assertEqual("keep me", (folder / "2024-06-15.md").read_text(encoding="utf-8"))

    def test_create_temp_note_fails_when_folder_path_is_a_file(self):
        (self.vault / "tmp").write_text("not a folder", encoding="utf-8")

        with mock.patch("builtins.print"), self.assertLogs("tmpmaker.notes", level="ERROR"):
            result = notes.create_temp_note(self.host, TmpMakerSettings(), now=NOW)

        self.assertEqual(notes.FAILED, result)
        self.assertTrue(self.host.notices[0].startswith("Failed to create temp note:"))

    def test_cleanup_scenario_on_disk(self):
        folder = self.vault / "tmp"
        folder.mkdir()
        for name in ("2024-01-01.md", "2024-06-01.md", "notes.md"):
            (folder / name).write_text("", encoding="utf-8")

        with mock.patch("builtins.print"):
            deleted = notes.cleanup_old_notes(
                self.host, TmpMakerSettings(retention_days=30), now=NOW
            )

        self.assertEqual(["2024-01-01"], deleted)
        self.assertEqual(["2024-06-01.md", "notes.md"], sorted(p.name for p in folder.iterdir()))

    def test_cleanup_missing_folder_creates_nothing(self):
        deleted = notes.cleanup_old_notes(self.host, TmpMakerSettings(), now=NOW)

        self.assertEqual([], deleted)
        self.assertFalse((self.vault / "tmp").exists())

    def test_settings_round_trip(self):
        self.assertIsNone(self.host.load_settings_data())
        data = {"tmpFolder": "scratch", "retentionDays": 7, "autoCleanup": False}
        self.host.persist_settings(data)

        self.assertEqual(data, json.loads(self.host.settings_path.read_text(encoding="utf-8")))
        self.assertEqual(data, self.host.load_settings_data())
        self.assertFalse((self.host.settings_path.parent / "data.json.tmp").exists())

    def test_open_file_launches_editor(self):
        host = LocalHost(self.vault, editor="code --wait")
        with mock.patch("tmpmaker.host.subprocess.Popen") as popen:
            host.open_file("tmp/2024-06-15.md")

        popen.assert_called_once_with(
            ["code", "--wait", str(self.vault / "tmp" / "2024-06-15.md")],
            start_new_session=True,
        )

    def test_create_temp_note_reports_bad_editor_command(self):
        host = LocalHost(self.vault, editor='code "unterminated')

        with mock.patch("builtins.print"), mock.patch("tmpmaker.host.subprocess.Popen") as popen, \
             self.assertLogs("tmpmaker.notes", level="ERROR"):
            result = notes.create_temp_note(host, TmpMakerSettings(), now=NOW)

        self.assertEqual(notes.FAILED, result)
        popen.assert_not_called()
        self.assertTrue((self.vault / "tmp" / "2024-06-15.md").exists())
        self.assertIn("Invalid editor command", host.notices[-1])

    def test_paths_outside_vault_are_refused(self):
        vault = self.vault / "vault"
        vault.mkdir()
        host = LocalHost(vault)

        self.assertFalse(host.exists("../outside"))
        self.assertFalse(host.is_folder(".."))
        with self.assertRaises(PermissionError):
            host.create_folder("../outside")
        with self.assertRaises(PermissionError):
            host.delete_file("../secret.md")

    def test_cleanup_never_reaches_outside_vault(self):
        vault = self.vault / "vault"
        outside = self.vault / "outside"
        vault.mkdir()
        outside.mkdir()
        stray = outside / "2000-01-01.md"
        stray.write_text("", encoding="utf-8")
        host = LocalHost(vault)

        deleted = notes.cleanup_old_notes(
            host, TmpMakerSettings(tmp_folder="../outside", retention_days=1), now=NOW
        )

        self.assertEqual([], deleted)
        self.assertTrue(stray.exists())

    def test_create_refuses_folder_outside_vault(self):
        vault = self.vault / "vault"
        vault.mkdir()
        host = LocalHost(vault)

        with mock.patch("builtins.print"), self.assertLogs("tmpmaker.notes", level="ERROR"):
            result = notes.create_temp_note(host, TmpMakerSettings(tmp_folder="../outside"), now=NOW)

        self.assertEqual(notes.FAILED, result)
        self.assertFalse((self.vault / "outside").exists())

    def test_layout_ready_runs_callbacks_once(self):
        calls = []
        self.host.on_layout_ready(lambda: calls.append("early"))
        self.host.layout_ready()
        self.host.layout_ready()
        self.host.on_layout_ready(lambda: calls.append("late"))

        self.assertEqual(["early", "late"], calls)


if __name__ == "__main__":
    unittest.main()
