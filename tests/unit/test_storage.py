"""Unit tests for translation discovery and atomic writes."""

import os
import stat

from translation_sync.storage import TranslationFile, atomic_write_bytes, discover_translations


class TestDiscoverTranslations:
    """Test finding locale copies of a document."""

    def test_immediate_subdirectories(self, tmp_path):
        """Test that copies in locale directories are found in order."""
        document = tmp_path / "userguide"
        document.write_bytes(b"# t\n")
        for locale in ("ja", "fr"):
            (tmp_path / locale).mkdir()
            (tmp_path / locale / "userguide").write_bytes(b"# t\n")

        found = discover_translations(document)

        assert found == [
            TranslationFile(locale="fr", path=tmp_path / "fr" / "userguide"),
            TranslationFile(locale="ja", path=tmp_path / "ja" / "userguide"),
        ]

    def test_non_mirroring_files_are_ignored(self, tmp_path):
        """Test that a locale directory with other files yields nothing."""
        document = tmp_path / "userguide"
        document.write_bytes(b"# t\n")
        (tmp_path / "de").mkdir()
        (tmp_path / "de" / "hacking-howto").write_bytes(b"# t\n")
        (tmp_path / "other").write_bytes(b"# t\n")

        assert discover_translations(document) == []

    def test_nested_directories_are_not_searched(self, tmp_path):
        """Test that only one level of subdirectories is considered."""
        document = tmp_path / "userguide"
        document.write_bytes(b"# t\n")
        nested = tmp_path / "fr" / "old"
        nested.mkdir(parents=True)
        (nested / "userguide").write_bytes(b"# t\n")

        assert discover_translations(document) == []


class TestAtomicWrite:
    """Test write-then-rename."""

    def test_writes_new_file(self, tmp_path):
        """Test creating a file."""
        path = tmp_path / "out" / "page.html"

        assert atomic_write_bytes(path, b"<p>x</p>\n") == path
        assert path.read_bytes() == b"<p>x</p>\n"

    def test_replaces_and_keeps_mode(self, tmp_path):
        """Test that the file mode of the replaced file survives."""
        path = tmp_path / "userguide"
        path.write_bytes(b"old")
        os.chmod(path, 0o600)

        atomic_write_bytes(path, b"new")

        assert path.read_bytes() == b"new"
        assert stat.S_IMODE(path.stat().st_mode) == 0o600

    def test_no_temporary_files_left(self, tmp_path):
        """Test that only the target remains after a write."""
        atomic_write_bytes(tmp_path / "userguide", b"data")

        assert [p.name for p in tmp_path.iterdir()] == ["userguide"]
