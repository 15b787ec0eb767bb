"""
Tests for codedigest.core.reader and codedigest.core.languages modules.
"""

from pathlib import Path

import pytest

from codedigest.core.diagnostics import CancellationToken
from codedigest.core.errors import IngestionCancelled
from codedigest.core.languages import LANGUAGES, PLAINTEXT, language_for
from codedigest.core.models import DiagnosticKind
from codedigest.core.reader import FileReader, number_lines


@pytest.mark.unit
class TestNumberLines:
    """Tests for line-number annotation."""

    def test_prefix_is_six_wide_with_separator(self):
        assert number_lines("x\n y\n z") == "     1|x\n     2| y\n     3| z"

    def test_trailing_newline_gets_its_own_number(self):
        assert number_lines("a\n") == "     1|a\n     2|"

    def test_large_line_numbers(self):
        numbered = number_lines("\n" * 123456)

        assert numbered.split("\n")[-1] == "123457|"

    def test_line_boundaries_are_preserved(self):
        text = "first\r\nsecond\n\nfourth"

        numbered = number_lines(text)

        assert [line[7:] for line in numbered.split("\n")] == text.split("\n")


@pytest.mark.unit
class TestLanguages:
    """Tests for the extension to language table."""

    @pytest.mark.parametrize(
        "ext, language",
        [(".ts", "typescript"), (".tsx", "typescriptreact"), (".py", "python"), (".bash", "shell"), (".ex", "elixir")],
    )
    def test_known_extensions(self, ext, language):
        assert language_for(ext) == language

    def test_unknown_extension_is_plaintext(self):
        assert language_for(".zig") == PLAINTEXT
        assert language_for("") == PLAINTEXT

    def test_lookup_is_case_insensitive(self):
        assert language_for(".PY") == "python"

    def test_every_entry_has_a_language(self):
        assert all(LANGUAGES.values())


@pytest.mark.unit
class TestFileReader:
    """Tests for FileReader class."""

    def test_read_with_line_numbers(self, make_tree, diagnostics):
        root = make_tree({"src/a.ts": "x\n y\n z"})
        reader = FileReader(root, max_file_size=1024, show_line_numbers=True, diagnostics=diagnostics)

        record = reader.read(root / "src" / "a.ts")

        assert record.path == "src/a.ts"
        assert record.content == "     1|x\n     2| y\n     3| z"
        assert record.language == "typescript"
        assert record.line_count == 3
        assert record.size == 7

    def test_read_without_line_numbers(self, make_tree, diagnostics):
        root = make_tree({"main.py": "print('hi')\n"})
        reader = FileReader(root, max_file_size=1024, show_line_numbers=False, diagnostics=diagnostics)

        record = reader.read(root / "main.py")

        assert record.content == "print('hi')\n"
        assert record.line_count == 2

    def test_empty_file_has_one_line(self, make_tree, diagnostics):
        root = make_tree({"empty.go": ""})

        record = FileReader(root, 1024, False, diagnostics).read(root / "empty.go")

        assert record.line_count == 1
        assert record.content == ""

    def test_carriage_returns_are_kept(self, make_tree, diagnostics):
        root = make_tree({"win.cs": "a\r\nb\r\n"})

        record = FileReader(root, 1024, False, diagnostics).read(root / "win.cs")

        assert record.content == "a\r\nb\r\n"
        assert record.line_count == 3

    def test_size_bound_is_inclusive(self, make_tree, diagnostics):
        root = make_tree({"exact.js": "a" * 100, "over.js": "a" * 101})
        reader = FileReader(root, max_file_size=100, show_line_numbers=False, diagnostics=diagnostics)

        assert reader.read(root / "exact.js") is not None
        assert reader.read(root / "over.js") is None

        warnings = diagnostics.of_kind(DiagnosticKind.OVERSIZED_FILE)
        assert [w.path for w in warnings] == ["over.js"]
        assert "Skipping large file" in warnings[0].message

    def test_undecodable_file_is_skipped(self, temp_dir, diagnostics):
        (temp_dir / "latin1.py").write_bytes(b"caf\xe9 = 1\n")

        record = FileReader(temp_dir, 1024, True, diagnostics).read(temp_dir / "latin1.py")

        assert record is None
        assert diagnostics.of_kind(DiagnosticKind.UNDECODABLE_FILE)[0].path == "latin1.py"

    def test_binary_file_is_skipped(self, temp_dir, diagnostics):
        (temp_dir / "blob.c").write_bytes(b"\x7fELF\x00\x00\x01")

        assert FileReader(temp_dir, 1024, True, diagnostics).read(temp_dir / "blob.c") is None
        assert "NUL" in diagnostics.of_kind(DiagnosticKind.UNDECODABLE_FILE)[0].message

    def test_missing_file_is_skipped(self, temp_dir, diagnostics):
        record = FileReader(temp_dir, 1024, True, diagnostics).read(temp_dir / "gone.rs")

        assert record is None
        assert diagnostics.of_kind(DiagnosticKind.UNREADABLE_FILE)[0].path == "gone.rs"

    def test_read_error_is_skipped(self, make_tree, diagnostics, mocker):
        root = make_tree({"a.rb": "puts 1"})
        mocker.patch.object(Path, "read_bytes", side_effect=PermissionError("Permission denied"))

        assert FileReader(root, 1024, True, diagnostics).read(root / "a.rb") is None
        assert len(diagnostics.of_kind(DiagnosticKind.UNREADABLE_FILE)) == 1

    def test_read_all_keeps_order_and_skips_failures(self, make_tree, diagnostics):
        root = make_tree({"b.py": "b", "a.py": "a", "big.py": "x" * 50})
        paths = [root / "b.py", root / "missing.py", root / "big.py", root / "a.py"]

        records = FileReader(root, 10, False, diagnostics).read_all(paths)

        assert [r.path for r in records] == ["b.py", "a.py"]
        assert len(diagnostics) == 2

    def test_read_all_honors_cancellation(self, make_tree, diagnostics):
        root = make_tree({"a.py": "a"})
        token = CancellationToken()
        token.cancel()

        with pytest.raises(IngestionCancelled):
            FileReader(root, 10, False, diagnostics).read_all([root / "a.py"], token)
