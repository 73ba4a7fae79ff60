"""Unit tests for heading extraction and document segmentation."""

import pytest

from translation_sync.models.document import Heading
from translation_sync.parsers import segmenter as segmenter_module
from translation_sync.parsers.exceptions import InternalError, ParseError
from translation_sync.parsers.heading_extractor import HeadingExtractor
from translation_sync.parsers.line_index import LineIndex
from translation_sync.parsers.markdown import MarkdownConfig, build_markdown
from translation_sync.parsers.segmenter import DocumentSegmenter, segment


SCENARIO_SOURCE = b"""# document

A paragraph,
which spans multiple lines.

## first heading {#first translated="4_18"}
"""


class TestSegment:
    """Test the basic segmentation contract."""

    def test_headings_and_sections(self):
        """Test headings, their lines and the lines each heading owns."""
        doc = segment(SCENARIO_SOURCE)

        assert doc.headings == (
            Heading(line=1, id="document", translated="", text="document"),
            Heading(line=6, id="first", translated="4_18", text="first heading"),
        )
        assert doc.sections[0].lines == ("", "A paragraph,", "which spans multiple lines.", "")
        assert doc.sections[1].lines == ()

    def test_one_section_per_heading(self):
        """Test that sections and headings line up."""
        doc = segment(SCENARIO_SOURCE)

        assert len(doc.sections) == len(doc.headings)
        for heading, section in zip(doc.headings, doc.sections):
            assert section.heading == heading

    def test_lookups_by_id(self):
        """Test the read-only id mappings."""
        doc = segment(SCENARIO_SOURCE)

        assert doc.headings_by_id["first"].line == 6
        assert doc.sections_by_id["document"].lines[1] == "A paragraph,"
        with pytest.raises(TypeError):
            doc.sections_by_id["new"] = doc.sections[0]

    def test_raw_lines_are_kept(self):
        """Test that the document keeps the full line array."""
        doc = segment(SCENARIO_SOURCE)

        assert doc.lines[0] == "# document"
        assert doc.lines[-1] == ""
        assert len(doc.lines) == 7

    def test_no_headings(self):
        """Test a document without headings."""
        doc = segment(b"just text\n")

        assert doc.headings == ()
        assert doc.sections == ()
        assert not doc.has_title
        assert doc.version == ""


class TestVersion:
    """Test reading the document version."""

    def test_version_comes_from_title(self):
        """Test that the title heading declares the version."""
        doc = segment(b'# document {version="4_18"}\n\ntext\n')

        assert doc.version == "4_18"
        assert doc.title.text == "document"

    def test_version_on_later_heading_is_ignored(self):
        """Test that only the first heading counts."""
        doc = segment(b'# document\n\n## part {#part version="9_99"}\n')

        assert doc.version == ""


class TestSectionBoundaries:
    """Test where sections start and end."""

    def test_final_newline_is_a_terminator(self):
        """Test that the empty string after a final newline is not a line."""
        doc = segment(b"# t\n\nx\n")

        assert doc.sections[0].lines == ("", "x")

    def test_missing_final_newline_keeps_last_line(self):
        """Test a buffer that does not end in a newline."""
        doc = segment(b"# t\n\nx")

        assert doc.sections[0].lines == ("", "x")

    def test_preamble_before_first_heading_is_not_a_section(self):
        """Test that lines before the title belong to no section."""
        doc = segment(b"preamble\n\n# t\nbody\n")

        assert doc.title.line == 3
        assert doc.sections[0].lines == ("body",)

    def test_sections_cover_document_from_first_heading(self):
        """Test that heading lines plus section lines rebuild the document."""
        source = b"# a\none\n\n## b {#b}\ntwo\n### c\n\nthree\n\n## d\n"
        doc = segment(source)

        rebuilt = []
        for section in doc.sections:
            rebuilt.append(doc.lines[section.heading.line - 1])
            rebuilt.extend(section.lines)
        assert "\n".join(rebuilt) + "\n" == source.decode("utf-8")

    def test_fenced_code_hash_is_not_a_heading(self):
        """Test that # inside a code fence does not start a section."""
        doc = segment(b"# t\n\n```\n# not a heading\n```\n\n## real\n")

        assert [h.id for h in doc.headings] == ["t", "real"]
        assert "# not a heading" in doc.sections[0].lines

    def test_setext_heading_lines(self):
        """Test that setext headings resolve to the line of their text."""
        doc = segment(b"Title\n=====\n\ntext\n\nSub {#sub}\n---\nbody\n")

        assert [(h.line, h.id) for h in doc.headings] == [(1, "title"), (6, "sub")]
        assert doc.sections[1].lines == ("---", "body")

    def test_indented_atx_heading(self):
        """Test that leading indentation does not change the line."""
        doc = segment(b"# t\n\n   ## indented {#in}\n")

        assert doc.headings[1].line == 3
        assert doc.headings[1].id == "in"

    def test_crlf_line_endings(self):
        """Test that carriage returns stay part of their lines."""
        doc = segment(b'# t {#t}\r\n\r\nbody\r\n## s {#s translated="1"}\r\n')

        assert [(h.line, h.id, h.translated) for h in doc.headings] == [
            (1, "t", ""),
            (4, "s", "1"),
        ]
        assert doc.sections[0].lines == ("\r", "body\r")

    def test_lone_carriage_return_line_endings(self):
        """Test that a lone \\r ends a line, as it does for the markdown parser."""
        doc = segment(
            b'# t {version="1"}\r\rfoo\n## a {#a translated="1"}\n\n## b {#b translated="1"}\nx\n'
        )

        assert [(h.line, h.id) for h in doc.headings] == [(1, "t"), (4, "a"), (6, "b")]
        assert doc.lines[3] == '## a {#a translated="1"}'
        assert doc.line_endings[:4] == ("\r", "\r", "\n", "\n")
        assert doc.sections[0].lines == ("", "foo")
        assert doc.sections[2].lines == ("x",)

    def test_non_utf8_bytes(self):
        """Test that undecodable bytes do not break segmentation."""
        doc = segment(b"# t\n\ncaf\xe9\n")

        assert len(doc.sections[0].lines) == 2


class TestIdentifiers:
    """Test heading identifiers."""

    def test_explicit_id_overrides_generated_id(self):
        """Test that {#id} wins over the text slug."""
        doc = segment(b"# Some Title {#custom}\n")

        assert doc.title.id == "custom"
        assert doc.title.text == "Some Title"

    def test_generated_ids_are_slugs(self):
        """Test automatic ids from heading text."""
        doc = segment(b"# i3 User Guide\n\n## Key Bindings!\n\n## Key Bindings!\n")

        assert [h.id for h in doc.headings] == [
            "i3-user-guide",
            "key-bindings",
            "key-bindings-1",
        ]

    def test_explicit_id_is_stable_across_text_edits(self):
        """Test that editing heading text and body keeps explicit ids."""
        before = segment(b"# t\n\n## Old name {#keep}\n\nold body\n")
        after = segment(b"# t\n\n## New name {#keep}\n\nnew body\nmore\n")

        assert before.headings[1].id == after.headings[1].id == "keep"

    def test_identical_input_gives_identical_identifiers(self):
        """Test that segmenting the same bytes twice yields the same ids and sections."""
        source = b'# i3 User Guide {version="4_19"}\n\n## Key Bindings\n\ntext\n\n## Key Bindings\n\n## !!!\nx\n'

        first = segment(source)
        second = segment(source)

        assert [h.id for h in first.headings] == [h.id for h in second.headings]
        assert [(s.heading.id, len(s.lines)) for s in first.sections] == [
            (s.heading.id, len(s.lines)) for s in second.sections
        ]

    def test_heading_without_sluggable_text_has_empty_id(self):
        """Test that a heading may end up with an empty id."""
        doc = segment(b"# t\n\n## !!!\n")

        assert doc.headings[1].id == ""

    def test_empty_ids_without_generated_ids(self):
        """Test that headings without {#id} get an empty id and last write wins."""
        config = MarkdownConfig(auto_heading_ids=False)
        doc = DocumentSegmenter(config).segment(
            b'# doc {version="1"}\n\n## untitled\n\ntext\n\n## named {#named}\n'
        )

        assert [h.id for h in doc.headings] == ["", "", "named"]
        assert doc.sections_by_id[""].heading.line == 3

    def test_attribute_block_needs_to_end_the_heading(self):
        """Test that braces in the middle of the text are heading text."""
        doc = segment(b"# use {#x} here\n")

        assert doc.title.text == "use {#x} here"
        assert doc.title.id != "x"


class TestErrors:
    """Test error reporting."""

    def test_parser_failure_is_wrapped(self, monkeypatch):
        """Test that exceptions from the markdown parser become ParseError."""

        class Broken:
            def parse(self, text):
                raise RuntimeError("boom")

        monkeypatch.setattr(segmenter_module, "build_markdown", lambda config: Broken())

        with pytest.raises(ParseError) as exc_info:
            segment(b"# t\n")
        assert "boom" in exc_info.value.message

    def test_unresolvable_heading_line(self):
        """Test that a token stream not matching the buffer is an InternalError."""
        tokens = build_markdown().parse("a\n\nb\n\n# h\n")
        source = b"# h\n"

        with pytest.raises(InternalError) as exc_info:
            HeadingExtractor(source, LineIndex(source)).extract(tokens)
        assert exc_info.value.message == "cannot resolve line for heading"

    def test_missing_file(self, tmp_path):
        """Test that a missing file is reported."""
        with pytest.raises(FileNotFoundError):
            DocumentSegmenter().segment_file(str(tmp_path / "missing.markdown"))

    def test_segment_file(self, tmp_path):
        """Test reading a document from disk."""
        path = tmp_path / "userguide.markdown"
        path.write_bytes(SCENARIO_SOURCE)

        doc = DocumentSegmenter().segment_file(str(path))

        assert doc.headings_by_id["first"].translated == "4_18"
