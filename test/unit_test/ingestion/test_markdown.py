"""Unit tests for markdown helpers used by wiki ingestion."""

import hashlib

import pytest

from slumbering_ancients.ingestion.markdown import clean_markdown, content_hash, extract_title


class TestExtractTitle:
    def test_first_h1_wins(self):
        content = "Intro line\n# The Ashen Peaks\n## Geography\n# Second"
        assert extract_title(content, "peaks.md") == "The Ashen Peaks"

    def test_h2_is_not_a_title(self):
        assert extract_title("## Only a section", "barrow-fields.md") == "barrow fields"

    @pytest.mark.parametrize(
        "file_name,expected",
        [
            ("cinder_vale.md", "cinder vale"),
            ("the-old-road.md", "the old road"),
            ("notes", "notes"),
        ],
    )
    def test_falls_back_to_file_name(self, file_name, expected):
        assert extract_title("no headings here", file_name) == expected


class TestCleanMarkdown:
    def test_strips_markup_and_keeps_link_text(self):
        content = "# Title\n\nThe **Lich** lives in [the Spire](https://example.com/spire).\n\n* item _one_"
        assert clean_markdown(content) == "Title The Lich lives in the Spire. item one"

    def test_removes_code(self):
        content = "Before\n```python\nprint('secret')\n```\nuse `roll()` after"
        assert clean_markdown(content) == "Before use after"

    def test_collapses_whitespace(self):
        assert clean_markdown("a\n\n\n   b\t\tc") == "a b c"


def test_content_hash_is_sha256_hex():
    assert content_hash("lore") == hashlib.sha256("lore".encode("utf-8")).hexdigest()
    assert content_hash("lore") != content_hash("lore ")
