"""Unit tests for the sectionizer."""

from __future__ import annotations

import logging

import pytest

from section_ingest.ingestion.sectionizer import Sectionizer, iter_lines


@pytest.fixture()
def sectionizer() -> Sectionizer:
    return Sectionizer(char_soft_minimum=5)


class TestIterLines:
    def test_strips_crlf(self) -> None:
        assert list(iter_lines("a\r\nb\n")) == ["a", "b"]

    def test_keeps_blank_lines(self) -> None:
        assert list(iter_lines("a\n\nb")) == ["a", "", "b"]

    def test_empty_text(self) -> None:
        assert list(iter_lines("")) == []

    def test_single_newline_is_one_blank_line(self) -> None:
        assert list(iter_lines("\n")) == [""]


class TestBoundaries:
    def test_blank_lines_split_paragraphs(self, sectionizer: Sectionizer) -> None:
        text = "alpha beta gamma\n\nsecond paragraph here\n\n"
        assert list(sectionizer.split_text(text)) == [
            "alpha beta gamma\n\n",
            "second paragraph here\n\n",
        ]

    def test_short_accumulator_does_not_split(self) -> None:
        """A blank line only closes a section longer than the soft minimum."""
        sectionizer = Sectionizer(char_soft_minimum=100)
        assert list(sectionizer.split_text("short\n\nalso short\n\n")) == []

    def test_length_equal_to_minimum_does_not_split(self) -> None:
        # "abcd\n" + "\n" is 6 chars
        assert list(Sectionizer(char_soft_minimum=6).split(["abcd", ""])) == []
        assert list(Sectionizer(char_soft_minimum=5).split(["abcd", ""])) == ["abcd\n\n"]

    def test_whitespace_only_sections_are_dropped(self) -> None:
        sectionizer = Sectionizer(char_soft_minimum=2)
        assert list(sectionizer.split(["   ", "   ", ""])) == []

    def test_trailing_text_is_not_emitted_by_default(self, sectionizer: Sectionizer) -> None:
        assert list(sectionizer.split_text("first paragraph\n\nleftover")) == ["first paragraph\n\n"]

    def test_flush_trailing_emits_leftover(self) -> None:
        sectionizer = Sectionizer(char_soft_minimum=5, flush_trailing=True)
        assert list(sectionizer.split_text("first paragraph\n\nleftover")) == [
            "first paragraph\n\n",
            "leftover\n",
        ]

    def test_flush_trailing_skips_blank_leftover(self) -> None:
        sectionizer = Sectionizer(char_soft_minimum=100, flush_trailing=True)
        assert list(sectionizer.split(["", "  "])) == []


class TestCodeFences:
    def test_blank_line_inside_fence_does_not_split(self, sectionizer: Sectionizer) -> None:
        lines = ["```python", "x = 1", "", "y = 2", "```", "", "after"]
        assert list(sectionizer.split(lines)) == ["```python\nx = 1\n\ny = 2\n```\n\n"]

    def test_unclosed_fence_never_splits(self) -> None:
        sectionizer = Sectionizer(char_soft_minimum=0)
        lines = ["```"] + ["some code", ""] * 200
        assert list(sectionizer.split(lines)) == []

    def test_indented_fence_marker_toggles(self, sectionizer: Sectionizer) -> None:
        lines = ["   ```", "code", "", "   ```", ""]
        assert list(sectionizer.split(lines)) == ["   ```\ncode\n\n   ```\n\n"]

    def test_marker_not_at_line_start_does_not_toggle(self, sectionizer: Sectionizer) -> None:
        text = "para one\n\nout```\ncode\n\n```\n\npara two\n"
        assert list(sectionizer.split_text(text)) == ["para one\n\n", "out```\ncode\n\n"]

    def test_mixed_document_with_trailing_flush(self) -> None:
        sectionizer = Sectionizer(char_soft_minimum=5, flush_trailing=True)
        text = "para one\n\nout```\ncode\n\n```\n\npara two\n"
        sections = list(sectionizer.split_text(text))
        assert len(sections) == 3
        assert sections[-1] == "```\n\npara two\n"


class TestSoftLimit:
    def test_lines_past_limit_are_dropped(self, caplog: pytest.LogCaptureFixture) -> None:
        sectionizer = Sectionizer(char_soft_limit=10, char_soft_minimum=0)
        lines = ["a" * 12, "bbb", "", "ccc", ""]
        with caplog.at_level(logging.WARNING):
            sections = list(sectionizer.split(lines))
        assert sections == ["a" * 12 + "\n", "ccc\n\n"]
        assert "Skipped line: bbb" in caplog.text

    def test_dropped_fence_line_still_toggles(self) -> None:
        sectionizer = Sectionizer(char_soft_limit=5, char_soft_minimum=0)
        lines = ["123456", "```", "", "x", ""]
        assert list(sectionizer.split(lines)) == []

    def test_content_already_appended_is_not_truncated(self) -> None:
        sectionizer = Sectionizer(char_soft_limit=10, char_soft_minimum=0)
        long_line = "z" * 50
        assert list(sectionizer.split([long_line, ""])) == [long_line + "\n"]


class TestLaziness:
    def test_sections_are_yielded_before_input_is_exhausted(self, sectionizer: Sectionizer) -> None:
        consumed: list[str] = []

        def lines():
            for line in ["first para", "", "second para", "", "third"]:
                consumed.append(line)
                yield line

        first = next(sectionizer.split(lines()))
        assert first == "first para\n\n"
        assert consumed == ["first para", ""]

    def test_each_call_is_an_independent_pass(self, sectionizer: Sectionizer) -> None:
        text = "alpha beta gamma\n\ndelta epsilon\n\n"
        assert list(sectionizer.split_text(text)) == list(sectionizer.split_text(text))
