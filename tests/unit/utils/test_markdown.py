"""Tests for fenced code block scanning."""
from __future__ import annotations

import pytest

from mdtangle.core.utils.text import iter_fenced_blocks, parse_title


def _blocks(text: str):
    return list(iter_fenced_blocks(text))


class TestIterFencedBlocks:
    def test_backtick_fence(self) -> None:
        (block,) = _blocks("```js > #greet\nfunction greet() {}\n```\n")
        assert block.info == "js > #greet"
        assert block.language == "js"
        assert block.text == "function greet() {}"
        assert block.line == 1

    def test_tilde_fence(self) -> None:
        (block,) = _blocks("~~~py\nx = 1\n~~~\n")
        assert block.info == "py"
        assert block.text == "x = 1"

    def test_untagged_fence(self) -> None:
        (block,) = _blocks("```\nplain\n```")
        assert block.info is None
        assert block.language is None

    def test_empty_block(self) -> None:
        (block,) = _blocks("```js\n```\n")
        assert block.text == ""

    def test_blank_lines_inside_block_are_kept(self) -> None:
        (block,) = _blocks("```\na\n\n\nb\n```\n")
        assert block.text == "a\n\n\nb"

    def test_shorter_inner_fence_is_content(self) -> None:
        (block,) = _blocks("````md\n```\ninner\n```\n````\n")
        assert block.text == "```\ninner\n```"

    def test_closing_fence_must_match_character(self) -> None:
        (block,) = _blocks("~~~\n```\n~~~\n")
        assert block.text == "```"

    def test_unclosed_fence_runs_to_end(self) -> None:
        (block,) = _blocks("text\n```js\nconsole.log(1)\nmore\n")
        assert block.text == "console.log(1)\nmore"

    def test_fence_indentation_is_removed(self) -> None:
        (block,) = _blocks("  ```py\n  x = 1\n      y\n  ```\n")
        assert block.text == "x = 1\n    y"

    def test_four_space_indent_is_not_a_fence(self) -> None:
        assert _blocks("    ```\n    code\n    ```\n") == []

    def test_backticks_in_info_string_is_not_a_fence(self) -> None:
        assert _blocks("```js `x`\ncode\n") == []

    def test_line_numbers(self) -> None:
        blocks = _blocks("intro\n\n```a\n1\n```\n\n```b\n2\n```\n")
        assert [b.line for b in blocks] == [3, 7]

    def test_heading_context(self) -> None:
        text = "# Intro\n```a\n```\n## Details ##\n```b\n```\n"
        assert [b.heading for b in _blocks(text)] == ["Intro", "Details"]

    @pytest.mark.parametrize("char", ["\u2028", "\u2029", "\x0c", "\x85", "\x1c", "\x1e"])
    def test_unicode_line_separators_stay_in_block_text(self, char) -> None:
        (block,) = _blocks(f"```js\nconst s = '{char}'\n```\n")
        assert block.text == f"const s = '{char}'"

    def test_separator_before_backticks_is_not_a_closing_fence(self) -> None:
        (block,) = _blocks("```js\nx\n\x1c```\ny\n```\n")
        assert block.text == "x\n\x1c```\ny"

    def test_crlf_and_cr_line_endings(self) -> None:
        assert [b.text for b in _blocks("```\r\na\r\nb\r\n```\r\n")] == ["a\nb"]
        assert [b.text for b in _blocks("```\ra\r```\r")] == ["a"]

    def test_document_without_final_newline(self) -> None:
        (block,) = _blocks("```\nlast")
        assert block.text == "last"

    def test_comment_inside_fence_is_not_a_heading(self) -> None:
        text = "```sh\n# comment\n```\n```sh\nls\n```\n"
        assert [b.heading for b in _blocks(text)] == [None, None]


class TestParseTitle:
    @pytest.mark.parametrize(
        "line, title",
        [
            ("# Title", "Title"),
            ("### Deep title", "Deep title"),
            ("## Closed ##", "Closed"),
            ("#", ""),
        ],
    )
    def test_headings(self, line, title) -> None:
        assert parse_title(line) == title

    @pytest.mark.parametrize("line", ["Regular text", "#hashtag", "####### seven"])
    def test_not_headings(self, line) -> None:
        assert parse_title(line) is None
