"""Tests for rendering code files from the store."""
from __future__ import annotations

import logging

import pytest

from mdtangle.core.exceptions import CycleError, MissingFileError, MissingSectionError
from mdtangle.core.tangle import Block, CodeStore, join_chunks

GREET_SOURCE = (
    "// this is a code block\n"
    "function greet() {\n"
    "  console.log('hello, world!')\n"
    "}\n"
    "\n"
    "greet()"
)
SUM_SOURCE = "function sum(a, b) {\n  return a + b\n}\nconsole.log(sum(2, 2))"


def _store(*blocks: Block) -> CodeStore:
    store = CodeStore()
    store.add_nodes(blocks)
    return store


class TestGenerateSource:
    def test_greet_program(self, mock_nodes) -> None:
        store = _store(*mock_nodes)
        assert store.generate_source("index.js") == GREET_SOURCE

    def test_sum_program(self, mock_nodes) -> None:
        store = _store(*mock_nodes)
        assert store.generate_source("math.js") == SUM_SOURCE

    def test_generate_all(self, mock_nodes) -> None:
        assert _store(*mock_nodes).generate_all() == {
            "index.js": GREET_SOURCE,
            "math.js": SUM_SOURCE,
        }

    def test_rendering_is_repeatable(self, mock_nodes) -> None:
        store = _store(*mock_nodes)
        assert store.generate_source("index.js") == store.generate_source("index.js")

    def test_missing_file(self) -> None:
        with pytest.raises(MissingFileError):
            CodeStore().generate_source("nope.js")

    def test_section_referenced_twice_renders_twice(self) -> None:
        store = _store(Block("js", "<<a>>\n<<a>>"), Block("js > #a", "x"))
        assert store.generate_source("index.js") == "x\nx"

    def test_section_blocks_are_concatenated(self) -> None:
        store = _store(
            Block("js", "<<a>>"),
            Block("js > #a", "one"),
            Block("js > #a", "two"),
        )
        assert store.generate_source("index.js") == "one\ntwo"

    def test_nested_references(self) -> None:
        store = _store(
            Block("js", "<<a>>"),
            Block("js > #a", "a(<<b>>)"),
            Block("js > #b", "b"),
        )
        assert store.generate_source("index.js") == "a(b)"

    def test_reference_before_definition(self) -> None:
        store = _store(Block("js > #late", "late"), Block("js", "<<late>>"))
        assert store.generate_source("index.js") == "late"

    def test_references_stay_within_file(self) -> None:
        store = _store(Block("js > other.js#a", "other"), Block("js", "<<a>>"))
        with pytest.raises(MissingSectionError):
            store.generate_source("index.js")

    def test_missing_section(self) -> None:
        store = _store(Block("js", "<<nope>>"))
        with pytest.raises(MissingSectionError) as excinfo:
            store.generate_source("index.js")
        assert excinfo.value.context == {
            "filename": "index.js",
            "section": "#nope",
            "referenced_from": "root",
        }

    def test_unspaced_shift_operator_is_a_missing_section(self) -> None:
        store = _store(Block("js", "const mask = bits<<offset>>1"))
        with pytest.raises(MissingSectionError) as excinfo:
            store.generate_source("index.js")
        assert excinfo.value.context["section"] == "#offset"

    def test_spaced_shift_operator_is_plain_text(self) -> None:
        store = _store(Block("js", "const mask = bits << offset >> 1"))
        assert store.generate_source("index.js") == "const mask = bits << offset >> 1"

    def test_cycle(self) -> None:
        store = _store(
            Block("js", "<<a>>"),
            Block("js > #a", "<<b>>"),
            Block("js > #b", "<<a>>"),
        )
        with pytest.raises(CycleError) as excinfo:
            store.generate_source("index.js")
        assert excinfo.value.context["chain"] == ["root", "#a", "#b", "#a"]

    def test_self_reference(self) -> None:
        store = _store(Block("js", "<<a>>"), Block("js > #a", "<<a>>"))
        with pytest.raises(CycleError):
            store.generate_source("index.js")

    def test_empty_root_renders_empty_and_warns(self, caplog) -> None:
        store = CodeStore()
        store.add_code_file()
        with caplog.at_level(logging.WARNING, logger="mdtangle"):
            assert store.generate_source("index.js") == ""
        assert "empty" in caplog.text


class TestRenderSection:
    def test_single_section(self, mock_nodes) -> None:
        assert _store(*mock_nodes).render_section("math.js", "#sum-body") == "  return a + b"

    def test_missing_section(self, mock_nodes) -> None:
        with pytest.raises(MissingSectionError):
            _store(*mock_nodes).render_section("math.js", "#nope")

    def test_referential_consistency(self, mock_nodes) -> None:
        """Expanding a section equals splicing its rendered text at the marker."""
        store = _store(*mock_nodes)
        greet = store.render_section("index.js", "#greet")
        root_template = store.find_code_file_by_name("index.js").root.blocks[0]
        assert store.generate_source("index.js") == root_template.replace("<<#greet>>", greet)


class TestJoinChunks:
    @pytest.mark.parametrize(
        "chunks, expected",
        [
            ([], ""),
            (["a"], "a"),
            (["a", "b"], "a\nb"),
            (["a\n", "b"], "a\nb"),
            (["", "b"], "b"),
            (["a", "b\n"], "a\nb\n"),
        ],
    )
    def test_join(self, chunks, expected) -> None:
        assert join_chunks(chunks) == expected
