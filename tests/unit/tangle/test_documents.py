"""Tests for reading blocks out of markdown documents."""
from __future__ import annotations

from pathlib import Path

import pytest

from mdtangle.core.tangle import blocks_from_markdown, read_blocks

DOCUMENT = """\
# Greeter

Some prose.

```js
<<greet>>
greet()
```

## Greeting

```js > #greet
function greet() {}
```

```
untagged
```

```py > tool.py
print("hi")
```
"""


class TestBlocksFromMarkdown:
    def test_blocks_in_document_order(self) -> None:
        blocks = list(blocks_from_markdown(DOCUMENT, source="README.md"))
        assert [b.annotation for b in blocks] == ["js", "js > #greet", None, "py > tool.py"]
        assert blocks[0].text == "<<greet>>\ngreet()"
        assert blocks[1].text == "function greet() {}"

    def test_source_location(self) -> None:
        first = next(blocks_from_markdown(DOCUMENT, source="README.md"))
        assert first.source == "README.md"
        assert first.line == 5
        assert first.describe() == "README.md:5 under 'Greeter'"

    def test_heading_is_carried_onto_blocks(self) -> None:
        blocks = list(blocks_from_markdown(DOCUMENT, source="README.md"))
        assert [b.heading for b in blocks] == ["Greeter", "Greeting", "Greeting", "Greeting"]

    def test_block_before_any_heading(self) -> None:
        (block,) = blocks_from_markdown("```js\nx\n```\n", source="doc.md")
        assert block.heading is None
        assert block.describe() == "doc.md:1"

    def test_unicode_separator_survives_into_block(self) -> None:
        (block,) = blocks_from_markdown("```js\nconst s = '\u2028'\n```\n")
        assert block.text == "const s = '\u2028'"

    def test_language_filter(self) -> None:
        blocks = list(blocks_from_markdown(DOCUMENT, languages=["py"]))
        assert [b.annotation for b in blocks] == ["py > tool.py"]

    def test_empty_language_filter_keeps_everything(self) -> None:
        assert len(list(blocks_from_markdown(DOCUMENT, languages=[]))) == 4

    def test_no_blocks(self) -> None:
        assert list(blocks_from_markdown("just prose\n")) == []


class TestReadBlocks:
    def test_reads_file(self, tmp_path: Path) -> None:
        doc = tmp_path / "doc.md"
        doc.write_text(DOCUMENT, encoding="utf-8")
        blocks = read_blocks(doc)
        assert len(blocks) == 4
        assert blocks[0].source == str(doc)

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError):
            read_blocks(tmp_path / "missing.md")
