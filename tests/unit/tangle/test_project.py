"""Tests for tangling documents to files on disk."""
from __future__ import annotations

from pathlib import Path

import pytest

from mdtangle.core.exceptions import CycleError, MissingFileError, TangleError
from mdtangle.core.tangle import TangleProject

README = """\
# Example

```js
// this is a code block
<<#greet>>

greet()
```

```js > #greet
function greet() {
  console.log('hello, world!')
}
```

```js > math.js
function sum(a, b) {
<<#sum-body>>
}
```

```js > math.js#sum-body
  return a + b
```

```js > math.js
console.log(sum(2, 2))
```
"""

GREET_FILE = (
    "// this is a code block\n"
    "function greet() {\n"
    "  console.log('hello, world!')\n"
    "}\n"
    "\n"
    "greet()\n"
)
SUM_FILE = "function sum(a, b) {\n  return a + b\n}\nconsole.log(sum(2, 2))\n"


@pytest.fixture
def repo(tmp_path: Path) -> Path:
    (tmp_path / "README.md").write_text(README, encoding="utf-8")
    return tmp_path


class TestTangleProject:
    def test_load_counts_blocks(self, repo: Path) -> None:
        project = TangleProject(repo)
        assert project.load(["README.md"]) == 5
        assert project.documents == [repo / "README.md"]

    def test_write_creates_files(self, repo: Path) -> None:
        project = TangleProject(repo)
        project.load(["README.md"])
        outputs = project.write()

        assert [o.filename for o in outputs] == ["index.js", "math.js"]
        assert all(o.written for o in outputs)
        assert (repo / "index.js").read_text(encoding="utf-8") == GREET_FILE
        assert (repo / "math.js").read_text(encoding="utf-8") == SUM_FILE

    def test_unchanged_files_are_not_rewritten(self, repo: Path) -> None:
        first = TangleProject(repo)
        first.load(["README.md"])
        first.write()

        second = TangleProject(repo)
        second.load(["README.md"])
        outputs = second.write()
        assert [o.changed for o in outputs] == [False, False]
        assert [o.written for o in outputs] == [False, False]

    def test_dry_run_writes_nothing(self, repo: Path) -> None:
        project = TangleProject(repo)
        project.load(["README.md"])
        outputs = project.write(dry_run=True)

        assert [o.changed for o in outputs] == [True, True]
        assert not any(o.written for o in outputs)
        assert not (repo / "index.js").exists()

    def test_output_dir(self, repo: Path) -> None:
        project = TangleProject(repo, output_dir="build")
        project.load(["README.md"])
        project.write()
        assert (repo / "build" / "math.js").read_text(encoding="utf-8") == SUM_FILE

    def test_trailing_newline_disabled(self, repo: Path) -> None:
        project = TangleProject(repo, trailing_newline=False)
        project.load(["README.md"])
        project.write()
        assert (repo / "math.js").read_text(encoding="utf-8") == SUM_FILE.rstrip("\n")

    def test_absolute_document_path(self, repo: Path, tmp_path: Path) -> None:
        project = TangleProject(repo)
        assert project.load([tmp_path / "README.md"]) == 5

    def test_missing_document(self, repo: Path) -> None:
        with pytest.raises(FileNotFoundError):
            TangleProject(repo).load(["nope.md"])

    def test_output_path_escaping_output_dir(self, repo: Path) -> None:
        (repo / "evil.md").write_text("```js\nok\n```\n\n```js > ../evil.js\nbad\n```\n", encoding="utf-8")
        project = TangleProject(repo)
        project.load(["evil.md"])
        with pytest.raises(TangleError) as excinfo:
            project.write()
        assert excinfo.value.context["filename"] == "../evil.js"
        assert not (repo / "index.js").exists()

    def test_render_error_writes_nothing(self, repo: Path) -> None:
        (repo / "cycle.md").write_text("```js > a.js\n<<x>>\n```\n\n```js > a.js#x\n<<x>>\n```\n", encoding="utf-8")
        project = TangleProject(repo)
        project.load(["README.md", "cycle.md"])
        with pytest.raises(CycleError):
            project.write()
        assert not (repo / "index.js").exists()

    def test_strict_files(self, repo: Path) -> None:
        project = TangleProject(repo, auto_create_files=False)
        project.register_files(["index.js"])
        with pytest.raises(MissingFileError):
            project.load(["README.md"])

    def test_registered_files_accept_blocks(self, repo: Path) -> None:
        project = TangleProject(repo, auto_create_files=False)
        project.register_files(["index.js", "math.js"])
        project.load(["README.md"])
        project.write()
        assert (repo / "index.js").read_text(encoding="utf-8") == GREET_FILE

    def test_language_filter(self, repo: Path) -> None:
        project = TangleProject(repo, languages=["py"])
        assert project.load(["README.md"]) == 0
        assert project.write() == []

    def test_to_dict(self, repo: Path) -> None:
        project = TangleProject(repo)
        project.load(["README.md"])
        data = project.write(dry_run=True)[1].to_dict()
        assert data["filename"] == "math.js"
        assert data["changed"] is True
        assert data["written"] is False
        assert data["bytes"] == len(SUM_FILE)


class TestFromConfig:
    def test_bundled_defaults(self, repo: Path) -> None:
        project = TangleProject.from_config(repo)
        assert project.store.default_filename == "index.js"
        assert project.store.auto_create_files is True
        assert project.output_dir == repo / "."
        assert project.trailing_newline is True

    def test_project_config(self, repo: Path, write_config) -> None:
        write_config("tangle.yaml", "tangle:\n  default_filename: main.py\n  output_dir: out\n")
        project = TangleProject.from_config(repo)
        assert project.store.default_filename == "main.py"
        assert project.output_dir == repo / "out"

    def test_overrides_win_and_none_is_ignored(self, repo: Path, write_config) -> None:
        write_config("tangle.yaml", "tangle:\n  output_dir: out\n")
        project = TangleProject.from_config(repo, output_dir="build", auto_create_files=None)
        assert project.output_dir == repo / "build"
        assert project.store.auto_create_files is True
