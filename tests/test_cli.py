import json
from pathlib import Path

import pytest
from typer.testing import CliRunner

from litconf.cli import app
from litconf.markdown import DEFAULT_MARKDOWN_EXTENSIONS


DOCUMENT = """\
# Font {: bind=font }

`Iosevka`

# Sizes {: bind=sizes }

- `#!py 12`
- `#!py 14`
"""


@pytest.fixture
def document(tmp_path: Path) -> Path:
    path = tmp_path / "config.md"
    path.write_text(DOCUMENT, encoding="utf-8")
    return path


def test_show_json(document: Path) -> None:
    result = CliRunner().invoke(app, ["show", str(document), "--json"])

    assert result.exit_code == 0, result.output
    assert json.loads(result.stdout) == {"font": "Iosevka", "sizes": [12, 14]}


def test_show_table(document: Path) -> None:
    result = CliRunner().invoke(app, ["show", str(document)])

    assert result.exit_code == 0, result.output
    assert "font" in result.stdout
    assert "'Iosevka'" in result.stdout
    assert "[12, 14]" in result.stdout


def test_check_counts_bindings(document: Path) -> None:
    result = CliRunner().invoke(app, ["check", str(document)])

    assert result.exit_code == 0, result.output
    assert "config.md: 2 binding(s)" in result.stdout


def test_custom_marker(document: Path, tmp_path: Path) -> None:
    other = tmp_path / "other.md"
    other.write_text("# A {: var=answer }\n\n`#!py 42`\n", encoding="utf-8")

    result = CliRunner().invoke(app, ["show", str(other), "--json", "--marker", "var"])

    assert result.exit_code == 0, result.output
    assert json.loads(result.stdout) == {"answer": 42}


def test_conversion_errors_exit_with_status(tmp_path: Path) -> None:
    broken = tmp_path / "broken.md"
    broken.write_text("# Bad {: bind=bad }\n\n```ruby\nputs 1\n```\n", encoding="utf-8")

    result = CliRunner().invoke(app, ["check", str(broken)])

    assert result.exit_code == 1
    assert "ruby" in result.output


def test_list_extensions() -> None:
    result = CliRunner().invoke(app, ["--list-extensions"])

    assert result.exit_code == 0
    assert result.stdout.split() == DEFAULT_MARKDOWN_EXTENSIONS
