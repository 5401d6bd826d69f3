"""Tests for page discovery and parsing."""

from __future__ import annotations

import json
from typing import TYPE_CHECKING

import pytest

from quartolint import PageLoadError, discover_pages, load_page, parse_page
from quartolint.pages import extract_links, slugify


if TYPE_CHECKING:
    from pathlib import Path


PAGE = """\
---
title: "Agents"
format:
  html:
    code-fold: true
---

## Basic Agent

Use [the tutorial](tutorial.qmd) and ![diagram](images/loop.png "Agent loop").

```python
# [not a link](nowhere.qmd)
agent = basic_agent()
```

Inline `[code](ignored.qmd)` is skipped.

## Custom Scaffolds {#sec-scaffolds}

```{python}
#| echo: false
#| label: fig-plot
print("hi")
```

::: {#tip-store .callout-tip}
Store tip.
:::
"""


def test_front_matter_and_title():
    page = parse_page(PAGE, "agents.qmd")
    assert page.title == "Agents"
    assert page.front_matter["format"]["html"]["code-fold"] is True
    assert page.front_matter_error is None


def test_title_falls_back_to_heading():
    page = parse_page("Intro text\n\n# Getting Started\n\n## Details\n", "start.md")
    assert page.title == "Getting Started"


def test_no_title():
    assert parse_page("## Only a subheading\n", "x.qmd").title is None


def test_links_outside_code():
    page = parse_page(PAGE, "agents.qmd")
    assert [(link.target, link.is_image) for link in page.links] == [
        ("tutorial.qmd", False),
        ("images/loop.png", True),
    ]
    assert page.links[0].line == 10
    assert page.links[0].text == "the tutorial"


def test_code_blocks():
    page = parse_page(PAGE, "agents.qmd")
    plain, cell = page.code_blocks
    assert plain.language == "python"
    assert not plain.executable
    assert plain.line == 13
    assert plain.code.splitlines()[1] == "agent = basic_agent()"
    assert cell.language == "python"
    assert cell.executable
    assert cell.options == {"echo": "false", "label": "fig-plot"}


def test_headings_and_anchors():
    page = parse_page(PAGE, "agents.qmd")
    assert [(h.level, h.text, h.anchor) for h in page.headings] == [
        (2, "Basic Agent", "basic-agent"),
        (2, "Custom Scaffolds", "sec-scaffolds"),
    ]
    assert {"basic-agent", "sec-scaffolds", "tip-store"} <= page.anchors


def test_cell_labels_are_anchors():
    page = parse_page(PAGE, "agents.qmd")
    assert "fig-plot" in page.anchors


def test_escaped_cell_is_not_executable():
    text = "```{{python}}\n#| echo: true\nprint(1)\n```\n"
    (block,) = parse_page(text, "escaped.qmd").code_blocks
    assert block.language == "python"
    assert not block.executable
    assert block.options == {}


def test_invalid_front_matter_is_recorded():
    page = parse_page("---\ntitle: [unclosed\n---\n\n# Body\n", "bad.qmd")
    assert page.front_matter == {}
    assert page.front_matter_error
    assert page.title == "Body"


def test_front_matter_must_be_mapping():
    page = parse_page("---\n- a\n- b\n---\n", "list.qmd")
    assert page.front_matter_error == "front matter must be a mapping, got list"


def test_unterminated_fence_swallows_rest():
    page = parse_page("```python\nx = 1\n[link](a.qmd)\n", "open.qmd")
    assert page.links == []
    assert page.code_blocks == []


def test_tilde_fences_and_longer_backticks():
    text = "~~~yaml\nkey: value\n~~~\n\n````markdown\n```python\nx\n```\n````\n"
    page = parse_page(text, "fences.md")
    assert [block.language for block in page.code_blocks] == ["yaml", "markdown"]
    assert "```python" in page.code_blocks[1].code


@pytest.mark.parametrize(
    ("text", "slug"),
    [
        ("Basic Agent", "basic-agent"),
        ("Errors & Limits", "errors-limits"),
        ("2. Using `store_as()`", "using-store_as"),
        ("[Agents API](agents-api.qmd)", "agents-api"),
        ("123", "section"),
    ],
)
def test_slugify(text: str, slug: str):
    assert slugify(text) == slug


def test_extract_links_from_header():
    links = extract_links('[![](/images/aisi-logo.png){fig-alt="Logo"}](https://aisi.gov.uk/)')
    assert [(link.target, link.is_image) for link in links] == [
        ("/images/aisi-logo.png", True)
    ]


def test_discover_pages(make_project):
    root = make_project({
        "_drafts/draft.qmd": "# Draft\n",
        "_site/index.html": "<html></html>",
        "_site/copy.qmd": "# Copy\n",
        ".hidden/page.qmd": "# Hidden\n",
        "README.md": "# Readme\n",
        "_partial.qmd": "partial",
        "notes.ipynb": json.dumps({"cells": []}),
        "private/secret.qmd": "# Secret\n",
    })
    pages = discover_pages(root, output_dir="_site", exclude=["private/*"])
    assert pages == [
        "agents-api.qmd",
        "agents.qmd",
        "examples/index.qmd",
        "index.qmd",
        "notes.ipynb",
        "tutorial.qmd",
    ]


def test_discover_pages_custom_output_dir(make_project):
    root = make_project({"public/index.qmd": "# Rendered\n"})
    assert "public/index.qmd" not in discover_pages(root, output_dir="public")
    assert "public/index.qmd" in discover_pages(root)


def test_load_notebook(tmp_path: Path):
    notebook = {
        "metadata": {"kernelspec": {"language": "python", "name": "python3"}},
        "cells": [
            {"cell_type": "raw", "source": ["---\n", "title: Notebook\n", "---"]},
            {"cell_type": "markdown", "source": "See [agents](agents.qmd)."},
            {"cell_type": "code", "source": ["x = 1\n", "print(x)"]},
        ],
    }
    (tmp_path / "nb.ipynb").write_text(json.dumps(notebook))
    page = load_page(tmp_path, "nb.ipynb")
    assert page.title == "Notebook"
    assert [link.target for link in page.links] == ["agents.qmd"]
    (cell,) = page.code_blocks
    assert cell.executable
    assert cell.code == "x = 1\nprint(x)"


def test_load_page_errors(tmp_path: Path):
    (tmp_path / "broken.ipynb").write_text("{not json")
    (tmp_path / "binary.qmd").write_bytes(b"\xff\xfe\x00bad")
    with pytest.raises(PageLoadError):
        load_page(tmp_path, "broken.ipynb")
    with pytest.raises(PageLoadError):
        load_page(tmp_path, "binary.qmd")
    with pytest.raises(PageLoadError):
        load_page(tmp_path, "missing.qmd")
