"""Test configuration and shared fixtures."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import pytest


if TYPE_CHECKING:
    from collections.abc import Callable, Mapping
    from pathlib import Path


SITE_CONFIG = """\
project:
   type: website
   resources:
      - CNAME
   post-render: scripts/post-render.sh

website:
   title: "Inspect"
   bread-crumbs: true
   repo-url: https://github.com/UKGovernmentBEIS/inspect_ai
   twitter-card:
      title: "Inspect"
      image: /images/inspect.png
      card-style: summary_large_image
   sidebar:
      style: floating
      search: true
      header: >
         [![](/images/aisi-logo.png){fig-alt="Logo"}](https://aisi.gov.uk/)
      tools:
        - icon: github
          href: https://github.com/UKGovernmentBEIS/inspect_ai
          text: "Source Code"
      contents:
        - text: Welcome
          href: index.qmd
        - section: "Basics"
          contents:
            - tutorial.qmd
            - examples/index.qmd
        - section: "Agents"
          contents:
            - agents.qmd
            - text: "Agents API"
              href: agents-api.qmd
   page-footer:
      left:
         - text: Changelog
           href: https://github.com/UKGovernmentBEIS/inspect_ai/blob/main/CHANGELOG.md
      center: "Made with Quarto"

toc-depth: 2
number-depth: 2

format:
   html:
     theme: [cosmo, theme.scss]
     toc: true
     toc-depth: 3
     code-annotations: select

execute:
  enabled: false
"""

INDEX_PAGE = """\
---
title: "Inspect"
---

## Welcome {#welcome}

Start with the [tutorial](tutorial.qmd) or read about [agents](agents.qmd#basic-agent).
"""

TUTORIAL_PAGE = """\
---
title: Tutorial
---

## Hello World

```python
from inspect_ai import Task, task

@task
def hello_world():
    return Task(dataset=[], solver=[generate()])
```
"""

AGENTS_PAGE = """\
---
title: Agents
---

## Basic Agent

The `basic_agent()` provides a ReAct tool loop. See the [tutorial](tutorial.qmd#hello-world).

```python
from inspect_ai.solver import basic_agent, system_message

agent = basic_agent(init=system_message("..."), max_attempts=3)
```

## Agent Store

Typed accessors over the sample store:

```python
class Activity(StoreModel):
    active: bool = Field(default=False)
```
"""

AGENTS_API_PAGE = """\
---
title: Agents API
---

# Agents API

Details in [Agents](agents.qmd).
"""

EXAMPLES_PAGE = """\
---
title: Examples
---

See the [index](../index.qmd).
"""

BASE_FILES: dict[str, str] = {
    "_quarto.yml": SITE_CONFIG,
    "index.qmd": INDEX_PAGE,
    "tutorial.qmd": TUTORIAL_PAGE,
    "agents.qmd": AGENTS_PAGE,
    "agents-api.qmd": AGENTS_API_PAGE,
    "examples/index.qmd": EXAMPLES_PAGE,
    "CNAME": "inspect.ai-safety-institute.org.uk\n",
    "scripts/post-render.sh": "#!/bin/sh\n",
    "theme.scss": "/*-- scss:defaults --*/\n",
    "images/inspect.png": "png",
    "images/aisi-logo.png": "png",
}


@pytest.fixture(autouse=True)
def quiet_logging():
    """Keep library logging out of test output."""
    logging.getLogger("quartolint").setLevel(logging.CRITICAL)
    logging.getLogger("yamling").setLevel(logging.CRITICAL)


@pytest.fixture
def make_project(tmp_path: Path) -> Callable[..., Path]:
    """Factory writing a Quarto project into a temporary directory.

    Starts from a clean copy of the base project. `files` replaces or adds
    files, a value of None removes the file.
    """

    def factory(files: Mapping[str, str | None] | None = None) -> Path:
        root = tmp_path / "site"
        contents: dict[str, str | None] = {**BASE_FILES, **(files or {})}
        for rel_path, text in contents.items():
            if text is None:
                continue
            path = root / rel_path
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(text, encoding="utf-8")
        return root

    return factory


@pytest.fixture
def project(make_project: Callable[..., Path]) -> Path:
    """A valid project without any issues."""
    return make_project()


@pytest.fixture
def site_yaml() -> str:
    """Site configuration of the base project."""
    return SITE_CONFIG
