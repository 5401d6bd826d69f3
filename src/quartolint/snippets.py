"""Syntax checks for code snippets embedded in pages.

Snippets in documentation are illustrative, they are parsed but never run.
"""

from __future__ import annotations

import ast
from collections.abc import Callable
from dataclasses import dataclass
import textwrap
from typing import TYPE_CHECKING, Final


if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence

    from quartolint.pages import CodeBlock, Page


LANGUAGE_ALIASES: Final = {
    "py": "python",
    "python3": "python",
    "ipython": "python",
    "pycon": "python",
    "yml": "yaml",
}


@dataclass(frozen=True)
class SnippetError:
    """A syntax error, `line` is relative to the page."""

    line: int
    message: str


@dataclass(frozen=True)
class Snippet:
    page: str
    line: int
    language: str
    code: str
    executable: bool = False
    error: SnippetError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


def normalize_language(language: str | None) -> str | None:
    if not language:
        return None
    language = language.lower()
    return LANGUAGE_ALIASES.get(language, language)


def prepare_source(code: str) -> str:
    """Turn a python snippet into parseable source.

    Line numbers are kept stable: IPython magics, shell escapes and doctest
    output lines are blanked, doctest prompts are stripped.
    """
    code = textwrap.dedent(code)
    lines = code.splitlines()
    first = next((line.lstrip() for line in lines if line.strip()), "")
    transcript = first.startswith(">>>")
    result: list[str] = []
    for line in lines:
        stripped = line.lstrip()
        if transcript:
            if stripped.startswith((">>> ", "... ")) or stripped in (">>>", "..."):
                result.append(stripped[4:])
            else:
                result.append("")
        elif stripped.startswith(("%", "!")):
            result.append("")
        else:
            result.append(line)
    return "\n".join(result)


def _check_python(code: str) -> tuple[int, str] | None:
    try:
        ast.parse(prepare_source(code))
    except SyntaxError as exc:
        return exc.lineno or 1, exc.msg
    return None


def _strip_front_matter_fences(code: str) -> str:
    """Blank the `---` lines around a front matter example, keeping line numbers."""
    lines = code.splitlines()
    filled = [i for i, line in enumerate(lines) if line.strip()]
    if len(filled) >= 2 and lines[filled[0]].strip() == "---":  # noqa: PLR2004
        last = filled[-1]
        if lines[last].strip() in ("---", "..."):
            lines[filled[0]] = lines[last] = ""
    return "\n".join(lines)


def _check_yaml(code: str) -> tuple[int, str] | None:
    import yamling

    try:
        yamling.load_yaml(_strip_front_matter_fences(code), mode="safe")
    except Exception as exc:  # noqa: BLE001
        mark = getattr(exc, "problem_mark", None)
        line = mark.line + 1 if mark is not None else 1
        problem = getattr(exc, "problem", None) or str(exc).strip().splitlines()[0]
        return line, problem
    return None


def _check_json(code: str) -> tuple[int, str] | None:
    import json

    try:
        json.loads(code)
    except json.JSONDecodeError as exc:
        return exc.lineno, exc.msg
    return None


CHECKERS: Final[dict[str, Callable[[str], tuple[int, str] | None]]] = {
    "python": _check_python,
    "yaml": _check_yaml,
    "json": _check_json,
}


def check_snippet(block: CodeBlock, page: str) -> Snippet:
    """Syntax-check a code block.

    Languages without a checker are reported as fine.
    """
    language = normalize_language(block.language) or ""
    error = None
    if checker := CHECKERS.get(language):
        if (found := checker(block.code)) is not None:
            line, message = found
            error = SnippetError(block.line + line - 1, message)
    return Snippet(page, block.line, language, block.code, block.executable, error)


def collect_snippets(pages: Iterable[Page], languages: Sequence[str]) -> list[Snippet]:
    """Check all code blocks of the given languages."""
    wanted = {normalize_language(lang) for lang in languages}
    return [
        check_snippet(block, page.path)
        for page in pages
        for block in page.code_blocks
        if normalize_language(block.language) in wanted
    ]
