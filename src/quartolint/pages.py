"""Discovery and parsing of Quarto source pages."""

from __future__ import annotations

from dataclasses import dataclass, field
from fnmatch import fnmatch
import re
from typing import TYPE_CHECKING, Any, Final

from quartolint.exceptions import PageLoadError
from quartolint.log import get_logger


if TYPE_CHECKING:
    from collections.abc import Sequence

    from quartolint.common_types import StrPath


logger = get_logger(__name__)

PAGE_SUFFIXES: Final = (".qmd", ".md", ".ipynb")
IGNORED_NAMES: Final = frozenset({"README.md", "README.qmd"})

_FENCE = re.compile(r"^(?P<indent>\s{0,3})(?P<fence>`{3,}|~{3,})\s*(?P<info>.*)$")
_HEADING = re.compile(r"^(?P<level>#{1,6})\s+(?P<text>.*?)\s*#*\s*$")
_ATTR_ID = re.compile(r"\{#(?P<id>[A-Za-z][\w:.-]*)[^}]*\}")
LINK_PATTERN = re.compile(
    r"(?P<image>!?)\[(?P<text>[^\[\]]*)\]\(\s*<?(?P<target>[^)\s>]+)>?(?:\s+[\"'][^)]*[\"'])?\s*\)"
)
_INLINE_CODE = re.compile(r"`+[^`]*`+")
_CELL_OPTION = re.compile(r"^#\|\s*(?P<key>[\w-]+)\s*:\s*(?P<value>.*)$")


@dataclass(frozen=True)
class Link:
    """A markdown link or image reference."""

    target: str
    text: str
    line: int
    is_image: bool = False


@dataclass(frozen=True)
class Heading:
    level: int
    text: str
    anchor: str
    line: int


@dataclass
class CodeBlock:
    """A fenced code block."""

    language: str | None
    code: str
    line: int
    """Line number of the first code line (1-based)."""

    executable: bool = False
    """Whether this is a Quarto cell like ```{python}."""

    options: dict[str, str] = field(default_factory=dict)
    """Quarto cell options (`#| key: value`)."""


@dataclass
class Page:
    """A parsed source page."""

    path: str
    front_matter: dict[str, Any] = field(default_factory=dict)
    front_matter_error: str | None = None
    title: str | None = None
    links: list[Link] = field(default_factory=list)
    headings: list[Heading] = field(default_factory=list)
    code_blocks: list[CodeBlock] = field(default_factory=list)
    ids: set[str] = field(default_factory=set)
    """Explicit element ids (`{#sec-foo}`, cell `label` options) found on the page."""

    @property
    def anchors(self) -> set[str]:
        """All link targets within the page."""
        return self.ids | {h.anchor for h in self.headings}


def slugify(text: str) -> str:
    """Create an identifier the way pandoc does for headings.

    >>> slugify("Errors & Limits")
    'errors-limits'
    """
    text = LINK_PATTERN.sub(lambda m: m["text"], text)
    text = text.lower()
    text = re.sub(r"[^\w\s.-]", "", text)
    text = re.sub(r"\s+", "-", text.strip())
    text = re.sub(r"^[^a-z]+", "", text)
    return text or "section"


def extract_links(text: str, line: int = 1) -> list[Link]:
    """Find markdown links and images in a line of prose, ignoring inline code."""
    prose = _INLINE_CODE.sub("", text)
    return [
        Link(m["target"], m["text"], line, bool(m["image"]))
        for m in LINK_PATTERN.finditer(prose)
    ]


def _parse_info(info: str) -> tuple[str | None, bool]:
    """Parse the info string of a fence into (language, executable)."""
    info = info.strip()
    if not info:
        return None, False
    if info.startswith("{{"):
        # escaped cell, shown but never run
        inner = info.strip("{}").strip()
        return (inner.split()[0].lower() if inner else None), False
    if info.startswith("{"):
        inner = info.strip("{}").strip()
        if not inner:
            return None, False
        token = inner.split()[0].rstrip(",")
        if token.startswith("."):
            return token[1:].lower(), False
        if token.startswith("#") or "=" in token:
            return None, False
        return token.lower(), True
    return info.split()[0].lower(), False


def _split_front_matter(lines: list[str]) -> tuple[str | None, int]:
    """Return front matter text and the index of the first body line."""
    if not lines or lines[0].strip() != "---":
        return None, 0
    for i, line in enumerate(lines[1:], start=1):
        if line.strip() in ("---", "..."):
            return "\n".join(lines[1:i]), i + 1
    return None, 0


def _parse_front_matter(text: str) -> tuple[dict[str, Any], str | None]:
    import yamling

    try:
        data = yamling.load_yaml(text, mode="safe")
    except Exception as exc:  # noqa: BLE001
        return {}, str(exc).strip().splitlines()[0] if str(exc).strip() else repr(exc)
    if data is None:
        return {}, None
    if not isinstance(data, dict):
        return {}, f"front matter must be a mapping, got {type(data).__name__}"
    return data, None


def _cell_options(code_lines: list[str]) -> dict[str, str]:
    options: dict[str, str] = {}
    for line in code_lines:
        if not (match := _CELL_OPTION.match(line.strip())):
            break
        options[match["key"]] = match["value"].strip()
    return options


def parse_page(text: str, path: str) -> Page:
    """Parse the markdown source of a page.

    Args:
        text: Page source
        path: Project-relative path, only used for identification

    Returns:
        Parsed page. Front matter errors are recorded, not raised.
    """
    lines = text.splitlines()
    page = Page(path=path)
    front_matter, start = _split_front_matter(lines)
    if front_matter is not None:
        page.front_matter, page.front_matter_error = _parse_front_matter(front_matter)

    fence: str | None = None
    block_start = 0
    block_info: tuple[str | None, bool] = (None, False)
    block_lines: list[str] = []

    for index in range(start, len(lines)):
        line = lines[index]
        lineno = index + 1
        if fence is not None:
            closing = line.strip()
            if closing and set(closing) == {fence[0]} and len(closing) >= len(fence):
                language, executable = block_info
                block = CodeBlock(
                    language=language,
                    code="\n".join(block_lines),
                    line=block_start,
                    executable=executable,
                    options=_cell_options(block_lines) if executable else {},
                )
                if label := block.options.get("label"):
                    page.ids.add(label.strip("\"'"))
                page.code_blocks.append(block)
                fence = None
            else:
                block_lines.append(line)
            continue

        if match := _FENCE.match(line):
            fence = match["fence"]
            block_info = _parse_info(match["info"])
            block_start = lineno + 1
            block_lines = []
            continue

        page.ids.update(m["id"] for m in _ATTR_ID.finditer(line))
        if heading := _HEADING.match(line):
            raw = heading["text"]
            explicit = _ATTR_ID.search(raw)
            title = _ATTR_ID.sub("", raw).strip()
            anchor = explicit["id"] if explicit else slugify(title)
            page.headings.append(Heading(len(heading["level"]), title, anchor, lineno))
        page.links.extend(extract_links(line, lineno))

    if fence is not None:
        logger.debug("%s: unterminated code fence at line %d", path, block_start - 1)

    title = page.front_matter.get("title")
    if isinstance(title, str) and title.strip():
        page.title = title.strip()
    else:
        page.title = next((h.text for h in page.headings if h.level == 1), None)
    return page


def notebook_to_markdown(source: str) -> str:
    """Flatten a Jupyter notebook into Quarto markdown.

    Raw and markdown cells are kept as they are, code cells become
    executable fenced cells in the notebook's kernel language.
    """
    import json

    notebook = json.loads(source)
    metadata = notebook.get("metadata", {})
    language = (
        metadata.get("kernelspec", {}).get("language")
        or metadata.get("language_info", {}).get("name")
        or "python"
    )
    chunks: list[str] = []
    for cell in notebook.get("cells", []):
        body = cell.get("source", "")
        if isinstance(body, list):
            body = "".join(body)
        match cell.get("cell_type"):
            case "code":
                chunks.append(f"```{{{language}}}\n{body}\n```")
            case _:
                chunks.append(body)
    return "\n\n".join(chunks)


def load_page(project_dir: StrPath, rel_path: str) -> Page:
    """Read and parse a page of the project.

    Raises:
        PageLoadError: If the file can't be read or decoded
    """
    from upath import UPath

    path = UPath(project_dir) / rel_path
    try:
        text = path.read_text(encoding="utf-8")
        if rel_path.endswith(".ipynb"):
            text = notebook_to_markdown(text)
    except (OSError, UnicodeDecodeError, ValueError) as exc:
        msg = f"Failed to load page {rel_path}: {exc}"
        raise PageLoadError(msg) from exc
    return parse_page(text, rel_path)


def _is_ignored(rel_path: str, skip_dirs: Sequence[str], exclude: Sequence[str]) -> bool:
    parts = rel_path.split("/")
    if any(part.startswith(("_", ".")) for part in parts):
        return True
    if parts[-1] in IGNORED_NAMES:
        return True
    if any(rel_path == d or rel_path.startswith(f"{d}/") for d in skip_dirs):
        return True
    return any(fnmatch(rel_path, pattern) for pattern in exclude)


def discover_pages(
    project_dir: StrPath,
    *,
    output_dir: str | None = None,
    exclude: Sequence[str] = (),
) -> list[str]:
    """Find the source pages of a project.

    Args:
        project_dir: Project root
        output_dir: Render output directory to skip
        exclude: Glob patterns of relative paths to skip

    Returns:
        Sorted project-relative posix paths
    """
    from upath import UPath

    root = UPath(project_dir)
    skip_dirs = [d.strip("/") for d in (output_dir,) if d and d.strip("/.")]
    pages: list[str] = []
    for path in root.rglob("*"):
        if path.suffix not in PAGE_SUFFIXES or not path.is_file():
            continue
        rel_path = path.relative_to(root).as_posix()
        if not _is_ignored(rel_path, skip_dirs, exclude):
            pages.append(rel_path)
    logger.debug("Discovered %d pages below %s", len(pages), root)
    return sorted(pages)
