"""Checks of the site configuration itself."""

from __future__ import annotations

import shlex
from typing import TYPE_CHECKING, Final

from quartolint.checks.registry import rule
from quartolint.issues import Finding
from quartolint.pages import extract_links


if TYPE_CHECKING:
    from collections.abc import Iterator

    from quartolint.context import LintContext


BOOTSWATCH_THEMES: Final = frozenset({
    "default",
    "none",
    "pandoc",
    "cerulean",
    "cosmo",
    "cyborg",
    "darkly",
    "flatly",
    "journal",
    "litera",
    "lumen",
    "lux",
    "materia",
    "minty",
    "morph",
    "pulse",
    "quartz",
    "sandstone",
    "simplex",
    "sketchy",
    "slate",
    "solar",
    "spacelab",
    "superhero",
    "united",
    "vapor",
    "yeti",
    "zephyr",
})
SCRIPT_SUFFIXES: Final = (".py", ".sh", ".ts", ".js", ".r", ".lua", ".ps1", ".bat")
INTERPRETERS: Final = frozenset({
    "python",
    "python3",
    "uv",
    "sh",
    "bash",
    "zsh",
    "node",
    "deno",
    "rscript",
    "lua",
    "pwsh",
})
DEPTH_RANGE: Final = range(1, 7)


def _looks_like_script(token: str) -> bool:
    from quartolint.navigation import classify_href

    if token.startswith("-") or classify_href(token) != "page":
        return False
    return "/" in token or token.lower().endswith(SCRIPT_SUFFIXES)


def _script_paths(command: str) -> list[str]:
    """The script file a render command runs, if it names one.

    That is the first word, or the script argument of an interpreter like
    `python tools/gen.py`. Other arguments are never checked.
    """
    try:
        tokens = shlex.split(command)
    except ValueError:
        tokens = command.split()
    if not tokens:
        return []
    program, *args = tokens
    if _looks_like_script(program):
        return [program]
    if program.rsplit("/", 1)[-1].lower() not in INTERPRETERS:
        return []
    args = [arg for arg in args if arg != "run"]
    script = next((arg for arg in args if not arg.startswith("-")), None)
    return [script] if script and _looks_like_script(script) else []


@rule("missing-resource", "error", "A project resource matches no file")
def check_resources(ctx: LintContext) -> Iterator[Finding]:
    for pattern in ctx.site.project.resources:
        pattern = pattern.lstrip("/")
        if not pattern:
            continue
        if not any(True for _ in ctx.root.glob(pattern)):
            msg = f"Resource {pattern!r} matches no file"
            yield Finding(msg, ctx.config_name)


@rule("missing-script", "error", "A pre-render or post-render script does not exist")
def check_scripts(ctx: LintContext) -> Iterator[Finding]:
    project = ctx.site.project
    stages = {"pre-render": project.pre_render, "post-render": project.post_render}
    for stage, commands in stages.items():
        for command in commands:
            for script in _script_paths(command):
                if not ctx.exists(script.lstrip("/")):
                    yield Finding(f"{stage} script {script!r} not found", ctx.config_name)


@rule("missing-theme", "error", "A custom theme or css file does not exist")
def check_theme(ctx: LintContext) -> Iterator[Finding]:
    html = ctx.site.html
    for entry in html.theme:
        if entry.lower() in BOOTSWATCH_THEMES:
            continue
        if not ctx.exists(entry.lstrip("/")):
            yield Finding(f"Theme file {entry!r} not found", ctx.config_name)
    for entry in html.css:
        if not ctx.exists(entry.lstrip("/")):
            yield Finding(f"Stylesheet {entry!r} not found", ctx.config_name)


def _site_images(ctx: LintContext) -> Iterator[tuple[str, str]]:
    website = ctx.site.website
    if website is None:
        return
    for sidebar in website.sidebar:
        if sidebar.logo:
            yield "sidebar logo", sidebar.logo
        if sidebar.header:
            for link in extract_links(sidebar.header):
                if link.is_image:
                    yield "sidebar header image", link.target
    if website.navbar and website.navbar.logo:
        yield "navbar logo", website.navbar.logo
    cards = {"twitter-card": website.twitter_card, "open-graph": website.open_graph}
    for name, card in cards.items():
        if card is not None and not isinstance(card, bool) and card.image:
            yield f"{name} image", card.image


@rule("missing-image", "warning", "An image referenced by the site configuration is missing")
def check_images(ctx: LintContext) -> Iterator[Finding]:
    from quartolint.navigation import classify_href

    for what, target in _site_images(ctx):
        if classify_href(target) != "page":
            continue
        if ctx.resolve(target.split("#", 1)[0]) is None:
            yield Finding(f"{what} {target!r} not found", ctx.config_name)


@rule("depth-range", "warning", "A toc or numbering depth is outside 1..6")
def check_depths(ctx: LintContext) -> Iterator[Finding]:
    depths = {
        "toc-depth": ctx.site.toc_depth,
        "number-depth": ctx.site.number_depth,
        "format.html.toc-depth": ctx.site.html.toc_depth,
    }
    for key, value in depths.items():
        if value is not None and value not in DEPTH_RANGE:
            yield Finding(f"{key} is {value}, expected 1 to 6", ctx.config_name)


@rule(
    "execute-enabled",
    "info",
    "Pages contain executable cells while execution is not disabled",
)
def check_execute(ctx: LintContext) -> Iterator[Finding]:
    if ctx.site.execute.enabled is False:
        return
    for page in ctx.pages():
        execute = page.front_matter.get("execute")
        if isinstance(execute, dict) and execute.get("enabled") is False:
            continue
        cells = [block for block in page.code_blocks if block.executable]
        if cells:
            msg = f"{len(cells)} executable cell(s) will run when rendering"
            yield Finding(msg, page.path, cells[0].line - 1)
