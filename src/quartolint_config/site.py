"""Models for the Quarto site configuration (`_quarto.yml`)."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Self

from pydantic import Field, ValidationError, field_validator, model_validator

from quartolint.exceptions import ConfigLoadError
from quartolint.log import get_logger
from quartolint_config.base import QuartoModel, as_list


if TYPE_CHECKING:
    from quartolint.common_types import StrPath


logger = get_logger(__name__)

CONFIG_FILE_NAMES = ("_quarto.yml", "_quarto.yaml")


class ProjectConfig(QuartoModel):
    """The `project` section."""

    type: str = "default"
    """Project type (website, book, manuscript, default)."""

    resources: list[str] = Field(default_factory=list)
    """Files or globs copied verbatim into the output."""

    pre_render: list[str] = Field(default_factory=list)
    """Commands run before rendering."""

    post_render: list[str] = Field(default_factory=list)
    """Commands run after rendering."""

    output_dir: str | None = None
    """Output directory, `_site` for websites when unset."""

    render: list[str] = Field(default_factory=list)
    """Explicit render list."""

    @field_validator("resources", "pre_render", "post_render", "render", mode="before")
    @classmethod
    def _scalar_to_list(cls, value: Any) -> Any:
        return as_list(value) if value is not None else []


class NavItem(QuartoModel):
    """A single navigation entry.

    Quarto accepts several shapes for these:

        contents:
          - index.qmd                     # bare page path
          - text: "VS Code"               # link with explicit text
            href: vscode.qmd
          - section: "Basics"             # section with nested contents
            contents: [tutorial.qmd]
    """

    href: str | None = None
    """Link target, either a page path or an URL."""

    text: str | None = None
    """Displayed text."""

    icon: str | None = None
    """Bootstrap icon name."""

    aria_label: str | None = None
    """Accessible label for icon-only links."""

    section: str | None = None
    """Section title, set for section headers."""

    contents: list[NavItem] | None = None
    """Nested entries of a section."""

    menu: list[NavItem] | None = None
    """Nested entries of a navbar menu."""

    @model_validator(mode="before")
    @classmethod
    def _normalize(cls, data: Any) -> Any:
        if isinstance(data, str):
            return {"href": data}
        if isinstance(data, dict) and "file" in data and "href" not in data:
            data = dict(data)
            data["href"] = data.pop("file")
        return data

    @field_validator("contents", "menu", mode="before")
    @classmethod
    def _string_contents(cls, value: Any) -> Any:
        # `contents: auto` or a single glob
        return as_list(value)

    @property
    def is_section(self) -> bool:
        return self.section is not None or self.contents is not None

    @property
    def children(self) -> list[NavItem]:
        return [*(self.contents or []), *(self.menu or [])]

    @property
    def title(self) -> str | None:
        return self.section or self.text


class SidebarConfig(QuartoModel):
    """A website sidebar."""

    id: str | None = None
    title: str | None = None
    style: str | None = None
    search: bool | None = None
    logo: str | None = None
    header: str | None = None

    tools: list[NavItem] = Field(default_factory=list)
    """Icon links shown at the top of the sidebar."""

    contents: list[NavItem] = Field(default_factory=list)
    """Navigation tree."""

    @field_validator("contents", "tools", mode="before")
    @classmethod
    def _string_contents(cls, value: Any) -> Any:
        return as_list(value) if value is not None else []

    @property
    def is_auto(self) -> bool:
        """Whether any part of the sidebar is generated from the file system."""

        def walk(items: list[NavItem]) -> bool:
            return any(i.href == "auto" or walk(i.children) for i in items)

        return walk(self.contents)


class NavbarConfig(QuartoModel):
    """The website navbar."""

    title: str | bool | None = None
    logo: str | None = None
    left: list[NavItem] = Field(default_factory=list)
    right: list[NavItem] = Field(default_factory=list)


class PageFooterConfig(QuartoModel):
    """The page footer. Each part is either markdown text or a list of links."""

    left: str | list[NavItem] | None = None
    center: str | list[NavItem] | None = None
    right: str | list[NavItem] | None = None

    def parts(self) -> dict[str, list[NavItem]]:
        """Link lists by position, markdown text parts are skipped."""
        parts = {"left": self.left, "center": self.center, "right": self.right}
        return {k: v for k, v in parts.items() if isinstance(v, list)}


class SocialCardConfig(QuartoModel):
    """Twitter card / Open Graph metadata."""

    title: str | None = None
    description: str | None = None
    image: str | None = None
    card_style: str | None = None


class WebsiteConfig(QuartoModel):
    """The `website` section."""

    title: str | None = None
    site_url: str | None = None
    repo_url: str | None = None
    repo_actions: list[str] = Field(default_factory=list)
    bread_crumbs: bool | None = None
    page_navigation: bool | None = None

    sidebar: list[SidebarConfig] = Field(default_factory=list)
    """Sidebars, a single sidebar mapping is normalised to a list."""

    navbar: NavbarConfig | None = None
    page_footer: PageFooterConfig | None = None
    twitter_card: bool | SocialCardConfig | None = None
    open_graph: bool | SocialCardConfig | None = None

    @field_validator("sidebar", "repo_actions", mode="before")
    @classmethod
    def _single_to_list(cls, value: Any) -> Any:
        return as_list(value) if value is not None else []

    @field_validator("page_footer", mode="before")
    @classmethod
    def _footer_text(cls, value: Any) -> Any:
        if isinstance(value, str):
            return {"center": value}
        return value


class HtmlFormatConfig(QuartoModel):
    """Options of the `html` format."""

    theme: list[str] = Field(default_factory=list)
    """Theme entries, built-in theme names or `.scss` files."""

    toc: bool | None = None
    toc_depth: int | None = None
    number_sections: bool | None = None
    code_annotations: str | bool | None = None
    css: list[str] = Field(default_factory=list)

    @field_validator("theme", mode="before")
    @classmethod
    def _flatten_theme(cls, value: Any) -> Any:
        if value is None:
            return []
        if isinstance(value, dict):
            # light/dark variants
            entries: list[str] = []
            for variant in value.values():
                entries.extend(as_list(variant))
            return entries
        return as_list(value)

    @field_validator("css", mode="before")
    @classmethod
    def _css_list(cls, value: Any) -> Any:
        return as_list(value) if value is not None else []


class ExecuteConfig(QuartoModel):
    """The `execute` section."""

    enabled: bool | None = None
    """Whether code cells get executed. None means unspecified."""


class SiteConfig(QuartoModel):
    """Root of a `_quarto.yml` file."""

    project: ProjectConfig = Field(default_factory=ProjectConfig)
    website: WebsiteConfig | None = None

    format: dict[str, Any] = Field(default_factory=dict)
    """Output formats by name. Only `html` is validated, into `HtmlFormatConfig`."""

    toc_depth: int | None = None
    number_sections: bool | None = None
    number_depth: int | None = None
    execute: ExecuteConfig = Field(default_factory=ExecuteConfig)
    metadata_files: list[str] = Field(default_factory=list)

    @field_validator("format", mode="before")
    @classmethod
    def _format_mapping(cls, value: Any) -> Any:
        if value is None:
            return {}
        if isinstance(value, str):
            return {value: {}}
        return value

    @field_validator("format")
    @classmethod
    def _html_options(cls, value: dict[str, Any]) -> dict[str, Any]:
        options = value.get("html")
        if isinstance(options, HtmlFormatConfig):
            return value
        if not isinstance(options, dict):
            # absent, or a bare `html: default`
            return {**value, "html": HtmlFormatConfig()} if "html" in value else value
        try:
            html = HtmlFormatConfig.model_validate(options)
        except ValidationError as exc:
            msg = f"invalid html format options: {exc}"
            raise ValueError(msg) from exc
        return {**value, "html": html}

    @field_validator("metadata_files", mode="before")
    @classmethod
    def _metadata_list(cls, value: Any) -> Any:
        return as_list(value) if value is not None else []

    @field_validator("execute", mode="before")
    @classmethod
    def _execute_default(cls, value: Any) -> Any:
        return {} if value is None else value

    @property
    def html(self) -> HtmlFormatConfig:
        """The html format options, defaults when not configured."""
        options = self.format.get("html")
        return options if isinstance(options, HtmlFormatConfig) else HtmlFormatConfig()

    @property
    def sidebars(self) -> list[SidebarConfig]:
        return self.website.sidebar if self.website else []

    @property
    def output_dir(self) -> str:
        """Render output directory, relative to the project root."""
        if self.project.output_dir:
            return self.project.output_dir
        return "_site" if self.project.type in ("website", "book") else "."

    @classmethod
    def from_yaml(cls, text: str) -> Self:
        """Parse site configuration from YAML text.

        Raises:
            ConfigLoadError: If the text is not valid YAML or not a valid config
        """
        import yamling

        try:
            data = yamling.load_yaml(text, mode="safe")
        except Exception as exc:
            msg = f"Invalid YAML in site configuration: {exc}"
            raise ConfigLoadError(msg) from exc
        return cls._validate_data(data, "<string>")

    @classmethod
    def from_file(cls, path: StrPath) -> Self:
        """Load site configuration from a `_quarto.yml` file.

        Args:
            path: Path to the configuration file

        Returns:
            Validated site configuration

        Raises:
            ConfigLoadError: If reading, parsing or validation fails
        """
        import yamling
        from upath import UPath

        path = UPath(path)
        logger.debug("Loading site configuration from %s", path)
        try:
            text = path.read_text(encoding="utf-8")
            data = yamling.load_yaml(text, mode="safe")
        except Exception as exc:
            msg = f"Failed to load site config from {path}: {exc}"
            raise ConfigLoadError(msg) from exc
        return cls._validate_data(data, str(path))

    @classmethod
    def _validate_data(cls, data: Any, source: str) -> Self:
        if data is None:
            data = {}
        if not isinstance(data, dict):
            msg = f"Site config {source} must be a mapping, got {type(data).__name__}"
            raise ConfigLoadError(msg)
        try:
            return cls.model_validate(data)
        except ValidationError as exc:
            msg = f"Invalid site config {source}: {exc}"
            raise ConfigLoadError(msg) from exc
