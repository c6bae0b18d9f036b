#!/usr/bin/env python3
from __future__ import annotations

import pathlib
import re
from dataclasses import dataclass, fields, replace

# ---------- Paths (relative to the site root)

POSTS_DIR = "blog-content/posts"
PROJECTS_DIR = "portfolio-content/projects"
TEMPLATE_DIR = "blog-content/templates"
POSTS_OUT = "posts"
API_DIR = "api"
BLOG_PAGE = "blog.html"
INDEX_PAGE = "index.html"
SITE_CONFIG = "site.yml"

BLOG_LIST_TEMPLATE = "blog-list.html"
BLOG_POST_TEMPLATE = "blog-post.html"

# ---------- Config

EXCERPT_LENGTH = 150
DEFAULT_POST_ICON = "📝"
DEFAULT_PROJECT_ICON = "📁"
DEFAULT_PRIORITY = "bronze"
PRIORITY_ORDER = {"platinum": 4, "gold": 3, "silver": 2, "bronze": 1}
REQUIRED_PROJECT_FIELDS = ("title", "description", "technologies")

MONTHS = (
    "January", "February", "March", "April", "May", "June", "July",
    "August", "September", "October", "November", "December",
)
DATE_FORMATS = ("%Y-%m-%d", "%Y/%m/%d", "%B %d, %Y", "%b %d, %Y", "%d %B %Y")

GITHUB_ICON = "assets/images/github-icon.webp"
DEMO_ICON = "assets/images/demo-icon.png"

# Some shared regexes

FRONTMATTER_RE = re.compile(r"\A---\n(.*?)\n---\n(.*)\Z", re.DOTALL)
QUOTE_EDGES = re.compile(r"^[\"']|[\"']$")

EXCERPT_HEADING = re.compile(r"^#{1,6}\s+", re.MULTILINE)
EXCERPT_BOLD = re.compile(r"\*\*(.*?)\*\*")
EXCERPT_ITALIC = re.compile(r"\*(.*?)\*")
EXCERPT_CODE = re.compile(r"`(.*?)`")
EXCERPT_LINK = re.compile(r"\[([^\]]+)\]\([^)]+\)")
EXCERPT_BLANK = re.compile(r"\n\s*\n")

GRID_MARKERS = re.compile(
    r"(<!--\s*projects:start\s*-->)([\s\S]*?)(<!--\s*projects:end\s*-->)"
)
PROJECTS_GRID = re.compile(
    r'(<div class="projects-grid">)([\s\S]*?)(</div>\s*</div>\s*</section>)'
)


@dataclass(frozen=True)
class SiteConfig:
    """Locations of every input and output, relative to ``root``."""

    root: pathlib.Path
    posts_dir: str = POSTS_DIR
    projects_dir: str = PROJECTS_DIR
    templates_dir: str = TEMPLATE_DIR
    posts_out: str = POSTS_OUT
    api_dir: str = API_DIR
    blog_page: str = BLOG_PAGE
    index_page: str = INDEX_PAGE

    def path(self, name: str) -> pathlib.Path:
        return self.root / getattr(self, name)

    @property
    def blog_list_template(self) -> pathlib.Path:
        return self.path("templates_dir") / BLOG_LIST_TEMPLATE

    @property
    def blog_post_template(self) -> pathlib.Path:
        return self.path("templates_dir") / BLOG_POST_TEMPLATE


def config_keys() -> tuple[str, ...]:
    return tuple(f.name for f in fields(SiteConfig) if f.name != "root")


def load_config(root: pathlib.Path | None = None) -> SiteConfig:
    """
    Build the site config for ``root`` (default: the working directory).

    An optional ``site.yml`` next to the content may override any location:

        posts_dir: content/posts
        api_dir: public/api
    """
    from .utils import read_yaml

    root = pathlib.Path(root or pathlib.Path.cwd()).resolve()
    cfg = SiteConfig(root=root)
    overrides = read_yaml(root / SITE_CONFIG)
    if not isinstance(overrides, dict):
        raise ValueError(f"{SITE_CONFIG} must contain a mapping")
    unknown = sorted(set(overrides) - set(config_keys()))
    if unknown:
        raise ValueError(
            f"{SITE_CONFIG}: unknown keys {', '.join(map(str, unknown))}"
        )
    if overrides:
        cfg = replace(cfg, **{k: str(v) for k, v in overrides.items()})
    return cfg
