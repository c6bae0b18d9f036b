#!/usr/bin/env python3
"""
Static portfolio & blog builder.

- Posts    blog-content/posts/*.md         -> posts/<slug>.html, blog.html
- Projects portfolio-content/projects/*.json -> project grid in index.html
- Both     -> api/blog.json, api/projects.json

Posts carry a flat front matter block (title, date, category, icon) and a
markdown body. Projects are JSON objects with title, description and
technologies, plus optional priority, icon/image, github and link.

Every run rebuilds everything from source. A bad source file is reported
and left out; a missing template or index.html skips only that page.
Locations can be overridden with a site.yml at the site root.
"""

from __future__ import annotations

import pathlib
import sys
from dataclasses import dataclass
from typing import List

from .api import write_api_data
from .config import SiteConfig, load_config
from .posts import Post, load_posts
from .projects import Project, load_projects
from .render import render_blog_list, render_index_projects, render_post_pages
from .utils import ensure_dir, error


@dataclass(frozen=True)
class BuildResult:
    posts: List[Post]
    projects: List[Project]
    post_pages: int
    blog_page: bool = False
    index_page: bool = False


def build(cfg: SiteConfig) -> BuildResult:
    print("Building portfolio & blog...")
    print("=" * 42)

    ensure_dir(cfg.path("posts_out"))
    ensure_dir(cfg.path("api_dir"))

    posts = load_posts(cfg.path("posts_dir"))
    projects = load_projects(cfg.path("projects_dir"))

    listed = render_blog_list(posts, cfg.blog_list_template, cfg.path("blog_page"))
    pages = render_post_pages(posts, cfg.blog_post_template, cfg.path("posts_out"))
    indexed = render_index_projects(projects, cfg.path("index_page"))
    write_api_data(posts, projects, cfg.path("api_dir"))

    steps = ((cfg.blog_page, listed), (cfg.index_page, indexed))
    written = [name for name, ok in steps if ok]
    skipped = [name for name, ok in steps if not ok]
    if posts and not pages:
        skipped.append("post pages")

    print("=" * 42)
    if skipped:
        print(f"! portfolio built with skipped steps: {', '.join(skipped)}")
    else:
        print("✓ portfolio built successfully")
    print(f"  posts:    {len(posts)}")
    print(f"  projects: {len(projects)}")
    print(f"  pages:    {', '.join(written + [f'{pages} post pages'])}")
    return BuildResult(
        posts=posts,
        projects=projects,
        post_pages=pages,
        blog_page=listed,
        index_page=indexed,
    )


def main(root: pathlib.Path | None = None) -> int:
    try:
        build(load_config(root))
    except Exception as e:
        error(f"Build failed: {e}")
        return 1
    return 0


def run() -> None:
    sys.exit(main())


if __name__ == "__main__":
    run()
