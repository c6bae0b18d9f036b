from __future__ import annotations

import pathlib
from datetime import datetime
from html import escape
from typing import List, Optional

from .config import DEFAULT_POST_ICON, GRID_MARKERS, PROJECTS_GRID
from .posts import Post, neighbours
from .projects import Project, make_project_card
from .utils import ensure_dir, error, format_date, warn

NO_POSTS = '<div class="no-posts"><p>No blog posts yet. Check back soon!</p></div>'
NO_PROJECTS = '<div class="no-projects"><p>Projects loading...</p></div>'


def fill(template: str, values: dict, everywhere: tuple = ()) -> str:
    """
    Literal ``{{KEY}}`` substitution.

    Keys listed in ``everywhere`` replace every occurrence, the rest only
    the first one. Nothing is evaluated.
    Values go in dict order, so content that may itself contain tokens
    belongs last.
    """
    for key, value in values.items():
        token = "{{" + key + "}}"
        count = -1 if key in everywhere else 1
        template = template.replace(token, str(value), count)
    return template


def _read_template(path: pathlib.Path) -> Optional[str]:
    if not path.exists():
        error(f"Template not found: {path}")
        return None
    return path.read_text(encoding="utf-8")


def make_post_card(post: Post) -> str:
    href = f"posts/{escape(post.slug)}.html"
    return f"""
                <article class="blog-post-card published">
                    <div class="blog-post-image">
                        <span>{escape(post.icon or DEFAULT_POST_ICON)}</span>
                    </div>
                    <div class="blog-post-content">
                        <div class="blog-post-meta">{escape(format_date(post.date))} • {escape(post.category)}</div>
                        <h3 class="blog-post-title">
                            <a href="{href}">{escape(post.title)}</a>
                        </h3>
                        <p class="blog-post-excerpt">{escape(post.excerpt)}</p>
                        <a href="{href}" class="read-more">Read More →</a>
                    </div>
                </article>
            """


def render_blog_list(
    posts: List[Post],
    template_path: pathlib.Path,
    out_path: pathlib.Path,
    year: int | None = None,
) -> bool:
    print("Generating blog list page...")
    template = _read_template(template_path)
    if template is None:
        return False

    posts_html = "".join(make_post_card(p) for p in posts) if posts else NO_POSTS
    html = fill(
        template,
        {
            "POST_COUNT": len(posts),
            "YEAR": year or datetime.now().year,
            "POSTS": posts_html,
        },
    )
    ensure_dir(out_path.parent)
    out_path.write_text(html, encoding="utf-8")
    print(f"✓ generated {out_path.name}")
    return True


def _nav_link(post: Optional[Post], rel: str, label: str) -> str:
    if post is None:
        return ""
    return (
        f'<a href="{escape(post.slug)}.html" class="post-nav-link {rel}" '
        f'rel="{rel}">{label} {escape(post.title)}</a>'
    )


def render_post_pages(
    posts: List[Post],
    template_path: pathlib.Path,
    out_dir: pathlib.Path,
    year: int | None = None,
) -> int:
    if not posts:
        return 0

    print("Generating individual post pages...")
    template = _read_template(template_path)
    if template is None:
        return 0

    ensure_dir(out_dir)
    nav = neighbours(posts)
    for post in posts:
        prv, nxt = nav[post.slug]
        html = fill(
            template,
            {
                "TITLE": escape(post.title),
                "DATE": escape(format_date(post.date)),
                "CATEGORY": escape(post.category),
                "YEAR": year or datetime.now().year,
                "PREV_LINK": _nav_link(prv, "prev", "←"),
                "NEXT_LINK": _nav_link(nxt, "next", "→"),
                "CONTENT": post.content,
            },
            everywhere=("TITLE",),
        )
        (out_dir / f"{post.slug}.html").write_text(html, encoding="utf-8")

    print(f"✓ generated {len(posts)} post pages")
    return len(posts)


def inject_projects(page: str, projects: List[Project]) -> Optional[str]:
    """
    Swap the project grid contents of ``page``; None if no grid is found.

    An explicit ``<!-- projects:start -->``/``<!-- projects:end -->`` pair
    wins over the ``projects-grid`` container markup.
    """
    cards = (
        "".join(make_project_card(p) for p in projects)
        if projects else NO_PROJECTS
    )

    def _repl(m):
        return f"{m.group(1)}\n{cards}\n                {m.group(3)}"

    for pattern in (GRID_MARKERS, PROJECTS_GRID):
        if pattern.search(page):
            return pattern.sub(_repl, page, count=1)
    return None


def render_index_projects(
    projects: List[Project], index_path: pathlib.Path
) -> bool:
    print(f"Updating {index_path.name} with projects...")
    if not index_path.exists():
        error(f"{index_path.name} not found")
        return False

    page = index_path.read_text(encoding="utf-8")
    updated = inject_projects(page, projects)
    if updated is None:
        warn(f"no project grid found in {index_path.name}, left unchanged")
        return False

    index_path.write_text(updated, encoding="utf-8")
    print(f"✓ updated {index_path.name} with {len(projects)} projects")
    return True
