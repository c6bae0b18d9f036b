from __future__ import annotations

import pathlib
from dataclasses import dataclass, field
from datetime import datetime
from typing import Dict, List, Optional

from .config import FRONTMATTER_RE, QUOTE_EDGES
from .markdown_processing import generate_excerpt, render_markdown
from .utils import (
    ContentError,
    FrontmatterError,
    _norm_text,
    error,
    list_sources,
    parse_datetime,
    sort_instant,
    warn,
)


@dataclass(frozen=True)
class Post:
    slug: str
    title: str
    date: str
    category: str
    icon: str
    content: str
    excerpt: str
    raw_content: str
    meta: Dict[str, str] = field(default_factory=dict)

    @property
    def published(self) -> Optional[datetime]:
        return parse_datetime(self.date)


def parse_frontmatter_block(text: str) -> Dict[str, str]:
    """
    Flat ``key: value`` pairs; values stay strings.

    The split happens at the first colon, so ``time: 10:30`` keeps its
    value intact. One layer of surrounding quotes is dropped.
    """
    meta: Dict[str, str] = {}
    for line in text.splitlines():
        if not line.strip():
            continue
        idx = line.find(":")
        if idx <= 0:
            continue
        key = line[:idx].strip()
        meta[key] = QUOTE_EDGES.sub("", line[idx + 1:].strip())
    return meta


def parse_post(text: str, filename: str) -> Post:
    m = FRONTMATTER_RE.match(_norm_text(text))
    if not m:
        raise FrontmatterError(f"{filename}: Invalid frontmatter format")

    fm_text, body = m.groups()
    meta = parse_frontmatter_block(fm_text)
    slug = pathlib.PurePath(filename).stem

    return Post(
        slug=slug,
        title=meta.get("title") or slug.replace("-", " ").title(),
        date=meta.get("date", ""),
        category=meta.get("category", ""),
        icon=meta.get("icon", ""),
        content=render_markdown(body),
        excerpt=generate_excerpt(body),
        raw_content=body,
        meta=meta,
    )


def load_posts(posts_dir: pathlib.Path) -> List[Post]:
    print("Reading blog posts...")
    names = list_sources(posts_dir, ".md")
    if not names and posts_dir.is_dir():
        print("- no posts found")

    posts: List[Post] = []
    for name in names:
        try:
            text = (posts_dir / name).read_text(encoding="utf-8")
            post = parse_post(text, name)
        except (OSError, UnicodeDecodeError, ContentError) as e:
            error(f"skipping {name}: {e}")
            continue
        if post.published is None:
            warn(f"{name}: unparseable date {post.date!r}, sorting last")
        posts.append(post)
        print(f"✓ parsed {post.title}")

    posts = sort_posts(posts)
    print(f"✓ processed {len(posts)} posts")
    return posts


def sort_posts(posts: List[Post]) -> List[Post]:
    """Newest first, time of day included; ties keep their filename order."""

    def _key(p: Post) -> datetime:
        dt = p.published
        return sort_instant(dt) if dt else datetime.min

    return sorted(posts, key=_key, reverse=True)


def neighbours(posts: List[Post]) -> Dict[str, tuple]:
    """slug -> (previous, next) in listing order."""
    out: Dict[str, tuple] = {}
    for i, p in enumerate(posts):
        prv = posts[i - 1] if i > 0 else None
        nxt = posts[i + 1] if i < len(posts) - 1 else None
        out[p.slug] = (prv, nxt)
    return out
