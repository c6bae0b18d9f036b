from __future__ import annotations

import pathlib
from typing import Any, Dict, List

from .config import DEFAULT_POST_ICON
from .posts import Post
from .projects import Project, project_api_entry
from .utils import iso_timestamp, write_json


def blog_api_data(posts: List[Post], generated: str) -> Dict[str, Any]:
    return {
        "posts": [
            {
                "slug": p.slug,
                "title": p.title,
                "date": p.date,
                "category": p.category,
                "excerpt": p.excerpt,
                "icon": p.icon or DEFAULT_POST_ICON,
            }
            for p in posts
        ],
        "lastUpdated": generated,
        "totalPosts": len(posts),
    }


def projects_api_data(projects: List[Project], generated: str) -> Dict[str, Any]:
    return {
        "projects": [project_api_entry(p) for p in projects],
        "lastUpdated": generated,
        "totalProjects": len(projects),
    }


def write_api_data(
    posts: List[Post],
    projects: List[Project],
    api_dir: pathlib.Path,
    generated: str | None = None,
) -> None:
    print("Generating API data...")
    generated = generated or iso_timestamp()
    write_json(api_dir / "blog.json", blog_api_data(posts, generated))
    write_json(api_dir / "projects.json", projects_api_data(projects, generated))
    print(f"✓ generated {api_dir.name}/blog.json, {api_dir.name}/projects.json")
