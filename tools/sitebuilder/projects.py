from __future__ import annotations

import json
import pathlib
from dataclasses import dataclass
from html import escape
from typing import Any, Dict, List, Optional

from .config import (
    DEFAULT_PRIORITY,
    DEFAULT_PROJECT_ICON,
    DEMO_ICON,
    GITHUB_ICON,
    PRIORITY_ORDER,
    REQUIRED_PROJECT_FIELDS,
)
from .utils import ContentError, ProjectError, error, list_sources, warn


@dataclass(frozen=True)
class Project:
    slug: str
    title: str
    description: str
    technologies: tuple
    priority: str = DEFAULT_PRIORITY
    icon: Optional[str] = None
    image: Optional[str] = None
    github: Optional[str] = None
    link: Optional[str] = None

    @property
    def rank(self) -> int:
        return PRIORITY_ORDER.get(self.priority, 0)


def _missing(value: Any) -> bool:
    return value is None or value is False or value == ""


def _optional_str(data: Dict[str, Any], key: str, filename: str) -> Optional[str]:
    value = data.get(key)
    if _missing(value):
        return None
    if not isinstance(value, str):
        raise ProjectError(f"{filename}: {key} must be a string")
    return value


def parse_project(text: str, filename: str) -> Project:
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise ProjectError(f"{filename}: invalid JSON ({e})") from e
    if not isinstance(data, dict):
        raise ProjectError(f"{filename}: expected a JSON object")

    if any(_missing(data.get(k)) for k in REQUIRED_PROJECT_FIELDS):
        raise ProjectError(
            f"{filename}: Missing required fields "
            f"({', '.join(REQUIRED_PROJECT_FIELDS)})"
        )
    technologies = data["technologies"]
    if not isinstance(technologies, list):
        raise ProjectError(f"{filename}: technologies must be a list")

    priority = data.get("priority")
    if not (isinstance(priority, str) and priority in PRIORITY_ORDER):
        warn(
            f"{filename}: Invalid priority {priority!r}, "
            f"defaulting to '{DEFAULT_PRIORITY}'"
        )
        priority = DEFAULT_PRIORITY

    icon = _optional_str(data, "icon", filename)
    image = _optional_str(data, "image", filename)
    github = _optional_str(data, "github", filename)
    link = _optional_str(data, "link", filename)
    if not icon and not image:
        warn(f"{filename}: No icon or image provided, using default")
        icon = DEFAULT_PROJECT_ICON

    return Project(
        slug=pathlib.PurePath(filename).stem,
        title=str(data["title"]),
        description=str(data["description"]),
        technologies=tuple(str(t) for t in technologies),
        priority=priority,
        icon=icon,
        image=image,
        github=github,
        link=link,
    )


def load_projects(projects_dir: pathlib.Path) -> List[Project]:
    print("Reading projects...")
    names = list_sources(projects_dir, ".json")
    if not names and projects_dir.is_dir():
        print("- no projects found")

    projects: List[Project] = []
    for name in names:
        try:
            text = (projects_dir / name).read_text(encoding="utf-8")
            project = parse_project(text, name)
        except (OSError, UnicodeDecodeError, ContentError) as e:
            error(f"skipping {name}: {e}")
            continue
        projects.append(project)
        print(f"✓ parsed {project.title}")

    projects = sort_projects(projects)
    print(f"✓ processed {len(projects)} projects")
    return projects


def sort_projects(projects: List[Project]) -> List[Project]:
    """platinum > gold > silver > bronze, input order within a tier."""
    return sorted(projects, key=lambda p: p.rank, reverse=True)


def make_project_card(project: Project) -> str:
    title = escape(project.title)
    if project.image:
        media = (
            f'<img src="{escape(project.image)}" alt="{title}" '
            f'class="project-card-img-element">'
        )
    else:
        media = f"<span>{escape(project.icon or DEFAULT_PROJECT_ICON)}</span>"

    tech_tags = "".join(
        f'<span class="tech-tag">{escape(t)}</span>' for t in project.technologies
    )

    links = ""
    if project.github:
        links += f"""
                <a href="{escape(project.github)}" target="_blank" class="project-icon-link github" title="View on GitHub">
                    <img src="{GITHUB_ICON}" alt="GitHub" class="project-link-icon">
                </a>"""
    if project.link and project.link != project.github:
        links += f"""
                <a href="{escape(project.link)}" target="_blank" class="project-icon-link demo" title="View Live Demo">
                    <img src="{DEMO_ICON}" alt="Demo" class="project-link-icon">
                </a>"""
    links_html = f'<div class="project-links">{links}</div>' if links else ""

    return f"""
                <!-- {title} - Priority: {project.priority} -->
                <div class="project-card" data-priority="{project.priority}">
                    <div class="project-card-img {'has-image' if project.image else 'has-icon'}">
                        {media}
                    </div>
                    <div class="project-card-content">
                        <h3>{title}</h3>
                        <div class="tech-stack">
                            {tech_tags}
                        </div>
                        <p>{escape(project.description)}</p>
                        {links_html}
                    </div>
                </div>"""


def project_api_entry(project: Project) -> Dict[str, Any]:
    entry = {
        "slug": project.slug,
        "title": project.title,
        "description": project.description,
        "priority": project.priority,
        "technologies": list(project.technologies),
        "icon": project.icon,
        "image": project.image,
        "github": project.github,
        "link": project.link,
    }
    return {k: v for k, v in entry.items() if v is not None}
