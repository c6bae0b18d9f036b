#!/usr/bin/env python3
"""
Unit tests for project descriptors: validation, defaults, ordering and cards.
"""

import io
import json
import unittest
from unittest.mock import patch

from helpers import SiteTestCase
from sitebuilder.projects import (
    load_projects,
    make_project_card,
    parse_project,
    project_api_entry,
    sort_projects,
)
from sitebuilder.utils import ProjectError


def project(**kw):
    data = {"title": "Thing", "description": "Does stuff", "technologies": ["Python"]}
    data.update(kw)
    return json.dumps(data)


class TestParseProject(unittest.TestCase):
    """Test cases for parse_project."""

    def setUp(self):
        patcher = patch("sys.stdout", new_callable=io.StringIO)
        self.stdout = patcher.start()
        self.addCleanup(patcher.stop)

    def test_defaults(self):
        p = parse_project(project(slug="ignored"), "my-thing.json")
        self.assertEqual(p.slug, "my-thing")
        self.assertEqual(p.priority, "bronze")
        self.assertEqual(p.icon, "📁")
        self.assertIsNone(p.image)
        self.assertIn("Invalid priority", self.stdout.getvalue())
        self.assertIn("No icon or image", self.stdout.getvalue())

    def test_invalid_priority_normalized(self):
        p = parse_project(project(priority="emerald", icon="x"), "p.json")
        self.assertEqual(p.priority, "bronze")

    def test_image_without_icon(self):
        p = parse_project(project(image="img/shot.png", priority="gold"), "p.json")
        self.assertIsNone(p.icon)
        self.assertEqual(p.image, "img/shot.png")
        self.assertEqual(self.stdout.getvalue(), "")

    def test_missing_required_field(self):
        for missing in ("title", "description", "technologies"):
            data = json.loads(project())
            del data[missing]
            with self.subTest(missing=missing):
                with self.assertRaisesRegex(ProjectError, "Missing required fields"):
                    parse_project(json.dumps(data), "p.json")

    def test_empty_title_is_missing(self):
        with self.assertRaises(ProjectError):
            parse_project(project(title=""), "p.json")

    def test_rejects_malformed(self):
        for text in ("{not json", "[1, 2]", project(technologies="Python")):
            with self.subTest(text=text):
                with self.assertRaises(ProjectError):
                    parse_project(text, "p.json")

    def test_sort_by_priority_stable(self):
        tiers = ["bronze", "platinum", "silver", "gold", "silver"]
        projects = [
            parse_project(project(title=f"{t}-{i}", priority=t, icon="x"), f"{i}.json")
            for i, t in enumerate(tiers)
        ]
        self.assertEqual(
            [p.title for p in sort_projects(projects)],
            ["platinum-1", "gold-3", "silver-2", "silver-4", "bronze-0"],
        )

    def test_api_entry_omits_unset(self):
        entry = project_api_entry(parse_project(project(image="i.png", priority="gold"), "p.json"))
        self.assertEqual(entry, {
            "slug": "p",
            "title": "Thing",
            "description": "Does stuff",
            "priority": "gold",
            "technologies": ["Python"],
            "image": "i.png",
        })


class TestProjectCard(unittest.TestCase):
    """Test cases for the landing-page project card."""

    def card(self, **kw):
        kw.setdefault("priority", "silver")
        return make_project_card(parse_project(project(**kw), "p.json"))

    def test_image_renders_img(self):
        card = self.card(image="shot.png")
        self.assertIn('<img src="shot.png" alt="Thing" class="project-card-img-element">', card)
        self.assertIn("has-image", card)
        self.assertNotIn("<span>📁</span>", card)

    def test_icon_and_links(self):
        card = self.card(
            icon="🧪",
            github="https://github.com/x/y",
            link="https://y.example",
            technologies=["Go", "C"],
        )
        self.assertIn("<span>🧪</span>", card)
        self.assertIn('<span class="tech-tag">Go</span><span class="tech-tag">C</span>', card)
        self.assertIn('class="project-icon-link github"', card)
        self.assertIn('class="project-icon-link demo"', card)
        self.assertIn('<div class="project-links">', card)
        self.assertIn('data-priority="silver"', card)

    def test_demo_link_same_as_github_dropped(self):
        url = "https://github.com/x/y"
        card = self.card(icon="x", github=url, link=url)
        self.assertIn("github", card)
        self.assertNotIn("demo", card)

    def test_no_links_no_wrapper(self):
        self.assertNotIn("project-links", self.card(icon="x"))

    def test_escapes_text(self):
        card = self.card(icon="x", title="<b>A & B</b>")
        self.assertIn("<h3>&lt;b&gt;A &amp; B&lt;/b&gt;</h3>", card)


class TestLoadProjects(SiteTestCase):
    """Test cases for loading a projects directory."""

    def setUp(self):
        super().setUp()
        self.make_site()

    def test_skips_invalid(self):
        self.write_project("a.json", {"title": "A", "description": "d", "technologies": [], "icon": "x", "priority": "silver"})
        self.write_project("b.json", "{broken")
        self.write_project("c.json", {"title": "C", "technologies": ["Go"]})
        self.write_project("d.json", {"title": "D", "description": "d", "technologies": ["Go"], "priority": "gold", "icon": "x"})

        projects = load_projects(self.projects_dir)
        self.assertEqual([p.slug for p in projects], ["d", "a"])
        self.assertIn("b.json", self.stderr.getvalue())
        self.assertIn("c.json", self.stderr.getvalue())

    def test_non_string_priority_becomes_bronze(self):
        self.write_project("good.json", {"title": "Good", "description": "d", "technologies": ["Go"], "priority": "gold", "icon": "x"})
        self.write_project("odd.json", {"title": "Odd", "description": "d", "technologies": ["Go"], "priority": ["gold"], "icon": "x"})

        projects = load_projects(self.projects_dir)
        self.assertEqual([(p.slug, p.priority) for p in projects], [("good", "gold"), ("odd", "bronze")])
        self.assertIn("odd.json: Invalid priority", self.stdout.getvalue())

    def test_non_string_media_or_url_skips_file(self):
        self.write_project("good.json", {"title": "Good", "description": "d", "technologies": ["Go"], "icon": "x", "priority": "gold"})
        for key in ("icon", "image", "github", "link"):
            self.write_project(f"bad-{key}.json", {"title": "Bad", "description": "d", "technologies": ["Go"], "icon": "x", "priority": "gold", key: 7})

        projects = load_projects(self.projects_dir)
        self.assertEqual([p.slug for p in projects], ["good"])
        for key in ("icon", "image", "github", "link"):
            self.assertIn(f"bad-{key}.json: {key} must be a string", self.stderr.getvalue())

    def test_missing_directory(self):
        self.assertEqual(load_projects(self.root / "elsewhere"), [])
        self.assertIn("no elsewhere/ directory found", self.stdout.getvalue())


if __name__ == '__main__':
    unittest.main()
