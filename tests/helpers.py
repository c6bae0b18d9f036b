"""Shared fixtures for the site builder tests."""

import io
import json
import pathlib
import tempfile
import unittest
from unittest.mock import patch

BLOG_LIST = """<html><body>
<p class="count">{{POST_COUNT}} posts</p>
<div class="blog-grid">{{POSTS}}</div>
<footer>&copy; {{YEAR}}</footer>
</body></html>
"""

BLOG_POST = """<html><head><title>{{TITLE}}</title></head><body>
<h1>{{TITLE}}</h1>
<p class="meta">{{DATE}} • {{CATEGORY}}</p>
<article>{{CONTENT}}</article>
<nav>{{PREV_LINK}}{{NEXT_LINK}}</nav>
<footer>&copy; {{YEAR}}</footer>
</body></html>
"""

INDEX = """<html><body>
<section id="projects">
    <div class="container">
        <div class="projects-grid">
            <p>stale card</p>
        </div>
    </div>
</section>
</body></html>
"""


def post_text(title, date, category="Tech", body="Body text.\n"):
    return f"---\ntitle: {title}\ndate: {date}\ncategory: {category}\n---\n{body}"


class SiteTestCase(unittest.TestCase):
    """Builds a throwaway site root and captures the status output."""

    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        self.addCleanup(self._tmp.cleanup)
        self.root = pathlib.Path(self._tmp.name)

        self.stdout = io.StringIO()
        self.stderr = io.StringIO()
        for name, stream in (("sys.stdout", self.stdout), ("sys.stderr", self.stderr)):
            patcher = patch(name, stream)
            patcher.start()
            self.addCleanup(patcher.stop)

    def make_site(self):
        templates = self.root / "blog-content" / "templates"
        templates.mkdir(parents=True)
        (templates / "blog-list.html").write_text(BLOG_LIST, encoding="utf-8")
        (templates / "blog-post.html").write_text(BLOG_POST, encoding="utf-8")
        self.posts_dir.mkdir()
        self.projects_dir.mkdir(parents=True)
        (self.root / "index.html").write_text(INDEX, encoding="utf-8")

    @property
    def posts_dir(self):
        return self.root / "blog-content" / "posts"

    @property
    def projects_dir(self):
        return self.root / "portfolio-content" / "projects"

    def write_post(self, name, text):
        (self.posts_dir / name).write_text(text, encoding="utf-8")

    def write_project(self, name, data):
        text = data if isinstance(data, str) else json.dumps(data)
        (self.projects_dir / name).write_text(text, encoding="utf-8")

    def read(self, rel):
        return (self.root / rel).read_text(encoding="utf-8")

    def read_json(self, rel):
        return json.loads(self.read(rel))
