"""Shared fixtures: on-disk template trees and a recording token source."""

from collections.abc import Callable
from pathlib import Path

import pytest

LAYOUT = """\
<html>
<head><title>{% block title %}Site{% endblock %}</title></head>
<body>
{% block content %}{% endblock %}
</body>
</html>"""

HOME = """\
{% extends "layout.html" %}
{% block title %}{{ title }}{% endblock %}
{% block content %}<h1>{{ title }}</h1>{% endblock %}"""


class RecordingTokens:
    """Token source that hands out predictable tokens and remembers requests."""

    def __init__(self, prefix: str = "tok") -> None:
        self.prefix = prefix
        self.requests: list[object] = []

    def issue_token(self, request: object) -> str:
        self.requests.append(request)
        return f"{self.prefix}-{len(self.requests)}"


type WriteTemplates = Callable[[dict[str, str]], Path]


@pytest.fixture
def write_templates(tmp_path: Path) -> WriteTemplates:
    """Write ``{relative_path: source}`` under tmp_path and return tmp_path."""

    def write(files: dict[str, str]) -> Path:
        for rel, source in files.items():
            path = tmp_path / rel
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(source, encoding="utf-8")
        return tmp_path

    return write


@pytest.fixture
def site(write_templates: WriteTemplates) -> Path:
    """A fragments root ``frag/`` with a layout and a pages root ``pages/`` with home."""
    return write_templates({"frag/layout.html": LAYOUT, "pages/home.html": HOME})


@pytest.fixture
def tokens() -> RecordingTokens:
    return RecordingTokens()
