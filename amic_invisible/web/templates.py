from __future__ import annotations

import html
import re
from dataclasses import dataclass
from pathlib import Path

ASSIGNMENT_TEMPLATE = "index.html"
ERROR_TEMPLATE = "error.html"

ASSIGNMENT_PLACEHOLDER = re.compile(r"\{\{(self|target)\}\}")


@dataclass(frozen=True)
class Templates:
    assignment: str
    error: str


def load_templates(templates_dir: str) -> Templates:
    base = Path(templates_dir)
    return Templates(
        assignment=(base / ASSIGNMENT_TEMPLATE).read_text(encoding="utf-8"),
        error=(base / ERROR_TEMPLATE).read_text(encoding="utf-8"),
    )


def render_assignment(template: str, self_name: str, target_name: str) -> str:
    # single pass, so a name that looks like a placeholder stays as typed
    values = {"self": html.escape(self_name), "target": html.escape(target_name)}
    return ASSIGNMENT_PLACEHOLDER.sub(lambda match: values[match.group(1)], template)


def render_error(template: str, message: str) -> str:
    return template.replace("{{error_message}}", html.escape(message))
