"""Markdown formatter: summary, statistics, key-values and tables."""

from __future__ import annotations

from pathlib import Path

from jinja2 import Environment, FileSystemLoader

from reporting.formatters.base import BaseFormatter
from reporting.utils import confidence_label, escape_markdown_cell
from schemas.internal.documents import NormalizedDocument


class MarkdownFormatter(BaseFormatter):
    """Formatter for a human-readable Markdown report."""

    name = "markdown"
    media_type = "text/markdown"
    extension = ".md"
    template_name = "document.md.j2"

    def __init__(self, template_dir: Path | None = None):
        """
        Initialize Markdown formatter.

        Args:
            template_dir: Directory containing ``document.md.j2``
        """
        self.template_dir = template_dir or Path(__file__).parent.parent / "templates"
        self._setup_jinja_env()

    def _setup_jinja_env(self) -> None:
        self.jinja_env = Environment(
            loader=FileSystemLoader(str(self.template_dir)),
            trim_blocks=True,
            lstrip_blocks=True,
        )
        self.jinja_env.filters["escape_md"] = escape_markdown_cell
        self.jinja_env.filters["confidence_label"] = confidence_label

    def format(self, document: NormalizedDocument) -> str:
        template = self.jinja_env.get_template(self.template_name)
        return template.render(
            document=document,
            stats=document.stats,
            summary_items=document.summary.labelled(),
        )
