from __future__ import annotations

"""Jinja2 rendering for the exported DORA report.

This module is deliberately kept thin: it owns the Jinja2 environment and
nothing else.  All decisions about what goes into the report live in
:mod:`dora_check.reports.generator`.
"""

import logging
from pathlib import Path

import jinja2

from dora_check.metrics.classifier import format_number

logger = logging.getLogger(__name__)


class ReportRenderer:
    """Render the plain-text and HTML report templates.

    Parameters:
        templates_dir: Filesystem path to the directory holding
            ``report.txt`` and ``report.html``.

    Example::

        renderer = ReportRenderer(templates_dir=Path("dora_check/reports/templates"))
        text = renderer.render_text(report_data)
        html = renderer.render_html(report_data)
    """

    TEXT_TEMPLATE = "report.txt"
    HTML_TEMPLATE = "report.html"

    def __init__(self, templates_dir: Path) -> None:
        self._templates_dir = templates_dir
        self._env = jinja2.Environment(
            loader=jinja2.FileSystemLoader(str(templates_dir)),
            autoescape=jinja2.select_autoescape(["html"]),
            trim_blocks=True,
            lstrip_blocks=True,
            keep_trailing_newline=True,
            undefined=jinja2.StrictUndefined,
        )
        self._env.filters["number"] = format_number

    def render(self, template_name: str, context: dict) -> str:
        """Render a single template to a string.

        Raises:
            jinja2.TemplateNotFound: When *template_name* does not exist.
        """
        template = self._env.get_template(template_name)
        return template.render(**context)

    def render_text(self, report_data: dict) -> str:
        """Render the plain-text version of the report."""
        return self.render(self.TEXT_TEMPLATE, report_data)

    def render_html(self, report_data: dict) -> str:
        """Render the HTML version of the report.

        Every interpolated value is HTML-escaped, including the submitter's
        email address.
        """
        html = self.render(self.HTML_TEMPLATE, report_data)
        logger.debug("Rendered HTML report (%d chars)", len(html))
        return html
