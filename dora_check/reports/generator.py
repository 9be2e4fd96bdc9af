from __future__ import annotations

"""Report assembly for the DORA quick check export.

This module exposes a :class:`ReportGenerator` class and a module-level
singleton :data:`report_generator` that the rest of the application should
import and reuse.

Typical usage::

    from dora_check.reports.generator import report_generator

    report = report_generator.generate_report(
        email="lead@example.com",
        inputs=RawInputs.from_values(12, 20, 4, 2, 3, 8),
        metrics=None,
    )
    report.text, report.html
"""

import logging
from dataclasses import dataclass
from datetime import UTC, datetime
from pathlib import Path
from typing import Any

from dora_check.benchmarks.dora import RECOMMENDATIONS
from dora_check.metrics.assessment import RawInputs, assess
from dora_check.metrics.classifier import round_half_up
from dora_check.models.enums import Metric
from dora_check.reports.renderer import ReportRenderer
from dora_check.schemas.report import ReportMetrics

logger = logging.getLogger(__name__)

# Paths relative to this file — resolved once at import time.
_MODULE_DIR = Path(__file__).parent
_TEMPLATES_DIR = _MODULE_DIR / "templates"


@dataclass(frozen=True)
class RenderedReport:
    """Plain-text and HTML renderings of the same report."""

    subject: str
    text: str
    html: str


def _prefer(provided: Any, computed: Any) -> Any:
    return computed if provided is None else provided


class ReportGenerator:
    """Turn quick-check results into a text and an HTML report.

    Client-supplied :class:`~dora_check.schemas.report.ReportMetrics` are
    used where present; any missing or unparseable value is recomputed from
    the raw inputs so that a malformed payload still yields a full report.
    """

    def __init__(self, templates_dir: Path = _TEMPLATES_DIR) -> None:
        self._renderer = ReportRenderer(templates_dir=templates_dir)

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def generate_report(
        self,
        email: str,
        inputs: RawInputs,
        metrics: ReportMetrics | None = None,
        *,
        now: datetime | None = None,
    ) -> RenderedReport:
        """Render the report for *email*.

        Parameters:
            email: Address of the person who ran the quick check.
            inputs: Coerced quick-check answers.
            metrics: Optional metrics computed by the client.
            now: Timestamp shown in the report; defaults to the current UTC
                time.

        Returns:
            A :class:`RenderedReport` with subject, text and HTML bodies.
        """
        report_data = self.build_report_data(email, inputs, metrics, now=now)
        report = RenderedReport(
            subject=f"DORA Metrics Report - {email}",
            text=self._renderer.render_text(report_data),
            html=self._renderer.render_html(report_data),
        )
        logger.info(
            "Rendered report for %s (frequency=%s cfr=%s lead=%s mttr=%s)",
            email,
            report_data["frequency_tier"].value,
            report_data["change_failure_rate_tier"].value,
            report_data["lead_time_tier"].value,
            report_data["mttr_tier"].value,
        )
        return report

    def build_report_data(
        self,
        email: str,
        inputs: RawInputs,
        metrics: ReportMetrics | None = None,
        *,
        now: datetime | None = None,
    ) -> dict[str, Any]:
        """Assemble the template context dictionary.

        Returns:
            A flat dict whose keys correspond to the variables referenced by
            ``report.txt`` and ``report.html``.
        """
        metrics = metrics or ReportMetrics()
        assessment = assess(inputs)
        derived = assessment.derived

        cfr = _prefer(metrics.change_failure_rate, derived.change_failure_rate)
        cfr_percent = None if cfr is None else round_half_up(cfr * 100)
        generated_at = (now or datetime.now(tz=UTC)).strftime("%d %B %Y at %H:%M UTC")

        return {
            "email": email,
            "generated_at": generated_at,
            # Tiers
            "frequency_tier": _prefer(
                metrics.frequency_tier, assessment.tier_of(Metric.deployment_frequency)
            ),
            "change_failure_rate_tier": _prefer(
                metrics.change_failure_rate_tier,
                assessment.tier_of(Metric.change_failure_rate),
            ),
            "lead_time_tier": _prefer(
                metrics.lead_time_tier, assessment.tier_of(Metric.lead_time)
            ),
            "mttr_tier": _prefer(metrics.mttr_tier, assessment.tier_of(Metric.mttr)),
            # Ratios
            "per_squad": _prefer(metrics.per_squad, derived.per_squad),
            "per_engineer": _prefer(metrics.per_engineer, derived.per_engineer),
            "change_failure_rate_percent": cfr_percent,
            # Raw answers
            "deploys_per_month": inputs.deploys_per_month,
            "prod_errors_per_month": inputs.prod_errors_per_month,
            "lead_time_days": inputs.lead_time_days,
            "mttr_hours": inputs.mttr_hours,
            "team_size": inputs.team_size,
            "squad_count": inputs.squad_count,
            "recommendations": list(RECOMMENDATIONS),
        }


# Module-level singleton — import this in the rest of the application.
report_generator = ReportGenerator()
