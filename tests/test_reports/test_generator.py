from __future__ import annotations

from datetime import UTC, datetime

import pytest

from dora_check.metrics.assessment import RawInputs
from dora_check.models.enums import Tier
from dora_check.reports.generator import ReportGenerator
from dora_check.schemas.report import ReportMetrics

_NOW = datetime(2026, 3, 2, 14, 30, tzinfo=UTC)


@pytest.fixture()
def generator() -> ReportGenerator:
    return ReportGenerator()


@pytest.fixture()
def reference_inputs() -> RawInputs:
    return RawInputs.from_values(12, 20, 4, 2, 3, 8)


# ---------------------------------------------------------------------------
# Context assembly
# ---------------------------------------------------------------------------


class TestBuildReportData:
    def test_recomputes_everything_without_client_metrics(
        self, generator: ReportGenerator, reference_inputs: RawInputs
    ) -> None:
        data = generator.build_report_data("a@b.io", reference_inputs, now=_NOW)

        assert data["frequency_tier"] is Tier.high
        assert data["change_failure_rate_tier"] is Tier.medium
        assert data["lead_time_tier"] is Tier.high
        assert data["mttr_tier"] is Tier.high
        assert data["per_squad"] == pytest.approx(3.0)
        assert data["per_engineer"] == pytest.approx(0.6)
        assert data["change_failure_rate_percent"] == 17
        assert data["generated_at"] == "02 March 2026 at 14:30 UTC"
        assert len(data["recommendations"]) == 5

    def test_client_metrics_take_precedence(
        self, generator: ReportGenerator, reference_inputs: RawInputs
    ) -> None:
        metrics = ReportMetrics.model_validate({"freqT": "elite", "perSquad": 9.5})
        data = generator.build_report_data("a@b.io", reference_inputs, metrics, now=_NOW)

        assert data["frequency_tier"] is Tier.elite
        assert data["per_squad"] == 9.5
        # Fields the client did not send are still recomputed.
        assert data["mttr_tier"] is Tier.high

    def test_malformed_client_metrics_fall_back(
        self, generator: ReportGenerator, reference_inputs: RawInputs
    ) -> None:
        metrics = ReportMetrics.model_validate(
            {"freqT": "legendary", "cfrT": 42, "perEng": "lots", "cfr": None}
        )
        data = generator.build_report_data("a@b.io", reference_inputs, metrics, now=_NOW)

        assert data["frequency_tier"] is Tier.high
        assert data["change_failure_rate_tier"] is Tier.medium
        assert data["per_engineer"] == pytest.approx(0.6)
        assert data["change_failure_rate_percent"] == 17

    def test_oversized_client_failure_rate_is_capped(
        self, generator: ReportGenerator, reference_inputs: RawInputs
    ) -> None:
        metrics = ReportMetrics.model_validate({"cfr": 1e308})
        data = generator.build_report_data("a@b.io", reference_inputs, metrics, now=_NOW)

        assert data["change_failure_rate_percent"] == 100

    def test_large_answers_are_written_in_full(self, generator: ReportGenerator) -> None:
        inputs = RawInputs.from_values(1234567, 20, 4, 2, 1234567, 8)
        text = generator.generate_report("a@b.io", inputs, now=_NOW).text

        assert "Deployments/month: 1234567\n" in text
        assert "Lead time (days): 1234567\n" in text


# ---------------------------------------------------------------------------
# Rendering
# ---------------------------------------------------------------------------


class TestGenerateReport:
    def test_subject_names_the_submitter(
        self, generator: ReportGenerator, reference_inputs: RawInputs
    ) -> None:
        report = generator.generate_report("lead@acme.io", reference_inputs, now=_NOW)
        assert report.subject == "DORA Metrics Report - lead@acme.io"

    def test_text_report(
        self, generator: ReportGenerator, reference_inputs: RawInputs
    ) -> None:
        text = generator.generate_report("lead@acme.io", reference_inputs, now=_NOW).text

        assert text.startswith("DORA Metrics Report\n")
        assert "Email: lead@acme.io" in text
        assert "Generated: 02 March 2026 at 14:30 UTC" in text
        assert "Deployments/month: 12\n" in text
        assert "Per squad/month: 3.0\n" in text
        assert "Per engineer/month: 0.60\n" in text
        assert "CFR: 17%\n" in text
        assert "Lead time (days): 3\n" in text
        assert "MTTR (hours): 8\n" in text
        assert "Team size: 20\n" in text
        assert "Number of squads: 4\n" in text
        assert "- Lower MTTR with fast rollback" in text

    def test_html_report(
        self, generator: ReportGenerator, reference_inputs: RawInputs
    ) -> None:
        html = generator.generate_report("lead@acme.io", reference_inputs, now=_NOW).html

        assert html.lstrip().startswith("<!DOCTYPE html>")
        assert '<span class="tier tier-high">HIGH</span>' in html
        assert '<span class="tier tier-medium">MEDIUM</span>' in html
        assert "<p>CFR: <strong>17%</strong></p>" in html
        assert html.count("<li>") == 5

    def test_missing_optional_values_render_as_not_available(
        self, generator: ReportGenerator
    ) -> None:
        inputs = RawInputs.from_values(0, 5, 1, 0)
        report = generator.generate_report("x@y.io", inputs, now=_NOW)

        assert "CFR: N/A\n" in report.text
        assert "Lead time (days): N/A\n" in report.text
        assert "MTTR (hours): N/A\n" in report.text
        assert "Current Tier: N/A\n" in report.text
        assert '<span class="tier tier-na">N/A</span>' in report.html

    def test_zero_values_are_not_reported_as_missing(
        self, generator: ReportGenerator
    ) -> None:
        inputs = RawInputs.from_values(10, 5, 1, 0, lead_time_days=0, mttr_hours=0)
        text = generator.generate_report("x@y.io", inputs, now=_NOW).text

        assert "CFR: 0%\n" in text
        assert "Lead time (days): 0\n" in text
        assert "MTTR (hours): 0\n" in text

    def test_html_escapes_submitter_email(
        self, generator: ReportGenerator, reference_inputs: RawInputs
    ) -> None:
        html = generator.generate_report(
            "<script>x</script>@evil.io", reference_inputs, now=_NOW
        ).html
        assert "<script>" not in html
        assert "&lt;script&gt;" in html
