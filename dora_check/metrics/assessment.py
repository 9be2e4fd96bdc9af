from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Any

from dora_check.metrics.classifier import (
    classify,
    gap_advisory,
    progress_percent,
    round_half_up,
)
from dora_check.models.enums import Metric, Tier

# ---------------------------------------------------------------------------
# Input coercion
# ---------------------------------------------------------------------------


def coerce_required(value: Any) -> float:
    """Coerce *value* to a finite, non-negative float.

    Anything that is not a finite number (``None``, ``""``, ``"abc"``,
    ``nan``, ``inf``) becomes ``0.0``; negative numbers are clamped to ``0.0``.
    """
    if isinstance(value, bool):
        return 0.0
    try:
        number = float(value)
    except (TypeError, ValueError):
        return 0.0
    if not math.isfinite(number):
        return 0.0
    return max(0.0, number)


def coerce_optional(value: Any) -> float | None:
    """Like :func:`coerce_required`, but a blank value stays ``None``.

    ``None``, an empty/whitespace string and ``nan`` all mean "not provided",
    which is distinct from an explicit ``0``.
    """
    if value is None:
        return None
    if isinstance(value, str) and not value.strip():
        return None
    if isinstance(value, float) and math.isnan(value):
        return None
    return coerce_required(value)


# ---------------------------------------------------------------------------
# Data types
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class RawInputs:
    """The six numbers a team enters in the quick check.

    All values are expected to be coerced already (see :meth:`from_values`).
    """

    deploys_per_month: float = 0.0
    team_size: float = 0.0
    squad_count: float = 0.0
    prod_errors_per_month: float = 0.0
    lead_time_days: float | None = None
    mttr_hours: float | None = None

    @classmethod
    def from_values(
        cls,
        deploys_per_month: Any = 0,
        team_size: Any = 0,
        squad_count: Any = 0,
        prod_errors_per_month: Any = 0,
        lead_time_days: Any = None,
        mttr_hours: Any = None,
    ) -> RawInputs:
        """Build a :class:`RawInputs` from arbitrary, possibly malformed values."""
        return cls(
            deploys_per_month=coerce_required(deploys_per_month),
            team_size=coerce_required(team_size),
            squad_count=coerce_required(squad_count),
            prod_errors_per_month=coerce_required(prod_errors_per_month),
            lead_time_days=coerce_optional(lead_time_days),
            mttr_hours=coerce_optional(mttr_hours),
        )


@dataclass(frozen=True)
class DerivedMetrics:
    """Ratios computed from :class:`RawInputs`.

    Attributes:
        per_squad:           Deployments per squad per month.
        per_engineer:        Deployments per engineer per month (0 with no team).
        change_failure_rate: Errors per deployment capped at 1.0, or ``None``
                             when there were no deployments.
    """

    per_squad: float
    per_engineer: float
    change_failure_rate: float | None

    @property
    def change_failure_rate_percent(self) -> int | None:
        """CFR as a rounded percentage, ``None`` when CFR is undefined."""
        if self.change_failure_rate is None:
            return None
        return round_half_up(self.change_failure_rate * 100)


@dataclass(frozen=True)
class MetricResult:
    """Tier, progress bar and advice for one metric."""

    metric: Metric
    value: float | None
    tier: Tier
    progress: int
    advisory: str

    @property
    def tier_label(self) -> str:
        return self.tier.label


@dataclass(frozen=True)
class DoraAssessment:
    """Complete quick-check outcome for one set of :class:`RawInputs`."""

    inputs: RawInputs
    derived: DerivedMetrics
    results: dict[Metric, MetricResult] = field(default_factory=dict)

    def tier_of(self, metric: Metric) -> Tier:
        return self.results[metric].tier


# ---------------------------------------------------------------------------
# Computation
# ---------------------------------------------------------------------------


def derive_metrics(inputs: RawInputs) -> DerivedMetrics:
    """Compute per-squad, per-engineer and change-failure-rate ratios.

    A squad count of zero (or less) divides by one instead.
    """
    deploys = inputs.deploys_per_month
    per_squad = deploys / max(inputs.squad_count, 1.0)
    per_engineer = deploys / inputs.team_size if inputs.team_size > 0 else 0.0
    if deploys > 0:
        cfr: float | None = min(1.0, inputs.prod_errors_per_month / deploys)
    else:
        cfr = None
    return DerivedMetrics(
        per_squad=per_squad,
        per_engineer=per_engineer,
        change_failure_rate=cfr,
    )


def evaluate_metric(metric: Metric, value: float | None) -> MetricResult:
    """Classify *value* and attach its progress percentage and advice."""
    tier = classify(metric, value)
    return MetricResult(
        metric=metric,
        value=value,
        tier=tier,
        progress=progress_percent(metric, value),
        advisory=gap_advisory(tier, metric, value),
    )


def assess(inputs: RawInputs) -> DoraAssessment:
    """Run the full quick check for *inputs*.

    Usage::

        assessment = assess(RawInputs.from_values(12, 20, 4, 2, 3, 8))
        assessment.tier_of(Metric.deployment_frequency)  # Tier.high
    """
    derived = derive_metrics(inputs)
    values: dict[Metric, float | None] = {
        Metric.deployment_frequency: inputs.deploys_per_month,
        Metric.change_failure_rate: derived.change_failure_rate,
        Metric.lead_time: inputs.lead_time_days,
        Metric.mttr: inputs.mttr_hours,
    }
    results = {metric: evaluate_metric(metric, value) for metric, value in values.items()}
    return DoraAssessment(inputs=inputs, derived=derived, results=results)
