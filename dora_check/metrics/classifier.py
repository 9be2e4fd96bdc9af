from __future__ import annotations

"""Tier classification, progress bars and gap advice for the DORA metrics.

Every function here is pure and total: ``None`` stands for "not provided"
and maps to :attr:`~dora_check.models.enums.Tier.na` (or a progress of 0)
rather than raising.
"""

import math

from dora_check.benchmarks.dora import (
    CFR_ELITE_MAX,
    CFR_MEDIUM_MAX,
    FREQ_ELITE_PER_MONTH,
    FREQ_HIGH_PER_MONTH,
    FREQ_MEDIUM_PER_MONTH,
    LEAD_ELITE_MAX_DAYS,
    LEAD_HIGH_MAX_DAYS,
    LEAD_MEDIUM_MAX_DAYS,
    MTTR_ELITE_MAX_HOURS,
    MTTR_HIGH_MAX_HOURS,
    MTTR_MEDIUM_MAX_HOURS,
)
from dora_check.models.enums import Metric, Tier

ELITE_MESSAGE = "You’re at leader level – keep it up!"


def round_half_up(value: float) -> int:
    """Round to the nearest integer, with halves going up (``2.5 -> 3``)."""
    return math.floor(value + 0.5)


def format_number(value: float) -> str:
    """Render a number in full, without a trailing ``.0`` (``18.0 -> "18"``).

    Large values are written out digit by digit rather than in scientific
    notation (``1234567.0 -> "1234567"``).
    """
    number = float(value)
    if number.is_integer():
        return str(int(number))
    return repr(number)


# ---------------------------------------------------------------------------
# Classification
# ---------------------------------------------------------------------------


def classify_frequency(per_month: float) -> Tier:
    """Return the deployment-frequency tier for *per_month* deployments.

    Examples:
        >>> classify_frequency(30)
        <Tier.elite: 'elite'>
        >>> classify_frequency(29.9)
        <Tier.high: 'high'>
        >>> classify_frequency(0)
        <Tier.na: 'na'>
    """
    if per_month >= FREQ_ELITE_PER_MONTH:
        return Tier.elite
    if per_month >= FREQ_HIGH_PER_MONTH:
        return Tier.high
    if per_month >= FREQ_MEDIUM_PER_MONTH:
        return Tier.medium
    if per_month > 0:
        return Tier.low
    return Tier.na


def classify_change_failure_rate(cfr: float | None) -> Tier:
    """Return the change-failure-rate tier for the ratio *cfr*.

    Elite and high share the ``<= 15%`` band, so :attr:`Tier.high` is never
    returned.
    """
    if cfr is None:
        return Tier.na
    if cfr <= CFR_ELITE_MAX:
        return Tier.elite
    if cfr <= CFR_MEDIUM_MAX:
        return Tier.medium
    return Tier.low


def classify_lead_time(days: float | None) -> Tier:
    """Return the lead-time tier for *days* from commit to production."""
    if days is None:
        return Tier.na
    if days <= LEAD_ELITE_MAX_DAYS:
        return Tier.elite
    if days <= LEAD_HIGH_MAX_DAYS:
        return Tier.high
    if days <= LEAD_MEDIUM_MAX_DAYS:
        return Tier.medium
    return Tier.low


def classify_mttr(hours: float | None) -> Tier:
    """Return the mean-time-to-restore tier for *hours*."""
    if hours is None:
        return Tier.na
    if hours <= MTTR_ELITE_MAX_HOURS:
        return Tier.elite
    if hours <= MTTR_HIGH_MAX_HOURS:
        return Tier.high
    if hours <= MTTR_MEDIUM_MAX_HOURS:
        return Tier.medium
    return Tier.low


CLASSIFIERS = {
    Metric.deployment_frequency: classify_frequency,
    Metric.change_failure_rate: classify_change_failure_rate,
    Metric.lead_time: classify_lead_time,
    Metric.mttr: classify_mttr,
}


def classify(metric: Metric, value: float | None) -> Tier:
    """Dispatch to the classifier for *metric*.

    A missing frequency value is treated as zero deployments.
    """
    if metric is Metric.deployment_frequency:
        return classify_frequency(value or 0.0)
    return CLASSIFIERS[metric](value)


# ---------------------------------------------------------------------------
# Progress bars
# ---------------------------------------------------------------------------


def _clamp_percent(raw: float) -> int:
    # Clamp before rounding: huge inputs normalise to +/-inf.
    return round_half_up(max(0.0, min(100.0, raw)))


def progress_percent(metric: Metric, value: float | None) -> int:
    """Normalise *value* onto a ``0``–``100`` progress scale for *metric*.

    * frequency: 30 deploys/month is 100%.
    * change failure rate: 0% is 100%, 30% or worse is 0%.
    * lead time: 1 day is 100%, 30 days or longer is 0%.
    * MTTR: 1 hour is 100%, one week or longer is 0%.

    A missing value always yields ``0``.
    """
    if value is None:
        return 0
    if metric is Metric.deployment_frequency:
        raw = value / FREQ_ELITE_PER_MONTH * 100
    elif metric is Metric.change_failure_rate:
        raw = (1 - value / CFR_MEDIUM_MAX) * 100
    elif metric is Metric.lead_time:
        span = LEAD_MEDIUM_MAX_DAYS - LEAD_ELITE_MAX_DAYS
        raw = (1 - (value - LEAD_ELITE_MAX_DAYS) / span) * 100
    else:
        span = MTTR_MEDIUM_MAX_HOURS - MTTR_ELITE_MAX_HOURS
        raw = (1 - (value - MTTR_ELITE_MAX_HOURS) / span) * 100
    return _clamp_percent(raw)


# ---------------------------------------------------------------------------
# Advisory text
# ---------------------------------------------------------------------------


def _frequency_gap(tier: Tier, per_month: float) -> str:
    to_elite = format_number(max(0.0, FREQ_ELITE_PER_MONTH - per_month))
    if tier is Tier.high:
        return f"~{to_elite} more deploys/mo to reach Elite (≥30/mo)."
    if tier is Tier.medium:
        to_high = format_number(max(0.0, FREQ_HIGH_PER_MONTH - per_month))
        return (
            f"Increase cadence by ~{to_high}+/mo to reach High, "
            f"~{to_elite} to reach Elite."
        )
    if tier is Tier.low:
        return "Raise to ≥1/mo for Medium; aim for 30/mo to match Elite."
    return ""


def _cfr_gap(tier: Tier, cfr: float) -> str:
    pct = round_half_up(min(cfr, 1.0) * 100)
    if tier is Tier.medium:
        return f"Reduce change failures to ≤15% (now ~{pct}%)."
    if tier is Tier.low:
        return f"High failure rate (~{pct}%). Target ≤15% for Elite/High."
    return ""


def _lead_time_gap(tier: Tier, days: float) -> str:
    now = format_number(days)
    if tier is Tier.high:
        return f"Trim lead time to ≤1 day (now ~{now}d) via smaller batches & faster reviews."
    if tier is Tier.medium:
        return f"Bring lead time under 1 week (now ~{now}d) with CI/CD & WIP limits."
    if tier is Tier.low:
        return f"Lead time is long (~{now}d). Aim ≤30d for Medium and ≤1d for Elite."
    return ""


def _mttr_gap(tier: Tier, hours: float) -> str:
    now = format_number(hours)
    if tier is Tier.high:
        return f"Reduce MTTR to ≤1 hour (now ~{now}h) via fast rollback & auto-remediation."
    if tier is Tier.medium:
        return f"Bring MTTR under 24h (now ~{now}h) with better alerting & runbooks."
    if tier is Tier.low:
        return f"MTTR is high (~{now}h). Target ≤168h (1 week) then ≤1h for Elite."
    return ""


_GAP_BUILDERS = {
    Metric.deployment_frequency: _frequency_gap,
    Metric.change_failure_rate: _cfr_gap,
    Metric.lead_time: _lead_time_gap,
    Metric.mttr: _mttr_gap,
}


def gap_advisory(tier: Tier, metric: Metric, value: float | None) -> str:
    """Describe how far *value* is from the next tier for *metric*.

    Returns:
        A congratulatory message for :attr:`Tier.elite`, a templated hint
        naming the distance to the next boundary for the other tiers, or an
        empty string when no hint applies (``na`` tier or missing value).

    Examples:
        >>> gap_advisory(Tier.high, Metric.deployment_frequency, 12)
        '~18 more deploys/mo to reach Elite (≥30/mo).'
        >>> gap_advisory(Tier.na, Metric.lead_time, None)
        ''
    """
    if tier is Tier.elite:
        return ELITE_MESSAGE
    if value is None:
        return ""
    return _GAP_BUILDERS[metric](tier, value)
