from __future__ import annotations

from enum import Enum


class Tier(str, Enum):
    """DORA performance tiers, ordered from best to worst.

    ``na`` is assigned when a metric cannot be computed (no deployments, or an
    optional input was left blank).
    """

    elite = "elite"
    high = "high"
    medium = "medium"
    low = "low"
    na = "na"

    @property
    def label(self) -> str:
        """Human-readable badge text (``"Elite"``, ..., ``"N/A"``)."""
        return TIER_LABELS[self]


TIER_LABELS: dict[Tier, str] = {
    Tier.elite: "Elite",
    Tier.high: "High",
    Tier.medium: "Medium",
    Tier.low: "Low",
    Tier.na: "N/A",
}


class Metric(str, Enum):
    """The four key DORA metrics."""

    deployment_frequency = "deployment_frequency"
    change_failure_rate = "change_failure_rate"
    lead_time = "lead_time"
    mttr = "mttr"
