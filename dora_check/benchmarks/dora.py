from __future__ import annotations

"""DORA (DevOps Research and Assessment) metrics reference data.

The four key DORA metrics are:

* **Deployment Frequency** — how often an organisation successfully releases
  to production.
* **Lead Time for Changes** — the time it takes a commit to get into
  production.
* **Change Failure Rate** — the percentage of deployments causing a failure
  in production.
* **Mean Time to Restore (MTTR)** — how long it takes to recover from a
  failure in production.

Thresholds are simplified from the Accelerate benchmarks.  The numeric
boundaries below are the single source of truth for
:mod:`dora_check.metrics.classifier`.
"""

from typing import Any

from dora_check.models.enums import Tier

# Deployment frequency: minimum deploys per month for each tier.
FREQ_ELITE_PER_MONTH: float = 30
FREQ_HIGH_PER_MONTH: float = 4
FREQ_MEDIUM_PER_MONTH: float = 1

# Change failure rate: maximum ratio for each tier.  There is no distinct
# "high" band; anything up to the elite ceiling counts as elite.
CFR_ELITE_MAX: float = 0.15
CFR_MEDIUM_MAX: float = 0.30

# Lead time for changes: maximum days for each tier.
LEAD_ELITE_MAX_DAYS: float = 1
LEAD_HIGH_MAX_DAYS: float = 7
LEAD_MEDIUM_MAX_DAYS: float = 30

# Mean time to restore: maximum hours for each tier.
MTTR_ELITE_MAX_HOURS: float = 1
MTTR_HIGH_MAX_HOURS: float = 24
MTTR_MEDIUM_MAX_HOURS: float = 24 * 7

DORA_LEVELS: dict[str, dict[str, Any]] = {
    Tier.elite.value: {
        "deployment_frequency": "Multiple/day (≥30/mo)",
        "lead_time": "One day or less",
        "change_failure_rate": "0-15%",
        "mttr": "One hour or less",
        "min_deploys_per_month": FREQ_ELITE_PER_MONTH,
        "max_change_failure_rate": CFR_ELITE_MAX,
        "max_lead_time_days": LEAD_ELITE_MAX_DAYS,
        "max_mttr_hours": MTTR_ELITE_MAX_HOURS,
    },
    Tier.high.value: {
        "deployment_frequency": "Daily–Weekly (4–29/mo)",
        "lead_time": "Between one day and one week",
        "change_failure_rate": "0-15%",
        "mttr": "Less than one day",
        "min_deploys_per_month": FREQ_HIGH_PER_MONTH,
        "max_change_failure_rate": CFR_ELITE_MAX,
        "max_lead_time_days": LEAD_HIGH_MAX_DAYS,
        "max_mttr_hours": MTTR_HIGH_MAX_HOURS,
    },
    Tier.medium.value: {
        "deployment_frequency": "Weekly–Monthly (1–3/mo)",
        "lead_time": "Between one week and one month",
        "change_failure_rate": "16-30%",
        "mttr": "Between one day and one week",
        "min_deploys_per_month": FREQ_MEDIUM_PER_MONTH,
        "max_change_failure_rate": CFR_MEDIUM_MAX,
        "max_lead_time_days": LEAD_MEDIUM_MAX_DAYS,
        "max_mttr_hours": MTTR_MEDIUM_MAX_HOURS,
    },
    Tier.low.value: {
        "deployment_frequency": "< Monthly (<1/mo)",
        "lead_time": "More than one month",
        "change_failure_rate": "Above 30%",
        "mttr": "More than one week",
        "min_deploys_per_month": 0,
        "max_change_failure_rate": None,
        "max_lead_time_days": None,
        "max_mttr_hours": None,
    },
}

# Standard improvement advice included in every exported report.
RECOMMENDATIONS: tuple[str, ...] = (
    "Adopt smaller batch sizes and trunk-based development to safely increase deployment cadence",
    "Automate progressive delivery (feature flags, canary, blue-green) to reduce blast radius",
    "Invest in test reliability (contract tests, e2e smoke) to drive CFR down toward ≤15%",
    "Map your value stream to reduce lead time; enforce WIP limits; parallelize reviews",
    "Lower MTTR with fast rollback, runbooks, on-call drills, and automated health checks",
)
