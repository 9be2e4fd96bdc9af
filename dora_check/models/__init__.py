from __future__ import annotations

from dora_check.models.enums import TIER_LABELS, Metric, Tier

__all__ = [
    "Metric",
    "TIER_LABELS",
    "Tier",
]
