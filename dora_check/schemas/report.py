from __future__ import annotations

import math
from typing import Any

from pydantic import AliasChoices, BaseModel, Field, field_validator

from dora_check.models.enums import Tier
from dora_check.schemas.assessment import QuickCheckInput

# ---------------------------------------------------------------------------
# Report export request
# ---------------------------------------------------------------------------


def _lenient_tier(value: Any) -> Tier | None:
    """Return the :class:`Tier` named by *value*, or ``None`` if unrecognised."""
    if isinstance(value, Tier):
        return value
    if isinstance(value, str):
        normalised = value.strip().lower().replace("/", "")
        try:
            return Tier(normalised)
        except ValueError:
            return None
    return None


def _lenient_number(value: Any) -> float | None:
    """Return *value* as a finite float, or ``None`` if it is not one."""
    if isinstance(value, bool) or value is None:
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    return number if math.isfinite(number) else None


class ReportMetrics(BaseModel):
    """Metrics as computed by the client, attached to an export request.

    Every field is optional and malformed values degrade to ``None``; the
    report service recomputes whatever is missing from the raw results.
    Accepts the web form's keys (``freqT``/``freq``, ``cfrT``, ``ltT``,
    ``mttrT``, ``perSquad``, ``perEng``, ``cfr``).
    """

    frequency_tier: Tier | None = Field(
        None, validation_alias=AliasChoices("frequency_tier", "freqT", "freq")
    )
    change_failure_rate_tier: Tier | None = Field(
        None, validation_alias=AliasChoices("change_failure_rate_tier", "cfrT")
    )
    lead_time_tier: Tier | None = Field(
        None, validation_alias=AliasChoices("lead_time_tier", "ltT")
    )
    mttr_tier: Tier | None = Field(
        None, validation_alias=AliasChoices("mttr_tier", "mttrT")
    )
    per_squad: float | None = Field(
        None, validation_alias=AliasChoices("per_squad", "perSquad")
    )
    per_engineer: float | None = Field(
        None, validation_alias=AliasChoices("per_engineer", "perEng")
    )
    change_failure_rate: float | None = Field(
        None, validation_alias=AliasChoices("change_failure_rate", "cfr")
    )

    @field_validator(
        "frequency_tier",
        "change_failure_rate_tier",
        "lead_time_tier",
        "mttr_tier",
        mode="before",
    )
    @classmethod
    def _parse_tier(cls, value: Any) -> Tier | None:
        return _lenient_tier(value)

    @field_validator("per_squad", "per_engineer", mode="before")
    @classmethod
    def _parse_number(cls, value: Any) -> float | None:
        return _lenient_number(value)

    @field_validator("change_failure_rate", mode="before")
    @classmethod
    def _parse_ratio(cls, value: Any) -> float | None:
        number = _lenient_number(value)
        if number is None:
            return None
        # A failure rate is a ratio; errors beyond the deploy count cap at 100%.
        return max(0.0, min(1.0, number))


class ReportRequest(BaseModel):
    """Payload for ``POST /api/send-results``."""

    email: str
    results: QuickCheckInput = Field(default_factory=QuickCheckInput)
    metrics: ReportMetrics | None = None

    @field_validator("results", mode="before")
    @classmethod
    def _results_mapping(cls, value: Any) -> Any:
        return value if isinstance(value, dict | QuickCheckInput) else {}

    @field_validator("metrics", mode="before")
    @classmethod
    def _metrics_mapping(cls, value: Any) -> Any:
        return value if isinstance(value, dict | ReportMetrics) else None


class ReportSendResponse(BaseModel):
    """Acknowledgement returned once a report has been handed off."""

    success: bool
    message: str


# ---------------------------------------------------------------------------
# Outbound message
# ---------------------------------------------------------------------------


class NotificationMessage(BaseModel):
    """Rendered report addressed for delivery.

    Serialise with ``model_dump(by_alias=True)`` so that ``from_`` is sent as
    ``from``.
    """

    to: str
    cc: str | None = None
    from_: str = Field(serialization_alias="from")
    subject: str
    text: str
    html: str
