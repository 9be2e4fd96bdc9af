from __future__ import annotations

from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

from dora_check.metrics.assessment import (
    DoraAssessment,
    MetricResult,
    RawInputs,
    coerce_optional,
    coerce_required,
)
from dora_check.metrics.questions import Question
from dora_check.models.enums import Metric, Tier

# ---------------------------------------------------------------------------
# Input schema
# ---------------------------------------------------------------------------


class QuickCheckInput(BaseModel):
    """The six quick-check answers.

    Both the snake_case field names and the camelCase keys sent by the web
    form (``deploys``, ``leadDays``, ...) are accepted.  Malformed numbers are
    coerced rather than rejected: required fields fall back to ``0`` and the
    two optional fields to ``None``.
    """

    deploys_per_month: float = Field(
        0.0,
        validation_alias=AliasChoices("deploys_per_month", "deploys", "deploysPerMonth"),
    )
    team_size: float = Field(
        0.0, validation_alias=AliasChoices("team_size", "team", "teamSize")
    )
    squad_count: float = Field(
        0.0, validation_alias=AliasChoices("squad_count", "squads", "squadCount")
    )
    prod_errors_per_month: float = Field(
        0.0,
        validation_alias=AliasChoices(
            "prod_errors_per_month", "errors", "prodErrorsPerMonth"
        ),
    )
    lead_time_days: float | None = Field(
        None,
        validation_alias=AliasChoices("lead_time_days", "leadDays", "leadTimeDays"),
    )
    mttr_hours: float | None = Field(
        None, validation_alias=AliasChoices("mttr_hours", "mttrHours")
    )

    @field_validator(
        "deploys_per_month",
        "team_size",
        "squad_count",
        "prod_errors_per_month",
        mode="before",
    )
    @classmethod
    def _coerce_required(cls, value: Any) -> float:
        return coerce_required(value)

    @field_validator("lead_time_days", "mttr_hours", mode="before")
    @classmethod
    def _coerce_optional(cls, value: Any) -> float | None:
        return coerce_optional(value)

    def to_raw_inputs(self) -> RawInputs:
        return RawInputs(
            deploys_per_month=self.deploys_per_month,
            team_size=self.team_size,
            squad_count=self.squad_count,
            prod_errors_per_month=self.prod_errors_per_month,
            lead_time_days=self.lead_time_days,
            mttr_hours=self.mttr_hours,
        )


# ---------------------------------------------------------------------------
# Output schemas
# ---------------------------------------------------------------------------


class MetricResultResponse(BaseModel):
    """Tier, progress bar and advice for a single metric."""

    metric: Metric
    value: float | None
    tier: Tier
    tier_label: str
    progress: int
    advisory: str

    @classmethod
    def from_result(cls, result: MetricResult) -> MetricResultResponse:
        return cls(
            metric=result.metric,
            value=result.value,
            tier=result.tier,
            tier_label=result.tier_label,
            progress=result.progress,
            advisory=result.advisory,
        )


class AssessmentResponse(BaseModel):
    """Quick-check outcome returned from ``POST /api/assessment``.

    ``metrics`` is keyed by :class:`~dora_check.models.enums.Metric` value.
    """

    inputs: QuickCheckInput
    per_squad: float
    per_engineer: float
    change_failure_rate: float | None
    change_failure_rate_percent: int | None
    metrics: dict[Metric, MetricResultResponse]

    @classmethod
    def from_assessment(cls, assessment: DoraAssessment) -> AssessmentResponse:
        raw = assessment.inputs
        derived = assessment.derived
        return cls(
            inputs=QuickCheckInput(
                deploys_per_month=raw.deploys_per_month,
                team_size=raw.team_size,
                squad_count=raw.squad_count,
                prod_errors_per_month=raw.prod_errors_per_month,
                lead_time_days=raw.lead_time_days,
                mttr_hours=raw.mttr_hours,
            ),
            per_squad=derived.per_squad,
            per_engineer=derived.per_engineer,
            change_failure_rate=derived.change_failure_rate,
            change_failure_rate_percent=derived.change_failure_rate_percent,
            metrics={
                metric: MetricResultResponse.from_result(result)
                for metric, result in assessment.results.items()
            },
        )


class QuestionResponse(BaseModel):
    """One quick-check question, in the order the form asks them."""

    model_config = ConfigDict(from_attributes=True)

    field: str
    title: str
    description: str
    placeholder: str
    default: float
    required: bool

    @classmethod
    def from_question(cls, question: Question) -> QuestionResponse:
        return cls.model_validate(question)
