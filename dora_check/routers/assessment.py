from __future__ import annotations

from typing import Any

from fastapi import APIRouter

from dora_check.benchmarks.dora import DORA_LEVELS
from dora_check.metrics.assessment import assess
from dora_check.metrics.questions import QUESTIONS
from dora_check.schemas.assessment import (
    AssessmentResponse,
    QuestionResponse,
    QuickCheckInput,
)

router = APIRouter(prefix="/assessment", tags=["assessment"])


@router.post(
    "",
    response_model=AssessmentResponse,
    summary="Classify quick-check answers into DORA tiers",
)
async def create_assessment(payload: QuickCheckInput) -> AssessmentResponse:
    """Compute derived ratios, tiers, progress and advice for *payload*.

    Malformed numbers in the payload are coerced, never rejected, so this
    endpoint always returns a full assessment for a JSON object body.
    """
    return AssessmentResponse.from_assessment(assess(payload.to_raw_inputs()))


@router.get(
    "/benchmarks",
    summary="DORA tier reference data",
)
async def get_benchmarks() -> dict[str, dict[str, Any]]:
    """Return the descriptions and numeric boundaries of every tier."""
    return DORA_LEVELS


@router.get(
    "/questions",
    response_model=list[QuestionResponse],
    summary="Quick-check questionnaire",
)
async def get_questions() -> list[QuestionResponse]:
    """Return the six quick-check questions in the order they are asked."""
    return [QuestionResponse.from_question(q) for q in QUESTIONS]
