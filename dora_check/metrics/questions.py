from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Question:
    """One step of the quick-check questionnaire.

    ``field`` is the :class:`~dora_check.metrics.assessment.RawInputs`
    attribute the answer populates.
    """

    field: str
    title: str
    description: str
    placeholder: str
    default: float
    required: bool = True


# Ordered as they are asked.
QUESTIONS: tuple[Question, ...] = (
    Question(
        field="deploys_per_month",
        title="Deployments per month",
        description="How many production deployments do you make in a typical month?",
        placeholder="e.g., 25",
        default=12,
    ),
    Question(
        field="team_size",
        title="Team size",
        description="Roughly how many engineers are in the delivery org?",
        placeholder="e.g., 20",
        default=20,
    ),
    Question(
        field="squad_count",
        title="Number of squads",
        description="How many cross‑functional squads/streams?",
        placeholder="e.g., 4",
        default=4,
    ),
    Question(
        field="prod_errors_per_month",
        title="Production errors (per month)",
        description=(
            "Count of incidents attributable to recent changes "
            "(rollbacks, hotfixes, SEVs)."
        ),
        placeholder="e.g., 2",
        default=2,
    ),
    Question(
        field="lead_time_days",
        title="Lead time (days)",
        description="Typical time from code committed to running in production (in days).",
        placeholder="e.g., 2",
        default=3,
        required=False,
    ),
    Question(
        field="mttr_hours",
        title="MTTR (hours)",
        description="Mean time to restore service after a production incident (in hours).",
        placeholder="e.g., 6",
        default=8,
        required=False,
    ),
)
