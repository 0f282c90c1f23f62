"""
Smart Logic Flags

Derived metadata computed from the final onboarding answers. Flags are never
set by the user and are evaluated once, at finalize, so that no flag depends
on an intermediate value from a step visited out of order.
"""

from dataclasses import asdict, dataclass
from typing import Optional

from medtrackr.onboarding.answers import AnswerStore
from medtrackr.onboarding.catalog import CALENDAR_SYNC_DEFAULT, Field, Role


@dataclass(frozen=True)
class SmartLogicConfig:
    """Thresholds and trigger values for the derived flags."""
    terminal_level: str = "Final Year"
    surgical_rotation: str = "Surgery"
    skip_calendar_option: str = CALENDAR_SYNC_DEFAULT
    study_plan_min_subjects: int = 5


@dataclass(frozen=True)
class SmartLogicFlags:
    exam_prompt_shown: bool = False
    tools_preloaded: bool = False
    manual_calendar_offered: bool = False
    study_plan_suggested: bool = False
    quiz_schedule_created: bool = False

    def to_dict(self) -> dict:
        return asdict(self)


def derive(
    role: Role,
    answers: AnswerStore,
    config: Optional[SmartLogicConfig] = None
) -> SmartLogicFlags:
    """Compute the smart logic flags for a finished wizard.

    Args:
        role: The selected role
        answers: Final answers
        config: Trigger values; defaults apply when omitted

    Returns:
        SmartLogicFlags built only from the inputs
    """
    config = config or SmartLogicConfig()
    subjects = answers.get(Field.CORE_SUBJECTS) or ()

    return SmartLogicFlags(
        exam_prompt_shown=(
            role == Role.STUDENT
            and answers.get(Field.LEVEL) == config.terminal_level
        ),
        tools_preloaded=(
            role == Role.INTERN
            and answers.get(Field.ROTATION) == config.surgical_rotation
        ),
        manual_calendar_offered=(
            answers.get(Field.CALENDAR_SYNC, CALENDAR_SYNC_DEFAULT) == config.skip_calendar_option
        ),
        study_plan_suggested=(
            role == Role.STUDENT
            and len(subjects) >= config.study_plan_min_subjects
        ),
        quiz_schedule_created=answers.get(Field.ENABLE_AI_QUIZZES) is True,
    )
