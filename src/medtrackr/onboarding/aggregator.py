"""
Onboarding Response Aggregator

Assembles the role section, the universal section and the smart logic flags
into the immutable record handed to the profile store.
"""

from dataclasses import dataclass
from datetime import date
from typing import Any, Dict, Optional, Tuple

from medtrackr.onboarding.answers import AnswerStore
from medtrackr.onboarding.catalog import CALENDAR_SYNC_DEFAULT, Field, Role
from medtrackr.onboarding.smart_logic import SmartLogicConfig, SmartLogicFlags


def _iso(value: Optional[date]) -> Optional[str]:
    return value.isoformat() if value else None


@dataclass(frozen=True)
class StudentDetails:
    university: str
    level: str
    semester_start: Optional[date]
    semester_end: Optional[date]
    core_subjects: Tuple[str, ...]
    preparing_for_mb_exam: Optional[bool]
    extra_notes: Optional[str]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "university": self.university,
            "level": self.level,
            "semester_start": _iso(self.semester_start),
            "semester_end": _iso(self.semester_end),
            "core_subjects": list(self.core_subjects),
            "preparing_for_mb_exam": self.preparing_for_mb_exam,
            "extra_notes": self.extra_notes,
        }


@dataclass(frozen=True)
class InternDetails:
    rotation: str
    shift_pattern: str
    tracking_preferences: Tuple[str, ...]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "rotation": self.rotation,
            "shift_pattern": self.shift_pattern,
            "tracking_preferences": list(self.tracking_preferences),
        }


@dataclass(frozen=True)
class WorkerDetails:
    specialty: str
    learning_focus: Tuple[str, ...]
    track_on_call_hours: bool

    def to_dict(self) -> Dict[str, Any]:
        return {
            "specialty": self.specialty,
            "learning_focus": list(self.learning_focus),
            "track_on_call_hours": self.track_on_call_hours,
        }


@dataclass(frozen=True)
class UniversalDetails:
    calendar_sync: str
    enable_notifications: bool
    study_preferences: Tuple[str, ...]
    enable_ai_quizzes: bool

    def to_dict(self) -> Dict[str, Any]:
        return {
            "calendar_sync": self.calendar_sync,
            "enable_notifications": self.enable_notifications,
            "study_preferences": list(self.study_preferences),
            "enable_ai_quizzes": self.enable_ai_quizzes,
        }


@dataclass(frozen=True)
class OnboardingResponse:
    """Final onboarding record.

    Exactly one of the role sections is set, matching ``role``. ``to_dict``
    always emits every key so the stored schema is the same for all roles.
    """
    role: Role
    universal: UniversalDetails
    derived_flags: SmartLogicFlags
    student_details: Optional[StudentDetails] = None
    intern_details: Optional[InternDetails] = None
    worker_details: Optional[WorkerDetails] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "role": self.role.value,
            "student_details": self.student_details.to_dict() if self.student_details else None,
            "intern_details": self.intern_details.to_dict() if self.intern_details else None,
            "worker_details": self.worker_details.to_dict() if self.worker_details else None,
            "universal": self.universal.to_dict(),
            "derived_flags": self.derived_flags.to_dict(),
        }


def _text(answers: AnswerStore, answer_field: Field) -> str:
    return (answers.get(answer_field) or "").strip()


def _optional_text(answers: AnswerStore, answer_field: Field) -> Optional[str]:
    return _text(answers, answer_field) or None


def _selection(answers: AnswerStore, answer_field: Field) -> Tuple[str, ...]:
    return tuple(answers.get(answer_field) or ())


def build_student_details(
    answers: AnswerStore,
    config: Optional[SmartLogicConfig] = None
) -> StudentDetails:
    config = config or SmartLogicConfig()
    level = answers.get(Field.LEVEL) or ""
    # The exam question is only asked for the final year
    preparing = answers.get(Field.PREPARING_FOR_MB_EXAM) if level == config.terminal_level else None
    return StudentDetails(
        university=_text(answers, Field.UNIVERSITY),
        level=level,
        semester_start=answers.get(Field.SEMESTER_START),
        semester_end=answers.get(Field.SEMESTER_END),
        core_subjects=_selection(answers, Field.CORE_SUBJECTS),
        preparing_for_mb_exam=preparing,
        extra_notes=_optional_text(answers, Field.STUDENT_EXTRA_NOTES),
    )


def build_intern_details(answers: AnswerStore) -> InternDetails:
    return InternDetails(
        rotation=answers.get(Field.ROTATION) or "",
        shift_pattern=answers.get(Field.SHIFT_PATTERN) or "",
        tracking_preferences=_selection(answers, Field.TRACKING_PREFERENCES),
    )


def build_worker_details(answers: AnswerStore) -> WorkerDetails:
    return WorkerDetails(
        specialty=_text(answers, Field.SPECIALTY),
        learning_focus=_selection(answers, Field.LEARNING_FOCUS),
        track_on_call_hours=answers.get(Field.TRACK_ON_CALL_HOURS) is True,
    )


def build_universal_details(answers: AnswerStore) -> UniversalDetails:
    return UniversalDetails(
        calendar_sync=answers.get(Field.CALENDAR_SYNC, CALENDAR_SYNC_DEFAULT),
        enable_notifications=answers.get(Field.ENABLE_NOTIFICATIONS) is True,
        study_preferences=_selection(answers, Field.STUDY_PREFERENCES),
        enable_ai_quizzes=answers.get(Field.ENABLE_AI_QUIZZES) is True,
    )


def aggregate(
    role: Role,
    answers: AnswerStore,
    flags: SmartLogicFlags,
    config: Optional[SmartLogicConfig] = None
) -> OnboardingResponse:
    """Build the onboarding response for a role.

    Only fields of the chosen role are read for the role section; answers
    left over from another role are never copied into the output.

    Args:
        role: The selected role
        answers: Final answers (not modified)
        flags: Derived smart logic flags
        config: Smart logic config (decides when the exam answer applies)

    Returns:
        OnboardingResponse
    """
    return OnboardingResponse(
        role=role,
        universal=build_universal_details(answers),
        derived_flags=flags,
        student_details=build_student_details(answers, config) if role == Role.STUDENT else None,
        intern_details=build_intern_details(answers) if role == Role.INTERN else None,
        worker_details=build_worker_details(answers) if role == Role.WORKER else None,
    )
