"""
Onboarding Step Catalog

Static definitions of every onboarding step, the answer fields each step
writes, and the requirement rule that gates leaving the step.
"""

from dataclasses import dataclass
from datetime import date, datetime
from enum import Enum
from typing import Any, Dict, Optional, Tuple

from medtrackr.onboarding.exceptions import ValidationError


class Role(str, Enum):
    """User category chosen on the first step."""
    STUDENT = "STUDENT"
    INTERN = "INTERN"
    WORKER = "WORKER"

    @property
    def label(self) -> str:
        return ROLE_LABELS[self]


ROLE_LABELS = {
    Role.STUDENT: "Student",
    Role.INTERN: "Intern",
    Role.WORKER: "Medical Worker / Resident",
}


class Step(str, Enum):
    """Every screen the onboarding wizard can show."""
    ROLE_SELECTION = "role"
    STUDENT_UNIVERSITY = "student-university"
    STUDENT_LEVEL = "student-level"
    STUDENT_CALENDAR = "student-calendar"
    STUDENT_SUBJECTS = "student-subjects"
    STUDENT_EXTRA = "student-extra"
    INTERN_ROTATION = "intern-rotation"
    INTERN_SHIFT = "intern-shift"
    INTERN_TRACKING = "intern-tracking"
    INTERN_EXTRA = "intern-extra"
    WORKER_SPECIALTY = "worker-specialty"
    WORKER_LEARNING = "worker-learning"
    WORKER_ON_CALL = "worker-oncall"
    CALENDAR_SYNC = "universal-calendar"
    NOTIFICATIONS = "universal-notifications"
    STUDY_PREFERENCE = "universal-study"
    AI_QUIZZES = "universal-ai"
    SUMMARY = "summary"


class Field(str, Enum):
    """Answer identifiers stored in the AnswerStore."""
    UNIVERSITY = "university"
    LEVEL = "level"
    PREPARING_FOR_MB_EXAM = "preparing_for_mb_exam"
    SEMESTER_START = "semester_start"
    SEMESTER_END = "semester_end"
    CORE_SUBJECTS = "core_subjects"
    STUDENT_EXTRA_NOTES = "student_extra_notes"
    ROTATION = "rotation"
    SHIFT_PATTERN = "shift_pattern"
    TRACKING_PREFERENCES = "tracking_preferences"
    SPECIALTY = "specialty"
    LEARNING_FOCUS = "learning_focus"
    TRACK_ON_CALL_HOURS = "track_on_call_hours"
    CALENDAR_SYNC = "calendar_sync"
    ENABLE_NOTIFICATIONS = "enable_notifications"
    STUDY_PREFERENCES = "study_preferences"
    ENABLE_AI_QUIZZES = "enable_ai_quizzes"


class FieldKind(str, Enum):
    TEXT = "text"
    CHOICE = "choice"
    MULTI_CHOICE = "multi_choice"
    BOOLEAN = "boolean"
    DATE = "date"


class Requirement(str, Enum):
    """What a step needs before the wizard may leave it."""
    NONE = "none"
    ROLE = "role"
    TEXT = "text"
    CHOICE = "choice"
    MULTI = "multi"
    BINARY = "binary"


STUDENT_LEVELS = (
    "100 Level",
    "200 Level",
    "300 Level",
    "400 Level",
    "500 Level",
    "Final Year",
    "Other",
)

CORE_SUBJECTS = (
    "Anatomy",
    "Physiology",
    "Biochemistry",
    "Pathology",
    "Surgery",
    "Medicine",
)

INTERN_ROTATIONS = (
    "Surgery",
    "Medicine",
    "Pediatrics",
    "Obstetrics & Gynaecology",
    "Community Medicine",
    "Psychiatry",
    "Emergency",
    "Lab / Radiology",
    "Other",
)

INTERN_SHIFT_PATTERNS = (
    "Daily shifts",
    "Night calls",
    "24-hour calls",
    "A mix of all",
    "I'll set it up later",
)

INTERN_TRACKING_OPTIONS = (
    "My shifts",
    "Procedures",
    "Patient cases",
    "Learning goals",
)

WORKER_LEARNING_FOCUS = (
    "Research",
    "Complex cases",
    "Exam prep",
    "Procedure logging",
    "Scheduling",
)

CALENDAR_SYNC_OPTIONS = ("Google Calendar", "Outlook", "Skip for now")
CALENDAR_SYNC_DEFAULT = "Skip for now"

STUDY_PREFERENCES = ("Pomodoro", "Long sessions", "Mixed style", "I'll decide later")


@dataclass(frozen=True)
class FieldSpec:
    """Type and allowed values of one answer field."""
    kind: FieldKind
    options: Tuple[str, ...] = ()
    allow_custom: bool = False
    default: Any = None


FIELD_SPECS: Dict[Field, FieldSpec] = {
    Field.UNIVERSITY: FieldSpec(FieldKind.TEXT),
    Field.LEVEL: FieldSpec(FieldKind.CHOICE, STUDENT_LEVELS),
    Field.PREPARING_FOR_MB_EXAM: FieldSpec(FieldKind.BOOLEAN),
    Field.SEMESTER_START: FieldSpec(FieldKind.DATE),
    Field.SEMESTER_END: FieldSpec(FieldKind.DATE),
    Field.CORE_SUBJECTS: FieldSpec(FieldKind.MULTI_CHOICE, CORE_SUBJECTS, allow_custom=True),
    Field.STUDENT_EXTRA_NOTES: FieldSpec(FieldKind.TEXT),
    Field.ROTATION: FieldSpec(FieldKind.CHOICE, INTERN_ROTATIONS),
    Field.SHIFT_PATTERN: FieldSpec(FieldKind.CHOICE, INTERN_SHIFT_PATTERNS),
    Field.TRACKING_PREFERENCES: FieldSpec(FieldKind.MULTI_CHOICE, INTERN_TRACKING_OPTIONS),
    Field.SPECIALTY: FieldSpec(FieldKind.TEXT),
    Field.LEARNING_FOCUS: FieldSpec(FieldKind.MULTI_CHOICE, WORKER_LEARNING_FOCUS),
    Field.TRACK_ON_CALL_HOURS: FieldSpec(FieldKind.BOOLEAN),
    Field.CALENDAR_SYNC: FieldSpec(
        FieldKind.CHOICE, CALENDAR_SYNC_OPTIONS, default=CALENDAR_SYNC_DEFAULT
    ),
    Field.ENABLE_NOTIFICATIONS: FieldSpec(FieldKind.BOOLEAN),
    Field.STUDY_PREFERENCES: FieldSpec(FieldKind.MULTI_CHOICE, STUDY_PREFERENCES),
    Field.ENABLE_AI_QUIZZES: FieldSpec(FieldKind.BOOLEAN),
}


@dataclass(frozen=True)
class StepDefinition:
    """Definition of a wizard step."""
    step: Step
    title: str
    description: str = ""
    fields: Tuple[Field, ...] = ()
    requirement: Requirement = Requirement.NONE
    # Field checked by the requirement rule; None for ROLE and NONE
    required_field: Optional[Field] = None
    role: Optional[Role] = None


STEP_CATALOG: Dict[Step, StepDefinition] = {
    Step.ROLE_SELECTION: StepDefinition(
        step=Step.ROLE_SELECTION,
        title="Which best describes you?",
        description="We'll tailor MedTrackr to your stage of training",
        requirement=Requirement.ROLE,
    ),
    Step.STUDENT_UNIVERSITY: StepDefinition(
        step=Step.STUDENT_UNIVERSITY,
        title="Which university do you attend?",
        fields=(Field.UNIVERSITY,),
        requirement=Requirement.TEXT,
        required_field=Field.UNIVERSITY,
        role=Role.STUDENT,
    ),
    Step.STUDENT_LEVEL: StepDefinition(
        step=Step.STUDENT_LEVEL,
        title="What level are you in?",
        fields=(Field.LEVEL, Field.PREPARING_FOR_MB_EXAM),
        requirement=Requirement.CHOICE,
        required_field=Field.LEVEL,
        role=Role.STUDENT,
    ),
    Step.STUDENT_CALENDAR: StepDefinition(
        step=Step.STUDENT_CALENDAR,
        title="When does your semester run?",
        description="Optional. Helps us plan your study calendar",
        fields=(Field.SEMESTER_START, Field.SEMESTER_END),
        role=Role.STUDENT,
    ),
    Step.STUDENT_SUBJECTS: StepDefinition(
        step=Step.STUDENT_SUBJECTS,
        title="Which core subjects are you taking?",
        description="Pick all that apply or add your own",
        fields=(Field.CORE_SUBJECTS,),
        requirement=Requirement.MULTI,
        required_field=Field.CORE_SUBJECTS,
        role=Role.STUDENT,
    ),
    Step.STUDENT_EXTRA: StepDefinition(
        step=Step.STUDENT_EXTRA,
        title="Anything else we should know?",
        description="Optional notes",
        fields=(Field.STUDENT_EXTRA_NOTES,),
        role=Role.STUDENT,
    ),
    Step.INTERN_ROTATION: StepDefinition(
        step=Step.INTERN_ROTATION,
        title="What rotation are you currently on?",
        fields=(Field.ROTATION,),
        requirement=Requirement.CHOICE,
        required_field=Field.ROTATION,
        role=Role.INTERN,
    ),
    Step.INTERN_SHIFT: StepDefinition(
        step=Step.INTERN_SHIFT,
        title="What does your shift pattern look like?",
        fields=(Field.SHIFT_PATTERN,),
        requirement=Requirement.CHOICE,
        required_field=Field.SHIFT_PATTERN,
        role=Role.INTERN,
    ),
    Step.INTERN_TRACKING: StepDefinition(
        step=Step.INTERN_TRACKING,
        title="What would you like to track?",
        description="Pick all that apply",
        fields=(Field.TRACKING_PREFERENCES,),
        requirement=Requirement.MULTI,
        required_field=Field.TRACKING_PREFERENCES,
        role=Role.INTERN,
    ),
    Step.INTERN_EXTRA: StepDefinition(
        step=Step.INTERN_EXTRA,
        title="You're almost done!",
        description="We'll preload the best tools for your rotation.",
        role=Role.INTERN,
    ),
    Step.WORKER_SPECIALTY: StepDefinition(
        step=Step.WORKER_SPECIALTY,
        title="Which specialty do you work in?",
        fields=(Field.SPECIALTY,),
        requirement=Requirement.TEXT,
        required_field=Field.SPECIALTY,
        role=Role.WORKER,
    ),
    Step.WORKER_LEARNING: StepDefinition(
        step=Step.WORKER_LEARNING,
        title="What do you want to focus on?",
        description="Pick all that apply",
        fields=(Field.LEARNING_FOCUS,),
        requirement=Requirement.MULTI,
        required_field=Field.LEARNING_FOCUS,
        role=Role.WORKER,
    ),
    Step.WORKER_ON_CALL: StepDefinition(
        step=Step.WORKER_ON_CALL,
        title="Do you want to track on-call hours?",
        fields=(Field.TRACK_ON_CALL_HOURS,),
        requirement=Requirement.BINARY,
        required_field=Field.TRACK_ON_CALL_HOURS,
        role=Role.WORKER,
    ),
    Step.CALENDAR_SYNC: StepDefinition(
        step=Step.CALENDAR_SYNC,
        title="Sync with your calendar?",
        fields=(Field.CALENDAR_SYNC,),
    ),
    Step.NOTIFICATIONS: StepDefinition(
        step=Step.NOTIFICATIONS,
        title="Turn on reminders and notifications?",
        fields=(Field.ENABLE_NOTIFICATIONS,),
        requirement=Requirement.BINARY,
        required_field=Field.ENABLE_NOTIFICATIONS,
    ),
    Step.STUDY_PREFERENCE: StepDefinition(
        step=Step.STUDY_PREFERENCE,
        title="How do you like to study?",
        description="Pick all that apply",
        fields=(Field.STUDY_PREFERENCES,),
        requirement=Requirement.MULTI,
        required_field=Field.STUDY_PREFERENCES,
    ),
    Step.AI_QUIZZES: StepDefinition(
        step=Step.AI_QUIZZES,
        title="Generate AI quizzes from your notes?",
        fields=(Field.ENABLE_AI_QUIZZES,),
        requirement=Requirement.BINARY,
        required_field=Field.ENABLE_AI_QUIZZES,
    ),
    Step.SUMMARY: StepDefinition(
        step=Step.SUMMARY,
        title="You're all set!",
        description=(
            "We've customized MedTrackr for your workflow. "
            "Ready to build your best study + clinical routine?"
        ),
    ),
}


def get_definition(step: Step) -> StepDefinition:
    """Look up the definition of a step."""
    return STEP_CATALOG[step]


def owner_step(answer_field: Field) -> Step:
    """Get the step that writes a field."""
    for definition in STEP_CATALOG.values():
        if answer_field in definition.fields:
            return definition.step
    raise KeyError(answer_field)


def coerce_answer(answer_field: Field, value: Any) -> Any:
    """Check and normalize a raw answer for storage.

    Text is kept as entered (validation trims), choices must come from the
    field's option set, multi-choice values become a de-duplicated tuple,
    and dates accept ``date`` objects, ISO strings or None.

    Raises:
        ValidationError: If the value has the wrong type or is not an option
    """
    spec = FIELD_SPECS[answer_field]
    name = answer_field.value

    if spec.kind == FieldKind.TEXT:
        if not isinstance(value, str):
            raise ValidationError(f"Invalid {name}", field=name, expected_format="text")
        return value

    if spec.kind == FieldKind.CHOICE:
        if value not in spec.options:
            raise ValidationError(
                f"'{value}' is not a valid {name}",
                field=name,
                expected_format=f"one of: {', '.join(spec.options)}",
            )
        return value

    if spec.kind == FieldKind.MULTI_CHOICE:
        if isinstance(value, str) or not hasattr(value, "__iter__"):
            raise ValidationError(f"Invalid {name}", field=name, expected_format="a list of options")
        selected = []
        for item in value:
            item = item.strip() if isinstance(item, str) else item
            if not isinstance(item, str) or not item:
                raise ValidationError(f"Invalid {name} entry", field=name, expected_format="non-empty text")
            if item not in spec.options and not spec.allow_custom:
                raise ValidationError(
                    f"'{item}' is not a valid {name}",
                    field=name,
                    expected_format=f"any of: {', '.join(spec.options)}",
                )
            if item not in selected:
                selected.append(item)
        return tuple(selected)

    if spec.kind == FieldKind.BOOLEAN:
        if not isinstance(value, bool):
            raise ValidationError(f"Invalid {name}", field=name, expected_format="yes or no")
        return value

    if spec.kind == FieldKind.DATE:
        # Dates are optional; None clears one
        if value is None:
            return None
        if isinstance(value, datetime):
            return value.date()
        if isinstance(value, date):
            return value
        if isinstance(value, str):
            try:
                return date.fromisoformat(value)
            except ValueError:
                pass
        raise ValidationError(f"Invalid {name}", field=name, expected_format="a date (YYYY-MM-DD)")

    raise ValidationError(f"Unsupported field {name}", field=name)
