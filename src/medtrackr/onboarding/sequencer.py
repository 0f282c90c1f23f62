"""
Onboarding Step Sequencer

Derives the ordered step list shown for a role.
"""

from typing import Optional, Tuple

from medtrackr.onboarding.catalog import Role, Step


ROLE_STEPS = {
    Role.STUDENT: (
        Step.STUDENT_UNIVERSITY,
        Step.STUDENT_LEVEL,
        Step.STUDENT_CALENDAR,
        Step.STUDENT_SUBJECTS,
        Step.STUDENT_EXTRA,
    ),
    Role.INTERN: (
        Step.INTERN_ROTATION,
        Step.INTERN_SHIFT,
        Step.INTERN_TRACKING,
        Step.INTERN_EXTRA,
    ),
    Role.WORKER: (
        Step.WORKER_SPECIALTY,
        Step.WORKER_LEARNING,
        Step.WORKER_ON_CALL,
    ),
}

UNIVERSAL_STEPS = (
    Step.CALENDAR_SYNC,
    Step.NOTIFICATIONS,
    Step.STUDY_PREFERENCE,
    Step.AI_QUIZZES,
)


def compute_sequence(role: Optional[Role]) -> Tuple[Step, ...]:
    """Build the ordered steps for a role.

    Until a role is chosen only the role selection step exists.

    Args:
        role: The selected role, or None

    Returns:
        Tuple of steps starting with ROLE_SELECTION and ending with SUMMARY
    """
    if role is None:
        return (Step.ROLE_SELECTION,)
    return (Step.ROLE_SELECTION,) + ROLE_STEPS[role] + UNIVERSAL_STEPS + (Step.SUMMARY,)


def clamp_index(index: int, sequence: Tuple[Step, ...]) -> int:
    """Keep an index inside the bounds of a (possibly shorter) sequence."""
    return max(0, min(index, len(sequence) - 1))
