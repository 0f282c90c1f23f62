"""
MedTrackr Onboarding Steps

Terminal prompt handlers, one per wizard step.
"""

from medtrackr.onboarding.catalog import Step
from medtrackr.onboarding.steps.common import StepAction
from medtrackr.onboarding.steps.role import role_step
from medtrackr.onboarding.steps.student import (
    calendar_step,
    extra_step,
    level_step,
    subjects_step,
    university_step,
)
from medtrackr.onboarding.steps.intern import (
    rotation_step,
    shift_step,
    tracking_step,
    wrapup_step,
)
from medtrackr.onboarding.steps.worker import learning_step, on_call_step, specialty_step
from medtrackr.onboarding.steps.universal import (
    ai_quizzes_step,
    calendar_sync_step,
    notifications_step,
    study_preference_step,
)
from medtrackr.onboarding.steps.summary import summary_step

# Prompt handler for every step of the catalog
STEP_HANDLERS = {
    Step.ROLE_SELECTION: role_step,
    Step.STUDENT_UNIVERSITY: university_step,
    Step.STUDENT_LEVEL: level_step,
    Step.STUDENT_CALENDAR: calendar_step,
    Step.STUDENT_SUBJECTS: subjects_step,
    Step.STUDENT_EXTRA: extra_step,
    Step.INTERN_ROTATION: rotation_step,
    Step.INTERN_SHIFT: shift_step,
    Step.INTERN_TRACKING: tracking_step,
    Step.INTERN_EXTRA: wrapup_step,
    Step.WORKER_SPECIALTY: specialty_step,
    Step.WORKER_LEARNING: learning_step,
    Step.WORKER_ON_CALL: on_call_step,
    Step.CALENDAR_SYNC: calendar_sync_step,
    Step.NOTIFICATIONS: notifications_step,
    Step.STUDY_PREFERENCE: study_preference_step,
    Step.AI_QUIZZES: ai_quizzes_step,
    Step.SUMMARY: summary_step,
}

__all__ = ["STEP_HANDLERS", "StepAction"]
