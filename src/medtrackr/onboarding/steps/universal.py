"""
Universal Steps

Questions asked of every role: calendar sync, notifications, study style and
AI quizzes.
"""

from typing import TYPE_CHECKING

from medtrackr.onboarding.catalog import Field
from medtrackr.onboarding.steps.common import (
    StepAction,
    choice_step,
    multi_choice_step,
    yes_no_step,
)

if TYPE_CHECKING:
    from medtrackr.onboarding.controller import WizardController
    from medtrackr.onboarding.ui import WizardUI


def calendar_sync_step(controller: "WizardController", ui: "WizardUI") -> StepAction:
    return choice_step(controller, ui, Field.CALENDAR_SYNC, "Calendar to sync with")


def notifications_step(controller: "WizardController", ui: "WizardUI") -> StepAction:
    return yes_no_step(controller, ui, Field.ENABLE_NOTIFICATIONS, "Enable notifications?")


def study_preference_step(controller: "WizardController", ui: "WizardUI") -> StepAction:
    return multi_choice_step(controller, ui, Field.STUDY_PREFERENCES, "Study style")


def ai_quizzes_step(controller: "WizardController", ui: "WizardUI") -> StepAction:
    return yes_no_step(controller, ui, Field.ENABLE_AI_QUIZZES, "Enable AI quizzes?")
