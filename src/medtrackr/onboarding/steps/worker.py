"""
Medical Worker Steps

Specialty, learning focus and on-call tracking.
"""

from typing import TYPE_CHECKING

from medtrackr.onboarding.catalog import Field
from medtrackr.onboarding.steps.common import (
    StepAction,
    multi_choice_step,
    text_step,
    yes_no_step,
)

if TYPE_CHECKING:
    from medtrackr.onboarding.controller import WizardController
    from medtrackr.onboarding.ui import WizardUI


def specialty_step(controller: "WizardController", ui: "WizardUI") -> StepAction:
    return text_step(controller, ui, Field.SPECIALTY, "Specialty (e.g. Cardiology, General Surgery)")


def learning_step(controller: "WizardController", ui: "WizardUI") -> StepAction:
    return multi_choice_step(controller, ui, Field.LEARNING_FOCUS, "Learning focus")


def on_call_step(controller: "WizardController", ui: "WizardUI") -> StepAction:
    return yes_no_step(controller, ui, Field.TRACK_ON_CALL_HOURS, "Track on-call hours?")
