"""
Intern Steps

Rotation, shift pattern, tracking preferences and the wrap-up screen.
"""

from typing import TYPE_CHECKING

from medtrackr.onboarding.catalog import Field
from medtrackr.onboarding.steps.common import (
    StepAction,
    choice_step,
    info_step,
    multi_choice_step,
)

if TYPE_CHECKING:
    from medtrackr.onboarding.controller import WizardController
    from medtrackr.onboarding.ui import WizardUI


def rotation_step(controller: "WizardController", ui: "WizardUI") -> StepAction:
    return choice_step(controller, ui, Field.ROTATION, "Current rotation")


def shift_step(controller: "WizardController", ui: "WizardUI") -> StepAction:
    return choice_step(controller, ui, Field.SHIFT_PATTERN, "Shift pattern")


def tracking_step(controller: "WizardController", ui: "WizardUI") -> StepAction:
    return multi_choice_step(controller, ui, Field.TRACKING_PREFERENCES, "What should we track for you?")


def wrapup_step(controller: "WizardController", ui: "WizardUI") -> StepAction:
    return info_step(ui)
