"""
Shared helpers for step prompt handlers.
"""

from enum import Enum
from typing import TYPE_CHECKING, Any

from medtrackr.onboarding.catalog import FIELD_SPECS, Field
from medtrackr.onboarding.ui import BACK

if TYPE_CHECKING:
    from medtrackr.onboarding.controller import WizardController
    from medtrackr.onboarding.ui import WizardUI


class StepAction(str, Enum):
    """What the user asked for after answering a step."""
    NEXT = "next"
    BACK = "back"


def choice_step(controller: "WizardController", ui: "WizardUI", answer_field: Field, prompt: str) -> StepAction:
    """Ask for a single option of a choice field."""
    value = ui.prompt_choice(
        prompt,
        choices=FIELD_SPECS[answer_field].options,
        default=controller.get_answer(answer_field, FIELD_SPECS[answer_field].default),
        allow_back=True,
    )
    if value is BACK:
        return StepAction.BACK
    controller.answer(answer_field, value)
    return StepAction.NEXT


def multi_choice_step(
    controller: "WizardController",
    ui: "WizardUI",
    answer_field: Field,
    prompt: str
) -> StepAction:
    """Ask for any number of options of a multi-choice field."""
    spec = FIELD_SPECS[answer_field]
    value = ui.prompt_multi_choice(
        prompt,
        choices=spec.options,
        selected=controller.get_answer(answer_field, ()),
        allow_custom=spec.allow_custom,
        allow_back=True,
    )
    if value is BACK:
        return StepAction.BACK
    controller.answer(answer_field, value)
    return StepAction.NEXT


def text_step(
    controller: "WizardController",
    ui: "WizardUI",
    answer_field: Field,
    prompt: str,
    required: bool = True
) -> StepAction:
    """Ask for a free-text field."""
    value = ui.prompt_text(
        prompt,
        default=controller.get_answer(answer_field, ""),
        required=required,
        allow_back=True,
    )
    if value is BACK:
        return StepAction.BACK
    controller.answer(answer_field, value)
    return StepAction.NEXT


def yes_no_step(controller: "WizardController", ui: "WizardUI", answer_field: Field, prompt: str) -> StepAction:
    """Ask for an explicit yes or no."""
    value: Any = ui.prompt_yes_no(prompt, current=controller.get_answer(answer_field), allow_back=True)
    if value is BACK:
        return StepAction.BACK
    controller.answer(answer_field, value)
    return StepAction.NEXT


def info_step(ui: "WizardUI", message: str = "") -> StepAction:
    """Show an informational screen; nothing to answer."""
    if message:
        ui.print_info(message)
    if ui.prompt_confirm("Continue?", default=True):
        return StepAction.NEXT
    return StepAction.BACK
