"""
Student Steps

University, level, semester calendar, core subjects and extra notes.
"""

from typing import TYPE_CHECKING

from medtrackr.onboarding.catalog import Field
from medtrackr.onboarding.steps.common import (
    StepAction,
    choice_step,
    multi_choice_step,
    text_step,
)
from medtrackr.onboarding.ui import BACK

if TYPE_CHECKING:
    from medtrackr.onboarding.controller import WizardController
    from medtrackr.onboarding.ui import WizardUI


def university_step(controller: "WizardController", ui: "WizardUI") -> StepAction:
    return text_step(controller, ui, Field.UNIVERSITY, "University (e.g. University of Lagos)")


def level_step(controller: "WizardController", ui: "WizardUI") -> StepAction:
    """Collect the academic level, plus the MB exam question for final year."""
    action = choice_step(controller, ui, Field.LEVEL, "Your current level")
    if action is StepAction.BACK:
        return action

    if controller.get_answer(Field.LEVEL) == controller.smart_logic.terminal_level:
        ui.console.print()
        preparing = ui.prompt_yes_no(
            "Are you preparing for your MB exams?",
            current=controller.get_answer(Field.PREPARING_FOR_MB_EXAM),
            allow_back=True,
        )
        if preparing is BACK:
            return StepAction.BACK
        controller.answer(Field.PREPARING_FOR_MB_EXAM, preparing)
    return StepAction.NEXT


def calendar_step(controller: "WizardController", ui: "WizardUI") -> StepAction:
    """Collect optional semester start and end dates."""
    start = ui.prompt_date(
        "Semester start",
        current=controller.get_answer(Field.SEMESTER_START),
        allow_back=True,
    )
    if start is BACK:
        return StepAction.BACK
    controller.answer(Field.SEMESTER_START, start)

    end = ui.prompt_date(
        "Semester end",
        current=controller.get_answer(Field.SEMESTER_END),
        allow_back=True,
    )
    if end is BACK:
        return StepAction.BACK
    if start is not None and end is not None and end < start:
        ui.print_warning("The end date is before the start date. You can change it later.")
    controller.answer(Field.SEMESTER_END, end)
    return StepAction.NEXT


def subjects_step(controller: "WizardController", ui: "WizardUI") -> StepAction:
    return multi_choice_step(controller, ui, Field.CORE_SUBJECTS, "Core subjects this semester")


def extra_step(controller: "WizardController", ui: "WizardUI") -> StepAction:
    return text_step(
        controller,
        ui,
        Field.STUDENT_EXTRA_NOTES,
        "Extra notes (research projects, extracurriculars, clinical rotations...)",
        required=False,
    )
