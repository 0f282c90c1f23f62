"""
Role Step

Ask which best describes the user: student, intern or medical worker.
"""

from typing import TYPE_CHECKING

from medtrackr.onboarding.catalog import ROLE_LABELS, Role
from medtrackr.onboarding.steps.common import StepAction
from medtrackr.onboarding.ui import BACK

if TYPE_CHECKING:
    from medtrackr.onboarding.controller import WizardController
    from medtrackr.onboarding.ui import WizardUI


def role_step(controller: "WizardController", ui: "WizardUI") -> StepAction:
    """Collect the user's role.

    Returns:
        NEXT once a role is chosen, BACK to leave onboarding
    """
    labels = [ROLE_LABELS[role] for role in Role]
    current = ROLE_LABELS[controller.role] if controller.role else None

    label = ui.prompt_choice(
        "I am a...",
        choices=labels,
        default=current,
        allow_back=True,
    )
    if label is BACK:
        return StepAction.BACK

    role = next(role for role in Role if ROLE_LABELS[role] == label)
    if controller.role and role != controller.role:
        ui.print_info("Your earlier answers for the other role are kept in case you switch back.")
    controller.select_role(role, auto_advance=False)
    return StepAction.NEXT
