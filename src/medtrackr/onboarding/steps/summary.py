"""
Summary Step

Review the collected answers before the account is created.
"""

from typing import TYPE_CHECKING, Any, Dict

from medtrackr.onboarding.steps.common import StepAction

if TYPE_CHECKING:
    from medtrackr.onboarding.controller import WizardController
    from medtrackr.onboarding.ui import WizardUI


def _label(key: str) -> str:
    return key.replace("_", " ").capitalize()


def flatten_response(response: Dict[str, Any]) -> Dict[str, Any]:
    """Flatten a serialized OnboardingResponse into display rows."""
    rows: Dict[str, Any] = {}
    for section in ("student_details", "intern_details", "worker_details", "universal"):
        for key, value in (response.get(section) or {}).items():
            rows[_label(key)] = value
    return rows


def summarize(controller: "WizardController") -> Dict[str, Any]:
    """Display rows for the pending response, credentials first."""
    rows: Dict[str, Any] = {
        "Name": controller.credentials.full_name,
        "Email": controller.credentials.email,
        "Role": controller.role.label,
    }
    rows.update(flatten_response(controller.build_response().to_dict()))
    return rows


def summary_step(controller: "WizardController", ui: "WizardUI") -> StepAction:
    """Show the summary and ask to create the account.

    Returns:
        NEXT to finalize, BACK to change answers
    """
    ui.show_summary_table("Your MedTrackr setup", summarize(controller))
    ui.console.print()
    if ui.prompt_confirm("Create my account?", default=True):
        return StepAction.NEXT
    return StepAction.BACK
