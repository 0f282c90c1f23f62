"""
MedTrackr Onboarding Runner

Drives a WizardController from the terminal, interactively or from a YAML
answers template.
"""

import asyncio
from typing import Any, Dict, Optional

from rich.console import Console

from medtrackr.onboarding.aggregator import OnboardingResponse
from medtrackr.onboarding.catalog import Field, Role, get_definition
from medtrackr.onboarding.controller import NavigationResult, WizardController
from medtrackr.onboarding.credentials import Credentials, capture_credentials
from medtrackr.onboarding.exceptions import (
    AccountExistsError,
    InvalidCredentialsError,
    PersistenceError,
    ValidationError,
)
from medtrackr.onboarding.logging_config import get_logger
from medtrackr.onboarding.smart_logic import SmartLogicConfig
from medtrackr.onboarding.steps import STEP_HANDLERS, StepAction
from medtrackr.onboarding.store import AccountProfileStore
from medtrackr.onboarding.ui import WizardUI

logger = get_logger(__name__)


class OnboardingRunner:
    """Interactive terminal front end for the onboarding wizard."""

    def __init__(
        self,
        store: AccountProfileStore,
        console: Optional[Console] = None,
        smart_logic: Optional[SmartLogicConfig] = None,
        max_retries: int = 3
    ):
        self.console = console or Console()
        self.ui = WizardUI(self.console)
        self.store = store
        self.smart_logic = smart_logic
        self.max_retries = max_retries
        self.controller: Optional[WizardController] = None

    def collect_credentials(self) -> Credentials:
        """Sign-up form: ask until the input is valid."""
        self.console.print("[bold]Create your account[/bold]")
        self.console.print("[dim]Join MedTrackr to keep your studies and clinical duties on track.[/dim]")
        self.console.print()

        while True:
            full_name = self.ui.prompt_text("Full name", required=True)
            email = self.ui.prompt_text("Email address", required=True)
            password = self.ui.prompt_password("Password", required=True)
            confirm = self.ui.prompt_password("Confirm password", required=True)
            try:
                credentials = capture_credentials(full_name, email, password, confirm)
            except ValidationError as e:
                self.ui.print_error(e.message)
                self.console.print()
                continue
            self.ui.print_success("Great! Let's personalize MedTrackr next.")
            return credentials

    def run(self, credentials: Optional[Credentials] = None) -> Optional[OnboardingResponse]:
        """Run the wizard.

        Args:
            credentials: Sign-up input; asked for when omitted

        Returns:
            The persisted response, or None if the user left or gave up
        """
        self.ui.print_header()
        if credentials is None:
            credentials = self.collect_credentials()

        self.controller = WizardController(
            credentials,
            self.store,
            smart_logic=self.smart_logic,
        )
        controller = self.controller

        while True:
            definition = controller.current_definition
            self.ui.print_step_header(
                controller.current_index + 1,
                len(controller.sequence),
                definition.title,
                definition.description,
                progress=controller.progress,
            )
            self.ui.print_back_hint(first_step=controller.is_first_step)

            action = STEP_HANDLERS[definition.step](controller, self.ui)

            if action is StepAction.BACK:
                if controller.retreat() is NavigationResult.EXITED:
                    self.ui.print_info("Onboarding cancelled. Nothing was saved.")
                    return None
                continue

            result = controller.advance()
            if result is NavigationResult.BLOCKED:
                self.ui.print_error(controller.status_message)
            elif result is NavigationResult.READY_TO_FINALIZE:
                response = self._finalize_with_retry()
                if response is not None:
                    self._show_completion(response)
                    return response
                if not self.ui.prompt_confirm("Review your answers?", default=False):
                    return None
                controller.retreat()

    def _finalize_with_retry(self) -> Optional[OnboardingResponse]:
        """Finalize, offering a retry when a persistence stage fails."""
        attempts = 0
        while attempts < self.max_retries:
            attempts += 1
            try:
                return self.ui.show_progress(
                    "Creating your account...",
                    lambda: asyncio.run(self.controller.finalize()),
                )
            except (AccountExistsError, InvalidCredentialsError) as e:
                # Retrying cannot fix these; the user has to sign up again
                self.ui.print_error(e.message)
                if e.remediation:
                    self.ui.print_info(f"To fix: {e.remediation}")
                return None
            except PersistenceError as e:
                self.ui.print_error(f"Setup failed: {e.message}")
                if e.remediation:
                    self.ui.print_info(f"To fix: {e.remediation}")
                if attempts < self.max_retries:
                    if self.ui.prompt_confirm(f"Try again? ({attempts}/{self.max_retries})", default=True):
                        continue
                break
        return None

    def _show_completion(self, response: OnboardingResponse):
        flags = response.derived_flags
        next_steps = []
        if flags.exam_prompt_shown:
            next_steps.append("Set up your MB exam countdown")
        if flags.study_plan_suggested:
            next_steps.append("Review your suggested weekly study plan")
        if flags.tools_preloaded:
            next_steps.append("Open the surgical calculators preloaded for your rotation")
        if flags.manual_calendar_offered:
            next_steps.append("Add your schedule manually in the calendar")
        if flags.quiz_schedule_created:
            next_steps.append("Check your default AI quiz schedule")

        self.ui.show_completion_panel(
            "Welcome to MedTrackr!",
            "Your account has been successfully created.",
            next_steps,
        )


async def onboard_from_template(
    template: Dict[str, Any],
    store: AccountProfileStore,
    smart_logic: Optional[SmartLogicConfig] = None
) -> OnboardingResponse:
    """Run onboarding non-interactively from a parsed answers template.

    Template layout::

        credentials: {full_name, email, password}
        role: STUDENT | INTERN | WORKER
        answers: {<field>: <value>, ...}

    Answers go through the same controller, so the same validation applies.

    Raises:
        ValidationError: Missing, unknown or invalid template values
        PersistenceError: The store rejected the account or profile
    """
    if not isinstance(template, dict):
        raise ValidationError("Template must be a mapping")

    raw_credentials = template.get("credentials") or {}
    if not isinstance(raw_credentials, dict):
        raise ValidationError(
            "Template credentials must be a mapping", field="credentials", expected_format="a mapping"
        )
    password = raw_credentials.get("password", "")
    credentials = capture_credentials(
        raw_credentials.get("full_name", ""),
        raw_credentials.get("email", ""),
        password,
        raw_credentials.get("confirm_password", password),
    )

    try:
        role = Role(str(template.get("role", "")).upper())
    except ValueError:
        raise ValidationError(
            f"Invalid role '{template.get('role')}'",
            field="role",
            expected_format="one of: STUDENT, INTERN, WORKER",
        )

    answers = template.get("answers") or {}
    if not isinstance(answers, dict):
        raise ValidationError("Template answers must be a mapping", field="answers", expected_format="a mapping")
    try:
        pending = {Field(key): value for key, value in answers.items()}
    except ValueError as e:
        raise ValidationError(f"Unknown answer field in template: {e}") from e

    controller = WizardController(credentials, store, smart_logic=smart_logic)
    controller.select_role(role)

    while True:
        definition = get_definition(controller.current_step)
        for answer_field in definition.fields:
            if answer_field in pending:
                controller.answer(answer_field, pending.pop(answer_field))

        result = controller.advance()
        if result is NavigationResult.BLOCKED:
            raise ValidationError(
                f"Template does not complete step '{definition.step.value}'",
                field=definition.required_field.value if definition.required_field else None,
            )
        if result is NavigationResult.READY_TO_FINALIZE:
            break

    if pending:
        names = ", ".join(sorted(answer_field.value for answer_field in pending))
        raise ValidationError(f"Answers not asked for role {role.value}: {names}")

    logger.info(f"Template onboarding ready for {credentials.email}")
    return await controller.finalize()
