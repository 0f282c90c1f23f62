"""
MedTrackr Onboarding Controller

Owns the wizard state: step sequencing, validation-gated navigation, answer
accumulation and the finalize/commit sequence against the account store.
"""

import asyncio
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Mapping, Optional, Tuple

from medtrackr.onboarding.aggregator import OnboardingResponse, aggregate
from medtrackr.onboarding.answers import AnswerStore
from medtrackr.onboarding.catalog import (
    FIELD_SPECS,
    Field,
    FieldKind,
    Role,
    Step,
    StepDefinition,
    coerce_answer,
    get_definition,
)
from medtrackr.onboarding.credentials import Credentials
from medtrackr.onboarding.exceptions import (
    FinalizeInProgressError,
    PersistenceError,
    ValidationError,
    WizardStateError,
)
from medtrackr.onboarding.logging_config import get_logger
from medtrackr.onboarding.sequencer import clamp_index, compute_sequence
from medtrackr.onboarding.smart_logic import SmartLogicConfig, derive
from medtrackr.onboarding.store import AccountProfileStore
from medtrackr.onboarding.validators import (
    INCOMPLETE_STEP_MESSAGE,
    can_advance,
    first_incomplete_step,
    missing_fields,
)

logger = get_logger(__name__)


SUCCESS_MESSAGE = "MedTrackr is ready for you!"


class WizardPhase(str, Enum):
    ACTIVE = "active"
    FINALIZING = "finalizing"
    COMPLETED = "completed"
    FAILED = "failed"


class NavigationResult(str, Enum):
    """Outcome of advance() / retreat()."""
    ADVANCED = "advanced"
    RETREATED = "retreated"
    BLOCKED = "blocked"
    READY_TO_FINALIZE = "ready_to_finalize"
    EXITED = "exited"
    BUSY = "busy"


@dataclass
class WizardState:
    """State of one onboarding session."""
    role: Optional[Role] = None
    sequence: Tuple[Step, ...] = field(default_factory=lambda: compute_sequence(None))
    current_index: int = 0
    answers: AnswerStore = field(default_factory=AnswerStore)
    status_message: Optional[str] = None
    phase: WizardPhase = WizardPhase.ACTIVE
    # Persistence stages already done, so a retry resumes where it failed
    account_id: Optional[str] = None
    display_name_set: bool = False

    @property
    def current_step(self) -> Step:
        return self.sequence[self.current_index]


class WizardController:
    """Orchestrates the MedTrackr onboarding wizard.

    The UI layer reads state through the properties below and changes it only
    through ``select_role``, ``answer``, ``toggle``, ``add_custom``,
    ``advance``, ``retreat`` and ``finalize``.
    """

    def __init__(
        self,
        credentials: Credentials,
        store: AccountProfileStore,
        on_complete: Optional[Callable[[OnboardingResponse], None]] = None,
        on_abandon: Optional[Callable[[], None]] = None,
        smart_logic: Optional[SmartLogicConfig] = None
    ):
        self.credentials = credentials
        self.store = store
        self.on_complete = on_complete
        self.on_abandon = on_abandon
        self.smart_logic = smart_logic or SmartLogicConfig()
        self.state = WizardState()
        self.response: Optional[OnboardingResponse] = None

    # =========================================================================
    # Read accessors
    # =========================================================================

    @property
    def role(self) -> Optional[Role]:
        return self.state.role

    @property
    def sequence(self) -> Tuple[Step, ...]:
        return self.state.sequence

    @property
    def current_index(self) -> int:
        return self.state.current_index

    @property
    def current_step(self) -> Step:
        return self.state.current_step

    @property
    def current_definition(self) -> StepDefinition:
        return get_definition(self.state.current_step)

    @property
    def status_message(self) -> Optional[str]:
        return self.state.status_message

    @property
    def phase(self) -> WizardPhase:
        return self.state.phase

    @property
    def is_busy(self) -> bool:
        return self.state.phase == WizardPhase.FINALIZING

    @property
    def is_first_step(self) -> bool:
        return self.state.current_index == 0

    @property
    def is_last_step(self) -> bool:
        return self.state.current_index == len(self.state.sequence) - 1

    @property
    def answers(self) -> Mapping[Field, Any]:
        """Read-only snapshot of the answers."""
        return self.state.answers.snapshot()

    def get_answer(self, answer_field: Field, default: Any = None) -> Any:
        return self.state.answers.get(answer_field, default)

    def can_advance(self) -> bool:
        return can_advance(self.state.current_step, self.state.answers, self.state.role)

    @property
    def progress(self) -> float:
        """Position in the sequence as a percentage (0.0 on the first step, 100.0 on the summary)."""
        if len(self.state.sequence) <= 1:
            return 0.0
        return (self.state.current_index / (len(self.state.sequence) - 1)) * 100.0

    # =========================================================================
    # Transitions
    # =========================================================================

    def _require_editable(self, action: str):
        if self.state.phase == WizardPhase.COMPLETED:
            raise WizardStateError(f"Cannot {action}: onboarding is already completed")
        if self.state.phase == WizardPhase.FINALIZING:
            raise FinalizeInProgressError(details=f"{action} rejected while saving")

    def select_role(self, role: Role, auto_advance: bool = True) -> Optional[NavigationResult]:
        """Choose the role on the role selection step.

        Changing the role rebuilds the sequence and resets the index to the
        first step. Answers from another role stay in the store but are never
        read for this role's output.

        Args:
            role: The chosen role
            auto_advance: Move on to the first role step immediately

        Returns:
            Result of the automatic advance, or None without ``auto_advance``
        """
        self._require_editable("select role")
        if self.state.current_step != Step.ROLE_SELECTION:
            raise WizardStateError(
                "Role can only be chosen on the role selection step",
                step=self.state.current_step.value,
            )

        try:
            role = Role(role)
        except ValueError:
            raise ValidationError(
                f"Invalid role '{role}'",
                field="role",
                expected_format=f"one of: {', '.join(r.value for r in Role)}",
            )
        if role != self.state.role:
            previous = self.state.role
            self.state.role = role
            self.state.sequence = compute_sequence(role)
            self.state.current_index = 0
            logger.info(f"Role set to {role.value} (was {previous.value if previous else 'unset'})")

        self.state.status_message = None
        if auto_advance:
            return self.advance()
        return None

    def answer(self, answer_field: Field, value: Any):
        """Record an answer for a field of the current step.

        Raises:
            WizardStateError: If the field does not belong to the current step
            ValidationError: If the value has the wrong type or option
        """
        self._require_editable("answer")
        answer_field = Field(answer_field)
        definition = self.current_definition
        if answer_field not in definition.fields:
            raise WizardStateError(
                f"Field '{answer_field.value}' is not part of step '{definition.step.value}'",
                step=definition.step.value,
            )
        self.state.answers.set(answer_field, coerce_answer(answer_field, value))
        self.state.status_message = None

    def toggle(self, answer_field: Field, option: str) -> Tuple[str, ...]:
        """Add or remove one option of a multi-choice field."""
        answer_field = Field(answer_field)
        if FIELD_SPECS[answer_field].kind != FieldKind.MULTI_CHOICE:
            raise WizardStateError(f"Field '{answer_field.value}' is not multi-choice")
        current = list(self.state.answers.get(answer_field) or ())
        if option in current:
            current.remove(option)
        else:
            current.append(option)
        self.answer(answer_field, current)
        return self.state.answers.get(answer_field)

    def add_custom(self, answer_field: Field, text: str) -> Tuple[str, ...]:
        """Add a custom entry to a multi-choice field that allows one.

        Blank or duplicate entries are ignored.
        """
        answer_field = Field(answer_field)
        if not FIELD_SPECS[answer_field].allow_custom:
            raise ValidationError(
                f"Field '{answer_field.value}' does not accept custom entries",
                field=answer_field.value,
            )
        text = (text or "").strip()
        current = list(self.state.answers.get(answer_field) or ())
        if text and text not in current:
            self.answer(answer_field, current + [text])
        return tuple(self.state.answers.get(answer_field) or ())

    def advance(self) -> NavigationResult:
        """Move forward if the current step's requirement is met.

        Returns:
            BUSY while finalizing, BLOCKED if validation fails,
            READY_TO_FINALIZE on the last step, else ADVANCED
        """
        if self.is_busy:
            return NavigationResult.BUSY
        if self.state.phase == WizardPhase.COMPLETED:
            raise WizardStateError("Cannot advance: onboarding is already completed")

        step = self.state.current_step
        if not can_advance(step, self.state.answers, self.state.role):
            # Validation failures stay local; debug only
            logger.debug(f"Step {step.value} blocked: missing {missing_fields(step, self.state.answers, self.state.role)}")
            self.state.status_message = INCOMPLETE_STEP_MESSAGE
            return NavigationResult.BLOCKED

        self.state.status_message = None
        if self.is_last_step:
            return NavigationResult.READY_TO_FINALIZE

        self.state.current_index += 1
        logger.debug(f"Navigating: {step.value} → {self.state.current_step.value}")
        return NavigationResult.ADVANCED

    def retreat(self) -> NavigationResult:
        """Move back one step, or signal exit from the first step.

        Returns:
            BUSY while finalizing, EXITED at the first step (``on_abandon``
            is emitted), else RETREATED
        """
        if self.is_busy:
            return NavigationResult.BUSY
        if self.state.phase == WizardPhase.COMPLETED:
            raise WizardStateError("Cannot go back: onboarding is already completed")

        self.state.status_message = None
        if self.state.current_index == 0:
            logger.info("Onboarding abandoned at the first step")
            if self.on_abandon:
                self.on_abandon()
            return NavigationResult.EXITED

        self.state.current_index = clamp_index(self.state.current_index - 1, self.state.sequence)
        return NavigationResult.RETREATED

    def build_response(self) -> OnboardingResponse:
        """Derive flags and aggregate the current answers."""
        if self.state.role is None:
            raise WizardStateError("Cannot build a response before a role is chosen")
        flags = derive(self.state.role, self.state.answers, self.smart_logic)
        return aggregate(self.state.role, self.state.answers, flags, self.smart_logic)

    async def finalize(self) -> OnboardingResponse:
        """Create the account and persist the onboarding profile.

        Stages run in order: create_account, set_display_name, write_profile.
        Stages that succeeded on an earlier attempt are skipped, so a retry
        after a failed profile write does not create a second account.

        Returns:
            The persisted OnboardingResponse

        Raises:
            WizardStateError: Not on the last step, a step is incomplete, no role, or already completed
            FinalizeInProgressError: Another finalize is pending
            PersistenceError: A persistence stage failed (state is kept)
        """
        # All checks happen before the first await so a concurrent call
        # cannot slip past the busy flag
        if self.state.phase == WizardPhase.FINALIZING:
            raise FinalizeInProgressError()
        if self.state.phase == WizardPhase.COMPLETED:
            raise WizardStateError("Onboarding is already completed")
        if self.state.role is None:
            raise WizardStateError("Cannot finalize before a role is chosen")
        if not self.is_last_step:
            raise WizardStateError(
                "Finalize is only allowed on the summary step",
                step=self.state.current_step.value,
            )
        blocking = first_incomplete_step(self.state.sequence, self.state.answers, self.state.role)
        if blocking is not None:
            raise WizardStateError(
                f"Cannot finalize: step '{blocking.value}' is incomplete",
                step=blocking.value,
            )

        response = self.build_response()
        self.state.phase = WizardPhase.FINALIZING
        self.state.status_message = None
        logger.info(f"Finalizing onboarding for {self.credentials.email} as {self.state.role.value}")

        try:
            await self._persist(response)
        except PersistenceError as e:
            self.state.phase = WizardPhase.FAILED
            self.state.status_message = e.message
            logger.warning(f"Onboarding persistence failed at stage '{e.stage}': {e.message}")
            raise
        except asyncio.CancelledError:
            self.state.phase = WizardPhase.FAILED
            self.state.status_message = "Account setup was interrupted. Please try again."
            logger.warning("Onboarding finalize was cancelled")
            raise
        except Exception as e:
            self.state.phase = WizardPhase.FAILED
            self.state.status_message = "Unable to complete onboarding. Please try again."
            logger.error(f"Unexpected error while finalizing onboarding: {e}")
            raise

        self.state.phase = WizardPhase.COMPLETED
        self.state.status_message = SUCCESS_MESSAGE
        self.response = response
        logger.info(f"Onboarding completed for account {self.state.account_id}")
        if self.on_complete:
            self.on_complete(response)
        return response

    async def _persist(self, response: OnboardingResponse):
        stage = "create_account"
        try:
            if self.state.account_id is None:
                self.state.account_id = await self.store.create_account(
                    self.credentials.email, self.credentials.password
                )
            stage = "set_display_name"
            if not self.state.display_name_set:
                await self.store.set_display_name(self.state.account_id, self.credentials.full_name)
                self.state.display_name_set = True
            stage = "write_profile"
            await self.store.write_profile(self.state.account_id, self.credentials, response)
        except PersistenceError as e:
            if e.stage is None:
                e.stage = stage
            raise
