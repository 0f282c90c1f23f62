"""
MedTrackr Onboarding Exceptions

Every failure the onboarding flow can surface carries three things: what
went wrong (``message``), what the user can do about it (``remediation``)
and, optionally, low-level context for bug reports (``details``).

Subclasses declare their defaults as class attributes; the CLI maps each
class to an exit code through ``get_error_code``.
"""

from typing import Optional


class MedTrackrError(Exception):
    """Root of the MedTrackr error hierarchy."""

    default_message: str = "MedTrackr onboarding failed"
    default_remediation: Optional[str] = None

    def __init__(
        self,
        message: Optional[str] = None,
        remediation: Optional[str] = None,
        details: Optional[str] = None
    ):
        self.message = message or self.default_message
        self.remediation = remediation or self.default_remediation
        self.details = details
        super().__init__(self.message)

    def __str__(self) -> str:
        lines = [self.message]
        if self.details:
            lines.append(f"Details: {self.details}")
        if self.remediation:
            lines.append(f"To fix: {self.remediation}")
        return "\n".join(lines)


class ConfigError(MedTrackrError):
    """Bad or unreadable settings in config.yaml or the environment."""

    default_message = "Invalid MedTrackr configuration"

    def __init__(
        self,
        message: Optional[str] = None,
        config_key: Optional[str] = None,
        remediation: Optional[str] = None,
        details: Optional[str] = None
    ):
        self.config_key = config_key
        if config_key and not remediation:
            remediation = f"Check the '{config_key}' setting in your medtrackr config.yaml"
        super().__init__(message, remediation, details)


class ValidationError(MedTrackrError):
    """A sign-up value or onboarding answer was rejected."""

    default_message = "Invalid answer"

    def __init__(
        self,
        message: Optional[str] = None,
        field: Optional[str] = None,
        expected_format: Optional[str] = None,
        remediation: Optional[str] = None,
        details: Optional[str] = None
    ):
        self.field = field
        self.expected_format = expected_format
        if field and expected_format and not remediation:
            remediation = f"The {field} should be {expected_format}"
        super().__init__(message, remediation, details)


class WizardStateError(MedTrackrError):
    """A wizard transition was called in a state that does not allow it.

    Raised for caller bugs such as finalizing before the summary step or
    answering a field that the current step does not own.
    """

    default_message = "This action is not available at the current step"

    def __init__(
        self,
        message: Optional[str] = None,
        step: Optional[str] = None,
        remediation: Optional[str] = None,
        details: Optional[str] = None
    ):
        self.step = step
        super().__init__(message, remediation, details)


class FinalizeInProgressError(MedTrackrError):
    """A second finalize was requested while one is still pending."""

    default_message = "Account setup is already in progress"
    default_remediation = "Wait for the current request to finish before submitting again"


class PersistenceError(MedTrackrError):
    """Account creation or profile write failed.

    ``stage`` names the persistence stage that failed so a partial failure
    can be attributed: ``create_account``, ``set_display_name`` or
    ``write_profile``. Subclasses set ``default_stage`` when the failure
    can only come from one of them.
    """

    default_message = "Could not save your profile"
    default_remediation = "Try again. Your answers have been kept."
    default_stage: Optional[str] = None

    def __init__(
        self,
        message: Optional[str] = None,
        stage: Optional[str] = None,
        remediation: Optional[str] = None,
        details: Optional[str] = None
    ):
        self.stage = stage or self.default_stage
        super().__init__(message, remediation, details)


class AccountExistsError(PersistenceError):
    """An account with this email address already exists."""

    default_message = "An account with this email already exists"
    default_remediation = "Sign in with this email instead, or sign up with a different one"
    default_stage = "create_account"

    def __init__(self, message: Optional[str] = None, email: Optional[str] = None, **kwargs):
        self.email = email
        super().__init__(message, **kwargs)


class InvalidCredentialsError(PersistenceError):
    """The account store rejected the email or password."""

    default_message = "The email or password was rejected"
    default_remediation = "Go back to sign-up and check your email and password"
    default_stage = "create_account"


class NetworkError(PersistenceError):
    """The account service could not be reached (timeouts, dropped connections)."""

    default_message = "Could not reach the account service"
    default_remediation = "Check your internet connection and try again. Your answers have been kept."


class PermissionDeniedError(PersistenceError):
    """The profile store refused the write."""

    default_message = "You do not have permission to save this profile"
    default_remediation = "Sign out and back in, then try again"
    default_stage = "write_profile"


# Most specific first: lookup stops at the first isinstance match.
ERROR_CODES = {
    ConfigError: 10,
    NetworkError: 13,
    ValidationError: 14,
    AccountExistsError: 20,
    InvalidCredentialsError: 21,
    PermissionDeniedError: 22,
    PersistenceError: 23,
    FinalizeInProgressError: 24,
    WizardStateError: 25,
    MedTrackrError: 1,
}


def get_error_code(error: Exception) -> int:
    """Exit code for ``error``; 1 for anything outside the hierarchy."""
    return next(
        (code for error_type, code in ERROR_CODES.items() if isinstance(error, error_type)),
        1,
    )
