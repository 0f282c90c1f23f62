"""
Sign-up Credentials

Credentials captured on the sign-up screen before onboarding starts.
"""

from dataclasses import dataclass

from medtrackr.onboarding.exceptions import ValidationError
from medtrackr.onboarding.validators import (
    MIN_PASSWORD_LENGTH,
    validate_email,
    validate_full_name,
    validate_password,
)


@dataclass(frozen=True)
class Credentials:
    """Immutable sign-up input for one onboarding session."""
    full_name: str
    email: str
    password: str

    def __repr__(self) -> str:
        return f"Credentials(full_name={self.full_name!r}, email={self.email!r}, password='********')"


def capture_credentials(
    full_name: str,
    email: str,
    password: str,
    confirm_password: str
) -> Credentials:
    """Normalize and validate sign-up input.

    The name is trimmed and the email trimmed and lower-cased; passwords are
    kept exactly as typed.

    Raises:
        ValidationError: If any field is missing or invalid
    """
    full_name = (full_name or "").strip()
    email = (email or "").strip().lower()

    if not full_name or not email or not password or not confirm_password:
        raise ValidationError("Please fill in all fields.")

    valid, message = validate_full_name(full_name)
    if not valid:
        raise ValidationError(message, field="full_name")

    valid, message = validate_email(email)
    if not valid:
        raise ValidationError(message, field="email", expected_format="name@example.com")

    valid, message = validate_password(password, confirm_password)
    if not valid:
        raise ValidationError(
            message,
            field="password",
            expected_format=f"at least {MIN_PASSWORD_LENGTH} characters, typed the same twice",
        )

    return Credentials(full_name=full_name, email=email, password=password)
