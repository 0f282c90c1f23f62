"""
MedTrackr Onboarding Validators

Step gating predicates and sign-up input validation utilities.
"""

import re
from typing import List, Optional, Sequence, Tuple

from medtrackr.onboarding.answers import AnswerStore
from medtrackr.onboarding.catalog import (
    FIELD_SPECS,
    Field,
    Requirement,
    Role,
    Step,
    get_definition,
)


INCOMPLETE_STEP_MESSAGE = "Please complete this step before continuing."

# Minimum password length accepted by the account store
MIN_PASSWORD_LENGTH = 6


def _is_filled_text(value) -> bool:
    return isinstance(value, str) and len(value.strip()) > 0


def _is_valid_choice(answer_field: Field, value) -> bool:
    return isinstance(value, str) and value in FIELD_SPECS[answer_field].options


def _is_non_empty_selection(value) -> bool:
    return isinstance(value, (tuple, list, set, frozenset)) and len(value) > 0


def _is_explicit_bool(value) -> bool:
    # None (unset) blocks; only an explicit yes or no passes
    return value is True or value is False


def can_advance(step: Step, answers: AnswerStore, role: Optional[Role] = None) -> bool:
    """Check whether the wizard may leave a step.

    Pure predicate; never raises for missing or malformed answers.

    Args:
        step: The step being left
        answers: Current answers
        role: The selected role (only checked on role selection)

    Returns:
        True if the step's requirement is met
    """
    definition = get_definition(step)
    requirement = definition.requirement

    if requirement == Requirement.NONE:
        return True
    if requirement == Requirement.ROLE:
        return role is not None

    value = answers.get(definition.required_field)
    if requirement == Requirement.TEXT:
        return _is_filled_text(value)
    if requirement == Requirement.CHOICE:
        return _is_valid_choice(definition.required_field, value)
    if requirement == Requirement.MULTI:
        return _is_non_empty_selection(value)
    if requirement == Requirement.BINARY:
        return _is_explicit_bool(value)
    return False


def missing_fields(step: Step, answers: AnswerStore, role: Optional[Role] = None) -> List[str]:
    """List what blocks a step, for status messages and logs."""
    if can_advance(step, answers, role):
        return []
    definition = get_definition(step)
    if definition.requirement == Requirement.ROLE:
        return ["role"]
    return [definition.required_field.value]


def first_incomplete_step(
    sequence: Sequence[Step],
    answers: AnswerStore,
    role: Optional[Role] = None
) -> Optional[Step]:
    """Find the first step in a sequence whose requirement is not met."""
    for step in sequence:
        if not can_advance(step, answers, role):
            return step
    return None


def validate_full_name(name: str) -> Tuple[bool, str]:
    """Validate full name is present.

    Args:
        name: The name as typed

    Returns:
        Tuple of (is_valid, message)
    """
    if not name or not name.strip():
        return False, "Full name is required"
    return True, "Valid name"


def validate_email(email: str) -> Tuple[bool, str]:
    """Validate email format.

    Args:
        email: The email to validate

    Returns:
        Tuple of (is_valid, message)
    """
    if not email:
        return False, "Email is required"

    # RFC 5322 simplified pattern
    pattern = r'^[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}$'
    if not re.match(pattern, email):
        return False, "Invalid email format"

    return True, "Valid email format"


def validate_password(password: str, confirm_password: str) -> Tuple[bool, str]:
    """Validate password and its confirmation.

    Args:
        password: The chosen password
        confirm_password: The password typed a second time

    Returns:
        Tuple of (is_valid, message)
    """
    if not password or not confirm_password:
        return False, "Password and confirmation are required"

    if password != confirm_password:
        return False, "Passwords do not match."

    if len(password) < MIN_PASSWORD_LENGTH:
        return False, f"Password must be at least {MIN_PASSWORD_LENGTH} characters"

    return True, "Valid password"
