"""
Account/Profile Store Interface

Boundary contract between the onboarding wizard and the account backend.
"""

from abc import ABC, abstractmethod

from medtrackr.onboarding.aggregator import OnboardingResponse
from medtrackr.onboarding.credentials import Credentials


class AccountProfileStore(ABC):
    """Account backend consumed by the wizard at finalize.

    Implementations raise the ``PersistenceError`` subclasses from
    ``medtrackr.onboarding.exceptions``: ``AccountExistsError``,
    ``InvalidCredentialsError``, ``NetworkError`` or
    ``PermissionDeniedError``.
    """

    @abstractmethod
    async def create_account(self, email: str, password: str) -> str:
        """Create an account and return its id."""

    @abstractmethod
    async def set_display_name(self, account_id: str, full_name: str) -> None:
        """Set the account's display name."""

    @abstractmethod
    async def write_profile(
        self,
        account_id: str,
        credentials: Credentials,
        response: OnboardingResponse
    ) -> None:
        """Write the onboarding profile document for an account."""
