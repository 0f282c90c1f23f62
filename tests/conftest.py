"""Shared fixtures for MedTrackr tests."""

import asyncio
from typing import Dict, List, Optional

import pytest

from medtrackr.onboarding.credentials import Credentials
from medtrackr.onboarding.exceptions import PersistenceError
from medtrackr.onboarding.store import AccountProfileStore


class FakeProfileStore(AccountProfileStore):
    """In-memory store that records calls and can fail or block on demand."""

    def __init__(self):
        self.calls: List[str] = []
        self.accounts: Dict[str, str] = {}
        self.display_names: Dict[str, str] = {}
        self.profiles: Dict[str, dict] = {}
        # stage name -> exception raised once on the next call
        self.failures: Dict[str, Exception] = {}
        self.gate: Optional[asyncio.Event] = None

    def fail_once(self, stage: str, error: Optional[Exception] = None):
        self.failures[stage] = error or PersistenceError(f"{stage} failed")

    def _maybe_fail(self, stage: str):
        self.calls.append(stage)
        error = self.failures.pop(stage, None)
        if error is not None:
            raise error

    async def create_account(self, email: str, password: str) -> str:
        if self.gate is not None:
            await self.gate.wait()
        self._maybe_fail("create_account")
        account_id = f"acct-{len(self.accounts) + 1}"
        self.accounts[account_id] = email
        return account_id

    async def set_display_name(self, account_id: str, full_name: str) -> None:
        self._maybe_fail("set_display_name")
        self.display_names[account_id] = full_name

    async def write_profile(self, account_id, credentials, response) -> None:
        self._maybe_fail("write_profile")
        self.profiles[account_id] = {
            "full_name": credentials.full_name,
            "email": credentials.email,
            "onboarding_responses": response.to_dict(),
        }


@pytest.fixture
def credentials():
    return Credentials(full_name="Ada Obi", email="ada@example.com", password="secret123")


@pytest.fixture
def fake_store():
    return FakeProfileStore()


@pytest.fixture
def controller(credentials, fake_store):
    from medtrackr.onboarding.controller import WizardController

    return WizardController(credentials, fake_store)


@pytest.fixture
def student_template():
    """Answers template for a final-year student."""
    return {
        "credentials": {
            "full_name": "  Ada Obi ",
            "email": "Ada@Example.com",
            "password": "secret123",
        },
        "role": "student",
        "answers": {
            "university": "University of Lagos",
            "level": "Final Year",
            "preparing_for_mb_exam": True,
            "core_subjects": ["Anatomy", "Physiology", "Biochemistry", "Pathology", "Surgery"],
            "calendar_sync": "Skip for now",
            "enable_notifications": True,
            "study_preferences": ["Pomodoro"],
            "enable_ai_quizzes": True,
        },
    }
