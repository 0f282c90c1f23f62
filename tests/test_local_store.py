"""Tests for the JSON file account/profile store."""

import json
import os
import sys

import pytest


def _response():
    from medtrackr.onboarding.aggregator import aggregate
    from medtrackr.onboarding.answers import AnswerStore
    from medtrackr.onboarding.catalog import Field, Role
    from medtrackr.onboarding.smart_logic import derive

    answers = AnswerStore({
        Field.SPECIALTY: "Cardiology",
        Field.LEARNING_FOCUS: ("Research",),
        Field.TRACK_ON_CALL_HOURS: True,
        Field.ENABLE_NOTIFICATIONS: True,
        Field.STUDY_PREFERENCES: ("Mixed style",),
        Field.ENABLE_AI_QUIZZES: True,
    })
    return aggregate(Role.WORKER, answers, derive(Role.WORKER, answers))


class TestLocalProfileStore:
    """Test LocalProfileStore persistence stages."""

    @pytest.fixture
    def store(self, tmp_path):
        from medtrackr.onboarding.local_store import LocalProfileStore

        return LocalProfileStore(tmp_path / "accounts.json")

    @pytest.mark.asyncio
    async def test_full_persist(self, store, credentials):
        """Test account, display name and profile land in the file."""
        account_id = await store.create_account("Ada@Example.com", "secret123")
        await store.set_display_name(account_id, credentials.full_name)
        await store.write_profile(account_id, credentials, _response())

        data = json.loads(store.path.read_text())
        account = data["accounts"][account_id]
        assert account["email"] == "ada@example.com"
        assert account["display_name"] == "Ada Obi"
        assert account["password_hash"] != "secret123"

        profile = data["profiles"][account_id]
        assert profile["onboarding_completed"] is True
        assert profile["role"] == "WORKER"
        assert profile["onboarding_responses"]["worker_details"]["specialty"] == "Cardiology"
        assert profile["onboarding_responses"]["student_details"] is None

    @pytest.mark.asyncio
    async def test_duplicate_email(self, store):
        from medtrackr.onboarding.exceptions import AccountExistsError

        await store.create_account("ada@example.com", "secret123")
        with pytest.raises(AccountExistsError) as exc_info:
            await store.create_account("ADA@example.com", "another1")
        assert exc_info.value.stage == "create_account"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("email,password", [
        ("not-an-email", "secret123"),
        ("ada@example.com", "abc"),
    ])
    async def test_invalid_credentials(self, store, email, password):
        from medtrackr.onboarding.exceptions import InvalidCredentialsError

        with pytest.raises(InvalidCredentialsError):
            await store.create_account(email, password)
        assert not store.path.exists()

    @pytest.mark.asyncio
    async def test_unknown_account_denied(self, store, credentials):
        from medtrackr.onboarding.exceptions import PermissionDeniedError

        with pytest.raises(PermissionDeniedError) as exc_info:
            await store.write_profile("missing", credentials, _response())
        assert exc_info.value.stage == "write_profile"

        with pytest.raises(PermissionDeniedError) as exc_info:
            await store.set_display_name("missing", "Ada")
        assert exc_info.value.stage == "set_display_name"

    @pytest.mark.asyncio
    async def test_rewrite_keeps_created_at(self, store, credentials):
        """Test writing a profile twice keeps its creation time."""
        account_id = await store.create_account(credentials.email, credentials.password)
        await store.write_profile(account_id, credentials, _response())
        first = store.get_profile(credentials.email)

        await store.write_profile(account_id, credentials, _response())
        second = store.get_profile(credentials.email)

        assert second["created_at"] == first["created_at"]
        assert second["updated_at"] >= first["updated_at"]

    @pytest.mark.asyncio
    async def test_verify_login(self, store):
        await store.create_account("ada@example.com", "secret123")

        assert store.verify_login("Ada@example.com", "secret123") is True
        assert store.verify_login("ada@example.com", "wrong-pass") is False
        assert store.verify_login("nobody@example.com", "secret123") is False

    def test_get_profile_missing(self, store):
        assert store.get_profile("nobody@example.com") is None

    @pytest.mark.asyncio
    async def test_corrupt_file(self, store):
        from medtrackr.onboarding.exceptions import PersistenceError

        store.path.write_text("{not json")
        with pytest.raises(PersistenceError) as exc_info:
            await store.create_account("ada@example.com", "secret123")
        assert exc_info.value.stage == "create_account"

    @pytest.mark.asyncio
    @pytest.mark.skipif(sys.platform == "win32" or os.geteuid() == 0, reason="needs POSIX permissions as non-root")
    async def test_unwritable_file(self, store):
        from medtrackr.onboarding.exceptions import PermissionDeniedError

        store.path.write_text(json.dumps({"accounts": {}, "profiles": {}}))
        store.path.chmod(0o400)
        try:
            with pytest.raises(PermissionDeniedError):
                await store.create_account("ada@example.com", "secret123")
        finally:
            store.path.chmod(0o600)


class TestPasswordHashing:
    """Test passlib hashing helpers."""

    def test_hash_and_verify(self):
        from medtrackr.onboarding.local_store import hash_password, verify_password

        hashed = hash_password("secret123")
        assert hashed.startswith("$pbkdf2-sha256$")
        assert verify_password("secret123", hashed) is True
        assert verify_password("secret124", hashed) is False

    def test_hash_is_masked_in_logs(self):
        from medtrackr.onboarding.local_store import hash_password
        from medtrackr.onboarding.ui import mask_secrets

        hashed = hash_password("secret123")
        assert hashed not in mask_secrets(f"stored {hashed}")
