"""Tests for MedTrackr exceptions."""

import pytest


class TestMedTrackrExceptions:
    """Test custom exception types."""

    def test_base_error_message(self):
        """Test base MedTrackrError with message only."""
        from medtrackr.onboarding.exceptions import MedTrackrError

        error = MedTrackrError("Something went wrong")
        assert error.message == "Something went wrong"
        assert error.remediation is None
        assert error.details is None
        assert str(error) == "Something went wrong"

    def test_base_error_with_remediation_and_details(self):
        from medtrackr.onboarding.exceptions import MedTrackrError

        error = MedTrackrError(
            "Something went wrong",
            remediation="Try again later",
            details="Connection reset"
        )
        assert "Details: Connection reset" in str(error)
        assert "To fix: Try again later" in str(error)

    def test_config_error(self):
        """Test ConfigError points at the setting."""
        from medtrackr.onboarding.exceptions import ConfigError

        error = ConfigError("Invalid configuration", config_key="smart_logic.terminal_level")
        assert error.config_key == "smart_logic.terminal_level"
        assert "smart_logic.terminal_level" in str(error)
        assert "config.yaml" in str(error)

    def test_validation_error(self):
        """Test ValidationError with field and format."""
        from medtrackr.onboarding.exceptions import ValidationError

        error = ValidationError("Invalid email format", field="email", expected_format="name@example.com")
        assert error.field == "email"
        assert "name@example.com" in str(error)

    def test_persistence_error_keeps_answers_hint(self):
        from medtrackr.onboarding.exceptions import PersistenceError

        error = PersistenceError("Profile write failed", stage="write_profile")
        assert error.stage == "write_profile"
        assert "answers have been kept" in error.remediation

    def test_account_exists_error(self):
        from medtrackr.onboarding.exceptions import AccountExistsError, PersistenceError

        error = AccountExistsError(email="ada@example.com")
        assert isinstance(error, PersistenceError)
        assert error.email == "ada@example.com"
        assert error.stage == "create_account"
        assert "already exists" in error.message

    def test_network_error_has_no_stage_by_default(self):
        from medtrackr.onboarding.exceptions import NetworkError

        error = NetworkError()
        assert error.stage is None
        assert "internet connection" in error.remediation

    def test_permission_denied_error(self):
        from medtrackr.onboarding.exceptions import PermissionDeniedError

        assert PermissionDeniedError().stage == "write_profile"

    def test_finalize_in_progress_error(self):
        from medtrackr.onboarding.exceptions import FinalizeInProgressError

        error = FinalizeInProgressError()
        assert error.message == "Account setup is already in progress"
        assert error.remediation


class TestErrorCodes:
    """Test CLI exit code mapping."""

    @pytest.mark.parametrize("name,code", [
        ("ConfigError", 10),
        ("NetworkError", 13),
        ("AccountExistsError", 20),
        ("InvalidCredentialsError", 21),
        ("PermissionDeniedError", 22),
        ("FinalizeInProgressError", 24),
    ])
    def test_specific_codes(self, name, code):
        from medtrackr.onboarding import exceptions

        error_type = getattr(exceptions, name)
        error = error_type("boom") if name == "ConfigError" else error_type()
        assert exceptions.get_error_code(error) == code

    def test_validation_and_persistence_codes(self):
        from medtrackr.onboarding.exceptions import PersistenceError, ValidationError, get_error_code

        assert get_error_code(ValidationError("bad")) == 14
        assert get_error_code(PersistenceError("failed")) == 23

    def test_unknown_error_code(self):
        from medtrackr.onboarding.exceptions import get_error_code

        assert get_error_code(RuntimeError("boom")) == 1
