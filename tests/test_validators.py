"""Tests for MedTrackr onboarding validators."""

import pytest


class TestCanAdvance:
    """Test the step gating predicate."""

    def test_role_selection_requires_role(self):
        """Test role selection blocks until a role is chosen."""
        from medtrackr.onboarding.answers import AnswerStore
        from medtrackr.onboarding.catalog import Role, Step
        from medtrackr.onboarding.validators import can_advance

        assert can_advance(Step.ROLE_SELECTION, AnswerStore()) is False
        assert can_advance(Step.ROLE_SELECTION, AnswerStore(), Role.INTERN) is True

    @pytest.mark.parametrize("value", [None, "", "   ", 42])
    def test_text_step_blocks_blank(self, value):
        """Test free-text steps block on blank or missing input."""
        from medtrackr.onboarding.answers import AnswerStore
        from medtrackr.onboarding.catalog import Field, Step
        from medtrackr.onboarding.validators import can_advance

        answers = AnswerStore()
        if value is not None:
            answers.set(Field.UNIVERSITY, value)
        assert can_advance(Step.STUDENT_UNIVERSITY, answers) is False

    def test_text_step_passes(self):
        from medtrackr.onboarding.answers import AnswerStore
        from medtrackr.onboarding.catalog import Field, Step
        from medtrackr.onboarding.validators import can_advance

        answers = AnswerStore({Field.SPECIALTY: " Cardiology "})
        assert can_advance(Step.WORKER_SPECIALTY, answers) is True

    def test_choice_step_requires_known_option(self):
        """Test single-choice steps only accept values from the option set."""
        from medtrackr.onboarding.answers import AnswerStore
        from medtrackr.onboarding.catalog import Field, Step
        from medtrackr.onboarding.validators import can_advance

        answers = AnswerStore({Field.LEVEL: "Year Zero"})
        assert can_advance(Step.STUDENT_LEVEL, answers) is False

        answers.set(Field.LEVEL, "300 Level")
        assert can_advance(Step.STUDENT_LEVEL, answers) is True

    @pytest.mark.parametrize("value", [None, (), []])
    def test_multi_step_blocks_empty(self, value):
        """Test multi-choice steps block on an empty selection."""
        from medtrackr.onboarding.answers import AnswerStore
        from medtrackr.onboarding.catalog import Field, Step
        from medtrackr.onboarding.validators import can_advance

        answers = AnswerStore({Field.STUDY_PREFERENCES: value})
        assert can_advance(Step.STUDY_PREFERENCE, answers) is False

    def test_multi_step_passes(self):
        from medtrackr.onboarding.answers import AnswerStore
        from medtrackr.onboarding.catalog import Field, Step
        from medtrackr.onboarding.validators import can_advance

        answers = AnswerStore({Field.TRACKING_PREFERENCES: ("Procedures",)})
        assert can_advance(Step.INTERN_TRACKING, answers) is True

    @pytest.mark.parametrize("value", [None, "yes", 0, 1])
    def test_binary_step_blocks_unset(self, value):
        """Test binary steps need an explicit True or False."""
        from medtrackr.onboarding.answers import AnswerStore
        from medtrackr.onboarding.catalog import Field, Step
        from medtrackr.onboarding.validators import can_advance

        answers = AnswerStore({Field.ENABLE_NOTIFICATIONS: value})
        assert can_advance(Step.NOTIFICATIONS, answers) is False

    @pytest.mark.parametrize("value", [True, False])
    def test_binary_step_passes(self, value):
        """Test that False is as valid an answer as True."""
        from medtrackr.onboarding.answers import AnswerStore
        from medtrackr.onboarding.catalog import Field, Step
        from medtrackr.onboarding.validators import can_advance

        answers = AnswerStore({Field.TRACK_ON_CALL_HOURS: value})
        assert can_advance(Step.WORKER_ON_CALL, answers) is True

    @pytest.mark.parametrize("step", [
        "STUDENT_CALENDAR", "STUDENT_EXTRA", "INTERN_EXTRA", "CALENDAR_SYNC", "SUMMARY",
    ])
    def test_optional_steps_always_pass(self, step):
        """Test steps without required input never block."""
        from medtrackr.onboarding.answers import AnswerStore
        from medtrackr.onboarding.catalog import Step
        from medtrackr.onboarding.validators import can_advance

        assert can_advance(Step[step], AnswerStore()) is True


class TestMissingFields:
    """Test missing field reporting."""

    def test_reports_required_field(self):
        from medtrackr.onboarding.answers import AnswerStore
        from medtrackr.onboarding.catalog import Step
        from medtrackr.onboarding.validators import missing_fields

        assert missing_fields(Step.INTERN_ROTATION, AnswerStore()) == ["rotation"]
        assert missing_fields(Step.ROLE_SELECTION, AnswerStore()) == ["role"]

    def test_complete_step_reports_nothing(self):
        from medtrackr.onboarding.answers import AnswerStore
        from medtrackr.onboarding.catalog import Step
        from medtrackr.onboarding.validators import missing_fields

        assert missing_fields(Step.SUMMARY, AnswerStore()) == []

    def test_first_incomplete_step(self):
        """Test finding the first blocking step in a sequence."""
        from medtrackr.onboarding.answers import AnswerStore
        from medtrackr.onboarding.catalog import Field, Role, Step
        from medtrackr.onboarding.sequencer import compute_sequence
        from medtrackr.onboarding.validators import first_incomplete_step

        answers = AnswerStore({Field.SPECIALTY: "Cardiology"})
        sequence = compute_sequence(Role.WORKER)
        assert first_incomplete_step(sequence, answers, Role.WORKER) == Step.WORKER_LEARNING


class TestSignUpValidators:
    """Test sign-up input validation functions."""

    def test_validate_email_valid(self):
        from medtrackr.onboarding.validators import validate_email

        valid, msg = validate_email("ada@example.com")
        assert valid is True

    def test_validate_email_invalid(self):
        from medtrackr.onboarding.validators import validate_email

        valid, msg = validate_email("not-an-email")
        assert valid is False
        assert "Invalid" in msg

    def test_validate_email_empty(self):
        from medtrackr.onboarding.validators import validate_email

        valid, msg = validate_email("")
        assert valid is False
        assert "required" in msg

    def test_validate_full_name(self):
        from medtrackr.onboarding.validators import validate_full_name

        assert validate_full_name("Ada Obi")[0] is True
        assert validate_full_name("   ")[0] is False

    def test_validate_password_mismatch(self):
        """Test mismatched confirmation."""
        from medtrackr.onboarding.validators import validate_password

        valid, msg = validate_password("secret123", "secret124")
        assert valid is False
        assert msg == "Passwords do not match."

    def test_validate_password_too_short(self):
        from medtrackr.onboarding.validators import validate_password

        valid, msg = validate_password("abc", "abc")
        assert valid is False
        assert "6" in msg

    def test_validate_password_valid(self):
        from medtrackr.onboarding.validators import validate_password

        valid, msg = validate_password("secret123", "secret123")
        assert valid is True
