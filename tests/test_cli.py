"""Tests for MedTrackr CLI."""

import json
import subprocess
import sys

import pytest
import yaml
from click.testing import CliRunner


class TestCLI:
    """Test CLI entry points and basic functionality."""

    def test_version(self):
        """Test --version flag."""
        result = subprocess.run(
            [sys.executable, "-m", "medtrackr.cli", "--version"],
            capture_output=True,
            text=True,
        )
        assert result.returncode == 0
        assert "medtrackr" in result.stdout.lower()

    def test_help(self):
        """Test --help flag."""
        result = subprocess.run(
            [sys.executable, "-m", "medtrackr.cli", "--help"],
            capture_output=True,
            text=True,
        )
        assert result.returncode == 0
        assert "MedTrackr" in result.stdout
        assert "onboard" in result.stdout
        assert "profile" in result.stdout

    def test_onboard_help(self):
        """Test onboard --help."""
        result = subprocess.run(
            [sys.executable, "-m", "medtrackr.cli", "onboard", "--help"],
            capture_output=True,
            text=True,
        )
        assert result.returncode == 0
        assert "--template" in result.stdout
        assert "--store" in result.stdout


class TestOnboardCommand:
    """Test silent onboarding through the CLI."""

    @pytest.fixture
    def env(self, tmp_path):
        return {"MEDTRACKR_HOME": str(tmp_path), "MEDTRACKR_CONFIG": "", "MEDTRACKR_DEBUG": ""}

    def _write_template(self, tmp_path, template):
        path = tmp_path / "answers.yaml"
        path.write_text(yaml.safe_dump(template))
        return path

    def test_template_onboarding(self, tmp_path, env, student_template):
        """Test a template creates the account and profile."""
        from medtrackr.cli import main

        template_path = self._write_template(tmp_path, student_template)
        store_path = tmp_path / "accounts.json"

        result = CliRunner().invoke(
            main, ["onboard", "--template", str(template_path), "--store", str(store_path)], env=env
        )

        assert result.exit_code == 0, result.output
        assert "MedTrackr is ready for you!" in result.output
        data = json.loads(store_path.read_text())
        profile = next(iter(data["profiles"].values()))
        assert profile["email"] == "ada@example.com"
        assert profile["onboarding_responses"]["derived_flags"]["exam_prompt_shown"] is True

    def test_template_duplicate_account(self, tmp_path, env, student_template):
        """Test a second run for the same email exits with the duplicate code."""
        from medtrackr.cli import main

        template_path = self._write_template(tmp_path, student_template)
        args = ["onboard", "--template", str(template_path), "--store", str(tmp_path / "accounts.json")]

        assert CliRunner().invoke(main, args, env=env).exit_code == 0
        result = CliRunner().invoke(main, args, env=env)

        assert result.exit_code == 20
        assert "already exists" in result.output

    def test_template_malformed_answers(self, tmp_path, env, student_template):
        """Test a list where a mapping belongs exits with the validation code."""
        from medtrackr.cli import main

        student_template["answers"] = ["university: UNILAG"]
        template_path = self._write_template(tmp_path, student_template)

        result = CliRunner().invoke(main, ["onboard", "--template", str(template_path)], env=env)

        assert result.exit_code == 14
        assert "To fix:" in result.output
        assert result.exception is None or isinstance(result.exception, SystemExit)

    def test_template_validation_error(self, tmp_path, env, student_template):
        from medtrackr.cli import main

        student_template["answers"]["level"] = "Year Zero"
        template_path = self._write_template(tmp_path, student_template)

        result = CliRunner().invoke(main, ["onboard", "--template", str(template_path)], env=env)

        assert result.exit_code == 14
        assert not (tmp_path / "accounts.json").exists()

    def test_template_unreadable_yaml(self, tmp_path, env):
        from medtrackr.cli import main

        path = tmp_path / "answers.yaml"
        path.write_text("role: [unclosed\n")

        result = CliRunner().invoke(main, ["onboard", "--template", str(path)], env=env)

        assert result.exit_code == 1
        assert "Error loading template" in result.output


class TestProfileAndConfigCommands:
    """Test profile show and config show."""

    @pytest.fixture
    def env(self, tmp_path):
        return {"MEDTRACKR_HOME": str(tmp_path), "MEDTRACKR_CONFIG": "", "MEDTRACKR_DEBUG": ""}

    def test_profile_show(self, tmp_path, env, student_template):
        from medtrackr.cli import main

        template_path = tmp_path / "answers.yaml"
        template_path.write_text(yaml.safe_dump(student_template))
        runner = CliRunner()
        runner.invoke(main, ["onboard", "--template", str(template_path)], env=env)

        result = runner.invoke(main, ["profile", "show", "ada@example.com", "--password", "secret123", "--json"], env=env)

        assert result.exit_code == 0, result.output
        assert json.loads(result.output)["full_name"] == "Ada Obi"

    def test_profile_show_wrong_password(self, tmp_path, env, student_template):
        """Test the stored profile is only shown for the right password."""
        from medtrackr.cli import main

        template_path = tmp_path / "answers.yaml"
        template_path.write_text(yaml.safe_dump(student_template))
        runner = CliRunner()
        runner.invoke(main, ["onboard", "--template", str(template_path)], env=env)

        result = runner.invoke(main, ["profile", "show", "ada@example.com", "--json"], input="wrong-pass\n", env=env)

        assert result.exit_code == 21
        assert "Incorrect password" in result.output
        assert "Ada Obi" not in result.output

    def test_profile_show_missing(self, env):
        from medtrackr.cli import main

        result = CliRunner().invoke(main, ["profile", "show", "nobody@example.com", "--password", "secret123"], env=env)

        assert result.exit_code == 1
        assert "No profile found" in result.output

    def test_config_show_json(self, tmp_path, env):
        from medtrackr.cli import main

        (tmp_path / "config.yaml").write_text("smart_logic:\n  surgical_rotation: Emergency\n")

        result = CliRunner().invoke(main, ["config", "show", "--json"], env=env)

        assert result.exit_code == 0, result.output
        data = json.loads(result.output)
        assert data["smart_logic"]["surgical_rotation"] == "Emergency"
        assert data["store_path"] == str(tmp_path / "accounts.json")

    def test_config_show_invalid(self, tmp_path, env):
        from medtrackr.cli import main

        (tmp_path / "config.yaml").write_text("colour: blue\n")

        result = CliRunner().invoke(main, ["config", "show"], env=env)

        assert result.exit_code == 10
