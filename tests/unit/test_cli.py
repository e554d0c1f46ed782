"""Tests for the command line interface."""

import json
from unittest.mock import AsyncMock, patch

import pytest
from click.testing import CliRunner

from runpod_assistant import cli
from runpod_assistant.config import get_settings
from runpod_assistant.models.validation import AccountInfo, ValidationError
from runpod_assistant.setup.flow import SetupCancelled, SetupFailed, SetupState


@pytest.fixture
def runner():
    return CliRunner()


class TestTiersCommand:
    def test_lists_tiers(self, runner):
        result = runner.invoke(cli.main, ["tiers"])

        assert result.exit_code == 0
        assert "glm-4.7-flash" in result.output
        assert "GLM 4.7 Flash" in result.output
        assert "Context: 198k tokens" in result.output
        assert "Cost: $0.5/M input, $0.5/M output" in result.output
        assert "1 tiers available" in result.output


class TestProviderCommand:
    def test_prints_descriptor(self, runner):
        result = runner.invoke(cli.main, ["provider"])

        assert result.exit_code == 0
        data = json.loads(result.output)
        assert data["id"] == "runpod"
        assert data["env"] == ["RUNPOD_API_KEY"]
        assert "glm-4.7-flash" in data["models"]


class TestValidateCommand:
    def test_missing_key(self, runner):
        result = runner.invoke(cli.main, ["validate"])

        assert result.exit_code == 1
        assert "RUNPOD_API_KEY is not set" in result.output

    def test_valid_key(self, runner, monkeypatch):
        monkeypatch.setenv("RUNPOD_API_KEY", "rp_key")
        get_settings.cache_clear()
        mock_validate = AsyncMock(return_value=AccountInfo("a@b.com", 0.25))

        with patch.object(cli, "validate", mock_validate):
            result = runner.invoke(cli.main, ["validate"])

        assert result.exit_code == 0
        assert "Authenticated as a@b.com" in result.output
        assert "Current spend: $0.2500/hr" in result.output
        mock_validate.assert_awaited_once_with("rp_key", "https://api.runpod.io/graphql")

    def test_invalid_key(self, runner, monkeypatch):
        monkeypatch.setenv("RUNPOD_API_KEY", "rp_key")
        get_settings.cache_clear()

        with patch.object(cli, "validate", AsyncMock(side_effect=ValidationError("bad key"))):
            result = runner.invoke(cli.main, ["validate"])

        assert result.exit_code == 1
        assert "Error: bad key" in result.output
        assert "rp_key" not in result.output


class TestSetupCommand:
    def test_successful_setup(self, runner, tmp_path):
        account = AccountInfo(email="dev@example.com")
        mock_validate = AsyncMock(return_value=account)
        with patch("runpod_assistant.setup.flow.validate", mock_validate):
            result = runner.invoke(cli.main, ["setup"], input="rp_key\n")

        assert result.exit_code == 0, result.output
        assert "Authenticated as dev@example.com" in result.output
        mock_validate.assert_awaited_once_with("rp_key")
        config_path = tmp_path / "config" / "config.json"
        assert json.loads(config_path.read_text()) == {"model": "runpod/glm-4.7-flash"}
        auth_path = tmp_path / "config" / "auth.json"
        assert json.loads(auth_path.read_text())["runpod"]["key"] == "rp_key"

    def test_failed_setup_exit_code(self, runner):
        failed = SetupFailed(SetupState.VALIDATE_CREDENTIAL, "bad key")
        with patch.object(cli.SetupFlow, "run", AsyncMock(return_value=failed)):
            result = runner.invoke(cli.main, ["setup"])

        assert result.exit_code == 1
        assert "Setup cancelled" in result.output

    def test_cancelled_setup_exit_code(self, runner):
        cancelled = SetupCancelled(SetupState.ENTER_CREDENTIAL)
        with patch.object(cli.SetupFlow, "run", AsyncMock(return_value=cancelled)):
            result = runner.invoke(cli.main, ["setup"])

        assert result.exit_code == cli.EXIT_CANCELLED

    def test_abort_at_prompt(self, runner, tmp_path):
        """Test that EOF at the key prompt cancels without writing anything."""
        result = runner.invoke(cli.main, ["setup"], input="")

        assert result.exit_code == cli.EXIT_CANCELLED
        assert not (tmp_path / "config").exists()
