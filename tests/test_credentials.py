"""Tests for tier detection from the Claude credentials file."""

import json

import pytest

from vibe_monitor.data.credentials import detect_tier, resolve_tier


@pytest.fixture
def credentials_file(tmp_path):
    path = tmp_path / ".credentials.json"

    def _write(data) -> object:
        path.write_text(data if isinstance(data, str) else json.dumps(data), encoding="utf-8")
        return path

    return _write


class TestDetectTier:
    def test_rate_limit_tier(self, credentials_file):
        path = credentials_file({"rate_limit_tier": "max5", "tier": "pro"})
        assert detect_tier(path) == "max5"

    def test_first_non_empty_field_wins(self, credentials_file):
        path = credentials_file({"rate_limit_tier": "", "tier": "", "plan": "max_20x"})
        assert detect_tier(path) == "max_20x"

    def test_nested_oauth_account(self, credentials_file):
        path = credentials_file({
            "claudeAiOauth": {
                "accessToken": "redacted",
                "subscriptionType": "max",
                "rateLimitTier": "default_claude_max_20x",
            }
        })
        assert detect_tier(path) == "default_claude_max_20x"

    def test_missing_file(self, tmp_path):
        assert detect_tier(tmp_path / "nope.json") is None

    def test_invalid_json(self, credentials_file):
        assert detect_tier(credentials_file("{not json")) is None

    def test_no_tier_fields(self, credentials_file):
        assert detect_tier(credentials_file({"token": "abc"})) is None

    def test_not_an_object(self, credentials_file):
        assert detect_tier(credentials_file("[1, 2]")) is None


class TestResolveTier:
    def test_explicit_tier_is_kept(self, tmp_path):
        assert resolve_tier("max_5x", tmp_path / "nope.json") == "max_5x"

    @pytest.mark.parametrize("configured", [None, "", "auto", "AUTO"])
    def test_auto_uses_credentials(self, configured, credentials_file):
        path = credentials_file({"rate_limit_tier": "max20"})
        assert resolve_tier(configured, path) == "max20"

    def test_auto_without_credentials_defaults_to_pro(self, tmp_path):
        assert resolve_tier("auto", tmp_path / "nope.json") == "pro"
