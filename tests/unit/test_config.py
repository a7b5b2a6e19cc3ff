"""Tests for FEEDWATCH_* environment configuration loading."""

from __future__ import annotations

import os

import pytest

from feedwatch.config import load_config
from feedwatch.models.config import FeedWatchConfig


class TestLoadConfig:
    def test_defaults_match_dataclass_defaults(self, monkeypatch: pytest.MonkeyPatch) -> None:
        for key in list(os.environ):
            if key.startswith("FEEDWATCH_"):
                monkeypatch.delenv(key)

        assert load_config() == FeedWatchConfig()

    def test_reads_environment(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("FEEDWATCH_ITERATIONS", "5")
        monkeypatch.setenv("FEEDWATCH_INTERVAL_SECONDS", "2.5")
        monkeypatch.setenv("FEEDWATCH_ID_FIELD", "post.id")
        monkeypatch.setenv("FEEDWATCH_TAG_ATTACHMENT_KIND", "sora")
        monkeypatch.setenv("FEEDWATCH_TAG_ATTACHMENTS_PATH", "post.attachments")
        monkeypatch.setenv("FEEDWATCH_SUMMARY_TEXT_LENGTH", "40")
        monkeypatch.setenv("FEEDWATCH_REPORT_WEBHOOK_URL", "https://hooks.example.com/feed")
        monkeypatch.setenv("FEEDWATCH_LOG_LEVEL", "DEBUG")

        config = load_config()

        assert config.monitor.iterations == 5
        assert config.monitor.interval_seconds == 2.5
        assert config.items.id_field == "post.id"
        assert config.items.summary_text_length == 40
        assert config.tagging.attachment_kind == "sora"
        assert config.tagging.attachments_path == "post.attachments"
        assert config.sink.webhook_url == "https://hooks.example.com/feed"
        assert config.log.level == "debug"

    def test_iterations_are_clamped(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("FEEDWATCH_ITERATIONS", "0")
        assert load_config().monitor.iterations == 1

        monkeypatch.setenv("FEEDWATCH_ITERATIONS", "999999")
        assert load_config().monitor.iterations == 10000

    def test_negative_interval_is_rejected(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("FEEDWATCH_INTERVAL_SECONDS", "-1")
        with pytest.raises(ValueError, match="Invalid interval"):
            load_config()

    def test_invalid_log_level_is_rejected(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("FEEDWATCH_LOG_LEVEL", "verbose")
        with pytest.raises(ValueError, match="Invalid log level"):
            load_config()

    def test_empty_id_field_falls_back_to_id(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("FEEDWATCH_ID_FIELD", "")
        assert load_config().items.id_field == "id"

    def test_log_json_flag(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("FEEDWATCH_LOG_JSON", "false")
        assert load_config().log.json is False

        monkeypatch.setenv("FEEDWATCH_LOG_JSON", "1")
        assert load_config().log.json is True

    def test_summary_posted_at_field(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("FEEDWATCH_SUMMARY_POSTED_AT_FIELD", "created_at")
        assert load_config().items.summary_posted_at_field == "created_at"

    def test_non_numeric_value_names_the_variable(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("FEEDWATCH_ITERATIONS", "ten")
        with pytest.raises(ValueError, match="FEEDWATCH_ITERATIONS"):
            load_config()

    def test_negative_webhook_timeout_is_rejected(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("FEEDWATCH_REPORT_WEBHOOK_TIMEOUT", "-5")
        with pytest.raises(ValueError, match="FEEDWATCH_REPORT_WEBHOOK_TIMEOUT"):
            load_config()

    def test_blank_field_paths_fall_back_to_defaults(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("FEEDWATCH_SUMMARY_TEXT_FIELD", "  ")
        monkeypatch.setenv("FEEDWATCH_TAG_ATTACHMENTS_PATH", "")
        config = load_config()
        assert config.items.summary_text_field == "text"
        assert config.tagging.attachments_path == "attachments"
