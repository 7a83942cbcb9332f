"""Tests for common.config module."""

from pathlib import Path

import pytest

from common.config import (
    CONFIG_DIR,
    ProfileConfig,
    SummarizerConfig,
    find_config_path,
    load_config,
    parse_config,
)
from common.errors import ConfigError


class TestFindConfigPath:
    def test_named_config_in_config_dir(self) -> None:
        assert find_config_path("prod") == CONFIG_DIR / "prod.yaml"

    def test_env_var_used_when_name_missing(self, monkeypatch) -> None:
        monkeypatch.setenv("DIGEST_CONFIG", "test")
        assert find_config_path(None) == CONFIG_DIR / "test.yaml"

    def test_explicit_path(self, tmp_path: Path) -> None:
        path = tmp_path / "custom.yaml"
        path.write_text("profiles: {}\n")
        assert find_config_path(str(path)) == path

    def test_missing_config_raises(self) -> None:
        with pytest.raises(FileNotFoundError):
            find_config_path("does-not-exist")


class TestProfileConfig:
    def test_defaults_derived_from_name(self) -> None:
        profile = ProfileConfig(name="gcp", feed_url="https://example.com/rss", channels=["Security"])
        assert profile.active_table == "GCP"
        assert profile.archive_table == "GCP Old"
        assert profile.video_table == "GCP Video Overview"
        assert profile.status_table == "GCP Status"
        assert profile.recipients_list == "GCP"
        assert profile.document_title_prefix == "Noticias GCP - "
        assert profile.max_per_channel == 10
        assert profile.link_position == 2
        assert profile.archive_failed_articles is True

    def test_explicit_tables_kept(self) -> None:
        profile = ProfileConfig(
            name="gcp",
            feed_url="https://example.com/rss",
            channels=["Security"],
            active_table="Inbox",
            archive_table="Done",
        )
        assert profile.active_table == "Inbox"
        assert profile.archive_table == "Done"

    def test_requires_channels(self) -> None:
        with pytest.raises(ConfigError):
            ProfileConfig(name="gcp", feed_url="https://example.com/rss", channels=[])

    def test_requires_positive_cap(self) -> None:
        with pytest.raises(ConfigError):
            ProfileConfig(name="gcp", feed_url="https://example.com/rss", channels=["A"], max_per_channel=0)


class TestSummarizerConfig:
    def test_defaults(self) -> None:
        config = SummarizerConfig()
        assert config.max_retries == 3
        assert config.base_backoff_ms == 1000
        assert config.min_content_length == 100
        assert config.max_content_length == 300_000

    def test_rejects_zero_retries(self) -> None:
        with pytest.raises(ConfigError):
            SummarizerConfig(max_retries=0)


class TestParseConfig:
    def test_channel_catalog_by_name(self) -> None:
        config = parse_config({"profiles": {"gws": {"feed_url": "https://example.com/atom", "channels": "gws"}}})
        assert "Gmail" in config.profile("gws").channels

    def test_explicit_channel_list(self) -> None:
        config = parse_config(
            {"profiles": {"blog": {"feed_url": "https://example.com/rss", "channels": ["One", "Two"]}}}
        )
        assert config.profile("blog").channels == ["One", "Two"]

    def test_unknown_catalog_raises(self) -> None:
        with pytest.raises(ConfigError):
            parse_config({"profiles": {"x": {"feed_url": "https://example.com/rss", "channels": "nope"}}})

    def test_unknown_profile_raises(self) -> None:
        config = parse_config({"profiles": {}})
        with pytest.raises(ConfigError):
            config.profile("gcp")


class TestLoadConfig:
    def test_prod_profiles(self) -> None:
        config = load_config("prod")
        gcp = config.profile("gcp")
        gws = config.profile("gws")
        assert len(gcp.channels) == 43
        assert len(gws.channels) == 45
        assert gws.exclude_title_patterns == ["Weekly Recap"]
        assert config.summarizer.model == "gemini-2.5-flash"

    def test_test_config_disables_throttle(self) -> None:
        config = load_config("test")
        assert config.summarizer.throttle_seconds == 0
        assert config.profile("gcp").recipients_list == "Testing"
