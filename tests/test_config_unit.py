"""Unit tests for configuration management."""

import os
from unittest.mock import patch

import pytest

from trends_bot.config import Config, FeedConfig, SlackConfig
from trends_bot.errors import ConfigurationError


class TestConfigUnit:
    """Unit tests for Config class."""

    def test_defaults_when_no_env_vars(self):
        """Test the defaults applied to an empty environment."""
        with patch.dict(os.environ, {}, clear=True):
            config = Config()

        assert config.slack_token == ""
        assert config.slack_secret_name == ""
        assert config.aws_region == "us-east-1"
        assert config.region_extraction == "mention"
        assert config.attachment_style == "rich"
        assert config.http_timeout == 10.0
        assert config.get_feed_config() == FeedConfig(
            url_template="https://trends.google.com/trending/rss?geo={region}",
            filter_to_today=False,
            timeout=10.0,
        )

    def test_env_overrides(self):
        """Test that every setting is read from the environment."""
        env = {
            "OAUTH_ACCESS_TOKEN": " xoxb-123 ",
            "SLACK_POST_URL": "https://slack.example.com/post",
            "FEED_URL_TEMPLATE": "https://trends.example.com/rss?geo={region}",
            "FILTER_TO_TODAY": "true",
            "REGION_EXTRACTION": "TEXT",
            "ATTACHMENT_STYLE": "minimal",
            "HTTP_TIMEOUT": "2.5",
            "CURRENT_AWS_REGION": "eu-west-1",
        }
        with patch.dict(os.environ, env, clear=True):
            config = Config()

        assert config.slack_token == "xoxb-123"
        assert config.region_extraction == "text"
        assert config.attachment_style == "minimal"
        assert config.aws_region == "eu-west-1"
        assert config.get_feed_config() == FeedConfig(
            url_template="https://trends.example.com/rss?geo={region}",
            filter_to_today=True,
            timeout=2.5,
        )
        assert config.get_slack_config(config.slack_token) == SlackConfig(
            bot_token="xoxb-123",
            post_url="https://slack.example.com/post",
            timeout=2.5,
        )

    @pytest.mark.parametrize(
        "env",
        [
            {"HTTP_TIMEOUT": "soon"},
            {"HTTP_TIMEOUT": "0"},
            {"REGION_EXTRACTION": "regex"},
            {"ATTACHMENT_STYLE": "fancy"},
            {"FEED_URL_TEMPLATE": "https://trends.example.com/rss"},
        ],
    )
    def test_invalid_values_fail_fast(self, env):
        """Test that invalid settings raise at construction."""
        with patch.dict(os.environ, env, clear=True):
            with pytest.raises(ConfigurationError):
                Config()

    @pytest.mark.parametrize("token", ["", "   "])
    def test_empty_token_rejected(self, token):
        """Test that a Slack config cannot be built without a token."""
        with patch.dict(os.environ, {}, clear=True):
            config = Config()

        with pytest.raises(ConfigurationError, match="OAUTH_ACCESS_TOKEN is empty"):
            config.get_slack_config(token)

    def test_slack_config_is_immutable(self):
        """Test that the credential cannot be changed after startup."""
        slack_config = SlackConfig(bot_token="xoxb-123")

        with pytest.raises(AttributeError):
            slack_config.bot_token = "other"
