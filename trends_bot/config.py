"""Configuration management for Trends Slack Bot."""

import os
from dataclasses import dataclass

from .errors import ConfigurationError


@dataclass(frozen=True)
class SlackConfig:
    """Configuration for the Slack Web API."""

    bot_token: str
    post_url: str = "https://slack.com/api/chat.postMessage"
    timeout: float = 10.0

    def __repr__(self) -> str:
        # Keep the token out of logs and tracebacks
        return f"SlackConfig(post_url={self.post_url!r}, timeout={self.timeout!r})"


@dataclass(frozen=True)
class FeedConfig:
    """Configuration for the Google Trends RSS feed."""

    url_template: str = "https://trends.google.com/trending/rss?geo={region}"
    filter_to_today: bool = False
    timeout: float = 10.0


class Config:
    """Main configuration manager."""

    REGION_EXTRACTION_CHOICES = ("mention", "text")
    ATTACHMENT_STYLE_CHOICES = ("rich", "minimal")

    def __init__(self):
        """Initialize configuration from environment variables."""
        self.slack_token = os.getenv("OAUTH_ACCESS_TOKEN", "").strip()
        self.slack_secret_name = os.getenv("SLACK_SECRET_NAME", "").strip()
        self.aws_region = os.getenv(
            "CURRENT_AWS_REGION", os.getenv("AWS_DEFAULT_REGION", "us-east-1")
        )
        self.slack_post_url = os.getenv(
            "SLACK_POST_URL", "https://slack.com/api/chat.postMessage"
        )
        self.feed_url_template = os.getenv(
            "FEED_URL_TEMPLATE", FeedConfig.url_template
        )
        self.filter_to_today = _parse_bool(os.getenv("FILTER_TO_TODAY", "false"))
        self.region_extraction = os.getenv("REGION_EXTRACTION", "mention").strip().lower()
        self.attachment_style = os.getenv("ATTACHMENT_STYLE", "rich").strip().lower()
        self.http_timeout = _parse_timeout(os.getenv("HTTP_TIMEOUT", "10"))
        self.log_level = os.getenv("LOG_LEVEL", "INFO")

        if "{region}" not in self.feed_url_template:
            raise ConfigurationError(
                "FEED_URL_TEMPLATE must contain a {region} placeholder"
            )
        if self.region_extraction not in self.REGION_EXTRACTION_CHOICES:
            raise ConfigurationError(
                f"Unknown REGION_EXTRACTION: {self.region_extraction}"
            )
        if self.attachment_style not in self.ATTACHMENT_STYLE_CHOICES:
            raise ConfigurationError(
                f"Unknown ATTACHMENT_STYLE: {self.attachment_style}"
            )

    def get_slack_config(self, bot_token: str) -> SlackConfig:
        """Get Slack configuration.

        The token is resolved once at startup (environment or Secrets Manager)
        and passed in here so the resulting config stays immutable.
        """
        if not bot_token or not bot_token.strip():
            raise ConfigurationError("OAUTH_ACCESS_TOKEN is empty")
        return SlackConfig(
            bot_token=bot_token.strip(),
            post_url=self.slack_post_url,
            timeout=self.http_timeout,
        )

    def get_feed_config(self) -> FeedConfig:
        """Get feed configuration."""
        return FeedConfig(
            url_template=self.feed_url_template,
            filter_to_today=self.filter_to_today,
            timeout=self.http_timeout,
        )


def _parse_bool(value: str) -> bool:
    return value.strip().lower() in ("1", "true", "yes", "on")


def _parse_timeout(value: str) -> float:
    try:
        timeout = float(value)
    except ValueError as e:
        raise ConfigurationError(f"Invalid HTTP_TIMEOUT: {value}") from e
    if timeout <= 0:
        raise ConfigurationError(f"HTTP_TIMEOUT must be positive: {value}")
    return timeout
