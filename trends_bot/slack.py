"""Slack publisher for Trends Slack Bot."""

import json
import urllib.error
import urllib.request

from .config import SlackConfig
from .errors import PostError
from .logging_config import create_execution_logger
from .models import MessageAttachment, OutboundMessage

NO_TRENDS_TEXT = "No trending searches found."


class SlackPublisher:
    """Posts trend attachments to a Slack channel with chat.postMessage."""

    def __init__(self, config: SlackConfig, execution_id: str | None = None):
        """Initialize Slack publisher with configuration."""
        self.config = config
        self.logger = create_execution_logger("slack_publisher", execution_id)

    def post(self, channel_id: str, attachments: list[MessageAttachment]) -> None:
        """
        Post attachments to a channel.

        Args:
            channel_id: Slack channel ID, e.g. "C123"
            attachments: Attachments in display order

        Raises:
            PostError: If the request fails or Slack reports an API error
        """
        # chat.postMessage rejects a message with neither text nor attachments
        message = OutboundMessage(
            channel_id=channel_id,
            attachments=attachments,
            text=None if attachments else NO_TRENDS_TEXT,
        )
        self.logger.info(
            "Posting message to Slack",
            channel_id=channel_id,
            attachments_count=len(attachments),
        )
        payload = self._send(self.build_request(message))
        self._check_api_response(payload, channel_id)
        self.logger.info("Message posted successfully", channel_id=channel_id)

    def build_request(self, message: OutboundMessage) -> urllib.request.Request:
        """Serialize the message into an authenticated POST request."""
        body = json.dumps(message.to_dict(), ensure_ascii=False).encode("utf-8")
        return urllib.request.Request(
            self.config.post_url,
            data=body,
            method="POST",
            headers={
                "Authorization": f"Bearer {self.config.bot_token}",
                "Content-Type": "application/json; charset=utf-8",
                "User-Agent": "Trends-Slack-Bot/1.0",
            },
        )

    def _send(self, request: urllib.request.Request) -> bytes:
        """Send the request and return the raw response body."""
        try:
            with urllib.request.urlopen(request, timeout=self.config.timeout) as response:
                self.logger.debug(
                    f"Slack API returned status {response.status}",
                    status_code=response.status,
                )
                return response.read()

        except urllib.error.HTTPError as e:
            self.logger.error(
                f"HTTP error posting message: {e.code} - {e.reason}",
                status_code=e.code,
                error=str(e.reason),
            )
            raise PostError(
                f"failed to post message: HTTP {e.code} {e.reason}", kind="http"
            ) from e

        except urllib.error.URLError as e:
            self.logger.error(
                f"URL error posting message: {e.reason}", error=str(e.reason)
            )
            raise PostError(f"failed to post message: {e.reason}", kind="transport") from e

        except OSError as e:
            self.logger.error(f"Network error posting message: {e}", error=str(e))
            raise PostError(f"failed to post message: {e}", kind="transport") from e

    def _check_api_response(self, payload: bytes, channel_id: str) -> None:
        """Reject responses where Slack reports ``"ok": false``."""
        try:
            data = json.loads(payload)
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            self.logger.error("Unreadable Slack API response", error=str(e))
            raise PostError(
                "failed to post message: unreadable Slack API response", kind="api"
            ) from e

        if not isinstance(data, dict) or data.get("ok") is not True:
            api_error = data.get("error", "unknown_error") if isinstance(data, dict) else "unknown_error"
            self.logger.error(
                f"Slack API error: {api_error}", channel_id=channel_id, error=api_error
            )
            raise PostError(
                f"failed to post message: {api_error}", kind="api", api_error=api_error
            )

        metadata = data.get("response_metadata") or {}
        warnings = metadata.get("warnings") if isinstance(metadata, dict) else None
        for warning in warnings or []:
            self.logger.warning(f"Slack API warning: {warning}", channel_id=channel_id)
