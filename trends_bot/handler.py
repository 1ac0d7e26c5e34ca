"""Webhook event handling for Trends Slack Bot."""

import json
from typing import Any

from .errors import DecodeError, ExtractionError, RelayError
from .formatter import AttachmentFormatter
from .logging_config import create_execution_logger
from .models import Challenge, HandlerResponse, InboundEvent
from .region import RegionExtractor, region_from_mention
from .slack import SlackPublisher
from .trends import TrendsFeedClient


class EventHandler:
    """Relays one Slack event: region -> trends feed -> channel message."""

    def __init__(
        self,
        feed_client: TrendsFeedClient,
        formatter: AttachmentFormatter,
        publisher: SlackPublisher,
        extract_region: RegionExtractor = region_from_mention,
        execution_id: str | None = None,
    ):
        self.feed_client = feed_client
        self.formatter = formatter
        self.publisher = publisher
        self.extract_region = extract_region
        self.logger = create_execution_logger("event_handler", execution_id)

    def handle(self, raw_body: bytes | str) -> HandlerResponse:
        """
        Handle a raw webhook request body.

        Returns 200 with the challenge for a verification handshake, 200 with
        an empty body once the trends are posted, and 400 with the error
        message for any failure.
        """
        try:
            payload = self.decode(raw_body)

            challenge = Challenge.from_dict(payload)
            if challenge.challenge:
                self.logger.info("Answering URL verification challenge")
                return HandlerResponse(200, challenge.challenge)

            event_data = payload.get("event")
            if not isinstance(event_data, dict):
                raise DecodeError("event not found in request body")

            self.relay(InboundEvent.from_dict(event_data))
        except RelayError as e:
            self.logger.warning(f"Request failed: {e}", error=str(e))
            return HandlerResponse(400, str(e))

        return HandlerResponse(200, "")

    def decode(self, raw_body: bytes | str) -> dict[str, Any]:
        """Decode the request body as a JSON object."""
        try:
            payload = json.loads(raw_body)
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            raise DecodeError(f"invalid JSON body: {e}") from e
        if not isinstance(payload, dict):
            raise DecodeError("invalid JSON body: expected an object")
        return payload

    def relay(self, event: InboundEvent) -> None:
        """Fetch the trends for the event's region and post them to its channel."""
        self.logger.info(
            "Handling message event",
            channel_id=event.channel_id,
            message_id=event.message_id,
        )

        region = self.extract_region(event.text)
        if region is None:
            raise ExtractionError("geo not found")

        trends = self.feed_client.fetch(region)
        attachments = self.formatter.format(trends)
        self.publisher.post(event.channel_id, attachments)

        self.logger.info(
            f"Posted {len(attachments)} trends",
            region=region,
            channel_id=event.channel_id,
        )
