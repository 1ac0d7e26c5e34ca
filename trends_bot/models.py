"""Data models for the Trends Slack Bot."""

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class InboundEvent:
    """A Slack message event that triggers the relay."""

    message_id: str
    text: str
    channel_id: str

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "InboundEvent":
        """Build an event from the ``event`` object of a Slack callback."""
        return cls(
            message_id=_as_str(data.get("client_msg_id")),
            text=_as_str(data.get("text")),
            channel_id=_as_str(data.get("channel")),
        )


@dataclass(frozen=True)
class Challenge:
    """Slack URL verification handshake."""

    token: str
    challenge: str
    type: str

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Challenge":
        return cls(
            token=_as_str(data.get("token")),
            challenge=_as_str(data.get("challenge")),
            type=_as_str(data.get("type")),
        )


@dataclass
class NewsItem:
    """A news article related to a trend."""

    title: str
    snippet: str
    url: str
    source: str


@dataclass
class TrendRecord:
    """Represents a single trending search from the feed."""

    title: str
    approx_traffic: str
    description: str
    link: str
    published_at: str  # feed-native, e.g. "Fri, 28 Jun 2019 13:00:00 -0700"
    thumbnail_url: str
    thumbnail_source: str
    related_articles: list[NewsItem] = field(default_factory=list)


@dataclass
class AttachmentField:
    """A title/value pair rendered inside an attachment."""

    title: str
    value: str
    short: bool = False

    def to_dict(self) -> dict[str, Any]:
        return {"title": self.title, "value": self.value, "short": self.short}


@dataclass
class MessageAttachment:
    """A Slack message attachment built from one trend."""

    title: str
    title_link: str | None = None
    text: str | None = None
    thumb_url: str | None = None
    fields: list[AttachmentField] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        """Serialize to the Slack attachment shape, omitting absent members."""
        data: dict[str, Any] = {"fallback": self.title, "title": self.title}
        if self.title_link:
            data["title_link"] = self.title_link
        if self.text:
            data["text"] = self.text
        if self.thumb_url:
            data["thumb_url"] = self.thumb_url
        if self.fields:
            data["fields"] = [f.to_dict() for f in self.fields]
        return data


@dataclass
class OutboundMessage:
    """A chat.postMessage payload."""

    channel_id: str
    attachments: list[MessageAttachment]
    text: str | None = None

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "channel": self.channel_id,
            "mrkdwn": True,
            "attachments": [a.to_dict() for a in self.attachments],
        }
        if self.text:
            data["text"] = self.text
        return data


@dataclass(frozen=True)
class HandlerResponse:
    """HTTP status and plain-text body returned to the webhook caller."""

    status_code: int
    body: str = ""


def _as_str(value: Any) -> str:
    return value if isinstance(value, str) else ""
