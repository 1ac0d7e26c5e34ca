"""Attachment formatting for Trends Slack Bot."""

from .models import AttachmentField, MessageAttachment, TrendRecord
from .trends import parse_pub_date


class AttachmentFormatter:
    """Turns trend records into Slack message attachments.

    Two styles are supported: "minimal" (title, text, thumbnail) and "rich",
    which adds a title link plus Date and Approx Traffic fields. Optional
    members are derived independently, so a bad value on one trend only drops
    that member.
    """

    def __init__(self, style: str = "rich"):
        if style not in ("rich", "minimal"):
            raise ValueError(f"Unknown attachment style: {style}")
        self.style = style

    def format(self, trends: list[TrendRecord]) -> list[MessageAttachment]:
        return [self.format_trend(rank, trend) for rank, trend in enumerate(trends, start=1)]

    def format_trend(self, rank: int, trend: TrendRecord) -> MessageAttachment:
        attachment = MessageAttachment(
            title=f"{rank}. {trend.title}",
            text=trend.description or None,
            thumb_url=trend.thumbnail_url or None,
        )
        if self.style == "minimal":
            return attachment

        if trend.related_articles and trend.related_articles[0].url:
            attachment.title_link = trend.related_articles[0].url

        date = format_month_day(trend.published_at)
        if date is not None:
            attachment.fields.append(AttachmentField("Date", date, short=True))
        if trend.approx_traffic:
            attachment.fields.append(
                AttachmentField("Approx Traffic", trend.approx_traffic, short=True)
            )
        return attachment


def format_month_day(published_at: str) -> str | None:
    """Format a pubDate as ``month/day`` in the feed's own offset, e.g. "6/28"."""
    published = parse_pub_date(published_at)
    if published is None:
        return None
    return f"{published.month}/{published.day}"
