"""Google Trends feed client for Trends Slack Bot."""

from collections.abc import Callable
from datetime import datetime
from urllib.parse import quote

import requests
from bs4 import BeautifulSoup
from bs4.builder import ParserRejectedMarkup
from dateutil import parser as date_parser

from .config import FeedConfig
from .errors import FetchError
from .logging_config import create_execution_logger
from .models import NewsItem, TrendRecord

# Two reference dates differing in day, month, year and weekday; a value that
# parses differently against them is missing part of its date
DATE_DEFAULTS = (datetime(2001, 1, 1), datetime(2002, 2, 3))


def parse_pub_date(value: str) -> datetime | None:
    """Parse an RSS pubDate such as ``Fri, 28 Jun 2019 13:00:00 -0700``.

    Returns None when the value is empty, unparsable, or lacks an explicit
    day, month and year (dateutil would otherwise fill them in). Naive
    results are taken to be in local time.
    """
    if not value or not value.strip():
        return None
    try:
        published = date_parser.parse(value, default=DATE_DEFAULTS[0])
        if date_parser.parse(value, default=DATE_DEFAULTS[1]).date() != published.date():
            return None
    except (ValueError, OverflowError, TypeError):
        return None
    if published.tzinfo is None:
        published = published.replace(tzinfo=datetime.now().astimezone().tzinfo)
    return published


def clean_html_content(content: str) -> str:
    """Remove HTML tags from content and normalize whitespace.

    News item titles and snippets carry escaped markup such as
    ``<b>Copa America</b>``.
    """
    if not content:
        return ""

    if "<" not in content and ">" not in content:
        return " ".join(content.split())

    soup = BeautifulSoup(content, "html.parser")
    for script in soup(["script", "style"]):
        script.decompose()

    text = soup.get_text(separator=" ")
    text = text.replace("<", "").replace(">", "")
    return " ".join(text.split())


class TrendsFeedClient:
    """Fetches and decodes the region-scoped trending searches feed."""

    def __init__(
        self,
        config: FeedConfig,
        execution_id: str | None = None,
        now: Callable[[], datetime] | None = None,
    ):
        """Initialize the feed client.

        Args:
            config: Feed configuration
            execution_id: Execution ID for logging context
            now: Clock returning the current aware local time, used by the
                same-day filter
        """
        self.config = config
        self.now = now or (lambda: datetime.now().astimezone())
        self.logger = create_execution_logger("feed_client", execution_id)
        self.session = requests.Session()
        self.session.headers.update(
            {"User-Agent": "Trends-Slack-Bot/1.0 (Google Trends to Slack relay)"}
        )

    def build_url(self, region: str) -> str:
        """Substitute the region into the feed URL template."""
        return self.config.url_template.format(region=quote(region, safe=""))

    def fetch(self, region: str) -> list[TrendRecord]:
        """Fetch the trends for a region.

        Args:
            region: Opaque region code, e.g. "US" or "JP"

        Returns:
            Trends in feed order, restricted to today's items when the
            same-day filter is enabled

        Raises:
            FetchError: If the GET fails or the body is not an RSS document
        """
        feed_url = self.build_url(region)
        self.logger.info("Fetching trends feed", region=region, feed_url=feed_url)

        try:
            response = self.session.get(feed_url, timeout=self.config.timeout)
            response.raise_for_status()
        except requests.RequestException as e:
            self.logger.error(
                f"Failed to download feed {feed_url}: {e}",
                feed_url=feed_url,
                error=str(e),
            )
            raise FetchError(f"failed to fetch trends feed: {e}", kind="transport") from e

        self.logger.info(
            "Feed downloaded successfully",
            feed_url=feed_url,
            status_code=response.status_code,
            content_length=len(response.content),
        )

        trends = self.parse_feed(response.content)
        if self.config.filter_to_today:
            trends = self.filter_today(trends)

        self.logger.info(
            f"Fetched {len(trends)} trends", region=region, trends_count=len(trends)
        )
        return trends

    def parse_feed(self, content: bytes | str) -> list[TrendRecord]:
        """Decode an RSS document into trend records.

        Raises:
            FetchError: If the document has no RSS channel
        """
        if not content or not content.strip():
            raise FetchError("failed to decode trends feed: empty body", kind="decode")
        try:
            soup = BeautifulSoup(content, "xml")
        except ParserRejectedMarkup as e:
            raise FetchError(f"failed to decode trends feed: {e}", kind="decode") from e

        channel = soup.find("channel")
        if channel is None:
            raise FetchError(
                "failed to decode trends feed: no RSS channel found", kind="decode"
            )
        return [self.normalize_item(item) for item in channel.find_all("item", recursive=False)]

    def normalize_item(self, item) -> TrendRecord:
        """Normalize an ``<item>`` element into a TrendRecord.

        Extension elements are looked up by local name so the namespace
        prefix the feed declares does not matter.
        """
        return TrendRecord(
            title=_child_text(item, "title"),
            approx_traffic=_child_text(item, "approx_traffic"),
            description=_child_text(item, "description"),
            link=_child_text(item, "link"),
            published_at=_child_text(item, "pubDate"),
            thumbnail_url=_child_text(item, "picture"),
            thumbnail_source=_child_text(item, "picture_source"),
            related_articles=[
                NewsItem(
                    title=clean_html_content(_child_text(news, "news_item_title")),
                    snippet=clean_html_content(_child_text(news, "news_item_snippet")),
                    url=_child_text(news, "news_item_url"),
                    source=_child_text(news, "news_item_source"),
                )
                for news in item.find_all("news_item", recursive=False)
            ],
        )

    def filter_today(self, trends: list[TrendRecord]) -> list[TrendRecord]:
        """Keep the trends published on today's local calendar date."""
        now = self.now()
        today = now.date()
        kept = []
        for trend in trends:
            published = parse_pub_date(trend.published_at)
            if published is None:
                self.logger.warning(
                    f"Dropping trend with unparsable date: {trend.title}",
                    published_at=trend.published_at,
                )
                continue
            if published.astimezone(now.tzinfo).date() == today:
                kept.append(trend)
        return kept


def _child_text(tag, name: str) -> str:
    child = tag.find(name, recursive=False)
    if child is None:
        return ""
    return child.get_text(strip=True)
