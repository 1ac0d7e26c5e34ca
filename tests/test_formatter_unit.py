"""Unit tests for the attachment formatter."""

import pytest

from trends_bot.formatter import AttachmentFormatter, format_month_day
from trends_bot.models import AttachmentField, NewsItem, TrendRecord


def make_trend(**overrides) -> TrendRecord:
    values = {
        "title": "Copa America",
        "approx_traffic": "500,000+",
        "description": "fox sports, Venezuela vs Argentina",
        "link": "https://trends.google.co.jp/trends/trendingsearches/daily?geo=US#Copa%20America",
        "published_at": "Fri, 28 Jun 2019 13:00:00 -0700",
        "thumbnail_url": "https://t2.gstatic.com/images?q=tbn:copa",
        "thumbnail_source": "BBC Sport",
        "related_articles": [
            NewsItem(
                title="Copa America quarter-finals",
                snippet="Lionel Messi was quiet",
                url="https://www.bbc.co.uk/sport/live/football/48766803",
                source="BBC Sport",
            )
        ],
    }
    values.update(overrides)
    return TrendRecord(**values)


class TestAttachmentFormatterUnit:
    """Unit tests for AttachmentFormatter."""

    def test_rich_attachment_specific(self):
        """Test the rich style with a complete trend."""
        formatter = AttachmentFormatter("rich")

        attachment = formatter.format([make_trend()])[0]

        assert attachment.title == "1. Copa America"
        assert attachment.title_link == "https://www.bbc.co.uk/sport/live/football/48766803"
        assert attachment.text == "fox sports, Venezuela vs Argentina"
        assert attachment.thumb_url == "https://t2.gstatic.com/images?q=tbn:copa"
        assert attachment.fields == [
            AttachmentField("Date", "6/28", short=True),
            AttachmentField("Approx Traffic", "500,000+", short=True),
        ]

    def test_minimal_attachment_specific(self):
        """Test that the minimal style carries only title, text and image."""
        formatter = AttachmentFormatter("minimal")

        attachment = formatter.format([make_trend()])[0]

        assert attachment.title == "1. Copa America"
        assert attachment.text == "fox sports, Venezuela vs Argentina"
        assert attachment.thumb_url == "https://t2.gstatic.com/images?q=tbn:copa"
        assert attachment.title_link is None
        assert attachment.fields == []

    def test_ranks_follow_input_order(self):
        """Test that ranks are 1-based positions."""
        formatter = AttachmentFormatter()
        trends = [make_trend(title=name) for name in ("A", "B", "C")]

        titles = [a.title for a in formatter.format(trends)]

        assert titles == ["1. A", "2. B", "3. C"]

    def test_empty_input(self):
        """Test that no trends yield no attachments."""
        assert AttachmentFormatter().format([]) == []

    def test_empty_optional_values_are_omitted(self):
        """Test that empty description, picture and articles are left out."""
        formatter = AttachmentFormatter()
        trend = make_trend(description="", thumbnail_url="", related_articles=[])

        attachment = formatter.format([trend])[0]

        assert attachment.text is None
        assert attachment.thumb_url is None
        assert attachment.title_link is None
        assert attachment.to_dict() == {
            "fallback": "1. Copa America",
            "title": "1. Copa America",
            "fields": [
                {"title": "Date", "value": "6/28", "short": True},
                {"title": "Approx Traffic", "value": "500,000+", "short": True},
            ],
        }

    def test_unparsable_date_drops_only_date_field(self):
        """Test that a bad date omits the Date field and keeps the batch going."""
        formatter = AttachmentFormatter()
        trends = [make_trend(title="Broken", published_at="not a date"), make_trend()]

        broken, good = formatter.format(trends)

        assert broken.title == "1. Broken"
        assert broken.fields == [AttachmentField("Approx Traffic", "500,000+", short=True)]
        assert broken.title_link is not None
        assert [f.title for f in good.fields] == ["Date", "Approx Traffic"]

    def test_empty_traffic_drops_only_traffic_field(self):
        """Test that a missing traffic value omits that field only."""
        attachment = AttachmentFormatter().format([make_trend(approx_traffic="")])[0]

        assert attachment.fields == [AttachmentField("Date", "6/28", short=True)]

    def test_title_link_requires_article_url(self):
        """Test that an article without URL gives no title link."""
        trend = make_trend(related_articles=[NewsItem("t", "s", "", "src")])

        assert AttachmentFormatter().format([trend])[0].title_link is None

    def test_unknown_style_rejected(self):
        """Test that only rich and minimal styles exist."""
        with pytest.raises(ValueError):
            AttachmentFormatter("fancy")

    @pytest.mark.parametrize(
        "published_at, expected",
        [
            ("Fri, 28 Jun 2019 13:00:00 -0700", "6/28"),
            ("Mon, 2 Jan 2006 15:04:05 -0700", "1/2"),
            ("Sun, 31 Dec 2023 23:30:00 +0900", "12/31"),
            ("", None),
            ("garbage", None),
            ("13:00", None),
            ("Mon", None),
            ("5", None),
        ],
    )
    def test_format_month_day(self, published_at, expected):
        """Test month/day formatting in the feed's own offset."""
        assert format_month_day(published_at) == expected
