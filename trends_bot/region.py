"""Region extraction strategies for Trends Slack Bot.

A strategy takes the message text and returns the region code to query, or
None when the text does not name one.
"""

import re
from collections.abc import Callable

from .errors import ConfigurationError

RegionExtractor = Callable[[str], str | None]

MENTION_PATTERN = re.compile(r"<@\S+>\s*(\S*)")


def region_from_mention(text: str) -> str | None:
    """Return the token following the first @-mention, e.g. "<@U1> JP" -> "JP"."""
    match = MENTION_PATTERN.search(text or "")
    if match is None or not match.group(1):
        return None
    return match.group(1)


def region_from_text(text: str) -> str | None:
    """Treat the whole message text as the region code."""
    region = (text or "").strip()
    return region or None


EXTRACTORS: dict[str, RegionExtractor] = {
    "mention": region_from_mention,
    "text": region_from_text,
}


def get_region_extractor(name: str) -> RegionExtractor:
    try:
        return EXTRACTORS[name]
    except KeyError:
        raise ConfigurationError(f"Unknown region extraction strategy: {name}") from None
