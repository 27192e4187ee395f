# =============================================================================
# Lexicon — Shared Lexical Helpers
# =============================================================================
#
# Used by both the recommendation extractor and the markdown renderer:
#   - split_emphasis(): splits a line on paired `**...**` markers
#   - strip_emphasis(): removes `**` markers from a snippet
#   - stopword tables: uppercase words that look like tickers but are not
#
# Stopword tables are static, hand-curated per market. The active set is
# assembled from configuration by stopwords_for().
# =============================================================================

from __future__ import annotations

import logging
import re
from collections.abc import Iterable
from dataclasses import dataclass

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Inline Emphasis
# ---------------------------------------------------------------------------

_EMPHASIS_PATTERN = re.compile(r"\*\*(.*?)\*\*")


@dataclass(frozen=True)
class Text:
    """A run of plain text."""

    text: str


@dataclass(frozen=True)
class Emphasis:
    """A run of text marked for strong display."""

    text: str


Span = Text | Emphasis


def split_emphasis(text: str) -> tuple[Span, ...]:
    """
    Split a string into Text/Emphasis spans on paired `**` markers.

    Captured parts (odd split positions) are Emphasis, the rest are Text.
    Empty Text parts between adjacent markers are dropped. A string with no
    complete marker pair comes back as a single Text span, unmatched `**`
    included.

    Example:
        split_emphasis("**Buy** now") == (Emphasis("Buy"), Text(" now"))
    """
    parts = _EMPHASIS_PATTERN.split(text)
    if len(parts) == 1:
        return (Text(text),)

    spans: list[Span] = []
    for i, part in enumerate(parts):
        if i % 2 == 1:
            spans.append(Emphasis(part))
        elif part:
            spans.append(Text(part))
    return tuple(spans)


def strip_emphasis(text: str) -> str:
    """Remove every `**` marker and surrounding whitespace."""
    return text.replace("**", "").strip()


# ---------------------------------------------------------------------------
# Stopword Tables
# ---------------------------------------------------------------------------
# COMMON: English words and domain filler that agents write in capitals.
# Two-letter entries matter because the default ticker bounds start at 2.
# ---------------------------------------------------------------------------

COMMON_STOPWORDS: frozenset[str] = frozenset({
    "THE", "AND", "FOR", "NOT", "BUT", "ARE", "WAS", "HAS", "HAD", "HIS",
    "HER", "ITS", "ALSO", "BEEN", "CAN", "DID", "GET", "LET", "MAY", "NEW",
    "NOW", "OLD", "SEE", "WAY", "WHO", "BOY", "ALL", "ANY", "HOW", "MAN",
    "OUR", "OUT", "DAY", "USE", "TWO", "SET", "LOW", "HIGH", "BASED",
    "STOCK", "LONG", "TERM", "RISK", "BOTH", "SAFE", "WITH", "FROM", "THAT",
    "THIS", "WILL", "THEY", "HAVE", "EACH", "MAKE", "LIKE", "JUST", "OVER",
    "SUCH", "TAKE", "YEAR", "THEM", "SOME", "THAN", "VERY", "WHEN", "WHAT",
    "YOUR", "SAID", "GOOD",
    # Two-letter words
    "AN", "AS", "AT", "BE", "BY", "DO", "IF", "IN", "IS", "IT", "NO", "OF",
    "ON", "OR", "SO", "TO", "UP", "WE",
    # Rating and report vocabulary
    "BUY", "SELL", "HOLD", "STRONG", "NOTE", "TOP", "KEY", "CEO", "IPO",
    "EPS", "ETF", "YTD",
})

ISE_STOPWORDS: frozenset[str] = frozenset({
    "ISE", "BIST", "XU", "TL", "TRY", "SPK", "KAP",
})

US_STOPWORDS: frozenset[str] = frozenset({
    "NYSE", "NASDAQ", "SEC", "USD", "SPX", "DJIA", "AMEX",
})

MARKET_STOPWORDS: dict[str, frozenset[str]] = {
    "common": COMMON_STOPWORDS,
    "ise": ISE_STOPWORDS,
    "us": US_STOPWORDS,
}


def stopwords_for(
    markets: Iterable[str],
    extra: Iterable[str] = (),
) -> frozenset[str]:
    """
    Union the stopword tables for the given market names plus extra words.

    Unknown market names are logged and ignored. Extra words are upper-cased.
    """
    words: set[str] = set()
    for market in markets:
        table = MARKET_STOPWORDS.get(market.lower())
        if table is None:
            logger.warning("Unknown stopword market '%s', ignoring", market)
            continue
        words |= table
    words.update(word.strip().upper() for word in extra if word.strip())
    return frozenset(words)
