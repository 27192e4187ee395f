# =============================================================================
# Recommendation Extractor — Agent Answer → Structured Stock Records
# =============================================================================
#
# Turns the manager agent's free-text answer into a short list of
# Recommendation records (ticker, name, volatility tier, rating tier,
# rationale) for the card view.
#
# PIPELINE (per call, no shared mutable state):
#   segment → detect ticker → stopword filter → infer name / volatility /
#   rating / rationale → dedup → (fallback scan if nothing found) → cap
#
# The agent is prompted to answer with `### 1. **TICKER** - Name` headings
# and bullet points. Anything that does not loosely follow that convention
# degrades to defaults or to an empty list; extract() never raises.
#
# Tier inference uses ordered (pattern, tier) rule lists evaluated by
# classify(): the first matching rule wins, later rules are not consulted.
# =============================================================================

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from enum import Enum
from functools import lru_cache
from typing import NamedTuple

from app.config import Settings
from app.services.lexicon import (
    COMMON_STOPWORDS,
    ISE_STOPWORDS,
    stopwords_for,
    strip_emphasis,
)

logger = logging.getLogger(__name__)

NAME_MAX_LENGTH = 60
RATIONALE_MIN_LENGTH = 20
RATIONALE_MAX_LENGTH = 120


# ---------------------------------------------------------------------------
# Data Structures
# ---------------------------------------------------------------------------


class Volatility(str, Enum):
    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"


class Rating(str, Enum):
    BUY = "Buy"
    HOLD = "Hold"
    SELL = "Sell"


@dataclass(frozen=True)
class Recommendation:
    """
    One stock recommendation extracted from an agent answer.

    `ticker` is unique within a single extract() result.
    """

    ticker: str
    name: str
    volatility: Volatility = Volatility.MEDIUM
    rating: Rating = Rating.HOLD
    rationale: str = ""


@dataclass(frozen=True)
class ExtractionPolicy:
    """
    Per-deployment knobs for the ticker heuristic.

    The chat view and the dashboard view differ only in `max_results`;
    other deployments also narrow the ticker bounds (e.g. 3-6 letters) or
    swap the stopword markets.
    """

    min_ticker_length: int = 2
    max_ticker_length: int = 12
    stopwords: frozenset[str] = COMMON_STOPWORDS | ISE_STOPWORDS
    max_results: int = 10

    def __post_init__(self) -> None:
        if self.min_ticker_length < 1:
            raise ValueError("min_ticker_length must be at least 1")
        if self.min_ticker_length > self.max_ticker_length:
            raise ValueError(
                f"min_ticker_length ({self.min_ticker_length}) exceeds "
                f"max_ticker_length ({self.max_ticker_length})"
            )


CHAT_POLICY = ExtractionPolicy(max_results=10)
DASHBOARD_POLICY = ExtractionPolicy(max_results=15)


def policy_from_settings(
    settings: Settings,
    variant: str = "chat",
) -> ExtractionPolicy:
    """Build the extraction policy for a deployment variant ("chat" or "dashboard")."""
    if variant == "dashboard":
        max_results = settings.recommendation_cap_dashboard
    else:
        max_results = settings.recommendation_cap_chat
    return ExtractionPolicy(
        min_ticker_length=settings.ticker_min_length,
        max_ticker_length=settings.ticker_max_length,
        stopwords=stopwords_for(settings.stopword_markets, settings.extra_stopwords),
        max_results=max_results,
    )


# ---------------------------------------------------------------------------
# Tier Classification Rules
# ---------------------------------------------------------------------------


class TierRule(NamedTuple):
    pattern: re.Pattern[str]
    tier: Enum


VOLATILITY_RULES: tuple[TierRule, ...] = (
    TierRule(
        re.compile(
            r"low\s*volatility|volatility[:\s]*low|stable|minimal\s*risk",
            re.IGNORECASE,
        ),
        Volatility.LOW,
    ),
    TierRule(
        re.compile(
            r"high\s*volatility|volatility[:\s]*high|volatile",
            re.IGNORECASE,
        ),
        Volatility.HIGH,
    ),
)

RATING_RULES: tuple[TierRule, ...] = (
    TierRule(
        re.compile(
            r"\bbuy\b|strong\s*buy|outperform|overweight|positive",
            re.IGNORECASE,
        ),
        Rating.BUY,
    ),
    TierRule(
        re.compile(
            r"\bsell\b|strong\s*sell|underperform|underweight|negative",
            re.IGNORECASE,
        ),
        Rating.SELL,
    ),
)


def classify(text: str, rules: tuple[TierRule, ...], default: Enum) -> Enum:
    """Return the tier of the first rule whose pattern occurs in `text`."""
    for rule in rules:
        if rule.pattern.search(text):
            return rule.tier
    return default


# ---------------------------------------------------------------------------
# Compiled Patterns
# ---------------------------------------------------------------------------

_RATIONALE_CUE = re.compile(
    r"\b(?:rationale|reason|note|summary|analysis)\b[*\s]*[:\-]\s*([^\n]+)",
    re.IGNORECASE,
)
_BULLET_LINE = re.compile(r"^\s*[-*]\s+(.+)$")


@dataclass(frozen=True)
class _TickerPatterns:
    boundary: re.Pattern[str]
    bold: re.Pattern[str]
    bare: re.Pattern[str]


@lru_cache(maxsize=16)
def _ticker_patterns(min_length: int, max_length: int) -> _TickerPatterns:
    """Compile the length-bounded ticker patterns once per bound pair."""
    upper = f"[A-Z]{{{min_length},{max_length}}}"
    return _TickerPatterns(
        boundary=re.compile(
            rf"(?=\d+\.\s+\*\*[A-Z])|(?=\*\*{upper}\s)|(?=###\s)"
        ),
        bold=re.compile(rf"\*\*({upper})\*\*"),
        bare=re.compile(rf"\b({upper})\b\s*[-:(\[]"),
    )


# ---------------------------------------------------------------------------
# Field Inference
# ---------------------------------------------------------------------------


def _detect_ticker(segment: str, patterns: _TickerPatterns) -> str | None:
    match = patterns.bold.search(segment) or patterns.bare.search(segment)
    return match.group(1) if match else None


def _infer_name(segment: str, ticker: str) -> str:
    escaped = re.escape(ticker)
    match = (
        re.search(rf"\*\*{escaped}\*\*\s*[-:(]\s*([^\n)]+)", segment)
        or re.search(rf"\b{escaped}\b\s*[-:(]\s*([^\n)]+)", segment)
    )
    if not match:
        return ticker
    name = strip_emphasis(match.group(1))[:NAME_MAX_LENGTH].strip()
    return name or ticker


def _infer_rationale(segment: str) -> str:
    cue = _RATIONALE_CUE.search(segment)
    if cue:
        rationale = strip_emphasis(cue.group(1))
        if rationale:
            return rationale

    for line in segment.splitlines():
        bullet = _BULLET_LINE.match(line)
        if not bullet:
            continue
        candidate = strip_emphasis(bullet.group(1))
        if RATIONALE_MIN_LENGTH <= len(candidate) <= RATIONALE_MAX_LENGTH:
            return candidate
    return ""


def _parse_segment(
    segment: str,
    policy: ExtractionPolicy,
    patterns: _TickerPatterns,
) -> Recommendation | None:
    ticker = _detect_ticker(segment, patterns)
    if ticker is None or ticker in policy.stopwords:
        return None

    return Recommendation(
        ticker=ticker,
        name=_infer_name(segment, ticker),
        volatility=classify(segment, VOLATILITY_RULES, Volatility.MEDIUM),
        rating=classify(segment, RATING_RULES, Rating.HOLD),
        rationale=_infer_rationale(segment),
    )


def _fallback_scan(
    text: str,
    policy: ExtractionPolicy,
    patterns: _TickerPatterns,
) -> list[Recommendation]:
    """Emit a minimal record for every bold ticker-like token in the text."""
    seen: set[str] = set()
    records: list[Recommendation] = []
    for match in patterns.bold.finditer(text):
        ticker = match.group(1)
        if ticker in seen or ticker in policy.stopwords:
            continue
        seen.add(ticker)
        records.append(Recommendation(ticker=ticker, name=ticker))
    return records


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def extract(
    text: str | None,
    policy: ExtractionPolicy | None = None,
) -> list[Recommendation]:
    """
    Extract up to `policy.max_results` stock recommendations from an answer.

    Args:
        text: The agent's full answer. None, empty, or non-string input
            yields an empty list.
        policy: Ticker bounds, stopwords, and result cap. Defaults to the
            chat policy.

    Returns:
        Records in first-seen order with unique tickers. When no segment
        yields a record, every bold ticker-like token becomes a minimal
        record (Medium / Hold / no rationale).
    """
    if not text or not isinstance(text, str):
        return []

    policy = policy or CHAT_POLICY
    patterns = _ticker_patterns(policy.min_ticker_length, policy.max_ticker_length)

    segments = [s for s in patterns.boundary.split(text) if s]
    records: list[Recommendation] = []
    emitted: set[str] = set()
    for segment in segments:
        record = _parse_segment(segment, policy, patterns)
        if record is None or record.ticker in emitted:
            continue
        emitted.add(record.ticker)
        records.append(record)

    fallback = not records
    if fallback:
        records = _fallback_scan(text, policy, patterns)

    logger.debug(
        "Extracted %d recommendations from %d segments (fallback=%s, cap=%d)",
        len(records),
        len(segments),
        fallback,
        policy.max_results,
    )
    return records[: policy.max_results]
