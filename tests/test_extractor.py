# =============================================================================
# Unit Tests — Recommendation Extractor
# =============================================================================
#
# Tests the ticker heuristic and field inference on literal agent answers.
# Pure functions only: no API, network, or settings file needed.
# =============================================================================

from __future__ import annotations

import pytest
from pydantic import ValidationError

from app.config import Settings
from app.services.extractor import (
    CHAT_POLICY,
    DASHBOARD_POLICY,
    RATING_RULES,
    VOLATILITY_RULES,
    ExtractionPolicy,
    Rating,
    Recommendation,
    Volatility,
    classify,
    extract,
    policy_from_settings,
)

THYAO_SEGMENT = (
    "### 1. **THYAO** - Turkish Airlines\n"
    "- Low volatility over the past 12 months\n"
    "- Strong buy consensus\n"
    "- Rationale: Dominant market position"
)


def _numbered_segments(tickers: list[str]) -> str:
    """Build one `### N. **TICKER** - Name` section per ticker."""
    return "\n\n".join(
        f"### {i}. **{ticker}** - Company {i}\n- Buy rating from analysts"
        for i, ticker in enumerate(tickers, start=1)
    )


def _distinct_tickers(count: int) -> list[str]:
    # "TKAA", "TKBB", ...: uppercase only, none of them stopwords
    return [f"TK{chr(65 + i) * 2}" for i in range(count)]


# ---------------------------------------------------------------------------
# Test: End-to-End Scenarios
# ---------------------------------------------------------------------------


class TestEndToEnd:
    """Whole answers in, records out."""

    def test_thyao_segment(self):
        assert extract(THYAO_SEGMENT) == [
            Recommendation(
                ticker="THYAO",
                name="Turkish Airlines",
                volatility=Volatility.LOW,
                rating=Rating.BUY,
                rationale="Dominant market position",
            )
        ]

    def test_tier_values_compare_as_strings(self):
        record = extract(THYAO_SEGMENT)[0]
        assert record.volatility == "Low"
        assert record.rating == "Buy"

    def test_unstructured_text_yields_nothing(self):
        assert extract("No structured data here.") == []

    def test_multi_stock_answer_in_order(self):
        from app.services.showcase import SAMPLE_ANSWER

        records = extract(SAMPLE_ANSWER)
        assert [r.ticker for r in records] == [
            "THYAO", "ASELS", "BIMAS", "TUPRS", "KCHOL",
        ]
        tupras = records[3]
        assert tupras.name == "Tupras"
        assert tupras.volatility == Volatility.MEDIUM
        assert tupras.rating == Rating.BUY

    def test_cap_preserves_first_seen_order(self):
        tickers = _distinct_tickers(20)
        records = extract(_numbered_segments(tickers))
        assert [r.ticker for r in records] == tickers[:10]

    def test_dashboard_cap(self):
        tickers = _distinct_tickers(20)
        records = extract(_numbered_segments(tickers), DASHBOARD_POLICY)
        assert [r.ticker for r in records] == tickers[:15]


# ---------------------------------------------------------------------------
# Test: Totality & Invariants
# ---------------------------------------------------------------------------


class TestInvariants:
    """extract() never raises and keeps tickers unique under the cap."""

    @pytest.mark.parametrize(
        "text",
        [None, "", "   ", "**", "****", "### ", "1. **", "\n\n\n", "** **"],
    )
    def test_degenerate_input_returns_empty(self, text):
        assert extract(text) == []

    def test_non_string_input_returns_empty(self):
        assert extract(12345) == []  # type: ignore[arg-type]

    def test_duplicate_ticker_first_occurrence_wins(self):
        text = (
            "### 1. **GARAN** - Garanti BBVA\n- Buy\n\n"
            "### 2. **GARAN** - Duplicate entry\n- Sell"
        )
        records = extract(text)
        assert len(records) == 1
        assert records[0].name == "Garanti BBVA"
        assert records[0].rating == Rating.BUY

    def test_unique_and_capped_on_noisy_input(self):
        text = _numbered_segments(_distinct_tickers(8) * 3)
        records = extract(text)
        tickers = [r.ticker for r in records]
        assert len(tickers) == len(set(tickers))
        assert len(records) <= CHAT_POLICY.max_results

    def test_idempotent(self):
        from app.services.showcase import SAMPLE_ANSWER

        assert extract(SAMPLE_ANSWER) == extract(SAMPLE_ANSWER)


# ---------------------------------------------------------------------------
# Test: Ticker Detection & Stopwords
# ---------------------------------------------------------------------------


class TestTickerDetection:
    """Bold-first detection, bare tickers, and stopword rejection."""

    def test_stopword_segment_is_skipped(self):
        assert extract("### 1. **THE** - Something\n- Low volatility") == []

    def test_exchange_name_is_skipped(self):
        text = "### **BIST** - Index overview\n\n### **GARAN** - Garanti BBVA"
        assert [r.ticker for r in extract(text)] == ["GARAN"]

    def test_bare_ticker_with_separator(self):
        records = extract("AKBNK: Akbank is a leading private bank")
        assert records[0].ticker == "AKBNK"
        assert records[0].name == "Akbank is a leading private bank"

    def test_bold_preferred_over_bare(self):
        records = extract("EREGL: see below for **GARAN** (Garanti BBVA)")
        assert records[0].ticker == "GARAN"
        assert records[0].name == "Garanti BBVA"

    def test_lowercase_and_mixed_case_ignored(self):
        assert extract("### 1. **Garan** - Garanti") == []

    def test_custom_length_bounds(self):
        policy = ExtractionPolicy(min_ticker_length=3, max_ticker_length=6)
        text = "### **AB** - Two letters\n- Buy"
        assert extract(text)[0].ticker == "AB"
        assert extract(text, policy) == []


# ---------------------------------------------------------------------------
# Test: Field Inference
# ---------------------------------------------------------------------------


class TestFieldInference:
    """Name, volatility, rating, and rationale heuristics."""

    def test_defaults_when_no_context(self):
        assert extract("### **SISE**\nnothing else") == [
            Recommendation(ticker="SISE", name="SISE"),
        ]

    def test_name_from_parenthesis(self):
        records = extract("### **FROTO** (Ford Otosan) - auto maker")
        assert records[0].name == "Ford Otosan"

    def test_name_strips_emphasis(self):
        records = extract("### **TCELL** - **Turkcell** Iletisim\n- Hold")
        assert records[0].name == "Turkcell Iletisim"

    def test_name_truncated_to_60_chars(self):
        long_name = "Extremely Long Holding Company Name " * 4
        records = extract(f"### **KCHOL** - {long_name}")
        assert len(records[0].name) <= 60
        assert records[0].name.startswith("Extremely Long Holding")

    def test_high_volatility(self):
        records = extract("### **PETKM** - Petkim\n- Highly volatile petrochemical name")
        assert records[0].volatility == Volatility.HIGH

    def test_volatility_colon_low(self):
        records = extract("### **ENKAI** - Enka\n- Volatility: low")
        assert records[0].volatility == Volatility.LOW

    def test_low_wins_volatility_tie_break(self):
        text = "### **SAHOL** - Sabanci\n- Low volatility historically but recently volatile"
        assert extract(text)[0].volatility == Volatility.LOW

    def test_sell_rating(self):
        records = extract("### **PETKM** - Petkim\n- Analysts underweight the stock")
        assert records[0].rating == Rating.SELL

    def test_buy_wins_rating_tie_break(self):
        text = "### **YKBNK** - Yapi Kredi\n- Some say buy, others say sell"
        assert extract(text)[0].rating == Rating.BUY

    def test_buy_must_be_whole_word(self):
        text = "### **ARCLK** - Arcelik\n- Announced a share buyback"
        assert extract(text)[0].rating == Rating.HOLD

    def test_rationale_from_cue_word(self):
        text = "### **ASELS** - Aselsan\n- **Reason:** Government defence contracts"
        assert extract(text)[0].rationale == "Government defence contracts"

    def test_rationale_from_first_long_bullet(self):
        text = (
            "### **SISE** - Sisecam\n"
            "- Short\n"
            "- Glass maker with export exposure across Europe\n"
            "- Another reasonably long bullet line here"
        )
        assert extract(text)[0].rationale == "Glass maker with export exposure across Europe"

    def test_rationale_empty_when_no_candidate(self):
        assert extract("### **SISE** - Sisecam\n- Short")[0].rationale == ""

    def test_cue_word_needs_separator(self):
        text = "### **SISE** - Sisecam\nNote that export margins improved sharply"
        assert extract(text)[0].rationale == ""

    def test_cue_word_without_separator_falls_back_to_bullet(self):
        text = "### **SISE** - Sisecam\n- Note that export margins improved"
        assert extract(text)[0].rationale == "Note that export margins improved"


# ---------------------------------------------------------------------------
# Test: Fallback Scan
# ---------------------------------------------------------------------------


class TestFallback:
    """Whole-text bold scan when no segment yields a record."""

    def test_fallback_emits_minimal_records(self):
        text = "**NOTE** analysts like **AKBNK** and **GARAN**; **AKBNK** again"
        assert extract(text) == [
            Recommendation(ticker="AKBNK", name="AKBNK"),
            Recommendation(ticker="GARAN", name="GARAN"),
        ]

    def test_fallback_skips_stopwords(self):
        assert extract("**THE** market and **BIST** index") == []


# ---------------------------------------------------------------------------
# Test: Tier Rules & Policy
# ---------------------------------------------------------------------------


class TestClassify:
    """The ordered rule lists in isolation."""

    def test_first_matching_rule_wins(self):
        assert classify("stable but volatile", VOLATILITY_RULES, Volatility.MEDIUM) == Volatility.LOW

    def test_default_when_nothing_matches(self):
        assert classify("no signal here", RATING_RULES, Rating.HOLD) == Rating.HOLD

    def test_case_insensitive(self):
        assert classify("OUTPERFORM", RATING_RULES, Rating.HOLD) == Rating.BUY


class TestPolicyFromSettings:
    """Policies are built from configuration."""

    def test_chat_and_dashboard_caps(self):
        s = Settings(recommendation_cap_chat=3, recommendation_cap_dashboard=7)
        assert policy_from_settings(s, "chat").max_results == 3
        assert policy_from_settings(s, "dashboard").max_results == 7

    def test_stopword_markets_and_extras(self):
        s = Settings(stopword_markets=["us"], extra_stopwords=["garan"])
        policy = policy_from_settings(s)
        assert "NYSE" in policy.stopwords
        assert "GARAN" in policy.stopwords
        assert "BIST" not in policy.stopwords

    def test_ticker_bounds(self):
        s = Settings(ticker_min_length=3, ticker_max_length=6)
        policy = policy_from_settings(s)
        assert (policy.min_ticker_length, policy.max_ticker_length) == (3, 6)

    def test_inverted_bounds_rejected_by_settings(self):
        with pytest.raises(ValidationError):
            Settings(ticker_min_length=6, ticker_max_length=3)

    def test_equal_bounds_allowed(self):
        s = Settings(ticker_min_length=4, ticker_max_length=4)
        text = "### **GARAN** - Garanti\n\n### **SISE** - Sisecam"
        records = extract(text, policy_from_settings(s))
        assert [r.ticker for r in records] == ["SISE"]


class TestPolicyValidation:
    """Ticker bounds are checked when a policy is built."""

    def test_inverted_bounds_rejected(self):
        with pytest.raises(ValueError):
            ExtractionPolicy(min_ticker_length=6, max_ticker_length=3)

    def test_zero_min_length_rejected(self):
        with pytest.raises(ValueError):
            ExtractionPolicy(min_ticker_length=0)
