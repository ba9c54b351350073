"""Tests for ingest_blogs.keywords module."""

from ingest_blogs.keywords import (
    BODY_KEYWORD_CHARS,
    MAX_KEYWORDS,
    build_keywords,
    extract_age_signals,
    normalize_category,
    tokenize,
)


class TestTokenize:
    def test_lowercases_and_splits(self) -> None:
        assert tokenize("Toddler's Sleep-Routine!") == ["toddler", "sleep", "routine"]

    def test_drops_short_and_stop_words(self) -> None:
        assert tokenize("how to help your baby eat") == ["help", "baby", "eat"]

    def test_empty(self) -> None:
        assert tokenize(None) == []
        assert tokenize("the and of") == []


class TestExtractAgeSignals:
    def test_stage_words(self) -> None:
        assert extract_age_signals("A newborn and a Toddler") == ["newborn", "toddler"]

    def test_month_and_year_patterns(self) -> None:
        assert extract_age_signals("at 18 months, 2 yrs and 6-month visits") == ["18-months", "2-years", "6-months"]

    def test_no_signals(self) -> None:
        assert extract_age_signals("Healthy snacks") == []


class TestBuildKeywords:
    def test_order_categories_then_signals_then_text(self) -> None:
        keywords = build_keywords(
            title="Sleep Training Basics",
            excerpt="Gentle methods for an infant.",
            body="Start around 6 months.",
            categories=["Sleep & Rest"],
        )
        assert keywords[:8] == (
            "sleep rest",
            "sleep",
            "rest",
            "infant",
            "6-months",
            "training",
            "basics",
            "gentle",
        )

    def test_unique_and_capped(self) -> None:
        body = " ".join(f"term{i}" for i in range(100))
        keywords = build_keywords(title="Title words", body=body)
        assert len(keywords) == MAX_KEYWORDS
        assert len(set(keywords)) == len(keywords)

    def test_body_limited(self) -> None:
        body = "a" * BODY_KEYWORD_CHARS + " latetoken"
        assert "latetoken" not in build_keywords(body=body)

    def test_normalize_category(self) -> None:
        assert normalize_category("  Motor-Skills & Play ") == "motor skills play"
