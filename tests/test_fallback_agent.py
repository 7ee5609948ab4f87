"""
Tests for the local frequency-based extraction and the last-resort word picker.
"""

import pytest

from agents.fallback_agent import extract_fallback_keywords, synthesize_minimal_keywords


class TestExtractFallbackKeywords:
    """Frequency ranking of words and adjacent two-word phrases."""

    TEXT = "Python testing makes python code better. Python testing rocks."

    def test_most_frequent_word_ranks_first(self):
        keywords = extract_fallback_keywords(self.TEXT)

        top = keywords[0]
        assert top.text == "python"
        assert top.type == "Keyword"
        assert top.frequency == 3
        assert top.score == pytest.approx(1.0)

    def test_word_scores_step_down_by_rank(self):
        keywords = [k for k in extract_fallback_keywords(self.TEXT) if k.type == "Keyword"]

        assert [k.text for k in keywords] == [
            "python",
            "testing",
            "makes",
            "code",
            "better",
            "rocks",
        ]
        assert keywords[1].score == pytest.approx(0.95)
        assert keywords[5].score == pytest.approx(0.75)

    def test_repeated_adjacent_pair_becomes_top_phrase(self):
        phrases = [k for k in extract_fallback_keywords(self.TEXT) if k.type == "Phrase"]

        assert len(phrases) == 5
        assert phrases[0].text == "python testing"
        assert phrases[0].frequency == 2
        assert phrases[0].score == pytest.approx(0.95)

    def test_result_is_sorted_and_capped(self):
        text = " ".join(f"word{i:02d} term{i:02d}" for i in range(40))

        keywords = extract_fallback_keywords(text)

        assert len(keywords) == 15
        scores = [k.score for k in keywords]
        assert scores == sorted(scores, reverse=True)
        assert len({k.text for k in keywords}) == len(keywords)

    def test_score_floors(self):
        text = " ".join(f"token{i:02d}" for i in range(20))

        keywords = extract_fallback_keywords(text)
        words = [k for k in keywords if k.type == "Keyword"]
        phrases = [k for k in keywords if k.type == "Phrase"]

        assert len(words) == 10
        assert min(k.score for k in words) >= 0.5
        assert min(k.score for k in phrases) >= 0.6

    def test_stop_words_and_short_tokens_are_dropped(self):
        assert extract_fallback_keywords("The and with for a an in on at cat") == []

    def test_punctuation_is_stripped_before_counting(self):
        keywords = extract_fallback_keywords("Coffee! coffee, COFFEE.")

        assert keywords[0].text == "coffee"
        assert keywords[0].frequency == 3

    def test_phrase_requires_both_words_to_qualify(self):
        keywords = extract_fallback_keywords("quick fox quick fox")

        assert [k.type for k in keywords] == ["Keyword"]

    def test_deterministic(self):
        assert extract_fallback_keywords(self.TEXT) == extract_fallback_keywords(self.TEXT)


class TestSynthesizeMinimalKeywords:
    """Last-resort keyword picking from raw tokens."""

    def test_picks_long_tokens_in_first_appearance_order(self):
        keywords = synthesize_minimal_keywords(
            "apple banana apple cherry kiwi dates mango grape"
        )

        assert [k.text for k in keywords] == ["apple", "banana", "cherry", "dates", "mango"]
        assert [k.score for k in keywords] == [0.9, 0.8, 0.7, 0.6, 0.5]
        assert all(k.type == "Word" for k in keywords)
        assert all(k.frequency is None for k in keywords)

    def test_keeps_raw_tokens(self):
        keywords = synthesize_minimal_keywords("!!!!! ????? !!!!!")

        assert [k.text for k in keywords] == ["!!!!!", "?????"]

    def test_relaxes_length_when_no_long_token_exists(self):
        keywords = synthesize_minimal_keywords("a an in on at a")

        assert [k.text for k in keywords] == ["a", "an", "in", "on", "at"]

    def test_empty_text_gives_empty_list(self):
        assert synthesize_minimal_keywords("   ") == []
