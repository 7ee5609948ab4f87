"""
Tests for turning an external extraction result into a ranked keyword list.
"""

from agents.normalizer_agent import normalize_extraction
from models.extraction_models import ExtractionResult


def _entity(entity_id, score, matched="match", types=None, frequency=None):
    return {
        "entityId": entity_id,
        "matchedText": matched,
        "relevanceScore": score,
        "type": types or [],
        "frequency": frequency,
    }


def _phrase(score, *tokens):
    return {"relevanceScore": score, "words": [{"token": t} for t in tokens]}


class TestEntitiesAndTopics:
    """Entity and topic selection."""

    def test_sample_payload(self, sample_payload):
        keywords = normalize_extraction(ExtractionResult.model_validate(sample_payload))

        assert [k.text for k in keywords] == [
            "Python (programming language)",
            "Computer programming",
            "Guido van Rossum",
            "dynamic typing",
        ]
        assert keywords[0].type == "ProgrammingLanguage"
        assert keywords[0].frequency == 3
        assert keywords[1].type == "Topic"
        assert keywords[2].type == "Entity"
        assert keywords[2].frequency == 1
        assert keywords[3].type == "Phrase"

    def test_thresholds_are_strict(self):
        payload = {
            "entities": [_entity("Edge", 0.5), _entity("Kept", 0.51)],
            "topics": [{"label": "Edge topic", "score": 0.5}],
        }

        keywords = normalize_extraction(ExtractionResult.model_validate(payload))

        assert [k.text for k in keywords] == ["Kept"]

    def test_entity_without_matched_text_is_skipped(self):
        payload = {"entities": [_entity("Ghost", 0.9, matched=""), _entity("Real", 0.8)]}

        keywords = normalize_extraction(ExtractionResult.model_validate(payload))

        assert [k.text for k in keywords] == ["Real"]

    def test_duplicates_keep_first_occurrence(self):
        payload = {
            "entities": [
                _entity("Berlin", 0.7, types=["City"]),
                _entity("Berlin", 0.95, types=["Place"]),
            ],
            "topics": [{"label": "Berlin", "score": 0.99}],
        }

        keywords = normalize_extraction(ExtractionResult.model_validate(payload))

        assert len(keywords) == 1
        assert keywords[0].score == 0.7
        assert keywords[0].type == "City"

    def test_dedup_is_case_sensitive(self):
        payload = {"topics": [{"label": "Apple", "score": 0.9}, {"label": "apple", "score": 0.8}]}

        keywords = normalize_extraction(ExtractionResult.model_validate(payload))

        assert [k.text for k in keywords] == ["Apple", "apple"]

    def test_empty_extraction_gives_empty_list(self):
        assert normalize_extraction(ExtractionResult()) == []


class TestPhraseFill:
    """Phrases only fill a short list."""

    def test_phrases_filtered_by_score_and_length(self):
        payload = {
            "phrases": [
                _phrase(0.2, "low", "score"),
                _phrase(0.9, "single"),
                _phrase(0.3, "machine", "learning"),
            ]
        }

        keywords = normalize_extraction(ExtractionResult.model_validate(payload))

        assert [k.text for k in keywords] == ["machine learning"]
        assert keywords[0].frequency == 1

    def test_no_phrases_once_ten_keywords_exist(self):
        payload = {
            "entities": [_entity(f"Entity {i}", 0.6 + i / 100) for i in range(10)],
            "phrases": [_phrase(0.99, "big", "phrase")],
        }

        keywords = normalize_extraction(ExtractionResult.model_validate(payload))

        assert len(keywords) == 10
        assert all(k.type != "Phrase" for k in keywords)

    def test_fill_stops_at_fifteen(self):
        payload = {
            "entities": [_entity(f"Entity {i}", 0.6) for i in range(5)],
            "phrases": [_phrase(0.3, "phrase", str(i)) for i in range(20)],
        }

        keywords = normalize_extraction(ExtractionResult.model_validate(payload))

        assert len(keywords) == 15
        assert sum(1 for k in keywords if k.type == "Phrase") == 10

    def test_duplicate_phrase_does_not_pull_in_extra(self):
        phrases = [_phrase(0.3, "same", "words")] + [
            _phrase(0.3, "phrase", letter) for letter in "ABCDEFGH"
        ]
        phrases.insert(1, _phrase(0.3, "same", "words"))
        payload = {
            "entities": [_entity(f"Entity {i}", 0.6) for i in range(8)],
            "phrases": phrases,
        }

        keywords = normalize_extraction(ExtractionResult.model_validate(payload))

        # 7 slots taken from the first 7 qualifying phrases, one of them a duplicate
        texts = [k.text for k in keywords]
        assert len(keywords) == 14
        assert "phrase E" in texts
        assert "phrase F" not in texts

    def test_output_sorted_descending(self, sample_payload):
        sample_payload["phrases"].append(_phrase(0.95, "top", "phrase"))

        keywords = normalize_extraction(ExtractionResult.model_validate(sample_payload))

        scores = [k.score for k in keywords]
        assert scores == sorted(scores, reverse=True)
        assert keywords[0].text == "top phrase"
