"""
Unit Tests for the question model and catalog loader

Covers field normalization (answer → correct_answer), validation
failures mapped to CatalogFormatError and transport failures mapped
to CatalogLoadError.
"""

import json

import pytest
import requests

from c_quiz.errors import CatalogFormatError, CatalogLoadError
from c_quiz.models.question_model import Catalog, Question
from c_quiz.services.catalog_loader import load_catalog, parse_catalog


class _Response:
    def __init__(self, status_code, body=None, raw=None):
        self.status_code = status_code
        self._body = body
        self._raw = raw

    def json(self):
        if self._raw is not None:
            return json.loads(self._raw)
        return self._body


class _Http:
    def __init__(self, response=None, error=None):
        self.response = response
        self.error = error
        self.calls = []

    def get(self, url, timeout=None):
        self.calls.append(url)
        if self.error is not None:
            raise self.error
        return self.response


class TestQuestion:
    """Tests for the Question model."""

    def test_init_when_answer_alias_then_normalized_to_correct_answer(self):
        q = Question.model_validate(
            {"id": 1, "question": "?", "options": {"A": "x", "B": "y"}, "answer": "B"}
        )
        assert q.correct_answer == "B"
        assert q.code is None

    def test_init_when_both_spellings_then_correct_answer_wins(self):
        q = Question.model_validate({
            "id": 1, "question": "?", "options": {"A": "x", "B": "y"},
            "correct_answer": "A", "answer": "B",
        })
        assert q.correct_answer == "A"

    def test_init_when_answer_not_an_option_then_raises(self):
        with pytest.raises(ValueError, match="정답"):
            Question(id=1, question="?", options={"A": "x", "B": "y"}, correct_answer="C")

    def test_init_when_single_option_then_still_valid(self):
        q = Question(id=1, question="?", options={"A": "only"}, correct_answer="A")
        assert list(q.options) == ["A"]

    def test_options_when_loaded_then_presentation_order_kept(self):
        q = Question(id=1, question="?", options={"C": "c", "A": "a", "B": "b"}, correct_answer="A")
        assert list(q.options) == ["C", "A", "B"]

    def test_question_when_assigned_then_frozen(self):
        q = Question(id=1, question="?", options={"A": "x", "B": "y"}, correct_answer="A")
        with pytest.raises(ValueError):
            q.question = "changed"


class TestParseCatalog:
    """Tests for parse_catalog."""

    def test_parse_when_valid_then_ordered_catalog(self, sample_data):
        catalog = parse_catalog(sample_data)
        assert isinstance(catalog, Catalog)
        assert catalog.question_ids == ("Q1", "Q2")
        assert catalog[1].correct_answer == "C"
        assert catalog.get("Q2").code is not None

    def test_parse_when_empty_object_then_format_error(self):
        with pytest.raises(CatalogFormatError):
            parse_catalog({})

    def test_parse_when_questions_not_a_list_then_format_error(self):
        with pytest.raises(CatalogFormatError):
            parse_catalog({"questions": {"id": 1}})

    def test_parse_when_top_level_list_then_format_error(self, sample_data):
        with pytest.raises(CatalogFormatError):
            parse_catalog(sample_data["questions"])

    def test_parse_when_no_questions_then_format_error(self):
        with pytest.raises(CatalogFormatError):
            parse_catalog({"questions": []})

    def test_parse_when_duplicate_ids_then_format_error(self, sample_data):
        sample_data["questions"][1]["id"] = "Q1"
        with pytest.raises(CatalogFormatError):
            parse_catalog(sample_data)

    def test_parse_when_option_text_is_number_then_kept_as_text(self):
        catalog = parse_catalog({"questions": [
            {"id": 1, "question": "x", "options": {"A": 10, "B": 11.5}, "correct_answer": "A"},
        ]})
        assert catalog[0].options == {"A": "10", "B": "11.5"}

    def test_parse_when_question_missing_options_then_format_error(self, sample_data):
        del sample_data["questions"][0]["options"]
        with pytest.raises(CatalogFormatError):
            parse_catalog(sample_data)


class TestLoadCatalog:
    """Tests for load_catalog over files and HTTP."""

    def test_load_when_file_then_catalog(self, catalog_file):
        assert len(load_catalog(catalog_file)) == 2

    def test_load_when_file_missing_then_load_error(self, tmp_path):
        with pytest.raises(CatalogLoadError):
            load_catalog(str(tmp_path / "nope.json"))

    def test_load_when_file_not_json_then_load_error(self, tmp_path):
        path = tmp_path / "questions.json"
        path.write_text("<html>", encoding="utf-8")
        with pytest.raises(CatalogLoadError):
            load_catalog(str(path))

    def test_load_when_url_ok_then_catalog(self, sample_data):
        http = _Http(_Response(200, sample_data))
        catalog = load_catalog("http://quiz.local/questions.json", http=http)
        assert len(catalog) == 2
        assert http.calls == ["http://quiz.local/questions.json"]

    def test_load_when_url_returns_404_then_load_error(self):
        http = _Http(_Response(404, {"message": "not found"}))
        with pytest.raises(CatalogLoadError, match="404"):
            load_catalog("http://quiz.local/questions.json", http=http)

    def test_load_when_connection_fails_then_load_error(self):
        http = _Http(error=requests.ConnectionError("refused"))
        with pytest.raises(CatalogLoadError):
            load_catalog("https://quiz.local/questions.json", http=http)

    def test_load_when_url_body_not_json_then_load_error(self):
        http = _Http(_Response(200, raw="not json"))
        with pytest.raises(CatalogLoadError):
            load_catalog("http://quiz.local/questions.json", http=http)

    def test_load_when_url_body_empty_object_then_format_error(self):
        http = _Http(_Response(200, {}))
        with pytest.raises(CatalogFormatError):
            load_catalog("http://quiz.local/questions.json", http=http)
