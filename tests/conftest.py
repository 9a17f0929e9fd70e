import json
import sys
from pathlib import Path

import pytest

# Add repo root to sys.path so config / c_quiz / api import without install
ROOT_PATH = Path(__file__).resolve().parent.parent
if ROOT_PATH.as_posix() not in sys.path:
    sys.path.insert(0, ROOT_PATH.as_posix())

from tests.fakes import FakePlatform, FakeScoringClient


SAMPLE_QUESTIONS = {
    "questions": [
        {
            "id": "Q1",
            "question": "Which keyword declares a constant?",
            "options": {"A": "const", "B": "static"},
            "correct_answer": "A",
        },
        {
            "id": "Q2",
            "question": "What does this print?",
            "code": "int main(){printf(\"%d\",3);return 0;}",
            "options": {"A": "0", "B": "1", "C": "3"},
            "answer": "C",
        },
    ]
}


@pytest.fixture
def sample_data():
    return json.loads(json.dumps(SAMPLE_QUESTIONS))


@pytest.fixture
def catalog_file(tmp_path: Path, sample_data):
    """Write the two-question catalog to a temporary questions.json."""
    path = tmp_path / "questions.json"
    path.write_text(json.dumps(sample_data), encoding="utf-8")
    return str(path)


@pytest.fixture
def platform():
    return FakePlatform()


@pytest.fixture
def scoring_client():
    return FakeScoringClient()
