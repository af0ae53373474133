import pytest

from domains.jira.continuity.question_detection import QUESTION_PHRASES, is_question


@pytest.mark.parametrize(
    "text",
    [
        "Is this ready?",
        "?",
        "CAN YOU check the logs",
        "Could you share the payload",
        "I need to know the deadline",
        "Wondering how this interacts with billing",
        "Please clarify the acceptance criteria",
        "how do we deploy this",
    ],
)
def test_detects_questions(text):
    assert is_question(text)


@pytest.mark.parametrize("text", ["Done.", "", "Deployed to staging", "Question answered in the doc"])
def test_ignores_statements(text):
    assert not is_question(text)


@pytest.mark.parametrize("text", [None, 42, {"content": []}])
def test_non_string_input_is_not_a_question(text):
    assert not is_question(text)


def test_every_phrase_is_detected_on_its_own():
    for phrase in QUESTION_PHRASES:
        assert is_question(f"... {phrase.upper()} ..."), phrase
