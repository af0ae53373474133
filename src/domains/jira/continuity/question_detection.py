"""Lexical heuristics for spotting questions in comment text."""

QUESTION_PHRASES = (
    "can you",
    "could you",
    "would you",
    "what is",
    "what are",
    "how to",
    "how do",
    "please clarify",
    "please explain",
    "i need to know",
    "wondering if",
    "wondering how",
)


def is_question(text: str) -> bool:
    """
    Checks whether a comment text likely contains a question.

    Args:
        text (str): Plain comment text.

    Returns:
        bool: True when the text has a question mark or a known question phrase.
    """
    if not isinstance(text, str):
        return False
    if "?" in text:
        return True
    lowered = text.lower()
    return any(phrase in lowered for phrase in QUESTION_PHRASES)
