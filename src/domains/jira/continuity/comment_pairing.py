"""
Question/response pairing over issue comments.

Each comment that reads like a question is paired with the first later
comment written by someone else, and the delay between them is converted to
business hours. This is the basis of the feedback response time metric.
"""

import math
from datetime import tzinfo
from typing import Any, List, Optional, Sequence

from domains.jira.continuity.business_hours import adjust_for_business_hours
from domains.jira.continuity.comment_adapter import adapt_issue_comment, extract_comment_records
from domains.jira.continuity.models import Comment, QuestionResponsePair
from domains.jira.continuity.question_detection import is_question
from domains.jira.continuity.text_extraction import extract_text
from domains.jira.continuity.timestamps import to_epoch_ms
from log_config import log_manager

logger = log_manager.get_logger("ContinuityAnalysis", "CommentPairing")


def find_response_comment(comments: Sequence[Comment], question_author: str) -> Optional[Comment]:
    """Returns the first comment whose author differs from the question author."""
    for comment in comments:
        if (comment.author_name or "") != question_author:
            return comment
    return None


def process_question_comment(
    comment: Comment, later_comments: Sequence[Comment], tz: Optional[tzinfo] = None
) -> Optional[QuestionResponsePair]:
    """
    Builds the question/response pair for a comment, if it asks a question that got answered.

    Args:
        comment (Comment): Candidate question.
        later_comments (Sequence[Comment]): Comments posted after it, in chronological order.
        tz (Optional[tzinfo]): Timezone defining business hours.

    Returns:
        Optional[QuestionResponsePair]: The pair, or None when there is no question or no answer.
    """
    if not comment.body or not is_question(extract_text(comment.body)):
        return None

    response = find_response_comment(later_comments, comment.author_name or "")
    if response is None:
        return None

    question_ms = to_epoch_ms(comment.created)
    response_ms = to_epoch_ms(response.created)
    if question_ms is None or response_ms is None:
        logger.debug(f"Skipping question at {comment.created}: unparseable timestamp")
        return None

    return QuestionResponsePair(
        question_timestamp=comment.created,
        response_timestamp=response.created,
        response_time_hours=adjust_for_business_hours(question_ms, response_ms, tz),
    )


def process_comments(comments: Sequence[Comment], tz: Optional[tzinfo] = None) -> List[QuestionResponsePair]:
    """
    Walks chronologically sorted comments collecting question/response pairs.

    Comments without a body or an author name are skipped. The output follows
    the order of the questions, and one comment may answer several questions.

    Args:
        comments (Sequence[Comment]): Comments sorted ascending by creation time.
        tz (Optional[tzinfo]): Timezone defining business hours.

    Returns:
        List[QuestionResponsePair]: One pair per answered question.
    """
    pairs: List[QuestionResponsePair] = []

    for index, comment in enumerate(comments):
        if not comment.body or not comment.author_name:
            continue

        pair = process_question_comment(comment, comments[index + 1 :], tz)
        if pair is not None:
            pairs.append(pair)

    return pairs


def _sort_key(comment: Comment) -> float:
    epoch_ms = to_epoch_ms(comment.created)
    return math.inf if epoch_ms is None else epoch_ms


def identify_question_response_pairs(comments_response: Any, tz: Optional[tzinfo] = None) -> List[QuestionResponsePair]:
    """
    Normalizes, sorts and pairs the comments of a JIRA comment response.

    Args:
        comments_response (Any): ``{"comments": [...]}`` or a bare list of comment records.
        tz (Optional[tzinfo]): Timezone defining business hours.

    Returns:
        List[QuestionResponsePair]: Pairs in question order; empty for fewer than two comments.
    """
    records = extract_comment_records(comments_response)
    if len(records) < 2:
        return []

    comments = sorted((adapt_issue_comment(record) for record in records), key=_sort_key)
    return process_comments(comments, tz)


def calculate_feedback_response_time(comments_response: Any, tz: Optional[tzinfo] = None) -> Optional[float]:
    """Average business hours between questions and their responses, or None without pairs."""
    return average_response_time(identify_question_response_pairs(comments_response, tz))


def average_response_time(pairs: Sequence[QuestionResponsePair]) -> Optional[float]:
    if not pairs:
        return None
    return sum(pair.response_time_hours for pair in pairs) / len(pairs)
