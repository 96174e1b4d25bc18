"""
Unit tests for score aggregation and progress arithmetic.
"""

from types import SimpleNamespace

import pytest

from app.services.scoring import aggregate_scores, compute_progress, count_answered, meets_threshold

pytestmark = pytest.mark.unit


def make_questions():
    # Criterion A: questions 1-3; criterion B: questions 4-5
    return [
        SimpleNamespace(id=1, criterion_number=1, criterion_name="A"),
        SimpleNamespace(id=2, criterion_number=1, criterion_name="A"),
        SimpleNamespace(id=3, criterion_number=1, criterion_name="A"),
        SimpleNamespace(id=4, criterion_number=2, criterion_name="B"),
        SimpleNamespace(id=5, criterion_number=2, criterion_name="B"),
    ]


def answer(question_id, score):
    return SimpleNamespace(question_id=question_id, score=score)


def test_criterion_average_ignores_unanswered_questions():
    summary = aggregate_scores(make_questions(), [answer(1, 2), answer(2, 4), answer(3, None)])

    criterion_a, criterion_b = summary.criteria
    assert criterion_a.criterion_number == 1
    assert criterion_a.total_questions == 3
    assert criterion_a.answered_questions == 2
    assert criterion_a.average_score == 3.0

    assert criterion_b.total_questions == 2
    assert criterion_b.answered_questions == 0
    assert criterion_b.average_score == 0


def test_overall_score_skips_criteria_without_answers():
    summary = aggregate_scores(make_questions(), [answer(1, 2), answer(2, 4)])

    assert summary.total_score == 3.0


def test_overall_score_is_mean_of_criterion_averages():
    answers = [answer(1, 5), answer(2, 5), answer(3, 5), answer(4, 1)]

    summary = aggregate_scores(make_questions(), answers)

    assert [c.average_score for c in summary.criteria] == [5.0, 1.0]
    assert summary.total_score == 3.0


def test_no_answers_scores_zero():
    summary = aggregate_scores(make_questions(), [])

    assert summary.total_score == 0
    assert all(c.average_score == 0 for c in summary.criteria)
    assert len(summary.criteria) == 2


def test_answers_for_unknown_questions_are_ignored():
    summary = aggregate_scores(make_questions(), [answer(1, 4), answer(999, 1)])

    assert summary.criteria[0].scores == [4]
    assert summary.total_score == 4.0


def test_type_without_questions_yields_no_criteria():
    summary = aggregate_scores([], [answer(1, 3)])

    assert summary.criteria == []
    assert summary.total_score == 0


def test_progress_percentage():
    answers = [answer(1, 2), answer(2, 4), answer(3, None)]

    assert count_answered(answers) == 2
    assert compute_progress(2, 5) == 40.0


def test_progress_is_none_without_questions():
    assert compute_progress(0, 0) is None


@pytest.mark.parametrize(
    "answered,total,expected",
    [(2, 5, False), (3, 5, True), (5, 10, True), (0, 0, False)],
)
def test_completion_threshold(answered, total, expected):
    assert meets_threshold(answered, total, 0.5) is expected
