"""
Score aggregation and progress arithmetic for assessments.

Pure functions over question/answer records (ORM rows or anything with the
same attributes) so the rules can be exercised without a database.
"""

from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional


@dataclass
class CriterionResult:
    """Aggregate for one criterion of one assessment."""

    criterion_number: int
    criterion_name: str
    total_questions: int
    scores: List[int] = field(default_factory=list)

    @property
    def answered_questions(self) -> int:
        return len(self.scores)

    @property
    def average_score(self) -> float:
        if not self.scores:
            return 0
        return sum(self.scores) / len(self.scores)


@dataclass
class ScoreSummary:
    criteria: List[CriterionResult]
    total_score: float


def aggregate_scores(questions: Iterable, answers: Iterable) -> ScoreSummary:
    """
    Group answered scores by criterion and average them.

    A criterion with no answered question averages 0 but is left out of the
    overall mean. Answers pointing at questions outside the given set are
    ignored, as are answers without a score.
    """
    criteria: Dict[int, CriterionResult] = {}
    question_criterion: Dict[int, int] = {}

    for question in questions:
        entry = criteria.get(question.criterion_number)
        if entry is None:
            entry = CriterionResult(
                criterion_number=question.criterion_number,
                criterion_name=question.criterion_name,
                total_questions=0,
            )
            criteria[question.criterion_number] = entry
        entry.total_questions += 1
        question_criterion[question.id] = question.criterion_number

    for answer in answers:
        if answer.score is None:
            continue
        criterion_number = question_criterion.get(answer.question_id)
        if criterion_number is None:
            continue
        criteria[criterion_number].scores.append(answer.score)

    answered = [c.average_score for c in criteria.values() if c.average_score > 0]
    total_score = sum(answered) / len(answered) if answered else 0

    return ScoreSummary(criteria=list(criteria.values()), total_score=total_score)


def count_answered(answers: Iterable) -> int:
    """Number of answers that carry a score."""
    return sum(1 for answer in answers if answer.score is not None)


def compute_progress(answered_questions: int, total_questions: int) -> Optional[float]:
    """Percentage of questions answered; None when the type has no questions."""
    if total_questions <= 0:
        return None
    return answered_questions / total_questions * 100


def meets_threshold(answered_questions: int, total_questions: int, ratio: float) -> bool:
    """True when at least ``ratio`` of the questions are answered."""
    if total_questions <= 0:
        return False
    return answered_questions >= total_questions * ratio
