"""
Weighted scoring and ranking for the decision matrix

Both functions are pure: they read the project data they are given and
return fresh result objects. Nothing is cached or written back.
"""

import math
from dataclasses import dataclass, field
from typing import Dict, List, Mapping, Sequence, Union

from .models import Criterion, EvaluationMatrix, NEUTRAL_EVALUATION, Option


@dataclass
class OptionResult:
    """Weighted total for one option plus per-criterion contributions"""
    total_score: float
    breakdown: Dict[str, float] = field(default_factory=dict)


@dataclass
class RankedOption:
    """Option annotated with its rounded score"""
    id: str
    name: str
    score: Union[int, float]
    breakdown: Dict[str, float] = field(default_factory=dict)


def round_half_up(value: float) -> Union[int, float]:
    """
    Round to nearest integer with halves going up, like Math.round

    NaN scores 0; infinities are returned unchanged.
    """
    if math.isnan(value):
        return 0
    if math.isinf(value):
        return value
    return int(math.floor(value + 0.5))


def compute_results(
    options: Sequence[Option],
    criteria: Sequence[Criterion],
    evaluations: EvaluationMatrix
) -> Dict[str, OptionResult]:
    """
    Compute weighted totals for every option

    Args:
        options: Options in display order
        criteria: Criteria in display order
        evaluations: option id -> criterion id -> score

    Returns:
        Mapping of option id to OptionResult. Missing cells count as the
        neutral score 3.
    """
    results: Dict[str, OptionResult] = {}

    for option in options:
        row = evaluations.get(option.id, {})
        total_score = 0.0
        breakdown: Dict[str, float] = {}

        for criterion in criteria:
            value = row.get(criterion.id, NEUTRAL_EVALUATION)
            weighted = value * criterion.weight
            breakdown[criterion.id] = weighted
            total_score += weighted

        results[option.id] = OptionResult(total_score=total_score, breakdown=breakdown)

    return results


def rank_options(
    options: Sequence[Option],
    results: Mapping[str, OptionResult]
) -> List[RankedOption]:
    """Sort options by rounded score, highest first; ties keep input order"""
    ranked = []
    for option in options:
        result = results.get(option.id)
        ranked.append(RankedOption(
            id=option.id,
            name=option.name,
            score=round_half_up(result.total_score) if result else 0,
            breakdown=dict(result.breakdown) if result else {}
        ))

    # sorted() is stable
    return sorted(ranked, key=lambda item: item.score, reverse=True)
