"""Deal score: 0-100 points from four metrics, with a letter grade and verdict.

Each metric is worth up to 25 points, awarded by the highest band floor the
metric reaches. Bands, grades and verdicts are tables so they can be tuned
without touching the scoring loop.
"""

import logging
from dataclasses import dataclass
from decimal import Decimal

from src.models.results import CalculationResults, DealScore

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ScoreRule:
    label: str
    metric: str  # CalculationResults attribute
    bands: tuple[tuple[Decimal, int], ...]  # (floor, points), highest floor first
    undefined_points: int = 0  # Awarded when the metric is None

    @property
    def max_points(self) -> int:
        return max([points for _, points in self.bands] + [self.undefined_points])

    def points(self, value: Decimal | None) -> int:
        if value is None:
            return self.undefined_points
        for floor, points in self.bands:
            if value >= floor:
                return points
        return 0


def _bands(*pairs: tuple[str, int]) -> tuple[tuple[Decimal, int], ...]:
    return tuple((Decimal(floor), points) for floor, points in pairs)


DEFAULT_SCORE_RULES = (
    ScoreRule(
        "Cash Flow", "monthly_cash_flow",
        _bands(("400", 25), ("200", 20), ("100", 15), ("0", 10)),
    ),
    ScoreRule(
        "Cash-on-Cash Return", "cash_on_cash_return",
        _bands(("15", 25), ("10", 20), ("8", 15), ("5", 10)),
    ),
    ScoreRule(
        "Cap Rate", "cap_rate",
        _bands(("10", 25), ("8", 20), ("6", 15), ("4", 10)),
    ),
    # No debt to cover scores as full coverage
    ScoreRule(
        "Debt Service Coverage", "debt_service_coverage_ratio",
        _bands(("1.5", 25), ("1.25", 20), ("1.1", 15), ("1.0", 10)),
        undefined_points=25,
    ),
)

GRADES = (
    (90, "A+"),
    (85, "A"),
    (80, "A-"),
    (75, "B+"),
    (70, "B"),
    (65, "B-"),
    (60, "C+"),
    (55, "C"),
    (50, "C-"),
    (40, "D"),
)

VERDICTS = (
    (80, "Strong Buy", "Meets or exceeds benchmarks in all categories."),
    (60, "Consider", "Solid deal with room for negotiation on price or terms."),
    (40, "Proceed with Caution", "Below average returns. Negotiate harder."),
)


def grade_for(score: int) -> str:
    for floor, grade in GRADES:
        if score >= floor:
            return grade
    return "F"


def verdict_for(score: int) -> tuple[str, str]:
    for floor, verdict, detail in VERDICTS:
        if score >= floor:
            return verdict, detail
    return "Pass", "Numbers don't work at current terms."


def score_deal(
    results: CalculationResults,
    rules: tuple[ScoreRule, ...] | list[ScoreRule] | None = None,
) -> DealScore:
    """Score a deal's metrics against the band table."""
    if rules is None:
        rules = DEFAULT_SCORE_RULES

    breakdown = []
    for rule in rules:
        if not hasattr(results, rule.metric):
            raise ValueError(f"Unknown score metric: {rule.metric}")
        breakdown.append((rule.label, rule.points(getattr(results, rule.metric)), rule.max_points))

    score = sum(points for _, points, _ in breakdown)
    verdict, detail = verdict_for(score)
    logger.debug("Deal score %d (%s): %s", score, grade_for(score), breakdown)

    return DealScore(
        score=score,
        grade=grade_for(score),
        verdict=verdict,
        verdict_detail=detail,
        breakdown=tuple(breakdown),
    )
