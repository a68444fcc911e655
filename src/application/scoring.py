import math
import random
from typing import Sequence

import structlog

from ..core.config import Settings, ScoringPolicyType
from ..core.interfaces import ScoringPolicy

logger = structlog.get_logger(__name__)

MIN_SCORE = 0
MAX_SCORE = 100


class RandomScoringPolicy(ScoringPolicy):
    """
    Placeholder scorer: a uniform integer in [low, high], independent of what
    was answered.
    """

    def __init__(self, low: int = 70, high: int = 100, rng: random.Random | None = None):
        if not MIN_SCORE <= low <= high <= MAX_SCORE:
            raise ValueError(f"Invalid score range [{low}, {high}]")
        self.low = low
        self.high = high
        self._rng = rng or random.Random()

    def score(self, questions, answers) -> int:
        return self._rng.randint(self.low, self.high)


class FixedScoringPolicy(ScoringPolicy):
    def __init__(self, value: int):
        self.value = value

    def score(self, questions, answers) -> int:
        return self.value


def safe_score(policy: ScoringPolicy,
               questions: Sequence,
               answers: Sequence,
               fallback: int = 50) -> int:
    """Run `policy` and always return an integer in [0, 100]."""
    try:
        value = policy.score(questions, answers)
    except Exception:
        logger.exception("scoring_policy_failed",
                         policy=type(policy).__name__,
                         fallback=fallback)
        return _clamp(fallback)

    if isinstance(value, bool) or not isinstance(value, (int, float)):
        logger.warning("scoring_policy_invalid_result",
                       policy=type(policy).__name__,
                       result_type=type(value).__name__,
                       fallback=fallback)
        return _clamp(fallback)

    if math.isnan(value):
        logger.warning("scoring_policy_invalid_result",
                       policy=type(policy).__name__,
                       result=value,
                       fallback=fallback)
        return _clamp(fallback)

    clamped = _clamp(value)
    if clamped != value:
        logger.warning("scoring_policy_out_of_range",
                       policy=type(policy).__name__,
                       result=value,
                       clamped=clamped)
    return clamped


def _clamp(value: int | float) -> int:
    # Clamp before int() so infinities land on the bounds
    return int(max(MIN_SCORE, min(MAX_SCORE, value)))


def get_scoring_policy(settings: Settings) -> ScoringPolicy:
    if settings.SCORING_POLICY == ScoringPolicyType.FIXED:
        return FixedScoringPolicy(settings.FIXED_SCORE)
    return RandomScoringPolicy(low=settings.SCORE_MIN, high=settings.SCORE_MAX)
