"""Aggregate statistics over a test's archived attempts."""

from collections.abc import Iterable

from quizapp.common.rounding import round_half_up
from quizapp.schemas.result import ResultData, ResultStatistics


def aggregate(results: Iterable[ResultData]) -> ResultStatistics:
    """Count, rounded mean, max and min of the attempts' percentages.

    An empty input gives all zeros.
    """
    percentages = [result.percentage for result in results]
    if not percentages:
        return ResultStatistics()
    return ResultStatistics(
        total=len(percentages),
        average=round_half_up(sum(percentages) / len(percentages)),
        highest=max(percentages),
        lowest=min(percentages),
    )
