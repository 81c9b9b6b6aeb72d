"""Aggregate score metrics and descriptive statistics of an election.

Every registered option keeps a :class:`ScoreMetrics` record that is updated
as each ballot is cast, so the aggregates never need to be recomputed from
the ballot log. The statistics produced by :func:`compute_statistics` are
derived from these records and are available regardless of whether the
election has a decidable winner.
"""

import dataclasses
from fractions import Fraction
from typing import Any, Dict, List, Optional, Sequence, Tuple

from startally.candidate import Candidate
from startally.persist import simple_serialization
from startally.vote import Score, SCORE_VALUES


@simple_serialization
class ScoreMetrics:
    '''Running score aggregate of a single option.

    :param total: Sum of all scores received.
    :param by_value: Number of times each score (0 to 5) was received,
        indexed by the score.
    '''
    def __init__(self,
                 total: int = 0,
                 by_value: Optional[Sequence[int]] = None,
                 ):
        if by_value is None:
            by_value = [0] * len(SCORE_VALUES)
        elif len(by_value) != len(SCORE_VALUES):
            raise ValueError(
                f'by_value must have {len(SCORE_VALUES)} items, '
                f'got {by_value!r}'
            )
        self.total = total
        self.by_value = list(by_value)

    def record(self, score: Score) -> None:
        '''Add a single score received by the option.'''
        self.total += int(score)
        self.by_value[score] += 1

    def count(self, score: Score) -> int:
        '''Return how many times the given score was received.'''
        return self.by_value[score]

    @property
    def n_scored(self) -> int:
        '''Number of ballots that scored the option.'''
        return sum(self.by_value)

    @property
    def nonzero(self) -> int:
        '''Number of ballots that gave the option a score above zero.'''
        return sum(self.by_value[Score.ONE:])

    def distribution(self) -> Tuple[int, ...]:
        return tuple(self.by_value)

    def mean(self) -> Fraction:
        '''Average score among the ballots that scored the option.

        Zero if nobody scored the option.
        '''
        if not self.n_scored:
            return Fraction(0)
        return Fraction(self.total, self.n_scored)

    def copy(self) -> 'ScoreMetrics':
        return ScoreMetrics(self.total, self.by_value)

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, ScoreMetrics):
            return NotImplemented
        return self.total == other.total and self.by_value == other.by_value

    def __repr__(self) -> str:
        return f'ScoreMetrics(total={self.total}, by_value={self.by_value})'


@dataclasses.dataclass(frozen=True)
class OptionStatistics:
    """Descriptive statistics of scores received by a single option."""
    option: Candidate
    total_score: int
    average_score: Fraction
    frequency: Dict[int, int]
    ballot_count: int

    @classmethod
    def from_metrics(cls,
                     option: Candidate,
                     metrics: ScoreMetrics,
                     ) -> 'OptionStatistics':
        return cls(
            option=option,
            total_score=metrics.total,
            average_score=metrics.mean(),
            frequency={int(score): metrics.count(score)
                       for score in SCORE_VALUES},
            ballot_count=metrics.n_scored,
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            'option': self.option,
            'total_score': self.total_score,
            'average_score': float(self.average_score),
            'frequency': {str(score): count
                          for score, count in self.frequency.items()},
            'ballot_count': self.ballot_count,
        }


@dataclasses.dataclass(frozen=True)
class ElectionStatistics:
    """Descriptive statistics of the whole election.

    Options are listed in the order they were registered.
    """
    total_ballots: int
    options: List[OptionStatistics]

    def __getitem__(self, option: Candidate) -> OptionStatistics:
        for opt_stats in self.options:
            if opt_stats.option == option:
                return opt_stats
        raise KeyError(option)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'total_ballots': self.total_ballots,
            'options': [opt_stats.to_dict() for opt_stats in self.options],
        }


def compute_statistics(election) -> ElectionStatistics:
    """Compute descriptive statistics of the election's current state.

    :param election: A :class:`startally.election.Election`.
    """
    with election.lock:
        return ElectionStatistics(
            total_ballots=len(election.ballots),
            options=[
                OptionStatistics.from_metrics(option.value, option.metrics)
                for option in election.options
            ],
        )
