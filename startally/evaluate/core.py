'''General evaluator machinery: outcome errors, ties and pairwise counts.'''

from __future__ import annotations

import abc
from typing import Any, Iterable, Tuple

from startally.candidate import Candidate
from startally.vote import Ballot


class VotingSystemError(Exception):
    '''A valid election ended up in a state with no decidable winner.

    These are outcomes, not faults: evaluating the same ballots again gives
    the same error.
    '''
    code: str = 'undecidable'
    description: str = 'no winner can be declared'


class InsufficientOptions(VotingSystemError):
    '''Fewer than two options are registered, so there can be no run-off.

    :param n_options: Number of options registered.
    '''
    code = 'insufficient_options'
    description = 'at least two options are needed to declare a winner'

    def __init__(self, n_options: int):
        self.n_options = n_options
        super().__init__(f'need at least 2 options, got {n_options}')


class TieError(VotingSystemError):
    '''Options are tied in a way the tiebreaking rules cannot resolve.

    :param tied: The tied options.
    '''
    place: str = NotImplemented

    def __init__(self, tied: Iterable[Candidate]):
        self.tied = Tie(tied)
        super().__init__(
            f'perfect tie for {self.place} place between '
            + ', '.join(sorted(repr(cand) for cand in self.tied))
        )


class FirstPlaceTie(TieError):
    '''Two or more leading options have identical score distributions.'''
    code = 'first_place_tie'
    description = 'true tie for first place, no winner can be declared'
    place = 'first'


class SecondPlaceTie(TieError):
    '''The second run-off place is contested by options with identical
    score distributions and the leader does not beat all of them.'''
    code = 'second_place_tie'
    description = ('true tie for second place, the run-off cannot be '
                   'determined')
    place = 'second'


class Tie(frozenset):
    '''Options tied for a place.

    This object, a subclass of ``frozenset``, is attached to the tie errors
    raised by evaluators so that the caller can present the tied options.
    '''
    def __repr__(self) -> str:
        return 'Tie(' + repr(set(self)) + ')'


def head_to_head(ballots: Iterable[Ballot],
                 option1: Candidate,
                 option2: Candidate,
                 ) -> Tuple[int, int]:
    '''Count ballots preferring either of two options.

    Only ballots scoring both options take part; a ballot scoring one option
    higher than the other counts as one vote for it, equal scores count
    for neither.

    :param ballots: Ballots to count.
    :param option1: The first option.
    :param option2: The second option.
    :returns: Numbers of ballots preferring the first and the second option.
    '''
    votes1, votes2 = 0, 0
    for ballot in ballots:
        if option1 in ballot and option2 in ballot:
            score1, score2 = ballot[option1], ballot[option2]
            if score1 > score2:
                votes1 += 1
            elif score2 > score1:
                votes2 += 1
    return votes1, votes2


class Evaluator(metaclass=abc.ABCMeta):
    '''Evaluate an election and determine its result.

    A root abstract base class for all evaluators.
    '''
    @abc.abstractmethod
    def evaluate(self, election, *args, **kwargs) -> Any:
        '''Determine the result of the election.'''
        raise NotImplementedError
