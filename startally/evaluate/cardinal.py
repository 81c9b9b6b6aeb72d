"""STAR (Score Then Automatic Run-off) evaluation.

Voters score every option from 0 to 5. The two options ranked best by their
score metrics (see :mod:`startally.evaluate.ranking`) become finalists and
the finalist preferred on more ballots wins.

Ties on the total score are handled asymmetrically:

-   A tie for first place is resolved by the secondary ranking keys, unless
    the two leading options have identical score distributions, in which case
    no leader can be named and :class:`FirstPlaceTie` is raised.
-   A tie for second place between options with identical distributions is
    harmless if the leader beats every one of them head-to-head (the run-off
    result is then the same whoever is picked); otherwise
    :class:`SecondPlaceTie` is raised.
"""

import dataclasses
import logging
from typing import Any, Dict, List, Sequence, Tuple

from startally.candidate import Candidate
from startally.election import Election, VotingOption
from startally.evaluate.core import Evaluator, InsufficientOptions, \
    FirstPlaceTie, SecondPlaceTie, head_to_head
from startally.evaluate.ranking import rank_options, count_tied, \
    is_perfect_tie, identical_to_first
from startally.persist import simple_serialization
from startally.vote import Ballot


logger = logging.getLogger(__name__)


@dataclasses.dataclass(frozen=True)
class HeadToHeadMatchup:
    """Numbers of ballots preferring each of two options."""
    candidate1: Candidate
    candidate2: Candidate
    votes1: int
    votes2: int

    def to_dict(self) -> Dict[str, Any]:
        return dataclasses.asdict(self)


@dataclasses.dataclass(frozen=True)
class RunoffResult:
    """The outcome of a STAR election.

    ``head_to_head`` holds the run-off votes of the first and second finalist;
    ``matchups`` holds informational pairwise counts of the winner against
    the next-ranked options.
    """
    winner: Candidate
    finalist1: Candidate
    finalist2: Candidate
    head_to_head: Tuple[int, int]
    matchups: Tuple[HeadToHeadMatchup, ...] = ()

    def to_dict(self) -> Dict[str, Any]:
        return {
            'winner': self.winner,
            'finalist1': self.finalist1,
            'finalist2': self.finalist2,
            'head_to_head': list(self.head_to_head),
            'matchups': [matchup.to_dict() for matchup in self.matchups],
        }


@simple_serialization
class STAR(Evaluator):
    """Score Then Automatic Run-off (STAR) single-winner evaluator.

    The evaluation is read-only; evaluating an unchanged election again
    gives an identical result.

    :param n_matchups: Number of options ranked after the leader for which
        auxiliary head-to-head counts against the winner are reported
        (the second finalist is skipped).
    """
    def __init__(self, n_matchups: int = 3):
        self.n_matchups = n_matchups

    def evaluate(self, election: Election) -> RunoffResult:
        """Determine the winner of the election.

        :param election: The election to evaluate.
        :raises InsufficientOptions: If fewer than two options
            are registered.
        :raises FirstPlaceTie: If there is a perfect tie for first place.
        :raises SecondPlaceTie: If there is an unresolvable perfect tie for
            second place.
        """
        with election.lock:
            ranked = self.rank(election)
            ballots = election.ballots
            finalist1, finalist2 = self._select_finalists(ranked, ballots)
            votes1, votes2 = head_to_head(
                ballots, finalist1.value, finalist2.value
            )
            winner = finalist1 if votes1 >= votes2 else finalist2
            logger.info('run-off %r vs %r: %d to %d, %r wins',
                        finalist1.value, finalist2.value, votes1, votes2,
                        winner.value)
            return RunoffResult(
                winner=winner.value,
                finalist1=finalist1.value,
                finalist2=finalist2.value,
                head_to_head=(votes1, votes2),
                matchups=tuple(
                    self._matchups(ranked, ballots, winner, finalist2)
                ),
            )

    def rank(self, election: Election) -> List[VotingOption]:
        """Return the options of the election in contest order.

        :raises InsufficientOptions: If fewer than two options
            are registered.
        """
        options = election.options
        if len(options) < 2:
            raise InsufficientOptions(len(options))
        ranked = rank_options(options)
        logger.debug('contest order: %s', [
            (option.value, option.metrics.total) for option in ranked
        ])
        return ranked

    def select_finalists(self,
                         election: Election,
                         ) -> Tuple[Candidate, Candidate]:
        """Return the identifiers of the two run-off finalists."""
        with election.lock:
            finalist1, finalist2 = self._select_finalists(
                self.rank(election), election.ballots
            )
        return finalist1.value, finalist2.value

    def _select_finalists(self,
                          ranked: Sequence[VotingOption],
                          ballots: Sequence[Ballot],
                          ) -> Tuple[VotingOption, VotingOption]:
        first_ties = count_tied(ranked, 0)
        if first_ties > 1:
            tied = ranked[:first_ties]
            if is_perfect_tie(tied):
                logger.info('perfect tie for first place: %s',
                            [option.value for option in tied])
                raise FirstPlaceTie(
                    option.value for option in identical_to_first(tied)
                )
            logger.info('%d options tied on total for first place, '
                        'broken by secondary ranking', first_ties)
            return tied[0], tied[1]
        leader = ranked[0]
        second_ties = count_tied(ranked, 1)
        if second_ties > 1:
            tied = ranked[1:1+second_ties]
            if is_perfect_tie(tied):
                if all(self._beats(ballots, leader, option)
                       for option in tied):
                    logger.info('perfect tie for second place resolved, '
                                '%r beats all of %s', leader.value,
                                [option.value for option in tied])
                    return leader, tied[0]
                logger.info('perfect tie for second place: %s',
                            [option.value for option in tied])
                raise SecondPlaceTie(
                    option.value for option in identical_to_first(tied)
                )
            logger.info('%d options tied on total for second place, '
                        'broken by secondary ranking', second_ties)
            return leader, tied[0]
        return leader, ranked[1]

    @staticmethod
    def _beats(ballots: Sequence[Ballot],
               option: VotingOption,
               opponent: VotingOption,
               ) -> bool:
        votes, opp_votes = head_to_head(ballots, option.value, opponent.value)
        logger.debug('%r vs %r: %d to %d',
                     option.value, opponent.value, votes, opp_votes)
        return votes > opp_votes

    def _matchups(self,
                  ranked: Sequence[VotingOption],
                  ballots: Sequence[Ballot],
                  winner: VotingOption,
                  finalist2: VotingOption,
                  ) -> List[HeadToHeadMatchup]:
        matchups = []
        for runner_up in ranked[1:1+self.n_matchups]:
            if runner_up is finalist2:
                continue
            votes1, votes2 = head_to_head(
                ballots, winner.value, runner_up.value
            )
            matchups.append(HeadToHeadMatchup(
                candidate1=winner.value,
                candidate2=runner_up.value,
                votes1=votes1,
                votes2=votes2,
            ))
        return matchups
