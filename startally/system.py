"""A named tally wrapping an election and its evaluator.

:class:`Tally` is the call contract for the service layer: it registers
options, accepts ballots given as plain mappings of option identifiers to
integer scores, and produces the result and descriptive statistics.
:meth:`Tally.report` combines both into a :class:`VoteResult` in which an
undecidable outcome (such as a perfect tie) is reported as an error message
rather than raised.
"""

import dataclasses
import logging
from typing import Any, Dict, Optional, Union

from startally.candidate import Candidate
from startally.election import Election
from startally.evaluate.cardinal import STAR, RunoffResult, HeadToHeadMatchup
from startally.evaluate.core import Evaluator, VotingSystemError
from startally.metrics import ElectionStatistics, compute_statistics
from startally.persist import simple_serialization
from startally.vote import Ballot, BallotValidator, RawScoresType


logger = logging.getLogger(__name__)


@dataclasses.dataclass(frozen=True)
class VoteResult:
    """A report of the election for display and archival.

    Exactly one of ``winner`` and ``error`` is set. ``error`` is a message
    for the voters, ``error_code`` the stable code of the error class
    (e.g. ``first_place_tie``).
    """
    stats: ElectionStatistics
    winner: Optional[Candidate] = None
    error: Optional[str] = None
    error_code: Optional[str] = None
    result: Optional[RunoffResult] = None

    @property
    def head_to_head(self) -> Optional[HeadToHeadMatchup]:
        """The run-off between the finalists, if there was one."""
        if self.result is None:
            return None
        return HeadToHeadMatchup(
            candidate1=self.result.finalist1,
            candidate2=self.result.finalist2,
            votes1=self.result.head_to_head[0],
            votes2=self.result.head_to_head[1],
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            'winner': self.winner,
            'error': self.error,
            'error_code': self.error_code,
            'stats': self.stats.to_dict(),
            'head_to_head': (
                self.head_to_head.to_dict() if self.head_to_head else None
            ),
            'matchups': (
                [matchup.to_dict() for matchup in self.result.matchups]
                if self.result else []
            ),
        }


@simple_serialization
class Tally:
    """A named STAR election with its evaluator.

    :param name: Name of the election, for display.
    :param evaluator: Evaluator determining the winner.
    :param require_complete: Whether every submitted ballot must score all
        registered options.
    :param election: Election to tally; a new empty one by default.
    """
    def __init__(self,
                 name: str = '',
                 evaluator: Evaluator = None,
                 require_complete: bool = False,
                 election: Election = None,
                 ):
        self.name = name
        self.evaluator = evaluator if evaluator is not None else STAR()
        self.require_complete = require_complete
        self.election = election if election is not None else Election()

    def register(self, option: Candidate) -> None:
        """Register an option.

        :raises DuplicateOption: If the option is already registered.
        """
        self.election.add_option(option)

    def submit_ballot(self, scores: Union[Ballot, RawScoresType]) -> Ballot:
        """Validate and cast a ballot.

        :param scores: Mapping of option identifiers to integer scores.
        :raises InvalidScore: If any score is out of range.
        :raises InvalidOption: If an unregistered option is scored.
        :raises IncompleteBallot: If completeness is required and the ballot
            does not score all options.
        """
        with self.election.lock:
            if self.require_complete:
                scores = BallotValidator(
                    self.election.option_ids, require_complete=True
                ).validate(scores)
            return self.election.cast_ballot(scores)

    def compute_result(self) -> RunoffResult:
        """Determine the winner.

        :raises VotingSystemError: If the winner is undecidable.
        """
        return self.evaluator.evaluate(self.election)

    def compute_statistics(self) -> ElectionStatistics:
        """Compute descriptive statistics of the scores received."""
        return compute_statistics(self.election)

    def report(self) -> VoteResult:
        """Compute the result and statistics from a consistent snapshot."""
        with self.election.lock:
            stats = self.compute_statistics()
            try:
                result = self.compute_result()
            except VotingSystemError as err:
                logger.info('%s: no winner: %s', self.name or 'election', err)
                return VoteResult(
                    stats=stats,
                    error=err.description,
                    error_code=err.code,
                )
        return VoteResult(
            stats=stats,
            winner=result.winner,
            result=result,
        )
