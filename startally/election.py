'''The election: registered options and the log of accepted ballots.

An :class:`Election` is created empty, gets its options registered and then
accumulates ballots one at a time. Every accepted ballot is immediately
folded into the :class:`startally.metrics.ScoreMetrics` of the options it
scores and appended to the ballot log, so both always describe the same
set of ballots.

All mutations and evaluations take the election's :attr:`Election.lock`, so
an election can be shared between threads; winner determination and
statistics then always observe a consistent snapshot.
'''

import logging
import threading
from typing import Any, Dict, Iterable, List, Tuple, Union

from startally.candidate import Candidate, CandidateError, InvalidOption, \
    DuplicateOption
from startally.metrics import ScoreMetrics
from startally.persist import scoped_class_name, serialize_value, \
    deserialize_value
from startally.vote import Ballot, RawScoresType


logger = logging.getLogger(__name__)


class VotingOption:
    '''A registered option with its running score aggregate.

    :param value: Identifier of the option, unique within the election.
    :param order: Registration sequence number; the final tiebreaker.
    :param metrics: Scores received so far.
    '''
    def __init__(self,
                 value: Candidate,
                 order: int,
                 metrics: ScoreMetrics = None,
                 ):
        self.value = value
        self.order = order
        self.metrics = metrics if metrics is not None else ScoreMetrics()

    def __repr__(self) -> str:
        return f'<VotingOption({self.value!r},{self.order})>'


class Election:
    '''Options and accepted ballots of a single STAR election.

    :param options: Option identifiers to register right away,
        in registration order.
    '''
    def __init__(self, options: Iterable[Candidate] = ()):
        self._options: Dict[Candidate, VotingOption] = {}
        self._ballots: List[Ballot] = []
        self._option_order = 0
        self.lock = threading.RLock()
        for option in options:
            self.add_option(option)

    def add_option(self, option: Candidate) -> None:
        '''Register a new option.

        :param option: Identifier of the option; any hashable object except
            sets and tuples.
        :raises DuplicateOption: If the option is already registered.
        :raises CandidateError: If the identifier is not usable.
        '''
        if not isinstance(option, Candidate):
            raise CandidateError(option, 'a hashable identifier')
        with self.lock:
            if option in self._options:
                raise DuplicateOption(option)
            self._options[option] = VotingOption(option, self._option_order)
            self._option_order += 1
        logger.debug('registered option %r', option)

    def cast_ballot(self, ballot: Union[Ballot, RawScoresType]) -> Ballot:
        '''Accept a ballot, updating the option metrics.

        The ballot is either accepted as a whole or rejected without any
        change to the election.

        :param ballot: A ballot or raw scores to construct one from.
        :returns: The accepted ballot.
        :raises InvalidScore: If raw scores contain an invalid score.
        :raises InvalidOption: If the ballot scores an option that is not
            registered.
        '''
        if not isinstance(ballot, Ballot):
            ballot = Ballot(ballot)
        with self.lock:
            for cand in ballot:
                if cand not in self._options:
                    raise InvalidOption(cand)
            for cand, score in ballot.items():
                self._options[cand].metrics.record(score)
            self._ballots.append(ballot)
        logger.debug('accepted %r', ballot)
        return ballot

    @property
    def options(self) -> List[VotingOption]:
        '''Registered options in registration order.'''
        with self.lock:
            return list(self._options.values())

    @property
    def option_ids(self) -> List[Candidate]:
        '''Identifiers of registered options in registration order.'''
        with self.lock:
            return list(self._options.keys())

    @property
    def ballots(self) -> Tuple[Ballot, ...]:
        '''All accepted ballots in the order they were cast.'''
        with self.lock:
            return tuple(self._ballots)

    def get_option(self, option: Candidate) -> VotingOption:
        '''Return the registered option with the given identifier.

        :raises InvalidOption: If no such option is registered.
        '''
        with self.lock:
            try:
                return self._options[option]
            except KeyError:
                raise InvalidOption(option) from None

    def __contains__(self, option: Any) -> bool:
        with self.lock:
            return option in self._options

    def __len__(self) -> int:
        with self.lock:
            return len(self._options)

    def __repr__(self) -> str:
        with self.lock:
            return (
                f'<Election({len(self._options)} options,'
                f'{len(self._ballots)} ballots)>'
            )

    def to_dict(self) -> Dict[str, Any]:
        '''Serialize the options and ballots.

        Metrics are not stored; they are rebuilt from the ballots when the
        election is restored.
        '''
        with self.lock:
            return {
                'class': scoped_class_name(self),
                'options': serialize_value(list(self._options.keys())),
                'ballots': [
                    serialize_value(ballot.scores) for ballot in self._ballots
                ],
            }

    @classmethod
    def from_dict(cls, params: Dict[str, Any]) -> 'Election':
        '''Restore an election by registering its options and recasting
        its ballots in their original order.

        :param params: A dictionary created by :meth:`to_dict` (the ``class``
            key is optional).
        '''
        election = cls(deserialize_value(params.get('options', [])))
        for scores in params.get('ballots', []):
            election.cast_ballot(deserialize_value(scores))
        return election
