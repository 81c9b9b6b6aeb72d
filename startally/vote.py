'''Scores, ballots and ballot validators.

A voter gives every option they want to rate a :class:`Score` - an integer
from 0 (worst) to 5 (best). The ratings of a single voter form a
:class:`Ballot`, an immutable mapping of option identifiers to scores. An
option absent from the ballot was not rated by the voter at all, which is
different from an explicit score of zero.

Ballots are validated when they are constructed; a ballot that contains any
invalid score is rejected as a whole by raising :class:`InvalidScore`. Whether
the scored options exist in a particular election is checked when the ballot
is cast (see :meth:`startally.election.Election.cast_ballot`), or beforehand
by a :class:`BallotValidator`.
'''

import enum
import collections.abc
from typing import Any, Dict, Iterable, Iterator, Mapping, Tuple, Union, \
    Collection

from startally.candidate import Candidate, InvalidOption
from startally.persist import simple_serialization, scoped_class_name, \
    serialize_value, deserialize_value


class VoteError(Exception):
    '''A ballot is invalid given the election rules.'''

    code: str = 'invalid_ballot'
    description: str = 'the ballot is invalid'


class InvalidScore(VoteError, ValueError):
    '''A score outside of the allowed range was given.

    :param value: The offending score value.
    :param candidate: The option the score was given to, if known.
    '''
    code = 'invalid_score'
    description = 'scores must be whole numbers from 0 to 5'

    def __init__(self, value: Any, candidate: Any = None):
        self.value = value
        self.candidate = candidate
        message = f'invalid score: {value!r}'
        if candidate is not None:
            message += f' for option {candidate!r}'
        message += f', allowed: {int(Score.ZERO)}-{int(Score.FIVE)}'
        super().__init__(message)


class DuplicateScoring(VoteError):
    '''A single ballot scored an option more than once.

    :param candidate: The option scored repeatedly.
    '''
    code = 'duplicate_scoring'
    description = 'each option may only be scored once per ballot'

    def __init__(self, candidate: Any):
        self.candidate = candidate
        super().__init__(f'option scored more than once: {candidate!r}')


class IncompleteBallot(VoteError):
    '''A ballot left some options unrated where all must be rated.

    :param missing: The options left without a score.
    '''
    code = 'incomplete_ballot'
    description = 'every option must be scored'

    def __init__(self, missing: Collection[Any]):
        self.missing = list(missing)
        super().__init__(
            'missing score for option(s): '
            + ', '.join(repr(cand) for cand in self.missing)
        )


class Score(enum.IntEnum):
    '''A single score a voter can give to an option.'''
    ZERO = 0
    ONE = 1
    TWO = 2
    THREE = 3
    FOUR = 4
    FIVE = 5

    @classmethod
    def _missing_(cls, value):
        raise InvalidScore(value)

    @classmethod
    def from_value(cls, value: Any, candidate: Any = None) -> 'Score':
        '''Convert an integer to a score.

        :param value: Integer from 0 to 5. Booleans and non-integers
            are rejected.
        :param candidate: Option being scored, reported in the error.
        :raises InvalidScore: If the value is not an allowed score.
        '''
        if isinstance(value, cls):
            return value
        if isinstance(value, bool) or not isinstance(value, int):
            raise InvalidScore(value, candidate)
        try:
            return cls(value)
        except InvalidScore:
            raise InvalidScore(value, candidate) from None


MAX_SCORE = max(Score)
MIN_SCORE = min(Score)
SCORE_VALUES: Tuple[Score, ...] = tuple(Score)

RawScoresType = Union[Mapping[Candidate, int], Iterable[Tuple[Candidate, int]]]


class Ballot(collections.abc.Mapping):
    '''A single voter's scores for any number of options.

    The ballot is immutable and hashable. It is built from a mapping of option
    identifiers to integer scores or from an iterable of
    ``(identifier, score)`` pairs. Construction is all-or-nothing: if any
    score is invalid, no ballot is produced. An empty ballot (a voter who
    rates nothing) is valid.

    :param scores: Scores given by the voter.
    :raises InvalidScore: If any of the scores is out of range.
    :raises DuplicateScoring: If the pairs given name an option twice.
    '''
    def __init__(self, scores: RawScoresType = ()):
        if isinstance(scores, collections.abc.Mapping):
            pairs = scores.items()
        else:
            pairs = scores
        validated = {}
        for cand, value in pairs:
            if cand in validated:
                raise DuplicateScoring(cand)
            validated[cand] = Score.from_value(value, cand)
        self._scores = validated

    @classmethod
    def from_dict(cls, params: Dict[str, Any]) -> 'Ballot':
        return cls(deserialize_value(params['scores']))

    def to_dict(self) -> Dict[str, Any]:
        return {
            'class': scoped_class_name(self),
            'scores': serialize_value(self.scores),
        }

    @property
    def scores(self) -> Dict[Candidate, Score]:
        '''A copy of the ballot contents as a dictionary.'''
        return dict(self._scores)

    def __getitem__(self, candidate: Candidate) -> Score:
        return self._scores[candidate]

    def __iter__(self) -> Iterator[Candidate]:
        return iter(self._scores)

    def __len__(self) -> int:
        return len(self._scores)

    def __hash__(self) -> int:
        return hash(frozenset(self._scores.items()))

    def __repr__(self) -> str:
        inner = ', '.join(
            f'{cand!r}: {int(score)}' for cand, score in self._scores.items()
        )
        return f'Ballot({{{inner}}})'


@simple_serialization
class BallotValidator:
    '''Validate that a ballot fits the options of a given election.

    This is meant for callers that want to check a ballot before casting it;
    the election itself rejects ballots naming unknown options anyway.

    :param options: Identifiers of all registered options.
    :param require_complete: Whether every option must be scored.
    '''
    def __init__(self,
                 options: Collection[Candidate],
                 require_complete: bool = False,
                 ):
        self.options = list(options)
        self.require_complete = require_complete

    def validate(self, ballot: Union[Ballot, RawScoresType]) -> Ballot:
        '''Check the ballot and return it in validated form.

        :param ballot: A ballot or raw scores to construct one from.
        :raises InvalidScore: If any of the scores is out of range.
        :raises InvalidOption: If the ballot scores an unknown option.
        :raises IncompleteBallot: If completeness is required and some
            options are not scored.
        '''
        if not isinstance(ballot, Ballot):
            ballot = Ballot(ballot)
        for cand in ballot:
            if cand not in self.options:
                raise InvalidOption(cand)
        if self.require_complete:
            missing = [cand for cand in self.options if cand not in ballot]
            if missing:
                raise IncompleteBallot(missing)
        return ballot
