'''Evaluate elections and determine their winners.

An evaluator takes an :class:`startally.election.Election` and returns its
result; :class:`cardinal.STAR` returns a :class:`cardinal.RunoffResult`.
Elections with no decidable winner make the evaluator raise a subclass of
:class:`core.VotingSystemError` - these are regular outcomes of the count
(e.g. a perfect tie for first place) that do not change unless the ballots
change.

Evaluators do not validate ballots; that happens when the ballots are cast.
'''

from startally.evaluate.core import VotingSystemError, InsufficientOptions, \
    TieError, FirstPlaceTie, SecondPlaceTie, Tie, Evaluator, \
    head_to_head    # noqa
from startally.evaluate.cardinal import STAR, RunoffResult, \
    HeadToHeadMatchup    # noqa
