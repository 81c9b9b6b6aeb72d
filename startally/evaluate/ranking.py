'''Ranking of options by their score metrics.

The contest order is a strict total order given by a single key tuple,
compared lexicographically:

1.  Total score, descending.
2.  Number of nonzero scores, descending (breadth of support).
3.  Number of fives, descending.
4.  Number of fours, descending.
5.  Number of zeros, ascending (fewer rejections rank higher).
6.  Number of ones, ascending.
7.  Registration order, ascending.

Since the last key is unique, the order never leaves two options equal.
Whether options tied on the total score are genuinely indistinguishable is
answered separately by :func:`is_perfect_tie`.
'''

from typing import Iterable, List, Sequence, Tuple

from startally.election import VotingOption
from startally.vote import Score


def ranking_key(option: VotingOption) -> Tuple[int, ...]:
    '''Return the sort key placing better options first.'''
    metrics = option.metrics
    return (
        -metrics.total,
        -metrics.nonzero,
        -metrics.count(Score.FIVE),
        -metrics.count(Score.FOUR),
        metrics.count(Score.ZERO),
        metrics.count(Score.ONE),
        option.order,
    )


def rank_options(options: Iterable[VotingOption]) -> List[VotingOption]:
    '''Sort options into the contest order, best first.'''
    return sorted(options, key=ranking_key)


def count_tied(ranked: Sequence[VotingOption], start: int = 0) -> int:
    '''Count options sharing the total score of the option at start.

    Only the consecutive run beginning at the start index is counted,
    the option at start included.

    :param ranked: Options in contest order.
    :param start: Index of the first option of the run.
    '''
    if start >= len(ranked):
        return 0
    threshold = ranked[start].metrics.total
    n_tied = 1
    for option in ranked[start+1:]:
        if option.metrics.total != threshold:
            break
        n_tied += 1
    return n_tied


def is_perfect_tie(tied: Sequence[VotingOption]) -> bool:
    '''Return True if the leading two of the tied options are identical.

    Options in contest order that share the same score distribution are
    always adjacent, so comparing the first two members of a tied group is
    enough to tell whether the group's leader is genuinely indistinguishable
    from its runner-up.

    :param tied: Options in contest order, all sharing the same total.
    '''
    if len(tied) < 2:
        return False
    return tied[0].metrics.distribution() == tied[1].metrics.distribution()


def identical_to_first(tied: Sequence[VotingOption]) -> List[VotingOption]:
    '''Return the tied options whose distributions match the first one.'''
    if not tied:
        return []
    reference = tied[0].metrics.distribution()
    return [
        option for option in tied
        if option.metrics.distribution() == reference
    ]
