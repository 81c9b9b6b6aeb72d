import sys
import os

import pytest

sys.path.append(os.path.join(os.path.dirname(__file__), '..', '..'))
import startally.evaluate.core
from startally.evaluate.core import Tie, FirstPlaceTie, SecondPlaceTie, \
    InsufficientOptions, VotingSystemError
from startally.vote import Ballot


def test_head_to_head():
    ballots = [
        Ballot({'A': 5, 'B': 3}),
        Ballot({'A': 1}),
        Ballot({'A': 4, 'B': 4}),
        Ballot({'A': 2, 'B': 5}),
        Ballot({'B': 0, 'A': 0, 'C': 5}),
    ]
    assert startally.evaluate.core.head_to_head(ballots, 'A', 'B') == (1, 1)
    assert startally.evaluate.core.head_to_head(ballots, 'B', 'A') == (1, 1)
    assert startally.evaluate.core.head_to_head(ballots, 'C', 'A') == (1, 0)


def test_head_to_head_missing_is_abstention():
    ballots = [Ballot({'A': 5}), Ballot({'B': 0}), Ballot({'A': 0, 'B': 1})]
    assert startally.evaluate.core.head_to_head(ballots, 'A', 'B') == (0, 1)


def test_head_to_head_no_ballots():
    assert startally.evaluate.core.head_to_head([], 'A', 'B') == (0, 0)


def test_tie_errors():
    err = FirstPlaceTie(['A', 'B'])
    assert err.tied == Tie(['A', 'B'])
    assert err.code == 'first_place_tie'
    assert "'A'" in str(err) and 'first' in str(err)
    err = SecondPlaceTie(['B', 'C'])
    assert err.tied == {'B', 'C'}
    assert 'second' in str(err)


@pytest.mark.parametrize('error', [
    InsufficientOptions(1),
    FirstPlaceTie(['A', 'B']),
    SecondPlaceTie(['B', 'C']),
])
def test_outcome_errors(error):
    assert isinstance(error, VotingSystemError)
    assert error.description
    assert error.code != VotingSystemError.code
