import sys
import os
from fractions import Fraction

import pytest

sys.path.append(os.path.join(os.path.dirname(__file__), '..'))
import startally.system
from startally.candidate import DuplicateOption, InvalidOption
from startally.evaluate.cardinal import HeadToHeadMatchup
from startally.evaluate.core import FirstPlaceTie, InsufficientOptions
from startally.vote import InvalidScore, IncompleteBallot


def make_tally(options, ballots, **kwargs):
    tally = startally.system.Tally(**kwargs)
    for option in options:
        tally.register(option)
    for ballot in ballots:
        tally.submit_ballot(ballot)
    return tally


def test_register_and_submit():
    tally = make_tally(['Pizza', 'Tacos'], [])
    ballot = tally.submit_ballot({'Pizza': 5, 'Tacos': 2})
    assert ballot == {'Pizza': 5, 'Tacos': 2}
    with pytest.raises(DuplicateOption):
        tally.register('Pizza')
    with pytest.raises(InvalidOption):
        tally.submit_ballot({'Sushi': 4})
    with pytest.raises(InvalidScore):
        tally.submit_ballot({'Pizza': 10})
    assert len(tally.election.ballots) == 1


def test_compute_result():
    tally = make_tally('ABC', [
        {'A': 2, 'B': 5, 'C': 4},
        {'A': 5, 'B': 4, 'C': 0},
        {'A': 0, 'B': 3, 'C': 5},
    ])
    result = tally.compute_result()
    assert (result.finalist1, result.finalist2) == ('B', 'C')
    assert result.head_to_head == (2, 1)
    assert result.winner == 'B'


def test_compute_result_errors():
    with pytest.raises(InsufficientOptions):
        make_tally(['A'], [{'A': 5}]).compute_result()
    with pytest.raises(FirstPlaceTie):
        make_tally('AB', [{'A': 3, 'B': 3}]).compute_result()


def test_compute_statistics():
    tally = make_tally('AB', [{'A': 5, 'B': 2}, {'A': 2}, {'A': 4}])
    stats = tally.compute_statistics()
    assert stats.total_ballots == 3
    assert stats['A'].average_score == Fraction(11, 3)
    assert stats['B'].ballot_count == 1


def test_report():
    tally = make_tally('AB', [{'A': 5, 'B': 1}, {'A': 3, 'B': 4}])
    report = tally.report()
    assert report.winner == 'A'
    assert report.error is None
    assert report.error_code is None
    assert report.head_to_head.candidate1 == 'A'
    assert (report.head_to_head.votes1, report.head_to_head.votes2) == (1, 1)
    assert report.stats.total_ballots == 2
    out = report.to_dict()
    assert out['winner'] == 'A'
    assert out['head_to_head'] == {
        'candidate1': 'A', 'candidate2': 'B', 'votes1': 1, 'votes2': 1,
    }
    assert out['matchups'] == []


@pytest.mark.parametrize(('options', 'ballots', 'code'), [
    ('AB', [{'A': 4, 'B': 4}], 'first_place_tie'),
    ('A', [{'A': 4}], 'insufficient_options'),
    ('', [], 'insufficient_options'),
    ('ABC', [
        {'A': 5, 'B': 4, 'C': 0},
        {'A': 5, 'B': 0, 'C': 4},
        {'A': 0, 'B': 1, 'C': 1},
        {'A': 0, 'B': 2, 'C': 2},
    ], 'second_place_tie'),
])
def test_report_error(options, ballots, code):
    report = make_tally(options, ballots, name='Lunch').report()
    assert report.winner is None
    assert report.head_to_head is None
    assert report.error_code == code
    assert report.error
    assert report.to_dict()['head_to_head'] is None
    assert report.stats.total_ballots == len(ballots)


def test_require_complete():
    tally = make_tally('AB', [], require_complete=True)
    with pytest.raises(IncompleteBallot):
        tally.submit_ballot({'A': 5})
    with pytest.raises(InvalidOption):
        tally.submit_ballot({'A': 5, 'B': 1, 'C': 2})
    tally.submit_ballot({'A': 5, 'B': 0})
    assert len(tally.election.ballots) == 1


def test_default_evaluator():
    tally = startally.system.Tally()
    assert tally.evaluator.n_matchups == 3
    assert len(tally.election) == 0


def test_ballot_missing_finalist():
    tally = make_tally('AB', [
        {'A': 5, 'B': 4},
        {'A': 5},
        {'A': 1, 'B': 5},
    ])
    result = tally.compute_result()
    assert (result.finalist1, result.finalist2) == ('A', 'B')
    assert result.head_to_head == (1, 1)
    stats = tally.compute_statistics()
    assert stats['A'].ballot_count == 3
    assert stats['A'].frequency[5] == 2
    assert stats['B'].ballot_count == 2


def test_report_head_to_head_follows_result():
    report = make_tally('AB', [{'A': 1, 'B': 4}]).report()
    assert report.head_to_head == HeadToHeadMatchup('B', 'A', 1, 0)
    assert report.head_to_head.votes1 == report.result.head_to_head[0]
    assert startally.system.VoteResult(stats=report.stats).head_to_head is None
