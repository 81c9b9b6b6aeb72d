import sys
import os
import io

import pytest

sys.path.append(os.path.join(os.path.dirname(__file__), '..', '..'))
import startally.io.scoretable
from startally.election import Election
from startally.evaluate.cardinal import STAR

DATA_DIR = os.path.join(os.path.dirname(__file__), 'data')


def test_council():
    path = os.path.join(DATA_DIR, 'council.csv')
    with open(path, encoding='utf8') as infile:
        election = startally.io.scoretable.load(infile)
    assert election.option_ids == ['Alice', 'Bob', 'Carol', 'Dave']
    assert len(election.ballots) == 5
    assert 'Carol' not in election.ballots[1]
    assert 'Dave' not in election.ballots[3]
    assert election.get_option('Alice').metrics.total == 17
    assert election.get_option('Bob').metrics.total == 18
    result = STAR().evaluate(election)
    assert (result.finalist1, result.finalist2) == ('Bob', 'Alice')
    assert result.head_to_head == (2, 2)
    assert result.winner == 'Bob'


def test_loads_strips_cells():
    election = startally.io.scoretable.loads('A, B\n 5 , 4\n')
    assert election.option_ids == ['A', 'B']
    assert election.ballots[0] == {'A': 5, 'B': 4}


def test_short_rows_leave_options_unrated():
    election = startally.io.scoretable.loads('A,B,C\n5\n')
    assert election.ballots[0] == {'A': 5}


def test_custom_delimiter():
    election = startally.io.scoretable.loads('A;B\n1;2\n', delimiter=';')
    assert election.ballots[0] == {'A': 1, 'B': 2}


def test_dumps():
    election = Election(['A', 'B', 'C'])
    election.cast_ballot({'A': 5, 'C': 0})
    election.cast_ballot({'B': 3})
    assert startally.io.scoretable.dumps(election) == 'A,B,C\n5,,0\n,3,\n'


def test_dump_reload():
    election = Election(['Yes', 'No, never'])
    election.cast_ballot({'Yes': 2, 'No, never': 4})
    election.cast_ballot({})
    buffer = io.StringIO()
    startally.io.scoretable.dump(buffer, election)
    reloaded = startally.io.scoretable.loads(buffer.getvalue())
    assert reloaded.option_ids == election.option_ids
    assert reloaded.ballots == election.ballots


@pytest.mark.parametrize(('text', 'line_no'), [
    ('A,B\n5,6\n', 2),
    ('A,B\n5,-1\n', 2),
    ('A,B\n5,x\n', 2),
    ('A,B\n4,2.5\n', 2),
    ('A,B\n1,2\n3,4,5\n', 3),
    ('A,,B\n', 1),
    ('A,B,A\n', 1),
])
def test_invalid(text, line_no):
    with pytest.raises(startally.io.scoretable.ScoreTableParseError) as exc:
        startally.io.scoretable.loads(text)
    assert exc.value.line_no == line_no
    assert str(exc.value).startswith(f'line {line_no}: ')


def test_missing_header():
    with pytest.raises(startally.io.scoretable.ScoreTableParseError):
        startally.io.scoretable.loads('\n\n')
