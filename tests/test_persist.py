import sys
import os
import json

import pytest

sys.path.append(os.path.join(os.path.dirname(__file__), '..'))
import startally.persist
import startally.system
from startally.evaluate.cardinal import STAR
from startally.metrics import ScoreMetrics
from startally.vote import BallotValidator, Score


def roundtrip(obj):
    return startally.persist.from_dict(json.loads(json.dumps(
        startally.persist.to_dict(obj)
    )))


def test_tally():
    tally = startally.system.Tally(
        name='Board', evaluator=STAR(n_matchups=1), require_complete=True
    )
    for option in ['X', 'Y', 'Z']:
        tally.register(option)
    tally.submit_ballot({'X': 1, 'Y': 5, 'Z': 4})
    tally.submit_ballot({'X': 3, 'Y': 2, 'Z': 2})
    restored = roundtrip(tally)
    assert isinstance(restored, startally.system.Tally)
    assert restored.name == 'Board'
    assert restored.require_complete
    assert restored.evaluator.n_matchups == 1
    assert restored.election.option_ids == ['X', 'Y', 'Z']
    assert restored.compute_result() == tally.compute_result()


def test_validator():
    validator = BallotValidator(['A', 'B'], require_complete=True)
    restored = roundtrip(validator)
    assert restored.options == ['A', 'B']
    assert restored.require_complete


def test_metrics():
    metrics = ScoreMetrics(7, [0, 0, 1, 0, 0, 1])
    assert roundtrip(metrics) == metrics


@pytest.mark.parametrize(('value', 'serial'), [
    (Score.THREE, 3),
    ({1: 'A'}, {'type': 'dict', 'keys': [1], 'values': ['A']}),
])
def test_values(value, serial):
    assert json.loads(json.dumps(
        startally.persist.serialize_value(value)
    )) == serial


def test_integer_keys():
    serial = startally.persist.serialize_value({10: Score.FIVE, 20: 0})
    assert startally.persist.deserialize_value(
        json.loads(json.dumps(serial))
    ) == {10: 5, 20: 0}


@pytest.mark.parametrize('value', [
    ['startally.evaluate.cardinal.STAR'],
    {'n_matchups': 3},
    {'class': '.relative.Name'},
])
def test_invalid(value):
    with pytest.raises(ValueError):
        startally.persist.from_dict(value)
