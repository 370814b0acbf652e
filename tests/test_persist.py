
import sys
import os
import json

import pytest

sys.path.append(os.path.join(os.path.dirname(__file__), '..'))
import beatpath.persist
import beatpath.convert
import beatpath.evaluate.schulze
from beatpath.settings import TabulationSettings


OBJECTS = [
    beatpath.evaluate.schulze.Schulze(),
    beatpath.evaluate.schulze.Schulze(
        max_candidates=None, ranking_policy='shared', include_matrix=False
    ),
    beatpath.convert.BallotsToPairwiseMatrix(),
    TabulationSettings(),
    TabulationSettings(max_candidates=12, timeout=1.5),
]


@pytest.mark.parametrize('obj', OBJECTS)
def test_roundtrip(obj):
    dict_form = beatpath.persist.to_dict(obj)
    serial = json.dumps(dict_form)
    roundtrip_dict_form = beatpath.persist.from_dict(
        json.loads(serial)
    ).to_dict()
    assert dict_form == roundtrip_dict_form
    assert serial == json.dumps(roundtrip_dict_form)


def test_schulze_dict():
    assert beatpath.persist.to_dict(
        beatpath.evaluate.schulze.Schulze(ranking_policy='shared')
    ) == {
        'class': 'beatpath.evaluate.schulze.Schulze',
        'max_candidates': 1000,
        'ranking_policy': 'shared',
        'include_matrix': True,
    }


def test_converter_dict():
    assert beatpath.convert.BallotsToPairwiseMatrix().to_dict() == {
        'class': 'beatpath.convert.BallotsToPairwiseMatrix',
    }


@pytest.mark.parametrize('value', [
    'beatpath.evaluate.schulze.Schulze',
    {'max_candidates': 3},
    {'class': '.relative.Name'},
    {'class': 'Schulze'},
])
def test_from_dict_invalid(value):
    with pytest.raises(ValueError):
        beatpath.persist.from_dict(value)


def test_serialize_unknown():
    with pytest.raises(ValueError):
        beatpath.persist.serialize_value(object())
