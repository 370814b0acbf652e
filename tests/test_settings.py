
import sys
import os

import pytest

sys.path.append(os.path.join(os.path.dirname(__file__), '..'))
import beatpath.settings
from beatpath.evaluate.core import RankingPolicy
from beatpath.evaluate.schulze import Schulze
from beatpath.settings import TabulationSettings


def test_defaults():
    settings = TabulationSettings()
    assert settings.max_candidates == beatpath.settings.DEFAULT_MAX_CANDIDATES
    assert settings.ranking_policy == RankingPolicy.SEQUENTIAL
    assert settings.include_matrix
    assert settings.timeout is None


def test_from_empty_env():
    settings = TabulationSettings.from_env({})
    assert settings.to_dict() == TabulationSettings().to_dict()


@pytest.mark.parametrize('environ, attr, value', [
    ({'BEATPATH_MAX_CANDIDATES': '25'}, 'max_candidates', 25),
    ({'BEATPATH_MAX_CANDIDATES': 'none'}, 'max_candidates', None),
    ({'BEATPATH_MAX_CANDIDATES': '0'}, 'max_candidates', None),
    ({'BEATPATH_MAX_CANDIDATES': ''}, 'max_candidates', 1000),
    ({'BEATPATH_RANKING_POLICY': 'shared'}, 'ranking_policy',
        RankingPolicy.SHARED),
    ({'BEATPATH_RANKING_POLICY': 'Sequential'}, 'ranking_policy',
        RankingPolicy.SEQUENTIAL),
    ({'BEATPATH_INCLUDE_MATRIX': 'no'}, 'include_matrix', False),
    ({'BEATPATH_INCLUDE_MATRIX': 'TRUE'}, 'include_matrix', True),
    ({'BEATPATH_TIMEOUT': '2.5'}, 'timeout', 2.5),
    ({'OTHER_TIMEOUT': '2.5'}, 'timeout', None),
])
def test_from_env(environ, attr, value):
    settings = TabulationSettings.from_env(environ)
    assert getattr(settings, attr) == value


@pytest.mark.parametrize('environ', [
    {'BEATPATH_MAX_CANDIDATES': 'many'},
    {'BEATPATH_MAX_CANDIDATES': '-4'},
    {'BEATPATH_RANKING_POLICY': 'dense'},
    {'BEATPATH_INCLUDE_MATRIX': 'maybe'},
    {'BEATPATH_TIMEOUT': 'soon'},
    {'BEATPATH_TIMEOUT': '0'},
])
def test_from_env_invalid(environ):
    with pytest.raises(ValueError):
        TabulationSettings.from_env(environ)


def test_from_os_environ(monkeypatch):
    monkeypatch.setenv('BEATPATH_MAX_CANDIDATES', '7')
    assert TabulationSettings.from_env().max_candidates == 7


def test_evaluator_from_settings():
    settings = TabulationSettings(
        max_candidates=5, ranking_policy='shared', include_matrix=False
    )
    evaluator = Schulze.from_settings(settings)
    assert evaluator.max_candidates == 5
    assert evaluator.ranking_policy == RankingPolicy.SHARED
    assert not evaluator.include_matrix


def test_repr():
    assert repr(TabulationSettings(timeout=3)) == (
        "TabulationSettings(max_candidates=1000, ranking_policy='sequential',"
        " include_matrix=True, timeout=3)"
    )


@pytest.mark.parametrize('environ, variable', [
    ({'BEATPATH_TIMEOUT': '0'}, 'BEATPATH_TIMEOUT'),
    ({'BEATPATH_TIMEOUT': '-1', 'BEATPATH_MAX_CANDIDATES': '3'},
        'BEATPATH_TIMEOUT'),
    ({'BEATPATH_MAX_CANDIDATES': '-4'}, 'BEATPATH_MAX_CANDIDATES'),
    ({'BEATPATH_MAX_CANDIDATES': 'many'}, 'BEATPATH_MAX_CANDIDATES'),
])
def test_from_env_error_names_variable(environ, variable):
    with pytest.raises(ValueError, match=variable):
        TabulationSettings.from_env(environ)
