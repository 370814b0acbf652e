
import sys
import os
import json

sys.path.append(os.path.join(os.path.dirname(__file__), '..'))
from beatpath.result import SchulzeResult, CandidateRank


RESULT = SchulzeResult(
    election_id='r1',
    winners=(2, ),
    rankings=(CandidateRank(2, 1, 3), CandidateRank(1, 2, 0)),
    candidates=(1, 2),
    beatpath_order=(2, 1),
    pairwise_matrix=((0, 1), (3, 0)),
)


def test_to_dict():
    assert RESULT.to_dict() == {
        'election_id': 'r1',
        'winners': [2],
        'rankings': [
            {'candidate_id': 2, 'rank': 1, 'score': 3},
            {'candidate_id': 1, 'rank': 2, 'score': 0},
        ],
        'candidates': [1, 2],
        'beatpath_order': [2, 1],
        'pairwise_matrix': [[0, 1], [3, 0]],
    }


def test_json_roundtrip():
    text = json.dumps(RESULT.to_dict())
    assert SchulzeResult.from_dict(json.loads(text)) == RESULT


def test_empty():
    empty = SchulzeResult.empty('r2')
    assert not empty.is_tie
    assert empty.to_dict() == {
        'election_id': 'r2',
        'winners': [],
        'rankings': [],
        'candidates': [],
        'beatpath_order': [],
    }
    assert SchulzeResult.from_dict(empty.to_dict()) == empty


def test_tie():
    assert SchulzeResult('r3', winners=(1, 2)).is_tie
    assert not RESULT.is_tie
