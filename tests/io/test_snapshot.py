
import sys
import os
import io

import pytest

sys.path.append(os.path.join(os.path.dirname(__file__), '..', '..'))
import beatpath.io.core
import beatpath.io.snapshot
from beatpath.ballot import MalformedBallot, RankedBallot
from beatpath.evaluate.schulze import compute_schulze_result
from beatpath.io.core import BallotSnapshot


SNAPSHOT_TEXT = '''{
    "election_id": "board-2024",
    "ballots": [
        {"voter_id": 1, "ranking": [3, 1, 2]},
        {"voter_id": 2, "rankings": [
            {"candidate_id": 1, "rank_position": 2},
            {"candidate_id": 2, "rank_position": 1}
        ]},
        {"voter_id": 3, "ranking": []},
        {"voter_id": 4, "election_id": "other", "ranking": [2]}
    ]
}'''


def test_load_both_forms():
    snapshot = beatpath.io.snapshot.loads(SNAPSHOT_TEXT)
    assert snapshot.election_id == 'board-2024'
    assert snapshot.ballots == [
        RankedBallot('board-2024', 1, (3, 1, 2)),
        RankedBallot('board-2024', 2, (2, 1)),
        RankedBallot('board-2024', 3, ()),
        RankedBallot('other', 4, (2, )),
    ]


def test_load_file():
    snapshot = beatpath.io.snapshot.load(io.StringIO(SNAPSHOT_TEXT))
    assert len(snapshot.ballots) == 4


def test_load_no_ballots():
    snapshot = beatpath.io.snapshot.loads('{"election_id": "e"}')
    assert snapshot == BallotSnapshot('e', [])


@pytest.mark.parametrize('text', [
    '',
    '{"election_id": ',
    '[1, 2]',
    '{"ballots": []}',
    '{"election_id": "e", "ballots": {}}',
    '{"election_id": "e", "ballots": [3]}',
    '{"election_id": "e", "ballots": [{"ranking": [1]}]}',
    '{"election_id": "e", "ballots": [{"voter_id": 1}]}',
    '{"election_id": "e", "ballots": [{"voter_id": 1, "ranking": 5}]}',
    '{"election_id": "e", "ballots": [{"voter_id": 1, "rankings": [{}]}]}',
    '{"election_id": "e", "ballots": [{"voter_id": 1, "rankings": 7}]}',
])
def test_parse_error(text):
    with pytest.raises(beatpath.io.core.ParseError):
        beatpath.io.snapshot.loads(text)


@pytest.mark.parametrize('rankings', [
    '[{"candidate_id": 1, "rank_position": 2}]',
    '[{"candidate_id": 1, "rank_position": 1},'
    ' {"candidate_id": 2, "rank_position": 1}]',
    '[{"candidate_id": 1, "rank_position": "1"}]',
])
def test_invalid_positions(rankings):
    text = (
        '{"election_id": "e", "ballots": [{"voter_id": 9, "rankings": '
        + rankings + '}]}'
    )
    with pytest.raises(MalformedBallot) as excinfo:
        beatpath.io.snapshot.loads(text)
    assert excinfo.value.voter_id == 9


def test_dump_roundtrip():
    snapshot = beatpath.io.snapshot.loads(SNAPSHOT_TEXT)
    text = beatpath.io.snapshot.dumps(snapshot)
    assert text.endswith('\n')
    assert '"election_id": "other"' in text
    assert beatpath.io.snapshot.loads(text) == snapshot


def test_dump_file():
    snapshot = BallotSnapshot('e', [RankedBallot('e', 1, (2, 1))])
    buffer = io.StringIO()
    beatpath.io.snapshot.dump(buffer, snapshot)
    assert buffer.getvalue() == beatpath.io.snapshot.dumps(snapshot)


def test_result_roundtrip():
    result = compute_schulze_result('e', [
        RankedBallot('e', 1, (1, 2, 3)),
        RankedBallot('e', 2, (2, 3, 1)),
        RankedBallot('e', 3, (1, 3)),
    ])
    text = beatpath.io.snapshot.dumps_result(result)
    assert beatpath.io.snapshot.loads_result(text) == result


@pytest.mark.parametrize('text', ['nope', '{}', '[1]'])
def test_result_parse_error(text):
    with pytest.raises(beatpath.io.core.ParseError):
        beatpath.io.snapshot.loads_result(text)


@pytest.mark.parametrize('text', [
    '[1]',
    '"result"',
    '{"winners": [1]}',
    '{"election_id": "e", "rankings": [{"rank": 1}]}',
])
def test_result_not_an_object(text):
    with pytest.raises(beatpath.io.snapshot.SnapshotParseError):
        beatpath.io.snapshot.loads_result(text)
