'''JSON ballot snapshots and tabulation results.

A snapshot holds all ranked ballots of one election::

    {
        "election_id": "board-2024",
        "ballots": [
            {"voter_id": 1, "ranking": [3, 1, 2]},
            {"voter_id": 2, "rankings": [
                {"candidate_id": 1, "rank_position": 2},
                {"candidate_id": 2, "rank_position": 1}
            ]}
        ]
    }

Each ballot either lists its ranking directly (most preferred first) or
gives ranking entries with explicit positions, as exported from the ballot
storage. A ballot may override the snapshot's ``election_id``.
'''

import json
from typing import Any, Dict, Iterable

import beatpath.io.core
from beatpath.ballot import BallotRanking, RankedBallot
from beatpath.io.core import BallotSnapshot
from beatpath.result import SchulzeResult


class SnapshotParseError(beatpath.io.core.ParseError):
    pass


def load_text(text: str) -> BallotSnapshot:
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise SnapshotParseError(f'invalid snapshot JSON: {e}') from e
    if not isinstance(data, dict):
        raise SnapshotParseError('snapshot must be a JSON object')
    if 'election_id' not in data:
        raise SnapshotParseError('snapshot has no election_id')
    election_id = data['election_id']
    ballot_defs = data.get('ballots', [])
    if not isinstance(ballot_defs, list):
        raise SnapshotParseError('snapshot ballots must be a list')
    return BallotSnapshot(
        election_id,
        [
            _parse_ballot(ballot_def, election_id, i)
            for i, ballot_def in enumerate(ballot_defs)
        ]
    )


load, loads = beatpath.io.core.loaders(load_text)


def _parse_ballot(ballot_def: Any,
                  election_id: str,
                  i: int,
                  ) -> RankedBallot:
    if not isinstance(ballot_def, dict):
        raise SnapshotParseError(f'ballot {i} must be a JSON object')
    try:
        voter_id = ballot_def['voter_id']
    except KeyError as e:
        raise SnapshotParseError(f'ballot {i} has no voter_id') from e
    election_id = ballot_def.get('election_id', election_id)
    if 'ranking' in ballot_def:
        ranking = ballot_def['ranking']
        if not isinstance(ranking, list):
            raise SnapshotParseError(f'ballot {i} ranking must be a list')
        return RankedBallot(election_id, voter_id, tuple(ranking))
    elif 'rankings' in ballot_def:
        try:
            entries = [
                BallotRanking(entry['candidate_id'], entry['rank_position'])
                for entry in ballot_def['rankings']
            ]
        except (KeyError, TypeError) as e:
            raise SnapshotParseError(
                f'ballot {i} has invalid ranking entries'
            ) from e
        return RankedBallot.from_rankings(election_id, voter_id, entries)
    else:
        raise SnapshotParseError(f'ballot {i} has no ranking')


def dump_lines(snapshot: BallotSnapshot) -> Iterable[str]:
    yield json.dumps({
        'election_id': snapshot.election_id,
        'ballots': [
            _ballot_to_dict(ballot, snapshot.election_id)
            for ballot in snapshot.ballots
        ],
    })


dump, dumps = beatpath.io.core.dumpers(dump_lines)


def _ballot_to_dict(ballot: RankedBallot, election_id: str) -> Dict[str, Any]:
    out = {'voter_id': ballot.voter_id, 'ranking': list(ballot.ranking)}
    if ballot.election_id != election_id:
        out['election_id'] = ballot.election_id
    return out


def dump_result_lines(result: SchulzeResult,
                      indent: int = 2,
                      ) -> Iterable[str]:
    yield from json.dumps(result.to_dict(), indent=indent).split('\n')


dump_result, dumps_result = beatpath.io.core.dumpers(dump_result_lines)


def loads_result(text: str) -> SchulzeResult:
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise SnapshotParseError(f'invalid result JSON: {e}') from e
    if not isinstance(data, dict):
        raise SnapshotParseError('result must be a JSON object')
    try:
        return SchulzeResult.from_dict(data)
    except (KeyError, TypeError) as e:
        raise SnapshotParseError(f'invalid result: {e!r}') from e
