'''Ranked ballots and their validation.

A ranked ballot lists candidate identifiers in the order of the voter's
preference; the rank of a candidate is its 1-based position in the list.
A ballot does not need to rank all candidates of the election - candidates
missing from a ballot express no preference on it, in either direction.

The ballot storage can also hand over the rankings as separate entries with
explicit positions (:class:`BallotRanking`); use
:meth:`RankedBallot.from_rankings` to assemble a ballot from those.

The tabulation relies on every ballot having no repeated candidates and
a gapless sequence of positions. These invariants should hold already
when the ballots are accepted, but :class:`RankedBallotValidator` checks them
again before counting, since a violation would silently double-count
preferences. Any violation raises :class:`MalformedBallot` and aborts the
whole tabulation.
'''

from __future__ import annotations

import dataclasses
import operator
from typing import Dict, Iterable, List, Optional, Tuple

from beatpath.candidate import CandidateID, is_valid_candidate_id
from beatpath.evaluate.core import ErrorKind, TabulationError


class MalformedBallot(TabulationError):
    '''A ballot violates the ranking invariants.

    :param reason: Description of the violation.
    :param voter_id: Voter whose ballot is malformed, if known.
    :param election_id: Election the ballot was cast in, if known.
    '''
    kind = ErrorKind.MALFORMED_BALLOT

    def __init__(self,
                 reason: str,
                 voter_id: Optional[int] = None,
                 election_id: Optional[str] = None,
                 ):
        self.reason = reason
        self.voter_id = voter_id
        self.election_id = election_id
        message = f'malformed ballot: {reason}'
        if voter_id is not None:
            message += f' (voter {voter_id})'
        super().__init__(message)


@dataclasses.dataclass(frozen=True)
class BallotRanking:
    '''A single stored ranking entry of a ballot.'''
    candidate_id: CandidateID
    rank_position: int


@dataclasses.dataclass(frozen=True)
class RankedBallot:
    '''A voter's ranking of candidates in one election.

    :param election_id: Identifier of the election.
    :param voter_id: Identifier of the voter who cast the ballot.
    :param ranking: Candidate identifiers, most preferred first. Lists are
        converted to tuples.
    '''
    election_id: str
    voter_id: int
    ranking: Tuple[CandidateID, ...] = ()

    def __post_init__(self):
        if isinstance(self.ranking, list):
            object.__setattr__(self, 'ranking', tuple(self.ranking))

    @classmethod
    def from_rankings(cls,
                      election_id: str,
                      voter_id: int,
                      rankings: Iterable[BallotRanking],
                      ) -> RankedBallot:
        '''Assemble a ballot from ranking entries with explicit positions.

        The entries may come in any order but their positions must be
        exactly ``1..k`` for ``k`` entries.

        :raises MalformedBallot: If the positions are not integers or contain
            gaps or repeats.
        '''
        rankings = list(rankings)
        for entry in rankings:
            if (not isinstance(entry.rank_position, int)
                    or isinstance(entry.rank_position, bool)):
                raise MalformedBallot(
                    f'invalid rank position {entry.rank_position!r}',
                    voter_id, election_id
                )
        rankings.sort(key=operator.attrgetter('rank_position'))
        positions = [entry.rank_position for entry in rankings]
        if positions != list(range(1, len(rankings) + 1)):
            raise MalformedBallot(
                f'rank positions {positions} are not 1..{len(rankings)}',
                voter_id, election_id
            )
        return cls(
            election_id,
            voter_id,
            tuple(entry.candidate_id for entry in rankings),
        )

    def positions(self) -> Dict[CandidateID, int]:
        '''Map the ranked candidates to their 1-based rank positions.'''
        return {cand: i for i, cand in enumerate(self.ranking, start=1)}

    def to_rankings(self) -> List[BallotRanking]:
        return [
            BallotRanking(cand, pos) for cand, pos in self.positions().items()
        ]


class RankedBallotValidator:
    '''Validate that ranked ballots can be tabulated.

    :param election_id: If given, ballots cast in other elections are
        rejected.
    '''
    def __init__(self, election_id: Optional[str] = None):
        self.election_id = election_id

    def validate(self, ballot: RankedBallot) -> None:
        '''Check a single ballot.

        :raises MalformedBallot: If the ranking is not a tuple, contains
            an invalid or repeated candidate identifier, or the ballot
            belongs to a different election.
        '''
        if not isinstance(ballot, RankedBallot):
            raise MalformedBallot(
                f'ranked ballot expected, got {type(ballot).__name__}'
            )
        voter_id = ballot.voter_id
        if self.election_id is not None and \
                ballot.election_id != self.election_id:
            raise MalformedBallot(
                f'ballot cast in election {ballot.election_id!r},'
                f' expected {self.election_id!r}',
                voter_id, ballot.election_id
            )
        if not isinstance(ballot.ranking, tuple):
            raise MalformedBallot(
                f'ranking must be a sequence, got {ballot.ranking!r}',
                voter_id, ballot.election_id
            )
        seen = set()
        for position, cand in enumerate(ballot.ranking, start=1):
            if not is_valid_candidate_id(cand):
                raise MalformedBallot(
                    f'invalid candidate id {cand!r} at position {position}',
                    voter_id, ballot.election_id
                )
            if cand in seen:
                raise MalformedBallot(
                    f'candidate {cand} ranked more than once',
                    voter_id, ballot.election_id
                )
            seen.add(cand)

    def validate_all(self, ballots: Iterable[RankedBallot]) -> None:
        '''Check all ballots, failing on the first malformed one.'''
        for ballot in ballots:
            self.validate(ballot)


def ballots_from_counts(election_id: str,
                        counts: Dict[Tuple[CandidateID, ...], int],
                        ) -> List[RankedBallot]:
    '''Expand counted rankings into individual ballots.

    Useful for published election profiles that state how many voters
    submitted each ranking. Voter identifiers are assigned sequentially
    from 1 in the order of the input.

    :param election_id: Election to assign the ballots to.
    :param counts: Mapping of rankings to the number of voters.
    '''
    ballots = []
    for ranking, n_voters in counts.items():
        if n_voters < 0:
            raise ValueError(f'negative voter count {n_voters} for {ranking}')
        for _ in range(n_voters):
            ballots.append(
                RankedBallot(election_id, len(ballots) + 1, tuple(ranking))
            )
    return ballots
