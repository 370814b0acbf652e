'''Tabulation results handed to the presentation layer.'''

from __future__ import annotations

import dataclasses
from typing import Any, Dict, Optional, Tuple

from beatpath.candidate import CandidateID


@dataclasses.dataclass(frozen=True)
class CandidateRank:
    '''Final position of a candidate.

    :param candidate_id: The candidate.
    :param rank: 1-based rank; numbering of equal scores depends on the
        ranking policy used.
    :param score: Sum of the strongest path strengths from the candidate to
        all other candidates.
    '''
    candidate_id: CandidateID
    rank: int
    score: int

    def to_dict(self) -> Dict[str, int]:
        return dataclasses.asdict(self)


@dataclasses.dataclass(frozen=True)
class SchulzeResult:
    '''Outcome of a Schulze tabulation of one election.

    :param election_id: The election tabulated.
    :param winners: All candidates unbeaten by strongest paths, in ascending
        order. More than one means a tie.
    :param rankings: All candidates ordered by score, best first.
    :param candidates: The candidate universe; row and column order of the
        pairwise matrix.
    :param beatpath_order: All candidates ordered by the Schulze beatpath
        relation, which may differ from the score ordering of rankings.
    :param pairwise_matrix: Pairwise preference counts for auditing, if
        requested.
    '''
    election_id: str
    winners: Tuple[CandidateID, ...] = ()
    rankings: Tuple[CandidateRank, ...] = ()
    candidates: Tuple[CandidateID, ...] = ()
    beatpath_order: Tuple[CandidateID, ...] = ()
    pairwise_matrix: Optional[Tuple[Tuple[int, ...], ...]] = None

    @classmethod
    def empty(cls, election_id: str) -> SchulzeResult:
        '''Result of an election with no ballots or no ranked candidates.'''
        return cls(election_id)

    @property
    def is_tie(self) -> bool:
        return len(self.winners) > 1

    def to_dict(self) -> Dict[str, Any]:
        '''Produce a JSON-ready dictionary.

        The pairwise matrix is only included when it was requested.
        '''
        out = {
            'election_id': self.election_id,
            'winners': list(self.winners),
            'rankings': [rank.to_dict() for rank in self.rankings],
            'candidates': list(self.candidates),
            'beatpath_order': list(self.beatpath_order),
        }
        if self.pairwise_matrix is not None:
            out['pairwise_matrix'] = [list(row) for row in self.pairwise_matrix]
        return out

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> SchulzeResult:
        matrix = data.get('pairwise_matrix')
        return cls(
            election_id=data['election_id'],
            winners=tuple(data.get('winners', ())),
            rankings=tuple(
                CandidateRank(**rank) for rank in data.get('rankings', ())
            ),
            candidates=tuple(data.get('candidates', ())),
            beatpath_order=tuple(data.get('beatpath_order', ())),
            pairwise_matrix=(
                None if matrix is None else tuple(tuple(row) for row in matrix)
            ),
        )
