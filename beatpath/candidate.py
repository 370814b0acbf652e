'''Candidate identifiers and the candidate universe of a tabulation.

Candidates are referred to by opaque positive integer identifiers assigned
by the election registry. Within a single tabulation, the candidates are
mapped to matrix indices through a :class:`CandidateUniverse`, which keeps
the identifiers in ascending order so that the mapping only depends on the
set of candidates and never on the order in which ballots were submitted.
'''

from __future__ import annotations

import bisect
from typing import Any, Iterable, Iterator, Tuple


CandidateID = int


def is_valid_candidate_id(value: Any) -> bool:
    '''Return True if the value can identify a candidate.'''
    return (
        isinstance(value, int)
        and not isinstance(value, bool)
        and value > 0
    )


class CandidateUniverse:
    '''All candidates taking part in one tabulation, in ascending order.

    The position of a candidate in the universe is its index in the pairwise
    and path matrices. Lookups use binary search over the sorted identifiers.

    :param candidates: Candidate identifiers, possibly repeated and in any
        order.
    '''
    def __init__(self, candidates: Iterable[CandidateID]):
        self._ids = tuple(sorted(frozenset(candidates)))

    @classmethod
    def from_rankings(cls,
                      rankings: Iterable[Iterable[CandidateID]],
                      ) -> CandidateUniverse:
        '''Collect all candidates appearing in any of the rankings.'''
        return cls(cand for ranking in rankings for cand in ranking)

    @property
    def ids(self) -> Tuple[CandidateID, ...]:
        return self._ids

    def index(self, candidate: CandidateID) -> int:
        '''Return the matrix index of the candidate.

        :raises KeyError: If the candidate is not in the universe.
        '''
        i = bisect.bisect_left(self._ids, candidate)
        if i == len(self._ids) or self._ids[i] != candidate:
            raise KeyError(candidate)
        return i

    def __getitem__(self, index: int) -> CandidateID:
        return self._ids[index]

    def __contains__(self, candidate: Any) -> bool:
        try:
            self.index(candidate)
        except (KeyError, TypeError):
            return False
        return True

    def __iter__(self) -> Iterator[CandidateID]:
        return iter(self._ids)

    def __len__(self) -> int:
        return len(self._ids)

    def __eq__(self, other: Any) -> bool:
        if isinstance(other, CandidateUniverse):
            return self._ids == other._ids
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self._ids)

    def __repr__(self) -> str:
        return f'{self.__class__.__name__}({list(self._ids)!r})'
