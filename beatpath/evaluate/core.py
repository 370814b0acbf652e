'''General tabulation machinery: error kinds, ranking policies, cancellation.'''

from __future__ import annotations

import enum
import operator
import threading
import time
from typing import List, Optional, Sequence, Tuple

from beatpath.candidate import CandidateID


class ErrorKind(enum.Enum):
    '''Closed set of reasons why a tabulation can fail.

    Callers (e.g. a transport layer choosing a status code) should dispatch
    on the ``kind`` attribute of a :class:`TabulationError`, never on its
    message. An empty ballot set is not an error and has no kind here.
    '''
    MALFORMED_BALLOT = 'malformed_ballot'
    CANDIDATE_UNIVERSE_TOO_LARGE = 'candidate_universe_too_large'
    CANCELLED = 'cancelled'


class TabulationError(Exception):
    '''A tabulation was aborted; no partial result is available.'''
    kind: ErrorKind = NotImplemented


class CandidateUniverseTooLarge(TabulationError):
    '''More candidates than the configured safety bound were found.

    :param n_candidates: Number of distinct candidates in the ballots.
    :param max_candidates: The configured bound.
    '''
    kind = ErrorKind.CANDIDATE_UNIVERSE_TOO_LARGE

    def __init__(self, n_candidates: int, max_candidates: int):
        self.n_candidates = n_candidates
        self.max_candidates = max_candidates
        super().__init__(
            f'{n_candidates} candidates found, at most {max_candidates}'
            ' allowed'
        )


class TabulationCancelled(TabulationError):
    '''The tabulation was cancelled or ran out of its time limit.

    :param timed_out: True if the time limit expired, False if the
        tabulation was cancelled explicitly.
    '''
    kind = ErrorKind.CANCELLED

    def __init__(self, timed_out: bool = False):
        self.timed_out = timed_out
        super().__init__(
            'tabulation timed out' if timed_out else 'tabulation cancelled'
        )


class CancellationToken:
    '''A flag for stopping a running tabulation from another thread.

    The path solver calls :meth:`check` once per relaxation round, so a
    cancelled tabulation stops within one round.

    :param timeout: Number of seconds after which the token expires on its
        own. None means no time limit.
    '''
    def __init__(self, timeout: Optional[float] = None):
        self._event = threading.Event()
        self.deadline = None if timeout is None else time.monotonic() + timeout

    def cancel(self) -> None:
        self._event.set()

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()

    @property
    def expired(self) -> bool:
        return self.deadline is not None and time.monotonic() >= self.deadline

    def check(self) -> None:
        '''Raise if the tabulation should stop.

        :raises TabulationCancelled: If the token was cancelled or expired.
        '''
        if self._event.is_set():
            raise TabulationCancelled(timed_out=False)
        if self.expired:
            raise TabulationCancelled(timed_out=True)


class RankingPolicy(enum.Enum):
    '''How rank numbers are assigned to candidates with equal scores.

    ``SEQUENTIAL`` numbers the candidates by their position in the score
    ordering, so equal scores still get consecutive ranks (``1, 2, 3, 4``).
    ``SHARED`` gives equal scores the rank of the first of them and skips
    the following numbers (``1, 2, 2, 4``).
    '''
    SEQUENTIAL = 'sequential'
    SHARED = 'shared'


def rank_by_score(scores: Sequence[Tuple[CandidateID, int]],
                  policy: RankingPolicy = RankingPolicy.SEQUENTIAL,
                  ) -> List[Tuple[CandidateID, int, int]]:
    '''Order candidates by descending score and number their ranks.

    The sort is stable, so candidates with equal scores keep their input
    order (ascending identifiers when coming from a candidate universe).

    :param scores: Pairs of candidates and their scores.
    :param policy: Rank numbering policy for equal scores.
    :returns: Triples of candidate, rank and score, best first.
    '''
    policy = RankingPolicy(policy)
    ordered = sorted(scores, key=operator.itemgetter(1), reverse=True)
    ranked = []
    for i, (cand, score) in enumerate(ordered):
        if (policy == RankingPolicy.SHARED
                and i > 0 and ranked[-1][2] == score):
            rank = ranked[-1][1]
        else:
            rank = i + 1
        ranked.append((cand, rank, score))
    return ranked
