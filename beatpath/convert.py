'''Convert ranked ballots to pairwise preference counts.

This is the first stage of every Condorcet-style tabulation: for each ordered
pair of candidates, count the ballots that rank the first candidate strictly
ahead of the second. Only ballots ranking both candidates of a pair count
for it; candidates missing from a ballot are not assumed to be ranked last
(which keeps ballots cast before a late-added candidate meaningful).
'''

from __future__ import annotations

import dataclasses
import logging
from typing import Dict, Iterable, List, Optional, Tuple

from beatpath.ballot import RankedBallot
from beatpath.candidate import CandidateID, CandidateUniverse
from beatpath.persist import simple_serialization


logger = logging.getLogger(__name__)

Matrix = List[List[int]]


@dataclasses.dataclass(frozen=True)
class PairwiseTally:
    '''Pairwise preference counts over a candidate universe.

    ``matrix[i][j]`` is the number of ballots ranking ``universe[i]`` ahead of
    ``universe[j]``; the diagonal is zero. No entry can exceed the number of
    ballots tallied.
    '''
    universe: CandidateUniverse
    matrix: Matrix
    n_ballots: int = 0

    def count(self, upper: CandidateID, lower: CandidateID) -> int:
        '''Return the number of ballots preferring upper to lower.'''
        return self.matrix[self.universe.index(upper)][
            self.universe.index(lower)
        ]

    def to_pairs(self) -> Dict[Tuple[CandidateID, CandidateID], int]:
        '''Return the nonzero counts keyed by candidate pairs.'''
        return {
            (upper, lower): self.matrix[i][j]
            for i, upper in enumerate(self.universe)
            for j, lower in enumerate(self.universe)
            if self.matrix[i][j]
        }


@simple_serialization
class BallotsToPairwiseMatrix:
    '''Aggregate ranked ballots to a matrix of pairwise preference counts.

    For each ballot that ranks a pair of candidates in a given order, adds
    one to the count of the first candidate over the second. The ballots are
    expected to be validated already (see
    :class:`beatpath.ballot.RankedBallotValidator`).
    '''
    def convert(self,
                ballots: Iterable[RankedBallot],
                universe: Optional[CandidateUniverse] = None,
                ) -> PairwiseTally:
        '''Count pairwise preferences in the ballots.

        :param ballots: Ranked ballots of a single election, in any order.
        :param universe: The candidates to count for; collected from the
            ballots if not given. Must contain every ranked candidate.
        '''
        ballots = list(ballots)
        if universe is None:
            universe = CandidateUniverse.from_rankings(
                ballot.ranking for ballot in ballots
            )
        n = len(universe)
        matrix = [[0] * n for _ in range(n)]
        for ballot in ballots:
            # ranking order is rank order, so every later index is ranked lower
            indices = [universe.index(cand) for cand in ballot.ranking]
            for pos, upper_i in enumerate(indices):
                row = matrix[upper_i]
                for lower_i in indices[pos+1:]:
                    row[lower_i] += 1
        logger.info('tallied %d ballots over %d candidates',
                    len(ballots), n)
        logger.debug('pairwise matrix: %s', matrix)
        return PairwiseTally(universe, matrix, len(ballots))
