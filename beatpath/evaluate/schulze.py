'''Schulze (beatpath) evaluation of ranked ballots.

The Schulze method looks at paths between pairs of candidates in which each
candidate pairwise beats the next. The strength of a path is the weakest of
its pairwise wins; a candidate wins if no other candidate has a strictly
stronger path back to it than it has to that candidate. The method always
elects the Condorcet winner when there is one.

The evaluation proceeds in stages:

1.  The ballots are validated and tallied into the pairwise preference
    matrix ``d`` (:class:`beatpath.convert.BallotsToPairwiseMatrix`).
2.  The strongest path matrix ``p`` is derived from ``d`` by a widest path
    variant of the Floyd-Warshall algorithm (:meth:`Schulze.widest_paths`).
    This costs ``O(n^3)`` in the number of candidates ``n``, so the candidate
    count is bounded before this stage.
3.  The winners are read off ``p`` (:meth:`Schulze.winners`) and all
    candidates are ranked by the sum of their path strengths
    (:meth:`Schulze.scores`), and also ordered by the beatpath relation
    itself (:meth:`Schulze.beatpath_order`).
'''

import logging
from typing import Iterable, List, Optional, Tuple

from beatpath.ballot import RankedBallot, RankedBallotValidator
from beatpath.candidate import CandidateID, CandidateUniverse
from beatpath.convert import BallotsToPairwiseMatrix, Matrix
from beatpath.evaluate.core import CancellationToken, \
    CandidateUniverseTooLarge, RankingPolicy, rank_by_score
from beatpath.persist import simple_serialization
from beatpath.result import CandidateRank, SchulzeResult
from beatpath.settings import DEFAULT_MAX_CANDIDATES, TabulationSettings


logger = logging.getLogger(__name__)


@simple_serialization
class Schulze:
    '''Schulze (beatpath) tabulation of ranked ballots.

    :param max_candidates: Maximum number of distinct candidates accepted;
        larger candidate sets fail with
        :class:`beatpath.evaluate.core.CandidateUniverseTooLarge`. None
        disables the bound.
    :param ranking_policy: Rank numbering for candidates with equal scores,
        a :class:`beatpath.evaluate.core.RankingPolicy` or its value.
    :param include_matrix: Whether to attach the pairwise matrix to the
        result for auditing.
    '''
    def __init__(self,
                 max_candidates: Optional[int] = DEFAULT_MAX_CANDIDATES,
                 ranking_policy: str = 'sequential',
                 include_matrix: bool = True,
                 ):
        if max_candidates is not None and max_candidates < 1:
            raise ValueError(
                f'max_candidates must be positive, got {max_candidates}'
            )
        self.max_candidates = max_candidates
        self.ranking_policy = RankingPolicy(ranking_policy)
        self.include_matrix = include_matrix
        self.tallier = BallotsToPairwiseMatrix()

    @classmethod
    def from_settings(cls, settings: TabulationSettings) -> 'Schulze':
        return cls(
            max_candidates=settings.max_candidates,
            ranking_policy=settings.ranking_policy,
            include_matrix=settings.include_matrix,
        )

    def evaluate(self,
                 election_id: str,
                 ballots: Iterable[RankedBallot],
                 cancel: Optional[CancellationToken] = None,
                 ) -> SchulzeResult:
        '''Tabulate the ballots of an election.

        :param election_id: The election to tabulate; all ballots must
            belong to it.
        :param ballots: Ranked ballots, in any order.
        :param cancel: A token to stop the tabulation from another thread.
        :raises beatpath.ballot.MalformedBallot: If any ballot is malformed.
        :raises beatpath.evaluate.core.CandidateUniverseTooLarge: If there
            are more candidates than allowed.
        :raises beatpath.evaluate.core.TabulationCancelled: If the token was
            cancelled or expired during the tabulation.
        '''
        ballots = list(ballots)
        if not ballots:
            logger.info('no ballots in election %s', election_id)
            return SchulzeResult.empty(election_id)
        RankedBallotValidator(election_id).validate_all(ballots)
        universe = CandidateUniverse.from_rankings(
            ballot.ranking for ballot in ballots
        )
        n_cands = len(universe)
        if n_cands == 0:
            logger.info('no candidates ranked in election %s', election_id)
            return SchulzeResult.empty(election_id)
        if self.max_candidates is not None and n_cands > self.max_candidates:
            raise CandidateUniverseTooLarge(n_cands, self.max_candidates)
        tally = self.tallier.convert(ballots, universe)
        paths = self.widest_paths(tally.matrix, cancel=cancel)
        logger.debug('strongest paths: %s', paths)
        winners = self.winners(paths, tally.universe)
        logger.info('election %s won by %s', election_id, list(winners))
        ranked = rank_by_score(
            list(zip(tally.universe, self.scores(paths))),
            self.ranking_policy,
        )
        return SchulzeResult(
            election_id=election_id,
            winners=winners,
            rankings=tuple(
                CandidateRank(cand, rank, score)
                for cand, rank, score in ranked
            ),
            candidates=tally.universe.ids,
            beatpath_order=self.beatpath_order(paths, tally.universe),
            pairwise_matrix=(
                tuple(tuple(row) for row in tally.matrix)
                if self.include_matrix else None
            ),
        )

    @staticmethod
    def direct_wins(counts: Matrix) -> Matrix:
        '''Keep the pairwise counts that beat their reverse, zero the rest.

        At most one of ``wins[i][j]`` and ``wins[j][i]`` is nonzero; both
        are zero for a pairwise tie.
        '''
        n = len(counts)
        return [
            [
                counts[i][j] if i != j and counts[i][j] > counts[j][i] else 0
                for j in range(n)
            ]
            for i in range(n)
        ]

    @staticmethod
    def widest_paths(counts: Matrix,
                     cancel: Optional[CancellationToken] = None,
                     ) -> Matrix:
        '''Compute the strongest path strengths between all candidates.

        Starts from the direct pairwise wins (a pair counts only if it beats
        its reverse) and relaxes them through every intermediate candidate,
        keeping the path whose weakest link is strongest.

        :param counts: Square pairwise preference matrix.
        :param cancel: Checked before each intermediate candidate round.
        :returns: Square matrix of strongest path strengths, zero where no
            path exists.
        '''
        n = len(counts)
        paths = Schulze.direct_wins(counts)
        for k in range(n):
            if cancel is not None:
                cancel.check()
            row_k = paths[k]
            for i in range(n):
                if i == k:
                    continue
                row_i = paths[i]
                to_k = row_i[k]
                if not to_k:
                    # min() with zero never improves a path
                    continue
                for j in range(n):
                    if j != i and j != k:
                        through_k = min(to_k, row_k[j])
                        if through_k > row_i[j]:
                            row_i[j] = through_k
        return paths

    @staticmethod
    def winners(paths: Matrix,
                universe: CandidateUniverse,
                ) -> Tuple[CandidateID, ...]:
        '''Select candidates with no strictly stronger path against them.'''
        n = len(paths)
        return tuple(
            universe[i] for i in range(n)
            if all(paths[j][i] <= paths[i][j] for j in range(n) if j != i)
        )

    @staticmethod
    def scores(paths: Matrix) -> List[int]:
        '''Sum the strongest path strengths from each candidate.'''
        return [
            sum(strength for j, strength in enumerate(row) if j != i)
            for i, row in enumerate(paths)
        ]

    @staticmethod
    def beatpath_order(paths: Matrix,
                       universe: CandidateUniverse,
                       ) -> Tuple[CandidateID, ...]:
        '''Order candidates by the Schulze beatpath relation.

        A candidate beats another if its strongest path to it is stronger
        than the reverse one. This relation is transitive, so ordering by
        the number of beaten candidates gives the Schulze ranking. It can
        differ from the ordering by :meth:`scores`. Candidates beating the
        same number of others keep their ascending order.
        '''
        n = len(paths)
        n_beaten = [
            sum(1 for j in range(n) if j != i and paths[i][j] > paths[j][i])
            for i in range(n)
        ]
        return tuple(
            universe[i]
            for i in sorted(range(n), key=n_beaten.__getitem__, reverse=True)
        )


def compute_schulze_result(election_id: str,
                           ballots: Iterable[RankedBallot],
                           settings: Optional[TabulationSettings] = None,
                           ) -> SchulzeResult:
    '''Tabulate an election by the Schulze method.

    Runs synchronously; a timeout from the settings is enforced by
    aborting the computation. To keep it off the calling thread, use
    :class:`beatpath.evaluate.background.TabulationTask`.

    :param election_id: The election to tabulate.
    :param ballots: Ranked ballots of the election.
    :param settings: Tabulation settings; the defaults are used if None.
    '''
    if settings is None:
        settings = TabulationSettings()
    cancel = None
    if settings.timeout is not None:
        cancel = CancellationToken(settings.timeout)
    return Schulze.from_settings(settings).evaluate(
        election_id, ballots, cancel=cancel
    )
