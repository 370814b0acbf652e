'''Run tabulations off the calling thread.

The strongest path computation grows with the cube of the candidate count,
so a server should not run large tabulations on its request handling path.
A :class:`TabulationTask` runs one tabulation on an executor and can be
cancelled or given a time limit; in both cases the tabulation stops at the
next relaxation round and its future fails with
:class:`beatpath.evaluate.core.TabulationCancelled`.
'''

import logging
import concurrent.futures
from typing import Iterable, Optional

from beatpath.ballot import RankedBallot
from beatpath.evaluate.core import CancellationToken
from beatpath.evaluate.schulze import Schulze
from beatpath.result import SchulzeResult
from beatpath.settings import TabulationSettings


logger = logging.getLogger(__name__)


class TabulationTask:
    '''A Schulze tabulation running in the background.

    The ballots are copied when the task is created, so later changes to
    the source collection do not affect the result.

    :param election_id: The election to tabulate.
    :param ballots: Ranked ballots of the election.
    :param settings: Tabulation settings; their timeout, if any, applies
        from the moment the task is submitted.
    :param executor: Executor to run the tabulation on. If None, a
        dedicated single thread executor is created and shut down when the
        tabulation finishes.
    '''
    def __init__(self,
                 election_id: str,
                 ballots: Iterable[RankedBallot],
                 settings: Optional[TabulationSettings] = None,
                 executor: Optional[concurrent.futures.Executor] = None,
                 ):
        if settings is None:
            settings = TabulationSettings()
        self.election_id = election_id
        self.settings = settings
        self.token = CancellationToken(settings.timeout)
        own_executor = executor is None
        if own_executor:
            executor = concurrent.futures.ThreadPoolExecutor(
                max_workers=1, thread_name_prefix='beatpath'
            )
        evaluator = Schulze.from_settings(settings)
        logger.info('submitting tabulation of election %s', election_id)
        self.future = executor.submit(
            evaluator.evaluate, election_id, list(ballots), self.token
        )
        if own_executor:
            executor.shutdown(wait=False)

    def cancel(self) -> None:
        '''Ask the tabulation to stop.'''
        logger.info('cancelling tabulation of election %s', self.election_id)
        self.future.cancel()
        self.token.cancel()

    def done(self) -> bool:
        return self.future.done()

    def result(self, timeout: Optional[float] = None) -> SchulzeResult:
        '''Wait for the tabulation result.

        :param timeout: Seconds to wait; the tabulation keeps running if
            the wait times out.
        :raises concurrent.futures.TimeoutError: If the wait timed out.
        :raises beatpath.evaluate.core.TabulationError: If the tabulation
            failed or was cancelled.
        :raises concurrent.futures.CancelledError: If the task was cancelled
            before it started running.
        '''
        return self.future.result(timeout)
