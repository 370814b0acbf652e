"""A commandline tool to tabulate a ballot snapshot by the Schulze method.

Reads a JSON ballot snapshot, tabulates it and shows the winners and the
ranking of all candidates, or prints the full result as JSON.
"""

import argparse
import io
import logging
import sys
import warnings
from typing import Optional

import beatpath.io.core
import beatpath.io.snapshot
from beatpath.evaluate.core import TabulationError
from beatpath.evaluate.schulze import compute_schulze_result
from beatpath.result import SchulzeResult
from beatpath.settings import TabulationSettings

argparser = argparse.ArgumentParser(
    prog='beatpath',
    description=__doc__,
    formatter_class=argparse.ArgumentDefaultsHelpFormatter,
)
argparser.add_argument(
    '-i', '--input-file',
    type=argparse.FileType('r', encoding='utf8'),
    help='file to load the ballot snapshot from',
)
argparser.add_argument(
    '-I', '--use-stdin',
    action='store_true',
    help='load the ballot snapshot from standard input',
)
argparser.add_argument(
    '-p', '--policy',
    choices=['sequential', 'shared'],
    help=(
        'rank numbering for candidates with equal scores; default takes'
        ' BEATPATH_RANKING_POLICY or sequential'
    ),
)
argparser.add_argument(
    '-m', '--max-candidates',
    type=int,
    help='refuse elections with more candidates than this; 0 disables'
         ' the bound',
)
argparser.add_argument(
    '-t', '--timeout',
    type=float,
    help='abort the tabulation after this many seconds',
)
argparser.add_argument(
    '-j', '--json',
    action='store_true',
    help='print the full result as JSON',
)
argparser.add_argument(
    '--no-matrix',
    action='store_true',
    help='omit the pairwise matrix from the JSON output',
)
argparser.add_argument(
    '-v', '--verbose',
    action='store_true',
    help='show all tabulation log messages',
)
argparser.add_argument(
    '-q', '--quiet',
    action='store_true',
    help='do not show any tabulation log messages',
)


def main(input_file: Optional[io.TextIOBase],
         use_stdin: bool = False,
         policy: Optional[str] = None,
         max_candidates: Optional[int] = None,
         timeout: Optional[float] = None,
         json: bool = False,
         no_matrix: bool = False,
         verbose: bool = False,
         quiet: bool = False,
         ) -> int:
    logging.basicConfig(
        level=(
            logging.DEBUG if verbose
            else (logging.WARNING if quiet else logging.INFO)
        ),
        format='%(levelname)-10s %(message)s'
    )
    if use_stdin:
        input_file = sys.stdin
    settings = build_settings(policy, max_candidates, timeout, no_matrix)
    try:
        snapshot = beatpath.io.snapshot.load(input_file)
        if not snapshot.ballots:
            warnings.warn(f'no ballots in election {snapshot.election_id}')
        result = compute_schulze_result(
            snapshot.election_id, snapshot.ballots, settings
        )
    except beatpath.io.core.ParseError as e:
        logging.error('cannot read ballot snapshot: %s', e)
        return 1
    except TabulationError as e:
        logging.error('tabulation failed (%s): %s', e.kind.value, e)
        return 1
    if json:
        beatpath.io.snapshot.dump_result(sys.stdout, result)
    else:
        show_result(result)
    return 0


def build_settings(policy: Optional[str] = None,
                   max_candidates: Optional[int] = None,
                   timeout: Optional[float] = None,
                   no_matrix: bool = False,
                   ) -> TabulationSettings:
    """Combine environment settings with commandline overrides."""
    settings = TabulationSettings.from_env()
    return TabulationSettings(
        max_candidates=(
            settings.max_candidates if max_candidates is None
            else (max_candidates or None)
        ),
        ranking_policy=settings.ranking_policy if policy is None else policy,
        include_matrix=settings.include_matrix and not no_matrix,
        timeout=settings.timeout if timeout is None else timeout,
    )


def show_result(result: SchulzeResult) -> None:
    """Show the winners and the ranking in a human readable form."""
    print(f'Election {result.election_id}')
    if not result.rankings:
        print('Nobody elected')
        return
    if result.is_tie:
        print('Tied winners:', ', '.join(str(w) for w in result.winners))
    else:
        print('Winner:', result.winners[0])
    print()
    n_just_chars = len(str(len(result.rankings)))
    for rank in result.rankings:
        print(str(rank.rank).rjust(n_just_chars), ' ', rank.candidate_id,
              f'(score {rank.score})')


def run() -> None:
    args = argparser.parse_args()
    if not args.input_file and not args.use_stdin:
        argparser.print_usage()
    else:
        sys.exit(main(**vars(args)))


if __name__ == '__main__':
    run()
