"""Shared functionality for ballot snapshot and result file I/O. Internal."""

from __future__ import annotations

import dataclasses
from typing import Callable, Iterable, List, TextIO, Tuple

from beatpath.ballot import RankedBallot


class ParseError(Exception):
    """An input that is invalid according to the given format was detected."""
    pass


@dataclasses.dataclass
class BallotSnapshot:
    """All ranked ballots of one election, as read from a file."""
    election_id: str
    ballots: List[RankedBallot] = dataclasses.field(default_factory=list)


def loaders(text_loader: Callable[[str], BallotSnapshot]
            ) -> Tuple[Callable[[TextIO], BallotSnapshot],
                       Callable[[str], BallotSnapshot]]:
    """Create load() and loads() functions from a text parsing function."""

    def load(file: TextIO) -> BallotSnapshot:
        return text_loader(file.read())

    def loads(text: str) -> BallotSnapshot:
        return text_loader(text)

    return load, loads


def dumpers(line_dumper: Callable[..., Iterable[str]]
            ) -> Tuple[Callable[..., None], Callable[..., str]]:
    """Create dump() and dumps() functions from a line generator function."""

    def dump(file: TextIO, *args, **kwargs) -> None:
        for line in line_dumper(*args, **kwargs):
            if not line.endswith('\n'):
                line += '\n'
            file.write(line)

    def dumps(*args, **kwargs) -> str:
        return ''.join(
            line + ('' if line.endswith('\n') else '\n')
            for line in line_dumper(*args, **kwargs)
        )

    return dump, dumps
