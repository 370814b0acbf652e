'''Evaluate ranked ballots with the Schulze method.

The evaluation runs in stages, each consuming the output of the previous
one: the pairwise tally (see :mod:`beatpath.convert`), the strongest path
solver and the winner resolver (both in :mod:`beatpath.evaluate.schulze`).
All stages are pure functions of the ballot snapshot; large tabulations can
be moved off the caller's thread with :mod:`beatpath.evaluate.background`.

Failures are reported by subclasses of :class:`core.TabulationError`
carrying a member of :class:`core.ErrorKind`; a tabulation either produces
a complete result or raises, never both.
'''

from beatpath.evaluate.core import *    # noqa
