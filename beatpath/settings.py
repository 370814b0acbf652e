'''Tabulation settings and their loading from the environment.

The settings can be given explicitly or read from environment variables by
:meth:`TabulationSettings.from_env`:

-   ``BEATPATH_MAX_CANDIDATES`` - the maximum number of candidates per
    election; ``0`` or ``none`` disables the bound.
-   ``BEATPATH_RANKING_POLICY`` - ``sequential`` or ``shared``, see
    :class:`beatpath.evaluate.core.RankingPolicy`.
-   ``BEATPATH_INCLUDE_MATRIX`` - whether to attach the pairwise matrix to
    results (``1``/``0``, ``true``/``false``, ``yes``/``no``).
-   ``BEATPATH_TIMEOUT`` - tabulation time limit in seconds; unset means no
    limit.

Unset or empty variables fall back to the defaults.
'''

import os
import logging
from typing import Any, Callable, Mapping, Optional

from beatpath.evaluate.core import RankingPolicy
from beatpath.persist import simple_serialization


logger = logging.getLogger(__name__)

DEFAULT_MAX_CANDIDATES = 1000

ENV_PREFIX = 'BEATPATH_'

_TRUE_VALUES = frozenset(['1', 'true', 'yes', 'on'])
_FALSE_VALUES = frozenset(['0', 'false', 'no', 'off'])
_NONE_VALUES = frozenset(['0', 'none'])


@simple_serialization
class TabulationSettings:
    '''Configuration of the tabulation engine.

    :param max_candidates: Safety bound on the number of candidates in one
        election. None disables the bound.
    :param ranking_policy: Rank numbering for equal scores.
    :param include_matrix: Whether results carry the pairwise matrix.
    :param timeout: Time limit for a single tabulation, in seconds.
    '''
    def __init__(self,
                 max_candidates: Optional[int] = DEFAULT_MAX_CANDIDATES,
                 ranking_policy: str = 'sequential',
                 include_matrix: bool = True,
                 timeout: Optional[float] = None,
                 ):
        if max_candidates is not None and max_candidates < 1:
            raise ValueError(
                f'max_candidates must be positive, got {max_candidates}'
            )
        if timeout is not None and timeout <= 0:
            raise ValueError(f'timeout must be positive, got {timeout}')
        self.max_candidates = max_candidates
        self.ranking_policy = RankingPolicy(ranking_policy)
        self.include_matrix = include_matrix
        self.timeout = timeout

    @classmethod
    def from_env(cls,
                 environ: Optional[Mapping[str, str]] = None,
                 ) -> 'TabulationSettings':
        '''Load the settings from environment variables.

        :param environ: The environment to read; defaults to ``os.environ``.
        :raises ValueError: If a variable is set to an unparsable or out of
            range value; the message names the variable.
        '''
        if environ is None:
            environ = os.environ
        params = {}
        for name, parser in _ENV_PARSERS.items():
            variable = ENV_PREFIX + name.upper()
            raw = environ.get(variable, '').strip()
            if raw:
                try:
                    params[name] = parser(raw)
                    # constructor checks, attributed to this variable
                    cls(**{name: params[name]})
                except ValueError as e:
                    raise ValueError(
                        f'invalid value {raw!r} for {variable}: {e}'
                    ) from e
                logger.debug('setting %s loaded from environment: %r',
                             name, params[name])
        return cls(**params)

    def __repr__(self) -> str:
        return (
            f'{self.__class__.__name__}(max_candidates={self.max_candidates!r},'
            f' ranking_policy={self.ranking_policy.value!r},'
            f' include_matrix={self.include_matrix!r},'
            f' timeout={self.timeout!r})'
        )


def _parse_optional_int(raw: str) -> Optional[int]:
    if raw.lower() in _NONE_VALUES:
        return None
    return int(raw)


def _parse_bool(raw: str) -> bool:
    lowered = raw.lower()
    if lowered in _TRUE_VALUES:
        return True
    elif lowered in _FALSE_VALUES:
        return False
    else:
        raise ValueError(f'not a boolean: {raw}')


def _parse_policy(raw: str) -> str:
    return RankingPolicy(raw.lower()).value


_ENV_PARSERS: Mapping[str, Callable[[str], Any]] = {
    'max_candidates': _parse_optional_int,
    'ranking_policy': _parse_policy,
    'include_matrix': _parse_bool,
    'timeout': float,
}
