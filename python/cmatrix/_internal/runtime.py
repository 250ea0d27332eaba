from __future__ import annotations

import logging
import operator
import os
import time
from typing import Callable

from .errors import InvalidArgumentError

logger = logging.getLogger("cmatrix.runtime")


class Runtime:
    """Process-wide settings consulted when a caller leaves them unspecified.

    Today this is only the default seed of ``randint``. Resolution order:
    an explicit ``set_default_seed`` override, then the ``CMATRIX_SEED``
    environment variable, then the wall clock at call time. Two clock-derived
    seeds taken within the same second are identical.
    """

    def __init__(
        self,
        *,
        env_var: str = "CMATRIX_SEED",
        clock: Callable[[], float] = time.time,
    ) -> None:
        self._env_var = env_var
        self._clock = clock
        self._seed_override: int | None = None

    @property
    def env_var(self) -> str:
        return self._env_var

    def set_default_seed(self, seed: int | None) -> None:
        self._seed_override = None if seed is None else operator.index(seed)

    def default_seed(self) -> int:
        if self._seed_override is not None:
            return self._seed_override

        env = os.environ.get(self._env_var)
        if env:
            try:
                seed = int(env)
            except ValueError:
                raise InvalidArgumentError(
                    f"{self._env_var} must be an integer, got {env!r}"
                ) from None
            logger.debug("using default seed %d from %s", seed, self._env_var)
            return seed

        seed = int(self._clock())
        logger.debug("derived default seed %d from the wall clock", seed)
        return seed


_RUNTIME = Runtime()


def default_runtime() -> Runtime:
    return _RUNTIME
