"""
Cryptographically random marker seeds.

A seed is all that is needed to regenerate a marker, so callers can store
the integer instead of the image.
"""

import logging
import secrets
import threading

logger = logging.getLogger("markergen.seed_source")

SEED_BYTES = 4


class EntropyExhaustedError(RuntimeError):
    """The operating system could not provide random bytes."""


class SeedSource:
    """Thread-safe issuer of uniformly distributed int32 seeds."""

    def __init__(self):
        self._lock = threading.Lock()
        self._buffer = bytearray(SEED_BYTES)

    def next_seed(self) -> int:
        """Return a random int in ``[-2**31, 2**31 - 1]``."""
        with self._lock:
            try:
                self._buffer[:] = secrets.token_bytes(SEED_BYTES)
            except OSError as e:
                raise EntropyExhaustedError(f"Failed to read random bytes: {e}") from e
            seed = int.from_bytes(self._buffer, byteorder="little", signed=True)

        logger.debug(f"Issued seed {seed}")
        return seed


_default_source = SeedSource()


def next_seed() -> int:
    """Draw a seed from the process-wide source."""
    return _default_source.next_seed()
