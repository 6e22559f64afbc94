"""
Seeded pseudo-random generator used for marker patterns.

The bit sequence is part of the marker format: the same seed must produce
the same pattern on every platform and in every release. The algorithm is
Knuth's subtractive generator with a 55-word state, seeded by folding
``abs(seed)`` into ``MSEED`` and warmed up with four passes over the state.
Python's ``random`` module is not used because its seeding is an
implementation detail.

All arithmetic is reduced to signed 32-bit; the sequence depends on that
wrap-around.
"""

from typing import List

GENERATOR_VERSION = "subtractive-v1"

MBIG = 2147483647
MSEED = 161803398
STATE_SIZE = 56

INT32_MIN = -2147483648
INT32_MAX = 2147483647


def to_int32(value: int) -> int:
    """Wrap an arbitrary int to the signed 32-bit range."""
    return ((value + 2147483648) & 0xFFFFFFFF) - 2147483648


class SubtractiveRandom:
    """Deterministic generator seeded from a signed 32-bit integer."""

    def __init__(self, seed: int):
        seed = to_int32(seed)
        subtraction = INT32_MAX if seed == INT32_MIN else abs(seed)

        state: List[int] = [0] * STATE_SIZE
        mj = to_int32(MSEED - subtraction)
        state[55] = mj
        mk = 1

        for i in range(1, 55):
            ii = (21 * i) % 55
            state[ii] = mk
            mk = to_int32(mj - mk)
            if mk < 0:
                mk = to_int32(mk + MBIG)
            mj = state[ii]

        for _ in range(4):
            for i in range(1, 56):
                state[i] = to_int32(state[i] - state[1 + (i + 30) % 55])
                if state[i] < 0:
                    state[i] = to_int32(state[i] + MBIG)

        self._state = state
        self._inext = 0
        self._inextp = 21

    def _internal_sample(self) -> int:
        inext = self._inext + 1
        if inext >= STATE_SIZE:
            inext = 1
        inextp = self._inextp + 1
        if inextp >= STATE_SIZE:
            inextp = 1

        value = to_int32(self._state[inext] - self._state[inextp])
        if value == MBIG:
            value -= 1
        if value < 0:
            value = to_int32(value + MBIG)

        self._state[inext] = value
        self._inext = inext
        self._inextp = inextp
        return value

    def sample(self) -> float:
        """Return a float in ``[0, 1)``."""
        return self._internal_sample() * (1.0 / MBIG)

    def next_int(self, max_value: int) -> int:
        """Return an int in ``[0, max_value)``."""
        if max_value < 0:
            raise ValueError(f"max_value must be non-negative, got {max_value}")
        return int(self.sample() * max_value)

    def next_bit(self) -> int:
        return self.next_int(2)
