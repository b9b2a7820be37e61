"""SHA-256 digest of an in-memory byte buffer.

This module provides:

- `sha256(data, length=None) -> bytes`: the 32-byte digest of `data`.
- `sha256_into(data, length, out) -> Status`: the same digest written into
  a caller-supplied 32-byte buffer.
- `sha256_hex(data, length=None) -> str`: the digest as 64 hex digits.

Flow of one call:

1. Load the initial hash value H0..H7.
2. Read the ``length // 64`` full blocks straight from the caller's buffer.
3. Build the 1 or 2 tail blocks from the remaining bytes and the padding.
4. For every block: build the message schedule, run `compress64`, fold the
   working registers into the running state.
5. Serialize the final state big-endian.
"""

from __future__ import annotations

import enum
import logging
import operator
from typing import Iterator, Optional

from compress import BLOCK_BYTES, State, compress64, update_hash_state
from padding import tail_blocks
from schedule import build_message_schedule


logger = logging.getLogger(__name__)

DIGEST_BYTES = 32

# Initial hash values (first 32 bits of the fractional parts of the
# square roots of the first 8 primes 2..19), as per FIPS 180-4.
_H0: State = (
    0x6A09E667,
    0xBB67AE85,
    0x3C6EF372,
    0xA54FF53A,
    0x510E527F,
    0x9B05688C,
    0x1F83D9AB,
    0x5BE0CD19,
)


class Status(enum.IntEnum):
    """Result code of `sha256_into`. Only `OK` is ever produced."""

    OK = 0
    FAILED = 1


def _as_byte_view(data) -> memoryview:
    """Return a read-only unsigned-byte view of a bytes-like object."""
    try:
        view = memoryview(data)
    except TypeError:
        raise TypeError(
            f"data must be a bytes-like object, not {type(data).__name__}"
        ) from None
    if view.format != "B" or view.ndim != 1:
        view = view.cast("B")
    return view.toreadonly()


def _resolve_length(view: memoryview, length: Optional[int]) -> int:
    if length is None:
        return len(view)
    if isinstance(length, bool):
        raise TypeError("length must be an integer byte count, not bool")
    try:
        length = operator.index(length)
    except TypeError:
        raise TypeError(
            f"length must be an integer byte count, not {type(length).__name__}"
        ) from None
    if length < 0 or length > len(view):
        raise ValueError(
            f"length must be between 0 and {len(view)} for this buffer, got {length}"
        )
    return length


def _iter_blocks(view: memoryview, length: int) -> Iterator:
    """Yield every 64-byte block of the padded message, in order."""
    block_count = length // BLOCK_BYTES
    tail = tail_blocks(view[block_count * BLOCK_BYTES : length], length)

    logger.debug(
        "sha256: %d bytes, %d full blocks, %d tail blocks",
        length,
        block_count,
        len(tail),
    )

    for i in range(block_count):
        yield view[i * BLOCK_BYTES : (i + 1) * BLOCK_BYTES]
    yield from tail


def finalize_digest(state: State) -> bytes:
    """Convert a final chaining value H_N into the 32-byte SHA-256 digest."""
    return b"".join(word.to_bytes(4, byteorder="big") for word in state)


def sha256(data, length: Optional[int] = None) -> bytes:
    """Compute the SHA-256 digest of the first `length` bytes of `data`.

    `length` defaults to the whole buffer. The buffer is only read.
    """
    view = _as_byte_view(data)
    length = _resolve_length(view, length)

    state = _H0
    for block in _iter_blocks(view, length):
        ws = build_message_schedule(block)
        state = update_hash_state(state, compress64(*state, ws))

    return finalize_digest(state)


def sha256_into(data, length: Optional[int], out) -> Status:
    """Write the SHA-256 digest of `data` into the 32-byte buffer `out`.

    A read-only or wrongly sized `out` is a caller error and raises instead
    of returning `Status.FAILED`.
    """
    try:
        target = memoryview(out)
    except TypeError:
        raise TypeError(
            f"out must be a writable bytes-like object, not {type(out).__name__}"
        ) from None
    if target.readonly:
        raise TypeError("out must be a writable buffer")
    if target.nbytes != DIGEST_BYTES:
        raise ValueError(f"out must be exactly {DIGEST_BYTES} bytes, got {target.nbytes}")

    target.cast("B")[:] = sha256(data, length)
    return Status.OK


def sha256_hex(data, length: Optional[int] = None) -> str:
    """Return the SHA-256 digest of `data` as a lowercase hex string."""
    return sha256(data, length).hex()
