"""SHA-256 message padding.

The padding appended after a message of ``n`` bytes is

    0x80 | k zero bytes | (8 * n) as a 64-bit big-endian integer

with the smallest ``k >= 0`` that makes ``n + len(padding)`` a multiple of
64. When fewer than 9 bytes remain in the final block, the padding spills
into one extra block, so it is always between 9 and 72 bytes long.
"""

from __future__ import annotations

from typing import List

from compress import BLOCK_BYTES


LENGTH_FIELD_BYTES = 8
MAX_MESSAGE_LENGTH = (1 << 64) - 1
_MASK64 = (1 << 64) - 1


def _check_length(message_length: int) -> None:
    if message_length < 0:
        raise ValueError(f"Message length must be non-negative, got {message_length}")
    if message_length > MAX_MESSAGE_LENGTH:
        raise ValueError(
            f"Message length must fit in 64 bits, got {message_length}"
        )


def padding_length(message_length: int) -> int:
    """Return the number of padding bytes for a message of the given length."""
    _check_length(message_length)

    size = BLOCK_BYTES - (message_length % BLOCK_BYTES)
    if size < LENGTH_FIELD_BYTES + 1:
        size += BLOCK_BYTES
    return size


def get_padding(message_length: int) -> bytes:
    """Build the padding bytes for a message of ``message_length`` bytes.

    The bit length wraps modulo 2**64 for messages near 2**61 bytes, which
    is the limit of the length field itself.
    """
    size = padding_length(message_length)
    bit_length = (message_length * 8) & _MASK64

    padded = bytearray(size)
    padded[0] = 0x80
    padded[-LENGTH_FIELD_BYTES:] = bit_length.to_bytes(LENGTH_FIELD_BYTES, byteorder="big")
    return bytes(padded)


def tail_blocks(remainder, message_length: int) -> List[bytes]:
    """Build the final block(s) that follow the full message blocks.

    ``remainder`` holds the trailing ``message_length % 64`` bytes of the
    message. They are completed with the start of the padding to form one
    64-byte block; if the padding does not fit, its last 64 bytes form a
    second block.
    """
    rem_size = message_length % BLOCK_BYTES
    if len(remainder) != rem_size:
        raise ValueError(
            f"Expected {rem_size} trailing message bytes, got {len(remainder)}"
        )

    padding = get_padding(message_length)
    first = bytes(remainder) + padding[: BLOCK_BYTES - rem_size]
    if len(padding) <= BLOCK_BYTES - rem_size:
        return [first]
    return [first, padding[-BLOCK_BYTES:]]


def pad_message(message) -> bytes:
    """Return the full padded stream: the message followed by its padding.

    The result length is a multiple of 64 bytes (512 bits). The digest
    driver never builds this; it reads full blocks in place and only
    materializes `tail_blocks`.
    """
    message = bytes(message)
    return message + get_padding(len(message))
