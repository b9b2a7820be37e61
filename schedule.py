"""Block decoding and message-schedule expansion."""

from __future__ import annotations

from typing import List, Sequence

from compress import BLOCK_BYTES, MASK32, _rotr


WORD_BYTES = 4


def _shr(x: int, n: int) -> int:
    """Right-shift a 32-bit word `x` by `n` bits."""
    x &= MASK32
    return x >> n


def _small_sigma0(x: int) -> int:
    """SHA-256 function σ0 used in the message schedule."""
    return (_rotr(x, 7) ^ _rotr(x, 18) ^ _shr(x, 3)) & MASK32


def _small_sigma1(x: int) -> int:
    """SHA-256 function σ1 used in the message schedule."""
    return (_rotr(x, 17) ^ _rotr(x, 19) ^ _shr(x, 10)) & MASK32


def decode_block(block) -> List[int]:
    """Convert a 64-byte block into 16 big-endian 32-bit words.

    ``block`` may be any bytes-like object (``bytes``, ``bytearray`` or a
    ``memoryview`` slice of the caller's buffer).
    """
    if len(block) != BLOCK_BYTES:
        raise ValueError(f"Expected 64-byte block, got {len(block)}")

    return [
        int.from_bytes(block[i : i + WORD_BYTES], byteorder="big")
        for i in range(0, BLOCK_BYTES, WORD_BYTES)
    ]


def expand_message_schedule(words: Sequence[int]) -> List[int]:
    """Expand the block words W[0..15] to the full schedule W[0..63].

    For t from 16 to 63:
        W[t] = σ1(W[t-2]) + W[t-7] + σ0(W[t-15]) + W[t-16]   (mod 2^32)
    """
    if len(words) != 16:
        raise ValueError(f"Message schedule expects 16 block words, got {len(words)}")

    w: List[int] = [x & MASK32 for x in words] + [0] * 48
    for t in range(16, 64):
        s0 = _small_sigma0(w[t - 15])
        s1 = _small_sigma1(w[t - 2])
        w[t] = (s1 + w[t - 7] + s0 + w[t - 16]) & MASK32

    return w


def build_message_schedule(block) -> List[int]:
    """Given a 512-bit block, build the 64-word message schedule w[0..63]."""
    return expand_message_schedule(decode_block(block))
