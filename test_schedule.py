import pytest

from compress import MASK32
from padding import pad_message
from schedule import (
    _small_sigma0,
    _small_sigma1,
    build_message_schedule,
    decode_block,
    expand_message_schedule,
)


def test_decode_block_is_big_endian():
    words = decode_block(bytes(range(64)))

    assert len(words) == 16
    assert words[0] == 0x00010203
    assert words[15] == 0x3C3D3E3F


def test_decode_block_accepts_memoryview_slice():
    data = bytes(range(128))
    view = memoryview(data)[64:128]

    assert decode_block(view) == decode_block(data[64:])


@pytest.mark.parametrize("size", [0, 63, 65])
def test_decode_block_rejects_wrong_size(size):
    with pytest.raises(ValueError, match="64-byte block"):
        decode_block(bytes(size))


def test_small_sigmas_of_single_bit():
    # σ0(1) = rotr7 | rotr18, shr3 drops the bit.
    assert _small_sigma0(1) == (1 << 25) | (1 << 14)
    # σ1(1) = rotr17 | rotr19, shr10 drops the bit.
    assert _small_sigma1(1) == (1 << 15) | (1 << 13)


def test_expand_keeps_block_words():
    words = list(range(16))
    w = expand_message_schedule(words)

    assert len(w) == 64
    assert w[:16] == words
    assert words == list(range(16))


def test_expand_schedule_of_abc_block():
    w = build_message_schedule(pad_message(b"abc"))

    assert w[0] == 0x61626380
    assert w[15] == 0x00000018
    # W16 = σ1(0) + 0 + σ0(0) + W0
    assert w[16] == 0x61626380
    # W17 = σ1(W15) + 0 + σ0(0) + 0
    assert w[17] == 0x000F0000


def test_expand_wraps_modulo_2_32():
    w = expand_message_schedule([MASK32] * 16)

    assert all(0 <= x <= MASK32 for x in w)
    expected_16 = (_small_sigma1(MASK32) + MASK32 + _small_sigma0(MASK32) + MASK32) & MASK32
    assert w[16] == expected_16


@pytest.mark.parametrize("count", [15, 17, 64])
def test_expand_rejects_wrong_word_count(count):
    with pytest.raises(ValueError, match="16 block words"):
        expand_message_schedule([0] * count)
