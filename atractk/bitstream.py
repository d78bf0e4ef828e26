"""Big-endian bit writer and reader used by the ATRAC frame formats."""

from __future__ import annotations

__all__ = ["BitStream", "make_sign"]

_MAX_BITS = 23
_MASK32 = 0xFFFFFFFF


def make_sign(value: int, bits: int) -> int:
    """Interpret the lowest ``bits`` bits of ``value`` as a two's complement number."""
    if not 1 <= bits <= 32:
        raise ValueError(f"bit width must be within 1..32, got {bits}")
    value &= (1 << bits) - 1
    if value & (1 << (bits - 1)):
        value -= 1 << bits
    return value


def _check_width(n: int) -> None:
    if not 0 <= n <= _MAX_BITS:
        raise ValueError(f"bit count must be within 0..{_MAX_BITS}, got {n}")


def _span(n: int, overlap: int) -> int:
    """Number of bytes touched by an ``n``-bit field starting ``overlap`` bits into a byte."""
    return n // 8 + (2 if overlap else 1)


class BitStream:
    """A growable byte buffer written and read MSB first, up to 23 bits at a time."""

    def __init__(self, data: bytes = b"") -> None:
        self._buf = bytearray(data)
        self._bits_used = 0
        self._read_pos = 0

    def write(self, value: int, n: int) -> None:
        """Append the lowest ``n`` bits of ``value``."""
        _check_width(n)
        bits_left = len(self._buf) * 8 - self._bits_used
        bits_req = n - bits_left
        pos, overlap = divmod(self._bits_used, 8)
        span = _span(n, overlap)

        if overlap or bits_req >= 0:
            grow = int(bits_req / 8) + (2 if overlap else 1)
            if grow > 0:
                self._buf.extend(bytes(grow))
        shortfall = pos + span - len(self._buf)
        if shortfall > 0:
            self._buf.extend(bytes(shortfall))

        word = ((int(value) << (32 - n)) & _MASK32) >> overlap
        for offset, byte in enumerate(word.to_bytes(4, "big")[:span]):
            self._buf[pos + offset] |= byte
        self._bits_used += n

    def read(self, n: int) -> int:
        """Read the next ``n`` bits as an unsigned integer."""
        _check_width(n)
        if self._read_pos + n > len(self._buf) * 8:
            raise EOFError(
                f"cannot read {n} bits at bit {self._read_pos}: "
                f"buffer holds {len(self._buf) * 8} bits"
            )
        pos, overlap = divmod(self._read_pos, 8)
        chunk = bytes(self._buf[pos:pos + _span(n, overlap)]).ljust(4, b"\0")
        word = int.from_bytes(chunk[:4], "big")
        self._read_pos += n
        return ((word << overlap) & _MASK32) >> (32 - n)

    def size_in_bits(self) -> int:
        """Number of bits written so far."""
        return self._bits_used

    def buffer_size(self) -> int:
        """Size of the underlying buffer in bytes."""
        return len(self._buf)

    def to_bytes(self) -> bytes:
        """A copy of the underlying buffer."""
        return bytes(self._buf)