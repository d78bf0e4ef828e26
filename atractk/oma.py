"""Reading and writing OMA (EA3) containers holding ATRAC3 and ATRAC3plus frames."""

from __future__ import annotations

import dataclasses
from collections.abc import Iterator
from dataclasses import dataclass
from enum import IntEnum
from pathlib import Path
from typing import BinaryIO

__all__ = [
    "Codec",
    "ChannelFormat",
    "OmaError",
    "OmaInfo",
    "HEADER_SIZE",
    "encode_header",
    "parse_header",
    "OmaFile",
    "open_oma",
]

HEADER_SIZE = 96

_MAGIC = b"EA3"
_SAMPLE_RATES = (32000, 44100, 48000, 88200, 96000, 0, 0, 0)
_CODEC_NAMES = ("ATRAC3", "ATRAC3PLUS", "MPEG1LAYER3", "LPCM", "", "OMAC_ID_WMA")
_MAX_FRAME_FIELD = 0x3FF


class Codec(IntEnum):
    """Codec identifiers stored in the header."""

    ATRAC3 = 0
    ATRAC3PLUS = 1
    MP3 = 2
    LPCM = 3
    WMA = 5


class ChannelFormat(IntEnum):
    """Channel layouts known to the container."""

    MONO = 0
    STEREO = 1
    STEREO_JS = 2
    CH3 = 3
    CH4 = 4
    CH6 = 5
    CH7 = 6
    CH8 = 7


# ATRAC3plus channel id (1-based in the header) to channel format.
_CHANNEL_ID_FORMATS = (
    ChannelFormat.MONO,
    ChannelFormat.STEREO,
    ChannelFormat.CH3,
    ChannelFormat.CH4,
    ChannelFormat.CH6,
    ChannelFormat.CH7,
    ChannelFormat.CH8,
)


class OmaError(Exception):
    """Failure to read or write an OMA container; ``code`` tells the kind."""

    IO = -1
    PERMISSION = -2
    FORMAT = -3
    ENCRYPTED = -4
    VALUE = -5
    EOF = -6

    def __init__(self, message: str, code: int) -> None:
        super().__init__(message)
        self.code = code


@dataclass(frozen=True)
class OmaInfo:
    """Stream parameters stored in an OMA header."""

    codec: Codec
    framesize: int
    samplerate: int
    channel_format: ChannelFormat

    def bitrate(self) -> int:
        """Bit rate in bits per second implied by frame size and sample rate."""
        if self.codec == Codec.ATRAC3:
            return self.samplerate * self.framesize * 8 // 1024
        if self.codec == Codec.ATRAC3PLUS:
            return self.samplerate * self.framesize * 8 // 2048
        raise OmaError(f"no bit rate known for codec {int(self.codec)}", OmaError.VALUE)

    def codec_name(self) -> str:
        """Printable codec name, empty for unknown identifiers."""
        codec = int(self.codec)
        if 0 <= codec < len(_CODEC_NAMES):
            return _CODEC_NAMES[codec]
        return ""


def _trunc_div(a: int, b: int) -> int:
    quotient = abs(a) // b
    return quotient if a >= 0 else -quotient


def _samplerate_index(samplerate: int) -> int:
    if samplerate > 0:
        for index, rate in enumerate(_SAMPLE_RATES):
            if rate == 0:
                break
            if rate == samplerate:
                return index
    raise OmaError(f"unsupported sample rate {samplerate}", OmaError.VALUE)


def _frame_field(value: int) -> int:
    if not 0 <= value <= _MAX_FRAME_FIELD:
        raise OmaError(f"frame size does not fit the header: {value}", OmaError.VALUE)
    return value


def _atrac3_params(info: OmaInfo) -> int:
    if info.channel_format not in (ChannelFormat.STEREO, ChannelFormat.STEREO_JS):
        raise OmaError(
            f"ATRAC3 needs a stereo channel format, got {int(info.channel_format)}",
            OmaError.VALUE,
        )
    js = 1 if info.channel_format == ChannelFormat.STEREO_JS else 0
    rate_idx = _samplerate_index(info.samplerate)
    frame = _frame_field(_trunc_div(info.framesize, 8))
    return (Codec.ATRAC3 << 24) | (js << 17) | (rate_idx << 13) | frame


def _atrac3plus_params(info: OmaInfo) -> int:
    rate_idx = _samplerate_index(info.samplerate)
    frame = _frame_field(_trunc_div(info.framesize - 8, 8))
    try:
        channel_id = _CHANNEL_ID_FORMATS.index(ChannelFormat(info.channel_format))
    except ValueError:
        raise OmaError(
            f"channel format {int(info.channel_format)} not allowed for ATRAC3plus",
            OmaError.VALUE,
        ) from None
    return (Codec.ATRAC3PLUS << 24) | (rate_idx << 13) | ((channel_id + 1) << 10) | frame


def encode_header(info: OmaInfo) -> bytes:
    """Build the 96-byte header describing ``info``."""
    if info.codec == Codec.ATRAC3:
        params = _atrac3_params(info)
    elif info.codec == Codec.ATRAC3PLUS:
        params = _atrac3plus_params(info)
    else:
        raise OmaError(f"cannot write codec {int(info.codec)}", OmaError.VALUE)

    header = bytearray(HEADER_SIZE)
    header[0:3] = _MAGIC
    header[3] = 1
    header[5] = HEADER_SIZE
    header[6] = 0xFF
    header[7] = 0xFF
    header[32:36] = params.to_bytes(4, "big")
    return bytes(header)


def _rate_from_params(params: int) -> int:
    samplerate = _SAMPLE_RATES[(params >> 13) & 0x7]
    if samplerate == 0:
        raise OmaError("wrong sample rate field in header", OmaError.FORMAT)
    return samplerate


def parse_header(data: bytes) -> OmaInfo:
    """Decode the stream parameters from a 96-byte header."""
    data = bytes(data)
    if len(data) < HEADER_SIZE:
        raise OmaError(
            f"header needs {HEADER_SIZE} bytes, got {len(data)}", OmaError.FORMAT
        )
    if data[0:3] != _MAGIC or data[4] != 0 or data[5] != HEADER_SIZE:
        raise OmaError("not an OMA header", OmaError.FORMAT)
    if data[6] != 0xFF or data[7] != 0xFF:
        raise OmaError("encrypted OMA files are not supported", OmaError.ENCRYPTED)

    codec_id = data[32]
    params = int.from_bytes(data[33:36], "big")
    if codec_id == Codec.ATRAC3:
        js = (params >> 17) & 0x1
        return OmaInfo(
            codec=Codec.ATRAC3,
            framesize=(params & _MAX_FRAME_FIELD) * 8,
            samplerate=_rate_from_params(params),
            channel_format=ChannelFormat.STEREO_JS if js else ChannelFormat.STEREO,
        )
    if codec_id == Codec.ATRAC3PLUS:
        channel_id = (params >> 10) & 0x7
        if channel_id == 0:
            raise OmaError("missing channel id in header", OmaError.FORMAT)
        return OmaInfo(
            codec=Codec.ATRAC3PLUS,
            framesize=(params & _MAX_FRAME_FIELD) * 8 + 8,
            samplerate=_rate_from_params(params),
            channel_format=_CHANNEL_ID_FORMATS[channel_id - 1],
        )
    signed = codec_id - 256 if codec_id > 127 else codec_id
    raise OmaError(f"unsupported format: {signed}", OmaError.FORMAT)


class OmaFile:
    """An OMA container opened for reading (``"r"``) or writing (``"w"``)."""

    def __init__(self, path: str | Path, mode: str = "r", info: OmaInfo | None = None) -> None:
        if mode not in ("r", "w"):
            raise ValueError(f"mode must be 'r' or 'w', got {mode!r}")
        self.mode = mode
        self.path = Path(path)
        header = b""
        if mode == "w":
            if info is None:
                raise OmaError("stream info is required for writing", OmaError.VALUE)
            header = encode_header(info)
            self.info = dataclasses.replace(info)

        try:
            self._file: BinaryIO | None = open(self.path, mode + "b")
        except PermissionError as exc:
            raise OmaError(f"cannot open {self.path}: {exc}", OmaError.PERMISSION) from exc
        except OSError as exc:
            raise OmaError(f"cannot open {self.path}: {exc}", OmaError.IO) from exc

        try:
            if mode == "r":
                self.info = parse_header(self._file.read(HEADER_SIZE))
            else:
                self._file.write(header)
        except OSError as exc:
            self.close()
            raise OmaError(f"cannot access header of {self.path}: {exc}", OmaError.IO) from exc
        except OmaError:
            self.close()
            raise

    def _handle(self, mode: str) -> BinaryIO:
        if self._file is None:
            raise OmaError("file is closed", OmaError.VALUE)
        if self.mode != mode:
            raise OmaError(f"file is not open for mode {mode!r}", OmaError.VALUE)
        return self._file

    def read(self, blocks: int = 1) -> bytes:
        """Read ``blocks`` whole frames; returns ``b""`` once they are not all there."""
        handle = self._handle("r")
        if blocks < 0:
            raise OmaError(f"block count must not be negative, got {blocks}", OmaError.VALUE)
        size = blocks * self.info.framesize
        try:
            chunk = handle.read(size)
        except OSError as exc:
            raise OmaError(f"read error: {exc}", OmaError.IO) from exc
        return chunk if len(chunk) == size else b""

    def write(self, data: bytes) -> int:
        """Write whole frames and return how many were written."""
        handle = self._handle("w")
        framesize = self.info.framesize
        if framesize <= 0 or len(data) % framesize:
            raise OmaError(
                f"data of {len(data)} bytes is not a whole number of {framesize}-byte frames",
                OmaError.VALUE,
            )
        try:
            handle.write(bytes(data))
        except OSError as exc:
            raise OmaError(f"write error: {exc}", OmaError.IO) from exc
        return len(data) // framesize

    def close(self) -> None:
        """Close the underlying file; further calls do nothing."""
        if self._file is not None:
            self._file.close()
            self._file = None

    def __enter__(self) -> OmaFile:
        return self

    def __exit__(self, *args: object) -> None:
        self.close()

    def __iter__(self) -> Iterator[bytes]:
        while frame := self.read(1):
            yield frame


def open_oma(path: str | Path, mode: str = "r", info: OmaInfo | None = None) -> OmaFile:
    """Open an OMA container; ``info`` is required when writing."""
    return OmaFile(path, mode, info)