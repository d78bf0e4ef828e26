"""Command line tools that inspect and copy OMA containers."""

from __future__ import annotations

import sys
from collections.abc import Sequence

from .oma import OmaError, open_oma

__all__ = ["info_main", "copy_main"]


def _args(argv: Sequence[str] | None) -> list[str]:
    return list(sys.argv[1:] if argv is None else argv)


def info_main(argv: Sequence[str] | None = None) -> int:
    """Print codec, bit rate, channel format and frame size of each file given."""
    paths = _args(argv)
    if not paths:
        print("usage: \n\t omainfo [filename]")
        return 1

    status = 0
    for path in paths:
        try:
            with open_oma(path) as oma:
                info = oma.info
        except OmaError as exc:
            print(f"Can't open {path}: {exc}", file=sys.stderr)
            status = 1
            continue
        print(
            f"{path} codec: {info.codec_name()}, bitrate: {info.bitrate()}, "
            f"channelformat: {int(info.channel_format)} framesz: {info.framesize}"
        )
    return status


def copy_main(argv: Sequence[str] | None = None) -> int:
    """Copy an OMA container frame by frame into a new file."""
    args = _args(argv)
    if len(args) != 2:
        print("usage: \n\t omacp [in] [out]")
        return 1
    src_path, dst_path = args

    try:
        src = open_oma(src_path)
    except OmaError as exc:
        print(f"Can't open {src_path} to read, err: {exc.code}", file=sys.stderr)
        return 1

    with src:
        info = src.info
        print(
            f"codec: {info.codec_name()}, bitrate: {info.bitrate()}, "
            f"channel format: {int(info.channel_format)}"
        )
        try:
            dst = open_oma(dst_path, "w", info)
        except OmaError as exc:
            print(f"Can't open {dst_path} to write, err: {exc.code}", file=sys.stderr)
            return 1

        with dst:
            try:
                frames = iter(src)
                while True:
                    try:
                        frame = next(frames)
                    except StopIteration:
                        break
                    except OmaError:
                        print("read error", file=sys.stderr)
                        return 1
                    dst.write(frame)
            except OmaError:
                print("write error", file=sys.stderr)
                return 1
    return 0