"""Command line usage text for the encoder front end."""

from __future__ import annotations

__all__ = ["usage_text"]

_USAGE = """
atractk is a tool to encode in to ATRAC1 or ATRAC3, decode from ATRAC1 formats

Usage:
atractk {-e <codec> | --encode=<codec> | -d | --decode} -i <in> -o <out>

-e or --encode\t\tencode file using one of codecs
\t{atrac1 | atrac3 | atrac3_lp}
-d or --decode\t\tdecode file (only ATRAC1 supported for decoding)
-i\t\t\tpath to input file
-o\t\t\tpath to output file
-h\t\t\tprint help and exit

--bitrate\t\tallow to specify bitrate (for ATRAC3 + RealMedia container only)

Advanced options:
--bfuidxconst\t\tSet constant amount of used BFU (ATRAC1, ATRAC3).
--bfuidxfast\t\tEnable fast search of BFU amount (ATRAC1)
--notransient[=mask]\tDisable transient detection and use optional mask
\t\t\tto set bands with forced short MDCT window

Examples:
Encode in to ATRAC1 (SP)
\tatractk -e atrac1 -i my_file.wav -o my_file.aea
Encode in to ATRAC3 (LP2)
\tatractk -e atrac3 -i my_file.wav -o my_file.oma
"""


def usage_text() -> str:
    """The help text printed for ``-h``."""
    return _USAGE