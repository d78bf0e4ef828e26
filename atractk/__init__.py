"""ATRAC toolkit: FFT, MDCT, bit streams, OMA containers and their command line tools."""

__version__ = "0.1.0"

__all__ = ["bitstream", "cli", "fft", "mdct", "oma", "usage"]