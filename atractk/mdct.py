"""Fast MDCT and inverse MDCT built on a quarter-length complex FFT."""

from __future__ import annotations

import math
from collections.abc import Iterable

import numpy as np

from .fft import FFT

__all__ = ["Mdct", "Midct", "Dct4x16", "calc_eps"]

# Signal-to-noise ratio, in dB, expected of double precision transforms.
_SNR_DB = -240.0


def calc_eps(magnitude: float) -> float:
    """Acceptable numeric error for values of the given magnitude."""
    return magnitude * 10.0 ** (_SNR_DB / 20.0)


class _Transform:
    def __init__(self, n: int, scale: float) -> None:
        if n < 8 or n % 8:
            raise ValueError(f"transform size must be a positive multiple of 8, got {n}")
        if scale < 0:
            raise ValueError(f"scale must not be negative, got {scale}")
        self.n = n
        amplitude = math.sqrt(scale / n)
        alpha = 2.0 * math.pi / (8.0 * n)
        omega = 2.0 * math.pi / n
        phase = omega * np.arange(n >> 2) + alpha
        self._cos = amplitude * np.cos(phase)
        self._sin = amplitude * np.sin(phase)
        self._fft = FFT(n >> 2)

    @staticmethod
    def _samples(data: Iterable[float], size: int) -> np.ndarray:
        values = np.asarray(data if isinstance(data, np.ndarray) else list(data),
                            dtype=np.float64)
        if values.ndim != 1 or values.size < size:
            raise ValueError(f"expected at least {size} samples, got shape {values.shape}")
        return values[:size]


class Mdct(_Transform):
    """Forward MDCT of ``n`` samples into ``n / 2`` coefficients.

    With ``scale == n`` the result equals the textbook definition
    ``X[k] = sum x[i] cos(pi / M (i + 1/2 + M/2) (k + 1/2))`` with ``M = n / 2``;
    other scales multiply it by ``scale / n``.
    """

    def __init__(self, n: int, scale: float = 1.0) -> None:
        super().__init__(n, scale)

    def __call__(self, data: Iterable[float]) -> np.ndarray:
        n = self.n
        x = self._samples(data, n)
        n2, n4 = n >> 1, n >> 2
        n34, n54 = 3 * n4, 5 * n4
        k1 = np.arange(0, n4, 2)
        k2 = np.arange(n4, n2, 2)
        r0 = np.concatenate((x[n34 - 1 - k1] + x[n34 + k1], x[n34 - 1 - k2] - x[k2 - n4]))
        i0 = np.concatenate((x[n4 + k1] - x[n4 - 1 - k1], x[n4 + k2] + x[n54 - 1 - k2]))

        c, s = self._cos, self._sin
        spec = self._fft((r0 * c + i0 * s) + 1j * (i0 * c - r0 * s))
        re, im = spec.real, spec.imag

        out = np.empty(n2)
        k = np.arange(0, n2, 2)
        out[k] = -re * c - im * s
        out[n2 - 1 - k] = -re * s + im * c
        return out


class Midct(_Transform):
    """Inverse MDCT of ``n / 2`` coefficients into ``n`` samples.

    With the default ``scale == n`` the result equals the textbook sum
    ``y[i] = sum X[k] cos(pi / M (i + 1/2 + M/2) (k + 1/2))``;
    other scales multiply it by ``scale / n``.
    """

    def __init__(self, n: int, scale: float | None = None) -> None:
        super().__init__(n, (n if scale is None else scale) / 2.0)

    def __call__(self, data: Iterable[float]) -> np.ndarray:
        n = self.n
        n2, n4 = n >> 1, n >> 2
        n34, n54 = 3 * n4, 5 * n4
        x = self._samples(data, n2)

        k = np.arange(0, n2, 2)
        r0 = x[k]
        i0 = x[n2 - 1 - k]
        c, s = self._cos, self._sin
        spec = self._fft(-2.0 * (i0 * s + r0 * c) + 1j * (-2.0 * (i0 * c - r0 * s)))
        re, im = spec.real, spec.imag
        r1 = re * c + im * s
        i1 = re * s - im * c

        half = n4 // 2
        k1, k2 = k[:half], k[half:]
        out = np.empty(n)
        out[n34 - 1 - k1] = r1[:half]
        out[n34 + k1] = r1[:half]
        out[n4 + k1] = i1[:half]
        out[n4 - 1 - k1] = -i1[:half]

        out[n34 - 1 - k2] = r1[half:]
        out[k2 - n4] = -r1[half:]
        out[n4 + k2] = i1[half:]
        out[n54 - 1 - k2] = i1[half:]
        return out


class Dct4x16:
    """Sixteen-point type IV cosine transform used by the ATRAC filter banks."""

    def __init__(self, scale: float = 1.0) -> None:
        self._midct = Midct(32, 32.0 * scale)

    def __call__(self, data: Iterable[float]) -> np.ndarray:
        return -self._midct(data)[8:24]