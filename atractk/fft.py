"""Mixed-radix complex FFT with radix 2, 3, 4, 5 and generic butterflies."""

from __future__ import annotations

import math
from collections.abc import Iterable

import numpy as np

__all__ = ["FFT", "factorize", "next_fast_size"]


def factorize(n: int) -> list[tuple[int, int]]:
    """Split ``n`` into stages ``(radix, remaining length)``.

    Powers of 4 come first, then powers of 2, then the remaining primes.
    The remaining length of each stage is the previous one divided by its radix.
    """
    if n <= 0:
        raise ValueError(f"FFT size must be positive, got {n}")
    floor_sqrt = math.floor(math.sqrt(n))
    stages: list[tuple[int, int]] = []
    p = 4
    while True:
        while n % p:
            if p == 4:
                p = 2
            elif p == 2:
                p = 3
            else:
                p += 2
            if p > floor_sqrt:
                p = n
        n //= p
        stages.append((p, n))
        if n <= 1:
            return stages


def next_fast_size(n: int) -> int:
    """Smallest size ``>= n`` whose only prime factors are 2, 3 and 5."""
    while True:
        m = n
        for radix in (2, 3, 5):
            while m % radix == 0 and m != 0:
                m //= radix
        if m <= 1:
            return n
        n += 1


class FFT:
    """Complex FFT plan of a fixed size, forward or inverse (unnormalised)."""

    def __init__(self, n: int, inverse: bool = False) -> None:
        self._factors = factorize(n)
        self.n = n
        self.inverse = bool(inverse)
        sign = 1.0 if self.inverse else -1.0
        phase = sign * 2.0 * math.pi * np.arange(n) / n
        self._twiddles = np.cos(phase) + 1j * np.sin(phase)

    def __call__(self, data: Iterable[complex]) -> np.ndarray:
        """Transform ``n`` complex samples and return a new complex array."""
        samples = np.asarray(list(data) if not isinstance(data, np.ndarray) else data,
                             dtype=np.complex128)
        if samples.ndim != 1 or samples.size != self.n:
            raise ValueError(f"expected {self.n} samples, got shape {samples.shape}")
        return self._transform(samples, 0)

    def _transform(self, samples: np.ndarray, stage: int) -> np.ndarray:
        p, m = self._factors[stage]
        if m == 1:
            out = samples[:p].copy()
        else:
            out = np.concatenate(
                [self._transform(samples[q::p], stage + 1) for q in range(p)]
            )
        fstride = self.n // (p * m)
        return self._butterfly(out.reshape(p, m), fstride, p, m).reshape(-1)

    def _butterfly(self, f: np.ndarray, fstride: int, p: int, m: int) -> np.ndarray:
        tw = self._twiddles
        u = np.arange(m)
        if p == 2:
            t = f[1] * tw[u * fstride]
            return np.stack((f[0] + t, f[0] - t))
        if p == 4:
            s0 = f[1] * tw[u * fstride]
            s1 = f[2] * tw[u * fstride * 2]
            s2 = f[3] * tw[u * fstride * 3]
            s5 = f[0] - s1
            f0 = f[0] + s1
            s3 = s0 + s2
            s4 = s0 - s2
            rot = 1j * s4 if self.inverse else -1j * s4
            return np.stack((f0 + s3, s5 + rot, f0 - s3, s5 - rot))
        if p == 3:
            epi3 = tw[fstride * m]
            s1 = f[1] * tw[u * fstride]
            s2 = f[2] * tw[u * fstride * 2]
            s3 = s1 + s2
            s0 = (s1 - s2) * epi3.imag
            mid = f[0] - s3 * 0.5
            return np.stack((f[0] + s3, mid + 1j * s0, mid - 1j * s0))
        if p == 5:
            ya = tw[fstride * m]
            yb = tw[fstride * 2 * m]
            s0 = f[0]
            s1 = f[1] * tw[u * fstride]
            s2 = f[2] * tw[2 * u * fstride]
            s3 = f[3] * tw[3 * u * fstride]
            s4 = f[4] * tw[4 * u * fstride]
            s7 = s1 + s4
            s10 = s1 - s4
            s8 = s2 + s3
            s9 = s2 - s3
            s5 = s0 + s7 * ya.real + s8 * yb.real
            s6 = -1j * (s10 * ya.imag + s9 * yb.imag)
            s11 = s0 + s7 * yb.real + s8 * ya.real
            s12 = 1j * (s10 * yb.imag - s9 * ya.imag)
            return np.stack((s0 + s7 + s8, s5 - s6, s11 + s12, s11 - s12, s5 + s6))
        # Generic radix: direct DFT across the p interleaved sub-transforms.
        k = np.arange(p * m).reshape(p, m)
        q = np.arange(p).reshape(p, 1, 1)
        idx = (q * fstride * k[np.newaxis]) % self.n
        return (f[:, np.newaxis, :] * tw[idx]).sum(axis=0)