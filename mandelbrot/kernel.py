"""Complex arithmetic and the Mandelbrot escape-time test."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

import numpy as np


def _format_component(value: float) -> str:
    text = repr(float(value))
    if text.endswith(".0"):
        return text[:-2]
    return text


@dataclass(frozen=True)
class Complex:
    """Immutable complex number with named arithmetic operations."""

    re: float
    im: float

    def add(self, other: Complex) -> Complex:
        return Complex(self.re + other.re, self.im + other.im)

    def mul(self, other: Complex) -> Complex:
        re = self.re * other.re - self.im * other.im
        im = self.re * other.im + self.im * other.re
        return Complex(re, im)

    def pow(self, exp: int) -> Complex:
        """Raise to ``exp`` by repeated multiplication, starting from ``1 + 0i``."""

        if exp < 0:
            raise ValueError("exponent must be a non-negative integer.")
        result = Complex(1.0, 0.0)
        for _ in range(exp):
            result = result.mul(self)
        return result

    def norm_sqr(self) -> float:
        return self.re * self.re + self.im * self.im

    def __str__(self) -> str:
        sign = "-" if self.im < 0.0 else "+"
        return f"{_format_component(self.re)} {sign} {_format_component(abs(self.im))}i"


def stability(c: Complex, max_iterations: int, escape_radius: float) -> Optional[int]:
    """Return the iteration at which ``c`` escapes, or ``None`` if it stays bounded.

    The orbit starts at zero and the escape test is applied to each new iterate,
    so a point already outside ``escape_radius`` escapes at iteration 0.
    """

    limit = escape_radius * escape_radius
    z = Complex(0.0, 0.0)
    for i in range(max_iterations):
        z = z.pow(2).add(c)
        if z.norm_sqr() > limit:
            return i
    return None


def escape_counts(c_re: np.ndarray, c_im: np.ndarray, max_iterations: int, escape_radius: float) -> np.ndarray:
    """Vectorised ``stability`` over a grid of points.

    Bounded points are reported as ``max_iterations``. Each step uses the same
    floating point operations as ``stability`` so both agree element-wise.
    """

    c_re = np.asarray(c_re, dtype=np.float64)
    c_im = np.asarray(c_im, dtype=np.float64)
    if c_re.shape != c_im.shape:
        raise ValueError("real and imaginary grids must have the same shape.")

    limit = np.float64(escape_radius) * np.float64(escape_radius)
    counts = np.full(c_re.shape, max_iterations, dtype=np.int64)
    z_re = np.zeros(c_re.shape, dtype=np.float64)
    z_im = np.zeros(c_im.shape, dtype=np.float64)
    active = np.ones(c_re.shape, dtype=bool)

    for i in range(max_iterations):
        if not active.any():
            break
        zr = z_re[active]
        zi = z_im[active]
        new_re = zr * zr - zi * zi + c_re[active]
        new_im = zr * zi + zi * zr + c_im[active]
        z_re[active] = new_re
        z_im[active] = new_im

        escaped = np.zeros(c_re.shape, dtype=bool)
        escaped[active] = new_re * new_re + new_im * new_im > limit
        counts[escaped] = i
        active &= ~escaped

    return counts
