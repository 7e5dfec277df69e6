# gpreg/kernel/dot_product.py
# --------------------------------------------------------------
# Author: Emmanuel Vazquez <emmanuel.vazquez@centralesupelec.fr>
# Copyright (c) 2022-2026, CentraleSupelec
# License: GPLv3 (see LICENSE)
# --------------------------------------------------------------
"""
Kernels that depend on the inner product of their arguments.

The polynomial kernel is positive semi-definite for a nonnegative
offset. The hyperbolic tangent kernel is not positive semi-definite in
general; Gram matrices built with it may need the jitter retries of
`gpreg.core.linalg.regularized_cholesky` or fail with
`NumericalInstabilityError`. A positive offset makes this less likely.

Binary sparse variants take sorted integer arrays listing the indices
of the nonzero (unit) entries; their inner product is the size of the
intersection.
"""
import gpreg.num as gnp
from .utils import as_vector_pair, as_matrix_pair, sparse_dot


def polynomial_kernel(t, degree, scale=1.0, offset=0.0):
    """(scale * t + offset) ** degree, with t an inner product."""
    return (scale * t + offset) ** degree


def hyperbolic_tangent_kernel(t, scale=1.0, offset=0.0):
    """tanh(scale * t + offset), with t an inner product."""
    return gnp.tanh(scale * t + offset)


def _check_polynomial_parameters(degree, scale, offset):
    if int(degree) != degree or degree < 1:
        raise ValueError("degree must be a positive integer")
    if not scale > 0.0:
        raise ValueError("scale must be positive")
    if offset < 0.0:
        raise ValueError("offset must be nonnegative")
    return int(degree), float(scale), float(offset)


class PolynomialKernel:
    """Polynomial kernel k(x, y) = (scale xᵀy + offset)^degree.

    Parameters
    ----------
    degree : int
        Positive integer degree.
    scale : float, optional
        Scale of the inner product (> 0).
    offset : float, optional
        Offset of the inner product (>= 0).
    """

    def __init__(self, degree, scale=1.0, offset=0.0):
        self.degree, self.scale, self.offset = _check_polynomial_parameters(
            degree, scale, offset
        )

    def __repr__(self):
        return (
            f"PolynomialKernel(degree={self.degree}, "
            f"scale={self.scale}, offset={self.offset})"
        )

    def __call__(self, x, y):
        return self.evaluate(x, y)

    def evaluate(self, x, y):
        x, y = as_vector_pair(x, y)
        return float(polynomial_kernel(gnp.dot(x, y), self.degree, self.scale, self.offset))

    def matrix(self, x, y=None):
        """Kernel matrix between x (n, d) and y (m, d); y=None means y := x."""
        x, y = as_matrix_pair(x, y)
        return polynomial_kernel(gnp.matmul(x, y.T), self.degree, self.scale, self.offset)

    def diag(self, x):
        x, _ = as_matrix_pair(x, None)
        return polynomial_kernel(gnp.sum(x * x, axis=1), self.degree, self.scale, self.offset)


class HyperbolicTangentKernel:
    """Hyperbolic tangent kernel k(x, y) = tanh(scale xᵀy + offset).

    Parameters
    ----------
    scale : float, optional
    offset : float, optional
    """

    def __init__(self, scale=1.0, offset=0.0):
        self.scale = float(scale)
        self.offset = float(offset)

    def __repr__(self):
        return f"HyperbolicTangentKernel(scale={self.scale}, offset={self.offset})"

    def __call__(self, x, y):
        return self.evaluate(x, y)

    def evaluate(self, x, y):
        x, y = as_vector_pair(x, y)
        return float(hyperbolic_tangent_kernel(gnp.dot(x, y), self.scale, self.offset))

    def matrix(self, x, y=None):
        """Kernel matrix between x (n, d) and y (m, d); y=None means y := x."""
        x, y = as_matrix_pair(x, y)
        return hyperbolic_tangent_kernel(gnp.matmul(x, y.T), self.scale, self.offset)

    def diag(self, x):
        x, _ = as_matrix_pair(x, None)
        return hyperbolic_tangent_kernel(gnp.sum(x * x, axis=1), self.scale, self.offset)


class BinarySparsePolynomialKernel:
    """Polynomial kernel on binary sparse vectors (sorted index arrays)."""

    def __init__(self, degree, scale=1.0, offset=0.0):
        self.degree, self.scale, self.offset = _check_polynomial_parameters(
            degree, scale, offset
        )

    def __repr__(self):
        return (
            f"BinarySparsePolynomialKernel(degree={self.degree}, "
            f"scale={self.scale}, offset={self.offset})"
        )

    def __call__(self, x, y):
        return self.evaluate(x, y)

    def evaluate(self, x, y):
        return float(polynomial_kernel(sparse_dot(x, y), self.degree, self.scale, self.offset))


class BinarySparseHyperbolicTangentKernel:
    """Hyperbolic tangent kernel on binary sparse vectors (sorted index arrays)."""

    def __init__(self, scale=1.0, offset=0.0):
        self.scale = float(scale)
        self.offset = float(offset)

    def __repr__(self):
        return (
            f"BinarySparseHyperbolicTangentKernel(scale={self.scale}, "
            f"offset={self.offset})"
        )

    def __call__(self, x, y):
        return self.evaluate(x, y)

    def evaluate(self, x, y):
        return float(hyperbolic_tangent_kernel(sparse_dot(x, y), self.scale, self.offset))
