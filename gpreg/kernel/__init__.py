# gpreg/kernel/__init__.py
# --------------------------------------------------------------
# Author: Emmanuel Vazquez <emmanuel.vazquez@centralesupelec.fr>
# Copyright (c) 2022-2026, CentraleSupelec
# License: GPLv3 (see LICENSE)
# --------------------------------------------------------------
"""
Kernels for Gaussian Process regression.

A kernel is any object with an ``evaluate(a, b) -> float`` method (or a
plain callable ``k(a, b)``), symmetric and deterministic. Dense kernels
additionally provide ``matrix(x, y=None)`` and ``diag(x)`` which the
Gram-matrix builder uses when point sets are (n, d) arrays.

Modules
-------
gaussian
    Gaussian (RBF) kernel, dense and binary sparse.
dot_product
    Polynomial and hyperbolic tangent kernels, dense and binary sparse.
utils
    Internal helper functions for argument conversion and validation.

Public API
-----------
- Gaussian kernels:
    gaussian_kernel, GaussianKernel, BinarySparseGaussianKernel
- Inner-product kernels:
    polynomial_kernel, hyperbolic_tangent_kernel,
    PolynomialKernel, HyperbolicTangentKernel,
    BinarySparsePolynomialKernel, BinarySparseHyperbolicTangentKernel
"""

from .gaussian import gaussian_kernel, GaussianKernel, BinarySparseGaussianKernel
from .dot_product import (
    polynomial_kernel,
    hyperbolic_tangent_kernel,
    PolynomialKernel,
    HyperbolicTangentKernel,
    BinarySparsePolynomialKernel,
    BinarySparseHyperbolicTangentKernel,
)

__all__ = [
    "gaussian_kernel",
    "GaussianKernel",
    "BinarySparseGaussianKernel",
    "polynomial_kernel",
    "hyperbolic_tangent_kernel",
    "PolynomialKernel",
    "HyperbolicTangentKernel",
    "BinarySparsePolynomialKernel",
    "BinarySparseHyperbolicTangentKernel",
]
