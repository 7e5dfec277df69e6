# gpreg/kernel/gaussian.py
# --------------------------------------------------------------
# Author: Emmanuel Vazquez <emmanuel.vazquez@centralesupelec.fr>
# Copyright (c) 2022-2026, CentraleSupelec
# License: GPLv3 (see LICENSE)
# --------------------------------------------------------------
import gpreg.num as gnp
from .utils import as_vector_pair, as_matrix_pair, sparse_dot


def gaussian_kernel(h2, sigma):
    """Gaussian kernel as a function of squared distances.

    .. math::
        k(h) = \\exp\\left(-\\frac{h^2}{2\\sigma^2}\\right)

    Parameters
    ----------
    h2 : gnp.array or float
        Squared Euclidean distances between points.
    sigma : float
        Kernel width.

    Returns
    -------
    gnp.array or float
        Kernel values.
    """
    return gnp.exp(-0.5 * h2 / (sigma * sigma))


class GaussianKernel:
    """Gaussian (RBF) kernel on dense feature vectors.

    k(x, y) = exp(-||x - y||² / (2 σ²))

    Parameters
    ----------
    sigma : float
        Kernel width (> 0).
    """

    def __init__(self, sigma):
        if not sigma > 0.0:
            raise ValueError("sigma must be positive")
        self.sigma = float(sigma)

    def __repr__(self):
        return f"GaussianKernel(sigma={self.sigma})"

    def __call__(self, x, y):
        return self.evaluate(x, y)

    def evaluate(self, x, y):
        x, y = as_vector_pair(x, y)
        d = x - y
        return float(gaussian_kernel(gnp.dot(d, d), self.sigma))

    def matrix(self, x, y=None):
        """Kernel matrix between x (n, d) and y (m, d); y=None means y := x."""
        x, y = as_matrix_pair(x, y)
        return gaussian_kernel(gnp.sq_euclidean_distance(x, y), self.sigma)

    def diag(self, x):
        return gnp.ones((gnp.asarray(x).shape[0],))


class BinarySparseGaussianKernel:
    """Gaussian kernel on binary sparse vectors.

    Points are sorted integer arrays listing the indices of the nonzero
    (unit) entries, so that ||x - y||² = |x| + |y| - 2 |x ∩ y|.

    Parameters
    ----------
    sigma : float
        Kernel width (> 0).
    """

    def __init__(self, sigma):
        if not sigma > 0.0:
            raise ValueError("sigma must be positive")
        self.sigma = float(sigma)

    def __repr__(self):
        return f"BinarySparseGaussianKernel(sigma={self.sigma})"

    def __call__(self, x, y):
        return self.evaluate(x, y)

    def evaluate(self, x, y):
        h2 = len(x) + len(y) - 2 * sparse_dot(x, y)
        return float(gaussian_kernel(h2, self.sigma))
