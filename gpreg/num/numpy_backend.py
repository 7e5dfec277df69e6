# gpreg/num/numpy_backend.py
# --------------------------------------------------------------
# Author: Emmanuel Vazquez <emmanuel.vazquez@centralesupelec.fr>
# Copyright (c) 2022-2026, CentraleSupelec
# License: GPLv3 (see LICENSE)
# --------------------------------------------------------------
"""NumPy numerical namespace for GPreg.

This module defines the NumPy/SciPy implementation of the gpreg.num API.
"""

from typing import Any, Optional, Union
from gpreg.config import get_config, get_logger

Scalar = Union[int, float]
ArrayLike = Any

_config = get_config()
_logger = get_logger()


# -----------------------------------------------------
#
#                      NUMPY
#
# -----------------------------------------------------

import numpy
from numpy.typing import NDArray

_np_dtype = numpy.float64

ndarray = NDArray[numpy.floating]
from numpy import (
    copy,
    reshape,
    where,
    any,
    isscalar,
    isnan,
    isfinite,
    allclose,
    hstack,
    vstack,
    concatenate,
    zeros_like,
    diag,
    diagonal,
    triu,
    arange,
    abs,
    sqrt,
    exp,
    log,
    sin,
    cos,
    tanh,
    sum,
    mean,
    std,
    cov,
    min,
    max,
    minimum,
    maximum,
    clip,
    einsum,
    matmul,
    dot,
    outer,
    all,
)
from numpy.linalg import norm, LinAlgError
from numpy import pi, inf
from numpy import finfo, float64, number, floating, bool_, issubdtype, intersect1d
from scipy.linalg import solve_triangular, eigh
from scipy.linalg import cholesky as _scipy_cholesky
from scipy.spatial.distance import cdist, pdist
from scipy.cluster.vq import kmeans2
from scipy.stats import multivariate_normal as scipy_mvnormal

# ..................................................

eps = finfo(_np_dtype).eps
tiny = finfo(_np_dtype).tiny

# ..................................................

def array(x, dtype=None):
    if dtype is not None:
        return numpy.array(x, dtype=dtype)
    out = numpy.array(x)
    if numpy.issubdtype(out.dtype, numpy.floating) or numpy.issubdtype(
        out.dtype, numpy.integer
    ):
        return out.astype(_np_dtype, copy=False)
    return out

def asarray(x, dtype=None):
    if dtype is not None:
        return numpy.asarray(x, dtype=dtype)
    if isinstance(x, numpy.ndarray):
        if numpy.issubdtype(x.dtype, numpy.floating):
            return x.astype(_np_dtype, copy=False)
        return x
    elif isinstance(x, (int, float)):
        return numpy.array([x], dtype=_np_dtype)
    else:
        out = numpy.asarray(x)
        if numpy.issubdtype(out.dtype, numpy.floating):
            return out.astype(_np_dtype, copy=False)
        return out

def empty(shape, dtype=None):
    return numpy.empty(shape, dtype=_np_dtype if dtype is None else dtype)

def zeros(shape, dtype=None):
    return numpy.zeros(shape, dtype=_np_dtype if dtype is None else dtype)

def ones(shape, dtype=None):
    return numpy.ones(shape, dtype=_np_dtype if dtype is None else dtype)

def eye(n, m=None, k=0, dtype=None):
    return numpy.eye(n, M=m, k=k, dtype=_np_dtype if dtype is None else dtype)

def linspace(start, stop, num=50, endpoint=True, dtype=None):
    return numpy.linspace(
        start, stop, num=num, endpoint=endpoint,
        dtype=_np_dtype if dtype is None else dtype,
    )

def isarray(x):
    return isinstance(x, numpy.ndarray)

def is_float_array(x):
    return isinstance(x, numpy.ndarray) and (
        numpy.issubdtype(x.dtype, numpy.floating)
        or numpy.issubdtype(x.dtype, numpy.integer)
    )

def add_diag(A, value):
    """Return a copy of the square matrix A with `value` added to its diagonal."""
    B = numpy.array(A, dtype=_np_dtype, copy=True)
    idx = numpy.diag_indices_from(B)
    B[idx] += value
    return B

def symmetrize_upper(A):
    """Mirror the upper triangle of A onto its lower triangle."""
    return triu(A) + triu(A, 1).T

# ..................................................

def cholesky(A):
    """Lower Cholesky factor of A; raises LinAlgError if A is not SPD."""
    return _scipy_cholesky(A, lower=True, check_finite=False)

def sq_euclidean_distance(x, y):
    return cdist(x, y, metric="sqeuclidean")

def sorted_intersection_size(a, b) -> int:
    """Number of common entries of two sorted, duplicate-free index arrays.

    This is the dot product of the two binary vectors whose nonzero
    positions are listed in `a` and `b`.
    """
    return int(intersect1d(a, b, assume_unique=True).size)

# ..................................................

# Build one global RNG (or let the user set the seed somewhere):
_np_rng = numpy.random.default_rng(seed=_config.seed)

def set_seed(seed: int) -> None:
    """Set the global NumPy generator seed."""
    global _np_rng
    _config.seed = seed
    _np_rng = numpy.random.default_rng(seed=seed)

def get_rng(rng=None) -> numpy.random.Generator:
    """Resolve `rng` (None, int seed or Generator) to a numpy Generator."""
    if rng is None:
        return _np_rng
    if isinstance(rng, numpy.random.Generator):
        return rng
    return numpy.random.default_rng(seed=rng)

def rand(*shape: int, rng=None) -> ArrayLike:
    return get_rng(rng).random(shape, dtype=_np_dtype)

def randn(*shape: int, rng=None) -> ArrayLike:
    return get_rng(rng).normal(loc=0, scale=1, size=shape).astype(_np_dtype, copy=False)

def choice(
    a: ArrayLike,
    size: Optional[int] = None,
    replace: bool = True,
    rng=None,
) -> ArrayLike:
    return get_rng(rng).choice(a, size=size, replace=replace)

def permutation(x: ArrayLike, rng=None) -> ArrayLike:
    return get_rng(rng).permutation(x)

class multivariate_normal:
    @staticmethod
    def logpdf(x, mean=0.0, cov=1.0):
        x = numpy.asarray(x)
        cov = numpy.asarray(cov)
        if cov.ndim != 2 or cov.shape[0] != cov.shape[1]:
            raise ValueError("cov must be a square 2D matrix.")
        m = numpy.asarray(mean)
        if m.ndim == 0:
            m = numpy.full((cov.shape[0],), float(m), dtype=_np_dtype)
        return scipy_mvnormal.logpdf(x, mean=m, cov=cov, allow_singular=True)
