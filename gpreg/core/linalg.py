# gpreg/core/linalg.py
# --------------------------------------------------------------
# Author: Emmanuel Vazquez <emmanuel.vazquez@centralesupelec.fr>
# Copyright (c) 2022-2026, CentraleSupelec
# License: GPLv3 (see LICENSE)
# --------------------------------------------------------------
"""
Regularized Cholesky factorization shared by the fitting routines and
the posterior computations.

The factorization adds the noise level to the diagonal of a symmetric
matrix and, if the result is not numerically positive definite, retries
with an increasing jitter (bounded number of attempts, see
`gpreg.config`). Exhausting the attempts raises
`NumericalInstabilityError`.
"""
import gpreg.num as gnp
from gpreg.config import get_config, get_logger
from .errors import InvalidArgumentError, NumericalInstabilityError

_logger = get_logger()


class CholeskyFactor:
    """Lower Cholesky factor L of K + (noise + jitter) I.

    Attributes
    ----------
    L : gnp.array, shape (n, n)
        Lower-triangular factor.
    noise : float
        Regularization requested by the caller.
    jitter : float
        Extra regularization added by the retry loop (0.0 if the first
        attempt succeeded).
    attempts : int
        Number of factorization attempts.
    """

    def __init__(self, L, noise=0.0, jitter=0.0, attempts=1):
        self.L = L
        self.noise = noise
        self.jitter = jitter
        self.attempts = attempts

    def __repr__(self):
        return (
            f"<CholeskyFactor n={self.n} noise={self.noise:g} "
            f"jitter={self.jitter:g} attempts={self.attempts}>"
        )

    @property
    def n(self):
        return self.L.shape[0]

    def solve_lower(self, b):
        """Return L^{-1} b."""
        return gnp.solve_triangular(self.L, b, lower=True, check_finite=False)

    def solve(self, b):
        """Return (K + (noise + jitter) I)^{-1} b."""
        y = self.solve_lower(b)
        return gnp.solve_triangular(self.L.T, y, lower=False, check_finite=False)

    def logdet(self):
        """Log-determinant of the factored matrix."""
        return 2.0 * gnp.sum(gnp.log(gnp.diag(self.L)))

    def rcond(self):
        """Cheap reciprocal condition estimate (min(diag L) / max(diag L))^2."""
        d = gnp.diag(self.L)
        return float((gnp.min(d) / gnp.max(d)) ** 2)

    def rank(self, rtol=None):
        """Numerical rank: diagonal entries of L above rtol * max(diag L)."""
        d = gnp.diag(self.L)
        if rtol is None:
            rtol = self.n * gnp.eps
        return int(gnp.sum(d > rtol * gnp.max(d)))


def _factor(K):
    L = gnp.cholesky(K)
    if not gnp.all(gnp.isfinite(L)):
        raise gnp.LinAlgError("Cholesky factor contains non-finite values")
    return L


def regularized_cholesky(K, noise=0.0):
    """Factor K + noise I, retrying with increasing jitter on failure.

    Parameters
    ----------
    K : array_like, shape (n, n)
        Symmetric matrix (typically a Gram matrix).
    noise : float, optional
        Non-negative value added to the diagonal before factoring.

    Returns
    -------
    CholeskyFactor

    Raises
    ------
    InvalidArgumentError
        If `noise` is negative or K is not square.
    NumericalInstabilityError
        If the matrix is still not positive definite after
        `config.jitter_max_tries` retries.

    Notes
    -----
    The first jitter is `config.jitter_initial * mean(|diag K|)` and is
    multiplied by `config.jitter_growth` at each retry.
    """
    config = get_config()
    noise = float(noise)
    if not noise >= 0.0:
        raise InvalidArgumentError(f"noise must be non-negative, got {noise}")
    K = gnp.asarray(K, dtype=gnp.float64)
    if K.ndim != 2 or K.shape[0] != K.shape[1]:
        raise InvalidArgumentError(f"expected a square matrix, got shape {K.shape}")
    if not gnp.all(gnp.isfinite(K)):
        raise NumericalInstabilityError("matrix contains non-finite values", 0.0, 0)

    A = gnp.add_diag(K, noise)
    try:
        return CholeskyFactor(_factor(A), noise=noise)
    except gnp.LinAlgError:
        pass

    scale = gnp.mean(gnp.abs(gnp.diag(A))) if A.shape[0] > 0 else 1.0
    jitter = config.jitter_initial * max(scale, gnp.tiny)
    for attempt in range(config.jitter_max_tries):
        try:
            L = _factor(gnp.add_diag(A, jitter))
        except gnp.LinAlgError:
            jitter *= config.jitter_growth
            continue
        _logger.warning(
            "Matrix (n=%d) not positive definite; factored with jitter %.3e "
            "after %d retries.", A.shape[0], jitter, attempt + 1,
        )
        return CholeskyFactor(L, noise=noise, jitter=jitter, attempts=attempt + 2)

    _logger.error(
        "Cholesky factorization failed for a %d x %d matrix after %d retries.",
        A.shape[0], A.shape[0], config.jitter_max_tries,
    )
    raise NumericalInstabilityError(
        f"matrix is not positive definite (last jitter {jitter / config.jitter_growth:.3e}, "
        f"{config.jitter_max_tries} retries)",
        jitter=jitter / config.jitter_growth,
        attempts=config.jitter_max_tries + 1,
    )


def cholesky_solve(K, noise, y):
    """Solve (K + noise I) w = y.

    Returns
    -------
    w : gnp.array
        Solution, same trailing shape as y.
    factor : CholeskyFactor
        Factorization, reusable for further solves.
    """
    factor = regularized_cholesky(K, noise)
    return factor.solve(y), factor
