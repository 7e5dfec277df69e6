# gpreg/core/fit.py
# --------------------------------------------------------------
# Author: Emmanuel Vazquez <emmanuel.vazquez@centralesupelec.fr>
# Copyright (c) 2022-2026, CentraleSupelec
# License: GPLv3 (see LICENSE)
# --------------------------------------------------------------
"""
Fitting routines producing a `gpreg.core.Model`.

Three independent constructors share the prediction contract of
`Model` and differ in how the landmarks and coefficients are obtained:

fit_exact(x, y, kernel, noise)
    Full GP regression, w = (K + noise I)^{-1} y over all n points.
    O(n³); impractical beyond a few thousand points.

fit_sparse(x, y, landmarks, kernel, noise)
    Subset of regressors over m landmarks:
    w = (Kmn Knm + noise Kmm)^{-1} Kmn y. O(n m² + m³).

fit_nystrom(x, y, landmarks, kernel, noise)
    Nyström low-rank approximation K ≈ Knm Kmm⁺ Kmn, solved with the
    Woodbury identity, then projected back on the landmarks. O(n m² + m³).
"""
import gpreg.num as gnp
from gpreg.config import get_config, get_logger

from . import gram
from . import linalg
from . import utils
from .errors import InvalidArgumentError, NumericalInstabilityError
from .model import Model

_logger = get_logger()


# --------------------------------------------------------------------------
# Public entry points
# --------------------------------------------------------------------------
def fit_exact(x, y, kernel, noise, normalize=False):
    """Exact Gaussian process regression.

    Parameters
    ----------
    x : array_like (n, d) or sequence of length n
        Training points.
    y : array_like, shape (n,) or (n, 1)
        Training targets.
    kernel : kernel object or callable
    noise : float
        Noise variance (>= 0) added to the Gram-matrix diagonal.
    normalize : bool, optional
        If True, targets are centered and scaled by their sample standard
        deviation before fitting; predictions are mapped back.

    Returns
    -------
    Model
        landmarks = x, coefficients = (K + noise I)^{-1} y. The model also
        stores the log marginal likelihood of the (normalized) targets.

    Raises
    ------
    InvalidArgumentError
    NumericalInstabilityError
    """
    xi, zi = utils.ensure_training_data(x, y)
    noise = utils.ensure_noise(noise)
    zi_, mu, scale = _normalize_targets(zi, normalize)
    n = len(xi)
    _logger.debug("fit_exact: n=%d, noise=%g", n, noise)

    K = gram.gram_matrix(xi, None, kernel)
    w, factor = linalg.cholesky_solve(K, noise, zi_)

    log_likelihood = -0.5 * (
        gnp.dot(zi_, w) + factor.logdet() + n * gnp.log(2.0 * gnp.pi)
    )
    return Model(
        kernel,
        xi,
        w,
        noise,
        method="exact",
        factor=factor,
        target_mean=mu,
        target_scale=scale,
        log_likelihood=float(log_likelihood),
    )


def fit_sparse(x, y, landmarks, kernel, noise, normalize=False):
    """Sparse GP regression (subset of regressors).

    Parameters
    ----------
    x : array_like (n, d) or sequence of length n
        Training points.
    y : array_like, shape (n,)
        Training targets.
    landmarks : array_like (m, d) or sequence of length m
        Inducing points, typically k-means centroids of x
        (see gpreg.misc.landmarks). Must not be empty.
    kernel : kernel object or callable
    noise : float
    normalize : bool, optional

    Returns
    -------
    Model
        Coefficients w solving (Kmn Knm + noise Kmm) w = Kmn y.

    Notes
    -----
    The posterior mean of the subset-of-regressors approximation is
    k(x, t) (Kmn Knm + σ² Kmm)^{-1} Kmn y, i.e. the noise variance scales
    the landmark Gram matrix, not the cross term. The system matrix is
    symmetric positive semi-definite and is factored with the regularized
    Cholesky solver (jitter only, the noise is already in the matrix).
    """
    xi, zi = utils.ensure_training_data(x, y)
    t = utils.ensure_landmarks(landmarks, xi)
    noise = utils.ensure_noise(noise)
    zi_, mu, scale = _normalize_targets(zi, normalize)
    _logger.debug("fit_sparse: n=%d, m=%d, noise=%g", len(xi), len(t), noise)

    Kmm = gram.gram_matrix(t, None, kernel)
    Knm = gram.gram_matrix(xi, t, kernel)

    A = gnp.matmul(Knm.T, Knm) + noise * Kmm
    A = 0.5 * (A + A.T)
    b = gnp.matmul(Knm.T, zi_)
    w, _ = linalg.cholesky_solve(A, 0.0, b)

    factor = linalg.regularized_cholesky(Kmm, noise)
    return Model(
        kernel,
        t,
        w,
        noise,
        method="sparse",
        factor=factor,
        target_mean=mu,
        target_scale=scale,
    )


def fit_nystrom(x, y, landmarks, kernel, noise, normalize=False):
    """GP regression with a Nyström approximation of the Gram matrix.

    Parameters
    ----------
    x : array_like (n, d) or sequence of length n
    y : array_like, shape (n,)
    landmarks : array_like (m, d) or sequence of length m
        Must not be empty.
    kernel : kernel object or callable
    noise : float
        Must be > 0 (the Woodbury identity divides by it).
    normalize : bool, optional

    Returns
    -------
    Model

    Notes
    -----
    With Kmm = U diag(s) Uᵀ (eigenvalues below `config.eigen_rtol *
    max(s)` discarded) and G = Knm U diag(s)^{-1/2}, the full Gram matrix
    is approximated by G Gᵀ. Then

        α = (G Gᵀ + σ² I)^{-1} y = (y - G (Gᵀ G + σ² I)^{-1} Gᵀ y) / σ²

    and the posterior mean k(x, X) α is approximated by the Nyström
    extension k(x, t) Kmm⁺ Kmn α, so that w = U diag(s)^{-1} Uᵀ Kmn α.
    """
    xi, zi = utils.ensure_training_data(x, y)
    t = utils.ensure_landmarks(landmarks, xi)
    noise = utils.ensure_noise(noise)
    if noise <= 0.0:
        raise InvalidArgumentError("fit_nystrom requires a positive noise level")
    zi_, mu, scale = _normalize_targets(zi, normalize)
    _logger.debug("fit_nystrom: n=%d, m=%d, noise=%g", len(xi), len(t), noise)

    Kmm = gram.gram_matrix(t, None, kernel)
    Knm = gram.gram_matrix(xi, t, kernel)

    UD = _inverse_sqrt_factor(Kmm)  # U diag(s)^{-1/2}, shape (m, r)
    G = gnp.matmul(Knm, UD)  # (n, r)

    GtG = gnp.matmul(G.T, G)
    GtG = 0.5 * (GtG + GtG.T)
    c, _ = linalg.cholesky_solve(GtG, noise, gnp.matmul(G.T, zi_))
    alpha = (zi_ - gnp.matmul(G, c)) / noise

    w = gnp.matmul(UD, gnp.matmul(UD.T, gnp.matmul(Knm.T, alpha)))

    factor = linalg.regularized_cholesky(Kmm, noise)
    return Model(
        kernel,
        t,
        w,
        noise,
        method="nystrom",
        factor=factor,
        target_mean=mu,
        target_scale=scale,
    )


# --------------------------------------------------------------------------
# Internal helpers
# --------------------------------------------------------------------------
def _normalize_targets(zi, normalize):
    """Return (centered/scaled targets, mean, scale)."""
    if not normalize:
        return zi, 0.0, 1.0
    mu = float(gnp.mean(zi))
    scale = float(gnp.std(zi, ddof=1)) if zi.shape[0] > 1 else 0.0
    if not scale > 0.0:
        scale = 1.0
    return (zi - mu) / scale, mu, scale


def _inverse_sqrt_factor(Kmm):
    """Return U diag(s)^{-1/2} restricted to the numerically nonzero
    eigenvalues s of the symmetric matrix Kmm."""
    s, U = gnp.eigh(Kmm)
    smax = gnp.max(s)
    if not smax > 0.0:
        raise NumericalInstabilityError(
            "landmark Gram matrix has no positive eigenvalue", 0.0, 1
        )
    keep = s > get_config().eigen_rtol * smax
    if not gnp.all(keep):
        _logger.debug(
            "Nystrom: discarding %d of %d eigenvalues of the landmark Gram matrix",
            int(gnp.sum(~keep)), s.shape[0],
        )
    return U[:, keep] / gnp.sqrt(s[keep])
