# gpreg/misc/validation.py
# --------------------------------------------------------------
# Author: Emmanuel Vazquez <emmanuel.vazquez@centralesupelec.fr>
# Copyright (c) 2022-2026, CentraleSupelec
# License: GPLv3 (see LICENSE)
# --------------------------------------------------------------
"""
Refitting-based validation of GP regression models.

Functions
---------
rmse(z, zpred)
    Root mean squared error.
standardize(x)
    Column-wise centering and scaling (sample standard deviation).
loocv(fit, xi, zi)
    Leave-one-out predictions, refitting the model n times.
cross_validation(fit, xi, zi, k=10, seed=None)
    k-fold predictions on a random partition of the data.

`fit` is any callable fit(x_train, z_train) -> gpreg.core.Model, e.g.
``lambda x, z: gr.fit_exact(x, z, kernel, 0.1)``.
"""
import gpreg.num as gnp
from gpreg.config import get_logger
from gpreg.core.errors import InvalidArgumentError
from gpreg.core.utils import ensure_training_data

_logger = get_logger()


def rmse(z, zpred):
    z = gnp.asarray(z, dtype=gnp.float64).reshape(-1)
    zpred = gnp.asarray(zpred, dtype=gnp.float64).reshape(-1)
    if z.shape != zpred.shape:
        raise InvalidArgumentError("z and zpred must have the same length")
    return float(gnp.sqrt(gnp.mean((z - zpred) ** 2)))


def standardize(x):
    """Center the columns of x and scale them to unit sample standard deviation.

    Constant columns are only centered.
    """
    x = gnp.asarray(x, dtype=gnp.float64)
    mu = gnp.mean(x, axis=0)
    sd = gnp.std(x, axis=0, ddof=1)
    sd = gnp.where(sd > 0.0, sd, 1.0)
    return (x - mu) / sd


def _subset(points, ind):
    if gnp.isarray(points):
        return points[ind]
    return [points[i] for i in ind]


def _predict_subset(model, points, ind):
    return model.predict_batch(_subset(points, ind))


def loocv(fit, xi, zi):
    """Leave-one-out predictions.

    Returns
    -------
    zloo : gnp.array, shape (n,)
        zloo[i] is the posterior mean at xi[i] of the model fitted
        without the i-th observation.
    """
    xi, zi = ensure_training_data(xi, zi)
    n = zi.shape[0]
    if n < 2:
        raise InvalidArgumentError("LOOCV needs at least two observations")
    zloo = gnp.empty((n,))
    for i in range(n):
        train = [j for j in range(n) if j != i]
        model = fit(_subset(xi, train), zi[train])
        zloo[i] = _predict_subset(model, xi, [i])[0]
    return zloo


def k_fold_indices(n, k, seed=None):
    """Random partition of range(n) into k folds (sizes differ by at most one)."""
    if isinstance(k, bool) or int(k) != k or k < 2 or k > n:
        raise InvalidArgumentError(f"k must be an integer in [2, {n}], got {k}")
    perm = gnp.permutation(n, rng=seed)
    return [perm[f::k] for f in range(int(k))]


def cross_validation(fit, xi, zi, k=10, seed=None):
    """k-fold cross-validation predictions.

    Returns
    -------
    zcv : gnp.array, shape (n,)
        zcv[i] is the posterior mean at xi[i] of the model fitted on the
        folds that do not contain i.
    """
    xi, zi = ensure_training_data(xi, zi)
    n = zi.shape[0]
    folds = k_fold_indices(n, k, seed)
    zcv = gnp.empty((n,))
    for f, test in enumerate(folds):
        mask = gnp.ones((n,), dtype=bool)
        mask[test] = False
        train = gnp.arange(n)[mask]
        model = fit(_subset(xi, train), zi[train])
        zcv[test] = _predict_subset(model, xi, test)
        _logger.debug("cross_validation: fold %d/%d done", f + 1, len(folds))
    return zcv
