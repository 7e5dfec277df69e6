# gpreg/core/joint.py
# --------------------------------------------------------------
# Author: Emmanuel Vazquez <emmanuel.vazquez@centralesupelec.fr>
# Copyright (c) 2022-2026, CentraleSupelec
# License: GPLv3 (see LICENSE)
# --------------------------------------------------------------
"""
Joint posterior over a batch of query points.

`JointPrediction` is returned by `Model.joint_predict`. The posterior
mean and standard deviations are computed by the model; the full
posterior covariance

    Σ = K(xt, xt) - K(xt, landmarks) (K(landmarks, landmarks) + noise I)^{-1} K(landmarks, xt)

and its Cholesky factor are computed on the first call to
`covariance()`, `cholesky()` or `sample()` and cached in the object.
"""
import gpreg.num as gnp
from gpreg.config import get_config

from . import gram
from . import linalg
from . import utils


class JointPrediction:
    """Joint posterior at query points xt.

    Attributes
    ----------
    x : gnp.array (q, d) or list
        Query points.
    mean : gnp.array, shape (q,)
        Posterior means.
    sd : gnp.array, shape (q,)
        Posterior standard deviations (nonnegative).
    """

    def __init__(self, model, xt, mean, sd, V):
        """
        Parameters
        ----------
        model : gpreg.core.Model
            Model that produced the prediction (read only).
        xt : query points
        mean, sd : gnp.array, shape (q,)
        V : gnp.array, shape (m, q)
            L^{-1} K(landmarks, xt), with L the factor of
            K(landmarks, landmarks) + noise I.
        """
        self._model = model
        self.x = xt
        self.mean = mean
        self.sd = sd
        self._V = V
        self._cov = None
        self._chol = None

    def __len__(self):
        return self.mean.shape[0]

    def __repr__(self):
        state = "cached" if self._cov is not None else "deferred"
        return f"<gpreg.core.JointPrediction q={len(self)} covariance={state}>"

    @property
    def variance(self):
        return self.sd * self.sd

    def covariance(self):
        """Posterior covariance matrix, shape (q, q). Computed once."""
        if self._cov is None:
            Kqq = gram.gram_matrix(self.x, None, self._model.kernel)
            cov = Kqq - gnp.matmul(self._V.T, self._V)
            cov = 0.5 * (cov + cov.T)
            self._cov = cov * self._model.target_scale ** 2
        return self._cov

    def cholesky(self):
        """Cholesky factor (gpreg.core.linalg.CholeskyFactor) of the
        posterior covariance, with `config.sample_jitter` on the diagonal
        scaled to the prior variance at xt. Computed once.

        The posterior covariance may vanish (zero noise, xt on the
        training points), so its own diagonal cannot set the scale."""
        if self._chol is None:
            cov = self.covariance()
            prior = gram.gram_diag(self.x, self._model.kernel)
            scale = max(
                float(gnp.max(gnp.abs(prior))) * self._model.target_scale ** 2,
                gnp.tiny,
            )
            self._chol = linalg.regularized_cholesky(
                cov, get_config().sample_jitter * scale
            )
        return self._chol

    def sample(self, k, rng=None):
        """Draw samples from the joint posterior.

        Parameters
        ----------
        k : int
            Number of independent draws (> 0).
        rng : numpy.random.Generator, int or None, optional
            Random source. An int is used as a seed; None uses the global
            generator of gpreg.num (see gnp.set_seed).

        Returns
        -------
        samples : gnp.array, shape (k, q)
            Each row is mean + L z with z ~ N(0, I).
        """
        k = utils.ensure_sample_count(k)
        L = self.cholesky().L
        z = gnp.randn(L.shape[0], k, rng=rng)
        return self.mean.reshape(1, -1) + gnp.matmul(L, z).T
