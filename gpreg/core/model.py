# gpreg/core/model.py
# --------------------------------------------------------------
# Author: Emmanuel Vazquez <emmanuel.vazquez@centralesupelec.fr>
# Copyright (c) 2022-2026, CentraleSupelec
# License: GPLv3 (see LICENSE)
# --------------------------------------------------------------
"""
Trained Gaussian Process regression model.
"""
import warnings
import gpreg.num as gnp

from . import gram
from . import linalg
from . import utils
from .errors import InvalidArgumentError
from .joint import JointPrediction


class Model:
    """Trained Gaussian Process regression model.

    A model is produced by one of `gpreg.core.fit.fit_exact`,
    `fit_sparse` or `fit_nystrom`. It is immutable: all attributes are
    exposed through read-only properties and the coefficient vector is
    a read-only array.

    Attributes
    ----------
    kernel : kernel object or callable
        Covariance function, shared and never modified.
    landmarks : gnp.array (m, d) or list
        Basis points of the predictor. For an exact fit, these are the
        training points; for sparse and Nystrom fits, the inducing set.
    coefficients : gnp.array, shape (m,)
        Weights w such that the posterior mean at x is
        sum_i w_i k(landmarks_i, x) (in normalized units, see below).
    noise : float
        Noise variance added to the Gram-matrix diagonal.
    method : {'exact', 'sparse', 'nystrom'}
        How the coefficients were obtained.
    target_mean, target_scale : float
        If the targets were normalized at fit time, predictions are
        mapped back as mean * target_scale + target_mean and standard
        deviations as sd * target_scale. Otherwise 0.0 and 1.0.
    log_likelihood : float or None
        Log marginal likelihood of the (normalized) targets, exact fits only.

    Public API (methods)
    --------------------
    predict
        Posterior mean (and standard deviation) at one point.
    predict_batch
        Posterior means (and standard deviations) at several points.
    joint_predict
        Joint posterior over several points (mean, sd, covariance, samples).

    Examples
    --------
    >>> import gpreg as gr
    >>> import gpreg.num as gnp
    >>> xi = gnp.linspace(0.0, 5.0, 6).reshape(-1, 1)
    >>> zi = gnp.sin(xi).reshape(-1)
    >>> model = gr.fit_exact(xi, zi, gr.kernel.GaussianKernel(1.0), noise=0.01)
    >>> zpm, zpsd = model.predict([2.5], return_sd=True)
    >>> joint = model.joint_predict(gnp.linspace(0.0, 5.0, 11).reshape(-1, 1))
    >>> paths = joint.sample(100, rng=0)
    """

    def __init__(
        self,
        kernel,
        landmarks,
        coefficients,
        noise,
        method="exact",
        factor=None,
        target_mean=0.0,
        target_scale=1.0,
        log_likelihood=None,
    ):
        """
        Parameters
        ----------
        kernel : kernel object or callable
        landmarks : array_like (m, d) or sequence of length m
        coefficients : array_like, shape (m,)
        noise : float
        method : str, optional
        factor : gpreg.core.linalg.CholeskyFactor, optional
            Factorization of K(landmarks, landmarks) + noise I. Computed
            here if not given (e.g. when rebuilding a model from its
            stored fields).
        target_mean, target_scale : float, optional
        log_likelihood : float, optional
        """
        if method not in ("exact", "sparse", "nystrom"):
            raise InvalidArgumentError(
                "method must be one of 'exact', 'sparse' or 'nystrom'"
            )
        landmarks = utils.as_points(landmarks, "landmarks")
        coefficients = gnp.array(coefficients, dtype=gnp.float64).reshape(-1)
        if len(landmarks) == 0:
            raise InvalidArgumentError("landmarks is empty")
        if coefficients.shape[0] != len(landmarks):
            raise InvalidArgumentError(
                "coefficients and landmarks must have the same length"
            )
        noise = utils.ensure_noise(noise)
        if factor is None:
            factor = linalg.regularized_cholesky(
                gram.gram_matrix(landmarks, None, kernel), noise
            )
        if gnp.isarray(landmarks):
            landmarks = gnp.copy(landmarks)
            landmarks.setflags(write=False)
        coefficients.setflags(write=False)

        self._kernel = kernel
        self._landmarks = landmarks
        self._coefficients = coefficients
        self._noise = noise
        self._method = method
        self._factor = factor
        self._target_mean = float(target_mean)
        self._target_scale = float(target_scale)
        self._log_likelihood = log_likelihood

    def __repr__(self):
        output = str("<gpreg.core.Model object> " + hex(id(self)))
        return output

    def __str__(self):
        try:
            kernel_desc = self._kernel.__name__
        except AttributeError:
            kernel_desc = repr(self._kernel)
        return (
            f"GP Regression Model:\n"
            f"  Method: {self._method}\n"
            f"  Kernel: {kernel_desc}\n"
            f"  Landmarks: {len(self._landmarks)}\n"
            f"  Noise: {self._noise}\n"
            f"  Target normalization: mean={self._target_mean}, scale={self._target_scale}\n"
            f"  Log likelihood: {self._log_likelihood}"
        )

    # ------------------------------------------------------------------
    # Read-only state
    # ------------------------------------------------------------------
    @property
    def kernel(self):
        return self._kernel

    @property
    def landmarks(self):
        return self._landmarks

    @property
    def coefficients(self):
        return self._coefficients

    @property
    def noise(self):
        return self._noise

    @property
    def method(self):
        return self._method

    @property
    def factor(self):
        return self._factor

    @property
    def target_mean(self):
        return self._target_mean

    @property
    def target_scale(self):
        return self._target_scale

    @property
    def log_likelihood(self):
        return self._log_likelihood

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------
    def predict(self, x, return_sd=False):
        """Posterior mean, and optionally standard deviation, at one point.

        Parameters
        ----------
        x : point
            A feature vector of shape (d,) for dense landmarks, or any
            object the kernel accepts.
        return_sd : bool, optional
            Whether to also return the posterior standard deviation.

        Returns
        -------
        mean : float
        sd : float, only if return_sd=True

        Notes
        -----
        var(x) = k(x, x) - k_xᵀ (K_landmarks + noise I)^{-1} k_x, computed
        as k(x, x) - ||L^{-1} k_x||² with the factor stored at fit time.
        Negative values (round-off) are clamped to zero.
        """
        x = utils.as_query_point(x, self._landmarks)
        k_x = gram.kernel_vector(x, self._landmarks, self._kernel)
        mean = gnp.dot(self._coefficients, k_x) * self._target_scale + self._target_mean
        if not return_sd:
            return float(mean)
        v = self._factor.solve_lower(k_x)
        prior_var = gram.kernel_function(self._kernel)(x, x)
        var = self._clamp_variances(gnp.array([prior_var - gnp.dot(v, v)]))
        sd = gnp.sqrt(var[0]) * self._target_scale
        return float(mean), float(sd)

    def predict_batch(self, xt, return_sd=False):
        """Posterior means (and standard deviations) at points xt.

        Parameters
        ----------
        xt : array_like (q, d) or sequence of length q
        return_sd : bool, optional

        Returns
        -------
        zt_mean : gnp.array, shape (q,)
        zt_sd : gnp.array, shape (q,), only if return_sd=True
        """
        xt = self._as_query_set(xt)
        Kmq = gram.gram_matrix(self._landmarks, xt, self._kernel)
        zt_mean = self._mean_from_cross(Kmq)
        if not return_sd:
            return zt_mean
        V = self._factor.solve_lower(Kmq)
        zt_sd = self._sd_from_solved(xt, V)
        return zt_mean, zt_sd

    def joint_predict(self, xt):
        """Joint posterior at the query points xt.

        Mean and standard deviations are computed immediately; the
        posterior covariance and its Cholesky factor are computed on
        first use by the returned object.

        Parameters
        ----------
        xt : array_like (q, d) or sequence of length q

        Returns
        -------
        JointPrediction
        """
        xt = self._as_query_set(xt)
        Kmq = gram.gram_matrix(self._landmarks, xt, self._kernel)
        zt_mean = self._mean_from_cross(Kmq)
        V = self._factor.solve_lower(Kmq)
        zt_sd = self._sd_from_solved(xt, V)
        return JointPrediction(self, xt, zt_mean, zt_sd, V)

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------
    def _as_query_set(self, xt):
        xt = utils.as_points(xt, "xt")
        if len(xt) == 0:
            raise InvalidArgumentError("xt is empty")
        utils.check_same_dimension(self._landmarks, xt, "xt")
        return xt

    def _mean_from_cross(self, Kmq):
        return gnp.matmul(self._coefficients, Kmq) * self._target_scale + self._target_mean

    def _sd_from_solved(self, xt, V):
        zt_var = gram.gram_diag(xt, self._kernel) - gnp.sum(V * V, axis=0)
        zt_var = self._clamp_variances(zt_var)
        return gnp.sqrt(zt_var) * self._target_scale

    @staticmethod
    def _clamp_variances(zt_var):
        if gnp.any(zt_var < 0.0):
            warnings.warn(
                "Negative variances detected. Consider using jitter.",
                RuntimeWarning,
            )
        return gnp.maximum(zt_var, 0.0)
