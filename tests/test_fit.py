"""
Unit tests for the exact, sparse and Nystrom fitting routines.
"""

import unittest

import numpy as np

import gpreg as gr
import gpreg.num as gnp
from gpreg.kernel import GaussianKernel, BinarySparseGaussianKernel
from gpreg.core import (
    Model,
    gram_matrix,
    InvalidArgumentError,
    DimensionMismatchError,
)


# ----------------------------------------------------------------------
# Helpers
# ----------------------------------------------------------------------
def f(x):
    return gnp.sin(x[:, 0]) + gnp.cos(x[:, 1])


def grid_dataset():
    """12 points on a unit-spaced 4 x 3 grid (well-conditioned Gram matrix)."""
    g0, g1 = np.meshgrid(np.arange(4.0), np.arange(3.0))
    xi = np.column_stack((g0.ravel(), g1.ravel()))
    return xi, f(xi)


def query_points(q=15, seed=0):
    gnp.set_seed(seed)
    return gnp.rand(q, 2) * gnp.array([3.0, 2.0])


def sine_dataset(n=200):
    xi = gnp.linspace(0.0, 2.0 * gnp.pi, n).reshape(-1, 1)
    zi = gnp.sin(xi[:, 0])
    return xi, zi


# ======================================================================
#                           Test cases
# ======================================================================
class TestFitExact(unittest.TestCase):

    def test_interpolates_with_small_noise(self):
        xi, zi = grid_dataset()
        model = gr.fit_exact(xi, zi, GaussianKernel(0.8), 1e-10)
        zpm, zpsd = model.predict_batch(xi, return_sd=True)
        self.assertTrue(gnp.allclose(zpm, zi, atol=1e-6))
        self.assertTrue(gnp.all(zpsd < 1e-3))

    def test_model_fields(self):
        xi, zi = grid_dataset()
        kernel = GaussianKernel(0.8)
        model = gr.fit_exact(xi, zi, kernel, 0.1)
        self.assertIs(model.kernel, kernel)
        self.assertEqual(model.method, "exact")
        self.assertEqual(model.noise, 0.1)
        self.assertTrue(gnp.all(model.landmarks == xi))
        K = gram_matrix(xi, None, kernel)
        expected = np.linalg.solve(K + 0.1 * np.eye(12), zi)
        self.assertTrue(gnp.allclose(model.coefficients, expected, atol=1e-10))

    def test_log_likelihood(self):
        xi, zi = grid_dataset()
        kernel = GaussianKernel(0.8)
        model = gr.fit_exact(xi, zi, kernel, 0.1)
        K = gram_matrix(xi, None, kernel) + 0.1 * np.eye(12)
        expected = gnp.multivariate_normal.logpdf(zi, 0.0, K)
        self.assertAlmostEqual(model.log_likelihood, expected, places=8)

    def test_column_targets_and_scalar_inputs(self):
        xi = gnp.linspace(0.0, 5.0, 9)
        zi = gnp.sin(xi).reshape(-1, 1)
        model = gr.fit_exact(xi, zi, GaussianKernel(1.0), 1e-8)
        self.assertEqual(model.landmarks.shape, (9, 1))
        self.assertAlmostEqual(model.predict([xi[3]]), zi[3, 0], places=3)

    def test_deterministic(self):
        xi, zi = grid_dataset()
        m1 = gr.fit_exact(xi, zi, GaussianKernel(0.8), 0.1)
        m2 = gr.fit_exact(xi, zi, GaussianKernel(0.8), 0.1)
        self.assertTrue(gnp.all(m1.coefficients == m2.coefficients))

    def test_normalization(self):
        xi, zi = grid_dataset()
        kernel = GaussianKernel(0.8)
        xt = query_points()
        m1 = gr.fit_exact(xi, zi, kernel, 0.1, normalize=True)
        m2 = gr.fit_exact(xi, 3.0 * zi + 100.0, kernel, 0.1, normalize=True)
        zpm1, zpsd1 = m1.predict_batch(xt, return_sd=True)
        zpm2, zpsd2 = m2.predict_batch(xt, return_sd=True)
        self.assertTrue(gnp.allclose(zpm2, 3.0 * zpm1 + 100.0))
        self.assertTrue(gnp.allclose(zpsd2, 3.0 * zpsd1))
        self.assertAlmostEqual(m2.target_mean, float(np.mean(3.0 * zi + 100.0)))
        # far from the data, the prediction reverts to the target mean
        far = m2.predict([50.0, 50.0])
        self.assertAlmostEqual(far, m2.target_mean, places=8)
        m3 = gr.fit_exact(xi, 3.0 * zi + 100.0, kernel, 0.1)
        self.assertAlmostEqual(m3.predict([50.0, 50.0]), 0.0, places=8)

    def test_invalid_inputs(self):
        xi, zi = grid_dataset()
        kernel = GaussianKernel(0.8)
        with self.assertRaises(InvalidArgumentError):
            gr.fit_exact(xi, zi[:-1], kernel, 0.1)
        with self.assertRaises(InvalidArgumentError):
            gr.fit_exact(np.empty((0, 2)), np.empty((0,)), kernel, 0.1)
        with self.assertRaises(InvalidArgumentError):
            gr.fit_exact(xi, zi, kernel, -0.1)
        bad = zi.copy()
        bad[3] = np.nan
        with self.assertRaises(InvalidArgumentError):
            gr.fit_exact(xi, bad, kernel, 0.1)

    def test_invalid_arguments_are_value_errors(self):
        xi, zi = grid_dataset()
        with self.assertRaises(ValueError):
            gr.fit_exact(xi, zi[:5], GaussianKernel(0.8), 0.1)


class TestFitLandmarks(unittest.TestCase):

    def test_all_points_as_landmarks_recover_exact(self):
        xi, zi = grid_dataset()
        kernel = GaussianKernel(0.8)
        xt = query_points()
        exact = gr.fit_exact(xi, zi, kernel, 0.1)
        zpm, zpsd = exact.predict_batch(xt, return_sd=True)
        for fit in (gr.fit_sparse, gr.fit_nystrom):
            model = fit(xi, zi, xi, kernel, 0.1)
            zpm_, zpsd_ = model.predict_batch(xt, return_sd=True)
            self.assertTrue(gnp.allclose(zpm_, zpm, atol=1e-8), fit.__name__)
            self.assertTrue(gnp.allclose(zpsd_, zpsd, atol=1e-8), fit.__name__)

    def test_few_landmarks_approximate_function(self):
        xi, zi = sine_dataset()
        t = gnp.linspace(0.0, 2.0 * gnp.pi, 20).reshape(-1, 1)
        kernel = GaussianKernel(1.0)
        xt = gnp.linspace(0.2, 6.0, 50).reshape(-1, 1)
        for fit in (gr.fit_sparse, gr.fit_nystrom):
            model = fit(xi, zi, t, kernel, 0.01)
            self.assertEqual(model.method, fit.__name__[len("fit_"):])
            self.assertEqual(model.coefficients.shape, (20,))
            zpm, zpsd = model.predict_batch(xt, return_sd=True)
            self.assertLess(np.max(np.abs(zpm - gnp.sin(xt[:, 0]))), 0.05, fit.__name__)
            self.assertTrue(gnp.all(zpsd >= 0.0))

    def test_sparse_system(self):
        xi, zi = sine_dataset(n=40)
        t = xi[::8]
        kernel = GaussianKernel(1.0)
        model = gr.fit_sparse(xi, zi, t, kernel, 0.05)
        Kmm = gram_matrix(t, None, kernel)
        Knm = gram_matrix(xi, t, kernel)
        A = Knm.T @ Knm + 0.05 * Kmm
        residual = A @ model.coefficients - Knm.T @ zi
        self.assertLess(np.max(np.abs(residual)), 1e-8)

    def test_nystrom_requires_positive_noise(self):
        xi, zi = grid_dataset()
        with self.assertRaises(InvalidArgumentError):
            gr.fit_nystrom(xi, zi, xi[:4], GaussianKernel(0.8), 0.0)

    def test_empty_landmarks(self):
        xi, zi = grid_dataset()
        kernel = GaussianKernel(0.8)
        for fit in (gr.fit_sparse, gr.fit_nystrom):
            with self.assertRaises(InvalidArgumentError):
                fit(xi, zi, np.empty((0, 2)), kernel, 0.1)
            with self.assertRaises(InvalidArgumentError):
                fit(xi, zi, [], kernel, 0.1)
            with self.assertRaises(InvalidArgumentError):
                fit(xi, zi, None, kernel, 0.1)

    def test_landmark_dimension_mismatch(self):
        xi, zi = grid_dataset()
        kernel = GaussianKernel(0.8)
        with self.assertRaises(DimensionMismatchError):
            gr.fit_sparse(xi, zi, np.zeros((3, 5)), kernel, 0.1)
        with self.assertRaises(DimensionMismatchError):
            gr.fit_nystrom(xi, zi, [np.array([0, 1])], kernel, 0.1)

    def test_binary_sparse_points(self):
        rng = np.random.default_rng(3)
        dense = (rng.random((30, 25)) < 0.3).astype(float)
        points = [np.flatnonzero(row) for row in dense]
        zi = dense[:, :5].sum(axis=1) - dense[:, 5:10].sum(axis=1)
        landmarks = points[::3]
        kernel = BinarySparseGaussianKernel(2.0)
        dense_model = gr.fit_sparse(dense, zi, dense[::3], GaussianKernel(2.0), 0.1)
        for fit in (gr.fit_sparse, gr.fit_nystrom):
            model = fit(points, zi, landmarks, kernel, 0.1)
            self.assertIsInstance(model.landmarks, list)
            mean, sd = model.predict(points[4], return_sd=True)
            self.assertTrue(np.isfinite(mean))
            self.assertGreaterEqual(sd, 0.0)
        sparse_model = gr.fit_sparse(points, zi, landmarks, kernel, 0.1)
        self.assertTrue(
            gnp.allclose(
                sparse_model.predict_batch(points[:6]),
                dense_model.predict_batch(dense[:6]),
                atol=1e-6,
            )
        )


class TestModelState(unittest.TestCase):

    def test_immutable(self):
        xi, zi = grid_dataset()
        model = gr.fit_exact(xi, zi, GaussianKernel(0.8), 0.1)
        with self.assertRaises(ValueError):
            model.coefficients[0] = 1.0
        with self.assertRaises(ValueError):
            model.landmarks[0, 0] = 1.0
        with self.assertRaises(AttributeError):
            model.noise = 1.0
        # the caller's arrays are left writable
        self.assertTrue(xi.flags.writeable)

    def test_rebuild_from_fields(self):
        xi, zi = grid_dataset()
        kernel = GaussianKernel(0.8)
        model = gr.fit_sparse(xi, zi, xi[::2], kernel, 0.1)
        clone = Model(kernel, model.landmarks, model.coefficients, model.noise, "sparse")
        xt = query_points()
        zpm, zpsd = model.predict_batch(xt, return_sd=True)
        zpm_, zpsd_ = clone.predict_batch(xt, return_sd=True)
        self.assertTrue(gnp.allclose(zpm, zpm_))
        self.assertTrue(gnp.allclose(zpsd, zpsd_))

    def test_invalid_model(self):
        kernel = GaussianKernel(0.8)
        with self.assertRaises(InvalidArgumentError):
            Model(kernel, np.zeros((3, 2)), np.zeros(2), 0.1)
        with self.assertRaises(InvalidArgumentError):
            Model(kernel, np.zeros((3, 2)), np.zeros(3), 0.1, method="other")

    def test_str(self):
        xi, zi = grid_dataset()
        model = gr.fit_exact(xi, zi, GaussianKernel(0.8), 0.1)
        s = str(model)
        self.assertIn("Method: exact", s)
        self.assertIn("GaussianKernel(sigma=0.8)", s)


if __name__ == "__main__":
    unittest.main()
