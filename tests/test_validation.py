"""
Unit tests for landmark selection and refitting-based validation.
"""

import unittest

import numpy as np

import gpreg as gr
import gpreg.num as gnp
from gpreg.kernel import GaussianKernel
from gpreg.core import gram_matrix, InvalidArgumentError
from gpreg.misc import landmarks, validation


# ----------------------------------------------------------------------
# Helpers
# ----------------------------------------------------------------------
def clustered_points(seed=0):
    """Three well-separated clusters of 20 points in the plane."""
    rng = np.random.default_rng(seed)
    centers = np.array([[0.0, 0.0], [10.0, 0.0], [0.0, 10.0]])
    return np.vstack([c + 0.1 * rng.standard_normal((20, 2)) for c in centers]), centers


def dataset(n=40, seed=0):
    gnp.set_seed(seed)
    x = gnp.rand(n, 1) * 6.0
    z = gnp.sin(x[:, 0])
    return x, z


# ======================================================================
#                           Test cases
# ======================================================================
class TestLandmarks(unittest.TestCase):

    def test_kmeans_finds_clusters(self):
        x, centers = clustered_points()
        t = landmarks.kmeans_landmarks(x, 3, seed=1)
        self.assertEqual(t.shape, (3, 2))
        for c in centers:
            self.assertLess(np.min(np.linalg.norm(t - c, axis=1)), 0.5)

    def test_kmeans_reproducible(self):
        x, _ = clustered_points()
        t1 = landmarks.kmeans_landmarks(x, 5, seed=3)
        t2 = landmarks.kmeans_landmarks(x, 5, seed=3)
        self.assertTrue(np.all(t1 == t2))

    def test_random_landmarks(self):
        x, _ = clustered_points()
        t = landmarks.random_landmarks(x, 7, seed=0)
        self.assertEqual(t.shape, (7, 2))
        self.assertEqual(len({tuple(row) for row in t}), 7)
        for row in t:
            self.assertTrue(np.any(np.all(x == row, axis=1)))
        points = [np.array([i, i + 2]) for i in range(10)]
        subset = landmarks.random_landmarks(points, 4, seed=0)
        self.assertIsInstance(subset, list)
        self.assertEqual(len(subset), 4)

    def test_invalid_count(self):
        x, _ = clustered_points()
        for m in (0, -1, 61, 2.5):
            with self.assertRaises(InvalidArgumentError):
                landmarks.kmeans_landmarks(x, m)
        with self.assertRaises(InvalidArgumentError):
            landmarks.random_landmarks(x, 100)

    def test_kernel_width(self):
        centers = np.array([[0.0], [1.0], [2.0]])
        # (1 + 2 + 1) / (2 * 3)
        self.assertAlmostEqual(landmarks.landmark_kernel_width(centers), 4.0 / 6.0)
        with self.assertRaises(InvalidArgumentError):
            landmarks.landmark_kernel_width(np.zeros((1, 2)))

    def test_sparse_fit_with_kmeans_landmarks(self):
        x, z = dataset(n=200)
        t = landmarks.kmeans_landmarks(x, 15, seed=0)
        model = gr.fit_sparse(x, z, t, GaussianKernel(1.0), 0.01)
        xt = np.linspace(0.5, 5.5, 20).reshape(-1, 1)
        self.assertLess(validation.rmse(np.sin(xt[:, 0]), model.predict_batch(xt)), 0.1)


class TestValidation(unittest.TestCase):

    def test_rmse(self):
        self.assertAlmostEqual(validation.rmse([1.0, 2.0, 3.0], [1.0, 2.0, 5.0]), np.sqrt(4.0 / 3.0))
        with self.assertRaises(InvalidArgumentError):
            validation.rmse([1.0, 2.0], [1.0])

    def test_standardize(self):
        x = np.column_stack((np.arange(5.0), 3.0 * np.ones(5), np.arange(5.0) ** 2))
        xs = validation.standardize(x)
        self.assertTrue(np.allclose(xs.mean(axis=0), 0.0))
        self.assertTrue(np.allclose(xs[:, [0, 2]].std(axis=0, ddof=1), 1.0))
        self.assertTrue(np.all(xs[:, 1] == 0.0))

    def test_loocv_matches_closed_form(self):
        # for an exact fit, the leave-one-out mean is z_i - [K^-1 z]_i / [K^-1]_ii
        x, z = dataset(n=15)
        kernel = GaussianKernel(1.0)
        noise = 0.05
        zloo = validation.loocv(lambda xi, zi: gr.fit_exact(xi, zi, kernel, noise), x, z)
        Kinv = np.linalg.inv(gram_matrix(x, None, kernel) + noise * np.eye(15))
        expected = z - (Kinv @ z) / np.diag(Kinv)
        self.assertTrue(np.allclose(zloo, expected, atol=1e-8))

    def test_loocv_needs_two_points(self):
        with self.assertRaises(InvalidArgumentError):
            validation.loocv(None, np.zeros((1, 2)), np.zeros(1))

    def test_k_fold_indices(self):
        folds = validation.k_fold_indices(23, 5, seed=0)
        self.assertEqual(len(folds), 5)
        sizes = sorted(len(f) for f in folds)
        self.assertEqual(sizes, [4, 4, 5, 5, 5])
        self.assertEqual(sorted(np.concatenate(folds).tolist()), list(range(23)))
        with self.assertRaises(InvalidArgumentError):
            validation.k_fold_indices(10, 1)
        with self.assertRaises(InvalidArgumentError):
            validation.k_fold_indices(10, 11)

    def test_cross_validation(self):
        x, z = dataset(n=60)
        kernel = GaussianKernel(1.0)
        t = np.linspace(0.0, 6.0, 12).reshape(-1, 1)
        fits = {
            "exact": lambda xi, zi: gr.fit_exact(xi, zi, kernel, 0.01),
            "sparse": lambda xi, zi: gr.fit_sparse(xi, zi, t, kernel, 0.01),
            "nystrom": lambda xi, zi: gr.fit_nystrom(xi, zi, t, kernel, 0.01),
        }
        for name, fit in fits.items():
            zcv = validation.cross_validation(fit, x, z, k=10, seed=0)
            self.assertEqual(zcv.shape, (60,))
            self.assertLess(validation.rmse(z, zcv), 0.1, name)
            self.assertTrue(np.all(zcv == validation.cross_validation(fit, x, z, k=10, seed=0)))


if __name__ == "__main__":
    unittest.main()
