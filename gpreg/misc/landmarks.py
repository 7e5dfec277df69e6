# gpreg/misc/landmarks.py
# --------------------------------------------------------------
# Author: Emmanuel Vazquez <emmanuel.vazquez@centralesupelec.fr>
# Copyright (c) 2022-2026, CentraleSupelec
# License: GPLv3 (see LICENSE)
# --------------------------------------------------------------
"""
Landmark (inducing point) selection for the sparse and Nystrom fits.

The fitting routines never choose landmarks themselves; these helpers
provide the usual choices.
"""
import gpreg.num as gnp
from gpreg.core.errors import InvalidArgumentError
from gpreg.core.utils import as_points


def _check_count(points, m):
    if isinstance(m, bool) or int(m) != m or m < 1:
        raise InvalidArgumentError(f"number of landmarks must be a positive integer, got {m}")
    if m > len(points):
        raise InvalidArgumentError(
            f"cannot select {m} landmarks from {len(points)} points"
        )
    return int(m)


def kmeans_landmarks(x, m, seed=None, iter=30):
    """k-means centroids of a dense point set.

    Parameters
    ----------
    x : array_like, shape (n, d)
    m : int
        Number of centroids (1 <= m <= n).
    seed : numpy.random.Generator, int or None, optional
        Random source for the k-means++ initialization. None uses the
        global generator of gpreg.num.
    iter : int, optional
        Number of k-means iterations.

    Returns
    -------
    centers : gnp.array, shape (m, d)

    Notes
    -----
    Clusters that end up empty keep their previous position, so
    exactly m centers are returned.
    """
    x = as_points(x, "x")
    if not gnp.isarray(x):
        raise InvalidArgumentError("k-means landmarks require a dense (n, d) array")
    m = _check_count(x, m)
    centers, _ = gnp.kmeans2(
        x, m, iter=iter, minit="++", missing="warn", seed=gnp.get_rng(seed)
    )
    return gnp.asarray(centers, dtype=gnp.float64)


def random_landmarks(x, m, seed=None):
    """Random subset of m distinct points of x (any point representation)."""
    x = as_points(x, "x")
    m = _check_count(x, m)
    ind = gnp.choice(len(x), size=m, replace=False, rng=seed)
    if gnp.isarray(x):
        return x[ind]
    return [x[i] for i in ind]


def landmark_kernel_width(centers):
    """Kernel width heuristic for landmark-based fits.

    Returns the sum of the pairwise Euclidean distances between the
    landmarks divided by 2m, with m the number of landmarks.
    """
    centers = as_points(centers, "centers")
    if not gnp.isarray(centers) or len(centers) < 2:
        raise InvalidArgumentError("need at least two dense landmarks")
    return float(gnp.sum(gnp.pdist(centers)) / (2 * centers.shape[0]))
