# gpreg/core/utils.py
# --------------------------------------------------------------
# Author: Emmanuel Vazquez <emmanuel.vazquez@centralesupelec.fr>
# Copyright (c) 2022-2026, CentraleSupelec
# License: GPLv3 (see LICENSE)
# --------------------------------------------------------------
"""
Small utilities used across `gpreg.core` modules.

This file hosts:
- Point-set coercion (dense feature arrays vs. generic sequences)
- Shape validation for training data and queries
- Noise and sample-count validation
"""
import numbers

import gpreg.num as gnp
from .errors import InvalidArgumentError, DimensionMismatchError


def as_points(x, name="x"):
    """Coerce a point set.

    Parameters
    ----------
    x : array_like or sequence
        Either a float array of shape (n, d), a 1-D float array of n
        scalar inputs (read as (n, 1)), a sequence of numbers or of
        equal-length float rows (stacked into such an array), or a
        sequence of arbitrary objects
        (e.g. sorted integer index arrays for sparse kernels).
    name : str
        Used in error messages.

    Returns
    -------
    points : gnp.array of shape (n, d) or list
    """
    if x is None:
        raise InvalidArgumentError(f"{name} must not be None")
    if gnp.is_float_array(x):
        x = gnp.asarray(x, dtype=gnp.float64)
        if x.ndim == 1:
            x = x.reshape(-1, 1)
        if x.ndim != 2:
            raise InvalidArgumentError(f"{name} should be a 2D array")
        return x
    if isinstance(x, (list, tuple)) and len(x) > 0 and _is_ragged_free(x):
        arr = gnp.asarray(x)
        if gnp.is_float_array(arr) and arr.ndim in (1, 2):
            return as_points(arr, name)
    return list(x)


def _is_ragged_free(seq):
    # plain numbers, or equal-length rows given as lists, tuples or float
    # arrays; integer arrays are index sets and stay generic
    first = seq[0]
    if _is_number(first):
        return all(_is_number(v) for v in seq)
    if isinstance(first, (list, tuple)) or _is_float_row(first):
        n = len(first)
        return all(
            (isinstance(v, (list, tuple)) or _is_float_row(v)) and len(v) == n
            for v in seq
        )
    return False


def _is_number(v):
    return isinstance(v, (numbers.Real, gnp.number)) and not isinstance(
        v, (bool, gnp.bool_)
    )


def _is_float_row(v):
    return gnp.isarray(v) and v.ndim == 1 and gnp.issubdtype(v.dtype, gnp.floating)


def ensure_training_data(x, y, name_x="x", name_y="y"):
    """Validate and convert training points and targets.

    Returns
    -------
    tuple
        (points, targets) where targets is a 1-D float array.

    Raises
    ------
    InvalidArgumentError
        Empty sets, non-finite targets or mismatched lengths.
    """
    points = as_points(x, name_x)
    if len(points) == 0:
        raise InvalidArgumentError(f"{name_x} is empty")
    if y is None:
        raise InvalidArgumentError(f"{name_y} must not be None")
    y = gnp.asarray(y, dtype=gnp.float64)
    if y.ndim == 2:
        if y.shape[1] != 1:
            raise InvalidArgumentError(
                f"{name_y} should only have one column if it's a 2D array"
            )
        y = y.reshape(-1)
    elif y.ndim != 1:
        raise InvalidArgumentError(f"{name_y} should be 1D or a 2D column array")
    if y.shape[0] == 0:
        raise InvalidArgumentError(f"{name_y} is empty")
    if len(points) != y.shape[0]:
        raise InvalidArgumentError(
            f"{name_x} and {name_y} must have the same number of rows "
            f"({len(points)} != {y.shape[0]})"
        )
    if not gnp.all(gnp.isfinite(y)):
        raise InvalidArgumentError(f"{name_y} contains non-finite values")
    return points, y


def ensure_landmarks(landmarks, points):
    """Validate an inducing set against the training points."""
    if landmarks is None:
        raise InvalidArgumentError("landmarks must be supplied")
    t = as_points(landmarks, "landmarks")
    if len(t) == 0:
        raise InvalidArgumentError("landmarks is empty")
    check_same_dimension(points, t, "landmarks")
    return t


def ensure_noise(noise):
    noise = float(noise)
    if not noise >= 0.0:
        raise InvalidArgumentError(f"noise must be non-negative, got {noise}")
    return noise


def ensure_sample_count(k):
    if isinstance(k, bool) or int(k) != k or k <= 0:
        raise InvalidArgumentError(f"number of samples must be a positive integer, got {k}")
    return int(k)


def check_same_dimension(reference, points, name="xt"):
    """Raise DimensionMismatchError if two dense point sets differ in width."""
    ref_dense = gnp.isarray(reference)
    pts_dense = gnp.isarray(points)
    if ref_dense and pts_dense:
        if reference.shape[1] != points.shape[1]:
            raise DimensionMismatchError(
                f"{name} has {points.shape[1]} columns, expected {reference.shape[1]}"
            )
    elif ref_dense != pts_dense:
        raise DimensionMismatchError(
            f"{name} and the reference points do not share a representation"
        )


def as_query_point(x, reference):
    """Coerce a single query point to the representation of `reference`."""
    if gnp.isarray(reference):
        x = gnp.asarray(x, dtype=gnp.float64)
        if x.ndim == 0:
            x = x.reshape(1)
        elif x.ndim == 2 and x.shape[0] == 1:
            x = x.reshape(-1)
        if x.ndim != 1 or x.shape[0] != reference.shape[1]:
            raise DimensionMismatchError(
                f"query point has shape {x.shape}, expected ({reference.shape[1]},)"
            )
    return x
