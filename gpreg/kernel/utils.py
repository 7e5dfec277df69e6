# gpreg/kernel/utils.py
# --------------------------------------------------------------
import gpreg.num as gnp
from gpreg.core.errors import DimensionMismatchError


def as_vector_pair(a, b):
    """Convert two feature vectors and check they have the same length."""
    a = gnp.asarray(a, dtype=gnp.float64).reshape(-1)
    b = gnp.asarray(b, dtype=gnp.float64).reshape(-1)
    if a.shape[0] != b.shape[0]:
        raise DimensionMismatchError(
            f"feature vectors have different lengths ({a.shape[0]} != {b.shape[0]})"
        )
    return a, b


def as_matrix_pair(x, y):
    """Dense point sets (n, d) and (m, d); y=None means y := x."""
    x = gnp.asarray(x, dtype=gnp.float64)
    if x.ndim == 1:
        x = x.reshape(-1, 1)
    if y is None:
        return x, x
    y = gnp.asarray(y, dtype=gnp.float64)
    if y.ndim == 1:
        y = y.reshape(-1, 1)
    if x.shape[1] != y.shape[1]:
        raise DimensionMismatchError(
            f"point sets have different dimensions ({x.shape[1]} != {y.shape[1]})"
        )
    return x, y


def sparse_dot(a, b):
    """Dot product of two binary sparse vectors given as sorted index arrays."""
    return gnp.sorted_intersection_size(a, b)
