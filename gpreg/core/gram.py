# gpreg/core/gram.py
# --------------------------------------------------------------
# Author: Emmanuel Vazquez <emmanuel.vazquez@centralesupelec.fr>
# Copyright (c) 2022-2026, CentraleSupelec
# License: GPLv3 (see LICENSE)
# --------------------------------------------------------------
"""
Gram-matrix construction.

A kernel is any object with an ``evaluate(a, b)`` method, or a plain
callable ``k(a, b)``. Kernels that also provide ``matrix(x, y)`` and
``diag(x)`` are evaluated in vectorized form when the point sets are
dense arrays; otherwise the builder falls back to pairwise evaluation.

Functions
---------
gram_matrix(xa, xb, kernel)
    Full (|xa| x |xb|) or symmetric (|xa| x |xa|) kernel matrix.
gram_diag(x, kernel)
    Self-similarities k(x_i, x_i).
kernel_vector(x, points, kernel)
    Kernel evaluations between one query and a point set.
"""
import gpreg.num as gnp


def kernel_function(kernel):
    """Return the scalar evaluation routine of a kernel."""
    evaluate = getattr(kernel, "evaluate", None)
    if callable(evaluate):
        return evaluate
    if callable(kernel):
        return kernel
    raise TypeError(
        f"{type(kernel).__name__} is neither callable nor provides evaluate(a, b)"
    )


def _vectorized(kernel, *point_sets):
    return callable(getattr(kernel, "matrix", None)) and all(
        gnp.isarray(p) for p in point_sets
    )


def gram_matrix(xa, xb, kernel):
    """Kernel matrix between two point sets.

    Parameters
    ----------
    xa : array_like (n, d) or sequence of length n
    xb : array_like (m, d), sequence of length m, or None
        If None or the same object as `xa`, the symmetric Gram matrix of
        `xa` is built; only the upper triangle is evaluated and it is
        mirrored, so that K[i, j] == K[j, i] exactly.
    kernel : kernel object or callable

    Returns
    -------
    K : gnp.array, shape (n, m)
    """
    symmetric = xb is None or xb is xa
    if symmetric:
        xb = xa
    n, m = len(xa), len(xb)

    if _vectorized(kernel, xa, xb):
        K = gnp.asarray(kernel.matrix(xa, None if symmetric else xb))
        if K.shape != (n, m):
            raise ValueError(
                f"kernel.matrix returned shape {K.shape}, expected {(n, m)}"
            )
        return gnp.symmetrize_upper(K) if symmetric else K

    k = kernel_function(kernel)
    K = gnp.empty((n, m))
    if symmetric:
        for i in range(n):
            K[i, i] = k(xa[i], xa[i])
            for j in range(i + 1, n):
                K[i, j] = K[j, i] = k(xa[i], xa[j])
    else:
        for i in range(n):
            for j in range(m):
                K[i, j] = k(xa[i], xb[j])
    return K


def gram_diag(x, kernel):
    """Vector of self-similarities k(x_i, x_i), shape (n,)."""
    if callable(getattr(kernel, "diag", None)) and gnp.isarray(x):
        return gnp.asarray(kernel.diag(x)).reshape(-1)
    k = kernel_function(kernel)
    return gnp.array([k(xi, xi) for xi in x], dtype=gnp.float64)


def kernel_vector(x, points, kernel):
    """Kernel evaluations k(points[i], x), shape (len(points),)."""
    if _vectorized(kernel, points) and gnp.isarray(x):
        return gnp.asarray(kernel.matrix(points, x.reshape(1, -1))).reshape(-1)
    k = kernel_function(kernel)
    return gnp.array([k(p, x) for p in points], dtype=gnp.float64)
