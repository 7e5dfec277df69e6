# gpreg/core/__init__.py
# --------------------------------------------------------------
# Author: Emmanuel Vazquez <emmanuel.vazquez@centralesupelec.fr>
# Copyright (c) 2022-2026, CentraleSupelec
# License: GPLv3 (see LICENSE)
# --------------------------------------------------------------

"""
Core components of the gpreg package.

This subpackage contains the regression engine: Gram-matrix
construction, the regularized Cholesky solver, the exact, sparse
(subset of regressors) and Nystrom fitting routines, the trained model
and the joint posterior predictor.

Public API
----------
fit_exact, fit_sparse, fit_nystrom : functions
    Build a trained Model from data.
Model : class
    Trained GP regression model (point and joint prediction).
JointPrediction : class
    Joint posterior over a batch of query points.
InvalidArgumentError, DimensionMismatchError, NumericalInstabilityError
    Errors raised by the core.
"""

from .errors import (
    InvalidArgumentError,
    DimensionMismatchError,
    NumericalInstabilityError,
)
from .gram import gram_matrix, gram_diag, kernel_vector
from .linalg import CholeskyFactor, regularized_cholesky, cholesky_solve
from .model import Model
from .joint import JointPrediction
from .fit import fit_exact, fit_sparse, fit_nystrom

__all__ = [
    "Model",
    "JointPrediction",
    "fit_exact",
    "fit_sparse",
    "fit_nystrom",
    "gram_matrix",
    "gram_diag",
    "kernel_vector",
    "CholeskyFactor",
    "regularized_cholesky",
    "cholesky_solve",
    "InvalidArgumentError",
    "DimensionMismatchError",
    "NumericalInstabilityError",
]
