# gpreg/core/errors.py
# --------------------------------------------------------------
# Author: Emmanuel Vazquez <emmanuel.vazquez@centralesupelec.fr>
# Copyright (c) 2022-2026, CentraleSupelec
# License: GPLv3 (see LICENSE)
# --------------------------------------------------------------
"""Exceptions raised by gpreg.core."""
from numpy.linalg import LinAlgError


class InvalidArgumentError(ValueError):
    """Empty or inconsistent inputs (point sets, targets, landmarks, noise,
    sample counts)."""


class DimensionMismatchError(InvalidArgumentError):
    """A point's representation does not match the kernel / landmark type."""


class NumericalInstabilityError(LinAlgError):
    """A matrix is not positive definite even after the jitter retries."""

    def __init__(self, message, jitter=None, attempts=None):
        super().__init__(message)
        self.jitter = jitter
        self.attempts = attempts
