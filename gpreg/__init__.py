# gpreg/__init__.py

from . import config
from . import num
from . import core
from . import kernel
from . import misc
from .core import (
    Model,
    JointPrediction,
    fit_exact,
    fit_sparse,
    fit_nystrom,
    InvalidArgumentError,
    DimensionMismatchError,
    NumericalInstabilityError,
)

__all__ = [
    "num",
    "kernel",
    "Model",
    "JointPrediction",
    "fit_exact",
    "fit_sparse",
    "fit_nystrom",
    "InvalidArgumentError",
    "DimensionMismatchError",
    "NumericalInstabilityError",
    "__version__",
]

__version__ = config.__version__
