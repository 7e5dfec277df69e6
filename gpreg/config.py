# gpreg/config.py
import os
import logging

# Read version from VERSION file
_version_file = os.path.join(os.path.dirname(__file__), "..", "VERSION")
try:
    with open(os.path.abspath(_version_file), "r") as f:
        __version__ = f.read().strip()
except FileNotFoundError:
    __version__ = "0.0.0"


class _GPRegConfig:
    def __init__(self):
        self.version = __version__
        self.seed = 1234
        # regularized Cholesky: first jitter is relative to mean(diag(K))
        self.jitter_initial = 1e-10
        self.jitter_growth = 10.0
        self.jitter_max_tries = 6
        # Nystrom pseudo-inverse cutoff, relative to the largest eigenvalue
        self.eigen_rtol = 1e-12
        # added to the posterior covariance before factoring it for sampling,
        # relative to the largest prior variance at the query points
        self.sample_jitter = 1e-10
        # logger lives in config
        self.logger = logging.getLogger("gpreg")
        if not self.logger.handlers:
            h = logging.StreamHandler()
            h.setFormatter(logging.Formatter("[%(levelname)s] %(message)s"))
            self.logger.addHandler(h)
        self.logger.setLevel(logging.INFO)

    def __str__(self):
        return (
            f"GPRegConfig("
            f"version={self.version}, "
            f"seed={self.seed}, "
            f"jitter_initial={self.jitter_initial}, "
            f"jitter_growth={self.jitter_growth}, "
            f"jitter_max_tries={self.jitter_max_tries})"
        )

    def __repr__(self):
        return (
            f"<GPRegConfig "
            f"version={self.version!r}, "
            f"seed={self.seed!r}, "
            f"jitter_initial={self.jitter_initial!r}, "
            f"jitter_growth={self.jitter_growth!r}, "
            f"jitter_max_tries={self.jitter_max_tries!r}, "
            f"eigen_rtol={self.eigen_rtol!r}, "
            f"sample_jitter={self.sample_jitter!r}>"
        )

    def update(self, **kwargs):
        for k, v in kwargs.items():
            if not hasattr(self, k):
                raise AttributeError(f"Unknown configuration entry '{k}'")
            setattr(self, k, v)
        return self


_config = _GPRegConfig()


def get_config():
    return _config


def set_jitter(initial=None, growth=None, max_tries=None):
    """Tune the jitter retry loop of the regularized Cholesky solver."""
    if initial is not None:
        if initial <= 0.0:
            raise ValueError("initial jitter must be positive")
        _config.jitter_initial = float(initial)
    if growth is not None:
        if growth <= 1.0:
            raise ValueError("jitter growth must be greater than 1")
        _config.jitter_growth = float(growth)
    if max_tries is not None:
        if max_tries < 0:
            raise ValueError("max_tries must be >= 0")
        _config.jitter_max_tries = int(max_tries)


def get_logger():
    return _config.logger


def set_log_level(level):
    _config.logger.setLevel(level)
