# gpreg/misc/__init__.py
# --------------------------------------------------------------
# Author: Emmanuel Vazquez <emmanuel.vazquez@centralesupelec.fr>
# Copyright (c) 2022-2026, CentraleSupelec
# License: GPLv3 (see LICENSE)
# --------------------------------------------------------------
"""
Miscellaneous utility modules for GPreg.

plotutils (matplotlib) is not imported here; use
``import gpreg.misc.plotutils``.
"""

from . import landmarks
from . import validation
