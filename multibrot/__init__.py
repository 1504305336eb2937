"""Multibrot animation frames rendered over an exponent sweep with MPI.

The MPI-facing parts (``multibrot.protocol``, ``multibrot.sweep``) import
mpi4py; everything exported here does not.
"""
from .config import RenderConfig
from .errors import (ConfigurationError, CoordinationError, CoordinationTimeout,
                     FrameWriteError, MultibrotError)
from .kernel import MultibrotSet
from .palette import Color, Palette, make_palette

__all__ = [
    "RenderConfig",
    "MultibrotSet",
    "Color",
    "Palette",
    "make_palette",
    "MultibrotError",
    "ConfigurationError",
    "FrameWriteError",
    "CoordinationError",
    "CoordinationTimeout",
]
