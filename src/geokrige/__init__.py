"""
Purpose
=======

GeoKrige is a kriging engine for sparse geospatial data.

It predicts the mean and the distribution of one or several correlated
variables at points or extended geometries with simple, ordinary,
universal and external drift kriging, all behind one fit / predict
contract.

Subpackages
===========

.. autosummary::
   :toctree: api

   krige
   function
   geometry
   data
   config

Kriging
=======

.. currentmodule:: geokrige.krige

.. autosummary::
   Simple
   Ordinary
   Universal
   ExternalDrift
   Kriging
   fit
   refit
   predict
   predictprob
   status

Geostatistical Functions
========================

.. currentmodule:: geokrige.function

.. autosummary::
   Variogram
   Covariance
   PowerVariogram
   MatrixExponentialTransiogram
"""

import logging

from geokrige import config, data, function, geometry, krige
from geokrige.config import DEFAULT_CONFIG, SolverConfig, make_config
from geokrige.data import SampleData
from geokrige.function import (
    Covariance,
    GeoStatsFunction,
    MatrixExponentialTransiogram,
    PowerVariogram,
    Variogram,
)
from geokrige.geometry import Block, Points
from geokrige.krige import (
    ExternalDrift,
    FittedKriging,
    Kriging,
    KrigingModel,
    Ordinary,
    Simple,
    Universal,
    fit,
    powermatrix,
    predict,
    predictprob,
    refit,
    status,
)

try:
    from importlib.metadata import version

    __version__ = version("geokrige")
except Exception:
    __version__ = "unknown"

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = ["__version__"]
__all__ += ["config", "data", "function", "geometry", "krige"]
__all__ += ["SolverConfig", "DEFAULT_CONFIG", "make_config"]
__all__ += ["SampleData", "Points", "Block"]
__all__ += [
    "GeoStatsFunction",
    "Variogram",
    "Covariance",
    "PowerVariogram",
    "MatrixExponentialTransiogram",
]
__all__ += [
    "KrigingModel",
    "FittedKriging",
    "Simple",
    "Ordinary",
    "Universal",
    "ExternalDrift",
    "Kriging",
    "fit",
    "refit",
    "predict",
    "predictprob",
    "status",
    "powermatrix",
]
