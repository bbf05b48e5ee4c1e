"""
GeoKrige subpackage providing geostatistical functions.

.. currentmodule:: geokrige.function

Geostatistical functions give the spatial correlation (or dissimilarity)
of one or several co-located variables between two geometries. They define
the main block of the kriging system.

Base Class
^^^^^^^^^^

.. autosummary::
   :toctree:

   GeoStatsFunction

Variograms and Covariances
^^^^^^^^^^^^^^^^^^^^^^^^^^

.. autosummary::
   :toctree:

   Variogram
   Covariance
   PowerVariogram

Transiograms
^^^^^^^^^^^^

.. autosummary::
   :toctree:

   MatrixExponentialTransiogram
"""

from geokrige.function.base import GeoStatsFunction, ScaledFunction
from geokrige.function.models import Covariance, PowerVariogram, Variogram
from geokrige.function.transiogram import MatrixExponentialTransiogram

__all__ = [
    "GeoStatsFunction",
    "ScaledFunction",
    "Variogram",
    "Covariance",
    "PowerVariogram",
    "MatrixExponentialTransiogram",
]
