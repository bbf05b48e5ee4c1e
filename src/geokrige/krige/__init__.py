"""
GeoKrige subpackage providing kriging.

.. currentmodule:: geokrige.krige

Kriging Methods
^^^^^^^^^^^^^^^

.. autosummary::
   :toctree:

   KrigingModel
   Simple
   Ordinary
   Universal
   ExternalDrift
   Kriging

Fitting and Prediction
^^^^^^^^^^^^^^^^^^^^^^

.. autosummary::
   :toctree:

   FittedKriging
   fit
   refit
   predict
   predictprob
   status
   weights
   predictmean
   predictvar

Kriging System
^^^^^^^^^^^^^^

.. autosummary::
   :toctree:

   KrigingSystem
   LDLFactorization
   SVDFactorization
   LUFactorization
"""

from geokrige.krige.base import (
    FittedKriging,
    KrigingModel,
    KrigingState,
    fit,
    predict,
    predictprob,
    refit,
    status,
)
from geokrige.krige.methods import (
    ExternalDrift,
    Kriging,
    Ordinary,
    Simple,
    Universal,
    powermatrix,
)
from geokrige.krige.solver import (
    KrigingWeights,
    predictmean,
    predictvar,
    weights,
)
from geokrige.krige.system import (
    Factorization,
    KrigingSystem,
    LDLFactorization,
    LUFactorization,
    SVDFactorization,
)

__all__ = [
    "KrigingModel",
    "KrigingState",
    "FittedKriging",
    "Simple",
    "Ordinary",
    "Universal",
    "ExternalDrift",
    "Kriging",
    "powermatrix",
    "fit",
    "refit",
    "predict",
    "predictprob",
    "status",
    "KrigingWeights",
    "weights",
    "predictmean",
    "predictvar",
    "KrigingSystem",
    "Factorization",
    "LDLFactorization",
    "SVDFactorization",
    "LUFactorization",
]
