"""
GeoKrige subpackage providing the base of kriging models.

.. currentmodule:: geokrige.krige.base

The following classes and functions are provided

.. autosummary::
   KrigingModel
   KrigingState
   FittedKriging
   fit
   refit
   predict
   predictprob
   status
"""

import logging
from abc import ABC, abstractmethod

import numpy as np
from scipy import stats

from geokrige.config import make_config
from geokrige.data import SampleData
from geokrige.function.base import GeoStatsFunction
from geokrige.krige.solver import predictmean, predictvar, weights
from geokrige.krige.system import (
    KrigingSystem,
    converts_to_covariance,
    factorize,
    in_covariance_form,
)

__all__ = [
    "KrigingModel",
    "KrigingState",
    "FittedKriging",
    "fit",
    "refit",
    "predict",
    "predictprob",
    "status",
]

logger = logging.getLogger(__name__)


class KrigingModel(ABC):
    """
    Base class of the kriging methods.

    A kriging model holds the geostatistical function and the method
    specific parameters. The methods form a closed set
    (:any:`Simple`, :any:`Ordinary`, :any:`Universal`,
    :any:`ExternalDrift`), each providing the constraint blocks of the
    kriging system.

    Parameters
    ----------
    func : :any:`GeoStatsFunction`
        Geostatistical function.
    """

    def __init__(self, func):
        if not isinstance(func, GeoStatsFunction):
            raise TypeError(
                f"func must be a GeoStatsFunction instance, got {type(func)}"
            )
        self.func = func

    @abstractmethod
    def nconstraints(self, nvar):
        """Number of constraint rows for `nvar` variables."""

    @abstractmethod
    def set_constraints_lhs(self, lhs, nvar, domain):
        """
        Set the constraint blocks of the kriging matrix.

        Parameters
        ----------
        lhs : :class:`numpy.ndarray`
            the active kriging matrix, the constraints are the last rows
            and columns
        nvar : :class:`int`
            number of variables
        domain : :any:`Points`
            sample positions
        """

    @abstractmethod
    def set_constraints_rhs(self, rhs, nvar, geometry):
        """
        Set the constraint rows of the right hand side.

        Parameters
        ----------
        rhs : :class:`numpy.ndarray`
            the right hand side, the constraints are the last rows
        nvar : :class:`int`
            number of variables
        geometry : :class:`list` or :any:`Block`
            target geometry
        """

    def mean_vector(self, nvar, shape=()):
        """Known mean of each variable (zero unless simple kriging)."""
        return np.zeros((nvar,) + tuple(shape))

    def check(self, data):
        """Method specific validation of the samples."""

    def scale(self, alpha):
        """Same method with the function sill scaled by `alpha`."""
        return type(self)(self.func.scale(alpha))

    def fit(self, data, config=None, **kwargs):
        """Fit the model to the samples, see :any:`geokrige.krige.fit`."""
        return fit(self, data, config=config, **kwargs)

    def __repr__(self):
        return f"{type(self).__name__}({self.func!r})"


class KrigingState:
    """
    State of a fitted kriging model.

    Holds the samples (by reference), the kriging system with its
    factorization and the shape metadata.

    Attributes
    ----------
    data : :any:`SampleData`
        the samples
    system : :any:`KrigingSystem`
        the kriging system storage
    factorization : :any:`Factorization`
        the factorized kriging matrix
    nobs : :class:`int`
        number of samples
    nvar : :class:`int`
        number of variables
    ncon : :class:`int`
        number of constraints
    converts : :class:`bool`
        whether function values are converted by ``sill - F``
    cov_form : :class:`bool`
        whether the system is in covariance form
    """

    def __init__(self, data, system, factorization, converts, cov_form):
        self.data = data
        self.system = system
        self.factorization = factorization
        self.converts = converts
        self.cov_form = cov_form
        self.values = data.values_matrix()
        self.missing_mask = data.missing

    @property
    def nobs(self):
        return self.system.nobs

    @property
    def nvar(self):
        return self.system.nvar

    @property
    def ncon(self):
        return self.system.ncon

    @property
    def nfun(self):
        return self.system.nfun

    @property
    def capacity(self):
        return self.system.capacity


class FittedKriging:
    """
    A kriging model fitted to samples.

    Created by :any:`fit`, can be refitted in place by :any:`refit` with at
    most as many samples as the initial fit.

    Parameters
    ----------
    model : :any:`KrigingModel`
        the kriging model
    state : :any:`KrigingState`
        the fitted state
    config : :any:`SolverConfig`
        the solver configuration
    """

    def __init__(self, model, state, config):
        self.model = model
        self.state = state
        self.config = config

    @property
    def names(self):
        """:class:`tuple`: names of the variables."""
        return self.state.data.names

    def var_indices(self, names=None):
        """
        Indices of variable names.

        Parameters
        ----------
        names : :class:`str` or :class:`list`, optional
            variable name or names. Default: all variables

        Returns
        -------
        idx : :class:`tuple`
            indices of the variables
        single : :class:`bool`
            whether a single name was given
        """
        all_names = self.names
        if names is None:
            return tuple(range(len(all_names))), False
        single = isinstance(names, str)
        names = (names,) if single else tuple(names)
        if not names:
            raise ValueError("at least one variable name is required")
        try:
            idx = tuple(all_names.index(str(n)) for n in names)
        except ValueError:
            raise ValueError(
                f"unknown variable in {names}, available: {all_names}"
            ) from None
        return idx, single

    def status(self):
        """Whether the factorization of the kriging matrix succeeded."""
        return bool(self.state.factorization.success)

    def new_rhs(self):
        """
        Allocate a right hand side buffer.

        Concurrent predictions need one buffer per worker, see
        :any:`weights`.
        """
        return self.state.system.new_rhs()

    def weights(self, geometry, rhs=None):
        """Kriging weights at a geometry, see :any:`weights`."""
        return weights(self, geometry, rhs=rhs)

    def predict(self, names, geometry, rhs=None):
        """Posterior mean, see :any:`predict`."""
        return predictmean(self, self.weights(geometry, rhs=rhs), names)

    def predictprob(self, names, geometry, rhs=None):
        """Posterior distribution, see :any:`predictprob`."""
        idx, single = self.var_indices(names)
        krige_weights = self.weights(geometry, rhs=rhs)
        mean = predictmean(self, krige_weights)[list(idx)]
        if not single and mean.ndim > 1:
            raise ValueError(
                "predictprob: vector valued variables need a single name"
            )
        cov = predictvar(self, krige_weights, geometry)[np.ix_(idx, idx)]
        cov[np.diag_indices_from(cov)] += self.config.var_epsilon
        if single:
            return stats.norm(loc=mean[0], scale=np.sqrt(cov[0, 0]))
        return stats.multivariate_normal(
            mean=mean, cov=cov, allow_singular=True
        )

    def refit(self, data):
        """Refit in place, see :any:`refit`."""
        return refit(self, data)

    def __repr__(self):
        return (
            f"FittedKriging({self.model!r}, nobs={self.state.nobs}, "
            f"status={self.status()})"
        )


def _check_data(func, data):
    if not isinstance(data, SampleData):
        raise TypeError(
            f"data must be a SampleData instance, got {type(data)}"
        )
    if data.nvar != func.nvar:
        raise ValueError(
            f"number of data columns ({data.nvar}) doesn't match the "
            f"number of variables of the function ({func.nvar})"
        )
    if data.dim != func.dim:
        raise ValueError(
            f"data dimension ({data.dim}) doesn't match the "
            f"function dimension ({func.dim})"
        )


def fit(model, data, config=None, **kwargs):
    """
    Fit a kriging model to samples.

    Builds the kriging matrix, knocks out missing values and factorizes
    it. A failed factorization is not raised, see :any:`status`.

    Parameters
    ----------
    model : :any:`KrigingModel`
        the kriging model
    data : :any:`SampleData`
        the samples, one column per variable of the function
    config : :any:`SolverConfig`, optional
        solver configuration. Default: :any:`DEFAULT_CONFIG`
    **kwargs
        fields of :any:`SolverConfig` to override

    Returns
    -------
    :any:`FittedKriging`
    """
    if not isinstance(model, KrigingModel):
        raise TypeError(
            f"model must be a KrigingModel instance, got {type(model)}"
        )
    config = make_config(config, **kwargs)
    func = model.func
    _check_data(func, data)
    model.check(data)
    system = KrigingSystem(
        data.nrow, func.nvar, model.nconstraints(func.nvar)
    )
    logger.debug(
        "fitting %s: %d samples, %d variables, %d constraints",
        type(model).__name__,
        data.nrow,
        system.nvar,
        system.ncon,
    )
    lhs = system.assemble(model, data)
    state = KrigingState(
        data,
        system,
        factorize(lhs, func, config),
        converts_to_covariance(func),
        in_covariance_form(func),
    )
    return FittedKriging(model, state, config)


def refit(fitted, data):
    """
    Refit a fitted kriging model in place with new samples.

    The storage of the initial fit is reused, so the new samples can't
    exceed the initial number of samples.

    Parameters
    ----------
    fitted : :any:`FittedKriging`
        the fitted kriging model
    data : :any:`SampleData`
        the new samples

    Returns
    -------
    :any:`FittedKriging`
        the same (updated) fitted model
    """
    model = fitted.model
    state = fitted.state
    _check_data(model.func, data)
    if data.names != fitted.names:
        raise ValueError(
            f"refit: variables {data.names} don't match the variables "
            f"{fitted.names} of the initial fit"
        )
    if data.nrow > state.capacity:
        raise ValueError(
            f"refit: {data.nrow} samples exceed the capacity of "
            f"{state.capacity} samples of the initial fit"
        )
    model.check(data)
    logger.debug("refitting with %d of %d samples", data.nrow, state.capacity)
    lhs = state.system.assemble(model, data)
    fitted.state = KrigingState(
        data,
        state.system,
        factorize(lhs, model.func, fitted.config),
        state.converts,
        state.cov_form,
    )
    return fitted


def predict(fitted, names, geometry):
    """
    Posterior mean at a geometry.

    Parameters
    ----------
    fitted : :any:`FittedKriging`
        the fitted kriging model
    names : :class:`str` or :class:`list`
        variable name or names
    geometry : :class:`list` or :any:`Block`
        target point (x, [y, z]) or extended geometry

    Returns
    -------
    :class:`float` or :class:`numpy.ndarray`
        scalar for a single name, vector for a list of names
    """
    return fitted.predict(names, geometry)


def predictprob(fitted, names, geometry):
    """
    Posterior distribution at a geometry.

    Parameters
    ----------
    fitted : :any:`FittedKriging`
        the fitted kriging model
    names : :class:`str` or :class:`list`
        variable name or names
    geometry : :class:`list` or :any:`Block`
        target point (x, [y, z]) or extended geometry

    Returns
    -------
    :any:`scipy.stats.norm` or :any:`scipy.stats.multivariate_normal`
        normal distribution for a single name, multivariate normal
        distribution for a list of names. For vector valued samples the
        normal distribution has one mean per component and a shared
        variance.
    """
    return fitted.predictprob(names, geometry)


def status(fitted):
    """Whether the factorization of the fitted kriging matrix succeeded."""
    return fitted.status()
