"""
GeoKrige subpackage providing the kriging solver.

.. currentmodule:: geokrige.krige.solver

Given a fitted kriging model and a target geometry, the solver fills the
right hand side of the kriging system, solves for the weights and
Lagrange multipliers and computes the posterior mean and covariance.

The following are provided

.. autosummary::
   KrigingWeights
   weights
   predictmean
   predictvar
"""

from typing import NamedTuple

import numpy as np

__all__ = ["KrigingWeights", "weights", "predictmean", "predictvar"]


class KrigingWeights(NamedTuple):
    """
    Kriging weights at a target geometry.

    Attributes
    ----------
    lambda_ : :class:`numpy.ndarray`
        weights with shape (nobs * nvar, nvar)
    nu : :class:`numpy.ndarray`
        Lagrange multipliers with shape (nconstraints, nvar)
    rhs : :class:`numpy.ndarray`
        the right hand side the weights were solved for
    """

    lambda_: np.ndarray
    nu: np.ndarray
    rhs: np.ndarray


def weights(fitted, geometry, rhs=None):
    """
    Kriging weights and Lagrange multipliers at a geometry.

    Parameters
    ----------
    fitted : :any:`FittedKriging`
        the fitted kriging model
    geometry : :class:`list` or :any:`Block`
        target point (x, [y, z]) or extended geometry
    rhs : :class:`numpy.ndarray`, optional
        right hand side buffer to fill, see :any:`FittedKriging.new_rhs`.
        Concurrent callers need their own buffers.
        Default: the buffer of the fitted model

    Returns
    -------
    :any:`KrigingWeights`
    """
    state = fitted.state
    func = fitted.model.func
    system = state.system
    nfun = state.nfun
    if rhs is None:
        rhs = system.rhs
    elif rhs.shape != (system.nrow, state.nvar):
        raise ValueError(
            f"rhs buffer needs shape {(system.nrow, state.nvar)}, "
            f"got {rhs.shape}"
        )
    geometry = state.data.project(geometry)
    # function evaluation against the target
    func.to_target(state.data.domain, geometry, out=rhs[:nfun])
    if state.converts:
        rhs[:nfun] = np.tile(func.sill, (state.nobs, 1)) - rhs[:nfun]
    fitted.model.set_constraints_rhs(rhs, state.nvar, geometry)
    rhs[system.missing] = 0.0
    sol = state.factorization.solve(rhs)
    # split at the number of function rows stored at fit time
    return KrigingWeights(sol[:nfun], sol[nfun:], rhs)


def predictmean(fitted, krige_weights, names=None):
    """
    Posterior mean of the kriging model for the given weights.

    Missing sample values don't contribute. Vector valued samples
    (e.g. compositions) are combined component wise with the same weights.

    Parameters
    ----------
    fitted : :any:`FittedKriging`
        the fitted kriging model
    krige_weights : :any:`KrigingWeights`
        the weights at the target
    names : :class:`str` or :class:`list`, optional
        variable name or names to return. Default: all variables

    Returns
    -------
    :class:`float` or :class:`numpy.ndarray`
        the mean of a single variable or the means of the given variables,
        with the value shape appended for vector valued samples
    """
    state = fitted.state
    shape = state.values.shape[2:]
    mu = fitted.model.mean_vector(state.nvar, shape)
    missing = state.missing_mask
    mask = missing.reshape(missing.shape + (1,) * len(shape))
    resid = np.where(mask, 0.0, state.values - mu)
    resid = resid.reshape((state.nfun,) + shape)
    # weighted sum over all sample entries: (nvar, *shape)
    mean = mu + np.tensordot(krige_weights.lambda_, resid, axes=(0, 0))
    idx, single = fitted.var_indices(names)
    if single:
        return float(mean[idx[0]]) if not shape else mean[idx[0]]
    return mean[list(idx)]


def predictvar(fitted, krige_weights, geometry):
    """
    Posterior covariance matrix of all variables at a geometry.

    For systems in covariance form the covariance is
    :math:`C(x_0, x_0) - R^T [\\lambda; \\nu]`, for systems in variogram form
    (non-stationary variograms) it is
    :math:`R^T [\\lambda; \\nu] - \\gamma(x_0, x_0)`, with the right hand
    side :math:`R` and the support averaged value of the target with itself
    (change of support). Negative variances from round-off are clamped
    to zero.

    Parameters
    ----------
    fitted : :any:`FittedKriging`
        the fitted kriging model
    krige_weights : :any:`KrigingWeights`
        the weights at the target
    geometry : :class:`list` or :any:`Block`
        target point (x, [y, z]) or extended geometry

    Returns
    -------
    :class:`numpy.ndarray`
        covariance with shape (nvar, nvar)
    """
    state = fitted.state
    func = fitted.model.func
    nfun = state.nfun
    rhs = krige_weights.rhs
    prod = rhs[:nfun].T @ krige_weights.lambda_
    prod += rhs[nfun:].T @ krige_weights.nu
    self_val = func.self_value(state.data.project(geometry))
    if state.converts:
        self_val = func.sill - self_val
    if state.cov_form:
        cov = self_val - prod
    else:
        cov = prod - self_val
    cov = 0.5 * (cov + cov.T)
    diag = np.diag_indices_from(cov)
    # only variances are clamped, negative cross covariances are valid
    cov[diag] = np.maximum(0.0, cov[diag])
    return cov
