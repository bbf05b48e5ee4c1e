"""
GeoKrige subpackage providing a set of kriging methods.

.. currentmodule:: geokrige.krige.methods

The set of methods is closed: each one provides the constraint blocks of
the kriging system (number of constraints, left hand side, right hand side).

The following classes and functions are provided

.. autosummary::
   Simple
   Ordinary
   Universal
   ExternalDrift
   Kriging
   powermatrix
"""

from abc import abstractmethod
from itertools import combinations_with_replacement

import numpy as np

from geokrige.geometry import centroid
from geokrige.krige.base import KrigingModel

__all__ = [
    "Simple",
    "Ordinary",
    "Universal",
    "ExternalDrift",
    "Kriging",
    "powermatrix",
]


class Simple(KrigingModel):
    """
    Simple kriging.

    Simple kriging is used to interpolate data with a given mean.
    No constraints are added to the kriging system, the estimate is

    .. math::
       Z^*_j(x_0) = \\mu_j + \\sum_{i,p} \\lambda_{ip,j} (z_p(x_i) - \\mu_p)

    Parameters
    ----------
    func : :any:`GeoStatsFunction`
        Stationary geostatistical function.
    mean : :class:`float` or :class:`list`, optional
        mean value of each variable. A single value is used for all
        variables. For vector valued samples the mean is broadcast
        against (nvar, *value_shape), a vector of nvar values is taken
        per variable. Default: 0.0
    """

    def __init__(self, func, mean=0.0):
        super().__init__(func)
        if not func.is_stationary:
            raise ValueError(
                "Simple: simple kriging requires a stationary function"
            )
        self.mean = np.asarray(mean, dtype=np.double)

    def check(self, data):
        self.mean_vector(data.nvar, data.value_shape)

    def mean_vector(self, nvar, shape=()):
        shape = (nvar,) + tuple(shape)
        mean = self.mean
        if mean.ndim == 1 and len(mean) == nvar and len(shape) > 1:
            # one mean per variable
            mean = mean.reshape((nvar,) + (1,) * (len(shape) - 1))
        try:
            return np.broadcast_to(mean, shape).copy()
        except ValueError:
            raise ValueError(
                f"Simple: mean with shape {self.mean.shape} doesn't fit "
                f"{nvar} variables with values of shape {shape[1:]}"
            ) from None

    def nconstraints(self, nvar):
        return 0

    def set_constraints_lhs(self, lhs, nvar, domain):
        pass

    def set_constraints_rhs(self, rhs, nvar, geometry):
        pass

    def scale(self, alpha):
        return Simple(self.func.scale(alpha), self.mean)


class Ordinary(KrigingModel):
    """
    Ordinary kriging.

    Ordinary kriging is used to interpolate data and estimate a proper mean.
    The weights of each variable are constrained to sum up to one::

        LHS constraints             RHS constraints
        ┌─────┬─────┬───┬─────┐     ┌─────┐
        │  I  │  I  │ … │  0  │     │  I  │   nvar rows
        └─────┴─────┴───┴─────┘     └─────┘

    Parameters
    ----------
    func : :any:`GeoStatsFunction`
        Geostatistical function.
    """

    def nconstraints(self, nvar):
        return nvar

    def set_constraints_lhs(self, lhs, nvar, domain):
        ind = lhs.shape[0] - nvar
        block = np.tile(np.eye(nvar), (1, len(domain)))
        lhs[ind:, :ind] = block
        lhs[:ind, ind:] = block.T
        lhs[ind:, ind:] = 0.0

    def set_constraints_rhs(self, rhs, nvar, geometry):
        ind = rhs.shape[0] - nvar
        rhs[ind:, :] = np.eye(nvar)


class _DriftKriging(KrigingModel):
    """
    Common constraint blocks of drift based kriging.

    For each drift term :math:`f_k` the block :math:`f_k(x_i) I` is placed
    for every sample and :math:`f_k(x_0) I` on the right hand side.
    """

    @property
    @abstractmethod
    def drift_no(self):
        """:class:`int`: number of drift terms."""

    @abstractmethod
    def drift_values(self, pos):
        """
        Drift terms evaluated at the given positions.

        Parameters
        ----------
        pos : :class:`numpy.ndarray`
            positions with shape (dim, n)

        Returns
        -------
        :class:`numpy.ndarray`
            values with shape (drift_no, n)
        """

    def nconstraints(self, nvar):
        return nvar * self.drift_no

    def set_constraints_lhs(self, lhs, nvar, domain):
        ind = len(domain) * nvar
        block = np.kron(self.drift_values(domain.pos), np.eye(nvar))
        lhs[ind:, :ind] = block
        lhs[:ind, ind:] = block.T
        lhs[ind:, ind:] = 0.0

    def set_constraints_rhs(self, rhs, nvar, geometry):
        ind = rhs.shape[0] - self.nconstraints(nvar)
        pos = centroid(geometry).reshape(-1, 1)
        rhs[ind:, :] = np.kron(self.drift_values(pos), np.eye(nvar))


def _eval_drifts(drifts, pos):
    """Evaluate drift functions f(x, [y, z]) at (dim, n) positions."""
    num = pos.shape[1]
    vals = np.empty((len(drifts), num), dtype=np.double)
    for k, f in enumerate(drifts):
        vals[k] = np.broadcast_to(np.asarray(f(*pos), dtype=np.double), num)
    return vals


class Universal(_DriftKriging):
    """
    Universal kriging.

    Universal kriging is used to interpolate given data with a variable
    mean, that is determined by a polynomial drift of the given degree in
    the given dimension, or by a list of drift functions.

    The monomials of the polynomial drift are sorted by descending maximal
    single coordinate exponent, which leads to better conditioned kriging
    matrices (see :any:`powermatrix`).

    Parameters
    ----------
    func : :any:`GeoStatsFunction`
        Geostatistical function.
    degree : :class:`int`, optional
        degree of the polynomial drift. Ordinary kriging is recovered
        with degree 0.
    dim : :class:`int`, optional
        dimension of the polynomial drift. Default: `func.dim`
    drifts : :class:`list` of :any:`callable`, optional
        Drift functions instead of a polynomial. Should have the signature
        f(x, [y, z, ...]) and accept arrays of positions.
    """

    def __init__(self, func, degree=None, dim=None, drifts=None):
        super().__init__(func)
        if (degree is None) == (drifts is None):
            raise ValueError(
                "Universal: provide either a polynomial degree or drifts"
            )
        if drifts is not None:
            self.drift_functions = _check_drifts(drifts, "Universal")
            self.degree = None
            self.dim = None
            self.pow = None
        else:
            self.dim = func.dim if dim is None else int(dim)
            self.degree = int(degree)
            self.pow = powermatrix(self.degree, self.dim)
            self.drift_functions = None

    @property
    def drift_no(self):
        if self.pow is not None:
            return len(self.pow)
        return len(self.drift_functions)

    def check(self, data):
        if self.dim is not None and self.dim != data.dim:
            raise ValueError(
                f"Universal: polynomial dimension {self.dim} doesn't "
                f"match data dimension {data.dim}"
            )

    def drift_values(self, pos):
        if self.pow is None:
            return _eval_drifts(self.drift_functions, pos)
        return np.prod(
            pos.T[np.newaxis, :, :] ** self.pow[:, np.newaxis, :], axis=2
        )

    def scale(self, alpha):
        if self.pow is None:
            return Universal(
                self.func.scale(alpha), drifts=self.drift_functions
            )
        return Universal(self.func.scale(alpha), self.degree, self.dim)


class ExternalDrift(_DriftKriging):
    """
    External drift kriging.

    External drift kriging is used to interpolate data with a mean given
    by smooth external drift functions. The drift functions are used in
    the given order.

    Notes
    -----
    * Include a constant drift (e.g. ``lambda *x: 1.0``) for unbiased
      estimation; :any:`Ordinary` kriging is recovered with it alone.
    * Kriging systems with external drift are often unstable.
    * For a polynomial mean, see :any:`Universal`.

    Parameters
    ----------
    func : :any:`GeoStatsFunction`
        Geostatistical function.
    drifts : :class:`list` of :any:`callable`
        Drift functions. Should have the signature f(x, [y, z, ...])
        and accept arrays of positions.
    """

    def __init__(self, func, drifts):
        super().__init__(func)
        self.drift_functions = _check_drifts(drifts, "ExternalDrift")

    @property
    def drift_no(self):
        return len(self.drift_functions)

    def drift_values(self, pos):
        return _eval_drifts(self.drift_functions, pos)

    def scale(self, alpha):
        return ExternalDrift(self.func.scale(alpha), self.drift_functions)


def _check_drifts(drifts, name):
    if callable(drifts):
        drifts = [drifts]
    drifts = list(drifts)
    if not drifts:
        raise ValueError(f"{name}: at least one drift function is required")
    for f in drifts:
        if not callable(f):
            raise TypeError(f"{name}: drift functions must be callable")
    return drifts


def powermatrix(degree, dim):
    """
    Exponents of the monomial basis of a polynomial drift.

    All exponent tuples of total degree 0 to `degree` in `dim` dimensions
    (multinomial expansion), sorted by descending maximal single
    coordinate exponent.

    Parameters
    ----------
    degree : :class:`int`
        polynomial degree (>= 0)
    dim : :class:`int`
        spatial dimension (> 0)

    Returns
    -------
    :class:`numpy.ndarray`
        exponents with shape (number of terms, dim)

    Examples
    --------
    >>> powermatrix(1, 2).tolist()
    [[1, 0], [0, 1], [0, 0]]
    """
    if degree < 0:
        raise ValueError(f"degree must be non-negative, got {degree}")
    if dim <= 0:
        raise ValueError(f"dimension must be positive, got {dim}")
    terms = [
        np.bincount(np.array(combo, dtype=int), minlength=dim)
        for deg in range(degree + 1)
        for combo in combinations_with_replacement(range(dim), deg)
    ]
    # stable sort for better conditioned kriging matrices
    order = sorted(range(len(terms)), key=lambda i: -terms[i].max())
    return np.array([terms[i] for i in order], dtype=int)


def Kriging(func, *args):
    """
    Kriging method selected by the given arguments.

    * ``Kriging(func)``: :any:`Ordinary` kriging
    * ``Kriging(func, mean)``: :any:`Simple` kriging with the given mean
      (a number or a vector of numbers)
    * ``Kriging(func, degree, dim)``: :any:`Universal` kriging with a
      polynomial drift
    * ``Kriging(func, drifts)``: :any:`ExternalDrift` kriging with a list
      of drift functions

    Parameters
    ----------
    func : :any:`GeoStatsFunction`
        Geostatistical function.
    *args
        method specific arguments

    Returns
    -------
    :any:`KrigingModel`
    """
    if not args:
        return Ordinary(func)
    if len(args) == 2:
        return Universal(func, *args)
    if len(args) == 1:
        arg = args[0]
        if callable(arg):
            return ExternalDrift(func, [arg])
        if isinstance(arg, (list, tuple)) and arg and all(map(callable, arg)):
            return ExternalDrift(func, arg)
        return Simple(func, arg)
    raise TypeError(f"Kriging: takes at most 3 arguments, got {len(args) + 1}")
