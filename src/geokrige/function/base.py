"""
GeoKrige subpackage providing the base class of geostatistical functions.

.. currentmodule:: geokrige.function.base

The following classes are provided

.. autosummary::
   GeoStatsFunction
   ScaledFunction
"""

from abc import ABC, abstractmethod

import numpy as np

from geokrige.geometry import Points, as_support

__all__ = ["GeoStatsFunction", "ScaledFunction"]


class GeoStatsFunction(ABC):
    """
    Abstract base class for spatial correlation functions used in kriging.

    A geostatistical function gives the correlation (covariance-like) or
    the dissimilarity (variogram-like) of `nvar` co-located variables
    between two geometries as a `nvar` x `nvar` matrix.

    Parameters
    ----------
    dim : :class:`int`
        spatial dimension of the positions
    nvar : :class:`int`, optional
        number of co-located variables (multivariate arity). Default: 1

    Notes
    -----
    Subclasses must implement:
        - :any:`evaluate`: point values between two position arrays
        - :any:`is_stationary`, :any:`is_banded` and :any:`sill`

    Extended geometries (see :any:`Block`) are handled by averaging the
    point values over their discretization (change of support).
    """

    def __init__(self, dim, nvar=1):
        self.dim = int(dim)
        self.nvar = int(nvar)
        if self.dim < 1:
            raise ValueError(f"dim must be positive, got {self.dim}")
        if self.nvar < 1:
            raise ValueError(f"nvar must be positive, got {self.nvar}")

    @property
    @abstractmethod
    def is_stationary(self):
        """:class:`bool`: whether the function only depends on the lag."""

    @property
    @abstractmethod
    def is_banded(self):
        """
        :class:`bool`: whether the function is similarity-like.

        Covariances and transiograms are banded (maximal at zero lag),
        variograms are not.
        """

    @property
    def is_symmetric(self):
        """:class:`bool`: whether the produced kriging matrix is symmetric."""
        return True

    @property
    def may_be_rank_deficient(self):
        """:class:`bool`: whether kriging matrices can be rank deficient."""
        return False

    @property
    @abstractmethod
    def sill(self):
        """
        :class:`numpy.ndarray` or :any:`None`: sill matrix (nvar, nvar).

        `None` for non-stationary functions.
        """

    @abstractmethod
    def evaluate(self, pos1, pos2):
        """
        Point values between two sets of positions.

        Parameters
        ----------
        pos1 : :class:`numpy.ndarray`
            positions with shape (dim, n1)
        pos2 : :class:`numpy.ndarray`
            positions with shape (dim, n2)

        Returns
        -------
        :class:`numpy.ndarray`
            values with shape (nvar, nvar, n1, n2)
        """

    def scale(self, alpha):
        """
        Function with the sill scaled by a positive factor.

        Parameters
        ----------
        alpha : :class:`float`
            positive scaling factor

        Returns
        -------
        :any:`GeoStatsFunction`
        """
        return ScaledFunction(self, alpha)

    def _pos(self, domain):
        pos = domain.pos if isinstance(domain, Points) else np.asarray(domain)
        if pos.shape[0] != self.dim:
            raise ValueError(
                f"{type(self).__name__}: position dimension {pos.shape[0]} "
                f"doesn't match function dimension {self.dim}"
            )
        return pos

    def __call__(self, geom1, geom2):
        """
        Value between two geometries.

        Returns
        -------
        :class:`float` or :class:`numpy.ndarray`
            scalar for univariate functions, (nvar, nvar) matrix otherwise
        """
        pos1 = as_support(geom1, self.dim)
        pos2 = as_support(geom2, self.dim)
        val = self.evaluate(pos1, pos2).mean(axis=(2, 3))
        return val[0, 0] if self.nvar == 1 else val

    def self_value(self, geometry):
        """(nvar, nvar) value of a geometry with itself (support average)."""
        pos = as_support(geometry, self.dim)
        return self.evaluate(pos, pos).mean(axis=(2, 3))

    def pairwise(self, domain, out=None):
        """
        Pairwise evaluation over a point domain.

        Parameters
        ----------
        domain : :any:`Points` or :class:`numpy.ndarray`
            sample positions with shape (dim, n)
        out : :class:`numpy.ndarray`, optional
            (n * nvar, n * nvar) array to write into

        Returns
        -------
        :class:`numpy.ndarray`
            matrix where block (i, j) is the (nvar, nvar) value between
            the samples i and j
        """
        pos = self._pos(domain)
        num = pos.shape[1] * self.nvar
        val = self.evaluate(pos, pos).transpose(2, 0, 3, 1).reshape(num, num)
        if out is None:
            return val
        out[...] = val
        return out

    def to_target(self, domain, geometry, out=None):
        """
        Evaluation of a point domain against a single geometry.

        Parameters
        ----------
        domain : :any:`Points` or :class:`numpy.ndarray`
            sample positions with shape (dim, n)
        geometry : :class:`list` or :any:`Block`
            target geometry
        out : :class:`numpy.ndarray`, optional
            (n * nvar, nvar) array to write into

        Returns
        -------
        :class:`numpy.ndarray`
            matrix where rows [i * nvar, (i+1) * nvar) hold the value
            between sample i and the target
        """
        pos = self._pos(domain)
        target = as_support(geometry, self.dim)
        num = pos.shape[1] * self.nvar
        val = self.evaluate(pos, target).mean(axis=3)
        val = val.transpose(2, 0, 1).reshape(num, self.nvar)
        if out is None:
            return val
        out[...] = val
        return out

    def __repr__(self):
        return f"{type(self).__name__}(dim={self.dim}, nvar={self.nvar})"


class ScaledFunction(GeoStatsFunction):
    """
    A geostatistical function multiplied by a positive factor.

    Parameters
    ----------
    func : :any:`GeoStatsFunction`
        the function to scale
    alpha : :class:`float`
        positive scaling factor
    """

    def __init__(self, func, alpha):
        alpha = float(alpha)
        if alpha <= 0:
            raise ValueError(f"scaling factor must be positive, got {alpha}")
        super().__init__(dim=func.dim, nvar=func.nvar)
        self.func = func
        self.alpha = alpha

    @property
    def is_stationary(self):
        return self.func.is_stationary

    @property
    def is_banded(self):
        return self.func.is_banded

    @property
    def is_symmetric(self):
        return self.func.is_symmetric

    @property
    def may_be_rank_deficient(self):
        return self.func.may_be_rank_deficient

    @property
    def sill(self):
        sill = self.func.sill
        return None if sill is None else self.alpha * sill

    def evaluate(self, pos1, pos2):
        return self.alpha * self.func.evaluate(pos1, pos2)

    def scale(self, alpha):
        return ScaledFunction(self.func, self.alpha * alpha)

    def __repr__(self):
        return f"{self.alpha} * {self.func!r}"
