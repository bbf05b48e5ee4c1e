"""
GeoKrige subpackage providing variogram and covariance functions.

.. currentmodule:: geokrige.function.models

Stationary functions wrap a :any:`gstools.CovModel` (e.g.
:any:`gstools.Spherical`) which defines the spatial structure.
A coregionalization matrix turns them into multivariate functions.

The following classes are provided

.. autosummary::
   Variogram
   Covariance
   PowerVariogram
"""

from abc import abstractmethod

import numpy as np
from gstools import CovModel
from scipy.spatial.distance import cdist

from geokrige.function.base import GeoStatsFunction

__all__ = ["Variogram", "Covariance", "PowerVariogram"]


def _coreg_matrix(coreg):
    """Validate a coregionalization matrix."""
    coreg = np.atleast_2d(np.asarray(coreg, dtype=np.double))
    if coreg.ndim != 2 or coreg.shape[0] != coreg.shape[1]:
        raise ValueError(
            f"coregionalization matrix must be square, got shape {coreg.shape}"
        )
    if not np.allclose(coreg, coreg.T):
        raise ValueError("coregionalization matrix must be symmetric")
    if np.any(np.diag(coreg) <= 0):
        raise ValueError("coregionalization matrix needs a positive diagonal")
    return coreg


class _CovModelFunction(GeoStatsFunction):
    """
    Stationary function based on a gstools covariance model.

    Distances are taken in the isotropic space of the model, so anisotropy
    and rotation are honoured. For `latlon` models the positions are
    (lat, lon) in degrees and the distance is the chordal distance on the
    sphere with radius `geo_scale` (Yadrenko model).

    Parameters
    ----------
    model : :any:`gstools.CovModel`
        Covariance model defining the spatial structure.
    coreg : :class:`numpy.ndarray`, optional
        Symmetric (nvar, nvar) coregionalization matrix scaling the model
        for each pair of variables. Default: [[1]]
    """

    # numpy arrays defer to __rmul__
    __array_ufunc__ = None

    def __init__(self, model, coreg=None):
        if not isinstance(model, CovModel):
            raise TypeError(
                f"model must be a gstools CovModel instance, got {type(model)}"
            )
        self.model = model
        self.coreg = _coreg_matrix(1.0 if coreg is None else coreg)
        super().__init__(dim=model.field_dim, nvar=self.coreg.shape[0])

    @property
    def is_stationary(self):
        return True

    @property
    def sill(self):
        return self.coreg * self.model.sill

    def _dists(self, pos1, pos2):
        """Distances in the isotropic space of the model."""
        iso1 = self.model.isometrize(pos1)
        iso2 = self.model.isometrize(pos2)
        return cdist(iso1.T, iso2.T)

    @abstractmethod
    def _values(self, dists):
        """Values of the model at isotropic distances."""

    def evaluate(self, pos1, pos2):
        val = self._values(self._dists(pos1, pos2))
        return self.coreg[:, :, np.newaxis, np.newaxis] * val

    def scale(self, alpha):
        alpha = float(alpha)
        if alpha <= 0:
            raise ValueError(f"scaling factor must be positive, got {alpha}")
        return type(self)(self.model, alpha * self.coreg)

    def __rmul__(self, coreg):
        """Multivariate function from a coregionalization matrix."""
        return type(self)(self.model, np.asarray(coreg) * self.coreg)

    def __repr__(self):
        return f"{type(self).__name__}({self.model!r})"


class Variogram(_CovModelFunction):
    """
    Stationary variogram of a gstools covariance model.

    The value at lag :math:`h` is :math:`S \\cdot \\gamma(h)` with the
    coregionalization matrix :math:`S` and the model variogram
    :math:`\\gamma`, which is zero at zero lag and includes the nugget
    otherwise.

    Parameters
    ----------
    model : :any:`gstools.CovModel`
        Covariance model defining the spatial structure.
    coreg : :class:`numpy.ndarray`, optional
        Symmetric (nvar, nvar) coregionalization matrix. Default: [[1]]

    Examples
    --------
    >>> import gstools as gs
    >>> gamma = Variogram(gs.Spherical(dim=2, len_scale=35.0))
    >>> float(gamma([25.0, 25.0], [50.0, 75.0]))
    1.0
    """

    @property
    def is_banded(self):
        return False

    def _values(self, dists):
        return self.model.vario_nugget(dists)


class Covariance(_CovModelFunction):
    """
    Stationary covariance of a gstools covariance model.

    The value at lag :math:`h` is :math:`S \\cdot C(h)` with the
    coregionalization matrix :math:`S` and the model covariance
    :math:`C`, which includes the nugget at zero lag.

    Parameters
    ----------
    model : :any:`gstools.CovModel`
        Covariance model defining the spatial structure.
    coreg : :class:`numpy.ndarray`, optional
        Symmetric (nvar, nvar) coregionalization matrix. Default: [[1]]
    """

    @property
    def is_banded(self):
        return True

    def _values(self, dists):
        return self.model.cov_nugget(dists)


class PowerVariogram(GeoStatsFunction):
    """
    Non-stationary power variogram.

    .. math::
       \\gamma(h) = n + s \\cdot h^{a} \\quad (h > 0), \\qquad \\gamma(0) = 0

    Parameters
    ----------
    dim : :class:`int`
        spatial dimension
    scaling : :class:`float`, optional
        scaling :math:`s` of the power law. Default: 1.0
    exponent : :class:`float`, optional
        exponent :math:`a` in (0, 2). Default: 1.0
    nugget : :class:`float`, optional
        nugget :math:`n`. Default: 0.0
    coreg : :class:`numpy.ndarray`, optional
        Symmetric (nvar, nvar) coregionalization matrix. Default: [[1]]
    """

    def __init__(self, dim, scaling=1.0, exponent=1.0, nugget=0.0, coreg=None):
        self.scaling = float(scaling)
        self.exponent = float(exponent)
        self.nugget = float(nugget)
        if self.scaling <= 0:
            raise ValueError(f"scaling must be positive, got {self.scaling}")
        if not 0 < self.exponent < 2:
            raise ValueError(
                f"exponent must be in (0, 2), got {self.exponent}"
            )
        if self.nugget < 0:
            raise ValueError(f"nugget must be non-negative, got {self.nugget}")
        self.coreg = _coreg_matrix(1.0 if coreg is None else coreg)
        super().__init__(dim=dim, nvar=self.coreg.shape[0])

    @property
    def is_stationary(self):
        return False

    @property
    def is_banded(self):
        return False

    @property
    def sill(self):
        return None

    def evaluate(self, pos1, pos2):
        dists = cdist(pos1.T, pos2.T)
        val = np.where(
            np.isclose(dists, 0),
            0.0,
            self.nugget + self.scaling * dists**self.exponent,
        )
        return self.coreg[:, :, np.newaxis, np.newaxis] * val

    def scale(self, alpha):
        alpha = float(alpha)
        if alpha <= 0:
            raise ValueError(f"scaling factor must be positive, got {alpha}")
        return PowerVariogram(
            self.dim,
            scaling=alpha * self.scaling,
            exponent=self.exponent,
            nugget=alpha * self.nugget,
            coreg=self.coreg,
        )

    def __repr__(self):
        return (
            f"PowerVariogram(dim={self.dim}, scaling={self.scaling}, "
            f"exponent={self.exponent}, nugget={self.nugget})"
        )
