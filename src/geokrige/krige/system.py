"""
GeoKrige subpackage providing the kriging linear system.

.. currentmodule:: geokrige.krige.system

The kriging matrix has the block structure::

    ┌──────────────────────┬────────────────┐
    │ F(uᵢ, uⱼ)            │ constraints    │  nobs * nvar rows
    ├──────────────────────┼────────────────┤
    │ constraintsᵀ         │ 0              │  nconstraints rows
    └──────────────────────┴────────────────┘

where block (i, j) of the main part is the (nvar, nvar) value of the
geostatistical function between the samples i and j. Stationary variograms
are converted to covariances (``sill - F``), so the system is solved in
covariance form whenever possible.

The following classes and functions are provided

.. autosummary::
   KrigingSystem
   Factorization
   LDLFactorization
   SVDFactorization
   LUFactorization
   factorize
"""

import logging
import warnings
from abc import ABC, abstractmethod

import numpy as np
from scipy.linalg import (
    LinAlgWarning,
    get_lapack_funcs,
    lu_factor,
    lu_solve,
    svd,
)

__all__ = [
    "KrigingSystem",
    "Factorization",
    "LDLFactorization",
    "SVDFactorization",
    "LUFactorization",
    "factorize",
    "converts_to_covariance",
    "in_covariance_form",
]

logger = logging.getLogger(__name__)


def converts_to_covariance(func):
    """Whether a function is a stationary variogram (``sill - F``)."""
    return func.is_stationary and not func.is_banded


def in_covariance_form(func):
    """Whether the kriging system of a function is in covariance form."""
    return func.is_banded or converts_to_covariance(func)


class Factorization(ABC):
    """
    Abstract base class for factorized kriging matrices.

    Attributes
    ----------
    method : :class:`str`
        name of the factorization
    success : :class:`bool`
        whether the factorization succeeded
    """

    method = None

    def __init__(self):
        self.success = False

    @abstractmethod
    def solve(self, rhs):
        """
        Solve the factorized system.

        Parameters
        ----------
        rhs : :class:`numpy.ndarray`
            right hand side with shape (n, k)

        Returns
        -------
        :class:`numpy.ndarray`
            solution with shape (n, k)
        """

    def __repr__(self):
        return f"{type(self).__name__}(success={self.success})"


class LDLFactorization(Factorization):
    """
    Symmetric indefinite (Bunch-Kaufman) factorization.

    :math:`A = L D L^T` with a permuted unit lower triangular :math:`L` and
    a block diagonal :math:`D` of 1x1 and 2x2 pivots, computed and solved by
    the LAPACK routines ``?sytrf`` and ``?sytrs``. The factorization is
    reported unsuccessful if a pivot block is exactly singular.

    Parameters
    ----------
    mat : :class:`numpy.ndarray`
        symmetric kriging matrix
    check_finite : :class:`bool`, optional
        Whether to check the matrix for infinite or NaN entries.
        Default: True
    """

    method = "ldl"

    def __init__(self, mat, check_finite=True):
        super().__init__()
        if check_finite:
            mat = np.asarray_chkfinite(mat, dtype=np.double)
        else:
            mat = np.asarray(mat, dtype=np.double)
        sytrf, sytrf_lwork, self._sytrs = get_lapack_funcs(
            ("sytrf", "sytrf_lwork", "sytrs"), (mat,)
        )
        work, _ = sytrf_lwork(mat.shape[0], lower=1)
        self._ldu, self._ipiv, info = sytrf(
            mat, lower=1, lwork=max(1, int(work))
        )
        if info < 0:
            raise ValueError(
                f"LDLFactorization: illegal value in argument {-info} "
                "of the LAPACK factorization"
            )
        self.success = info == 0

    def solve(self, rhs):
        rhs = np.asarray(rhs, dtype=np.double)
        vec = rhs.ndim == 1
        x, info = self._sytrs(
            self._ldu, self._ipiv, rhs.reshape(rhs.shape[0], -1), lower=1
        )
        if info < 0:
            raise ValueError(
                f"LDLFactorization: illegal value in argument {-info} "
                "of the LAPACK solver"
            )
        return x.ravel() if vec else x


class SVDFactorization(Factorization):
    """
    Singular value decomposition, solving with the pseudo-inverse.

    Singular values below ``rcond * max(s)`` are discarded, so rank
    deficient matrices are handled gracefully. Always successful.

    Parameters
    ----------
    mat : :class:`numpy.ndarray`
        kriging matrix
    rcond : :class:`float`, optional
        relative cut-off for small singular values.
        Default: machine precision times the matrix size
    check_finite : :class:`bool`, optional
        Whether to check the matrix for infinite or NaN entries.
        Default: True
    """

    method = "svd"

    def __init__(self, mat, rcond=None, check_finite=True):
        super().__init__()
        u, s, vt = svd(mat, check_finite=check_finite)
        if rcond is None:
            rcond = max(mat.shape) * np.finfo(np.double).eps
        cutoff = rcond * (s[0] if len(s) else 0.0)
        large = s > cutoff
        self._u = u
        self._vt = vt
        self._sinv = np.zeros_like(s)
        self._sinv[large] = 1.0 / s[large]
        self.rank = int(np.count_nonzero(large))
        self.success = True

    def solve(self, rhs):
        rhs = np.asarray(rhs, dtype=np.double)
        if rhs.ndim == 1:
            return self._vt.T @ (self._sinv * (self._u.T @ rhs))
        return self._vt.T @ (self._sinv[:, np.newaxis] * (self._u.T @ rhs))


class LUFactorization(Factorization):
    """
    LU factorization with partial pivoting.

    Reported unsuccessful if a diagonal entry of U is exactly zero.

    Parameters
    ----------
    mat : :class:`numpy.ndarray`
        kriging matrix
    check_finite : :class:`bool`, optional
        Whether to check the matrix for infinite or NaN entries.
        Default: True
    """

    method = "lu"

    def __init__(self, mat, check_finite=True):
        super().__init__()
        with warnings.catch_warnings():
            # singularity is reported by the success flag
            warnings.simplefilter("ignore", LinAlgWarning)
            self._lu_piv = lu_factor(mat, check_finite=check_finite)
        self.success = bool(np.all(np.diag(self._lu_piv[0]) != 0))

    def solve(self, rhs):
        return lu_solve(self._lu_piv, rhs, check_finite=False)


def factorize(mat, func, config):
    """
    Factorize a kriging matrix.

    With ``config.factorization == "auto"`` the method is chosen from the
    geostatistical function: symmetric functions give symmetric matrices
    (Bunch-Kaufman), possibly rank deficient ones (e.g. transiograms) are
    decomposed by SVD, everything else by LU.

    Parameters
    ----------
    mat : :class:`numpy.ndarray`
        kriging matrix
    func : :any:`GeoStatsFunction`
        the geostatistical function the matrix was built from
    config : :any:`SolverConfig`
        solver configuration

    Returns
    -------
    :any:`Factorization`
    """
    method = config.factorization
    if method == "auto":
        if func.is_symmetric:
            method = "ldl"
        elif func.may_be_rank_deficient:
            method = "svd"
        else:
            method = "lu"
    if method == "ldl":
        fact = LDLFactorization(mat, check_finite=config.check_finite)
    elif method == "svd":
        fact = SVDFactorization(
            mat, rcond=config.svd_rcond, check_finite=config.check_finite
        )
    elif method == "lu":
        fact = LUFactorization(mat, check_finite=config.check_finite)
    else:
        raise ValueError(f"Unknown factorization: {method}")
    logger.debug("factorized matrix of size %d by %s", len(mat), method)
    if not fact.success:
        logger.warning(
            "%s factorization of the kriging matrix was not successful",
            method,
        )
    return fact


class KrigingSystem:
    """
    Storage of a kriging linear system with fixed capacity.

    Memory is allocated for `capacity` samples; the active system for
    `nobs` <= `capacity` samples is a leading sub-view of the buffers.

    Parameters
    ----------
    capacity : :class:`int`
        maximal number of samples
    nvar : :class:`int`
        number of variables
    ncon : :class:`int`
        number of constraints
    """

    def __init__(self, capacity, nvar, ncon):
        self.capacity = int(capacity)
        self.nvar = int(nvar)
        self.ncon = int(ncon)
        size = self.capacity * self.nvar + self.ncon
        self._lhs = np.zeros((size, size), dtype=np.double)
        self._rhs = np.zeros((size, self.nvar), dtype=np.double)
        self.nobs = 0
        self.missing = np.zeros(0, dtype=int)

    @property
    def nfun(self):
        """:class:`int`: number of function rows (nobs * nvar)."""
        return self.nobs * self.nvar

    @property
    def nrow(self):
        """:class:`int`: size of the active system."""
        return self.nfun + self.ncon

    @property
    def lhs(self):
        """:class:`numpy.ndarray`: active kriging matrix."""
        return self._lhs[: self.nrow, : self.nrow]

    @property
    def rhs(self):
        """:class:`numpy.ndarray`: active right hand side buffer."""
        return self._rhs[: self.nrow]

    def assemble(self, model, data):
        """
        Fill the kriging matrix for the given model and samples.

        Parameters
        ----------
        model : :any:`KrigingModel`
            the kriging model
        data : :any:`SampleData`
            the samples

        Returns
        -------
        :class:`numpy.ndarray`
            the active kriging matrix
        """
        if data.nrow > self.capacity:
            raise ValueError(
                f"KrigingSystem: {data.nrow} samples exceed the "
                f"capacity of {self.capacity} samples"
            )
        func = model.func
        self.nobs = data.nrow
        nfun = self.nfun
        lhs = self.lhs
        # main block with pairwise evaluation
        func.pairwise(data.domain, out=lhs[:nfun, :nfun])
        if converts_to_covariance(func):
            lhs[:nfun, :nfun] = np.tile(func.sill, (self.nobs, self.nobs)) - (
                lhs[:nfun, :nfun]
            )
        # constraint blocks
        model.set_constraints_lhs(lhs, self.nvar, data.domain)
        if not np.all(np.isfinite(lhs[nfun:])):
            raise ValueError(
                f"{type(model).__name__}: drift functions need to give "
                "finite values at all sample positions"
            )
        # knock out missing entries
        self.missing = np.flatnonzero(data.missing.ravel())
        if len(self.missing):
            logger.debug("knocking out %d missing entries", len(self.missing))
            lhs[self.missing, :] = 0.0
            lhs[:, self.missing] = 0.0
            lhs[self.missing, self.missing] = 1.0
        return lhs

    def new_rhs(self):
        """Allocate a right hand side buffer matching the active system."""
        return np.zeros((self.nrow, self.nvar), dtype=np.double)

    def __repr__(self):
        return (
            f"KrigingSystem(nobs={self.nobs}, capacity={self.capacity}, "
            f"nvar={self.nvar}, ncon={self.ncon})"
        )
