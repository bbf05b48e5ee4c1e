"""
GeoKrige subpackage providing transiograms.

.. currentmodule:: geokrige.function.transiogram

Transiograms give transition probabilities between categories as a
function of the lag. Used as geostatistical function for cokriging of
indicator variables, they lead to non-symmetric and possibly rank
deficient kriging matrices.

The following classes are provided

.. autosummary::
   MatrixExponentialTransiogram
"""

import numpy as np
from scipy.linalg import expm, null_space
from scipy.spatial.distance import cdist

from geokrige.function.base import GeoStatsFunction

__all__ = ["MatrixExponentialTransiogram"]


class MatrixExponentialTransiogram(GeoStatsFunction):
    """
    Continuous-lag Markov chain transiogram.

    .. math::
       T(h) = \\exp(Q \\cdot h)

    with the transition rate matrix

    .. math::
       Q_{ii} = -\\frac{1}{l_i}, \\qquad
       Q_{ij} = \\frac{1}{l_i} \\cdot \\frac{p_j}{1 - p_i} \\quad (i \\neq j)

    built from the mean lengths :math:`l_i` and the proportions
    :math:`p_i` of the categories. :math:`T(0)` is the identity and
    every row of :math:`T(h)` tends to the stationary distribution of the
    chain, which is the sill.

    Parameters
    ----------
    lengths : :class:`list`
        mean lengths of the categories
    proportions : :class:`list`
        relative proportions of the categories (normalized to sum up to 1)
    dim : :class:`int`, optional
        spatial dimension. Default: 2
    """

    def __init__(self, lengths, proportions, dim=2):
        lengths = np.asarray(lengths, dtype=np.double)
        proportions = np.asarray(proportions, dtype=np.double)
        if lengths.ndim != 1 or lengths.shape != proportions.shape:
            raise ValueError(
                "lengths and proportions need to be 1D with the same length"
            )
        if len(lengths) < 2:
            raise ValueError("a transiogram needs at least two categories")
        if np.any(lengths <= 0):
            raise ValueError("lengths must be positive")
        if np.any(proportions <= 0):
            raise ValueError("proportions must be positive")
        super().__init__(dim=dim, nvar=len(lengths))
        self.lengths = lengths
        self.proportions = proportions / np.sum(proportions)
        self.rate = self._rate_matrix()
        self.stationary = self._stationary()

    def _rate_matrix(self):
        p = self.proportions
        rate = p[np.newaxis, :] / (1.0 - p[:, np.newaxis])
        rate /= self.lengths[:, np.newaxis]
        rate[np.diag_indices_from(rate)] = -1.0 / self.lengths
        return rate

    def _stationary(self):
        """Stationary distribution of the chain (left null vector of Q)."""
        vec = null_space(self.rate.T)[:, 0]
        return vec / np.sum(vec)

    @property
    def is_stationary(self):
        return True

    @property
    def is_banded(self):
        return True

    @property
    def is_symmetric(self):
        return False

    @property
    def may_be_rank_deficient(self):
        return True

    @property
    def sill(self):
        return np.tile(self.stationary, (self.nvar, 1))

    def evaluate(self, pos1, pos2):
        dists = cdist(pos1.T, pos2.T)
        lags, inverse = np.unique(dists, return_inverse=True)
        mats = expm(lags[:, np.newaxis, np.newaxis] * self.rate)
        val = mats[inverse.ravel()].reshape(dists.shape + (self.nvar,) * 2)
        return val.transpose(2, 3, 0, 1)

    def __repr__(self):
        return (
            f"MatrixExponentialTransiogram(lengths={self.lengths.tolist()}, "
            f"proportions={self.proportions.tolist()})"
        )
