"""
GeoKrige subpackage providing the geometries kriging operates on.

.. currentmodule:: geokrige.geometry

Samples live on point sets, prediction targets can be points or
extended geometries (blocks). Extended geometries are represented by a
regular discretization of their support.

.. autosummary::
   Points
   Block
   as_support
   centroid
"""

import numpy as np

__all__ = ["Points", "Block", "as_support", "centroid"]


def _as_pos(pos):
    """Convert a position tuple (x, [y, z]) to a (dim, n) float array."""
    if isinstance(pos, Points):
        return pos.pos
    pos = np.asarray(pos, dtype=np.double)
    if pos.ndim == 0:
        pos = pos.reshape(1, 1)
    elif pos.ndim == 1:
        pos = pos.reshape(1, -1)
    elif pos.ndim > 2:
        raise ValueError(
            f"positions must be given as (x, [y, z]), got shape {pos.shape}"
        )
    return pos


class Points:
    """
    A set of points, the domain of a sample dataset.

    Parameters
    ----------
    pos : :class:`list` or :class:`numpy.ndarray`
        tuple, containing the point positions (x, [y, z])
    """

    def __init__(self, pos):
        self._pos = _as_pos(pos)
        if self._pos.shape[1] < 1:
            raise ValueError("Points: at least one point is required")

    @property
    def pos(self):
        """:class:`numpy.ndarray`: positions with shape (dim, n)."""
        return self._pos

    @property
    def dim(self):
        """:class:`int`: spatial dimension."""
        return self._pos.shape[0]

    def __len__(self):
        return self._pos.shape[1]

    def __getitem__(self, index):
        if isinstance(index, slice):
            return Points(self._pos[:, index])
        return self._pos[:, index].copy()

    def __iter__(self):
        for i in range(len(self)):
            yield self[i]

    def centroid(self, index):
        """Centroid of the point at `index`."""
        return self[index]

    def translate(self, shift):
        """Return the point set shifted by the vector `shift`."""
        shift = np.asarray(shift, dtype=np.double).reshape(self.dim, 1)
        return Points(self._pos + shift)

    def __repr__(self):
        return f"Points(dim={self.dim}, n={len(self)})"


class Block:
    """
    An axis aligned box used as extended prediction support.

    Averages of geostatistical functions over the block are approximated
    on a regular grid of cell centres.

    Parameters
    ----------
    lower : :class:`list`
        lower corner of the block
    upper : :class:`list`
        upper corner of the block
    shape : :class:`int` or :class:`list`, optional
        number of discretization cells per axis. Default: 3
    """

    def __init__(self, lower, upper, shape=3):
        self.lower = np.atleast_1d(np.asarray(lower, dtype=np.double))
        self.upper = np.atleast_1d(np.asarray(upper, dtype=np.double))
        if self.lower.shape != self.upper.shape or self.lower.ndim != 1:
            raise ValueError("Block: lower and upper need the same length")
        if np.any(self.upper <= self.lower):
            raise ValueError("Block: upper corner must exceed lower corner")
        shape = np.broadcast_to(np.asarray(shape, dtype=int), self.lower.shape)
        if np.any(shape < 1):
            raise ValueError("Block: discretization shape must be positive")
        self.shape = tuple(int(s) for s in shape)

    @property
    def dim(self):
        """:class:`int`: spatial dimension."""
        return len(self.lower)

    @property
    def centroid(self):
        """:class:`numpy.ndarray`: centre of the block."""
        return 0.5 * (self.lower + self.upper)

    @property
    def measure(self):
        """:class:`float`: length, area or volume of the block."""
        return float(np.prod(self.upper - self.lower))

    def discretize(self):
        """
        Cell centres of the discretization grid.

        Returns
        -------
        :class:`numpy.ndarray`
            positions with shape (dim, prod(shape))
        """
        axes = [
            lo + (np.arange(n) + 0.5) * (up - lo) / n
            for lo, up, n in zip(self.lower, self.upper, self.shape)
        ]
        grid = np.meshgrid(*axes, indexing="ij")
        return np.array([g.ravel() for g in grid])

    def translate(self, shift):
        """Return the block shifted by the vector `shift`."""
        shift = np.asarray(shift, dtype=np.double)
        return Block(self.lower + shift, self.upper + shift, self.shape)

    def __repr__(self):
        return (
            f"Block(lower={self.lower.tolist()}, "
            f"upper={self.upper.tolist()}, shape={self.shape})"
        )


def as_support(geometry, dim):
    """
    Positions representing the support of a geometry.

    Parameters
    ----------
    geometry : :class:`list`, :any:`Block` or :any:`Points`
        a single point (x, [y, z]), a block or a point set
    dim : :class:`int`
        expected spatial dimension

    Returns
    -------
    :class:`numpy.ndarray`
        positions with shape (dim, m), m = 1 for a point
    """
    if isinstance(geometry, Block):
        pos = geometry.discretize()
    elif isinstance(geometry, Points):
        pos = geometry.pos
    else:
        pos = np.asarray(geometry, dtype=np.double).reshape(-1, 1)
    if pos.shape[0] != dim:
        raise ValueError(
            f"geometry dimension {pos.shape[0]} doesn't match dimension {dim}"
        )
    return pos


def centroid(geometry):
    """Centroid of a point, block or point set as 1D array."""
    if isinstance(geometry, Block):
        return geometry.centroid
    if isinstance(geometry, Points):
        return geometry.pos.mean(axis=1)
    return np.atleast_1d(np.asarray(geometry, dtype=np.double)).ravel()
