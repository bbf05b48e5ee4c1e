"""
GeoKrige subpackage providing sample datasets.

.. currentmodule:: geokrige.data

The following classes are provided

.. autosummary::
   SampleData
"""

import numpy as np

from geokrige.geometry import Points

__all__ = ["SampleData"]


def _as_column(values, name):
    """Convert a data column to float, mapping None to NaN."""
    try:
        col = np.asarray(values, dtype=np.double)
    except (TypeError, ValueError):
        values = list(values)
        shape = next((np.shape(v) for v in values if v is not None), ())
        col = np.array(
            [np.full(shape, np.nan) if v is None else v for v in values],
            dtype=np.double,
        )
    if col.ndim == 0:
        raise ValueError(
            f"SampleData: column '{name}' needs one value per sample, "
            "got a scalar"
        )
    return col


class SampleData:
    """
    Sparse geospatial samples: point positions with attached variables.

    Parameters
    ----------
    pos : :class:`list` or :any:`Points`
        tuple, containing the sample positions (x, [y, z])
    values : :class:`dict`
        mapping of variable names to the sample values, one value per
        sample. Values may be vectors (e.g. compositions) with the same
        shape for all variables. `None` and `nan` mark missing values.
    projection : :any:`callable`, optional
        Re-projection of prediction geometries into the coordinate
        system of the samples. Called with the geometry, returns the
        projected geometry. Default: None (identity)
    """

    def __init__(self, pos, values, projection=None):
        self._domain = pos if isinstance(pos, Points) else Points(pos)
        if not values:
            raise ValueError("SampleData: at least one variable is required")
        self._names = tuple(str(name) for name in values)
        self._columns = {
            str(name): _as_column(col, name) for name, col in values.items()
        }
        for name, col in self._columns.items():
            if len(col) != len(self._domain):
                raise ValueError(
                    f"SampleData: column '{name}' has {len(col)} values, "
                    f"but there are {len(self._domain)} positions"
                )
        shapes = {col.shape[1:] for col in self._columns.values()}
        if len(shapes) > 1:
            raise ValueError(
                "SampleData: all variables need the same value shape, "
                f"got {sorted(shapes)}"
            )
        self.projection = projection

    @property
    def domain(self):
        """:any:`Points`: positions of the samples."""
        return self._domain

    @property
    def dim(self):
        """:class:`int`: spatial dimension."""
        return self._domain.dim

    @property
    def nrow(self):
        """:class:`int`: number of samples."""
        return len(self._domain)

    def __len__(self):
        return self.nrow

    @property
    def names(self):
        """:class:`tuple`: variable names in column order."""
        return self._names

    @property
    def nvar(self):
        """:class:`int`: number of variables."""
        return len(self._names)

    @property
    def value_shape(self):
        """:class:`tuple`: shape of a single value (empty for scalars)."""
        return self._columns[self._names[0]].shape[1:]

    def column(self, name):
        """Values of variable `name` (missing values are nan)."""
        try:
            return self._columns[str(name)]
        except KeyError:
            raise KeyError(
                f"SampleData: unknown variable '{name}', "
                f"available: {self._names}"
            ) from None

    def values_matrix(self):
        """
        Sample values as (nrow, nvar, *value_shape) array.

        Missing values are nan.
        """
        return np.stack([self._columns[n] for n in self._names], axis=1)

    @property
    def missing(self):
        """:class:`numpy.ndarray`: (nrow, nvar) mask of missing values.

        A vector value is missing if any of its components is not finite.
        """
        finite = np.isfinite(self.values_matrix())
        size = int(np.prod(finite.shape[2:]))
        return ~finite.reshape(finite.shape[:2] + (size,)).all(axis=2)

    def project(self, geometry):
        """Re-project `geometry` into the coordinate system of the data."""
        if self.projection is None:
            return geometry
        return self.projection(geometry)

    def __repr__(self):
        return (
            f"SampleData(nrow={self.nrow}, dim={self.dim}, "
            f"names={list(self._names)})"
        )
