"""
GeoKrige subpackage providing the numerical configuration of the solver.

.. currentmodule:: geokrige.config

The following are provided

.. autosummary::
   SolverConfig
   DEFAULT_CONFIG
   FACTORIZATIONS
"""

from typing import NamedTuple, Optional

__all__ = ["SolverConfig", "DEFAULT_CONFIG", "FACTORIZATIONS", "make_config"]

FACTORIZATIONS = ("auto", "ldl", "svd", "lu")


class SolverConfig(NamedTuple):
    """
    Immutable numerical configuration of the kriging solver.

    Parameters
    ----------
    factorization : :class:`str`
        Factorization of the kriging matrix:

            * `"auto"`: chosen from the geostatistical function
              (symmetric: `"ldl"`, possibly rank deficient: `"svd"`,
              otherwise `"lu"`)
            * `"ldl"`: symmetric indefinite Bunch-Kaufman factorization
            * `"svd"`: singular value decomposition (pseudo-inverse)
            * `"lu"`: LU factorization with partial pivoting

        Default: `"auto"`
    svd_rcond : :class:`float` or :any:`None`
        Relative cut-off for small singular values in the `"svd"`
        factorization. `None` uses machine precision times the matrix size.
        Default: `None`
    var_epsilon : :class:`float`
        Positive value added to the diagonal of a posterior covariance
        before it is exposed as a distribution.
        Default: `1e-10`
    check_finite : :class:`bool`
        Whether scipy should check the matrices for infinite or NaN entries.
        Default: `True`
    """

    factorization: str = "auto"
    svd_rcond: Optional[float] = None
    var_epsilon: float = 1e-10
    check_finite: bool = True


DEFAULT_CONFIG = SolverConfig()


def make_config(config=None, **kwargs):
    """
    Create a validated solver configuration.

    Parameters
    ----------
    config : :any:`SolverConfig` or :any:`None`, optional
        Base configuration. Default: :any:`DEFAULT_CONFIG`
    **kwargs
        Fields of :any:`SolverConfig` to override.

    Returns
    -------
    :any:`SolverConfig`
    """
    config = DEFAULT_CONFIG if config is None else config
    if not isinstance(config, SolverConfig):
        raise TypeError(
            f"config must be a SolverConfig instance, got {type(config)}"
        )
    unknown = set(kwargs) - set(SolverConfig._fields)
    if unknown:
        raise TypeError(f"unknown solver options: {sorted(unknown)}")
    config = config._replace(**kwargs)
    if config.factorization not in FACTORIZATIONS:
        raise ValueError(
            f"factorization must be one of {FACTORIZATIONS}, "
            f"got {config.factorization!r}"
        )
    if config.var_epsilon < 0:
        raise ValueError(
            f"var_epsilon must be non-negative, got {config.var_epsilon}"
        )
    return config
