r"""
Cokriging of Indicators
-----------------------

Several correlated variables can be kriged jointly by a multivariate
geostatistical function.

Example
^^^^^^^

Here we krige three indicator variables (one-hot encoded categories) with
a coregionalized variogram and with a transiogram.
"""

import gstools as gs
import numpy as np

import geokrige as gk

names = ["a", "b", "c"]
cond_pos = ([25.0, 50.0, 75.0], [25.0, 75.0, 50.0])
data = gk.SampleData(
    cond_pos,
    {"a": [1.0, 0.0, 0.0], "b": [0.0, 1.0, 0.0], "c": [0.0, 0.0, 1.0]},
)

###############################################################################
# A coregionalization matrix turns a variogram into a multivariate one

coreg = np.array([[1.0, 0.3, 0.1], [0.3, 1.0, 0.2], [0.1, 0.2, 1.0]])
gamma = coreg * gk.Variogram(gs.Spherical(dim=2, len_scale=35.0))

###############################################################################
# Transiograms give non-symmetric systems, solved by SVD

trans = gk.MatrixExponentialTransiogram(
    lengths=[35.0, 35.0, 35.0], proportions=[0.5, 0.3, 0.2]
)

for func in (gamma, trans):
    fitted = gk.Kriging(func).fit(data)
    dist = fitted.predictprob(names, [50.0, 50.0])
    print(type(func).__name__, fitted.state.factorization.method)
    print("  mean:", np.round(dist.mean, 3))
    print("  variance:", np.round(np.diag(dist.cov), 3))
