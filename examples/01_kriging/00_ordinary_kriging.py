r"""
Ordinary Kriging
----------------

Ordinary kriging estimates the mean from the samples and interpolates
them exactly.

Example
^^^^^^^

Here we fit ordinary and universal kriging to a few samples and compare
the predictions at a point and on a block.
"""

import gstools as gs
import numpy as np

import geokrige as gk

# conditions
cond_pos = ([25.0, 50.0, 75.0, 40.0, 60.0], [25.0, 75.0, 50.0, 40.0, 20.0])
cond_val = [1.0, 0.0, 1.0, 0.6, 0.4]
data = gk.SampleData(cond_pos, {"z": cond_val})
gamma = gk.Variogram(gs.Spherical(dim=2, len_scale=35.0))

###############################################################################
# Fit the kriging methods

ok = gk.Ordinary(gamma).fit(data)
uk = gk.Universal(gamma, 1).fit(data)

###############################################################################
# Predict at a point and on a 10 x 10 block around it

point = [50.0, 50.0]
block = gk.Block([45.0, 45.0], [55.0, 55.0], shape=5)

for name, fitted in [("ordinary", ok), ("universal", uk)]:
    point_dist = fitted.predictprob("z", point)
    block_dist = fitted.predictprob("z", block)
    print(
        f"{name:>9}: point {point_dist.mean():.3f} +- "
        f"{point_dist.std():.3f}, block {block_dist.mean():.3f} +- "
        f"{block_dist.std():.3f}"
    )

###############################################################################
# The samples are interpolated exactly

print(np.allclose([ok.predict("z", p) for p in data.domain], cond_val))
