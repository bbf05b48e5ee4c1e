"""
This is the unittest of multivariate kriging (cokriging).
"""

import unittest

import gstools as gs
import numpy as np

import geokrige as gk

NAMES = ["a", "b", "c"]


class TestCokriging(unittest.TestCase):
    def setUp(self):
        self.pos = ([25.0, 50.0, 75.0], [25.0, 75.0, 50.0])
        self.data = gk.SampleData(
            self.pos,
            {"a": [1.0, 0.0, 0.0], "b": [0.0, 1.0, 0.0], "c": [0.0, 0.0, 1.0]},
        )
        self.coreg = np.array(
            [[1.0, 0.3, 0.1], [0.3, 1.0, 0.2], [0.1, 0.2, 1.0]]
        )
        self.func = self.coreg * gk.Variogram(
            gs.Spherical(dim=2, len_scale=35.0)
        )

    def _methods(self, func, mean):
        return [
            gk.Simple(func, mean),
            gk.Ordinary(func),
            gk.Universal(func, 1, 2),
            gk.ExternalDrift(func, [lambda *x: 1.0]),
        ]

    def test_function(self):
        self.assertEqual(self.func.nvar, 3)
        self.assertIsInstance(self.func, gk.Variogram)
        np.testing.assert_allclose(self.func.sill, self.coreg)
        val = self.func([25.0, 25.0], [50.0, 75.0])
        np.testing.assert_allclose(val, self.coreg)

    def test_interpolation(self):
        onehot = np.eye(3)
        for method in self._methods(self.func, 1.0 / 3.0):
            fitted = method.fit(self.data)
            self.assertTrue(fitted.status())
            for j in range(3):
                target = [self.pos[0][j], self.pos[1][j]]
                dist = fitted.predictprob(NAMES, target)
                np.testing.assert_allclose(dist.mean, onehot[j], atol=1e-6)
                np.testing.assert_allclose(
                    np.diag(dist.cov), 0.0, atol=1e-8
                )
                mean = fitted.predict(NAMES, target)
                np.testing.assert_allclose(mean, onehot[j], atol=1e-6)

    def test_interior(self):
        for method in self._methods(self.func, 1.0 / 3.0):
            fitted = method.fit(self.data)
            dist = fitted.predictprob(NAMES, [50.0, 50.0])
            self.assertTrue(np.all(dist.mean >= 0.0))
            self.assertTrue(np.all(dist.mean <= 1.0))
            self.assertTrue(np.all(np.diag(dist.cov) >= 0.0))

    def test_variable_selection(self):
        fitted = gk.Ordinary(self.func).fit(self.data)
        target = [40.0, 60.0]
        means = fitted.predict(NAMES, target)
        self.assertAlmostEqual(fitted.predict("b", target), means[1])
        np.testing.assert_allclose(
            fitted.predict(["c", "a"], target), means[[2, 0]]
        )
        full = gk.predictprob(fitted, NAMES, target)
        part = gk.predictprob(fitted, ["c", "a"], target)
        np.testing.assert_allclose(part.cov, full.cov[np.ix_([2, 0], [2, 0])])
        single = gk.predictprob(fitted, "b", target)
        self.assertAlmostEqual(single.var(), full.cov[1, 1])

    def test_negative_cross_covariance(self):
        rng = np.random.RandomState(11)
        pos = rng.rand(2, 8) * 10
        data = gk.SampleData(pos, {"a": rng.rand(8), "b": rng.rand(8)})
        coreg = np.array([[1.0, -0.5], [-0.5, 1.0]])
        func = coreg * gk.Variogram(gs.Gaussian(dim=2, len_scale=3.0))
        fitted = gk.Ordinary(func).fit(data)
        cov = fitted.predictprob(["a", "b"], [4.0, 6.0]).cov
        # separable model: posterior covariance is coreg times the variance
        self.assertGreater(cov[0, 0], 0.0)
        self.assertLess(cov[0, 1], 0.0)
        np.testing.assert_allclose(cov[0, 1], -0.5 * cov[0, 0], rtol=1e-6)

    def test_missing_values(self):
        rng = np.random.RandomState(19)
        pos = rng.rand(2, 8) * 10
        val_a = rng.rand(8)
        val_b = rng.rand(8)
        miss = 3
        col_b = [None if i == miss else v for i, v in enumerate(val_b)]
        data = gk.SampleData(pos, {"a": val_a, "b": col_b})
        np.testing.assert_array_equal(data.missing[:, 1], np.arange(8) == miss)
        model = gs.Gaussian(dim=2, var=1.0, len_scale=3.0)
        # decoupled variables
        func = np.eye(2) * gk.Variogram(model)
        fitted = gk.Ordinary(func).fit(data)
        target = [4.0, 6.0]
        krige_weights = fitted.weights(target)
        np.testing.assert_allclose(
            krige_weights.lambda_[2 * miss + 1], 0.0, atol=1e-12
        )
        keep = np.arange(8) != miss
        ref_a = gk.Ordinary(gk.Variogram(model)).fit(
            gk.SampleData(pos, {"a": val_a})
        )
        ref_b = gk.Ordinary(gk.Variogram(model)).fit(
            gk.SampleData(pos[:, keep], {"b": val_b[keep]})
        )
        dist = fitted.predictprob(["a", "b"], target)
        self.assertAlmostEqual(dist.mean[0], ref_a.predict("a", target))
        self.assertAlmostEqual(dist.mean[1], ref_b.predict("b", target))
        self.assertAlmostEqual(
            dist.cov[0, 0], ref_a.predictprob("a", target).var()
        )
        self.assertAlmostEqual(
            dist.cov[1, 1], ref_b.predictprob("b", target).var()
        )

    def test_missing_everywhere(self):
        data = gk.SampleData(
            ([0.0, 1.0, 2.0],), {"z": [np.nan, np.nan, np.nan]}
        )
        func = gk.Variogram(gs.Gaussian(dim=1))
        fitted = gk.Simple(func, 2.0).fit(data)
        self.assertTrue(fitted.status())
        self.assertAlmostEqual(fitted.predict("z", [0.5]), 2.0)
        self.assertAlmostEqual(fitted.predictprob("z", [0.5]).var(), 1.0)


class TestTransiogram(unittest.TestCase):
    def setUp(self):
        self.pos = ([25.0, 50.0, 75.0], [25.0, 75.0, 50.0])
        self.data = gk.SampleData(
            self.pos,
            {"a": [1.0, 0.0, 0.0], "b": [0.0, 1.0, 0.0], "c": [0.0, 0.0, 1.0]},
        )
        self.proportions = [0.5, 0.3, 0.2]
        self.func = gk.MatrixExponentialTransiogram(
            lengths=[35.0, 35.0, 35.0], proportions=self.proportions
        )

    def test_kriging(self):
        methods = [
            gk.Simple(self.func, self.proportions),
            gk.Ordinary(self.func),
            gk.Universal(self.func, 1, 2),
            gk.ExternalDrift(self.func, [lambda *x: 1.0]),
        ]
        onehot = np.eye(3)
        for method in methods:
            fitted = method.fit(self.data)
            self.assertTrue(fitted.status())
            self.assertEqual(fitted.state.factorization.method, "svd")
            for j in range(3):
                target = [self.pos[0][j], self.pos[1][j]]
                dist = fitted.predictprob(NAMES, target)
                np.testing.assert_allclose(dist.mean, onehot[j], atol=1e-6)
                np.testing.assert_allclose(
                    np.diag(dist.cov), 0.0, atol=1e-6
                )
            dist = fitted.predictprob(NAMES, [50.0, 50.0])
            self.assertTrue(np.all(np.isfinite(dist.mean)))
            self.assertTrue(np.all(np.diag(dist.cov) >= 0.0))

    def test_forced_factorization(self):
        fitted = gk.Ordinary(self.func).fit(self.data, factorization="lu")
        self.assertEqual(fitted.state.factorization.method, "lu")
        svd = gk.Ordinary(self.func).fit(self.data)
        target = [40.0, 40.0]
        np.testing.assert_allclose(
            fitted.predict(NAMES, target), svd.predict(NAMES, target)
        )


if __name__ == "__main__":
    unittest.main()
