"""
This is the unittest of the sample data and geometries.
"""

import unittest

import numpy as np

import geokrige as gk
from geokrige.geometry import as_support, centroid


class TestGeometry(unittest.TestCase):
    def test_points(self):
        pts = gk.Points(([0.0, 1.0, 2.0], [3.0, 4.0, 5.0]))
        self.assertEqual(pts.dim, 2)
        self.assertEqual(len(pts), 3)
        np.testing.assert_array_equal(pts[1], [1.0, 4.0])
        np.testing.assert_array_equal(pts.centroid(2), [2.0, 5.0])
        self.assertIsInstance(pts[1:], gk.Points)
        self.assertEqual(len(pts[1:]), 2)
        self.assertEqual(len(list(pts)), 3)
        moved = pts.translate([1.0, -1.0])
        np.testing.assert_array_equal(moved[0], [1.0, 2.0])
        # 1D positions
        line = gk.Points([0.0, 1.0, 2.0, 3.0])
        self.assertEqual(line.dim, 1)
        self.assertEqual(len(line), 4)

    def test_block(self):
        block = gk.Block([0.0, 0.0], [2.0, 1.0], shape=2)
        self.assertEqual(block.dim, 2)
        self.assertEqual(block.shape, (2, 2))
        self.assertAlmostEqual(block.measure, 2.0)
        np.testing.assert_array_equal(block.centroid, [1.0, 0.5])
        np.testing.assert_allclose(
            block.discretize(),
            [[0.5, 0.5, 1.5, 1.5], [0.25, 0.75, 0.25, 0.75]],
        )
        moved = block.translate([1.0, 1.0])
        np.testing.assert_array_equal(moved.centroid, [2.0, 1.5])
        np.testing.assert_allclose(
            moved.discretize().mean(axis=1), moved.centroid
        )

    def test_block_errors(self):
        with self.assertRaises(ValueError):
            gk.Block([0.0, 0.0], [1.0])
        with self.assertRaises(ValueError):
            gk.Block([0.0, 0.0], [1.0, 0.0])
        with self.assertRaises(ValueError):
            gk.Block([0.0], [1.0], shape=0)

    def test_support(self):
        block = gk.Block([0.0], [1.0], shape=4)
        self.assertEqual(as_support(block, 1).shape, (1, 4))
        self.assertEqual(as_support([1.0, 2.0], 2).shape, (2, 1))
        self.assertEqual(as_support(gk.Points([[0.0, 1.0]]), 1).shape, (1, 2))
        with self.assertRaises(ValueError):
            as_support([1.0, 2.0], 3)
        np.testing.assert_array_equal(centroid(block), [0.5])
        np.testing.assert_array_equal(centroid([1.0, 2.0]), [1.0, 2.0])
        np.testing.assert_array_equal(
            centroid(gk.Points(([0.0, 2.0], [1.0, 3.0]))), [1.0, 2.0]
        )


class TestSampleData(unittest.TestCase):
    def setUp(self):
        self.pos = ([0.0, 1.0, 2.0], [0.0, 1.0, 0.0])
        self.data = gk.SampleData(
            self.pos, {"a": [1.0, 2.0, 3.0], "b": [None, 5.0, np.nan]}
        )

    def test_properties(self):
        self.assertEqual(self.data.dim, 2)
        self.assertEqual(self.data.nrow, 3)
        self.assertEqual(len(self.data), 3)
        self.assertEqual(self.data.names, ("a", "b"))
        self.assertEqual(self.data.nvar, 2)
        self.assertIsInstance(self.data.domain, gk.Points)

    def test_values(self):
        vals = self.data.values_matrix()
        self.assertEqual(vals.shape, (3, 2))
        np.testing.assert_array_equal(vals[:, 0], [1.0, 2.0, 3.0])
        np.testing.assert_array_equal(
            self.data.missing, [[False, True], [False, False], [False, True]]
        )
        np.testing.assert_array_equal(self.data.column("a"), vals[:, 0])
        with self.assertRaises(KeyError):
            self.data.column("c")

    def test_vector_values(self):
        comp = [[0.2, 0.8], None, [0.5, np.nan]]
        data = gk.SampleData(self.pos, {"a": comp, "b": np.ones((3, 2))})
        self.assertEqual(data.value_shape, (2,))
        self.assertEqual(self.data.value_shape, ())
        vals = data.values_matrix()
        self.assertEqual(vals.shape, (3, 2, 2))
        np.testing.assert_array_equal(vals[0, 0], [0.2, 0.8])
        self.assertTrue(np.all(np.isnan(vals[1, 0])))
        np.testing.assert_array_equal(
            data.missing, [[False, False], [True, False], [True, False]]
        )
        with self.assertRaises(ValueError):
            gk.SampleData(self.pos, {"a": comp, "b": [1.0, 2.0, 3.0]})

    def test_projection(self):
        self.assertEqual(self.data.project([1.0, 2.0]), [1.0, 2.0])
        data = gk.SampleData(
            self.pos, {"a": [1.0, 2.0, 3.0]}, projection=lambda g: g * 2
        )
        self.assertEqual(data.project(2), 4)

    def test_errors(self):
        with self.assertRaises(ValueError):
            gk.SampleData(self.pos, {})
        with self.assertRaises(ValueError):
            gk.SampleData(self.pos, {"a": [1.0, 2.0]})
        with self.assertRaises(ValueError):
            gk.SampleData(self.pos, {"a": [[1.0, 2.0, 3.0]]})
        with self.assertRaises(ValueError):
            gk.SampleData(self.pos, {"a": 1.0})


if __name__ == "__main__":
    unittest.main()
