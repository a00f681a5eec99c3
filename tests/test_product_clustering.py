import unittest
import sys
import os
import logging
import tempfile

import matplotlib

matplotlib.use("Agg")

import pandas as pd

logging.disable(logging.CRITICAL)

PROJECT_ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
sys.path.insert(0, os.path.join(PROJECT_ROOT, 'src'))
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from clustering.product_clustering import ProductClustering, elbow_point, summarize_segments
from fixtures import write_sales_csv
from manager.sales_manager import SalesManager


def three_groups_of_sales():
    # Four categories each of: cheap singles, cheap multi-packs and expensive singles
    rows = []
    for group, (quantity, base_price) in enumerate([(1, 100), (10, 100), (1, 1000)]):
        for i in range(4):
            rows.append({
                "InvoiceNo": f"INV{group}{i}",
                "Category": "ABC"[group] + str(i),
                "Quantity": quantity,
                "UnitPrice": base_price + i,
            })
    return pd.DataFrame(rows)


class TestElbowPoint(unittest.TestCase):

    def test_clear_elbow(self):
        self.assertEqual(elbow_point([10, 5, 1, 0.8, 0.7]), 2)

    def test_short_curves(self):
        self.assertEqual(elbow_point([5, 1]), 1)
        self.assertEqual(elbow_point([5]), 0)

    def test_flat_curve(self):
        self.assertEqual(elbow_point([2, 2, 2]), 0)


class TestProductClustering(unittest.TestCase):

    def setUp(self):
        self.tmp = tempfile.TemporaryDirectory()
        self.output_dir = os.path.join(self.tmp.name, "out")

    def tearDown(self):
        self.tmp.cleanup()

    def test_elbow_finds_three_groups(self):
        clusterer = ProductClustering(self.output_dir)
        clusterer.build_features(three_groups_of_sales())
        inertias = clusterer.compute_inertias(max_k=6)

        self.assertEqual(clusterer.k_values, [1, 2, 3, 4, 5, 6])
        self.assertGreater(inertias[0], inertias[2])
        self.assertEqual(clusterer.choose_k(), 3)

        segments = clusterer.segment()
        self.assertEqual(segments["Cluster"].nunique(), 3)
        # categories from the same group share a cluster
        for start in range(0, 12, 4):
            self.assertEqual(segments["Cluster"].iloc[start:start + 4].nunique(), 1)
        self.assertTrue(os.path.exists(clusterer.output_path))

    def test_max_k_capped_by_points(self):
        clusterer = ProductClustering(self.output_dir)
        clusterer.build_features(three_groups_of_sales().head(3))
        clusterer.compute_inertias(max_k=8)
        self.assertEqual(clusterer.k_values, [1, 2, 3])

    def test_too_few_points(self):
        clusterer = ProductClustering(self.output_dir)
        with self.assertRaises(ValueError):
            clusterer.build_features(three_groups_of_sales().head(1))

    def test_max_k_must_be_positive(self):
        clusterer = ProductClustering(self.output_dir)
        clusterer.build_features(three_groups_of_sales())
        with self.assertRaises(ValueError):
            clusterer.compute_inertias(max_k=0)

    def test_requires_features(self):
        clusterer = ProductClustering(self.output_dir)
        with self.assertRaises(ValueError):
            clusterer.compute_inertias()
        with self.assertRaises(ValueError):
            clusterer.segment(n_clusters=2)

    def test_run_on_tagged_sales(self):
        df = SalesManager(write_sales_csv(self.tmp.name), self.output_dir).run()
        clusterer = ProductClustering(self.output_dir)
        segments = clusterer.run(df, max_k=4)

        self.assertEqual(set(segments.index), {"T-Shirt", "Half Pant", "Set", "Romper", "Kurti"})
        self.assertIn(clusterer.n_clusters, range(1, 5))
        self.assertTrue(os.path.exists(clusterer.elbow_plot_path))

        saved = pd.read_csv(clusterer.output_path)
        self.assertEqual(list(saved.columns), ["Category", "Units", "Revenue", "AvgUnitPrice", "Transactions", "Cluster"])

        summary = summarize_segments(segments)
        self.assertEqual(summary["Members"].str.split(", ").map(len).sum(), 5)


if __name__ == '__main__':
    unittest.main()
