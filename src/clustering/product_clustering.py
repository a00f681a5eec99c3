import os
import logging
import traceback

import matplotlib

matplotlib.use("Agg")

import matplotlib.pyplot as plt
import numpy as np
import pandas as pd
from sklearn.cluster import KMeans
from sklearn.preprocessing import MinMaxScaler

from config import CATEGORY_SEGMENTS_FILE, ELBOW_PLOT_FILE, INVOICE_COL, QUANTITY_COL, UNIT_PRICE_COL

FEATURE_COLUMNS = ["Units", "Revenue", "AvgUnitPrice", "Transactions"]


def elbow_point(inertias):
    """
    Index of the elbow of a decreasing inertia curve.

    Both axes are scaled to [0, 1]; the elbow is the point farthest below the chord
    joining the first and last points.
    """
    inertias = np.asarray(inertias, dtype=float)
    if len(inertias) < 3:
        return len(inertias) - 1

    x = np.linspace(0.0, 1.0, len(inertias))
    spread = inertias[0] - inertias[-1]
    if spread <= 0:
        return 0
    y = (inertias - inertias[-1]) / spread
    distances = (1.0 - x) - y
    return int(np.argmax(distances))


class ProductClustering:
    def __init__(self, output_dir="data", random_state=42):
        os.makedirs(output_dir, exist_ok=True)

        self.output_path = os.path.join(output_dir, CATEGORY_SEGMENTS_FILE)
        self.elbow_plot_path = os.path.join(output_dir, ELBOW_PLOT_FILE)
        self.random_state = random_state
        self.logger = logging.getLogger(__name__)

        self.features = None
        self.X_scaled = None
        self.k_values = []
        self.inertias = []
        self.n_clusters = None

    def build_features(self, df, group_col="Category"):
        # One point per category: how much sold, for how much, at what price
        data = df.dropna(subset=[group_col]).copy()
        if "TotalPrice" not in data.columns:
            data["TotalPrice"] = data[QUANTITY_COL] * data[UNIT_PRICE_COL]

        features = data.groupby(group_col).agg(
            Units=(QUANTITY_COL, "sum"),
            Revenue=("TotalPrice", "sum"),
            AvgUnitPrice=(UNIT_PRICE_COL, "mean"),
            Transactions=(INVOICE_COL, "nunique"),
        )
        if len(features) < 2:
            raise ValueError(f"Need at least 2 distinct {group_col} values to cluster, got {len(features)}")

        self.features = features
        self.X_scaled = MinMaxScaler().fit_transform(features[FEATURE_COLUMNS])
        self.logger.info("Built clustering features for %d %s values", len(features), group_col)
        return features

    def compute_inertias(self, max_k=8):
        if self.X_scaled is None:
            raise ValueError("Features not built. Please run build_features() first.")
        if max_k < 1:
            raise ValueError(f"max_k must be at least 1, got {max_k}")

        n_points = len(self.X_scaled)
        self.k_values = list(range(1, min(max_k, n_points) + 1))
        self.inertias = []
        for k in self.k_values:
            kmeans = KMeans(n_clusters=k, random_state=self.random_state, n_init=10)
            kmeans.fit(self.X_scaled)
            self.inertias.append(kmeans.inertia_)
        return self.inertias

    def choose_k(self, max_k=8):
        if not self.inertias:
            self.compute_inertias(max_k)
        self.n_clusters = self.k_values[elbow_point(self.inertias)]
        self.logger.info("Elbow heuristic chose k=%d (inertias: %s)", self.n_clusters,
                         ", ".join(f"{value:.3f}" for value in self.inertias))
        return self.n_clusters

    def plot_elbow(self):
        fig, ax = plt.subplots(figsize=(8, 4))
        ax.plot(self.k_values, self.inertias, marker='o')
        if self.n_clusters is not None:
            ax.axvline(self.n_clusters, color="red", linestyle="--", label=f"k={self.n_clusters}")
            ax.legend()
        ax.set_xlabel("Number of Clusters (k)")
        ax.set_ylabel("Inertia")
        ax.set_title("Elbow Method For Optimal k")
        ax.grid(True)
        fig.savefig(self.elbow_plot_path)
        plt.close(fig)
        self.logger.info("Elbow plot saved to %s", self.elbow_plot_path)
        return self.elbow_plot_path

    def segment(self, n_clusters=None):
        try:
            if self.X_scaled is None:
                raise ValueError("Features not built. Please run build_features() first.")
            if n_clusters is None:
                n_clusters = self.n_clusters or self.choose_k()

            self.logger.info("Clustering with KMeans (k=%d)...", n_clusters)
            kmeans = KMeans(n_clusters=n_clusters, random_state=self.random_state, n_init=10)
            segments = self.features.copy()
            segments["Cluster"] = kmeans.fit_predict(self.X_scaled)

            segments.reset_index().to_csv(self.output_path, index=False)
            self.logger.info("Segments saved to %s", self.output_path)
            return segments
        except Exception:
            self.logger.error("Failed to perform clustering")
            self.logger.error(traceback.format_exc())
            raise

    def run(self, df, max_k=8):
        self.build_features(df)
        self.compute_inertias(max_k)
        self.choose_k(max_k)
        self.plot_elbow()
        return self.segment()


def summarize_segments(segments: pd.DataFrame) -> pd.DataFrame:
    # Mean feature values per cluster, with the members listed
    label = segments.index.name or "index"
    members = segments.reset_index().groupby("Cluster")[label].apply(lambda s: ", ".join(map(str, s)))
    summary = segments.groupby("Cluster")[[c for c in segments.columns if c != "Cluster"]].mean()
    summary["Members"] = members
    return summary
