import os
import logging
import traceback

import matplotlib

matplotlib.use("Agg")

import matplotlib.pyplot as plt
import plotly.express as px
import seaborn as sns

from analysis.sales_summary import daily_sales, summarize_by, weekday_hour_matrix
from config import UNIT_PRICE_COL

logger = logging.getLogger(__name__)


def _save(fig, output_path):
    os.makedirs(os.path.dirname(output_path) or ".", exist_ok=True)
    fig.tight_layout()
    fig.savefig(output_path)
    plt.close(fig)
    logger.info("Plot saved to %s", output_path)
    return output_path


def plot_revenue_by(df, column, output_path):
    summary = summarize_by(df, column)
    fig, ax = plt.subplots(figsize=(10, 6))
    sns.barplot(data=summary, x="Revenue", y=column, ax=ax, color="steelblue")
    ax.set_title(f"Revenue by {column}")
    ax.set_xlabel("Revenue")
    ax.set_ylabel(column)
    return _save(fig, output_path)


def plot_daily_revenue(df, output_path):
    daily = daily_sales(df)
    if daily.empty:
        logger.warning("No readable payment times, skipping daily revenue chart")
        return None
    fig, ax = plt.subplots(figsize=(12, 5))
    sns.lineplot(data=daily, x="Date", y="Revenue", marker="o", ax=ax)
    ax.set_title("Daily Revenue")
    ax.grid(True)
    fig.autofmt_xdate()
    return _save(fig, output_path)


def plot_weekday_hour_heatmap(df, output_path):
    matrix = weekday_hour_matrix(df)
    if matrix.empty:
        logger.warning("No readable payment times, skipping weekday/hour heatmap")
        return None
    fig, ax = plt.subplots(figsize=(12, 5))
    sns.heatmap(matrix, cmap="YlOrRd", annot=False, ax=ax, cbar_kws={"label": "Revenue"})
    ax.set_title("Revenue by Weekday and Hour")
    return _save(fig, output_path)


def plot_price_by_category(df, output_path):
    data = df.dropna(subset=["Category"])
    if data.empty:
        logger.warning("No tagged categories, skipping unit price chart")
        return None
    fig, ax = plt.subplots(figsize=(12, 6))
    sns.boxplot(data=data, x="Category", y=UNIT_PRICE_COL, ax=ax)
    ax.set_title("Unit Price by Category")
    ax.tick_params(axis="x", rotation=45)
    return _save(fig, output_path)


def plot_demographic_sunburst(df, output_path):
    # Interactive Gender -> AgeGroup -> Category breakdown of revenue
    data = df.copy()
    for col in ["Gender", "AgeGroup", "Category"]:
        data[col] = data[col].astype(object).where(data[col].notna(), "Unknown")
    if "TotalPrice" not in data.columns:
        data["TotalPrice"] = data["Quantity"] * data["UnitPrice"]

    fig = px.sunburst(data, path=["Gender", "AgeGroup", "Category"], values="TotalPrice",
                      title="Revenue by Gender, Age Group and Category")
    os.makedirs(os.path.dirname(output_path) or ".", exist_ok=True)
    fig.write_html(output_path)
    logger.info("Sunburst chart saved to %s", output_path)
    return output_path


def generate_report(df, output_dir):
    """Write every chart for the tagged table into output_dir and return their paths."""
    try:
        logger.info("Generating sales charts in %s...", output_dir)
        paths = [
            plot_revenue_by(df, column, os.path.join(output_dir, f"revenue_by_{column.lower()}.png"))
            for column in ["Category", "Company", "Colour", "AgeGroup"]
        ]
        paths.append(plot_daily_revenue(df, os.path.join(output_dir, "daily_revenue.png")))
        paths.append(plot_weekday_hour_heatmap(df, os.path.join(output_dir, "weekday_hour_heatmap.png")))
        paths.append(plot_price_by_category(df, os.path.join(output_dir, "price_by_category.png")))
        paths.append(plot_demographic_sunburst(df, os.path.join(output_dir, "demographics_sunburst.html")))
        # Charts without data are skipped and return None
        return [path for path in paths if path is not None]
    except Exception:
        logger.error("Failed to generate sales charts")
        logger.error(traceback.format_exc())
        raise
