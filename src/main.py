import os

from analysis.sales_summary import payment_mode_share, summarize_by, tag_coverage, top_products
from clustering.product_clustering import ProductClustering, summarize_segments
from config import Settings, setup_logging
from manager.sales_manager import SalesManager
from reporting.sales_plots import generate_report
from tagging.vocabulary import load_vocabulary


def main(settings=None):
    settings = settings or Settings.from_env()
    logger = setup_logging(settings.log_dir, "pipeline.log")

    # Step 1: Load, normalize and tag the sales export
    vocabulary = load_vocabulary(settings.vocabulary_path)
    manager = SalesManager(settings.data_path, settings.output_dir, vocabulary)
    df = manager.run()

    # Step 2: Aggregations
    logger.info("Tag coverage:\n%s", tag_coverage(df).to_string())
    for column in ["Category", "Company", "Gender", "AgeGroup"]:
        summary = summarize_by(df, column)
        summary.to_csv(os.path.join(settings.output_dir, f"summary_by_{column.lower()}.csv"), index=False)
        logger.info("Revenue by %s:\n%s", column, summary.head(10).to_string(index=False))
    logger.info("Payment modes:\n%s", payment_mode_share(df).to_string(index=False))
    logger.info("Top products:\n%s", top_products(df).to_string(index=False))

    # Step 3: Charts
    generate_report(df, settings.output_dir)

    # Step 4: Cluster categories with the elbow-chosen k
    clusterer = ProductClustering(settings.output_dir)
    segments = clusterer.run(df, max_k=settings.elbow_max_k)
    logger.info("Category segments:\n%s", summarize_segments(segments).to_string())

    print("✅ Sales tagging pipeline completed.")
    return df


if __name__ == "__main__":
    main()
