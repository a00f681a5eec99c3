import pandas as pd

from config import (
    DESCRIPTION_COL, INVOICE_COL, PAYMENT_MODE_COL, PAYMENT_TIME_COL,
    QUANTITY_COL, TAG_COLUMNS, UNIT_PRICE_COL,
)

WEEKDAYS = ["Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday"]


def _with_revenue(df: pd.DataFrame) -> pd.DataFrame:
    if "TotalPrice" in df.columns:
        return df
    df = df.copy()
    df["TotalPrice"] = df[QUANTITY_COL] * df[UNIT_PRICE_COL]
    return df


def summarize_by(df: pd.DataFrame, column: str) -> pd.DataFrame:
    """
    Transactions, units and revenue per value of a column, largest revenue first.

    Rows the tagger could not label are grouped under "Unknown" rather than dropped.
    """
    if column not in df.columns:
        raise ValueError(f"Column '{column}' not found. Available columns: {list(df.columns)}")

    df = _with_revenue(df)
    keys = df[column].astype(object).where(df[column].notna(), "Unknown")

    summary = df.groupby(keys).agg(
        Transactions=(INVOICE_COL, "nunique"),
        Units=(QUANTITY_COL, "sum"),
        Revenue=("TotalPrice", "sum"),
    )
    summary.index.name = column
    total = summary["Revenue"].sum()
    summary["RevenueShare"] = summary["Revenue"] / total if total else 0.0
    return summary.sort_values("Revenue", ascending=False).reset_index()


def daily_sales(df: pd.DataFrame) -> pd.DataFrame:
    df = _with_revenue(df).dropna(subset=[PAYMENT_TIME_COL])
    daily = df.groupby(df[PAYMENT_TIME_COL].dt.normalize()).agg(
        Transactions=(INVOICE_COL, "nunique"),
        Units=(QUANTITY_COL, "sum"),
        Revenue=("TotalPrice", "sum"),
    )
    daily.index.name = "Date"
    return daily.reset_index()


def hourly_sales(df: pd.DataFrame) -> pd.DataFrame:
    df = _with_revenue(df).dropna(subset=[PAYMENT_TIME_COL])
    hourly = df.groupby(df[PAYMENT_TIME_COL].dt.hour).agg(
        Transactions=(INVOICE_COL, "nunique"),
        Revenue=("TotalPrice", "sum"),
    )
    hourly.index.name = "Hour"
    return hourly.reset_index()


def weekday_hour_matrix(df: pd.DataFrame) -> pd.DataFrame:
    # Revenue per weekday (rows, Monday first) and hour of day (columns)
    df = _with_revenue(df).dropna(subset=[PAYMENT_TIME_COL])
    if df.empty:
        return pd.DataFrame()
    df = df.assign(Weekday=df[PAYMENT_TIME_COL].dt.day_name(), Hour=df[PAYMENT_TIME_COL].dt.hour)
    matrix = df.pivot_table(
        index="Weekday",
        columns="Hour",
        values="TotalPrice",
        aggfunc="sum",
        fill_value=0,
    )
    matrix = matrix.reindex([day for day in WEEKDAYS if day in matrix.index])
    matrix.index.name = "Weekday"
    matrix.columns.name = "Hour"
    return matrix


def payment_mode_share(df: pd.DataFrame) -> pd.DataFrame:
    df = _with_revenue(df)
    invoices = df.drop_duplicates(subset=[INVOICE_COL])
    share = invoices[PAYMENT_MODE_COL].fillna("Unknown").value_counts()
    revenue = df.groupby(df[PAYMENT_MODE_COL].fillna("Unknown"))["TotalPrice"].sum()
    result = pd.DataFrame({
        "Invoices": share,
        "InvoiceShare": share / share.sum(),
        "Revenue": revenue,
    }).fillna(0)
    result.index.name = PAYMENT_MODE_COL
    return result.sort_values("Invoices", ascending=False).reset_index()


def tag_coverage(df: pd.DataFrame) -> pd.Series:
    # Share of rows carrying each tag; Details counts when non-empty
    coverage = {}
    for col in TAG_COLUMNS:
        if col not in df.columns:
            continue
        values = df[col]
        if col == "Details":
            coverage[col] = (values.fillna("").astype(str) != "").mean()
        else:
            coverage[col] = values.notna().mean()
    return pd.Series(coverage, name="Coverage")


def top_products(df: pd.DataFrame, n: int = 10) -> pd.DataFrame:
    df = _with_revenue(df)
    top = df.groupby(DESCRIPTION_COL).agg(
        Units=(QUANTITY_COL, "sum"),
        Revenue=("TotalPrice", "sum"),
        AvgUnitPrice=(UNIT_PRICE_COL, "mean"),
    )
    return top.sort_values(["Revenue", "Units"], ascending=False).head(n).reset_index()
