"""Small hand-entered sales export shared by the pipeline tests."""

import os

import pandas as pd

SALES_ROWS = [
    # InvoiceNo, Description, Size, Quantity, UnitPrice, PaymentMode, PaymentTime
    ["INV001", "black nike mens t-shirt", "M", 1, 799, "Cash", "2024-03-01 10:15"],
    ["INV001", "boxer cotton half pant", "L", 2, 250, "Cash", "2024-03-01 10:15"],
    ["INV002", "shirt+jeans set", None, 1, 1200, "UPI", "2024-03-02 18:40"],
    ["INV003", "baby romper", "0-6M", 1, 350, "Card", "2024-03-02 19:05"],
    ["INV004", "red kurti", "XL", 1, 499, "UPI", "2024-03-04 11:30"],
    ["INV004", "red kurti", "XL", 1, 499, "UPI", "2024-03-04 11:30"],   # duplicate entry
    ["INV005", None, "M", 1, 100, "Cash", "2024-03-05 12:00"],           # description not written down
    ["INV006", "blue jeans", "32", 0, 900, "Cash", "2024-03-05 16:20"],  # returned, zero quantity
]

COLUMNS = ["InvoiceNo", "Description", "Size", "Quantity", "UnitPrice", "PaymentMode", "PaymentTime"]


def write_sales_csv(directory, name="sales.csv", columns=COLUMNS):
    path = os.path.join(directory, name)
    df = pd.DataFrame(SALES_ROWS, columns=COLUMNS)
    df[columns].to_csv(path, index=False)
    return path
