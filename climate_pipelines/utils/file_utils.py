"""File I/O utilities for normals inputs."""
from pathlib import Path
from typing import List, Optional
import pandas as pd


def load_monthly_means(file_path: Path) -> List[Optional[float]]:
    """
    Load twelve monthly means from a CSV with columns `month` and `mean`.

    Months are 1..12 and may appear in any order. A month with no row or an
    unparseable mean comes back as None.
    """
    df = pd.read_csv(file_path)
    for col in ("month", "mean"):
        if col not in df.columns:
            raise ValueError(f"Monthly normals file missing required column: {col}")

    df["month"] = pd.to_numeric(df["month"], errors="coerce")
    df["mean"] = pd.to_numeric(df["mean"], errors="coerce")
    df = df.dropna(subset=["month"]).copy()
    df["month"] = df["month"].astype(int)
    by_month = df.groupby("month")["mean"].last().to_dict()
    return [
        float(by_month[m]) if pd.notna(by_month.get(m)) else None
        for m in range(1, 13)
    ]
