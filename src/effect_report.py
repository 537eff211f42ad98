import numpy as np
import pandas as pd
from pathlib import Path

import config


def pct_effect(beta):
    """
    Percentage change in expected severity implied by a log-link coefficient.

    For a numeric predictor this is the change per unit increase; for a
    categorical level it is the change relative to the reference level.
    """
    return (np.exp(beta) - 1) * 100


def build_effect_table(params):
    """
    Turns fitted coefficients into a table of percentage effects.

    The intercept is left out - it is a baseline level, not an effect.
    Rows are ordered by absolute effect, largest first.
    """
    params = pd.Series(params)
    params = params.drop(labels=[config.INTERCEPT], errors="ignore")

    table = pd.DataFrame({"term": params.index.astype(str), "beta": params.to_numpy(dtype=float)})
    table["pct_effect"] = pct_effect(table["beta"])

    table = table.sort_values(
        by="pct_effect", key=lambda s: s.abs(), ascending=False, kind="mergesort"
    )
    return table.reset_index(drop=True)


def top_effects(table, n=None):
    if n is None:
        n = config.TOP_EFFECTS
    return table.head(n)


def write_model_data(df, path):
    """
    Saves the cleaned modeling dataset so it can be reused without reloading.
    Categorical columns are written as their source labels; the placeholder
    level for missing values goes back to an empty cell.
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    out = df.copy()
    for col in out.columns:
        if isinstance(out[col].dtype, pd.CategoricalDtype):
            labels = out[col].astype("object")
            out[col] = labels.where(labels != config.MISSING_LEVEL)

    out.to_csv(path, index=False)
    print(f"Saved modeling dataset to {path}")
    return path
