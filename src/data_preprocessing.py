import pandas as pd
from pandas.api.types import is_numeric_dtype

import config
from errors import DataLoadError, SchemaError


def read_claims_file(path):
    """
    Reads the raw claims CSV.

    Column types are left to pandas' inference, except the categorical fields,
    which are read as text so labels like "1" don't turn into "1.0".
    """
    try:
        df = pd.read_csv(path, dtype={col: str for col in config.CATEGORICAL_VARS})
    except (OSError, UnicodeDecodeError, pd.errors.ParserError, pd.errors.EmptyDataError) as exc:
        raise DataLoadError(f"Could not read claims file {path}: {exc}") from exc

    return df


def select_model_columns(df, keep_vars=None):
    """
    Keeps the allow-listed columns that are actually present, in allow-list order.
    """
    if keep_vars is None:
        keep_vars = config.KEEP_VARS

    # Without the severity outcome there is nothing to model
    if config.TARGET not in df.columns:
        raise SchemaError(f"Required column '{config.TARGET}' not found in claims data")
    if not is_numeric_dtype(df[config.TARGET]):
        raise SchemaError(
            f"Column '{config.TARGET}' must be numeric, got dtype {df[config.TARGET].dtype}"
        )

    present = [col for col in keep_vars if col in df.columns]
    return df[present].copy()


def drop_missing_severity(df):
    return df[df[config.TARGET].notna()].copy()


def cast_categoricals(df, columns=None):
    """
    Converts categorical fields to pandas Categoricals with sorted levels.

    Missing values become their own level so rows are not lost. Casting a column
    that is already categorical gives back the same levels.
    """
    if columns is None:
        columns = config.CATEGORICAL_VARS

    df = df.copy()
    for col in [c for c in columns if c in df.columns]:
        labels = df[col].astype("object")
        labels = labels.where(labels.notna(), config.MISSING_LEVEL).astype(str)
        df[col] = pd.Categorical(labels, categories=sorted(labels.unique()))

    return df


def load_claims(cfg):
    """
    Loads the claims file and returns the modeling dataset.

    Every row of the result has a severity outcome and the categorical fields
    are cast to Categoricals.
    """
    print(f"Loading claims data from {cfg.data_path}...")
    df_raw = read_claims_file(cfg.data_path)

    # Quick sanity checks before doing anything else
    print(f"Raw data: {df_raw.shape[0]:,} rows x {df_raw.shape[1]} columns")
    print(f"Variables: {', '.join(df_raw.columns)}")

    df = select_model_columns(df_raw)
    n_before = len(df)
    df = drop_missing_severity(df)
    if len(df) < n_before:
        print(f"Dropped {n_before - len(df):,} rows with missing {config.TARGET}")

    df = cast_categoricals(df)
    print(f"Modeling data: {df.shape[0]:,} rows x {df.shape[1]} columns")

    return df


def summarize_severity(df):
    """Min, quartiles, mean and max of claim severity."""
    sev = df[config.TARGET]
    return pd.Series(
        {
            "Min.": sev.min(),
            "1st Qu.": sev.quantile(0.25),
            "Median": sev.median(),
            "Mean": sev.mean(),
            "3rd Qu.": sev.quantile(0.75),
            "Max.": sev.max(),
        },
        name=config.TARGET,
    )
