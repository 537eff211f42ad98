from dataclasses import dataclass

import numpy as np
import pandas as pd
import statsmodels.api as sm
from sklearn.compose import ColumnTransformer
from sklearn.preprocessing import OneHotEncoder

import config
from errors import FitError, SchemaError


@dataclass
class SeverityFit:
    """Fitted Gamma GLM plus the design-matrix columns it was fitted on."""

    results: object
    columns: list
    family: str = config.FAMILY_NAME
    link: str = config.LINK_NAME

    @property
    def params(self):
        return self.results.params

    @property
    def bse(self):
        return self.results.bse

    @property
    def dispersion(self):
        # Pearson chi2 / residual df
        return float(self.results.scale)

    @property
    def nobs(self):
        return int(self.results.nobs)

    def coefficient_table(self):
        table = pd.DataFrame(
            {
                "term": self.columns,
                "coef": self.results.params.to_numpy(),
                "std_err": self.results.bse.to_numpy(),
                "z_value": self.results.tvalues.to_numpy(),
                "p_value": self.results.pvalues.to_numpy(),
            }
        )
        table["signif"] = pd.cut(
            table["p_value"],
            bins=[-np.inf, 0.001, 0.01, 0.05, 0.1, np.inf],
            labels=["***", "**", "*", ".", ""],
        ).astype(str)
        return table

    def summary(self):
        return self.results.summary()


def prepare_model_frame(df, cfg):
    """
    Selects the response and predictors used by the severity GLM.

    Rows with a missing numeric predictor are left out (complete-case fit).
    Categorical predictors already carry an explicit 'missing' level from the
    loader, so they never cause rows to be dropped.
    """
    columns = [config.TARGET] + cfg.predictors
    missing_cols = [col for col in columns if col not in df.columns]
    if missing_cols:
        raise SchemaError(f"Columns required by the severity model are missing: {missing_cols}")

    frame = df[columns].copy()

    complete = frame[cfg.numeric_predictors].notna().all(axis=1)
    if not complete.all():
        print(f"Excluding {(~complete).sum():,} rows with missing numeric predictors")
        frame = frame[complete].copy()

    # Gamma support is (0, inf) - a zero or negative claim breaks the model, don't patch it
    if (frame[config.TARGET] <= 0).any():
        n_bad = int((frame[config.TARGET] <= 0).sum())
        raise FitError(
            f"{n_bad} rows have non-positive {config.TARGET}; the Gamma GLM needs strictly "
            "positive severities"
        )

    return frame


def build_design_matrix(frame, cfg):
    """
    Builds the GLM design matrix: intercept, numeric predictors, then dummy columns.

    Categorical predictors use reference-level encoding. The dropped reference is
    the first level in sorted order, which keeps coefficient names reproducible.
    """
    for col in cfg.categorical_predictors:
        n_levels = frame[col].astype(str).nunique()
        if n_levels < 2:
            # drop='first' would silently remove the whole term
            raise FitError(
                f"Categorical predictor '{col}' has {n_levels} observed level(s); "
                "at least 2 are needed to estimate an effect"
            )

    # Cast to plain strings so the encoder sees the observed labels, sorted
    encoder_input = frame[cfg.predictors].copy()
    for col in cfg.categorical_predictors:
        encoder_input[col] = encoder_input[col].astype(str)

    preprocessor = ColumnTransformer(
        transformers=[
            ("num", "passthrough", cfg.numeric_predictors),
            ("cat", OneHotEncoder(drop="first", sparse_output=False), cfg.categorical_predictors),
        ],
        verbose_feature_names_out=False,
    )

    matrix = preprocessor.fit_transform(encoder_input)
    X = pd.DataFrame(
        matrix.astype(float),
        columns=list(preprocessor.get_feature_names_out()),
        index=frame.index,
    )
    X.insert(0, config.INTERCEPT, 1.0)

    rank = np.linalg.matrix_rank(X.to_numpy())
    if rank < X.shape[1]:
        raise FitError(
            f"Design matrix is rank deficient (rank {rank} < {X.shape[1]} columns, "
            f"{X.shape[0]} rows)"
        )

    return X


def fit_severity_model(df, cfg):
    """
    Fits a Gamma GLM with log link for claim severity.

    The mean is exp(X @ beta) and the variance is dispersion * mean**2, with the
    dispersion estimated from Pearson residuals. Fitting uses IRLS capped at
    cfg.max_iter iterations.
    """
    frame = prepare_model_frame(df, cfg)
    X = build_design_matrix(frame, cfg)
    y = frame[config.TARGET].astype(float)

    gamma_family = sm.families.Gamma(link=sm.families.links.Log())

    print(f"Fitting Severity GLM on {len(y):,} claims and {X.shape[1]} terms...")
    try:
        results = sm.GLM(y, X, family=gamma_family).fit(method="IRLS", maxiter=cfg.max_iter)
    except (np.linalg.LinAlgError, ValueError) as exc:
        raise FitError(f"Gamma GLM fit failed: {exc}") from exc

    if not results.converged:
        raise FitError(f"IRLS did not converge within {cfg.max_iter} iterations")

    return SeverityFit(results=results, columns=list(X.columns))
