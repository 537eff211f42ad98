"""
Claim severity analysis: load the claims, chart severity, fit a Gamma GLM and
report the coefficients as percentage effects.

Run from the project root with ``python src/severity_pipeline.py``.
"""

import sys

import pandas as pd

import config
import data_preprocessing
import effect_report
import severity_model
import severity_plots
from errors import PipelineStageError


def _run_stage(stage, func, *args):
    # Any failure stops the whole run; tag it with the stage it came from
    try:
        return func(*args)
    except Exception as exc:
        raise PipelineStageError(stage, exc) from exc


def run_severity_analysis(cfg=None):
    """
    Runs the full analysis once, stage by stage.

    Parameters:
    -----------
    cfg : AnalysisConfig, optional
        Input path, output locations and model predictors (default: AnalysisConfig())

    Returns:
    --------
    dict containing:
        - model_data: pd.DataFrame, the cleaned modeling dataset
        - severity_summary: pd.Series of severity summary statistics
        - plots: list of Paths to the saved charts
        - fit: severity_model.SeverityFit
        - effects: pd.DataFrame, full percentage-effect table
        - top_effects: pd.DataFrame, largest effects only
        - model_data_path: Path of the saved modeling dataset
    """
    if cfg is None:
        cfg = config.AnalysisConfig()

    df_model = _run_stage("Data Loader", data_preprocessing.load_claims, cfg)
    severity_summary = data_preprocessing.summarize_severity(df_model)

    plots = _run_stage("Exploratory Visualizer", severity_plots.save_severity_plots, df_model, cfg)

    fit = _run_stage("Severity Model Fitter", severity_model.fit_severity_model, df_model, cfg)

    effects = _run_stage("Effect Reporter", effect_report.build_effect_table, fit.params)
    model_data_path = _run_stage(
        "Effect Reporter", effect_report.write_model_data, df_model, cfg.model_data_path
    )

    return {
        "model_data": df_model,
        "severity_summary": severity_summary,
        "plots": plots,
        "fit": fit,
        "effects": effects,
        "top_effects": effect_report.top_effects(effects),
        "model_data_path": model_data_path,
    }


def main():
    print("=" * 50)
    print("CLAIM SEVERITY ANALYSIS")
    print("=" * 50)

    try:
        result = run_severity_analysis(config.AnalysisConfig())
    except PipelineStageError as err:
        print(f"\nAnalysis stopped in stage '{err.stage}'", file=sys.stderr)
        print(f"Cause: {type(err.cause).__name__}: {err.cause}", file=sys.stderr)
        sys.exit(1)

    print("\n" + "-" * 50)
    print("Claim Severity Summary")
    print("-" * 50)
    print(result["severity_summary"].map("{:,.2f}".format).to_string())

    fit = result["fit"]
    print("\n" + "=" * 50)
    print(f"SEVERITY GLM ({fit.family}, {fit.link} link)")
    print("=" * 50)
    print(fit.summary())
    print(f"Dispersion (Pearson): {fit.dispersion:.4f}")

    # The intercept isn't interpreted, so it's not in the effect table
    print("\n" + "=" * 50)
    print(f"TOP {config.TOP_EFFECTS} EFFECTS ON EXPECTED SEVERITY")
    print("=" * 50)
    with pd.option_context("display.width", 120, "display.float_format", "{:,.4f}".format):
        print(result["top_effects"].to_string(index=False))

    print("\nAnalysis complete.")


if __name__ == "__main__":
    main()
