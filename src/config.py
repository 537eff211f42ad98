"""
Configuration file for Insurance Claim Severity Modelling.

This module centralizes the column lists, model features and plotting constants
used throughout the project. The paths are bundled in ``AnalysisConfig`` so
every stage receives them explicitly instead of relying on the working directory.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import List

# ============================================================================
# DATA SOURCES
# ============================================================================

# Project root, resolved from this file so relative paths work from anywhere
ROOT_DIR = Path(__file__).resolve().parent.parent

DATA_PATH = ROOT_DIR / "data" / "insurance_claims.csv"
OUTPUT_DIR = ROOT_DIR / "outputs"
MODEL_DATA_PATH = ROOT_DIR / "data" / "df_model.csv"

# ============================================================================
# COLUMN SELECTION
# ============================================================================

TARGET = "total_claim_amount"

# Variables an actuary would consider for severity, plus the claim amounts
KEEP_VARS = [
    "months_as_customer",
    "age",
    "policy_state",
    "policy_csl",
    "policy_deductable",
    "policy_annual_premium",
    "umbrella_limit",
    "insured_sex",
    "insured_education_level",
    "insured_occupation",
    "insured_relationship",
    "auto_make",
    "auto_model",
    "auto_year",
    "total_claim_amount",
    "injury_claim",
    "property_claim",
    "vehicle_claim",
]

CATEGORICAL_VARS = [
    "policy_state",
    "policy_csl",
    "insured_sex",
    "insured_education_level",
    "insured_occupation",
    "insured_relationship",
    "auto_make",
    "auto_model",
]

# Label given to missing categorical values so they form their own level
MISSING_LEVEL = "missing"

# ============================================================================
# MODEL FEATURES
# ============================================================================

NUMERICAL_FEATURES = [
    "age",
    "months_as_customer",
    "policy_deductable",
    "policy_annual_premium",
    "umbrella_limit",
    "auto_year",
]

# Reference level is the first label in sorted order
CATEGORICAL_FEATURES = [
    "insured_sex",
    "insured_education_level",
    "insured_relationship",
]

INTERCEPT = "Intercept"

# ============================================================================
# MODEL PARAMETERS
# ============================================================================

FAMILY_NAME = "Gamma"
LINK_NAME = "log"

# IRLS iteration cap; not converging within it is a fit failure
GLM_MAX_ITER = 100

# ============================================================================
# VISUALIZATION PARAMETERS
# ============================================================================

PLOT_FIGSIZE_WIDTH = 8
PLOT_FIGSIZE_HEIGHT = 5

HISTOGRAM_BINS = 50
HISTOGRAM_COLOR = "steelblue"
BOXPLOT_COLOR = "0.85"

HISTOGRAM_FILENAME = "severity_histogram.png"
BOXPLOT_FILENAME = "severity_by_deductible.png"

DEDUCTIBLE_COL = "policy_deductable"

# ============================================================================
# REPORTING
# ============================================================================

TOP_EFFECTS = 15


@dataclass
class AnalysisConfig:
    """Paths and model settings handed to every stage of the analysis."""

    data_path: Path = DATA_PATH
    output_dir: Path = OUTPUT_DIR
    model_data_path: Path = MODEL_DATA_PATH
    numeric_predictors: List[str] = field(default_factory=lambda: list(NUMERICAL_FEATURES))
    categorical_predictors: List[str] = field(
        default_factory=lambda: list(CATEGORICAL_FEATURES)
    )
    max_iter: int = GLM_MAX_ITER

    def __post_init__(self):
        self.data_path = Path(self.data_path)
        self.output_dir = Path(self.output_dir)
        self.model_data_path = Path(self.model_data_path)

    @property
    def predictors(self) -> List[str]:
        return self.numeric_predictors + self.categorical_predictors
