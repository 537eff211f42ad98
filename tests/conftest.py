import matplotlib

matplotlib.use("Agg")

import matplotlib.pyplot as plt
import numpy as np
import pandas as pd
import pytest

import config
from data_preprocessing import cast_categoricals

# Coefficients used to simulate severities from a Gamma / log-link process
TRUE_COEFS = {"Intercept": 7.0, "age": 0.01, "insured_sex_MALE": 0.3}


@pytest.fixture(autouse=True)
def close_figures():
    plt.close("all")
    yield
    plt.close("all")


@pytest.fixture
def five_row_claims():
    return pd.DataFrame(
        {
            "policy_number": [521585, 342868, 687698, 227811, 367455],
            "months_as_customer": [328, 228, 134, 256, 228],
            "age": [48, 42, 29, 41, 44],
            "policy_state": ["OH", "IN", "OH", "IL", "IL"],
            "policy_csl": ["250/500", "250/500", "100/300", "250/500", "500/1000"],
            "policy_deductable": [500, 500, 1000, 1000, 500],
            "policy_annual_premium": [1406.91, 1197.22, 1413.14, 1415.74, 1583.91],
            "umbrella_limit": [0, 5000000, 5000000, 6000000, 6000000],
            "insured_sex": ["MALE", "FEMALE", "MALE", "FEMALE", "FEMALE"],
            "insured_education_level": ["MD", "MD", "PhD", "PhD", "Associate"],
            "insured_occupation": [
                "craft-repair",
                "machine-op-inspct",
                "sales",
                "armed-forces",
                "sales",
            ],
            "insured_relationship": ["husband", "other-relative", "own-child", "unmarried", "unmarried"],
            "auto_make": ["Saab", "Mercedes", "Dodge", "Chevrolet", "Accura"],
            "auto_model": ["92x", "E400", "RAM", "Tahoe", "RSX"],
            "auto_year": [2004, 2007, 2007, 2014, 2009],
            "total_claim_amount": [100, 5000, 200, 15000, 300],
            "injury_claim": [10, 500, 20, 1500, 30],
            "property_claim": [10, 500, 20, 1500, 30],
            "vehicle_claim": [80, 4000, 160, 12000, 240],
        }
    )


@pytest.fixture
def analysis_cfg(tmp_path):
    """Config pointing every path into the test's temporary directory."""
    return config.AnalysisConfig(
        data_path=tmp_path / "data" / "insurance_claims.csv",
        output_dir=tmp_path / "outputs",
        model_data_path=tmp_path / "data" / "df_model.csv",
    )


@pytest.fixture
def small_model_cfg(analysis_cfg):
    """A model small enough to fit on the five-row fixture."""
    analysis_cfg.numeric_predictors = ["policy_deductable"]
    analysis_cfg.categorical_predictors = ["insured_sex"]
    return analysis_cfg


@pytest.fixture
def claims_csv(five_row_claims, analysis_cfg):
    analysis_cfg.data_path.parent.mkdir(parents=True, exist_ok=True)
    five_row_claims.to_csv(analysis_cfg.data_path, index=False)
    return analysis_cfg.data_path


@pytest.fixture
def simulated_claims():
    rng = np.random.default_rng(2024)
    n = 100
    shape = 1000.0

    age = rng.uniform(20, 65, size=n)
    sex = rng.choice(["FEMALE", "MALE"], size=n)
    mu = np.exp(
        TRUE_COEFS["Intercept"]
        + TRUE_COEFS["age"] * age
        + TRUE_COEFS["insured_sex_MALE"] * (sex == "MALE")
    )

    df = pd.DataFrame(
        {
            "age": age,
            "insured_sex": sex,
            "total_claim_amount": rng.gamma(shape, mu / shape),
        }
    )
    return cast_categoricals(df)


@pytest.fixture
def simulation_cfg(analysis_cfg):
    analysis_cfg.numeric_predictors = ["age"]
    analysis_cfg.categorical_predictors = ["insured_sex"]
    return analysis_cfg
