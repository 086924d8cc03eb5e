import numpy as np
import pandas as pd
import pytest

from diabetes_risk.schema import RAW_COLUMNS


def make_raw_frame(n: int = 800, seed: int = 0) -> pd.DataFrame:
    """Synthetic records shaped like the diabetes prediction dataset."""
    rng = np.random.RandomState(seed)

    age = rng.uniform(2, 80, n).round(1)
    hba1c = rng.normal(5.6, 1.0, n).round(1)
    glucose = rng.normal(140, 40, n).round(0)
    bmi = rng.normal(27, 6, n).round(2)
    hypertension = rng.binomial(1, 0.1, n)
    heart_disease = rng.binomial(1, 0.05, n)

    logit = (
        -2.3
        + 0.03 * (age - 45)
        + 1.0 * (hba1c - 5.6)
        + 0.015 * (glucose - 140)
        + 0.6 * hypertension
    )
    diabetes = rng.binomial(1, 1 / (1 + np.exp(-logit)))

    return pd.DataFrame(
        {
            "gender": rng.choice(["Male", "Female", "Other"], n, p=[0.45, 0.53, 0.02]),
            "age": age,
            "hypertension": hypertension,
            "heart_disease": heart_disease,
            "smoking_history": rng.choice(
                ["never", "No Info", "former", "current", "not current", "ever"],
                n,
                p=[0.35, 0.3, 0.1, 0.1, 0.08, 0.07],
            ),
            "bmi": bmi,
            "HbA1c_level": hba1c,
            "blood_glucose_level": glucose,
            "diabetes": diabetes,
        }
    )[list(RAW_COLUMNS)]


@pytest.fixture
def raw_frame() -> pd.DataFrame:
    return make_raw_frame()


@pytest.fixture
def raw_csv(tmp_path, raw_frame) -> str:
    path = tmp_path / "diabetes.csv"
    raw_frame.to_csv(path, index=False)
    return str(path)


@pytest.fixture
def encoded_frame() -> pd.DataFrame:
    """Small clean, encoded frame (no scaling)."""
    return pd.DataFrame(
        {
            "gender_code": [0, 1, 1, 0, 2, 1, 0, 1, 0, 1],
            "age": [45.0, 60.0, 33.0, 71.0, 25.0, 52.0, 80.0, 19.0, 66.0, 40.0],
            "hypertension": [0, 1, 0, 1, 0, 0, 1, 0, 0, 0],
            "heart_disease": [0, 0, 0, 1, 0, 0, 1, 0, 0, 0],
            "smoking_code": [0, 1, 2, 1, 0, 0, 1, 2, 0, 1],
            "bmi": [27.3, 31.0, 22.5, 29.9, 24.1, 35.2, 26.7, 21.0, 30.4, 28.8],
            "HbA1c_level": [5.8, 6.6, 4.8, 7.0, 5.0, 6.1, 6.8, 4.5, 5.7, 6.0],
            "blood_glucose_level": [140.0, 200.0, 85.0, 240.0, 100.0, 155.0, 220.0, 90.0, 130.0, 145.0],
            "diabetes": [0, 0, 0, 1, 0, 0, 1, 0, 0, 0],
        }
    )
