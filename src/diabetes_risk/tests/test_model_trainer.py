import dataclasses

import numpy as np
import pandas as pd
import pytest

from diabetes_risk.cleaner import DataCleaner
from diabetes_risk.encoder import CategoryEncoder
from diabetes_risk.errors import ConvergenceError, SingularDesignError
from diabetes_risk.model_trainer import ModelTrainer
from diabetes_risk.scaler import ContinuousScaler


@pytest.fixture
def train_frame(raw_frame):
    df = CategoryEncoder().transform(DataCleaner().transform(raw_frame))
    return ContinuousScaler().fit_transform(df)


def test_fit_uses_all_non_target_columns(train_frame):
    model = ModelTrainer().fit(train_frame)

    expected = tuple(c for c in train_frame.columns if c != "diabetes")
    assert model.feature_names == expected
    assert list(model.params.index) == ["const", *expected]
    assert model.n_obs == len(train_frame)


def test_fit_recovers_direction_of_strong_effects(train_frame):
    model = ModelTrainer().fit(train_frame)
    assert model.coefficients["HbA1c_level"] > 0
    assert model.coefficients["blood_glucose_level"] > 0
    assert model.intercept < 0


def test_predict_proba_in_unit_interval(train_frame):
    model = ModelTrainer().fit(train_frame)
    proba = model.predict_proba(train_frame)

    assert proba.shape == (len(train_frame),)
    assert ((proba > 0) & (proba < 1)).all()


def test_predict_proba_matches_logistic_formula(train_frame):
    model = ModelTrainer().fit(train_frame)
    row = train_frame.iloc[[0]]
    eta = model.intercept + float((row[list(model.feature_names)].iloc[0] * model.coefficients).sum())
    assert model.predict_proba(row)[0] == pytest.approx(1 / (1 + np.exp(-eta)))


def test_fitted_model_is_immutable(train_frame):
    model = ModelTrainer().fit(train_frame)
    with pytest.raises(dataclasses.FrozenInstanceError):
        model.n_iter = 0


def test_coefficient_table_columns(train_frame):
    table = ModelTrainer().fit(train_frame).coefficient_table()
    assert list(table.columns) == ["coef", "std_err", "z", "p_value", "odds_ratio"]
    assert table.index.name == "term"
    np.testing.assert_allclose(table["odds_ratio"], np.exp(table["coef"]))


def test_constant_column_raises_singular_design(train_frame):
    df = train_frame.copy()
    df["smoking_code"] = 1
    with pytest.raises(SingularDesignError) as exc_info:
        ModelTrainer().fit(df)
    assert exc_info.value.columns == ["smoking_code"]


def test_collinear_columns_raise_singular_design(train_frame):
    df = train_frame.copy()
    df["age_twice"] = 2 * df["age"]
    with pytest.raises(SingularDesignError, match="collinear"):
        ModelTrainer().fit(df)


def test_iteration_cap_raises_convergence_error(train_frame):
    with pytest.raises(ConvergenceError):
        ModelTrainer(max_iter=1).fit(train_frame)


def test_perfect_separation_raises_convergence_error():
    x = np.linspace(-3, 3, 40)
    df = pd.DataFrame({"x": x, "z": np.cos(x), "diabetes": (x > 0).astype(int)})
    with pytest.raises(ConvergenceError):
        ModelTrainer().fit(df)
