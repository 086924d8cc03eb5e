import numpy as np
import pandas as pd
import pytest

from diabetes_risk.evaluator import Evaluator


def test_counts_and_default_convention():
    y_true = np.array([0, 0, 0, 0, 0, 0, 1, 1, 1, 1])
    y_pred = np.array([0, 0, 0, 0, 0, 1, 1, 1, 0, 0])
    # TN=5 FP=1 FN=2 TP=2
    result = Evaluator().evaluate_labels(y_true, y_pred)
    c = result.confusion

    assert (c.tn, c.fp, c.fn, c.tp) == (5, 1, 2, 2)
    assert c.total == len(y_true)
    assert result.accuracy == pytest.approx(0.7)
    assert result.ppv == pytest.approx(5 / 7)
    assert result.npv == pytest.approx(2 / 3)
    assert result.sensitivity == pytest.approx(5 / 6)
    assert result.specificity == pytest.approx(2 / 4)
    assert result.undefined == []


def test_positive_label_one_uses_textbook_definitions():
    y_true = np.array([0, 0, 0, 0, 0, 0, 1, 1, 1, 1])
    y_pred = np.array([0, 0, 0, 0, 0, 1, 1, 1, 0, 0])
    result = Evaluator(positive_label=1).evaluate_labels(y_true, y_pred)

    assert result.ppv == pytest.approx(2 / 3)
    assert result.npv == pytest.approx(5 / 7)
    assert result.sensitivity == pytest.approx(2 / 4)
    assert result.specificity == pytest.approx(5 / 6)


def test_kappa_and_balanced_accuracy():
    y_true = np.array([0, 0, 1, 1])
    y_pred = np.array([0, 0, 1, 1])
    result = Evaluator().evaluate_labels(y_true, y_pred)
    assert result.kappa == pytest.approx(1.0)
    assert result.balanced_accuracy == pytest.approx(1.0)


def test_zero_denominator_is_flagged_not_zero():
    # nothing predicted as class 1
    y_true = np.array([0, 0, 0, 1])
    y_pred = np.array([0, 0, 0, 0])
    result = Evaluator().evaluate_labels(y_true, y_pred)

    assert result.npv is None
    assert "npv" in result.undefined
    assert result.ppv == pytest.approx(3 / 4)
    assert result.to_dict()["npv"] is None


class _FixedModel:
    def __init__(self, proba):
        self.proba = np.asarray(proba)

    def predict_proba(self, df):
        return self.proba


def test_threshold_is_strictly_greater_than():
    test_df = pd.DataFrame({"diabetes": [0, 1, 1]})
    model = _FixedModel([0.2, 0.5, 0.9])
    preds = Evaluator(threshold=0.5).predict(model, test_df)
    assert preds.tolist() == [0, 0, 1]


def test_evaluate_counts_sum_to_test_size():
    test_df = pd.DataFrame({"diabetes": [0, 0, 1, 1, 0, 1, 0]})
    model = _FixedModel([0.1, 0.7, 0.8, 0.3, 0.2, 0.6, 0.4])
    result = Evaluator().evaluate(model, test_df)
    assert result.confusion.total == len(test_df)
    assert result.confusion.as_frame().to_numpy().sum() == len(test_df)


def test_invalid_positive_label():
    with pytest.raises(ValueError):
        Evaluator(positive_label=2)
