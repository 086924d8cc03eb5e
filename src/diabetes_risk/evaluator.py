from dataclasses import dataclass, field
from typing import Dict, List, Optional

import numpy as np
import pandas as pd
from sklearn.metrics import confusion_matrix

from .model_trainer import FittedModel
from .schema import DIABETES
from .utils.logger import get_logger


@dataclass(frozen=True)
class ConfusionCounts:
    """Counts of (actual, predicted) pairs; label 1 is the diabetic class."""

    tn: int
    fp: int
    fn: int
    tp: int

    @property
    def total(self) -> int:
        return self.tn + self.fp + self.fn + self.tp

    def as_frame(self) -> pd.DataFrame:
        """Rows are actual labels, columns predicted labels."""
        return pd.DataFrame(
            [[self.tn, self.fp], [self.fn, self.tp]],
            index=pd.Index([0, 1], name="actual"),
            columns=pd.Index([0, 1], name="predicted"),
        )


@dataclass
class EvaluationResult:
    accuracy: float
    confusion: ConfusionCounts
    positive_label: int
    ppv: Optional[float]
    npv: Optional[float]
    sensitivity: Optional[float]
    specificity: Optional[float]
    balanced_accuracy: Optional[float]
    kappa: Optional[float]
    threshold: float
    undefined: List[str] = field(default_factory=list)

    def rates(self) -> Dict[str, Optional[float]]:
        return {
            "ppv": self.ppv,
            "npv": self.npv,
            "sensitivity": self.sensitivity,
            "specificity": self.specificity,
            "balanced_accuracy": self.balanced_accuracy,
            "kappa": self.kappa,
        }

    def to_dict(self) -> Dict[str, object]:
        out: Dict[str, object] = {
            "accuracy": self.accuracy,
            "confusion_matrix": {
                "tn": self.confusion.tn,
                "fp": self.confusion.fp,
                "fn": self.confusion.fn,
                "tp": self.confusion.tp,
            },
            "positive_label": self.positive_label,
            "threshold": self.threshold,
            "undefined": list(self.undefined),
        }
        out.update(self.rates())
        return out


def _ratio(num: int, den: int) -> Optional[float]:
    if den == 0:
        return None
    return num / den


class Evaluator:
    """
    Thresholds predicted probabilities and summarizes the confusion matrix.

    Predictive values follow ``positive_label``. With the default of 0 (the
    convention used by this study's reports, where the non-diabetic class is
    the reference "positive" level):

        PPV = TN / (TN + FN)        sensitivity = TN / (TN + FP)
        NPV = TP / (TP + FP)        specificity = TP / (TP + FN)

    With ``positive_label=1`` the textbook definitions apply. Rates whose
    denominator is zero are reported as ``None`` and listed in
    ``EvaluationResult.undefined``.
    """

    def __init__(self, threshold: float = 0.5, positive_label: int = 0, target_col: str = DIABETES):
        if positive_label not in (0, 1):
            raise ValueError("positive_label must be 0 or 1")
        self.threshold = threshold
        self.positive_label = positive_label
        self.target_col = target_col
        self.logger = get_logger(self.__class__.__name__)

    def predict(self, model: FittedModel, df: pd.DataFrame) -> np.ndarray:
        proba = model.predict_proba(df)
        return (proba > self.threshold).astype(int)

    def evaluate_labels(self, y_true: np.ndarray, y_pred: np.ndarray) -> EvaluationResult:
        y_true = np.asarray(y_true).astype(int)
        y_pred = np.asarray(y_pred).astype(int)

        tn, fp, fn, tp = (int(v) for v in confusion_matrix(y_true, y_pred, labels=[0, 1]).ravel())
        counts = ConfusionCounts(tn=tn, fp=fp, fn=fn, tp=tp)
        total = counts.total
        if total == 0:
            raise ValueError("cannot evaluate an empty test set")

        if self.positive_label == 0:
            ppv, npv = _ratio(tn, tn + fn), _ratio(tp, tp + fp)
            sensitivity, specificity = _ratio(tn, tn + fp), _ratio(tp, tp + fn)
        else:
            ppv, npv = _ratio(tp, tp + fp), _ratio(tn, tn + fn)
            sensitivity, specificity = _ratio(tp, tp + fn), _ratio(tn, tn + fp)

        balanced = None
        if sensitivity is not None and specificity is not None:
            balanced = (sensitivity + specificity) / 2

        accuracy = (tp + tn) / total
        # Cohen's kappa against chance agreement from the marginals
        expected = ((tn + fp) * (tn + fn) + (fn + tp) * (fp + tp)) / (total * total)
        kappa = None if expected == 1 else (accuracy - expected) / (1 - expected)

        result = EvaluationResult(
            accuracy=accuracy,
            confusion=counts,
            positive_label=self.positive_label,
            ppv=ppv,
            npv=npv,
            sensitivity=sensitivity,
            specificity=specificity,
            balanced_accuracy=balanced,
            kappa=kappa,
            threshold=self.threshold,
        )
        result.undefined.extend(name for name, value in result.rates().items() if value is None)
        if result.undefined:
            self.logger.warning(f"Undefined rates (zero denominator): {result.undefined}")
        return result

    def evaluate(self, model: FittedModel, test_df: pd.DataFrame) -> EvaluationResult:
        """Predict on ``test_df`` and compute accuracy and confusion-matrix rates."""
        y_pred = self.predict(model, test_df)
        result = self.evaluate_labels(test_df[self.target_col].to_numpy(), y_pred)
        self.logger.info(
            f"Accuracy={result.accuracy:.4f} on {result.confusion.total:,} test rows "
            f"(TN={result.confusion.tn}, FP={result.confusion.fp}, "
            f"FN={result.confusion.fn}, TP={result.confusion.tp})"
        )
        return result
