import json
import os
from textwrap import indent
from typing import TYPE_CHECKING, Dict, List, Mapping, Optional

import matplotlib

matplotlib.use("Agg")

import matplotlib.pyplot as plt  # noqa: E402
import pandas as pd  # noqa: E402
import seaborn as sns  # noqa: E402

from .eda import EdaSummary  # noqa: E402
from .utils.logger import get_logger  # noqa: E402

if TYPE_CHECKING:
    from .pipeline import RunResult


def _fmt(value: Optional[float]) -> str:
    if value is None or pd.isna(value):
        return "undefined"
    return f"{value:.4f}"


def _cell(value) -> str:
    if isinstance(value, int):
        return f"{value:,}"
    return _fmt(value)


def convention_note(positive_label: int) -> str:
    if positive_label == 0:
        return (
            "Predictive values treat class 0 (non-diabetic) as the positive level: "
            "PPV = TN/(TN+FN), NPV = TP/(TP+FP). This inverts the textbook labelling."
        )
    return "Predictive values treat class 1 (diabetic) as positive: PPV = TP/(TP+FP), NPV = TN/(TN+FN)."


class ReportWriter:
    """Renders pipeline results as text, JSON metrics and confusion-matrix figures."""

    def __init__(self, figures_dir: Optional[str] = None):
        self.figures_dir = figures_dir
        self.logger = get_logger(self.__class__.__name__)

    @staticmethod
    def comparison_table(results: Mapping[str, "RunResult"]) -> pd.DataFrame:
        rows = []
        for label, run in results.items():
            ev = run.evaluation
            row = {"run": label, "n_train": run.n_train, "accuracy": ev.accuracy}
            row.update(ev.rates())
            rows.append(row)
        return pd.DataFrame(rows).set_index("run")

    def _render_eda(self, eda: EdaSummary) -> List[str]:
        lines = ["Exploratory analysis", "--------------------"]
        lines.append(f"Rows after cleaning: {eda.n_rows:,}")
        for label, count in eda.class_counts.items():
            lines.append(f"  class {label}: {count:,} ({eda.class_shares[label]:.2%})")
        if eda.chi_square:
            lines.append("Chi-square tests against the target:")
            lines.append(indent(eda.chi_square_frame().to_string(), " " * 4))
        lines.append("Continuous attributes by class:")
        lines.append(indent(eda.continuous_by_class.round(3).to_string(), " " * 4))
        lines.append("")
        return lines

    def _render_run(self, label: str, run: "RunResult") -> List[str]:
        ev = run.evaluation
        counts = ev.confusion
        title = f"Run: {label} (resampling={run.strategy})"
        lines = [title, "-" * len(title)]
        lines.append(f"Training rows: {run.n_train:,} {run.train_class_counts}")
        lines.append("Coefficients:")
        lines.append(indent(run.model.coefficient_table().round(4).to_string(), " " * 4))
        lines.append(f"Accuracy: {ev.accuracy:.4f}")
        lines.append("Confusion matrix (rows = actual, columns = predicted):")
        lines.append(indent(counts.as_frame().to_string(), " " * 4))
        lines.append(f"PPV: {_fmt(ev.ppv)}")
        lines.append(f"NPV: {_fmt(ev.npv)}")
        lines.append(f"Sensitivity: {_fmt(ev.sensitivity)}")
        lines.append(f"Specificity: {_fmt(ev.specificity)}")
        lines.append(f"Balanced accuracy: {_fmt(ev.balanced_accuracy)}")
        lines.append(f"Kappa: {_fmt(ev.kappa)}")
        if ev.undefined:
            lines.append(f"Undefined rates (zero denominator): {', '.join(ev.undefined)}")
        lines.append("")
        return lines

    def render(
        self,
        results: Mapping[str, "RunResult"],
        eda: Optional[EdaSummary] = None,
        positive_label: int = 0,
    ) -> str:
        lines = ["Diabetes logistic regression under class rebalancing", "=" * 52, ""]
        if eda is not None:
            lines.extend(self._render_eda(eda))
        for label, run in results.items():
            lines.extend(self._render_run(label, run))
        if results:
            lines.append("Comparison")
            lines.append("----------")
            table = self.comparison_table(results).astype(object)
            table = table.apply(lambda col: col.map(_cell))
            lines.append(table.to_string())
            lines.append("")
        lines.append(convention_note(positive_label))
        return "\n".join(lines) + "\n"

    def write(self, text: str, path: str) -> str:
        directory = os.path.dirname(path)
        if directory:
            os.makedirs(directory, exist_ok=True)
        with open(path, "w") as f:
            f.write(text)
        self.logger.info(f"Saved report: {path}")
        return path

    def write_metrics(self, results: Mapping[str, "RunResult"], path: str) -> str:
        payload: Dict[str, object] = {}
        for label, run in results.items():
            entry = run.evaluation.to_dict()
            entry["coefficients"] = {k: float(v) for k, v in run.model.params.items()}
            entry["n_train"] = run.n_train
            payload[label] = entry

        directory = os.path.dirname(path)
        if directory:
            os.makedirs(directory, exist_ok=True)
        with open(path, "w") as f:
            json.dump(payload, f, indent=4)
        self.logger.info(f"Saved metrics: {path}")
        return path

    def plot_confusion_matrices(self, results: Mapping[str, "RunResult"]) -> List[str]:
        """Row-normalized heatmap per run, saved to ``figures_dir``."""
        if not self.figures_dir:
            return []
        os.makedirs(self.figures_dir, exist_ok=True)

        paths = []
        for label, run in results.items():
            cm = run.evaluation.confusion.as_frame().astype(float)
            row_sums = cm.sum(axis=1).replace(0, 1.0)
            cm = cm.div(row_sums, axis=0)

            plt.figure(figsize=(6, 5))
            sns.heatmap(
                cm,
                annot=True,
                fmt=".2f",
                cmap="Blues",
                xticklabels=["No Diabetes", "Diabetes"],
                yticklabels=["No Diabetes", "Diabetes"],
            )
            plt.xlabel("Predicted")
            plt.ylabel("Actual")
            plt.title(f"Confusion Matrix (Normalized) - {label}")

            path = os.path.join(self.figures_dir, f"confusion_matrix_{label}.png")
            plt.tight_layout()
            plt.savefig(path, dpi=200)
            plt.close()
            self.logger.info(f"Saved confusion matrix: {path}")
            paths.append(path)
        return paths
