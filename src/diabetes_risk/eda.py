import os
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence

import matplotlib

matplotlib.use("Agg")

import matplotlib.pyplot as plt  # noqa: E402
import pandas as pd  # noqa: E402
import seaborn as sns  # noqa: E402
from scipy.stats import chi2_contingency  # noqa: E402

from .schema import CATEGORICAL_COLUMNS, CONTINUOUS_COLUMNS, DIABETES  # noqa: E402
from .utils.logger import get_logger  # noqa: E402


@dataclass
class ChiSquareResult:
    column: str
    statistic: float
    dof: int
    p_value: float


@dataclass
class EdaSummary:
    n_rows: int
    class_counts: Dict[int, int]
    class_shares: Dict[int, float]
    chi_square: List[ChiSquareResult]
    continuous_by_class: pd.DataFrame
    figures: List[str] = field(default_factory=list)

    def chi_square_frame(self) -> pd.DataFrame:
        columns = ["column", "statistic", "dof", "p_value"]
        rows = [vars(r) for r in self.chi_square]
        return pd.DataFrame(rows, columns=columns).set_index("column")


class ExploratoryAnalyzer:
    """Class balance, chi-square association tests and per-class summaries.

    Works on the encoded (unscaled) dataset. Figures are only produced when
    ``figures_dir`` is set.
    """

    def __init__(
        self,
        target_col: str = DIABETES,
        categorical_cols: Sequence[str] = CATEGORICAL_COLUMNS,
        continuous_cols: Sequence[str] = CONTINUOUS_COLUMNS,
        figures_dir: Optional[str] = None,
    ):
        self.target_col = target_col
        self.categorical_cols = tuple(categorical_cols)
        self.continuous_cols = tuple(continuous_cols)
        self.figures_dir = figures_dir
        self.logger = get_logger(self.__class__.__name__)

    def class_balance(self, df: pd.DataFrame):
        counts = df[self.target_col].value_counts().sort_index()
        shares = counts / counts.sum()
        return (
            {int(k): int(v) for k, v in counts.items()},
            {int(k): float(v) for k, v in shares.items()},
        )

    def chi_square_tests(self, df: pd.DataFrame) -> List[ChiSquareResult]:
        results = []
        for col in self.categorical_cols:
            if col not in df.columns:
                continue
            table = pd.crosstab(df[col], df[self.target_col])
            if table.shape[0] < 2 or table.shape[1] < 2:
                self.logger.warning(f"Skipping chi-square for {col}: contingency table {table.shape}")
                continue
            stat, p_value, dof, _ = chi2_contingency(table)
            results.append(ChiSquareResult(col, float(stat), int(dof), float(p_value)))
        return results

    def continuous_summary(self, df: pd.DataFrame) -> pd.DataFrame:
        cols = [c for c in self.continuous_cols if c in df.columns]
        return df.groupby(self.target_col)[cols].agg(["mean", "std", "median"])

    def _save(self, name: str) -> str:
        os.makedirs(self.figures_dir, exist_ok=True)
        path = os.path.join(self.figures_dir, name)
        plt.tight_layout()
        plt.savefig(path, dpi=200)
        plt.close()
        self.logger.info(f"Saved figure: {path}")
        return path

    def plot(self, df: pd.DataFrame) -> List[str]:
        paths = []

        plt.figure(figsize=(5, 4))
        sns.countplot(x=df[self.target_col])
        plt.title("Class balance")
        paths.append(self._save("class_balance.png"))

        cols = [c for c in self.continuous_cols if c in df.columns]
        if cols:
            fig, axes = plt.subplots(1, len(cols), figsize=(4 * len(cols), 4))
            axes = [axes] if len(cols) == 1 else list(axes)
            for ax, col in zip(axes, cols):
                sns.boxplot(x=df[self.target_col], y=df[col], ax=ax)
                ax.set_title(col)
            paths.append(self._save("continuous_by_class.png"))

        return paths

    def run(self, df: pd.DataFrame) -> EdaSummary:
        counts, shares = self.class_balance(df)
        summary = EdaSummary(
            n_rows=len(df),
            class_counts=counts,
            class_shares=shares,
            chi_square=self.chi_square_tests(df),
            continuous_by_class=self.continuous_summary(df),
        )
        self.logger.info(f"Class balance: {counts}")
        if self.figures_dir:
            summary.figures.extend(self.plot(df))
        return summary
