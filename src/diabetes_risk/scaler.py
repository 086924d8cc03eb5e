from typing import Dict, Optional, Sequence

import numpy as np
import pandas as pd

from .errors import DegenerateColumnError
from .schema import CONTINUOUS_COLUMNS
from .utils.logger import get_logger


class ContinuousScaler:
    """Standardizes continuous columns to zero mean and unit sample variance.

    Uses the sample standard deviation (ddof=1), so the scaled columns of the
    fitting frame have ``std() == 1`` under pandas' default. Binary and coded
    columns are left as they are.
    """

    def __init__(self, columns: Sequence[str] = CONTINUOUS_COLUMNS):
        self.columns = tuple(columns)
        self.logger = get_logger(self.__class__.__name__)
        self.means_: Optional[Dict[str, float]] = None
        self.stds_: Optional[Dict[str, float]] = None

    def fit(self, df: pd.DataFrame) -> "ContinuousScaler":
        means: Dict[str, float] = {}
        stds: Dict[str, float] = {}
        for col in self.columns:
            values = df[col].astype(float)
            std = float(values.std(ddof=1))
            if not np.isfinite(std) or std == 0.0:
                raise DegenerateColumnError(
                    f"cannot scale: standard deviation is {std}", column=col
                )
            means[col] = float(values.mean())
            stds[col] = std
        self.means_ = means
        self.stds_ = stds
        self.logger.info(f"Fitted scaler on {len(df):,} rows, columns={list(self.columns)}")
        return self

    def transform(self, df: pd.DataFrame) -> pd.DataFrame:
        if self.means_ is None or self.stds_ is None:
            raise RuntimeError("Call fit() before transform().")
        out = df.copy()
        for col in self.columns:
            out[col] = (out[col].astype(float) - self.means_[col]) / self.stds_[col]
        return out

    def fit_transform(self, df: pd.DataFrame) -> pd.DataFrame:
        return self.fit(df).transform(df)
