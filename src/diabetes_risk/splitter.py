from typing import Tuple

import pandas as pd
from sklearn.model_selection import train_test_split

from .errors import SplitError
from .schema import DIABETES
from .utils.logger import get_logger


class StratifiedSplitter:
    """Seeded train/test partition stratified on the target."""

    def __init__(self, train_ratio: float = 0.8, target_col: str = DIABETES, random_state: int = 42):
        if not 0.0 < train_ratio < 1.0:
            raise ValueError(f"train_ratio must be in (0, 1), got {train_ratio}")
        self.train_ratio = train_ratio
        self.target_col = target_col
        self.random_state = random_state
        self.logger = get_logger(self.__class__.__name__)

    def split(self, df: pd.DataFrame) -> Tuple[pd.DataFrame, pd.DataFrame]:
        counts = df[self.target_col].value_counts()
        if len(counts) < 2 or counts.min() < 2:
            raise SplitError(
                f"stratified split needs at least 2 rows per class, found {counts.to_dict()}",
                column=self.target_col,
            )

        try:
            train_df, test_df = train_test_split(
                df,
                train_size=self.train_ratio,
                stratify=df[self.target_col],
                shuffle=True,
                random_state=self.random_state,
            )
        except ValueError as exc:
            # e.g. a test share too small to hold one row of each class
            raise SplitError(str(exc), column=self.target_col) from exc

        train_df = train_df.copy()
        test_df = test_df.copy()

        self.logger.info(
            f"Split {len(df):,} rows -> train={len(train_df):,}, test={len(test_df):,} "
            f"(train positive rate={train_df[self.target_col].mean():.4f}, "
            f"test positive rate={test_df[self.target_col].mean():.4f})"
        )
        return train_df, test_df
