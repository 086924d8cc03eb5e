from typing import Literal

import pandas as pd
from sklearn.utils import resample

from .errors import ResampleError
from .schema import DIABETES
from .utils.logger import get_logger


class Balancer:
    """
    Handles class imbalance of a training frame via random oversampling (ROS)
    or random undersampling (RUS).

    ROS appends minority rows drawn with replacement until both classes hold
    the majority count; RUS keeps all minority rows and draws the same number
    of majority rows without replacement. The input frame is never modified.

    Example:
        balancer = Balancer(strategy="over", random_state=42)
        train_bal = balancer.balance(train_df)
    """

    def __init__(
        self,
        strategy: Literal["none", "over", "under"] = "none",
        target_col: str = DIABETES,
        random_state: int = 42,
    ):
        if strategy not in ("none", "over", "under"):
            raise ValueError(f"Unknown balancing strategy: {strategy}")
        self.strategy = strategy
        self.target_col = target_col
        self.random_state = random_state
        self.logger = get_logger(self.__class__.__name__)

    def _split_classes(self, df: pd.DataFrame):
        counts = df[self.target_col].value_counts()
        if len(counts) != 2:
            raise ResampleError(
                f"need both classes to balance, found {counts.to_dict()}",
                column=self.target_col,
            )
        # ties resolve to the lower label as majority
        majority_label = counts.sort_index().idxmax()
        minority_label = [label for label in counts.index if label != majority_label][0]
        df_maj = df[df[self.target_col] == majority_label]
        df_min = df[df[self.target_col] == minority_label]
        return df_maj, df_min

    def balance(self, df: pd.DataFrame) -> pd.DataFrame:
        if self.strategy == "none":
            return df.copy()

        df_maj, df_min = self._split_classes(df)
        n_maj, n_min = len(df_maj), len(df_min)

        if self.strategy == "over":
            n_to_add = n_maj - n_min
            if n_to_add == 0:
                out = df.copy()
            else:
                df_min_up = resample(
                    df_min,
                    replace=True,
                    n_samples=n_to_add,
                    random_state=self.random_state,
                )
                out = pd.concat([df, df_min_up])
        else:
            df_maj_down = resample(
                df_maj,
                replace=False,
                n_samples=n_min,
                random_state=self.random_state,
            )
            out = pd.concat([df_min, df_maj_down])

        self.logger.info(
            f"Applied class balancing '{self.strategy}': {len(df):,} -> {len(out):,} rows "
            f"(majority={n_maj:,}, minority={n_min:,})"
        )
        return out
