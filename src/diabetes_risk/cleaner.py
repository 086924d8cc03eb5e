from typing import Sequence

import numpy as np
import pandas as pd

from .schema import SMOKING_HISTORY, SMOKING_SENTINEL, TEXT_COLUMNS
from .utils.logger import get_logger


class DataCleaner:
    """Drops incomplete records and the smoking-history sentinel.

    Text fields are trimmed; a text field that is empty after trimming counts
    as missing. The sentinel comparison is exact and case-sensitive, applied to
    the trimmed value. Running the cleaner on its own output is a no-op.
    """

    def __init__(
        self,
        sentinel: str = SMOKING_SENTINEL,
        sentinel_column: str = SMOKING_HISTORY,
        text_columns: Sequence[str] = TEXT_COLUMNS,
    ):
        self.sentinel = sentinel
        self.sentinel_column = sentinel_column
        self.text_columns = tuple(text_columns)
        self.logger = get_logger(self.__class__.__name__)

    def _normalize_text(self, out: pd.DataFrame) -> pd.DataFrame:
        for col in self.text_columns:
            if col not in out.columns:
                continue
            values = out[col].astype(object)
            present = values.notna()
            values[present] = values[present].astype(str).str.strip()
            out[col] = values.replace("", np.nan)
        return out

    def drop_incomplete(self, df: pd.DataFrame) -> pd.DataFrame:
        out = self._normalize_text(df.copy())
        before = len(out)
        out = out.dropna(how="any")
        dropped = before - len(out)
        if dropped:
            self.logger.warning(f"Dropped {dropped:,} rows with missing fields")
        return out

    def drop_sentinel(self, df: pd.DataFrame) -> pd.DataFrame:
        if self.sentinel_column not in df.columns:
            return df.copy()
        mask = df[self.sentinel_column] == self.sentinel
        dropped = int(mask.sum())
        if dropped:
            self.logger.warning(
                f"Dropped {dropped:,} rows with {self.sentinel_column}={self.sentinel!r}"
            )
        return df.loc[~mask].copy()

    def transform(self, df: pd.DataFrame) -> pd.DataFrame:
        before = len(df)
        out = self.drop_sentinel(self.drop_incomplete(df))
        self.logger.info(f"Cleaned dataset: {before:,} -> {len(out):,} rows")
        return out
