import csv
import os
from typing import Optional

import numpy as np
import pandas as pd

from .errors import DatasetIOError, ParseError
from .schema import NUMERIC_COLUMNS, RAW_COLUMNS, TEXT_COLUMNS
from .utils.logger import get_logger


class DataLoader:
    """Loads the diabetes CSV with typed columns and optionally samples rows."""

    def __init__(
        self,
        path: str,
        sample_size: Optional[int] = None,
        random_state: int = 42,
    ):
        self.path = path
        self.sample_size = sample_size
        self.random_state = random_state
        self.logger = get_logger(self.__class__.__name__)

    def _check_field_counts(self) -> None:
        """Every data line must carry as many fields as the header."""
        with open(self.path, "r", newline="", encoding="utf-8") as f:
            reader = csv.reader(f)
            header = next(reader, None)
            if header is None:
                raise ParseError(f"{self.path} is empty")
            for row in reader:
                if not row:
                    continue
                if len(row) != len(header):
                    raise ParseError(
                        f"expected {len(header)} fields, found {len(row)}",
                        row=f"line {reader.line_num}",
                    )

    def _check_header(self, df: pd.DataFrame) -> None:
        missing = [c for c in RAW_COLUMNS if c not in df.columns]
        unexpected = [c for c in df.columns if c not in RAW_COLUMNS]
        if missing or unexpected:
            raise ParseError(
                f"header mismatch: missing={missing}, unexpected={unexpected}"
            )

    @staticmethod
    def _to_numeric(df: pd.DataFrame) -> pd.DataFrame:
        for col in NUMERIC_COLUMNS:
            values = df[col]
            if values.dtype == object:
                values = values.str.strip().replace("", np.nan)
            try:
                df[col] = pd.to_numeric(values, errors="raise").astype(float)
            except (ValueError, TypeError) as exc:
                bad = pd.to_numeric(values, errors="coerce").isna() & values.notna()
                row = bad.idxmax() if bad.any() else None
                raise ParseError(f"non-numeric value: {exc}", column=col, row=row) from exc
        return df

    def load(self) -> pd.DataFrame:
        if not os.path.isfile(self.path):
            raise DatasetIOError(f"dataset not found: {self.path}")

        try:
            self._check_field_counts()
            df = pd.read_csv(
                self.path,
                dtype={col: object for col in TEXT_COLUMNS},
                keep_default_na=False,
                na_values=[""],
                skipinitialspace=True,
            )
        except (PermissionError, UnicodeDecodeError, IsADirectoryError) as exc:
            raise DatasetIOError(f"cannot read {self.path}: {exc}") from exc
        except pd.errors.EmptyDataError as exc:
            raise ParseError(f"{self.path} has no header row") from exc
        except pd.errors.ParserError as exc:
            raise ParseError(str(exc)) from exc

        df.columns = [str(c).strip() for c in df.columns]
        self._check_header(df)
        df = self._to_numeric(df[list(RAW_COLUMNS)].copy())

        if self.sample_size:
            df = df.sample(min(self.sample_size, len(df)), random_state=self.random_state)

        self.logger.info(f"Loaded {self.path}: {df.shape[0]:,} rows x {df.shape[1]} cols")
        return df
