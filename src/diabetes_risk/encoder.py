from typing import Mapping, Sequence, Tuple

import pandas as pd

from .errors import UnknownCategoryError
from .schema import BINARY_COLUMNS, DEFAULT_ENCODING_TABLES, ENCODED_COLUMNS
from .utils.logger import get_logger


class CategoryEncoder:
    """Maps categorical text to integer codes using fixed lookup tables.

    ``tables`` maps a raw column name to ``(code_column, {raw_value: code})``.
    Raw columns are replaced by their code columns. Binary columns are checked
    to hold only 0/1 and cast to ``int``. Values missing from a table raise
    :class:`UnknownCategoryError`; nothing is silently null-coded.
    """

    def __init__(
        self,
        tables: Mapping[str, Tuple[str, Mapping[str, int]]] = DEFAULT_ENCODING_TABLES,
        binary_columns: Sequence[str] = BINARY_COLUMNS,
        column_order: Sequence[str] = ENCODED_COLUMNS,
    ):
        self.tables = tables
        self.binary_columns = tuple(binary_columns)
        self.column_order = tuple(column_order)
        self.logger = get_logger(self.__class__.__name__)

    def _encode_column(self, out: pd.DataFrame, raw_col: str) -> None:
        code_col, table = self.tables[raw_col]
        codes = out[raw_col].map(dict(table))
        unknown = codes.isna()
        if unknown.any():
            raise UnknownCategoryError(
                raw_col,
                out.loc[unknown, raw_col].unique(),
                row=unknown.idxmax(),
            )
        out[code_col] = codes.astype(int)
        out.drop(columns=[raw_col], inplace=True)

    def _check_binary(self, out: pd.DataFrame, col: str) -> None:
        values = pd.to_numeric(out[col], errors="coerce")
        bad = ~values.isin([0, 1])
        if bad.any():
            raise UnknownCategoryError(col, out.loc[bad, col].unique(), row=bad.idxmax())
        out[col] = values.astype(int)

    def transform(self, df: pd.DataFrame) -> pd.DataFrame:
        out = df.copy()

        for raw_col, (code_col, _) in self.tables.items():
            if raw_col in out.columns:
                self._encode_column(out, raw_col)
            elif code_col in out.columns:
                # already encoded
                self.logger.debug(f"{raw_col} already encoded as {code_col}")
            else:
                raise KeyError(f"Column '{raw_col}' not found for encoding")

        for col in self.binary_columns:
            if col in out.columns:
                self._check_binary(out, col)

        ordered = [c for c in self.column_order if c in out.columns]
        rest = [c for c in out.columns if c not in ordered]
        return out[ordered + rest]
