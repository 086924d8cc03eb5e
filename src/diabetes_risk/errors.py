"""Error taxonomy for the pipeline.

Every error names the stage that raised it. None of them are recovered from
inside the pipeline: they propagate to the caller and abort the run.
"""

from typing import Any, Iterable, Optional


class PipelineError(Exception):
    """Base class for all pipeline failures."""

    stage = "pipeline"

    def __init__(self, message: str, *, column: Optional[str] = None, row: Any = None):
        self.message = message
        self.column = column
        self.row = row
        super().__init__(message)

    def __str__(self) -> str:
        where = []
        if self.column is not None:
            where.append(f"column={self.column!r}")
        if self.row is not None:
            where.append(f"row={self.row!r}")
        suffix = f" ({', '.join(where)})" if where else ""
        return f"[{self.stage}] {self.message}{suffix}"


class DatasetIOError(PipelineError, OSError):
    """Dataset file is missing or cannot be read."""

    stage = "loader"


class ParseError(PipelineError, ValueError):
    """Dataset file is malformed (header, field count, non-numeric values)."""

    stage = "loader"


class UnknownCategoryError(PipelineError, ValueError):
    """A categorical value has no entry in the encoding table."""

    stage = "encoder"

    def __init__(self, column: str, values: Iterable[Any], row: Any = None):
        self.values = sorted({str(v) for v in values})
        super().__init__(
            f"unmapped value(s) {self.values} in categorical column",
            column=column,
            row=row,
        )


class DegenerateColumnError(PipelineError, ValueError):
    """A continuous column has zero (or undefined) standard deviation."""

    stage = "scaler"


class SplitError(PipelineError, ValueError):
    """Dataset cannot be partitioned with stratification on the target."""

    stage = "splitter"


class ResampleError(PipelineError, ValueError):
    """Training subset cannot be balanced."""

    stage = "resampler"


class ConvergenceError(PipelineError, RuntimeError):
    """Model fitting did not converge."""

    stage = "model"


class SingularDesignError(PipelineError, RuntimeError):
    """Design matrix is rank-deficient."""

    stage = "model"

    def __init__(self, message: str, columns: Iterable[str] = ()):
        self.columns = list(columns)
        super().__init__(message)
