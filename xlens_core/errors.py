from __future__ import annotations

from typing import Optional


class XlensError(ValueError):
    """Base class for errors raised while analyzing a spreadsheet."""


class FormatError(XlensError):
    pass


class EmptyDataError(XlensError):
    pass


class NoNumericColumnsError(XlensError):
    pass


class InvalidAxisError(XlensError):
    def __init__(self, message: str, column: Optional[str] = None):
        super().__init__(message)
        self.column = column


class InsufficientColumnsError(XlensError):
    pass


class AnalysisError(XlensError):
    def __init__(self, message: str, column: Optional[str] = None):
        super().__init__(message)
        self.column = column


class ChartConfigError(XlensError):
    pass
