import io
from typing import Dict, Optional

import pandas as pd
import pytest

from xlens_core.data import SheetTable, frame_to_table


def to_xlsx_bytes(df: pd.DataFrame, extra_sheets: Optional[Dict[str, pd.DataFrame]] = None) -> bytes:
    buffer = io.BytesIO()
    with pd.ExcelWriter(buffer, engine="openpyxl") as writer:
        df.to_excel(writer, sheet_name="Sheet1", index=False)
        for name, extra in (extra_sheets or {}).items():
            extra.to_excel(writer, sheet_name=name, index=False)
    return buffer.getvalue()


def make_table(data: dict) -> SheetTable:
    return frame_to_table(pd.DataFrame(data))


@pytest.fixture
def sales_frame() -> pd.DataFrame:
    return pd.DataFrame(
        {
            "Month": ["Jan", "Feb", "Mar", "Apr"],
            "Revenue": [100, 120, 90, 150],
            "Units": [10, 12, 9, 8],
            "Region": ["North", "South", "North", "East"],
        }
    )


@pytest.fixture
def sales_xlsx(sales_frame) -> bytes:
    return to_xlsx_bytes(sales_frame)


@pytest.fixture
def abc_table() -> SheetTable:
    return make_table({"A": [1, 2, 3], "B": [4, 5, 6], "C": [7, 8, 9]})
