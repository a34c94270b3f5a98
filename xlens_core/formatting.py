from __future__ import annotations

import math


SIZE_UNITS = ("Bytes", "KB", "MB", "GB")


def format_file_size(num_bytes: int) -> str:
    if num_bytes <= 0:
        return "0 Bytes"
    i = min(int(math.floor(math.log(num_bytes, 1024))), len(SIZE_UNITS) - 1)
    value = num_bytes / (1024 ** i)
    text = f"{value:.2f}".rstrip("0").rstrip(".")
    return f"{text} {SIZE_UNITS[i]}"
