"""Core (UI-agnostic) spreadsheet analysis logic.

This package contains:
- sheet loading (XLSX/XLS bytes -> SheetTable)
- column classification and trend analysis
- chart spec building (plus Altair -> Vega-Lite export)
- summary formatting and the end-to-end analysis pipeline
"""
