"""Export-Modul: JSON, CSV und Excel (openpyxl) für Einschreibungen."""

from export.json_export import export_json, records_to_json
from export.csv_export import export_csv
from export.excel_export import ExcelExporter

__all__ = ["export_json", "records_to_json", "export_csv", "ExcelExporter"]
