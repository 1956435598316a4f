"""Excel-Export der Einschreibungen (openpyxl)."""

import logging
from pathlib import Path
from typing import Optional, Union

from analysis.statistics import GeneralStatistics
from config.defaults import CSV_HEADER
from export.helpers import COLORS, prepare_target, record_rows, today_str
from models.enrollment import EnrollmentRecord

logger = logging.getLogger(__name__)


class ExcelExporter:
    """Schreibt Datensätze (und optional die Statistik) in eine Excel-Datei."""

    # Spaltenbreiten (Excel-Einheiten)
    COL_ID_W   = 14
    COL_NAME_W = 30
    COL_CODE_W = 16

    SHEET_RECORDS = "Einschreibungen"
    SHEET_STATS   = "Statistik"

    def __init__(self, records: list[EnrollmentRecord],
                 statistics: Optional[GeneralStatistics] = None):
        self.records    = records
        self.statistics = statistics

    # ─── Öffentliche API ──────────────────────────────────────────────────────

    def export(self, output_path: Union[str, Path]) -> Path:
        """Erstellt die Excel-Datei mit allen Sheets."""
        from openpyxl import Workbook
        wb = Workbook()
        wb.remove(wb.active)   # Leeres Standard-Sheet entfernen

        self._sheet_records(wb)
        if self.statistics is not None:
            self._sheet_statistics(wb, self.statistics)

        target = prepare_target(output_path)
        wb.save(target)
        logger.info(f"Excel-Export: {len(self.records)} Datensätze → {target}")
        return target

    # ─── Style-Helpers ────────────────────────────────────────────────────────

    def _fill(self, hex_color: str):
        from openpyxl.styles import PatternFill
        return PatternFill(start_color=hex_color, end_color=hex_color, fill_type="solid")

    def _thin_border(self):
        from openpyxl.styles import Border, Side
        s = Side(border_style="thin", color="BBBBBB")
        return Border(left=s, right=s, top=s, bottom=s)

    def _write_header_row(self, ws, headers: list[str], row: int = 1) -> None:
        from openpyxl.styles import Alignment, Font
        fill = self._fill(COLORS["header"])
        border = self._thin_border()
        for col, text in enumerate(headers, 1):
            cell = ws.cell(row=row, column=col, value=text)
            cell.fill = fill
            cell.font = Font(bold=True, color="FFFFFF", size=10)
            cell.alignment = Alignment(horizontal="center", vertical="center")
            cell.border = border

    # ─── Sheets ───────────────────────────────────────────────────────────────

    def _sheet_records(self, wb) -> None:
        """Ein Datensatz pro Zeile, Spalten wie im CSV-Export."""
        ws = wb.create_sheet(self.SHEET_RECORDS)
        ws.column_dimensions["A"].width = self.COL_ID_W
        ws.column_dimensions["B"].width = self.COL_NAME_W
        ws.column_dimensions["C"].width = self.COL_CODE_W
        ws.column_dimensions["D"].width = self.COL_NAME_W
        self._write_header_row(ws, CSV_HEADER)

        border = self._thin_border()
        band = self._fill(COLORS["band"])
        for i, row in enumerate(record_rows(self.records), start=2):
            for col, value in enumerate(row, 1):
                c = ws.cell(row=i, column=col, value=value)
                c.border = border
                if i % 2 == 1:
                    c.fill = band
        ws.freeze_panes = "A2"

    def _sheet_statistics(self, wb, stats: GeneralStatistics) -> None:
        """Gesamtzahlen und beide Ranglisten untereinander."""
        from openpyxl.styles import Font
        ws = wb.create_sheet(self.SHEET_STATS)
        ws.column_dimensions["A"].width = self.COL_NAME_W
        ws.column_dimensions["B"].width = self.COL_CODE_W
        ws.column_dimensions["C"].width = self.COL_CODE_W

        ws.cell(row=1, column=1, value=f"Statistik vom {today_str()}").font = Font(bold=True, size=12)
        totals = [
            ("Studierende gesamt", stats.total_students),
            ("Kurse gesamt", stats.total_courses),
            ("Einschreibungen gesamt", stats.total_enrollments),
        ]
        row = 3
        for label, value in totals:
            ws.cell(row=row, column=1, value=label)
            ws.cell(row=row, column=2, value=value)
            row += 1

        row += 1
        self._write_header_row(ws, ["Name", "Cédula", "Kurse"], row=row)
        top = self._fill(COLORS["top"])
        for sc in stats.top_students:
            row += 1
            for col, value in enumerate([sc.student.name, sc.student.id, sc.count], 1):
                ws.cell(row=row, column=col, value=value).fill = top

        row += 2
        self._write_header_row(ws, ["Kurs", "Code", "Studierende"], row=row)
        for cc in stats.top_courses:
            row += 1
            for col, value in enumerate([cc.course.name, cc.course.code, cc.count], 1):
                ws.cell(row=row, column=col, value=value).fill = top
