"""CSV-Export der Einschreibungen."""

import csv
import logging
from pathlib import Path
from typing import Union

from config.defaults import CSV_HEADER
from export.helpers import prepare_target, record_rows
from models.enrollment import EnrollmentRecord

logger = logging.getLogger(__name__)


def export_csv(records: list[EnrollmentRecord], path: Union[str, Path]) -> Path:
    """Schreibt Kopfzeile plus eine Zeile pro Datensatz."""
    target = prepare_target(path)
    with open(target, "w", encoding="utf-8", newline="") as f:
        writer = csv.writer(f)
        writer.writerow(CSV_HEADER)
        writer.writerows(record_rows(records))
    logger.info(f"CSV-Export: {len(records)} Datensätze → {target}")
    return target
