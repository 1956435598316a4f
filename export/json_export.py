"""JSON-Export der Einschreibungen."""

import json
import logging
from pathlib import Path
from typing import Union

from export.helpers import prepare_target
from models.enrollment import EnrollmentRecord

logger = logging.getLogger(__name__)


def records_to_json(records: list[EnrollmentRecord], indent: int = 2) -> str:
    """Serialisiert Datensätze als JSON-Array.

    Format pro Eintrag::

        {"estudiante": {"cedula": ..., "nombre": ...},
         "materia": {"codigo": ..., "nombre": ...}}
    """
    return json.dumps(
        [r.to_export_dict() for r in records], indent=indent, ensure_ascii=False
    )


def export_json(records: list[EnrollmentRecord], path: Union[str, Path]) -> Path:
    target = prepare_target(path)
    with open(target, "w", encoding="utf-8") as f:
        f.write(records_to_json(records))
        f.write("\n")
    logger.info(f"JSON-Export: {len(records)} Datensätze → {target}")
    return target
