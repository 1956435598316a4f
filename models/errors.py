"""Fehlerklassen der Anwendung.

"Nicht gefunden" ist kein Fehler: Abfragen geben dafür None zurück.
"""


class LineValidationError(ValueError):
    """Eine Importzeile oder Eingabe verletzt die Validierungsregeln."""


class DuplicateEnrollmentError(Exception):
    """Die Einschreibung (Studierende, Kurs) existiert bereits."""

    def __init__(self, student_id: str, course_code: str):
        self.student_id = student_id
        self.course_code = course_code
        super().__init__(
            f"Studierende/r {student_id} ist bereits in Kurs {course_code} eingeschrieben."
        )


class StorageError(Exception):
    """Fehler beim Zugriff auf die Datenbank (Verbindung oder Abfrage)."""


class EnrollmentImportError(Exception):
    """Fehler beim Import einer Einschreibungsdatei."""
