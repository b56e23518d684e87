"""CSV export helpers for habits and expenses."""

from __future__ import annotations

import csv
import io
import os
import tempfile
from datetime import date
from pathlib import Path
from typing import Iterable, Optional, Sequence

from ..constants.labels import REMINDER_DAY_ABBREVIATIONS
from ..logging_config import get_logger
from ..models.expense import Expense
from ..models.habit import Habit
from ..models.serialization import format_timestamp

logger = get_logger(__name__)

HABIT_HEADERS = [
    "ID",
    "Título",
    "Completado",
    "Fecha creación",
    "Recordatorio activo",
    "Días recordatorio",
]
EXPENSE_HEADERS = ["ID", "Monto", "Categoría", "Fecha"]

HABITS_SECTION = "## HÁBITOS"
EXPENSES_SECTION = "## GASTOS"


class ExportError(Exception):
    """Raised when an export file cannot be written."""

    def __init__(self, file_name: str):
        self.file_name = file_name
        super().__init__(
            f"No se pudo escribir el archivo {file_name}. "
            "Verifica que haya espacio disponible."
        )


def _yes_no(value: bool) -> str:
    return "Sí" if value else "No"


def _record_id(value) -> str:
    return str(value).upper()


def _reminder_days_text(habit: Habit) -> str:
    if habit.reminder is None or not habit.reminder.weekdays:
        return ""
    names = [
        REMINDER_DAY_ABBREVIATIONS[index]
        for index in sorted(habit.reminder.weekdays)
        if 0 <= index < len(REMINDER_DAY_ABBREVIATIONS)
    ]
    return " ".join(names)


def build_habits_rows(habits: Iterable[Habit]) -> list[list[str]]:
    """Header plus one row per habit."""

    rows = [list(HABIT_HEADERS)]
    for habit in habits:
        rows.append(
            [
                _record_id(habit.id),
                habit.title,
                _yes_no(habit.completed),
                format_timestamp(habit.created_at),
                _yes_no(habit.is_reminder_enabled),
                _reminder_days_text(habit),
            ]
        )
    return rows


def build_expenses_rows(expenses: Iterable[Expense]) -> list[list[str]]:
    """Header plus one row per expense; amounts use two decimals and a dot."""

    rows = [list(EXPENSE_HEADERS)]
    for expense in expenses:
        rows.append(
            [
                _record_id(expense.id),
                f"{expense.amount:.2f}",
                expense.category,
                format_timestamp(expense.created_at),
            ]
        )
    return rows


def _render_lines(rows: Sequence[Sequence[str]]) -> list[str]:
    lines = []
    for row in rows:
        buffer = io.StringIO()
        writer = csv.writer(buffer, quoting=csv.QUOTE_MINIMAL, lineterminator="\n")
        writer.writerow(row)
        lines.append(buffer.getvalue()[:-1])
    return lines


def habits_csv(habits: Iterable[Habit]) -> str:
    return "\n".join(_render_lines(build_habits_rows(habits)))


def expenses_csv(expenses: Iterable[Expense]) -> str:
    return "\n".join(_render_lines(build_expenses_rows(expenses)))


def combined_csv(habits: Iterable[Habit], expenses: Iterable[Expense]) -> str:
    """Both tables in one file, each under its own ``##`` section marker."""

    lines = [HABITS_SECTION]
    lines.extend(_render_lines(build_habits_rows(habits)))
    lines.append("")
    lines.append(EXPENSES_SECTION)
    lines.extend(_render_lines(build_expenses_rows(expenses)))
    return "\n".join(lines)


def _write(content: str, file_name: str, output_dir: Optional[Path]) -> Path:
    directory = Path(output_dir) if output_dir is not None else Path(tempfile.gettempdir())
    output_path = directory / file_name
    try:
        directory.mkdir(parents=True, exist_ok=True)
        # Write to a sibling temp file, then replace the target.
        fd, tmp_name = tempfile.mkstemp(dir=directory, prefix=f".{file_name}.", suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8", newline="") as fh:
                fh.write(content)
            os.replace(tmp_name, output_path)
        except OSError:
            Path(tmp_name).unlink(missing_ok=True)
            raise
    except OSError as exc:
        logger.error(
            "CSV export failed",
            extra={"file_name": file_name, "directory": str(directory), "error": str(exc)},
        )
        raise ExportError(file_name) from exc

    logger.info("CSV export written", extra={"path": str(output_path)})
    return output_path


def _file_name(prefix: str, today: Optional[date]) -> str:
    return f"{prefix}_{(today or date.today()).isoformat()}.csv"


def export_habits(
    habits: Iterable[Habit], *, output_dir: Optional[Path] = None, today: Optional[date] = None
) -> Path:
    """Write ``habitos_YYYY-MM-DD.csv`` and return its path."""

    return _write(habits_csv(habits), _file_name("habitos", today), output_dir)


def export_expenses(
    expenses: Iterable[Expense], *, output_dir: Optional[Path] = None, today: Optional[date] = None
) -> Path:
    """Write ``gastos_YYYY-MM-DD.csv`` and return its path."""

    return _write(expenses_csv(expenses), _file_name("gastos", today), output_dir)


def export_all(
    habits: Iterable[Habit],
    expenses: Iterable[Expense],
    *,
    output_dir: Optional[Path] = None,
    today: Optional[date] = None,
) -> Path:
    """Write ``datos_completos_YYYY-MM-DD.csv`` with both sections and return its path."""

    return _write(combined_csv(habits, expenses), _file_name("datos_completos", today), output_dir)


__all__ = [
    "ExportError",
    "build_expenses_rows",
    "build_habits_rows",
    "combined_csv",
    "expenses_csv",
    "export_all",
    "export_expenses",
    "export_habits",
    "habits_csv",
]
