"""Tests for CSV export."""

from __future__ import annotations

from datetime import date, datetime, time, timezone

import pytest

from habitboard.models import ReminderConfig
from habitboard.services.export_csv import (
    ExportError,
    build_expenses_rows,
    combined_csv,
    expenses_csv,
    export_all,
    export_expenses,
    export_habits,
    habits_csv,
)

CREATED = datetime(2026, 10, 18, 8, 30, tzinfo=timezone.utc)


def test_habits_csv_layout(habit_factory):
    habit = habit_factory(
        "Leer, escribir",
        created_at=CREATED,
        reminder=ReminderConfig(enabled=True, time=time(9), weekdays=(5, 0, 9, 1)),
    )

    lines = habits_csv([habit]).split("\n")

    assert lines[0] == "ID,Título,Completado,Fecha creación,Recordatorio activo,Días recordatorio"
    assert lines[1] == (
        f'{str(habit.id).upper()},"Leer, escribir",Sí,2026-10-18T08:30:00Z,Sí,Dom Lun Vie'
    )
    assert len(lines) == 2


def test_habit_without_reminder(habit_factory):
    habit = habit_factory("Agua", completed=False, created_at=CREATED)

    row = habits_csv([habit]).split("\n")[1]

    assert row.endswith(",Agua,No,2026-10-18T08:30:00Z,No,")


def test_quotes_are_doubled(habit_factory):
    habit = habit_factory('Decir "hola"', created_at=CREATED)

    assert '"Decir ""hola"""' in habits_csv([habit])


def test_expenses_csv_uses_two_decimals(expense_factory):
    expense = expense_factory("Café", 3.5, created_at=CREATED)

    assert expenses_csv([expense]).split("\n") == [
        "ID,Monto,Categoría,Fecha",
        f"{str(expense.id).upper()},3.50,Café,2026-10-18T08:30:00Z",
    ]


def test_rows_without_records_are_header_only():
    assert build_expenses_rows([]) == [["ID", "Monto", "Categoría", "Fecha"]]
    assert expenses_csv([]) == "ID,Monto,Categoría,Fecha"


def test_combined_csv_sections(habit_factory, expense_factory):
    content = combined_csv([habit_factory(created_at=CREATED)], [expense_factory(created_at=CREATED)])

    lines = content.split("\n")
    assert lines[0] == "## HÁBITOS"
    assert lines[1].startswith("ID,Título")
    assert lines[3] == ""
    assert lines[4] == "## GASTOS"
    assert lines[5] == "ID,Monto,Categoría,Fecha"
    assert not content.endswith("\n")


def test_export_files_are_named_by_date(tmp_path, habit_factory, expense_factory):
    today = date(2026, 10, 18)
    habits = [habit_factory(created_at=CREATED)]
    expenses = [expense_factory(created_at=CREATED)]

    habits_path = export_habits(habits, output_dir=tmp_path, today=today)
    expenses_path = export_expenses(expenses, output_dir=tmp_path, today=today)
    all_path = export_all(habits, expenses, output_dir=tmp_path, today=today)

    assert habits_path.name == "habitos_2026-10-18.csv"
    assert expenses_path.name == "gastos_2026-10-18.csv"
    assert all_path.name == "datos_completos_2026-10-18.csv"
    assert habits_path.read_text(encoding="utf-8") == habits_csv(habits)
    assert all_path.read_text(encoding="utf-8") == combined_csv(habits, expenses)


def test_export_defaults_to_temp_dir(monkeypatch, tmp_path):
    monkeypatch.setattr("tempfile.tempdir", str(tmp_path))

    path = export_expenses([], today=date(2026, 1, 2))

    assert path == tmp_path / "gastos_2026-01-02.csv"


def test_write_failure_raises_export_error(tmp_path):
    blocker = tmp_path / "not-a-dir"
    blocker.write_text("x", encoding="utf-8")

    with pytest.raises(ExportError) as excinfo:
        export_habits([], output_dir=blocker, today=date(2026, 10, 18))

    assert "habitos_2026-10-18.csv" in str(excinfo.value)
