"""Command line entry point: statistics, CSV export and chart rendering."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional
from uuid import UUID

import click

from .config import BaseConfig
from .infra.database import SessionFactory, bootstrap_database
from .infra.remote import APIError, RemoteExpenseRepository, RemoteHabitRepository, RestClient
from .infra.repositories import SQLModelRecordCache
from .logging_config import setup_logging
from .models.expense import Expense
from .models.habit import Habit
from .models.session import SessionUser
from .services.expenses import ExpenseService
from .services.export_csv import ExportError, export_all, export_expenses, export_habits
from .services.formatting import (
    format_change,
    format_currency,
    format_percentage,
    period_label,
)
from .services.habits import HabitService
from .services.periods import Period
from .services.reports import (
    build_category_chart,
    build_expenses_over_time_chart,
    build_habits_per_day_chart,
    export_chart_png,
)
from .services.stats import StatsSnapshot, build_snapshot
from .services.widget import WidgetStore

PERIOD_CHOICES = [period.value for period in Period]


@dataclass
class CliContext:
    """Shared state for subcommands; tests pass a prepared instance via ``obj``."""

    config: BaseConfig
    session_factory: SessionFactory
    cache: SQLModelRecordCache = field(init=False)

    def __post_init__(self) -> None:
        self.cache = SQLModelRecordCache(self.session_factory)


def _records(
    ctx: CliContext, user_id: UUID, token: Optional[str]
) -> tuple[list[Habit], list[Expense]]:
    """Cached records, or fresh ones from the backend when a token is given."""

    if not token:
        return ctx.cache.fetch_habits(user_id), ctx.cache.fetch_expenses(user_id)

    try:
        ctx.config.require_remote()
    except ValueError as exc:
        raise click.UsageError(str(exc)) from exc

    user = SessionUser(id=user_id, email="", access_token=token)
    with RestClient.from_config(ctx.config) as client:
        habit_service = HabitService(
            RemoteHabitRepository(client),
            ctx.cache,
            widget=WidgetStore(ctx.config.WIDGET_PATH),
        )
        expense_service = ExpenseService(RemoteExpenseRepository(client), ctx.cache)
        try:
            habits = habit_service.load(user)
            expenses = expense_service.load(user)
        except APIError as exc:
            raise click.ClickException(str(exc)) from exc

    if habits.stale or expenses.stale:
        click.echo("Aviso: sin conexión con el servidor, mostrando datos guardados.", err=True)
    return habits.items, expenses.items


def _print_snapshot(snapshot: StatsSnapshot, locale: str) -> None:
    label = period_label(snapshot.period.value, locale)
    click.echo(f"{label} (desde {snapshot.range.start_date.date().isoformat()})")
    click.echo(
        f"Hábitos completados: {snapshot.completed_habits}/{snapshot.total_habits} "
        f"({format_percentage(snapshot.progress * 100)})"
    )
    click.echo(f"Racha actual: {snapshot.current_streak} días")
    click.echo(f"Mejor día: {snapshot.best_day_of_week}")
    click.echo(
        "Últimos 7 días: "
        + "  ".join(f"{day.day_label} {day.count}" for day in snapshot.habits_per_day)
    )

    change = snapshot.change_percentage
    direction = "" if change is None else (" ↑" if change > 0 else " ↓" if change < 0 else "")
    click.echo(
        f"Gasto total: {format_currency(snapshot.total_in_period)} "
        f"(cambio: {format_change(change, locale)}{direction})"
    )
    if snapshot.top_categories:
        click.echo("Top categorías:")
        for item in snapshot.top_categories:
            click.echo(f"  {item.category}: {format_currency(item.amount)} ({item.percentage:.1f}%)")
    if snapshot.completion_rates:
        click.echo("Tasa de cumplimiento:")
        for rate in snapshot.completion_rates:
            click.echo(f"  {rate.title}: {format_percentage(rate.rate * 100)}")


user_option = click.option("--user", "user_id", type=click.UUID, required=True, help="User id.")
token_option = click.option(
    "--token",
    envvar="HABITBOARD_ACCESS_TOKEN",
    default=None,
    help="Access token; when set, records are refreshed from the backend.",
)


@click.group()
@click.option(
    "--data-dir",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    help="Directory for the cache database, logs and widget file.",
)
@click.pass_context
def main(ctx: click.Context, data_dir: Optional[Path]) -> None:
    """HabitBoard habit and expense statistics."""

    if ctx.obj is not None:
        return
    config = BaseConfig(data_dir)
    setup_logging(config)
    _engine, session_factory = bootstrap_database(config)
    ctx.obj = CliContext(config=config, session_factory=session_factory)


@main.command()
@user_option
@token_option
@click.option("--period", type=click.Choice(PERIOD_CHOICES), default=Period.MONTH.value, show_default=True)
@click.pass_obj
def stats(ctx: CliContext, user_id: UUID, token: Optional[str], period: str) -> None:
    """Print the statistics for a period."""

    habits, expenses = _records(ctx, user_id, token)
    snapshot = build_snapshot(
        habits,
        expenses,
        period,
        ctx.config.now(),
        locale=ctx.config.LOCALE,
        week_start=ctx.config.WEEK_START,
    )
    _print_snapshot(snapshot, ctx.config.LOCALE)


@main.command()
@user_option
@token_option
@click.option(
    "--kind",
    type=click.Choice(["all", "habits", "expenses"]),
    default="all",
    show_default=True,
)
@click.option(
    "--out",
    "output_dir",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    help="Destination directory (defaults to the system temp directory).",
)
@click.pass_obj
def export(
    ctx: CliContext, user_id: UUID, token: Optional[str], kind: str, output_dir: Optional[Path]
) -> None:
    """Export records to CSV."""

    habits, expenses = _records(ctx, user_id, token)
    today = ctx.config.now().date()
    try:
        if kind == "habits":
            path = export_habits(habits, output_dir=output_dir, today=today)
        elif kind == "expenses":
            path = export_expenses(expenses, output_dir=output_dir, today=today)
        else:
            path = export_all(habits, expenses, output_dir=output_dir, today=today)
    except ExportError as exc:
        raise click.ClickException(str(exc)) from exc
    click.echo(f"Exportado: {path}")


@main.command()
@user_option
@token_option
@click.option("--period", type=click.Choice(PERIOD_CHOICES), default=Period.WEEK.value, show_default=True)
@click.option(
    "--kind",
    type=click.Choice(["categories", "habits", "expenses"]),
    default="expenses",
    show_default=True,
)
@click.option("--out", "output_path", type=click.Path(dir_okay=False, path_type=Path), required=True)
@click.pass_obj
def chart(
    ctx: CliContext,
    user_id: UUID,
    token: Optional[str],
    period: str,
    kind: str,
    output_path: Path,
) -> None:
    """Render a statistics chart to PNG."""

    habits, expenses = _records(ctx, user_id, token)
    snapshot = build_snapshot(
        habits,
        expenses,
        period,
        ctx.config.now(),
        locale=ctx.config.LOCALE,
        week_start=ctx.config.WEEK_START,
    )
    if kind == "categories":
        figure = build_category_chart(snapshot.expenses_by_category)
    elif kind == "habits":
        figure = build_habits_per_day_chart(snapshot.habits_per_day)
    else:
        figure = build_expenses_over_time_chart(snapshot.expenses_over_time)
    click.echo(f"Gráfico guardado: {export_chart_png(figure, output_path)}")


if __name__ == "__main__":
    main()
