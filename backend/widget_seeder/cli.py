from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Iterator, Optional

import typer
from sqlalchemy.engine import Engine
from sqlmodel import Session

from . import db
from .config import settings
from .errors import SeedError
from .seed import build_plan, seed_widgets

APP = typer.Typer(add_completion=False, help="Carga los widgets y el dashboard de producción MPFM.")


def _configure_logging() -> None:
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


@contextmanager
def _engine_scope(database_url: Optional[str]) -> Iterator[Engine]:
    if not database_url:
        yield db.engine
        return
    engine = db.create_db_engine(database_url, echo=settings.debug)
    try:
        yield engine
    finally:
        engine.dispose()


@APP.callback(invoke_without_command=True)
def main(ctx: typer.Context) -> None:
    """Without a subcommand, run ``seed`` with its defaults."""
    if ctx.invoked_subcommand is None:
        seed(database_url=None, create_schema=False)


@APP.command()
def seed(
    database_url: Optional[str] = typer.Option(None, "--database-url", help="Sobrescribe DATABASE_URL."),
    create_schema: bool = typer.Option(False, "--create-schema", help="Crea las tablas antes de sembrar (solo dev)."),
) -> None:
    """Delete and recreate widget types, widget definitions and the MPFM dashboard."""
    _configure_logging()
    with _engine_scope(database_url) as engine:
        typer.echo(f"Seeding widgets into {engine.url.render_as_string(hide_password=True)}")
        if create_schema:
            if settings.is_production:
                typer.secho("--create-schema is not allowed in production; run the migrations instead.", fg=typer.colors.RED, err=True)
                raise typer.Exit(code=2)
            db.init_db(engine)

        try:
            with Session(engine) as session:
                summary = seed_widgets(session)
        except SeedError as exc:
            typer.secho(f"Error seeding widgets: {exc}", fg=typer.colors.RED, err=True)
            raise typer.Exit(code=1)

    typer.secho("Widget system seeded successfully", fg=typer.colors.GREEN)
    typer.echo(f"  - Created {summary.widget_types} widget types")
    typer.echo(f"  - Created {summary.widget_definitions} widget definitions")
    typer.echo(f"  - Created {summary.dashboards} dashboard with {summary.layouts} widgets")
    for name in summary.skipped_layouts:
        typer.secho(f"  - Skipped layout for '{name}' (widget definition not created)", fg=typer.colors.YELLOW)


@APP.command()
def plan(
    database_url: Optional[str] = typer.Option(None, "--database-url", help="Sobrescribe DATABASE_URL."),
) -> None:
    """Show which widgets and layout placements a seed would create, without writing."""
    _configure_logging()
    with _engine_scope(database_url) as engine:
        try:
            with Session(engine) as session:
                seed_plan = build_plan(session)
        except SeedError as exc:
            typer.secho(str(exc), fg=typer.colors.RED, err=True)
            raise typer.Exit(code=1)

    typer.secho(f"Device type id {seed_plan.device_type_id}, admin id {seed_plan.admin_id}", bold=True)
    if seed_plan.missing_tags:
        typer.secho(f"Missing mappings: {', '.join(seed_plan.missing_tags)}", fg=typer.colors.YELLOW)
    typer.echo("Widgets:")
    for widget in seed_plan.widgets:
        typer.echo(f"  + {widget.name} ({widget.widget_type})")
    for name in seed_plan.skipped_widgets:
        typer.echo(f"  - {name} (skipped)")
    typer.echo("Layout:")
    for placement in seed_plan.placements:
        typer.echo(
            f"  {placement.order:>2}. {placement.widget} "
            f"x={placement.x} y={placement.y} w={placement.w} h={placement.h}"
        )
    for placement in seed_plan.skipped_placements:
        typer.echo(f"  {placement.order:>2}. {placement.widget} (skipped)")


if __name__ == "__main__":
    APP()
