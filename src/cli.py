from pathlib import Path
from typing import Any, Dict, List, NoReturn, Optional

import typer

from backend.connection_manager import get_connection_stats, log_connection_leaks
from config.database import DatabaseConfig
from config.settings import Settings
from core.dependencies import DependencyContainer
from core.exceptions import InvalidFilterValue
from queries.filter_builder import build_property_filter_query
from utils.logger_setup import setup_logging

app = typer.Typer(
    name="lightbnb",
    help="Query the LightBnB property rental database.",
    add_completion=False
)

CITY_OPTION = typer.Option(None, "--city", "-c", help="Case-insensitive substring of the city.")
OWNER_OPTION = typer.Option(None, "--owner-id", help="Only properties of this owner.")
MIN_PRICE_OPTION = typer.Option(None, "--min-price", help="Minimum price per night, in dollars.")
MAX_PRICE_OPTION = typer.Option(None, "--max-price", help="Maximum price per night, in dollars.")
MIN_RATING_OPTION = typer.Option(None, "--min-rating", help="Minimum average review rating.")
LIMIT_OPTION = typer.Option(Settings.DEFAULT_RESULT_LIMIT, "--limit", "-l", help="Maximum number of rows.")
DB_PATH_OPTION = typer.Option(None, "--db-path", help="DuckDB database file (defaults to data/lightbnb.duckdb).")


def _criteria(
    city: Optional[str],
    owner_id: Optional[int],
    min_price: Optional[float],
    max_price: Optional[float],
    min_rating: Optional[float],
) -> Dict[str, Any]:
    return {
        "city": city,
        "owner_id": owner_id,
        "minimum_price_per_night": min_price,
        "maximum_price_per_night": max_price,
        "minimum_rating": min_rating,
    }


def _container(db_path: Optional[Path]) -> DependencyContainer:
    # Logs go to the log file only so command output stays clean
    logger = setup_logging(f"{Settings.LOGGER_NAME}.cli", console_output=False)
    return DependencyContainer(db_path, logger=logger)


def _format_rating(value: Optional[float]) -> str:
    return f"{value:.2f}" if value is not None else "no reviews"


def _echo_properties(rows: List[Dict[str, Any]]) -> None:
    for row in rows:
        typer.echo(
            f"#{row['id']} {row['title']} ({row['city']}) - "
            f"${row['cost_per_night'] / 100:.2f}/night, rating: {_format_rating(row.get('average_rating'))}"
        )


def _fail(message: str) -> NoReturn:
    typer.secho(message, fg=typer.colors.RED, err=True)
    raise typer.Exit(code=1)


@app.command()
def properties(
    city: Optional[str] = CITY_OPTION,
    owner_id: Optional[int] = OWNER_OPTION,
    min_price: Optional[float] = MIN_PRICE_OPTION,
    max_price: Optional[float] = MAX_PRICE_OPTION,
    min_rating: Optional[float] = MIN_RATING_OPTION,
    limit: int = LIMIT_OPTION,
    db_path: Optional[Path] = DB_PATH_OPTION,
):
    """
    List properties matching the given filters, cheapest first.
    """
    criteria = _criteria(city, owner_id, min_price, max_price, min_rating)
    try:
        rows = _container(db_path).property_repository.get_all_properties(criteria, limit)
    except InvalidFilterValue as e:
        _fail(f"Error: {e}")

    if not rows:
        typer.echo("No properties found.")
        return
    _echo_properties(rows)


@app.command("show-sql")
def show_sql(
    city: Optional[str] = CITY_OPTION,
    owner_id: Optional[int] = OWNER_OPTION,
    min_price: Optional[float] = MIN_PRICE_OPTION,
    max_price: Optional[float] = MAX_PRICE_OPTION,
    min_rating: Optional[float] = MIN_RATING_OPTION,
    limit: int = LIMIT_OPTION,
):
    """
    Print the property search statement and its parameters without running it.
    """
    criteria = _criteria(city, owner_id, min_price, max_price, min_rating)
    try:
        sql, params = build_property_filter_query(criteria, limit)
    except InvalidFilterValue as e:
        _fail(f"Error: {e}")

    typer.echo(sql)
    typer.echo(f"Parameters: {params}")


@app.command()
def reservations(
    guest_id: int = typer.Argument(..., help="Id of the guest."),
    limit: int = LIMIT_OPTION,
    db_path: Optional[Path] = DB_PATH_OPTION,
):
    """
    List the upcoming reservations of a guest.
    """
    try:
        rows = _container(db_path).reservation_repository.get_all_reservations(guest_id, limit)
    except InvalidFilterValue as e:
        _fail(f"Error: {e}")

    if not rows:
        typer.echo("No upcoming reservations.")
        return
    for row in rows:
        typer.echo(
            f"{row['start_date']:%Y-%m-%d} to {row['end_date']:%Y-%m-%d}: "
            f"#{row['id']} {row['title']} ({row['city']})"
        )


@app.command()
def user(
    email: Optional[str] = typer.Option(None, "--email", "-e", help="Look up by email."),
    user_id: Optional[int] = typer.Option(None, "--id", help="Look up by id."),
    db_path: Optional[Path] = DB_PATH_OPTION,
):
    """
    Show a single user, looked up by email or id.
    """
    if (email is None) == (user_id is None):
        _fail("Error: pass exactly one of --email or --id.")

    repository = _container(db_path).user_repository
    row = repository.get_user_with_email(email) if email is not None else repository.get_user_with_id(user_id)
    if row is None:
        _fail("User not found.")
    typer.echo(f"#{row['id']} {row['name']} <{row['email']}>")


@app.command()
def stats(
    db_path: Optional[Path] = DB_PATH_OPTION,
):
    """
    Show row counts for the LightBnB tables.
    """
    repository = _container(db_path).database_repository
    for table in DatabaseConfig.get_all_tables():
        if not repository.table_exists(table):
            typer.echo(f"{table}: missing")
            continue
        typer.echo(f"{table}: {repository.get_table_count(table)} row(s)")

    log_connection_leaks()
    typer.echo(f"Open connections: {get_connection_stats()['active_count']}")


if __name__ == "__main__":
    app()
