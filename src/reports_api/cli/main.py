import asyncio
import logging
from pathlib import Path

import typer
from tortoise import Tortoise

from ..common.errors import SerializationError, StoreError
from ..core.config import TORTOISE_ORM_CONFIG
from ..features.download.router import EXPORT_FILE_NAME, serialize_reports
from ..features.reports.service import ReportService
from ..features.reports.store import TortoiseReportStore

logger = logging.getLogger(__name__)

app = typer.Typer(name="reports-cli", help="CLI for managing stored reports.")


# Shared async context manager for database connection
class DBConnection:
    async def __aenter__(self):
        await Tortoise.init(config=TORTOISE_ORM_CONFIG)
        await Tortoise.generate_schemas(safe=True)  # Generate schema if it doesn't exist
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await Tortoise.close_connections()


@app.command("export")
def export_reports_command(
    output: Path = typer.Option(Path(EXPORT_FILE_NAME), "--output", "-o", help="File to write the JSON export to."),
):
    """Writes every report to a JSON file, in the same shape as GET /download."""
    asyncio.run(_export_reports(output))


async def _export_reports(output: Path):
    async with DBConnection():
        service = ReportService(TortoiseReportStore())
        try:
            reports = await service.get_all()
            body = await serialize_reports(reports)
        except (StoreError, SerializationError) as e:
            typer.secho(f"Error exporting reports: {e}", fg=typer.colors.RED)
            raise typer.Exit(code=1)
        output.write_bytes(body)
        typer.secho(f"Exported {len(reports)} report(s) to {output}", fg=typer.colors.GREEN)


@app.command("count")
def count_reports_command():
    """Prints the number of stored reports."""
    asyncio.run(_count_reports())


async def _count_reports():
    async with DBConnection():
        try:
            total = await TortoiseReportStore().count()
        except StoreError as e:
            typer.secho(f"Error counting reports: {e}", fg=typer.colors.RED)
            raise typer.Exit(code=1)
        typer.echo(str(total))


@app.command("test-db-connection")
def test_db_connection_command_sync():
    """Tests the database connection and shows the first report."""
    asyncio.run(test_db_connection_command())


async def test_db_connection_command():
    async with DBConnection():
        typer.echo("Successfully connected to the database.")
        store = TortoiseReportStore()
        try:
            report_count = await store.count()
        except StoreError as e:
            typer.echo(f"Error querying reports: {e}", err=True)
            raise typer.Exit(code=1)
        typer.echo(f"Found {report_count} report(s) in the database.")
        if report_count > 0:
            first_report = (await store.find_all())[0]
            typer.echo(f"First report: {first_report}")


if __name__ == "__main__":
    app()
