"""
Mumpa admin CLI

Maintenance commands for the Mumpa backend: reference data seeding, user
administration, field migrations, age / percentile inspection and API smoke
checks.
"""

import asyncio
import logging
import sys
from datetime import timedelta

import click
import yaml
from rich.console import Console
from rich.table import Table

from mumpa_admin import __version__
from mumpa_admin.config import get_settings

console = Console()


def _fail(message: str) -> None:
    console.print(f"[red]{message}[/red]")
    sys.exit(1)


def _store():
    from mumpa_admin.persistence import create_store

    return create_store()


def _directory():
    from mumpa_admin.auth import FirebaseAuthDirectory

    return FirebaseAuthDirectory()


def _report(label: str, report) -> None:
    console.print(
        f"[green]{label}[/green]: {report.updated} updated, "
        f"{report.skipped} skipped, {report.errors} errors"
    )


@click.group()
@click.version_option(version=__version__, prog_name="mumpa-admin")
@click.option("--verbose", "-v", is_flag=True, help="Debug logging")
def cli(verbose: bool):
    """
    Mumpa admin - maintenance scripts for the Mumpa backend.

    The document store is Firestore when FIREBASE_* variables are set,
    Redis when REDIS_URL is set, and JSON files under DATA_DIR otherwise.
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )


# =============================================================================
# Reference data
# =============================================================================


@cli.command("seed-percentiles")
@click.option("--weeks", type=int, default=26, show_default=True, help="Curve horizon in weeks")
def seed_percentiles(weeks: int):
    """Upsert weight/height/head percentile curves for both sexes."""
    from mumpa_admin.services import seed_growth_percentiles

    try:
        ids = seed_growth_percentiles(_store(), total_weeks=weeks)
    except Exception as e:
        _fail(f"Error seeding percentile curves: {e}")
    console.print(f"[green]Percentile curves loaded:[/green] {', '.join(ids)}")


@cli.command("seed-vaccines")
@click.argument("country")
def seed_vaccines(country: str):
    """Create or refresh the vaccine schedule for COUNTRY (e.g. mexico, ecuador)."""
    from mumpa_admin.services import seed_vaccine_schedule

    try:
        doc_id, created = seed_vaccine_schedule(_store(), country)
    except LookupError as e:
        _fail(str(e).strip("'\""))
    except Exception as e:
        _fail(f"Error seeding vaccine schedule: {e}")
    console.print(f"[green]Schedule {'created' if created else 'updated'}[/green] ({doc_id})")


# =============================================================================
# Users
# =============================================================================


@cli.command("list-users")
@click.option("--limit", "-n", type=int, default=100, show_default=True)
def list_users_cmd(limit: int):
    """List auth accounts with their Firestore profile flags."""
    from mumpa_admin.services.user_admin import list_users

    try:
        users = list_users(_directory(), _store(), limit)
    except Exception as e:
        _fail(f"Error listing users: {e}")

    table = Table(title=f"Users ({len(users)})")
    table.add_column("Email")
    table.add_column("UID", style="dim")
    table.add_column("Name")
    table.add_column("Providers")
    table.add_column("Role")
    table.add_column("Admin")
    table.add_column("Active")
    for u in users:
        if u.has_profile:
            flags = (u.role or "-", "yes" if u.is_admin else "no", "yes" if u.is_active else "no")
        else:
            flags = ("[red]no profile[/red]", "", "")
        table.add_row(u.email or "-", u.uid, u.display_name or "-", ", ".join(u.providers), *flags)
    console.print(table)


@cli.command("set-admin")
@click.argument("email")
def set_admin_cmd(email: str):
    """Give EMAIL the admin role."""
    from mumpa_admin.services.user_admin import set_admin

    try:
        profile = set_admin(_directory(), _store(), email)
    except Exception as e:
        _fail(f"Error promoting {email}: {e}")
    console.print(f"[green]{email} is now admin[/green]")
    console.print(profile)


@cli.command("count-user-fields")
def count_user_fields_cmd():
    """Audit displayName / name coverage in users."""
    from mumpa_admin.services.user_admin import count_user_fields

    counts = count_user_fields(_store())
    table = Table(title=f"Users: {counts.total}")
    table.add_column("Field")
    table.add_column("Users", justify="right")
    table.add_column("%", justify="right")
    for label, value in (
        ("displayName", counts.with_display_name),
        ("name", counts.with_name),
        ("both", counts.with_both),
        ("neither", counts.with_neither),
    ):
        table.add_row(label, str(value), f"{counts.percent(value):.1f}")
    console.print(table)


# =============================================================================
# Migrations
# =============================================================================


@cli.command("backfill-field")
@click.argument("collection")
@click.argument("field")
@click.argument("value")
def backfill_field(collection: str, field: str, value: str):
    """Set FIELD=VALUE where missing. VALUE is parsed as YAML (true, 3, text)."""
    from mumpa_admin.services.field_migration import backfill_missing_field

    _report(f"{collection}.{field}", backfill_missing_field(_store(), collection, field, yaml.safe_load(value)))


@cli.command("rename-field")
@click.argument("collection")
@click.argument("old")
@click.argument("new")
@click.option("--overwrite", is_flag=True, help="Replace NEW where it already exists")
def rename_field_cmd(collection: str, old: str, new: str, overwrite: bool):
    """Rename field OLD to NEW across COLLECTION."""
    from mumpa_admin.services.field_migration import rename_field

    try:
        report = rename_field(_store(), collection, old, new, overwrite=overwrite)
    except ValueError as e:
        _fail(str(e))
    _report(f"{collection}.{old} -> {new}", report)


@cli.command("append-suffix")
@click.argument("collection")
@click.argument("field")
@click.option("--suffix", default=" ", show_default=True)
def append_suffix_cmd(collection: str, field: str, suffix: str):
    """Append SUFFIX to a string FIELD (default: a trailing space)."""
    from mumpa_admin.services.field_migration import append_suffix

    try:
        report = append_suffix(_store(), collection, field, suffix)
    except ValueError as e:
        _fail(str(e))
    _report(f"{collection}.{field}", report)


# =============================================================================
# Inspection
# =============================================================================


@cli.command("project-age")
@click.option("--months", type=int, help="Registered age in months (born)")
@click.option("--weeks", type=int, help="Registered gestation weeks (unborn)")
@click.option("--created-at", required=True, help="Registration time, ISO 8601")
@click.option("--now", "now_str", help="Reference time, ISO 8601 (default: now)")
def project_age_cmd(months: int | None, weeks: int | None, created_at: str, now_str: str | None):
    """Show the live age / gestation for a registration."""
    from pydantic import ValidationError

    from mumpa_admin.growth import project_age
    from mumpa_admin.models import BornRecord, UnbornRecord
    from mumpa_admin.timeutils import to_utc_datetime

    if (months is None) == (weeks is None):
        _fail("Give exactly one of --months or --weeks")
    try:
        if months is not None:
            record = BornRecord(age_in_months=months, created_at=created_at)
        else:
            record = UnbornRecord(gestation_weeks=weeks, created_at=created_at)
        now = to_utc_datetime(now_str) if now_str else None
    except (ValidationError, ValueError) as e:
        _fail(f"Invalid input: {e}")

    p = project_age(record, now)
    table = Table(show_header=False)
    table.add_column("Field", style="cyan")
    table.add_column("Value")
    table.add_row("Registered", f"{p.registered_value} {'months' if p.kind == 'born' else 'weeks'}")
    table.add_row("Days elapsed", str(p.elapsed_days))
    if p.kind == "born":
        table.add_row("Months elapsed", str(p.elapsed_months))
        table.add_row("Current age", f"{p.current_age_in_months} months")
    else:
        table.add_row("Weeks elapsed", str(p.elapsed_weeks))
        table.add_row("Current gestation", f"{p.current_gestation_weeks} weeks")
        table.add_row("Overdue", "yes" if p.is_overdue else "no")
    console.print(table)


@cli.command("percentiles")
@click.argument("measurement_type", metavar="TYPE")
@click.argument("sex")
@click.option("--weeks", type=int, default=26, show_default=True)
def percentiles_cmd(measurement_type: str, sex: str, weeks: int):
    """Print the percentile curve for TYPE (weight/height/head) and SEX (F/M)."""
    from mumpa_admin.growth import build_percentile_curve

    points = build_percentile_curve(measurement_type, sex, weeks)
    if not points:
        _fail(f"No calibration for {measurement_type}/{sex}")
    table = Table(title=f"{measurement_type}_{sex}")
    for col in ("Week", "p3", "p50", "p97"):
        table.add_column(col, justify="right")
    for p in points:
        table.add_row(str(p.age_weeks), f"{p.p3:.2f}", f"{p.p50:.2f}", f"{p.p97:.2f}")
    console.print(table)


# =============================================================================
# API checks
# =============================================================================


@cli.command("check-api")
@click.argument("urls", nargs=-1)
@click.option("--probe", "probe_paths", multiple=True, default=["/api/children/tips"], show_default=True,
              help="Route to probe with OPTIONS; repeatable")
@click.option("--token", help="Bearer token for the probes")
def check_api(urls: tuple[str, ...], probe_paths: tuple[str, ...], token: str | None):
    """Health-check one or more deployments (default: API_BASE_URL)."""
    from mumpa_admin.api_client import MumpaApiClient

    async def _run():
        results = []
        for url in urls or (get_settings().api_base_url,):
            client = MumpaApiClient(url, token=token)
            results.append((client.base_url, "health", await client.check_health()))
            for path in probe_paths:
                results.append((client.base_url, path, await client.probe(path)))
        return results

    table = Table(title="API status")
    table.add_column("Base URL")
    table.add_column("Check")
    table.add_column("Status")
    table.add_column("Detail", overflow="fold")
    all_ok = True
    for base, check, status in asyncio.run(_run()):
        all_ok &= status.ok
        code = str(status.status_code) if status.status_code is not None else "-"
        color = "green" if status.ok else "red"
        table.add_row(base, check, f"[{color}]{code}[/{color}]", status.detail)
    console.print(table)
    if not all_ok:
        sys.exit(1)


@cli.command("make-token")
@click.option("--uid", required=True)
@click.option("--email", required=True)
@click.option("--role", default="user", show_default=True)
@click.option("--days", type=int, default=7, show_default=True, help="Validity in days")
@click.option("--secret", envvar="JWT_SECRET", help="Signing secret (default: JWT_SECRET)")
def make_token(uid: str, email: str, role: str, days: int, secret: str | None):
    """Sign a test JWT for manual endpoint calls."""
    from mumpa_admin.api_client import create_test_token

    try:
        token = create_test_token(
            uid, email, role, secret=secret or get_settings().jwt_secret, expires_in=timedelta(days=days)
        )
    except ValueError as e:
        _fail(str(e))
    click.echo(token)


@cli.command("serve")
@click.option("--reload", is_flag=True, help="Restart on code changes")
def serve_cmd(reload: bool):
    """Run the HTTP API (HOST / PORT from settings)."""
    from mumpa_admin.__main__ import serve

    serve(reload=reload)


def main():
    cli()


if __name__ == "__main__":
    main()
