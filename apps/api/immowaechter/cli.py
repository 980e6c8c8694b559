"""CLI tools for ImmoWächter operations."""

import asyncio
import json
from datetime import date, datetime
from uuid import UUID

import click

from immowaechter.db.session import SessionLocal


@click.group()
def cli():
    """ImmoWächter CLI tools."""
    pass


@cli.command("check-maintenances")
@click.option(
    "--date",
    "run_date",
    type=click.DateTime(formats=["%Y-%m-%d"]),
    default=None,
    help="Reference date (YYYY-MM-DD); defaults to today in Europe/Vienna",
)
def check_maintenances(run_date: datetime | None):
    """
    Run one maintenance reminder sweep and print the summary.

    Same behaviour as the cron endpoint, without the HTTP hop.

    Example:
        python -m immowaechter.cli check-maintenances --date 2025-01-01
    """
    from immowaechter.core.deps import build_maintenance_notifier, get_today
    from immowaechter.services.maintenance_record_service import RecordFetchError

    today: date = run_date.date() if run_date else get_today()

    with SessionLocal() as db:
        notifier = build_maintenance_notifier(db)
        try:
            summary = asyncio.run(notifier.run(today))
        except RecordFetchError as e:
            click.echo(f"❌ Database query failed: {e}")
            raise SystemExit(1)

    click.echo(json.dumps(summary.model_dump(mode="json", by_alias=True, exclude_none=True), indent=2, ensure_ascii=False))


@cli.command("escalate-critical")
@click.option(
    "--date",
    "run_date",
    type=click.DateTime(formats=["%Y-%m-%d"]),
    default=None,
    help="Reference date (YYYY-MM-DD); defaults to today in Europe/Vienna",
)
def escalate_critical(run_date: datetime | None):
    """Email owners about components in the critical or legal risk band."""
    from immowaechter.core.deps import build_critical_notifier, get_today
    from immowaechter.services.maintenance_record_service import RecordFetchError

    today: date = run_date.date() if run_date else get_today()

    with SessionLocal() as db:
        notifier = build_critical_notifier(db)
        try:
            summary = asyncio.run(notifier.run(today))
        except RecordFetchError as e:
            click.echo(f"❌ Database query failed: {e}")
            raise SystemExit(1)

    click.echo(json.dumps(summary.model_dump(mode="json", by_alias=True, exclude_none=True), indent=2, ensure_ascii=False))


@cli.command("seed-intervals")
def seed_intervals():
    """Insert the Austrian maintenance interval catalog (idempotent)."""
    from immowaechter.services.interval_catalog import seed_intervals as seed

    with SessionLocal() as db:
        added = seed(db)
    click.echo(f"✓ Added {added} maintenance intervals")


@cli.command("seed-risk-consequences")
def seed_risk_consequences():
    """Insert the risk consequence catalog (idempotent)."""
    from immowaechter.services.risk_consequence_catalog import seed_risk_consequences as seed

    with SessionLocal() as db:
        added = seed(db)
    click.echo(f"✓ Added {added} risk consequences")


@cli.command("risk-score")
@click.argument("property_id", type=click.UUID)
def risk_score(property_id: UUID):
    """Print the risk score of one property."""
    from immowaechter.services.risk_score_service import get_property_risk_score

    with SessionLocal() as db:
        result = get_property_risk_score(db, property_id)
    if result is None:
        click.echo(f"❌ Property {property_id} not found")
        raise SystemExit(1)
    click.echo(f"Score: {result.score}/{result.max_score} ({result.level})")
    click.echo(
        f"  components={result.total_components} overdue={result.overdue_maintenances} "
        f"critical={result.critical_components} legal={result.legal_components}"
    )


if __name__ == "__main__":
    cli()
