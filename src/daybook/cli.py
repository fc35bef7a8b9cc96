"""Command line entry points for the daybook."""

from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal

import click

from .config import BaseConfig
from .context import AppContext, create_app_context
from .errors import DaybookError
from .logging_config import setup_logging
from .services import entries, pagination, query, reports, summary
from .services._values import money, text_of


def _fmt(amount: Decimal) -> str:
    return f"{amount:,.2f}"


@click.group()
@click.option("--tenant", default=None, help="Restrict to one tenant (defaults to DAYBOOK_TENANT).")
@click.pass_context
def cli(ctx: click.Context, tenant: str | None) -> None:
    """Daybook entries, summaries and bank ledger sync."""

    config = BaseConfig()
    setup_logging(config)
    app = create_app_context(config)
    if tenant:
        app.tenant = tenant
    ctx.obj = app


@cli.command("summary")
@click.pass_obj
def summary_cmd(app: AppContext) -> None:
    """Show today / week / month totals."""

    data = summary.aggregate(entries.list_entries(app.entry_repo, app.tenant), datetime.now())
    for label, totals in data.as_dict().items():
        click.echo(
            f"{label:<6} in {_fmt(totals['incoming']):>12}  "
            f"out {_fmt(totals['outgoing']):>12}  net {_fmt(totals['net']):>12}"
        )


@cli.command("search")
@click.argument("term", required=False, default="")
@click.option("--from", "date_from", type=click.DateTime(formats=["%Y-%m-%d"]), default=None)
@click.option("--to", "date_to", type=click.DateTime(formats=["%Y-%m-%d"]), default=None)
@click.option("--min", "min_amount", type=Decimal, default=None)
@click.option("--max", "max_amount", type=Decimal, default=None)
@click.option("--type", "pay_type", type=click.Choice(["all", "incoming", "outgoing"]), default="all")
@click.option("--status", "pay_status", type=click.Choice(["all", "paid", "un_paid"]), default="all")
@click.option("--category", default="all")
@click.option("--sort", "sort_by", type=click.Choice(query.SORT_FIELDS), default="relevance")
@click.option("--order", "sort_order", type=click.Choice(query.SORT_ORDERS), default="desc")
@click.option("--page", type=int, default=1, show_default=True)
@click.option("--page-size", type=int, default=None)
@click.pass_obj
def search_cmd(
    app: AppContext,
    term: str,
    date_from: datetime | None,
    date_to: datetime | None,
    min_amount: Decimal | None,
    max_amount: Decimal | None,
    pay_type: str,
    pay_status: str,
    category: str,
    sort_by: str,
    sort_order: str,
    page: int,
    page_size: int | None,
) -> None:
    """Filter, rank and page through entries."""

    filters = query.EntryFilters(
        search_term=term,
        date_from=date_from.date() if date_from else None,
        date_to=date_to.date() if date_to else None,
        min_amount=min_amount,
        max_amount=max_amount,
        pay_type=pay_type,
        pay_status=pay_status,
        category=category,
    )
    rows = query.filter_entries(entries.list_entries(app.entry_repo, app.tenant), filters)
    rows = query.sort_entries(rows, sort_by, sort_order, term)
    try:
        result = pagination.paginate(rows, page, page_size or app.config.PAGE_SIZE)
    except ValueError as exc:
        raise click.BadParameter(str(exc), param_hint="--page") from exc

    for entry in result.items:
        click.echo(
            f"#{entry.id:<6} {entry.created_at:%Y-%m-%d} "
            f"{text_of(entry.payment_type):<8} "
            f"{_fmt(money(entry.amount)):>12}  {entry.description or ''}"
        )
    click.echo(
        f"Page {result.page}/{result.total_pages} ({result.total_items} entries)"
    )


@cli.command("mark-paid")
@click.argument("entry_id", type=int)
@click.pass_context
def mark_paid_cmd(ctx: click.Context, entry_id: int) -> None:
    """Mark an entry paid and create its bank transaction when required."""

    app: AppContext = ctx.obj
    try:
        outcome = entries.mark_paid(app.entry_repo, app.ledger, entry_id)
    except DaybookError as exc:
        raise click.ClickException(str(exc)) from exc

    if outcome.message:
        click.echo(outcome.message, err=True)
        ctx.exit(1)
    click.echo(f"Entry {entry_id} marked paid ({outcome.sync.status.value}).")


@cli.command("report")
@click.option("--from", "start", type=click.DateTime(formats=["%Y-%m-%d"]), required=True)
@click.option("--to", "end", type=click.DateTime(formats=["%Y-%m-%d"]), required=True)
@click.pass_obj
def report_cmd(app: AppContext, start: datetime, end: datetime) -> None:
    """Profit & loss and cash flow for a date range."""

    rows = entries.list_entries(app.entry_repo, app.tenant)
    start_day: date = start.date()
    end_day: date = end.date()
    pl = reports.profit_loss(rows, start_day, end_day)
    cf = reports.cash_flow(rows, start_day, end_day)
    click.echo(f"Revenue   {_fmt(pl.revenue):>12}")
    click.echo(f"Expenses  {_fmt(pl.expenses):>12}")
    click.echo(f"Net       {_fmt(pl.net_income):>12}")
    for mode, bucket in sorted(cf.by_mode.items()):
        click.echo(f"  {mode:<17} in {_fmt(bucket['in']):>12}  out {_fmt(bucket['out']):>12}")
