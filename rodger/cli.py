# rodger/cli.py
import logging
import os

import click
from dotenv import load_dotenv

from rodger.config import DEFAULT_CONFIG, load_config, resolve_paths, save_config
from rodger.core.interpreter import parse
from rodger.core.models import PLACEHOLDER_ITEM
from rodger.errors import RodgerError
from rodger.items import ItemRegistry
from rodger.ledger import LedgerStore
from rodger.summary import summarize_by_day, totals


def _format_record(record):
    return (
        f"{record.sr_no:>3}  {record.customer_name:<16} {record.item_name:<16} "
        f"{record.amount:>10.2f}  due {record.due:.2f}  paid {record.paid:.2f}  "
        f"expense {record.expense:.2f}  {record.time}"
    )


def _echo_totals(records):
    sums = totals(records)
    click.echo(
        f"Total ₹{sums['amount']:.2f} | due ₹{sums['due']:.2f} | "
        f"paid ₹{sums['paid']:.2f} | expense ₹{sums['expense']:.2f}"
    )


def _parse_assignments(assignments):
    fields = {}
    for item in assignments:
        if "=" not in item:
            raise click.BadParameter(f"expected FIELD=VALUE, got '{item}'")
        key, value = item.split("=", 1)
        fields[key.strip()] = value
    return fields


@click.group()
@click.option(
    '--config', 'config_path',
    default='rodger.yaml',
    type=click.Path(dir_okay=False),
    help='Path to a YAML config file (defaults are used if it does not exist)'
)
@click.option(
    '--env-file', 'env_file',
    default=None,
    type=click.Path(exists=True, dir_okay=False),
    help='Optional .env file, e.g. with RODGER_DATA_DIR or RODGER_LOG_LEVEL'
)
@click.pass_context
def main(ctx, config_path, env_file):
    """
    Keep a day-by-day shop ledger from plain sentences such as
    "Ramesh se 500 mile" or "Suresh ko 200 ka chawal udhar".
    """
    if env_file:
        load_dotenv(env_file)
    logging.basicConfig(level=os.getenv("RODGER_LOG_LEVEL", "WARNING").upper())

    try:
        cfg = load_config(config_path)
    except ValueError as e:
        raise click.ClickException(str(e))
    ledger_path, items_path = resolve_paths(cfg)
    ctx.obj = {
        'config': cfg,
        'config_path': config_path,
        'ledger': LedgerStore(ledger_path),
        'items': ItemRegistry(items_path),
    }


@main.command()
@click.argument('sentence', nargs=-1, required=True)
@click.pass_obj
def say(obj, sentence):
    """Interpret SENTENCE and record it in today's sheet."""
    text = " ".join(sentence)
    intent = parse(text)
    if intent.is_report:
        click.echo("Report requested. Use 'rodger history --start ... --end ...'.")
        return
    if not intent.customer_name or intent.amount is None:
        raise click.ClickException(
            "Could not understand. Please mention name and amount."
        )
    try:
        record = obj['ledger'].add_transaction(intent)
    except RodgerError as e:
        raise click.ClickException(str(e))
    if record.item_name != PLACEHOLDER_ITEM:
        obj['items'].add_item(record.item_name)
    click.echo(f"Added to {record.date} ({intent.type.value}):")
    click.echo(_format_record(record))


@main.command()
@click.option('--date', 'date_key', default=None, help='Sheet date as DD-MM-YYYY (default: today)')
@click.pass_obj
def show(obj, date_key):
    """Print one day's sheet with its totals."""
    ledger = obj['ledger']
    if date_key:
        records = ledger.get_partition(date_key)
    else:
        date_key = ledger.today_key()
        records = ledger.get_today()
    if not records:
        click.echo(f"No entries found for {date_key}.")
        return
    click.echo(f"Entries ({date_key})")
    for record in records:
        click.echo(_format_record(record))
    _echo_totals(records)


@main.command()
@click.option('--start', required=True, help='First day, YYYY-MM-DD')
@click.option('--end', required=True, help='Last day, YYYY-MM-DD')
@click.option('--customer', default=None, help='Only customers whose name contains this text')
@click.pass_obj
def history(obj, start, end, customer):
    """Print entries between two dates with daily and overall totals."""
    try:
        entries = obj['ledger'].get_range(start, end, customer=customer)
    except RodgerError as e:
        raise click.ClickException(str(e))
    if not entries:
        click.echo("No entries found.")
        return
    click.echo(f"Entries ({start} to {end})")
    current = None
    for entry in entries:
        if entry.partition_key != current:
            current = entry.partition_key
            click.echo(f"-- {current}")
        click.echo(_format_record(entry.record))
    click.echo("")
    click.echo(summarize_by_day(entries).to_string())
    _echo_totals([e.record for e in entries])


@main.command()
@click.argument('date_key')
@click.argument('sr_no', type=int)
@click.argument('assignments', nargs=-1, required=True)
@click.pass_obj
def edit(obj, date_key, sr_no, assignments):
    """Correct fields of entry SR_NO in sheet DATE_KEY, e.g. paid=300."""
    fields = _parse_assignments(assignments)
    try:
        record = obj['ledger'].update_transaction(date_key, sr_no - 1, fields)
    except RodgerError as e:
        raise click.ClickException(str(e))
    if 'item_name' in fields and record.item_name != PLACEHOLDER_ITEM:
        obj['items'].add_item(record.item_name)
    click.echo(_format_record(record))


@main.command()
@click.argument('date_key')
@click.argument('sr_no', type=int)
@click.pass_obj
def delete(obj, date_key, sr_no):
    """Delete entry SR_NO from sheet DATE_KEY and renumber the rest."""
    try:
        removed = obj['ledger'].delete_transaction(date_key, sr_no - 1)
    except RodgerError as e:
        raise click.ClickException(str(e))
    click.echo(f"Deleted entry for {removed.customer_name} from {date_key}.")


@main.command('init-config')
@click.pass_obj
def init_config(obj):
    """Write the default config to the --config path."""
    save_config(DEFAULT_CONFIG, obj['config_path'])
    click.echo(f"Wrote {obj['config_path']}")


@main.group()
def items():
    """Manage the item catalog used for autocomplete."""


@items.command('list')
@click.pass_obj
def list_items(obj):
    for item in obj['items'].get_items():
        click.echo(f"{item.name}\t{item.date}")


@items.command()
@click.argument('query')
@click.pass_obj
def search(obj, query):
    limit = obj['config'].get('search_limit') or None
    for item in obj['items'].search(query, limit=limit):
        click.echo(item.name)


@items.command('add')
@click.argument('name', nargs=-1, required=True)
@click.pass_obj
def add_item(obj, name):
    if obj['items'].add_item(" ".join(name)):
        click.echo("Added.")
    else:
        click.echo("Already present or invalid; nothing added.")


@items.command('delete')
@click.argument('name')
@click.pass_obj
def delete_item(obj, name):
    """Remove NAME and mark its ledger entries as deleted."""
    if not obj['items'].delete_item(name, obj['ledger']):
        raise click.ClickException(f"No item named '{name}'.")
    click.echo(f"Deleted {name}.")


@items.command()
@click.pass_obj
def populate(obj):
    """Seed an empty catalog from item names already in the ledger."""
    count = obj['items'].populate_from_ledger(obj['ledger'])
    click.echo(f"Added {count} item(s).")


if __name__ == '__main__':
    main()
