"""parcelparty CLI."""

import json
import logging
from pathlib import Path

import click

from parcelparty.config import DATA_DIR, LOG_LEVEL, OWNER_DATA_PATH
from parcelparty.owners.export import build_owner_files
from parcelparty.owners.mapping import (
    OwnerDataError, build_owner_data, load_owner_data, save_owner_data,
)
from parcelparty.parties.classify import classify_all, explain

logging.basicConfig(
    level=LOG_LEVEL,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    datefmt="%H:%M:%S",
)
logger = logging.getLogger(__name__)


@click.group()
def main():
    """parcelparty: owner-name classification for property appraiser extractions."""


@main.command()
@click.argument("names", nargs=-1, required=True)
@click.option("--explain", "show_reason", is_flag=True, help="Include the reason a name yields nothing.")
def classify(names: tuple[str, ...], show_reason: bool):
    """Classify raw owner names and print the result as JSON.

    \b
    Examples:
        parcelparty classify "SMITH JOHN & JANE"
        parcelparty classify --explain "UNKNOWN" "ACME HOLDINGS LLC"
    """
    out = []
    for raw in names:
        entry = {"raw": raw, "parties": [p.to_dict() for p in classify_all(raw)]}
        if show_reason:
            entry["reason"] = explain(raw)
        out.append(entry)
    click.echo(json.dumps(out, indent=2, ensure_ascii=False))


@main.command()
@click.argument("parcel_id")
@click.argument("mentions_path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--out", "out_path", type=click.Path(dir_okay=False, path_type=Path), default=None,
              help="Owner data file to write (default: owners/owner_data.json).")
@click.option("--dry-run", is_flag=True, help="Print the owner data instead of writing it.")
def owners(parcel_id: str, mentions_path: Path, out_path: Path, dry_run: bool):
    """Build the owner data file from raw owner mentions.

    MENTIONS_PATH is a JSON object mapping "current" or a sale date
    (YYYY-MM-DD or MM/DD/YYYY) to a list of raw owner strings.

    \b
    Examples:
        parcelparty owners 12-34-56 mentions.json --dry-run
        parcelparty owners 12-34-56 mentions.json --out owners/owner_data.json
    """
    try:
        mentions = json.loads(mentions_path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        click.echo(f"Error: {mentions_path} is not valid JSON: {e}", err=True)
        raise SystemExit(1)
    if not isinstance(mentions, dict):
        click.echo(f"Error: {mentions_path} must contain a JSON object.", err=True)
        raise SystemExit(1)

    data = build_owner_data(parcel_id, mentions)

    if dry_run:
        click.echo(json.dumps(data, indent=2, ensure_ascii=False))
        return

    out_path = out_path or OWNER_DATA_PATH
    save_owner_data(data, out_path)
    by_date = data[f"property_{parcel_id}"]["owners_by_date"]
    click.echo(
        f"Saved {sum(len(v) for v in by_date.values())} owners "
        f"({len(data['invalid_owners'])} invalid) to {out_path}"
    )


@main.command()
@click.argument("parcel_id")
@click.option("--owners", "owners_path", type=click.Path(dir_okay=False, path_type=Path), default=None,
              help="Owner data file (default: owners/owner_data.json).")
@click.option("--out", "out_dir", type=click.Path(file_okay=False, path_type=Path), default=None,
              help="Output directory (default: data/).")
@click.option("--sale-date", "sale_dates", multiple=True,
              help="Date of sales_1, sales_2, ... in order. Repeatable.")
@click.option("--link-first-sale", is_flag=True, help="Without --sale-date, link current owners to sales_1.")
@click.option("--mailing-address", default=None, help="Current owners' mailing address.")
@click.option("--request-identifier", default=None, help="Copied onto company and mailing records.")
@click.option("--dry-run", is_flag=True, help="List the files that would be written.")
def extract(parcel_id: str, owners_path: Path, out_dir: Path, sale_dates: tuple[str, ...],
            link_first_sale: bool, mailing_address: str, request_identifier: str, dry_run: bool):
    """Write person, company and relationship files for one property.

    \b
    Examples:
        parcelparty extract 12-34-56 --sale-date 2021-03-04 --sale-date 2015-06-01
        parcelparty extract 12-34-56 --mailing-address "PO BOX 1, TAMPA FL" --dry-run
    """
    owners_path = owners_path or OWNER_DATA_PATH
    out_dir = out_dir or DATA_DIR

    try:
        owner_data = load_owner_data(owners_path)
        result = build_owner_files(
            owner_data,
            parcel_id,
            sales_dates=list(sale_dates) or None,
            mailing_address=mailing_address,
            request_identifier=request_identifier,
            link_current_to_first_sale=link_first_sale,
        )
    except OwnerDataError as e:
        click.echo(f"Error: {e}", err=True)
        raise SystemExit(1)

    click.echo(
        f"{len(result.registry.persons())} persons, "
        f"{len(result.registry.companies())} companies, "
        f"{len(result.names('relationship_'))} relationships"
    )

    if dry_run:
        for name in result.files:
            click.echo(f"  {name}")
        click.echo("\nDry run, no files written.")
        return

    written = result.write(out_dir)
    click.echo(f"Wrote {len(written)} files to {out_dir}")
