import json
import logging
from typing import Any, Dict, Iterable, Optional

import click
import yaml
from dotenv import load_dotenv
from pydantic import ValidationError

from extable.__version__ import __version__
from extable.loader import load_definition, load_records
from extable.table import ExTable

logger = logging.getLogger(__name__)


def parse_filters(items: Iterable[str]) -> Dict[str, Any]:
    """Convert `NAME=VALUE` pairs to filter values.

    A name given more than once collects its values in a list and
    `NAME.from=VALUE` / `NAME.to=VALUE` build the bounds of a range.
    """
    result: Dict[str, Any] = {}
    for item in items:
        if "=" not in item:
            raise click.BadParameter(
                f"expected NAME=VALUE, got {item!r}", param_hint="--filter"
            )
        name, value = item.split("=", 1)
        name = name.strip()
        base, _, bound = name.partition(".")
        if bound in ("from", "to"):
            result.setdefault(base, {})[bound] = value
        elif name in result:
            crt = result[name]
            result[name] = (crt if isinstance(crt, list) else [crt]) + [value]
        else:
            result[name] = value
    return result


def read_table(definition: str) -> ExTable:
    try:
        return load_definition(definition)
    except (ValidationError, ValueError, yaml.YAMLError) as e:
        raise click.ClickException(f"Invalid definition {definition}: {e}")


def dump(data: Any, fmt: str) -> str:
    if fmt == "yaml":
        return yaml.dump(data, default_flow_style=False, sort_keys=False)
    return json.dumps(data, indent=2, default=str)


@click.group()
@click.option("--debug/--no-debug", default=False)
@click.version_option(__version__, prog_name="extable")
def cli(debug: bool):
    load_dotenv()
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.INFO,
        format="[%(levelname)s] %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    logging.debug("Debug mode is on")


@cli.command()
@click.argument("definition", type=click.Path(exists=True, dir_okay=False))
@click.argument("data", type=click.Path(exists=True, dir_okay=False))
@click.option(
    "--format",
    "fmt",
    type=click.Choice(["html", "json"]),
    default="html",
    envvar="EXTABLE_FORMAT",
    show_default=True,
    help="Render markup or the structural snapshot.",
)
@click.option("--page", type=click.IntRange(min=1), default=1)
@click.option(
    "--per-page",
    type=click.IntRange(min=1),
    default=None,
    envvar="EXTABLE_PER_PAGE",
    help="Split the rows in pages of this size.",
)
@click.option("--search", default=None, help="Quick search query.")
@click.option("--sort", "sort_by", default=None, help="Sort by this key.")
@click.option(
    "--direction",
    type=click.Choice(["asc", "desc"], case_sensitive=False),
    default="asc",
)
@click.option(
    "--filter",
    "filters",
    multiple=True,
    metavar="NAME=VALUE",
    help="Value of a filter; can be repeated.",
)
@click.option(
    "--output",
    type=click.File("w", encoding="utf-8"),
    default="-",
    help="Write to this file instead of the standard output.",
)
def render(
    definition: str,
    data: str,
    fmt: str,
    page: int,
    per_page: Optional[int],
    search: Optional[str],
    sort_by: Optional[str],
    direction: str,
    filters: Iterable[str],
    output,
):
    """Render the records in DATA using the table in DEFINITION."""
    table = read_table(definition)
    try:
        table.set_data(load_records(data))
    except (ValueError, yaml.YAMLError) as e:
        raise click.ClickException(str(e))

    if per_page:
        table.paginate(per_page)
    table.set_current_page(page)
    if search is not None:
        table.set_searchable().search(search)
    if sort_by:
        table.sort(sort_by, direction)
    table.set_filter_values(parse_filters(filters))

    logger.debug(
        "Rendering %d records from %s as %s", len(table.data), data, fmt
    )
    if fmt == "json":
        click.echo(table.to_json(indent=2), file=output)
    else:
        click.echo(table.render(), file=output)


@cli.command()
@click.argument("definition", type=click.Path(exists=True, dir_okay=False))
@click.option(
    "--format",
    "fmt",
    type=click.Choice(["json", "yaml"]),
    default="json",
    show_default=True,
)
def describe(definition: str, fmt: str):
    """Print the structure of the table in DEFINITION."""
    table = read_table(definition)
    snapshot = table.to_dict()
    del snapshot["data"]
    click.echo(dump(snapshot, fmt))


if __name__ == "__main__":
    cli()
