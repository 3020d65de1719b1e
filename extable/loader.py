"""Build tables from declarative definitions.

A definition is a plain mapping, usually read from a YAML or JSON file:

```yaml
columns:
  - name: name
    sortable: true
    searchable: true
  - name: price
    type: money
    currency: EUR
filters:
  - name: status
    type: select
    options: {active: Active, inactive: Inactive}
actions:
  - preset: edit
    url: /products/{id}/edit
bulk_actions:
  - preset: delete_selected
    action_url: /products/bulk-delete
options:
  searchable: true
  per_page: 10
```

Column and filter entries are validated by the info parser of their type
(see `column_type_to_info` and `filter_type_to_info`); keys that the type
does not know are rejected.
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Type, Union

import yaml
from pydantic import BaseModel, ConfigDict

from extable.action import ActionInfo, BulkAction, BulkActionInfo, ExAction
from extable.column import ExColumn
from extable.column_types.api import column_type_to_class, column_type_to_info
from extable.constants import (
    COLUMN_TYPE_TEXT,
    FILTER_TYPE_TEXT,
    RecordType,
    SortDirType,
)
from extable.filter import ExFilter
from extable.filter_types.api import filter_type_to_class, filter_type_to_info
from extable.table import ExTable

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]

ACTION_PRESETS = ("view", "edit", "delete")
BULK_ACTION_PRESETS = ("delete_selected", "export_selected")


class TableOptionsInfo(BaseModel):
    """Parser for the `options` section of a table definition.

    Attributes:
        searchable: Whether the quick search is enabled.
        per_page: Enables pagination with this many rows in a page.
        sort_by: The initial sort key.
        sort_direction: The initial sort direction.
        striped: Whether alternate rows have a different background.
        hoverable: Whether rows are highlighted under the pointer.
        bordered: Whether cells have borders.
        compact: Whether cells use less padding.
        selectable: Whether rows can be selected for bulk actions.
        empty_message: Shown when there are no rows.
        empty_icon: Icon shown when there are no rows.
        empty_action_url: Target of the link shown when there are no rows.
        empty_action_label: Text of the link shown when there are no rows.
        html_attrs: Extra attributes of the table element.
    """

    model_config = ConfigDict(extra="forbid")

    searchable: Optional[bool] = None
    per_page: Optional[int] = None
    sort_by: Optional[str] = None
    sort_direction: Optional[SortDirType] = None
    striped: Optional[bool] = None
    hoverable: Optional[bool] = None
    bordered: Optional[bool] = None
    compact: Optional[bool] = None
    selectable: Optional[bool] = None
    empty_message: Optional[str] = None
    empty_icon: Optional[str] = None
    empty_action_url: Optional[str] = None
    empty_action_label: Optional[str] = None
    html_attrs: Optional[Dict[str, Any]] = None


def parsed_values(parser: Type[BaseModel], entry: Mapping[str, Any]) -> dict:
    """Validate an entry and keep the values that were provided."""
    parsed_info = parser.model_validate(entry)
    return {
        key: value
        for key, value in parsed_info.model_dump().items()
        if value is not None
    }


def split_entry(entry: Mapping[str, Any], default_type: str):
    """Separate the name and the type tag from the rest of an entry."""
    if not isinstance(entry, Mapping):
        raise ValueError(f"Expected a mapping, got {entry!r}")
    rest = dict(entry)
    name = rest.pop("name", None)
    type_name = rest.pop("type", None) or default_type
    if not name:
        raise ValueError(f"Entry {entry!r} has no name")
    return name, type_name, rest


def column_from_dict(entry: Mapping[str, Any]) -> ExColumn:
    """Create a column from its declarative form."""
    name, type_name, rest = split_entry(entry, COLUMN_TYPE_TEXT)
    Ctor = column_type_to_class.get(type_name)
    if Ctor is None:
        raise ValueError(
            f"Unknown column type `{type_name}` for {name}; valid types are: "
            f"{sorted(column_type_to_class)}"
        )
    extra = parsed_values(column_type_to_info[type_name], rest)
    logger.debug("Creating column %s for %s", Ctor.__name__, name)
    return Ctor(name=name, **extra)


def filter_from_dict(entry: Mapping[str, Any]) -> ExFilter:
    """Create a filter from its declarative form."""
    name, type_name, rest = split_entry(entry, FILTER_TYPE_TEXT)
    Ctor = filter_type_to_class.get(type_name)
    if Ctor is None:
        raise ValueError(
            f"Unknown filter type `{type_name}` for {name}; valid types are: "
            f"{sorted(filter_type_to_class)}"
        )
    extra = parsed_values(filter_type_to_info[type_name], rest)
    logger.debug("Creating filter %s for %s", Ctor.__name__, name)
    return Ctor(name=name, **extra)


def configure_action(action: ExAction, extra: Dict[str, Any]) -> ExAction:
    """Apply the values of a parsed action entry to an action."""
    url = extra.pop("url", None)
    for key, value in extra.items():
        setattr(action, key, value)
    if url:
        action.url(url)
    return action


def action_from_dict(entry: Mapping[str, Any]) -> ExAction:
    """Create a row action from its declarative form.

    The entry either names a preset (`view`, `edit`, `delete`) or provides
    the name of a new action.
    """
    rest = dict(entry)
    name = rest.pop("name", None)
    extra = parsed_values(ActionInfo, rest)
    preset = extra.pop("preset", None)

    if preset is not None:
        if preset not in ACTION_PRESETS:
            raise ValueError(
                f"Unknown action preset `{preset}`; valid presets are: "
                f"{list(ACTION_PRESETS)}"
            )
        action = getattr(ExAction, preset)()
        if name:
            action.name = name
    elif name:
        action = ExAction.make(name)
    else:
        raise ValueError(f"Action {entry!r} has neither a name nor a preset")
    return configure_action(action, extra)


def bulk_action_from_dict(entry: Mapping[str, Any]) -> BulkAction:
    """Create a bulk action from its declarative form.

    The entry either names a preset (`delete_selected`, `export_selected`)
    or provides the name of a new bulk action.
    """
    rest = dict(entry)
    name = rest.pop("name", None)
    extra = parsed_values(BulkActionInfo, rest)
    preset = extra.pop("preset", None)

    if preset is not None:
        if preset not in BULK_ACTION_PRESETS:
            raise ValueError(
                f"Unknown bulk action preset `{preset}`; valid presets are: "
                f"{list(BULK_ACTION_PRESETS)}"
            )
        action = getattr(BulkAction, preset)()
        if name:
            action.name = name
    elif name:
        action = BulkAction.make(name)
    else:
        raise ValueError(
            f"Bulk action {entry!r} has neither a name nor a preset"
        )
    return configure_action(action, extra)


def table_from_dict(definition: Mapping[str, Any]) -> ExTable:
    """Create a table (without data) from its declarative form.

    Args:
        definition: A mapping with the optional keys `columns`, `filters`,
            `actions`, `bulk_actions`, `header_actions` and `options`.

    Raises:
        ValueError: The definition is not a mapping, has unknown sections
            or uses an unknown type tag.
        pydantic.ValidationError: An entry has unknown keys or values of
            the wrong type.
    """
    if not isinstance(definition, Mapping):
        raise ValueError("A table definition must be a mapping")

    known = {
        "columns",
        "filters",
        "actions",
        "bulk_actions",
        "header_actions",
        "options",
    }
    unknown = set(definition) - known
    if unknown:
        raise ValueError(
            f"Unknown sections in table definition: {sorted(unknown)}"
        )

    table = ExTable.make()
    table.set_columns(
        column_from_dict(e) for e in definition.get("columns") or []
    )
    table.set_filters(
        filter_from_dict(e) for e in definition.get("filters") or []
    )
    table.set_actions(
        action_from_dict(e) for e in definition.get("actions") or []
    )
    table.set_bulk_actions(
        bulk_action_from_dict(e) for e in definition.get("bulk_actions") or []
    )
    table.set_header_actions(
        action_from_dict(e) for e in definition.get("header_actions") or []
    )

    options = parsed_values(TableOptionsInfo, definition.get("options") or {})
    per_page = options.pop("per_page", None)
    if per_page is not None:
        table.paginate(per_page)
    sort_by = options.pop("sort_by", None)
    sort_direction = options.pop("sort_direction", "asc")
    if sort_by:
        table.sort(sort_by, sort_direction)
    html_attrs = options.pop("html_attrs", None)
    if html_attrs:
        table.add_attrs(html_attrs)
    for key, value in options.items():
        setattr(table, key, value)

    logger.debug(
        "Created table with %d columns and %d filters",
        len(table.columns),
        len(table.filters),
    )
    return table


def read_file(path: PathLike) -> Any:
    """Read the content of a YAML or JSON file."""
    path = Path(path)
    suffix = path.suffix.lower()
    if suffix not in (".yaml", ".yml", ".json"):
        raise ValueError(
            f"Unsupported file type `{suffix}` for {path}; "
            "use .yaml, .yml or .json"
        )
    with open(path, "r", encoding="utf-8") as f:
        if suffix == ".json":
            return json.load(f)
        return yaml.safe_load(f)


def load_definition(path: PathLike) -> ExTable:
    """Create a table from a definition file."""
    return table_from_dict(read_file(path) or {})


def load_records(path: PathLike) -> List[RecordType]:
    """Read the records of a table from a file.

    The file holds either a list of mappings or a mapping with such a list
    under the `data` key.
    """
    content = read_file(path)
    if content is None:
        return []
    if isinstance(content, Mapping):
        content = content.get("data")
    if not isinstance(content, list) or not all(
        isinstance(r, Mapping) for r in content
    ):
        raise ValueError(f"{path} does not contain a list of records")
    logger.debug("Loaded %d records from %s", len(content), path)
    return content
