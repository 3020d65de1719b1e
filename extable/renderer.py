import json
import logging
from typing import TYPE_CHECKING, Any, Dict, List, Optional
from urllib.parse import urlencode

from jinja2 import Environment, PackageLoader, select_autoescape
from markupsafe import Markup, escape

from extable.action import ActionState
from extable.column import ExColumn
from extable.constants import SORT_ASC, SORT_DESC, RecordType
from extable.utils import inflect_e, to_date, to_text

if TYPE_CHECKING:
    from extable.table import ExTable

logger = logging.getLogger(__name__)

DEFAULT_CONFIG = {
    "table_class": "min-w-full divide-y divide-gray-200",
    "header_class": "bg-gray-50",
    "header_cell_class": (
        "px-6 py-3 text-xs font-medium text-gray-500 uppercase tracking-wider"
    ),
    "body_class": "bg-white divide-y divide-gray-200",
    "cell_class": "px-6 py-4 text-sm text-gray-900",
    "compact_cell_class": "px-4 py-2 text-sm",
    "striped_class": "bg-gray-50",
    "hover_class": "hover:bg-gray-50",
    "bordered_class": "border border-gray-200",
}

ALIGN_CLASSES = {
    "left": "text-left",
    "center": "text-center",
    "right": "text-right",
}

ACTION_COLOR_CLASSES = {
    "danger": "text-red-600 hover:text-red-900",
    "red": "text-red-600 hover:text-red-900",
    "warning": "text-yellow-600 hover:text-yellow-900",
    "yellow": "text-yellow-600 hover:text-yellow-900",
    "success": "text-green-600 hover:text-green-900",
    "green": "text-green-600 hover:text-green-900",
    "secondary": "text-gray-600 hover:text-gray-900",
}
DEFAULT_ACTION_COLOR_CLASS = "text-blue-600 hover:text-blue-900"

# Number of page links shown on each side of the current page.
PAGE_WINDOW = 2


def iso_date(value: Any) -> str:
    """The `YYYY-MM-DD` form expected by date inputs; empty if unknown."""
    if value is None or value == "":
        return ""
    try:
        return to_date(value).isoformat()
    except ValueError:
        logger.debug("Cannot use %r as a date input value", value)
        return ""


def create_jinja_env(auto_reload: bool = False) -> Environment:
    """Creates the Jinja2 environment used to render tables."""
    jinja_env = Environment(
        loader=PackageLoader("extable", "templates"),
        autoescape=select_autoescape(
            enabled_extensions=("html", "j2"), default_for_string=True
        ),
        auto_reload=auto_reload,
        trim_blocks=True,
        lstrip_blocks=True,
    )

    jinja_env.globals["align_class"] = lambda x: ALIGN_CLASSES.get(
        x, "text-left"
    )
    jinja_env.globals["action_class"] = lambda x: ACTION_COLOR_CLASSES.get(
        x, DEFAULT_ACTION_COLOR_CLASS
    )

    jinja_env.filters["plural"] = lambda word, count=2: inflect_e.plural(
        word, count
    )
    jinja_env.filters["tojson_str"] = lambda x: json.dumps(to_text(x))
    jinja_env.filters["iso_date"] = iso_date
    return jinja_env


class ExRenderer:
    """Turns a table into markup.

    A renderer only reads the state exposed by the table: the visible
    columns, the filters and actions, the rows produced by `get_data()`,
    the sort and pagination state, the display flags and the empty state.
    """

    def render_table(self, table: "ExTable") -> str:
        raise NotImplementedError("Subclasses should implement this!")


class HtmlRenderer(ExRenderer):
    """Renders a table as an HTML fragment styled with Tailwind classes.

    Every value coming from records is escaped, except the cells of
    columns that produce markup (`html` columns).

    Attributes:
        config: The CSS classes of the parts of the table; the keys of
            `DEFAULT_CONFIG` can be overridden.
        template_name: The name of the template inside the package.
        base_url: Prefix of the sort and pagination links.
    """

    def __init__(
        self,
        config: Optional[Dict[str, str]] = None,
        template_name: str = "table.html.j2",
        base_url: str = "",
        env: Optional[Environment] = None,
    ):
        self.config = {**DEFAULT_CONFIG, **(config or {})}
        self.template_name = template_name
        self.base_url = base_url
        self.env = env if env is not None else create_jinja_env()

    def render_table(self, table: "ExTable") -> str:
        rows = table.get_data()
        columns = table.visible_columns
        first_item, last_item = table.page_range
        context = {
            "table": table,
            "config": self.config,
            "columns": columns,
            "rows": [
                self.row_context(table, columns, record, index)
                for index, record in enumerate(rows)
            ],
            "header_actions": [
                state
                for state in (a.resolve({}) for a in table.header_actions)
                if state is not None
            ],
            "indicators": table.get_indicators(),
            "filter_controls": [
                self.filter_context(table, flt)
                for flt in table.filters
                if flt.visible
            ],
            "sort_links": {c.name: self.sort_url(table, c) for c in columns},
            "pages": self.page_links(table),
            "first_item": first_item,
            "last_item": last_item,
            "colspan": (
                len(columns)
                + (1 if table.selectable else 0)
                + (1 if table.actions else 0)
            ),
        }
        logger.debug(
            "Rendering %d rows with %d columns", len(rows), len(columns)
        )
        template = self.env.get_template(self.template_name)
        return template.render(**context)

    def cell_markup(self, column: ExColumn, record: RecordType) -> Markup:
        """The content of a cell; only `html` columns are not escaped."""
        value = column.get_value(record)
        if column.html:
            return Markup(to_text(value))
        return escape(to_text(value))

    def row_context(
        self,
        table: "ExTable",
        columns: List[ExColumn],
        record: RecordType,
        index: int,
    ) -> Dict[str, Any]:
        cells = []
        for column in columns:
            content = self.cell_markup(column, record)
            cells.append(
                {
                    "column": column,
                    "content": content,
                    "copy": (
                        content.striptags()
                        if column.copyable and content
                        else None
                    ),
                }
            )

        actions: List[ActionState] = []
        for action in table.actions:
            state = action.resolve(record)
            if state is not None:
                actions.append(state)

        row_class = []
        if table.striped and index % 2 == 1:
            row_class.append(self.config["striped_class"])
        if table.hoverable:
            row_class.append(self.config["hover_class"])

        return {
            "record": record,
            "id": record.get("id", index),
            "cells": cells,
            "actions": actions,
            "row_class": " ".join(row_class),
        }

    def filter_context(self, table: "ExTable", flt: Any) -> Dict[str, Any]:
        value = table.filter_values.get(flt.name, flt.default)
        return {"filter": flt, "value": value}

    def url(self, **params: Any) -> str:
        query = urlencode(
            {k: v for k, v in params.items() if v not in (None, "")}
        )
        return f"{self.base_url}?{query}"

    def sort_url(self, table: "ExTable", column: ExColumn) -> Optional[str]:
        """The link that sorts by a column; None for unsortable columns.

        The link toggles the direction when the table is already sorted by
        the column.
        """
        if not column.sortable:
            return None
        is_active = table.sort_by == column.name
        direction = (
            SORT_DESC
            if is_active and table.sort_direction == SORT_ASC
            else SORT_ASC
        )
        return self.url(
            search=table.search_query, sort=column.name, dir=direction
        )

    def page_url(self, table: "ExTable", page: int) -> str:
        return self.url(
            search=table.search_query,
            sort=table.sort_by,
            dir=table.sort_direction if table.sort_by else None,
            page=page,
        )

    def page_links(self, table: "ExTable") -> List[Dict[str, Any]]:
        """The links of the pagination bar.

        Empty if the table is not paginated or fits in a single page.
        """
        total_pages = table.total_pages
        if not table.paginated or total_pages <= 1:
            return []

        current = table.current_page
        result = []
        if current > 1:
            result.append(
                {
                    "kind": "previous",
                    "page": current - 1,
                    "url": self.page_url(table, current - 1),
                }
            )
        start = max(1, current - PAGE_WINDOW)
        end = min(total_pages, current + PAGE_WINDOW)
        for page in range(start, end + 1):
            result.append(
                {
                    "kind": "current" if page == current else "page",
                    "page": page,
                    "url": self.page_url(table, page),
                }
            )
        if current < total_pages:
            result.append(
                {
                    "kind": "next",
                    "page": current + 1,
                    "url": self.page_url(table, current + 1),
                }
            )
        return result
