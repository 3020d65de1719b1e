import json
import logging
from functools import cmp_to_key
from math import ceil
from typing import (
    TYPE_CHECKING,
    Any,
    Dict,
    Iterable,
    List,
    Mapping,
    Optional,
    Sequence,
    Tuple,
    Type,
    TypeVar,
)

from attrs import define, field

from extable.action import BulkAction, ExAction
from extable.column import ExColumn
from extable.constants import SORT_ASC, SORT_DESC, RecordType, SortDirType
from extable.filter import ExFilter
from extable.utils import is_numeric, to_text

if TYPE_CHECKING:
    from extable.renderer import ExRenderer

logger = logging.getLogger(__name__)

T = TypeVar("T", bound="ExTable")


def first_page_or_later(page: int) -> int:
    """Page numbers start at 1; anything lower means the first page."""
    return max(1, int(page))


def compare_values(a: Any, b: Any) -> int:
    """Compare two cell values for sorting.

    Two numeric-looking values are compared as numbers, anything else is
    compared as case-insensitive text. Missing values count as empty text.
    """
    a = "" if a is None else a
    b = "" if b is None else b
    if is_numeric(a) and is_numeric(b):
        fa, fb = float(a), float(b)
        return (fa > fb) - (fa < fb)
    sa, sb = to_text(a).lower(), to_text(b).lower()
    return (sa > sb) - (sa < sb)


@define
class ExTable:
    """A table built from columns, filters and actions over a set of records.

    The table keeps the complete set of records together with the view
    state (search query, sort, current page). `get_data()` derives the rows
    to display from these every time it is called:

    1. the active filter values (see `filter_by()`) narrow the records;
    2. the search query keeps the records where any searchable column
       contains the query (case insensitive);
    3. the records are sorted by the `sort_by` key;
    4. the current page is sliced out, unless the records were already
       paginated by their source.

    The stored records are never changed.

    Attributes:
        columns: All the columns, in display order.
        filters: The filters the user can apply.
        actions: Actions shown for each row.
        bulk_actions: Actions applied to the selected rows.
        header_actions: Actions shown above the table.
        data: The complete, unfiltered set of records.
        paginated: Whether the rows are split in pages.
        already_paginated: Whether `data` is already exactly one page (for
            example the result of a paged database query). In that case
            `total_items` must be provided by the caller.
        per_page: The number of rows in a page.
        current_page: The page being displayed (1-based).
        total_items: The number of records used for page computations. It
            is set to the size of the records by `set_data()` and is not
            affected by filtering or searching.
        searchable: Whether the quick search is enabled.
        search_query: The text of the quick search.
        sort_by: The key the rows are sorted by.
        sort_direction: `asc` or `desc`.
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
        renderer: Turns the table into markup; `HtmlRenderer` if not set.
        filter_values: The value of each active filter, by filter name.
    """

    columns: List[ExColumn] = field(factory=list)
    filters: List[ExFilter] = field(factory=list)
    actions: List[ExAction] = field(factory=list)
    bulk_actions: List[BulkAction] = field(factory=list)
    header_actions: List[ExAction] = field(factory=list)
    data: List[RecordType] = field(factory=list, repr=False)

    paginated: bool = field(default=False)
    already_paginated: bool = field(default=False)
    per_page: int = field(default=25)
    current_page: int = field(default=1, converter=first_page_or_later)
    total_items: int = field(default=0)

    searchable: bool = field(default=False)
    search_query: Optional[str] = field(default=None)
    sort_by: Optional[str] = field(default=None)
    sort_direction: SortDirType = field(default=SORT_ASC)

    striped: bool = field(default=False)
    hoverable: bool = field(default=True)
    bordered: bool = field(default=False)
    compact: bool = field(default=False)
    selectable: bool = field(default=False)

    empty_message: str = field(default="No records found")
    empty_icon: str = field(default="inbox")
    empty_action_url: Optional[str] = field(default=None)
    empty_action_label: Optional[str] = field(default=None)
    html_attrs: Dict[str, Any] = field(factory=dict)
    renderer: Optional["ExRenderer"] = field(default=None, repr=False)
    filter_values: Dict[str, Any] = field(factory=dict)

    def __attrs_post_init__(self):
        self.data = list(self.data)
        if self.data and not self.total_items:
            self.total_items = len(self.data)

    def __repr__(self) -> str:
        return (
            f"<Table ({len(self.columns)} columns, "
            f"{len(self.data)} records)>"
        )

    @classmethod
    def make(cls: Type[T], **kwargs: Any) -> T:
        return cls(**kwargs)

    @classmethod
    def from_schema(cls: Type[T], schema: Any) -> T:
        """Create a table with the columns described by a field schema.

        See `extable.schema.columns_from_schema()` for the accepted forms.
        """
        from extable.schema import columns_from_schema

        return cls(columns=columns_from_schema(schema))

    def get_column(self, name: str) -> ExColumn:
        for column in self.columns:
            if column.name == name:
                return column
        raise KeyError(
            f"No column named `{name}`; valid names are: "
            f"{[c.name for c in self.columns]}"
        )

    def get_filter(self, name: str) -> ExFilter:
        for flt in self.filters:
            if flt.name == name:
                return flt
        raise KeyError(
            f"No filter named `{name}`; valid names are: "
            f"{[f.name for f in self.filters]}"
        )

    # Configuration.

    def set_columns(self: T, columns: Iterable[ExColumn]) -> T:
        self.columns = list(columns)
        return self

    def set_filters(self: T, filters: Iterable[ExFilter]) -> T:
        self.filters = list(filters)
        return self

    def set_actions(self: T, actions: Iterable[ExAction]) -> T:
        self.actions = list(actions)
        return self

    def set_bulk_actions(self: T, actions: Iterable[BulkAction]) -> T:
        self.bulk_actions = list(actions)
        return self

    def set_header_actions(self: T, actions: Iterable[ExAction]) -> T:
        self.header_actions = list(actions)
        return self

    def set_data(self: T, data: Iterable[RecordType]) -> T:
        """Replace the records; `total_items` becomes their number."""
        self.data = list(data)
        self.total_items = len(self.data)
        return self

    def paginate(self: T, per_page: int = 25) -> T:
        self.paginated = True
        self.per_page = per_page
        return self

    def set_already_paginated(self: T, value: bool = True) -> T:
        self.already_paginated = value
        return self

    def set_per_page(self: T, per_page: int) -> T:
        self.per_page = per_page
        return self

    def set_current_page(self: T, page: int) -> T:
        self.current_page = page
        return self

    def set_total_items(self: T, total: int) -> T:
        self.total_items = total
        return self

    def set_searchable(self: T, searchable: bool = True) -> T:
        self.searchable = searchable
        return self

    def search(self: T, query: Optional[str]) -> T:
        self.search_query = query
        return self

    def sort(self: T, column: Optional[str], direction: str = SORT_ASC) -> T:
        self.sort_by = column
        self.sort_direction = (
            SORT_DESC if (direction or "").lower() == SORT_DESC else SORT_ASC
        )
        return self

    def set_striped(self: T, striped: bool = True) -> T:
        self.striped = striped
        return self

    def set_hoverable(self: T, hoverable: bool = True) -> T:
        self.hoverable = hoverable
        return self

    def set_bordered(self: T, bordered: bool = True) -> T:
        self.bordered = bordered
        return self

    def set_compact(self: T, compact: bool = True) -> T:
        self.compact = compact
        return self

    def set_selectable(self: T, selectable: bool = True) -> T:
        self.selectable = selectable
        return self

    def set_empty_state(self: T, message: str, icon: str = "inbox") -> T:
        self.empty_message = message
        self.empty_icon = icon
        return self

    def set_empty_state_action(self: T, url: str, label: str) -> T:
        self.empty_action_url = url
        self.empty_action_label = label
        return self

    def add_attrs(self: T, attrs: Mapping[str, Any]) -> T:
        self.html_attrs.update(attrs)
        return self

    def set_renderer(self: T, renderer: Optional["ExRenderer"]) -> T:
        self.renderer = renderer
        return self

    def filter_by(self: T, name: str, value: Any) -> T:
        """Set the value of one filter."""
        self.filter_values[name] = value
        return self

    def set_filter_values(self: T, values: Mapping[str, Any]) -> T:
        """Replace the values of all filters."""
        self.filter_values = dict(values)
        return self

    # State used by the renderer.

    @property
    def visible_columns(self) -> List[ExColumn]:
        return [c for c in self.columns if c.visible]

    @property
    def total_pages(self) -> int:
        if not self.paginated or self.per_page <= 0:
            return 1
        return ceil(self.total_items / self.per_page)

    @property
    def page_range(self) -> Tuple[int, int]:
        """The 1-based positions of the first and last item of the page."""
        if not self.paginated or self.per_page <= 0:
            return (1 if self.total_items else 0), self.total_items
        first = (self.current_page - 1) * self.per_page + 1
        if first > self.total_items:
            return 0, 0
        last = min(self.current_page * self.per_page, self.total_items)
        return first, last

    def get_renderer(self) -> "ExRenderer":
        if self.renderer is None:
            from extable.renderer import HtmlRenderer

            return HtmlRenderer()
        return self.renderer

    def get_indicators(self) -> List[str]:
        """The texts describing the active filters, in filter order."""
        result = []
        for flt in self.filters:
            if flt.name not in self.filter_values:
                continue
            indicator = flt.get_indicator(self.filter_values[flt.name])
            if indicator:
                result.append(indicator)
        return result

    # The pipeline.

    def apply_filters(
        self, records: Sequence[RecordType]
    ) -> Sequence[RecordType]:
        known = {flt.name: flt for flt in self.filters}
        for name, value in self.filter_values.items():
            flt = known.get(name)
            if flt is None:
                logger.warning("Table has no filter named %s", name)
                continue
            records = flt.apply(records, value)
        return records

    def apply_search(
        self, records: Sequence[RecordType]
    ) -> Sequence[RecordType]:
        if not self.searchable or not self.search_query:
            return records

        names = [c.name for c in self.columns if c.searchable]
        query = self.search_query.lower()
        result = [
            record
            for record in records
            if any(query in to_text(record.get(n)).lower() for n in names)
        ]
        logger.debug(
            "Search for %r kept %d of %d records",
            self.search_query,
            len(result),
            len(records),
        )
        return result

    def apply_sort(self, records: Sequence[RecordType]) -> Sequence[RecordType]:
        if not self.sort_by:
            return records

        key = self.sort_by
        if not any(c.name == key for c in self.columns):
            logger.warning("Sorting by %s which is not a column", key)

        sign = -1 if self.sort_direction == SORT_DESC else 1

        def compare(a: RecordType, b: RecordType) -> int:
            return sign * compare_values(a.get(key), b.get(key))

        return sorted(records, key=cmp_to_key(compare))

    def apply_pagination(
        self, records: Sequence[RecordType]
    ) -> Sequence[RecordType]:
        if not self.paginated or self.already_paginated:
            return records
        per_page = max(0, self.per_page)
        offset = (self.current_page - 1) * per_page
        return records[offset : offset + per_page]

    def get_data(self) -> List[RecordType]:
        """Compute the rows to display.

        The result is recomputed from the stored records and the view state
        on every call.
        """
        records: Sequence[RecordType] = self.data
        records = self.apply_filters(records)
        records = self.apply_search(records)
        records = self.apply_sort(records)
        records = self.apply_pagination(records)
        return list(records)

    # Output.

    def render(self) -> str:
        return self.get_renderer().render_table(self)

    def to_dict(self) -> Dict[str, Any]:
        """Structural snapshot of the table, including the rows to display."""
        return {
            "columns": [c.to_dict() for c in self.columns],
            "filters": [f.to_dict() for f in self.filters],
            "actions": [a.to_dict() for a in self.actions],
            "bulkActions": [a.to_dict() for a in self.bulk_actions],
            "headerActions": [a.to_dict() for a in self.header_actions],
            "data": [dict(record) for record in self.get_data()],
            "pagination": {
                "enabled": self.paginated,
                "perPage": self.per_page,
                "currentPage": self.current_page,
                "totalItems": self.total_items,
                "totalPages": self.total_pages,
            },
            "searchable": self.searchable,
            "searchQuery": self.search_query,
            "sortBy": self.sort_by,
            "sortDirection": self.sort_direction,
            "filterValues": dict(self.filter_values),
        }

    def to_json(self, **kwargs: Any) -> str:
        return json.dumps(self.to_dict(), default=str, **kwargs)
