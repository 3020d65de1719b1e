"""Bridge between an external field schema and table columns.

A field schema describes the fields of a resource independently of the
way they are displayed. Only the fields marked as visible in tables become
columns; the width, alignment and the sort and search flags are carried
over.

The schema can be given as:

- a sequence of `SchemaField` instances or of mappings with the same keys
  (camelCase keys, as produced by most serializers, are accepted);
- any object (or class) with a `fields()` method returning such a
  sequence.
"""

import logging
from typing import Any, Iterable, List, Mapping, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

from extable.column import ExColumn
from extable.constants import AlignType

logger = logging.getLogger(__name__)


class SchemaField(BaseModel):
    """A field descriptor as supplied by a field schema.

    Attributes:
        name: The key of the field in the records.
        label: The text shown to the user; the humanized name if missing.
        sortable: Whether the table can be sorted by this field.
        searchable: Whether the quick search looks at this field.
        table_width: The width of the column as a CSS length. Numbers are
            taken as pixels.
        table_align: Horizontal alignment of the cells.
        visible_in_table: Whether the field becomes a column.
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    name: str
    label: Optional[str] = None
    sortable: bool = False
    searchable: bool = False
    table_width: Optional[str] = Field(default=None, alias="tableWidth")
    table_align: Optional[AlignType] = Field(default=None, alias="tableAlign")
    visible_in_table: bool = Field(default=True, alias="visibleInTable")

    @field_validator("table_width", mode="before")
    @classmethod
    def validate_table_width(cls, v):
        """Accept numbers as widths in pixels."""
        if isinstance(v, (int, float)) and not isinstance(v, bool):
            return f"{v}px"
        return v

    def to_column(self) -> ExColumn:
        """Create the column that displays this field."""
        column = ExColumn.text(self.name)
        if self.label:
            column.set_label(self.label)
        column.set_sortable(self.sortable).set_searchable(self.searchable)
        if self.table_width:
            column.set_width(self.table_width)
        if self.table_align:
            column.align = self.table_align
        return column


def schema_fields(
    schema: Any,
) -> Iterable[Union[SchemaField, Mapping[str, Any], Any]]:
    """Get the sequence of field descriptors out of a schema source."""
    fields = getattr(schema, "fields", None)
    if callable(fields):
        return fields()
    return schema


def to_schema_field(item: Any) -> SchemaField:
    """Convert one field descriptor to a `SchemaField`."""
    if isinstance(item, SchemaField):
        return item
    if isinstance(item, Mapping):
        return SchemaField.model_validate(item)

    # Objects that serialize themselves.
    to_dict = getattr(item, "to_dict", None)
    if callable(to_dict):
        return SchemaField.model_validate(to_dict())
    return SchemaField.model_validate(item, from_attributes=True)


def columns_from_schema(schema: Any) -> List[ExColumn]:
    """Create the columns for the fields of a schema that are visible in
    tables, preserving the order of the fields.
    """
    result = []
    for item in schema_fields(schema):
        schema_field = to_schema_field(item)
        if not schema_field.visible_in_table:
            logger.debug("Field %s is not shown in tables", schema_field.name)
            continue
        result.append(schema_field.to_column())
    return result
