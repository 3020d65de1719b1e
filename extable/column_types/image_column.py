from typing import Any, Dict, Optional, TypeVar, Union

from attrs import define, field
from markupsafe import Markup

from extable.column import ColumnInfo, ExColumn
from extable.constants import (
    COLUMN_TYPE_IMAGE,
    EMPTY_PLACEHOLDER,
    AlignType,
    RecordType,
)

I = TypeVar("I", bound="ImageColumn")  # noqa: E741


@define
class ImageColumn(ExColumn):
    """A column that shows an image (avatars, thumbnails).

    The value is the URL of the image. When the record has no value the
    `default` and then the `default_image` are used.

    Attributes:
        size: The width and height of the image in pixels.
        circular: Whether the image is clipped to a circle.
        default_image: URL used for records without an image.
    """

    type_name: str = field(default=COLUMN_TYPE_IMAGE, init=False)
    align: AlignType = field(default="center")
    html: bool = field(default=True)

    size: str = field(default="40", converter=str)
    circular: bool = field(default=False)
    default_image: Optional[str] = field(default=None)

    def set_size(self: I, size: Any) -> I:
        self.size = str(size)
        return self

    def set_circular(self: I, circular: bool = True) -> I:
        self.circular = circular
        return self

    def set_default_image(self: I, url: Optional[str]) -> I:
        self.default_image = url
        return self

    def get_state(self, record: RecordType) -> Any:
        value = super().get_state(record)
        return self.default_image if value is None else value

    def transform(self, value: Any, record: RecordType) -> Any:
        if not value:
            return EMPTY_PLACEHOLDER
        return Markup(
            '<img src="{}" alt="" class="object-cover {}" '
            'style="width: {}px; height: {}px;">'
        ).format(
            value,
            "rounded-full" if self.circular else "rounded",
            self.size,
            self.size,
        )

    def to_dict(self) -> Dict[str, Any]:
        result = super().to_dict()
        result["size"] = self.size
        result["circular"] = self.circular
        result["defaultImage"] = self.default_image
        return result


class ImageInfo(ColumnInfo):
    """Parser for information about an image column.

    Attributes:
        size: The width and height of the image in pixels.
        circular: Whether the image is clipped to a circle.
        default_image: URL used for records without an image.
    """

    size: Optional[Union[int, str]] = None
    circular: Optional[bool] = None
    default_image: Optional[str] = None
