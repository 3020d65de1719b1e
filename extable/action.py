import json
from typing import Any, Callable, Dict, Optional, Type, TypeVar, Union

from attrs import define, field, frozen
from pydantic import BaseModel, ConfigDict, field_validator

from extable.constants import RecordType
from extable.utils import humanize, to_text

A = TypeVar("A", bound="ExAction")
BA = TypeVar("BA", bound="BulkAction")

UrlCallback = Callable[[RecordType], Optional[str]]
RecordPredicate = Callable[[RecordType], Any]

DEFAULT_CONFIRMATION_DESCRIPTION = "Are you sure?"
DEFAULT_CONFIRMATION_BUTTON = "Confirm"


def url_from_template(template: str) -> UrlCallback:
    """Create a url callback that replaces `{id}` with the id of the record."""

    def compute(record: RecordType) -> str:
        return template.replace("{id}", to_text(record.get("id")))

    return compute


@frozen
class ActionState:
    """The evaluated state of an action for one record.

    This is what the rendering layer shows. A disabled action never has an
    url, whatever the url callback returns.

    Attributes:
        name: The name of the action.
        label: The text of the action.
        icon: The icon class of the action.
        color: The color tag of the action.
        url: The target of the action; None if the action has no target or
            if it is disabled.
        disabled: Whether the action cannot be used for this record.
        open_in_new_tab: Whether the target opens in a new tab.
        requires_confirmation: Whether the user must confirm before the
            action takes effect.
        confirmation_heading: The title of the confirmation.
        confirmation_description: The question asked in the confirmation.
        confirmation_button_label: The text of the button that confirms.
    """

    name: str
    label: str
    icon: Optional[str]
    color: str
    url: Optional[str]
    disabled: bool
    open_in_new_tab: bool
    requires_confirmation: bool
    confirmation_heading: Optional[str] = None
    confirmation_description: Optional[str] = None
    confirmation_button_label: Optional[str] = None


@define
class ExAction:
    """An operation that the user can perform on one record.

    Attributes:
        name: The identifier of the action.
        label: The text of the action. Defaults to the humanized name.
        icon: The icon class of the action.
        color: A color tag (`primary`, `danger`, `warning`, `success`,
            `secondary`).
        url_using: Computes the target of the action for a record.
        action_using: The callback executed by `run()`.
        visible_using: Decides if the action is shown for a record.
        disabled_using: Decides if the action is disabled for a record.
        requires_confirmation: Whether the user must confirm the action.
        confirmation_heading: The title of the confirmation.
        confirmation_description: The question asked in the confirmation.
        confirmation_button_label: The text of the button that confirms.
        open_in_new_tab: Whether the target opens in a new tab.
    """

    name: str
    label: str = field(default="")
    icon: Optional[str] = field(default=None)
    color: str = field(default="primary")
    url_using: Optional[UrlCallback] = field(default=None, repr=False)
    action_using: Optional[Callable[[RecordType], Any]] = field(
        default=None, repr=False
    )
    visible_using: Optional[RecordPredicate] = field(default=None, repr=False)
    disabled_using: Optional[RecordPredicate] = field(
        default=None, repr=False
    )
    requires_confirmation: bool = field(default=False)
    confirmation_heading: Optional[str] = field(default=None)
    confirmation_description: Optional[str] = field(default=None)
    confirmation_button_label: Optional[str] = field(default=None)
    open_in_new_tab: bool = field(default=False)

    def __attrs_post_init__(self):
        if not self.name:
            raise ValueError("Action name must not be empty")
        if not self.label:
            self.label = humanize(self.name)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.name})"

    @classmethod
    def make(cls: Type[A], name: str, **kwargs: Any) -> A:
        """Create an action of this class."""
        return cls(name=name, **kwargs)

    @classmethod
    def view(cls: Type[A], url: Optional[str] = None) -> A:
        result = (
            cls.make("view")
            .set_label("View")
            .set_icon("fas fa-eye")
            .set_color("primary")
        )
        if url:
            result.url(url)
        return result

    @classmethod
    def edit(cls: Type[A], url: Optional[str] = None) -> A:
        result = (
            cls.make("edit")
            .set_label("Edit")
            .set_icon("fas fa-edit")
            .set_color("primary")
        )
        if url:
            result.url(url)
        return result

    @classmethod
    def delete(cls: Type[A], url: Optional[str] = None) -> A:
        result = (
            cls.make("delete")
            .set_label("Delete")
            .set_icon("fas fa-trash")
            .set_color("danger")
            .set_requires_confirmation()
            .set_confirmation_heading("Delete Record")
            .set_confirmation_description(
                "Are you sure you want to delete this record? "
                "This action cannot be undone."
            )
        )
        if url:
            result.url(url)
        return result

    def set_label(self: A, label: str) -> A:
        self.label = label
        return self

    def set_icon(self: A, icon: Optional[str]) -> A:
        self.icon = icon
        return self

    def set_color(self: A, color: str) -> A:
        self.color = color
        return self

    def url(self: A, url: Union[str, UrlCallback, None]) -> A:
        """Set the target of the action.

        Args:
            url: Either a callback that receives the record or a template
                where `{id}` is replaced by the `id` of the record.
        """
        if isinstance(url, str):
            self.url_using = url_from_template(url)
        else:
            self.url_using = url
        return self

    def action(self: A, callback: Optional[Callable[[RecordType], Any]]) -> A:
        self.action_using = callback
        return self

    def visible_when(self: A, callback: Optional[RecordPredicate]) -> A:
        self.visible_using = callback
        return self

    def disabled_when(self: A, callback: Optional[RecordPredicate]) -> A:
        self.disabled_using = callback
        return self

    def set_requires_confirmation(self: A, requires: bool = True) -> A:
        self.requires_confirmation = requires
        return self

    def set_confirmation_heading(self: A, heading: Optional[str]) -> A:
        self.confirmation_heading = heading
        return self

    def set_confirmation_description(self: A, description: Optional[str]) -> A:
        self.confirmation_description = description
        return self

    def set_confirmation_button_label(self: A, label: Optional[str]) -> A:
        self.confirmation_button_label = label
        return self

    def set_open_in_new_tab(self: A, new_tab: bool = True) -> A:
        self.open_in_new_tab = new_tab
        return self

    def get_url(self, record: RecordType) -> Optional[str]:
        if self.url_using is not None:
            return self.url_using(record)
        return None

    def is_visible(self, record: RecordType) -> bool:
        if self.visible_using is not None:
            return bool(self.visible_using(record))
        return True

    def is_disabled(self, record: RecordType) -> bool:
        if self.disabled_using is not None:
            return bool(self.disabled_using(record))
        return False

    def get_confirmation(self) -> Optional[Dict[str, str]]:
        """The heading, description and button label of the confirmation.

        Returns:
            None if the action does not require confirmation.
        """
        if not self.requires_confirmation:
            return None
        return {
            "heading": self.confirmation_heading or self.label,
            "description": (
                self.confirmation_description
                or DEFAULT_CONFIRMATION_DESCRIPTION
            ),
            "buttonLabel": (
                self.confirmation_button_label or DEFAULT_CONFIRMATION_BUTTON
            ),
        }

    def resolve(self, record: RecordType) -> Optional[ActionState]:
        """Evaluate the action for a record.

        Returns:
            None if the action is not visible for the record, the state to
            render otherwise.
        """
        if not self.is_visible(record):
            return None

        disabled = self.is_disabled(record)
        confirmation = self.get_confirmation() or {}
        return ActionState(
            name=self.name,
            label=self.label,
            icon=self.icon,
            color=self.color,
            url=None if disabled else self.get_url(record),
            disabled=disabled,
            open_in_new_tab=self.open_in_new_tab,
            requires_confirmation=self.requires_confirmation,
            confirmation_heading=confirmation.get("heading"),
            confirmation_description=confirmation.get("description"),
            confirmation_button_label=confirmation.get("buttonLabel"),
        )

    def run(self, record: RecordType) -> Any:
        """Execute the action callback for a record.

        Raises:
            ValueError: The action is disabled for the record.
        """
        if self.is_disabled(record):
            raise ValueError(f"Action {self.name} is disabled for the record")
        if self.action_using is None:
            return None
        return self.action_using(record)

    def to_dict(self) -> Dict[str, Any]:
        """Structural snapshot of the action."""
        return {
            "name": self.name,
            "label": self.label,
            "icon": self.icon,
            "color": self.color,
            "requiresConfirmation": self.requires_confirmation,
            "confirmation": self.get_confirmation(),
            "openInNewTab": self.open_in_new_tab,
        }

    def to_json(self) -> str:
        return json.dumps(self.to_dict(), default=str)


@define
class BulkAction(ExAction):
    """An operation that the user performs on a selection of records.

    The selection is submitted to a fixed url, so the target does not
    depend on any particular record.

    Attributes:
        action_url: The url the selected identifiers are submitted to.
        method: The HTTP method of the submission (upper case).
    """

    action_url: Optional[str] = field(default=None)
    method: str = field(default="POST", converter=str.upper)

    @classmethod
    def delete_selected(cls: Type[BA]) -> BA:
        return (
            cls.make("delete_selected")
            .set_label("Delete Selected")
            .set_icon("fas fa-trash")
            .set_color("danger")
            .set_requires_confirmation()
            .set_confirmation_heading("Delete Selected Records")
            .set_confirmation_description(
                "Are you sure you want to delete the selected records? "
                "This action cannot be undone."
            )
        )

    @classmethod
    def export_selected(cls: Type[BA]) -> BA:
        return (
            cls.make("export_selected")
            .set_label("Export Selected")
            .set_icon("fas fa-download")
            .set_color("secondary")
        )

    def set_action_url(self: BA, url: Optional[str]) -> BA:
        self.action_url = url
        return self

    def set_method(self: BA, method: str) -> BA:
        self.method = method
        return self

    def get_url(self, record: Optional[RecordType] = None) -> Optional[str]:
        return self.action_url

    def to_dict(self) -> Dict[str, Any]:
        result = super().to_dict()
        result["actionUrl"] = self.action_url
        result["method"] = self.method
        return result


class ActionInfo(BaseModel):
    """Parser for information about an action.

    Attributes:
        preset: Start from one of the predefined actions (`view`, `edit`,
            `delete`) instead of a blank one.
        label: The text of the action.
        icon: The icon class of the action.
        color: The color tag of the action.
        url: Template of the target where `{id}` is replaced by the `id` of
            the record.
        requires_confirmation: Whether the user must confirm the action.
        confirmation_heading: The title of the confirmation.
        confirmation_description: The question asked in the confirmation.
        confirmation_button_label: The text of the button that confirms.
        open_in_new_tab: Whether the target opens in a new tab.
    """

    model_config = ConfigDict(extra="forbid")

    preset: Optional[str] = None
    label: Optional[str] = None
    icon: Optional[str] = None
    color: Optional[str] = None
    url: Optional[str] = None
    requires_confirmation: Optional[bool] = None
    confirmation_heading: Optional[str] = None
    confirmation_description: Optional[str] = None
    confirmation_button_label: Optional[str] = None
    open_in_new_tab: Optional[bool] = None


class BulkActionInfo(ActionInfo):
    """Parser for information about a bulk action.

    Attributes:
        action_url: The url the selected identifiers are submitted to.
        method: The HTTP method of the submission.
    """

    action_url: Optional[str] = None
    method: Optional[str] = None

    @field_validator("url")
    @classmethod
    def reject_url(cls, value: Optional[str]) -> Optional[str]:
        if value is not None:
            raise ValueError(
                "bulk actions submit to a fixed `action_url`, not to `url`"
            )
        return value
