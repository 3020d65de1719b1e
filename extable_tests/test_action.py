import json
from unittest.mock import Mock

import pytest

from extable.action import ActionInfo, ActionState, BulkAction, ExAction

RECORD = {"id": 7, "status": "active", "locked": False}


def test_label_defaults_to_humanized_name():
    assert ExAction.make("archive_now").label == "Archive now"


def test_empty_name_is_rejected():
    with pytest.raises(ValueError):
        ExAction.make("")


class TestPresets:
    def test_view(self):
        action = ExAction.view("/items/{id}")
        assert action.name == "view"
        assert action.icon == "fas fa-eye"
        assert action.color == "primary"
        assert action.get_url(RECORD) == "/items/7"
        assert action.requires_confirmation is False

    def test_edit(self):
        action = ExAction.edit()
        assert action.label == "Edit"
        assert action.get_url(RECORD) is None

    def test_delete(self):
        action = ExAction.delete("/items/{id}/delete")
        assert action.color == "danger"
        assert action.requires_confirmation is True
        confirmation = action.get_confirmation()
        assert confirmation["heading"] == "Delete Record"
        assert confirmation["buttonLabel"] == "Confirm"
        assert "cannot be undone" in confirmation["description"]


class TestUrl:
    def test_template_without_id(self):
        action = ExAction.make("open").url("/items/{id}")
        assert action.get_url({}) == "/items/"

    def test_callback(self):
        callback = Mock(return_value="/x")
        action = ExAction.make("open").url(callback)
        assert action.get_url(RECORD) == "/x"
        callback.assert_called_once_with(RECORD)

    def test_no_url(self):
        assert ExAction.make("open").get_url(RECORD) is None


class TestVisibilityAndState:
    def test_defaults(self):
        action = ExAction.make("open")
        assert action.is_visible(RECORD) is True
        assert action.is_disabled(RECORD) is False

    def test_callbacks(self):
        action = (
            ExAction.make("open")
            .visible_when(lambda r: r["status"] == "active")
            .disabled_when(lambda r: r["locked"])
        )
        assert action.is_visible(RECORD) is True
        assert action.is_visible({"status": "x", "locked": False}) is False
        assert action.is_disabled({"status": "x", "locked": True}) is True

    def test_resolve_invisible(self):
        action = ExAction.make("open").visible_when(lambda r: False)
        assert action.resolve(RECORD) is None

    def test_resolve(self):
        action = ExAction.view("/items/{id}").set_open_in_new_tab()
        state = action.resolve(RECORD)
        assert state == ActionState(
            name="view",
            label="View",
            icon="fas fa-eye",
            color="primary",
            url="/items/7",
            disabled=False,
            open_in_new_tab=True,
            requires_confirmation=False,
        )

    def test_disabled_action_has_no_url(self):
        url = Mock(return_value="/items/7")
        action = ExAction.make("open").url(url).disabled_when(lambda r: True)
        state = action.resolve(RECORD)
        assert state.disabled is True
        assert state.url is None

    def test_resolve_confirmation_defaults(self):
        action = ExAction.make("archive").set_requires_confirmation()
        state = action.resolve(RECORD)
        assert state.confirmation_heading == "Archive"
        assert state.confirmation_description == "Are you sure?"
        assert state.confirmation_button_label == "Confirm"

    def test_callback_errors_propagate(self):
        action = ExAction.make("x").visible_when(Mock(side_effect=KeyError))
        with pytest.raises(KeyError):
            action.resolve(RECORD)


class TestRun:
    def test_calls_the_callback(self):
        callback = Mock(return_value="done")
        assert ExAction.make("x").action(callback).run(RECORD) == "done"
        callback.assert_called_once_with(RECORD)

    def test_without_callback(self):
        assert ExAction.make("x").run(RECORD) is None

    def test_disabled(self):
        callback = Mock()
        action = ExAction.make("x").action(callback).disabled_when(bool)
        with pytest.raises(ValueError):
            action.run(RECORD)
        callback.assert_not_called()


def test_action_to_dict():
    data = ExAction.delete().to_dict()
    assert data["name"] == "delete"
    assert data["color"] == "danger"
    assert data["requiresConfirmation"] is True
    assert data["confirmation"]["heading"] == "Delete Record"
    assert data["openInNewTab"] is False
    assert json.loads(ExAction.view().to_json())["confirmation"] is None


class TestBulkAction:
    def test_presets(self):
        delete = BulkAction.delete_selected()
        assert isinstance(delete, BulkAction)
        assert delete.color == "danger"
        assert delete.requires_confirmation is True
        export = BulkAction.export_selected()
        assert export.icon == "fas fa-download"
        assert export.requires_confirmation is False

    def test_static_url(self):
        action = BulkAction.make("archive").set_action_url("/bulk/archive")
        assert action.get_url() == "/bulk/archive"
        assert action.get_url(RECORD) == "/bulk/archive"

    def test_method_is_upper_cased(self):
        assert BulkAction.make("x").method == "POST"
        assert BulkAction.make("x").set_method("delete").method == "DELETE"
        assert BulkAction(name="y", method="put").method == "PUT"

    def test_to_dict(self):
        data = BulkAction.export_selected().set_action_url("/e").to_dict()
        assert data["actionUrl"] == "/e"
        assert data["method"] == "POST"
        assert data["name"] == "export_selected"


def test_action_info():
    parsed = ActionInfo.model_validate({"preset": "view", "url": "/a/{id}"})
    assert parsed.preset == "view"
    with pytest.raises(ValueError):
        ActionInfo.model_validate({"method": "POST"})
