import pytest

from extable.action import BulkAction, ExAction
from extable.column import ExColumn
from extable.filter import ExFilter
from extable.renderer import HtmlRenderer, create_jinja_env, iso_date
from extable.table import ExTable


@pytest.fixture
def renderer():
    return HtmlRenderer()


@pytest.fixture
def table():
    return (
        ExTable.make()
        .set_columns(
            [
                ExColumn.text("name").set_sortable().set_copyable(),
                ExColumn.boolean("active"),
                ExColumn.text("secret").hide(),
            ]
        )
        .set_data(
            [
                {"id": 1, "name": "<b>Ann</b>", "active": True, "secret": "s1"},
                {"id": 2, "name": "Bob", "active": False, "secret": "s2"},
            ]
        )
    )


def test_escapes_plain_cells(renderer, table):
    html = renderer.render_table(table)
    assert "&lt;b&gt;Ann&lt;/b&gt;" in html
    assert "<b>Ann</b>" not in html


def test_markup_cells_are_not_escaped(renderer, table):
    html = renderer.render_table(table)
    assert '<i class="fas fa-check text-green-500"></i>' in html


def test_hidden_columns_are_skipped(renderer, table):
    html = renderer.render_table(table)
    assert "s1" not in html
    assert "Secret" not in html


def test_html_flag_on_text_column(renderer, table):
    table.columns[0].set_html()
    assert "<b>Ann</b>" in renderer.render_table(table)


def test_sort_links(renderer, table):
    html = renderer.render_table(table)
    assert 'href="?sort=name&amp;dir=asc"' in html
    table.sort("name", "asc")
    html = renderer.render_table(table)
    assert 'href="?sort=name&amp;dir=desc"' in html
    assert "fa-sort-up" in html


def test_copy_button(renderer, table):
    html = renderer.render_table(table)
    assert "navigator.clipboard.writeText" in html


def test_empty_state(renderer, table):
    table.set_data([]).set_empty_state("Nothing yet", "box")
    table.set_empty_state_action("/new", "Create one")
    html = renderer.render_table(table)
    assert "Nothing yet" in html
    assert "fa-box" in html
    assert 'href="/new"' in html


def test_actions(renderer, table):
    table.set_actions(
        [
            ExAction.edit("/people/{id}/edit"),
            ExAction.delete("/people/{id}/delete").disabled_when(
                lambda r: r["id"] == 1
            ),
            ExAction.make("hidden").visible_when(lambda r: False),
        ]
    )
    html = renderer.render_table(table)
    assert 'href="/people/1/edit"' in html
    assert 'href="/people/2/delete"' in html
    assert "/people/1/delete" not in html
    assert 'data-action="hidden"' not in html
    assert 'data-confirm-heading="Delete Record"' in html
    assert ">Actions</th>" in html


def test_header_and_bulk_actions(renderer, table):
    table.set_header_actions([ExAction.make("create").url("/people/new")])
    table.set_selectable().set_bulk_actions(
        [BulkAction.delete_selected().set_action_url("/bulk")]
    )
    html = renderer.render_table(table)
    assert 'href="/people/new"' in html
    assert 'formaction="/bulk"' in html
    assert 'name="selected[]" value="1"' in html


def test_filters_and_search(renderer, table):
    table.set_searchable().search('"quoted"')
    table.set_filters(
        [
            ExFilter.select("active").set_options({1: "Yes", 0: "No"}),
            ExFilter.date("created").set_range(),
            ExFilter.make("name"),
        ]
    )
    table.filter_by("active", 1)
    html = renderer.render_table(table)
    assert 'value="&#34;quoted&#34;"' in html
    assert '<option value="">-- All --</option>' in html
    assert '<option value="1" selected>Yes</option>' in html
    assert 'name="filter[created][from]"' in html
    assert 'name="filter[name]"' in html
    assert "Active: Yes" in html


def test_pagination(renderer):
    table = (
        ExTable.make()
        .set_columns([ExColumn.numeric("id")])
        .set_data([{"id": i} for i in range(1, 24)])
        .paginate(10)
        .set_current_page(2)
    )
    html = renderer.render_table(table)
    assert "Showing" in html
    assert '<span class="font-medium">11</span>' in html
    assert '<span class="font-medium">20</span>' in html
    assert "results" in html
    assert 'href="?page=1"' in html
    assert 'href="?page=3"' in html
    assert 'rel="prev"' in html and 'rel="next"' in html


def test_single_page_has_no_pagination(renderer, table):
    table.paginate(10)
    assert "Showing" not in renderer.render_table(table)


def test_page_links_keep_view_state(renderer):
    table = (
        ExTable.make()
        .set_data([{"id": i} for i in range(30)])
        .paginate(10)
        .search("x")
        .sort("id", "desc")
    )
    links = renderer.page_links(table)
    assert [link["kind"] for link in links] == [
        "current",
        "page",
        "page",
        "next",
    ]
    assert links[0]["url"] == "?search=x&sort=id&dir=desc&page=1"


def test_custom_config_and_base_url(table):
    renderer = HtmlRenderer(
        config={"table_class": "my-table"}, base_url="/people"
    )
    html = renderer.render_table(table)
    assert 'class="my-table"' in html
    assert 'href="/people?sort=name&amp;dir=asc"' in html


def test_html_attrs(renderer, table):
    table.add_attrs({"id": "people", "data-x": "<1>"})
    html = renderer.render_table(table)
    assert 'id="people"' in html
    assert 'data-x="&lt;1&gt;"' in html


def test_plural_filter():
    env = create_jinja_env()
    assert env.from_string("{{ 'result'|plural(1) }}").render() == "result"
    assert env.from_string("{{ 'result'|plural(3) }}").render() == "results"


def test_iso_date():
    assert iso_date("Jan 15, 2024") == "2024-01-15"
    assert iso_date(None) == ""
    assert iso_date("bad") == ""
