import json

import pytest
import yaml
from click.testing import CliRunner

from extable.__version__ import __version__
from extable.cli import cli, parse_filters

DEFINITION = {
    "columns": [
        {"name": "id", "type": "numeric", "sortable": True},
        {"name": "name", "sortable": True, "searchable": True},
        {"name": "category"},
    ],
    "filters": [{"name": "category", "type": "select"}],
    "actions": [{"preset": "view", "url": "/items/{id}"}],
}

RECORDS = [
    {"id": 1, "name": "Laptop", "category": "electronics"},
    {"id": 2, "name": "Desk", "category": "furniture"},
    {"id": 3, "name": "Lamp", "category": "furniture"},
]


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def files(tmp_path):
    definition = tmp_path / "table.yaml"
    definition.write_text(yaml.dump(DEFINITION), encoding="utf-8")
    data = tmp_path / "data.json"
    data.write_text(json.dumps(RECORDS), encoding="utf-8")
    return str(definition), str(data)


def test_version(runner):
    result = runner.invoke(cli, ["--version"])
    assert result.exit_code == 0
    assert __version__ in result.output


def test_render_html(runner, files):
    result = runner.invoke(cli, ["render", *files])
    assert result.exit_code == 0, result.output
    assert "<table" in result.output
    assert 'href="/items/2"' in result.output


def test_render_json(runner, files):
    result = runner.invoke(
        cli,
        [
            "render",
            *files,
            "--format",
            "json",
            "--search",
            "la",
            "--sort",
            "name",
            "--direction",
            "desc",
        ],
    )
    assert result.exit_code == 0, result.output
    data = json.loads(result.output)
    assert [r["id"] for r in data["data"]] == [1, 3]
    assert data["sortDirection"] == "desc"


def test_render_pagination(runner, files):
    result = runner.invoke(
        cli,
        ["render", *files, "--format", "json", "--per-page", "2"]
        + ["--page", "2"],
    )
    assert result.exit_code == 0, result.output
    data = json.loads(result.output)
    assert [r["id"] for r in data["data"]] == [3]
    assert data["pagination"]["totalPages"] == 2


def test_render_filters(runner, files):
    result = runner.invoke(
        cli,
        ["render", *files, "--format", "json", "--filter", "category=furniture"],
    )
    assert result.exit_code == 0, result.output
    data = json.loads(result.output)
    assert [r["id"] for r in data["data"]] == [2, 3]


def test_environment_defaults(runner, files):
    result = runner.invoke(
        cli,
        ["render", *files],
        env={"EXTABLE_FORMAT": "json", "EXTABLE_PER_PAGE": "1"},
    )
    assert result.exit_code == 0, result.output
    data = json.loads(result.output)
    assert data["pagination"]["perPage"] == 1
    assert len(data["data"]) == 1


def test_render_to_file(runner, files, tmp_path):
    output = tmp_path / "out.html"
    result = runner.invoke(cli, ["render", *files, "--output", str(output)])
    assert result.exit_code == 0, result.output
    assert "<table" in output.read_text(encoding="utf-8")


def test_invalid_definition(runner, files, tmp_path):
    bad = tmp_path / "bad.yaml"
    bad.write_text("columns:\n  - name: x\n    type: chart\n", encoding="utf-8")
    result = runner.invoke(cli, ["render", str(bad), files[1]])
    assert result.exit_code == 1
    assert "Unknown column type" in result.output


def test_invalid_records(runner, files, tmp_path):
    bad = tmp_path / "bad.json"
    bad.write_text('{"rows": []}', encoding="utf-8")
    result = runner.invoke(cli, ["render", files[0], str(bad)])
    assert result.exit_code == 1
    assert "does not contain a list of records" in result.output


def test_describe(runner, files):
    result = runner.invoke(cli, ["describe", files[0]])
    assert result.exit_code == 0, result.output
    data = json.loads(result.output)
    assert "data" not in data
    assert [c["name"] for c in data["columns"]] == ["id", "name", "category"]


def test_describe_yaml(runner, files):
    result = runner.invoke(cli, ["describe", files[0], "--format", "yaml"])
    assert result.exit_code == 0, result.output
    assert yaml.safe_load(result.output)["actions"][0]["name"] == "view"


def test_parse_filters():
    assert parse_filters(["a=1", "b=x=y"]) == {"a": "1", "b": "x=y"}
    assert parse_filters(["a=1", "a=2", "a=3"]) == {"a": ["1", "2", "3"]}
    assert parse_filters(["d.from=2024-01-01", "d.to=2024-01-31"]) == {
        "d": {"from": "2024-01-01", "to": "2024-01-31"}
    }


def test_malformed_yaml(runner, files, tmp_path):
    bad = tmp_path / "bad.yaml"
    bad.write_text("columns: [\n", encoding="utf-8")
    result = runner.invoke(cli, ["describe", str(bad)])
    assert result.exit_code == 1
    assert "Invalid definition" in result.output
