"""Tests for the Typer CLI with a fake transport behind ContentApi."""

import json

import pytest
import typer
from typer.testing import CliRunner

import cli.main as cli_main
from adapters import json_exporter
from core.services.content_api import ContentApi

from conftest import FakeTransport

runner = CliRunner()


@pytest.fixture
def transport(monkeypatch, settings):
    fake = FakeTransport()
    monkeypatch.setattr(cli_main, "_settings", lambda: settings)
    monkeypatch.setattr(cli_main, "_build_api", lambda _settings: ContentApi(fake))
    return fake


def test_parse_filters():
    assert cli_main.parse_filters(["tags=1,2", "free=true", "query=fika", "distance=2.5", "coords=57.7,11.97"]) == {
        "tags": [1, 2],
        "free": True,
        "query": "fika",
        "distance": 2.5,
        "coords": [57.7, 11.97],
    }
    assert cli_main.parse_filters(None) == {}


@pytest.mark.parametrize("pair", ["tags", "=1"])
def test_parse_filters_rejects_malformed_pairs(pair):
    with pytest.raises(typer.BadParameter):
        cli_main.parse_filters([pair])


def test_selection_from_dotted_fields():
    selection = cli_main._selection("places", ["title", "location.lat"], None, markers=True)
    assert selection["places"] == {"title": "title", "location": {"lat": "lat"}}
    assert selection["markers"] == cli_main.MARKERS_FIELDS


def test_places_list_json(transport):
    transport.data = {"places": {"places": [{"id": 1, "title": "Liseberg"}]}}

    result = runner.invoke(cli_main.app, ["places", "list", "-f", "categories=3,4", "--json"])

    assert result.exit_code == 0, result.output
    payload = json.loads(result.stdout)
    assert payload["items"][0]["title"] == "Liseberg"
    assert "places(filter: { categories: [3, 4] }) {" in transport.queries[0]


def test_places_list_table(transport):
    transport.data = {"places": {"places": [{"id": 1, "title": "Liseberg"}]}}

    result = runner.invoke(cli_main.app, ["places", "list"])

    assert result.exit_code == 0, result.output
    assert "Liseberg" in result.stdout


def test_places_get_uses_default_language(transport):
    transport.data = {"placeById": {"place": {"id": 1234, "title": "Liseberg"}}}

    result = runner.invoke(cli_main.app, ["places", "get", "1234", "--json"])

    assert result.exit_code == 0, result.output
    assert "placeById(filter: { id: 1234, lang: sv }) {" in transport.queries[0]


def test_places_get_rejects_unknown_language(transport):
    result = runner.invoke(cli_main.app, ["places", "get", "1234", "--lang", "fr"])

    assert result.exit_code != 0
    assert transport.queries == []


def test_search_with_bad_language_exits_without_request(transport):
    result = runner.invoke(cli_main.app, ["search", "fika", "--lang", "fr"])

    assert result.exit_code == 1
    assert transport.queries == []


def test_search_with_sort(transport):
    transport.data = {"search": {"results": [{"id": 7, "title": "Fika"}]}}

    result = runner.invoke(
        cli_main.app,
        ["search", "fika", "-l", "en", "--sort-field", "title", "--sort-order", "asc", "--json"],
    )

    assert result.exit_code == 0, result.output
    assert (
        'search(filter: { query: "fika", lang: en }, sortBy: { fields: ["title"], orders: [asc] }) {'
        in transport.queries[0]
    )


def test_taxonomy_tree_json(transport):
    transport.data = {"taxonomy": [{"id": 1, "name": "Mat"}, {"id": 2, "name": "Fika", "parent": 1}]}

    result = runner.invoke(cli_main.app, ["taxonomy", "categories", "--tree", "--json"])

    assert result.exit_code == 0, result.output
    payload = json.loads(result.stdout)
    assert payload[0]["term"]["name"] == "Mat"
    assert payload[0]["children"][0]["term"]["id"] == 2


def test_taxonomy_tree_render(transport):
    transport.data = {"taxonomy": [{"id": 1, "name": "Mat"}, {"id": 2, "name": "Fika", "parent": 1}]}

    result = runner.invoke(cli_main.app, ["taxonomy", "categories", "--tree"])

    assert result.exit_code == 0, result.output
    assert "Mat" in result.stdout
    assert "Fika" in result.stdout


def test_taxonomy_cycle_exits_with_error(transport):
    transport.data = {"taxonomy": [{"id": 1, "parent": 2}, {"id": 2, "parent": 1}]}

    result = runner.invoke(cli_main.app, ["taxonomy", "categories", "--tree"])

    assert result.exit_code == 1


def test_output_file(transport, tmp_path):
    transport.data = {"taxonomies": [{"name": "areas"}]}
    target = tmp_path / "out" / "taxonomies.json"

    result = runner.invoke(cli_main.app, ["taxonomies", "-o", str(target)])

    assert result.exit_code == 0, result.output
    assert json.loads(target.read_text(encoding="utf-8"))[0]["name"] == "areas"


def test_raw_query_prints_data(transport):
    transport.data = {"guides": {"guides": []}}

    result = runner.invoke(cli_main.app, ["query", "query { guides { guides { id } } }"])

    assert result.exit_code == 0, result.output
    assert json.loads(result.stdout) == {"guides": {"guides": []}}


def test_json_export_failure_exits_with_error(transport, monkeypatch):
    transport.data = {"taxonomy": [{"id": 1, "name": "Mat"}]}

    def too_deep(*args, **kwargs):
        raise RecursionError("maximum recursion depth exceeded")

    monkeypatch.setattr(json_exporter.json, "dumps", too_deep)

    result = runner.invoke(cli_main.app, ["taxonomy", "categories", "--tree", "--json"])

    assert result.exit_code == 1
    assert not isinstance(result.exception, RecursionError)
