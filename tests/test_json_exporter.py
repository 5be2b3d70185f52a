"""Tests for adapters.json_exporter."""

import json

import pytest

from adapters import json_exporter
from adapters.json_exporter import dumps, export_json, to_jsonable
from core.domain.models import Taxonomy, TaxonomyTerm
from core.errors import ContentApiError, ExportError
from core.services.taxonomy_tree import build_hierarchy


def _chain(depth):
    return [TaxonomyTerm(id=1, name="root")] + [
        TaxonomyTerm(id=i, name=f"t{i}", parent=i - 1) for i in range(2, depth + 1)
    ]


def test_tree_nodes_keep_child_order():
    forest = build_hierarchy(
        [TaxonomyTerm(id=1, name="Mat"), TaxonomyTerm(id=3, name="Fika", parent=1), TaxonomyTerm(id=2, name="Bar", parent=1)]
    )
    data = to_jsonable(forest)
    assert data[0]["term"]["name"] == "Mat"
    assert [child["term"]["id"] for child in data[0]["children"]] == [3, 2]
    assert data[0]["children"][0]["children"] == []


def test_deep_tree_converts_without_recursion():
    depth = 5000
    data = to_jsonable(build_hierarchy(_chain(depth)))

    node = data[0]
    seen = 1
    while node["children"]:
        node = node["children"][0]
        seen += 1
    assert seen == depth
    assert node["term"]["id"] == depth


def test_models_and_mappings():
    assert to_jsonable({"items": [Taxonomy(name="areas")]}) == {
        "items": [{"name": "areas", "description": None, "value": None, "types": []}]
    }


def test_dumps_is_stable():
    assert dumps({"b": 1, "a": "Göteborg"}) == '{\n  "a": "Göteborg",\n  "b": 1\n}'


def test_too_deep_result_raises_export_error(monkeypatch):
    def too_deep(*args, **kwargs):
        raise RecursionError("maximum recursion depth exceeded")

    monkeypatch.setattr(json_exporter.json, "dumps", too_deep)

    with pytest.raises(ExportError, match="too deeply nested"):
        dumps([Taxonomy(name="areas")])
    assert issubclass(ExportError, ContentApiError)


def test_export_json_writes_file(tmp_path):
    target = tmp_path / "nested" / "terms.json"
    export_json(value=[TaxonomyTerm(id=1, name="Mat")], output_path=target)
    assert json.loads(target.read_text(encoding="utf-8"))[0]["name"] == "Mat"
