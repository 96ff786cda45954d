"""Tests for response mapping."""

import pytest

from courier.tools.mapping import _MISSING, map_response, resolve_pointer


class TestResolvePointer:
    """Tests for resolve_pointer."""

    def test_empty_pointer_is_whole_document(self) -> None:
        doc = {"a": 1}
        assert resolve_pointer(doc, "") is doc

    def test_nested_keys_and_indices(self) -> None:
        doc = {"data": {"items": [{"name": "first"}, {"name": "second"}]}}

        assert resolve_pointer(doc, "/data/items/1/name") == "second"

    def test_escaped_tokens(self) -> None:
        doc = {"a/b": {"c~d": 7}}

        assert resolve_pointer(doc, "/a~1b/c~0d") == 7

    @pytest.mark.parametrize("pointer", ["/b", "/a/5", "/a/x", "/a/0/deeper", "a"])
    def test_missing_paths_are_not_resolved(self, pointer: str) -> None:
        assert resolve_pointer({"a": [1, 2]}, pointer) is _MISSING

    def test_null_value_resolves(self) -> None:
        assert resolve_pointer({"a": None}, "/a") is None


class TestMapResponse:
    """Tests for map_response."""

    @pytest.mark.parametrize("mapping", [None, "", "   "])
    def test_no_mapping_passes_through(self, mapping: str | None) -> None:
        assert map_response('{"a": 1}', mapping) == '{"a": 1}'

    def test_extracts_string_verbatim(self) -> None:
        raw = '{"result": "sunny", "other": 1}'

        assert map_response(raw, '{"extract": "/result"}') == "sunny"

    def test_extracts_object_as_compact_json(self) -> None:
        raw = '{"main": {"temp": 12.5, "humidity": 80}}'

        result = map_response(raw, '{"extract": "/main"}')

        assert result == '{"temp":12.5,"humidity":80}'

    def test_extracts_number_and_bool(self) -> None:
        raw = '{"count": 3, "ok": true}'

        assert map_response(raw, '{"extract": "/count"}') == "3"
        assert map_response(raw, '{"extract": "/ok"}') == "true"

    def test_extracts_null(self) -> None:
        assert map_response('{"a": null}', '{"extract": "/a"}') == "null"

    def test_non_ascii_is_kept(self) -> None:
        raw = '{"city": {"name": "Zürich"}}'

        assert map_response(raw, '{"extract": "/city"}') == '{"name":"Zürich"}'

    def test_unresolved_path_returns_raw(self) -> None:
        raw = '{"result": "x"}'

        assert map_response(raw, '{"extract": "/missing"}') == raw

    def test_non_json_response_returns_raw(self) -> None:
        assert map_response("plain text", '{"extract": "/result"}') == "plain text"

    def test_unparsable_mapping_returns_raw(self) -> None:
        assert map_response('{"a": 1}', "not json") == '{"a": 1}'

    def test_mapping_without_extract_returns_raw(self) -> None:
        raw = '{"message": "hi"}'

        assert map_response(raw, '{"content_path": ".", "error_path": "message"}') == raw

    def test_non_string_extract_returns_raw(self) -> None:
        assert map_response('{"a": 1}', '{"extract": 5}') == '{"a": 1}'
