"""Tests for request body rendering."""

import json

from courier.tools.template import render_request_body, stringify_value


class TestStringifyValue:
    """Tests for stringify_value."""

    def test_none_is_empty(self) -> None:
        assert stringify_value(None) == ""

    def test_booleans_use_json_spelling(self) -> None:
        assert stringify_value(True) == "true"
        assert stringify_value(False) == "false"

    def test_numbers_and_strings(self) -> None:
        assert stringify_value(42) == "42"
        assert stringify_value(1.5) == "1.5"
        assert stringify_value("abc") == "abc"


class TestRenderRequestBody:
    """Tests for render_request_body."""

    def test_no_template_sends_params_as_json(self) -> None:
        body = render_request_body(None, {"city": "London", "days": 3})

        assert json.loads(body) == {"city": "London", "days": 3}

    def test_blank_template_sends_params_as_json(self) -> None:
        body = render_request_body("   ", {"a": 1})

        assert json.loads(body) == {"a": 1}

    def test_no_template_and_no_params(self) -> None:
        assert render_request_body(None, {}) == "{}"

    def test_unserializable_params_fall_back_to_empty_object(self) -> None:
        body = render_request_body(None, {"handle": object()})

        assert body == "{}"

    def test_placeholders_are_replaced(self) -> None:
        template = '{"query": "{{input}}", "limit": {{limit}}}'

        body = render_request_body(template, {"input": "cats", "limit": 5})

        assert body == '{"query": "cats", "limit": 5}'

    def test_every_occurrence_is_replaced(self) -> None:
        body = render_request_body("{{x}}-{{x}}-{{x}}", {"x": "a"})

        assert body == "a-a-a"

    def test_unmatched_placeholders_are_kept(self) -> None:
        body = render_request_body("{{known}} {{unknown}}", {"known": "yes"})

        assert body == "yes {{unknown}}"

    def test_values_are_not_escaped(self) -> None:
        """Substitution is textual; quoting is the template author's job."""
        body = render_request_body('{"q": "{{input}}"}', {"input": 'say "hi"'})

        assert body == '{"q": "say "hi""}'

    def test_none_and_bool_values(self) -> None:
        body = render_request_body("{{a}}|{{b}}", {"a": None, "b": True})

        assert body == "|true"

    def test_template_without_placeholders(self) -> None:
        assert render_request_body("static", {"a": 1}) == "static"
