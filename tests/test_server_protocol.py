"""Tests for the JSON-lines protocol message types."""

from __future__ import annotations

import json

import pytest

from speedrun.server.protocol import Notification, Request, Response


class TestRequest:
    def test_from_dict_full(self):
        data = {"id": 1, "method": "buildQueue", "params": {"kind": "cognates", "day": 1}}
        req = Request.from_dict(data)
        assert req.id == 1
        assert req.method == "buildQueue"
        assert req.params == {"kind": "cognates", "day": 1}

    def test_from_dict_no_params(self):
        req = Request.from_dict({"id": 2, "method": "listDays"})
        assert req.params == {}

    def test_from_dict_missing_method(self):
        with pytest.raises(ValueError, match="method"):
            Request.from_dict({"id": 3})

    def test_from_dict_bad_params(self):
        with pytest.raises(ValueError, match="params"):
            Request.from_dict({"id": 3, "method": "getDay", "params": [1]})

    def test_from_json_line(self):
        req = Request.from_json_line('{"id": 4, "method": "getStats"}')
        assert (req.id, req.method) == (4, "getStats")

    def test_from_json_line_invalid(self):
        with pytest.raises(ValueError, match="Invalid JSON"):
            Request.from_json_line("{not json")

    def test_from_json_line_not_object(self):
        with pytest.raises(ValueError):
            Request.from_json_line("[1, 2]")


class TestResponse:
    def test_success_json_line(self):
        line = Response(id=1, result={"reset": True}).to_json_line()
        assert line.endswith("\n")
        assert json.loads(line) == {"id": 1, "result": {"reset": True}}

    def test_error_json_line(self):
        parsed = json.loads(Response(id=2, error="Unknown method: foo").to_json_line())
        assert parsed == {"id": 2, "error": "Unknown method: foo"}
        assert "result" not in parsed

    def test_keeps_accents_readable(self):
        line = Response(id=3, result={"spanish": "nación"}).to_json_line()
        assert "nación" in line


class TestNotification:
    def test_json_line(self):
        parsed = json.loads(Notification("sessionComplete", {"day": 1, "score": 80}).to_json_line())
        assert parsed == {"method": "sessionComplete", "params": {"day": 1, "score": 80}}

    def test_empty_params(self):
        assert json.loads(Notification("ping").to_json_line()) == {"method": "ping", "params": {}}
