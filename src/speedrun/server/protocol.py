"""JSON-lines protocol messages exchanged with the UI process."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Optional


@dataclass
class Request:
    """Incoming request from the UI."""
    id: int
    method: str
    params: dict = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: dict) -> Request:
        if "method" not in data:
            raise ValueError("Request is missing 'method'")
        params = data.get("params") or {}
        if not isinstance(params, dict):
            raise ValueError("Request 'params' must be an object")
        return cls(
            id=data.get("id", 0),
            method=data["method"],
            params=params,
        )

    @classmethod
    def from_json_line(cls, line: str) -> Request:
        try:
            data = json.loads(line)
        except json.JSONDecodeError as e:
            raise ValueError(f"Invalid JSON: {e}") from e
        if not isinstance(data, dict):
            raise ValueError("Request must be a JSON object")
        return cls.from_dict(data)

    def to_dict(self) -> dict:
        return {"id": self.id, "method": self.method, "params": self.params}


@dataclass
class Response:
    """Outgoing response to the UI."""
    id: int
    result: Optional[dict] = None
    error: Optional[str] = None

    def to_json_line(self) -> str:
        d = {"id": self.id}
        if self.error is not None:
            d["error"] = self.error
        else:
            d["result"] = self.result
        return json.dumps(d, ensure_ascii=False) + "\n"


@dataclass
class Notification:
    """Server-initiated message (no id, no response expected)."""
    method: str
    params: dict = field(default_factory=dict)

    def to_json_line(self) -> str:
        return json.dumps({"method": self.method, "params": self.params}, ensure_ascii=False) + "\n"
