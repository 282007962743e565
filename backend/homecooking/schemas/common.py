"""Common Marshmallow schemas shared across resources."""

from __future__ import annotations

from typing import Any

from marshmallow import Schema, fields, pre_load, validate


class CodeSchema(Schema):
    """Body carrying a share or invite code."""

    code = fields.String(required=True, validate=validate.Length(min=1))

    @pre_load
    def strip_code(self, data: Any, **_: Any) -> Any:
        if isinstance(data, dict) and isinstance(data.get("code"), str):
            data = {**data, "code": data["code"].strip()}
        return data
