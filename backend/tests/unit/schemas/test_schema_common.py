import pytest
from marshmallow import ValidationError

from homecooking.schemas import CodeSchema


def test_code_is_stripped():
    assert CodeSchema().load({"code": "  abc123 "}) == {"code": "abc123"}


@pytest.mark.parametrize("raw", ["", "   ", "\t\n"])
def test_blank_code_rejected(raw):
    with pytest.raises(ValidationError) as exc:
        CodeSchema().load({"code": raw})
    assert "code" in exc.value.messages


def test_missing_code_rejected():
    with pytest.raises(ValidationError):
        CodeSchema().load({})
