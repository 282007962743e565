"""Authentication-related Marshmallow schemas."""

from __future__ import annotations

from marshmallow import Schema, fields, validate


class RegisterSchema(Schema):
    """Input payload for account registration."""

    email = fields.Email(required=True, validate=validate.Length(max=254))
    password = fields.String(required=True, validate=validate.Length(min=1, max=128))


class LoginSchema(Schema):
    """Input payload for authenticating a user.

    ``email`` is a plain string here: a malformed address must fail with the
    same ``invalid_credentials`` answer as an unknown one.
    """

    email = fields.String(required=True, validate=validate.Length(max=254))
    password = fields.String(required=True, validate=validate.Length(max=128))


class RefreshSchema(Schema):
    """Input payload for exchanging a refresh token."""

    refresh_token = fields.String(required=True, validate=validate.Length(min=1))


class TokenPairSchema(Schema):
    """Response payload containing an access/refresh token pair."""

    access_token = fields.String(required=True)
    refresh_token = fields.String(required=True)
    expires_in = fields.Integer(required=True)
    token_type = fields.String(dump_default="Bearer")
