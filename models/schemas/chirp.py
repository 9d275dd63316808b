from marshmallow import Schema, fields, post_load, validate, validates, ValidationError

from models.chirp import MAX_CHIRP_LENGTH
from utils.text import filter_profanity


class ChirpCreateSchema(Schema):
    body = fields.String(
        required=True,
        validate=validate.Length(max=MAX_CHIRP_LENGTH, error="Chirp is too long"),
    )

    @validates("body")
    def validate_body(self, value, **kwargs):
        if not value.strip():
            raise ValidationError("Chirp body must not be empty")

    @post_load
    def _clean_body(self, data, **kwargs):
        data["body"] = filter_profanity(data["body"])
        return data


class ChirpOutSchema(Schema):
    id = fields.String()
    created_at = fields.DateTime()
    updated_at = fields.DateTime()
    body = fields.String()
    user_id = fields.String()
