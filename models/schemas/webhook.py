from marshmallow import Schema, fields

USER_UPGRADED = "user.upgraded"


class WebhookDataSchema(Schema):
    user_id = fields.UUID(required=True)


class WebhookSchema(Schema):
    event = fields.String(required=True)
    data = fields.Nested(WebhookDataSchema, required=True)
