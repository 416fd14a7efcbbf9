from marshmallow import EXCLUDE, Schema, fields, validate


class CreateActorRequestSchema(Schema):
    name = fields.Str(required=True, validate=validate.Length(min=1))
    gender = fields.Str(load_default="")
    birthday = fields.Str(load_default="")


class UpdateActorRequestSchema(Schema):
    class Meta:
        # clients may repeat the id from the URL in the body
        unknown = EXCLUDE

    # Empty string is read as "leave unchanged".
    name = fields.Str(load_default="")
    gender = fields.Str(load_default="")
    birthday = fields.Str(load_default="")
