from marshmallow import EXCLUDE, Schema, fields, validate


class CreateMovieRequestSchema(Schema):
    title = fields.Str(required=True, validate=validate.Length(min=1))
    description = fields.Str(load_default="")
    release_date = fields.Str(load_default="")
    rating = fields.Int(load_default=0, strict=True)
    actors = fields.List(fields.Int(strict=True), load_default=list)


class UpdateMovieRequestSchema(Schema):
    class Meta:
        # clients may repeat the id from the URL in the body
        unknown = EXCLUDE

    # Empty string and 0 are read as "leave unchanged".
    title = fields.Str(load_default="")
    description = fields.Str(load_default="")
    release_date = fields.Str(load_default="")
    rating = fields.Int(load_default=0, strict=True)
