from marshmallow import EXCLUDE, Schema, fields

from app.custom_validators import validate_non_empty_string


# Contact messages are only validated, they are not stored
class ContactSchema(Schema):
    class Meta:
        unknown = EXCLUDE

    name = fields.String(required=True, validate=validate_non_empty_string)
    email = fields.String(required=True, validate=validate_non_empty_string)
    message = fields.String(required=True, validate=validate_non_empty_string)


contact_schema = ContactSchema()
