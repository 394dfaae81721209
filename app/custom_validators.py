from marshmallow import ValidationError

# Reject missing or empty form values
def validate_non_empty_string(value):
    if not value:
        raise ValidationError("Field cannot be empty.")
