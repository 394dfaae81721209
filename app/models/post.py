from datetime import datetime
from zoneinfo import ZoneInfo

from flask import url_for
from marshmallow import EXCLUDE, Schema, fields

from app.custom_validators import validate_non_empty_string
from app.extensions import db

# Stored in the image column when the post has no uploaded image
DEFAULT_IMAGE = 'default.jpg'


class Post(db.Model):
    __tablename__ = "posts"
    id = db.Column(db.Integer, primary_key=True)
    title = db.Column(db.String(255), nullable=False)
    image = db.Column(db.String(255), nullable=False, default=DEFAULT_IMAGE)
    content = db.Column(db.Text, nullable=False)
    created_at = db.Column('createdAt', db.TIMESTAMP(timezone=True), nullable=False,
                           default=lambda: datetime.now(tz=ZoneInfo("UTC")))

    @property
    def has_custom_image(self):
        return self.image != DEFAULT_IMAGE

    @property
    def image_url(self):
        # Images live under static/images, uploads in its uploads/ subfolder
        return url_for('static', filename=f'images/{self.image}')

    def __repr__(self):
        return f'<Post "{self.title}">'


class PostFormSchema(Schema):
    """
        Title and content submitted from the create and edit forms
    """
    class Meta:
        # The edit form also carries removeImage
        unknown = EXCLUDE

    title = fields.String(required=True, validate=validate_non_empty_string)
    content = fields.String(required=True, validate=validate_non_empty_string)


post_form_schema = PostFormSchema()
