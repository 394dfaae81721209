import io
from datetime import datetime
from zoneinfo import ZoneInfo

import pytest
from sqlalchemy import func, select

from app import create_app
from app.extensions import db
from app.models.post import Post
from config import TestConfig


@pytest.fixture()
def upload_dir(tmp_path):
    return tmp_path / 'uploads'


@pytest.fixture()
def app(upload_dir):
    class _TestConfig(TestConfig):
        UPLOAD_FOLDER = str(upload_dir)

    app = create_app(_TestConfig)
    with app.app_context():
        db.create_all()
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture()
def client(app):
    return app.test_client()


def image_file(name='photo.png', size=64):
    return (io.BytesIO(b'\x89PNG' + b'\0' * (size - 4)), name)


def add_post(title='Lake Malawi', content='Beautiful', image='default.jpg', created_at=None):
    post = Post(title=title, content=content, image=image,
                created_at=created_at or datetime.now(ZoneInfo("UTC")))
    db.session.add(post)
    db.session.commit()
    return post.id


def fetch_post(post_id):
    db.session.expire_all()
    return db.session.get(Post, post_id)


def post_count():
    return db.session.scalar(select(func.count()).select_from(Post))


def uploaded_files(upload_dir):
    if not upload_dir.exists():
        return []
    return sorted(p.name for p in upload_dir.iterdir())
