import os
import sys

from flask import Flask

from app.errors import register_error_handlers
from app.extensions import db, limiter, migrate
from app.middleware import register_middlewares
# Ensure the models are imported so its registered
from app.models.post import Post
from config import Config


def create_app(config_class=Config):
    app = Flask(__name__)
    app.config.from_object(config_class)
    app.secret_key = os.environ.get('FLASK_SECRET_KEY')

    # Initialise flask extensions
    # Initialise sqlalchemy db, the connection pool is owned by this app's engine
    db.init_app(app)
    # Initialise flask migration
    migrate.init_app(app, db)
    # Initialise rate limiter
    limiter.init_app(app)

    # Register middlewares
    register_middlewares(app)
    register_error_handlers(app)

    # Register blueprints
    from app.main import bp as main_bp
    app.register_blueprint(main_bp)

    from app.posts import bp as posts_bp
    app.register_blueprint(posts_bp, url_prefix='/posts')

    @app.cli.command('init-db')
    def init_db():
        """Create the posts table if it does not exist."""
        db.create_all()
        print(f'Created tables: {", ".join(db.metadata.tables)}', file=sys.stderr)

    return app
