import sys

from flask import render_template

from app.extensions import db

SITE_NAME = 'Malawi Tourism Blog'


def page_title(prefix: str) -> str:
    return f'{prefix} - {SITE_NAME}'


def render_error(message: str, title: str, status_code: int):
    return render_template('error.html', message=message, title=page_title(title)), status_code


def post_not_found():
    return render_error('Post not found', 'Post Not Found', 404)


def page_not_found():
    return render_error('Page not found. The requested URL was not found on this server.',
                        'Page Not Found', 404)


def database_error(e: Exception):
    """
        Rolls back the failed session and renders the generic 500 page
    """
    db.session.rollback()
    print(f'Database error: {e}', file=sys.stderr)
    return render_error('Database error', 'Error', 500)
