import sys

from flask import Flask, current_app, render_template, request
from werkzeug.exceptions import MethodNotAllowed, NotFound, RequestEntityTooLarge

from app.views import page_not_found, page_title, render_error

FORM_VIEWS = ('create', 'edit')

# Endpoints whose size errors go back to a post form
FORM_ENDPOINTS = {
    'posts.create_post': 'create',
    'posts.update_post': 'edit',
}


class UploadError(Exception):
    """
        Raised when an uploaded image is rejected.

        :param message: Shown inline on the form.
        :param view: The form the upload came from, 'create' or 'edit'.
    """

    def __init__(self, message: str, view: str = 'create'):
        super().__init__(message)
        if view not in FORM_VIEWS:
            raise ValueError(f"Unknown form view '{view}'")
        self.message = message
        self.view = view


def render_post_form(view: str, error: str, status_code: int, echo_fields: bool = True):
    post_id = (request.view_args or {}).get('post_id')
    post = {'id': post_id}
    if echo_fields:
        post['title'] = request.form.get('title')
        post['content'] = request.form.get('content')

    if view == 'edit':
        title = page_title('Edit blog post')
    else:
        title = page_title('Create a new blog post')
    return render_template(f'{view}.html', title=title, error=error, post=post), status_code


def register_error_handlers(app: Flask):
    @app.errorhandler(UploadError)
    def upload_error_handler(e: UploadError):
        return render_post_form(e.view, e.message, 400)

    @app.errorhandler(RequestEntityTooLarge)
    def request_too_large_handler(e):
        view = FORM_ENDPOINTS.get(request.endpoint)
        if view is None:
            return render_error('Request is too large.', 'Error', 413)
        # The body was never parsed, so the oversized part and the fields are unknown
        limit_mb = current_app.config['MAX_CONTENT_LENGTH'] // (1024 * 1024)
        return render_post_form(view, f'The submitted form exceeds the {limit_mb}MB limit.', 400,
                                echo_fields=False)

    @app.errorhandler(NotFound)
    def not_found_handler(e):
        return page_not_found()

    # A known path with the wrong verb is treated as an unknown route
    @app.errorhandler(MethodNotAllowed)
    def method_not_allowed_handler(e):
        return page_not_found()

    @app.errorhandler(429)
    def ratelimit_handler(e):
        return render_error(f'Rate limit exceeded {e.description}', 'Error', 429)

    # Unhandled exceptions such as a failed write to the uploads folder
    @app.errorhandler(500)
    def internal_error_handler(e):
        print(f'Internal server error: {e.original_exception or e}', file=sys.stderr)
        return render_error('Internal server error', 'Error', 500)
