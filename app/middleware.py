import sys
from datetime import datetime
from urllib.parse import parse_qs
from zoneinfo import ZoneInfo

from flask import Flask, request

from app.extensions import get_real_ip


class HTTPMethodOverrideMiddleware:
    """
    Lets HTML forms, which can only POST, reach PUT, PATCH and DELETE routes.

    The real verb is read from the '_method' query parameter (e.g.
    action="/posts/5?_method=DELETE") or the X-HTTP-Method-Override header.
    Only POST requests are rewritten.
    """
    allowed_methods = frozenset(['PUT', 'PATCH', 'DELETE'])

    def __init__(self, app, param='_method', header='HTTP_X_HTTP_METHOD_OVERRIDE'):
        self.app = app
        self.param = param
        self.header = header

    def __call__(self, environ, start_response):
        if environ.get('REQUEST_METHOD', '').upper() == 'POST':
            query = parse_qs(environ.get('QUERY_STRING', ''))
            method = query.get(self.param, [None])[0] or environ.get(self.header)
            if method and method.upper() in self.allowed_methods:
                environ['REQUEST_METHOD'] = method.upper()
        return self.app(environ, start_response)


def log_request():
    if request.endpoint != 'static':
        timestamp = datetime.now(ZoneInfo("UTC")).isoformat()
        print(f'{timestamp} {request.method} {request.full_path.rstrip("?")} '
              f'endpoint={request.endpoint} ip={get_real_ip()}', file=sys.stderr)


def register_middlewares(app: Flask):
    app.wsgi_app = HTTPMethodOverrideMiddleware(app.wsgi_app)
    app.before_request(log_request)
