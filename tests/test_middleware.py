from app.middleware import HTTPMethodOverrideMiddleware


def run(environ):
    seen = {}

    def inner(environ, start_response):
        seen['method'] = environ['REQUEST_METHOD']
        return []

    HTTPMethodOverrideMiddleware(inner)(environ, lambda *args: None)
    return seen['method']


def test_query_parameter_overrides_post():
    assert run({'REQUEST_METHOD': 'POST', 'QUERY_STRING': '_method=delete'}) == 'DELETE'


def test_header_overrides_post():
    assert run({'REQUEST_METHOD': 'POST', 'QUERY_STRING': '',
                'HTTP_X_HTTP_METHOD_OVERRIDE': 'PUT'}) == 'PUT'


def test_get_is_never_rewritten():
    assert run({'REQUEST_METHOD': 'GET', 'QUERY_STRING': '_method=DELETE'}) == 'GET'


def test_unknown_override_is_ignored():
    assert run({'REQUEST_METHOD': 'POST', 'QUERY_STRING': '_method=TRACE'}) == 'POST'
