# audioshare/middleware.py
from urllib.parse import parse_qs


class MethodOverrideMiddleware:
    """
    Lets HTML forms reach PUT/DELETE routes.

    A POST carrying ``?_method=PUT`` (or an ``X-HTTP-Method-Override`` header)
    is handed to Flask as that method. Anything else passes through untouched.
    """

    allowed_methods = frozenset({"PUT", "PATCH", "DELETE"})

    def __init__(self, wsgi_app, param: str = "_method"):
        self.wsgi_app = wsgi_app
        self.param = param

    def __call__(self, environ, start_response):
        if environ.get("REQUEST_METHOD", "").upper() == "POST":
            method = environ.get("HTTP_X_HTTP_METHOD_OVERRIDE")
            if not method:
                values = parse_qs(environ.get("QUERY_STRING", "")).get(self.param)
                method = values[0] if values else None
            method = (method or "").strip().upper()
            if method in self.allowed_methods:
                environ["REQUEST_METHOD"] = method
        return self.wsgi_app(environ, start_response)
