"""
CORS policy for browser clients running on a local dev server.

Static allow-list: any port on localhost / 127.0.0.1, credentials allowed.
Install with setup_cors() after every other middleware so it is the
outermost layer and answers preflight requests first.
"""
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

# Matches http://localhost:5173, http://127.0.0.1:8080, ...
ALLOWED_ORIGIN_REGEX = r"http://(localhost|127\.0\.0\.1):\d+"

ALLOWED_METHODS = ["GET", "POST", "PUT", "DELETE", "PATCH", "OPTIONS"]

ALLOWED_HEADERS = [
    "Authorization",
    "Content-Type",
    "Accept",
    "Origin",
    "X-Requested-With",
    "Access-Control-Request-Method",
    "Access-Control-Request-Headers",
]

EXPOSED_HEADERS = [
    "Authorization",
    "Content-Type",
    "Access-Control-Allow-Origin",
    "Access-Control-Allow-Credentials",
]

PREFLIGHT_MAX_AGE = 3600  # 1 hour


def setup_cors(app: FastAPI) -> None:
    """Attach the CORS middleware to the app."""
    app.add_middleware(
        CORSMiddleware,
        allow_origin_regex=ALLOWED_ORIGIN_REGEX,
        allow_credentials=True,
        allow_methods=ALLOWED_METHODS,
        allow_headers=ALLOWED_HEADERS,
        expose_headers=EXPOSED_HEADERS,
        max_age=PREFLIGHT_MAX_AGE,
    )
