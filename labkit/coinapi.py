"""An HTTP API that reports a user's coin balance behind token authorisation."""

from __future__ import annotations

import argparse
import functools
import json
import logging
import sys
from collections.abc import Callable
from http import HTTPStatus
from typing import Any

from flask import Flask, Response, request

from labkit.coindb import new_database

UNAUTHORIZED_MESSAGE = "invalid or missing authorization token or username"
USER_NOT_FOUND_MESSAGE = "user not found"
INTERNAL_ERROR_MESSAGE = "Internal Server Error"
DEFAULT_HOST = "localhost"
DEFAULT_PORT = 8000

logger = logging.getLogger(__name__)


def _json_response(payload: dict[str, Any], code: int) -> Response:
    body = json.dumps(payload, separators=(",", ":")) + "\n"
    return Response(body, status=code, mimetype="application/json")


def error_response(message: str, code: int) -> Response:
    """Return a JSON error body carrying ``code`` and ``message``."""
    return _json_response({"Code": code, "Message": message}, code)


def _request_error(message: str) -> Response:
    return error_response(message, HTTPStatus.BAD_REQUEST)


def _internal_error() -> Response:
    return error_response(INTERNAL_ERROR_MESSAGE, HTTPStatus.INTERNAL_SERVER_ERROR)


def _strip_slashes(wsgi_app: Callable[..., Any]) -> Callable[..., Any]:
    def middleware(environ: dict[str, Any], start_response: Callable[..., Any]) -> Any:
        path = environ.get("PATH_INFO", "")
        if len(path) > 1 and path.endswith("/"):
            environ["PATH_INFO"] = path[:-1]
        return wsgi_app(environ, start_response)

    return middleware


def _username_param(args: Any) -> str:
    username = ""
    for key in args:
        if key.lower() != "username":
            raise ValueError(f'schema: invalid path "{key}"')
        username = args.getlist(key)[0]
    return username


def create_app(database_factory: Callable[[], Any] | None = None) -> Flask:
    """Build the application; ``database_factory`` makes the database for each request."""
    factory = database_factory if database_factory is not None else new_database
    app = Flask(__name__)

    def open_database() -> Any | None:
        try:
            return factory()
        except Exception:
            logger.exception("Failed to connect to the database")
            return None

    def authorized(view: Callable[[], Response]) -> Callable[[], Response]:
        @functools.wraps(view)
        def wrapper() -> Response:
            token = request.headers.get("Authorization", "")
            username = request.args.get("username", "")
            if not token or not username:
                logger.error(UNAUTHORIZED_MESSAGE)
                return _request_error(UNAUTHORIZED_MESSAGE)
            database = open_database()
            if database is None:
                return _internal_error()
            details = database.get_user_login_details(username)
            if details is None or details.token != token:
                logger.error(UNAUTHORIZED_MESSAGE)
                return _request_error(UNAUTHORIZED_MESSAGE)
            return view()

        return wrapper

    @app.get("/account/coins")
    @authorized
    def coin_balance() -> Response:
        try:
            username = _username_param(request.args)
        except ValueError as error:
            logger.error("%s", error)
            return _internal_error()
        database = open_database()
        if database is None:
            return _internal_error()
        coins = database.get_user_coins(username)
        if coins is None:
            logger.error("User not found: %s", username)
            return _request_error(USER_NOT_FOUND_MESSAGE)
        return _json_response({"Code": HTTPStatus.OK, "Balance": coins.coins}, HTTPStatus.OK)

    app.wsgi_app = _strip_slashes(app.wsgi_app)  # type: ignore[method-assign]
    return app


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Serve the coin balance API.")
    parser.add_argument("--host", default=DEFAULT_HOST)
    parser.add_argument("--port", type=int, default=DEFAULT_PORT)
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(message)s")
    app = create_app()
    print("Sample API is running...")
    try:
        app.run(host=args.host, port=args.port)
    except OSError as error:
        logger.error("Could not start server: %s", error)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())