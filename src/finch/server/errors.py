"""Error responses for finch requests.

Maps HTTPError exceptions and unexpected failures to safe Response
objects. Bodies carry only the status reason phrase; details go to the
``finch.server`` log (and into the body only when ``debug`` is on).
"""

import logging
from http import HTTPStatus

from finch.errors import HTTPError
from finch.http.request import Request
from finch.http.response import Response

logger = logging.getLogger("finch.server")


def reason_phrase(status: int) -> str:
    try:
        return HTTPStatus(status).phrase
    except ValueError:
        return "Error"


def error_response(status: int, detail: str = "", *, debug: bool = False) -> Response:
    """Build a plain-text error response that never leaks *detail* outside debug."""
    body = f"{status} {reason_phrase(status)}"
    if debug and detail:
        body = f"{body}: {detail}"
    return Response(body=body + "\n", status=status)


def handle_http_error(exc: HTTPError, request: Request, *, debug: bool) -> Response:
    """Map an HTTPError raised during dispatch to a Response."""
    if exc.status >= 500:
        logger.error("%d %s %s — %s", exc.status, request.method, request.path, exc.detail)
    else:
        logger.debug("%d %s %s — %s", exc.status, request.method, request.path, exc.detail)

    response = error_response(exc.status, exc.detail, debug=debug)
    for name, value in exc.headers:
        response = response.with_header(name, value)
    return response


def handle_internal_error(exc: Exception, request: Request, *, debug: bool) -> Response:
    """Log an unexpected exception with traceback and return a generic 500."""
    logger.exception("500 %s %s", request.method, request.path)
    return error_response(500, repr(exc), debug=debug)
