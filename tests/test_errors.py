"""Tests for finch.errors and finch.server.errors — status mapping and safe bodies."""

import pytest

from finch.errors import (
    BadRequest,
    FinchError,
    HTTPError,
    InternalServerError,
    NotFound,
    ServiceUnavailable,
)
from finch.server.errors import error_response, reason_phrase


class TestHierarchy:
    @pytest.mark.parametrize(
        ("exc", "status"),
        [
            (BadRequest(), 400),
            (NotFound(), 404),
            (InternalServerError(), 500),
            (ServiceUnavailable(), 503),
        ],
    )
    def test_status(self, exc: HTTPError, status: int) -> None:
        assert exc.status == status
        assert isinstance(exc, FinchError)

    def test_str_includes_detail(self) -> None:
        assert str(NotFound("no route")) == "404: no route"
        assert str(HTTPError(418)) == "418"

    def test_service_unavailable_closes_connection(self) -> None:
        assert ("Connection", "close") in ServiceUnavailable().headers


class TestErrorResponse:
    def test_reason_phrase(self) -> None:
        assert reason_phrase(404) == "Not Found"
        assert reason_phrase(799) == "Error"

    def test_detail_hidden(self) -> None:
        response = error_response(500, "stack trace here")
        assert response.status == 500
        assert response.text == "500 Internal Server Error\n"
        assert response.content_type.startswith("text/plain")

    def test_detail_shown_in_debug(self) -> None:
        response = error_response(500, "stack trace here", debug=True)
        assert response.text == "500 Internal Server Error: stack trace here\n"
