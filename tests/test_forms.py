"""Tests for finch.http.forms — URL-encoded and multipart form parsing."""

import pytest

from finch.http.forms import FormData, parse_form_data

URLENCODED = "application/x-www-form-urlencoded"


class TestFormData:
    def test_first_value(self) -> None:
        form = FormData({"tag": ["a", "b"]})
        assert form["tag"] == "a"
        assert form.get_list("tag") == ["a", "b"]

    def test_missing(self) -> None:
        form = FormData()
        assert form.get("x") is None
        assert form.get_list("x") == []
        assert "x" not in form


class TestURLEncoded:
    def test_fields(self) -> None:
        form = parse_form_data(b"username=tester&password=12345", URLENCODED)
        assert dict(form) == {"username": "tester", "password": "12345"}

    def test_blank_values_kept(self) -> None:
        form = parse_form_data(b"name=", URLENCODED)
        assert form["name"] == ""

    def test_percent_decoding(self) -> None:
        form = parse_form_data(b"q=a%20b%26c", URLENCODED)
        assert form["q"] == "a b&c"

    def test_charset_parameter_ignored(self) -> None:
        form = parse_form_data(b"a=1", f"{URLENCODED}; charset=utf-8")
        assert form["a"] == "1"


class TestMultipart:
    def test_text_fields(self) -> None:
        boundary = "finchboundary"
        body = (
            f"--{boundary}\r\n"
            'Content-Disposition: form-data; name="username"\r\n\r\n'
            "tester\r\n"
            f"--{boundary}\r\n"
            'Content-Disposition: form-data; name="password"\r\n\r\n'
            "12345\r\n"
            f"--{boundary}--\r\n"
        ).encode()
        form = parse_form_data(body, f"multipart/form-data; boundary={boundary}")
        assert form["username"] == "tester"
        assert form["password"] == "12345"

    def test_missing_boundary(self) -> None:
        with pytest.raises(ValueError, match="boundary"):
            parse_form_data(b"x", "multipart/form-data")


class TestUnsupported:
    def test_json_rejected(self) -> None:
        with pytest.raises(ValueError, match="Unsupported"):
            parse_form_data(b"{}", "application/json")
