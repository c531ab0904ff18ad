"""Tests for connectz.errors — exception hierarchy and error messages."""

import pytest

from connectz.errors import (
    BadRequest,
    ConfigurationError,
    ConnectzError,
    HTTPError,
    IntegrationError,
    WebhookSignatureError,
)


class TestHierarchy:
    def test_http_error_is_connectz_error(self) -> None:
        assert issubclass(HTTPError, ConnectzError)

    def test_bad_request_is_http_error(self) -> None:
        assert issubclass(BadRequest, HTTPError)

    @pytest.mark.parametrize(
        "cls", [ConfigurationError, IntegrationError, WebhookSignatureError]
    )
    def test_subclasses(self, cls: type) -> None:
        assert issubclass(cls, ConnectzError)


class TestHTTPError:
    def test_status_and_detail(self) -> None:
        err = HTTPError(status=500, detail="Failed to create checkout session")
        assert err.status == 500
        assert err.detail == "Failed to create checkout session"

    def test_str_with_detail(self) -> None:
        assert str(HTTPError(status=500, detail="boom")) == "500: boom"

    def test_str_without_detail(self) -> None:
        assert str(HTTPError(status=500)) == "500"

    def test_payload(self) -> None:
        assert HTTPError(status=500, detail="boom").to_payload() == {"error": "boom"}

    def test_frozen(self) -> None:
        err = HTTPError(status=400)
        with pytest.raises(AttributeError):
            err.status = 500  # type: ignore[misc]

    def test_raisable(self) -> None:
        with pytest.raises(HTTPError) as info:
            raise HTTPError(status=502, detail="upstream")
        assert info.value.status == 502


class TestBadRequest:
    def test_defaults(self) -> None:
        err = BadRequest()
        assert err.status == 400
        assert err.detail == "Bad Request"

    def test_custom_detail(self) -> None:
        assert BadRequest("Invalid amount").detail == "Invalid amount"


class TestIntegrationError:
    def test_message(self) -> None:
        err = IntegrationError("stripe", 402, "card_declined")
        assert err.service == "stripe"
        assert err.status == 402
        assert str(err) == "stripe returned 402: card_declined"
