"""Tests for pihen.errors — exception hierarchy and RequestError."""

import pytest

from pihen.errors import ConfigurationError, PihenError, RequestError


class TestHierarchy:
    def test_request_error_is_pihen_error(self) -> None:
        assert issubclass(RequestError, PihenError)

    def test_configuration_error_is_pihen_error(self) -> None:
        assert issubclass(ConfigurationError, PihenError)


class TestRequestError:
    def test_status_and_message(self) -> None:
        err = RequestError(404, "not found")
        assert err.status == 404
        assert err.message == "not found"

    def test_str(self) -> None:
        assert str(RequestError(400, "missing id")) == "missing id (400)"

    def test_message_defaults_empty(self) -> None:
        assert RequestError(410).message == ""

    def test_traceback_is_assignable(self) -> None:
        err = RequestError(400, "bad")
        err.__traceback__ = None
        assert err.with_traceback(None) is err

    def test_catchable(self) -> None:
        with pytest.raises(RequestError) as exc_info:
            raise RequestError(409, "conflict")
        assert exc_info.value.status == 409

    @pytest.mark.parametrize("status", [100, 302, 418, 599])
    def test_any_http_status_accepted(self, status: int) -> None:
        assert RequestError(status).status == status

    @pytest.mark.parametrize("status", [0, 99, 600, 1000])
    def test_invalid_status_rejected(self, status: int) -> None:
        with pytest.raises(ValueError, match=str(status)):
            RequestError(status, "nope")
