"""Tests for client exception classes."""


from newsdesk.clients import (
    APIError,
    ClientError,
    ConflictError,
    ConnectionError,
    NotFoundError,
    RateLimitError,
    ResponseValidationError,
)


class TestClientError:
    """Tests for the base ClientError exception."""

    def test_instantiation_with_message(self):
        """ClientError stores the error message."""
        error = ClientError("Something went wrong")

        assert error.message == "Something went wrong"
        assert str(error) == "Something went wrong"

    def test_inheritance(self):
        """ClientError is an Exception."""
        assert isinstance(ClientError("test"), Exception)


class TestConnectionError:
    """Tests for ConnectionError exception."""

    def test_inheritance(self):
        """ConnectionError inherits from ClientError."""
        error = ConnectionError("Network unreachable")

        assert error.message == "Network unreachable"
        assert isinstance(error, ClientError)


class TestAPIError:
    """Tests for APIError exception."""

    def test_instantiation_with_status_code(self):
        """APIError stores message and status code."""
        error = APIError("Server error", status_code=500)

        assert error.message == "Server error"
        assert error.status_code == 500
        assert error.hint is None
        assert error.details is None

    def test_backend_hint_and_details(self):
        error = APIError("denied", status_code=403, hint="Sign in", details="RLS policy")

        assert error.hint == "Sign in"
        assert error.details == "RLS policy"

    def test_inheritance(self):
        assert isinstance(APIError("test", status_code=500), ClientError)


class TestStatusSpecificErrors:
    """Tests for the fixed-status APIError subclasses."""

    def test_rate_limit_defaults(self):
        error = RateLimitError()

        assert error.message == "Rate limit exceeded"
        assert error.status_code == 429
        assert isinstance(error, APIError)

    def test_not_found_defaults(self):
        error = NotFoundError()

        assert error.message == "Resource not found"
        assert error.status_code == 404
        assert isinstance(error, APIError)

    def test_conflict_defaults(self):
        error = ConflictError(hint="Choose another slug")

        assert error.message == "Conflict"
        assert error.status_code == 409
        assert error.hint == "Choose another slug"
        assert isinstance(error, APIError)


class TestResponseValidationError:
    """Tests for ResponseValidationError exception."""

    def test_errors_default_to_empty_list(self):
        error = ResponseValidationError("Bad row")

        assert error.errors == []
        assert isinstance(error, ClientError)

    def test_stores_errors(self):
        error = ResponseValidationError("Bad row", errors=["id: missing"])

        assert error.errors == ["id: missing"]
