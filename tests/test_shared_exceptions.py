import pytest
from rest_framework import exceptions, status

from shared.exceptions import DomainError, api_exception_handler


class _Teapot(DomainError):
    status_code = 418
    default_message = "short and stout"


class TestApiExceptionHandler:
    def test_domain_error_uses_own_status(self):
        r = api_exception_handler(_Teapot(), {})
        assert r.status_code == 418
        assert r.data == {"error": "short and stout"}

    def test_domain_error_custom_message(self):
        r = api_exception_handler(DomainError("price must be a number"), {})
        assert r.status_code == status.HTTP_400_BAD_REQUEST
        assert r.data == {"error": "price must be a number"}

    def test_validation_error_keeps_details(self):
        exc = exceptions.ValidationError({"rating": ["Ensure this value is less than or equal to 5."]})
        r = api_exception_handler(exc, {})
        assert r.status_code == 400
        assert r.data["error"] == "rating: Ensure this value is less than or equal to 5."
        assert "rating" in r.data["details"]

    def test_detail_only_errors(self):
        r = api_exception_handler(exceptions.NotAuthenticated(), {})
        assert r.status_code == 401
        assert r.data == {"error": "Authentication credentials were not provided."}

    def test_unhandled_exception_is_left_to_django(self):
        assert api_exception_handler(RuntimeError("boom"), {}) is None


@pytest.mark.django_db
def test_unknown_route_is_404(api_client):
    assert api_client.get("/api/v1/nope/").status_code == 404
