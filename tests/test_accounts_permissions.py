"""
shared/permissions.py, domains/accounts/models.py, 토큰 발급 테스트
"""

import pytest
from django.contrib.auth.models import AnonymousUser
from rest_framework.test import APIClient

from domains.accounts.models import User, UserRole
from shared.permissions import IsAdminRole, ReadOnlyOrAdmin


class _Req:
    def __init__(self, user, method="GET"):
        self.user = user
        self.method = method


@pytest.mark.django_db
class TestUserModel:
    def test_admin_role_syncs_staff_flag(self, user_factory):
        u = user_factory(role="admin")
        assert u.is_staff is True
        assert u.is_admin_role is True

        u.role = UserRole.USER
        u.save()
        assert u.is_staff is False

    def test_display_name(self, user_factory):
        assert user_factory(username="kim").display_name == "kim"

    def test_role_choices(self):
        # 권한 판단은 user / admin 두 역할뿐
        assert set(UserRole.values) == {"user", "admin"}

    def test_account_state_is_is_active_only(self):
        field_names = {f.name for f in User._meta.get_fields()}
        assert "is_active" in field_names
        assert "status" not in field_names


@pytest.mark.django_db
class TestPermissions:
    def test_is_admin_role(self, user, admin):
        perm = IsAdminRole()
        assert perm.has_permission(_Req(admin), None) is True
        assert perm.has_permission(_Req(user), None) is False
        assert perm.has_permission(_Req(AnonymousUser()), None) is False

    def test_superuser_counts_as_admin(self, user_factory):
        su = user_factory(is_superuser=True)
        assert IsAdminRole().has_permission(_Req(su), None) is True

    def test_read_only_or_admin(self, user, admin):
        perm = ReadOnlyOrAdmin()
        assert perm.has_permission(_Req(AnonymousUser(), "GET"), None) is True
        assert perm.has_permission(_Req(user, "POST"), None) is False
        assert perm.has_permission(_Req(admin, "DELETE"), None) is True


@pytest.mark.django_db
class TestTokens:
    def test_obtain_and_refresh(self, user):
        c = APIClient()
        r = c.post("/api/v1/auth/token/", {"email": user.email, "password": user.raw_password}, format="json")
        assert r.status_code == 200
        assert {"access", "refresh"} <= set(r.json())

        r = c.post("/api/v1/auth/token/refresh/", {"refresh": r.json()["refresh"]}, format="json")
        assert r.status_code == 200
        assert "access" in r.json()

    def test_wrong_password(self, user):
        r = APIClient().post("/api/v1/auth/token/", {"email": user.email, "password": "nope"}, format="json")
        assert r.status_code == 401
        assert "error" in r.json()

    def test_inactive_user_gets_no_token(self, user_factory):
        u = user_factory(is_active=False)
        r = APIClient().post("/api/v1/auth/token/", {"email": u.email, "password": u.raw_password}, format="json")
        assert r.status_code == 401

    def test_bearer_token_reaches_protected_endpoint(self, auth_client, product):
        r = auth_client.post(f"/api/v1/products/{product.pk}/reviews/", {"rating": 3}, format="json")
        assert r.status_code == 201
