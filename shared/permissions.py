# shared/permissions.py
from __future__ import annotations

from typing import Iterable

from rest_framework.permissions import SAFE_METHODS, BasePermission

# ---- helpers ---------------------------------------------------------------


def _is_schema_generation(view) -> bool:
    """drf-spectacular 스키마 생성 시 True (권한을 널널하게 통과시켜 문서 생성 편의)."""
    return bool(getattr(view, "swagger_fake_view", False))


def _user_has_role(user, roles: Iterable[str]) -> bool:
    """User.role 이 주어진 roles 중 하나인지."""
    return bool(
        getattr(user, "is_authenticated", False)
        and getattr(user, "role", None) in set(roles)
    )


def _is_admin(user) -> bool:
    # role == admin 이거나 장고 staff/superuser 플래그가 있으면 관리자로 본다
    if _user_has_role(user, ("admin",)):
        return True
    return bool(
        getattr(user, "is_authenticated", False)
        and (getattr(user, "is_staff", False) or getattr(user, "is_superuser", False))
    )


# ---- role-based permissions ------------------------------------------------


class IsAdminRole(BasePermission):
    """role == 'admin' (또는 staff)"""

    def has_permission(self, request, view):
        if _is_schema_generation(view):
            return True
        return _is_admin(request.user)


class ReadOnlyOrAdmin(BasePermission):
    """읽기 자유, 쓰기/변경은 admin만"""

    def has_permission(self, request, view):
        if _is_schema_generation(view):
            return True
        if request.method in SAFE_METHODS:
            return True
        return _is_admin(request.user)


__all__ = [
    "IsAdminRole",
    "ReadOnlyOrAdmin",
]
