# domains/accounts/admin.py
from django.contrib import admin
from django.contrib.auth.admin import UserAdmin as BaseUserAdmin
from .models import User


@admin.register(User)
class UserAdmin(BaseUserAdmin):
    list_display = ("email", "username", "role", "is_active", "is_staff", "created_at")
    list_filter = ("role", "is_active", "is_staff")
    search_fields = ("email", "username")
    ordering = ("-created_at",)

    readonly_fields = ("created_at", "updated_at", "is_staff")

    fieldsets = (
        ("기본 정보", {"fields": ("email", "username", "password")}),
        ("권한", {
            "fields": ("role", "is_active", "is_superuser"),
            "description": "role을 바꾸면 저장 시 is_staff가 자동 동기화됩니다.",
        }),
        ("중요 일시", {"fields": ("last_login", "created_at", "updated_at")}),
    )

    add_fieldsets = (
        (None, {
            "classes": ("wide",),
            "fields": ("email", "username", "password1", "password2", "role"),
        }),
    )
