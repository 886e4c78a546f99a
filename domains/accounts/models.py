# domains/accounts/models.py
from __future__ import annotations

import uuid
from django.db import models
from django.contrib.auth.models import AbstractUser


# ----- Enums -------------------------------------------------
class UserRole(models.TextChoices):
    USER    = "user", "User"
    ADMIN   = "admin", "Admin"


# ----- Models ------------------------------------------------
class User(AbstractUser):
    """
    대시보드/리뷰 작성자 계정
    - PK: UUID (db_column='user_id'), 리뷰의 작성자 식별자로 쓰인다
    - role 'admin' 이면 카탈로그 쓰기 권한 + 장고 어드민 접근(is_staff=True)
    """
    Role = UserRole

    id = models.UUIDField(
        primary_key=True,
        default=uuid.uuid4,
        editable=False,
        db_column="user_id",
    )
    email = models.EmailField(max_length=254, unique=True)

    role = models.CharField(
        max_length=16,
        choices=UserRole.choices,
        default=UserRole.USER,
    )

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    # 이메일로 로그인 (auth/token/)
    USERNAME_FIELD = "email"
    REQUIRED_FIELDS = ["username"]

    class Meta:
        db_table = "users"
        indexes = [
            models.Index(fields=["role"], name="users_role_0f1c2a_idx"),
        ]

    @property
    def is_admin_role(self) -> bool:
        return self.role == UserRole.ADMIN

    @property
    def display_name(self) -> str:
        # 리뷰 작성 시점에 복사해 두는 이름
        return self.username or self.email

    def __str__(self) -> str:
        return self.email or self.username

    # ---- 역할 ↔ 장고 관리자 플래그 동기화 ----
    def save(self, *args, **kwargs):
        """superuser 또는 role == admin 이면 is_staff=True, 나머지는 False"""
        should_staff = self.is_superuser or self.role == UserRole.ADMIN
        if self.is_staff != should_staff:
            self.is_staff = should_staff
        super().save(*args, **kwargs)
