from __future__ import annotations

from django.contrib import admin
from django.utils.html import format_html

from domains.reviews.models import Review

from .models import Category, Product


def _thumb_html(image_url: str | None, size: int = 60) -> str:
    if not image_url:
        return "-"
    return format_html(
        '<img src="{}" style="height:{}px;width:auto;border-radius:8px;" />',
        image_url,
        size,
    )


# -------- Category -------------------------------------------------
@admin.register(Category)
class CategoryAdmin(admin.ModelAdmin):
    list_display = ("name", "id", "created_at")
    search_fields = ("name",)
    ordering = ("name",)


# -------- Inline: Review (읽기 전용, 집계는 API 에서만 갱신) ---------
class ReviewInline(admin.TabularInline):
    model = Review
    extra = 0
    can_delete = False
    fields = ("name", "rating", "comment", "created_at")
    readonly_fields = fields
    ordering = ("created_at",)

    def has_add_permission(self, request, obj=None):
        return False


# -------- Product --------------------------------------------------
@admin.register(Product)
class ProductAdmin(admin.ModelAdmin):
    list_display = ("thumb", "name", "brand", "price", "quantity", "rating", "num_reviews", "created_at")
    search_fields = ("name", "brand")
    ordering = ("-created_at",)
    readonly_fields = ("thumb_large", "rating", "num_reviews", "created_at", "updated_at")
    inlines = [ReviewInline]

    fieldsets = (
        ("기본 정보", {"fields": ("name", "brand", "description", "category")}),
        ("가격/재고", {"fields": ("price", "quantity", "count_in_stock")}),
        ("이미지", {"fields": ("image", "thumb_large")}),
        ("리뷰 집계", {"fields": ("rating", "num_reviews")}),
        ("중요 일시", {"fields": ("created_at", "updated_at")}),
    )

    @admin.display(description="이미지")
    def thumb(self, obj: Product):
        return _thumb_html(obj.image, 48)

    @admin.display(description="미리보기")
    def thumb_large(self, obj: Product):
        return _thumb_html(obj.image, 160)
