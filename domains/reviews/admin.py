from django.contrib import admin

from .models import Review


@admin.register(Review)
class ReviewAdmin(admin.ModelAdmin):
    """
    열람 전용. 리뷰는 API 로만 추가되고 상품과 함께만 삭제된다.
    """
    list_display = ("product", "name", "rating", "created_at")
    list_filter = ("rating",)
    search_fields = ("name", "comment", "product__name")
    ordering = ("-created_at",)
    readonly_fields = ("product", "user", "name", "rating", "comment", "created_at")

    def has_add_permission(self, request):
        return False

    def has_change_permission(self, request, obj=None):
        return False

    def has_delete_permission(self, request, obj=None):
        return False
