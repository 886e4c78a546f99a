import uuid
from django.conf import settings
from django.db import models
from domains.catalog.models import Product


class Review(models.Model):
    """
    상품에 딸린 리뷰 (상품 삭제 시 함께 삭제)
    - name: 작성 시점의 사용자 이름 스냅샷
    - user: 1인 1리뷰 판별용
    """
    review_id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    product = models.ForeignKey(Product, on_delete=models.CASCADE, db_column="product_id", related_name="reviews")
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        db_column="user_id",
        related_name="reviews",
    )
    name = models.CharField(max_length=150)
    rating = models.PositiveSmallIntegerField()  # 1~5
    comment = models.TextField(blank=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = "reviews"
        ordering = ("created_at",)  # 작성 순서 유지
        constraints = [
            models.UniqueConstraint(fields=["user", "product"], name="uniq_review_user_product"),  # 한 상품 1인 1리뷰
        ]
        indexes = [
            models.Index(fields=["product", "created_at"], name="reviews_product_6e9b1c_idx"),
            models.Index(fields=["user"], name="reviews_user_id_2f4a7d_idx"),
        ]

    def __str__(self):
        return f"Review({self.review_id}) {self.user_id}->{self.product_id}"
