# api/v1/urls.py
from django.urls import include, path

from rest_framework_simplejwt.views import TokenObtainPairView, TokenRefreshView

urlpatterns = [
    # --- Auth (이메일 + 비밀번호 → JWT) ---
    path("auth/token/", TokenObtainPairView.as_view(), name="token_obtain_pair"),
    path("auth/token/refresh/", TokenRefreshView.as_view(), name="token_refresh"),
    # --- Catalog ---
    path(
        "categories/",
        include(("domains.catalog.urls_categories", "catalog_categories")),
    ),
    # 상품별 리뷰 작성은 products 쪽에 함께 등록
    path("products/", include(("domains.catalog.urls_products", "catalog_products"))),
]
