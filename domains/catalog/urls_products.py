# domains/catalog/urls_products.py
from django.urls import path
from .views_products import (
    ProductAdminListAPI,
    ProductDetailAPI,
    ProductFilterAPI,
    ProductListCreateAPI,
    ProductNewListAPI,
    ProductTopListAPI,
)
from ..reviews.views import ProductReviewCreateAPI

app_name = "catalog_products"

urlpatterns = [
    # /api/v1/products/
    path("", ProductListCreateAPI.as_view(), name="list-create"),

    # 고정 경로는 <uuid> 보다 먼저
    path("all/", ProductAdminListAPI.as_view(), name="all"),
    path("top/", ProductTopListAPI.as_view(), name="top"),
    path("new/", ProductNewListAPI.as_view(), name="new"),
    path("filter/", ProductFilterAPI.as_view(), name="filter"),

    # /api/v1/products/<product_id>/
    path("<uuid:product_id>/", ProductDetailAPI.as_view(), name="detail"),

    # /api/v1/products/<product_id>/reviews/
    path("<uuid:product_id>/reviews/", ProductReviewCreateAPI.as_view(), name="product-reviews"),
]
