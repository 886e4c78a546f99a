from django.urls import path
from .views_categories import CategoryListCreateAPI, CategoryDetailAPI

app_name = "catalog_categories"

urlpatterns = [
    # GET /api/v1/categories
    # POST /api/v1/categories
    path("", CategoryListCreateAPI.as_view(), name="list-create"),

    # GET /api/v1/categories/{id}
    # PUT|PATCH /api/v1/categories/{id}
    # DELETE /api/v1/categories/{id}
    path("<uuid:category_id>/", CategoryDetailAPI.as_view(), name="detail"),
]
