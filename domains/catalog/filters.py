# domains/catalog/filters.py
import django_filters as df

from .models import Product


class UUIDInFilter(df.BaseInFilter, df.UUIDFilter):
    """콤마로 이은 UUID 목록 → category_id__in"""


class ProductFilter(df.FilterSet):
    keyword = df.CharFilter(field_name="name", lookup_expr="icontains")
    category = UUIDInFilter(field_name="category_id", lookup_expr="in")
    min_price = df.NumberFilter(field_name="price", lookup_expr="gte")
    max_price = df.NumberFilter(field_name="price", lookup_expr="lte")

    class Meta:
        model = Product
        fields = ["keyword", "category", "min_price", "max_price"]
