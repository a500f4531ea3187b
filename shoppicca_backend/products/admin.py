# products/admin.py
"""
=====================================================
PATH: products/admin.py
=====================================================

Catalog admin for platform staff. Owners manage their catalog through the
dashboard API; this is for support and moderation.
"""

from django.contrib import admin

from products.models import Category, Product, ProductAttribute, ProductImage


class ProductImageInline(admin.TabularInline):
    model = ProductImage
    extra = 0
    fields = ("image_url", "position")


class ProductAttributeInline(admin.TabularInline):
    model = ProductAttribute
    extra = 0
    fields = ("key", "value")


@admin.register(Category)
class CategoryAdmin(admin.ModelAdmin):
    list_display = ("name", "store", "created_at")
    search_fields = ("name", "store__slug")
    list_select_related = ("store",)


@admin.register(Product)
class ProductAdmin(admin.ModelAdmin):
    list_display = ("name", "store", "category", "price", "price_type", "is_visible", "created_at")
    list_filter = ("price_type", "is_visible")
    search_fields = ("name", "store__slug")
    list_select_related = ("store", "category")
    inlines = [ProductImageInline, ProductAttributeInline]
