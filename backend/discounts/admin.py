from django.contrib import admin
from .models import Discount


@admin.register(Discount)
class DiscountAdmin(admin.ModelAdmin):
    list_display = ("name", "code", "type", "value", "active", "updated_at")
    list_filter = ("type", "active")
    search_fields = ("name", "code")
    ordering = ("name",)
