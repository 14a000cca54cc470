from django.contrib import admin
from .models import Payment


@admin.register(Payment)
class PaymentAdmin(admin.ModelAdmin):
    list_display = ("id", "order", "amount", "method", "status", "voided", "created_at")
    list_filter = ("status", "method", "voided")
    search_fields = ("id", "order__id", "reference")
    readonly_fields = ("id", "created_at", "updated_at")
