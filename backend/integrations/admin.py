from django.contrib import admin

from .models import IntegrationOrder, IntegrationProvider, IntegrationStore


class IntegrationStoreInline(admin.TabularInline):
    model = IntegrationStore
    extra = 0
    fields = ("name", "merchant_supplied_id", "provider_store_id", "active")


@admin.register(IntegrationProvider)
class IntegrationProviderAdmin(admin.ModelAdmin):
    list_display = ("code", "name", "enabled", "updated_at")
    list_filter = ("enabled",)
    search_fields = ("code", "name")
    inlines = [IntegrationStoreInline]


@admin.register(IntegrationStore)
class IntegrationStoreAdmin(admin.ModelAdmin):
    list_display = ("name", "provider", "merchant_supplied_id", "active")
    list_filter = ("provider", "active")
    search_fields = ("name", "merchant_supplied_id", "provider_store_id")


@admin.register(IntegrationOrder)
class IntegrationOrderAdmin(admin.ModelAdmin):
    list_display = (
        "external_id",
        "provider",
        "store",
        "status",
        "order_type",
        "synthetic_id",
        "pos_order",
        "created_at",
    )
    list_filter = ("provider", "status", "synthetic_id")
    search_fields = ("external_id", "display_id")
    readonly_fields = ("pos_order", "payload", "created_at", "updated_at")
