from django.contrib import admin

from .models import KitchenTicket, KitchenTicketItem


class KitchenTicketItemInline(admin.TabularInline):
    model = KitchenTicketItem
    extra = 0
    readonly_fields = ['order_item', 'name', 'quantity', 'modifiers_text', 'notes']


@admin.register(KitchenTicket)
class KitchenTicketAdmin(admin.ModelAdmin):
    list_display = ['order', 'status', 'created_at']
    list_filter = ['status', 'created_at']
    readonly_fields = ['order', 'created_at']
    inlines = [KitchenTicketItemInline]
