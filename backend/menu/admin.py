from django.contrib import admin

from .models import (
    Tax,
    MenuCategory,
    MenuGroup,
    MenuItem,
    ModifierGroup,
    Modifier,
    MenuItemModifierGroup,
)


class ModifierInline(admin.TabularInline):
    model = Modifier
    extra = 1


class MenuItemModifierGroupInline(admin.TabularInline):
    model = MenuItemModifierGroup
    extra = 1
    autocomplete_fields = ["group"]


@admin.register(Tax)
class TaxAdmin(admin.ModelAdmin):
    list_display = ("name", "rate", "active")
    list_filter = ("active",)


@admin.register(MenuCategory)
class MenuCategoryAdmin(admin.ModelAdmin):
    list_display = ("name", "sort_order", "visible")
    list_filter = ("visible",)
    search_fields = ("name",)


@admin.register(MenuGroup)
class MenuGroupAdmin(admin.ModelAdmin):
    list_display = ("name", "category", "sort_order", "visible")
    list_filter = ("visible", "category")


@admin.register(MenuItem)
class MenuItemAdmin(admin.ModelAdmin):
    list_display = ("name", "sku", "barcode", "price", "category", "group", "visible")
    list_filter = ("visible", "category")
    search_fields = ("name", "sku", "barcode")
    inlines = [MenuItemModifierGroupInline]


@admin.register(ModifierGroup)
class ModifierGroupAdmin(admin.ModelAdmin):
    list_display = ("name", "min_required", "max_allowed")
    search_fields = ("name",)
    inlines = [ModifierInline]
