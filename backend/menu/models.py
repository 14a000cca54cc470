from django.db import models
from django.utils.translation import gettext_lazy as _


class Tax(models.Model):
    name = models.CharField(
        max_length=50,
        unique=True,
        help_text=_("Name of the tax, e.g., 'VAT' or 'Sales Tax'."),
    )
    rate = models.DecimalField(
        max_digits=7,
        decimal_places=5,
        help_text=_("Tax rate as a fraction, e.g., 0.0825 for 8.25%."),
    )
    active = models.BooleanField(default=True)

    class Meta:
        verbose_name = _("Tax")
        verbose_name_plural = _("Taxes")

    def __str__(self):
        return f"{self.name} ({self.rate})"


class MenuCategory(models.Model):
    name = models.CharField(max_length=100, help_text=_("Name of the menu category."))
    description = models.TextField(blank=True)
    sort_order = models.IntegerField(
        default=0,
        help_text=_("Display order for this category. Lower numbers appear first."),
    )
    visible = models.BooleanField(
        default=True,
        help_text=_("Hidden categories are never exported to marketplaces."),
    )

    class Meta:
        verbose_name = _("Menu Category")
        verbose_name_plural = _("Menu Categories")
        ordering = ["sort_order", "name"]

    def __str__(self):
        return self.name


class MenuGroup(models.Model):
    category = models.ForeignKey(
        MenuCategory, on_delete=models.CASCADE, related_name="groups"
    )
    name = models.CharField(max_length=100)
    sort_order = models.IntegerField(default=0)
    visible = models.BooleanField(default=True)

    class Meta:
        ordering = ["sort_order", "name"]

    def __str__(self):
        return f"{self.category.name} / {self.name}"


class MenuItem(models.Model):
    category = models.ForeignKey(
        MenuCategory,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="items",
    )
    group = models.ForeignKey(
        MenuGroup,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="items",
        help_text=_("Optional group. Ungrouped items are listed directly under the category."),
    )
    name = models.CharField(max_length=200)
    description = models.TextField(blank=True)
    sku = models.CharField(max_length=64, blank=True, null=True, db_index=True)
    barcode = models.CharField(max_length=64, blank=True, null=True, db_index=True)
    price = models.DecimalField(max_digits=10, decimal_places=2, default=0)
    visible = models.BooleanField(default=True)
    tax = models.ForeignKey(
        Tax,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="menu_items",
    )
    modifier_groups = models.ManyToManyField(
        "ModifierGroup", through="MenuItemModifierGroup", related_name="menu_items", blank=True
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["name"]
        indexes = [
            models.Index(fields=["category", "visible"], name="menuitem_category_visible_idx"),
        ]

    def __str__(self):
        return self.name


class ModifierGroup(models.Model):
    name = models.CharField(
        max_length=100, help_text=_("Customer-facing name, e.g., 'Choose your size'")
    )
    min_required = models.PositiveIntegerField(
        null=True, blank=True, help_text=_("Minimum required selections")
    )
    max_allowed = models.PositiveIntegerField(
        null=True, blank=True, help_text=_("Maximum allowed selections (null for unlimited)")
    )

    def __str__(self):
        return self.name


class Modifier(models.Model):
    group = models.ForeignKey(
        ModifierGroup, on_delete=models.CASCADE, related_name="modifiers"
    )
    name = models.CharField(max_length=100)
    price = models.DecimalField(max_digits=10, decimal_places=2, default=0)
    active = models.BooleanField(default=True)
    sort_order = models.PositiveIntegerField(default=0)

    class Meta:
        ordering = ["sort_order", "name"]

    def __str__(self):
        return f"{self.group.name} - {self.name}"


class MenuItemModifierGroup(models.Model):
    """Attaches a modifier group to a menu item, optionally overriding its limits."""

    menu_item = models.ForeignKey(
        MenuItem, on_delete=models.CASCADE, related_name="item_modifier_groups"
    )
    group = models.ForeignKey(
        ModifierGroup, on_delete=models.CASCADE, related_name="item_links"
    )
    min_required = models.PositiveIntegerField(null=True, blank=True)
    max_allowed = models.PositiveIntegerField(null=True, blank=True)
    sort_order = models.PositiveIntegerField(default=0)

    class Meta:
        ordering = ["sort_order"]
        unique_together = ("menu_item", "group")
