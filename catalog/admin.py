from django.contrib import admin
from django.db import models
from django import forms
from .models import (
    Category, Product, Variation, VariationCategory,
    ReviewRating, ProductGallery, ProductDownload, Brand
)
from .cache import invalidate_tags
from import_export import resources, fields, widgets
from import_export.admin import ImportExportMixin
from django.utils.safestring import mark_safe
import admin_thumbnails
from django.core.exceptions import ValidationError


@admin_thumbnails.thumbnail('image')
class ProductGalleryInline(admin.TabularInline):
    model = ProductGallery
    extra = 1


class ProductDownloadInline(admin.TabularInline):
    model = ProductDownload
    extra = 1


class ProductResource(resources.ModelResource):
    category = fields.Field(
        column_name="Category",
        attribute="category",
        widget=widgets.ForeignKeyWidget(Category, "slug"),
    )
    tax_rate = fields.Field(attribute="tax_rate", column_name="Tax Rate (%)", widget=widgets.DecimalWidget())
    end_date = fields.Field(attribute="end_date", column_name="End Date", widget=widgets.DateTimeWidget())

    def after_save_instance(self, instance, row, **kwargs):
        # imported rows bypass post_save when bulk mode is used
        invalidate_tags(f"product-{instance.pk}")

    class Meta:
        model = Product
        fields = (
            "id",
            "product_name",
            "slug",
            "category",
            "price",
            "tax_rate",
            "description",
            "stock",
            "is_available",
            "end_date",
        )
        export_order = fields
        import_id_fields = ("id",)


class VariationInlineForm(forms.ModelForm):
    class Meta:
        model = Variation
        fields = ("category", "name", "price_modifier", "is_active")

    def clean(self):
        cleaned = super().clean()
        product = self.instance.product if self.instance.product_id else None
        category = cleaned.get("category")
        name = cleaned.get("name")
        is_active = cleaned.get("is_active")

        if product and category and name and is_active:
            qs = Variation.objects.filter(
                product=product,
                category=category,
                name=name,
                is_active=True,
            )
            if self.instance.pk:
                qs = qs.exclude(pk=self.instance.pk)
            if qs.exists():
                raise ValidationError("There is already an active variation with this name in this category for this product.")
        return cleaned


class VariationInline(admin.TabularInline):
    model = Variation
    form = VariationInlineForm
    fields = ("category", "name", "price_modifier", "is_active")
    extra = 0
    autocomplete_fields = ["category"]


@admin.action(description="Refresh cached product fragments")
def refresh_fragments(modeladmin, request, queryset):
    invalidate_tags(*[f"product-{pk}" for pk in queryset.values_list('pk', flat=True)])
    modeladmin.message_user(request, f"Refreshed cached fragments of {queryset.count()} product(s).")


class ProductAdmin(ImportExportMixin, admin.ModelAdmin):
    resource_classes = [ProductResource]
    list_display = ('product_name', 'price', 'tax_rate', 'stock', 'category', 'is_available', 'end_date', 'is_featured')
    list_editable = ('price', 'stock', 'is_available', 'is_featured')
    list_filter = ('category', 'is_available', 'is_featured')
    search_fields = ('product_name', 'slug')
    prepopulated_fields = {'slug': ('product_name',)}
    inlines = [VariationInline, ProductGalleryInline, ProductDownloadInline]
    readonly_fields = ('modified_date', 'main_image_preview')
    actions = [refresh_fragments]

    def main_image_preview(self, obj):
        if obj.images:
            return mark_safe(
                f'<img src="{obj.images.url}" width="100" height="100" '
                f'style="border: 1px solid #ddd; padding: 5px;" />'
            )
        return "No Main Image"
    main_image_preview.short_description = 'Main Image Preview'

    fieldsets = (
        (None, {
            'fields': (
                'product_name', 'slug', 'category', 'brand', 'price', 'tax_rate', 'description',
                'images', 'main_image_preview', 'stock', 'is_available', 'is_featured',
            )
        }),
        ('Availability', {
            'fields': ('end_date', 'modified_date'),
        }),
    )
    formfield_overrides = {
        models.DecimalField: {'widget': forms.NumberInput(attrs={'style': 'width: 120px;'})},
        models.IntegerField: {'widget': forms.NumberInput(attrs={'style': 'width: 90px;'})},
    }


class CategoryAdmin(admin.ModelAdmin):
    list_display = ('category_name', 'slug')
    prepopulated_fields = {'slug': ('category_name',)}


class VariationCategoryAdmin(admin.ModelAdmin):
    list_display = ('id', 'name')
    search_fields = ('name',)


class VariationAdmin(admin.ModelAdmin):
    list_display = ('product', 'category', 'name', 'price_modifier', 'is_active', 'created_date')
    list_editable = ('price_modifier', 'is_active')
    list_filter = ('product', 'category', 'is_active')
    search_fields = ('product__product_name', 'name')


class BrandAdmin(admin.ModelAdmin):
    list_display = ('name', 'website', 'created_date')
    fields = ('name', 'slug', 'logo', 'short_description', 'description', 'website')
    prepopulated_fields = {'slug': ('name',)}
    search_fields = ('name',)


# Register models
admin.site.register(Category, CategoryAdmin)
admin.site.register(Product, ProductAdmin)
admin.site.register(Brand, BrandAdmin)
admin.site.register(VariationCategory, VariationCategoryAdmin)
admin.site.register(Variation, VariationAdmin)
admin.site.register(ReviewRating)
admin.site.register(ProductGallery)
admin.site.register(ProductDownload)
