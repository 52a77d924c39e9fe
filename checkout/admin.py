from django.contrib import admin
from django.utils.html import format_html
from .models import Order, OrderProduct


class OrderProductInline(admin.TabularInline):
    model = OrderProduct
    readonly_fields = ('user', 'product', 'quantity', 'product_price', 'tax_rate')
    extra = 0


class OrderAdmin(admin.ModelAdmin):
    list_display = [
        "order_number", "full_name", "email", "formatted_order_total",
        "shipping_method", "payment_method", "status", "has_comment_icon", "created_at",
    ]
    list_filter = ["status", "shipping_method", "payment_method"]
    search_fields = ["order_number", "first_name", "last_name", "phone", "email"]
    list_per_page = 20
    inlines = [OrderProductInline]

    fieldsets = (
        (None, {
            "fields": (
                "user", "order_number", "status", "order_total", "tax",
                "shipping_method", "shipping_cost", "payment_method", "ip",
            )
        }),
        ("Customer Info", {
            "fields": ("first_name", "last_name", "phone", "email")
        }),
        ("Billing / Address", {
            "fields": (
                "address_line_1", "address_line_2", "city", "state", "zip_code", "country",
                "order_note"
            )
        }),
        ("Shipping", {
            "fields": (
                "shipping_first_name", "shipping_last_name", "shipping_email", "shipping_phone",
                "shipping_address_line_1", "shipping_address_line_2",
                "shipping_city", "shipping_state", "shipping_zip_code", "shipping_country",
            )
        }),
        ("Timestamps", {
            "fields": ("created_at", "updated_at")
        }),
    )

    readonly_fields = ("created_at", "updated_at")

    def formatted_order_total(self, obj):
        return f"{obj.order_total:.2f}"
    formatted_order_total.short_description = "Total"

    def has_comment_icon(self, obj):
        if obj.order_note:
            return format_html('<span title="{}">&#9998;</span>', obj.order_note)
        return ''
    has_comment_icon.short_description = "Comment"


admin.site.register(Order, OrderAdmin)
