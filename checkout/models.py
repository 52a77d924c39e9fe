from decimal import Decimal

from django.conf import settings
from django.db import models
from catalog.models import Product, Variation


class Order(models.Model):
    STATUS = (
        ("NEW", "New"),
        ("PROCESSING", "Processing"),
        ("SHIPPED", "Shipped"),
        ("CANCELLED", "Cancelled"),
    )

    user = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.SET_NULL, null=True, blank=True)
    order_number = models.CharField(max_length=20, blank=True)

    # Contact + billing
    first_name = models.CharField(max_length=50)
    last_name = models.CharField(max_length=50)
    phone = models.CharField(max_length=15)
    email = models.EmailField(max_length=50)
    address_line_1 = models.CharField(max_length=50)
    address_line_2 = models.CharField(max_length=50, blank=True)
    country = models.CharField(max_length=2, default='US')  # 2-letter code
    state = models.CharField(max_length=2)
    city = models.CharField(max_length=50)
    zip_code = models.CharField(max_length=10)
    order_note = models.CharField(max_length=255, blank=True)

    # shipping fields
    shipping_first_name = models.CharField(max_length=50, blank=True)
    shipping_last_name = models.CharField(max_length=50, blank=True)
    shipping_phone = models.CharField(max_length=15, blank=True)
    shipping_email = models.EmailField(max_length=50, blank=True)
    shipping_address_line_1 = models.CharField(max_length=50, blank=True)
    shipping_address_line_2 = models.CharField(max_length=50, blank=True)
    shipping_country = models.CharField(max_length=2, blank=True, default='US')
    shipping_state = models.CharField(max_length=2, blank=True)
    shipping_city = models.CharField(max_length=50, blank=True)
    shipping_zip_code = models.CharField(max_length=20, blank=True)

    # Delivery, payment and totals
    shipping_method = models.CharField(max_length=50, blank=True,
                                       help_text="Delivery option chosen in the checkout")
    shipping_cost = models.DecimalField(max_digits=10, decimal_places=2, default=0)
    payment_method = models.CharField(max_length=50, blank=True)
    tax = models.DecimalField(max_digits=10, decimal_places=2)
    order_total = models.DecimalField(max_digits=10, decimal_places=2)
    status = models.CharField(max_length=15, choices=STATUS, default="NEW")
    ip = models.CharField(blank=True, max_length=45)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    @property
    def subtotal(self) -> Decimal:
        """
        Return just the product subtotal (no tax, no shipping).
        """
        return self.order_total - self.tax - self.shipping_cost

    def full_name(self):
        return f'{self.first_name} {self.last_name}'

    def full_address(self):
        return f'{self.address_line_1} {self.address_line_2}'

    def __str__(self):
        return f"Order {self.order_number} - {self.first_name} {self.last_name}"


class OrderProduct(models.Model):
    order = models.ForeignKey(Order, on_delete=models.CASCADE)
    user = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.SET_NULL, null=True, blank=True)
    product = models.ForeignKey(Product, on_delete=models.PROTECT)
    variations = models.ManyToManyField(Variation, blank=True)
    quantity = models.IntegerField()
    product_price = models.DecimalField(max_digits=10, decimal_places=2)
    tax_rate = models.DecimalField(max_digits=5, decimal_places=2, default=Decimal('0.00'))
    created_at = models.DateTimeField(auto_now_add=True)

    def sub_total(self):
        return self.product_price * self.quantity

    def __str__(self):
        return self.product.product_name
