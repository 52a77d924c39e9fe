from django.conf import settings
from django.db import models
from catalog.models import Product, Variation


# --------------------------
# Cart
# --------------------------
class Cart(models.Model):
    cart_id = models.CharField(max_length=250, blank=True)
    date_added = models.DateField(auto_now_add=True)

    def __str__(self):
        return self.cart_id


# --------------------------
# Cart Item
# --------------------------
class CartItem(models.Model):
    user = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, null=True)
    product = models.ForeignKey(Product, on_delete=models.CASCADE)
    variations = models.ManyToManyField(Variation, blank=True)
    cart = models.ForeignKey(Cart, on_delete=models.CASCADE, null=True)
    quantity = models.IntegerField()
    is_active = models.BooleanField(default=True)

    def unit_price(self):
        """Base price plus the modifiers of all selected variations"""
        return self.product.price + sum(v.price_modifier for v in self.variations.all())

    def sub_total(self):
        return self.unit_price() * self.quantity

    def __str__(self):
        return f"{self.product.product_name} (x{self.quantity})"
