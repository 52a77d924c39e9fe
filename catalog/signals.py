from django.db.models.signals import post_delete, post_save
from django.dispatch import receiver

from .cache import invalidate_tags
from .models import Product, ProductGallery, Variation


@receiver(post_save, sender=Product)
@receiver(post_delete, sender=Product)
def invalidate_product(sender, instance, **kwargs):
    invalidate_tags(f"product-{instance.pk}")


@receiver(post_save, sender=ProductGallery)
@receiver(post_delete, sender=ProductGallery)
@receiver(post_save, sender=Variation)
@receiver(post_delete, sender=Variation)
def invalidate_product_parts(sender, instance, **kwargs):
    invalidate_tags(f"product-{instance.product_id}")
