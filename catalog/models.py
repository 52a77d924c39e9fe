from decimal import Decimal

from django.conf import settings
from django.db import models
from django.db.models import Avg, Count
from django.urls import reverse


# -------------------------
# Category
# -------------------------
class Category(models.Model):
    category_name = models.CharField(max_length=50, unique=True)
    slug = models.SlugField(max_length=100, unique=True)
    description = models.TextField(max_length=255, blank=True)

    class Meta:
        verbose_name = 'category'
        verbose_name_plural = 'categories'

    def get_url(self):
        return reverse('catalog:products_by_category', args=[self.slug])

    def __str__(self):
        return self.category_name


# -------------------------
# Brand
# -------------------------
class Brand(models.Model):
    name = models.CharField(max_length=200, unique=True)
    slug = models.SlugField(max_length=200, unique=True)
    logo = models.ImageField(upload_to='photos/brands', blank=True, null=True)
    short_description = models.CharField(max_length=255, blank=True)
    description = models.TextField(blank=True)
    website = models.URLField(blank=True, help_text="Link to the brand's official website")
    created_date = models.DateTimeField(auto_now_add=True)
    modified_date = models.DateTimeField(auto_now=True)

    def get_url(self):
        return reverse('catalog:brand_detail', args=[self.slug])

    def __str__(self):
        return self.name


# -------------------------
# Product
# -------------------------
class Product(models.Model):
    product_name = models.CharField(max_length=200, unique=True)
    slug = models.SlugField(max_length=200, unique=True)
    description = models.TextField(max_length=1000, blank=True)
    price = models.DecimalField(max_digits=10, decimal_places=2)
    tax_rate = models.DecimalField(max_digits=5, decimal_places=2, default=Decimal('2.00'),
                                   help_text="Tax rate in percent applied to this product.")
    images = models.ImageField(upload_to='photos/products', blank=True)
    stock = models.IntegerField(default=0)
    is_available = models.BooleanField(default=True)
    category = models.ForeignKey(Category, on_delete=models.CASCADE)
    brand = models.ForeignKey(Brand, on_delete=models.SET_NULL, null=True, blank=True)
    created_date = models.DateTimeField(auto_now_add=True)
    modified_date = models.DateTimeField(auto_now=True)
    end_date = models.DateTimeField(blank=True, null=True,
                                    help_text="Product is no longer shown after this date.")
    is_featured = models.BooleanField(default=False, help_text="Check to feature this product on the home page.")

    def get_url(self):
        return reverse('catalog:product_detail', args=[self.category.slug, self.slug])

    def __str__(self):
        return self.product_name

    def averageReview(self):
        reviews = ReviewRating.objects.filter(product=self, status=True).aggregate(average=Avg('rating'))
        avg = 0
        if reviews['average'] is not None:
            avg = float(reviews['average'])
        return avg

    def countReview(self):
        reviews = ReviewRating.objects.filter(product=self, status=True).aggregate(count=Count('id'))
        count = 0
        if reviews['count'] is not None:
            count = int(reviews['count'])
        return count


# -------------------------
# Downloads
# -------------------------
class ProductDownload(models.Model):
    product = models.ForeignKey(Product, on_delete=models.CASCADE, related_name='downloads')
    title = models.CharField(max_length=100, blank=True, default="Download", help_text="Title for the file (e.g., 'Product Catalog')")
    file = models.FileField(upload_to='downloads/', help_text="Upload PDF or catalog file")

    def __str__(self):
        return f"{self.title} for {self.product.product_name}"


# -------------------------
# Variations
# -------------------------
class VariationCategory(models.Model):
    name = models.CharField(max_length=100, unique=True)

    def __str__(self):
        return self.name


class Variation(models.Model):
    product = models.ForeignKey(Product, on_delete=models.CASCADE)
    category = models.ForeignKey(VariationCategory, on_delete=models.SET_NULL, null=True, blank=True)
    name = models.CharField(max_length=100, null=True, blank=True)
    price_modifier = models.DecimalField(max_digits=10, decimal_places=2, default=0.00)
    is_active = models.BooleanField(default=True)
    created_date = models.DateTimeField(auto_now_add=True)

    def __str__(self):
        return f"{self.category} : {self.name}"


# -------------------------
# Reviews
# -------------------------
class ReviewRating(models.Model):
    product = models.ForeignKey(Product, on_delete=models.CASCADE)
    user = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE)
    subject = models.CharField(max_length=100, blank=True)
    review = models.TextField(max_length=500, blank=True)
    rating = models.FloatField()
    status = models.BooleanField(default=False)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    def __str__(self):
        return self.subject


# -------------------------
# Galleries
# -------------------------
class ProductGallery(models.Model):
    product = models.ForeignKey(Product, default=None, on_delete=models.CASCADE)
    image = models.ImageField(upload_to='store/products/', max_length=255)
    order = models.PositiveIntegerField(default=0, blank=True, null=False)

    def __str__(self):
        return self.product.product_name

    class Meta:
        verbose_name = 'product gallery'
        verbose_name_plural = 'product gallery'
        ordering = ['order']

    def save(self, *args, **kwargs):
        if not self.order:
            last_order = ProductGallery.objects.filter(product=self.product).aggregate(models.Max('order'))['order__max'] or 0
            self.order = last_order + 1
        super().save(*args, **kwargs)
