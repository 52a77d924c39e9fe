from django.core.paginator import Paginator
from django.db.models import Q
from django.http import Http404
from django.shortcuts import render, redirect, get_object_or_404
from django.views.decorators.http import require_POST

from carts.utils import get_cart_items
from .models import Brand, Category, Product
from .seen import clear_seen as clear_seen_list, record_view, render_seen_list
from .services import catalog_domains, get_product, get_products


def store(request, category_slug=None):
    products = Product.objects.filter(is_available=True).order_by('id')
    category = None
    if category_slug is not None:
        category = get_object_or_404(Category, slug=category_slug)
        products = products.filter(category=category)

    paginator = Paginator(products, 3)
    page = request.GET.get('page')
    paged_products = paginator.get_page(page)

    context = {
        'category': category,
        'products': paged_products,
        'product_count': products.count(),
    }
    return render(request, 'catalog/store.html', context)


def product_detail(request, category_slug, product_slug):
    single_product = get_object_or_404(Product, category__slug=category_slug, slug=product_slug)
    try:
        single_product = get_product(single_product.pk, catalog_domains())
    except Product.DoesNotExist:
        raise Http404("Product is not available.")

    record_view(request, single_product.pk)
    in_cart = any(item.product_id == single_product.pk for item in get_cart_items(request))

    # Group variations by category
    variation_data = {}
    for v in single_product.variation_set.all():
        if not v.is_active:
            continue
        category_name = v.category.name if v.category else "Other"
        variation_data.setdefault(category_name, []).append({
            'id': v.id,
            'value': v.name,
            'price_modifier': float(v.price_modifier),
        })

    context = {
        'single_product': single_product,
        'in_cart': in_cart,
        'variation_data': variation_data,
        'seen_body': render_seen_list(request, exclude_id=single_product.pk),
    }
    return render(request, 'catalog/product_detail.html', context)


def brand_detail(request, brand_slug):
    brand = get_object_or_404(Brand, slug=brand_slug)
    product_ids = Product.objects.filter(brand=brand, is_available=True).order_by('id').values_list('pk', flat=True)
    paginator = Paginator(product_ids, 3)
    page = request.GET.get('page')
    paged_ids = paginator.get_page(page)

    context = {
        'brand': brand,
        'page': paged_ids,
        'products': get_products(paged_ids, catalog_domains()),
    }
    return render(request, 'catalog/brand_detail.html', context)


def search(request):
    keyword = request.GET.get('keyword', '').strip()
    products = Product.objects.none()
    if keyword:
        products = Product.objects.order_by('-created_date').filter(
            Q(description__icontains=keyword) | Q(product_name__icontains=keyword),
            is_available=True,
        )
    context = {
        'products': products,
        'product_count': products.count(),
        'keyword': keyword,
    }
    return render(request, 'catalog/store.html', context)


@require_POST
def clear_seen(request):
    clear_seen_list(request.session)
    return redirect(request.META.get('HTTP_REFERER') or 'catalog:store')
