from django.shortcuts import render
from catalog.models import Product


def home(request):
    products = Product.objects.filter(is_available=True, is_featured=True).order_by('-created_date')

    context = {
        'products': products,
    }
    return render(request, 'home.html', context)
