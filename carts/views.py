from django.shortcuts import render, redirect, get_object_or_404
from django.http import JsonResponse
from django.contrib import messages
from django.views.decorators.http import require_POST
from catalog.models import Product, Variation
from .basket import Basket
from .models import CartItem, Cart
from .utils import _cart_id


def _is_ajax(request):
    return request.headers.get("x-requested-with") == "XMLHttpRequest"


def _totals(request):
    basket = Basket(request)
    return {
        "total": str(basket.subtotal()),
        "tax": str(basket.tax()),
        "grand_total": str(basket.subtotal() + basket.tax()),
        "total_cart_items": basket.quantity(),
    }


# --------------------------
# Cart operations
# --------------------------
@require_POST
def add_cart(request, product_id):
    current_user = request.user
    product = get_object_or_404(Product, id=product_id, is_available=True)

    try:
        quantity = int(request.POST.get("quantity", 1))
    except ValueError:
        quantity = 0
    if quantity < 1 or quantity > (product.stock or 0):
        msg = "Invalid quantity. Must be between 1 and available stock."
        if _is_ajax(request):
            return JsonResponse({"status": "error", "message": msg}, status=400)
        messages.error(request, msg)
        return redirect(product.get_url())

    # ---- variation handling ----
    required_categories = set(
        Variation.objects.filter(product=product, is_active=True, category__isnull=False)
        .values_list("category__name", flat=True)
    )
    product_variations = []
    for key, value in request.POST.items():
        if key in required_categories:
            variation = Variation.objects.filter(
                product=product,
                category__name__iexact=key.strip(),
                name__iexact=(value or "").strip(),
                is_active=True,
            ).order_by("id").first()
            if variation:
                product_variations.append(variation)

    if len(product_variations) < len(required_categories):
        msg = "Please select all required variations for this product."
        if _is_ajax(request):
            return JsonResponse({"status": "error", "message": msg}, status=400)
        messages.error(request, msg)
        return redirect(product.get_url())

    # ---- save cart item ----
    if current_user.is_authenticated:
        cart = None
        cart_item_qs = CartItem.objects.filter(product=product, user=current_user)
    else:
        cart, _ = Cart.objects.get_or_create(cart_id=_cart_id(request))
        cart_item_qs = CartItem.objects.filter(product=product, cart=cart)

    cart_item = None
    for item in cart_item_qs:
        if set(item.variations.all()) == set(product_variations):
            cart_item = item
            break

    if cart_item is not None:
        cart_item.quantity += quantity
        cart_item.save()
    else:
        cart_item = CartItem.objects.create(
            product=product,
            quantity=quantity,
            user=current_user if current_user.is_authenticated else None,
            cart=cart,
        )
        if product_variations:
            cart_item.variations.set(product_variations)

    if _is_ajax(request):
        data = {"status": "success", "quantity": cart_item.quantity, "cart_item_id": cart_item.id}
        data.update(_totals(request))
        return JsonResponse(data)
    return redirect("cart")


def _get_cart_item(request, product_id, cart_item_id):
    product = get_object_or_404(Product, id=product_id)
    if request.user.is_authenticated:
        return get_object_or_404(CartItem, product=product, user=request.user, id=cart_item_id)
    cart = get_object_or_404(Cart, cart_id=_cart_id(request))
    return get_object_or_404(CartItem, product=product, cart=cart, id=cart_item_id)


@require_POST
def remove_cart(request, product_id, cart_item_id):
    cart_item = _get_cart_item(request, product_id, cart_item_id)
    if cart_item.quantity > 1:
        cart_item.quantity -= 1
        cart_item.save()
    else:
        cart_item.delete()
        cart_item = None

    if _is_ajax(request):
        data = {
            "quantity": cart_item.quantity if cart_item else 0,
            "item_subtotal": str(cart_item.sub_total()) if cart_item else "0.00",
            "cart_item_id": cart_item_id,
        }
        data.update(_totals(request))
        return JsonResponse(data)
    return redirect("cart")


@require_POST
def remove_cart_item(request, product_id, cart_item_id):
    _get_cart_item(request, product_id, cart_item_id).delete()
    return redirect("cart")


# --------------------------
# Views
# --------------------------
def cart(request):
    basket = Basket(request)
    context = {
        "cart_items": basket.items,
        "quantity": basket.quantity(),
        "total": basket.subtotal(),
        "tax": basket.tax(),
        "grand_total": basket.subtotal() + basket.tax(),
    }
    return render(request, "carts/cart.html", context)
