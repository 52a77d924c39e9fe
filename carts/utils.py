from .models import Cart, CartItem
import uuid


def _cart_id(request):
    cart_id = request.session.get('cart_id')
    if not cart_id:
        cart_id = str(uuid.uuid4())
        request.session['cart_id'] = cart_id
        request.session.modified = True
    return cart_id


def get_cart_items(request):
    """Active cart items of the logged in user or of the session cart."""
    user = getattr(request, 'user', None)
    if user is not None and user.is_authenticated:
        return CartItem.objects.filter(user=user, is_active=True).select_related('product')
    try:
        cart = Cart.objects.get(cart_id=_cart_id(request))
    except Cart.DoesNotExist:
        return CartItem.objects.none()
    return CartItem.objects.filter(cart=cart, is_active=True).select_related('product')
