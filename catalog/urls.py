from django.urls import path
from . import views

app_name = 'catalog'

urlpatterns = [
    path('', views.store, name='store'),
    path('search/', views.search, name='search'),
    path('seen/clear/', views.clear_seen, name='clear_seen'),
    path('brand/<slug:brand_slug>/', views.brand_detail, name='brand_detail'),
    path('category/<slug:category_slug>/', views.store, name='products_by_category'),
    path('category/<slug:category_slug>/<slug:product_slug>/', views.product_detail, name='product_detail'),
]
