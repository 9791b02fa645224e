from django.urls import path
from rest_framework_simplejwt.views import (
    TokenObtainPairView,
    TokenRefreshView,
)

from apps.agencies.api_views import (
    AgencyActivationView,
    AgencyAdjustmentView,
    AgencyLedgerView,
    AgencyRegisterView,
    MyPointsView,
)
from apps.catalog.api_views import EligibleProductListView, HeroBannerListView, HeroBannerReorderView
from apps.imports.api_views import PointsImportListCreateView
from apps.orders.api_views import CartPreviewView, CheckoutView, MyOrderListView

urlpatterns = [
    # Auth
    path('auth/token/', TokenObtainPairView.as_view(), name='token_obtain_pair'),
    path('auth/token/refresh/', TokenRefreshView.as_view(), name='token_refresh'),

    # Agency
    path('agencies/register/', AgencyRegisterView.as_view(), name='api-agency-register'),
    path('me/points/', MyPointsView.as_view(), name='api-my-points'),

    # Catalog
    path('products/', EligibleProductListView.as_view(), name='api-products'),
    path('hero-banners/', HeroBannerListView.as_view(), name='api-hero-banners'),

    # Cart & orders
    path('cart/preview/', CartPreviewView.as_view(), name='api-cart-preview'),
    path('orders/', MyOrderListView.as_view(), name='api-orders'),
    path('orders/checkout/', CheckoutView.as_view(), name='api-checkout'),

    # Back-office
    path('admin/agencies/<int:agency_id>/ledger/', AgencyLedgerView.as_view(), name='api-admin-agency-ledger'),
    path('admin/agencies/<int:agency_id>/activation/', AgencyActivationView.as_view(), name='api-admin-agency-activation'),
    path('admin/agencies/<int:agency_id>/adjustments/', AgencyAdjustmentView.as_view(), name='api-admin-agency-adjustments'),
    path('admin/hero-banners/reorder/', HeroBannerReorderView.as_view(), name='api-admin-banner-reorder'),
    path('admin/imports/', PointsImportListCreateView.as_view(), name='api-admin-imports'),
]
