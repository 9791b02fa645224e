from rest_framework import views
from rest_framework.permissions import AllowAny, IsAdminUser
from rest_framework.response import Response

from apps.core.api.views import AgencyContextMixin

from .models import Product
from .serializers import HeroBannerReorderItemSerializer, HeroBannerSerializer, ProductSerializer
from .services import EligibilityService, HeroBannerService


class EligibleProductListView(AgencyContextMixin, views.APIView):
    """
    Catalog filtered for the requesting agency: only products it can still add.
    GET /api/v1/products/?category=<id>
    """
    permission_classes = [AllowAny]

    def get(self, request, *args, **kwargs):
        queryset = Product.objects.filter(active=True)
        category = request.query_params.get('category')
        if category and category.isdigit():
            queryset = queryset.filter(category_id=category)

        pairs = EligibilityService.eligible_allocations(self.get_agency(), queryset)
        serializer = ProductSerializer(
            [product for product, _ in pairs],
            many=True,
            context={'request': request, 'allocations': {p.pk: a for p, a in pairs}},
        )
        return Response(serializer.data)


class HeroBannerListView(AgencyContextMixin, views.APIView):
    """
    GET /api/v1/hero-banners/
    """
    permission_classes = [AllowAny]

    def get(self, request, *args, **kwargs):
        return Response(HeroBannerService.active_for_display(self.get_agency()))


class HeroBannerReorderView(views.APIView):
    """
    POST /api/v1/admin/hero-banners/reorder/  [{"id": 1, "display_order": 2}, ...]
    """
    permission_classes = [IsAdminUser]

    def post(self, request, *args, **kwargs):
        serializer = HeroBannerReorderItemSerializer(data=request.data, many=True)
        serializer.is_valid(raise_exception=True)
        banners = HeroBannerService.reorder(serializer.validated_data)
        return Response(HeroBannerSerializer(sorted(banners, key=lambda b: b.display_order), many=True).data)
