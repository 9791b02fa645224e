from rest_framework import generics, status, views
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from apps.core.api.views import AgencyContextMixin, HasAgency

from .serializers import CartSerializer, OrderSerializer
from .services import CartService, OrderService


class CartPreviewView(AgencyContextMixin, views.APIView):
    """
    Read-only allocation preview for a cart. Checkout re-validates everything.
    POST /api/v1/cart/preview/  {"items": [{"product_id": 1, "quantity": 2}]}
    """
    permission_classes = [IsAuthenticated]

    def post(self, request, *args, **kwargs):
        serializer = CartSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        preview = CartService.preview(self.get_agency(), serializer.validated_data['items'])
        for item in preview['items']:
            item['average_unit_price'] = str(item['average_unit_price'])
        return Response(preview)


class MyOrderListView(AgencyContextMixin, generics.ListAPIView):
    """
    GET /api/v1/orders/
    """
    permission_classes = [IsAuthenticated, HasAgency]
    serializer_class = OrderSerializer

    def get_queryset(self):
        return OrderService.orders_for(self.get_agency())


class CheckoutView(AgencyContextMixin, views.APIView):
    """
    Redeems the cart: allocation, balance check, order and ledger debit in one transaction.
    POST /api/v1/orders/checkout/  {"items": [{"product_id": 1, "quantity": 2, "expected_points": 300}]}
    """
    permission_classes = [IsAuthenticated, HasAgency]

    def post(self, request, *args, **kwargs):
        serializer = CartSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        order = OrderService.checkout(self.get_agency(), serializer.validated_data['items'])
        return Response(OrderSerializer(order).data, status=status.HTTP_201_CREATED)
