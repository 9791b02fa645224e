from rest_framework import generics, status
from rest_framework.permissions import IsAdminUser
from rest_framework.response import Response

from .models import PointsImport
from .serializers import PointsImportCreateSerializer, PointsImportSerializer
from .services import PointsImportService


class PointsImportListCreateView(generics.ListCreateAPIView):
    """
    Back-office points imports. Rows are sent already parsed from the spreadsheet.
    GET  /api/v1/admin/imports/
    POST /api/v1/admin/imports/  {"reference_period": "2024-05", "rows": [...]}
    """
    permission_classes = [IsAdminUser]
    queryset = PointsImport.objects.select_related('uploaded_by').defer('raw_rows')
    serializer_class = PointsImportSerializer

    def create(self, request, *args, **kwargs):
        serializer = PointsImportCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        points_import = PointsImportService.create_import(
            serializer.validated_data['reference_period'],
            serializer.validated_data['checksum'] or None,
            serializer.validated_data['rows'],
            uploaded_by=request.user,
        )
        points_import.refresh_from_db()
        return Response(PointsImportSerializer(points_import).data, status=status.HTTP_202_ACCEPTED)
