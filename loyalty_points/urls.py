"""
Loyalty Points URL Configuration
"""
from django.conf import settings
from django.contrib import admin
from django.urls import include, path

urlpatterns = [
    path(settings.ADMIN_URL, admin.site.urls),

    # REST API
    path('api/v1/', include('loyalty_points.api_urls')),
]
