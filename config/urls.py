"""
URL configuration for the rental listings API.

The `urlpatterns` list routes URLs to views.
"""

from django.contrib import admin
from django.urls import include, path

urlpatterns = [
    # Admin Interface
    path('admin/', admin.site.urls),

    path('api/v1/listing-application/', include('listings.urls')),
]
