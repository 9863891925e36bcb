from django.urls import path

from modules.core.views import health_check, storefront

urlpatterns = [
    path("", storefront, name="storefront"),
    path("health", health_check, name="health_check"),
]
