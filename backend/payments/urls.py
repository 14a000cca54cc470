from django.urls import path, include
from rest_framework import routers

from .views import PaymentViewSet

app_name = "payments"

router = routers.DefaultRouter()
router.register(r"payments", PaymentViewSet, basename="payment")

urlpatterns = [
    path("", include(router.urls)),
]
