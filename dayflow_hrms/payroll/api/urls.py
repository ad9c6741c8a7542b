from django.urls import path
from rest_framework.routers import DefaultRouter
from dayflow_hrms.payroll.api.views import PayrollPreviewAPIView, PayrollRecordViewSet

router = DefaultRouter()
router.register("records", PayrollRecordViewSet, basename="payroll-record")

urlpatterns = [
    *router.urls,
    path("preview/", PayrollPreviewAPIView.as_view(), name="payroll-preview"),
]
