from django.urls import path
from .views import OrderDetailView, OrderListView, OrderStatusView

urlpatterns = [
    path("", OrderListView.as_view(), name="api-orders-list"),
    path("<int:order_id>/", OrderDetailView.as_view(), name="api-orders-detail"),
    path("<int:order_id>/status/", OrderStatusView.as_view(), name="api-orders-status"),
]
