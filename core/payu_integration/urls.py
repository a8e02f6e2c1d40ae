from django.urls import path
from .views import (
    PayuIpnView,
    PayuTransactionListView,
    PayuTransactionDetailView,
)

app_name = "payu_integration"

urlpatterns = [
    path("payu/ipn/", PayuIpnView.as_view(), name="payu-ipn"),
    path("payu/transactions/", PayuTransactionListView.as_view(), name="payu-transaction-list"),
    path("payu/transactions/<int:pk>/", PayuTransactionDetailView.as_view(), name="payu-transaction-detail"),
]
