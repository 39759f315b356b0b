"""
URL configuration for the payouts app.

All routes are prefixed with /api/v1/payouts/ when included in the main URLconf.

Usage:
    # In config/urls.py
    api_v1_patterns = [
        path("payouts/", include("payouts.urls")),
    ]
"""

from django.urls import path

from payouts import views

app_name = "payouts"

urlpatterns = [
    path(
        "orders/<uuid:order_id>/process/",
        views.ProcessPayoutView.as_view(),
        name="process",
    ),
    path(
        "orders/<uuid:order_id>/preview/",
        views.PreviewPayoutView.as_view(),
        name="preview",
    ),
    path(
        "recipients/<uuid:recipient_id>/history/",
        views.PayoutHistoryView.as_view(),
        name="history",
    ),
    path(
        "recipients/<uuid:recipient_id>/wallet/",
        views.WalletSummaryView.as_view(),
        name="wallet",
    ),
]
