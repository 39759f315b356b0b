"""
DRF views for the payouts app.

Endpoints:
    POST /api/v1/payouts/orders/{order_id}/process/ - Pay out an order
    GET /api/v1/payouts/orders/{order_id}/preview/ - Dry-run a payout
    GET /api/v1/payouts/recipients/{recipient_id}/history/ - Payout history
    GET /api/v1/payouts/recipients/{recipient_id}/wallet/ - Wallet summary

Security:
    - All endpoints are restricted to staff users (IsAdminUser)
"""

from __future__ import annotations

import logging

from rest_framework import status
from rest_framework.permissions import IsAdminUser
from rest_framework.response import Response
from rest_framework.views import APIView

from drf_spectacular.utils import OpenApiParameter, extend_schema

from payouts.serializers import (
    HistoryQuerySerializer,
    PayoutResultSerializer,
    PayoutTransactionSerializer,
    WalletQuerySerializer,
    WalletSummarySerializer,
)
from payouts.services import PayoutHistoryService, PayoutOrchestrator

logger = logging.getLogger(__name__)


# Failure error codes mapped to HTTP status
ERROR_STATUS_CODES = {
    "ORDER_NOT_ELIGIBLE": status.HTTP_409_CONFLICT,
    "INVALID_ORDER_AMOUNTS": status.HTTP_422_UNPROCESSABLE_ENTITY,
    "INVALID_PAYMENT_SETTINGS": status.HTTP_422_UNPROCESSABLE_ENTITY,
    "PAYOUT_VALIDATION_ERROR": status.HTTP_422_UNPROCESSABLE_ENTITY,
    "CALCULATION_MISMATCH": status.HTTP_500_INTERNAL_SERVER_ERROR,
    "LEDGER_WRITE_FAILED": status.HTTP_500_INTERNAL_SERVER_ERROR,
    "SETTINGS_UNAVAILABLE": status.HTTP_503_SERVICE_UNAVAILABLE,
    "ORDER_STORE_UNAVAILABLE": status.HTTP_503_SERVICE_UNAVAILABLE,
}


def payout_response(result) -> Response:
    """Serialize a PayoutResult with the status code for its outcome."""
    if result.success:
        http_status = status.HTTP_200_OK
    else:
        http_status = ERROR_STATUS_CODES.get(
            result.error_code, status.HTTP_500_INTERNAL_SERVER_ERROR
        )
    return Response(PayoutResultSerializer(result).data, status=http_status)


class ProcessPayoutView(APIView):
    """
    Pay out a completed order.

    POST /api/v1/payouts/orders/{order_id}/process/

    Returns:
        200 with the calculation and transactions, or an error status
        from ERROR_STATUS_CODES with error details
    """

    permission_classes = [IsAdminUser]

    @extend_schema(
        operation_id="process_payout",
        summary="Process payout",
        description=(
            "Split a completed order's total among merchant, driver and house, "
            "write the ledger entries and credit wallets. An order is paid out "
            "at most once; repeat calls return 409."
        ),
        request=None,
        responses={
            200: PayoutResultSerializer,
            409: PayoutResultSerializer,
            422: PayoutResultSerializer,
            500: PayoutResultSerializer,
            503: PayoutResultSerializer,
        },
        tags=["Payouts"],
    )
    def post(self, request, order_id):
        logger.info(
            "Payout requested",
            extra={"order_id": str(order_id), "user_id": request.user.pk},
        )
        result = PayoutOrchestrator.process_payout(order_id)
        return payout_response(result)


class PreviewPayoutView(APIView):
    """
    Dry-run a payout without writing anything.

    GET /api/v1/payouts/orders/{order_id}/preview/
    """

    permission_classes = [IsAdminUser]

    @extend_schema(
        operation_id="preview_payout",
        summary="Preview payout",
        description="Calculate the payout split and transactions without applying them.",
        responses={
            200: PayoutResultSerializer,
            409: PayoutResultSerializer,
            422: PayoutResultSerializer,
            500: PayoutResultSerializer,
            503: PayoutResultSerializer,
        },
        tags=["Payouts"],
    )
    def get(self, request, order_id):
        result = PayoutOrchestrator.test_payout_calculation(order_id)
        return payout_response(result)


class PayoutHistoryView(APIView):
    """
    Payout transactions for a recipient, newest first.

    GET /api/v1/payouts/recipients/{recipient_id}/history/?limit=100
    """

    permission_classes = [IsAdminUser]

    @extend_schema(
        operation_id="payout_history",
        summary="Payout history",
        parameters=[
            OpenApiParameter(
                name="limit",
                type=int,
                location=OpenApiParameter.QUERY,
                description="Maximum number of transactions (1-500)",
            ),
        ],
        responses={200: PayoutTransactionSerializer(many=True)},
        tags=["Payouts"],
    )
    def get(self, request, recipient_id):
        query = HistoryQuerySerializer(data=request.query_params)
        query.is_valid(raise_exception=True)

        transactions = PayoutHistoryService.get_payout_history(
            recipient_id,
            limit=query.validated_data["limit"],
        )
        serializer = PayoutTransactionSerializer(transactions, many=True)
        return Response(serializer.data)


class WalletSummaryView(APIView):
    """
    Wallet balance and earnings for a recipient.

    GET /api/v1/payouts/recipients/{recipient_id}/wallet/?period=month

    Returns:
        200 with the summary, or 404 if the recipient has no wallet
    """

    permission_classes = [IsAdminUser]

    @extend_schema(
        operation_id="wallet_summary",
        summary="Wallet summary",
        parameters=[
            OpenApiParameter(
                name="period",
                type=str,
                location=OpenApiParameter.QUERY,
                enum=["day", "week", "month", "year"],
                description="Earnings period (default: month)",
            ),
        ],
        responses={200: WalletSummarySerializer},
        tags=["Payouts"],
    )
    def get(self, request, recipient_id):
        query = WalletQuerySerializer(data=request.query_params)
        query.is_valid(raise_exception=True)

        result = PayoutHistoryService.get_wallet_summary(
            recipient_id,
            period=query.validated_data["period"],
        )
        if not result.success:
            return Response(
                {"detail": result.error, "error_code": result.error_code},
                status=status.HTTP_404_NOT_FOUND,
            )

        return Response(WalletSummarySerializer(result.data).data)
