# public/views/wishlist.py
"""
WISHLIST HAND-OFF

POST /api/wishlist/send/
Body: {"items": [...], "storeName": "...", "whatsappNumber": "..."}

Builds the wa.me link the storefront opens; nothing is sent from here.
"""

from __future__ import annotations

from drf_spectacular.utils import OpenApiResponse, extend_schema
from rest_framework import status
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from rest_framework.views import APIView

from public.throttles import PublicWriteThrottle
from public.serializers import WishlistSendResponseSerializer, WishlistSendSerializer
from public.services.whatsapp import (
    clean_number,
    format_price,
    wishlist_message,
    wishlist_whatsapp_url,
)


class WishlistSendView(APIView):
    permission_classes = [AllowAny]
    authentication_classes = []
    throttle_classes = [PublicWriteThrottle]

    @extend_schema(
        tags=["Public"],
        request=WishlistSendSerializer,
        responses={
            200: WishlistSendResponseSerializer,
            400: OpenApiResponse(description="Empty wishlist / missing WhatsApp number"),
        },
    )
    def post(self, request, *args, **kwargs):
        serializer = WishlistSendSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        items = data.get("items") or []
        if not items:
            return Response({"error": "No items in wishlist"}, status=status.HTTP_400_BAD_REQUEST)

        number = data.get("whatsappNumber") or ""
        if not clean_number(number):
            return Response(
                {"error": "WhatsApp number is required"}, status=status.HTTP_400_BAD_REQUEST
            )

        store_name = data.get("storeName") or ""

        return Response(
            {
                "whatsapp_url": wishlist_whatsapp_url(number, items, store_name),
                "message_preview": wishlist_message(items, store_name),
                "items_summary": [
                    {"name": item["name"], "price": format_price(item.get("price"), item.get("price_type"))}
                    for item in items
                ],
            },
            status=status.HTTP_200_OK,
        )
