# public/views/contact.py
"""
CONTACT FORM RELAY

POST /api/send-sms/   {"smsMessage": "..."}

Forwards the landing-page contact message to the platform's phone
through Arkesel.
"""

from __future__ import annotations

import logging

from drf_spectacular.utils import OpenApiResponse, extend_schema
from rest_framework import status
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from rest_framework.views import APIView

from public.throttles import PublicWriteThrottle
from public.serializers import ContactSmsSerializer
from public.services.arkesel import SmsConfigError, SmsError, send_sms

logger = logging.getLogger(__name__)

SUCCESS_MESSAGE = "Message sent successfully! We will get back to you soon."


class ContactSmsView(APIView):
    permission_classes = [AllowAny]
    authentication_classes = []
    throttle_classes = [PublicWriteThrottle]

    @extend_schema(
        tags=["Public"],
        request=ContactSmsSerializer,
        responses={
            200: OpenApiResponse(description="{success, message, provider_response}"),
            400: OpenApiResponse(description="Missing message"),
            500: OpenApiResponse(description="SMS not configured / gateway failure"),
        },
    )
    def post(self, request, *args, **kwargs):
        serializer = ContactSmsSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        message = serializer.validated_data["smsMessage"]

        try:
            result = send_sms(message)
        except SmsConfigError as exc:
            logger.error("SMS relay not configured", extra={"error": str(exc)})
            return Response(
                {"error": "API key not configured"},
                status=status.HTTP_500_INTERNAL_SERVER_ERROR,
            )
        except SmsError as exc:
            logger.error("SMS relay failed", extra={"error": str(exc)})
            return Response(
                {"error": "Internal server error", "details": str(exc)},
                status=status.HTTP_500_INTERNAL_SERVER_ERROR,
            )

        if result.success:
            return Response(
                {
                    "success": True,
                    "message": SUCCESS_MESSAGE,
                    "provider_response": {
                        "status": "success",
                        "message_ids": result.message_ids,
                        "sms_balance": result.sms_balance,
                        "main_balance": result.main_balance,
                    },
                },
                status=status.HTTP_200_OK,
            )

        return Response(
            {
                "error": "Failed to send message",
                "details": result.details,
                "provider_response": result.raw,
            },
            status=result.status_code,
        )
