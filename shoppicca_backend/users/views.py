# users/views.py
"""
USER AUTH VIEWS

Login establishes BOTH:
- a Django session (admin dashboard pages; refreshed by the tenant middleware
  on every platform request)
- a SimpleJWT pair (API clients)
"""

from __future__ import annotations

import logging

from django.contrib.auth import authenticate, login, logout
from drf_spectacular.utils import OpenApiResponse, extend_schema
from rest_framework import generics, status
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response
from rest_framework.throttling import AnonRateThrottle
from rest_framework.views import APIView
from rest_framework_simplejwt.tokens import RefreshToken

from .serializers import LoginSerializer, RegisterSerializer, UserSerializer

logger = logging.getLogger(__name__)


class AuthAnonThrottle(AnonRateThrottle):
    """
    Anonymous register/login throttling.
    Uses REST_FRAMEWORK['DEFAULT_THROTTLE_RATES']['public_write'].
    """
    scope = "public_write"


def _token_payload(user) -> dict:
    refresh = RefreshToken.for_user(user)
    return {
        "access": str(refresh.access_token),
        "refresh": str(refresh),
        "user": UserSerializer(user).data,
    }


# ---------------- REGISTER ----------------
class RegisterView(generics.GenericAPIView):
    serializer_class = RegisterSerializer
    permission_classes = [AllowAny]
    authentication_classes = []
    throttle_classes = [AuthAnonThrottle]

    @extend_schema(
        request=RegisterSerializer,
        responses={201: UserSerializer, 400: OpenApiResponse(description="Validation error")},
        tags=["Auth"],
    )
    def post(self, request):
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        user = serializer.save()

        logger.info("Store owner registered", extra={"user_id": str(user.id)})

        return Response(
            {
                "message": "User registered successfully",
                "user": UserSerializer(user).data,
            },
            status=status.HTTP_201_CREATED,
        )


# ---------------- LOGIN (SESSION + JWT) ----------------
class LoginView(generics.GenericAPIView):
    serializer_class = LoginSerializer
    permission_classes = [AllowAny]
    authentication_classes = []
    throttle_classes = [AuthAnonThrottle]

    @extend_schema(
        request=LoginSerializer,
        responses={200: OpenApiResponse(description="Session + JWT pair"), 401: OpenApiResponse(description="Invalid credentials")},
        tags=["Auth"],
    )
    def post(self, request):
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        user = authenticate(
            request,
            email=serializer.validated_data["email"],
            password=serializer.validated_data["password"],
        )

        if not user:
            return Response(
                {"detail": "Invalid email or password"},
                status=status.HTTP_401_UNAUTHORIZED,
            )

        login(request, user)

        return Response(_token_payload(user), status=status.HTTP_200_OK)


# ---------------- LOGOUT ----------------
class LogoutView(APIView):
    permission_classes = [AllowAny]

    @extend_schema(responses={204: None}, tags=["Auth"])
    def post(self, request):
        logout(request)
        return Response(status=status.HTTP_204_NO_CONTENT)


# ---------------- CURRENT USER ----------------
class MeView(APIView):
    permission_classes = [IsAuthenticated]

    @extend_schema(responses={200: UserSerializer}, tags=["Auth"])
    def get(self, request):
        return Response(
            {
                "authenticated": True,
                "user": UserSerializer(request.user).data,
            },
            status=status.HTTP_200_OK,
        )
