# products/views/upload.py

"""
IMAGE UPLOADS

POST /api/admin/uploads/  (multipart: file, bucket)

Files land in the default storage backend under
<store_id>/<bucket>/<timestamp>-<random>.<ext> and the public URL is
returned for use as image_url / category_url / banner_url.
"""

import logging
import os
import secrets

from django.core.files.storage import default_storage
from django.utils import timezone
from drf_spectacular.utils import OpenApiResponse, extend_schema
from rest_framework import serializers, status
from rest_framework.parsers import FormParser, MultiPartParser
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from store.permissions import HasStore, get_owned_store

logger = logging.getLogger(__name__)

UPLOAD_BUCKETS = ("products", "categories", "banners")
MAX_UPLOAD_BYTES = 5 * 1024 * 1024


class ImageUploadSerializer(serializers.Serializer):
    file = serializers.ImageField()
    bucket = serializers.ChoiceField(choices=UPLOAD_BUCKETS, default="products")

    def validate_file(self, value):
        if value.size > MAX_UPLOAD_BYTES:
            raise serializers.ValidationError("Images must be 5MB or smaller")
        return value


class ImageUploadView(APIView):
    permission_classes = [IsAuthenticated, HasStore]
    parser_classes = [MultiPartParser, FormParser]

    @extend_schema(
        tags=["Owner"],
        request=ImageUploadSerializer,
        responses={
            201: OpenApiResponse(description="{path, url}"),
            400: OpenApiResponse(description="Not an image / bad bucket"),
        },
    )
    def post(self, request):
        store = get_owned_store(request.user)

        serializer = ImageUploadSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        upload = serializer.validated_data["file"]
        bucket = serializer.validated_data["bucket"]

        ext = os.path.splitext(upload.name)[1].lower() or ".jpg"
        stamp = int(timezone.now().timestamp() * 1000)
        name = f"{store.id}/{bucket}/{stamp}-{secrets.token_hex(4)}{ext}"

        path = default_storage.save(name, upload)
        url = request.build_absolute_uri(default_storage.url(path))

        logger.info(
            "Image uploaded",
            extra={"store_id": str(store.id), "bucket": bucket, "path": path},
        )
        return Response({"path": path, "url": url}, status=status.HTTP_201_CREATED)
