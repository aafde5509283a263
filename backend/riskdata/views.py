"""
API views for the `riskdata` app.

The idea is:
- accept a CSV file from the clients,
- let Pandas read it, then decide (from the first row) whether it is risk
  assessment data or plain (x, y) points,
- append every row to the matching table and hand the rows back on request.
"""
from __future__ import annotations

import logging
import os
import tempfile
from pathlib import Path
from typing import Any

from django.conf import settings
from django.db import DatabaseError
from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import APIView

from .models import PointRecord, RiskRecord
from .parsing import (
    RISK,
    CSVParseError,
    EmptyUploadError,
    classify,
    point_fields,
    read_rows,
    risk_fields,
)
from .serializers import CSVUploadSerializer, PointRecordSerializer, RiskRecordSerializer
from .tables import ensure_table

logger = logging.getLogger(__name__)


class UploadView(APIView):
    """
    Upload endpoint used by the clients.

    Rows are inserted one at a time without a surrounding transaction: if the
    database fails halfway, the rows written so far stay in the table.
    """

    def post(self, request, *args, **kwargs):
        serializer = CSVUploadSerializer(data=request.data)
        if not serializer.is_valid():
            logger.warning("Upload rejected, no file attached: %s", serializer.errors)
            return Response({"error": "No file uploaded."}, status=status.HTTP_400_BAD_REQUEST)

        upload = serializer.validated_data["file"]
        temp_path: Path | None = None
        logger.info("Received %s (%d bytes)", upload.name, upload.size)

        try:
            try:
                temp_path = self._spool_to_disk(upload)
            except OSError as exc:
                logger.error("Could not store upload %s: %s", upload.name, exc)
                return Response(
                    {"error": f"Could not store uploaded file: {exc}"},
                    status=status.HTTP_500_INTERNAL_SERVER_ERROR,
                )

            try:
                rows = read_rows(temp_path)
            except EmptyUploadError as exc:
                logger.warning("Upload %s is empty", upload.name)
                return Response({"error": str(exc)}, status=status.HTTP_400_BAD_REQUEST)
            except CSVParseError as exc:
                logger.error("Could not parse %s: %s", upload.name, exc)
                return Response(
                    {"error": f"Error parsing CSV file: {exc}"},
                    status=status.HTTP_500_INTERNAL_SERVER_ERROR,
                )

            kind = classify(rows)
            logger.info("Treating %s as %s data (%d rows)", upload.name, kind, len(rows))

            try:
                self._insert_rows(kind, rows)
            except DatabaseError as exc:
                logger.exception("Database error while storing %s", upload.name)
                return Response({"error": str(exc)}, status=status.HTTP_500_INTERNAL_SERVER_ERROR)

            return Response(
                {
                    "success": True,
                    "message": f"File processed successfully as {kind} data.",
                    "rows": len(rows),
                },
                status=status.HTTP_200_OK,
            )
        finally:
            if temp_path is not None:
                self._remove_temp_file(temp_path)

    def _insert_rows(self, kind: str, rows: list[dict[str, Any]]) -> None:
        """Insert rows strictly one after another; no batching."""
        if kind == RISK:
            ensure_table(RiskRecord)
            for row in rows:
                RiskRecord.objects.create(**risk_fields(row))
        else:
            ensure_table(PointRecord)
            for row in rows:
                PointRecord.objects.create(**point_fields(row))

    def _spool_to_disk(self, upload) -> Path:
        """Copy the upload into the upload folder so Pandas reads a real file."""
        upload_dir = Path(settings.UPLOAD_DIR)
        upload_dir.mkdir(parents=True, exist_ok=True)
        with tempfile.NamedTemporaryFile(
            dir=upload_dir, prefix="upload_", suffix=".csv", delete=False
        ) as handle:
            for chunk in upload.chunks():
                handle.write(chunk)
        return Path(handle.name)

    def _remove_temp_file(self, path: Path) -> None:
        # Best effort: failures are logged, not returned.
        try:
            os.remove(path)
        except OSError as exc:
            logger.error("Could not delete temporary upload %s: %s", path, exc)


class RiskDataListView(APIView):
    """Every stored risk row, newest first."""

    def get(self, request, *args, **kwargs):
        try:
            ensure_table(RiskRecord)
            records = RiskRecord.objects.order_by("-created_at", "-id")
            data = RiskRecordSerializer(records, many=True).data
        except DatabaseError as exc:
            logger.exception("Could not read risk data")
            return Response({"error": str(exc)}, status=status.HTTP_500_INTERNAL_SERVER_ERROR)
        return Response(data, status=status.HTTP_200_OK)


class PointListView(APIView):
    """Every stored (x, y) point, newest first."""

    def get(self, request, *args, **kwargs):
        try:
            ensure_table(PointRecord)
            records = PointRecord.objects.order_by("-created_at", "-id")
            data = PointRecordSerializer(records, many=True).data
        except DatabaseError as exc:
            logger.exception("Could not read points")
            return Response({"error": str(exc)}, status=status.HTTP_500_INTERNAL_SERVER_ERROR)
        return Response(data, status=status.HTTP_200_OK)


class HealthView(APIView):
    """Liveness check only; does not touch the database."""

    def get(self, request, *args, **kwargs):
        return Response({"status": "ok", "message": "Server is running"}, status=status.HTTP_200_OK)
