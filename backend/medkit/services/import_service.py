# Overview: Service-layer operations for bulk kit imports from CSV uploads.

from __future__ import annotations

import csv
import io
import os
import uuid
from typing import Any, Iterable

from flask import current_app

from ..models import Kit
from . import kit_service


class KitImportError(ValueError):
    """Raised when an upload cannot be read as CSV."""


SERIAL_LIST_SEPARATORS = (";", "|")


def _clean(value: Any) -> str:
    if value is None:
        return ""
    return str(value).strip()


def _split_list(value: Any) -> list[str]:
    text = _clean(value)
    if not text:
        return []
    for separator in SERIAL_LIST_SEPARATORS:
        text = text.replace(separator, ",")
    return [part.strip() for part in text.split(",") if part.strip()]


def row_to_record(row: dict[str, Any]) -> dict[str, Any]:
    """
    Map one CSV row onto the kit layout.

    Accepted columns: serialNumber, serialNumber1/serialNumber2 (paired kits),
    serialNumbers (list); batchNumber or batchNumbers; status.
    Rows are not validated: blank cells carry through as empty values.
    """
    if "serialNumbers" in row:
        serials = _split_list(row.get("serialNumbers"))
    else:
        serials = [
            _clean(row.get(column))
            for column in ("serialNumber", "serialNumber1", "serialNumber2")
            if column in row
        ]

    if "batchNumbers" in row:
        batches = _split_list(row.get("batchNumbers"))
    else:
        batches = [_clean(row.get("batchNumber"))] if "batchNumber" in row else []

    return {
        "serial_numbers": [serial for serial in serials if serial],
        "batch_numbers": [batch for batch in batches if batch],
        "status": _clean(row.get("status")).lower() or None,
    }


def parse_csv(text: str) -> list[dict[str, Any]]:
    reader = csv.DictReader(io.StringIO(text))
    if not reader.fieldnames:
        raise KitImportError("CSV file has no header row")
    # Header cells may carry a BOM or stray whitespace
    reader.fieldnames = [name.lstrip("\ufeff").strip() for name in reader.fieldnames]
    return [row_to_record(row) for row in reader]


def import_rows(records: Iterable[dict[str, Any]]) -> list[Kit]:
    return kit_service.create_kits(list(records))


def import_csv_file(path: str) -> list[Kit]:
    try:
        with open(path, "r", encoding="utf-8-sig", newline="") as handle:
            records = parse_csv(handle.read())
    except UnicodeDecodeError:
        raise KitImportError("File is not a UTF-8 CSV") from None
    return import_rows(records)


def import_upload(file_storage) -> list[Kit]:
    """
    Persist an uploaded CSV to UPLOAD_FOLDER, import its rows, then discard it.
    """
    upload_folder = current_app.config["UPLOAD_FOLDER"]
    os.makedirs(upload_folder, exist_ok=True)
    path = os.path.join(upload_folder, f"{uuid.uuid4().hex}.csv")

    file_storage.save(path)
    try:
        kits = import_csv_file(path)
    finally:
        os.remove(path)

    current_app.logger.info("Imported %d kit(s) from %s", len(kits), file_storage.filename or "upload")
    return kits
