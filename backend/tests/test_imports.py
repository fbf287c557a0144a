"""
CSV import tests: row mapping, upload endpoint and file cleanup.
"""

import io
import os

import pytest

from medkit.extensions import db
from medkit.models import Kit
from medkit.services import import_service
from medkit.services.import_service import KitImportError


class TestRowMapping:

    def test_single_serial_layout(self):
        record = import_service.row_to_record({"serialNumber": "SN9", "batchNumber": "B9", "status": ""})
        assert record == {"serial_numbers": ["SN9"], "batch_numbers": ["B9"], "status": None}

    def test_paired_serial_layout(self):
        record = import_service.row_to_record({
            "serialNumber1": "SN1", "serialNumber2": "SN2", "batchNumber": "B1",
        })
        assert record["serial_numbers"] == ["SN1", "SN2"]
        assert record["batch_numbers"] == ["B1"]

    def test_list_layout(self):
        record = import_service.row_to_record({"serialNumbers": "SN1; SN2|SN3", "batchNumbers": "B1,B2"})
        assert record["serial_numbers"] == ["SN1", "SN2", "SN3"]
        assert record["batch_numbers"] == ["B1", "B2"]

    def test_blank_cells_carry_through_empty(self):
        record = import_service.row_to_record({"serialNumber": "", "batchNumber": None})
        assert record["serial_numbers"] == []
        assert record["batch_numbers"] == []

    def test_parse_csv_strips_header_whitespace(self):
        records = import_service.parse_csv(" serialNumber ,batchNumber\nSN1,B1\n")
        assert records[0]["serial_numbers"] == ["SN1"]

    def test_parse_csv_without_header(self):
        with pytest.raises(KitImportError):
            import_service.parse_csv("")


class TestUploadRoute:

    def _upload(self, client, content: bytes, filename: str = "kits.csv"):
        return client.post(
            "/kits/upload",
            data={"file": (io.BytesIO(content), filename)},
            content_type="multipart/form-data",
        )

    def test_upload_inserts_available_kits(self, client):
        resp = self._upload(client, b"serialNumber,batchNumber,status\nSN100,B10,\nSN101,B10,available\n")

        assert resp.status_code == 200
        assert resp.get_json() == {"message": "CSV data uploaded successfully", "count": 2}
        kits = db.session.query(Kit).order_by(Kit.id).all()
        assert [kit.serial_numbers for kit in kits] == [["SN100"], ["SN101"]]
        assert all(kit.status == "available" for kit in kits)

    def test_upload_paired_layout(self, client):
        resp = self._upload(client, b"serialNumber1,serialNumber2,batchNumber\nA1,A2,B1\n")

        assert resp.status_code == 200
        kit = db.session.query(Kit).one()
        assert kit.serial_numbers == ["A1", "A2"]

    def test_upload_removes_file(self, app, client):
        folder = app.config["UPLOAD_FOLDER"]
        self._upload(client, b"serialNumber,batchNumber\nSN1,B1\n")
        assert os.listdir(folder) == []

    def test_upload_requires_file(self, client):
        resp = client.post("/kits/upload", data={}, content_type="multipart/form-data")
        assert resp.status_code == 400

    def test_upload_rejects_non_utf8(self, app, client):
        resp = self._upload(client, b"serialNumber\n\xff\xfe\xfa\n")
        assert resp.status_code == 400
        assert db.session.query(Kit).count() == 0
        assert os.listdir(app.config["UPLOAD_FOLDER"]) == []
