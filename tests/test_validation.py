from pathlib import Path

import pytest

from albumsync.errors import PhotoValidationError
from albumsync.models import InvalidPhotoRecord, PhotoRecord, TaxonEntry
from albumsync.validation import validate

CROW = TaxonEntry("CORVUS", "Kråka", "Crow", "Corvus corone")


def record(name):
    return PhotoRecord.build(Path("data/CORVUS/SUMMER") / name, CROW, ("forest",))


def test_all_valid_records_pass_in_order():
    records = [record("b.jpg"), record("a.jpg")]
    assert validate(records) == records


def test_every_invalid_record_is_reported(log_records):
    records = [
        InvalidPhotoRecord(Path("data/TURDUS/SUMMER/a.jpg"), "Could not find bird data for TURDUS"),
        record("b.jpg"),
        InvalidPhotoRecord(Path("data/CORVUS/NOPE/c.jpg"), "Could not find tags for NOPE"),
    ]
    with pytest.raises(PhotoValidationError) as excinfo:
        validate(records)

    diagnostics = excinfo.value.diagnostics
    assert len(diagnostics) == 2
    assert "a.jpg is invalid: Could not find bird data for TURDUS" in diagnostics[0]
    assert "c.jpg is invalid: Could not find tags for NOPE" in diagnostics[1]
    assert [r["message"] for r in log_records if r["level"].name == "ERROR"] == diagnostics


def test_empty_batch_is_valid():
    assert validate([]) == []
