from typing import Iterable, List

from loguru import logger

from albumsync.errors import PhotoValidationError
from albumsync.models import DiscoveredPhoto, InvalidPhotoRecord, PhotoRecord


def validate(records: Iterable[DiscoveredPhoto], log=logger) -> List[PhotoRecord]:
    """
    All-or-nothing gate in front of the upload. Every invalid record is
    reported, then PhotoValidationError is raised if there was any.
    Returns the valid records in discovery order.
    """
    valid: List[PhotoRecord] = []
    diagnostics: List[str] = []

    for record in records:
        if isinstance(record, InvalidPhotoRecord):
            message = f"File: {record.filename} is invalid: {record.error}"
            log.error(message)
            diagnostics.append(message)
        else:
            valid.append(record)

    if diagnostics:
        raise PhotoValidationError(diagnostics)
    return valid
