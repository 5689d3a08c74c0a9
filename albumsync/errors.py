"""Failures the uploader distinguishes between.

Everything raised before the first remote call (configuration, metadata,
photo validation) means nothing has been changed on Flickr yet.
"""

from typing import List, Optional


class AlbumSyncError(Exception):
    """Base class for every error the uploader raises on purpose."""


class ConfigurationError(AlbumSyncError):
    """Missing names workbook, missing sheet, unusable config or token file."""


class MetadataValidationError(AlbumSyncError):
    """A malformed row in the Birds or Tags sheet."""


class PhotoValidationError(AlbumSyncError):
    def __init__(self, diagnostics: List[str]):
        self.diagnostics = list(diagnostics)
        super().__init__(f"{len(self.diagnostics)} invalid photo(s), nothing uploaded")


class RemoteOperationError(AlbumSyncError):
    def __init__(self, message: str, code: Optional[int] = None):
        self.code = code
        super().__init__(message)


class TransientUploadError(RemoteOperationError):
    """The upload connection dropped mid-transfer; worth another attempt."""
