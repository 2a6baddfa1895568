"""AI auditor: vision analysis with mock and failure fallbacks."""

from movemax.shared.domain.auditor.service import AuditorService
from movemax.shared.domain.auditor.uploads import encode_upload, to_data_url, validate_upload

__all__ = ["AuditorService", "encode_upload", "to_data_url", "validate_upload"]
