"""
Adapters for the Google APIs the tools talk to.

- slides_api: presentations get / batchUpdate / create
- drive_api: upload, share, copy, move, export, comments
- translate_api: Cloud Translation v2
"""

from dataclasses import dataclass

from slides_mcp.services.drive_api import DriveService
from slides_mcp.services.slides_api import SlidesService
from slides_mcp.services.translate_api import TranslateService, TranslationBatch


@dataclass
class ServiceBundle:
    slides: SlidesService
    drive: DriveService
    translate: TranslateService


__all__ = ["ServiceBundle", "SlidesService", "DriveService", "TranslateService", "TranslationBatch"]
