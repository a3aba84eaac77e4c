"""
Google Cloud Translation (v2) adapter.
"""

from dataclasses import dataclass, field
from typing import List, Optional

from googleapiclient.discovery import build

from slides_mcp.utils.logging_config import get_logger

logger = get_logger(__name__)

# Per-request limit of the v2 API
DEFAULT_BATCH_SIZE = 128


@dataclass
class TranslationBatch:
    """Translated texts in input order, plus the language the API detected."""
    texts: List[str] = field(default_factory=list)
    detected_source_language: Optional[str] = None


class TranslateService:
    """Thin wrapper over the ``translate v2`` discovery client."""

    def __init__(self, service, batch_size: int = DEFAULT_BATCH_SIZE):
        self._service = service
        self.batch_size = batch_size

    @classmethod
    def from_credentials(cls, credentials, batch_size: int = DEFAULT_BATCH_SIZE) -> "TranslateService":
        return cls(build("translate", "v2", credentials=credentials, cache_discovery=False), batch_size)

    def translate_text(self, text: str, target: str, source: Optional[str] = None) -> str:
        return self.translate_texts([text], target, source).texts[0]

    def translate_texts(self, texts: List[str], target: str, source: Optional[str] = None) -> TranslationBatch:
        """
        Translate texts, keeping their order. Inputs larger than the API's
        per-request limit are sent in consecutive chunks.
        """
        batch = TranslationBatch()
        for offset in range(0, len(texts), self.batch_size):
            chunk = texts[offset:offset + self.batch_size]
            kwargs = {"q": chunk, "target": target, "format": "text"}
            if source:
                kwargs["source"] = source
            response = self._service.translations().list(**kwargs).execute()

            for translation in response.get("translations", []):
                batch.texts.append(translation.get("translatedText", ""))
                if batch.detected_source_language is None:
                    batch.detected_source_language = translation.get("detectedSourceLanguage")

        logger.debug(
            "Translated texts",
            extra={"extra_data": {"count": len(texts), "target": target}}
        )
        return batch
