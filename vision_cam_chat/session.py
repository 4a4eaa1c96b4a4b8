"""ImageSession — single-slot, process-wide holder of the latest captured frame.

There is no per-client keying and no locking: concurrent uploads overwrite
each other and the last store wins. Fine for a single-user demo; a
multi-tenant deployment would need a keyed store.
"""
import base64
import logging
from dataclasses import dataclass
from datetime import datetime, timezone

from vision_cam_chat.constants import MSG_SESSION_CLEARED, MSG_SESSION_STORED
from vision_cam_chat.errors import EmptySessionError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class StoredImage:
    payload: str
    mime_type: str
    captured_at: datetime


class ImageSession:

    def __init__(self) -> None:
        self._image: StoredImage | None = None

    @property
    def is_empty(self) -> bool:
        return self._image is None

    def store(self, payload: bytes, mime_type: str) -> StoredImage:
        # Swapped in as one immutable record so readers never see a partial slot.
        self._image = StoredImage(
            payload=base64.standard_b64encode(payload).decode(),
            mime_type=mime_type,
            captured_at=datetime.now(timezone.utc),
        )
        logger.info(MSG_SESSION_STORED, mime_type, len(payload))
        return self._image

    def fetch(self) -> StoredImage:
        match self._image:
            case StoredImage() as image:
                return image
            case _:
                raise EmptySessionError()

    def clear(self) -> None:
        self._image = None
        logger.info(MSG_SESSION_CLEARED)
