"""Write-once filesystem storage for captured signature images."""

from __future__ import annotations

import base64
import binascii
import logging
import re
from dataclasses import dataclass
from pathlib import Path

from app.core.exceptions import ConflictError, NotFoundError, ValidationError
from app.utils.ids import new_id

logger = logging.getLogger(__name__)

SIGNATURE_DATA_URI_PREFIX = "data:image/png;base64,"
PNG_MAGIC = b"\x89PNG\r\n\x1a\n"
MAX_SIGNATURE_BYTES = 2 * 1024 * 1024
_REF_PATTERN = re.compile(r"^[A-Za-z0-9-]+\.png$")


def decode_signature_data_uri(data_uri: str) -> bytes:
    """Decode a ``data:image/png;base64,`` URI into PNG bytes."""
    if not data_uri or not data_uri.startswith(SIGNATURE_DATA_URI_PREFIX):
        raise ValidationError("Invalid signature format", field="signature")
    try:
        payload = base64.b64decode(data_uri[len(SIGNATURE_DATA_URI_PREFIX):], validate=True)
    except (binascii.Error, ValueError) as exc:
        raise ValidationError("Invalid signature format", field="signature") from exc
    if not payload.startswith(PNG_MAGIC):
        raise ValidationError("Signature must be a PNG image", field="signature")
    if len(payload) > MAX_SIGNATURE_BYTES:
        raise ValidationError("Signature image is too large", field="signature")
    return payload


@dataclass(frozen=True)
class StoredSignature:
    ref: str
    size: int


class SignatureStore:
    """Stores each signature image exactly once under a fresh reference."""

    def __init__(self, root: str | Path) -> None:
        self.root = Path(root)

    def _path(self, ref: str) -> Path:
        if not _REF_PATTERN.match(ref):
            raise NotFoundError("Signature not found")
        return self.root / ref

    def put(self, contract_id: str, image: bytes) -> StoredSignature:
        self.root.mkdir(parents=True, exist_ok=True)
        ref = f"{contract_id}-{new_id()}.png"
        try:
            with open(self._path(ref), "xb") as handle:
                handle.write(image)
        except FileExistsError as exc:
            raise ConflictError(f"Signature {ref} already stored") from exc
        logger.info(
            "signature.stored",
            extra={"event": "signature.stored", "contract_id": contract_id, "ref": ref, "size": len(image)},
        )
        return StoredSignature(ref=ref, size=len(image))

    def read(self, ref: str) -> bytes:
        path = self._path(ref)
        if not path.exists():
            raise NotFoundError("Signature not found")
        return path.read_bytes()

    def exists(self, ref: str) -> bool:
        try:
            return self._path(ref).exists()
        except NotFoundError:
            return False

    def delete(self, ref: str) -> None:
        """Remove a stored image; used only to undo a write whose row update failed."""
        self._path(ref).unlink(missing_ok=True)
        logger.info("signature.deleted", extra={"event": "signature.deleted", "ref": ref})
