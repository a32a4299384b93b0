"""Barcode image boundary: hands payload text to and from an image codec."""

import logging
from abc import ABC, abstractmethod
from typing import Optional

from ..models.document import PaymentDocument
from ..models.validation_error import raise_for_errors
from .parser import ParseResult, parse, validate_document
from .serializer import render


logger = logging.getLogger(__name__)

DEFAULT_IMAGE_SIZE = 300


class ImageDecodeError(Exception):
    """Raised when no payment document payload is found in an image."""
    pass


class ImageCodec(ABC):
    """Abstract base class for 2D barcode engines."""

    @abstractmethod
    def encode_image(self, payload_text: str, size: int, overlay: Optional[bytes] = None) -> bytes:
        """Encode payload text as a square barcode image.

        Args:
            payload_text: Payment document text
            size: Width and height in pixels
            overlay: Optional image bytes placed in the centre (e.g. the Swiss cross)

        Returns:
            Encoded image bytes
        """
        pass

    @abstractmethod
    def decode_image(self, image_bytes: bytes) -> Optional[str]:
        """Decode the payload of a barcode image.

        Returns:
            Payload text, or None if no barcode is found
        """
        pass


def encode_document(
    document: PaymentDocument,
    codec: ImageCodec,
    size: int = DEFAULT_IMAGE_SIZE,
    overlay: Optional[bytes] = None,
) -> bytes:
    """Render a document and encode it as a barcode image.

    Raises:
        DocumentRejectedError: If the document is not fully valid
        ValueError: If size is not positive
    """
    if size <= 0:
        raise ValueError(f"size must be > 0, got {size}")
    raise_for_errors(validate_document(document))
    payload = render(document)
    logger.debug(f"Encoding {len(payload)} character payload at {size}x{size}")
    return codec.encode_image(payload, size, overlay)


def decode_document(image_bytes: bytes, codec: ImageCodec) -> ParseResult:
    """Decode a barcode image and parse its payload.

    Raises:
        ImageDecodeError: If the codec finds no payload
    """
    payload = codec.decode_image(image_bytes)
    if payload is None:
        raise ImageDecodeError("No payment document found in image")
    return parse(payload)
