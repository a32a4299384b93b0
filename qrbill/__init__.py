"""Codec for versioned QR bill payment documents."""

from .models.actor import Actor
from .models.document import PaymentDocument
from .models.fields import ActorRole, FieldRole
from .models.validation_error import DocumentError, DocumentRejectedError, ErrorCode
from .pipeline.image_boundary import ImageCodec, ImageDecodeError, decode_document, encode_document
from .pipeline.parser import ParseResult, parse, parse_strict, validate_document
from .pipeline.serializer import render

__all__ = [
    "Actor",
    "ActorRole",
    "DocumentError",
    "DocumentRejectedError",
    "ErrorCode",
    "FieldRole",
    "ImageCodec",
    "ImageDecodeError",
    "ParseResult",
    "PaymentDocument",
    "decode_document",
    "encode_document",
    "parse",
    "parse_strict",
    "render",
    "validate_document",
]
