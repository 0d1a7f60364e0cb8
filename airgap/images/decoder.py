"""Decoding of single YAML documents into Kubernetes objects."""

import logging

import yaml

from ..errors import DecodeError

logger = logging.getLogger(__name__)


def is_empty_document(document: str | bytes) -> bool:
    """Check if a document holds nothing but whitespace and comments."""
    if isinstance(document, bytes):
        document = document.decode("utf-8", errors="replace")

    for line in document.splitlines():
        stripped = line.strip()
        if stripped and not stripped.startswith("#"):
            return False
    return True


def decode_resource(document: str | bytes) -> dict:
    """
    Decode one YAML document into a Kubernetes object.

    Args:
        document: Raw text of a single YAML document.

    Returns:
        The decoded object as a dict.

    Raises:
        DecodeError: If the document is not valid YAML or is not a mapping
            carrying apiVersion and kind.
    """
    try:
        obj = yaml.safe_load(document)
    except yaml.YAMLError as e:
        raise DecodeError(f"invalid YAML: {e}") from e

    if not isinstance(obj, dict):
        raise DecodeError(f"expected a mapping, got {type(obj).__name__}")

    for key in ("apiVersion", "kind"):
        value = obj.get(key)
        if not isinstance(value, str) or not value:
            raise DecodeError(f"object '{key}' is missing")

    metadata = obj.get("metadata")
    if metadata is not None and not isinstance(metadata, dict):
        raise DecodeError("object 'metadata' is not a mapping")

    logger.debug(f"Decoded {obj['apiVersion']} {obj['kind']}")
    return obj
