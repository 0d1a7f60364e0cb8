"""Image reference parser with Docker Hub defaulting."""

import logging
from typing import Iterable, Iterator

from ..errors import InvalidImageFormat
from ..models import ImageReference

logger = logging.getLogger(__name__)

# Registry used when an image name carries no explicit registry domain
DEFAULT_REGISTRY = "docker.io"


def check_registry(registry: str) -> str:
    """
    Validate a registry domain used as the default for unqualified images.

    Raises:
        ValueError: If the registry is empty or is not a bare domain.
    """
    if not registry or "/" in registry or any(c.isspace() for c in registry):
        raise ValueError(f"invalid default registry '{registry}'")
    return registry


def parse_image_name(image: str, default_registry: str = DEFAULT_REGISTRY) -> ImageReference:
    """
    Split a raw image string into registry, repository and tag.

    The tag is everything after the first ':' of the final path segment, so
    a registry port (``myregistry:5000/foo/bar:v1``) is not mistaken for a
    tag and a trailing digest stays part of the tag. The first path
    component is treated as the registry domain iff it contains a '.' or
    ':' character, otherwise it is all repository and the registry
    defaults to Docker Hub. ``library/`` is never injected.

    Args:
        image: Raw image string (e.g., "quay.io/foo/bar:latest")
        default_registry: Registry used when none is explicit.

    Returns:
        Parsed ImageReference.

    Raises:
        InvalidImageFormat: If the image has no tag or no repository.
    """
    head, slash, last = image.rpartition("/")
    name, colon, tag = last.partition(":")
    if not colon or not tag:
        raise InvalidImageFormat(image)

    repository = f"{head}{slash}{name}"
    registry = default_registry

    parts = repository.split("/", 1)
    if len(parts) == 2 and ("." in parts[0] or ":" in parts[0]):
        registry, repository = parts

    if not repository:
        raise InvalidImageFormat(image, "empty repository")

    return ImageReference(registry=registry, repository=repository, tag=tag)


def unique_image_names(names: Iterable[str], seen: set[str] | None = None) -> Iterator[str]:
    """
    Yield each raw image string once, in first-seen order.

    Dedup is on the exact raw string. Passing the same ``seen`` set to
    several calls extends the dedup across all of them.
    """
    if seen is None:
        seen = set()

    for name in names:
        if name in seen:
            logger.debug(f"Skipping duplicate image {name}")
            continue
        seen.add(name)
        yield name


def parse_image_names(
    names: Iterable[str],
    default_registry: str = DEFAULT_REGISTRY,
    seen: set[str] | None = None,
) -> list[ImageReference]:
    """
    Parse raw image strings into a deduplicated list of references.

    Raises:
        InvalidImageFormat: On the first image that cannot be parsed.
    """
    return [
        parse_image_name(name, default_registry)
        for name in unique_image_names(names, seen)
    ]
