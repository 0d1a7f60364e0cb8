"""Extraction of image references from rendered Kubernetes manifests."""

import logging
import re

from ..errors import DecodeError, InvalidImageFormat
from ..models import ExtractionError, ExtractionReport, ImageReference
from .classifier import classify_resource
from .decoder import decode_resource, is_empty_document
from .parser import (
    DEFAULT_REGISTRY,
    check_registry,
    parse_image_name,
    parse_image_names,
    unique_image_names,
)

logger = logging.getLogger(__name__)

DOCUMENT_SEPARATOR = re.compile(r"^---[ \t]*(?:#.*)?$", re.MULTILINE)


def split_manifest(manifest: str) -> list[str]:
    """Split a multi-document manifest, dropping empty and comment-only documents."""
    return [
        document
        for document in DOCUMENT_SEPARATOR.split(manifest)
        if not is_empty_document(document)
    ]


def parse_images_from_yaml(
    document: str | bytes,
    default_registry: str = DEFAULT_REGISTRY,
    seen: set[str] | None = None,
) -> list[ImageReference]:
    """
    Extract the images of a single Kubernetes YAML document.

    Documents that are not workloads yield an empty list.

    Raises:
        DecodeError: If the document is not a Kubernetes object.
        InvalidImageFormat: If an image in the document cannot be parsed.
    """
    workload = classify_resource(decode_resource(document))
    if workload is None:
        return []
    return parse_image_names(workload.images, default_registry, seen)


class ImageExtractor:
    """Extracts unique image references from a rendered manifest."""

    def __init__(
        self,
        default_registry: str = DEFAULT_REGISTRY,
        dedup_scope: str = "manifest",
        strict: bool = False,
    ):
        if dedup_scope not in ("manifest", "document"):
            raise ValueError(f"Unknown dedup scope: {dedup_scope}")
        self.default_registry = check_registry(default_registry)
        self.dedup_scope = dedup_scope
        self.strict = strict

    def extract(self, manifest: str) -> ExtractionReport:
        """
        Extract images from every document of a manifest.

        Documents are processed in order. In strict mode the first error
        is raised; otherwise failures are collected into the report and
        extraction carries on with the next image or document.

        Args:
            manifest: Multi-document YAML, as produced by helm template.

        Returns:
            ExtractionReport with images in first-seen order.
        """
        report = ExtractionReport()
        seen: set[str] = set()

        for index, document in enumerate(split_manifest(manifest), 1):
            report.documents += 1
            if self.dedup_scope == "document":
                seen = set()
            self._extract_document(index, document, seen, report)

        logger.info(
            f"Extracted {len(report.images)} images from {report.workloads} workloads "
            f"in {report.documents} documents ({len(report.errors)} errors)"
        )
        return report

    def _extract_document(
        self,
        index: int,
        document: str,
        seen: set[str],
        report: ExtractionReport,
    ) -> None:
        """Extract one document's images into the report."""
        try:
            obj = decode_resource(document)
        except DecodeError as e:
            if self.strict:
                raise DecodeError(str(e), document=index) from e
            logger.warning(f"Skipping document {index}: {e}")
            report.errors.append(ExtractionError(document=index, message=str(e)))
            return

        workload = classify_resource(obj)
        if workload is None:
            return
        report.workloads += 1

        for name in unique_image_names(workload.images, seen):
            try:
                report.images.append(parse_image_name(name, self.default_registry))
            except InvalidImageFormat as e:
                if self.strict:
                    raise
                logger.warning(f"Skipping image in {workload.resource}: {e}")
                report.errors.append(
                    ExtractionError(
                        document=index,
                        message=str(e),
                        resource=workload.resource,
                        image=name,
                    )
                )
