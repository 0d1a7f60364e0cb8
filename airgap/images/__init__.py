"""Image reference extraction from Kubernetes manifests."""

from .classifier import classify_resource, images_from_pod_spec, is_workload
from .decoder import decode_resource
from .extractor import ImageExtractor, parse_images_from_yaml, split_manifest
from .parser import DEFAULT_REGISTRY, parse_image_name, parse_image_names

__all__ = [
    "DEFAULT_REGISTRY",
    "ImageExtractor",
    "classify_resource",
    "decode_resource",
    "images_from_pod_spec",
    "is_workload",
    "parse_image_name",
    "parse_image_names",
    "parse_images_from_yaml",
    "split_manifest",
]
