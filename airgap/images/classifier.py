"""Recognition of workload resources and their pod specs."""

import logging
from typing import Callable

from ..models import WorkloadSpec

logger = logging.getLogger(__name__)

# Container categories, in the order their images are listed
CONTAINER_FIELDS = ("containers", "initContainers", "ephemeralContainers")


def _dig(obj: dict, *keys: str) -> dict | None:
    """Walk nested mappings, returning None when a level is missing."""
    for key in keys:
        if not isinstance(obj, dict):
            return None
        obj = obj.get(key)
    return obj if isinstance(obj, dict) else None


def _pod_spec(obj: dict) -> dict | None:
    return _dig(obj, "spec")


def _template_pod_spec(obj: dict) -> dict | None:
    return _dig(obj, "spec", "template", "spec")


def _cronjob_pod_spec(obj: dict) -> dict | None:
    return _dig(obj, "spec", "jobTemplate", "spec", "template", "spec")


def _pod_template_pod_spec(obj: dict) -> dict | None:
    return _dig(obj, "template", "spec")


# Workload kinds keyed by (API group, kind); "" is the core group
WORKLOAD_KINDS: dict[tuple[str, str], Callable[[dict], dict | None]] = {
    ("", "Pod"): _pod_spec,
    ("", "PodTemplate"): _pod_template_pod_spec,
    ("", "ReplicationController"): _template_pod_spec,
    ("apps", "Deployment"): _template_pod_spec,
    ("apps", "ReplicaSet"): _template_pod_spec,
    ("apps", "StatefulSet"): _template_pod_spec,
    ("apps", "DaemonSet"): _template_pod_spec,
    ("extensions", "Deployment"): _template_pod_spec,
    ("extensions", "ReplicaSet"): _template_pod_spec,
    ("extensions", "DaemonSet"): _template_pod_spec,
    ("batch", "Job"): _template_pod_spec,
    ("batch", "CronJob"): _cronjob_pod_spec,
}


def api_group(api_version: str) -> str:
    """Return the API group of an apiVersion ("apps/v1" -> "apps", "v1" -> "")."""
    group, _, _ = api_version.rpartition("/")
    return group


def images_from_pod_spec(pod_spec: dict | None) -> list[str]:
    """
    Collect raw image strings from a pod spec.

    Images are listed for regular containers first, then init containers,
    then ephemeral containers. A container without a string image
    contributes an empty string.
    """
    images: list[str] = []
    if not pod_spec:
        return images

    for field_name in CONTAINER_FIELDS:
        containers = pod_spec.get(field_name)
        if not isinstance(containers, list):
            continue
        for container in containers:
            if not isinstance(container, dict):
                continue
            image = container.get("image")
            images.append(image if isinstance(image, str) else "")

    return images


def classify_resource(obj: dict) -> WorkloadSpec | None:
    """
    Identify a workload resource and return the images of its pod template.

    Returns:
        WorkloadSpec for recognised workload kinds, None for anything else
        (ConfigMaps, Services, custom resources, ...).
    """
    kind = obj.get("kind", "")
    locate = WORKLOAD_KINDS.get((api_group(obj.get("apiVersion", "")), kind))
    if locate is None:
        logger.debug(f"Skipping non-workload resource {obj.get('apiVersion')} {kind}")
        return None

    metadata = obj.get("metadata")
    if not isinstance(metadata, dict):
        metadata = {}
    workload = WorkloadSpec(
        kind=kind,
        name=str(metadata.get("name") or "unknown"),
        namespace=metadata.get("namespace"),
        images=images_from_pod_spec(locate(obj)),
    )
    logger.debug(f"Found {len(workload.images)} images in {workload.resource}")
    return workload


def is_workload(obj: dict) -> bool:
    """Check if an object carries a pod specification."""
    return (api_group(obj.get("apiVersion", "")), obj.get("kind", "")) in WORKLOAD_KINDS
