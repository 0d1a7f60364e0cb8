"""Tests for image reference parsing."""

import pytest

from airgap.errors import InvalidImageFormat
from airgap.images.parser import (
    DEFAULT_REGISTRY,
    parse_image_name,
    parse_image_names,
    unique_image_names,
)
from airgap.models import ImageReference


class TestParseImageName:
    """Tests for single image parsing."""

    def test_docker_hub_default(self):
        result = parse_image_name("nginx:1.25")
        assert result == ImageReference("docker.io", "nginx", "1.25")

    def test_library_not_injected(self):
        explicit = parse_image_name("docker.io/library/nginx:1.25")
        implicit = parse_image_name("nginx:1.25")

        assert explicit.registry == implicit.registry == "docker.io"
        assert explicit.repository == "library/nginx"
        assert implicit.repository == "nginx"
        assert explicit.tag == implicit.tag == "1.25"

    def test_registry_with_dot(self):
        result = parse_image_name("quay.io/foo/bar:latest")
        assert result == ImageReference("quay.io", "foo/bar", "latest")

    def test_registry_with_port(self):
        result = parse_image_name("myregistry:5000/foo/bar:v1")
        assert result.registry == "myregistry:5000"
        assert result.repository == "foo/bar"
        assert result.tag == "v1"

    def test_namespace_without_dot_is_repository(self):
        result = parse_image_name("bitnami/redis:7.2")
        assert result == ImageReference("docker.io", "bitnami/redis", "7.2")

    def test_digest_kept_in_tag(self):
        result = parse_image_name("ghcr.io/org/app:1.0@sha256:abc123")
        assert result.repository == "org/app"
        assert result.tag == "1.0@sha256:abc123"

    def test_custom_default_registry(self):
        result = parse_image_name("nginx:1.25", default_registry="mirror.local")
        assert str(result) == "mirror.local/nginx:1.25"

    def test_string_rendering(self):
        assert str(parse_image_name("quay.io/foo/bar:latest")) == "quay.io/foo/bar:latest"
        assert str(parse_image_name("redis:7")) == "docker.io/redis:7"

    def test_missing_tag(self):
        with pytest.raises(InvalidImageFormat) as exc_info:
            parse_image_name("nginx")
        assert exc_info.value.image == "nginx"

    def test_port_without_tag(self):
        with pytest.raises(InvalidImageFormat):
            parse_image_name("myregistry:5000/foo/bar")

    def test_empty_string(self):
        with pytest.raises(InvalidImageFormat):
            parse_image_name("")

    def test_empty_tag(self):
        with pytest.raises(InvalidImageFormat):
            parse_image_name("nginx:")

    def test_empty_repository(self):
        with pytest.raises(InvalidImageFormat, match="empty repository"):
            parse_image_name(":1.0")

    def test_reference_is_immutable(self):
        result = parse_image_name("nginx:1.25")
        with pytest.raises(AttributeError):
            result.tag = "latest"


class TestUniqueImageNames:
    """Tests for raw image deduplication."""

    def test_first_seen_order(self):
        names = ["redis:7", "nginx:1.25", "redis:7", "busybox:1.36"]
        assert list(unique_image_names(names)) == ["redis:7", "nginx:1.25", "busybox:1.36"]

    def test_shared_seen_set(self):
        seen: set[str] = set()
        first = list(unique_image_names(["nginx:1.25"], seen))
        second = list(unique_image_names(["nginx:1.25", "redis:7"], seen))

        assert first == ["nginx:1.25"]
        assert second == ["redis:7"]


class TestParseImageNames:
    """Tests for batch parsing."""

    def test_duplicates_removed(self):
        result = parse_image_names(["nginx:1.25", "nginx:1.25", "redis:7"])
        assert [str(r) for r in result] == ["docker.io/nginx:1.25", "docker.io/redis:7"]

    def test_dedup_on_raw_string(self):
        result = parse_image_names(["nginx:1.25", "docker.io/nginx:1.25"])
        assert len(result) == 2
        assert result[0] == result[1]

    def test_invalid_image_raises(self):
        with pytest.raises(InvalidImageFormat):
            parse_image_names(["nginx:1.25", "busybox"])

    def test_empty_input(self):
        assert parse_image_names([]) == []

    def test_default_registry_constant(self):
        assert DEFAULT_REGISTRY == "docker.io"
