"""Data models for image extraction."""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class ImageReference:
    """A container image split into registry, repository and tag."""

    registry: str
    repository: str
    tag: str

    def __str__(self) -> str:
        return f"{self.registry}/{self.repository}:{self.tag}"

    def to_dict(self) -> dict[str, str]:
        return {
            "registry": self.registry,
            "repository": self.repository,
            "tag": self.tag,
            "reference": str(self),
        }


@dataclass
class WorkloadSpec:
    """The images referenced by one workload resource's pod template."""

    kind: str
    name: str
    namespace: str | None = None
    images: list[str] = field(default_factory=list)

    @property
    def resource(self) -> str:
        return f"{self.kind}/{self.name}"


@dataclass
class ExtractionError:
    """A document or image that could not be processed."""

    document: int
    message: str
    resource: str | None = None
    image: str | None = None

    def __str__(self) -> str:
        location = f"document {self.document}"
        if self.resource:
            location += f" ({self.resource})"
        return f"{location}: {self.message}"


@dataclass
class ExtractionReport:
    """Result of extracting images from a rendered manifest."""

    images: list[ImageReference] = field(default_factory=list)
    errors: list[ExtractionError] = field(default_factory=list)
    documents: int = 0
    workloads: int = 0

    @property
    def has_errors(self) -> bool:
        """Check if any document or image failed."""
        return bool(self.errors)

    def references(self) -> list[str]:
        """Return the images as registry/repository:tag strings."""
        return [str(image) for image in self.images]
