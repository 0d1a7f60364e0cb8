"""CLI entrypoint for helm-airgap."""

import json
import logging
import sys
from enum import Enum
from pathlib import Path

import typer

from . import __version__
from .config import Config
from .errors import AirgapError, RenderError
from .helm.renderer import HelmRenderer
from .images.extractor import ImageExtractor
from .images.parser import check_registry, parse_image_name
from .models import ExtractionReport

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

logger = logging.getLogger(__name__)

app = typer.Typer(
    name="helm-airgap",
    help="List the container images a Helm chart deploys, for mirroring into air-gapped registries",
)


class OutputFormat(str, Enum):
    """Image list output formats."""

    TEXT = "text"
    JSON = "json"


class DedupScope(str, Enum):
    """How far image deduplication reaches."""

    MANIFEST = "manifest"
    DOCUMENT = "document"


@app.callback()
def main_callback(
    ctx: typer.Context,
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
) -> None:
    """Load configuration and set up logging."""
    try:
        config = Config.from_env()
    except ValueError as e:
        typer.echo(f"Configuration error: {e}", err=True)
        raise typer.Exit(1)

    # Logs go to stderr so stdout carries only the image list
    logging.basicConfig(
        level=logging.DEBUG if verbose else config.log_level,
        format=LOG_FORMAT,
        stream=sys.stderr,
        force=True,
    )
    logger.debug(f"Loaded configuration: {config}")
    ctx.obj = config


def _format_report(report: ExtractionReport, output_format: OutputFormat) -> str:
    """Render the extracted images in the requested format."""
    if output_format == OutputFormat.JSON:
        return json.dumps([image.to_dict() for image in report.images], indent=2)
    return "\n".join(report.references())


def _run_extraction(
    config: Config,
    manifest: str,
    default_registry: str | None,
    dedup_scope: DedupScope | None,
    strict: bool,
    output_format: OutputFormat,
    output: str | None,
) -> None:
    """Extract images from a manifest, print them and report failures."""
    try:
        extractor = ImageExtractor(
            default_registry=default_registry or config.default_registry,
            dedup_scope=dedup_scope.value if dedup_scope else config.dedup_scope,
            strict=strict,
        )
    except ValueError as e:
        typer.echo(f"Invalid option: {e}", err=True)
        raise typer.Exit(1)

    try:
        report = extractor.extract(manifest)
    except AirgapError as e:
        typer.echo(f"Extraction failed: {e}", err=True)
        raise typer.Exit(1)

    text = _format_report(report, output_format)
    if output:
        Path(output).write_text(text + "\n" if text else "")
        typer.echo(f"Wrote {len(report.images)} images to {output}", err=True)
    elif text:
        typer.echo(text)

    if report.has_errors:
        typer.echo(f"{len(report.errors)} entries could not be extracted:", err=True)
        for error in report.errors:
            typer.echo(f"  {error}", err=True)
        raise typer.Exit(2)


@app.command()
def images(
    ctx: typer.Context,
    chart_path: str = typer.Argument(..., help="Path to the Helm chart directory"),
    release_name: str = typer.Option(
        None,
        "--release-name",
        "-r",
        help="Release name used when rendering (default: test)",
    ),
    no_hooks: bool = typer.Option(False, "--no-hooks", help="Leave out Helm hook manifests"),
    default_registry: str = typer.Option(
        None,
        "--default-registry",
        help="Registry for images without an explicit one (default: docker.io)",
    ),
    dedup_scope: DedupScope = typer.Option(
        None,
        "--dedup-scope",
        help="Deduplicate images across the whole manifest or per document",
    ),
    strict: bool = typer.Option(False, "--strict", help="Abort on the first invalid document or image"),
    output_format: OutputFormat = typer.Option(OutputFormat.TEXT, "--format", "-f", help="Output format"),
    output: str = typer.Option(None, "--output", "-o", help="Write the image list to a file"),
) -> None:
    """Render a chart and list the images its workloads use."""
    config: Config = ctx.obj
    renderer = HelmRenderer(
        helm_binary=config.helm_binary,
        release_name=release_name or config.release_name,
        include_hooks=config.include_hooks and not no_hooks,
    )

    try:
        manifest = renderer.render(chart_path)
    except RenderError as e:
        typer.echo(f"Render error: {e}", err=True)
        raise typer.Exit(1)

    _run_extraction(config, manifest, default_registry, dedup_scope, strict, output_format, output)


@app.command()
def extract(
    ctx: typer.Context,
    manifest_path: str = typer.Argument(..., help="Rendered manifest file, or - for stdin"),
    default_registry: str = typer.Option(
        None,
        "--default-registry",
        help="Registry for images without an explicit one (default: docker.io)",
    ),
    dedup_scope: DedupScope = typer.Option(
        None,
        "--dedup-scope",
        help="Deduplicate images across the whole manifest or per document",
    ),
    strict: bool = typer.Option(False, "--strict", help="Abort on the first invalid document or image"),
    output_format: OutputFormat = typer.Option(OutputFormat.TEXT, "--format", "-f", help="Output format"),
    output: str = typer.Option(None, "--output", "-o", help="Write the image list to a file"),
) -> None:
    """List the images used by an already rendered manifest."""
    config: Config = ctx.obj

    if manifest_path == "-":
        manifest = sys.stdin.read()
    else:
        path = Path(manifest_path)
        if not path.is_file():
            typer.echo(f"Manifest not found: {path}", err=True)
            raise typer.Exit(1)
        manifest = path.read_text()

    _run_extraction(config, manifest, default_registry, dedup_scope, strict, output_format, output)


@app.command()
def parse(
    ctx: typer.Context,
    image_names: list[str] = typer.Argument(..., help="Image strings to parse"),
    default_registry: str = typer.Option(
        None,
        "--default-registry",
        help="Registry for images without an explicit one (default: docker.io)",
    ),
) -> None:
    """Show how image strings split into registry, repository and tag."""
    config: Config = ctx.obj
    failed = False

    try:
        registry = check_registry(default_registry or config.default_registry)
    except ValueError as e:
        typer.echo(f"Invalid option: {e}", err=True)
        raise typer.Exit(1)

    for name in image_names:
        try:
            ref = parse_image_name(name, registry)
        except AirgapError as e:
            typer.echo(f"{e}", err=True)
            failed = True
            continue

        typer.echo(str(ref))
        typer.echo(f"   registry:   {ref.registry}")
        typer.echo(f"   repository: {ref.repository}")
        typer.echo(f"   tag:        {ref.tag}")

    if failed:
        raise typer.Exit(1)


@app.command()
def version() -> None:
    """Show helm-airgap version."""
    typer.echo(f"helm-airgap v{__version__}")


def main() -> None:
    """Main entrypoint."""
    app()


if __name__ == "__main__":
    main()
