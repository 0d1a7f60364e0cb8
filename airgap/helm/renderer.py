"""Rendering of Helm charts into Kubernetes manifests."""

import logging
import subprocess
from pathlib import Path

from ..errors import RenderError

logger = logging.getLogger(__name__)


class HelmRenderer:
    """Renders a local chart directory with `helm template`."""

    def __init__(
        self,
        helm_binary: str = "helm",
        release_name: str = "test",
        include_hooks: bool = True,
    ):
        self.helm_binary = helm_binary
        self.release_name = release_name
        self.include_hooks = include_hooks

    def build_command(self, chart_path: Path) -> list[str]:
        """Build the helm template command line for a chart."""
        cmd = [self.helm_binary, "template", self.release_name, str(chart_path)]
        if not self.include_hooks:
            cmd.append("--no-hooks")
        return cmd

    def render(self, chart_path: str | Path) -> str:
        """
        Render a chart directory into multi-document manifest YAML.

        Args:
            chart_path: Path to a chart directory containing Chart.yaml

        Returns:
            The rendered manifest, documents separated by '---'.

        Raises:
            RenderError: If the chart is missing or helm fails.
        """
        chart_path = Path(chart_path)
        if not chart_path.is_dir():
            raise RenderError(f"Chart directory not found: {chart_path}")
        if not (chart_path / "Chart.yaml").exists():
            raise RenderError(f"Chart.yaml not found in {chart_path}")

        cmd = self.build_command(chart_path)
        logger.info(f"Rendering chart {chart_path} as release {self.release_name}")
        logger.debug(f"Running: {' '.join(cmd)}")

        try:
            result = subprocess.run(cmd, capture_output=True, text=True, check=False)
        except FileNotFoundError as e:
            raise RenderError(f"Helm binary not found: {self.helm_binary}") from e

        if result.returncode != 0:
            raise RenderError(
                f"helm template failed with exit code {result.returncode}:\n{result.stderr.strip()}"
            )
        if result.stderr:
            logger.debug(result.stderr.strip())

        return result.stdout
