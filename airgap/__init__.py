"""helm-airgap: list the container images a Helm chart deploys."""

__version__ = "0.1.0"
