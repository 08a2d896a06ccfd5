"""Kubernetes connection management.

This module resolves the client configuration and holds the API clients built from it.
"""
import logging

import yaml
from kubernetes import client, config

from tprexample.errors import ConfigResolutionError

logger = logging.getLogger(__name__)


def build_config(kubeconfig: str = "", context: str | None = None) -> client.Configuration:
    """Resolve a client configuration.

    The library's global default configuration is never touched: the loaders
    write into a fresh Configuration that is returned to the caller.

    Args:
        kubeconfig: Path to a kubeconfig file. If empty, in-cluster credentials are used.
        context: Kubeconfig context to use. Ignored for in-cluster configuration.

    Returns:
        The resolved client configuration.

    Raises:
        ConfigResolutionError: If the kubeconfig file or in-cluster credentials are missing or invalid.
    """
    configuration = client.Configuration()

    if kubeconfig:
        try:
            config.load_kube_config(
                config_file=kubeconfig,
                context=context,
                client_configuration=configuration,
                persist_config=False,
            )
        except (config.ConfigException, OSError, yaml.YAMLError, TypeError, AttributeError) as e:
            # Malformed or non-mapping YAML surfaces as YAMLError, TypeError or AttributeError
            logger.error(f"Failed to load kubeconfig {kubeconfig}. Ensure that the file is available and valid.")
            raise ConfigResolutionError(f"Kubernetes configuration error: cannot load {kubeconfig}: {e}") from e
        logger.info(f"Using kubeconfig configuration from {kubeconfig}")
    else:
        try:
            config.load_incluster_config(client_configuration=configuration)
        except (config.ConfigException, OSError) as e:
            logger.error(
                "Failed to load in-cluster configuration. Pass --kubeconfig when running outside of a cluster."
            )
            raise ConfigResolutionError(
                f"Kubernetes configuration error: in-cluster credentials are missing or invalid: {e}"
            ) from e
        logger.info("Using in-cluster configuration")

    return configuration


class KubernetesConnection:
    """Connection to the Kubernetes API.

    Holds the general purpose API client built from a resolved configuration
    and the typed API groups used by tpr-example.
    """

    def __init__(self, configuration: client.Configuration):
        """Initialize the Kubernetes connection.

        Args:
            configuration: The resolved client configuration.
        """
        self.configuration = configuration
        self.api_client = client.ApiClient(configuration=configuration)
        self.apiextensions_v1_api = client.ApiextensionsV1Api(self.api_client)
        self.host = configuration.host

    @classmethod
    def from_kubeconfig(cls, kubeconfig: str = "", context: str | None = None) -> "KubernetesConnection":
        """Build a connection from an optional kubeconfig path."""
        return cls(build_config(kubeconfig, context))
