"""Example resource manager.

This module runs the demonstration: register the Example type, make sure an
instance exists and list all instances.
"""

import logging
import sys
from typing import TextIO

from kubernetes import client

from tprexample.errors import ApiRequestError, is_not_found
from tprexample.kubernetes.connection import KubernetesConnection
from tprexample.kubernetes.registration import EXAMPLE_TPR, ThirdPartyResource, ThirdPartyResourceRegistrar
from tprexample.kubernetes.rest import CONTENT_TYPE_JSON, RESTClient, RestConfig, rest_client_for
from tprexample.kubernetes.scheme import Scheme
from tprexample.models import (
    DEFAULT_NAMESPACE,
    EXAMPLE_NAME,
    EXAMPLE_RESOURCE,
    SCHEME_GROUP_VERSION,
    Example,
    ExampleList,
    add_to_scheme,
    new_example,
)

logger = logging.getLogger(__name__)


class ExampleResourceManager:
    """Runs the Example resource demonstration against one cluster.

    Each step takes what the previous one produced: the connection's
    configuration is the baseline for the scoped REST configuration, which in
    turn is the only input of the REST client.
    """

    def __init__(
        self,
        connection: KubernetesConnection,
        tpr: ThirdPartyResource = EXAMPLE_TPR,
        namespace: str = DEFAULT_NAMESPACE,
        name: str = EXAMPLE_NAME,
        establish_timeout: float = 0,
        out: TextIO | None = None,
    ):
        """Initialize the manager.

        Args:
            connection: The Kubernetes connection to use.
            tpr: The ThirdPartyResource describing the Example type.
            namespace: Namespace of the Example instance.
            name: Name of the Example instance.
            establish_timeout: Seconds to wait for a new registration to be served.
            out: Stream the results are printed to. Defaults to standard output.
        """
        self.connection = connection
        self.tpr = tpr
        self.namespace = namespace
        self.name = name
        self.establish_timeout = establish_timeout
        self.out = out or sys.stdout
        self.registrar = ThirdPartyResourceRegistrar(connection)

    def _report(self, message: str) -> None:
        print(message, file=self.out)

    def ensure_registration(self) -> client.V1CustomResourceDefinition:
        """Register the Example type unless it already exists."""
        definition, created = self.registrar.ensure(self.tpr, self.establish_timeout)
        if created:
            self._report(f"CREATED: {definition!r}\nFROM: {self.tpr!r}")
        else:
            self._report(f"SKIPPING: already exists {definition!r}")
        return definition

    def build_scheme(self) -> Scheme:
        """Build the scheme holding the Example types."""
        scheme = Scheme()
        add_to_scheme(scheme)
        return scheme

    def build_rest_client(self, scheme: Scheme) -> RESTClient:
        """Build a REST client scoped to the Example API group/version.

        The scoped configuration is a copy of the connection's configuration.
        """
        rest_config = RestConfig.for_group_version(
            self.connection.configuration,
            SCHEME_GROUP_VERSION,
            api_path="/apis",
            content_type=CONTENT_TYPE_JSON,
        )
        return rest_client_for(rest_config, scheme)

    def ensure_example(self, rest_client: RESTClient) -> Example:
        """Fetch the Example instance, creating it if it does not exist."""
        try:
            example = rest_client.get(EXAMPLE_RESOURCE, self.name, self.namespace, Example)
        except ApiRequestError as e:
            if not is_not_found(e):
                raise
            logger.info(f"Example {self.namespace}/{self.name} not found, creating it")
            example = rest_client.create(EXAMPLE_RESOURCE, new_example(self.name), self.namespace)
            self._report(f"CREATED: {example!r}")
            return example

        self._report(f"GET: {example!r}")
        return example

    def list_examples(self, rest_client: RESTClient) -> ExampleList:
        """List all Example instances."""
        examples = rest_client.list(EXAMPLE_RESOURCE, ExampleList)
        logger.info(f"Found {len(examples.items)} Example(s)")
        self._report(f"LIST: {examples!r}")
        return examples

    def run(self) -> ExampleList:
        """Run the whole demonstration.

        Any error other than a missing registration or instance propagates and
        stops the run before the following steps.

        Returns:
            The listed Example instances.
        """
        logger.info(f"Ensuring {self.tpr.name} is registered")
        self.ensure_registration()

        rest_client = self.build_rest_client(self.build_scheme())

        logger.info(f"Ensuring Example {self.namespace}/{self.name} exists")
        self.ensure_example(rest_client)

        logger.info("Listing Examples")
        return self.list_examples(rest_client)
