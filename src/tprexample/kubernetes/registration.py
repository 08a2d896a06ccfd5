"""Registration of the ThirdPartyResource custom API type.

ThirdPartyResources were removed from Kubernetes in favour of
CustomResourceDefinitions. The registration described by a ThirdPartyResource
is therefore submitted as the equivalent CustomResourceDefinition through the
apiextensions.k8s.io/v1 API.
"""

import logging
import re
import time
from typing import ClassVar

from kubernetes import client
from kubernetes.client.rest import ApiException
from pydantic import BaseModel, Field, field_validator

from tprexample.errors import NotFoundError, RegistrationTimeoutError, from_api_exception
from tprexample.kubernetes.connection import KubernetesConnection

logger = logging.getLogger(__name__)

_NAME_PATTERN = re.compile(r"^[a-z]([-a-z0-9]*[a-z0-9])?(\.[a-z0-9]([-a-z0-9]*[a-z0-9])?){2,}$")


class ThirdPartyResource(BaseModel):
    """Description of a custom API type.

    The name follows the ThirdPartyResource convention ``<kind-name>.<group>``:
    ``example.k8s.io`` declares kind ``Example`` in group ``k8s.io``.

    Attributes:
        name: Registration name.
        versions: Supported API versions. The first one is the storage version.
        description: Human readable description of the type.
    """

    NAME_ANNOTATION: ClassVar[str] = "tprexample.k8s.io/third-party-resource"
    DESCRIPTION_ANNOTATION: ClassVar[str] = "tprexample.k8s.io/description"
    # Groups ending in k8s.io or kubernetes.io are protected by the API server
    APPROVAL_ANNOTATION: ClassVar[str] = "api-approved.kubernetes.io"
    APPROVAL_VALUE: ClassVar[str] = "unapproved, example ThirdPartyResource"

    name: str
    versions: list[str] = Field(min_length=1)
    description: str = ""

    @field_validator("name")
    def validate_name(cls, v):
        """Validate the name as <kind-name>.<domain>.<tld>"""
        if not _NAME_PATTERN.match(v):
            raise ValueError(f"ThirdPartyResource name must be of the form kind-name.domain.tld, got {v!r}")
        return v

    @property
    def kind(self) -> str:
        """The kind, built by camel-casing the first name segment (cron-tab -> CronTab)."""
        kind_name = self.name.split(".", 1)[0]
        return "".join(part.capitalize() for part in kind_name.split("-"))

    @property
    def group(self) -> str:
        return self.name.split(".", 1)[1]

    @property
    def singular(self) -> str:
        return self.kind.lower()

    @property
    def plural(self) -> str:
        return f"{self.singular}s"

    @property
    def definition_name(self) -> str:
        """Name of the equivalent CustomResourceDefinition."""
        return f"{self.plural}.{self.group}"

    def to_custom_resource_definition(self) -> client.V1CustomResourceDefinition:
        """Build the CustomResourceDefinition carrying this registration."""
        spec_schema = client.V1JSONSchemaProps(
            type="object",
            properties={
                "foo": client.V1JSONSchemaProps(type="string"),
                "bar": client.V1JSONSchemaProps(type="boolean"),
            },
        )
        schema = client.V1CustomResourceValidation(
            open_apiv3_schema=client.V1JSONSchemaProps(
                type="object",
                properties={"spec": spec_schema},
            )
        )
        versions = [
            client.V1CustomResourceDefinitionVersion(
                name=version,
                served=True,
                storage=index == 0,
                schema=schema,
            )
            for index, version in enumerate(self.versions)
        ]

        return client.V1CustomResourceDefinition(
            api_version="apiextensions.k8s.io/v1",
            kind="CustomResourceDefinition",
            metadata=client.V1ObjectMeta(
                name=self.definition_name,
                annotations={
                    self.NAME_ANNOTATION: self.name,
                    self.DESCRIPTION_ANNOTATION: self.description,
                    self.APPROVAL_ANNOTATION: self.APPROVAL_VALUE,
                },
            ),
            spec=client.V1CustomResourceDefinitionSpec(
                group=self.group,
                scope="Namespaced",
                names=client.V1CustomResourceDefinitionNames(
                    kind=self.kind,
                    list_kind=f"{self.kind}List",
                    plural=self.plural,
                    singular=self.singular,
                ),
                versions=versions,
            ),
        )


EXAMPLE_TPR = ThirdPartyResource(
    name="example.k8s.io",
    versions=["v1"],
    description="An Example ThirdPartyResource",
)


def is_established(definition: client.V1CustomResourceDefinition) -> bool:
    """Check whether the API server serves a CustomResourceDefinition."""
    status = definition.status
    if status is None or not status.conditions:
        return False
    return any(cond.type == "Established" and cond.status == "True" for cond in status.conditions)


class ThirdPartyResourceRegistrar:
    """Registers ThirdPartyResources with the cluster API server."""

    # Seconds between two polls of the definition status
    POLL_INTERVAL: ClassVar[float] = 1.0

    def __init__(self, connection: KubernetesConnection):
        """Initialize the registrar.

        Args:
            connection: The Kubernetes connection to use
        """
        self.connection = connection

    def get(self, tpr: ThirdPartyResource) -> client.V1CustomResourceDefinition:
        """Get the registration of a ThirdPartyResource.

        Args:
            tpr: The ThirdPartyResource to look up

        Returns:
            The registered CustomResourceDefinition

        Raises:
            NotFoundError: If the type is not registered
            ApiRequestError: For any other API failure
        """
        try:
            return self.connection.apiextensions_v1_api.read_custom_resource_definition(tpr.definition_name)
        except ApiException as e:
            raise from_api_exception(e) from e

    def create(self, tpr: ThirdPartyResource) -> client.V1CustomResourceDefinition:
        """Register a ThirdPartyResource.

        Args:
            tpr: The ThirdPartyResource to register

        Returns:
            The created CustomResourceDefinition
        """
        body = tpr.to_custom_resource_definition()
        try:
            result = self.connection.apiextensions_v1_api.create_custom_resource_definition(body=body)
        except ApiException as e:
            logger.error(f"Error registering {tpr.name}: {e.status} {e.reason}")
            raise from_api_exception(e) from e
        logger.info(f"Registered {tpr.name} as CustomResourceDefinition {tpr.definition_name}")
        return result

    def wait_until_established(
        self, tpr: ThirdPartyResource, timeout: float
    ) -> client.V1CustomResourceDefinition | None:
        """Wait until the API server serves a freshly registered type.

        Args:
            tpr: The registered ThirdPartyResource
            timeout: Maximum number of seconds to wait. 0 disables waiting.

        Returns:
            The established CustomResourceDefinition, or None if waiting is disabled

        Raises:
            RegistrationTimeoutError: If the type is not established within the timeout
        """
        if timeout <= 0:
            return None

        deadline = time.monotonic() + timeout
        while True:
            definition = self.get(tpr)
            if is_established(definition):
                logger.info(f"CustomResourceDefinition {tpr.definition_name} is established")
                return definition
            if time.monotonic() >= deadline:
                raise RegistrationTimeoutError(
                    f"CustomResourceDefinition {tpr.definition_name} not established after {timeout}s"
                )
            logger.debug(f"Waiting for CustomResourceDefinition {tpr.definition_name} to be established")
            time.sleep(self.POLL_INTERVAL)

    def ensure(
        self, tpr: ThirdPartyResource, establish_timeout: float = 0
    ) -> tuple[client.V1CustomResourceDefinition, bool]:
        """Register a ThirdPartyResource unless it already exists.

        Args:
            tpr: The ThirdPartyResource to register
            establish_timeout: Seconds to wait for a new registration to be served

        Returns:
            A tuple of (registration, created) where created tells whether a
            creation request was issued
        """
        try:
            return self.get(tpr), False
        except NotFoundError:
            logger.info(f"{tpr.name} is not registered, creating it")

        result = self.create(tpr)
        self.wait_until_established(tpr, establish_timeout)
        return result, True
