"""Wire models for the Example custom resource.

These models mirror the JSON documents exchanged with the API server. Field
names are snake_case in Python and camelCase on the wire.
"""

from typing import Any, ClassVar

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from tprexample.kubernetes.scheme import GroupVersion, Scheme

# Fixed example constants
EXAMPLE_GROUP = "k8s.io"
EXAMPLE_VERSION = "v1"
EXAMPLE_RESOURCE = "examples"
DEFAULT_NAMESPACE = "default"
EXAMPLE_NAME = "example1"

SCHEME_GROUP_VERSION = GroupVersion(EXAMPLE_GROUP, EXAMPLE_VERSION)


class WireModel(BaseModel):
    """Base for all wire models.

    Unknown fields returned by the server are kept so that a fetched object
    can be printed or sent back without losing data.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="allow")


class ObjectMeta(WireModel):
    """Standard object metadata."""

    name: str | None = None
    generate_name: str | None = None
    namespace: str | None = None
    uid: str | None = None
    resource_version: str | None = None
    generation: int | None = None
    creation_timestamp: str | None = None
    self_link: str | None = None
    labels: dict[str, str] | None = None
    annotations: dict[str, str] | None = None


class ListMeta(WireModel):
    """Standard list metadata."""

    resource_version: str | None = None
    continue_: str | None = Field(default=None, alias="continue")
    remaining_item_count: int | None = None
    self_link: str | None = None


class ExampleSpec(WireModel):
    """Desired state of an Example."""

    foo: str = ""
    bar: bool = False


class Example(WireModel):
    """An instance of the Example custom resource."""

    api_version: str | None = None
    kind: str | None = None
    metadata: ObjectMeta = Field(default_factory=ObjectMeta)
    spec: ExampleSpec = Field(default_factory=ExampleSpec)

    @property
    def name(self) -> str | None:
        return self.metadata.name


class ExampleList(WireModel):
    """A list of Example resources as returned by a list call."""

    api_version: str | None = None
    kind: str | None = None
    metadata: ListMeta = Field(default_factory=ListMeta)
    items: list[Example] = Field(default_factory=list)


class ListOptions(WireModel):
    """Options for a list call, sent as query parameters."""

    KIND: ClassVar[str] = "ListOptions"

    label_selector: str | None = None
    field_selector: str | None = None
    resource_version: str | None = None
    limit: int | None = None
    continue_: str | None = Field(default=None, alias="continue")

    def to_query_params(self) -> list[tuple[str, Any]]:
        """Render the options as query parameters.

        Returns:
            List of (name, value) pairs for the options that are set.
        """
        data = self.model_dump(by_alias=True, exclude_none=True)
        return list(data.items())


class DeleteOptions(WireModel):
    """Options for a delete call, sent as the request body."""

    KIND: ClassVar[str] = "DeleteOptions"

    grace_period_seconds: int | None = None
    propagation_policy: str | None = None
    dry_run: list[str] | None = None


def new_example(
    name: str = EXAMPLE_NAME, foo: str = "hello", bar: bool = True, namespace: str | None = None
) -> Example:
    """Build the Example instance this program creates when none exists."""
    return Example(
        metadata=ObjectMeta(name=name, namespace=namespace),
        spec=ExampleSpec(foo=foo, bar=bar),
    )


def add_to_scheme(scheme: Scheme) -> None:
    """Register the Example types and the list/delete option types."""
    scheme.add_known_types(
        SCHEME_GROUP_VERSION,
        Example,
        ExampleList,
        ListOptions,
        DeleteOptions,
    )
