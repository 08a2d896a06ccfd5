"""Type registry used to encode and decode custom resources.

A Scheme maps API group/version/kind triples to the pydantic models that
represent them. Each REST client is given its own Scheme instance; nothing is
registered globally.
"""

import logging
from typing import Any, NamedTuple, TypeVar

from pydantic import BaseModel, ValidationError

from tprexample.errors import SerializationError

logger = logging.getLogger(__name__)

M = TypeVar("M", bound=BaseModel)


class GroupVersion(NamedTuple):
    group: str
    version: str

    @property
    def api_version(self) -> str:
        """The apiVersion string used on the wire (core group has no prefix)."""
        if not self.group:
            return self.version
        return f"{self.group}/{self.version}"

    def __str__(self) -> str:
        return self.api_version


class GroupVersionKind(NamedTuple):
    group: str
    version: str
    kind: str

    @property
    def group_version(self) -> GroupVersion:
        return GroupVersion(self.group, self.version)


class Scheme:
    """Registry of known types for one or more API group/versions."""

    def __init__(self):
        self._types: dict[GroupVersionKind, type[BaseModel]] = {}
        self._kinds: dict[type[BaseModel], GroupVersionKind] = {}

    def add_known_types(self, group_version: GroupVersion, *types: type[BaseModel]) -> None:
        """Register model classes under a group/version.

        The kind is the class name unless the class declares a KIND attribute.

        Args:
            group_version: The group/version the types belong to.
            *types: The model classes to register.
        """
        for model in types:
            kind = getattr(model, "KIND", None) or model.__name__
            gvk = GroupVersionKind(group_version.group, group_version.version, kind)
            self._types[gvk] = model
            self._kinds[model] = gvk
            logger.debug(f"Registered {kind} in {group_version}")

    def kind_for(self, model: type[BaseModel]) -> GroupVersionKind:
        """Get the group/version/kind a model class is registered under.

        Raises:
            SerializationError: If the class is not registered.
        """
        try:
            return self._kinds[model]
        except KeyError:
            raise SerializationError(f"{model.__name__} is not registered in the scheme") from None

    def recognizes(self, api_version: str, kind: str) -> bool:
        """Check whether an apiVersion/kind pair is registered."""
        group, _, version = api_version.rpartition("/")
        return GroupVersionKind(group, version, kind) in self._types

    def group_versions(self) -> set[GroupVersion]:
        """All group/versions that have at least one registered type."""
        return {gvk.group_version for gvk in self._types}

    def encode(self, obj: BaseModel) -> dict[str, Any]:
        """Encode a registered model to a JSON-ready dictionary.

        The apiVersion and kind fields are filled in from the registry.

        Args:
            obj: The object to encode.

        Returns:
            The wire representation of the object.
        """
        gvk = self.kind_for(type(obj))
        data = obj.model_dump(mode="json", by_alias=True, exclude_none=True)
        data["apiVersion"] = gvk.group_version.api_version
        data["kind"] = gvk.kind
        return data

    def decode(self, data: Any, into: type[M]) -> M:
        """Decode a wire dictionary into a registered model.

        Args:
            data: The deserialized JSON document.
            into: The model class expected.

        Returns:
            The decoded object.

        Raises:
            SerializationError: If the type is unknown or the document does not match it.
        """
        gvk = self.kind_for(into)

        if not isinstance(data, dict):
            raise SerializationError(f"Cannot decode {type(data).__name__} into {gvk.kind}")

        kind = data.get("kind")
        if kind and kind != gvk.kind:
            raise SerializationError(f"Cannot decode {kind} into {gvk.kind}")

        try:
            return into.model_validate(data)
        except ValidationError as e:
            raise SerializationError(f"Invalid {gvk.kind} document: {e}") from e
