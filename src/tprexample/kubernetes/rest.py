"""REST client scoped to a single API group/version.

This module builds requests against custom resource paths of the form
``<api_path>/<group>/<version>[/namespaces/<namespace>]/<resource>[/<name>]``
and encodes/decodes bodies through a Scheme.
"""

import builtins
import copy
import logging
from typing import Any, TypeVar

from kubernetes import client
from kubernetes.client.rest import ApiException
from pydantic import BaseModel

from tprexample.errors import ConfigResolutionError, from_api_exception
from tprexample.kubernetes.scheme import GroupVersion, Scheme

logger = logging.getLogger(__name__)

M = TypeVar("M", bound=BaseModel)

CONTENT_TYPE_JSON = "application/json"
DEFAULT_API_PATH = "/apis"


class RestConfig:
    """Client configuration scoped to an API group/version.

    Holds its own copy of the base configuration so that changes made for the
    scoped client never leak back into the general purpose one.
    """

    def __init__(
        self,
        configuration: client.Configuration,
        group_version: GroupVersion | None = None,
        api_path: str = DEFAULT_API_PATH,
        content_type: str = CONTENT_TYPE_JSON,
    ):
        self.configuration = configuration
        self.group_version = group_version
        self.api_path = api_path
        self.content_type = content_type

    @classmethod
    def for_group_version(
        cls,
        base: client.Configuration,
        group_version: GroupVersion,
        api_path: str = DEFAULT_API_PATH,
        content_type: str = CONTENT_TYPE_JSON,
    ) -> "RestConfig":
        """Derive a scoped configuration from a base configuration.

        Args:
            base: The general purpose configuration to copy.
            group_version: The API group/version to scope requests to.
            api_path: Path prefix for the group (``/apis`` for named groups).
            content_type: Content type used for request and response bodies.

        Returns:
            A new RestConfig that does not share state with ``base``.
        """
        return cls(copy.deepcopy(base), group_version, api_path, content_type)


def rest_client_for(rest_config: RestConfig, scheme: Scheme) -> "RESTClient":
    """Build a REST client from a scoped configuration.

    Args:
        rest_config: The scoped configuration.
        scheme: The scheme holding the types exchanged through this client.

    Returns:
        The REST client.

    Raises:
        ConfigResolutionError: If the configuration is incomplete.
    """
    if rest_config.group_version is None:
        raise ConfigResolutionError("GroupVersion is required when initializing a REST client")
    if not rest_config.content_type:
        raise ConfigResolutionError("ContentType is required when initializing a REST client")
    if rest_config.group_version not in scheme.group_versions():
        raise ConfigResolutionError(f"No types registered in the scheme for {rest_config.group_version}")

    return RESTClient(rest_config, scheme)


class RESTClient:
    """Client performing typed create/get/list/delete calls for one API group/version."""

    def __init__(self, rest_config: RestConfig, scheme: Scheme, api_client: client.ApiClient | None = None):
        """Initialize the REST client.

        Args:
            rest_config: The scoped configuration.
            scheme: The scheme used to encode request bodies and decode responses.
            api_client: Optional API client to use. Built from the configuration if not given.
        """
        self.rest_config = rest_config
        self.scheme = scheme
        self.api_client = api_client or client.ApiClient(configuration=rest_config.configuration)

    def resource_path(self, resource: str, namespace: str | None = None, name: str | None = None) -> str:
        """Build the request path for a resource.

        Args:
            resource: The plural resource name.
            namespace: Namespace of the resource. If None, the path is cluster-wide.
            name: Name of a single object. If None, the path addresses the collection.

        Returns:
            The absolute request path.
        """
        group_version = self.rest_config.group_version
        segments = [self.rest_config.api_path.rstrip("/"), group_version.group, group_version.version]
        if namespace:
            segments += ["namespaces", namespace]
        segments.append(resource)
        if name:
            segments.append(name)
        return "/".join(segments)

    def get(self, resource: str, name: str, namespace: str | None, into: type[M]) -> M:
        """Fetch a single object.

        Raises:
            NotFoundError: If the object does not exist.
            ApiRequestError: For any other unsuccessful response.
        """
        data = self._do("GET", self.resource_path(resource, namespace, name))
        return self.scheme.decode(data, into)

    def create(self, resource: str, obj: M, namespace: str | None = None) -> M:
        """Create an object and return the server's representation of it."""
        body = self.scheme.encode(obj)
        data = self._do("POST", self.resource_path(resource, namespace), body=body)
        return self.scheme.decode(data, type(obj))

    def list(
        self,
        resource: str,
        into: type[M],
        namespace: str | None = None,
        options: BaseModel | None = None,
    ) -> M:
        """List objects of a resource.

        Args:
            resource: The plural resource name.
            into: The list model class to decode into.
            namespace: Namespace to list in. If None, all namespaces are listed.
            options: Optional list options rendered as query parameters.

        Returns:
            The decoded list.
        """
        query_params = options.to_query_params() if options is not None else []
        data = self._do("GET", self.resource_path(resource, namespace), query_params=query_params)
        return self.scheme.decode(data, into)

    def delete(
        self,
        resource: str,
        name: str,
        namespace: str | None = None,
        options: BaseModel | None = None,
    ) -> Any:
        """Delete an object.

        Returns:
            The server's response, usually a Status document.
        """
        body = self.scheme.encode(options) if options is not None else None
        return self._do("DELETE", self.resource_path(resource, namespace, name), body=body)

    def _do(
        self,
        method: str,
        path: str,
        query_params: builtins.list[tuple[str, Any]] | None = None,
        body: Any = None,
    ) -> Any:
        """Send a request and return the deserialized response body.

        Raises:
            ApiRequestError: If the server answers with an unsuccessful status.
        """
        content_type = self.rest_config.content_type
        header_params = {"Accept": content_type}
        if body is not None:
            header_params["Content-Type"] = content_type

        logger.debug(f"{method} {path}")
        try:
            return self.api_client.call_api(
                path,
                method,
                path_params={},
                query_params=query_params or [],
                header_params=header_params,
                body=body,
                post_params=[],
                files={},
                response_type="object",
                auth_settings=["BearerToken"],
                _return_http_data_only=True,
                _preload_content=True,
            )
        except ApiException as e:
            logger.debug(f"{method} {path} failed with status {e.status}")
            raise from_api_exception(e) from e
