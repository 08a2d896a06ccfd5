"""Configuration module for tpr-example.

This module handles the configuration of tpr-example through environment variables.
"""
import os

from pydantic import BaseModel, Field, field_validator

DEFAULT_ESTABLISH_TIMEOUT = 30


class ExampleConfig(BaseModel):
    """Configuration class for tpr-example.

    Attributes:
        kubeconfig: Path to a kubeconfig file. Empty means in-cluster credentials are used.
        context: Kubeconfig context to use. None means the file's current context.
        establish_timeout: Seconds to wait for a freshly registered resource type to be served.
    """
    kubeconfig: str = Field(default="", env="TPR_EXAMPLE_KUBECONFIG")
    context: str | None = Field(default=None, env="TPR_EXAMPLE_CONTEXT")
    establish_timeout: int = Field(default=DEFAULT_ESTABLISH_TIMEOUT, env="TPR_EXAMPLE_ESTABLISH_TIMEOUT")

    @field_validator("kubeconfig")
    def strip_kubeconfig(cls, v):
        """Treat a blank path as no path"""
        return v.strip()

    @field_validator("establish_timeout")
    def validate_establish_timeout(cls, v):
        """Validate that the timeout is not negative"""
        if v < 0:
            raise ValueError("Establish timeout must be zero or a positive number of seconds")
        return v

    @property
    def in_cluster(self) -> bool:
        """Whether ambient in-cluster credentials should be used."""
        return not self.kubeconfig

    @classmethod
    def from_env(cls):
        """Create a config instance from environment variables."""
        kubeconfig = os.getenv("TPR_EXAMPLE_KUBECONFIG", "")
        context = os.getenv("TPR_EXAMPLE_CONTEXT") or None

        timeout_str = os.getenv("TPR_EXAMPLE_ESTABLISH_TIMEOUT", str(DEFAULT_ESTABLISH_TIMEOUT))
        try:
            establish_timeout = int(timeout_str)
        except ValueError:
            raise ValueError(f"Invalid establish timeout: {timeout_str}")

        return cls(
            kubeconfig=kubeconfig,
            context=context,
            establish_timeout=establish_timeout,
        )
