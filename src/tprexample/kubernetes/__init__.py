"""Kubernetes client module for tpr-example.

This module handles all interactions with the Kubernetes API.
"""

from tprexample.kubernetes.connection import KubernetesConnection, build_config
from tprexample.kubernetes.scheme import GroupVersion, Scheme

__all__ = [
    "KubernetesConnection",
    "build_config",
    "GroupVersion",
    "Scheme",
]
