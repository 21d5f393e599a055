"""Namespace and entity discovery."""

from phpreflect.application.discovery.namespace import NamespaceContents, NamespaceDiscovery

__all__ = [
    "NamespaceContents",
    "NamespaceDiscovery",
]
