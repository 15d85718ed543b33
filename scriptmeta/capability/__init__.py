"""Capability value objects and the capability set."""

from scriptmeta.capability.capabilities import EMPTY, CapabilitySet
from scriptmeta.capability.index import ProvidedCapabilityIndex
from scriptmeta.capability.provided import (
    MergeKey,
    ProvidedResourceTypeCapability,
    ProvidedScriptCapability,
)
from scriptmeta.capability.required import RequiredResourceTypeCapability

__all__ = [
    "EMPTY",
    "CapabilitySet",
    "MergeKey",
    "ProvidedCapabilityIndex",
    "ProvidedResourceTypeCapability",
    "ProvidedScriptCapability",
    "RequiredResourceTypeCapability",
]
