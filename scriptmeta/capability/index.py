"""Per-folder accumulation of provided capabilities."""

from collections.abc import Iterator

from scriptmeta.capability.provided import MergeKey, ProvidedResourceTypeCapability


class ProvidedCapabilityIndex:
    """Provided capabilities of one resource type folder, keyed by MergeKey.

    An extends declaration attaches to the capabilities of the resource type's
    default script (no selectors, extension or method). When no such script
    has been seen yet, a placeholder carries the declaration until one shows
    up, so the result does not depend on the order files are processed in.
    """

    def __init__(self) -> None:
        self._entries: dict[MergeKey, list[ProvidedResourceTypeCapability]] = {}

    def add(self, capability: ProvidedResourceTypeCapability) -> ProvidedResourceTypeCapability:
        """Add a script capability, absorbing a pending extends declaration.

        Returns:
            The capability as stored
        """
        entries = self._entries.setdefault(capability.merge_key, [])
        if capability.extends_resource_type is None:
            extends = next(
                (entry.extends_resource_type for entry in entries if entry.extends_resource_type),
                None,
            )
            if extends is not None:
                capability = capability.with_extends(extends)
        if capability.script_engine is not None:
            entries[:] = [entry for entry in entries if not entry.is_extends_only]
        if capability not in entries:
            entries.append(capability)
        return capability

    def declare_extends(
        self, resource_types: frozenset[str], version: str | None, extends_resource_type: str
    ) -> None:
        """Attach a super type to the resource type's default capabilities."""
        key = MergeKey(frozenset(resource_types), (), None, None)
        entries = self._entries.get(key)
        if not entries:
            self._entries[key] = [
                ProvidedResourceTypeCapability(
                    resource_types=resource_types,
                    version=version,
                    extends_resource_type=extends_resource_type,
                )
            ]
            return

        merged: list[ProvidedResourceTypeCapability] = []
        for entry in entries:
            replacement = entry.with_extends(extends_resource_type)
            if replacement not in merged:
                merged.append(replacement)
        self._entries[key] = merged

    def __iter__(self) -> Iterator[ProvidedResourceTypeCapability]:
        for entries in self._entries.values():
            yield from entries

    def __len__(self) -> int:
        return sum(len(entries) for entries in self._entries.values())
