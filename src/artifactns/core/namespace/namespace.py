"""Hierarchical artifact namespaces.

A namespace is a named dictionary of artifact *requirements* and
*selections*. Namespaces mirror project structure: ``one:two`` is a child
of ``one``, which is a child of ``root``. Requirements declared on a
namespace are inherited by its descendants, so a version selected deep in
the hierarchy is validated against the nearest requirement found walking
up to the root.

Example::

    one = registry.get_or_create("one")
    one.need({"bar": "foo:bar:jar:1.0 | ~>1.0"})
    one.need("foo:baz:jar:>1.2 <1.3 !(>=1.2.5 & <=1.2.6)")

    two = registry.get_or_create("one:two")
    two.use({"bar": "0.9"})                  # RequirementViolation
    two.use({"bar": "1.1.1"})                # selected
    two.use("foo:baz:jar:1.2.4")             # selected
    two.use({"bat": "foo:bat:jar:0.9"})      # no requirement, selected

Validation only ever looks at the namespace itself and its ancestors: a
requirement declared on a parent does not revalidate selections already
stored on its children.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Iterable, Iterator, Mapping
from typing import TYPE_CHECKING, Any, Union

from artifactns.core.coordinate import ArtifactCoordinate, is_structured_mapping, normalize_spec
from artifactns.core.namespace.models import ArtifactRequirement
from artifactns.core.requirement import VersionRequirement
from artifactns.exceptions import (
    ArtifactNotFoundError,
    ParseError,
    RequirementViolation,
    StructuralError,
)

if TYPE_CHECKING:
    from artifactns.core.namespace.registry import NamespaceRegistry

logger = logging.getLogger(__name__)

ROOT: str = "root"

# A selection is either a bare version or a full coordinate.
Binding = Union[str, ArtifactCoordinate]


def _flatten(specs: Iterable[Any]) -> Iterator[Any]:
    for spec in specs:
        if isinstance(spec, (list, tuple)):
            yield from _flatten(spec)
        else:
            yield spec


def _named_items(spec: Any) -> list[tuple[str | None, Any]]:
    """Split a spec argument into ``(alias or None, value)`` pairs."""
    if isinstance(spec, Mapping) and not is_structured_mapping(spec):
        return [(str(name), value) for name, value in spec.items()]
    return [(None, spec)]


class ArtifactNamespace:
    """A named scope of artifact requirements, selections and aliases.

    Namespaces are created through ``NamespaceRegistry.get_or_create``;
    the registry supplies parent lookup, artifact materialisation and the
    best-version search.
    """

    def __init__(self, name: str, registry: NamespaceRegistry) -> None:
        self._name = name
        self._registry = registry
        self._parent: ArtifactNamespace | str | None = None
        self._lock = threading.RLock()
        self._using: dict[str, Binding] = {}
        self._requires: dict[str, ArtifactRequirement] = {}
        self._aliases: dict[str, str] = {}

    # -- hierarchy ----------------------------------------------------------

    @property
    def name(self) -> str:
        return self._name

    @property
    def is_root(self) -> bool:
        return self._name == ROOT

    @property
    def parent(self) -> ArtifactNamespace | None:
        """The enclosing namespace; ``None`` for root."""
        if self.is_root:
            return None
        if not isinstance(self._parent, ArtifactNamespace):
            name = self._parent
            if name is None:
                name = ":".join(self._name.split(":")[:-1]) or ROOT
            self._parent = self._registry.get_or_create(name)
        return self._parent

    @parent.setter
    def parent(self, parent: ArtifactNamespace | str) -> None:
        if self.is_root:
            raise StructuralError("Cannot set parent of root namespace!")
        self._parent = parent

    def ancestors(self) -> Iterator[ArtifactNamespace]:
        """This namespace followed by each parent up to root."""
        namespace: ArtifactNamespace | None = self
        while namespace is not None:
            yield namespace
            namespace = namespace.parent

    # -- key resolution -----------------------------------------------------

    @staticmethod
    def _normalize_name(name: Any) -> str:
        return normalize_spec(name)[0]

    def _resolve_key(self, name: Any) -> str:
        """Canonical key for *name*, following aliases up the hierarchy."""
        key = self._normalize_name(name)
        if ":" in key:
            return key
        for namespace in self.ancestors():
            target = namespace._aliases.get(key)
            if target is not None:
                return target
        return key

    def _lookup(self, table: Mapping[str, Any], name: Any) -> Any:
        key = self._normalize_name(name)
        for candidate in (self._resolve_key(name), key, self._aliases.get(key)):
            if candidate is not None and candidate in table:
                return table[candidate]
        return None

    # -- queries ------------------------------------------------------------

    def spec(self, name: Any) -> ArtifactCoordinate | None:
        """The selection for *name* here or in the nearest ancestor.

        Version-only selections are completed with the attributes of the
        active requirement when there is one.
        """
        with self._lock:
            using = self._lookup(self._using, name)
            alias = self._aliases.get(self._normalize_name(name))
        if isinstance(using, ArtifactCoordinate):
            return using
        if using is not None:
            needed = self.requirement(name)
            if needed is not None:
                return needed.coordinate.with_version(using)
            return ArtifactCoordinate(version=using)
        parent = self.parent
        if parent is None:
            return None
        found = parent.spec(name)
        if found is None and alias is not None:
            found = parent.spec(alias)
        return found

    def requirement(self, name: Any) -> ArtifactRequirement | None:
        """The requirement for *name* here or in the nearest ancestor."""
        with self._lock:
            found = self._lookup(self._requires, name)
            alias = self._aliases.get(self._normalize_name(name))
        if found is not None:
            return found
        parent = self.parent
        if parent is None:
            return None
        found = parent.requirement(name)
        if found is None and alias is not None:
            found = parent.requirement(alias)
        return found

    def satisfied(self, name: Any) -> bool:
        """True if *name* has both a requirement and a selection meeting it."""
        needed, selected = self.requirement(name), self.spec(name)
        if needed is None or selected is None:
            return False
        return needed.version.satisfied_by(selected.version)

    def aliases(self) -> dict[str, str]:
        """Alias name to canonical key, for this namespace only."""
        with self._lock:
            return {k: v for k, v in self._aliases.items() if ":" not in k}

    def requirements(self) -> dict[str, ArtifactRequirement]:
        """Requirements declared on this namespace, by key."""
        with self._lock:
            return dict(self._requires)

    def selections(self) -> dict[str, Binding]:
        """Selections made on this namespace, by key or alias."""
        with self._lock:
            return dict(self._using)

    # -- mutation -----------------------------------------------------------

    def need(self, *specs: Any) -> ArtifactNamespace:
        """Declare version requirements on this namespace.

        Each spec is a coordinate whose version slot holds a requirement
        (``"foo:bar:jar:>1.0"``), or a mapping of alias to such a
        coordinate. For aliases that already have a requirement, the value
        may be a bare requirement string (``{"bar": ">=2.0"}``).

        Named requirements are checked against an existing local selection
        before they are stored.

        Raises:
            ParseError: If a spec or requirement is malformed.
            RequirementViolation: If an existing selection does not satisfy
                the new named requirement.
        """
        for spec in _flatten(specs):
            for alias, value in _named_items(spec):
                needed = self._build_requirement(alias, value)
                key = needed.key
                with self._lock:
                    if alias is not None:
                        current = self._lookup(self._using, alias)
                        if current is None:
                            current = self._using.get(key)
                        self._fail_unless_satisfied(needed, self._as_candidate(current))
                    self._requires[key] = needed
                    if alias is not None:
                        self._aliases[alias] = key
                        self._aliases[key] = alias
                        if alias in self._using:
                            self._using[key] = self._using.pop(alias)
                logger.debug("%s needs %s", self._name, needed)
        return self

    def use(self, *specs: Any) -> ArtifactNamespace:
        """Select artifact versions for this namespace.

        Each spec is a full coordinate, or a mapping of alias to either a
        version or a full coordinate.

        Raises:
            ParseError: If a spec is malformed.
            RequirementViolation: If a selection violates the nearest
                requirement.
        """
        self._select(specs, default=False)
        return self

    __lshift__ = use

    def default(self, *specs: Any) -> ArtifactNamespace:
        """Select versions unless an explicit choice already applies.

        The write is skipped when a selection exists that satisfies the
        active requirement, or when a selection exists and there is no
        requirement at all.
        """
        self._select(specs, default=True)
        return self

    def delete(self, name: Any) -> ArtifactNamespace:
        """Remove *name* from requirements, selections and aliases."""
        with self._lock:
            key = self._normalize_name(name)
            resolved = self._resolve_key(name)
            entries = {key, resolved, self._aliases.get(key), self._aliases.get(resolved)}
            for entry in entries:
                if entry is None:
                    continue
                self._requires.pop(entry, None)
                self._using.pop(entry, None)
                self._aliases.pop(entry, None)
        return self

    def clear(self) -> None:
        """Forget every requirement, selection and alias of this namespace."""
        with self._lock:
            self._using = {}
            self._requires = {}
            self._aliases = {}

    # -- artifacts ----------------------------------------------------------

    def resolve(self, name: Any) -> ArtifactCoordinate:
        """Concrete coordinate for *name*.

        Uses the selection when there is one; otherwise the active
        requirement is handed to the registry's ``ArtifactSearch``.

        Raises:
            ArtifactNotFoundError: If *name* is unknown or cannot be resolved.
        """
        selected = self.spec(name)
        if selected is None:
            needed = self.requirement(name)
            if needed is None:
                raise ArtifactNotFoundError(
                    f"No artifact {name!r} selected or required in namespace {self._name}"
                )
            return self._registry.search.best_version(needed.coordinate)
        if not selected.is_complete:
            raise ArtifactNotFoundError(
                f"Selection {selected} for {name!r} in namespace {self._name} "
                "has no group or id; declare a requirement or use a full spec"
            )
        return self._concrete(selected)

    def values(self, include_parents: bool = False) -> list[Any]:
        """Materialised artifacts selected in this namespace.

        With ``include_parents``, ancestors' selections are added for
        artifacts not already selected closer to this namespace.
        """
        seen: dict[str, Any] = {}
        namespaces = self.ancestors() if include_parents else iter([self])
        for namespace in namespaces:
            with namespace._lock:
                keys = list(namespace._using)
            for key in keys:
                selected = namespace.spec(key)
                if selected is None or not selected.is_complete:
                    logger.warning(
                        "Skipping incomplete selection %r in namespace %s", key, namespace.name
                    )
                    continue
                if selected.key not in seen:
                    seen[selected.key] = self._materialize(namespace._concrete(selected))
        return list(seen.values())

    def values_at(self, *names: Any) -> list[Any]:
        """Materialised artifacts for each of *names*."""
        return [self._materialize(self.resolve(name)) for name in names]

    def __getitem__(self, names: Any) -> Any:
        if isinstance(names, tuple):
            return self.values_at(*names)
        return self.values_at(names)[0]

    def __setitem__(self, name: Any, spec: Any) -> None:
        self.use({self._normalize_name(name): spec})

    def __iter__(self) -> Iterator[Any]:
        return iter(self.values())

    def __repr__(self) -> str:
        return f"<ArtifactNamespace {self._name}>"

    # -- internals ----------------------------------------------------------

    def _concrete(self, coordinate: ArtifactCoordinate) -> ArtifactCoordinate:
        if VersionRequirement.is_version(coordinate.version):
            return coordinate
        return self._registry.search.best_version(coordinate)

    def _materialize(self, coordinate: ArtifactCoordinate) -> Any:
        self._registry.catalog.add(coordinate)
        return self._registry.materialize(coordinate)

    def _build_requirement(self, alias: str | None, value: Any) -> ArtifactRequirement:
        if isinstance(value, ArtifactRequirement):
            return value
        if alias is not None and isinstance(value, str) and value.count(":") < 2:
            known = self.requirement(alias)
            if known is None:
                raise ParseError(
                    f"Cannot tell which artifact {alias!r} is from requirement "
                    f"{value!r}; give a full spec"
                )
            return known.with_requirement(value)
        _, coordinate = normalize_spec(value)
        if coordinate is None or not coordinate.version:
            raise ParseError(f"Requirement {value!r} has no version part")
        return ArtifactRequirement.from_coordinate(coordinate, coordinate.version)

    @staticmethod
    def _as_candidate(binding: Binding | None) -> ArtifactCoordinate | None:
        if binding is None or isinstance(binding, ArtifactCoordinate):
            return binding
        return ArtifactCoordinate(version=binding)

    @staticmethod
    def _fail_unless_satisfied(
        needed: ArtifactRequirement | None, candidate: ArtifactCoordinate | None
    ) -> None:
        if needed is None or candidate is None:
            return
        version = candidate.version
        if not needed.version.satisfied_by(version):
            raise RequirementViolation(f"Version requirement {needed} not met by {version}")
        if candidate.group is not None and candidate.attributes() != needed.attributes():
            raise RequirementViolation(
                f"Artifact attributes mismatch, required {needed}, got {candidate}"
            )

    def _select(self, specs: Iterable[Any], *, default: bool) -> None:
        for spec in _flatten(specs):
            for alias, value in _named_items(spec):
                if alias is None:
                    key, coordinate = normalize_spec(value)
                    if coordinate is None:
                        raise ParseError(f"Cannot select {value!r}: not an artifact spec")
                    self._set(key, coordinate, default=default)
                elif VersionRequirement.is_version(value):
                    self._set(alias, value.strip(), default=default)
                else:
                    _, coordinate = normalize_spec(value)
                    if coordinate is None:
                        raise ParseError(
                            f"Cannot select {value!r} for {alias!r}: expected a version or full spec"
                        )
                    self._set(alias, coordinate, default=default)

    def _set(self, name: str, binding: Binding, *, default: bool) -> None:
        with self._lock:
            needed = self.requirement(name)
            if default:
                current = self.spec(name)
                if current is not None:
                    if needed is None or needed.version.satisfied_by(current.version):
                        logger.debug("%s keeps %s over default %s", self._name, current, binding)
                        return
            self._fail_unless_satisfied(needed, self._as_candidate(binding))

            key = self._resolve_key(name)
            if isinstance(binding, ArtifactCoordinate) and ":" not in name:
                key = binding.key
                self._aliases[name] = key
                self._aliases[key] = name
            if key != name:
                self._using.pop(name, None)
            self._using[key] = binding
        logger.debug("%s uses %s => %s", self._name, name, binding)
