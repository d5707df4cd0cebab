"""
Classification of interface alternatives.

When a disjunction holds several interface shapes, generated code needs a
runtime test telling them apart. Each interface gets a ``Discriminator``:
the properties it requires must be present and the properties only the
other shapes require must be absent.
"""

from __future__ import annotations

from dataclasses import dataclass

from ..models import InterfaceModel, Leaf
from ..utils import member_access
from .disjunctive import DisjunctiveResolver


@dataclass(frozen=True)
class Discriminator:
    """Presence test selecting one interface alternative."""

    # Properties that must be defined
    required: tuple[str, ...] = ()

    # Properties that must be undefined
    excluded: tuple[str, ...] = ()

    @property
    def is_vacuous(self) -> bool:
        """A vacuous discriminator matches anything: the alternative is the fallback."""
        return not self.required and not self.excluded

    def render(self, path: str) -> str:
        """
        Render the test as a boolean source expression over ``path``.

        Example:
            Discriminator(("a", "b"), ("c",)).render("input")
            -> "input.a !== undefined && input.b !== undefined && input.c === undefined"
        """
        conditions = [f"{member_access(path, name)} !== undefined" for name in self.required]
        conditions += [f"{member_access(path, name)} === undefined" for name in self.excluded]
        return " && ".join(conditions) if conditions else "true"


class InterfaceClassifier:
    """Synthesizes discriminators for the interface alternatives of a disjunction."""

    def __init__(self, resolver: DisjunctiveResolver):
        self.resolver = resolver

    def classify(self, alternatives: list[Leaf]) -> dict[InterfaceModel, Discriminator]:
        """
        Build a discriminator for every interface alternative.

        Args:
            alternatives: A disjunctive array; non-interface alternatives are ignored

        Returns:
            Mapping from each interface alternative to its discriminator, in
            alternative order
        """
        interfaces = [alternative for alternative in alternatives if isinstance(alternative, InterfaceModel)]
        required = {interface: self.resolver.required_property_names(interface) for interface in interfaces}

        discriminators = {}
        for interface in interfaces:
            own = required[interface]
            excluded = []
            for other in interfaces:
                if other is interface:
                    continue
                for name in required[other]:
                    if name not in own and name not in excluded:
                        excluded.append(name)
            discriminators[interface] = Discriminator(tuple(own), tuple(excluded))
        return discriminators


def order_alternatives(discriminators: dict[InterfaceModel, Discriminator]) -> list[InterfaceModel]:
    """Interface alternatives with the fallback ones (vacuous discriminator) moved last."""
    conditional = [interface for interface, discriminator in discriminators.items() if not discriminator.is_vacuous]
    fallback = [interface for interface, discriminator in discriminators.items() if discriminator.is_vacuous]
    return conditional + fallback
