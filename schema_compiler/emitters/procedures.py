"""
Creation and validation procedure bodies for class members.

Each class property exposes ``create(value)`` and ``validate(value)``. Both
are generated from the property's disjunctive array:

- literal alternatives are matched with ``===``
- rule types are matched by their rule, rendered over the value path
- interface alternatives are told apart by their discriminators; the
  fallback alternative (vacuous discriminator) is tried last, unconditionally

Lines are produced without indentation; the output formatter indents them by
brace depth.
"""

from __future__ import annotations

from collections.abc import Callable

from ..models import InterfaceModel, Leaf, PropertyModel, TypeModel, ValueModel
from ..resolution import Discriminator, DisjunctiveResolver, InterfaceClassifier, order_alternatives
from ..utils import member_access, property_key, to_typescript_literal


def _is_object(path: str) -> str:
    return f"typeof {path} === 'object' && {path} !== null && !Array.isArray({path})"


def _type_error(message: str) -> str:
    return f"throw new TypeError({to_typescript_literal(message)});"


def declared_type(prop: PropertyModel) -> str:
    """Type text of the property as written in the schema; merged interfaces show their declared names."""
    return str(prop.type.map(lambda leaf: leaf.declared_name if isinstance(leaf, InterfaceModel) and leaf.merged else leaf))


class ProcedureBuilder:
    """Shared access to the resolution engine."""

    def __init__(self, resolver: DisjunctiveResolver):
        self.resolver = resolver
        self.classifier = InterfaceClassifier(resolver)

    def alternatives(self, prop: PropertyModel) -> list[Leaf]:
        return self.resolver.disjunctive_array(prop.type)

    def discriminated_interfaces(self, alternatives: list[Leaf]) -> list[tuple[InterfaceModel, Discriminator]]:
        """
        Interface alternatives in matching order with their discriminators.

        Only the first fallback alternative is kept: any later one could never
        be reached.
        """
        discriminators = self.classifier.classify(alternatives)
        ordered = []
        has_fallback = False
        for interface in order_alternatives(discriminators):
            discriminator = discriminators[interface]
            if discriminator.is_vacuous:
                if has_fallback:
                    continue
                has_fallback = True
            ordered.append((interface, discriminator))
        return ordered

    def argument_type(self, alternatives: list[Leaf]) -> str:
        """
        Source type accepted for a value with these alternatives.

        Interfaces are expanded inline; properties that can be omitted are
        marked optional.
        """
        parts = []
        for alternative in alternatives:
            if isinstance(alternative, InterfaceModel):
                parts.append(self._inline_interface_type(alternative))
            elif isinstance(alternative, TypeModel) and " & " in alternative.name:
                parts.append(f"({alternative.name})")
            else:
                parts.append(str(alternative))
        return " | ".join(dict.fromkeys(parts))

    def _inline_interface_type(self, interface: InterfaceModel) -> str:
        fields = []
        for prop in self.resolver.properties_of(interface):
            optional = "?" if self.resolver.can_be_omitted(prop) else ""
            fields.append(f"{property_key(prop.name)}{optional}: {self.argument_type(self.alternatives(prop))};")
        return "{ " + " ".join(fields) + " }" if fields else "{}"

    def default_source(self, prop: PropertyModel, alternatives: list[Leaf]) -> str | None:
        """
        Source of the value used when the property is omitted.

        Tried in order: default, constant, first literal alternative, a
        synthesized self-sufficient interface. None when nothing applies.
        """
        if prop.has_default:
            return to_typescript_literal(prop.default_value)
        if prop.has_constant:
            return to_typescript_literal(prop.constant_value)
        for alternative in alternatives:
            if isinstance(alternative, ValueModel):
                return alternative.to_source()
        interface = self.resolver.find_self_sufficient_interface(alternatives)
        if interface is not None:
            return self.synthesize(interface)
        return None

    def synthesize(self, interface: InterfaceModel) -> str:
        """Object literal for a self-sufficient interface; optional-only properties are left out."""
        fields = []
        for prop in self.resolver.properties_of(interface):
            source = self.default_source(prop, self.alternatives(prop))
            if source is not None:
                fields.append(f"{property_key(prop.name)}: {source}")
        return "{ " + ", ".join(fields) + " }" if fields else "{}"


class CreationProcedureBuilder(ProcedureBuilder):
    """Builds the body of ``create(value)``."""

    def build(self, prop: PropertyModel, label: str) -> list[str]:
        """
        Body lines of the creation procedure.

        Args:
            prop: Class property, with interface leaves pointing to merged interfaces
            label: Name used in error messages, e.g. ``MyClass.MY_PROPERTY``
        """
        alternatives = self.alternatives(prop)
        lines = ["const input: any = value;", "if (input === undefined) {"]
        default = self.default_source(prop, alternatives)
        if default is not None:
            lines.append(f"return {default};")
        elif prop.is_optional:
            lines.append("return undefined;")
        else:
            lines.append(_type_error(f"{label} is required"))
        lines.append("}")

        for alternative in alternatives:
            if isinstance(alternative, ValueModel):
                lines += [f"if (input === {alternative.to_source()}) {{", "return input;", "}"]
        for alternative in alternatives:
            if isinstance(alternative, TypeModel):
                lines += [f"if ({alternative.effective_rule.render('input')}) {{", "return input;", "}"]

        interfaces = self.discriminated_interfaces(alternatives)
        if interfaces:
            lines.append(f"if ({_is_object('input')}) {{")
            for interface, discriminator in interfaces:
                body = ["const obj: any = { ...input };", *self.fill(interface, "obj", label), "return obj;"]
                if discriminator.is_vacuous:
                    lines += body
                else:
                    lines += [f"if ({discriminator.render('input')}) {{", *body, "}"]
            lines.append("}")
        lines.append(_type_error(f"{label} does not match {declared_type(prop)}"))
        return lines

    def fill(self, interface: InterfaceModel, path: str, label: str) -> list[str]:
        """
        Lines completing an object at ``path`` so it satisfies ``interface``.

        Omitted properties receive their synthesized value; present ones are
        checked against their alternatives and nested objects are copied and
        filled recursively.
        """
        lines = []
        for prop in self.resolver.properties_of(interface):
            property_path = member_access(path, prop.name)
            property_label = f"{label}.{prop.name}"
            alternatives = self.alternatives(prop)

            default = self.default_source(prop, alternatives)
            if default is not None:
                lines += [f"if ({property_path} === undefined) {{", f"{property_path} = {default};", "}"]
            elif not prop.is_optional:
                lines += [f"if ({property_path} === undefined) {{", _type_error(f"{property_label} is required"), "}"]

            checks = self._checks(prop, alternatives, property_path, property_label)
            if default is None and prop.is_optional:
                checks = [f"if ({property_path} !== undefined) {{", *checks, "}"]
            lines += checks
        return lines

    def _checks(self, prop: PropertyModel, alternatives: list[Leaf], path: str, label: str) -> list[str]:
        scalar_conditions = [f"{path} === {alternative.to_source()}" for alternative in alternatives if isinstance(alternative, ValueModel)]
        scalar_conditions += [
            f"({alternative.effective_rule.render(path)})" for alternative in alternatives if isinstance(alternative, TypeModel)
        ]
        mismatch = _type_error(f"{label} does not match {declared_type(prop)}")
        interfaces = self.discriminated_interfaces(alternatives)

        if interfaces:
            nested = [f"if (!({_is_object(path)})) {{", mismatch, "}", f"{path} = {{ ...{path} }};"]
            nested += self._interface_chain(interfaces, path, lambda interface: self.fill(interface, path, label), [mismatch])
        else:
            nested = [mismatch]
        if not scalar_conditions:
            return nested
        return [f"if (!({' || '.join(scalar_conditions)})) {{", *nested, "}"]

    @staticmethod
    def _interface_chain(
        interfaces: list[tuple[InterfaceModel, Discriminator]],
        path: str,
        on_match: Callable[[InterfaceModel], list[str]],
        on_no_match: list[str],
    ) -> list[str]:
        lines = []
        conditional = [(interface, discriminator) for interface, discriminator in interfaces if not discriminator.is_vacuous]
        fallback = [interface for interface, discriminator in interfaces if discriminator.is_vacuous]
        for index, (interface, discriminator) in enumerate(conditional):
            keyword = "if" if index == 0 else "} else if"
            lines += [f"{keyword} ({discriminator.render(path)}) {{", *on_match(interface)]
        otherwise = on_match(fallback[0]) if fallback else on_no_match
        if conditional:
            lines += ["} else {", *otherwise, "}"]
        else:
            lines += otherwise
        return lines


class ValidationProcedureBuilder(ProcedureBuilder):
    """Builds the body of ``validate(value)``."""

    def build(self, prop: PropertyModel, label: str) -> list[str]:
        """
        Body lines of the validation procedure.

        Every mismatch is collected as ``{ path, description }`` in the
        returned array instead of being thrown.
        """
        return [
            "const input: any = value;",
            "const errors: Array<unknown> = [];",
            *self.validate(prop, "input", label),
            "return errors;",
        ]

    def validate(self, prop: PropertyModel, path: str, label: str) -> list[str]:
        """
        Lines pushing errors when the value at ``path`` matches no alternative.

        One error is pushed per distinct failure, and only when every
        alternative fails. A matching interface alternative validates its own
        properties recursively.
        """
        alternatives = self.alternatives(prop)
        label_source = to_typescript_literal(label)
        lines = []
        errors = []
        depth = 0
        for alternative in alternatives:
            if isinstance(alternative, ValueModel):
                lines.append(f"if ({path} !== {alternative.to_source()}) {{")
                errors.append("value_mismatch")
                depth += 1
        for alternative in alternatives:
            if isinstance(alternative, TypeModel):
                lines.append(f"if (!({alternative.effective_rule.render(path)})) {{")
                errors.append(alternative.description)
                depth += 1
        for interface, discriminator in self.discriminated_interfaces(alternatives):
            condition = _is_object(path)
            if not discriminator.is_vacuous:
                condition = f"{condition} && {discriminator.render(path)}"
            lines.append(f"if ({condition}) {{")
            for nested in self.resolver.properties_of(interface):
                lines += self.validate(nested, member_access(path, nested.name), f"{label}.{nested.name}")
            lines.append("} else {")
            errors.append("is_object" if discriminator.is_vacuous else "no_matching_alternative")
            depth += 1
        for description in dict.fromkeys(errors):
            lines.append(f"errors.push({{ path: {label_source}, description: {to_typescript_literal(description)} }});")
        lines += ["}"] * depth

        if self.resolver.can_be_omitted(prop):
            return [f"if ({path} !== undefined) {{", *lines, "}"]
        return lines
