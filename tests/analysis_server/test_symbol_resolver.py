"""Tests for symbol resolution from qualified names and positions."""

import pytest

from codesight.analysis_server.errors import AmbiguousSymbolError, SymbolNotFoundError
from codesight.analysis_server.models.symbol_models import (
    Ambiguous,
    MethodKind,
    NotFound,
    Resolved,
    TargetDescriptor,
)
from codesight.analysis_server.tools.symbol_resolver import METHOD_HINT, SymbolResolver, require_resolved


def by_name(name: str) -> TargetDescriptor:
    return TargetDescriptor(qualified_name=name)


def at(file: str, line: int, column: int) -> TargetDescriptor:
    return TargetDescriptor(file=file, line=line, column=column)


@pytest.fixture
def resolver(snapshot):
    return SymbolResolver(snapshot)


class TestResolve:
    """Test resolution of arbitrary symbols."""

    def test_type(self, resolver):
        result = resolver.resolve(by_name("Sample.Foo"))

        assert isinstance(result, Resolved)
        assert result.symbol.display == "Sample.Foo"

    def test_single_member(self, resolver):
        assert resolver.resolve(by_name("Sample.Foo.DoWork")).symbol.display == "Sample.Foo.DoWork()"

    def test_overloads_without_signature_are_ambiguous(self, resolver):
        result = resolver.resolve(by_name("Sample.Foo.Overloaded"))

        assert isinstance(result, Ambiguous)
        assert result.type is None
        assert [c.display for c in result.candidates] == [
            "Sample.Foo.Overloaded(int)",
            "Sample.Foo.Overloaded(string)",
        ]

    def test_signature_selects_overload(self, resolver):
        result = resolver.resolve(by_name("Sample.Foo.Overloaded(System.String)"))

        assert result.symbol.display == "Sample.Foo.Overloaded(string)"

    def test_type_with_parameter_list_names_constructor(self, resolver):
        result = resolver.resolve(by_name("Sample.Bar()"))

        assert result.symbol.method_kind == MethodKind.CONSTRUCTOR
        assert result.symbol.display == "Sample.Bar.Bar()"

    def test_partial_name_through_declaration_search(self, resolver):
        assert resolver.resolve(by_name("Foo.DoWork")).symbol.display == "Sample.Foo.DoWork()"

    def test_unknown_name(self, resolver):
        result = resolver.resolve(by_name("Sample.Nope.Missing"))

        assert isinstance(result, NotFound)
        assert "Sample.Nope.Missing" in result.reason

    def test_position_on_property_reference(self, resolver):
        assert resolver.resolve(at("src/Foo.cs", 18, 14)).symbol.display == "Sample.Foo.Name"

    def test_position_without_symbol(self, resolver):
        assert isinstance(resolver.resolve(at("src/Nowhere.cs", 1, 1)), NotFound)

    def test_position_inside_accessor_gives_property(self, resolver):
        assert resolver.resolve(at("src/Foo.cs", 8, 31)).symbol.display == "Sample.Foo.Name"

    def test_position_inside_accessor_kept_when_requested(self, resolver):
        getter = resolver.resolve(at("src/Foo.cs", 8, 31), treat_accessors=True)
        setter = resolver.resolve(at("src/Foo.cs", 8, 36), treat_accessors=True)

        assert getter.symbol.display == "Sample.Foo.Name.get"
        assert setter.symbol.display == "Sample.Foo.Name.set"

    def test_unmatched_signature_is_not_found(self, resolver):
        result = resolver.resolve(by_name("Sample.Foo.Callee(string)"))

        assert isinstance(result, NotFound)
        assert "Callee(string)" in result.reason


class TestResolveMethod:
    """Test resolution of methods to analyze."""

    def test_single_explicit_constructor_wins(self, resolver):
        result = resolver.resolve_method(by_name("Sample.Bar"))

        assert result.symbol.display == "Sample.Bar.Bar()"

    def test_type_with_implicit_constructor_and_methods_is_ambiguous(self, resolver):
        result = resolver.resolve_method(by_name("Sample.Foo"))

        assert isinstance(result, Ambiguous)
        assert result.type.display == "Sample.Foo"
        assert "Sample.Foo.DoWork()" in [c.display for c in result.candidates]
        assert all(not c.is_implicit for c in result.candidates)

    def test_type_without_methods_is_not_found(self, resolver):
        assert isinstance(resolver.resolve_method(by_name("Sample.Core.Empty")), NotFound)

    @pytest.mark.parametrize(
        "name",
        [
            "Sample.Core.Empty..ctor",
            "Sample.Helper(int)",
            "Sample.Helper..ctor(int)",
            "Sample.Foo.Callee(string)",
        ],
    )
    def test_no_matching_method_is_not_found(self, resolver, name):
        assert isinstance(resolver.resolve_method(by_name(name)), NotFound)

    def test_explicit_constructor_name(self, resolver):
        result = resolver.resolve_method(by_name("Sample.Foo..ctor"))

        assert result.symbol.method_kind == MethodKind.CONSTRUCTOR
        assert result.symbol.is_implicit

    def test_property_resolves_to_getter(self, resolver):
        result = resolver.resolve_method(by_name("Sample.Foo.Name"))

        assert result.symbol.method_kind == MethodKind.PROPERTY_GET

    def test_method_with_signature(self, resolver):
        result = resolver.resolve_method(by_name("Sample.Foo.Overloaded(int)"))

        assert result.symbol.display == "Sample.Foo.Overloaded(int)"

    def test_overloads_are_ambiguous_within_type(self, resolver):
        result = resolver.resolve_method(by_name("Sample.Foo.Overloaded"))

        assert isinstance(result, Ambiguous)
        assert result.type.display == "Sample.Foo"
        assert len(result.candidates) == 2

    def test_position_inside_body_is_enclosing_method(self, resolver):
        assert resolver.resolve_method(at("src/Foo.cs", 15, 9)).symbol.display == "Sample.Foo.DoWork()"

    def test_position_on_call_is_callee(self, resolver):
        assert resolver.resolve_method(at("src/Foo.cs", 19, 13)).symbol.display == "Sample.Foo.Callee(int)"

    def test_position_on_property_is_accessor(self, resolver):
        result = resolver.resolve_method(at("src/Foo.cs", 18, 13))

        assert result.symbol.display == "Sample.Foo.Name.get"

    def test_position_on_type_is_its_constructor(self, resolver):
        assert resolver.resolve_method(at("src/Foo.cs", 20, 18)).symbol.display == "Sample.Bar.Bar()"

    def test_position_on_field_without_method(self, resolver):
        assert isinstance(resolver.resolve_method(at("src/Foo.cs", 7, 9)), NotFound)


class TestResolveType:
    """Test resolution of named types for hierarchy queries."""

    def test_member_name_gives_containing_type(self, resolver):
        assert resolver.resolve_type(by_name("Sample.Foo.DoWork")).symbol.display == "Sample.Foo"

    def test_ambiguous_members_of_one_type(self, resolver):
        assert resolver.resolve_type(by_name("Sample.Foo.Overloaded")).symbol.display == "Sample.Foo"

    def test_position_inside_member(self, resolver):
        assert resolver.resolve_type(at("src/Foo.cs", 15, 9)).symbol.display == "Sample.Foo"

    def test_property_gives_containing_type(self, resolver):
        assert resolver.resolve_type(by_name("Sample.Foo.Name")).symbol.display == "Sample.Foo"

    def test_unknown(self, resolver):
        assert isinstance(resolver.resolve_type(by_name("Nope")), NotFound)


class TestRequireResolved:
    """Test conversion of resolution results into tool errors."""

    def test_resolved_unwraps(self, resolver):
        result = resolver.resolve(by_name("Sample.Foo"))

        assert require_resolved(result, by_name("Sample.Foo")).display == "Sample.Foo"

    def test_ambiguous_raises_with_candidates_and_hint(self, resolver):
        descriptor = by_name("Sample.Foo")

        with pytest.raises(AmbiguousSymbolError) as exc_info:
            require_resolved(resolver.resolve_method(descriptor), descriptor, hint=METHOD_HINT)

        assert "resolves to Sample.Foo with multiple candidates" in exc_info.value.message
        assert exc_info.value.hint == METHOD_HINT
        assert exc_info.value.candidates

    def test_not_found_raises(self, resolver):
        descriptor = by_name("Sample.Nope")

        with pytest.raises(SymbolNotFoundError):
            require_resolved(resolver.resolve(descriptor), descriptor)
