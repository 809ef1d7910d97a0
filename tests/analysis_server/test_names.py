"""Tests for qualified-name parsing and type-name normalization."""

from codesight.analysis_server.semantic.names import (
    normalize_type_name,
    parameters_match,
    simple_type_name,
    split_member,
    split_parameter_list,
    split_signature,
)


class TestNormalizeTypeName:
    """Test canonical spelling of type names."""

    def test_keyword_aliases(self):
        assert normalize_type_name("int") == "System.Int32"
        assert normalize_type_name("string") == "System.String"
        assert normalize_type_name("System.Int32") == "System.Int32"

    def test_aliases_inside_generics_and_arrays(self):
        assert normalize_type_name("List<int>[]") == "List<System.Int32>[]"
        assert normalize_type_name("Dictionary<string, object>") == "Dictionary<System.String,System.Object>"

    def test_passing_modifiers_and_global_prefix(self):
        assert normalize_type_name("ref int") == "System.Int32"
        assert normalize_type_name("out global::Sample.Foo") == "Sample.Foo"

    def test_identifiers_containing_alias_text_are_kept(self):
        assert normalize_type_name("Sample.interval") == "Sample.interval"


class TestSplitting:
    """Test splitting of signatures and member names."""

    def test_split_signature(self):
        assert split_signature("Ns.Type.Method") == ("Ns.Type.Method", None)
        assert split_signature("Ns.Type.Method()") == ("Ns.Type.Method", "")
        assert split_signature("Ns.Type.Method(int, string)") == ("Ns.Type.Method", "int, string")

    def test_split_parameter_list_keeps_generic_arguments(self):
        assert split_parameter_list("Dictionary<string, int>, int[]") == ["Dictionary<string, int>", "int[]"]
        assert split_parameter_list("") == []

    def test_split_member(self):
        assert split_member("Ns.Type.Method") == ("Ns.Type", "Method")
        assert split_member("Ns.Type..ctor") == ("Ns.Type", ".ctor")
        assert split_member("Method") is None

    def test_simple_type_name(self):
        assert simple_type_name("Ns.Outer+Inner") == "Inner"
        assert simple_type_name("Ns.Type") == "Type"


class TestParametersMatch:
    """Test positional parameter comparison."""

    def test_aliases_match_runtime_names(self):
        assert parameters_match(["int", "string"], ["System.Int32", "System.String"])

    def test_arity_must_match(self):
        assert not parameters_match(["int"], ["int", "int"])
        assert parameters_match([], [])

    def test_types_compare_positionally(self):
        assert not parameters_match(["int", "string"], ["string", "int"])
