"""Unit tests for SignatureInspector."""

import functools
import gc
import weakref
from typing import Annotated, Optional, Union

import pytest

from lattice_di.application.signature_inspector import SignatureInspector, import_type
from lattice_di.domain import ConstructionError, Inject
from resolution_fixtures import A, B, CircularDependency, Outer, Remaining, UnresolvableHint


class TestDescribeCallables:
    """Test cases for describing plain callables."""

    def test_describe_function_without_parameters(self):
        """Test that a parameterless function has no descriptors."""
        assert SignatureInspector().describe(lambda: None) == []

    def test_describe_records_position_name_and_type(self):
        """Test the basic attributes of each descriptor."""

        def handler(first: str, a: A):
            pass

        descriptors = SignatureInspector().describe(handler)

        assert [(d.position, d.name, d.declared_type) for d in descriptors] == [(0, "first", str), (1, "a", A)]

    def test_describe_records_defaults(self):
        """Test that defaults are captured."""

        def handler(value: str = "default", other=None):
            pass

        descriptors = SignatureInspector().describe(handler)

        assert descriptors[0].has_default and descriptors[0].default == "default"
        assert descriptors[1].has_default and descriptors[1].default is None
        assert descriptors[1].declared_type is None

    def test_describe_reads_inject_marker(self):
        """Test that the explicit identifier is extracted from Annotated."""

        def handler(value: Annotated[str, Inject("value")]):
            pass

        descriptor = SignatureInspector().describe(handler)[0]

        assert descriptor.explicit_identifier == "value"
        assert descriptor.declared_type is str

    def test_describe_reads_inject_marker_inside_optional(self):
        """Test that Inject is found inside Optional."""

        def handler(value: Optional[Annotated[str, Inject("value")]] = None):
            pass

        descriptor = SignatureInspector().describe(handler)[0]

        assert descriptor.explicit_identifier == "value"
        assert descriptor.declared_type is str
        assert descriptor.has_default

    def test_describe_reads_inject_marker_with_none_default(self):
        """Test a marker whose parameter defaults to None."""

        def handler(a: Annotated[A, Inject("a")] = None):
            pass

        descriptor = SignatureInspector().describe(handler)[0]

        assert descriptor.explicit_identifier == "a"
        assert descriptor.declared_type is A

    def test_describe_optional_declares_member_type(self):
        """Test that Optional[T] declares T."""

        def handler(a: Optional[A]):
            pass

        descriptor = SignatureInspector().describe(handler)[0]

        assert descriptor.declared_type is A
        assert descriptor.explicit_identifier is None

    def test_describe_union_keeps_annotation(self):
        """Test that a union of several types is not narrowed."""

        def handler(value: Union[A, B]):
            pass

        assert SignatureInspector().describe(handler)[0].declared_type == Union[A, B]

    def test_describe_ignores_foreign_annotated_metadata(self):
        """Test that metadata other than Inject is ignored."""

        def handler(value: Annotated[A, "documentation"]):
            pass

        descriptor = SignatureInspector().describe(handler)[0]

        assert descriptor.explicit_identifier is None
        assert descriptor.declared_type is A

    def test_describe_skips_variadic_parameters(self):
        """Test that *args and **kwargs are never described."""

        def handler(a: A, *args, b: B, **kwargs):
            pass

        descriptors = SignatureInspector().describe(handler)

        assert [d.name for d in descriptors] == ["a", "b"]
        assert descriptors[1].keyword_only is True

    def test_describe_callable_object(self):
        """Test that callable instances are described through __call__."""

        class Handler:
            def __call__(self, a: A) -> A:
                return a

        descriptors = SignatureInspector().describe(Handler())

        assert [(d.name, d.declared_type) for d in descriptors] == [("a", A)]

    def test_describe_partial(self):
        """Test that partials expose their remaining parameters."""

        def handler(first: str, a: A):
            pass

        descriptors = SignatureInspector().describe(functools.partial(handler, "first"))

        assert [(d.name, d.declared_type) for d in descriptors] == [("a", A)]

    def test_describe_caches_descriptors(self):
        """Test that a callable is described only once."""
        inspector = SignatureInspector()

        def handler(a: A):
            pass

        assert inspector.describe(handler) is inspector.describe(handler)

    def test_describe_bound_method_does_not_keep_instance_alive(self):
        """Test that the cache holds bound methods by their function only."""
        inspector = SignatureInspector()

        class Handler:
            def handle(self, a: A) -> A:
                return a

        handler = Handler()
        reference = weakref.ref(handler)

        descriptors = inspector.describe(handler.handle)
        del handler
        gc.collect()

        assert [d.name for d in descriptors] == ["a"]
        assert reference() is None

    def test_describe_bound_methods_share_descriptors(self):
        """Test that methods bound to different instances are described once."""
        inspector = SignatureInspector()

        class Handler:
            def handle(self, a: A) -> A:
                return a

        assert inspector.describe(Handler().handle) is inspector.describe(Handler().handle)

    def test_describe_bound_and_plain_function_are_cached_separately(self):
        """Test that the unbound function still describes self."""
        inspector = SignatureInspector()

        class Handler:
            def handle(self, a: A) -> A:
                return a

        assert [d.name for d in inspector.describe(Handler().handle)] == ["a"]
        assert [d.name for d in inspector.describe(Handler.handle)] == ["self", "a"]

    def test_describe_releases_discarded_callables(self):
        """Test that short-lived lambdas do not accumulate in the cache."""
        inspector = SignatureInspector()

        for _ in range(100):
            inspector.describe(lambda a: a)
        gc.collect()

        assert len(inspector._cache) == 0

    def test_describe_class_and_constructor_are_cached_separately(self):
        """Test that describing a class call does not decide its constructor description."""
        inspector = SignatureInspector()

        class WithNew:
            def __new__(cls, *args, **kwargs):
                return super().__new__(cls)

            def __init__(self, a: A):
                self.a = a

        assert inspector.describe(WithNew) == []
        assert [d.name for d in inspector.describe_constructor(WithNew)] == ["a"]

    def test_describe_builtin_without_signature_raises_construction_error(self):
        """Test that uninspectable callables are reported as reflection failures."""
        class Broken:
            __signature__ = "not a signature"

            def __call__(self):
                pass

        with pytest.raises(ConstructionError, match="signature cannot be inspected"):
            SignatureInspector().describe(Broken())


class TestDescribeConstructors:
    """Test cases for describing class constructors."""

    def test_describe_constructor_excludes_self(self):
        """Test that self is not described."""
        descriptors = SignatureInspector().describe_constructor(Remaining)

        assert [(d.position, d.name, d.declared_type) for d in descriptors] == [(0, "first", str), (1, "a", A)]

    def test_describe_constructor_resolves_forward_references(self):
        """Test that string annotations are evaluated in the class's module."""
        descriptor = SignatureInspector().describe_constructor(CircularDependency)[0]

        assert descriptor.declared_type is CircularDependency

    def test_describe_constructor_with_unresolvable_hint_raises_construction_error(self):
        """Test that a NameError in type hints is wrapped."""
        with pytest.raises(ConstructionError) as exc_info:
            SignatureInspector().describe_constructor(UnresolvableHint)

        assert isinstance(exc_info.value.__cause__, NameError)


class TestImportType:
    """Test cases for importing classes by name."""

    def test_import_top_level_class(self):
        """Test importing a module level class."""
        assert import_type("resolution_fixtures.A") is A

    def test_import_nested_class(self):
        """Test importing a class nested in another class."""
        assert import_type("resolution_fixtures.Outer.Inner") is Outer.Inner

    def test_import_missing_module_raises_construction_error(self):
        """Test that a missing module is reported as a missing class."""
        with pytest.raises(ConstructionError, match="does not exist"):
            import_type("no_such_module.Missing")

    def test_import_missing_attribute_raises_construction_error(self):
        """Test that a missing class in an existing module is reported."""
        with pytest.raises(ConstructionError, match="does not exist") as exc_info:
            import_type("resolution_fixtures.Missing")

        assert isinstance(exc_info.value.__cause__, AttributeError)

    def test_import_bare_name_raises_construction_error(self):
        """Test that a name without module cannot be imported."""
        with pytest.raises(ConstructionError, match="does not exist"):
            import_type("NonExistingClass")
