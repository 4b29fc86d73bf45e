"""Tests for obfuscation_markers.representation module."""

import array
from collections import UserString

import pytest

pytestmark = pytest.mark.unit

from obfuscation_markers.exceptions import NullValueError
from obfuscation_markers.providers import (
    LazyRepresentationProvider,
    RepresentationProvider,
)
from obfuscation_markers.representation import (
    BOOLEAN_ARRAY_TO_STRING,
    BYTE_ARRAY_TO_STRING,
    CHAR_ARRAY_TO_STRING,
    CHAR_SEQUENCE_IDENTITY,
    DOUBLE_ARRAY_TO_STRING,
    FLOAT_ARRAY_TO_STRING,
    INT_ARRAY_TO_STRING,
    LONG_ARRAY_TO_STRING,
    OBJECT_ARRAY_DEEP_TO_STRING,
    OBJECT_ARRAY_TO_STRING,
    SHORT_ARRAY_TO_STRING,
    TO_STRING,
    BooleanArrayToString,
    ByteArrayToString,
    CharArrayToString,
    CharSequenceIdentity,
    DoubleArrayToString,
    FloatArrayToString,
    IntArrayToString,
    LongArrayToString,
    ObjectArrayDeepToString,
    ObjectArrayToString,
    ShortArrayToString,
    ToString,
    array_format,
    default_instance,
    default_instance_for,
    lookup_builtin,
)

ALL_PROVIDERS = [
    TO_STRING,
    BOOLEAN_ARRAY_TO_STRING,
    CHAR_ARRAY_TO_STRING,
    BYTE_ARRAY_TO_STRING,
    SHORT_ARRAY_TO_STRING,
    INT_ARRAY_TO_STRING,
    LONG_ARRAY_TO_STRING,
    FLOAT_ARRAY_TO_STRING,
    DOUBLE_ARRAY_TO_STRING,
    OBJECT_ARRAY_TO_STRING,
    OBJECT_ARRAY_DEEP_TO_STRING,
    CHAR_SEQUENCE_IDENTITY,
]


def bool_array(*values: bool) -> memoryview:
    return memoryview(bytes(values)).cast("?")


# (provider, matching value, expected text)
MATCHING_CASES = [
    (BOOLEAN_ARRAY_TO_STRING, bool_array(True, False, True), "[True, False, True]"),
    (CHAR_ARRAY_TO_STRING, memoryview(b"abc").cast("c"), "[a, b, c]"),
    (BYTE_ARRAY_TO_STRING, bytes([1, 2, 255]), "[1, 2, 255]"),
    (BYTE_ARRAY_TO_STRING, bytearray([0, 7]), "[0, 7]"),
    (BYTE_ARRAY_TO_STRING, array.array("b", [-1, 2]), "[-1, 2]"),
    (SHORT_ARRAY_TO_STRING, array.array("h", [1, 2, 3]), "[1, 2, 3]"),
    (INT_ARRAY_TO_STRING, array.array("i", [1, 2, 3]), "[1, 2, 3]"),
    (LONG_ARRAY_TO_STRING, array.array("q", [1, 2, 3]), "[1, 2, 3]"),
    (FLOAT_ARRAY_TO_STRING, array.array("f", [0.5, 1.0]), "[0.5, 1.0]"),
    (DOUBLE_ARRAY_TO_STRING, array.array("d", [0.1, 1.0]), "[0.1, 1.0]"),
    (OBJECT_ARRAY_TO_STRING, [True, 1, "foo", None], "[True, 1, foo, None]"),
    (OBJECT_ARRAY_TO_STRING, ("a", "b"), "[a, b]"),
    (OBJECT_ARRAY_DEEP_TO_STRING, [True, 1, "foo"], "[True, 1, foo]"),
    (INT_ARRAY_TO_STRING, array.array("i"), "[]"),
]


class TestToString:
    """Tests for the generic str() provider."""

    def test_represent(self):
        """Test values are represented by their str()."""
        assert TO_STRING.represent(1) == "1"
        assert TO_STRING.represent("foo") == "foo"
        assert TO_STRING.represent([1, "a"]) == "[1, 'a']"

    def test_represent_lazily(self):
        """Test the lazy form computes the same text."""
        thunk = TO_STRING.represent_lazily(12)
        assert thunk() == "12"

    def test_representation_function(self):
        """Test the eager function form."""
        function = TO_STRING.representation_function()
        assert function(1.5) == "1.5"

    def test_repr(self):
        """Test the repr names the class."""
        assert repr(TO_STRING) == "obfuscation_markers.representation.ToString"


class TestTypeSpecific:
    """Tests for the type specific built-in providers."""

    @pytest.mark.parametrize("provider,value,expected", MATCHING_CASES)
    def test_matching_value(self, provider, value, expected):
        """Test matching values are converted."""
        assert provider.represent(value) == expected
        assert provider.represent_lazily(value)() == expected
        assert provider.representation_function()(value) == expected

    @pytest.mark.parametrize("provider", ALL_PROVIDERS[1:11])
    def test_non_matching_value_falls_back_to_str(self, provider):
        """Test other values use their own str()."""
        value = object()
        assert provider.represent(value) == str(value)
        assert provider.represent_lazily(value)() == str(value)

    def test_other_array_kind_falls_back_to_str(self):
        """Test an array of another kind is not converted."""
        value = array.array("d", [1.0])
        assert INT_ARRAY_TO_STRING.represent(value) == "array('d', [1.0])"

    @pytest.mark.parametrize("provider", ALL_PROVIDERS)
    def test_none_value(self, provider):
        """Test None is rejected, also on the lazy path."""
        with pytest.raises(NullValueError):
            provider.represent(None)
        with pytest.raises(NullValueError):
            provider.represent_lazily(None)

    def test_lazy_conversion_is_deferred(self):
        """Test the conversion only runs when the thunk is called."""
        value = [1, 2]
        thunk = OBJECT_ARRAY_TO_STRING.represent_lazily(value)
        value.append(3)
        assert thunk() == "[1, 2, 3]"


class TestObjectArrays:
    """Tests for the shallow and deep object array providers."""

    def test_shallow_does_not_expand_nested_arrays(self):
        """Test nested arrays use their own str()."""
        value = [True, 1, "foo", array.array("i", [1, 2, 3])]
        assert (
            OBJECT_ARRAY_TO_STRING.represent(value)
            == "[True, 1, foo, array('i', [1, 2, 3])]"
        )
        assert OBJECT_ARRAY_TO_STRING.represent(["a", [1, "b"]]) == "[a, [1, 'b']]"

    def test_shallow_keeps_bytes_display_form(self):
        """Test bytes elements use their own str() in the shallow variant."""
        assert OBJECT_ARRAY_TO_STRING.represent([b"ab", "c"]) == "[b'ab', c]"

    def test_deep_expands_bytes_elements(self):
        """Test bytes elements are expanded as byte arrays in the deep variant."""
        assert OBJECT_ARRAY_DEEP_TO_STRING.represent([b"ab"]) == "[[97, 98]]"

    def test_deep_expands_nested_arrays(self):
        """Test nested arrays are expanded recursively."""
        value = [True, 1, "foo", array.array("i", [1, 2, 3])]
        assert OBJECT_ARRAY_DEEP_TO_STRING.represent(value) == "[True, 1, foo, [1, 2, 3]]"
        nested = ["a", (1, ["b", bytes([9])])]
        assert OBJECT_ARRAY_DEEP_TO_STRING.represent(nested) == "[a, [1, [b, [9]]]]"

    def test_deep_self_reference(self):
        """Test a self-referencing list does not recurse forever."""
        value: list = [1]
        value.append(value)
        assert OBJECT_ARRAY_DEEP_TO_STRING.represent(value) == "[1, [...]]"

    def test_deep_repeated_sibling_is_expanded(self):
        """Test the same list twice as siblings is not a cycle."""
        inner = [1]
        assert OBJECT_ARRAY_DEEP_TO_STRING.represent([inner, inner]) == "[[1], [1]]"


class TestCharSequenceIdentity:
    """Tests for the identity provider."""

    def test_str_is_returned_as_is(self):
        """Test strings are returned unchanged."""
        value = "some text"
        assert CHAR_SEQUENCE_IDENTITY.represent(value) is value

    def test_user_string(self):
        """Test UserString values are converted to str."""
        assert CHAR_SEQUENCE_IDENTITY.represent(UserString("bar")) == "bar"

    def test_other_values(self):
        """Test other values use their own str()."""
        assert CHAR_SEQUENCE_IDENTITY.represent(1) == "1"


class TestLookupBuiltin:
    """Tests for the built-in registry."""

    @pytest.mark.parametrize("provider", ALL_PROVIDERS)
    def test_returns_singleton(self, provider):
        """Test every built-in class maps to its shared instance."""
        assert lookup_builtin(type(provider)) is provider
        assert lookup_builtin(type(provider)) is lookup_builtin(type(provider))

    def test_subclass_is_not_builtin(self):
        """Test only the exact built-in classes match."""

        class CustomToString(ToString):
            pass

        assert lookup_builtin(CustomToString) is None

    def test_unknown_class(self):
        """Test other classes are not built-ins."""
        assert lookup_builtin(str) is None

    def test_none(self):
        """Test None is rejected."""
        with pytest.raises(NullValueError):
            lookup_builtin(None)


class ListSubclass(list):
    pass


class StrSubclass(str):
    pass


class TestDefaultInstance:
    """Tests for the classification of value types."""

    @pytest.mark.parametrize(
        "value_type,fmt,expected",
        [
            (memoryview, "?", BooleanArrayToString),
            (array.array, "u", CharArrayToString),
            (memoryview, "c", CharArrayToString),
            (array.array, "b", ByteArrayToString),
            (array.array, "B", ByteArrayToString),
            (bytes, None, ByteArrayToString),
            (bytearray, None, ByteArrayToString),
            (array.array, "h", ShortArrayToString),
            (array.array, "i", IntArrayToString),
            (array.array, "l", LongArrayToString),
            (array.array, "q", LongArrayToString),
            (array.array, "f", FloatArrayToString),
            (array.array, "d", DoubleArrayToString),
            (memoryview, "<d", DoubleArrayToString),
            (list, None, ObjectArrayToString),
            (tuple, None, ObjectArrayToString),
            (ListSubclass, None, ObjectArrayToString),
            (str, None, CharSequenceIdentity),
            (StrSubclass, None, CharSequenceIdentity),
            (UserString, None, CharSequenceIdentity),
            (int, None, ToString),
            (bool, None, ToString),
            (float, None, ToString),
            (type(None), None, ToString),
            (object, None, ToString),
            (dict, None, ToString),
            (array.array, None, ToString),
            (array.array, "x", ToString),
        ],
    )
    def test_classification(self, value_type, fmt, expected):
        """Test every type maps to the expected built-in singleton."""
        provider = default_instance(value_type, fmt)
        assert type(provider) is expected
        assert provider is lookup_builtin(expected)

    def test_for_value(self):
        """Test classification of live values reads their format code."""
        assert default_instance_for(array.array("d", [1.0])) is DOUBLE_ARRAY_TO_STRING
        assert default_instance_for(bool_array(True)) is BOOLEAN_ARRAY_TO_STRING
        assert default_instance_for([1]) is OBJECT_ARRAY_TO_STRING
        assert default_instance_for("x") is CHAR_SEQUENCE_IDENTITY
        assert default_instance_for(1) is TO_STRING

    def test_not_a_type(self):
        """Test non-type arguments are rejected."""
        with pytest.raises(TypeError):
            default_instance("str")
        with pytest.raises(NullValueError):
            default_instance(None)

    def test_array_format(self):
        """Test format codes of typed arrays."""
        assert array_format(array.array("h")) == "h"
        assert array_format(memoryview(b"ab")) == "B"
        assert array_format(b"ab") is None


class TestBridging:
    """Tests for the eager and lazy provider base classes."""

    def test_eager_provider_defers_lazily(self):
        """Test the default lazy form defers the eager call."""
        calls = []

        class Counting(RepresentationProvider):
            def represent(self, value):
                calls.append(value)
                return f"<{value}>"

        thunk = Counting().represent_lazily(1)
        assert calls == []
        assert thunk() == "<1>"
        assert calls == [1]

    def test_lazy_provider_represents_eagerly(self):
        """Test a lazy provider can be used eagerly."""

        class Lazy(LazyRepresentationProvider):
            def represent_lazily(self, value):
                return lambda: f"lazy {value}"

        provider = Lazy()
        assert provider.represent(2) == "lazy 2"
        assert provider.representation_function()(3) == "lazy 3"

    def test_lazy_provider_must_implement_lazy_form(self):
        """Test the lazy form is abstract for lazy providers."""

        class Incomplete(LazyRepresentationProvider):
            pass

        with pytest.raises(TypeError):
            Incomplete()
