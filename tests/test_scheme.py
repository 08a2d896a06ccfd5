"""Tests for the scheme module."""

import unittest

from tprexample.errors import SerializationError
from tprexample.kubernetes.scheme import GroupVersion, GroupVersionKind, Scheme
from tprexample.models import (
    DeleteOptions,
    Example,
    ExampleList,
    ListOptions,
    add_to_scheme,
    new_example,
)


class TestGroupVersion(unittest.TestCase):
    """Test cases for GroupVersion."""

    def test_api_version(self):
        """Test the apiVersion rendering."""
        self.assertEqual(GroupVersion("k8s.io", "v1").api_version, "k8s.io/v1")
        self.assertEqual(str(GroupVersion("k8s.io", "v1")), "k8s.io/v1")
        # Core group has no prefix
        self.assertEqual(GroupVersion("", "v1").api_version, "v1")


class TestScheme(unittest.TestCase):
    """Test cases for the Scheme class."""

    def setUp(self):
        """Set up test fixtures."""
        self.scheme = Scheme()
        add_to_scheme(self.scheme)

    def test_registered_kinds(self):
        """Test that the Example types and option types are registered."""
        self.assertEqual(self.scheme.kind_for(Example), GroupVersionKind("k8s.io", "v1", "Example"))
        self.assertEqual(self.scheme.kind_for(ExampleList), GroupVersionKind("k8s.io", "v1", "ExampleList"))
        self.assertEqual(self.scheme.kind_for(ListOptions).kind, "ListOptions")
        self.assertEqual(self.scheme.kind_for(DeleteOptions).kind, "DeleteOptions")
        self.assertTrue(self.scheme.recognizes("k8s.io/v1", "Example"))
        self.assertFalse(self.scheme.recognizes("k8s.io/v2", "Example"))
        self.assertEqual(self.scheme.group_versions(), {GroupVersion("k8s.io", "v1")})

    def test_schemes_are_independent(self):
        """Test that registering into one scheme does not affect another."""
        other = Scheme()

        self.assertFalse(other.recognizes("k8s.io/v1", "Example"))
        with self.assertRaises(SerializationError):
            other.kind_for(Example)

    def test_encode_sets_type_meta(self):
        """Test that encoding fills in apiVersion and kind."""
        data = self.scheme.encode(new_example())

        self.assertEqual(data["apiVersion"], "k8s.io/v1")
        self.assertEqual(data["kind"], "Example")
        self.assertEqual(data["metadata"], {"name": "example1"})
        self.assertEqual(data["spec"], {"foo": "hello", "bar": True})

    def test_decode_list(self):
        """Test decoding a list response."""
        data = {
            "apiVersion": "k8s.io/v1",
            "kind": "ExampleList",
            "metadata": {"resourceVersion": "42", "continue": ""},
            "items": [
                {
                    "apiVersion": "k8s.io/v1",
                    "kind": "Example",
                    "metadata": {"name": "example1", "namespace": "default", "resourceVersion": "41"},
                    "spec": {"foo": "hello", "bar": True},
                },
                {
                    "apiVersion": "k8s.io/v1",
                    "kind": "Example",
                    "metadata": {"name": "example2", "namespace": "other"},
                    "spec": {"foo": "bye", "bar": False},
                },
            ],
        }

        examples = self.scheme.decode(data, ExampleList)

        self.assertIsInstance(examples, ExampleList)
        self.assertEqual(examples.metadata.resource_version, "42")
        self.assertEqual([item.name for item in examples.items], ["example1", "example2"])
        self.assertEqual(examples.items[0].metadata.resource_version, "41")
        self.assertFalse(examples.items[1].spec.bar)

    def test_decode_kind_mismatch(self):
        """Test that a document of another kind is rejected."""
        with self.assertRaises(SerializationError):
            self.scheme.decode({"apiVersion": "v1", "kind": "Status"}, Example)

    def test_decode_invalid_document(self):
        """Test that a malformed document is rejected."""
        with self.assertRaises(SerializationError):
            self.scheme.decode({"kind": "Example", "spec": {"bar": "not-a-bool"}}, Example)

        with self.assertRaises(SerializationError):
            self.scheme.decode(["not", "a", "dict"], Example)

    def test_encode_unregistered_type(self):
        """Test that encoding an unregistered model fails."""
        with self.assertRaises(SerializationError):
            Scheme().encode(new_example())


if __name__ == "__main__":
    unittest.main()
