"""Tests for the Example wire models."""

import unittest

from tprexample.models import (
    DEFAULT_NAMESPACE,
    EXAMPLE_NAME,
    DeleteOptions,
    Example,
    ExampleList,
    ExampleSpec,
    ListMeta,
    ListOptions,
    ObjectMeta,
    new_example,
)


class TestExampleModels(unittest.TestCase):
    """Test cases for the Example models."""

    def test_new_example(self):
        """Test the instance created when none exists."""
        example = new_example()

        self.assertEqual(example.name, EXAMPLE_NAME)
        self.assertEqual(example.spec.foo, "hello")
        self.assertTrue(example.spec.bar)
        self.assertEqual(DEFAULT_NAMESPACE, "default")

    def test_camel_case_aliases(self):
        """Test that wire documents use camelCase field names."""
        example = Example.model_validate(
            {
                "apiVersion": "k8s.io/v1",
                "kind": "Example",
                "metadata": {
                    "name": "example1",
                    "creationTimestamp": "2017-01-01T00:00:00Z",
                    "selfLink": "/apis/k8s.io/v1/namespaces/default/examples/example1",
                },
                "spec": {"foo": "hello", "bar": True},
            }
        )

        self.assertEqual(example.api_version, "k8s.io/v1")
        self.assertEqual(example.metadata.creation_timestamp, "2017-01-01T00:00:00Z")

        data = example.model_dump(by_alias=True, exclude_none=True)
        self.assertEqual(data["metadata"]["selfLink"], "/apis/k8s.io/v1/namespaces/default/examples/example1")

    def test_unknown_fields_preserved(self):
        """Test that fields unknown to the model survive a round trip."""
        example = Example.model_validate(
            {"metadata": {"name": "example1"}, "spec": {"foo": "x", "bar": False}, "status": {"phase": "Ready"}}
        )

        data = example.model_dump(by_alias=True, exclude_none=True)
        self.assertEqual(data["status"], {"phase": "Ready"})

    def test_every_model_is_documented(self):
        """Test that each wire model carries its own docstring."""
        for model in [ObjectMeta, ListMeta, ExampleSpec, Example, ExampleList, ListOptions, DeleteOptions]:
            with self.subTest(model=model.__name__):
                self.assertTrue(model.__dict__.get("__doc__"))

    def test_list_options_query_params(self):
        """Test rendering list options as query parameters."""
        options = ListOptions(label_selector="app=demo", limit=10, continue_="token")

        self.assertEqual(
            options.to_query_params(),
            [("labelSelector", "app=demo"), ("limit", 10), ("continue", "token")],
        )
        self.assertEqual(ListOptions().to_query_params(), [])


if __name__ == "__main__":
    unittest.main()
