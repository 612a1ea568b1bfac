"""Tests for the custom_delimiters example."""


class TestCustomDelimitersApp:
    """Verify custom markers and globals."""

    def test_output(self, example_app) -> None:
        assert example_app.output == "microtpl renders <%= name %> as plain text"

    def test_context_overrides_global(self, example_app) -> None:
        assert example_app.template.render(product="other").startswith("other renders")
