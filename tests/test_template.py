"""Tests for the Template entity: configuration, accessors and extension."""

import pytest

from stencil.core.errors import BadMethodCall, ChildExtendFailure, DocumentNotFound
from stencil.core.settings import StencilSettings
from stencil.template import Template, TemplateConfiguration


@pytest.fixture
def document(write_document):
    return write_document("page.html", "<p>{{ body }}</p>")


def test_construct_sets_identifier(document):
    """The constructor keeps the identifier apart from the configuration."""
    template = Template("testIdentifier", {"path": str(document)})

    assert template.identifier == "testIdentifier"
    assert template.get_option("identifier") == "testIdentifier"
    assert "identifier" not in template.configuration


def test_construct_sets_config(document):
    template = Template("testIdentifier", {"path": str(document), "inherit": True})

    assert template.inherit is True
    assert template.get_option("inherit") is True


def test_construct_without_path_fails():
    """A path is required."""
    with pytest.raises(DocumentNotFound):
        Template("testIdentifier", {"inherit": True})


def test_construct_with_empty_path_fails():
    with pytest.raises(DocumentNotFound):
        Template("testIdentifier", {"path": ""})


def test_construct_with_invalid_path_fails(tmp_path):
    """A path that does not resolve to a file fails immediately."""
    with pytest.raises(DocumentNotFound):
        Template("testIdentifier", {"path": str(tmp_path / "this path does not exist")})


def test_missing_document_is_a_file_not_found_error(tmp_path):
    with pytest.raises(FileNotFoundError):
        Template("testIdentifier", {"path": str(tmp_path / "missing.html")})


def test_config_keys_are_case_insensitive(document):
    """Options can be read back with any casing."""
    template = Template("testIdentifier", {"path": str(document), "TestElEmeNT": "123"})

    assert template.get_option("testelement") == "123"
    assert template.invoke("getTestElement") == "123"


def test_config_preserves_original_key_casing(document):
    template = Template("x", {"path": str(document), "TestElement": "1"})

    assert list(template.configuration) == ["path", "TestElement"]


def test_dynamic_get_returns_configured_value(document):
    template = Template("testIdentifier", {"path": str(document), "testElement": "123"})

    assert template.invoke("getTestElement") == "123"
    assert template.invoke("get_test_element") is None
    assert template.invoke("getMissing") is None


def test_dynamic_set_stores_value(document):
    template = Template("testIdentifier", {"path": str(document)})

    result = template.invoke("setTestElement", "123")

    assert result is template
    assert template.invoke("getTestElement") == "123"


def test_dynamic_set_identifier_updates_dedicated_field(document):
    template = Template("testIdentifier", {"path": str(document)})

    template.invoke("setIdentifier", "updatedIdentifier")

    assert template.identifier == "updatedIdentifier"
    assert "identifier" not in template.configuration


def test_dynamic_set_path_validates(document, write_document):
    other = write_document("other.html", "other")
    template = Template("testIdentifier", {"path": str(document)})

    template.invoke("setPath", str(other))

    assert template.invoke("getPath") == str(other)


def test_dynamic_set_invalid_path_fails_and_keeps_old_path(document):
    template = Template("testIdentifier", {"path": str(document)})

    with pytest.raises(DocumentNotFound):
        template.invoke("setPath", "this path does not exist")

    assert template.path == str(document)


def test_dynamic_get_and_set_are_case_insensitive(document):
    template = Template("testIdentifier", {"path": str(document)})

    template.invoke("setThisisnotCaseSensiTive", "123")

    assert template.invoke("getThisIsNotCaseSensitive") == "123"


def test_accessor_without_get_or_set_prefix_fails(document):
    """Only get/set accessors are recognized."""
    template = Template(
        "testIdentifier", {"path": str(document), "testTest": "123", "test": "345"}
    )

    with pytest.raises(BadMethodCall):
        template.invoke("testTest")


def test_setter_without_value_fails(document):
    template = Template("testIdentifier", {"path": str(document)})

    with pytest.raises(BadMethodCall):
        template.invoke("setTestElement")


def test_bad_method_call_is_an_attribute_error(document):
    template = Template("testIdentifier", {"path": str(document)})

    with pytest.raises(AttributeError):
        template.invoke("render_everything")


def test_path_property_setter_validates(document, tmp_path):
    template = Template("x", {"path": str(document)})

    with pytest.raises(DocumentNotFound):
        template.path = str(tmp_path / "nope.html")


def test_changing_directory_revalidates(document, tmp_path):
    """Options that move the document are checked like the path itself."""
    template = Template("x", {"path": document.name, "directory": str(document.parent)})

    with pytest.raises(DocumentNotFound):
        template.set_option("directory", str(tmp_path / "elsewhere"))

    assert template.get_option("directory") == str(document.parent)


def test_directory_and_extension_resolve_the_document(write_document):
    document = write_document("views/home.stencil.html", "home")

    template = Template(
        "home",
        {"path": "home", "directory": str(document.parent), "extension": ".stencil.html"},
    )

    assert template.engine.resolve(template) == document


def test_set_returns_self_for_chaining(document):
    template = Template("x", {"path": str(document)})

    assert template.set("a", 1).set("b", 2) is template
    assert template.variables == {"a": 1, "b": 2}


def test_set_array_merges_by_default(document):
    template = Template("x", {"path": str(document)})
    template.set("a", 1).set("b", 2)

    template.set_array({"b": 3, "c": 4})

    assert template.variables == {"a": 1, "b": 3, "c": 4}


def test_set_array_can_replace(document):
    template = Template("x", {"path": str(document)})
    template.set("a", 1)

    template.set_array({"z": 9}, replace=True)

    assert template.variables == {"z": 9}


def test_set_array_merges_through_set(document):
    """Subclasses overriding set() see every merged key."""
    seen = []

    class Tracking(Template):
        def set(self, name, value):
            seen.append(name)
            return super().set(name, value)

    template = Tracking("x", {"path": str(document)})
    template.set_array({"a": 1, "b": 2})

    assert seen == ["a", "b"]


def test_debug_defaults_to_true(document):
    template = Template("x", {"path": str(document)})

    assert template.debug is True
    assert template.minify is False
    assert template.inherit is False


def test_boolean_options_accept_strings(document):
    template = Template("x", {"path": str(document), "debug": "false", "inherit": "yes"})

    assert template.debug is False
    assert template.inherit is True


def test_settings_provide_defaults(document):
    settings = StencilSettings(debug=False, minify=True)

    template = Template("x", {"path": str(document)}, settings=settings)

    assert template.debug is False
    assert template.minify is True


def test_settings_read_environment(document, monkeypatch):
    monkeypatch.setenv("STENCIL_DEBUG", "false")

    template = Template("x", {"path": str(document)}, settings=StencilSettings())

    assert template.debug is False


def test_extend_registers_child_with_merged_config(document):
    """The child inherits configuration and is bound under its identifier."""
    parent = Template("parent", {"path": str(document), "inherit": True, "custom": "a"})

    child = parent.extend("header", {"custom": "b"})

    assert isinstance(child, Template)
    assert parent.variables["header"] is child
    assert child.identifier == "header"
    assert child.path == str(document)
    assert child.get_option("custom") == "b"
    assert child.inherit is True
    assert parent.get_option("custom") == "a"


def test_extend_overrides_path(document, write_document):
    other = write_document("child.html", "child")
    parent = Template("parent", {"path": str(document)})

    child = parent.extend("child", {"path": str(other)})

    assert child.path == str(other)
    assert child.engine is parent.engine


def test_extend_failure_returns_falsy_sentinel(document, tmp_path):
    """A child that cannot be built is reported, not raised, and not registered."""
    parent = Template("parent", {"path": str(document)})

    child = parent.extend("broken", {"path": str(tmp_path / "missing.html")})

    assert not child
    assert isinstance(child, ChildExtendFailure)
    assert child.identifier == "broken"
    assert isinstance(child.error, DocumentNotFound)
    assert "broken" not in parent.variables


def test_extend_uses_factory(document):
    """Children are built by the configured factory, not by the parent's type."""
    calls = []

    class Special(Template):
        pass

    def factory(identifier, config, **kwargs):
        calls.append(identifier)
        return Special(identifier, config, **kwargs)

    parent = Template("parent", {"path": str(document)}, factory=factory)

    child = parent.extend("child")
    grandchild = child.extend("grandchild")

    assert calls == ["child", "grandchild"]
    assert isinstance(child, Special)
    assert isinstance(grandchild, Special)


def test_configuration_equality_ignores_case():
    assert TemplateConfiguration({"Path": "a"}) == {"path": "a"}
    assert TemplateConfiguration({"Path": "a"}) != {"path": "b"}


def test_configuration_merged_does_not_touch_original():
    original = TemplateConfiguration({"path": "a", "debug": True})

    merged = original.merged({"PATH": "b"})

    assert merged["path"] == "b"
    assert original["path"] == "a"
    assert list(merged) == ["path", "debug"]


def test_configuration_view_is_read_only(document):
    """Options change only through set_option, which validates them."""
    template = Template("x", {"path": str(document)})

    with pytest.raises(TypeError):
        template.configuration["path"] = "missing.html"

    assert template.path == str(document)


def test_configuration_view_follows_set_option(document):
    template = Template("x", {"path": str(document)})

    template.set_option("Custom", "1")

    assert template.configuration["custom"] == "1"


def test_set_active_route_returns_self(document):
    template = Template("x", {"path": str(document)})

    assert template.active_route is None
    assert template.set_active_route("/home") is template
    assert template.active_route == "/home"
