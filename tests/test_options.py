import textwrap

import pytest

from jsx2ttl.compiler.ast_nodes import BooleanLiteral, JSXAttribute, JSXIdentifier
from jsx2ttl.compiler.exceptions import InvalidOptionsError
from jsx2ttl.compiler.options import (
    TransformOptions,
    identity_attribute,
    load_hook,
    no_extra_args,
)
from jsx2ttl.compiler.scope import UnknownScope
from jsx2ttl.transforms import html_attributes, rename_class_name


def test_defaults_resolve() -> None:
    opts = TransformOptions(import_path="../ttl", import_name="Template")
    assert opts.import_as == "Template"
    assert opts.is_default_import is False
    assert opts.use_constructor_call is True
    assert opts.attribute_transform is identity_attribute
    assert opts.extra_args_fn is no_extra_args
    attribute = JSXAttribute(JSXIdentifier("id"))
    assert opts.attribute_transform(attribute) is attribute
    assert opts.extra_args_fn(UnknownScope()) == []


def test_options_are_immutable() -> None:
    opts = TransformOptions(import_path="ttl", import_name="Template")
    with pytest.raises(Exception):
        opts.import_as = "X"  # type: ignore[misc]


@pytest.mark.parametrize("missing", ["import_path", "import_name"])
def test_required_fields(missing) -> None:
    kwargs = {"import_path": "ttl", "import_name": "Template"}
    kwargs[missing] = ""
    with pytest.raises(InvalidOptionsError, match=missing):
        TransformOptions(**kwargs)


def test_hook_strings_are_resolved() -> None:
    opts = TransformOptions(
        import_path="ttl",
        import_name="Template",
        attribute_transform="jsx2ttl.transforms:rename_class_name",
        extra_args_fn="jsx2ttl.transforms:component_flag_args",
    )
    assert opts.attribute_transform is rename_class_name
    assert opts.extra_args_fn is not no_extra_args


def test_load_hook_errors() -> None:
    with pytest.raises(InvalidOptionsError, match="module:function"):
        load_hook("jsx2ttl.transforms")
    with pytest.raises(InvalidOptionsError, match="Could not import"):
        load_hook("jsx2ttl.no_such_module:fn")
    with pytest.raises(InvalidOptionsError, match="not found"):
        load_hook("jsx2ttl.transforms:nope")
    with pytest.raises(InvalidOptionsError, match="not callable"):
        load_hook("jsx2ttl.compiler.scope:MAX_ANCESTOR_HOPS")


def test_non_callable_hook_rejected() -> None:
    with pytest.raises(InvalidOptionsError):
        TransformOptions(import_path="ttl", import_name="T", extra_args_fn=3)  # type: ignore[arg-type]


def test_from_mapping_accepts_camel_case() -> None:
    opts = TransformOptions.from_mapping(
        {
            "importPath": "../ttl/myttl",
            "importName": "myttl",
            "isDefaultImport": True,
            "callWithoutNew": True,
            "transformAttribute": "jsx2ttl.transforms:html_attributes",
        }
    )
    assert opts.import_path == "../ttl/myttl"
    assert opts.import_as == "myttl"
    assert opts.is_default_import is True
    assert opts.use_constructor_call is False
    assert opts.attribute_transform is html_attributes


def test_from_mapping_rejects_unknown_keys() -> None:
    with pytest.raises(InvalidOptionsError, match="Unknown option"):
        TransformOptions.from_mapping({"importPath": "a", "importName": "b", "colour": 1})
    with pytest.raises(InvalidOptionsError, match="required"):
        TransformOptions.from_mapping({"importPath": "a"})


def test_from_pyproject_with_overrides(tmp_path) -> None:
    pyproject = tmp_path / "pyproject.toml"
    pyproject.write_text(
        textwrap.dedent(
            """
            [project]
            name = "site"

            [tool.jsx2ttl]
            import_path = "../ttl"
            import_name = "Template"
            extra_args_fn = "jsx2ttl.transforms:component_flag_args"
            """
        )
    )
    opts = TransformOptions.from_pyproject(pyproject, {"import_as": "T", "import_name": None})
    assert opts.import_path == "../ttl"
    assert opts.import_name == "Template"
    assert opts.import_as == "T"
    assert opts.extra_args_fn(UnknownScope()) == []


def test_extra_args_example_values() -> None:
    opts = TransformOptions.from_mapping(
        {
            "import_path": "ttl",
            "import_name": "Template",
            "call_with_additional_args_fn": "jsx2ttl.transforms:component_flag_args",
        }
    )
    from jsx2ttl.compiler.scope import FunctionScope

    assert opts.extra_args_fn(FunctionScope("App")) == [BooleanLiteral(True)]
