"""Transform options."""

from __future__ import annotations

import importlib
import sys
import tomllib
from dataclasses import dataclass, fields
from pathlib import Path
from typing import TYPE_CHECKING, Any, Callable, Dict, List, Mapping, Optional, Union

from jsx2ttl.compiler.ast_nodes import JSXAttribute, Node
from jsx2ttl.compiler.exceptions import InvalidOptionsError
from jsx2ttl.compiler.serialization import snake_case

if TYPE_CHECKING:
    from jsx2ttl.compiler.scope import ScopeMetadata

AttributeTransform = Callable[[JSXAttribute], JSXAttribute]
ExtraArgsFn = Callable[["ScopeMetadata"], List[Node]]


def identity_attribute(attribute: JSXAttribute) -> JSXAttribute:
    return attribute


def no_extra_args(scope: "ScopeMetadata") -> List[Node]:
    return []


@dataclass(frozen=True)
class TransformOptions:
    """Options for one run of the pass.

    ``import_as`` defaults to ``import_name``; hooks default to identity and
    "no extra arguments". Hooks may also be given as ``"module:function"``
    strings and are resolved when the options are built.
    """

    import_path: str
    import_name: str
    import_as: Optional[str] = None
    is_default_import: bool = False
    use_constructor_call: bool = True
    attribute_transform: Union[AttributeTransform, str, None] = None
    extra_args_fn: Union[ExtraArgsFn, str, None] = None

    def __post_init__(self) -> None:
        if not self.import_path:
            raise InvalidOptionsError("import_path is required")
        if not self.import_name:
            raise InvalidOptionsError("import_name is required")

        # Frozen, so defaults are resolved through object.__setattr__
        if not self.import_as:
            object.__setattr__(self, "import_as", self.import_name)

        transform = self.attribute_transform
        if transform is None:
            transform = identity_attribute
        elif isinstance(transform, str):
            transform = load_hook(transform)
        object.__setattr__(self, "attribute_transform", transform)

        extra = self.extra_args_fn
        if extra is None:
            extra = no_extra_args
        elif isinstance(extra, str):
            extra = load_hook(extra)
        object.__setattr__(self, "extra_args_fn", extra)

        if not callable(self.attribute_transform):
            raise InvalidOptionsError("attribute_transform must be callable")
        if not callable(self.extra_args_fn):
            raise InvalidOptionsError("extra_args_fn must be callable")

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "TransformOptions":
        """Build options from a config table. camelCase keys are accepted."""
        known = {f.name for f in fields(cls)}
        kwargs: Dict[str, Any] = {}
        for key, value in data.items():
            name = snake_case(key)
            if name == "call_without_new":
                kwargs["use_constructor_call"] = not value
                continue
            name = _OPTION_ALIASES.get(name, name)
            if name not in known:
                raise InvalidOptionsError(f"Unknown option '{key}'")
            kwargs[name] = value
        if "import_path" not in kwargs or "import_name" not in kwargs:
            raise InvalidOptionsError("import_path and import_name are required")
        return cls(**kwargs)

    @classmethod
    def from_pyproject(
        cls, path: Path, overrides: Optional[Mapping[str, Any]] = None
    ) -> "TransformOptions":
        """Read the ``[tool.jsx2ttl]`` table, then apply ``overrides``."""
        with open(path, "rb") as f:
            data = tomllib.load(f)
        table = dict(data.get("tool", {}).get("jsx2ttl", {}))
        if overrides:
            table.update({k: v for k, v in overrides.items() if v is not None})
        return cls.from_mapping(table)


_OPTION_ALIASES = {
    "transform_attribute": "attribute_transform",
    "call_with_additional_args_fn": "extra_args_fn",
}


def load_hook(target: str) -> Callable[..., Any]:
    """Import a hook from a string (e.g. 'jsx2ttl.transforms:rename_class_name')."""
    if ":" not in target:
        raise InvalidOptionsError(
            f"Hook '{target}' must be in format 'module:function'"
        )

    module_name, attr_name = target.split(":", 1)

    try:
        module = importlib.import_module(module_name)
    except ImportError as e:
        raise InvalidOptionsError(f"Could not import module '{module_name}': {e}")

    hook = module
    for part in attr_name.split("."):
        try:
            hook = getattr(hook, part)
        except AttributeError:
            raise InvalidOptionsError(
                f"Attribute '{attr_name}' not found in module '{module_name}'"
            )

    if not callable(hook):
        raise InvalidOptionsError(f"Hook '{target}' is not callable")
    return hook


def ensure_cwd_importable() -> None:
    """Let hooks live in the project being compiled."""
    cwd = str(Path.cwd())
    if cwd not in sys.path:
        sys.path.insert(0, cwd)
