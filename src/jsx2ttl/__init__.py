try:
    from ._version import __version__
except ImportError:
    from importlib.metadata import version, PackageNotFoundError

    try:
        __version__ = version("jsx2ttl")
    except PackageNotFoundError:
        __version__ = "unknown"

from jsx2ttl.compiler.exceptions import Jsx2TtlError
from jsx2ttl.compiler.options import TransformOptions
from jsx2ttl.compiler.rewriter import rewrite_tree, transform
from jsx2ttl.compiler.scope import (
    ClassScope,
    FunctionScope,
    ScopeMetadata,
    UnknownScope,
)

__all__ = [
    "TransformOptions",
    "transform",
    "rewrite_tree",
    "Jsx2TtlError",
    "ScopeMetadata",
    "FunctionScope",
    "ClassScope",
    "UnknownScope",
]
