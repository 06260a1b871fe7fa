"""solfmt: a formatter for Solidity source code."""

from solfmt.ast_nodes import Node, load_ast
from solfmt.config import FormatOptions
from solfmt.errors import AstLoadError, FormatError, InvalidVersionRange, UnknownNodeType
from solfmt.formatter import SolidityFormatter, format_source

__version__ = "0.1.0"

__all__ = [
    "AstLoadError",
    "FormatError",
    "FormatOptions",
    "InvalidVersionRange",
    "Node",
    "SolidityFormatter",
    "UnknownNodeType",
    "__version__",
    "format_source",
    "load_ast",
]
