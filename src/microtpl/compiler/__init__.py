"""microtpl compiler package: tokens to executable Python.

- codegen: per-token fragment emission and function assembly
- scope: free-name analysis for explicit context binding
- core: the Compiler driving normalize → tokenize → generate → compile

"""

from microtpl.compiler.codegen import CodeGenerator
from microtpl.compiler.core import Compiler
from microtpl.compiler.scope import find_free_names

__all__ = ["CodeGenerator", "Compiler", "find_free_names"]
