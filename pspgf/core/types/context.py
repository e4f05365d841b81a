# pspgf - A PostScript to PGF Converter
# Copyright (c) 2025-2026 Scott Bowman
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
pspgf Types Context and Execution Infrastructure Module

Context bundles everything one interpreter run owns: the operand stack,
the dictionary stack, the graphics state and its save stack, the output
device and the system parameters. Nothing in here is shared between
contexts.
"""

import random
import sys
from typing import Any, Dict, Optional

from ..error import PSError, STACKOVERFLOW
from .base import PSObject
from .constants import D_STACK_MAX, EXEC_DEPTH_MAX, G_STACK_MAX, O_STACK_MAX


class Stack(list):
    """
    A list with a depth limit. Operators index it directly (ostack[-1]) and
    check its depth themselves before popping.
    """

    def __init__(self, max_length: int) -> None:
        super().__init__()
        self.max_length = max_length

    def append(self, obj) -> None:
        if self.max_length and len(self) >= self.max_length:
            raise PSError(STACKOVERFLOW)
        super().append(obj)

    def peek(self, depth: int = 0):
        """The object `depth` entries below the top."""
        return self[-1 - depth]

    def __str__(self) -> str:
        return " ".join(repr(item) for item in self)

    def __repr__(self) -> str:
        return self.__str__()


class DictStack(Stack):
    """The dictionary stack; the innermost (current) dictionary is last."""

    def lookup(self, key: PSObject) -> Optional[PSObject]:
        hkey = key.to_dict_key()
        for d in reversed(self):
            val = d.val.get(hkey)
            if val is not None:
                return val
        return None

    def where(self, key: PSObject):
        hkey = key.to_dict_key()
        for d in reversed(self):
            if hkey in d.val:
                return d
        return None

    def define(self, key: PSObject, value: PSObject) -> None:
        self[-1].put(key, value)

    def store(self, key: PSObject, value: PSObject) -> None:
        """Replace key where it is defined, else define it in the current dictionary."""
        d = self.where(key)
        if d is None:
            d = self[-1]
        d.put(key, value)


class Context(object):
    """Execution state of a single interpreter run."""

    def __init__(self, system_params: Dict[str, Any]) -> None:
        self.system_params = system_params

        self.o_stack = Stack(system_params.get("MaxOpStack", O_STACK_MAX))
        self.d_stack = DictStack(system_params.get("MaxDictStack", D_STACK_MAX))
        self.g_stack = Stack(system_params.get("MaxGStack", G_STACK_MAX))
        self.MaxExecDepth = system_params.get("MaxExecDepth", EXEC_DEPTH_MAX)
        self.exec_depth = 0

        self.gstate = None
        self.device = None
        self.font_metrics = None

        # permanent dictionaries, filled by create_context
        self.system_dict = None
        self.global_dict = None
        self.user_dict = None
        self.font_directory = None
        self.error_info = None

        # files currently being executed, innermost last (for currentfile)
        self.file_stack = []
        self.stdout = sys.stdout

        self.vm_alloc_mode = False
        self.save_id = 0
        self.random_seed = 0
        self.rng = random.Random(0)
