"""
Program state threaded through evaluation.

A Program holds the flat variable environment and two append-only arenas:
one for objects and one for native functions. Arena handles are list
indices; nothing is ever removed, so a handle stays valid for as long as
the Program lives.
"""

import logging
from dataclasses import dataclass, field
from typing import Callable, Dict, Generic, List, Optional, TypeVar

from .values import Object, Value, function_val, object_val

logger = logging.getLogger(__name__)

T = TypeVar("T")

# fn(arguments, program) -> optional result; raises NativeError on failure
NativeFunction = Callable[[List[Value], "Program"], Optional[Value]]


class Arena(Generic[T]):
    """Append-only store addressed by integer handle."""

    def __init__(self):
        self._items: List[T] = []

    def create(self, item: T) -> int:
        """Store an item and return its handle."""
        handle = len(self._items)
        self._items.append(item)
        return handle

    def get(self, handle: int) -> Optional[T]:
        """Look up a handle; None if it was never issued."""
        if 0 <= handle < len(self._items):
            return self._items[handle]
        return None

    # Items are stored by reference, so the same lookup serves mutation
    get_mut = get

    def __len__(self) -> int:
        return len(self._items)

    def __repr__(self) -> str:
        return f"Arena({self._items!r})"


@dataclass
class Program:
    """
    The single mutable state of an interpreter session.

    Create it once with Program.init() and pass it to every evaluation.
    """
    variables: Dict[str, Value] = field(default_factory=dict)
    objects: Arena[Object] = field(default_factory=Arena)
    native_functions: Arena[NativeFunction] = field(default_factory=Arena)

    @classmethod
    def init(cls) -> "Program":
        """An empty program with the built-in functions bound."""
        from .builtins import register_builtins

        program = cls()
        register_builtins(program)
        return program

    def get(self, name: str) -> Optional[Value]:
        """Look up a variable."""
        return self.variables.get(name)

    def set(self, name: str, value: Value) -> Optional[Value]:
        """Bind a variable, returning the value it replaced, if any."""
        previous = self.variables.get(name)
        self.variables[name] = value
        return previous

    def new_object(self, name: str, obj: Object) -> Optional[Value]:
        """Store an object in the arena and bind a variable to it."""
        handle = self.objects.create(obj)
        logger.debug("object %r created at handle %d", name, handle)
        return self.set(name, object_val(handle))

    def new_function(self, name: str, fn: NativeFunction) -> Optional[Value]:
        """Store a native function in the arena and bind a variable to it."""
        handle = self.native_functions.create(fn)
        logger.debug("native function %r registered at handle %d", name, handle)
        return self.set(name, function_val(handle))
