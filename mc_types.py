#  SPDX-License-Identifier: MIT OR Apache-2.0
#  Copyright (c) 2025-2026 gwz

from dataclasses import dataclass
from typing import Tuple, Optional

from mc_internal_error import InternalCompilerError

# =====================================================
# Types that can appear in declared-type slots of the AST
# =====================================================

class Type:
    """
    Base class for all types.
    Used only as a common marker; concrete types are dataclasses below.
    """
    pass


@dataclass(frozen=True)
class UnitType(Type):
    pass


@dataclass(frozen=True)
class BoolType(Type):
    pass


@dataclass(frozen=True)
class IntType(Type):
    pass


@dataclass(frozen=True)
class FloatType(Type):
    pass


@dataclass(frozen=True)
class FunType(Type):
    result: Type
    params: Tuple[Type, ...]


@dataclass(frozen=True)
class TupleType(Type):
    elements: Tuple[Type, ...]


@dataclass(frozen=True)
class ArrayType(Type):
    element: Type


@dataclass(eq=False)
class VarType(Type):
    """
    Inference placeholder. `ref` stays None until a later stage resolves it.
    Placeholders compare by identity.
    """
    ref: Optional[Type] = None

    @property
    def is_resolved(self) -> bool:
        return self.ref is not None


def gen_type() -> VarType:
    """Create a fresh, unresolved placeholder."""
    return VarType()


# Names accepted in type annotations
MC_PRIMITIVE_TYPES = {
    "unit": UnitType,
    "bool": BoolType,
    "int": IntType,
    "float": FloatType,
}


def get_primitive_type(name: str) -> Optional[Type]:
    cls = MC_PRIMITIVE_TYPES.get(name)
    return cls() if cls is not None else None


def resolve(t: Type) -> Type:
    """Follow resolved placeholders down to the type they stand for."""
    while isinstance(t, VarType) and t.ref is not None:
        t = t.ref
    return t


def short_code(t: Type) -> str:
    """One-letter code of a type, used when naming temporaries."""
    t = resolve(t)
    if isinstance(t, UnitType):
        return "u"
    elif isinstance(t, BoolType):
        return "b"
    elif isinstance(t, IntType):
        return "i"
    elif isinstance(t, FloatType):
        return "d"
    elif isinstance(t, FunType):
        return "f"
    elif isinstance(t, TupleType):
        return "t"
    elif isinstance(t, ArrayType):
        return "a"
    raise InternalCompilerError(f"[ICE-0010] no short code for unresolved type {format_type(t)}")


# --- type stringification for debugging ---

def format_type(t: Optional[Type]) -> str:
    if t is None:
        return "<none>"
    elif isinstance(t, UnitType):
        return "unit"
    elif isinstance(t, BoolType):
        return "bool"
    elif isinstance(t, IntType):
        return "int"
    elif isinstance(t, FloatType):
        return "float"
    elif isinstance(t, FunType):
        params_str = " -> ".join(format_type(p) for p in t.params)
        return f"({params_str} -> {format_type(t.result)})"
    elif isinstance(t, TupleType):
        return "(" + " * ".join(format_type(e) for e in t.elements) + ")"
    elif isinstance(t, ArrayType):
        return f"{format_type(t.element)} array"
    elif isinstance(t, VarType):
        if t.ref is None:
            return "'_"
        return format_type(t.ref)
    else:
        # Fallback (should not happen)
        return repr(t)
