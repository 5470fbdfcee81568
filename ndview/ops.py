from __future__ import annotations
from enum import auto, Enum
from typing import Callable
from ndview.array import NDArray, Ops, Scalar
from ndview.dtype import dtypes
from ndview.helpers import DEBUG, ShapeError
import operator, math

def safe_pow(x, y):
  p = pow(x, y)
  return math.nan if isinstance(p, complex) else p

python_alu: dict[Ops, Callable] = {
  Ops.NEG: operator.neg,
  Ops.ADD: operator.add, Ops.SUB: operator.sub, Ops.MUL: operator.mul, Ops.DIV: operator.truediv,
  Ops.MOD: operator.mod, Ops.POW: safe_pow, Ops.MAX: max,
}

class Kind(Enum):
  ARRAY = auto(); SCALAR = auto()

def kind_of(x) -> Kind:
  if isinstance(x, NDArray): return Kind.ARRAY
  dtypes.get_dtype(x)
  return Kind.SCALAR

def result(values:list, shape:tuple[int, ...], fallback:NDArray) -> NDArray:
  # an empty view carries no values to infer the dtype from
  return NDArray._from_flat(values, shape, None if values else fallback.dtype)

def array_array(fxn:Callable, a:NDArray, b:NDArray) -> NDArray:
  if a.shape != b.shape: raise ShapeError(f"Operands need to have the same shape\nLeft: {a.shape}\nRight: {b.shape}")
  return result([fxn(x, y) for x, y in zip(a.flat, b.flat)], a.shape, a)

def array_scalar(fxn:Callable, a:NDArray, b:Scalar) -> NDArray:
  return result([fxn(x, b) for x in a.flat], a.shape, a)

def scalar_array(fxn:Callable, a:Scalar, b:NDArray) -> NDArray:
  return result([fxn(a, y) for y in b.flat], b.shape, b)

def scalar_scalar(fxn:Callable, a:Scalar, b:Scalar):
  raise TypeError(f"Expected at least one array operand but got {type(a).__name__} and {type(b).__name__}")

dispatch: dict[tuple[Kind, Kind], Callable] = {
  (Kind.ARRAY, Kind.ARRAY): array_array,
  (Kind.ARRAY, Kind.SCALAR): array_scalar,
  (Kind.SCALAR, Kind.ARRAY): scalar_array,
  (Kind.SCALAR, Kind.SCALAR): scalar_scalar,
}

def binary(op:Ops, a:NDArray|Scalar, b:NDArray|Scalar) -> NDArray:
  fxn = dispatch[(kind_of(a), kind_of(b))]
  if DEBUG >= 2: print(f"BINARY {op} {fxn.__name__}")
  return fxn(python_alu[op], a, b)

def unary(op:Ops, a:NDArray) -> NDArray:
  if kind_of(a) is not Kind.ARRAY: raise TypeError(f"Expected an array operand but got {type(a).__name__}")
  fxn = python_alu[op]
  return result([fxn(x) for x in a.flat], a.shape, a)

def add(a, b) -> NDArray: return binary(Ops.ADD, a, b)
def sub(a, b) -> NDArray: return binary(Ops.SUB, a, b)
def mul(a, b) -> NDArray: return binary(Ops.MUL, a, b)
def div(a, b) -> NDArray: return binary(Ops.DIV, a, b)
def maximum(a, b) -> NDArray: return binary(Ops.MAX, a, b)
