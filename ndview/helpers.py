from typing import TypeVar, Iterable
from collections.abc import Mapping
import sys, os
import contextlib, functools, operator
T = TypeVar("T")

ARGS = {k.upper(): v for k, v in (arg.split('=', 1) for arg in sys.argv[1:] if '=' in arg)}

OPTION_PREFIX = "NDVIEW_"

class Option:
  """Integer log level read from `KEY=n` arguments, then `NDVIEW_KEY`, then `KEY` in the environment."""
  value: int
  key: str
  def __init__(self, key:str, default_value:int=0, max_value:int=2):
    self.key, self.max_value = key.upper(), max_value
    raw = ARGS.get(self.key, os.getenv(OPTION_PREFIX + self.key, os.getenv(self.key, default_value)))
    try: self.value = self.validate(min(int(raw), max_value))
    except ValueError:
      raise ValueError(f"Invalid value for {self.key}: {raw!r}. Expected a non-negative integer.")
  def validate(self, value:int) -> int:
    if not 0 <= value <= self.max_value: raise ValueError(f"{self.key} must be between 0 and {self.max_value}, got {value}")
    return value
  @contextlib.contextmanager
  def scoped(self, value:int):
    previous, self.value = self.value, self.validate(value)
    try: yield self
    finally: self.value = previous
  def __bool__(self): return bool(self.value)
  def __ge__(self, x): return self.value >= x
  def __repr__(self): return f"{self.key}={self.value}"

# 1: allocations and copies, 2: every derived view
DEBUG = Option("DEBUG")

class ShapeError(ValueError):
  """Nested input or operands whose shape cannot be used."""

def prod(x:Iterable[T]) -> T|int: return functools.reduce(operator.mul, x, 1)
def tupled(x) -> tuple: return tuple(x) if isinstance(x, Iterable) and not isinstance(x, (str, bytes)) else (x,)
def all_same(items:tuple[T, ...]|list[T]): return all(x == items[0] for x in items)
def is_sequence(x) -> bool: return hasattr(x, "__len__") and hasattr(x, "__getitem__") and not isinstance(x, (str, bytes, Mapping))

def get_shape(x) -> tuple[int, ...]:
  if not is_sequence(x): return ()
  if len(x) == 0: raise ShapeError(f"cannot infer shape from empty sequence {x!r}")
  if not all_same(subs:=[get_shape(xi) for xi in x]): raise ShapeError(f"inhomogeneous shape from {x}")
  return (len(subs),) + subs[0]

def fully_flatten(l) -> list:
  if is_sequence(l):
    flattened = []
    for li in l: flattened.extend(fully_flatten(li))
    return flattened
  return [l]
