from __future__ import annotations
import functools, itertools, operator
from dataclasses import dataclass
from ndview.helpers import ShapeError, prod, tupled

@functools.lru_cache(maxsize=None)
def strides_for_shape(shape:tuple[int, ...]) -> tuple[int, ...]:
  if not shape: return ()
  return tuple(itertools.accumulate(reversed(shape[1:]), operator.mul, initial=1))[::-1]

def check_type(i) -> int:
  if isinstance(i, bool) or not isinstance(i, int):
    raise TypeError(f"Indices must be integers or slices, not {type(i).__name__}")
  return i

def check_index(i, extent:int, axis:int=0) -> int:
  check_type(i)
  if not 0 <= i < extent:
    raise IndexError(f"Index {i} is out of bounds for axis {axis} with size {extent}")
  return i

@dataclass(frozen=True)
class View():
  """
  Addressing metadata for one window into a flat buffer.

  Element (i0, ..., ik) lives at offset + i0*strides[0] + ... + ik*strides[k].
  Every transform returns a new View and leaves the buffer alone.
  """
  shape:tuple[int, ...]
  strides:tuple[int, ...]
  offset:int

  def __post_init__(self):
    assert len(self.shape) == len(self.strides), f"Shape {self.shape} and strides {self.strides} need to have the same length"

  @staticmethod
  @functools.lru_cache(maxsize=None)
  def create(shape:tuple[int, ...]=()) -> View:
    return View(shape, strides_for_shape(shape), 0)

  @property
  def rank(self) -> int: return len(self.shape)
  @property
  def size(self) -> int: return prod(self.shape)
  @property
  def contiguous(self) -> bool:
    return all(st == cst for s, st, cst in zip(self.shape, self.strides, strides_for_shape(self.shape)) if s != 1)

  def position(self, indices:tuple[int, ...]) -> int:
    if len(indices) != self.rank:
      raise IndexError(f"Expected {self.rank} indices to address a single element of shape {self.shape} but got {len(indices)}")
    return self.offset + sum(check_index(i, s, axis) * st for axis, (i, s, st) in enumerate(zip(indices, self.shape, self.strides)))

  def index(self, i:int, axis:int=0) -> View:
    if axis >= self.rank: raise IndexError(f"Too many indices for array of rank {self.rank}")
    check_index(i, self.shape[axis], axis)
    return View(self.shape[:axis] + self.shape[axis+1:], self.strides[:axis] + self.strides[axis+1:], self.offset + i * self.strides[axis])

  def slice(self, axis:int, s:slice) -> View:
    if axis >= self.rank: raise IndexError(f"Too many indices for array of rank {self.rank}")
    start, stop, step = s.indices(self.shape[axis])
    length = len(range(start, stop, step))
    shape = self.shape[:axis] + (length,) + self.shape[axis+1:]
    strides = self.strides[:axis] + (self.strides[axis] * step,) + self.strides[axis+1:]
    return View(shape, strides, self.offset + (start * self.strides[axis] if length else 0))

  def permute(self, dims:tuple[int, ...]) -> View:
    dims = tupled(dims)
    if sorted(dims) != list(range(self.rank)): raise ValueError(f"Invalid dims {dims} for shape {self.shape}")
    return View(tuple(self.shape[d] for d in dims), tuple(self.strides[d] for d in dims), self.offset)

  def flip(self, dims:tuple[int, ...]) -> View:
    dims = tupled(dims)
    if len(dims) != len(set(dims)): raise ValueError(f"Dims {dims} need to be unique")
    if not all(0 <= d < self.rank for d in dims): raise ValueError(f"Invalid dims {dims} for shape {self.shape}")
    view = self
    for d in dims: view = view.slice(d, slice(None, None, -1))
    return view

  def reshape(self, shape:tuple[int, ...]) -> View:
    shape = tupled(shape)
    if not shape or not all(isinstance(s, int) and not isinstance(s, bool) and s > 0 for s in shape): raise ShapeError(f"Invalid shape {shape}")
    if prod(shape) != self.size: raise ShapeError(f"Cannot reshape {self.shape} of size {self.size} into {shape}")
    if not self.contiguous: raise ValueError(f"Cannot reshape non-contiguous view with strides {self.strides} without copying")
    return View(shape, strides_for_shape(shape), self.offset)

  def indices(self):
    return itertools.product(*(range(s) for s in self.shape))
  def positions(self):
    return (self.offset + sum(i * st for i, st in zip(idx, self.strides)) for idx in self.indices())
