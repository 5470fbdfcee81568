from __future__ import annotations
from enum import auto, IntEnum, Enum
from typing import Iterator
from ndview.dtype import DType, dtypes
from ndview.helpers import DEBUG, ShapeError, fully_flatten, get_shape, is_sequence, tupled
from ndview.view import View, check_type

class Ops(IntEnum):
  # Unary ops
  NEG = auto()
  # Binary ops
  ADD = auto(); SUB = auto(); MUL = auto(); DIV = auto(); MOD = auto(); POW = auto(); MAX = auto()
  def __str__(self): return Enum.__str__(self)

Scalar = bool|int|float
IndexerType = int|slice|tuple

class Buffer:
  """Flat storage owned by a root array and shared by every view taken from it."""
  __slots__ = ["data", "dtype"]
  def __init__(self, data:list, dtype:DType):
    self.data = data
    self.dtype = dtype
  def __len__(self): return len(self.data)
  def __repr__(self): return f"Buffer(size={len(self)}, dtype={self.dtype.name})"

class NDArray:
  """
  Fixed-shape N-dimensional numeric array.

  Indexing with fewer indices than the rank returns a view that shares the
  parent's buffer, so writes through any view show up in every overlapping one.
  Use copy() for independent storage.

  Not thread safe. Callers mutating shared storage from several threads must
  synchronize externally.
  """
  __slots__ = ["_buffer", "_view"]
  _buffer:Buffer
  _view:View

  def __init__(self, nested):
    if isinstance(nested, NDArray): nested = nested.tolist()
    shape = get_shape(nested)
    if shape == ():
      dtypes.get_dtype(nested)
      raise ShapeError(f"Cannot build an array from scalar {nested!r}")
    self._buffer, self._view = NDArray._allocate(fully_flatten(nested), shape)

  @classmethod
  def from_nested(cls, nested) -> NDArray: return cls(nested)

  @staticmethod
  def _allocate(values:list, shape:tuple[int, ...], dtype:DType|None=None) -> tuple[Buffer, View]:
    view = View.create(shape)
    assert len(values) == view.size, f"Got {len(values)} values for shape {shape}"
    if dtype is None: dtype = dtypes.promote(*map(dtypes.get_dtype, values))
    buffer = Buffer([dtype.cast(v) for v in values], dtype)
    if DEBUG: print(f"ALLOCATE shape={shape} dtype={dtype.name} size={len(buffer)}")
    return buffer, view

  @classmethod
  def _from_flat(cls, values:list, shape:tuple[int, ...], dtype:DType|None=None) -> NDArray:
    arr:NDArray = cls.__new__(cls)
    arr._buffer, arr._view = NDArray._allocate(values, shape, dtype)
    return arr

  @classmethod
  def _from_view(cls, buffer:Buffer, view:View) -> NDArray:
    arr:NDArray = cls.__new__(cls)
    arr._buffer, arr._view = buffer, view
    if DEBUG >= 2: print(f"VIEW shape={view.shape} strides={view.strides} offset={view.offset}")
    return arr

  @property
  def shape(self) -> tuple[int, ...]: return self._view.shape
  @property
  def strides(self) -> tuple[int, ...]: return self._view.strides
  @property
  def offset(self) -> int: return self._view.offset
  @property
  def rank(self) -> int: return self._view.rank
  @property
  def ndim(self) -> int: return self._view.rank
  @property
  def size(self) -> int: return self._view.size
  @property
  def dtype(self) -> DType: return self._buffer.dtype
  @property
  def base(self) -> Buffer: return self._buffer
  @property
  def flat(self) -> Iterator[Scalar]:
    data = self._buffer.data
    return (data[p] for p in self._view.positions())

  def shares_storage(self, other:NDArray) -> bool: return self._buffer is other._buffer

  def _resolve(self, index:IndexerType) -> View:
    view = self._view
    if isinstance(index, tuple):
      if len(index) > view.rank: raise IndexError(f"Too many indices for array of rank {view.rank}: {index}")
      axis = 0
      for i in index:
        if isinstance(i, slice):
          view = view.slice(axis, i)
          axis += 1
        else: view = view.index(i, axis)
      return view
    if isinstance(index, slice): return view.slice(0, index)
    return view.index(index)

  def _wrap(self, view:View) -> NDArray|Scalar:
    return self._buffer.data[view.offset] if view.rank == 0 else NDArray._from_view(self._buffer, view)

  def get(self, index:IndexerType) -> NDArray|Scalar: return self._wrap(self._resolve(index))

  def set(self, index:int|tuple[int, ...], value:Scalar) -> None:
    if not isinstance(index, (tuple, slice)): check_type(index)
    indices = tupled(index)
    if any(isinstance(i, slice) for i in indices):
      raise IndexError(f"Assignment needs integer indices addressing a single element, got {index}")
    position = self._view.position(indices)
    self._buffer.data[position] = self.dtype.cast(value)

  def fill(self, value:Scalar) -> None:
    value = self.dtype.cast(value)
    data = self._buffer.data
    for p in self._view.positions(): data[p] = value

  def __getitem__(self, index:IndexerType): return self.get(index)
  def __setitem__(self, index:int|tuple[int, ...], value:Scalar): self.set(index, value)
  def __len__(self) -> int: return self.shape[0]
  def __iter__(self) -> Iterator[NDArray|Scalar]:
    for i in range(self.shape[0]): yield self._wrap(self._view.index(i))

  def copy(self) -> NDArray:
    if DEBUG: print(f"COPY shape={self.shape} from offset={self.offset}")
    return NDArray._from_flat(list(self.flat), self.shape, self.dtype)

  def tolist(self) -> list:
    if self.rank == 1: return list(self)
    return [x.tolist() for x in self]

  def transpose(self, *dims:int) -> NDArray:
    if len(dims) == 1 and is_sequence(dims[0]): dims = tuple(dims[0])
    return NDArray._from_view(self._buffer, self._view.permute(dims or tuple(reversed(range(self.rank)))))
  @property
  def T(self) -> NDArray: return self.transpose()
  def flip(self, *dims:int) -> NDArray:
    if len(dims) == 1 and is_sequence(dims[0]): dims = tuple(dims[0])
    return NDArray._from_view(self._buffer, self._view.flip(dims or tuple(range(self.rank))))
  def reshape(self, *shape:int) -> NDArray:
    if len(shape) == 1 and is_sequence(shape[0]): shape = tuple(shape[0])
    return NDArray._from_view(self._buffer, self._view.reshape(shape))

  def _binop(self, op:Ops, x, reverse=False) -> NDArray:
    from ndview.ops import binary
    return binary(op, x, self) if reverse else binary(op, self, x)

  def __add__(self, x): return self._binop(Ops.ADD, x)
  def __sub__(self, x): return self._binop(Ops.SUB, x)
  def __mul__(self, x): return self._binop(Ops.MUL, x)
  def __truediv__(self, x): return self._binop(Ops.DIV, x)
  def __mod__(self, x): return self._binop(Ops.MOD, x)
  def __pow__(self, x): return self._binop(Ops.POW, x)

  def __radd__(self, x): return self._binop(Ops.ADD, x, True)
  def __rsub__(self, x): return self._binop(Ops.SUB, x, True)
  def __rmul__(self, x): return self._binop(Ops.MUL, x, True)
  def __rtruediv__(self, x): return self._binop(Ops.DIV, x, True)
  def __rmod__(self, x): return self._binop(Ops.MOD, x, True)
  def __rpow__(self, x): return self._binop(Ops.POW, x, True)

  def __neg__(self):
    from ndview.ops import unary
    return unary(Ops.NEG, self)
  def maximum(self, x): return self._binop(Ops.MAX, x)

  def __repr__(self):
    from ndview.render import render_array
    return f"ndarray({render_array(self)}, dtype={self.dtype.name})"
  def __str__(self):
    from ndview.render import render_array
    return render_array(self)
