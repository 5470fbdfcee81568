from dataclasses import dataclass

@dataclass(frozen=True, eq=False)
class DType:
  name: str
  priority: int
  type: type

  def cast(self, value):
    src = dtypes.get_dtype(value)
    if src.priority > self.priority:
      raise TypeError(f"Cannot store {type(value).__name__} {value!r} in an array of dtype {self.name}")
    return self.type(value)
  def __repr__(self): return f"dtypes.{self.name}"

class dtypes:
  bool = DType('bool', 0, bool)
  int = DType('int', 1, int)
  float = DType('float', 2, float)

  @staticmethod
  def get_dtype(value) -> DType:
    ret = getattr(dtypes, type(value).__name__.lower(), None)
    if not isinstance(ret, DType): raise TypeError(f"Expected a bool, int or float element but got {type(value).__name__} {value!r}")
    return ret
  @staticmethod
  def promote(*dts:DType) -> DType: return max(dts, key=lambda d: d.priority)
