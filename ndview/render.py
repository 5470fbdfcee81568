from __future__ import annotations
from ndview.array import NDArray

def render_scalar(x) -> str: return repr(x)
def render_array(arr:NDArray, separator:str=', ') -> str:
  if arr.rank == 1: return f"[{separator.join(render_scalar(x) for x in arr)}]"
  return f"[{separator.join(render_array(sub, separator) for sub in arr)}]"
