import sys, os
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))
from ndview.array import NDArray
from ndview.helpers import DEBUG

def run(nested, index=None):
  arr = NDArray.from_nested(nested)
  print(f"shape={arr.shape} strides={arr.strides} dtype={arr.dtype.name}")
  print(arr if index is None else arr.get(index))
  return arr

def main():
  a = run([[1, 2], [3, 4]])
  row = a.get(0)
  row.set(1, 9)
  print(a, row.shares_storage(a))
  run([1, 2, 3, 4, 5], slice(None, None, -1))

if __name__ == "__main__":
  if not DEBUG: DEBUG.value = 2
  main()
