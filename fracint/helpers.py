import contextlib, os
from typing import ClassVar

# environment backed settings, pattern from: https://github.com/tinygrad/tinygrad/blob/master/tinygrad/helpers.py
def getenv(key:str, default=0):
  if (v:=os.getenv(key)) is None: return default
  try: return type(default)(v)
  except ValueError: raise ValueError(f"environment variable {key}={v!r} is not a valid {type(default).__name__}") from None

class Setting:
  """Process-wide integer knob, read once from the environment variable of the same name."""
  registry: ClassVar[dict[str, "Setting"]] = {}
  value: int
  key: str
  def __init__(self, key:str, default:int=0):
    if key in Setting.registry: raise RuntimeError(f"setting {key} already exists")
    self.key, self.value = key, getenv(key, default)
    Setting.registry[key] = self
  def __ge__(self, x): return self.value >= x

class override(contextlib.ContextDecorator):
  """`with override(FRACINT_DEBUG=1): ...` or `@override(FRACINT_DEBUG=1)`. Restores the previous values on exit."""
  def __init__(self, **values):
    if unknown:=[k for k in values if k not in Setting.registry]: raise KeyError(f"unknown settings {unknown}")
    self.values = values
  def __enter__(self):
    self.saved = {k:Setting.registry[k].value for k in self.values}
    for k,v in self.values.items(): Setting.registry[k].value = v
  def __exit__(self, *args):
    for k,v in self.saved.items(): Setting.registry[k].value = v

DEBUG = Setting("FRACINT_DEBUG", 0)

def debug(level:int, *args):
  if DEBUG >= level: print(*args)
