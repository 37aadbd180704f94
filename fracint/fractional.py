from dataclasses import dataclass
from typing import ClassVar, Optional, Union
from fracint.helpers import debug
import ctypes

def f32(x:float) -> float:
    """Round a python float to the nearest IEEE single"""
    return ctypes.c_float(x).value

@dataclass(frozen=True, order=True)
class Fractional:
    """
    Unsigned integer of `bits` width read as raw / (2**bits - 1), so raw 0 is 0.0 and raw MAX is 1.0.
    Subclasses only set `bits`. Equality, ordering and hash go by raw and never mix widths.
    Out of range float input is clamped and add/sub saturate, nothing wraps.
    """
    raw:int = 0
    bits:ClassVar[int]
    max_raw:ClassVar[int]
    MAX:ClassVar["Fractional"]
    _inv32:ClassVar[float]
    _inv64:ClassVar[float]

    def __init_subclass__(cls, **kwargs):
        super().__init_subclass__(**kwargs)
        cls.max_raw = (1 << cls.bits) - 1
        cls._inv64 = 1.0 / cls.max_raw
        cls._inv32 = f32(1.0 / cls.max_raw)
        cls.MAX = cls(cls.max_raw)

    def __post_init__(self):
        assert hasattr(self, "bits"), "Fractional needs a width, use Fractional8 or Fractional16"
        assert type(self.raw) == int and 0 <= self.raw <= self.max_raw, f"Invalid raw value for {type(self).__name__}: {self.raw!r}"

    @classmethod
    def default(cls): return cls(0)

    @classmethod
    def _saturate(cls, scaled:float) -> int:
        if not scaled > 0: return 0 # negatives and NaN
        if scaled >= cls.max_raw: return cls.max_raw
        return int(scaled) # truncates toward zero

    @classmethod
    def _from_scaled(cls, v:Union[int, float], scaled:float):
        ret = cls(cls._saturate(scaled))
        if not 0.0 <= v <= 1.0: debug(1, f"{cls.__name__}: clamped {v} to raw {ret.raw}")
        return ret

    @classmethod
    def from_f64(cls, v:Union[int, float]):
        assert type(v) in [int, float], f"Unsupported type for {cls.__name__}: {type(v)}"
        return cls._from_scaled(v, v * cls.max_raw)

    @classmethod
    def from_f32(cls, v:Union[int, float]):
        """Like from_f64 but the input and the scaling multiply are rounded to single precision"""
        assert type(v) in [int, float], f"Unsupported type for {cls.__name__}: {type(v)}"
        v = f32(max(min(v, 2), -1)) # anything past [0, 1] saturates anyway, NaN passes through
        return cls._from_scaled(v, f32(v * cls.max_raw))

    def to_f64(self) -> float: return self.raw * self._inv64
    def to_f32(self) -> float: return f32(self.raw * self._inv32)
    def __float__(self): return self.to_f64()
    def __int__(self): return self.raw

    def max(self, other:"Fractional"):
        assert type(other) == type(self), f"Cannot compare {type(self).__name__} with {type(other).__name__}"
        return self if self.raw >= other.raw else other
    def min(self, other:"Fractional"):
        assert type(other) == type(self), f"Cannot compare {type(self).__name__} with {type(other).__name__}"
        return self if self.raw <= other.raw else other

    def _operand(self, other) -> Optional[int]:
        """raw of a same-width value or a raw integer, None for anything else"""
        if type(other) == type(self): return other.raw
        if type(other) == int:
            assert 0 <= other <= self.max_raw, f"Invalid raw operand for {type(self).__name__}: {other}"
            return other
        return None

    # += and -= rebind to these results
    def __add__(self, other):
        if (o:=self._operand(other)) is None: return NotImplemented
        return type(self)(min(self.raw + o, self.max_raw))
    def __sub__(self, other):
        if (o:=self._operand(other)) is None: return NotImplemented
        return type(self)(max(self.raw - o, 0))
    def __invert__(self): return type(self)(self.raw ^ self.max_raw) # same as MAX - raw

class Fractional8(Fractional):
    bits = 8
    def widen(self) -> "Fractional16":
        """Exact: 257 = 65535 / 255 maps 0 to 0 and 255 to 65535"""
        return Fractional16(self.raw * 257)
    def __mul__(self, other) -> "Fractional16":
        # goes through doubles and truncates, 0.5 * 0.5 lands on 16255 instead of a quarter
        if type(other) != Fractional8: return NotImplemented
        return Fractional16.from_f64(self.to_f64() * other.to_f64())

class Fractional16(Fractional):
    bits = 16
    def narrow(self) -> Fractional8: return Fractional8(self.raw // 257) # lossy, truncating
