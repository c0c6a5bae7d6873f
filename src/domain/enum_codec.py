# recipe_store/src/domain/enum_codec.py
"""
Enumerated recipe values and their two external encodings.

Stored documents have carried enum values two ways over time:
- a string label ("Off", "Low", "High"), written by every current encoder
- a small integer code (0, 1, 2), found in older records and read-only now

Each enum gets one EnumCodec built from a single table, so the label and
code mappings cannot drift apart.
"""
from __future__ import annotations

from enum import Enum
from typing import Dict, Generic, Mapping, Optional, Tuple, Type, TypeVar

from src.domain.errors import UnknownEnumCode, UnknownEnumLabel


class OvenFanValue(Enum):
    OFF = "off"
    LOW = "low"
    HIGH = "high"


class TemperatureUnit(Enum):
    CELSIUS = "celsius"
    FAHRENHEIT = "fahrenheit"


E = TypeVar("E", bound=Enum)


class EnumCodec(Generic[E]):
    def __init__(self, enum_type: Type[E], table: Mapping[E, Tuple[str, int]]) -> None:
        missing = [v for v in enum_type if v not in table]
        if missing:
            raise ValueError(f"{enum_type.__name__} codec is missing {missing}")

        self.enum_type = enum_type
        self._labels: Dict[E, str] = {}
        self._codes: Dict[E, int] = {}
        self._by_label: Dict[str, E] = {}
        self._by_code: Dict[int, E] = {}

        for variant, (label, code) in table.items():
            key = label.lower()
            if key in self._by_label:
                raise ValueError(f"{enum_type.__name__}: duplicate label {label!r}")
            if code in self._by_code:
                raise ValueError(f"{enum_type.__name__}: duplicate legacy code {code}")
            self._labels[variant] = label
            self._codes[variant] = code
            self._by_label[key] = variant
            self._by_code[code] = variant

    @property
    def name(self) -> str:
        return self.enum_type.__name__

    def label_of(self, variant: E) -> str:
        return self._labels[variant]

    def variant_of_label(self, label: str) -> E:
        """Case-insensitive; surrounding whitespace is ignored."""
        variant = self._by_label.get(label.strip().lower())
        if variant is None:
            raise UnknownEnumLabel(self.name, label)
        return variant

    def legacy_code_of(self, variant: E) -> int:
        return self._codes[variant]

    def variant_of_legacy_code(self, code: int) -> E:
        variant = self._by_code.get(code)
        if variant is None:
            raise UnknownEnumCode(self.name, code)
        return variant

    def labels(self) -> Tuple[str, ...]:
        return tuple(self._labels[v] for v in self.enum_type)


OVEN_FAN_CODEC: EnumCodec[OvenFanValue] = EnumCodec(
    OvenFanValue,
    {
        OvenFanValue.OFF: ("Off", 0),
        OvenFanValue.LOW: ("Low", 1),
        OvenFanValue.HIGH: ("High", 2),
    },
)

TEMPERATURE_UNIT_CODEC: EnumCodec[TemperatureUnit] = EnumCodec(
    TemperatureUnit,
    {
        TemperatureUnit.CELSIUS: ("Celsius", 0),
        TemperatureUnit.FAHRENHEIT: ("Fahrenheit", 1),
    },
)


def oven_fan_display(value: Optional[OvenFanValue]) -> str:
    # An unset fan is shown as "Off".
    return OVEN_FAN_CODEC.label_of(value if value is not None else OvenFanValue.OFF)
