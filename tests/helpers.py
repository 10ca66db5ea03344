from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any

from pydantic import BaseModel, Field

from jsonhelpers.core.registry import TypeRegistry, register


class Color(Enum):
    RED = "red"
    GREEN = "green"


@dataclass
class Shape:
    name: str


@dataclass
class Circle(Shape):
    radius: float


@dataclass
class Square(Shape):
    side: float


@register
@dataclass
class Triangle(Shape):
    base: float
    height: float


@dataclass
class Drawing:
    title: str
    shapes: list[Shape] = field(default_factory=list)
    background: Color = Color.RED


class Point(BaseModel):
    x: int
    y: int


class LabeledPoint(Point):
    label: str


class Event(BaseModel):
    name: str
    at: datetime
    location: Point


class Aliased(BaseModel):
    item_id: int = Field(alias="itemId")


@dataclass(frozen=True)
class Money:
    amount: int
    currency: str


@dataclass
class Order:
    price: Money
    extras: dict[str, Money] = field(default_factory=dict)
    discount: Money | None = None


@dataclass
class PricedShape(Shape):
    price: Money


class Invoice(BaseModel):
    lines: list[Money]
    total: Money = Field(alias="grandTotal")


class MoneyConverter:
    """Writes Money as a single "<amount> <currency>" string."""

    def can_convert(self, tp: type) -> bool:
        return tp is Money

    def write(self, value: Money) -> str:
        return f"{value.amount} {value.currency}"

    def read(self, data: Any, tp: type) -> Money:
        amount, currency = data.split(" ")
        return Money(int(amount), currency)


class CentsConverter:
    def can_convert(self, tp: type) -> bool:
        return tp is Money

    def write(self, value: Money) -> int:
        return value.amount * 100

    def read(self, data: Any, tp: type) -> Money:
        return Money(data // 100, "EUR")


def make_registry() -> TypeRegistry:
    registry = TypeRegistry()
    registry.register(Circle)
    registry.register(Square)
    registry.register(LabeledPoint)
    return registry
