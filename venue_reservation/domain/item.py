"""
Бронируемый элемент площадки: место, стол, кресло, кабинка и т.д.

Пространственные атрибуты нужны только слою отрисовки; ядро бронирования
работает лишь с идентификатором и статусом.
"""

import math
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple

from pydantic import BaseModel, Field, model_validator


class ItemStatus(str, Enum):
    """Статусы элемента площадки."""

    AVAILABLE = "available"
    RESERVED = "reserved"
    OCCUPIED = "occupied"
    DISABLED = "disabled"
    MAINTENANCE = "maintenance"


class ItemShape(str, Enum):
    """Геометрическая форма элемента."""

    RECT = "rect"
    CIRCLE = "circle"
    POLYGON = "polygon"
    CUSTOM = "custom"


# Размеры по умолчанию (ширина, высота) в зависимости от типа
DEFAULT_DIMENSIONS: Dict[str, Tuple[float, float]] = {
    "table": (60, 60),
    "booth": (80, 40),
}
FALLBACK_DIMENSIONS: Tuple[float, float] = (30, 30)


class Item(BaseModel):
    """Элемент площадки, который можно забронировать."""

    id: str
    label: str = ""
    x: float = 0
    y: float = 0
    rotation: float = 0  # Градусы
    status: ItemStatus = ItemStatus.AVAILABLE
    type: str = "seat"
    shape: ItemShape = ItemShape.RECT
    points: List[Tuple[float, float]] = Field(default_factory=list)
    capacity: int = Field(1, gt=0)
    width: Optional[float] = None
    height: Optional[float] = None
    metadata: Dict[str, Any] = Field(default_factory=dict)

    @model_validator(mode="after")
    def fill_dimensions(self) -> "Item":
        default_width, default_height = DEFAULT_DIMENSIONS.get(
            self.type, FALLBACK_DIMENSIONS
        )
        if self.width is None:
            self.width = self.metadata.get("width") or default_width
        if self.height is None:
            self.height = self.metadata.get("height") or default_height
        return self

    def update_status(self, new_status: ItemStatus | str) -> "Item":
        """Меняет статус элемента.

        Raises:
            ValueError: если статус неизвестен.
        """
        try:
            self.status = ItemStatus(new_status)
        except ValueError:
            raise ValueError(f"Недопустимый статус элемента: {new_status}")
        return self

    def is_available(self) -> bool:
        """Проверяет, можно ли сейчас выбрать элемент для бронирования."""
        return self.status == ItemStatus.AVAILABLE

    def update_position(
        self, x: float, y: float, rotation: Optional[float] = None
    ) -> "Item":
        self.x = x
        self.y = y
        if rotation is not None:
            self.rotation = rotation
        return self

    def contains_point(self, x: float, y: float) -> bool:
        """Проверяет попадание точки в элемент с учетом поворота."""
        if self.rotation:
            radians = math.radians(-self.rotation)
            cos, sin = math.cos(radians), math.sin(radians)
            dx, dy = x - self.x, y - self.y
            x = dx * cos - dy * sin + self.x
            y = dx * sin + dy * cos + self.y

        if self.shape == ItemShape.RECT:
            half_w, half_h = self.width / 2, self.height / 2
            return (
                self.x - half_w <= x <= self.x + half_w
                and self.y - half_h <= y <= self.y + half_h
            )
        if self.shape == ItemShape.CIRCLE:
            radius = min(self.width, self.height) / 2
            return (x - self.x) ** 2 + (y - self.y) ** 2 <= radius**2
        if self.shape == ItemShape.POLYGON:
            absolute = [(px + self.x, py + self.y) for px, py in self.points]
            return point_in_polygon(x, y, absolute)
        # Произвольные SVG-фигуры не участвуют в hit-testing
        return False

    def to_dict(self) -> Dict[str, Any]:
        return self.model_dump(mode="json")


def point_in_polygon(x: float, y: float, polygon: List[Tuple[float, float]]) -> bool:
    """Алгоритм трассировки луча для произвольного многоугольника."""
    inside = False
    j = len(polygon) - 1
    for i in range(len(polygon)):
        xi, yi = polygon[i]
        xj, yj = polygon[j]
        if (yi > y) != (yj > y) and x < (xj - xi) * (y - yi) / (yj - yi) + xi:
            inside = not inside
        j = i
    return inside
