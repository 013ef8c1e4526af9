"""
Схема площадки: упорядоченный набор элементов и зон.

Порядок элементов соответствует z-порядку отрисовки: последний элемент
рисуется поверх остальных.
"""

from typing import Any, Dict, List, Optional, Tuple

from pydantic import BaseModel, Field

from .item import Item, ItemStatus, point_in_polygon


class Zone(BaseModel):
    """Зона площадки (партер, балкон, терраса)."""

    id: str
    name: str = ""
    points: List[Tuple[float, float]] = Field(default_factory=list)
    color: Optional[str] = None


class VenueMap(BaseModel):
    """Схема площадки."""

    items: List[Item] = Field(default_factory=list)
    zones: List[Zone] = Field(default_factory=list)
    width: float = 800
    height: float = 600
    background_image: Optional[str] = None  # План этажа
    metadata: Dict[str, Any] = Field(default_factory=dict)

    def add_item(self, item: Item) -> "VenueMap":
        if not isinstance(item, Item):
            raise TypeError("Можно добавить только объект Item")
        self.items.append(item)
        return self

    def remove_item(self, item_id: str) -> "VenueMap":
        self.items = [item for item in self.items if item.id != item_id]
        return self

    def get_item_by_id(self, item_id: str) -> Optional[Item]:
        """Находит элемент по ID (первое совпадение)."""
        for item in self.items:
            if item.id == item_id:
                return item
        return None

    def get_item_at_position(self, x: float, y: float) -> Optional[Item]:
        """Возвращает верхний элемент под указанной точкой."""
        for item in reversed(self.items):
            if item.contains_point(x, y):
                return item
        return None

    def get_items_by_status(self, status: ItemStatus | str) -> List[Item]:
        status = ItemStatus(status)
        return [item for item in self.items if item.status == status]

    def get_items_by_type(self, item_type: str) -> List[Item]:
        return [item for item in self.items if item.type == item_type]

    def add_zone(self, zone: Zone) -> "VenueMap":
        self.zones.append(zone)
        return self

    def remove_zone(self, zone_id: str) -> "VenueMap":
        self.zones = [zone for zone in self.zones if zone.id != zone_id]
        return self

    def get_zone_by_id(self, zone_id: str) -> Optional[Zone]:
        return next((zone for zone in self.zones if zone.id == zone_id), None)

    def get_items_in_zone(self, zone_id: str) -> List[Item]:
        """Возвращает элементы, центр которых лежит внутри зоны."""
        zone = self.get_zone_by_id(zone_id)
        if zone is None or len(zone.points) < 3:
            return []
        return [
            item for item in self.items if point_in_polygon(item.x, item.y, zone.points)
        ]

    def to_dict(self) -> Dict[str, Any]:
        return self.model_dump(mode="json")

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "VenueMap":
        """Восстанавливает схему из словаря, полученного через to_dict()."""
        return cls.model_validate(data)
