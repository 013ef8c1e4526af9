import re
from typing import List, Optional

from pydantic import BaseModel, ConfigDict

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")


class Customer(BaseModel):
    """Клиент, на которого оформляется бронирование.

    Поля намеренно не обязательные: полнота данных проверяется
    при создании бронирования, а не при создании объекта.
    """

    model_config = ConfigDict(frozen=True)

    id: Optional[str] = None
    name: str = ""
    email: Optional[str] = None
    phone: Optional[str] = None

    @property
    def contact(self) -> Optional[str]:
        """Контакт для связи: email, а если его нет, телефон."""
        return self.email or self.phone

    def validation_errors(self) -> List[str]:
        """Возвращает список проблем с данными клиента (пустой, если все в порядке)."""
        errors = []
        if not self.name.strip():
            errors.append("Не указано имя клиента")
        if not self.contact:
            errors.append("Не указан контакт клиента (email или телефон)")
        if self.email and not EMAIL_PATTERN.match(self.email):
            errors.append("Некорректный email клиента")
        return errors
