import json
from typing import Any, Optional

from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    pass


def dumps_json(value: Any) -> str:
    return json.dumps(value, ensure_ascii=False)


def loads_json(value: Optional[str], default: Any) -> Any:
    if not value:
        return default
    try:
        return json.loads(value)
    except ValueError:
        return default
