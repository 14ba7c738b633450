# backend/haatbazar/schemas/notice_schema.py
"""
Aviso corto para el usuario (el "toast" de la interfaz).
"""

import enum
from pydantic import BaseModel


class NoticeLevel(str, enum.Enum):
    SUCCESS = "success"
    ERROR = "error"


class Notice(BaseModel):
    level: NoticeLevel
    message: str

    @classmethod
    def success(cls, message: str) -> "Notice":
        return cls(level=NoticeLevel.SUCCESS, message=message)

    @classmethod
    def error(cls, message: str) -> "Notice":
        return cls(level=NoticeLevel.ERROR, message=message)
