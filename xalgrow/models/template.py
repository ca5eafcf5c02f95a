from datetime import datetime
from typing import Any, List, Optional
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy import JSON, String, Text, Integer, Boolean

from xalgrow.core.database import Base, Timestamp

class Template(Base):
    """Starter project sold or offered in the template gallery."""
    __tablename__ = "templates"
    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(200))
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    image_url: Mapped[Optional[str]] = mapped_column(String(500), nullable=True)
    price: Mapped[int] = mapped_column(Integer)  # cents
    files: Mapped[List[Any]] = mapped_column(JSON, default=list)
    is_premium: Mapped[bool] = mapped_column(Boolean, default=False)
    created_at: Mapped[datetime] = mapped_column(Timestamp, default=datetime.utcnow)
