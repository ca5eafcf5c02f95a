from datetime import datetime
from typing import Optional
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy import String, Text, Integer, ForeignKey

from xalgrow.core.database import Base, Timestamp

class Project(Base):
    __tablename__ = "projects"
    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(200))
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    user_id: Mapped[int] = mapped_column(Integer, ForeignKey("users.id", ondelete="CASCADE"), index=True)

    # target stack chosen in the "new project" dialog, e.g. react / express
    framework: Mapped[str] = mapped_column(String(40))
    backend: Mapped[str] = mapped_column(String(40))

    created_at: Mapped[datetime] = mapped_column(Timestamp, default=datetime.utcnow)
    updated_at: Mapped[datetime] = mapped_column(Timestamp, default=datetime.utcnow, onupdate=datetime.utcnow)
