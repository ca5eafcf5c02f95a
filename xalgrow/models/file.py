from datetime import datetime
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy import String, Integer, ForeignKey

from xalgrow.core.paths import join_file_path
from xalgrow.core.database import Base, LongText, Timestamp

class File(Base):
    __tablename__ = "files"
    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(255))
    content: Mapped[str] = mapped_column(LongText)
    path: Mapped[str] = mapped_column(String(500))
    project_id: Mapped[int] = mapped_column(Integer, ForeignKey("projects.id", ondelete="CASCADE"), index=True)
    created_at: Mapped[datetime] = mapped_column(Timestamp, default=datetime.utcnow)
    updated_at: Mapped[datetime] = mapped_column(Timestamp, default=datetime.utcnow, onupdate=datetime.utcnow)

    @property
    def full_path(self) -> str:
        return join_file_path(self.path, self.name)
