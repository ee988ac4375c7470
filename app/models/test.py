from sqlalchemy import Boolean, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.models.base import Base, TimestampMixin


class Test(Base, TimestampMixin):
    __tablename__ = "tests"
    __test__ = False  # pytest 수집 대상 아님

    id: Mapped[int] = mapped_column(primary_key=True)
    title: Mapped[str] = mapped_column(String(200), nullable=False)
    duration: Mapped[int | None] = mapped_column(Integer, default=None)  # 분 단위
    total_marks: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    passing_marks: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False, index=True)
    created_by: Mapped[int | None] = mapped_column(default=None)

    questions: Mapped[list["Question"]] = relationship(
        "Question",
        back_populates="test",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="Question.id",
    )
