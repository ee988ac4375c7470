from sqlalchemy import ForeignKey, Integer
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.models.base import Base, TimestampMixin

SKIPPED_INDEX = -1


class Result(Base, TimestampMixin):
    """제출 1회당 1건. 생성 후 점수/답안은 수정하지 않는다.

    test_id 는 외래키 제약 없이 보관한다. 시험이 삭제되어도 결과는 남고,
    조회 시 참조 대상이 없으면 None 으로 채워진다.
    """
    __tablename__ = "results"

    id: Mapped[int] = mapped_column(primary_key=True)
    student_id: Mapped[int] = mapped_column(Integer, nullable=False, index=True)
    test_id: Mapped[int | None] = mapped_column(Integer, nullable=True, index=True)
    score: Mapped[int] = mapped_column(Integer, nullable=False)
    total_questions: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    correct_answers: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    wrong_answers: Mapped[int] = mapped_column(Integer, default=0, nullable=False)

    answers: Mapped[list["ResultAnswer"]] = relationship(
        "ResultAnswer",
        back_populates="result",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="ResultAnswer.position",
        lazy="selectin",
    )


class ResultAnswer(Base):
    __tablename__ = "result_answers"

    id: Mapped[int] = mapped_column(primary_key=True)
    result_id: Mapped[int] = mapped_column(
        ForeignKey("results.id", ondelete="CASCADE"), nullable=False, index=True
    )
    position: Mapped[int] = mapped_column(Integer, nullable=False)
    # 문제 삭제 시 dangling 참조로 남는다 (외래키 없음)
    question_id: Mapped[int | None] = mapped_column(Integer, nullable=True)
    selected_index: Mapped[int] = mapped_column(Integer, nullable=False, default=SKIPPED_INDEX)

    result: Mapped["Result"] = relationship("Result", back_populates="answers")
