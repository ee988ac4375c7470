from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.base import get_db
from app.schemas import exam as exam_schema
from app.services import exam_service

router = APIRouter(prefix="/exam", tags=["exam"])


@router.post(
    "/submit",
    response_model=exam_schema.ExamSubmitResponse,
    status_code=status.HTTP_201_CREATED,
)
async def submit_exam(
    request: exam_schema.ExamSubmitRequest,
    db: AsyncSession = Depends(get_db),
):
    """시험 제출 API"""
    return await exam_service.submit_exam(db, request)


@router.get("/result/{result_id}", response_model=exam_schema.ResultDetailResponse)
async def get_result(
    result_id: int,
    db: AsyncSession = Depends(get_db),
):
    """시험 결과 상세 조회 API (삭제된 시험/문제는 null)"""
    return await exam_service.get_result_detail(db, result_id)


@router.get("/results/{student_id}", response_model=list[exam_schema.ResultSummaryResponse])
async def get_student_results(
    student_id: int,
    db: AsyncSession = Depends(get_db),
):
    """학생별 결과 목록 API"""
    return await exam_service.get_student_results(db, student_id)


@router.delete("/results/{student_id}", response_model=exam_schema.ResultsDeleteResponse)
async def delete_student_results(
    student_id: int,
    db: AsyncSession = Depends(get_db),
):
    """학생 계정 삭제 시 결과 일괄 삭제 API"""
    return await exam_service.delete_student_results(db, student_id)


@router.get("/admin/results", response_model=list[exam_schema.ResultSummaryResponse])
async def get_all_results(
    db: AsyncSession = Depends(get_db),
):
    """관리자 전체 결과 조회 API"""
    return await exam_service.get_all_results(db)


@router.get("/admin/leaderboard/{test_id}", response_model=list[exam_schema.ResultSummaryResponse])
async def get_test_leaderboard(
    test_id: int,
    db: AsyncSession = Depends(get_db),
):
    """시험별 리더보드 API"""
    return await exam_service.get_test_leaderboard(db, test_id)


@router.get("/leaderboard/global", response_model=list[exam_schema.ResultSummaryResponse])
async def get_global_leaderboard(
    db: AsyncSession = Depends(get_db),
):
    """전체 리더보드 API"""
    return await exam_service.get_global_leaderboard(db)
