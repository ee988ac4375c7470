from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.base import get_db
from app.schemas import test as test_schema
from app.services import test_service

router = APIRouter(prefix="/test", tags=["test"])


@router.post("/create", response_model=test_schema.TestResponse, status_code=status.HTTP_201_CREATED)
async def create_test(
    request: test_schema.TestCreateRequest,
    db: AsyncSession = Depends(get_db),
):
    """시험 생성 API"""
    return await test_service.create_test(db, request)


@router.get("/admin/all", response_model=list[test_schema.TestResponse])
async def get_all_tests(
    db: AsyncSession = Depends(get_db),
):
    """관리자 시험 목록 API"""
    return await test_service.get_all_tests(db)


@router.get("/student/all", response_model=list[test_schema.StudentTestResponse])
async def get_student_tests(
    db: AsyncSession = Depends(get_db),
):
    """학생용 시험 목록 API (활성 시험만)"""
    return await test_service.get_student_tests(db)


@router.post("/add-question", response_model=test_schema.QuestionResponse, status_code=status.HTTP_201_CREATED)
async def add_question(
    request: test_schema.QuestionCreateRequest,
    db: AsyncSession = Depends(get_db),
):
    """문제 등록 API"""
    return await test_service.add_question(db, request)


@router.post("/bulk-upload", response_model=test_schema.BulkUploadResponse)
async def bulk_upload(
    request: test_schema.BulkUploadRequest,
    db: AsyncSession = Depends(get_db),
):
    """문제 일괄 등록 API"""
    return await test_service.bulk_upload(db, request)


@router.delete("/question/{question_id}", response_model=test_schema.MessageResponse)
async def delete_question(
    question_id: int,
    db: AsyncSession = Depends(get_db),
):
    """문제 삭제 API"""
    return await test_service.delete_question(db, question_id)


@router.get("/{test_id}", response_model=test_schema.TestResponse)
async def get_test(
    test_id: int,
    db: AsyncSession = Depends(get_db),
):
    """시험 조회 API"""
    return await test_service.get_test(db, test_id)


@router.get("/{test_id}/questions", response_model=list[test_schema.QuestionPublicResponse])
async def get_exam_questions(
    test_id: int,
    db: AsyncSession = Depends(get_db),
):
    """응시용 문제 목록 API (정답 여부 제외)"""
    return await test_service.get_exam_questions(db, test_id)


@router.patch("/{test_id}/active", response_model=test_schema.TestResponse)
async def set_test_active(
    test_id: int,
    request: test_schema.TestActiveUpdateRequest,
    db: AsyncSession = Depends(get_db),
):
    """시험 활성화 / 비활성화 API"""
    return await test_service.set_test_active(db, test_id, request)


@router.delete("/{test_id}", response_model=test_schema.MessageResponse)
async def delete_test(
    test_id: int,
    db: AsyncSession = Depends(get_db),
):
    """시험 삭제 API (결과는 유지)"""
    return await test_service.delete_test(db, test_id)
