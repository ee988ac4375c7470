#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""로컬 개발용 .env 파일 생성"""
import os
from pathlib import Path

# 프로젝트 루트
project_root = Path(__file__).parent.parent.parent
env_file = project_root / ".env"

# 실제 DB 계정은 서버 담당자로부터 받아서 수동으로 입력해야 함
env_content = """# Database
DATABASE_URL=postgresql+asyncpg://<DB_USER>:<DB_PASSWORD>@localhost:5432/exam_portal_db

# CORS
ALLOWED_ORIGINS=http://localhost:5173

# Environment
# production 이면 500 응답의 에러 상세를 숨기고 파일 로그를 남긴다
ENVIRONMENT=development

# 채점 / 응시
SCORE_PER_CORRECT_ANSWER=1
DEFAULT_EXAM_DURATION_MINUTES=60

# 클라이언트
API_BASE_URL=http://localhost:8001/api/v1
HTTP_TIMEOUT_SECONDS=10
POLL_INTERVAL_SECONDS=15
POLL_MAX_FAILURES=3
PORT=8001
"""

def create_env_file():
    """.env 파일 생성 (UTF-8, BOM 없음)"""
    print(f"[INFO] .env 파일 생성 중: {env_file}")

    # 기존 파일이 있으면 백업
    if env_file.exists():
        backup_file = project_root / ".env.backup"
        print(f"[INFO] 기존 .env 파일 백업: {backup_file}")
        backup_file.write_text(env_file.read_text(encoding="utf-8"), encoding="utf-8")

    with open(env_file, 'w', encoding='utf-8', newline='\n') as f:
        f.write(env_content)

    print(f"[OK] .env 파일 생성 완료: {env_file}")

    if os.name != 'nt':
        os.chmod(env_file, 0o600)
        print(f"[INFO] 파일 권한 설정: 600")


if __name__ == "__main__":
    try:
        create_env_file()
    except OSError as e:
        print(f"\n[ERROR] 에러 발생: {e.__class__.__name__}: {str(e)}")
        exit(1)
