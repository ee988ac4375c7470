# -*- coding: utf-8 -*-
import logging
import sys
from pathlib import Path

from app.core.config import settings

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
CONSOLE_HANDLER_NAME = "exam_portal.console"
FILE_HANDLER_NAME = "exam_portal.file"


def setup_logging():
    """로깅 설정 (여러 번 호출되어도 핸들러는 한 번만 등록)"""
    log_level = logging.DEBUG if settings.environment == "development" else logging.INFO
    formatter = logging.Formatter(LOG_FORMAT)

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)
    registered = {h.get_name() for h in root_logger.handlers}

    if CONSOLE_HANDLER_NAME not in registered:
        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.set_name(CONSOLE_HANDLER_NAME)
        console_handler.setFormatter(formatter)
        console_handler.setLevel(log_level)
        root_logger.addHandler(console_handler)

    # 파일 핸들러 (프로덕션)
    if settings.environment == "production" and FILE_HANDLER_NAME not in registered:
        log_dir = Path("/app/logs")
        log_dir.mkdir(exist_ok=True)

        file_handler = logging.FileHandler(log_dir / "app.log", encoding="utf-8")
        file_handler.set_name(FILE_HANDLER_NAME)
        file_handler.setFormatter(formatter)
        file_handler.setLevel(logging.INFO)
        root_logger.addHandler(file_handler)

    # SQLAlchemy 엔진 로그는 개발 환경에서도 WARNING 이상만
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
