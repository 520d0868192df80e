import logging
import sys

import uvicorn
from fastapi import FastAPI
from uvicorn.config import LOG_LEVELS

# API 라우터 임포트
from src.api import health as health_api
from src.api import metrics as metrics_api
from src.api import probe as probe_api
from src.common import tool_utils
# 설정 및 로깅 설정 함수 임포트
from src.config import LISTEN_ADDR, LOG_LEVEL

# 로깅 설정 실행
tool_utils.set_logging(LOG_LEVEL)


def create_app() -> FastAPI:
    """라우터를 등록한 FastAPI 앱 생성"""
    app = FastAPI(
        title="HomeWizard P1 Exporter",
        description="Prometheus exporter probing HomeWizard P1 meters on demand."
    )
    app.include_router(probe_api.router)
    app.include_router(health_api.router)
    app.include_router(metrics_api.router)
    return app

# --- FastAPI 앱 생성 ---
app = create_app()


def main():
    try:
        host, port = tool_utils.parse_listen_addr(LISTEN_ADDR)
    except ValueError as e:
        logging.critical(f"error starting server: {e}")
        sys.exit(1)

    log_level = LOG_LEVEL.lower()
    if log_level not in LOG_LEVELS:
        logging.critical(f"error starting server: unsupported LOG_LEVEL {LOG_LEVEL!r}")
        sys.exit(1)

    logging.info(f"starting homewizard exporter on {LISTEN_ADDR}")
    # 포트 바인딩 실패 등 시작 오류는 uvicorn 이 로그를 남기고 sys.exit(1) 로 종료
    uvicorn.run(app, host=host, port=port, log_level=log_level)
    logging.info("server closed")

# --- 실행 ---
if __name__ == "__main__":
    main()
