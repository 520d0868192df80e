import os
import logging
from dotenv import load_dotenv

# .env 파일 로드
dotenv_path = os.path.join(os.path.dirname(__file__), '../.env')
if os.path.exists(dotenv_path):
    load_dotenv(dotenv_path=dotenv_path)
    print(f"Loaded .env file from: {dotenv_path}")
else:
    logging.debug(f".env file not found at {dotenv_path}")

# 설정 상수
LOG_LEVEL = os.getenv('LOG_LEVEL', 'INFO').upper()
LISTEN_ADDR = os.getenv('HOMEWIZARD_EXPORTER_LISTEN_ADDR') or ':9090'
PROBE_TIMEOUT_SECONDS = float(os.getenv('PROBE_TIMEOUT_SECONDS', 5))
# 클라이언트 연결 끊김 확인 주기
DISCONNECT_POLL_SECONDS = 0.2
