import logging
from typing import Tuple


def parse_listen_addr(addr: str) -> Tuple[str, int]:
    """
    ':9090', '127.0.0.1:9090', '[::1]:9090' 형식의 주소를 (host, port) 로 변환.
    host 가 비어 있으면 모든 인터페이스(0.0.0.0)에서 대기합니다.
    """
    host, sep, port_str = addr.rpartition(':')
    if not sep:
        raise ValueError(f"Listen address {addr!r} is missing a port")

    if host.startswith('[') and host.endswith(']'):
        host = host[1:-1]
    elif ':' in host:
        raise ValueError(f"IPv6 listen address {addr!r} must be enclosed in brackets")

    try:
        port = int(port_str)
    except ValueError:
        raise ValueError(f"Invalid port in listen address {addr!r}") from None
    if not 0 <= port <= 65535:
        raise ValueError(f"Port out of range in listen address {addr!r}")

    return host or '0.0.0.0', port


def set_logging(log_level):
    """
    setting logging
    """
    logger = logging.getLogger()
    # 로그 레벨 문자열을 적절한 로깅 상수로 변환
    log_level_constant = getattr(logging, log_level, logging.INFO)
    logger.setLevel(log_level_constant)
    formatter = logging.Formatter('%(asctime)s - %(name)s - %(levelname)s - %(message)s')
    # 중복 핸들러 방지
    if not any(isinstance(h, logging.StreamHandler) for h in logger.handlers):
        stream_handler = logging.StreamHandler()
        stream_handler.setFormatter(formatter)
        logger.addHandler(stream_handler)
