import asyncio
import logging
import time
from typing import AsyncIterator, Optional

import httpx
from fastapi import APIRouter, Depends, Query, Request, Response, status
from fastapi.responses import PlainTextResponse
from prometheus_client import CONTENT_TYPE_LATEST, CollectorRegistry, Gauge, generate_latest

from src import config
from src.common.metrics import metrics
from src.core import prober

router = APIRouter(
    prefix="/probe",
    tags=["Probe"],
)

logger = logging.getLogger(__name__)


async def get_device_client() -> AsyncIterator[httpx.AsyncClient]:
    """요청마다 자체 타임아웃을 가진 장치 조회용 HTTP 클라이언트"""
    async with httpx.AsyncClient(timeout=config.PROBE_TIMEOUT_SECONDS) as client:
        yield client


async def _wait_for_disconnect(request: Request) -> None:
    while not await request.is_disconnected():
        await asyncio.sleep(config.DISCONNECT_POLL_SECONDS)


async def run_probe(
    request: Request,
    client: httpx.AsyncClient,
    target: str,
    registry: CollectorRegistry,
) -> bool:
    """
    프로브 실행. PROBE_TIMEOUT_SECONDS 경과 또는 스크래퍼 연결 종료 중
    먼저 발생하는 쪽이 진행 중인 장치 요청을 취소하고 실패로 처리됩니다.
    httpx 클라이언트 자체 타임아웃도 별도로 적용되며, 두 기한 중 먼저 끝나는 쪽이 우선합니다.
    """
    probe_task = asyncio.ensure_future(prober.probe_homewizard(client, target, registry))
    watch_task = asyncio.ensure_future(_wait_for_disconnect(request))
    try:
        await asyncio.wait(
            {probe_task, watch_task},
            timeout=config.PROBE_TIMEOUT_SECONDS,
            return_when=asyncio.FIRST_COMPLETED,
        )
    finally:
        for task in (probe_task, watch_task):
            if not task.done():
                task.cancel()
        await asyncio.gather(probe_task, watch_task, return_exceptions=True)

    if not probe_task.cancelled():
        return probe_task.result()

    if watch_task.done() and not watch_task.cancelled():
        logger.warning(f"{target}: scraper disconnected, probe aborted")
    else:
        logger.warning(f"{target}: probe timed out after {config.PROBE_TIMEOUT_SECONDS}s")
    return False


@router.get("")
async def probe_endpoint(
    request: Request,
    target: Optional[str] = Query(default=None),
    client: httpx.AsyncClient = Depends(get_device_client),
):
    """
    target 장치를 조회하고 Prometheus 형식으로 지표를 반환합니다.
    프로브 실패 여부는 HTTP 상태가 아니라 probe_success 값으로 전달됩니다.
    """
    if not target:
        return PlainTextResponse("Target parameter is missing", status_code=status.HTTP_400_BAD_REQUEST)

    probe_success = Gauge(
        'probe_success',
        'Displays whether or not the probe was a success',
        registry=None,
    )
    probe_duration = Gauge(
        'probe_duration_seconds',
        'Returns how long the probe took to complete in seconds',
        registry=None,
    )
    # 요청마다 새 레지스트리 사용 (요청 간 지표 공유 방지)
    registry = CollectorRegistry()
    registry.register(probe_success)
    registry.register(probe_duration)

    metrics.probes_in_progress.inc()
    try:
        start = time.perf_counter()
        success = await run_probe(request, client, target, registry)
        duration = time.perf_counter() - start
    finally:
        metrics.probes_in_progress.dec()

    probe_duration.set(duration)
    if success:
        probe_success.set(1)
        metrics.probes.labels(result="success").inc()
        logger.info(f"{target}: probe succeeded, duration: {duration:f}s")
    else:
        metrics.probes.labels(result="failure").inc()
        logger.warning(f"{target}: probe failed, duration: {duration:f}s")

    return Response(content=generate_latest(registry), media_type=CONTENT_TYPE_LATEST)
