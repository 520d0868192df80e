import logging
from typing import NamedTuple, Tuple

import httpx
from prometheus_client import CollectorRegistry, Gauge
from pydantic import ValidationError

from src.models.p1 import P1Data

logger = logging.getLogger(__name__)

DATA_PATH = "/api/v1/data"


class DeviceGauge(NamedTuple):
    """P1 응답 필드 하나를 게이지 하나로 매핑"""
    name: str
    documentation: str
    field: str


# 노출할 장치 지표. 필드 값은 변환 없이 그대로 설정됩니다.
DEVICE_GAUGES: Tuple[DeviceGauge, ...] = (
    DeviceGauge(
        'homewizard_wifi_strength_decibels',
        'strength of WIFI signal for homewizard in decibels',
        'wifi_strength',
    ),
    DeviceGauge(
        'homewizard_active_power_watts',
        'current (total) usage of power measured in watts (W)',
        'active_power_w',
    ),
    DeviceGauge(
        'homewizard_active_power_l1_watts',
        'current (L1) usage of power measured in watts (W)',
        'active_power_l1_w',
    ),
    DeviceGauge(
        'homewizard_active_power_l2_watts',
        'current (L2) usage of power measured in watts (W)',
        'active_power_l2_w',
    ),
    DeviceGauge(
        'homewizard_active_power_l3_watts',
        'current (L3) usage of power measured in watts (W)',
        'active_power_l3_w',
    ),
    DeviceGauge(
        'homewizard_any_power_fail_count',
        'number of power failures measured by P1',
        'any_power_fail_count',
    ),
    DeviceGauge(
        'homewizard_long_power_fail_count',
        'number of long power failures measured by P1',
        'long_power_fail_count',
    ),
    DeviceGauge(
        'homewizard_gas_m3_total',
        'total usage of gas reported by the gas meter in m3',
        'total_gas_m3',
    ),
)


def device_url(target: str) -> str:
    return f"http://{target}{DATA_PATH}"


async def probe_homewizard(
    client: httpx.AsyncClient,
    target: str,
    registry: CollectorRegistry,
) -> bool:
    """
    P1 미터를 한 번 조회하고 결과를 registry 의 게이지에 기록합니다.

    게이지는 요청 성공 여부와 관계없이 먼저 등록되므로 실패 시에도
    동일한 지표 목록이 0 값으로 노출됩니다. 재시도는 하지 않습니다.
    """
    gauges = [
        (Gauge(gauge_def.name, gauge_def.documentation, registry=registry), gauge_def.field)
        for gauge_def in DEVICE_GAUGES
    ]

    url = device_url(target)
    try:
        response = await client.get(url)
    except (httpx.HTTPError, httpx.InvalidURL) as e:
        logger.warning(f"failed to query homewizard target ({target}): {type(e).__name__}: {e}")
        return False

    if response.status_code != httpx.codes.OK:
        logger.warning(f"failed to query homewizard target ({target}): unexpected status {response.status_code}")
        return False

    try:
        data = P1Data.model_validate_json(response.content)
    except ValidationError as e:
        logger.warning(f"failed to decode data from homewizard target ({target}): {e}")
        return False

    for gauge, field in gauges:
        gauge.set(getattr(data, field))

    return True
