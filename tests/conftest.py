import os
import sys
from typing import Callable, Dict

import httpx
import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport
from prometheus_client.parser import text_string_to_metric_families

# 프로젝트 루트를 sys.path에 추가하여 src 패키지 임포트 가능하게 함
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from src import config
from src.api.probe import get_device_client
from src.common import tool_utils
from src.main import app

tool_utils.set_logging("DEBUG")


# 실제 P1 미터 응답 예시
SAMPLE_P1_DATA = {
    "wifi_ssid": "My Wi-Fi",
    "wifi_strength": -45,
    "smr_version": 50,
    "meter_model": "ISKRA  2M550T-101",
    "unique_id": "00112233445566778899AABBCCDDEEFF",
    "active_tariff": 2,
    "total_power_import_kwh": 13779.338,
    "total_power_import_t1_kwh": 10830.511,
    "total_power_import_t2_kwh": 2948.827,
    "total_power_export_kwh": 0,
    "total_power_export_t1_kwh": 0,
    "total_power_export_t2_kwh": 0,
    "active_power_w": 1200.5,
    "active_power_l1_w": 410.25,
    "active_power_l2_w": 390,
    "active_power_l3_w": 400.25,
    "active_voltage_l1_v": 230.1,
    "active_voltage_l2_v": 229.8,
    "active_voltage_l3_v": 231,
    "active_current_l1_a": 1.78,
    "active_current_l2_a": 1.69,
    "active_current_l3_a": 1.73,
    "voltage_sag_l1_count": 1,
    "voltage_sag_l2_count": 1,
    "voltage_sag_l3_count": 0,
    "voltage_swell_l1_count": 0,
    "voltage_swell_l2_count": 0,
    "voltage_swell_l3_count": 0,
    "any_power_fail_count": 4,
    "long_power_fail_count": 5,
    "total_gas_m3": 2569.646,
    "gas_timestamp": 210606140010,
    "gas_unique_id": "FFEEDDCCBBAA99887766554433221100",
    "external": [
        {
            "unique_id": "FFEEDDCCBBAA99887766554433221100",
            "type": "gas_meter",
            "timestamp": 230125220957,
            "value": 2569.646,
            "unit": "m3",
        }
    ],
}


def parse_metrics(text: str) -> Dict[str, float]:
    """Prometheus 텍스트를 {샘플 이름: 값} 으로 변환"""
    return {
        sample.name: sample.value
        for family in text_string_to_metric_families(text)
        for sample in family.samples
    }


@pytest.fixture
def sample_p1_data() -> dict:
    return dict(SAMPLE_P1_DATA)


@pytest.fixture
def mock_device() -> Callable:
    """
    /probe 가 사용하는 장치 HTTP 클라이언트를 MockTransport 로 교체하는 픽스처입니다.
    핸들러를 넘기면 해당 핸들러가 장치 응답을 대신합니다.
    """
    def install(handler):
        async def override_client():
            async with httpx.AsyncClient(
                transport=httpx.MockTransport(handler),
                timeout=config.PROBE_TIMEOUT_SECONDS,
            ) as device_client:
                yield device_client
        app.dependency_overrides[get_device_client] = override_client

    yield install
    app.dependency_overrides.clear()


@pytest_asyncio.fixture
async def client():
    """FastAPI 애플리케이션에 대한 비동기 테스트 클라이언트"""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://testserver") as test_client:
        yield test_client


@pytest.fixture
def read_metrics() -> Callable[[str], Dict[str, float]]:
    return parse_metrics
