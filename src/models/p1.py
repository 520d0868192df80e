from typing import Any, List

from pydantic import BaseModel, ConfigDict, StrictFloat, StrictInt, StrictStr, model_validator


class _DeviceModel(BaseModel):
    """
    장치 응답 공통 설정.
    누락되었거나 null 인 필드는 기본값(0, "", [])으로 두고,
    알 수 없는 필드는 무시합니다. 타입이 맞지 않으면 ValidationError.
    키는 정확히 일치하지 않으면 대소문자 구분 없이 필드에 매칭됩니다.
    """
    model_config = ConfigDict(extra="ignore")

    @model_validator(mode="before")
    @classmethod
    def _normalize(cls, data: Any) -> Any:
        # null 객체(문서 전체 또는 external 항목)는 빈 레코드로 취급
        if data is None:
            return {}
        if not isinstance(data, dict):
            return data

        normalized = {}
        for key, value in data.items():
            if value is None:
                continue
            # 같은 필드에 여러 키가 매칭되면 나중 값이 우선
            name = key if key in cls.model_fields else key.lower()
            normalized[name] = value
        return normalized


class ExternalReading(_DeviceModel):
    """외부 미터(가스, 수도 등) 측정값"""
    unique_id: StrictStr = ""
    type: StrictStr = ""
    timestamp: StrictInt = 0
    value: StrictFloat = 0.0
    unit: StrictStr = ""


class P1Data(_DeviceModel):
    """HomeWizard P1 미터 /api/v1/data 응답 모델"""
    wifi_ssid: StrictStr = ""
    wifi_strength: StrictFloat = 0.0
    smr_version: StrictFloat = 0.0
    meter_model: StrictStr = ""
    unique_id: StrictStr = ""
    active_tariff: StrictFloat = 0.0
    total_power_import_kwh: StrictFloat = 0.0
    total_power_import_t1_kwh: StrictFloat = 0.0
    total_power_import_t2_kwh: StrictFloat = 0.0
    total_power_export_kwh: StrictFloat = 0.0
    total_power_export_t1_kwh: StrictFloat = 0.0
    total_power_export_t2_kwh: StrictFloat = 0.0
    active_power_w: StrictFloat = 0.0
    active_power_l1_w: StrictFloat = 0.0
    active_power_l2_w: StrictFloat = 0.0
    active_power_l3_w: StrictFloat = 0.0
    active_voltage_l1_v: StrictFloat = 0.0
    active_voltage_l2_v: StrictFloat = 0.0
    active_voltage_l3_v: StrictFloat = 0.0
    active_current_l1_a: StrictFloat = 0.0
    active_current_l2_a: StrictFloat = 0.0
    active_current_l3_a: StrictFloat = 0.0
    voltage_sag_l1_count: StrictFloat = 0.0
    voltage_sag_l2_count: StrictFloat = 0.0
    voltage_sag_l3_count: StrictFloat = 0.0
    voltage_swell_l1_count: StrictFloat = 0.0
    voltage_swell_l2_count: StrictFloat = 0.0
    voltage_swell_l3_count: StrictFloat = 0.0
    any_power_fail_count: StrictFloat = 0.0
    long_power_fail_count: StrictFloat = 0.0
    total_gas_m3: StrictFloat = 0.0
    gas_timestamp: StrictInt = 0
    gas_unique_id: StrictStr = ""
    external: List[ExternalReading] = []
