from prometheus_client import Counter, Gauge


class ExporterMetrics:
    """
    익스포터 자체 모니터링 지표 (기본 레지스트리, /metrics 로 노출).
    /probe 응답용 장치 지표는 요청마다 새 레지스트리를 사용하므로 여기 포함되지 않습니다.
    """
    def __init__(self):
        # 프로브 처리량 카운터
        self.probes = Counter(
            'homewizard_exporter_probes_total',
            'Total probes handled by the exporter',
            ['result'],
        )
        # 현재 상태 게이지
        self.probes_in_progress = Gauge(
            'homewizard_exporter_probes_in_progress',
            'Number of probes currently running',
        )

# 싱글톤 인스턴스
metrics = ExporterMetrics()
