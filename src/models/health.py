from pydantic import BaseModel

class HealthResponse(BaseModel):
     """Health check 응답 모델"""
     status: str = "ok"
