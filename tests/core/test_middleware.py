"""
미들웨어 통합 테스트 모듈

httpx.AsyncClient + ASGITransport로 실제 FastAPI 앱에 요청을 보내
TraceID / Cache-Control 미들웨어 동작을 검증합니다.
"""

import uuid
import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport
from app.main import app


@pytest_asyncio.fixture
async def client():
    """미들웨어 통합 테스트용 AsyncClient Fixture"""
    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test"
    ) as ac:
        yield ac


class TestTraceIDMiddleware:
    @pytest.mark.asyncio
    async def test_trace_id_auto_generated(self, client):
        """Trace ID 미전송 시 UUIDv4가 자동 생성되어 응답 헤더에 포함되는지 검증"""
        response = await client.get("/ping")

        trace_id = response.headers.get("X-Trace-ID")
        assert trace_id is not None
        parsed = uuid.UUID(trace_id, version=4)
        assert str(parsed) == trace_id

    @pytest.mark.asyncio
    async def test_trace_id_passthrough(self, client):
        """클라이언트가 보낸 X-Trace-ID가 그대로 응답에 반환되는지 검증"""
        sent = str(uuid.uuid4())
        response = await client.get("/ping", headers={"X-Trace-ID": sent})
        assert response.headers["X-Trace-ID"] == sent

    @pytest.mark.asyncio
    async def test_invalid_trace_id_replaced(self, client):
        """UUID 형식이 아닌 Trace ID는 새로 발급"""
        response = await client.get("/ping", headers={"X-Trace-ID": "<script>alert(1)</script>"})
        trace_id = response.headers["X-Trace-ID"]
        assert trace_id != "<script>alert(1)</script>"
        uuid.UUID(trace_id)


class TestCacheControlMiddleware:
    @pytest.mark.asyncio
    async def test_api_path_not_cached(self, client):
        response = await client.post("/api/bills", json={
            "course": "standard",
            "entry_time": "2021-07-17T10:00:00+09:00",
            "exit_time": "2021-07-17T10:30:00+09:00",
        })
        assert response.status_code == 200
        assert response.headers["Cache-Control"] == "no-store, no-cache, must-revalidate, max-age=0"
        assert response.headers["Pragma"] == "no-cache"

    @pytest.mark.asyncio
    async def test_ping_has_no_cache_header(self, client):
        response = await client.get("/ping")
        assert "Cache-Control" not in response.headers
