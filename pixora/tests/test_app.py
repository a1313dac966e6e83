import logging
import pytest
from httpx import AsyncClient
from pixora.db import session as db_session
from pixora.errors import NotFound

@pytest.mark.asyncio
async def test_root(test_client: AsyncClient):
    response = await test_client.get("/")
    
    assert response.status_code == 200
    assert response.json()["message"] == "Pixora backend running"

@pytest.mark.asyncio
async def test_health_check(test_client: AsyncClient):
    response = await test_client.get("/health")
    
    assert response.status_code == 200
    assert response.json()["status"] == "healthy"

@pytest.mark.asyncio
async def test_get_db_does_not_log_domain_errors(session_factory, monkeypatch, caplog):
    monkeypatch.setattr(db_session, "AsyncSessionLocal", session_factory)
    dependency = db_session.get_db()
    await dependency.__anext__()
    
    with caplog.at_level(logging.ERROR, logger="pixora.db.session"):
        with pytest.raises(NotFound):
            await dependency.athrow(NotFound("Post not found"))
    
    assert not [r for r in caplog.records if r.name == "pixora.db.session"]

@pytest.mark.asyncio
async def test_get_db_logs_unexpected_errors(session_factory, monkeypatch, caplog):
    monkeypatch.setattr(db_session, "AsyncSessionLocal", session_factory)
    dependency = db_session.get_db()
    await dependency.__anext__()
    
    with caplog.at_level(logging.ERROR, logger="pixora.db.session"):
        with pytest.raises(RuntimeError):
            await dependency.athrow(RuntimeError("boom"))
    
    assert any("Database session error: boom" in r.getMessage() for r in caplog.records)
