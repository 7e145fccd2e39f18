import asyncio

from fastapi import FastAPI

from storefront.app_setup.lifespan import init_rate_limiter, missing_deliverables


def test_missing_deliverables(catalog, tmp_path):
    (tmp_path / "sdr-success-playbook.pdf").write_bytes(b"%PDF")
    missing = missing_deliverables(catalog, tmp_path)
    assert "sdr-success-playbook.pdf" not in missing
    assert "complete-resource-bundle.zip" in missing
    assert len(missing) == 8


def test_init_rate_limiter_disabled_for_tests(monkeypatch):
    monkeypatch.setenv("DISABLE_FASTAPI_LIMITER_INIT_FOR_TESTS", "1")
    app = FastAPI()
    asyncio.run(init_rate_limiter(app))
    assert app.state.rate_limit_enabled is False


def test_init_rate_limiter_redis_down(monkeypatch):
    monkeypatch.delenv("DISABLE_FASTAPI_LIMITER_INIT_FOR_TESTS", raising=False)
    monkeypatch.delenv("USE_FAKE_REDIS_FOR_TESTS", raising=False)

    async def boom(*args, **kwargs):
        raise ConnectionError("redis down")

    monkeypatch.setattr("storefront.app_setup.lifespan.FastAPILimiter.init", boom)
    app = FastAPI()
    asyncio.run(init_rate_limiter(app))
    assert app.state.rate_limit_enabled is False

    monkeypatch.setenv("LOCAL_RATE_LIMIT_FALLBACK", "1")
    asyncio.run(init_rate_limiter(app))
    assert app.state.rate_limit_enabled is True
