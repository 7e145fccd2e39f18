import os

# Le rate limiting (Redis) n'est pas initialisé pendant les tests
os.environ.setdefault("DISABLE_FASTAPI_LIMITER_INIT_FOR_TESTS", "1")

import pytest
from collections import defaultdict
from typing import Any, Dict, Generator, List
from fastapi.testclient import TestClient
from postgrest.exceptions import APIError

from storefront import config
from storefront.app_setup.factory import create_app
from storefront.catalog.service import load_catalog
from storefront.infra.supabase_client import SupabaseStore


# Marquage automatique selon le dossier
def pytest_collection_modifyitems(config, items):
    for item in items:
        nodeid = item.nodeid.replace("\\", "/")
        if "/unit/" in nodeid:
            item.add_marker(pytest.mark.unit)
        elif "/integration/" in nodeid:
            item.add_marker(pytest.mark.integration)


class _Resp:
    def __init__(self, data=None, count=None):
        self.data = data
        self.count = count


class FakeQuery:
    """Sous-ensemble du query builder PostgREST utilisé par les repositories."""

    def __init__(self, db: "FakeSupabase", name: str):
        self._db = db
        self._name = name
        self._insert: Dict[str, Any] | None = None
        self._filters: List[tuple] = []
        self._limit: int | None = None

    def insert(self, row: Dict[str, Any]):
        self._insert = dict(row)
        return self

    def select(self, *_args, **_kwargs):
        return self

    def eq(self, col: str, value: Any):
        self._filters.append((col, value))
        return self

    def limit(self, n: int):
        self._limit = n
        return self

    def execute(self):
        rows = self._db.rows[self._name]
        if self._insert is not None:
            unique_col = self._db.unique.get(self._name)
            if unique_col and any(r.get(unique_col) == self._insert.get(unique_col) for r in rows):
                raise APIError({
                    "code": "23505",
                    "message": f'duplicate key value violates unique constraint "{self._name}_{unique_col}_key"',
                    "details": None,
                    "hint": None,
                })
            rows.append(self._insert)
            return _Resp(data=[self._insert])
        found = [r for r in rows if all(r.get(c) == v for c, v in self._filters)]
        if self._limit is not None:
            found = found[: self._limit]
        return _Resp(data=found)


class FakeSupabase:
    """Client Supabase en mémoire; orders.session_id est UNIQUE comme en base."""

    def __init__(self):
        self.rows: Dict[str, List[Dict[str, Any]]] = defaultdict(list)
        self.unique = {"orders": "session_id"}
        self.fail_with: Exception | None = None

    def table(self, name: str) -> FakeQuery:
        if self.fail_with:
            raise self.fail_with
        return FakeQuery(self, name)


@pytest.fixture()
def fake_db() -> FakeSupabase:
    return FakeSupabase()


@pytest.fixture()
def store(fake_db) -> SupabaseStore:
    return SupabaseStore("https://fake.supabase.co", "service-key", client_factory=lambda url, key: fake_db)


@pytest.fixture()
def catalog():
    return load_catalog()


@pytest.fixture()
def app(store, catalog):
    return create_app(store=store, catalog=catalog)


@pytest.fixture()
def client(app) -> Generator[TestClient, None, None]:
    with TestClient(app) as c:
        yield c


@pytest.fixture(autouse=True)
def _test_config(monkeypatch, tmp_path):
    # URLs stables, pas de signature, répertoire de fichiers isolé
    monkeypatch.setattr(config, "FRONTEND_URL", "http://front.test")
    monkeypatch.setattr(config, "BACKEND_URL", "http://api.test")
    monkeypatch.setattr(config, "CHECKOUT_SUCCESS_PATH", "/success")
    monkeypatch.setattr(config, "CHECKOUT_CANCEL_PATH", "/cart")
    monkeypatch.setattr(config, "DOWNLOAD_SIGNING_SECRET", "")
    monkeypatch.setattr(config, "CALL_REQUEST_REQUIRE_COMPANY", False)
    monkeypatch.setattr(config, "FORCE_HTTPS", False)
    downloads = tmp_path / "pdfs"
    downloads.mkdir()
    monkeypatch.setattr(config, "DOWNLOADS_DIR", downloads)
    monkeypatch.delenv("LOCAL_RATE_LIMIT_FALLBACK", raising=False)
    return downloads


class FakeStripe:
    """Remplace storefront.payments.stripe_client.create_session / get_session."""

    def __init__(self):
        self.created: List[Dict[str, Any]] = []
        self.sessions: Dict[str, Dict[str, Any]] = {}
        self.retrieved: List[str] = []
        self.error: Exception | None = None

    def create_session(self, **kwargs):
        if self.error:
            raise self.error
        self.created.append(kwargs)
        sid = f"cs_test_{len(self.created)}"
        return {"id": sid, "url": f"https://checkout.stripe.test/{sid}"}

    def get_session(self, session_id: str):
        if self.error:
            raise self.error
        self.retrieved.append(session_id)
        return self.sessions[session_id]


@pytest.fixture()
def fake_stripe(monkeypatch) -> FakeStripe:
    fake = FakeStripe()
    monkeypatch.setattr("storefront.payments.stripe_client.create_session", fake.create_session)
    monkeypatch.setattr("storefront.payments.stripe_client.get_session", fake.get_session)
    return fake


def _make_session(session_id: str, lines: List[Dict[str, Any]], payment_status: str = "paid", amount_total: int = 13800, email: str = "buyer@example.com"):
    """
    Session Stripe (dict) avec line_items développés.
    lines: [{"description": ..., "catalog_id": ... (optionnel)}]
    """
    data = []
    for line in lines:
        product = {"id": "prod_x", "metadata": {"catalog_id": line["catalog_id"]} if line.get("catalog_id") else {}}
        data.append({"description": line["description"], "price": {"product": product}})
    return {
        "id": session_id,
        "payment_status": payment_status,
        "amount_total": amount_total,
        "customer_details": {"email": email},
        "line_items": {"object": "list", "data": data},
    }


@pytest.fixture()
def make_session():
    return _make_session
