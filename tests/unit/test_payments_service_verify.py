import pytest

from storefront.errors import PersistenceError, UpstreamError, ValidationError
from storefront.payments import service


def _verify(store, catalog, sid, **kw):
    return service.verify_session(store, catalog, sid, backend_url="http://api.test", **kw)


def test_verify_paid_records_order_and_returns_links(store, catalog, fake_db, fake_stripe, make_session):
    fake_stripe.sessions["cs_1"] = make_session("cs_1", [
        {"description": "SDR Success Playbook", "catalog_id": "ebook-sdr"},
        {"description": "Account Manager Playbook", "catalog_id": "ebook-am"},
    ])
    res = _verify(store, catalog, "cs_1")
    assert res == {
        "success": True,
        "items": [
            {"name": "SDR Success Playbook", "downloadUrl": "http://api.test/download/sdr-success-playbook.pdf"},
            {"name": "Account Manager Playbook", "downloadUrl": "http://api.test/download/am-playbook.pdf"},
        ],
    }
    orders = fake_db.rows["orders"]
    assert len(orders) == 1
    assert orders[0]["session_id"] == "cs_1"
    assert orders[0]["email"] == "buyer@example.com"
    assert orders[0]["amount"] == 138.0
    assert orders[0]["items"] == ["SDR Success Playbook", "Account Manager Playbook"]
    assert orders[0]["catalog_ids"] == ["ebook-sdr", "ebook-am"]
    assert orders[0]["created_at"]


def test_verify_is_idempotent(store, catalog, fake_db, fake_stripe, make_session):
    fake_stripe.sessions["cs_1"] = make_session("cs_1", [{"description": "SDR Success Playbook", "catalog_id": "ebook-sdr"}])
    first = _verify(store, catalog, "cs_1")
    second = _verify(store, catalog, "cs_1")
    assert first == second
    assert len(fake_db.rows["orders"]) == 1


def test_verify_unpaid_writes_nothing(store, catalog, fake_db, fake_stripe, make_session):
    fake_stripe.sessions["cs_2"] = make_session("cs_2", [{"description": "X"}], payment_status="unpaid")
    res = _verify(store, catalog, "cs_2")
    assert res["success"] is False
    assert res["payment_status"] == "unpaid"
    assert fake_db.rows["orders"] == []


def test_verify_resolves_by_name_without_metadata(store, catalog, fake_stripe, make_session):
    fake_stripe.sessions["cs_3"] = make_session("cs_3", [{"description": "Sales Excellence Series (3 Books)"}])
    res = _verify(store, catalog, "cs_3")
    assert res["items"] == [{
        "name": "Sales Excellence Series (3 Books)",
        "downloadUrl": "http://api.test/download/sales-excellence-series.zip",
    }]


def test_verify_skips_unknown_lines_but_records_them(store, catalog, fake_db, fake_stripe, make_session):
    fake_stripe.sessions["cs_4"] = make_session("cs_4", [
        {"description": "Produit retiré"},
        {"description": "Mastering Cold Calls – Full Guide", "catalog_id": "ebook-cold-calls"},
    ])
    res = _verify(store, catalog, "cs_4")
    assert [i["name"] for i in res["items"]] == ["Mastering Cold Calls – Full Guide"]
    assert res["items"][0]["downloadUrl"].endswith("/mastering-cold-calls.pdf")
    order = fake_db.rows["orders"][0]
    assert order["items"] == ["Produit retiré", "Mastering Cold Calls – Full Guide"]
    assert order["catalog_ids"] == ["ebook-cold-calls"]


def test_verify_signed_links(store, catalog, fake_stripe, make_session):
    fake_stripe.sessions["cs_5"] = make_session("cs_5", [{"description": "x", "catalog_id": "ebook-fitness"}])
    res = _verify(store, catalog, "cs_5", signing_secret="s3cret", link_ttl_seconds=60)
    assert res["items"][0]["downloadUrl"].startswith("http://api.test/download/fitness-guide.pdf?token=")


def test_verify_empty_session_id(store, catalog, fake_stripe):
    with pytest.raises(ValidationError):
        _verify(store, catalog, "")
    assert fake_stripe.retrieved == []


def test_verify_stripe_error_propagates(store, catalog, fake_db, fake_stripe):
    fake_stripe.error = UpstreamError("No such checkout.session")
    with pytest.raises(UpstreamError):
        _verify(store, catalog, "cs_missing")
    assert fake_db.rows["orders"] == []


def test_verify_store_failure(store, catalog, fake_db, fake_stripe, make_session):
    fake_stripe.sessions["cs_6"] = make_session("cs_6", [{"description": "x", "catalog_id": "ebook-am"}])
    fake_db.fail_with = ConnectionError("down")
    with pytest.raises(PersistenceError):
        _verify(store, catalog, "cs_6")


def test_build_success_url():
    assert service.build_success_url("http://f", "/success") == "http://f/success?session_id={CHECKOUT_SESSION_ID}"
    assert service.build_success_url("http://f", "/s?a=1") == "http://f/s?a=1&session_id={CHECKOUT_SESSION_ID}"


def test_verify_links_by_description_only(store, catalog, fake_stripe, make_session):
    fake_stripe.sessions["cs_7"] = make_session("cs_7", [
        {"description": "SDR Success Playbook"},
        {"description": "Business Development Playbook"},
    ])
    urls = [i["downloadUrl"] for i in _verify(store, catalog, "cs_7")["items"]]
    assert urls[0].endswith("sdr-success-playbook.pdf")
    assert urls[1].endswith("bdm-playbook.pdf")
