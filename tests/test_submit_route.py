from business_survey.main import app
from business_survey.routes.submit import get_dispatcher
from business_survey.services.validation import validate_submission


def test_end_to_end_single_business(client, sink, use_sink, business):
    use_sink()
    submission = validate_submission({"name": "Ali", "businesses": [business()]})
    assert submission.businesses[0].business_number == "+989123456789"

    resp = client.post("/api/submit", json=submission.model_dump())

    assert resp.status_code == 200
    assert resp.json() == {"success": True}
    assert len(sink.rows) == 1
    row = sink.rows[0]
    assert row["name"] == "Ali"
    assert row["business_number"] == "+989123456789"
    assert row["date_and_time"] == "10/19/2026, 06:23:05 PM"
    for key in ("business_category", "business_link", "business_website", "business_note", "business_owner_relation"):
        assert row[key] == ""


def test_missing_webhook_url_is_a_configuration_error(client, sink, use_sink, business):
    use_sink(url=None)

    resp = client.post("/api/submit", json={"name": "Ali", "businesses": [business()]})

    assert resp.status_code == 500
    assert resp.json() == {"success": False, "message": "Webhook URL not set"}
    assert sink.rows == []


def test_missing_webhook_url_from_environment(client, monkeypatch, business):
    monkeypatch.delenv("GOOGLE_WEBHOOK_URL", raising=False)

    resp = client.post("/api/submit", json={"name": "Ali", "businesses": [business()]})

    assert resp.status_code == 500
    assert resp.json()["message"] == "Webhook URL not set"


def test_configuration_is_checked_before_shape(client, use_sink):
    use_sink(url="")
    resp = client.post("/api/submit", json={"name": "Ali", "businesses": "nope"})
    assert resp.status_code == 500


def test_businesses_must_be_a_list_of_objects(client, sink, use_sink, business):
    use_sink()
    for body in (
        {"name": "Ali"},
        {"name": "Ali", "businesses": "Cafe X"},
        {"name": "Ali", "businesses": {"0": business()}},
        {"name": "Ali", "businesses": [business(), "Cafe Y"]},
    ):
        resp = client.post("/api/submit", json=body)
        assert resp.status_code == 400
        assert resp.json() == {"success": False, "message": "Invalid businesses format"}
    assert sink.rows == []


def test_body_must_be_a_json_object(client, sink, use_sink):
    use_sink()
    resp = client.post("/api/submit", content=b"not json", headers={"Content-Type": "application/json"})
    assert resp.status_code == 400
    resp = client.post("/api/submit", json=["Ali"])
    assert resp.status_code == 400
    assert sink.rows == []


def test_envelope_is_only_checked_loosely(client, sink, use_sink):
    use_sink()
    resp = client.post("/api/submit", json={"businesses": [{"business_name": "Cafe X", "business_link": "x"}]})

    assert resp.status_code == 200
    assert sink.rows[0]["name"] == ""
    assert sink.rows[0]["business_link"] == ""
    assert sink.rows[0]["business_number"] == ""


def test_delivery_fault_stops_the_batch(client, sink, use_sink, business):
    use_sink()
    sink.fail_at = 1
    businesses = [business(business_name=f"Business {i}") for i in range(3)]

    resp = client.post("/api/submit", json={"name": "Ali", "businesses": businesses})

    assert resp.status_code == 502
    assert resp.json() == {"success": False, "message": "Failed to forward a business record to webhook"}
    assert [row["business_name"] for row in sink.rows] == ["Business 0", "Business 1"]


def test_transport_fault_details_are_not_exposed(client, sink, use_sink, business):
    use_sink()
    sink.raise_at = 0

    resp = client.post("/api/submit", json={"name": "Ali", "businesses": [business()]})

    assert resp.status_code == 502
    assert "connection refused" not in resp.text


def test_unexpected_error_is_generic(client, business):
    class BrokenDispatcher:
        configured = True

        async def dispatch(self, name, businesses):
            raise RuntimeError("boom")

    app.dependency_overrides[get_dispatcher] = lambda: BrokenDispatcher()

    resp = client.post("/api/submit", json={"name": "Ali", "businesses": [business()]})

    assert resp.status_code == 500
    assert resp.json() == {"success": False, "message": "Internal server error"}


def test_empty_list_is_forwarded_as_nothing(client, sink, use_sink):
    use_sink()
    resp = client.post("/api/submit", json={"name": "Ali", "businesses": []})
    assert resp.status_code == 200
    assert sink.rows == []


def test_unsendable_webhook_url_is_a_delivery_fault(client, sink, use_sink, business):
    use_sink(url="http://example.com/a\x01b")

    resp = client.post("/api/submit", json={"name": "Ali", "businesses": [business()]})

    assert resp.status_code == 502
    assert resp.json() == {"success": False, "message": "Failed to forward a business record to webhook"}
    assert sink.rows == []


def test_unparseable_webhook_url_never_yields_internal_error(client, use_sink, business):
    use_sink(url="http://[bad/x")

    resp = client.post("/api/submit", json={"name": "Ali", "businesses": [business()]})

    assert resp.status_code in (200, 502)
    assert resp.json()["success"] is (resp.status_code == 200)
