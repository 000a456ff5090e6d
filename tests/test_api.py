"""API contract tests: status codes, bodies and auth for the payment routes."""

from datetime import datetime
from decimal import Decimal

from models import Payment
from tests.conftest import RECEIVER_ACCOUNT, SENDER_ACCOUNT, at, make_token

BASE = "/api/employeepayments"


def _stored(db, payment_id):
    db.expire_all()
    return db.get(Payment, payment_id)


class TestAuth:

    def test_missing_token_is_401(self, client):
        response = client.get(f"{BASE}/getall")
        assert response.status_code == 401
        assert response.json() == {"message": "Missing token"}

    def test_garbage_token_is_403(self, client):
        response = client.get(f"{BASE}/getall", headers={"Authorization": "Bearer not-a-jwt"})
        assert response.status_code == 403

    def test_customer_cannot_use_employee_routes(self, client, customer_headers):
        response = client.get(f"{BASE}/getall", headers=customer_headers)
        assert response.status_code == 403

    def test_unverify_requires_employee(self, client, customer_headers, make_payment):
        payment = make_payment(verified=True, reason="Verified successfully")
        response = client.patch(f"{BASE}/unverify", json={"_id": payment.id}, headers=customer_headers)
        assert response.status_code == 403


class TestListing:

    def test_getall_newest_first_with_camel_case_fields(self, client, employee_headers, make_payment):
        old = make_payment(created_at=at(1))
        new = make_payment(created_at=at(5))

        response = client.get(f"{BASE}/getall", headers=employee_headers)

        assert response.status_code == 200
        data = response.json()
        assert [p["id"] for p in data] == [new.id, old.id]
        first = data[0]
        assert first["senderEmail"] == "alice@example.com"
        assert first["accountInfo"] == RECEIVER_ACCOUNT
        assert first["swiftResponse"] is None
        assert first["createdAt"] == first["paymentDate"]
        assert first["status"] == "UNVERIFIED"
        assert Decimal(first["amount"]) == Decimal("250.00")

    def test_getall_filters_on_verified(self, client, employee_headers, make_payment):
        verified = make_payment(verified=True, reason="Verified successfully")
        make_payment()

        response = client.get(f"{BASE}/getall", params={"verified": "true"}, headers=employee_headers)

        assert [p["id"] for p in response.json()] == [verified.id]

    def test_get_one_and_missing(self, client, employee_headers, make_payment):
        payment = make_payment()

        assert client.get(f"{BASE}/{payment.id}", headers=employee_headers).json()["id"] == payment.id
        missing = client.get(f"{BASE}/999", headers=employee_headers)
        assert missing.status_code == 404
        assert missing.json() == {"message": "Payment record not found."}


class TestVerifyAccount:

    def _post(self, client, headers, **overrides):
        body = {
            "accountNumber": SENDER_ACCOUNT,
            "senderEmail": "alice@example.com",
            "accountInfo": RECEIVER_ACCOUNT,
            "receiverEmail": "bob@example.com",
        }
        body.update(overrides)
        return client.post(f"{BASE}/verify-account", json=body, headers=headers)

    def test_match(self, client, employee_headers):
        response = self._post(client, employee_headers)
        assert response.status_code == 200
        assert response.json() == {"verified": True, "message": "Both sender and receiver verified successfully."}

    def test_unknown_sender_is_404_with_verdict(self, client, employee_headers):
        response = self._post(client, employee_headers, senderEmail="ghost@example.com")
        assert response.status_code == 404
        assert response.json() == {"verified": False, "message": "Sender email not found in system."}

    def test_receiver_mismatch_is_400(self, client, employee_headers):
        response = self._post(client, employee_headers, accountInfo="123")
        assert response.status_code == 400
        assert response.json()["message"] == "Receiver account number does not match records."

    def test_missing_field_is_400(self, client, employee_headers):
        response = self._post(client, employee_headers, receiverEmail="")
        assert response.status_code == 400
        assert "Missing required fields" in response.json()["message"]


class TestVerifySwift:

    def test_valid_mixed_case(self, client, employee_headers):
        response = client.post(f"{BASE}/verify-swift", json={"swiftCode": " absa zaxxx "}, headers=employee_headers)
        assert response.status_code == 200
        assert response.json() == {"valid": True, "message": "SWIFT code is valid."}

    def test_unknown_is_404(self, client, employee_headers):
        response = client.post(f"{BASE}/verify-swift", json={"swiftCode": "ZZZZZZZZ"}, headers=employee_headers)
        assert response.status_code == 404
        assert response.json()["valid"] is False

    def test_missing_is_400(self, client, employee_headers):
        response = client.post(f"{BASE}/verify-swift", json={}, headers=employee_headers)
        assert response.status_code == 400
        assert response.json() == {"valid": False, "message": "Missing SWIFT code in request body."}


class TestTransitions:

    def test_update_verification_success(self, client, employee_headers, make_payment, db):
        payment = make_payment()

        response = client.patch(
            f"{BASE}/update-verification",
            json={"_id": payment.id, "accountsVerified": True, "swiftCodeVerified": True},
            headers=employee_headers,
        )

        assert response.status_code == 200
        body = response.json()
        assert body["message"] == "Payment verification status updated successfully."
        assert body["payment"]["verified"] is True
        assert body["payment"]["reason"] == "Verified successfully"
        assert _stored(db, payment.id).verified is True

    def test_update_verification_with_failed_check(self, client, employee_headers, make_payment, db):
        payment = make_payment()

        response = client.patch(
            f"{BASE}/update-verification",
            json={"_id": payment.id, "accountsVerified": True, "swiftCodeVerified": False},
            headers=employee_headers,
        )

        assert response.status_code == 400
        assert response.json() == {"verified": False, "message": "Unverified: one or more checks failed."}
        assert _stored(db, payment.id).verified is False

    def test_update_verification_requires_booleans(self, client, employee_headers, make_payment):
        payment = make_payment()

        response = client.patch(
            f"{BASE}/update-verification",
            json={"_id": payment.id, "accountsVerified": "yes", "swiftCodeVerified": True},
            headers=employee_headers,
        )

        assert response.status_code == 400

    def test_update_verification_revalidates_when_enabled(self, app, client, employee_headers, make_payment, db):
        app.state.revalidate_on_persist = True
        payment = make_payment(swift_code="ZZZZZZZZ")

        response = client.patch(
            f"{BASE}/update-verification",
            json={"_id": payment.id, "accountsVerified": True, "swiftCodeVerified": True},
            headers=employee_headers,
        )

        assert response.status_code == 400
        assert "SWIFT code not valid or not found." in response.json()["message"]
        assert _stored(db, payment.id).verified is False

    def test_unverify_twice(self, client, employee_headers, make_payment):
        payment = make_payment(verified=True, reason="Verified successfully")

        for _ in range(2):
            response = client.patch(f"{BASE}/unverify", json={"_id": payment.id}, headers=employee_headers)
            assert response.status_code == 200
            assert response.json()["payment"]["verified"] is False
            assert response.json()["payment"]["reason"] == "Unverified by employee"

    def test_unverify_missing(self, client, employee_headers):
        response = client.patch(f"{BASE}/unverify", json={"_id": 404}, headers=employee_headers)
        assert response.status_code == 404
        assert response.json() == {"message": "Payment record not found."}

    def test_submit_unverified_is_400(self, client, employee_headers, make_payment, db):
        payment = make_payment()

        response = client.patch(f"{BASE}/submit-to-swift", json={"_id": payment.id}, headers=employee_headers)

        assert response.status_code == 400
        assert response.json() == {"message": "Cannot submit unverified payment to SWIFT."}
        assert _stored(db, payment.id).submitted is False

    def test_verify_then_submit(self, client, employee_headers, make_payment):
        payment = make_payment()
        client.patch(
            f"{BASE}/update-verification",
            json={"_id": payment.id, "accountsVerified": True, "swiftCodeVerified": True},
            headers=employee_headers,
        )

        response = client.patch(f"{BASE}/submit-to-swift", json={"_id": payment.id}, headers=employee_headers)

        assert response.status_code == 200
        submitted = response.json()["payment"]
        assert submitted["submitted"] is True
        assert submitted["status"] == "SUBMITTED"
        assert submitted["swiftResponse"]["status"] == "submitted"
        stamped = datetime.fromisoformat(submitted["swiftResponse"]["timestamp"])
        assert stamped >= datetime.fromisoformat(submitted["createdAt"])

    def test_resubmit_is_rejected_with_reason(self, client, employee_headers, make_payment):
        payment = make_payment()
        client.patch(
            f"{BASE}/update-verification",
            json={"_id": payment.id, "accountsVerified": True, "swiftCodeVerified": True},
            headers=employee_headers,
        )
        first = client.patch(f"{BASE}/submit-to-swift", json={"_id": payment.id}, headers=employee_headers)

        second = client.patch(f"{BASE}/submit-to-swift", json={"_id": payment.id}, headers=employee_headers)

        assert second.status_code == 400
        assert second.json() == {"message": "Payment already submitted to SWIFT."}
        again = client.get(f"{BASE}/{payment.id}", headers=employee_headers).json()
        assert again["swiftResponse"] == first.json()["payment"]["swiftResponse"]

    def test_checks_endpoint(self, client, employee_headers, make_payment):
        payment = make_payment(swift_code="ZZZZZZZZ")

        response = client.get(f"{BASE}/{payment.id}/checks", headers=employee_headers)

        assert response.status_code == 200
        assert response.json() == {
            "paymentId": payment.id,
            "accountsVerified": True,
            "accountsMessage": "Both sender and receiver verified successfully.",
            "swiftCodeVerified": False,
            "swiftMessage": "SWIFT code not valid or not found.",
        }


class TestDelete:

    def test_delete_by_query(self, client, employee_headers, make_payment, db):
        payment = make_payment()

        response = client.delete(f"{BASE}/delete", params={"id": payment.id}, headers=employee_headers)

        assert response.status_code == 200
        assert response.json()["message"] == "Payment deleted successfully."
        assert _stored(db, payment.id) is None

    def test_delete_by_body(self, client, employee_headers, make_payment, db):
        payment = make_payment()

        response = client.request("DELETE", f"{BASE}/delete", json={"_id": payment.id}, headers=employee_headers)

        assert response.status_code == 200
        assert _stored(db, payment.id) is None

    def test_delete_missing_is_404(self, client, employee_headers):
        response = client.delete(f"{BASE}/delete", params={"id": 77}, headers=employee_headers)
        assert response.status_code == 404
        assert response.json()["message"] == "Payment record not found."

    def test_delete_without_id_is_400(self, client, employee_headers):
        response = client.delete(f"{BASE}/delete", headers=employee_headers)
        assert response.status_code == 400

    def test_delete_multiple_counts_existing_only(self, client, employee_headers, make_payment):
        a = make_payment()
        c = make_payment()

        response = client.post(f"{BASE}/delete-multiple", json={"ids": [a.id, 5000, c.id]}, headers=employee_headers)

        assert response.status_code == 200
        assert response.json() == {"message": "Deleted 2 record(s).", "deletedCount": 2}

    def test_delete_multiple_rejects_empty_and_non_array(self, client, employee_headers, make_payment, db):
        make_payment()

        for body in ({"ids": []}, {"ids": "1"}, {}):
            response = client.post(f"{BASE}/delete-multiple", json=body, headers=employee_headers)
            assert response.status_code == 400
        db.expire_all()
        assert db.query(Payment).count() == 1


class TestSubmitMultiple:

    def test_partial_failure_reported_per_item(self, client, employee_headers, make_payment):
        x = make_payment()
        y = make_payment()

        response = client.post(
            f"{BASE}/submit-multiple",
            json={"items": [
                {"_id": x.id, "accountsVerified": False, "swiftCodeVerified": True},
                {"_id": y.id, "accountsVerified": True, "swiftCodeVerified": True},
            ]},
            headers=employee_headers,
        )

        assert response.status_code == 200
        body = response.json()
        assert body["submitted"] == 1
        assert body["failed"] == 1
        first, second = body["results"]
        assert first["id"] == x.id and first["ok"] is False and first["payment"] is None
        assert second["id"] == y.id and second["ok"] is True
        assert second["payment"]["submitted"] is True

    def test_empty_items_rejected(self, client, employee_headers):
        response = client.post(f"{BASE}/submit-multiple", json={"items": []}, headers=employee_headers)
        assert response.status_code == 400


class TestCustomerPayments:

    def test_create_uses_callers_account(self, client, customer_headers):
        response = client.post(
            "/api/payments",
            json={
                "receiverEmail": "bob@example.com",
                "amount": 120.5,
                "currency": "eur",
                "provider": "SWIFT",
                "accountInfo": RECEIVER_ACCOUNT,
                "swiftCode": "deut deff",
            },
            headers=customer_headers,
        )

        assert response.status_code == 201
        payment = response.json()
        assert payment["senderEmail"] == "alice@example.com"
        assert payment["accountNumber"] == SENDER_ACCOUNT
        assert payment["currency"] == "EUR"
        assert payment["swiftCode"] == "DEUTDEFF"
        assert payment["verified"] is False
        assert payment["submitted"] is False

    def test_create_rejects_negative_amount(self, client, customer_headers):
        response = client.post(
            "/api/payments",
            json={
                "receiverEmail": "bob@example.com",
                "amount": -5,
                "currency": "USD",
                "provider": "SWIFT",
                "accountInfo": RECEIVER_ACCOUNT,
                "swiftCode": "ABSAZAJJ",
            },
            headers=customer_headers,
        )
        assert response.status_code == 400

    def test_unknown_account_in_token(self, client, accounts):
        headers = {"Authorization": f"Bearer {make_token(id=9999, role='customer')}"}
        response = client.get("/api/payments", headers=headers)
        assert response.status_code == 404

    def test_list_own_payments(self, client, customer_headers, make_payment):
        mine = make_payment()
        make_payment(sender_email="carol@example.com")

        response = client.get("/api/payments", headers=customer_headers)

        assert [p["id"] for p in response.json()] == [mine.id]


def test_health(client):
    response = client.get("/api/health")
    assert response.status_code == 200
    assert response.json()["status"] == "ok"
    assert response.json()["database"] == "ok"
    assert isinstance(response.json()["swiftCodesLoaded"], int)


def test_health_reports_unreachable_database(client, monkeypatch):
    monkeypatch.setattr("main.check_connection", lambda: False)

    response = client.get("/api/health")

    assert response.status_code == 200
    assert response.json()["status"] == "degraded"
    assert response.json()["database"] == "unavailable"
