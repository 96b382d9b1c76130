"""API tests for landlord profiles, properties and tenants."""

import unittest
from typing import Any

from sqlalchemy import select

from app.models import Landlord, Property, Tenant
from support import ApiTestCase


def landlord_body(**overrides: Any) -> dict[str, Any]:
    body: dict[str, Any] = {
        "national_id": "12345678",
        "property_name": "Sunrise Apartments",
        "property_type": "apartment",
        "location": "Nairobi",
        "number_of_units": 12,
        "price_range": "20000-35000",
        "amenities": ["parking", "water"],
        "bank_name": "KCB",
        "account_number": "0011223344",
        "branch": "Westlands",
    }
    body.update(overrides)
    return body


def property_body(**overrides: Any) -> dict[str, Any]:
    body: dict[str, Any] = {
        "property_name": "Hillside Court",
        "property_type": "maisonette",
        "location": "Kiambu",
        "number_of_units": 4,
        "price_range": "40000-60000",
        "amenities": {"parking": True, "gym": False},
    }
    body.update(overrides)
    return body


def tenant_body(**overrides: Any) -> dict[str, Any]:
    body: dict[str, Any] = {
        "tenantFullName": "Mary Wanjiku",
        "phoneNumber": "+254722000000",
        "email": "mary@x.com",
        "national_id": "87654321",
        "date_of_birth": "1990-05-04",
        "property_address": "Sunrise Apartments, Unit 4B",
        "lease_start_date": "2025-01-01",
        "lease_end_date": "2025-12-31",
        "monthly_rent": "25000.00",
        "payment_method": "mpesa",
    }
    body.update(overrides)
    return body


class TestCreateLandlord(ApiTestCase):
    def setUp(self) -> None:
        super().setUp()
        self.token = self.register_confirmed()["token"]

    def create(self, token: str | None = None, **overrides: Any):
        return self.client.post(
            self.url("/landlord/create"),
            json=landlord_body(**overrides),
            headers=self.auth(token or self.token),
        )

    def test_create_profile_from_identity(self) -> None:
        resp = self.create()
        self.assertEqual(resp.status_code, 201, resp.text)
        data = resp.json()["data"]
        self.assertEqual(data["full_name"], "John Doe")
        self.assertEqual(data["phone_number"], "+254700000000")
        with self.session_factory() as db:
            landlord = db.execute(select(Landlord)).scalar_one()
            self.assertEqual(landlord.email, "john@x.com")
            self.assertEqual(landlord.amenities, ["parking", "water"])

    def test_welcome_email_sent(self) -> None:
        self.mailer.sent.clear()
        self.create()
        self.assertEqual([m[0] for m in self.mailer.sent], ["john@x.com"])

    def test_requires_token(self) -> None:
        resp = self.client.post(self.url("/landlord/create"), json=landlord_body())
        self.assertEqual(resp.status_code, 401)

    def test_other_roles_forbidden(self) -> None:
        token = self.register_confirmed(
            email="tina@x.com", phone_number="+254733000000", role="tenant"
        )["token"]
        resp = self.create(token=token)
        self.assertEqual(resp.status_code, 403)

    def test_missing_fields(self) -> None:
        body = landlord_body()
        del body["bank_name"]
        body["location"] = " "
        resp = self.client.post(
            self.url("/landlord/create"), json=body, headers=self.auth(self.token)
        )
        self.assertEqual(resp.status_code, 400)
        self.assertEqual(resp.json()["missingFields"], ["location", "bank_name"])

    def test_null_or_blank_amenities_reported_missing(self) -> None:
        for value in (None, ""):
            with self.subTest(amenities=value):
                resp = self.create(amenities=value)
                self.assertEqual(resp.status_code, 400)
                body = resp.json()
                self.assertEqual(body["message"], "Missing required fields")
                self.assertEqual(body["missingFields"], ["amenities"])

    def test_wrong_type_amenities_is_invalid_body(self) -> None:
        resp = self.create(amenities=5)
        self.assertEqual(resp.status_code, 400)
        body = resp.json()
        self.assertEqual(body["message"], "Invalid request body")
        self.assertNotIn("missingFields", body)
        self.assertTrue(all(e["field"].startswith("amenities") for e in body["errors"]))

    def test_units_must_be_positive(self) -> None:
        resp = self.create(number_of_units=0)
        self.assertEqual(resp.status_code, 400)
        self.assertEqual(resp.json()["errors"][0]["field"], "number_of_units")

    def test_duplicate_national_id(self) -> None:
        self.assertEqual(self.create().status_code, 201)
        other = self.register_confirmed(email="jane@x.com", phone_number="+254700000001")
        resp = self.create(token=other["token"])
        self.assertEqual(resp.status_code, 400)
        self.assertEqual(
            resp.json()["message"], "This national ID is already in use by another landlord."
        )

    def test_second_profile_for_same_user(self) -> None:
        self.assertEqual(self.create().status_code, 201)
        resp = self.create(national_id="99999999")
        self.assertEqual(resp.status_code, 400)
        self.assertEqual(
            resp.json()["message"], "A landlord with this information already exists"
        )


class TestAddProperty(ApiTestCase):
    def setUp(self) -> None:
        super().setUp()
        self.token = self.register_confirmed()["token"]

    def add(self, **overrides: Any):
        return self.client.post(
            self.url("/landlord/add"),
            json=property_body(**overrides),
            headers=self.auth(self.token),
        )

    def test_null_or_blank_amenities_reported_missing(self) -> None:
        for value in (None, ""):
            with self.subTest(amenities=value):
                resp = self.add(amenities=value, property_name="  ")
                self.assertEqual(resp.status_code, 400)
                self.assertEqual(
                    resp.json()["missingFields"], ["property_name", "amenities"]
                )

    def test_requires_landlord_profile(self) -> None:
        resp = self.add()
        self.assertEqual(resp.status_code, 403)
        self.assertEqual(
            resp.json()["message"], "Create a landlord profile before adding properties"
        )

    def test_add_property(self) -> None:
        created = self.client.post(
            self.url("/landlord/create"), json=landlord_body(), headers=self.auth(self.token)
        )
        self.assertEqual(created.status_code, 201)
        resp = self.add()
        self.assertEqual(resp.status_code, 201, resp.text)
        data = resp.json()["data"]
        self.assertEqual(len(data["property_unique_id"]), 10)
        with self.session_factory() as db:
            prop = db.execute(select(Property)).scalar_one()
            self.assertEqual(prop.landlord_id, created.json()["data"]["id"])
            self.assertEqual(prop.amenities, {"parking": True, "gym": False})

    def test_caretaker_forbidden(self) -> None:
        token = self.register_confirmed(
            email="care@x.com", phone_number="+254744000000", role="caretaker"
        )["token"]
        resp = self.client.post(
            self.url("/landlord/add"), json=property_body(), headers=self.auth(token)
        )
        self.assertEqual(resp.status_code, 403)


class TestCreateTenant(ApiTestCase):
    def setUp(self) -> None:
        super().setUp()
        self.token = self.register_confirmed()["token"]
        self.mailer.sent.clear()

    def create(self, token: str | None = None, **overrides: Any):
        return self.client.post(
            self.url("/tenant/create"),
            json=tenant_body(**overrides),
            headers=self.auth(token or self.token),
        )

    def test_create_tenant(self) -> None:
        resp = self.create()
        self.assertEqual(resp.status_code, 201, resp.text)
        data = resp.json()["data"]
        self.assertEqual(data["full_name"], "Mary Wanjiku")
        self.assertEqual(data["lease_end_date"], "2025-12-31")
        self.assertEqual([m[0] for m in self.mailer.sent], ["john@x.com"])

    def test_notice_goes_to_creator_without_tenant_email(self) -> None:
        resp = self.create(email=None)
        self.assertEqual(resp.status_code, 201)
        self.assertEqual([m[0] for m in self.mailer.sent], ["john@x.com"])

    def test_caretaker_may_create(self) -> None:
        token = self.register_confirmed(
            email="care@x.com", phone_number="+254744000000", role="caretaker"
        )["token"]
        self.assertEqual(self.create(token=token).status_code, 201)

    def test_tenant_role_forbidden(self) -> None:
        token = self.register_confirmed(
            email="tina@x.com", phone_number="+254733000000", role="tenant"
        )["token"]
        self.assertEqual(self.create(token=token).status_code, 403)

    def test_duplicate_phone_for_same_creator(self) -> None:
        self.assertEqual(self.create().status_code, 201)
        resp = self.create(national_id="11112222", email="other@x.com")
        self.assertEqual(resp.status_code, 400)
        self.assertEqual(
            resp.json()["message"],
            "A tenant with this phone number, email, or national ID already exists.",
        )

    def test_same_tenant_under_another_creator(self) -> None:
        self.assertEqual(self.create().status_code, 201)
        token = self.register_confirmed(
            email="care@x.com", phone_number="+254744000000", role="caretaker"
        )["token"]
        self.assertEqual(self.create(token=token).status_code, 201)
        with self.session_factory() as db:
            self.assertEqual(len(db.execute(select(Tenant.id)).all()), 2)

    def test_lease_end_before_start(self) -> None:
        resp = self.create(lease_start_date="2025-06-01", lease_end_date="2025-01-01")
        self.assertEqual(resp.status_code, 400)
        self.assertEqual(resp.json()["message"], "Invalid request body")

    def test_missing_aliased_fields(self) -> None:
        body = tenant_body()
        del body["tenantFullName"]
        del body["phoneNumber"]
        resp = self.client.post(
            self.url("/tenant/create"), json=body, headers=self.auth(self.token)
        )
        self.assertEqual(resp.status_code, 400)
        self.assertEqual(resp.json()["missingFields"], ["tenantFullName", "phoneNumber"])


if __name__ == "__main__":
    unittest.main()
