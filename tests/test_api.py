"""
End-to-end tests for the `/v1` API routes.
"""
import unittest

import jwt
from fastapi.testclient import TestClient

from flight_path_tracker.api.app import create_app
from flight_path_tracker.core.config import Settings

SETTINGS = Settings(secret_key="test-secret-key-with-enough-length-for-hs256", seed_sample_data=False)


class ApiTestCase(unittest.TestCase):
    def setUp(self):
        self.client = TestClient(create_app(settings=SETTINGS))
        response = self.client.post("/v1/token", json={"username": "admin", "password": "password"})
        self.headers = {"Authorization": f"Bearer {response.json()['token']}"}

    def post(self, path, payload):
        return self.client.post(path, json=payload, headers=self.headers)

    def get(self, path):
        return self.client.get(path, headers=self.headers)

    def delete(self, path):
        return self.client.delete(path, headers=self.headers)


class AuthTests(ApiTestCase):
    def test_token_requires_valid_credentials(self):
        response = self.client.post("/v1/token", json={"username": "admin", "password": "wrong"})
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()["detail"], "Invalid credentials")

    def test_missing_token_is_forbidden(self):
        response = self.client.get("/v1/passenger/abc")
        self.assertEqual(response.status_code, 403)

    def test_invalid_token_is_unauthorized(self):
        response = self.client.get("/v1/passenger/abc", headers={"Authorization": "Bearer not-a-jwt"})
        self.assertEqual(response.status_code, 401)

    def test_token_from_other_secret_is_unauthorized(self):
        other = TestClient(create_app(settings=Settings(secret_key="another-secret-key-that-is-long-enough", seed_sample_data=False)))
        token = other.post("/v1/token", json={"username": "admin", "password": "password"}).json()["token"]
        response = self.client.get("/v1/passenger/abc", headers={"Authorization": f"Bearer {token}"})
        self.assertEqual(response.status_code, 401)

    def test_token_request_without_password_is_rejected(self):
        response = self.client.post("/v1/token", json={"username": "admin"})
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()["detail"], "Invalid credentials")

    def test_non_bearer_scheme_is_unauthorized(self):
        response = self.client.get("/v1/passenger/abc", headers={"Authorization": "Token x"})
        self.assertEqual(response.status_code, 401)

    def test_expired_token_is_unauthorized(self):
        expiring = TestClient(create_app(settings=Settings(
            secret_key=SETTINGS.secret_key,
            token_ttl_seconds=-1,
            seed_sample_data=False,
        )))
        token = expiring.post("/v1/token", json={"username": "admin", "password": "password"}).json()["token"]
        response = expiring.get("/v1/passenger/abc", headers={"Authorization": f"Bearer {token}"})
        self.assertEqual(response.status_code, 401)

    def test_token_without_caller_claim_is_unauthorized(self):
        token = jwt.encode({"sub": "admin"}, SETTINGS.secret_key, algorithm=SETTINGS.jwt_algorithm)
        response = self.client.get("/v1/passenger/abc", headers={"Authorization": f"Bearer {token}"})
        self.assertEqual(response.status_code, 401)
        self.assertEqual(response.json()["detail"], "Unauthorized!")

    def test_health_is_public(self):
        self.assertEqual(self.client.get("/v1/health").json(), {"status": "ok"})


class PassengerFlightTests(ApiTestCase):
    def test_empty_name_is_rejected(self):
        for payload in ({"name": ""}, {}):
            with self.subTest(payload=payload):
                response = self.post("/v1/add_passenger", payload)
                self.assertEqual(response.status_code, 400)
                self.assertEqual(response.json()["detail"], "Name is required")

    def test_empty_ids_are_rejected(self):
        flight_id = self.post("/v1/add_flight", {"full_path": [["SFO", "ATL"]]}).json()["flight_id"]
        for payload in ({"passenger_id": "", "flight_id": flight_id}, {"flight_id": flight_id}):
            with self.subTest(payload=payload):
                response = self.post("/v1/add_passenger_flight", payload)
                self.assertEqual(response.status_code, 400)
                self.assertEqual(response.json()["detail"], "Invalid passenger or flight ID")

    def test_add_and_fetch_passenger(self):
        response = self.post("/v1/add_passenger", {"name": "Jane Doe"})
        self.assertEqual(response.status_code, 200)
        body = response.json()
        self.assertEqual(body["name"], "Jane Doe")

        fetched = self.get(f"/v1/passenger/{body['passenger_id']}")
        self.assertEqual(fetched.json(), body)

        duplicate = self.post("/v1/add_passenger", {"name": "Jane Doe"})
        self.assertEqual(duplicate.status_code, 400)
        self.assertEqual(duplicate.json()["detail"], "Passenger with this name already exists")

        search = self.get("/v1/passenger/search/jane doe")
        self.assertEqual(search.json(), [body])
        self.assertEqual(self.get("/v1/passenger/search/nobody").status_code, 404)
        self.assertEqual(self.get("/v1/passenger/unknown").status_code, 404)

    def test_add_and_fetch_flight(self):
        response = self.post("/v1/add_flight", {"full_path": [["SFO", "ATL"], ["ATL", "EWR"]]})
        self.assertEqual(response.status_code, 200)
        body = response.json()
        self.assertEqual(body["full_path"], [["SFO", "ATL"], ["ATL", "EWR"]])
        self.assertEqual(self.get(f"/v1/flight/{body['flight_id']}").json(), body)

        duplicate = self.post("/v1/add_flight", {"full_path": [["SFO", "ATL"], ["ATL", "EWR"]]})
        self.assertEqual(duplicate.status_code, 400)
        self.assertEqual(duplicate.json()["detail"], "Flight with this path already exists")

        malformed = self.post("/v1/add_flight", {"full_path": [["SFO"]]})
        self.assertEqual(malformed.status_code, 422)
        self.assertEqual(self.get("/v1/flight/unknown").status_code, 404)

    def test_assign_flight_to_passenger(self):
        passenger_id = self.post("/v1/add_passenger", {"name": "John Smith"}).json()["passenger_id"]
        flight_id = self.post("/v1/add_flight", {"full_path": [["LAX", "ORD"], ["ORD", "JFK"]]}).json()["flight_id"]

        response = self.post("/v1/add_passenger_flight", {"passenger_id": passenger_id, "flight_id": flight_id})
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json(), {"message": "Flight added to passenger successfully"})

        invalid = self.post("/v1/add_passenger_flight", {"passenger_id": passenger_id, "flight_id": "nope"})
        self.assertEqual(invalid.status_code, 400)
        self.assertEqual(invalid.json()["detail"], "Invalid passenger or flight ID")


class CalculateTests(ApiTestCase):
    def test_calculate_flight_path(self):
        passenger_id = self.post("/v1/add_passenger", {"name": "Mary Jane"}).json()["passenger_id"]
        first = self.post("/v1/add_flight", {"full_path": [["SEA", "DEN"], ["DEN", "MIA"]]}).json()["flight_id"]
        second = self.post("/v1/add_flight", {"full_path": [["MIA", "LGA"]]}).json()["flight_id"]
        self.post("/v1/add_passenger_flight", {"passenger_id": passenger_id, "flight_id": second})
        self.post("/v1/add_passenger_flight", {"passenger_id": passenger_id, "flight_id": first})

        response = self.get(f"/v1/calculate/{passenger_id}")

        self.assertEqual(response.status_code, 200)
        body = response.json()
        self.assertEqual(
            body["full_path"],
            [
                {"leg": ["MIA", "LGA"], "flight_id": second},
                {"leg": ["SEA", "DEN"], "flight_id": first},
                {"leg": ["DEN", "MIA"], "flight_id": first},
            ],
        )
        self.assertEqual(body["sorted_path"], [["SEA", "DEN"], ["DEN", "MIA"], ["MIA", "LGA"]])
        self.assertEqual(body["optimized_path"], [["SEA", "LGA"]])

    def test_calculate_errors(self):
        self.assertEqual(self.get("/v1/calculate/unknown").status_code, 404)
        passenger_id = self.post("/v1/add_passenger", {"name": "Grounded"}).json()["passenger_id"]
        response = self.get(f"/v1/calculate/{passenger_id}")
        self.assertEqual(response.status_code, 422)
        self.assertEqual(response.json()["detail"], "No path could be reconstructed")


class DeleteTests(ApiTestCase):
    def test_delete_blocked_by_itinerary(self):
        passenger_id = self.post("/v1/add_passenger", {"name": "Busy"}).json()["passenger_id"]
        flight_id = self.post("/v1/add_flight", {"full_path": [["SFO", "ATL"]]}).json()["flight_id"]
        self.post("/v1/add_passenger_flight", {"passenger_id": passenger_id, "flight_id": flight_id})

        response = self.delete(f"/v1/delete_passenger/{passenger_id}")
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()["detail"], "Cannot delete passenger with active flights")

        response = self.delete(f"/v1/delete_flight/{flight_id}")
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()["detail"], "Cannot delete flight with active passengers")

    def test_delete_unreferenced_entities(self):
        passenger_id = self.post("/v1/add_passenger", {"name": "Idle"}).json()["passenger_id"]
        flight_id = self.post("/v1/add_flight", {"full_path": [["LAX", "ORD"]]}).json()["flight_id"]

        response = self.delete(f"/v1/delete_passenger/{passenger_id}")
        self.assertEqual(response.json(), {"message": "Passenger deleted successfully"})
        self.assertEqual(self.delete(f"/v1/delete_passenger/{passenger_id}").status_code, 404)

        response = self.delete(f"/v1/delete_flight/{flight_id}")
        self.assertEqual(response.json(), {"message": "Flight deleted successfully"})
        self.assertEqual(self.delete(f"/v1/delete_flight/{flight_id}").status_code, 404)


class SeededAppTests(unittest.TestCase):
    def test_sample_passenger_is_seeded(self):
        client = TestClient(create_app(settings=Settings(secret_key=SETTINGS.secret_key)))
        token = client.post("/v1/token", json={"username": "admin", "password": "password"}).json()["token"]
        headers = {"Authorization": f"Bearer {token}"}
        matches = client.get("/v1/passenger/search/John Doe", headers=headers).json()
        self.assertEqual(len(matches), 1)
        body = client.get(f"/v1/calculate/{matches[0]['passenger_id']}", headers=headers).json()
        self.assertEqual(body["optimized_path"], [["SFO", "EWR"]])


if __name__ == "__main__":
    unittest.main()
