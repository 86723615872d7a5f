"""
Smoke Test Script.

Runs against a live instance (default http://127.0.0.1:8000):
1. Health Check
2. Reference data: post offices, clients, clerk
3. Parcel creation -> dispatch -> delivery, with price and audit trail checks
4. Statistics endpoint

Usage:
    python scripts/validate_deployment.py [BASE_URL]
"""

import sys
import uuid

import httpx

BASE_URL = sys.argv[1] if len(sys.argv) > 1 else "http://127.0.0.1:8000"
API = "/v1"


def print_step(step, msg):
    print(f"[{step}] {msg}")


def fail(msg):
    print(f"FAILURE: {msg}")
    sys.exit(1)


def success(msg):
    print(f"OK: {msg}")


def expect(response: httpx.Response, status_code: int, what: str) -> dict:
    if response.status_code != status_code:
        fail(f"{what}: expected {status_code}, got {response.status_code} {response.text}")
    return response.json() if response.content else {}


def main():
    suffix = uuid.uuid4().hex[:6]
    
    with httpx.Client(base_url=BASE_URL, timeout=10.0) as client:
        print_step("HEALTH", f"Checking {BASE_URL}/health...")
        try:
            health = expect(client.get("/health"), 200, "health")
        except httpx.HTTPError as e:
            fail(f"Health check died: {e}")
        success(f"{health['app_name']} {health['version']} is up")
        
        print_step("SETUP", "Creating post offices, clients and a clerk...")
        origin = expect(client.post(f"{API}/post-offices", json={
            "name": f"Smoke Origin {suffix}", "city": "Kyiv", "postcode": "01001", "street": "Smoke 1"
        }), 201, "create origin")
        destination = expect(client.post(f"{API}/post-offices", json={
            "name": f"Smoke Destination {suffix}", "city": "Lviv", "postcode": "79000", "street": "Smoke 2"
        }), 201, "create destination")
        sender = expect(client.post(f"{API}/clients", json={
            "first_name": "Smoke", "last_name": "Sender", "email": f"sender-{suffix}@example.com",
            "phone": "+380990000001"
        }), 201, "create sender")
        recipient = expect(client.post(f"{API}/clients", json={
            "first_name": "Smoke", "last_name": "Recipient", "email": f"recipient-{suffix}@example.com",
            "phone": "+380990000002"
        }), 201, "create recipient")
        expect(client.post(f"{API}/employees", json={
            "first_name": "Smoke", "last_name": "Clerk", "position": "CLERK", "post_office_id": origin["id"]
        }), 201, "create clerk")
        success("Reference data ready")
        
        print_step("PARCEL", "Creating EXPRESS parcel of 10kg...")
        parcel = expect(client.post(f"{API}/parcels", json={
            "sender_client_id": sender["id"],
            "recipient_client_id": recipient["id"],
            "weight": 10,
            "delivery_type": "EXPRESS",
            "parcel_description": "BOOKS",
            "origin_post_office_id": origin["id"],
            "destination_post_office_id": destination["id"],
        }), 201, "create parcel")
        if abs(parcel["price"] - 603.0) > 1e-6:
            fail(f"Unexpected price {parcel['price']}")
        tracking = parcel["tracking_number"]
        success(f"Parcel {tracking} priced at {parcel['price']}")
        
        expect(client.post(f"{API}/parcels/{tracking}/send"), 200, "send parcel")
        expect(client.patch(f"{API}/parcels/{tracking}", json={"status": "DELIVERED"}), 200, "deliver parcel")
        expect(client.post(f"{API}/parcels/{tracking}/send"), 409, "send delivered parcel")
        
        history = expect(client.get(f"{API}/parcels/{tracking}/history"), 200, "history")
        actions = [entry["action_type"] for entry in history]
        if actions != ["RECEIVED", "SENT", "DELIVERED"]:
            fail(f"Unexpected audit trail {actions}")
        success("Lifecycle and audit trail verified")
        
        print_step("STATS", "Checking statistics for the smoke origin...")
        stats = expect(client.get(f"{API}/parcels/statistic", params={
            "origin_post_office_id": origin["id"]
        }), 200, "statistic")
        if stats["total_parcels"] != 1 or stats["parcels_count_by_status"]["DELIVERED"] != 1:
            fail(f"Unexpected statistics {stats}")
        success("Statistics verified")
    
    print("Deployment validation passed")


if __name__ == "__main__":
    main()
