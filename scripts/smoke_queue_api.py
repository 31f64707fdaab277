#!/usr/bin/env python3
"""Smoke test for the queue API against a running server."""

import sys

import httpx

sys.path.insert(0, ".")

from app.infrastructure.auth.tokens import create_access_token


BASE_URL = "http://127.0.0.1:8001/api"

STUDENT = {"Authorization": f"Bearer {create_access_token('smoke-student', 'student')}"}
STAFF = {"Authorization": f"Bearer {create_access_token('smoke-staff', 'staff')}"}


def join(name: str, service: str = "IT Support") -> dict | None:
    payload = {"studentName": name, "serviceType": service, "contactNumber": "555-0100"}
    try:
        response = httpx.post(f"{BASE_URL}/queue", json=payload, headers=STUDENT, timeout=10.0)
        response.raise_for_status()
    except httpx.HTTPStatusError as e:
        print(f"❌ HTTP Error: {e.response.status_code}")
        print(f"Response: {e.response.text}")
        return None
    entry = response.json()["queueEntry"]
    print(f"✅ {name} joined: position={entry['position']} wait={entry['estimatedWaitTime']}min")
    return entry


def show_wait(entry: dict) -> None:
    response = httpx.get(f"{BASE_URL}/queue/{entry['id']}/waittime", headers=STUDENT, timeout=10.0)
    print(f"   {entry['studentName']}: {response.json()}")


def main():
    print("\n🚀 Queue smoke test\n")

    try:
        httpx.get(BASE_URL.rsplit("/api", 1)[0] + "/health", timeout=5.0)
    except Exception:
        print("❌ Server is not running!")
        print("   Please start it with: uvicorn app.main:app --reload --port 8001")
        sys.exit(1)

    alice = join("Alice")
    bob = join("Bob")
    carol = join("Carol")
    if not (alice and bob and carol):
        sys.exit(1)

    print("\nAlice leaves")
    httpx.delete(f"{BASE_URL}/queue/{alice['id']}", headers=STUDENT, timeout=10.0)
    show_wait(bob)
    show_wait(carol)

    print("\nStaff completes Bob")
    httpx.put(f"{BASE_URL}/queue/{bob['id']}", json={"status": "Completed"}, headers=STAFF, timeout=10.0)
    show_wait(carol)

    roster = httpx.get(f"{BASE_URL}/queue", headers=STAFF, timeout=10.0).json()
    print(f"\nRoster has {len(roster)} entries")
    print("\n✅ Smoke test complete\n")


if __name__ == "__main__":
    main()
