#!/usr/bin/env python3
"""
Book, conflict and cancel flow script.

DO NOT ADD BUSINESS LOGIC HERE.
This script only orchestrates API calls.
All rules live in the backend.

Tokens are issued by the authentication service; pass a customer token.

Usage:
    python scripts/flow_book_and_cancel.py --token <JWT> --listing-id L1 --check-in 2026-11-01

Flow:
    1. Create booking for [check-in, check-in + 2 nights)
    2. Try an overlapping booking one night later (expect 409)
    3. Cancel the first booking
    4. Retry the overlapping booking (expect 201)
"""

import argparse
import json
import sys
from datetime import date, timedelta

import httpx

BASE_URL = "http://localhost:8000"


def api_request(token: str, method: str, endpoint: str, data: dict | None = None) -> dict:
    """Make authenticated API request."""
    headers = {"Authorization": f"Bearer {token}"}
    url = f"{BASE_URL}{endpoint}"

    if method == "POST":
        response = httpx.post(url, headers=headers, json=data or {}, timeout=10.0, follow_redirects=True)
    elif method == "PUT":
        response = httpx.put(url, headers=headers, json=data or {}, timeout=10.0, follow_redirects=True)
    else:
        raise ValueError(f"Unknown method: {method}")

    return {"status": response.status_code, "data": response.json() if response.text else {}}


def print_step(step: int, title: str):
    """Print step header."""
    print(f"\n{'='*60}")
    print(f"STEP {step}: {title}")
    print("="*60)


def print_result(result: dict, fields: list[str] | None = None):
    """Print result, optionally filtering fields."""
    if result["status"] >= 400:
        print(f"ERROR ({result['status']}): {json.dumps(result['data'], indent=2)}")
        return False

    print(f"Status: {result['status']}")
    if fields:
        filtered = {k: result["data"].get(k) for k in fields if k in result["data"]}
        print(json.dumps(filtered, indent=2))
    else:
        print(json.dumps(result["data"], indent=2))
    return True


def booking_payload(args: argparse.Namespace, check_in: date, nights: int) -> dict:
    return {
        "listing_type": args.listing_type,
        "listing_id": args.listing_id,
        "check_in": check_in.isoformat(),
        "check_out": (check_in + timedelta(days=nights)).isoformat(),
        "guests": {"adults": args.adults},
        "guest_details": {"name": args.guest_name, "email": args.guest_email, "phone": args.guest_phone},
        "pricing": {"base_price": "200.00", "total": "200.00"},
    }


def main():
    parser = argparse.ArgumentParser(description="Book, conflict and cancel flow")
    parser.add_argument("--token", required=True, help="Customer bearer token")
    parser.add_argument("--listing-id", required=True, help="Listing ID")
    parser.add_argument("--listing-type", default="homestay", choices=["homestay", "guide"])
    parser.add_argument("--check-in", required=True, type=date.fromisoformat, help="Check-in date (YYYY-MM-DD)")
    parser.add_argument("--adults", type=int, default=2, help="Number of adults")
    parser.add_argument("--guest-name", default="Test Guest")
    parser.add_argument("--guest-email", default="guest@example.com")
    parser.add_argument("--guest-phone", default="+10000000000")
    parser.add_argument("--cancel-reason", default="Change in travel plans", help="Cancellation reason")
    args = parser.parse_args()

    fields = ["id", "booking_number", "check_in", "check_out", "nights", "status"]

    # Step 1: Create booking
    print_step(1, "Create booking")
    first = api_request(args.token, "POST", "/api/v1/bookings/", booking_payload(args, args.check_in, 2))
    if not print_result(first, fields):
        sys.exit(1)
    booking_id = first["data"]["id"]

    # Step 2: Overlapping booking
    print_step(2, "Overlapping booking (expect 409)")
    overlap = booking_payload(args, args.check_in + timedelta(days=1), 2)
    second = api_request(args.token, "POST", "/api/v1/bookings/", overlap)
    print_result(second)
    if second["status"] != 409:
        print("Expected the overlapping booking to be rejected")
        sys.exit(1)

    # Step 3: Cancel
    print_step(3, "Cancel first booking")
    cancel = api_request(args.token, "PUT", f"/api/v1/bookings/{booking_id}/cancel", {"reason": args.cancel_reason})
    if not print_result(cancel, ["id", "status", "refund_amount", "refund_status", "cancelled_at"]):
        sys.exit(1)

    # Step 4: Retry
    print_step(4, "Retry overlapping booking")
    retry = api_request(args.token, "POST", "/api/v1/bookings/", overlap)
    if not print_result(retry, fields):
        sys.exit(1)

    print("\n" + "="*60)
    print("BOOK & CANCEL FLOW COMPLETE")
    print("="*60)


if __name__ == "__main__":
    main()
