"""
Smoke checks for the Atlas Map Visibility API.
Run the API server first: python -m atlas_access.api.app
Then run this: python scripts/smoke_api.py
"""

import json
import os

import requests

BASE_URL = os.getenv("ATLAS_API_URL", "http://localhost:8000")


def banner(title):
    print("\n" + "=" * 50)
    print(f"CHECK: {title}")
    print("=" * 50)


def show(response):
    print(f"Status Code: {response.status_code}")
    print(f"Response: {json.dumps(response.json(), indent=2)}")


def check_health():
    banner("Health Check")
    response = requests.get(f"{BASE_URL}/health")
    show(response)
    return response.status_code == 200


def check_login_invalid():
    banner("Login with Invalid Credentials")
    response = requests.post(f"{BASE_URL}/api/auth/login", json={"api_key": "invalid-key-123"})
    show(response)
    return response.status_code == 401


def login(api_key):
    banner("Login")
    response = requests.post(f"{BASE_URL}/api/auth/login", json={"api_key": api_key})
    show(response)
    if response.status_code == 200:
        return response.json().get("token")
    return None


def check_visibility(org_id, token=None, label="anonymous"):
    banner(f"Map Visibility ({label})")
    headers = {"Authorization": f"Bearer {token}"} if token else {}
    response = requests.get(f"{BASE_URL}/api/orgs/{org_id}/maps/visibility", headers=headers)
    print(f"Status Code: {response.status_code}")
    data = response.json()
    if response.status_code == 200:
        print(f"Accessible: {[m['name'] for m in data['accessible']]}")
        print(f"Login required: {data['login_required']}")
        print(f"Viewer: {data['viewer']}")
    else:
        print(f"Response: {json.dumps(data, indent=2)}")
    return response.status_code == 200


def store_platform_token(token, platform_token):
    banner("Store ArcGIS Token")
    response = requests.put(
        f"{BASE_URL}/api/platform/token",
        headers={"Authorization": f"Bearer {token}"},
        json={"access_token": platform_token},
    )
    show(response)
    return response.status_code == 200


def logout(token):
    banner("Logout")
    response = requests.post(f"{BASE_URL}/api/auth/logout", headers={"Authorization": f"Bearer {token}"})
    show(response)
    return response.status_code == 200


def main():
    print("=" * 50)
    print("Atlas API Smoke Checks")
    print("=" * 50)
    print(f"Base URL: {BASE_URL}")
    print("Make sure the API server is running!")
    print()

    org_id = input("Organisation id: ").strip()
    api_key = input("API key (blank to skip signed-in checks): ").strip()
    platform_token = input("ArcGIS token (blank to skip): ").strip()
    if not org_id:
        print("ERROR: organisation id is required")
        return

    results = {}
    try:
        results["Health Check"] = check_health()
        results["Login Invalid"] = check_login_invalid()
        results["Visibility Anonymous"] = check_visibility(org_id)

        if api_key:
            token = login(api_key)
            results["Login Valid"] = bool(token)
            if token:
                results["Visibility Signed In"] = check_visibility(org_id, token, "signed in")
                if platform_token:
                    results["Store Token"] = store_platform_token(token, platform_token)
                    results["Visibility Delegated"] = check_visibility(org_id, token, "signed in + ArcGIS")
                results["Logout"] = logout(token)
    except requests.RequestException as e:
        print(f"\n\nERROR: {e}")

    print("\n" + "=" * 50)
    print("SUMMARY")
    print("=" * 50)
    for name, ok in results.items():
        print(f"{'✓ PASS' if ok else '✗ FAIL'}: {name}")
    print(f"\nTotal: {sum(1 for v in results.values() if v)}/{len(results)} checks passed")
    print("=" * 50)


if __name__ == "__main__":
    main()
