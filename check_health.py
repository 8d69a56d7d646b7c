import os
import sys

import requests

BASE_URL = os.getenv("GLOSSARY_URL", "http://127.0.0.1:8000")


def check_endpoint(path):
    print(f"Testing: {path}")
    try:
        resp = requests.get(f"{BASE_URL}{path}", timeout=5)
        print(f"Status: {resp.status_code}")
        if resp.status_code == 200:
            print("Success!")
            return True
        else:
            print(f"Failed: {resp.text}")
            return False
    except requests.RequestException as e:
        print(f"Error: {e}")
        return False


def check_status():
    if not check_endpoint("/api/status"):
        return False
    data = requests.get(f"{BASE_URL}/api/status", timeout=5).json()
    glossary = data.get("glossary", {})
    print(f"Store: {glossary.get('store')} | records: {glossary.get('records')} | status: {data.get('status')}")
    return data.get("status") == "online"


if __name__ == "__main__":
    if not check_status():
        sys.exit(1)
    if not check_endpoint("/api/glossary"):
        sys.exit(1)
    if not check_endpoint("/api/glossary/letter/A"):
        sys.exit(1)
