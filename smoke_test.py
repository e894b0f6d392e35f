#!/usr/bin/env python3
"""
Front-desk API smoke test.

Walks every endpoint of a running server (``daphne frontdesk.asgi:application``
or ``manage.py runserver``) and reports failures. The server must be
freshly started with seed data, since the script mutates queues, stock
and alerts.

    python smoke_test.py [--base-url http://127.0.0.1:8000]
"""
import argparse
import sys
import time
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

import requests

BASE_URL = "http://127.0.0.1:8000"


@dataclass
class CheckResult:
    success: bool
    endpoint: str
    method: str
    status_code: int
    response_time: float
    error_message: str = ""
    description: str = ""


class SmokeTester:
    def __init__(self, base_url: str = BASE_URL):
        self.base_url = base_url.rstrip("/")
        self.session = requests.Session()
        self.results: List[CheckResult] = []
        self.errors: List[CheckResult] = []

    def check(self, method: str, endpoint: str, data: Optional[Dict] = None,
              expected_status: int = 200, description: str = "") -> Optional[Any]:
        """Call one endpoint; return the decoded body when the status matches."""
        url = f"{self.base_url}{endpoint}"
        start_time = time.time()
        try:
            response = self.session.request(method.upper(), url, json=data, timeout=10)
        except requests.RequestException as e:
            result = CheckResult(False, endpoint, method, 0, time.time() - start_time, str(e), description)
            print(f"❌ {method} {endpoint} - error: {e}")
            self.results.append(result)
            self.errors.append(result)
            return None

        response_time = time.time() - start_time
        if response.status_code == expected_status:
            result = CheckResult(True, endpoint, method, response.status_code, response_time, description=description)
            print(f"✅ {method} {endpoint} - {description} ({response_time:.2f}s)")
            self.results.append(result)
            return response.json() if response.content else None

        result = CheckResult(False, endpoint, method, response.status_code, response_time,
                             response.text[:200], description)
        print(f"❌ {method} {endpoint} - expected {expected_status}, got {response.status_code}")
        self.results.append(result)
        self.errors.append(result)
        return None

    def run(self) -> bool:
        print("🏥 Front desk API smoke test")
        print("=" * 50)

        self.check("GET", "/healthz", description="health")
        departments = self.check("GET", "/api/departments", description="departments") or []
        doctors = self.check("GET", "/api/doctors", description="doctors") or []
        self.check("GET", "/api/tokens", description="tokens")
        self.check("GET", "/api/tokens/active", description="active tokens")

        dept = next((d for d in departments if d.get("code") == "CONSULT"), None)
        if dept:
            self.check("POST", "/api/tokens", {"departmentId": dept["id"]}, 200, "issue token")
            self.check("GET", f"/api/tokens/department/{dept['id']}", description="department tokens")
        self.check("POST", "/api/tokens", {}, 400, "issue token without department")

        if doctors:
            self.check("POST", f"/api/doctors/{doctors[0]['id']}/next-token", description="doctor next token")
        self.check("POST", "/api/doctors/9999/next-token", None, 404, "unknown doctor")

        self.check("POST", "/api/tokens/ot/next", description="advance OT")
        self.check("POST", "/api/tokens/ot/reset", description="reset OT")

        medicines = self.check("GET", "/api/medicines", description="medicines") or []
        self.check("GET", "/api/medicines/low-stock", description="low stock")
        if medicines:
            self.check("POST", f"/api/medicines/{medicines[0]['id']}/update-stock", {"quantity": 10}, 200, "restock")
            self.check("POST", f"/api/medicines/{medicines[0]['id']}/update-stock", {"quantity": "ten"}, 400, "bad quantity")

        alert = self.check("POST", "/api/emergency-alerts", {"message": "Smoke test alert", "type": "drill"}, 200, "raise alert")
        self.check("GET", "/api/emergency-alerts", description="active alerts")
        if alert:
            self.check("POST", f"/api/emergency-alerts/{alert['id']}/dismiss", description="dismiss alert")
        self.check("POST", "/api/emergency-alerts", {"message": "  "}, 400, "empty alert")

        self.check("GET", "/api/activity-logs?limit=5", description="activity logs")

        self.report()
        return not self.errors

    def report(self) -> None:
        total = len(self.results)
        passed = total - len(self.errors)
        rate = (passed / total) * 100 if total else 0
        print("\n🎯 Summary:")
        print(f"  checks:  {total}")
        print(f"  passed:  {passed}")
        print(f"  failed:  {len(self.errors)}")
        print(f"  rate:    {rate:.1f}%")
        if self.errors:
            print("\n❌ Failures:")
            print("=" * 80)
            for i, error in enumerate(self.errors, 1):
                print(f"{i}. {error.method} {error.endpoint} ({error.description})")
                print(f"   status: {error.status_code}")
                print(f"   error:  {error.error_message}")
                print("-" * 80)


def main():
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[1])
    parser.add_argument("--base-url", default=BASE_URL)
    args = parser.parse_args()

    if SmokeTester(args.base_url).run():
        print("\n✅ All checks passed")
        sys.exit(0)
    print("\n⚠️  Some checks failed, see above")
    sys.exit(1)


if __name__ == "__main__":
    main()
