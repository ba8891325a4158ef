#!/usr/bin/env python3
"""
Validation script for the short link service.
Exercises a live running service end to end: create, redirect, count,
delete, and the error paths.
"""

import sys
import time
import argparse
from datetime import datetime
from typing import Optional

import requests


class ServiceValidator:
    """Validates short link service functionality."""

    def __init__(self, base_url: str = "http://localhost:5000", session: Optional[requests.Session] = None):
        self.base_url = base_url.rstrip("/")
        self.session = session or requests.Session()
        self.test_results = []

    def print_header(self, text: str):
        """Print a formatted header."""
        print(f"\n{'='*60}")
        print(f"  {text}")
        print(f"{'='*60}\n")

    def print_test(self, name: str, passed: bool, details: str = ""):
        """Print test result."""
        status = "✅ PASS" if passed else "❌ FAIL"
        self.test_results.append((name, passed))
        print(f"{status} - {name}")
        if details:
            print(f"       {details}")

    def test_ping(self) -> bool:
        """Test liveness endpoint."""
        try:
            response = self.session.get(f"{self.base_url}/ping", timeout=5)
        except requests.RequestException as e:
            self.print_test("Ping", False, f"Error: {e}")
            return False

        ok = response.status_code == 200
        self.print_test("Ping", ok, f"Status: {response.status_code}")
        return ok

    def test_create_short_url(self, target_url: str) -> Optional[str]:
        """Test creating a short URL; returns the key."""
        try:
            response = self.session.post(
                f"{self.base_url}/manage/",
                json={"url": target_url},
                timeout=5
            )
        except requests.RequestException as e:
            self.print_test("Create Short URL", False, f"Error: {e}")
            return None

        if response.status_code == 201:
            short_url = response.json().get("short_url", "")
            key = short_url.rsplit("/g/", 1)[-1] if "/g/" in short_url else None
            if key:
                self.print_test("Create Short URL", True, f"Short URL: {short_url}")
                return key

        self.print_test("Create Short URL", False, f"Status: {response.status_code}")
        return None

    def test_redirect(self, key: str, target_url: str) -> bool:
        """Test redirect to the stored URL."""
        try:
            response = self.session.get(
                f"{self.base_url}/g/{key}",
                allow_redirects=False,
                timeout=5
            )
        except requests.RequestException as e:
            self.print_test("URL Redirect", False, f"Error: {e}")
            return False

        location = response.headers.get("Location", "")
        ok = response.status_code == 302 and location == target_url
        self.print_test("URL Redirect", ok, f"Status: {response.status_code}, Location: {location[:50]}")
        return ok

    def test_redirect_counted(self, key: str) -> bool:
        """Test that the redirect shows up in the listing."""
        try:
            response = self.session.get(f"{self.base_url}/manage/", timeout=5)
        except requests.RequestException as e:
            self.print_test("Redirect Count", False, f"Error: {e}")
            return False

        if response.status_code != 200:
            self.print_test("Redirect Count", False, f"Status: {response.status_code}")
            return False

        counts = {item["key"]: item["redirect_count"] for item in response.json().get("urls", [])}
        ok = counts.get(key, 0) >= 1
        self.print_test("Redirect Count", ok, f"Count: {counts.get(key, 'missing')}")
        return ok

    def test_delete(self, key: str) -> bool:
        """Test deleting the short link and that it is gone afterwards."""
        try:
            response = self.session.delete(f"{self.base_url}/manage/{key}", timeout=5)
            after = self.session.get(f"{self.base_url}/g/{key}", allow_redirects=False, timeout=5)
        except requests.RequestException as e:
            self.print_test("Delete Short URL", False, f"Error: {e}")
            return False

        ok = response.status_code == 200 and after.status_code == 404
        self.print_test(
            "Delete Short URL",
            ok,
            f"Delete: {response.status_code}, Redirect after delete: {after.status_code} (expected 404)"
        )
        return ok

    def test_status(self, name: str, method: str, path: str, expected: int, **kwargs) -> bool:
        """Check that a request answers with the expected status."""
        try:
            response = self.session.request(
                method, f"{self.base_url}{path}", allow_redirects=False, timeout=5, **kwargs
            )
        except requests.RequestException as e:
            self.print_test(name, False, f"Error: {e}")
            return False

        ok = response.status_code == expected
        self.print_test(name, ok, f"Status: {response.status_code} (expected {expected})")
        return ok

    def run_all_tests(self) -> bool:
        """Run all validation tests."""
        self.print_header("shortlink Service Validation")
        print(f"Testing service at: {self.base_url}")
        print(f"Timestamp: {datetime.now().isoformat()}\n")

        if not self.test_ping():
            print("\n❌ Ping failed. Service may not be running.")
            print(f"   Make sure the service is accessible at {self.base_url}")
            return False

        print()

        target_url = f"https://example.com/validate/{int(time.time())}"
        key = self.test_create_short_url(target_url)
        if key:
            self.test_redirect(key, target_url)
            self.test_redirect_counted(key)
            self.test_delete(key)

        print()

        self.test_status("Invalid URL Rejection", "POST", "/manage/", 400, json={"url": "not-a-url"})
        self.test_status("Invalid Scheme Rejection", "POST", "/manage/", 400, json={"url": "ftp://x.com"})
        self.test_status("Bad Key Format", "GET", "/g/short", 400)
        self.test_status("Unknown Key", "GET", "/g/AAAAAAAAAAAAAAAA", 404)
        self.test_status("Idempotent Delete", "DELETE", "/manage/AAAAAAAAAAAAAAAA", 200)

        self.print_summary()

        return all(passed for _, passed in self.test_results)

    def print_summary(self):
        """Print test summary."""
        total = len(self.test_results)
        passed = sum(1 for _, p in self.test_results if p)
        failed = total - passed

        self.print_header("Test Summary")
        print(f"Total Tests:  {total}")
        print(f"✅ Passed:     {passed}")
        print(f"❌ Failed:     {failed}")
        if total:
            print(f"Success Rate: {(passed/total*100):.1f}%")

        if failed > 0:
            print("\n⚠️  Failed tests:")
            for name, passed in self.test_results:
                if not passed:
                    print(f"   - {name}")

        print()


def main():
    """Main entry point."""
    parser = argparse.ArgumentParser(
        description="Validate shortlink service functionality"
    )
    parser.add_argument(
        "--url",
        default="http://localhost:5000",
        help="Base URL of the service (default: http://localhost:5000)"
    )

    args = parser.parse_args()

    validator = ServiceValidator(args.url)

    try:
        success = validator.run_all_tests()
        sys.exit(0 if success else 1)
    except KeyboardInterrupt:
        print("\n\n⚠️  Validation interrupted by user")
        sys.exit(2)


if __name__ == "__main__":
    main()
