
"""
Script to add sample data to a running SchoolDesk server via its REST API.
Make sure the server is running before executing this script.

Usage:
    python add_data.py
"""

import os
import sys
from datetime import date, timedelta

import requests


def _console_supports_utf8() -> bool:
    enc = getattr(sys.stdout, "encoding", None)
    return enc is not None and "utf" in enc.lower()


_OK_CHAR = "✓" if _console_supports_utf8() else "[OK]"
_FAIL_CHAR = "✗" if _console_supports_utf8() else "[FAIL]"

DEFAULT_BASE_URL = "http://127.0.0.1:8000"
BASE_URL = os.environ.get("SCHOOLDESK_BASE_URL", DEFAULT_BASE_URL)


def _detect_base_url() -> str:
    """Determine a reachable BASE_URL.

    Priority: environment variable `SCHOOLDESK_BASE_URL`, then common local ports.
    If nothing responds, fall back to http://127.0.0.1:8000.
    """
    env = os.environ.get("SCHOOLDESK_BASE_URL")
    if env:
        return env

    candidates = [
        "http://127.0.0.1:8000",
        "http://127.0.0.1:8888",
        "http://localhost:8000",
        "http://localhost:8888",
    ]

    for c in candidates:
        try:
            resp = requests.get(f"{c}/health", timeout=0.5)
            if resp.status_code == 200:
                return c
        except requests.exceptions.RequestException:
            continue

    return candidates[0]


def check_server():
    """Check if the server is running."""
    try:
        response = requests.get(f"{BASE_URL}/health", timeout=2)
        if response.status_code == 200:
            print(f"{_OK_CHAR} Server is running")
            return True
    except requests.exceptions.RequestException:
        pass
    print(f"{_FAIL_CHAR} Server is not running!")
    print("\nPlease start the server first:")
    print("  schooldesk --storage-type sqlite --storage-path schooldesk.db --rest-port 8000")
    return False


def login(username, password):
    """Log in so that created items carry the user's name."""
    url = f"{BASE_URL}/auth/login"
    try:
        response = requests.post(url, json={"username": username, "password": password})
        if response.status_code == 200:
            user = response.json()["user"]
            print(f"{_OK_CHAR} Logged in as {user['displayName']} ({user['role']})")
            return user
        print(f"{_FAIL_CHAR} Login failed for {username}")
        return None
    except requests.exceptions.RequestException as e:
        print(f"{_FAIL_CHAR} Error logging in: {e}")
        return None


def create_announcement(title, body, publish_at=None, expires_at=None):
    """Create a new announcement."""
    url = f"{BASE_URL}/announcements"
    data = {
        "title": title,
        "body": body,
        "publish_at": publish_at,
        "expires_at": expires_at,
    }
    try:
        response = requests.post(url, json=data)
        if response.status_code == 201:
            print(f"{_OK_CHAR} Created announcement: {title}")
            return response.json()
        else:
            print(f"{_FAIL_CHAR} Failed to create announcement: {response.text}")
            return None
    except requests.exceptions.RequestException as e:
        print(f"{_FAIL_CHAR} Error creating announcement: {e}")
        return None


def create_schedule_item(title, day, kind, class_name=None, subject=None):
    """Create a new schedule entry."""
    url = f"{BASE_URL}/schedule"
    data = {
        "title": title,
        "date": day.isoformat() if isinstance(day, date) else day,
        "kind": kind,
        "class_name": class_name,
        "subject": subject,
    }
    try:
        response = requests.post(url, json=data)
        if response.status_code == 201:
            print(f"{_OK_CHAR} Created {kind}: {title} on {data['date']}")
            return response.json()
        else:
            print(f"{_FAIL_CHAR} Failed to create schedule entry: {response.text}")
            return None
    except requests.exceptions.RequestException as e:
        print(f"{_FAIL_CHAR} Error creating schedule entry: {e}")
        return None


def mark_present(day, class_name, student_id):
    """Toggle a student's attendance."""
    url = f"{BASE_URL}/attendance/toggle"
    data = {"date": day.isoformat(), "class_name": class_name, "student_id": student_id}
    try:
        response = requests.post(url, json=data)
        if response.status_code == 200:
            return response.json()
        print(f"{_FAIL_CHAR} Failed to toggle attendance: {response.text}")
        return None
    except requests.exceptions.RequestException as e:
        print(f"{_FAIL_CHAR} Error toggling attendance: {e}")
        return None


def print_attendance_summary(day):
    """Print present/total per class."""
    url = f"{BASE_URL}/attendance/{day.isoformat()}"
    try:
        response = requests.get(url)
        if response.status_code == 200:
            rows = response.json()
            print(f"\n{'='*60}")
            print(f"Attendance {day.isoformat()}")
            print(f"{'='*60}")
            for row in rows:
                print(f"  {row['className']:8} | {row['present']}/{row['total']} present")
            return rows
        print(f"{_FAIL_CHAR} Failed to get attendance: {response.text}")
        return []
    except requests.exceptions.RequestException as e:
        print(f"{_FAIL_CHAR} Error getting attendance: {e}")
        return []


def main():
    """Main execution."""
    global BASE_URL
    BASE_URL = _detect_base_url()

    print("="*60)
    print("SchoolDesk - Data Addition Script")
    print("="*60)
    print()

    if not check_server():
        sys.exit(1)

    today = date.today()

    print("\nAdding announcements...")
    login("admin", "admin123")
    create_announcement("Selamat Datang", "Selamat datang di semester baru!")
    create_announcement("Pembagian Rapor", "Rapor dibagikan hari Sabtu.",
                        publish_at=(today + timedelta(days=1)).isoformat() + "T07:00:00")

    print("\nAdding schedule...")
    login("guru1", "guru123")
    create_schedule_item("PR Bahasa Inggris", today + timedelta(days=3), "assignment", "XII-A", "Bahasa Inggris")
    create_schedule_item("Ulangan Matematika", today + timedelta(days=5), "exam", "XII-B", "Matematika")
    create_schedule_item("Rapat Orang Tua", today + timedelta(days=10), "meeting")

    print("\nMarking attendance...")
    for student_id in ("3", "4"):
        mark_present(today, "XII-A", student_id)
    mark_present(today, "XII-B", "5")

    print_attendance_summary(today)

    print("\n" + "="*60)
    print(f"{_OK_CHAR} Sample data added successfully!")
    print("="*60)
    print(f"\nView API docs: {BASE_URL}/docs")


if __name__ == "__main__":
    try:
        main()
    except KeyboardInterrupt:
        print(f"\n\n{_FAIL_CHAR} Interrupted by user")
        sys.exit(1)
