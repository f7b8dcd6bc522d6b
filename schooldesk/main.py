"""
Main entry point for the SchoolDesk state layer.
"""

import asyncio
import logging
from datetime import date, timedelta
from typing import Optional

from .core.entities import utc_now
from .core.enums import ScheduleKind
from .core.seed_data import demo_roster
from .persistence import KeyValueStoreFactory
from .services import (
    CredentialStore, SessionManager, AnnouncementStore,
    ScheduleStore, AttendanceStore, ClassRoster
)


class SchoolDeskPlatform:
    """Builds the backing store and every store on top of it.

    Construct once at process start and hand the instance to whatever
    presents the data. ``init()`` seeds the credential store and restores
    the previous session.
    """

    def __init__(self, config: Optional[dict] = None):
        self._config = config or {}
        self._initialized = False

        storage_type = self._config.get('storage_type', 'sqlite')
        storage_config = self._config.get('storage_config', {})
        self.backend = KeyValueStoreFactory.create_store(storage_type, **storage_config)

        self.credentials = CredentialStore(self.backend)
        self.session = SessionManager(
            self.backend,
            self.credentials,
            login_delay=self._config.get('login_delay', SessionManager.DEFAULT_LOGIN_DELAY),
        )
        self.announcements = AnnouncementStore(self.backend)
        self.schedule = ScheduleStore(self.backend)
        self.attendance = AttendanceStore(self.backend)
        self.roster = ClassRoster(demo_roster())

    @property
    def initialized(self) -> bool:
        return self._initialized

    def init(self) -> "SchoolDeskPlatform":
        """Seed credentials if absent and restore any persisted session."""
        self.credentials.ensure_seeded()
        self.session.restore()
        self._initialized = True
        return self

    def create_sample_data(self):
        """Create sample announcements and schedule entries."""
        print("Creating sample data...")

        today = date.today()
        self.announcements.create(
            "Ujian Tengah Semester",
            "Ujian tengah semester dimulai minggu depan. Siapkan diri kalian.",
            created_by="Administrator",
        )
        self.announcements.create(
            "Libur Nasional",
            "Sekolah libur pada hari Senin.",
            created_by="Administrator",
            expires_at=utc_now() + timedelta(days=3),
        )
        self.schedule.create("Tugas Matematika Bab 3", today + timedelta(days=2),
                             ScheduleKind.ASSIGNMENT, created_by="Bapak Ahmad",
                             class_name="XII-A", subject="Matematika")
        self.schedule.create("Ujian IPA", today + timedelta(days=7),
                             ScheduleKind.EXAM, created_by="Bapak Ahmad",
                             class_name="XII-B", subject="IPA")
        self.schedule.create("Rapat Guru", today + timedelta(days=1),
                             ScheduleKind.MEETING, created_by="Administrator")

        print("✓ Sample data created")

    def run_demo(self):
        """Run a demonstration of the state layer."""
        print("Running SchoolDesk demonstration...")

        self.init()
        self.create_sample_data()

        print("\n=== Login ===")
        ok = asyncio.run(self.session.login("GURU1", "guru123"))
        print(f"Login as guru1: {ok} -> {self.session.current_user}")

        print("\n=== Announcements (visible now) ===")
        for announcement in self.announcements.visible():
            print(f"- {announcement.title} ({announcement.created_by})")

        print("\n=== Upcoming schedule ===")
        for item in self.schedule.upcoming(limit=5):
            print(f"- {item.date.isoformat()} [{item.kind.value}] {item.title}")

        print("\n=== Attendance ===")
        today = date.today()
        for student in self.roster.students("XII-A"):
            self.attendance.toggle(today, "XII-A", student.id)
        for row in self.attendance.summary(today, self.roster):
            print(f"- {row.class_name}: {row.present}/{row.total} present")

        self.session.logout()
        print("\n✓ Demo completed")


def main():
    """Main entry point."""
    import argparse

    parser = argparse.ArgumentParser(description="SchoolDesk local state service")
    parser.add_argument("--host", type=str, default="127.0.0.1", help="REST server host")
    parser.add_argument("--rest-port", type=int, default=8000, help="REST server port")
    parser.add_argument("--storage-type", type=str, help="Backing store: sqlite, file or memory")
    parser.add_argument("--storage-path", type=str, help="Database file (sqlite) or directory (file)")
    parser.add_argument("--demo", action="store_true", help="Run demo mode")
    parser.add_argument("--config", type=str, help="Configuration file path")

    args = parser.parse_args()

    # Load configuration
    config = {}
    if args.config:
        import json
        with open(args.config, 'r') as f:
            config = json.load(f)

    if args.storage_type:
        config['storage_type'] = args.storage_type
    storage_type = config.get('storage_type', 'sqlite')
    if args.storage_path and storage_type != 'memory':
        path_option = 'base_path' if storage_type == 'file' else 'database_path'
        config['storage_config'] = {path_option: args.storage_path}

    logging.basicConfig(level=config.get('log_level', 'INFO'),
                        format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    platform = SchoolDeskPlatform(config)

    if args.demo:
        platform.run_demo()
        return

    import uvicorn
    from .api.rest_api import SchoolDeskRestAPI

    platform.init()
    rest_api = SchoolDeskRestAPI(platform)
    print(f"✓ REST server starting on http://{args.host}:{args.rest_port}")
    print(f"  - API Docs: http://{args.host}:{args.rest_port}/docs")
    uvicorn.run(rest_api.app, host=args.host, port=args.rest_port, log_level="info")


if __name__ == "__main__":
    main()
