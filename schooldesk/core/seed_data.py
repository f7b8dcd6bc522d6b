"""
Fixed demo data: one account per role and the class roster.
"""

from typing import List

from .entities import Account, RosterStudent
from .enums import Role


def demo_accounts() -> List[Account]:
    return [
        Account(id="1", username="admin", password="admin123", role=Role.ADMIN,
                display_name="Administrator", email="admin@sekolah.id"),
        Account(id="2", username="guru1", password="guru123", role=Role.TEACHER,
                display_name="Bapak Ahmad", email="ahmad@sekolah.id"),
        Account(id="3", username="siswa1", password="siswa123", role=Role.STUDENT,
                display_name="Rudi Santoso", email="rudi@sekolah.id"),
    ]


def demo_roster() -> List[RosterStudent]:
    # Student ids line up with account ids where a student can log in.
    return [
        RosterStudent(id="3", name="Rudi Santoso", class_name="XII-A"),
        RosterStudent(id="4", name="Siti Nurhaliza", class_name="XII-A"),
        RosterStudent(id="5", name="Budi Pratama", class_name="XII-B"),
        RosterStudent(id="6", name="Ayu Lestari", class_name="XII-B"),
        RosterStudent(id="7", name="Doni Setiawan", class_name="XII-A"),
    ]
