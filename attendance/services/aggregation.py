"""
Attendance aggregation for reports and listings.
Records are counted as given: same-day duplicates are summed, never collapsed.
"""
from collections import OrderedDict

from attendance.models import AttendanceRecord

_SUMMARY_KEYS = {
    AttendanceRecord.STATUS_PRESENT: "present",
    AttendanceRecord.STATUS_ABSENT: "absent",
    AttendanceRecord.STATUS_TEACHER_ABSENT: "teacherAbsent",
    AttendanceRecord.STATUS_MAKEUP: "makeup",
}

# Statuses that consume a paid session.
ATTENDED_STATUSES = (AttendanceRecord.STATUS_PRESENT, AttendanceRecord.STATUS_MAKEUP)


def summarize(records):
    """{present, absent, teacherAbsent, makeup, total}; unknown statuses are ignored."""
    summary = {"present": 0, "absent": 0, "teacherAbsent": 0, "makeup": 0}
    for record in records or []:
        key = _SUMMARY_KEYS.get(record.status)
        if key:
            summary[key] += 1
    summary["total"] = sum(summary.values())
    return summary


def group_by_date(records):
    """OrderedDict date -> [records], newest date first; record order kept inside a day."""
    grouped = {}
    for record in records or []:
        grouped.setdefault(record.date, []).append(record)
    return OrderedDict((day, grouped[day]) for day in sorted(grouped, reverse=True))


def attended_sessions(records):
    return sum(1 for record in records or [] if record.status in ATTENDED_STATUSES)


def is_class_attended(active_student_ids, records, day):
    """
    True when every active student has at least one record (any status) dated `day`.
    A class without active students is considered attended.
    """
    required = set(active_student_ids)
    if not required:
        return True
    marked = {record.student_id for record in records or [] if record.date == day}
    return required <= marked
