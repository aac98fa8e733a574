"""
Attendance aggregation tests.
- same-day duplicates are summed
- present + makeup count as attended sessions
- a class is attended when every active student has a record for the day
"""
from datetime import date

from django.test import SimpleTestCase

from attendance.models import AttendanceRecord
from attendance.services.aggregation import (
    attended_sessions,
    group_by_date,
    is_class_attended,
    summarize,
)

DAY = date(2024, 5, 20)


def _record(student_id, day, status=AttendanceRecord.STATUS_PRESENT):
    return AttendanceRecord(student_id=student_id, date=day, status=status)


class SummarizeTests(SimpleTestCase):
    def test_counts_each_status(self):
        records = [
            _record(1, DAY),
            _record(1, date(2024, 5, 22)),
            _record(1, date(2024, 5, 24), AttendanceRecord.STATUS_ABSENT),
            _record(1, date(2024, 5, 27), AttendanceRecord.STATUS_TEACHER_ABSENT),
            _record(1, date(2024, 5, 29), AttendanceRecord.STATUS_MAKEUP),
        ]
        self.assertEqual(
            summarize(records),
            {"present": 2, "absent": 1, "teacherAbsent": 1, "makeup": 1, "total": 5},
        )

    def test_duplicates_are_summed(self):
        summary = summarize([_record(1, DAY), _record(1, DAY)])
        self.assertEqual(summary["present"], 2)
        self.assertEqual(summary["total"], 2)

    def test_unknown_status_ignored(self):
        summary = summarize([_record(1, DAY, "late"), _record(1, DAY)])
        self.assertEqual(summary["total"], 1)

    def test_empty(self):
        self.assertEqual(summarize([]), {"present": 0, "absent": 0, "teacherAbsent": 0, "makeup": 0, "total": 0})
        self.assertEqual(summarize(None)["total"], 0)


class GroupingTests(SimpleTestCase):
    def test_group_by_date_newest_first(self):
        first = _record(1, date(2024, 5, 1))
        second = _record(2, date(2024, 5, 3))
        third = _record(3, date(2024, 5, 3), AttendanceRecord.STATUS_ABSENT)
        grouped = group_by_date([first, second, third])
        self.assertEqual(list(grouped.keys()), [date(2024, 5, 3), date(2024, 5, 1)])
        self.assertEqual(grouped[date(2024, 5, 3)], [second, third])

    def test_attended_sessions(self):
        records = [
            _record(1, DAY),
            _record(1, DAY, AttendanceRecord.STATUS_MAKEUP),
            _record(1, DAY, AttendanceRecord.STATUS_ABSENT),
            _record(1, DAY, AttendanceRecord.STATUS_TEACHER_ABSENT),
        ]
        self.assertEqual(attended_sessions(records), 2)


class ClassAttendedTests(SimpleTestCase):
    def test_all_students_marked(self):
        records = [_record(sid, DAY) for sid in (1, 2, 3)]
        self.assertTrue(is_class_attended({1, 2, 3}, records, DAY))

    def test_no_active_students_is_attended(self):
        self.assertTrue(is_class_attended(set(), [], DAY))

    def test_missing_student(self):
        records = [_record(1, DAY), _record(2, DAY)]
        self.assertFalse(is_class_attended({1, 2, 3}, records, DAY))

    def test_any_status_counts_as_marked(self):
        records = [_record(1, DAY, AttendanceRecord.STATUS_ABSENT), _record(2, DAY, AttendanceRecord.STATUS_TEACHER_ABSENT)]
        self.assertTrue(is_class_attended([1, 2], records, DAY))

    def test_other_days_ignored(self):
        records = [_record(1, DAY), _record(2, date(2024, 5, 19))]
        self.assertFalse(is_class_attended({1, 2}, records, DAY))
