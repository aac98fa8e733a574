"""
Class services - schedule matching, daily attendance completeness, listing order.
"""
import re
import unicodedata

from attendance.models import AttendanceRecord
from attendance.services.aggregation import is_class_attended
from students.models import Student

_TRAILING_NUMBER = re.compile(r"(\d+)\D*$")


def get_active_students_for_classes(classes):
    return Student.objects.filter(class_offering__in=classes, status=Student.STATUS_ACTIVE)


def get_active_students_for_class(class_offering):
    """Canonical queryset: active students of a class."""
    return get_active_students_for_classes([class_offering])


def attended_class_ids(classes, day):
    """
    Ids of classes whose active students all have a record dated `day`.
    Classes with no active students are included.
    """
    classes = list(classes)
    active = {}
    for student_id, class_id in get_active_students_for_classes(classes).values_list('id', 'class_offering_id'):
        active.setdefault(class_id, set()).add(student_id)

    student_ids = set().union(*active.values())
    records = list(AttendanceRecord.objects.filter(date=day, student_id__in=student_ids))
    return {
        c.id for c in classes
        if is_class_attended(active.get(c.id, set()), records, day)
    }


def name_sort_key(name):
    """
    Numeric suffix first ("Lớp 2" < "Lớp 10"), then an accent-insensitive
    casefolded name. Names without a number sort after numbered ones.
    """
    name = name or ""
    match = _TRAILING_NUMBER.search(name)
    folded = unicodedata.normalize("NFKD", name.replace("đ", "d").replace("Đ", "D"))
    folded = "".join(ch for ch in folded if not unicodedata.combining(ch)).casefold()
    if match:
        return (0, int(match.group(1)), folded)
    return (1, 0, folded)


def sort_classes_for_day(classes, day, attended_ids):
    """
    Listing order:
    1. open, scheduled on `day` and not yet attended
    2. scheduled on `day` and attended
    3. everything else
    Ties broken by name_sort_key.
    """
    def band(c):
        if not c.is_closed and c.is_scheduled_on(day):
            return 1 if c.id in attended_ids else 0
        return 2

    return sorted(classes, key=lambda c: (band(c), name_sort_key(c.name)))
