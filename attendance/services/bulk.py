"""
Batch delete of attendance records with per-item results.
Each id is deleted independently; one failure never aborts the batch.
"""
import logging

from django.db import DatabaseError, transaction

from attendance.models import AttendanceRecord

logger = logging.getLogger(__name__)


def bulk_delete_attendance(ids):
    """
    Returns [{"id": int, "ok": bool, "detail": str}] in input order.
    Duplicate ids are processed once.
    """
    results = []
    seen = set()
    for raw_id in ids or []:
        try:
            record_id = int(raw_id)
        except (TypeError, ValueError):
            results.append({"id": raw_id, "ok": False, "detail": "ID điểm danh không hợp lệ"})
            continue
        if record_id in seen:
            continue
        seen.add(record_id)

        try:
            with transaction.atomic():
                deleted, _ = AttendanceRecord.objects.filter(id=record_id).delete()
        except DatabaseError as e:
            logger.error(f"[attendance_bulk_delete] id={record_id} failed: {e}", exc_info=True)
            results.append({"id": record_id, "ok": False, "detail": "Lỗi cơ sở dữ liệu khi xóa điểm danh"})
            continue

        if deleted:
            results.append({"id": record_id, "ok": True, "detail": "Xóa điểm danh thành công"})
        else:
            results.append({"id": record_id, "ok": False, "detail": "Không tìm thấy bản ghi điểm danh"})

    failed = sum(1 for r in results if not r["ok"])
    logger.info(f"[attendance_bulk_delete] requested={len(ids or [])}, deleted={len(results) - failed}, failed={failed}")
    return results
