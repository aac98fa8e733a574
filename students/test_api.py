"""
Student API tests: CRUD with paymentStatus, lifecycle endpoints, public parent lookup.
"""
from datetime import date, timedelta

from django.contrib.auth import get_user_model
from django.test import TestCase
from django.utils import timezone
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import AccessToken

from attendance.models import AttendanceRecord
from classes.models import ClassOffering
from payments.models import PaymentRecord
from students.models import Student

User = get_user_model()


class StudentApiTests(TestCase):
    def setUp(self):
        self.client = APIClient()
        self.user = User.objects.create_user(username="admin", password="pass123")
        self.client.credentials(HTTP_AUTHORIZATION=f"Bearer {AccessToken.for_user(self.user)}")
        self.class_offering = ClassOffering.objects.create(
            name="Lớp 1", fee=480000, schedule="Thứ 2, Thứ 4", location="P1", payment_cycle="8-buoi",
        )
        self.today = timezone.localdate()

    def _student(self, code="HS1", **kwargs):
        data = {"name": "An", "code": code, "phone": "0901234567", "class_offering": self.class_offering}
        data.update(kwargs)
        return Student.objects.create(**data)

    def test_create_student(self):
        response = self.client.post("/api/students/", {
            "name": "Hà",
            "code": "HS10",
            "phone": "0912345678",
            "classId": self.class_offering.id,
            "registrationDate": "2024-02-01",
        }, format="json")

        self.assertEqual(response.status_code, 201)
        self.assertEqual(response.data["classId"], self.class_offering.id)
        self.assertEqual(response.data["className"], "Lớp 1")
        self.assertEqual(response.data["status"], "active")
        self.assertIsNone(response.data["paymentCycle"])
        self.assertEqual(response.data["effectivePaymentCycle"], "8-buoi")
        self.assertEqual(response.data["paymentStatus"], "pending")

    def test_create_validation(self):
        response = self.client.post("/api/students/", {
            "name": "Hà", "code": "HS10", "phone": "0912", "paymentCycle": "hang-tuan",
        }, format="json")
        self.assertEqual(response.status_code, 400)
        self.assertIn("phone", response.data["errors"])
        self.assertIn("paymentCycle", response.data["errors"])

    def test_duplicate_code_rejected(self):
        self._student(code="HS1")
        response = self.client.post("/api/students/", {"name": "B", "code": "HS1", "phone": "0912345678"}, format="json")
        self.assertEqual(response.status_code, 400)
        self.assertIn("code", response.data["errors"])

    def test_closed_class_rejected(self):
        self.class_offering.status = ClassOffering.STATUS_CLOSED
        self.class_offering.save()
        response = self.client.post("/api/students/", {
            "name": "Hà", "code": "HS10", "phone": "0912345678", "classId": self.class_offering.id,
        }, format="json")
        self.assertEqual(response.status_code, 400)
        self.assertIn("classId", response.data["errors"])

    def test_list_with_filters_and_payment_status(self):
        paid = self._student(code="HS1")
        PaymentRecord.objects.create(
            student=paid, amount=3840000, valid_from=self.today, valid_to=self.today + timedelta(days=27),
        )
        overdue = self._student(code="HS2", name="Bảo")
        PaymentRecord.objects.create(
            student=overdue, amount=3840000,
            valid_from=self.today - timedelta(days=40), valid_to=self.today - timedelta(days=13),
        )
        other_class = ClassOffering.objects.create(name="Lớp 2", fee=100000, schedule="Thứ 3", location="P2")
        self._student(code="HS3", name="Cúc", class_offering=other_class, status=Student.STATUS_INACTIVE)

        response = self.client.get("/api/students/")
        self.assertEqual(response.status_code, 200)
        statuses = {s["code"]: s["paymentStatus"] for s in response.data}
        self.assertEqual(statuses, {"HS1": "paid", "HS2": "overdue", "HS3": "pending"})

        response = self.client.get(f"/api/students/?classId={self.class_offering.id}")
        self.assertEqual(sorted(s["code"] for s in response.data), ["HS1", "HS2"])

        response = self.client.get("/api/students/?status=inactive")
        self.assertEqual([s["code"] for s in response.data], ["HS3"])

        self.assertEqual(self.client.get("/api/students/?classId=abc").status_code, 400)

    def test_update_and_delete(self):
        student = self._student()
        response = self.client.patch(f"/api/students/{student.id}", {"paymentCycle": "theo-ngay"}, format="json")
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.data["effectivePaymentCycle"], "theo-ngay")

        AttendanceRecord.objects.create(student=student, date=self.today, status="present")
        response = self.client.delete(f"/api/students/{student.id}")
        self.assertEqual(response.status_code, 204)
        self.assertFalse(AttendanceRecord.objects.exists())

    def test_suspend_restart(self):
        student = self._student()
        response = self.client.post(
            f"/api/students/{student.id}/suspend", {"date": "2024-03-01", "reason": "Ốm"}, format="json",
        )
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.data["status"], "suspended")
        self.assertEqual(response.data["suspendDate"], "2024-03-01")

        response = self.client.patch(f"/api/students/{student.id}", {"status": "active"}, format="json")
        self.assertEqual(response.status_code, 400)

        response = self.client.post(f"/api/students/{student.id}/restart", {"date": "2024-03-10"}, format="json")
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.data["status"], "active")
        self.assertEqual(len(response.data["suspendHistory"]), 1)

        response = self.client.post(f"/api/students/{student.id}/restart", {}, format="json")
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.data["code"], "invalid_transition")

    def test_withdraw(self):
        student = self._student()
        payment = PaymentRecord.objects.create(
            student=student, amount=480000, planned_sessions=8,
            valid_from=date(2024, 1, 1), valid_to=date(2024, 1, 28),
        )
        response = self.client.post(
            f"/api/students/{student.id}/withdraw", {"actualSessions": 4, "reason": "Chuyển nhà"}, format="json",
        )

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.data["student"]["status"], "inactive")
        self.assertEqual(response.data["payment"]["id"], payment.id)
        self.assertEqual(response.data["payment"]["amount"], 240000)
        self.assertEqual(response.data["payment"]["status"], "partial_refund")
        self.assertEqual(response.data["adjustment"]["originalAmount"], 480000)
        self.assertTrue(response.data["adjustment"]["adjusted"])

    def test_payment_status(self):
        student = self._student(registration_date=self.today - timedelta(days=30))
        response = self.client.get(f"/api/students/{student.id}/payment-status")

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.data["status"], "pending")
        self.assertEqual(response.data["nextDueFrom"], self.today.isoformat())
        self.assertEqual(response.data["nextDueTo"], (self.today + timedelta(days=27)).isoformat())
        self.assertEqual(response.data["feeMode"], "PER_SESSION")
        self.assertEqual(response.data["standing"], {
            "status": "overdue", "dueAmount": 3840000, "unpaidAmount": 3840000, "overdueAmount": 3840000,
        })

    def test_not_found(self):
        self.assertEqual(self.client.get("/api/students/9999").status_code, 404)
        self.assertEqual(self.client.post("/api/students/9999/suspend", {}, format="json").status_code, 404)


class ParentLookupTests(TestCase):
    def setUp(self):
        self.class_offering = ClassOffering.objects.create(
            name="Lớp 1", fee=480000, schedule="Thứ 2, Thứ 4", location="P1",
        )
        self.student = Student.objects.create(
            name="An", code="HS123", phone="0901234567", class_offering=self.class_offering,
        )
        today = timezone.localdate()
        PaymentRecord.objects.create(
            student=self.student, amount=1920000, valid_from=today, valid_to=today + timedelta(days=20),
        )
        AttendanceRecord.objects.create(student=self.student, date=today, status="present")
        AttendanceRecord.objects.create(student=self.student, date=today - timedelta(days=2), status="absent")

    def test_public_lookup_by_code(self):
        response = APIClient().get("/api/parent/students/HS123")

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.data["student"]["name"], "An")
        self.assertNotIn("phone", response.data["student"])
        self.assertEqual(response.data["class"]["name"], "Lớp 1")
        self.assertEqual(len(response.data["payments"]), 1)
        self.assertEqual(len(response.data["attendance"]), 2)
        self.assertEqual(response.data["attendanceSummary"]["present"], 1)
        self.assertEqual(response.data["attendanceSummary"]["total"], 2)
        self.assertEqual(response.data["paymentStatus"]["status"], "paid")

    def test_lookup_ignores_bad_token(self):
        client = APIClient()
        client.credentials(HTTP_AUTHORIZATION="Bearer not-a-token")
        self.assertEqual(client.get("/api/parent/students/HS123").status_code, 200)

    def test_unknown_code(self):
        self.assertEqual(APIClient().get("/api/parent/students/NOPE").status_code, 404)
