"""
Settings store, dashboard and service endpoint tests.
"""
from datetime import timedelta

from django.contrib.auth import get_user_model
from django.test import TestCase
from django.utils import timezone
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import AccessToken

from attendance.models import AttendanceRecord
from classes.models import ClassOffering
from core.models import Setting
from core.services import (
    FEE_METHOD_PER_CYCLE,
    FEE_METHOD_PER_SESSION,
    FEE_METHOD_SETTING_KEY,
    get_fee_calculation_mode,
    set_fee_calculation_mode,
)
from payments.models import PaymentRecord
from students.models import Student

User = get_user_model()


class FeeModeTests(TestCase):
    def test_default_when_missing(self):
        self.assertEqual(get_fee_calculation_mode(), FEE_METHOD_PER_SESSION)

    def test_unknown_value_falls_back(self):
        Setting.objects.create(key=FEE_METHOD_SETTING_KEY, value="PER_MONTH")
        self.assertEqual(get_fee_calculation_mode(), FEE_METHOD_PER_SESSION)

    def test_set_and_read(self):
        set_fee_calculation_mode(FEE_METHOD_PER_CYCLE)
        self.assertEqual(get_fee_calculation_mode(), FEE_METHOD_PER_CYCLE)
        set_fee_calculation_mode(FEE_METHOD_PER_SESSION)
        self.assertEqual(Setting.objects.filter(key=FEE_METHOD_SETTING_KEY).count(), 1)

    def test_invalid_mode_rejected(self):
        with self.assertRaises(ValueError):
            set_fee_calculation_mode("PER_MONTH")


class SettingsApiTests(TestCase):
    def setUp(self):
        self.client = APIClient()
        self.user = User.objects.create_user(username="admin", password="pass123", email="admin@center.vn")
        self.client.credentials(HTTP_AUTHORIZATION=f"Bearer {AccessToken.for_user(self.user)}")

    def test_put_fee_method(self):
        response = self.client.put(f"/api/settings/{FEE_METHOD_SETTING_KEY}", {"value": "PER_CYCLE"}, format="json")
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.data["value"], "PER_CYCLE")
        self.assertEqual(get_fee_calculation_mode(), FEE_METHOD_PER_CYCLE)

        response = self.client.get(f"/api/settings/{FEE_METHOD_SETTING_KEY}")
        self.assertEqual(response.data["value"], "PER_CYCLE")

    def test_put_invalid_fee_method(self):
        response = self.client.put(f"/api/settings/{FEE_METHOD_SETTING_KEY}", {"value": "WEEKLY"}, format="json")
        self.assertEqual(response.status_code, 400)
        self.assertFalse(Setting.objects.exists())

    def test_create_and_list(self):
        response = self.client.post("/api/settings/", {"key": "center_name", "value": "Trung tâm A"}, format="json")
        self.assertEqual(response.status_code, 201)
        response = self.client.post("/api/settings/", {"key": "center_name", "value": "B"}, format="json")
        self.assertEqual(response.status_code, 400)
        self.assertEqual([s["key"] for s in self.client.get("/api/settings/").data], ["center_name"])

    def test_missing_setting(self):
        self.assertEqual(self.client.get("/api/settings/nothing").status_code, 404)

    def test_me(self):
        response = self.client.get("/api/auth/me")
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.data["username"], "admin")


class DashboardTests(TestCase):
    def setUp(self):
        self.client = APIClient()
        self.user = User.objects.create_user(username="admin", password="pass123")
        self.client.credentials(HTTP_AUTHORIZATION=f"Bearer {AccessToken.for_user(self.user)}")

    def test_dashboard(self):
        today = timezone.localdate()
        class_offering = ClassOffering.objects.create(name="Lớp 1", fee=100000, schedule="Thứ 2", location="P1")
        active = Student.objects.create(name="An", code="HS1", phone="0901234567", class_offering=class_offering)
        Student.objects.create(name="Bình", code="HS2", phone="0901234567", class_offering=class_offering,
                               status=Student.STATUS_INACTIVE)
        PaymentRecord.objects.create(student=active, amount=400000, payment_date=today,
                                     valid_from=today, valid_to=today + timedelta(days=30))
        PaymentRecord.objects.create(student=active, amount=150000, payment_date=today,
                                     status=PaymentRecord.STATUS_PARTIAL_REFUND,
                                     valid_from=today, valid_to=today + timedelta(days=30))
        PaymentRecord.objects.create(student=active, amount=400000, status=PaymentRecord.STATUS_PENDING,
                                     valid_from=today, valid_to=today + timedelta(days=30))
        AttendanceRecord.objects.create(student=active, date=today, status="present")
        AttendanceRecord.objects.create(student=active, date=today, status="teacher_absent")

        response = self.client.get("/api/reports/dashboard")

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.data["students"], {"total": 2, "active": 1, "suspended": 0, "inactive": 1})
        self.assertEqual(response.data["finances"]["paidAmount"], 400000)
        self.assertEqual(response.data["finances"]["pendingAmount"], 400000)
        self.assertEqual(response.data["finances"]["partialRefundAmount"], 150000)
        self.assertEqual(response.data["finances"]["totalAmount"], 950000)
        self.assertEqual(response.data["attendance"]["present"], 1)
        self.assertEqual(response.data["attendance"]["teacherAbsent"], 1)
        self.assertEqual(response.data["studentsPerClass"], [{"id": class_offering.id, "name": "Lớp 1", "count": 2, "active": 1}])
        self.assertEqual(len(response.data["monthlyRevenue"]), 6)
        self.assertEqual(response.data["monthlyRevenue"][-1], {"month": f"{today.month}/{today.year}", "amount": 550000})


class HealthTests(TestCase):
    def test_health_is_public(self):
        response = self.client.get("/api/health/")
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["status"], "ok")

    def test_token_obtain_and_protected_endpoint(self):
        User.objects.create_user(username="staff", password="pass123")
        client = APIClient()
        self.assertEqual(client.get("/api/classes/").status_code, 401)

        response = client.post("/api/auth/token/", {"username": "staff", "password": "pass123"}, format="json")
        self.assertEqual(response.status_code, 200)
        client.credentials(HTTP_AUTHORIZATION=f"Bearer {response.data['access']}")
        self.assertEqual(client.get("/api/classes/").status_code, 200)
