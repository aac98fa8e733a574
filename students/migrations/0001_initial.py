# Generated migration for Student model
import django.db.models.deletion
import django.utils.timezone
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ('classes', '0001_initial'),
    ]

    operations = [
        migrations.CreateModel(
            name='Student',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('name', models.CharField(max_length=255)),
                ('code', models.CharField(max_length=50, unique=True)),
                ('phone', models.CharField(max_length=20)),
                ('registration_date', models.DateField(default=django.utils.timezone.localdate)),
                ('payment_cycle', models.CharField(blank=True, choices=[('1-thang', '1 tháng'), ('8-buoi', '8 buổi'), ('10-buoi', '10 buổi'), ('theo-ngay', 'Theo ngày')], max_length=20, null=True)),
                ('status', models.CharField(choices=[('active', 'Đang học'), ('inactive', 'Nghỉ học'), ('suspended', 'Tạm nghỉ')], db_index=True, default='active', max_length=20)),
                ('suspend_date', models.DateField(blank=True, null=True)),
                ('suspend_reason', models.TextField(blank=True, null=True)),
                ('restart_date', models.DateField(blank=True, null=True)),
                ('last_active_date', models.DateField(blank=True, null=True)),
                ('suspend_history', models.JSONField(blank=True, default=list)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('class_offering', models.ForeignKey(blank=True, db_column='class_id', null=True, on_delete=django.db.models.deletion.PROTECT, related_name='students', to='classes.classoffering')),
            ],
            options={
                'verbose_name': 'Student',
                'verbose_name_plural': 'Students',
                'db_table': 'students',
                'ordering': ['name'],
                'indexes': [models.Index(fields=['class_offering', 'status'], name='students_class_status_idx')],
            },
        ),
    ]
