# Generated migration for ClassOffering model
import django.core.validators
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name='ClassOffering',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('name', models.CharField(max_length=255)),
                ('fee', models.PositiveIntegerField(help_text='VND', validators=[django.core.validators.MinValueValidator(1)])),
                ('schedule', models.CharField(help_text='e.g. Thứ 2, Thứ 4 (18:00 - 20:00)', max_length=255)),
                ('location', models.CharField(max_length=255)),
                ('payment_cycle', models.CharField(choices=[('1-thang', '1 tháng'), ('8-buoi', '8 buổi'), ('10-buoi', '10 buổi'), ('theo-ngay', 'Theo ngày')], default='1-thang', max_length=20)),
                ('status', models.CharField(choices=[('active', 'Đang hoạt động'), ('closed', 'Đã đóng')], db_index=True, default='active', max_length=20)),
                ('closed_date', models.DateField(blank=True, null=True)),
                ('closed_reason', models.TextField(blank=True, null=True)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
            ],
            options={
                'verbose_name': 'Class',
                'verbose_name_plural': 'Classes',
                'db_table': 'classes',
                'ordering': ['name'],
            },
        ),
    ]
