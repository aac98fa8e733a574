# Generated migration for PaymentRecord model
import django.core.validators
import django.db.models.deletion
import django.utils.timezone
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ('students', '0001_initial'),
    ]

    operations = [
        migrations.CreateModel(
            name='PaymentRecord',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('amount', models.PositiveIntegerField(help_text='VND', validators=[django.core.validators.MinValueValidator(1)])),
                ('payment_date', models.DateField(default=django.utils.timezone.localdate)),
                ('valid_from', models.DateField()),
                ('valid_to', models.DateField()),
                ('status', models.CharField(choices=[('paid', 'Đã thanh toán'), ('pending', 'Chờ thanh toán'), ('overdue', 'Quá hạn'), ('partial_refund', 'Hoàn tiền một phần')], db_index=True, default='paid', max_length=20)),
                ('planned_sessions', models.PositiveIntegerField(blank=True, null=True)),
                ('actual_sessions', models.PositiveIntegerField(blank=True, null=True)),
                ('adjustment_reason', models.TextField(blank=True, null=True)),
                ('notes', models.TextField(blank=True, null=True)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('student', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='payments', to='students.student')),
            ],
            options={
                'verbose_name': 'Payment',
                'verbose_name_plural': 'Payments',
                'db_table': 'payments',
                'ordering': ['-valid_to', '-payment_date', '-id'],
                'indexes': [
                    models.Index(fields=['student', 'valid_to'], name='payments_student_valid_to_idx'),
                    models.Index(fields=['payment_date'], name='payments_payment_date_idx'),
                ],
            },
        ),
    ]
