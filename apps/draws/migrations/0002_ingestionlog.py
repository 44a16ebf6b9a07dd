from django.db import migrations, models


class Migration(migrations.Migration):
    dependencies = [
        ('draws', '0001_initial'),
    ]

    operations = [
        migrations.CreateModel(
            name='IngestionLog',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('run_at', models.DateTimeField(auto_now_add=True)),
                ('source', models.PositiveSmallIntegerField(db_index=True)),
                ('outcome', models.CharField(choices=[('persisted', 'Persisted'), ('skip_same', 'Skipped (same date)'), ('skip_stale', 'Skipped (stale date)'), ('failed', 'Failed')], max_length=16)),
                ('stage', models.CharField(blank=True, max_length=16)),
                ('draw_date', models.DateField(blank=True, null=True)),
                ('message', models.TextField(blank=True)),
            ],
            options={
                'ordering': ['-run_at'],
            },
        ),
    ]
