from django.db import migrations, models


class Migration(migrations.Migration):
    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name='Draw',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('date', models.DateField(unique=True)),
                ('number_1', models.PositiveSmallIntegerField()),
                ('number_2', models.PositiveSmallIntegerField()),
                ('number_3', models.PositiveSmallIntegerField()),
                ('number_4', models.PositiveSmallIntegerField()),
                ('number_5', models.PositiveSmallIntegerField()),
                ('star_1', models.PositiveSmallIntegerField()),
                ('star_2', models.PositiveSmallIntegerField()),
            ],
            options={
                'db_table': 'results',
                'ordering': ['-date'],
            },
        ),
    ]
