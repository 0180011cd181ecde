import uuid
import django.core.validators
import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ('contents', '0001_initial'),
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name='AggregateRating',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('one_star_count', models.PositiveIntegerField(default=0)),
                ('two_stars_count', models.PositiveIntegerField(default=0)),
                ('three_stars_count', models.PositiveIntegerField(default=0)),
                ('four_stars_count', models.PositiveIntegerField(default=0)),
                ('five_stars_count', models.PositiveIntegerField(default=0)),
                ('total_stars_count', models.PositiveIntegerField(default=0)),
                ('average', models.FloatField(default=0.0)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('content', models.OneToOneField(on_delete=django.db.models.deletion.CASCADE, related_name='aggregate_rating', to='contents.content')),
            ],
            options={
                'db_table': 'aggregate_ratings',
                'indexes': [models.Index(fields=['average'], name='aggregate_average_idx')],
            },
        ),
        migrations.CreateModel(
            name='IndividualRating',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('stars', models.PositiveSmallIntegerField(validators=[django.core.validators.MinValueValidator(1), django.core.validators.MaxValueValidator(5)])),
                ('is_aggregated', models.BooleanField(default=False)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('content', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='ratings', to='contents.content')),
                ('user', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name='ratings', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'db_table': 'individual_ratings',
                'ordering': ['created_at'],
                'indexes': [models.Index(fields=['content', 'is_aggregated'], name='ratings_content_folded_idx')],
                'unique_together': {('content', 'user')},
            },
        ),
    ]
