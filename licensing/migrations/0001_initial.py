from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="Setting",
            fields=[
                ("key", models.CharField(max_length=255, primary_key=True, serialize=False)),
                ("value", models.TextField(blank=True, default="")),
                (
                    "load_on_startup",
                    models.BooleanField(
                        default=False,
                        help_text="Whether the value is loaded into memory at startup",
                    ),
                ),
                ("updated_at", models.DateTimeField(auto_now=True)),
            ],
            options={
                "db_table": "settings",
                "ordering": ["key"],
            },
        ),
    ]
