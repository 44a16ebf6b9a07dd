from django.db import models


class Draw(models.Model):
    date = models.DateField(unique=True)
    number_1 = models.PositiveSmallIntegerField()
    number_2 = models.PositiveSmallIntegerField()
    number_3 = models.PositiveSmallIntegerField()
    number_4 = models.PositiveSmallIntegerField()
    number_5 = models.PositiveSmallIntegerField()
    star_1 = models.PositiveSmallIntegerField()
    star_2 = models.PositiveSmallIntegerField()

    class Meta:
        db_table = 'results'
        ordering = ['-date']

    @property
    def main_numbers(self) -> list[int]:
        return [self.number_1, self.number_2, self.number_3, self.number_4, self.number_5]

    @property
    def star_numbers(self) -> list[int]:
        return [self.star_1, self.star_2]

    def __str__(self) -> str:
        numbers = ' '.join(str(n) for n in self.main_numbers)
        stars = ' '.join(str(n) for n in self.star_numbers)
        return f"{self.date}: {numbers} + {stars}"


class IngestionLog(models.Model):
    PERSISTED = 'persisted'
    SKIP_SAME = 'skip_same'
    SKIP_STALE = 'skip_stale'
    FAILED = 'failed'
    OUTCOME_CHOICES = [
        (PERSISTED, 'Persisted'),
        (SKIP_SAME, 'Skipped (same date)'),
        (SKIP_STALE, 'Skipped (stale date)'),
        (FAILED, 'Failed'),
    ]

    run_at = models.DateTimeField(auto_now_add=True)
    source = models.PositiveSmallIntegerField(db_index=True)
    outcome = models.CharField(max_length=16, choices=OUTCOME_CHOICES)
    stage = models.CharField(max_length=16, blank=True)
    draw_date = models.DateField(null=True, blank=True)
    message = models.TextField(blank=True)

    class Meta:
        ordering = ['-run_at']

    def __str__(self) -> str:
        return f"{self.run_at:%Y-%m-%d %H:%M} source {self.source} {self.outcome}"
