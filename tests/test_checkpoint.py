import unittest
from datetime import datetime, timedelta, timezone

from dexbot.checkpoint import current_checkpoint, next_checkpoint, validate_reset_hour


def utc(*args) -> datetime:
    return datetime(*args, tzinfo=timezone.utc)


class CurrentCheckpointTests(unittest.TestCase):
    def test_after_reset_hour_uses_today(self) -> None:
        self.assertEqual(
            current_checkpoint(utc(2024, 5, 10, 14, 0, 0), reset_hour=14),
            utc(2024, 5, 10, 14),
        )
        self.assertEqual(
            current_checkpoint(utc(2024, 5, 10, 23, 59, 59), reset_hour=14),
            utc(2024, 5, 10, 14),
        )

    def test_before_reset_hour_uses_yesterday(self) -> None:
        self.assertEqual(
            current_checkpoint(utc(2024, 5, 10, 13, 59, 59), reset_hour=14),
            utc(2024, 5, 9, 14),
        )
        self.assertEqual(
            current_checkpoint(utc(2024, 3, 1, 0, 30), reset_hour=14),
            utc(2024, 2, 29, 14),
        )

    def test_same_window_yields_identical_checkpoint(self) -> None:
        first = current_checkpoint(utc(2024, 5, 10, 15), reset_hour=14)
        second = current_checkpoint(utc(2024, 5, 11, 13, 59), reset_hour=14)
        self.assertEqual(first, second)

    def test_next_day_after_reset_is_strictly_later(self) -> None:
        first = current_checkpoint(utc(2024, 5, 10, 15), reset_hour=14)
        second = current_checkpoint(utc(2024, 5, 11, 14), reset_hour=14)
        self.assertGreater(second, first)
        self.assertEqual(second - first, timedelta(days=1))

    def test_monotonic_over_a_walk_through_time(self) -> None:
        moment = utc(2024, 12, 30, 0)
        previous = current_checkpoint(moment, reset_hour=14)
        for _ in range(24 * 4 * 3):
            moment += timedelta(minutes=15)
            checkpoint = current_checkpoint(moment, reset_hour=14)
            self.assertGreaterEqual(checkpoint, previous)
            self.assertLessEqual(checkpoint, moment)
            previous = checkpoint

    def test_naive_and_offset_datetimes_are_treated_as_utc(self) -> None:
        self.assertEqual(current_checkpoint(datetime(2024, 5, 10, 15), reset_hour=14), utc(2024, 5, 10, 14))
        eastern = timezone(timedelta(hours=-5))
        # 10:00 at -05:00 is 15:00 UTC
        self.assertEqual(
            current_checkpoint(datetime(2024, 5, 10, 10, tzinfo=eastern), reset_hour=14),
            utc(2024, 5, 10, 14),
        )

    def test_midnight_reset_hour(self) -> None:
        self.assertEqual(current_checkpoint(utc(2024, 5, 10, 0, 0, 1), reset_hour=0), utc(2024, 5, 10))

    def test_next_checkpoint(self) -> None:
        self.assertEqual(next_checkpoint(utc(2024, 5, 10, 9), reset_hour=14), utc(2024, 5, 10, 14))

    def test_reset_hour_validation(self) -> None:
        self.assertEqual(validate_reset_hour(23), 23)
        with self.assertRaises(ValueError):
            validate_reset_hour(24)
        with self.assertRaises(ValueError):
            validate_reset_hour(-1)


if __name__ == "__main__":
    unittest.main()
