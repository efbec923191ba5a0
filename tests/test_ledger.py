import asyncio
import unittest
from datetime import datetime, timedelta, timezone

from dexbot.ledger import AssignmentLedger
from dexbot.models import CatalogEntry

EPOCH = datetime(2024, 5, 9, 14, tzinfo=timezone.utc)


def entry(species_id: int, name: str) -> CatalogEntry:
    return CatalogEntry(species_id=species_id, name=name, genus="", variants=("text",))


class SequenceChooser:
    def __init__(self, *entries: CatalogEntry):
        self._entries = list(entries)
        self.calls = 0

    def __call__(self) -> CatalogEntry:
        self.calls += 1
        return self._entries.pop(0)


class AssignmentLedgerTests(unittest.IsolatedAsyncioTestCase):
    async def test_first_claim_records_and_repeat_returns_same_name(self) -> None:
        ledger = AssignmentLedger(EPOCH)
        chooser = SequenceChooser(entry(25, "Pikachu"), entry(1, "Bulbasaur"))

        first = await ledger.claim(42, EPOCH, chooser)
        second = await ledger.claim(42, EPOCH, chooser)

        self.assertTrue(first.fresh)
        self.assertEqual(first.entry.species_id, 25)
        self.assertFalse(second.fresh)
        self.assertIsNone(second.entry)
        self.assertEqual(second.species_name, "Pikachu")
        self.assertEqual(chooser.calls, 1)
        self.assertEqual(len(ledger), 1)

    async def test_users_are_independent(self) -> None:
        ledger = AssignmentLedger(EPOCH)
        chooser = SequenceChooser(entry(25, "Pikachu"), entry(1, "Bulbasaur"))
        a = await ledger.claim(1, EPOCH, chooser)
        b = await ledger.claim(2, EPOCH, chooser)
        self.assertTrue(a.fresh and b.fresh)
        self.assertEqual((a.species_name, b.species_name), ("Pikachu", "Bulbasaur"))

    async def test_newer_checkpoint_clears_everyone(self) -> None:
        ledger = AssignmentLedger(EPOCH)
        chooser = SequenceChooser(entry(25, "Pikachu"), entry(4, "Charmander"), entry(7, "Squirtle"))
        await ledger.claim(1, EPOCH, chooser)
        await ledger.claim(2, EPOCH, chooser)

        tomorrow = EPOCH + timedelta(days=1)
        claim = await ledger.claim(1, tomorrow, chooser)

        self.assertTrue(claim.fresh)
        self.assertEqual(claim.species_name, "Squirtle")
        self.assertEqual(ledger.epoch, tomorrow)
        # user 2 was purged along with the old epoch
        self.assertEqual(len(ledger), 1)

    async def test_same_or_older_checkpoint_never_clears(self) -> None:
        ledger = AssignmentLedger(EPOCH)
        chooser = SequenceChooser(entry(25, "Pikachu"))
        await ledger.claim(1, EPOCH, chooser)
        for checkpoint in (EPOCH, EPOCH, EPOCH - timedelta(days=1)):
            claim = await ledger.claim(1, checkpoint, chooser)
            self.assertFalse(claim.fresh)
            self.assertEqual(claim.species_name, "Pikachu")
        self.assertEqual(ledger.epoch, EPOCH)
        self.assertEqual(chooser.calls, 1)

    async def test_concurrent_first_claims_assign_once(self) -> None:
        ledger = AssignmentLedger(EPOCH)
        chooser = SequenceChooser(*(entry(i, f"Species{i}") for i in range(1, 11)))

        claims = await asyncio.gather(*(ledger.claim(99, EPOCH, chooser) for _ in range(10)))

        fresh = [claim for claim in claims if claim.fresh]
        self.assertEqual(len(fresh), 1)
        self.assertEqual({claim.species_name for claim in claims}, {fresh[0].species_name})
        self.assertEqual(chooser.calls, 1)


if __name__ == "__main__":
    unittest.main()
