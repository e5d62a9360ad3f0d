import unittest

from core.inflight import InFlightRegistry, ActionInProgress


class InFlightRegistryTests(unittest.TestCase):
    def setUp(self):
        self.reg = InFlightRegistry()

    def test_claim_blocks_same_action_and_key(self):
        self.reg.claim("submit", "2025-03-02")
        with self.assertRaises(ActionInProgress) as ctx:
            self.reg.claim("submit", "2025-03-02")
        self.assertIn("submit", str(ctx.exception))

    def test_other_keys_are_independent(self):
        self.reg.claim("submit", 1)
        self.reg.claim("submit", 2)
        self.reg.claim("lookup", 1)
        self.assertTrue(self.reg.in_flight("submit", 1))
        self.assertFalse(self.reg.in_flight("submit", 3))

    def test_release_frees_slot(self):
        token = self.reg.claim("submit", 1)
        self.reg.release(token)
        self.assertFalse(self.reg.in_flight("submit", 1))
        self.reg.claim("submit", 1)

    def test_release_of_old_token_keeps_new_owner(self):
        old = self.reg.claim("lookup", 1)
        self.reg.supersede("lookup", 1)
        new = self.reg.claim("lookup", 1)

        self.reg.release(old)
        self.assertTrue(self.reg.is_current(new))
        self.assertTrue(self.reg.in_flight("lookup", 1))

    def test_supersede_cancels_owner(self):
        token = self.reg.claim("lookup", 1)
        self.reg.supersede("lookup", 1)
        self.assertTrue(token.cancelled)
        self.assertFalse(self.reg.is_current(token))
        self.assertFalse(self.reg.in_flight("lookup", 1))

    def test_supersede_without_owner_is_noop(self):
        self.reg.supersede("lookup", 1)
        self.assertFalse(self.reg.in_flight("lookup", 1))


if __name__ == "__main__":
    unittest.main()
