import unittest
from datetime import date

from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from core.database import Base
import models_bootstrap  # noqa: F401

from assignment.models import Slot
from duty_roster.models import DutyRosterEntry
from staff.models import StaffMember, StaffCategory
from availability import service
from availability.exclusions import exclusions_for


class AvailabilityServiceTests(unittest.TestCase):
    def setUp(self):
        self.engine = create_engine("sqlite:///:memory:", future=True)
        Base.metadata.create_all(self.engine)
        Session = sessionmaker(bind=self.engine, future=True)
        self.db = Session()

        self.db.add_all([
            StaffMember(full_name="An", category=StaffCategory.career_military),
            StaffMember(full_name="Bình", category=StaffCategory.contract_labor),
            StaffMember(full_name="Chi", category=StaffCategory.career_military),
            StaffMember(full_name="Dũng", category=StaffCategory.contract_labor),
            StaffMember(full_name="Em", category=StaffCategory.career_military),
            StaffMember(full_name="Giang", category=StaffCategory.officer),
            StaffMember(full_name="Hà", category=StaffCategory.other),
            StaffMember(full_name="Khoa", category=StaffCategory.contract_labor, is_active=False),
        ])
        # on call on 2025-03-31, so unavailable on 2025-04-01
        self.db.add(DutyRosterEntry(duty_date=date(2025, 3, 31), nurse="Bình", doctor="Giang"))
        self.db.commit()

    def tearDown(self):
        self.db.close()
        self.engine.dispose()

    def _pool(self, response, slot):
        return next(p for p in response.pools if p.slot == slot)

    def test_candidates_are_active_assignable_categories(self):
        names = [s.full_name for s in service.get_candidate_staff(self.db)]
        self.assertEqual(names, ["An", "Bình", "Chi", "Dũng", "Em"])

    def test_resolve_slot_keeps_directory_order(self):
        pool = service.resolve_slot(Slot.room_1, ["Chi", "An", "Bình"], {"Bình"})
        self.assertEqual(pool.options, ["Chi", "An"])
        self.assertEqual(pool.status, "available")

    def test_resolve_slot_offers_shared_name_once(self):
        pool = service.resolve_slot(Slot.room_1, ["Zoe", "An", "Zoe", "Ánh"], set())
        self.assertEqual(pool.options, ["Zoe", "An", "Ánh"])

    def test_resolve_slot_empty_is_distinct_state(self):
        pool = service.resolve_slot(Slot.imaging, ["An"], {"An"})
        self.assertEqual(pool.options, [])
        self.assertEqual(pool.status, "no_eligible_staff")

    def test_compute_pools_excludes_prior_day_team_across_month(self):
        resp = service.compute_pools(self.db, assignment_date=date(2025, 4, 1), form_state={})
        self.assertTrue(resp.roster_found)
        self.assertEqual(resp.prior_day, date(2025, 3, 31))
        self.assertEqual(resp.excluded_duty_team, ["Bình", "Giang"])
        for pool in resp.pools:
            self.assertNotIn("Bình", pool.options)
        self.assertEqual(self._pool(resp, "room_1").options, ["An", "Chi", "Dũng", "Em"])

    def test_compute_pools_without_roster_still_usable(self):
        resp = service.compute_pools(self.db, assignment_date=date(2025, 4, 10), form_state={})
        self.assertFalse(resp.roster_found)
        self.assertIn("2025-04-09", resp.message)
        self.assertEqual(self._pool(resp, "room_1").options, ["An", "Bình", "Chi", "Dũng", "Em"])

    def test_chain_selections_hidden_from_later_slots(self):
        form = {"room_1": "An", "room_2": "Chi", "room_3": "Dũng"}
        resp = service.compute_pools(self.db, assignment_date=date(2025, 4, 1), form_state=form)
        self.assertEqual(self._pool(resp, "room_1").options, ["An", "Chi", "Dũng", "Em"])
        self.assertEqual(self._pool(resp, "room_2").options, ["Chi", "Dũng", "Em"])
        self.assertEqual(self._pool(resp, "room_4").options, ["Em"])
        self.assertEqual(self._pool(resp, "outside_run").options, ["Em"])

    def test_compute_pools_on_last_representable_day(self):
        self.db.add(DutyRosterEntry(duty_date=date(9999, 12, 30), nurse="An"))
        self.db.commit()
        resp = service.compute_pools(self.db, assignment_date=date(9999, 12, 31), form_state={})
        self.assertTrue(resp.roster_found)
        self.assertNotIn("An", self._pool(resp, "room_1").options)

    def test_chain_exhausted_gives_no_eligible_staff(self):
        form = {"room_1": "An, Chi", "room_2": "Dũng", "room_3": "Em"}
        resp = service.compute_pools(self.db, assignment_date=date(2025, 4, 1), form_state=form)
        self.assertEqual(self._pool(resp, "room_4").status, "no_eligible_staff")
        self.assertEqual(self._pool(resp, "outside_run").status, "no_eligible_staff")
        # imaging is outside the chain
        self.assertEqual(self._pool(resp, "imaging").options, ["An", "Chi", "Dũng", "Em"])

    def test_data_entry_and_imaging_rules(self):
        form = {"imaging": "An, Chi", "outside_run": "Chi, Dũng"}
        resp = service.compute_pools(self.db, assignment_date=date(2025, 4, 10), form_state=form)
        self.assertEqual(self._pool(resp, "data_entry").options, ["Bình", "Em"])
        for slot in ("room_1", "room_2", "room_3", "room_4"):
            self.assertIn("An", self._pool(resp, slot).options)

    def test_pool_equals_candidates_minus_exclusions(self):
        form = {"room_1": "An", "imaging": "Em", "outside_run": "Dũng"}
        entry = self.db.get(DutyRosterEntry, 1)
        candidates = [s.full_name for s in service.get_candidate_staff(self.db)]
        for pool in service.pools_for_form(candidates, form, entry):
            excluded = exclusions_for(Slot(pool.slot), form, entry)
            expected = [name for name in candidates if name not in excluded]
            self.assertEqual(pool.options, expected)


if __name__ == "__main__":
    unittest.main()
