import unittest

from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from core.database import Base
import models_bootstrap  # noqa: F401

from staff.models import StaffMember, StaffCategory
from staff import service
from staff.schema import StaffCreate, StaffUpdate


class StaffServiceTests(unittest.TestCase):
    def setUp(self):
        self.engine = create_engine("sqlite:///:memory:", future=True)
        Base.metadata.create_all(self.engine)
        Session = sessionmaker(bind=self.engine, future=True)
        self.db = Session()

        self.db.add_all([
            StaffMember(full_name="Trần Thị B", category=StaffCategory.contract_labor),
            StaffMember(full_name="Nguyễn Văn A", category=StaffCategory.career_military),
            StaffMember(full_name="Phạm Văn D", category=StaffCategory.officer),
            StaffMember(full_name="Lê Văn Cũ", category=StaffCategory.career_military, is_active=False),
        ])
        self.db.commit()

    def tearDown(self):
        self.db.close()
        self.engine.dispose()

    def test_get_staff_ordered_by_name(self):
        names = [s.full_name for s in service.get_staff(self.db)]
        self.assertEqual(names, sorted(names))
        self.assertEqual(len(names), 4)

    def test_fetch_active_staff_skips_inactive(self):
        names = {s.full_name for s in service.fetch_active_staff(self.db)}
        self.assertNotIn("Lê Văn Cũ", names)
        self.assertEqual(len(names), 3)

    def test_get_staff_filter_by_category(self):
        rows = service.get_staff(self.db, category=StaffCategory.officer)
        self.assertEqual([r.full_name for r in rows], ["Phạm Văn D"])

    def test_create_staff_member(self):
        created = service.create_staff_member(
            self.db, StaffCreate(full_name="  Hoàng Thị E ", category=StaffCategory.contract_labor)
        )
        self.assertIsInstance(created.id, int)
        self.assertEqual(created.full_name, "Hoàng Thị E")
        self.assertTrue(created.is_active)

    def test_create_staff_blank_name_rejected(self):
        with self.assertRaises(ValueError):
            StaffCreate(full_name="   ")

    def test_update_staff_member(self):
        row = service.get_staff(self.db, category=StaffCategory.officer)[0]
        updated = service.update_staff_member(self.db, row.id, StaffUpdate(is_active=False))
        self.assertFalse(updated.is_active)
        self.assertEqual(updated.full_name, "Phạm Văn D")

    def test_update_missing_returns_none(self):
        self.assertIsNone(service.update_staff_member(self.db, 99999, StaffUpdate(is_active=False)))

    def test_delete_staff_member(self):
        row = service.get_staff(self.db)[0]
        service.delete_staff_member(self.db, row.id)
        self.assertIsNone(service.get_staff_member(self.db, row.id))


if __name__ == "__main__":
    unittest.main()
