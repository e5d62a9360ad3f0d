import unittest
from datetime import date

from fastapi import HTTPException
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from core.database import Base
import models_bootstrap  # noqa: F401

from staff.models import StaffMember, StaffCategory
from rest_record.models import RestRecord, RestCategory
from rest_record import service
from rest_record.schema import RestRecordCreate, RestRecordCreatePayload, RestRecordUpdate


class RestRecordServiceTests(unittest.TestCase):
    def setUp(self):
        self.engine = create_engine("sqlite:///:memory:", future=True)
        Base.metadata.create_all(self.engine)
        Session = sessionmaker(bind=self.engine, future=True)
        self.db = Session()

        a = StaffMember(full_name="Nguyễn Văn A", category=StaffCategory.career_military)
        b = StaffMember(full_name="Trần Thị B", category=StaffCategory.contract_labor)
        self.db.add_all([a, b])
        self.db.flush()
        self.a_id, self.b_id = a.id, b.id

        self.day = date(2025, 3, 2)
        r1 = RestRecord(staff_id=a.id, full_name=a.full_name, category=RestCategory.on_duty_rest,
                        rest_date=self.day, note="from roster")
        r2 = RestRecord(staff_id=None, full_name="Người Lạ", category=RestCategory.other,
                        rest_date=self.day)
        r3 = RestRecord(staff_id=b.id, full_name=b.full_name, category=RestCategory.training,
                        rest_date=date(2025, 3, 3))
        self.db.add_all([r1, r2, r3])
        self.db.commit()
        self.r1_id, self.r2_id, self.r3_id = r1.id, r2.id, r3.id

    def tearDown(self):
        self.db.close()
        self.engine.dispose()

    # ---- queries ----

    def test_get_rest_records_for_day(self):
        rows = service.get_rest_records(self.db, rest_date=self.day)
        self.assertEqual({r.id for r in rows}, {self.r1_id, self.r2_id})

    def test_get_rest_records_all(self):
        self.assertEqual(len(service.get_rest_records(self.db)), 3)

    def test_check_rest_record_exists(self):
        self.assertTrue(service.check_rest_record_exists(self.db, self.a_id, self.day))
        self.assertFalse(service.check_rest_record_exists(self.db, self.b_id, self.day))

    # ---- create ----

    def test_build_create_dto_takes_directory_name(self):
        dto = service.build_create_dto(
            self.db,
            RestRecordCreatePayload(staff_id=self.b_id, full_name="ignored", rest_date=self.day),
        )
        self.assertEqual(dto.full_name, "Trần Thị B")

    def test_build_create_dto_unknown_staff_404(self):
        with self.assertRaises(HTTPException) as ctx:
            service.build_create_dto(self.db, RestRecordCreatePayload(staff_id=9999, rest_date=self.day))
        self.assertEqual(ctx.exception.status_code, 404)

    def test_payload_requires_staff_or_name(self):
        with self.assertRaises(ValueError):
            RestRecordCreatePayload(rest_date=self.day)

    def test_create_rest_record(self):
        row = service.create_rest_record(self.db, RestRecordCreate(
            staff_id=self.b_id, full_name="Trần Thị B", category=RestCategory.business_trip, rest_date=self.day,
        ))
        self.assertIsInstance(row.id, int)
        self.assertIsNotNone(row.created_at)

    def test_same_staff_may_have_several_categories_on_one_day(self):
        # a already has an on-duty rest record on self.day
        trip = service.create_rest_record(self.db, RestRecordCreate(
            staff_id=self.a_id, full_name="Nguyễn Văn A",
            category=RestCategory.business_trip, rest_date=self.day,
        ))
        training = service.create_rest_record(self.db, RestRecordCreate(
            staff_id=self.a_id, full_name="Nguyễn Văn A",
            category=RestCategory.training, rest_date=self.day,
        ))
        self.assertNotEqual(trip.id, training.id)
        rows = [r for r in service.get_rest_records(self.db, rest_date=self.day) if r.staff_id == self.a_id]
        self.assertEqual(
            {r.category for r in rows},
            {RestCategory.on_duty_rest, RestCategory.business_trip, RestCategory.training},
        )

    def test_free_text_records_may_repeat(self):
        for _ in range(2):
            service.create_rest_record(self.db, RestRecordCreate(full_name="Người Lạ", rest_date=self.day))
        names = [r.full_name for r in service.get_rest_records(self.db, rest_date=self.day)]
        self.assertEqual(names.count("Người Lạ"), 3)

    # ---- update / delete ----

    def test_update_rest_record(self):
        row = service.update_rest_record(self.db, self.r3_id, RestRecordUpdate(note="moved"))
        self.assertEqual(row.note, "moved")
        self.assertEqual(row.category, RestCategory.training)

    def test_update_null_required_field_422(self):
        with self.assertRaises(HTTPException) as ctx:
            service.update_rest_record(self.db, self.r3_id, RestRecordUpdate(rest_date=None))
        self.assertEqual(ctx.exception.status_code, 422)

    def test_update_missing_404(self):
        with self.assertRaises(HTTPException) as ctx:
            service.update_rest_record(self.db, 9999, RestRecordUpdate(note="x"))
        self.assertEqual(ctx.exception.status_code, 404)

    def test_delete_rest_record(self):
        self.assertTrue(service.delete_rest_record(self.db, self.r2_id))
        self.assertFalse(service.delete_rest_record(self.db, self.r2_id))

    # ---- copy ----

    def test_copy_rest_records_to_other_day(self):
        target = date(2025, 3, 10)
        result = service.copy_rest_records(self.db, record_ids=[self.r1_id, self.r2_id], target_date=target)
        self.assertEqual(result["copied"], 2)
        self.assertEqual(result["skipped"], 0)

        rows = service.get_rest_records(self.db, rest_date=target)
        notes = {r.full_name: r.note for r in rows}
        self.assertEqual(notes["Nguyễn Văn A"], "from roster (copied)")
        self.assertEqual(notes["Người Lạ"], "Copied")

    def test_copy_skips_staff_already_resting(self):
        # b already rests on 2025-03-03
        result = service.copy_rest_records(
            self.db, record_ids=[self.r1_id, self.r3_id], target_date=date(2025, 3, 3)
        )
        self.assertEqual(result["copied"], 1)
        self.assertEqual(result["skipped"], 1)

    def test_copy_unknown_ids_404(self):
        with self.assertRaises(HTTPException) as ctx:
            service.copy_rest_records(self.db, record_ids=[9999], target_date=date(2025, 3, 3))
        self.assertEqual(ctx.exception.status_code, 404)


if __name__ == "__main__":
    unittest.main()
