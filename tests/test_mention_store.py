from datetime import date
from unittest.mock import MagicMock

import pytest
from sqlalchemy.exc import OperationalError

from symptom_pivot.dimensions import DimensionType
from symptom_pivot.errors import DataAccessError
from symptom_pivot.services.mention_store import fetch_mentions, fetch_mentions_for_patients


class TestFetchMentions:
    def test_symptom_filters_to_patient_and_symptom_rows(self, db, add_mention):
        add_mention("P001", "Anxiety")
        add_mention("P001", "Housing instability", symp_prob="Problem", zcode_hrsn="ZCode/HRSN")
        add_mention("P002", "Insomnia")

        mentions = fetch_mentions(db, "P001", DimensionType.SYMPTOM)
        assert [x.value for x in mentions] == ["Anxiety"]
        assert mentions[0].dos_date == date(2024, 1, 1)

    def test_diagnosis_uses_diagnosis_column_and_skips_blank(self, db, add_mention):
        add_mention("P001", "Anxiety", diagnosis="GAD")
        add_mention("P001", "Worry", diagnosis="")
        add_mention("P001", "Panic", diagnosis=None)

        mentions = fetch_mentions(db, "P001", DimensionType.DIAGNOSIS)
        assert [x.value for x in mentions] == ["GAD"]

    def test_diagnostic_category(self, db, add_mention):
        add_mention("P001", "Anxiety", diagnostic_category="Anxiety Disorders")
        mentions = fetch_mentions(db, "P001", DimensionType.DIAGNOSTIC_CATEGORY)
        assert [x.value for x in mentions] == ["Anxiety Disorders"]

    def test_hrsn_includes_markers_and_problems(self, db, add_mention):
        add_mention("P001", "Food insecurity", symp_prob="Symptom", zcode_hrsn="ZCode/HRSN")
        add_mention("P001", "Unemployment", symp_prob="Problem")
        add_mention("P001", "Anxiety")

        mentions = fetch_mentions(db, "P001", DimensionType.HRSN)
        assert sorted(x.value for x in mentions) == ["Food insecurity", "Unemployment"]

    def test_ordered_by_date(self, db, add_mention):
        add_mention("P001", "Late", dos_date=date(2024, 3, 1))
        add_mention("P001", "Early", dos_date=date(2024, 1, 1))
        mentions = fetch_mentions(db, "P001", DimensionType.SYMPTOM)
        assert [x.value for x in mentions] == ["Early", "Late"]

    def test_empty_patient_list_reads_all_patients(self, db, add_mention):
        add_mention("P001", "Anxiety")
        add_mention("P002", "Insomnia")
        mentions = fetch_mentions_for_patients(db, [], DimensionType.SYMPTOM)
        assert {x.value for x in mentions} == {"Anxiety", "Insomnia"}

    def test_unknown_patient_returns_empty(self, db):
        assert fetch_mentions(db, "NOPE", DimensionType.SYMPTOM) == []

    def test_storage_failure_raises_data_access_error(self):
        session = MagicMock()
        session.execute.side_effect = OperationalError("SELECT", {}, Exception("connection refused"))

        with pytest.raises(DataAccessError):
            fetch_mentions(session, "P001", DimensionType.SYMPTOM)
        assert session.execute.call_count == 1
