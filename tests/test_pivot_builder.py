from datetime import date, datetime

from symptom_pivot.dimensions import DimensionType
from symptom_pivot.services.pivot import PivotMention, build_pivot, rank_rows, top_rows
from symptom_pivot.utils.dates import parse_service_date


def m(value, dos_date):
    return PivotMention(value=value, dos_date=dos_date)


def all_cells(matrix):
    return [count for row in matrix.cells.values() for count in row.values()]


class TestBuildPivot:
    def test_duplicate_mentions_increment_same_cell(self):
        matrix = build_pivot([
            m("Anxiety", "2024-01-01"),
            m("Anxiety", "2024-01-01"),
            m("Insomnia", "2024-01-02"),
        ], DimensionType.SYMPTOM)

        assert matrix.rows == ["Anxiety", "Insomnia"]
        assert matrix.columns == ["2024-01-01", "2024-01-02"]
        assert matrix.cells == {
            "Anxiety": {"2024-01-01": 2, "2024-01-02": 0},
            "Insomnia": {"2024-01-01": 0, "2024-01-02": 1},
        }
        assert matrix.max_value == 2
        assert matrix.row_totals == {"Anxiety": 2, "Insomnia": 1}

    def test_empty_input(self):
        matrix = build_pivot([], DimensionType.SYMPTOM)
        assert matrix.rows == []
        assert matrix.columns == []
        assert matrix.cells == {}
        assert matrix.max_value == 1
        assert matrix.is_empty

    def test_null_date_is_excluded(self):
        matrix = build_pivot([
            m("Anxiety", None),
            m("Anxiety", None),
            m("Anxiety", None),
            m("Insomnia", "2024-01-02"),
        ], DimensionType.SYMPTOM)

        assert matrix.rows == ["Insomnia"]
        assert matrix.columns == ["2024-01-02"]
        assert matrix.max_value == 1
        assert matrix.dropped_mentions == 3

    def test_unparsable_date_never_creates_unknown_column(self):
        matrix = build_pivot([m("Anxiety", "not a date"), m("Anxiety", "2024-13-45")], DimensionType.SYMPTOM)
        assert matrix.columns == []
        assert matrix.rows == []
        assert matrix.max_value == 1

    def test_sum_of_cells_equals_dated_mentions(self):
        mentions = [
            m("Anxiety", "2024-03-01"),
            m("Anxiety", date(2024, 3, 1)),
            m("Worry", datetime(2024, 2, 1, 15, 30)),
            m("Worry", "garbage"),
            m("Panic", None),
            m("Panic", "02/15/2024"),
        ]
        matrix = build_pivot(mentions, DimensionType.SYMPTOM)
        dated = [x for x in mentions if parse_service_date(x.dos_date) is not None]

        assert sum(all_cells(matrix)) == len(dated) == 4
        assert matrix.total == 4
        assert matrix.dropped_mentions == 2

    def test_max_value_is_max_cell(self):
        matrix = build_pivot(
            [m("A", "2024-01-01")] * 3 + [m("B", "2024-01-02")] * 5,
            DimensionType.DIAGNOSIS,
        )
        assert matrix.max_value == max(all_cells(matrix)) == 5

    def test_columns_sorted_chronologically(self):
        matrix = build_pivot([
            m("A", "2024-03-01"),
            m("A", "12/31/2023"),
            m("A", "2024-01-15"),
        ], DimensionType.SYMPTOM)
        assert matrix.columns == ["2023-12-31", "2024-01-15", "2024-03-01"]

    def test_time_component_collapses_to_calendar_date(self):
        matrix = build_pivot([
            m("A", "2024-01-01T08:00:00"),
            m("A", "2024-01-01T17:45:00"),
        ], DimensionType.SYMPTOM)
        assert matrix.columns == ["2024-01-01"]
        assert matrix.cells["A"]["2024-01-01"] == 2

    def test_values_trimmed_and_case_sensitive(self):
        matrix = build_pivot([
            m("  Anxiety ", "2024-01-01"),
            m("Anxiety", "2024-01-01"),
            m("anxiety", "2024-01-01"),
        ], DimensionType.SYMPTOM)
        assert matrix.rows == ["Anxiety", "anxiety"]
        assert matrix.cells["Anxiety"]["2024-01-01"] == 2

    def test_blank_values_are_dropped(self):
        matrix = build_pivot([m("", "2024-01-01"), m("   ", "2024-01-01"), m(None, "2024-01-01")],
                             DimensionType.HRSN)
        assert matrix.is_empty
        assert matrix.dropped_mentions == 3

    def test_rows_keep_first_appearance_order(self):
        matrix = build_pivot([
            m("Zeta", "2024-01-01"),
            m("Alpha", "2024-01-01"),
            m("Alpha", "2024-01-02"),
        ], DimensionType.SYMPTOM)
        assert matrix.rows == ["Zeta", "Alpha"]

    def test_idempotent(self):
        mentions = [m("B", "2024-01-02"), m("A", "2024-01-01"), m("B", "2024-01-01"), m("C", None)]
        first = build_pivot(mentions, DimensionType.SYMPTOM)
        second = build_pivot(mentions, DimensionType.SYMPTOM)
        assert first == second


class TestTopRows:
    def _matrix(self):
        return build_pivot(
            [m("Low", "2024-01-01")]
            + [m("High", "2024-01-01")] * 2 + [m("High", "2024-01-02")] * 2
            + [m("Mid", "2024-01-02")] * 3,
            DimensionType.SYMPTOM,
        )

    def test_rank_rows_by_descending_total(self):
        assert rank_rows(self._matrix()) == ["High", "Mid", "Low"]

    def test_rank_rows_ties_broken_by_value(self):
        matrix = build_pivot([m("b", "2024-01-01"), m("a", "2024-01-01")], DimensionType.SYMPTOM)
        assert rank_rows(matrix) == ["a", "b"]

    def test_top_rows_limits_and_recomputes_max(self):
        full = self._matrix()
        top = top_rows(full, 2)
        assert top.rows == ["High", "Mid"]
        assert top.columns == full.columns
        assert top.max_value == 3
        assert full.rows == ["Low", "High", "Mid"]

    def test_top_rows_on_empty_matrix(self):
        top = top_rows(build_pivot([], DimensionType.SYMPTOM), 10)
        assert top.rows == []
        assert top.max_value == 1


class TestParseServiceDate:
    def test_formats(self):
        assert parse_service_date("2024-01-05") == date(2024, 1, 5)
        assert parse_service_date("01/05/2024") == date(2024, 1, 5)
        assert parse_service_date("1/5/24") == date(2024, 1, 5)
        assert parse_service_date(datetime(2024, 1, 5, 23, 59)) == date(2024, 1, 5)

    def test_unparsable(self):
        assert parse_service_date(None) is None
        assert parse_service_date("") is None
        assert parse_service_date("yesterday") is None
        assert parse_service_date(20240105) is None
