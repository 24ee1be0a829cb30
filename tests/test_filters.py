from types import SimpleNamespace

from app.services.filters import ALL, FilterSpec, filter_records


def record(id, employee_id, status, type, reason, full_name):
    return SimpleNamespace(
        id=id, employee_id=employee_id, status=status, type=type, reason=reason,
        employee=SimpleNamespace(full_name=full_name),
    )


RECORDS = [
    record(1, 10, "pending", "vacation", "Beach week", "Bruno Silva"),
    record(2, 11, "approved", "personal", "Moving house", "Carla Souza"),
    record(3, 10, "rejected", "vacation", None, "Bruno Silva"),
]
FIELDS = ("reason", "employee.full_name")


def ids(records):
    return [r.id for r in records]


def test_empty_spec_keeps_everything():
    assert ids(filter_records(RECORDS, FilterSpec(), FIELDS)) == [1, 2, 3]


def test_all_sentinel_means_no_filter():
    spec = FilterSpec(employee_id=ALL, status=ALL, type=ALL)
    assert ids(filter_records(RECORDS, spec, FIELDS)) == [1, 2, 3]


def test_predicates_combine():
    spec = FilterSpec(employee_id="10", type="vacation", status="rejected")
    assert ids(filter_records(RECORDS, spec, FIELDS)) == [3]


def test_search_spans_joined_fields_case_insensitively():
    assert ids(filter_records(RECORDS, FilterSpec(search="SOUZA"), FIELDS)) == [2]
    assert ids(filter_records(RECORDS, FilterSpec(search="  beach "), FIELDS)) == [1]


def test_search_skips_missing_values():
    assert ids(filter_records(RECORDS, FilterSpec(search="bruno"), FIELDS)) == [1, 3]
    assert filter_records(RECORDS, FilterSpec(search="nobody"), FIELDS) == []


def test_employee_id_string_is_coerced():
    assert FilterSpec(employee_id="42").employee_id == 42
    assert FilterSpec(employee_id="all").employee_id == "all"


def test_fields_map_filters_to_record_attributes():
    people = [
        SimpleNamespace(id=10, status="active", department="People"),
        SimpleNamespace(id=11, status="active", department="Finance"),
    ]
    fields = {"employee_id": "id", "status": "status", "department": "department"}
    assert [p.id for p in filter_records(people, FilterSpec(employee_id="11"), fields=fields)] == [11]
    assert [p.id for p in filter_records(people, FilterSpec(department="People"), fields=fields)] == [10]
    # Not in the mapping, so not applied
    assert len(filter_records(people, FilterSpec(type="vacation"), fields=fields)) == 2
