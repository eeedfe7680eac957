import pytest

from instrument_data.errors import CriteriaError
from instrument_data.repositories.criteria import InstrumentCriteria


def test_username_targets_product_column():
    where, params = InstrumentCriteria.from_mapping({"username": "alice"}).to_where()
    assert where == "dp.username = $1"
    assert params == ["alice"]
    assert "di.username" not in where


def test_multiple_constraints_are_numbered_in_order():
    criteria = (
        InstrumentCriteria()
        .for_product(10)
        .where("continuous", False)
        .owned_by("alice")
    )
    where, params = criteria.to_where()
    assert where == "di.data_product_id = $1 AND di.continuous = $2 AND dp.username = $3"
    assert params == [10, False, "alice"]


def test_start_offset():
    where, params = InstrumentCriteria().where("symbol", "ESH23").to_where(start=3)
    assert where == "di.symbol = $3"
    assert params == ["ESH23"]


def test_none_renders_is_null_without_parameter():
    where, params = InstrumentCriteria().where("data_block_id", None).where("month", "H23").to_where()
    assert where == "di.data_block_id IS NULL AND di.month = $1"
    assert params == ["H23"]


def test_empty_criteria_matches_everything():
    assert InstrumentCriteria().to_where() == ("TRUE", [])
    assert InstrumentCriteria.from_mapping(None).to_where() == ("TRUE", [])


def test_repeated_field_replaces_value():
    criteria = InstrumentCriteria().owned_by("alice").owned_by("bob")
    assert criteria.fields == ["username"]
    assert criteria.to_where() == ("dp.username = $1", ["bob"])


def test_builder_is_immutable():
    base = InstrumentCriteria().for_product(1)
    base.owned_by("alice")
    assert len(base) == 1


@pytest.mark.parametrize("field", ["password", "di.id; DROP TABLE data_instrument", "status"])
def test_unknown_fields_are_rejected(field):
    with pytest.raises(CriteriaError):
        InstrumentCriteria.from_mapping({field: 1})

    with pytest.raises(ValueError):
        InstrumentCriteria().where(field, 1)


def test_equality():
    assert InstrumentCriteria.from_mapping({"username": "alice"}) == InstrumentCriteria().owned_by("alice")
