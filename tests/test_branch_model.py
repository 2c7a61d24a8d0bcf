import pytest
from sqlalchemy import create_engine, inspect
from sqlalchemy.pool import StaticPool

from app.core.exceptions import ValidationError
from app.db.session import init_models, reset_model_registry
from app.models import Branch


@pytest.mark.parametrize("field", ["name", "address"])
@pytest.mark.parametrize("value", ["", "   ", None])
def test_required_fields_reject_blank(field, value):
    data = {"name": "Main St", "address": "123 Main St"}
    data[field] = value

    with pytest.raises(ValidationError) as exc:
        Branch(**data)

    assert exc.value.field == field
    assert str(exc.value) == f"{field} is required"


def test_omitted_required_field_rejected_on_insert(test_db):
    test_db.add(Branch(address="123 Main St"))

    with pytest.raises(ValidationError):
        test_db.commit()
    test_db.rollback()

    assert test_db.query(Branch).count() == 0


def test_text_fields_are_trimmed_and_email_lowercased(test_db):
    branch = Branch(
        name="  Main St  ",
        address=" 123 Main St ",
        phone=" 555-0100 ",
        email="  Foo@Bar.COM ",
    )
    test_db.add(branch)
    test_db.commit()
    test_db.refresh(branch)

    assert branch.name == "Main St"
    assert branch.address == "123 Main St"
    assert branch.phone == "555-0100"
    assert branch.email == "foo@bar.com"


def test_blank_optional_fields_are_stored_as_null(test_db):
    branch = Branch(name="North", address="1 North Rd", phone="  ", email="")
    test_db.add(branch)
    test_db.commit()
    test_db.refresh(branch)

    assert branch.phone is None
    assert branch.email is None


def test_defaults_and_timestamps(test_db):
    branch = Branch(name="Main St", address="123 Main St")
    test_db.add(branch)
    test_db.commit()
    test_db.refresh(branch)

    assert branch.id is not None
    assert branch.is_active is True
    assert branch.manager_id is None
    assert branch.created_at is not None
    assert branch.updated_at is not None


def test_update_revalidates_and_bumps_updated_at(test_db):
    branch = Branch(name="Main St", address="123 Main St")
    test_db.add(branch)
    test_db.commit()
    test_db.refresh(branch)
    first_update = branch.updated_at

    branch.email = "MGR@Example.com"
    test_db.commit()
    test_db.refresh(branch)

    assert branch.email == "mgr@example.com"
    assert branch.updated_at >= first_update

    with pytest.raises(ValidationError):
        branch.address = "  "


def test_manager_is_a_weak_reference(test_db):
    # no user with this id exists; the write still goes through
    branch = Branch(name="Main St", address="123 Main St", manager_id=9999)
    test_db.add(branch)
    test_db.commit()

    assert test_db.get(Branch, branch.id).manager_id == 9999


def test_lookup_indexes_exist(test_db):
    indexes = {ix["name"]: ix["column_names"] for ix in inspect(test_db.get_bind()).get_indexes("branches")}

    assert indexes["ix_branches_name"] == ["name"]
    assert indexes["ix_branches_is_active"] == ["is_active"]


def test_init_models_runs_once_per_engine():
    engine = create_engine("sqlite://", poolclass=StaticPool)
    reset_model_registry()
    try:
        assert init_models(engine) is True
        assert init_models(engine) is False
        assert {"branches", "users"} <= set(inspect(engine).get_table_names())
    finally:
        reset_model_registry()
        engine.dispose()
