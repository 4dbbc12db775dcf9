"""Tests for deriving forms from pydantic models."""

from typing import Self

from pydantic import BaseModel, Field, model_validator

from formtree._eval_engine import env_from_mapping, run_form
from formtree._field import BoolField, Typed
from formtree._form import name
from formtree._model_form import form_from_model
from formtree._tree import debug_paths, query_field, resolve_tree


class Address(BaseModel):
    street: str
    postcode: str = Field(min_length=4, max_length=8)


class User(BaseModel):
    name: str
    age: int = Field(default=0, ge=0)
    newsletter: bool = False
    address: Address


class Booking(BaseModel):
    nights: int
    guests: int

    @model_validator(mode="after")
    def check_capacity(self) -> Self:
        if self.guests > 2 * self.nights:
            msg = "too many guests"
            raise ValueError(msg)
        return self


class TestFormFromModel:
    def test_paths_follow_fields(self) -> None:
        paths = debug_paths(resolve_tree(form_from_model(User)))
        for expected in [("name",), ("age",), ("newsletter",), ("address", "street"), ("address", "postcode")]:
            assert expected in paths

    def test_leaf_types(self) -> None:
        tree = resolve_tree(form_from_model(User))
        assert query_field(("newsletter",), tree) == BoolField(default=False)
        assert isinstance(query_field(("age",), tree), Typed)
        assert query_field(("age",), tree).default == 0

    def test_builds_model(self) -> None:
        env = env_from_mapping(
            {
                "name": "bob",
                "age": "42",
                "newsletter": "on",
                "address.street": "Main St",
                "address.postcode": "12345",
            },
        )
        result = run_form(form_from_model(User), env)
        assert result.value == User(
            name="bob",
            age=42,
            newsletter=True,
            address=Address(street="Main St", postcode="12345"),
        )

    def test_defaults(self) -> None:
        env = env_from_mapping({"name": "amy", "address.street": "A", "address.postcode": "9999"})
        user = run_form(form_from_model(User), env).value
        assert user.age == 0
        assert user.newsletter is False

    def test_field_errors_at_field_paths(self) -> None:
        env = env_from_mapping({"age": "-1", "address.street": "A", "address.postcode": "1"})
        result = run_form(form_from_model(User), env)
        assert not result.success
        assert [path for path, _ in result.errors] == [("name",), ("age",), ("address", "postcode")]

    def test_model_validator_error_at_form_path(self) -> None:
        result = run_form(form_from_model(Booking), env_from_mapping({"nights": "1", "guests": "5"}))
        assert len(result.errors) == 1
        path, message = result.errors[0]
        assert path == ()
        assert "too many guests" in message

    def test_named_model_form(self) -> None:
        form = name("booking", form_from_model(Booking))
        result = run_form(form, env_from_mapping({"booking.nights": "2", "booking.guests": "3"}))
        assert result.value == Booking(nights=2, guests=3)
