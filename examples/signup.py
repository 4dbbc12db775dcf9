"""Signup form.

Demonstrates named sub-forms, a derived pydantic form, a deferred choice
field, and a cross-field check:

    formtree eval examples/signup.py -i examples/signup.toml
"""

from pydantic import BaseModel, Field

import formtree as ft


class Address(BaseModel):
    street: str
    city: str
    postcode: str = Field(min_length=4, max_length=10)


class Signup(BaseModel):
    username: str
    age: int
    plan: str
    newsletter: bool
    address: Address


def load_plans() -> ft.Form[str, str]:
    # Stands in for a database query run once, when the form is resolved
    plans = (("free", "free", "Free"), ("pro", "pro", "Professional"))
    return ft.leaf(ft.Choice(plans))


username = ft.check(
    ft.leaf(ft.Typed(str)),
    "Usernames must be at least 3 characters",
    lambda name: len(name) >= 3,
)
age = ft.check(ft.leaf(ft.Typed(int)), "You must be 18 or older", lambda years: years >= 18)


def make_signup(username: str, age: int, plan: str, newsletter: bool, address: Address) -> Signup:  # noqa: FBT001
    return Signup(username=username, age=age, plan=plan, newsletter=newsletter, address=address)


form = ft.lift(
    make_signup,
    ft.name("username", username),
    ft.name("age", age),
    ft.name("plan", ft.deferred(load_plans)),
    ft.name("newsletter", ft.leaf(ft.BoolField())),
    ft.name("address", ft.form_from_model(Address)),
)
