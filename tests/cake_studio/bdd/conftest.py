"""Shared BDD fixtures and step definitions for the Cake Studio domain."""

import pytest
from cake_studio.design.design import CakeDesign
from cake_studio.design.events import DesignSubmitted, DesignUpdated, WizardStepChanged
from protean.exceptions import ValidationError
from pytest_bdd import given, parsers, then, when

_DESIGN_EVENT_CLASSES = {
    "DesignUpdated": DesignUpdated,
    "WizardStepChanged": WizardStepChanged,
    "DesignSubmitted": DesignSubmitted,
}


@pytest.fixture()
def error():
    """Container for captured errors."""
    return {"exc": None}


# ---------------------------------------------------------------------------
# Given steps
# ---------------------------------------------------------------------------
@given("a new cake design", target_fixture="design")
def new_design():
    design = CakeDesign.start(session_token="sess-bdd-001")
    design._events.clear()
    return design


@given("the shopper entered their contact details")
def contact_details(design, customer):
    design.update_design(**customer)


@given("the design is ready for review", target_fixture="design")
def ready_for_review(design_at_review):
    return design_at_review


# ---------------------------------------------------------------------------
# Steps shared between Given and When
# ---------------------------------------------------------------------------
@given("the shopper continues")
@when("the shopper continues")
def shopper_continues(design):
    design.advance()


@given(parsers.cfparse("the shopper chose {count:d} layers"))
@when(parsers.cfparse("the shopper chose {count:d} layers"))
def choose_layers(design, count):
    design.update_design(num_layers=count)


@given(parsers.cfparse("layer {number:d} has flavor {flavor_id:d}"))
def layer_flavor(design, number, flavor_id):
    design.set_layer(number, flavor_id=flavor_id)


# ---------------------------------------------------------------------------
# Then steps
# ---------------------------------------------------------------------------
@then(parsers.cfparse('the wizard is on the "{step}" step'))
def wizard_on_step(design, step):
    assert design.step == step


@then("the wizard refuses with a validation error")
def wizard_refuses(error):
    assert error["exc"] is not None, "Expected a validation error but none was raised"
    assert isinstance(error["exc"], ValidationError)


@then(parsers.cfparse("a {event_type} design event is raised"))
def design_event_raised(design, event_type):
    event_cls = _DESIGN_EVENT_CLASSES[event_type]
    assert any(
        isinstance(e, event_cls) for e in design._events
    ), f"No {event_type} event found. Events: {[type(e).__name__ for e in design._events]}"
