"""Application tests for design editing and wizard navigation commands."""

import json

import pytest
from cake_studio.design.design import CakeDesign
from cake_studio.design.editing import AdvanceStep, GoBackStep, StartDesign, UpdateDesign
from protean import current_domain
from protean.exceptions import ValidationError


def _start_design(**kwargs):
    return current_domain.process(StartDesign(**kwargs), asynchronous=False)


def _update(design_id, **changes):
    current_domain.process(
        UpdateDesign(design_id=design_id, changes=json.dumps(changes)),
        asynchronous=False,
    )


class TestStartDesignCommand:
    def test_start_persists_design(self):
        design_id = _start_design(session_token="sess-001")

        design = current_domain.repository_for(CakeDesign).get(design_id)
        assert design.session_token == "sess-001"
        assert design.step == "CustomerInfo"

    def test_session_token_is_optional(self):
        design_id = _start_design()

        design = current_domain.repository_for(CakeDesign).get(design_id)
        assert design.session_token is None


class TestUpdateDesignCommand:
    def test_update_persists(self, customer):
        design_id = _start_design()

        _update(design_id, **customer)
        _update(design_id, num_layers=3, frosting_type="fondant")

        design = current_domain.repository_for(CakeDesign).get(design_id)
        assert design.customer_email == "ana@example.com"
        assert design.num_layers == 3
        assert design.design_complexity == "moderate"

    def test_layers_persist(self):
        design_id = _start_design()

        _update(design_id, layers=[{"layer_number": 1, "flavor_id": 2, "size_id": 1}])

        design = current_domain.repository_for(CakeDesign).get(design_id)
        assert design.layer(1).flavor_id == 2
        assert design.layer(1).size_id == 1

    def test_changes_must_be_an_object(self):
        design_id = _start_design()

        with pytest.raises(ValidationError) as exc_info:
            current_domain.process(
                UpdateDesign(design_id=design_id, changes=json.dumps(["num_layers"])),
                asynchronous=False,
            )

        assert "changes" in exc_info.value.messages


class TestNavigationCommands:
    def test_advance_returns_new_step(self, customer):
        design_id = _start_design()
        _update(design_id, **customer)

        step = current_domain.process(AdvanceStep(design_id=design_id), asynchronous=False)

        assert step == "Layers"
        design = current_domain.repository_for(CakeDesign).get(design_id)
        assert design.step == "Layers"

    def test_blocked_advance_keeps_stored_step(self):
        design_id = _start_design()

        with pytest.raises(ValidationError):
            current_domain.process(AdvanceStep(design_id=design_id), asynchronous=False)

        design = current_domain.repository_for(CakeDesign).get(design_id)
        assert design.step == "CustomerInfo"

    def test_go_back_returns_previous_step(self, customer):
        design_id = _start_design()
        _update(design_id, **customer)
        current_domain.process(AdvanceStep(design_id=design_id), asynchronous=False)

        step = current_domain.process(GoBackStep(design_id=design_id), asynchronous=False)

        assert step == "CustomerInfo"
