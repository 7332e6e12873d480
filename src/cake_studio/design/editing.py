"""Design editing and wizard navigation — commands and handler."""

import json

from protean import handle
from protean.exceptions import ValidationError
from protean.fields import Identifier, String, Text
from protean.utils.globals import current_domain

from cake_studio.design.design import CakeDesign
from cake_studio.domain import cake_studio


@cake_studio.command(part_of="CakeDesign")
class StartDesign:
    session_token = String(max_length=255)


@cake_studio.command(part_of="CakeDesign")
class UpdateDesign:
    design_id = Identifier(required=True)
    changes = Text(required=True)  # JSON object: field name -> new value


@cake_studio.command(part_of="CakeDesign")
class AdvanceStep:
    design_id = Identifier(required=True)


@cake_studio.command(part_of="CakeDesign")
class GoBackStep:
    design_id = Identifier(required=True)


@cake_studio.command_handler(part_of=CakeDesign)
class DesignEditingHandler:
    @handle(StartDesign)
    def start_design(self, command):
        design = CakeDesign.start(session_token=command.session_token)
        current_domain.repository_for(CakeDesign).add(design)
        return str(design.id)

    @handle(UpdateDesign)
    def update_design(self, command):
        changes = json.loads(command.changes)
        if not isinstance(changes, dict):
            raise ValidationError({"changes": ["Changes must be a JSON object"]})

        repo = current_domain.repository_for(CakeDesign)
        design = repo.get(command.design_id)
        design.update_design(**changes)
        repo.add(design)

    @handle(AdvanceStep)
    def advance_step(self, command):
        repo = current_domain.repository_for(CakeDesign)
        design = repo.get(command.design_id)
        design.advance()
        repo.add(design)
        return design.step

    @handle(GoBackStep)
    def go_back_step(self, command):
        repo = current_domain.repository_for(CakeDesign)
        design = repo.get(command.design_id)
        design.go_back()
        repo.add(design)
        return design.step
