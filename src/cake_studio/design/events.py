"""Domain events for the CakeDesign aggregate."""

from protean.fields import DateTime, Identifier, Integer, String, Text

from cake_studio.domain import cake_studio


@cake_studio.event(part_of="CakeDesign")
class DesignStarted:
    __version__ = 1

    design_id = Identifier(required=True)
    session_token = String(max_length=255)
    started_at = DateTime(required=True)


@cake_studio.event(part_of="CakeDesign")
class DesignUpdated:
    """Some design fields changed; the complexity bucket was recomputed."""

    __version__ = 1

    design_id = Identifier(required=True)
    changed_fields = Text(required=True)  # JSON array of field names
    design_complexity = String(max_length=20, required=True)


@cake_studio.event(part_of="CakeDesign")
class WizardStepChanged:
    __version__ = 1

    design_id = Identifier(required=True)
    from_step = String(max_length=20, required=True)
    to_step = String(max_length=20, required=True)


@cake_studio.event(part_of="CakeDesign")
class DesignSubmitted:
    """The backend accepted the design for staff review."""

    __version__ = 1

    design_id = Identifier(required=True)
    request_id = Integer(required=True)
    design_complexity = String(max_length=20)
    submitted_at = DateTime(required=True)


@cake_studio.event(part_of="CakeDesign")
class DesignSubmissionFailed:
    __version__ = 1

    design_id = Identifier(required=True)
    reason = Text(required=True)
    failed_at = DateTime(required=True)
