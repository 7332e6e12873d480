"""Design submission — hands a reviewed design to the bakery backend.

Two backend calls: save the design as a draft (which yields the request
id), then submit that draft for staff review. A failure at either call is
recorded on the design, which stays at Review so the shopper can try again;
the error still reaches the caller. Nothing is retried automatically.
"""

from protean.exceptions import ValidationError
from protean.utils.globals import current_domain

from cake_studio.design.design import CakeDesign
from cake_studio.design.wizard import WizardStep
from cake_studio.domain import logger
from shared.backend.errors import BackendError


def save_design_draft(design_id, backend):
    """Push the current design to the backend as a draft, e.g. for autosave."""
    repo = current_domain.repository_for(CakeDesign)
    design = repo.get(design_id)

    draft = backend.save_draft(design.session_token, design.to_submission_payload())
    design.record_draft(draft.request_id)
    repo.add(design)

    logger.debug("Design draft saved", design_id=str(design.id), request_id=design.request_id)
    return draft


def submit_design(design_id, backend):
    repo = current_domain.repository_for(CakeDesign)
    design = repo.get(design_id)

    if WizardStep(design.step) != WizardStep.REVIEW:
        raise ValidationError({"step": [f"Design must be at Review to be submitted, not {design.step}"]})

    try:
        draft = backend.save_draft(design.session_token, design.to_submission_payload())
        design.record_draft(draft.request_id)
        result = backend.submit_for_review(design.request_id)
    except BackendError as exc:
        design.record_submission_failure(exc.message)
        repo.add(design)
        logger.error(
            "Design submission failed",
            design_id=str(design.id),
            request_id=design.request_id,
            status_code=exc.status_code,
            error=exc.message,
        )
        raise

    design.mark_submitted(result.request_id)
    repo.add(design)

    logger.info(
        "Design submitted for review",
        design_id=str(design.id),
        request_id=result.request_id,
        design_complexity=design.design_complexity,
    )
    return result
