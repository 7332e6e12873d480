"""FastAPI routes for the Cake Studio domain — designs and the design wizard."""

import json

from fastapi import APIRouter, HTTPException
from protean.utils.globals import current_domain

from cake_studio.api.schemas import (
    DesignIdResponse,
    DesignResponse,
    DraftResponse,
    StartDesignRequest,
    StepResponse,
    SubmissionResponse,
    UpdateDesignRequest,
)
from cake_studio.design.design import CakeDesign
from cake_studio.design.editing import AdvanceStep, GoBackStep, StartDesign, UpdateDesign
from cake_studio.design.submission import save_design_draft, submit_design
from shared.backend import get_backend
from shared.backend.errors import BackendError


def _design_response(design_id: str) -> DesignResponse:
    design = current_domain.repository_for(CakeDesign).get(design_id)
    return DesignResponse(
        design_id=str(design.id),
        step=design.step,
        design_complexity=design.design_complexity,
        request_id=design.request_id,
        last_error=design.last_error,
        design=design.to_submission_payload(),
    )


# ---------------------------------------------------------------------------
# Design Router
# ---------------------------------------------------------------------------
design_router = APIRouter(prefix="/designs", tags=["designs"])


@design_router.post("", status_code=201, response_model=DesignIdResponse)
async def start_design(body: StartDesignRequest) -> DesignIdResponse:
    command = StartDesign(session_token=body.session_token)
    result = current_domain.process(command, asynchronous=False)
    return DesignIdResponse(design_id=result)


@design_router.get("/{design_id}", response_model=DesignResponse)
async def get_design(design_id: str) -> DesignResponse:
    return _design_response(design_id)


@design_router.patch("/{design_id}", response_model=DesignResponse)
async def update_design(design_id: str, body: UpdateDesignRequest) -> DesignResponse:
    changes = body.model_dump(mode="json", exclude_unset=True)
    command = UpdateDesign(design_id=design_id, changes=json.dumps(changes))
    current_domain.process(command, asynchronous=False)
    return _design_response(design_id)


@design_router.post("/{design_id}/advance", response_model=StepResponse)
async def advance_step(design_id: str) -> StepResponse:
    step = current_domain.process(AdvanceStep(design_id=design_id), asynchronous=False)
    return StepResponse(design_id=design_id, step=step)


@design_router.post("/{design_id}/back", response_model=StepResponse)
async def go_back_step(design_id: str) -> StepResponse:
    step = current_domain.process(GoBackStep(design_id=design_id), asynchronous=False)
    return StepResponse(design_id=design_id, step=step)


@design_router.post("/{design_id}/draft", response_model=DraftResponse)
async def save_draft(design_id: str) -> DraftResponse:
    try:
        draft = save_design_draft(design_id, get_backend())
    except BackendError as exc:
        raise HTTPException(status_code=502, detail=exc.message) from exc
    return DraftResponse(design_id=design_id, request_id=draft.request_id)


@design_router.post("/{design_id}/submit", response_model=SubmissionResponse)
async def submit(design_id: str) -> SubmissionResponse:
    try:
        result = submit_design(design_id, get_backend())
    except BackendError as exc:
        raise HTTPException(status_code=502, detail=exc.message) from exc

    return SubmissionResponse(
        design_id=design_id,
        request_id=result.request_id,
        status=result.status,
        tracking_code=result.tracking_code,
    )
