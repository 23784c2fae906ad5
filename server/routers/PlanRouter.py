"""Plan router: AI fitness plan generation."""

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse

from server.models.requests import PlanGenerateRequest
from server.models.responses import ErrorResponse, PlanGenerateResponse

router = APIRouter()


async def _read_body(request: Request) -> PlanGenerateRequest:
    """Parse the JSON body leniently; a missing or malformed body counts as empty."""
    try:
        payload = await request.json()
    except ValueError:
        payload = None
    return PlanGenerateRequest.model_validate(payload if isinstance(payload, dict) else {})


@router.post(
    "/plan/generate",
    tags=["Plan"],
    openapi_extra={
        "requestBody": {
            "required": False,
            "content": {"application/json": {"schema": PlanGenerateRequest.model_json_schema(by_alias=True)}},
        }
    },
)
async def generate_plan(request: Request) -> JSONResponse:
    """Embed pending documents, then generate a fitness plan for the user.

    The user id is read from the "userId" query parameter, falling back to the
    JSON body.

    Returns:
        JSONResponse: {"success": true, "fitnessPlan": "..."}, 400 if the user
            id is missing, 500 with {"error": "..."} on any failure.
    """
    body = await _read_body(request)
    user_id = request.query_params.get("userId") or body.user_id
    if not user_id:
        return JSONResponse(status_code=400, content=ErrorResponse(error="userId is required").model_dump())

    try:
        plan = await request.app.state.plan_service.do_generate_plan(user_id, body.input)
    except Exception as exc:
        request.app.state.logging.error("Error in plan/generate endpoint: %s", exc)
        return JSONResponse(status_code=500, content=ErrorResponse(error=str(exc) or "Unknown error").model_dump())

    return JSONResponse(content=PlanGenerateResponse(fitness_plan=plan).model_dump(by_alias=True))


@router.get("/health", tags=["Health"])
async def health() -> dict:
    return {"status": "ok"}
