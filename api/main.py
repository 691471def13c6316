# api/main.py
"""
FastAPI backend for ClimbFrame - exposes the climbframe engine as a REST API.
"""

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import StreamingResponse
from pydantic import BaseModel, Field, field_validator
from typing import Dict, List, Optional, Any
import sys
from pathlib import Path
import json
import logging

# Add project root to path to import climbframe
sys.path.insert(0, str(Path(__file__).parent.parent))

from climbframe.exports import bom_csv, model_dict, pipe_dict
from climbframe.generative import (
    build_structure_by_counts,
    build_tiered_scaffold,
    clamp_count,
    plan_budget,
    MAX_PIPE_COUNT,
)
from climbframe.graph import parts_summary
from climbframe.lattice.grid import PIPE_LENGTHS, parse_direction
from climbframe.model import Pipe
from climbframe.placement import (
    EditorState,
    PlacementSession,
    SelectLength,
    SelectAnchor,
    CycleDirection,
    SetDirection,
    Commit,
    Cancel,
    PickPipe,
    PickEmpty,
    DeleteSelected,
    event_for_key,
    ghost_pipe,
    transition,
)
from climbframe.viz.pick import Camera, screen_ray, pick, pick_plane_point, event_for_hit

log = logging.getLogger(__name__)


app = FastAPI(
    title="ClimbFrame API",
    description="Pipe Climbing-Frame Lattice Engine",
    version="0.1.0"
)

# CORS for frontend
app.add_middleware(
    CORSMiddleware,
    allow_origins=["http://localhost:3000", "http://127.0.0.1:3000"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# =============================================================================
# Request/Response Models
# =============================================================================

class PipeData(BaseModel):
    """One pipe, stored in positive-direction form."""
    id: str
    start: List[int] = Field(..., min_length=3, max_length=3)
    axis: str = Field(..., description="x, y or z")
    length_units: int = Field(..., description="2 (20 cm) or 4 (40 cm)")


class GenerateFramesRequest(BaseModel):
    """Parts budget for box-frame generation."""
    count_20cm: int = Field(0, ge=0, le=MAX_PIPE_COUNT, description="Number of 20 cm pipes")
    count_40cm: int = Field(0, ge=0, le=MAX_PIPE_COUNT, description="Number of 40 cm pipes")

    @field_validator('count_20cm', 'count_40cm', mode='before')
    @classmethod
    def _clamp(cls, value: Any) -> int:
        return min(clamp_count(value), MAX_PIPE_COUNT)


class PartsData(BaseModel):
    pipe_20cm: int
    pipe_40cm: int
    connectors_2: int
    connectors_3: int
    connectors_4: int
    free_anchors: int


class StructureResult(BaseModel):
    """A structure with its derived parts counts."""
    pipes: List[PipeData]
    parts: PartsData
    boxes: Optional[int] = None


class SessionData(BaseModel):
    length_units: int = 2
    anchor: Optional[List[int]] = None
    direction: Optional[str] = Field(None, description="X+, X-, Y+, Y-, Z+ or Z-")


class StateData(BaseModel):
    """Serialized editor state."""
    pipes: List[PipeData] = []
    session: Optional[SessionData] = None
    selected_pipe_id: Optional[str] = None


class EventData(BaseModel):
    """
    Placement event.

    type is one of SelectLength, SelectAnchor, CycleDirection,
    SetDirection, Commit, Cancel, PickPipe, PickEmpty, DeleteSelected.
    """
    type: str
    length_units: Optional[int] = None
    point: Optional[List[int]] = None
    direction: Optional[str] = None
    pipe_id: Optional[str] = None


class PlacementEventRequest(BaseModel):
    state: StateData = StateData()
    event: Optional[EventData] = None
    key: Optional[str] = None


class PlacementEventResult(BaseModel):
    state: StateData
    phase: str
    available_directions: List[str]
    ghost: Optional[List[List[int]]] = None
    parts: PartsData


class PickRequest(BaseModel):
    """Normalized screen coordinate (-1..1) plus the camera that drew it."""
    pipes: List[PipeData] = []
    ndc_x: float
    ndc_y: float
    eye: List[float] = [1.2, 1.2, 1.2]
    target: List[float] = [0.0, 0.0, 0.0]
    up: List[float] = [0.0, 0.0, 1.0]
    fov_deg: float = 60.0
    aspect: float = 1.0
    plane: Optional[str] = Field(None, description="XY, XZ or YZ; used when nothing is hit")
    level_units: int = 0


class PickResult(BaseModel):
    kind: Optional[str] = None
    distance: Optional[float] = None
    point: Optional[List[int]] = None
    pipe_id: Optional[str] = None
    event: Dict[str, Any]


class ExportRequest(BaseModel):
    pipes: List[PipeData] = []


# =============================================================================
# Conversion
# =============================================================================

def pipes_from_data(items: List[PipeData]) -> tuple:
    """PipeData list -> Structure; bad pipes are a 400."""
    try:
        return tuple(
            Pipe(id=p.id, start=tuple(p.start), axis=p.axis, length_units=p.length_units)
            for p in items
        )
    except ValueError as e:
        raise HTTPException(status_code=400, detail=f"Invalid pipe: {e}")


def pipe_to_data(pipe: Pipe) -> PipeData:
    return PipeData(**pipe_dict(pipe))


def parts_to_data(structure) -> PartsData:
    return PartsData(**parts_summary(structure).to_dict())


def state_from_data(data: StateData) -> EditorState:
    structure = pipes_from_data(data.pipes)
    session = None
    if data.session is not None:
        # Free directions are re-derived from the structure
        if data.session.length_units not in PIPE_LENGTHS:
            raise HTTPException(status_code=400, detail=f"Invalid length: {data.session.length_units}")
        try:
            session = PlacementSession(length_units=data.session.length_units)
            state = EditorState(structure=structure, session=session)
            if data.session.anchor is not None:
                state = transition(state, SelectAnchor(point=tuple(data.session.anchor)))
                if data.session.direction is not None:
                    direction = parse_direction(data.session.direction)
                    if direction not in state.session.available_directions:
                        raise ValueError(f"direction {direction.label} is taken at {state.session.anchor}")
                    state = transition(state, SetDirection(direction=direction))
            session = state.session
        except ValueError as e:
            raise HTTPException(status_code=400, detail=f"Invalid session: {e}")
    return EditorState(structure=structure, session=session, selected_pipe_id=data.selected_pipe_id)


def state_to_data(state: EditorState) -> StateData:
    session = None
    if state.session is not None:
        s = state.session
        session = SessionData(
            length_units=s.length_units,
            anchor=list(s.anchor) if s.anchor is not None else None,
            direction=s.direction.label if s.direction is not None else None,
        )
    return StateData(
        pipes=[pipe_to_data(p) for p in state.structure],
        session=session,
        selected_pipe_id=state.selected_pipe_id,
    )


def event_from_data(data: EventData):
    """Build a placement event; unknown or incomplete events are a 400."""
    try:
        if data.type == 'SelectLength' and data.length_units is not None:
            return SelectLength(length_units=data.length_units)
        if data.type == 'SelectAnchor' and data.point is not None:
            return SelectAnchor(point=tuple(data.point))
        if data.type == 'SetDirection' and data.direction is not None:
            return SetDirection(direction=parse_direction(data.direction))
        if data.type == 'PickPipe' and data.pipe_id is not None:
            return PickPipe(pipe_id=data.pipe_id)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    simple = {
        'CycleDirection': CycleDirection,
        'Commit': Commit,
        'Cancel': Cancel,
        'PickEmpty': PickEmpty,
        'DeleteSelected': DeleteSelected,
    }
    if data.type in simple:
        return simple[data.type]()
    raise HTTPException(status_code=400, detail=f"Unknown or incomplete event: {data.type}")


def event_to_dict(event) -> Dict[str, Any]:
    out: Dict[str, Any] = {'type': type(event).__name__}
    if isinstance(event, SelectAnchor):
        out['point'] = list(event.point)
    elif isinstance(event, PickPipe):
        out['pipe_id'] = event.pipe_id
    return out


# =============================================================================
# API Endpoints
# =============================================================================

@app.get("/")
async def root():
    """Health check."""
    return {"status": "ok", "service": "ClimbFrame API"}


@app.post("/api/generate/frames", response_model=StructureResult)
async def generate_frames(request: GenerateFramesRequest):
    """Build as many complete box frames as the parts budget allows."""
    budget = plan_budget(request.count_20cm, request.count_40cm)
    pipes = build_structure_by_counts(request.count_20cm, request.count_40cm)
    log.info("Generated %d boxes (%d pipes)", budget.boxes, len(pipes))
    return StructureResult(
        pipes=[pipe_to_data(p) for p in pipes],
        parts=parts_to_data(pipes),
        boxes=budget.boxes,
    )


@app.post("/api/generate/scaffold", response_model=StructureResult)
async def generate_scaffold():
    """Build the fixed three-tier scaffold."""
    pipes = build_tiered_scaffold()
    return StructureResult(pipes=[pipe_to_data(p) for p in pipes], parts=parts_to_data(pipes))


@app.post("/api/summary", response_model=PartsData)
async def summary(request: ExportRequest):
    """Parts counts for a structure."""
    return parts_to_data(pipes_from_data(request.pipes))


@app.post("/api/placement/event", response_model=PlacementEventResult)
async def placement_event(request: PlacementEventRequest):
    """Apply one event (or key press) to an editor state."""
    state = state_from_data(request.state)

    if request.event is not None:
        event = event_from_data(request.event)
    elif request.key is not None:
        event = event_for_key(request.key)
    else:
        raise HTTPException(status_code=400, detail="Provide an event or a key")

    if event is not None:
        try:
            state = transition(state, event)
        except ValueError as e:
            raise HTTPException(status_code=400, detail=str(e))

    ghost = ghost_pipe(state.session)
    return PlacementEventResult(
        state=state_to_data(state),
        phase=state.phase,
        available_directions=[d.label for d in state.session.available_directions] if state.session else [],
        ghost=[list(ghost[0]), list(ghost[1])] if ghost else None,
        parts=parts_to_data(state.structure),
    )


@app.post("/api/pick", response_model=PickResult)
async def pick_point(request: PickRequest):
    """Resolve a screen coordinate to an anchor, a pipe or a plane point."""
    structure = pipes_from_data(request.pipes)
    try:
        camera = Camera(
            eye=tuple(request.eye),
            target=tuple(request.target),
            up=tuple(request.up),
            fov_deg=request.fov_deg,
            aspect=request.aspect,
        )
        ray = screen_ray(camera, request.ndc_x, request.ndc_y)
        hit = pick(structure, ray)
        if hit is None and request.plane is not None:
            point = pick_plane_point(ray, request.plane, request.level_units)
            if point is not None:
                return PickResult(kind='plane', point=list(point), event=event_to_dict(SelectAnchor(point=point)))
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    event = event_for_hit(hit)
    if hit is None:
        return PickResult(event=event_to_dict(event))
    return PickResult(
        kind=hit.kind,
        distance=hit.distance,
        point=list(hit.point) if hit.point is not None else None,
        pipe_id=hit.pipe_id,
        event=event_to_dict(event),
    )


@app.post("/api/export/csv")
async def export_csv(request: ExportRequest):
    """Export the parts list as CSV."""
    content = bom_csv(pipes_from_data(request.pipes))

    return StreamingResponse(
        iter([content]),
        media_type="text/csv",
        headers={"Content-Disposition": "attachment; filename=climbframe_parts.csv"}
    )


@app.post("/api/export/json")
async def export_json(request: ExportRequest):
    """Export model as JSON."""
    model = model_dict(pipes_from_data(request.pipes))

    return StreamingResponse(
        iter([json.dumps(model, indent=2)]),
        media_type="application/json",
        headers={"Content-Disposition": "attachment; filename=climbframe_model.json"}
    )


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
