"""
Playback snapshot - Pydantic model handed to the rendering layer
"""

from typing import Any, Dict, Optional, TYPE_CHECKING

from pydantic import BaseModel, Field

if TYPE_CHECKING:
    from keyframe_engine.engine.animation_state import AnimationState


class PlaybackSnapshot(BaseModel):
    """Point-in-time view of one AnimationState"""
    timeline_id: Optional[str] = Field(None, description="Timeline identifier, if any")
    status: str = Field(description="IDLE, PLAYING, PAUSED or COMPLETED")
    progress: float = Field(ge=0.0, le=1.0, description="Elapsed fraction of one cycle")
    elapsed_time: int = Field(ge=0, description="Loop-adjusted elapsed time units")
    current_loop: int = Field(ge=0, description="Completed loop iterations")
    direction: str = Field(description="FORWARD or BACKWARD")
    values: Dict[str, Any] = Field(default_factory=dict, description="Property name → current value")

    model_config = {
        "json_schema_extra": {
            "example": {
                "timeline_id": "fade_in",
                "status": "PLAYING",
                "progress": 0.5,
                "elapsed_time": 500,
                "current_loop": 0,
                "direction": "FORWARD",
                "values": {"opacity": 0.5, "position": [50.0, 0.0]},
            }
        }
    }

    @classmethod
    def from_state(cls, state: "AnimationState") -> "PlaybackSnapshot":
        return cls(
            timeline_id=state.timeline.id,
            status=state.status.name,
            progress=state.progress,
            elapsed_time=int(state.elapsed_time),
            current_loop=state.current_loop,
            direction=state.current_direction.name,
            values={
                key: list(value) if isinstance(value, tuple) else value
                for key, value in state.current_values.items()
            },
        )
