"""Configuration for the test event listener."""

from pathlib import Path

from pydantic import Field

from nunit_event_listener.models.base import Model

DEFAULT_LOG_FILE = "TestEventListener.log"


class ListenerConfig(Model):
    """Configuration for the test event listener."""

    log_path: Path | None = Field(
        default=Path(DEFAULT_LOG_FILE),
        description="File receiving one line per test case (None disables it)",
    )
    test_id_property: str = Field(
        default="ZephyrTestId",
        description="Test case property holding the test management ID",
    )
    tracking_id_property: str = Field(
        default="TestRailId",
        description="Test case property holding the tracking ID",
    )
    completion_timeout: float = Field(
        default=0,
        ge=0,
        description="Seconds to wait for the run to finish after replay",
    )
