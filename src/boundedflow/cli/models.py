"""
Pydantic models for CLI argument validation.

Options are validated at the CLI boundary; pipeline parameters left as
None fall back to the loaded settings.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from boundedflow.shared.constants import CLIDefaults


class DemoOptions(BaseModel):
    """Options of the demo command."""

    model_config = ConfigDict(frozen=True)

    items: int = Field(default=CLIDefaults.DEMO_ITEMS, ge=0, description="Items per producer")
    producers: int = Field(default=CLIDefaults.DEMO_PRODUCERS, ge=1, description="Producer threads")
    # Checked by the pipeline itself so bad values surface as configuration errors
    capacity: Optional[int] = None
    consumers: Optional[int] = None
    latency: Optional[bool] = None
    config_path: Optional[Path] = None
