# app/config.py
"""
Application configuration and defaults.
"""

from dataclasses import dataclass
from typing import Dict, List
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from climbframe.generative import MAX_PIPE_COUNT


@dataclass
class AppConfig:
    """Global application configuration."""

    # App metadata
    app_name: str = "ClimbFrame"
    app_subtitle: str = "3D Pipe Climbing-Frame Builder"
    snapshot_title: str = "ClimbFrame 3D Builder"
    version: str = "0.1.0"

    # Generation inputs (pipe counts)
    max_pipe_count: int = MAX_PIPE_COUNT
    default_count_20cm: int = 24
    default_count_40cm: int = 12

    # Viewer
    figure_height: int = 600

    # Snapshot export
    snapshot_width_px: int = 1200
    snapshot_height_px: int = 800
    snapshot_dpi: int = 100

    # Logging
    log_level: str = "INFO"

    # Options
    length_options: List[int] = None
    key_labels: Dict[str, str] = None

    def __post_init__(self):
        if self.length_options is None:
            self.length_options = [2, 4]
        if self.key_labels is None:
            self.key_labels = {
                'cycle': 'R',
                'commit': 'Enter',
                'cancel': 'Esc',
                'delete': 'Del',
            }


# Global config instance
CONFIG = AppConfig()
