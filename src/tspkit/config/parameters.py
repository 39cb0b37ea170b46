from dataclasses import dataclass, field
from pathlib import Path
from typing import List
import codecs
import yaml

from tspkit.utils.logging import setup_logging

_LOG_LEVELS = ('DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL')


@dataclass
class Parameters:
    """Configuration for reading TSPLIB files and archives"""
    encoding: str = 'utf-8'
    log_level: str = 'INFO'
    show_progress: bool = True
    instance_suffixes: List[str] = field(
        default_factory=lambda: ['.tsp', '.atsp', '.hcp', '.sop', '.vrp', '.tour']
    )

    @classmethod
    def from_yaml(cls, path: Path | str = None) -> 'Parameters':
        """Load parameters from YAML file"""
        if path is None:
            path = Path(__file__).parent / 'default_config.yaml'

        with open(path) as f:
            data = yaml.safe_load(f) or {}
            return cls(**data)

    def __post_init__(self):
        """Validate parameters after initialization"""
        try:
            codecs.lookup(self.encoding)
        except LookupError:
            raise ValueError(f"Unknown text encoding: {self.encoding}") from None

        self.log_level = str(self.log_level).upper()
        if self.log_level not in _LOG_LEVELS:
            raise ValueError(
                f"log_level must be one of {', '.join(_LOG_LEVELS)}. Got: {self.log_level}"
            )

        if not self.instance_suffixes:
            raise ValueError("instance_suffixes must not be empty")

        bad = [s for s in self.instance_suffixes if not str(s).startswith('.')]
        if bad:
            raise ValueError(f"instance_suffixes must start with '.'. Got: {bad}")
        self.instance_suffixes = [str(s).lower() for s in self.instance_suffixes]

    def configure_logging(self):
        """Install the console handler on the root logger at log_level"""
        setup_logging(self.log_level)
