import pathlib
import yaml
import os
from typing import Dict, Any, Optional
from appdirs import user_config_dir

from .aggregator import SLOT_MINUTES, SCORE_THRESHOLD
from .exceptions import ConfigError
from .models import Mode
from .utils.clock import MINUTES_PER_DAY


class ConfigManager:
    """Manages configuration for the group scheduler."""
    
    CONFIG_PATH = pathlib.Path(user_config_dir("group-scheduler")) / "config.yml"
    
    def __init__(self, config_path: Optional[pathlib.Path] = None):
        self._data: Dict[str, Any] = {}
        self.config_path = pathlib.Path(config_path) if config_path else self.CONFIG_PATH
        self.load()
    
    def load(self) -> None:
        """Load configuration from file."""
        if self.config_path.exists():
            try:
                with open(self.config_path, 'r') as f:
                    self._data = yaml.safe_load(f) or {}
            except Exception as e:
                raise ConfigError(f"Failed to load config: {e}")
    
    def save(self) -> None:
        """Save configuration to file."""
        try:
            self.config_path.parent.mkdir(parents=True, exist_ok=True)
            with open(self.config_path, 'w') as f:
                yaml.safe_dump(self._data, f, default_flow_style=False)
            os.chmod(self.config_path, 0o600)
        except Exception as e:
            raise ConfigError(f"Failed to save config: {e}")
    
    def get_slot_minutes(self) -> int:
        """Get slot width in minutes."""
        return int(self._data.get('slot_minutes', SLOT_MINUTES))
    
    def set_slot_minutes(self, minutes: int) -> None:
        """Set slot width; it must evenly divide a day."""
        if minutes <= 0 or MINUTES_PER_DAY % minutes != 0:
            raise ConfigError(f"Slot minutes must evenly divide {MINUTES_PER_DAY}: {minutes}")
        self._data['slot_minutes'] = minutes
        self.save()
    
    def get_threshold(self) -> float:
        """Get minimum score for a slot to be listed."""
        return float(self._data.get('threshold', SCORE_THRESHOLD))
    
    def set_threshold(self, threshold: float) -> None:
        """Set minimum score (0-1)."""
        if not 0.0 <= threshold <= 1.0:
            raise ConfigError(f"Threshold must be between 0 and 1: {threshold}")
        self._data['threshold'] = threshold
        self.save()
    
    def get_default_mode(self) -> Mode:
        """Get mode used for new participants."""
        try:
            return Mode(self._data.get('default_mode', Mode.WHITELIST.value))
        except ValueError as e:
            raise ConfigError(f"Invalid default mode in config: {e}")
    
    def set_default_mode(self, mode: str) -> None:
        """Set mode used for new participants."""
        try:
            self._data['default_mode'] = Mode(mode).value
        except ValueError:
            raise ConfigError(f"Unknown mode: {mode}. Expected whitelist or blacklist")
        self.save()
    
    def is_configured(self) -> bool:
        """Check if the configuration file has been written."""
        return self.config_path.exists()
